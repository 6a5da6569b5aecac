from django.db import models

from apps.files.services.ipfs import get_ipfs_url


class PinnedFile(models.Model):
    """Metadata of a file pinned to IPFS. The bytes live only on IPFS."""

    filename = models.CharField(max_length=255)
    ipfs_hash = models.CharField(max_length=100)
    file_size = models.PositiveBigIntegerField(null=True, blank=True)
    mime_type = models.CharField(max_length=100, blank=True, default="")
    uploaded_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        abstract = True
        ordering = ["uploaded_at", "id"]

    def __str__(self):
        return self.filename

    @property
    def url(self):
        return get_ipfs_url(self.ipfs_hash)
