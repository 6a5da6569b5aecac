from rest_framework import serializers


class PinnedFileSerializer(serializers.ModelSerializer):
    """Base for serializers of PinnedFile subclasses; set Meta.model there."""

    ipfsHash = serializers.CharField(source="ipfs_hash", read_only=True)
    fileSize = serializers.IntegerField(source="file_size", read_only=True)
    mimeType = serializers.CharField(source="mime_type", read_only=True)
    uploadedAt = serializers.DateTimeField(source="uploaded_at", read_only=True)
    url = serializers.CharField(read_only=True)

    class Meta:
        fields = ["id", "filename", "ipfsHash", "fileSize", "mimeType", "uploadedAt", "url"]
        read_only_fields = fields
