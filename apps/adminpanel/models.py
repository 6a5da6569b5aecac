from django.db import models
from django.conf import settings

from apps.jobs.models import Job

User = settings.AUTH_USER_MODEL


class AbuseReport(models.Model):
    STATUS_CHOICES = (
        ("open", "Open"),
        ("reviewed", "Reviewed"),
        ("dismissed", "Dismissed"),
    )

    reporter = models.ForeignKey(User, on_delete=models.CASCADE, related_name="abuse_reports_filed")
    reported_user = models.ForeignKey(
        User, on_delete=models.SET_NULL, null=True, blank=True, related_name="abuse_reports_received"
    )
    job = models.ForeignKey(
        Job, on_delete=models.SET_NULL, null=True, blank=True, related_name="abuse_reports"
    )
    reason = models.TextField()
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default="open")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self):
        return f"AbuseReport #{self.pk} ({self.status})"
