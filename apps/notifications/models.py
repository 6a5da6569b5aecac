from django.db import models
from django.conf import settings


class Notification(models.Model):
    """
    Notification for any user role, pushed live over the notifications socket.
    """

    NOTIFICATION_TYPES = [
        ("APPLICATION_SUBMITTED", "Application Submitted"),
        ("APPLICATION_ACCEPTED", "Application Accepted"),
        ("APPLICATION_REJECTED", "Application Rejected"),
        ("WORK_SUBMITTED", "Work Submitted"),
        ("WORK_APPROVED", "Work Approved"),
        ("DISPUTE_RAISED", "Dispute Raised"),
        ("DISPUTE_RESOLVED", "Dispute Resolved"),
        ("NEW_MESSAGE", "New Message"),
        ("SYSTEM", "System Notification"),
    ]

    recipient = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="notifications"
    )

    notif_type = models.CharField(
        max_length=50,
        choices=NOTIFICATION_TYPES,
        default="SYSTEM"
    )

    title = models.CharField(max_length=255, blank=True, default="")

    message = models.TextField(blank=True)

    # Optional metadata (jobId, disputeId, ...)
    data = models.JSONField(default=dict, blank=True)

    is_read = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self):
        return f"Notification({self.recipient_id}, {self.notif_type})"
