from django.db import models
from django.conf import settings

from apps.files.models import PinnedFile
from apps.jobs.models import Job
from apps.submissions.models import ProjectSubmission

User = settings.AUTH_USER_MODEL


class Dispute(models.Model):
    DISPUTE_TYPES = [
        ("quality_issue", "Quality Issue"),
        ("deadline_missed", "Deadline Missed"),
        ("scope_change", "Scope Change"),
        ("payment_issue", "Payment Issue"),
        ("communication_issue", "Communication Issue"),
        ("other", "Other"),
    ]

    STATUS_CHOICES = [
        ("open", "Open"),
        ("under_review", "Under Review"),
        ("resolved_client", "Resolved In Client Favor"),
        ("resolved_freelancer", "Resolved In Freelancer Favor"),
        ("resolved_admin", "Resolved By Admin"),
        ("closed", "Closed"),
    ]

    PRIORITY_CHOICES = [
        ("low", "Low"),
        ("medium", "Medium"),
        ("high", "High"),
        ("urgent", "Urgent"),
    ]

    RESOLUTION_TYPES = [
        ("client_favor", "Client Favor"),
        ("freelancer_favor", "Freelancer Favor"),
        ("partial_refund", "Partial Refund"),
        ("mediation", "Mediation"),
        ("cancelled", "Cancelled"),
    ]

    FINAL_STATUSES = ("resolved_client", "resolved_freelancer", "resolved_admin", "closed")

    job = models.ForeignKey(Job, on_delete=models.CASCADE, related_name="disputes")
    client = models.ForeignKey(User, on_delete=models.CASCADE, related_name="client_disputes")
    freelancer = models.ForeignKey(
        User, on_delete=models.CASCADE, null=True, blank=True, related_name="freelancer_disputes"
    )
    project_submission = models.ForeignKey(
        ProjectSubmission,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="disputes"
    )

    title = models.CharField(max_length=255)
    description = models.TextField()
    dispute_type = models.CharField(max_length=30, choices=DISPUTE_TYPES)

    status = models.CharField(max_length=30, choices=STATUS_CHOICES, default="open")
    priority = models.CharField(max_length=10, choices=PRIORITY_CHOICES, default="medium")

    # resolution
    resolution_type = models.CharField(max_length=30, choices=RESOLUTION_TYPES, blank=True, default="")
    resolution_description = models.TextField(blank=True, default="")
    refund_amount = models.DecimalField(max_digits=36, decimal_places=18, default=0)
    resolved_by = models.ForeignKey(
        User, on_delete=models.SET_NULL, null=True, blank=True, related_name="resolved_disputes"
    )
    resolved_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["status", "priority"], name="disputes_status_priority_idx"),
        ]

    def __str__(self):
        return f"Dispute({self.job_id}, {self.status})"

    @property
    def is_final(self):
        return self.status in self.FINAL_STATUSES

    def is_party(self, user):
        return user.is_authenticated and user.id in (self.client_id, self.freelancer_id)


class DisputeEvidence(PinnedFile):
    dispute = models.ForeignKey(Dispute, on_delete=models.CASCADE, related_name="evidence")
    uploaded_by = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, related_name="+")

    class Meta(PinnedFile.Meta):
        pass


class DisputeMessage(models.Model):
    dispute = models.ForeignKey(Dispute, on_delete=models.CASCADE, related_name="messages")
    sender = models.ForeignKey(User, on_delete=models.CASCADE, related_name="+")
    message = models.TextField()
    sent_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["sent_at"]
