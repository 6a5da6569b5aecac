from django.db import models
from django.conf import settings
from django.utils import timezone

from apps.files.models import PinnedFile
from apps.jobs.models import Job

User = settings.AUTH_USER_MODEL


class ProjectSubmission(models.Model):
    APPROVAL_STATUS = [
        ("pending", "Pending"),
        ("approved", "Approved"),
        ("disputed", "Disputed"),
    ]

    job = models.ForeignKey(Job, on_delete=models.CASCADE, related_name="submissions")
    freelancer = models.ForeignKey(User, on_delete=models.CASCADE, related_name="submissions")

    description = models.TextField(blank=True, default="")

    is_marked_complete = models.BooleanField(default=False)
    marked_complete_at = models.DateTimeField(null=True, blank=True)

    # client approval
    approval_status = models.CharField(max_length=20, choices=APPROVAL_STATUS, default="pending")
    approved_at = models.DateTimeField(null=True, blank=True)
    feedback = models.TextField(blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        unique_together = ("job", "freelancer")
        ordering = ["-created_at"]

    def __str__(self):
        return f"Submission for job {self.job_id}"

    def mark_complete(self):
        self.is_marked_complete = True
        self.marked_complete_at = timezone.now()
        self.save(update_fields=["is_marked_complete", "marked_complete_at", "updated_at"])

    def approve(self, feedback=""):
        self.approval_status = "approved"
        self.approved_at = timezone.now()
        self.feedback = feedback or ""
        self.save(update_fields=["approval_status", "approved_at", "feedback", "updated_at"])


class SubmissionFile(PinnedFile):
    submission = models.ForeignKey(
        ProjectSubmission,
        on_delete=models.CASCADE,
        related_name="files"
    )

    class Meta(PinnedFile.Meta):
        pass
