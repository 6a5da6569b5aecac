from django.db import models
from django.conf import settings
from django.core.validators import MinValueValidator
from django.utils import timezone

User = settings.AUTH_USER_MODEL


class Job(models.Model):
    STATUS = [
        ('open', 'Open'),
        ('assigned', 'Assigned'),
        ('in_progress', 'In Progress'),
        ('submitted', 'Submitted'),
        ('completed', 'Completed'),
        ('disputed', 'Disputed'),
        ('cancelled', 'Cancelled'),
    ]

    ESCROW_STATUS = [
        ('unfunded', 'Unfunded'),
        ('funded', 'Funded'),
        ('released', 'Released'),
    ]

    client = models.ForeignKey(User, on_delete=models.CASCADE, related_name="jobs_posted")
    freelancer = models.ForeignKey(
        User,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="jobs_assigned"
    )

    title = models.CharField(max_length=255)
    description = models.TextField(blank=True, default="")
    budget = models.DecimalField(
        max_digits=36, decimal_places=18, validators=[MinValueValidator(0)]
    )
    category = models.CharField(max_length=100, blank=True, default="", db_index=True)
    deadline = models.DateTimeField(null=True, blank=True)

    status = models.CharField(max_length=20, choices=STATUS, default='open')
    escrow_status = models.CharField(max_length=20, choices=ESCROW_STATUS, default='unfunded')

    # mirror of the escrow contract
    contract_tx_hash = models.CharField(max_length=66, blank=True, default="")
    contract_job_id = models.PositiveBigIntegerField(null=True, blank=True, db_index=True)

    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["status", "category"], name="jobs_status_category_idx"),
        ]

    def __str__(self):
        return self.title

    def is_client(self, user):
        return user.is_authenticated and self.client_id == user.id

    def is_freelancer(self, user):
        return user.is_authenticated and self.freelancer_id is not None and self.freelancer_id == user.id

    def is_party(self, user):
        return self.is_client(user) or self.is_freelancer(user)

    def get_milestone(self, index):
        """Milestone at a 0-based position, or None when out of range."""
        return self.milestones.filter(position=index).first()


class Milestone(models.Model):
    job = models.ForeignKey(Job, on_delete=models.CASCADE, related_name="milestones")
    position = models.PositiveIntegerField()

    title = models.CharField(max_length=255)
    amount = models.DecimalField(
        max_digits=36, decimal_places=18, validators=[MinValueValidator(0)]
    )
    is_completed = models.BooleanField(default=False)
    is_paid = models.BooleanField(default=False)

    # deliverable URL or a short description
    submission = models.TextField(blank=True, default="")

    completed_at = models.DateTimeField(null=True, blank=True)
    paid_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ["position"]
        constraints = [
            models.UniqueConstraint(fields=["job", "position"], name="unique_milestone_position"),
        ]

    def __str__(self):
        return f"{self.job_id}#{self.position} {self.title}"

    def mark_completed(self, submission=""):
        self.is_completed = True
        self.submission = submission or ""
        self.completed_at = timezone.now()
        self.save(update_fields=["is_completed", "submission", "completed_at"])

    def mark_paid(self):
        self.is_paid = True
        self.paid_at = timezone.now()
        self.save(update_fields=["is_paid", "paid_at"])
