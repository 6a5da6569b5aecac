from django.db import models
from django.conf import settings
from django.utils import timezone

User = settings.AUTH_USER_MODEL


class Transaction(models.Model):
    """
    Audit log of an on-chain action the frontend reports.
    The row starts pending and is confirmed or failed from the receipt.
    """

    TYPE_CHOICES = (
        ("fund", "Fund"),
        ("release", "Release"),
        ("dispute", "Dispute"),
        ("other", "Other"),
    )

    STATUS_CHOICES = (
        ("pending", "Pending"),
        ("confirmed", "Confirmed"),
        ("failed", "Failed"),
    )

    job = models.ForeignKey(
        "jobs.Job",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="transactions"
    )
    user = models.ForeignKey(
        User,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="transactions"
    )

    tx_hash = models.CharField(max_length=66, db_index=True)
    tx_type = models.CharField(max_length=20, choices=TYPE_CHOICES)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default="pending")

    # ETH value the frontend reported, used for revenue stats
    amount = models.DecimalField(max_digits=36, decimal_places=18, null=True, blank=True)
    block_number = models.PositiveBigIntegerField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    confirmed_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["tx_type", "status"], name="tx_type_status_idx"),
        ]

    def mark_confirmed(self, block_number=None):
        self.status = "confirmed"
        self.block_number = block_number
        self.confirmed_at = timezone.now()
        self.save(update_fields=["status", "block_number", "confirmed_at"])

    def mark_failed(self, block_number=None):
        self.status = "failed"
        self.block_number = block_number
        self.save(update_fields=["status", "block_number"])

    def apply_receipt(self, receipt_status):
        """Apply a get_transaction_status() result. Pending results are ignored."""
        if receipt_status["status"] == "confirmed":
            self.mark_confirmed(receipt_status["blockNumber"])
        elif receipt_status["status"] == "failed":
            self.mark_failed(receipt_status["blockNumber"])

    def __str__(self):
        return f"Transaction {self.tx_hash} ({self.tx_type}, {self.status})"
