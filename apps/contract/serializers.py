import re

from rest_framework import serializers

from apps.contract.models import Transaction
from apps.jobs.models import Job

TX_HASH_RE = re.compile(r"^0x[0-9a-fA-F]{64}$")


def validate_tx_hash(value):
    if not TX_HASH_RE.match(value or ""):
        raise serializers.ValidationError("Enter a valid transaction hash.")
    return value.lower()


class TransactionSerializer(serializers.ModelSerializer):
    jobId = serializers.PrimaryKeyRelatedField(
        source="job", queryset=Job.objects.all(), required=False, allow_null=True
    )
    userId = serializers.IntegerField(source="user_id", read_only=True)
    txHash = serializers.CharField(source="tx_hash", validators=[validate_tx_hash])
    type = serializers.ChoiceField(source="tx_type", choices=Transaction.TYPE_CHOICES)
    amount = serializers.DecimalField(
        max_digits=36, decimal_places=18, required=False, allow_null=True, min_value=0
    )
    blockNumber = serializers.IntegerField(source="block_number", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = Transaction
        fields = [
            "id",
            "jobId",
            "userId",
            "txHash",
            "type",
            "status",
            "amount",
            "blockNumber",
            "createdAt",
        ]
        read_only_fields = ["id", "status"]

    def validate_txHash(self, value):
        return value.lower()


class EscrowStatusSerializer(serializers.Serializer):
    jobId = serializers.IntegerField()
    status = serializers.ChoiceField(choices=Job.ESCROW_STATUS)
