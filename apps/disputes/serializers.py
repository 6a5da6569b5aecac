from rest_framework import serializers

from apps.contract.serializers import validate_tx_hash
from apps.disputes.models import Dispute, DisputeEvidence, DisputeMessage
from apps.disputes.services import RESOLUTION_OUTCOMES
from apps.files.serializers import PinnedFileSerializer
from apps.jobs.models import Job
from apps.users.serializers import UserMiniSerializer


class DisputeEvidenceSerializer(PinnedFileSerializer):
    uploadedBy = serializers.IntegerField(source="uploaded_by_id", read_only=True)

    class Meta(PinnedFileSerializer.Meta):
        model = DisputeEvidence
        fields = PinnedFileSerializer.Meta.fields + ["uploadedBy"]
        read_only_fields = fields


class DisputeMessageSerializer(serializers.ModelSerializer):
    sender = UserMiniSerializer(read_only=True)
    sentAt = serializers.DateTimeField(source="sent_at", read_only=True)

    class Meta:
        model = DisputeMessage
        fields = ["id", "sender", "message", "sentAt"]
        read_only_fields = ["id", "sender", "sentAt"]

    def validate_message(self, value):
        if not value.strip():
            raise serializers.ValidationError("Message cannot be empty.")
        return value


class DisputeJobSerializer(serializers.ModelSerializer):
    contractJobId = serializers.IntegerField(source="contract_job_id", read_only=True)

    class Meta:
        model = Job
        fields = ["id", "title", "status", "budget", "contractJobId"]


class ResolutionSerializer(serializers.ModelSerializer):
    type = serializers.CharField(source="resolution_type", read_only=True)
    description = serializers.CharField(source="resolution_description", read_only=True)
    refundAmount = serializers.DecimalField(
        source="refund_amount", max_digits=36, decimal_places=18, read_only=True
    )
    resolvedBy = UserMiniSerializer(source="resolved_by", read_only=True)
    resolvedAt = serializers.DateTimeField(source="resolved_at", read_only=True)

    class Meta:
        model = Dispute
        fields = ["type", "description", "refundAmount", "resolvedBy", "resolvedAt"]


class DisputeSerializer(serializers.ModelSerializer):
    job = DisputeJobSerializer(read_only=True)
    client = UserMiniSerializer(read_only=True)
    freelancer = UserMiniSerializer(read_only=True)
    projectSubmission = serializers.IntegerField(source="project_submission_id", read_only=True)
    disputeType = serializers.CharField(source="dispute_type", read_only=True)
    evidence = DisputeEvidenceSerializer(many=True, read_only=True)
    resolution = ResolutionSerializer(source="*", read_only=True)
    messages = DisputeMessageSerializer(many=True, read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = Dispute
        fields = [
            "id",
            "job",
            "client",
            "freelancer",
            "projectSubmission",
            "title",
            "description",
            "disputeType",
            "status",
            "priority",
            "evidence",
            "resolution",
            "messages",
            "createdAt",
            "updatedAt",
        ]
        read_only_fields = fields


class DisputeCreateSerializer(serializers.Serializer):
    jobId = serializers.IntegerField()
    title = serializers.CharField(max_length=255)
    description = serializers.CharField()
    disputeType = serializers.ChoiceField(choices=Dispute.DISPUTE_TYPES)
    priority = serializers.ChoiceField(choices=Dispute.PRIORITY_CHOICES, required=False, default="medium")


class ResolveDisputeSerializer(serializers.Serializer):
    resolutionType = serializers.ChoiceField(choices=sorted(RESOLUTION_OUTCOMES))
    description = serializers.CharField(required=False, allow_blank=True, default="")
    refundAmount = serializers.DecimalField(
        max_digits=36, decimal_places=18, required=False, min_value=0, default=0
    )
    txHash = serializers.CharField(required=False, allow_blank=True, default="")

    def validate_txHash(self, value):
        return validate_tx_hash(value) if value else ""


class CancelDisputeSerializer(serializers.Serializer):
    description = serializers.CharField(required=False, allow_blank=True, default="")
    txHash = serializers.CharField(required=False, allow_blank=True, default="")

    def validate_txHash(self, value):
        return validate_tx_hash(value) if value else ""
