from rest_framework import serializers

from apps.files.serializers import PinnedFileSerializer
from apps.submissions.models import ProjectSubmission, SubmissionFile
from apps.users.serializers import UserMiniSerializer


class SubmissionFileSerializer(PinnedFileSerializer):
    class Meta(PinnedFileSerializer.Meta):
        model = SubmissionFile


class ClientApprovalSerializer(serializers.ModelSerializer):
    status = serializers.CharField(source="approval_status", read_only=True)
    approvedAt = serializers.DateTimeField(source="approved_at", read_only=True)

    class Meta:
        model = ProjectSubmission
        fields = ["status", "approvedAt", "feedback"]
        read_only_fields = fields


class ProjectSubmissionSerializer(serializers.ModelSerializer):
    jobId = serializers.IntegerField(source="job_id", read_only=True)
    jobTitle = serializers.CharField(source="job.title", read_only=True)
    freelancer = UserMiniSerializer(read_only=True)
    files = SubmissionFileSerializer(many=True, read_only=True)
    isMarkedComplete = serializers.BooleanField(source="is_marked_complete", read_only=True)
    markedCompleteAt = serializers.DateTimeField(source="marked_complete_at", read_only=True)
    clientApproval = ClientApprovalSerializer(source="*", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = ProjectSubmission
        fields = [
            "id",
            "jobId",
            "jobTitle",
            "freelancer",
            "description",
            "files",
            "isMarkedComplete",
            "markedCompleteAt",
            "clientApproval",
            "createdAt",
            "updatedAt",
        ]
        read_only_fields = fields


class ApproveSubmissionSerializer(serializers.Serializer):
    feedback = serializers.CharField(required=False, allow_blank=True, default="")
