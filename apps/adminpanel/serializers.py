from django.contrib.auth import get_user_model
from rest_framework import serializers

from apps.jobs.models import Job
from apps.users.serializers import UserMiniSerializer
from .models import AbuseReport

User = get_user_model()


class AbuseReportSerializer(serializers.ModelSerializer):
    reporter = UserMiniSerializer(read_only=True)
    reportedUser = UserMiniSerializer(source="reported_user", read_only=True)
    jobId = serializers.IntegerField(source="job_id", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = AbuseReport
        fields = ["id", "reporter", "reportedUser", "jobId", "reason", "status", "createdAt"]


class FlagAbuseSerializer(serializers.Serializer):
    userId = serializers.PrimaryKeyRelatedField(
        source="reported_user", queryset=User.objects.all(), required=False, allow_null=True
    )
    jobId = serializers.PrimaryKeyRelatedField(
        source="job", queryset=Job.objects.all(), required=False, allow_null=True
    )
    reason = serializers.CharField(max_length=2000)

    def validate(self, attrs):
        if not attrs.get("reported_user") and not attrs.get("job"):
            raise serializers.ValidationError("userId or jobId is required")
        return attrs

    def create(self, validated_data):
        return AbuseReport.objects.create(
            reporter=self.context["request"].user,
            **validated_data,
        )


class ReportStatusSerializer(serializers.ModelSerializer):
    class Meta:
        model = AbuseReport
        fields = ["status"]
