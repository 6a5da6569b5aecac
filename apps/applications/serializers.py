from rest_framework import serializers

from apps.applications.models import Application
from apps.jobs.models import Job
from apps.users.serializers import UserMiniSerializer


class ApplicationJobSerializer(serializers.ModelSerializer):
    contractJobId = serializers.IntegerField(source="contract_job_id", read_only=True)

    class Meta:
        model = Job
        fields = ["id", "title", "budget", "status", "contractJobId"]


class ApplicationSerializer(serializers.ModelSerializer):
    job = ApplicationJobSerializer(read_only=True)
    freelancer = UserMiniSerializer(read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = Application
        fields = [
            "id",
            "job",
            "freelancer",
            "proposal",
            "duration",
            "fee",
            "status",
            "createdAt",
            "updatedAt",
        ]
        read_only_fields = fields


class ApplicationCreateSerializer(serializers.ModelSerializer):
    jobId = serializers.PrimaryKeyRelatedField(source="job", queryset=Job.objects.all())
    freelancer = serializers.HiddenField(
        default=serializers.CurrentUserDefault()
    )
    fee = serializers.DecimalField(
        max_digits=36, decimal_places=18, required=False, allow_null=True, min_value=0
    )

    class Meta:
        model = Application
        fields = [
            'jobId',
            'freelancer',
            'proposal',
            'duration',
            'fee',
        ]
        # duplicates are reported by validate() with a readable message
        validators = []

    def validate_proposal(self, value):
        if not value.strip():
            raise serializers.ValidationError("Proposal cannot be empty.")
        return value

    def validate(self, attrs):
        user = self.context['request'].user
        job = attrs['job']

        # Prevent duplicate application
        if Application.objects.filter(job=job, freelancer=user).exists():
            raise serializers.ValidationError("Already applied")

        # Prevent applying to own job
        if job.client_id == user.id:
            raise serializers.ValidationError("You cannot apply to your own job.")

        # Job must be open
        if job.status != 'open':
            raise serializers.ValidationError("This job is not open for applications.")

        # The client has not created the job on-chain yet
        if job.contract_job_id is None:
            raise serializers.ValidationError("This job is not yet registered on the blockchain.")

        return attrs


class ApplicationStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(
        choices=["accepted", "rejected"],
        error_messages={"invalid_choice": "Invalid status"},
    )
