from django.db import transaction
from rest_framework import serializers

from apps.jobs.models import Job, Milestone
from apps.users.serializers import UserMiniSerializer


class MilestoneSerializer(serializers.ModelSerializer):
    index = serializers.IntegerField(source="position", read_only=True)
    isCompleted = serializers.BooleanField(source="is_completed", read_only=True)
    isPaid = serializers.BooleanField(source="is_paid", read_only=True)
    amount = serializers.DecimalField(max_digits=36, decimal_places=18, min_value=0)

    class Meta:
        model = Milestone
        fields = ["id", "index", "title", "amount", "isCompleted", "isPaid", "submission"]
        read_only_fields = ["id", "submission"]


class JobSerializer(serializers.ModelSerializer):
    client = UserMiniSerializer(read_only=True)
    freelancer = UserMiniSerializer(read_only=True)
    milestones = MilestoneSerializer(many=True, required=False)
    budget = serializers.DecimalField(max_digits=36, decimal_places=18, min_value=0)
    escrowStatus = serializers.CharField(source="escrow_status", read_only=True)
    contractTxHash = serializers.CharField(
        source="contract_tx_hash", required=False, allow_blank=True, max_length=66
    )
    contractJobId = serializers.IntegerField(
        source="contract_job_id", required=False, allow_null=True, min_value=0
    )
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = Job
        fields = [
            "id",
            "client",
            "freelancer",
            "title",
            "description",
            "budget",
            "category",
            "deadline",
            "milestones",
            "status",
            "escrowStatus",
            "contractTxHash",
            "contractJobId",
            "createdAt",
            "updatedAt",
        ]
        read_only_fields = ["id", "status"]

    # ------------------- VALIDATIONS ------------------- #

    def validate_title(self, value):
        if not value.strip():
            raise serializers.ValidationError("Title is required.")
        return value.strip()

    def validate(self, attrs):
        milestones = attrs.get("milestones")
        budget = attrs.get("budget", getattr(self.instance, "budget", None))

        if milestones and budget is not None:
            if sum(m["amount"] for m in milestones) > budget:
                raise serializers.ValidationError({"milestones": "Milestone amounts exceed the job budget."})
        return attrs

    # ------------------- WRITES ------------------- #

    def _save_milestones(self, job, milestones):
        Milestone.objects.bulk_create([
            Milestone(job=job, position=index, **data)
            for index, data in enumerate(milestones)
        ])

    @transaction.atomic
    def create(self, validated_data):
        milestones = validated_data.pop("milestones", [])
        job = Job.objects.create(**validated_data)
        self._save_milestones(job, milestones)
        return job

    @transaction.atomic
    def update(self, instance, validated_data):
        milestones = validated_data.pop("milestones", None)

        for attr, value in validated_data.items():
            setattr(instance, attr, value)
        instance.save()

        # a new milestone list replaces the old one
        if milestones is not None:
            instance.milestones.all().delete()
            self._save_milestones(instance, milestones)

        return instance


class JobStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Job.STATUS)


class MilestoneCompleteSerializer(serializers.Serializer):
    jobId = serializers.IntegerField()
    milestoneIndex = serializers.IntegerField(min_value=0)
    submission = serializers.CharField(required=False, allow_blank=True, default="")


class MilestoneApproveSerializer(serializers.Serializer):
    jobId = serializers.IntegerField()
    milestoneIndex = serializers.IntegerField(min_value=0)
