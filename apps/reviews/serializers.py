from django.contrib.auth import get_user_model
from rest_framework import serializers

from apps.jobs.models import Job
from apps.reviews.models import Review
from apps.users.serializers import UserMiniSerializer

User = get_user_model()


class ReviewJobSerializer(serializers.ModelSerializer):
    class Meta:
        model = Job
        fields = ["id", "title"]


class ReviewSerializer(serializers.ModelSerializer):
    job = ReviewJobSerializer(read_only=True)
    reviewer = UserMiniSerializer(read_only=True)
    reviewee = UserMiniSerializer(read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = Review
        fields = ["id", "job", "reviewer", "reviewee", "rating", "comment", "createdAt"]
        read_only_fields = fields


class ReviewCreateSerializer(serializers.ModelSerializer):
    jobId = serializers.PrimaryKeyRelatedField(source="job", queryset=Job.objects.all())
    reviewee = serializers.PrimaryKeyRelatedField(queryset=User.objects.all())
    reviewer = serializers.HiddenField(default=serializers.CurrentUserDefault())
    rating = serializers.IntegerField(min_value=1, max_value=5)

    class Meta:
        model = Review
        fields = ["jobId", "reviewee", "reviewer", "rating", "comment"]
        # duplicates are reported by validate() with a readable message
        validators = []

    def validate(self, attrs):
        job = attrs["job"]
        reviewer = attrs["reviewer"]
        reviewee = attrs["reviewee"]

        parties = {job.client_id, job.freelancer_id}
        if reviewer.id not in parties or reviewee.id not in parties:
            raise serializers.ValidationError("Only the client and freelancer of a job can review each other.")

        if reviewer.id == reviewee.id:
            raise serializers.ValidationError("You cannot review yourself.")

        if Review.objects.filter(job=job, reviewer=reviewer, reviewee=reviewee).exists():
            raise serializers.ValidationError("Already reviewed")

        return attrs
