from rest_framework import serializers

from apps.messaging.models import Message
from apps.users.serializers import UserMiniSerializer


class MessageSerializer(serializers.ModelSerializer):
    jobId = serializers.IntegerField(source="job_id", read_only=True)
    sender = UserMiniSerializer(read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = Message
        fields = ["id", "jobId", "sender", "content", "createdAt"]
        read_only_fields = ["id", "jobId", "sender", "createdAt"]


class MessageCreateSerializer(serializers.Serializer):
    jobId = serializers.IntegerField()
    content = serializers.CharField()

    def validate_content(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Message cannot be empty.")
        return value
