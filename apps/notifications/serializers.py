from django.contrib.auth import get_user_model
from rest_framework import serializers

from apps.notifications.models import Notification

User = get_user_model()


class NotificationSerializer(serializers.ModelSerializer):
    userId = serializers.IntegerField(source="recipient_id", read_only=True)
    type = serializers.CharField(source="notif_type", read_only=True)
    read = serializers.BooleanField(source="is_read", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = Notification
        fields = ["id", "userId", "type", "title", "message", "data", "read", "createdAt"]
        read_only_fields = fields


class NotificationCreateSerializer(serializers.Serializer):
    userId = serializers.PrimaryKeyRelatedField(queryset=User.objects.all())
    type = serializers.ChoiceField(choices=Notification.NOTIFICATION_TYPES, default="SYSTEM")
    title = serializers.CharField(required=False, allow_blank=True, default="")
    message = serializers.CharField()
    data = serializers.JSONField(required=False, default=dict)
