import logging

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer

from apps.notifications.models import Notification

logger = logging.getLogger(__name__)


def user_group_name(user_id):
    return f"user_{user_id}"


def notify_user(recipient, notif_type, title, message="", data=None):

    if data is None:
        data = {}

    # Save in DB
    notif = Notification.objects.create(
        recipient=recipient,
        notif_type=notif_type,
        title=title,
        message=message,
        data=data
    )

    # Push instantly via WebSocket
    channel_layer = get_channel_layer()
    if channel_layer is None:
        return notif

    async_to_sync(channel_layer.group_send)(
        user_group_name(recipient.id),
        {
            "type": "send_notification",
            "id": notif.id,
            "title": title,
            "message": message,
            "notif_type": notif_type,
            "data": data,
            "created_at": notif.created_at.isoformat(),
            "is_read": False,
        }
    )

    logger.debug("Notification %s pushed to user %s", notif.id, recipient.id)
    return notif
