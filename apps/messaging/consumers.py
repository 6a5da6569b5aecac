import json
import logging

from channels.db import database_sync_to_async
from channels.generic.websocket import AsyncWebsocketConsumer

logger = logging.getLogger(__name__)


class ChatConsumer(AsyncWebsocketConsumer):
    """Job chat room. Messages are persisted and relayed to every member."""

    async def connect(self):
        self.job_id = self.scope.get("url_route", {}).get("kwargs", {}).get("job_id")
        self.chat_group_name = f"job_chat_{self.job_id}"

        allowed = await self.is_participant()
        if not allowed:
            logger.info("Chat socket rejected for job %s", self.job_id)
            await self.close()
            return

        await self.channel_layer.group_add(
            self.chat_group_name,
            self.channel_name
        )
        await self.accept()

    async def disconnect(self, close_code):
        await self.channel_layer.group_discard(
            self.chat_group_name,
            self.channel_name
        )

    async def receive(self, text_data):
        try:
            data = json.loads(text_data)
        except json.JSONDecodeError:
            await self.send(text_data=json.dumps({"error": "Invalid JSON"}))
            return

        content = str(data.get("content", "")).strip()
        if not content:
            return

        serialized = await self.create_message(content)

        await self.channel_layer.group_send(
            self.chat_group_name,
            {
                "type": "chat_message",
                "message": serialized
            }
        )

    async def chat_message(self, event):
        await self.send(text_data=json.dumps(event["message"]))

    @database_sync_to_async
    def is_participant(self):
        from apps.jobs.models import Job
        from apps.messaging.services import is_conversation_member

        user = self.scope.get("user")
        if not user or not user.is_authenticated:
            return False

        job = Job.objects.filter(id=self.job_id).first()
        if job is None:
            return False

        return is_conversation_member(job, user)

    @database_sync_to_async
    def create_message(self, content):
        # Lazy imports (prevents AppRegistryNotReady)
        from apps.jobs.models import Job
        from apps.messaging.serializers import MessageSerializer
        from apps.messaging.services import post_message

        job = Job.objects.get(id=self.job_id)
        message = post_message(job, self.scope["user"], content)
        return MessageSerializer(message).data
