# apps/messaging/routing.py
from django.urls import re_path, path
from apps.messaging.consumers import ChatConsumer
from apps.notifications.consumers import NotificationConsumer

websocket_urlpatterns = [
    # Job chat
    re_path(r"ws/jobs/(?P<job_id>\d+)/chat/$", ChatConsumer.as_asgi()),

    # Notifications
    path("ws/notifications/", NotificationConsumer.as_asgi()),
]
