from django.shortcuts import get_object_or_404
from rest_framework import generics, permissions, status
from rest_framework.exceptions import PermissionDenied
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.notifications.models import Notification
from apps.notifications.serializers import NotificationCreateSerializer, NotificationSerializer
from apps.notifications.services.create_notifications import notify_user


class NotificationListCreateView(generics.ListAPIView):
    serializer_class = NotificationSerializer
    permission_classes = [permissions.IsAuthenticated]

    def get_queryset(self):
        return Notification.objects.filter(recipient=self.request.user)

    def post(self, request):
        serializer = NotificationCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        notif = notify_user(
            recipient=data["userId"],
            notif_type=data["type"],
            title=data["title"],
            message=data["message"],
            data=data["data"],
        )
        return Response(NotificationSerializer(notif).data, status=status.HTTP_201_CREATED)


class MarkNotificationReadView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def patch(self, request, pk):
        notif = get_object_or_404(Notification, pk=pk)

        if notif.recipient_id != request.user.id:
            raise PermissionDenied("Not authorized")

        notif.is_read = True
        notif.save(update_fields=["is_read"])
        return Response(NotificationSerializer(notif).data)
