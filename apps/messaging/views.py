from django.shortcuts import get_object_or_404
from rest_framework import permissions, status
from rest_framework.exceptions import PermissionDenied
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.jobs.models import Job
from apps.messaging.models import Message
from apps.messaging.serializers import MessageCreateSerializer, MessageSerializer
from apps.messaging.services import is_conversation_member, post_message


def get_job_for_member(user, job_id):
    job = get_object_or_404(Job, id=job_id)

    if not is_conversation_member(job, user):
        raise PermissionDenied("Not allowed")

    return job


class SendMessageView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def post(self, request):
        serializer = MessageCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        job = get_job_for_member(request.user, serializer.validated_data["jobId"])
        message = post_message(job, request.user, serializer.validated_data["content"])

        return Response(MessageSerializer(message).data, status=status.HTTP_201_CREATED)


class JobMessagesView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request, job_id):
        job = get_job_for_member(request.user, job_id)

        messages = Message.objects.select_related("sender").filter(job=job)
        return Response(MessageSerializer(messages, many=True).data)
