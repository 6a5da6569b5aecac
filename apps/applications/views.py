from django.db import transaction
from django.shortcuts import get_object_or_404
from rest_framework import generics, permissions, status
from rest_framework.exceptions import PermissionDenied, ValidationError
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.applications.models import Application
from apps.applications.serializers import (
    ApplicationCreateSerializer,
    ApplicationSerializer,
    ApplicationStatusSerializer,
)
from apps.notifications.services.create_notifications import notify_user


class ApplyToJobView(generics.CreateAPIView):
    '''
    Allow a freelancer to apply to an open job with a proposal and fee
    '''

    serializer_class = ApplicationCreateSerializer
    permission_classes = [permissions.IsAuthenticated]

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        application = serializer.save()

        job = application.job
        notify_user(
            recipient=job.client,
            notif_type="APPLICATION_SUBMITTED",
            title="New application",
            message=f"A freelancer applied to '{job.title}'.",
            data={"jobId": job.id, "applicationId": application.id},
        )

        return Response(
            ApplicationSerializer(application).data,
            status=status.HTTP_201_CREATED
        )


class JobApplicationsView(generics.ListAPIView):
    serializer_class = ApplicationSerializer
    permission_classes = [permissions.AllowAny]

    def get_queryset(self):
        return (
            Application.objects
            .select_related('job', 'freelancer')
            .filter(job_id=self.kwargs['job_id'])
        )


class MyApplicationsView(generics.ListAPIView):
    serializer_class = ApplicationSerializer
    permission_classes = [permissions.IsAuthenticated]

    def get_queryset(self):
        return (
            Application.objects
            .select_related('job', 'freelancer')
            .filter(freelancer=self.request.user)
            .order_by('-created_at')
        )


class ApplicationStatusView(APIView):
    """
    Client accepts or rejects an application.
    Accepting assigns the freelancer to an open job; rejecting the
    accepted application reopens a job that is only assigned.
    """
    permission_classes = [permissions.IsAuthenticated]

    def patch(self, request, pk):
        application = get_object_or_404(
            Application.objects.select_related('job', 'freelancer'), pk=pk
        )
        job = application.job

        if not job.is_client(request.user):
            raise PermissionDenied("Not authorized")

        serializer = ApplicationStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        new_status = serializer.validated_data['status']

        if application.status == 'withdrawn':
            raise ValidationError("This application was withdrawn.")

        with transaction.atomic():
            if new_status == 'accepted':
                if job.freelancer_id and job.freelancer_id != application.freelancer_id:
                    raise ValidationError("This job already has a freelancer.")
                if job.status != 'open':
                    raise ValidationError("This job is no longer open.")
                job.freelancer = application.freelancer
                job.status = 'assigned'
                job.save(update_fields=['freelancer', 'status', 'updated_at'])

            elif application.status == 'accepted' and job.freelancer_id == application.freelancer_id:
                # Rejecting the hired freelancer reopens the job, until work starts
                if job.status != 'assigned':
                    raise ValidationError("Work on this job has already started.")
                job.freelancer = None
                job.status = 'open'
                job.save(update_fields=['freelancer', 'status', 'updated_at'])

            application.status = new_status
            application.save(update_fields=['status', 'updated_at'])

        notify_user(
            recipient=application.freelancer,
            notif_type=f"APPLICATION_{new_status.upper()}",
            title=f"Application {new_status}",
            message=f"Your application for '{job.title}' was {new_status}.",
            data={"jobId": job.id, "applicationId": application.id},
        )

        return Response(ApplicationSerializer(application).data)


class WithdrawApplicationView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def patch(self, request, pk):
        application = get_object_or_404(Application, pk=pk)

        if application.freelancer_id != request.user.id:
            raise PermissionDenied("Not authorized")

        application.status = 'withdrawn'
        application.save(update_fields=['status', 'updated_at'])
        return Response(ApplicationSerializer(application).data)
