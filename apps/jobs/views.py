from django.db.models import Prefetch
from django.shortcuts import get_object_or_404
from rest_framework import permissions, status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import PermissionDenied, ValidationError
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.contract.chain import ChainError
from apps.cores.exceptions import ChainUnavailable
from apps.jobs.filters import JobFilter
from apps.jobs.models import Job, Milestone
from apps.jobs.permissions import IsJobOwnerOrReadOnly, IsJobParty
from apps.jobs.serializers import (
    JobSerializer,
    JobStatusSerializer,
    MilestoneApproveSerializer,
    MilestoneCompleteSerializer,
)
from apps.jobs.services import sync_job_with_chain


class JobViewSet(viewsets.ModelViewSet):
    serializer_class = JobSerializer
    filterset_class = JobFilter
    http_method_names = ["get", "post", "put", "patch", "delete", "head", "options"]

    def get_queryset(self):
        return (
            Job.objects
            .select_related("client", "freelancer")
            .prefetch_related(Prefetch("milestones", queryset=Milestone.objects.order_by("position")))
        )

    def get_permissions(self):
        if self.action in ("list", "retrieve"):
            return [permissions.AllowAny()]
        if self.action in ("update_status", "sync"):
            return [permissions.IsAuthenticated(), IsJobParty()]
        return [permissions.IsAuthenticated(), IsJobOwnerOrReadOnly()]

    def perform_create(self, serializer):
        serializer.save(client=self.request.user)

    def update(self, request, *args, **kwargs):
        # PUT behaves like PATCH: only the fields sent are changed
        kwargs["partial"] = True
        return super().update(request, *args, **kwargs)

    def destroy(self, request, *args, **kwargs):
        job = self.get_object()
        job.delete()
        return Response({"message": "Job deleted"}, status=status.HTTP_200_OK)

    @action(detail=True, methods=["patch"], url_path="status")
    def update_status(self, request, pk=None):
        job = self.get_object()

        serializer = JobStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        job.status = serializer.validated_data["status"]
        job.save(update_fields=["status", "updated_at"])
        return Response(self.get_serializer(job).data)

    @action(detail=True, methods=["post"])
    def sync(self, request, pk=None):
        job = self.get_object()

        if job.contract_job_id is None:
            raise ValidationError({"contractJobId": "Job has no contract job id"})

        try:
            chain_job, changed = sync_job_with_chain(job)
        except ChainError as exc:
            raise ChainUnavailable(str(exc))

        return Response({
            "job": self.get_serializer(job).data,
            "chainJob": chain_job,
            "updated": changed,
        })


# -------- Milestones --------
class MilestoneCompleteView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def post(self, request):
        serializer = MilestoneCompleteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        job = get_object_or_404(Job, id=data["jobId"])
        if not job.is_freelancer(request.user):
            raise PermissionDenied("Not authorized")

        milestone = job.get_milestone(data["milestoneIndex"])
        if milestone is None:
            raise ValidationError({"milestoneIndex": "Invalid milestone index"})

        milestone.mark_completed(data["submission"])
        return Response(JobSerializer(job).data)


class MilestoneApproveView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def post(self, request):
        serializer = MilestoneApproveSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        job = get_object_or_404(Job, id=data["jobId"])
        if not job.is_client(request.user):
            raise PermissionDenied("Not authorized")

        milestone = job.get_milestone(data["milestoneIndex"])
        if milestone is None:
            raise ValidationError({"milestoneIndex": "Invalid milestone index"})
        if not milestone.is_completed:
            raise ValidationError({"milestoneIndex": "Milestone has not been completed yet"})

        milestone.mark_paid()
        return Response(JobSerializer(job).data)
