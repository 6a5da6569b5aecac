import logging

from django.db.models import Q
from django.shortcuts import get_object_or_404
from rest_framework import generics, permissions, status
from rest_framework.exceptions import PermissionDenied, ValidationError
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.cores.exceptions import IPFSUploadFailed
from apps.disputes.models import Dispute, DisputeEvidence, DisputeMessage
from apps.disputes.permissions import IsDisputePartyOrResolver, IsDisputeResolver, check_resolver
from apps.disputes.serializers import (
    CancelDisputeSerializer,
    DisputeCreateSerializer,
    DisputeEvidenceSerializer,
    DisputeMessageSerializer,
    DisputeSerializer,
    ResolveDisputeSerializer,
)
from apps.disputes.services import cancel_dispute, open_dispute, resolve_dispute
from apps.files.constants import MAX_EVIDENCE_FILES
from apps.files.services.ipfs import IPFSUploadError, pin_uploaded_file
from apps.files.validation import validate_evidence_uploads
from apps.jobs.models import Job
from apps.submissions.models import ProjectSubmission

logger = logging.getLogger(__name__)


def dispute_queryset():
    return (
        Dispute.objects
        .select_related("job", "client", "freelancer", "resolved_by")
        .prefetch_related("evidence", "messages__sender")
    )


class DisputeObjectMixin:
    """Loads the dispute from the URL and runs object permissions on it."""

    def get_dispute(self):
        dispute = get_object_or_404(dispute_queryset(), pk=self.kwargs["pk"])
        self.check_object_permissions(self.request, dispute)
        return dispute


class CreateDisputeView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def post(self, request):
        serializer = DisputeCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        job = get_object_or_404(Job.objects.select_related("client", "freelancer"), id=data["jobId"])

        if not job.is_party(request.user):
            raise PermissionDenied("Only clients or freelancers can raise a dispute")

        submission = ProjectSubmission.objects.filter(job=job).first()
        if submission is None:
            raise ValidationError("No submission found for dispute")

        dispute = open_dispute(
            job=job,
            submission=submission,
            raised_by=request.user,
            title=data["title"],
            description=data["description"],
            dispute_type=data["disputeType"],
            priority=data["priority"],
        )

        return Response(
            {
                "message": "Dispute created successfully",
                "dispute": DisputeSerializer(dispute_queryset().get(pk=dispute.pk)).data,
            },
            status=status.HTTP_201_CREATED,
        )


class UploadEvidenceView(APIView):
    permission_classes = [permissions.IsAuthenticated]
    parser_classes = [MultiPartParser, FormParser]

    def post(self, request, pk):
        files = request.FILES.getlist("files")
        if not files:
            raise ValidationError("No files uploaded")

        dispute = get_object_or_404(Dispute, pk=pk)
        if not dispute.is_party(request.user):
            raise PermissionDenied("Unauthorized")

        validate_evidence_uploads(files, MAX_EVIDENCE_FILES)

        try:
            pinned = [pin_uploaded_file(f) for f in files]
        except IPFSUploadError as exc:
            logger.error("Evidence upload for dispute %s failed: %s", dispute.id, exc)
            raise IPFSUploadFailed("Failed to upload file to IPFS")

        DisputeEvidence.objects.bulk_create([
            DisputeEvidence(dispute=dispute, uploaded_by=request.user, **meta)
            for meta in pinned
        ])

        return Response({
            "message": "Evidence uploaded successfully",
            "evidence": DisputeEvidenceSerializer(dispute.evidence.all(), many=True).data,
        })


class DisputeDetailView(DisputeObjectMixin, APIView):
    permission_classes = [permissions.IsAuthenticated, IsDisputePartyOrResolver]

    def get(self, request, pk):
        return Response({"dispute": DisputeSerializer(self.get_dispute()).data})


class UserDisputesView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        disputes = dispute_queryset().filter(
            Q(client=request.user) | Q(freelancer=request.user)
        ).order_by("-created_at")
        return Response({"disputes": DisputeSerializer(disputes, many=True).data})


class JobDisputesView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request, job_id):
        job = get_object_or_404(Job, id=job_id)

        if not job.is_party(request.user) and not check_resolver(request.user):
            raise PermissionDenied("Unauthorized")

        disputes = dispute_queryset().filter(job=job).order_by("-created_at")
        return Response({"disputes": DisputeSerializer(disputes, many=True).data})


class ResolverCheckView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        return Response({
            "isDisputeResolver": check_resolver(request.user),
            "wallet": request.user.wallet_address,
        })


class AllDisputesView(APIView):
    permission_classes = [permissions.IsAuthenticated, IsDisputeResolver]

    def get(self, request):
        disputes = dispute_queryset().order_by("-created_at")

        status_filter = request.query_params.get("status")
        if status_filter:
            if status_filter not in dict(Dispute.STATUS_CHOICES):
                raise ValidationError({"status": "Invalid status"})
            disputes = disputes.filter(status=status_filter)

        return Response({"disputes": DisputeSerializer(disputes, many=True).data})


class ResolveDisputeView(DisputeObjectMixin, APIView):
    permission_classes = [permissions.IsAuthenticated, IsDisputeResolver]

    def post(self, request, pk):
        dispute = self.get_dispute()
        if dispute.is_final:
            raise ValidationError("Dispute is already resolved")

        serializer = ResolveDisputeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        dispute, tx = resolve_dispute(
            dispute,
            resolver=request.user,
            resolution_type=data["resolutionType"],
            description=data["description"],
            refund_amount=data["refundAmount"],
            tx_hash=data["txHash"] or None,
        )

        return Response({
            "message": "Dispute resolved successfully",
            "dispute": DisputeSerializer(dispute_queryset().get(pk=dispute.pk)).data,
            "transactionId": tx.id if tx else None,
        })


class CancelDisputeView(DisputeObjectMixin, APIView):
    permission_classes = [permissions.IsAuthenticated, IsDisputeResolver]

    def post(self, request, pk):
        dispute = self.get_dispute()
        if dispute.is_final:
            raise ValidationError("Dispute is already resolved")

        serializer = CancelDisputeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        dispute, tx = cancel_dispute(
            dispute,
            resolver=request.user,
            description=serializer.validated_data["description"],
            tx_hash=serializer.validated_data["txHash"] or None,
        )

        return Response({
            "message": "Project cancelled successfully",
            "dispute": DisputeSerializer(dispute_queryset().get(pk=dispute.pk)).data,
            "transactionId": tx.id if tx else None,
        })


class DisputeMessagesView(DisputeObjectMixin, generics.GenericAPIView):
    serializer_class = DisputeMessageSerializer
    permission_classes = [permissions.IsAuthenticated, IsDisputePartyOrResolver]

    def get(self, request, pk):
        dispute = self.get_dispute()
        messages = DisputeMessage.objects.select_related("sender").filter(dispute=dispute)
        return Response({"messages": self.get_serializer(messages, many=True).data})

    def post(self, request, pk):
        dispute = self.get_dispute()
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        serializer.save(dispute=dispute, sender=request.user)
        return Response(serializer.data, status=status.HTTP_201_CREATED)
