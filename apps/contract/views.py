import logging

from django.db import transaction as db_transaction
from django.conf import settings
from django.shortcuts import get_object_or_404
from rest_framework import generics, permissions, status
from rest_framework.exceptions import PermissionDenied
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.cores.exceptions import ChainUnavailable
from apps.contract.chain import ChainError, get_contract_client
from apps.contract.models import Transaction
from apps.contract.serializers import (
    EscrowStatusSerializer,
    TransactionSerializer,
    validate_tx_hash,
)
from apps.contract.tasks import confirm_transaction
from apps.jobs.models import Job
from apps.jobs.serializers import JobSerializer

logger = logging.getLogger(__name__)


class StoreTransactionView(generics.CreateAPIView):
    """
    Record a transaction hash the frontend just sent to the escrow contract.
    A Celery task follows the receipt until the row is confirmed or failed.
    """
    serializer_class = TransactionSerializer
    permission_classes = [permissions.IsAuthenticated]

    def perform_create(self, serializer):
        tx = serializer.save(user=self.request.user)
        db_transaction.on_commit(lambda: confirm_transaction.delay(tx.id))


class EscrowStatusView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def post(self, request):
        serializer = EscrowStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        job = get_object_or_404(Job, id=serializer.validated_data["jobId"])
        if not job.is_party(request.user):
            raise PermissionDenied("Not authorized")

        job.escrow_status = serializer.validated_data["status"]
        job.save(update_fields=["escrow_status", "updated_at"])
        return Response(JobSerializer(job).data)


class VerifyTransactionView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request, tx_hash):
        tx_hash = validate_tx_hash(tx_hash)

        try:
            result = get_contract_client().get_transaction_status(tx_hash)
        except ChainError as exc:
            raise ChainUnavailable(str(exc))

        if result["status"] != "pending":
            for tx in Transaction.objects.filter(tx_hash=tx_hash, status="pending"):
                tx.apply_receipt(result)

        return Response({
            "txHash": tx_hash,
            "status": result["status"],
            "blockNumber": result["blockNumber"],
        })


class ChainJobView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request, contract_job_id):
        client = get_contract_client()
        try:
            job = client.get_job(contract_job_id)
            job["remainingFunds"] = str(client.remaining_funds(contract_job_id))
        except ChainError as exc:
            raise ChainUnavailable(str(exc))
        return Response(job)


class ContractInfoView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        client = get_contract_client()
        try:
            data = {
                "contractAddress": settings.CONTRACT_ADDRESS,
                "owner": client.owner(),
                "jobCounter": client.job_counter(),
                "commissionRate": client.commission_rate(),
                "platformFees": str(client.platform_fees()),
                "paused": client.is_paused(),
            }
        except ChainError as exc:
            raise ChainUnavailable(str(exc))
        return Response(data, status=status.HTTP_200_OK)
