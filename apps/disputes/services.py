import logging

from django.db import transaction
from django.utils import timezone

from apps.contract.chain import get_contract_client
from apps.contract.models import Transaction
from apps.contract.tasks import confirm_transaction
from apps.disputes.models import Dispute
from apps.notifications.services.create_notifications import notify_user

logger = logging.getLogger(__name__)

# resolution type -> (dispute status, job status)
RESOLUTION_OUTCOMES = {
    "client_favor": ("resolved_client", "cancelled"),
    "freelancer_favor": ("resolved_freelancer", "completed"),
    "partial_refund": ("resolved_admin", "completed"),
    "mediation": ("resolved_admin", "completed"),
}


def is_dispute_resolver(user, client=None):
    """
    Admins always resolve disputes. Everyone else needs the contract owner to
    have registered their wallet. Raises ChainError if the node is unreachable.
    """
    if not user.is_authenticated:
        return False
    if user.is_admin_role:
        return True

    client = client or get_contract_client()
    return client.is_dispute_resolver(user.wallet_address)


def open_dispute(job, submission, raised_by, title, description, dispute_type, priority="medium"):
    with transaction.atomic():
        dispute = Dispute.objects.create(
            job=job,
            client=job.client,
            freelancer=job.freelancer,
            project_submission=submission,
            title=title,
            description=description,
            dispute_type=dispute_type,
            priority=priority,
        )

        job.status = "disputed"
        job.save(update_fields=["status", "updated_at"])

        submission.approval_status = "disputed"
        submission.save(update_fields=["approval_status", "updated_at"])

    logger.info("Dispute %s raised on job %s by user %s", dispute.id, job.id, raised_by.id)

    other_party = job.freelancer if raised_by.id == job.client_id else job.client
    if other_party:
        notify_user(
            recipient=other_party,
            notif_type="DISPUTE_RAISED",
            title="Dispute raised",
            message=f"A dispute was raised on '{job.title}': {title}",
            data={"jobId": job.id, "disputeId": dispute.id},
        )
    return dispute


def _record_dispute_tx(dispute, resolver, tx_hash, amount=None):
    if not tx_hash:
        return None
    tx = Transaction.objects.create(
        job=dispute.job,
        user=resolver,
        tx_hash=tx_hash,
        tx_type="dispute",
        amount=amount,
    )
    transaction.on_commit(lambda: confirm_transaction.delay(tx.id))
    return tx


def _notify_parties(dispute, title, message):
    for party in (dispute.client, dispute.freelancer):
        if party is None:
            continue
        notify_user(
            recipient=party,
            notif_type="DISPUTE_RESOLVED",
            title=title,
            message=message,
            data={"jobId": dispute.job_id, "disputeId": dispute.id},
        )


def resolve_dispute(dispute, resolver, resolution_type, description="", refund_amount=0, tx_hash=None):
    dispute_status, job_status = RESOLUTION_OUTCOMES[resolution_type]
    job = dispute.job

    with transaction.atomic():
        dispute.status = dispute_status
        dispute.resolution_type = resolution_type
        dispute.resolution_description = description or ""
        dispute.refund_amount = refund_amount or 0
        dispute.resolved_by = resolver
        dispute.resolved_at = timezone.now()
        dispute.save()

        job.status = job_status
        job.save(update_fields=["status", "updated_at"])

        tx = _record_dispute_tx(dispute, resolver, tx_hash, amount=refund_amount or None)

    logger.info(
        "Dispute %s resolved as %s by user %s (job %s -> %s)",
        dispute.id, resolution_type, resolver.id, job.id, job_status,
    )
    _notify_parties(
        dispute,
        "Dispute resolved",
        f"The dispute on '{job.title}' was resolved: {dispute.get_resolution_type_display()}.",
    )
    return dispute, tx


def cancel_dispute(dispute, resolver, description="", tx_hash=None):
    """Close the dispute and cancel the project."""
    job = dispute.job

    with transaction.atomic():
        dispute.status = "closed"
        dispute.resolution_type = "cancelled"
        dispute.resolution_description = description or "Project cancelled by dispute resolver"
        dispute.resolved_by = resolver
        dispute.resolved_at = timezone.now()
        dispute.save()

        job.status = "cancelled"
        job.save(update_fields=["status", "updated_at"])

        tx = _record_dispute_tx(dispute, resolver, tx_hash)

    logger.info("Dispute %s closed and job %s cancelled by user %s", dispute.id, job.id, resolver.id)
    _notify_parties(dispute, "Project cancelled", f"'{job.title}' was cancelled by the dispute resolver.")
    return dispute, tx
