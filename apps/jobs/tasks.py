import logging

from celery import shared_task

from apps.contract.chain import ChainError, get_contract_client
from apps.jobs.models import Job
from apps.jobs.services import SYNCABLE_STATUSES, sync_job_with_chain

logger = logging.getLogger(__name__)


@shared_task
def sync_active_jobs_with_chain():
    client = get_contract_client()
    jobs = Job.objects.filter(
        contract_job_id__isnull=False,
        status__in=SYNCABLE_STATUSES,
    )

    updated = 0
    for job in jobs.iterator():
        try:
            _, changed = sync_job_with_chain(job, client=client)
        except ChainError as exc:
            logger.warning("Skipping chain sync for job %s: %s", job.id, exc)
            continue
        updated += int(changed)

    return updated
