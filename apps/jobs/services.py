import logging

from apps.contract.chain import get_contract_client
from apps.contract.constants import CHAIN_TO_JOB_STATUS

logger = logging.getLogger(__name__)

# statuses the chain is allowed to move a job out of
SYNCABLE_STATUSES = ("open", "assigned", "in_progress", "submitted", "disputed")

# Mirroring only ever moves a job forward through this order
STATUS_RANK = {
    "open": 0,
    "assigned": 1,
    "in_progress": 2,
    "submitted": 3,
    "disputed": 4,
    "completed": 5,
    "cancelled": 5,
}


def sync_job_with_chain(job, client=None):
    """
    Read the on-chain job behind ``job.contract_job_id`` and mirror its status.
    Off-chain progress (submitted, disputed) is never rolled back by an older
    chain status.
    Returns (chain_job, changed). Raises ChainError when the node call fails.
    """
    if job.contract_job_id is None:
        raise ValueError("Job has no contract job id")

    client = client or get_contract_client()
    chain_job = client.get_job(job.contract_job_id)

    new_status = CHAIN_TO_JOB_STATUS.get(chain_job["status"])
    if not new_status or job.status not in SYNCABLE_STATUSES:
        return chain_job, False

    if STATUS_RANK[new_status] <= STATUS_RANK[job.status]:
        return chain_job, False

    logger.info(
        "Job %s status %s -> %s (chain status %s)",
        job.id, job.status, new_status, chain_job["status"],
    )
    job.status = new_status
    job.save(update_fields=["status", "updated_at"])
    return chain_job, True
