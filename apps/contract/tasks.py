import logging

from celery import shared_task

from apps.contract.chain import ChainError, get_contract_client
from apps.contract.models import Transaction

logger = logging.getLogger(__name__)

MAX_CONFIRM_RETRIES = 12


class ReceiptPending(Exception):
    pass


@shared_task(
    bind=True,
    autoretry_for=(ReceiptPending, ChainError),
    retry_backoff=10,
    retry_kwargs={"max_retries": MAX_CONFIRM_RETRIES},
)
def confirm_transaction(self, transaction_id):
    """
    Poll the node for the receipt of a reported transaction.
    Retries while the transaction is unmined or the node is unreachable.
    A transaction still unmined on the last attempt is marked failed.
    """
    try:
        tx = Transaction.objects.get(id=transaction_id)
    except Transaction.DoesNotExist:
        logger.warning("Transaction %s vanished before confirmation", transaction_id)
        return None

    if tx.status != "pending":
        return tx.status

    result = get_contract_client().get_transaction_status(tx.tx_hash)
    if result["status"] == "pending":
        if self.request.retries >= MAX_CONFIRM_RETRIES:
            logger.warning(
                "Transaction %s still unmined after %s retries, marking it failed",
                tx.tx_hash, self.request.retries,
            )
            tx.mark_failed()
            return tx.status
        raise ReceiptPending(tx.tx_hash)

    tx.apply_receipt(result)
    logger.info("Transaction %s is %s (block %s)", tx.tx_hash, tx.status, tx.block_number)
    return tx.status
