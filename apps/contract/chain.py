"""
Thin client over the deployed escrow contract.

Every user-facing write (fund, release, raise dispute, resolve) is signed by
the wallet in the browser. The backend only reads contract state, checks
receipts and, from management commands, sends owner-only transactions.
"""
import json
import logging
from functools import lru_cache

import requests
from django.conf import settings
from web3 import Web3
from web3.exceptions import TransactionNotFound, Web3Exception

from apps.contract.constants import CONTRACT_ABI, CHAIN_JOB_STATUSES

logger = logging.getLogger(__name__)


class ChainError(Exception):
    """The node could not be reached or the contract call reverted."""


class JobContractClient:

    def __init__(self, rpc_url, contract_address, abi, timeout=15):
        self.web3 = Web3(Web3.HTTPProvider(rpc_url, request_kwargs={"timeout": timeout}))
        self.contract_address = contract_address
        self.contract = None
        if contract_address:
            self.contract = self.web3.eth.contract(
                address=Web3.to_checksum_address(contract_address),
                abi=abi,
            )

    def _function(self, name, *args):
        if self.contract is None:
            raise ChainError("CONTRACT_ADDRESS is not configured")
        return getattr(self.contract.functions, name)(*args)

    def _call(self, name, *args):
        try:
            return self._function(name, *args).call()
        except (Web3Exception, ValueError, requests.RequestException) as exc:
            logger.warning("Contract call %s%s failed: %s", name, args, exc)
            raise ChainError(f"Failed to call {name}: {exc}") from exc

    # ---------- reads ----------

    def is_dispute_resolver(self, address):
        return bool(self._call("disputeResolvers", Web3.to_checksum_address(address)))

    def owner(self):
        return self._call("owner")

    def job_counter(self):
        return int(self._call("jobCounter"))

    def remaining_funds(self, job_id):
        return Web3.from_wei(self._call("remainingFunds", int(job_id)), "ether")

    def commission_rate(self):
        return int(self._call("commissionRate"))

    def platform_fees(self):
        return Web3.from_wei(self._call("platformFees"), "ether")

    def is_paused(self):
        return bool(self._call("paused"))

    def get_job(self, job_id):
        (
            client,
            freelancer,
            title,
            total_amount,
            paid_amount,
            status_number,
            current_milestone,
            resolution,
            deadline,
            dispute_reason,
            dispute_raised_at,
        ) = self._call("jobs", int(job_id))

        status_number = int(status_number)
        if 0 <= status_number < len(CHAIN_JOB_STATUSES):
            status_text = CHAIN_JOB_STATUSES[status_number]
        else:
            status_text = "Unknown"

        return {
            "jobId": int(job_id),
            "client": client,
            "freelancer": freelancer,
            "title": title,
            "totalAmount": str(Web3.from_wei(total_amount, "ether")),
            "paidAmount": str(Web3.from_wei(paid_amount, "ether")),
            "status": status_text,
            "statusNumber": status_number,
            "currentMilestone": int(current_milestone),
            "resolution": int(resolution),
            "deadline": int(deadline),
            "disputeReason": dispute_reason,
            "disputeRaisedAt": int(dispute_raised_at),
        }

    def get_transaction_status(self, tx_hash):
        """
        Returns {"status": "pending" | "confirmed" | "failed", "blockNumber": int | None}.
        A hash the node has not mined yet is reported as pending.
        """
        try:
            receipt = self.web3.eth.get_transaction_receipt(tx_hash)
        except TransactionNotFound:
            return {"status": "pending", "blockNumber": None}
        except (Web3Exception, ValueError, requests.RequestException) as exc:
            logger.warning("Receipt lookup for %s failed: %s", tx_hash, exc)
            raise ChainError(f"Failed to fetch receipt: {exc}") from exc

        return {
            "status": "confirmed" if receipt["status"] == 1 else "failed",
            "blockNumber": receipt["blockNumber"],
        }

    # ---------- owner writes ----------

    def assign_dispute_resolver(self, address, status, private_key):
        if not private_key:
            raise ChainError("OWNER_PRIVATE_KEY is not configured")

        account = self.web3.eth.account.from_key(private_key)
        try:
            tx = self._function(
                "assignDisputeResolver", Web3.to_checksum_address(address), bool(status)
            ).build_transaction({
                "from": account.address,
                "nonce": self.web3.eth.get_transaction_count(account.address),
            })
            signed = account.sign_transaction(tx)
            tx_hash = self.web3.eth.send_raw_transaction(signed.raw_transaction)
            receipt = self.web3.eth.wait_for_transaction_receipt(tx_hash)
        except (Web3Exception, ValueError, requests.RequestException) as exc:
            logger.error("assignDisputeResolver(%s, %s) failed: %s", address, status, exc)
            raise ChainError(f"Failed to assign dispute resolver: {exc}") from exc

        logger.info(
            "assignDisputeResolver(%s, %s) mined in block %s",
            address, status, receipt["blockNumber"],
        )
        return tx_hash.hex()


def load_contract_abi():
    path = settings.CONTRACT_ABI_PATH
    if not path:
        return CONTRACT_ABI

    with open(path) as fh:
        artifact = json.load(fh)
    # accept a bare ABI list or a compiler artifact
    return artifact["abi"] if isinstance(artifact, dict) else artifact


@lru_cache(maxsize=1)
def get_contract_client():
    return JobContractClient(
        rpc_url=settings.WEB3_RPC_URL,
        contract_address=settings.CONTRACT_ADDRESS,
        abi=load_contract_abi(),
        timeout=settings.WEB3_REQUEST_TIMEOUT,
    )
