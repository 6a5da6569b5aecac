from decimal import Decimal
from io import StringIO
from unittest import mock

import pytest
from django.core.management import CommandError, call_command

from apps.contract.chain import ChainError, JobContractClient
from apps.contract.models import Transaction
from apps.contract.tasks import MAX_CONFIRM_RETRIES, ReceiptPending, confirm_transaction

TX_HASH = "0x" + "aB" * 32


@pytest.mark.django_db
class TestStoreTransaction:
    def test_store_and_schedule_confirmation(
        self, auth, client_user, make_job, no_celery, django_capture_on_commit_callbacks
    ):
        job = make_job()
        with django_capture_on_commit_callbacks(execute=True):
            r = auth(client_user).post("/api/contracts/tx/", {
                "jobId": job.id,
                "txHash": TX_HASH,
                "type": "fund",
                "amount": "1.5",
            }, format="json")

        assert r.status_code == 201
        data = r.json()
        assert data["txHash"] == TX_HASH.lower()
        assert data["status"] == "pending"
        assert data["userId"] == client_user.id

        tx = Transaction.objects.get()
        no_celery.delay.assert_called_once_with(tx.id)

    def test_bad_hash(self, auth, client_user, no_celery):
        r = auth(client_user).post("/api/contracts/tx/", {
            "txHash": "0x1234", "type": "fund",
        }, format="json")
        assert r.status_code == 400
        assert r.json()["message"] == "Enter a valid transaction hash."

    def test_unknown_type(self, auth, client_user, no_celery):
        r = auth(client_user).post("/api/contracts/tx/", {
            "txHash": TX_HASH, "type": "mint",
        }, format="json")
        assert r.status_code == 400


@pytest.mark.django_db
class TestEscrowStatus:
    def test_party_updates_escrow(self, auth, client_user, assigned_job):
        r = auth(client_user).post("/api/contracts/escrow/", {
            "jobId": assigned_job.id, "status": "funded",
        }, format="json")
        assert r.status_code == 200
        assert r.json()["escrowStatus"] == "funded"

    def test_outsider_cannot_update_escrow(self, auth, make_user, assigned_job):
        r = auth(make_user()).post("/api/contracts/escrow/", {
            "jobId": assigned_job.id, "status": "released",
        }, format="json")
        assert r.status_code == 403


@pytest.mark.django_db
class TestVerifyTransaction:
    def test_confirmed_receipt_updates_rows(self, auth, client_user, chain):
        tx = Transaction.objects.create(user=client_user, tx_hash=TX_HASH.lower(), tx_type="fund")
        chain.get_transaction_status.return_value = {"status": "confirmed", "blockNumber": 42}

        r = auth(client_user).get(f"/api/contracts/verify/{TX_HASH}/")

        assert r.status_code == 200
        assert r.json() == {"txHash": TX_HASH.lower(), "status": "confirmed", "blockNumber": 42}
        tx.refresh_from_db()
        assert tx.status == "confirmed"
        assert tx.block_number == 42
        assert tx.confirmed_at is not None

    def test_pending_receipt(self, auth, client_user, chain):
        r = auth(client_user).get(f"/api/contracts/verify/{TX_HASH}/")
        assert r.json()["status"] == "pending"

    def test_node_unreachable(self, auth, client_user, chain):
        chain.get_transaction_status.side_effect = ChainError("timeout")
        r = auth(client_user).get(f"/api/contracts/verify/{TX_HASH}/")
        assert r.status_code == 503

    def test_invalid_hash(self, auth, client_user, chain):
        r = auth(client_user).get("/api/contracts/verify/0xnope/")
        assert r.status_code == 400


@pytest.mark.django_db
class TestChainReads:
    def test_chain_job(self, auth, client_user, chain):
        chain.get_job.return_value = {"jobId": 7, "status": "InProgress"}
        chain.remaining_funds.return_value = Decimal("0.5")
        r = auth(client_user).get("/api/contracts/jobs/7/")
        assert r.status_code == 200
        assert r.json()["status"] == "InProgress"
        assert r.json()["remainingFunds"] == "0.5"

    def test_contract_info(self, auth, client_user, chain):
        chain.owner.return_value = "0xOwner"
        chain.job_counter.return_value = 12
        chain.commission_rate.return_value = 250
        chain.platform_fees.return_value = Decimal("0.75")
        chain.is_paused.return_value = False

        r = auth(client_user).get("/api/contracts/info/")

        assert r.status_code == 200
        assert r.json()["jobCounter"] == 12
        assert r.json()["platformFees"] == "0.75"


@pytest.mark.django_db
class TestConfirmTransactionTask:
    def test_confirms(self, client_user, chain):
        tx = Transaction.objects.create(user=client_user, tx_hash=TX_HASH.lower(), tx_type="release")
        chain.get_transaction_status.return_value = {"status": "confirmed", "blockNumber": 9}

        assert confirm_transaction(tx.id) == "confirmed"
        tx.refresh_from_db()
        assert tx.block_number == 9

    def test_failed_receipt(self, client_user, chain):
        tx = Transaction.objects.create(user=client_user, tx_hash=TX_HASH.lower(), tx_type="release")
        chain.get_transaction_status.return_value = {"status": "failed", "blockNumber": 9}

        assert confirm_transaction(tx.id) == "failed"

    def test_pending_receipt_retries(self, client_user, chain):
        tx = Transaction.objects.create(user=client_user, tx_hash=TX_HASH.lower(), tx_type="fund")
        with pytest.raises(ReceiptPending):
            confirm_transaction(tx.id)

    def test_gives_up_after_last_retry(self, client_user, chain):
        tx = Transaction.objects.create(user=client_user, tx_hash=TX_HASH.lower(), tx_type="fund")

        result = confirm_transaction.apply(args=(tx.id,), retries=MAX_CONFIRM_RETRIES)

        assert result.get() == "failed"
        tx.refresh_from_db()
        assert tx.status == "failed"
        assert tx.block_number is None

    def test_missing_row(self, db, chain):
        assert confirm_transaction(12345) is None
        chain.get_transaction_status.assert_not_called()


class TestJobContractClient:
    def _client(self):
        return JobContractClient("http://localhost:8545", "", abi=[])

    def test_unconfigured_contract(self):
        with pytest.raises(ChainError):
            self._client().owner()

    def test_get_job_maps_status(self):
        client = self._client()
        client.contract = mock.MagicMock()
        client.contract.functions.jobs.return_value.call.return_value = (
            "0xClient", "0xFreelancer", "Logo", 2 * 10**18, 10**18, 1, 1, 0, 0, "", 0,
        )

        job = client.get_job(5)

        assert job["status"] == "InProgress"
        assert job["totalAmount"] == "2"
        assert job["paidAmount"] == "1"
        client.contract.functions.jobs.assert_called_once_with(5)

    def test_receipt_status(self):
        client = self._client()
        client.web3 = mock.MagicMock()
        client.web3.eth.get_transaction_receipt.return_value = {"status": 0, "blockNumber": 3}
        assert client.get_transaction_status(TX_HASH) == {"status": "failed", "blockNumber": 3}


class TestResolverCommands:
    ADDRESS = "0x" + "12" * 20

    @pytest.fixture
    def fake_client(self, monkeypatch):
        fake = mock.MagicMock()
        fake.owner.return_value = "0xOwner"
        for name in ("check_dispute_resolver", "assign_dispute_resolver"):
            monkeypatch.setattr(
                f"apps.contract.management.commands.{name}.get_contract_client", lambda: fake
            )
        return fake

    def test_check(self, fake_client):
        fake_client.is_dispute_resolver.return_value = True
        out = StringIO()
        call_command("check_dispute_resolver", self.ADDRESS, stdout=out)
        assert "is an active dispute resolver" in out.getvalue()

    def test_check_rejects_bad_address(self, fake_client):
        with pytest.raises(CommandError):
            call_command("check_dispute_resolver", "nope")

    def test_assign_requires_owner_key(self, fake_client, settings):
        settings.OWNER_PRIVATE_KEY = ""
        with pytest.raises(CommandError):
            call_command("assign_dispute_resolver", self.ADDRESS)
        fake_client.assign_dispute_resolver.assert_not_called()

    def test_assign(self, fake_client, settings):
        settings.OWNER_PRIVATE_KEY = "0x" + "1" * 64
        fake_client.is_dispute_resolver.return_value = False
        fake_client.assign_dispute_resolver.return_value = "0xabc"
        out = StringIO()

        call_command("assign_dispute_resolver", self.ADDRESS, stdout=out)

        fake_client.assign_dispute_resolver.assert_called_once_with(self.ADDRESS, True, settings.OWNER_PRIVATE_KEY)
        assert "0xabc" in out.getvalue()
