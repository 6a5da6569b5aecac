import itertools
from decimal import Decimal
from unittest import mock

import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from apps.jobs.models import Job, Milestone

User = get_user_model()

_wallets = itertools.count(1)

# modules that look up the chain client by name
CHAIN_CLIENT_USERS = (
    "apps.contract.views",
    "apps.contract.tasks",
    "apps.disputes.services",
    "apps.jobs.services",
    "apps.jobs.tasks",
)


@pytest.fixture(autouse=True)
def _isolated_settings(settings):
    settings.CACHES = {
        "default": {"BACKEND": "django.core.cache.backends.locmem.LocMemCache", "LOCATION": "tests"}
    }
    settings.CHANNEL_LAYERS = {"default": {"BACKEND": "channels.layers.InMemoryChannelLayer"}}
    settings.PINATA_JWT = "test-pinata-jwt"
    settings.IPFS_GATEWAY_URL = "https://ipfs.test/ipfs/"
    settings.CONTRACT_ADDRESS = "0x" + "ab" * 20


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def make_user(db):
    def _make(role="client", **extra):
        wallet = "0x" + format(next(_wallets), "040x")
        return User.objects.create_user(wallet_address=wallet, role=role, **extra)
    return _make


@pytest.fixture
def client_user(make_user):
    return make_user("client", username="alice")


@pytest.fixture
def freelancer(make_user):
    return make_user("freelancer", username="bob")


@pytest.fixture
def admin_user(make_user):
    return make_user("admin", username="root")


@pytest.fixture
def auth():
    """Return a fresh APIClient carrying a Bearer token for the user."""
    def _auth(user):
        c = APIClient()
        token = RefreshToken.for_user(user).access_token
        c.credentials(HTTP_AUTHORIZATION=f"Bearer {token}")
        return c
    return _auth


@pytest.fixture
def make_job(db, client_user):
    def _make(client=None, milestones=(), **fields):
        fields.setdefault("title", "Build a landing page")
        fields.setdefault("budget", Decimal("1.5"))
        fields.setdefault("contract_job_id", 7)
        job = Job.objects.create(client=client or client_user, **fields)
        for index, (title, amount) in enumerate(milestones):
            Milestone.objects.create(job=job, position=index, title=title, amount=Decimal(amount))
        return job
    return _make


@pytest.fixture
def assigned_job(make_job, freelancer):
    return make_job(freelancer=freelancer, status="assigned")


@pytest.fixture
def chain(monkeypatch):
    """A stand-in contract client for every module that talks to the node."""
    fake = mock.MagicMock()
    fake.is_dispute_resolver.return_value = False
    fake.get_transaction_status.return_value = {"status": "pending", "blockNumber": None}
    for module in CHAIN_CLIENT_USERS:
        monkeypatch.setattr(f"{module}.get_contract_client", lambda: fake)
    return fake


@pytest.fixture
def pinata(monkeypatch):
    """Fake Pinata endpoint. Every pinned file gets the next Qm... hash."""
    counter = itertools.count(1)
    calls = []

    def fake_post(url, files=None, headers=None, timeout=None):
        calls.append({"url": url, "files": files, "headers": headers})
        response = mock.Mock()
        response.raise_for_status.return_value = None
        response.json.return_value = {"IpfsHash": f"QmTestHash{next(counter)}"}
        return response

    monkeypatch.setattr("apps.files.services.ipfs.requests.post", fake_post)
    return calls


@pytest.fixture
def no_celery(monkeypatch):
    """Record confirmation tasks instead of sending them to a broker."""
    task = mock.Mock()
    monkeypatch.setattr("apps.contract.views.confirm_transaction", task)
    monkeypatch.setattr("apps.disputes.services.confirm_transaction", task)
    return task
