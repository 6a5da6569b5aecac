from decimal import Decimal

import pytest

from apps.contract.chain import ChainError
from apps.jobs.models import Job


@pytest.mark.django_db
class TestJobsCRUD:
    def test_create_job_with_milestones(self, auth, client_user):
        r = auth(client_user).post("/api/jobs/", {
            "title": "Audit my contract",
            "description": "ERC-20 audit",
            "budget": "2.5",
            "category": "Security",
            "contractJobId": 3,
            "milestones": [
                {"title": "Report", "amount": "1.5"},
                {"title": "Fixes", "amount": "1.0"},
            ],
        }, format="json")

        assert r.status_code == 201
        data = r.json()
        assert data["client"]["id"] == client_user.id
        assert data["status"] == "open"
        assert data["escrowStatus"] == "unfunded"
        assert data["contractJobId"] == 3
        assert [m["index"] for m in data["milestones"]] == [0, 1]
        assert data["milestones"][0]["isCompleted"] is False

    def test_milestones_cannot_exceed_budget(self, auth, client_user):
        r = auth(client_user).post("/api/jobs/", {
            "title": "Too much",
            "budget": "1",
            "milestones": [{"title": "All", "amount": "2"}],
        }, format="json")
        assert r.status_code == 400
        assert "milestones" in r.json()["errors"]

    def test_create_requires_auth(self, api_client):
        r = api_client.post("/api/jobs/", {"title": "x", "budget": "1"}, format="json")
        assert r.status_code == 401

    def test_client_cannot_set_status_on_create(self, auth, client_user):
        r = auth(client_user).post("/api/jobs/", {
            "title": "Sneaky", "budget": "1", "status": "completed",
        }, format="json")
        assert r.status_code == 201
        assert r.json()["status"] == "open"

    def test_list_is_public(self, api_client, make_job):
        make_job(title="One")
        make_job(title="Two")
        r = api_client.get("/api/jobs/")
        assert r.status_code == 200
        assert {j["title"] for j in r.json()} == {"One", "Two"}

    def test_filters(self, api_client, make_job):
        make_job(title="Cheap design", category="Design", budget=Decimal("0.1"))
        make_job(title="Big design", category="Design", budget=Decimal("5"))
        make_job(title="Closed", category="Design", budget=Decimal("5"), status="completed")
        make_job(title="Code", category="Development", budget=Decimal("5"))

        r = api_client.get("/api/jobs/", {"category": "design", "status": "open", "minBudget": "1"})
        assert [j["title"] for j in r.json()] == ["Big design"]

        r = api_client.get("/api/jobs/", {"maxBudget": "1"})
        assert [j["title"] for j in r.json()] == ["Cheap design"]

    def test_retrieve(self, api_client, make_job):
        job = make_job(milestones=[("Design", "0.5")])
        r = api_client.get(f"/api/jobs/{job.id}/")
        assert r.status_code == 200
        assert r.json()["milestones"][0]["title"] == "Design"

    def test_retrieve_missing(self, api_client):
        r = api_client.get("/api/jobs/9999/")
        assert r.status_code == 404
        assert "message" in r.json()

    def test_owner_updates_with_put(self, auth, client_user, make_job):
        job = make_job(milestones=[("Old", "0.5")])
        r = auth(client_user).put(f"/api/jobs/{job.id}/", {
            "title": "New title",
            "milestones": [{"title": "A", "amount": "0.2"}, {"title": "B", "amount": "0.3"}],
        }, format="json")

        assert r.status_code == 200
        job.refresh_from_db()
        assert job.title == "New title"
        assert list(job.milestones.values_list("title", flat=True)) == ["A", "B"]

    def test_non_owner_cannot_update(self, auth, freelancer, make_job):
        job = make_job()
        r = auth(freelancer).patch(f"/api/jobs/{job.id}/", {"title": "Mine"}, format="json")
        assert r.status_code == 403
        assert r.json()["message"] == "Not authorized"

    def test_delete(self, auth, client_user, make_job):
        job = make_job()
        r = auth(client_user).delete(f"/api/jobs/{job.id}/")
        assert r.status_code == 200
        assert r.json()["message"] == "Job deleted"
        assert not Job.objects.filter(id=job.id).exists()

    def test_non_owner_cannot_delete(self, auth, freelancer, make_job):
        job = make_job()
        r = auth(freelancer).delete(f"/api/jobs/{job.id}/")
        assert r.status_code == 403
        assert Job.objects.filter(id=job.id).exists()


@pytest.mark.django_db
class TestJobStatus:
    def test_party_updates_status(self, auth, freelancer, assigned_job):
        r = auth(freelancer).patch(
            f"/api/jobs/{assigned_job.id}/status/", {"status": "in_progress"}, format="json"
        )
        assert r.status_code == 200
        assert r.json()["status"] == "in_progress"

    def test_outsider_cannot_update_status(self, auth, make_user, assigned_job):
        r = auth(make_user("freelancer")).patch(
            f"/api/jobs/{assigned_job.id}/status/", {"status": "completed"}, format="json"
        )
        assert r.status_code == 403

    def test_unknown_status(self, auth, client_user, assigned_job):
        r = auth(client_user).patch(
            f"/api/jobs/{assigned_job.id}/status/", {"status": "paused"}, format="json"
        )
        assert r.status_code == 400


@pytest.mark.django_db
class TestMilestones:
    def test_freelancer_completes_milestone(self, auth, freelancer, make_job):
        job = make_job(freelancer=freelancer, status="in_progress", milestones=[("Draft", "0.5")])
        r = auth(freelancer).post("/api/milestones/complete/", {
            "jobId": job.id, "milestoneIndex": 0, "submission": "ipfs://QmDraft",
        }, format="json")

        assert r.status_code == 200
        milestone = r.json()["milestones"][0]
        assert milestone["isCompleted"] is True
        assert milestone["submission"] == "ipfs://QmDraft"

    def test_client_cannot_complete(self, auth, client_user, freelancer, make_job):
        job = make_job(freelancer=freelancer, milestones=[("Draft", "0.5")])
        r = auth(client_user).post("/api/milestones/complete/", {
            "jobId": job.id, "milestoneIndex": 0,
        }, format="json")
        assert r.status_code == 403

    def test_invalid_index(self, auth, freelancer, make_job):
        job = make_job(freelancer=freelancer, milestones=[("Draft", "0.5")])
        r = auth(freelancer).post("/api/milestones/complete/", {
            "jobId": job.id, "milestoneIndex": 3,
        }, format="json")
        assert r.status_code == 400
        assert r.json()["message"] == "Invalid milestone index"

    def test_client_approves_completed_milestone(self, auth, client_user, freelancer, make_job):
        job = make_job(freelancer=freelancer, milestones=[("Draft", "0.5")])
        job.get_milestone(0).mark_completed("done")

        r = auth(client_user).post("/api/milestones/approve/", {
            "jobId": job.id, "milestoneIndex": 0,
        }, format="json")

        assert r.status_code == 200
        assert r.json()["milestones"][0]["isPaid"] is True

    def test_cannot_approve_unfinished_milestone(self, auth, client_user, freelancer, make_job):
        job = make_job(freelancer=freelancer, milestones=[("Draft", "0.5")])
        r = auth(client_user).post("/api/milestones/approve/", {
            "jobId": job.id, "milestoneIndex": 0,
        }, format="json")
        assert r.status_code == 400
        assert job.get_milestone(0).is_paid is False


@pytest.mark.django_db
class TestChainSync:
    def _chain_job(self, status):
        return {"jobId": 7, "status": status, "statusNumber": 0}

    def test_sync_moves_status(self, auth, client_user, assigned_job, chain):
        chain.get_job.return_value = self._chain_job("Completed")

        r = auth(client_user).post(f"/api/jobs/{assigned_job.id}/sync/")

        assert r.status_code == 200
        assert r.json()["updated"] is True
        assert r.json()["job"]["status"] == "completed"
        chain.get_job.assert_called_once_with(7)

    def test_open_on_chain_changes_nothing(self, auth, client_user, assigned_job, chain):
        chain.get_job.return_value = self._chain_job("Open")
        r = auth(client_user).post(f"/api/jobs/{assigned_job.id}/sync/")
        assert r.json()["updated"] is False
        assert r.json()["job"]["status"] == "assigned"

    def test_cancelled_job_is_not_overwritten(self, auth, client_user, freelancer, make_job, chain):
        job = make_job(freelancer=freelancer, status="cancelled")
        chain.get_job.return_value = self._chain_job("Resolved")
        r = auth(client_user).post(f"/api/jobs/{job.id}/sync/")
        assert r.json()["updated"] is False

    def test_job_without_contract_id(self, auth, client_user, freelancer, make_job, chain):
        job = make_job(freelancer=freelancer, contract_job_id=None)
        r = auth(client_user).post(f"/api/jobs/{job.id}/sync/")
        assert r.status_code == 400

    def test_node_down(self, auth, client_user, assigned_job, chain):
        chain.get_job.side_effect = ChainError("connection refused")
        r = auth(client_user).post(f"/api/jobs/{assigned_job.id}/sync/")
        assert r.status_code == 503
        assert r.json()["message"] == "connection refused"

    @pytest.mark.parametrize("status", ["submitted", "disputed"])
    def test_in_progress_on_chain_keeps_later_status(
        self, auth, client_user, freelancer, make_job, chain, status
    ):
        job = make_job(freelancer=freelancer, status=status)
        chain.get_job.return_value = self._chain_job("InProgress")

        r = auth(client_user).post(f"/api/jobs/{job.id}/sync/")

        assert r.status_code == 200
        assert r.json()["updated"] is False
        job.refresh_from_db()
        assert job.status == status

    def test_disputed_job_resolved_on_chain(self, auth, client_user, freelancer, make_job, chain):
        job = make_job(freelancer=freelancer, status="disputed")
        chain.get_job.return_value = self._chain_job("Resolved")

        r = auth(client_user).post(f"/api/jobs/{job.id}/sync/")

        assert r.json()["updated"] is True
        assert r.json()["job"]["status"] == "completed"


@pytest.mark.django_db
class TestSyncTask:
    def test_syncs_active_jobs_only(self, freelancer, make_job, chain):
        from apps.jobs.tasks import sync_active_jobs_with_chain

        active = make_job(freelancer=freelancer, status="in_progress")
        make_job(freelancer=freelancer, status="completed", contract_job_id=8)
        make_job(title="no id", contract_job_id=None)
        chain.get_job.return_value = {"jobId": 7, "status": "Disputed", "statusNumber": 3}

        sync_active_jobs_with_chain()

        chain.get_job.assert_called_once_with(7)
        active.refresh_from_db()
        assert active.status == "disputed"

    def test_periodic_sync_never_moves_jobs_backwards(self, freelancer, make_job, chain):
        from apps.jobs.tasks import sync_active_jobs_with_chain

        submitted = make_job(freelancer=freelancer, status="submitted")
        disputed = make_job(freelancer=freelancer, status="disputed", contract_job_id=8)
        assigned = make_job(freelancer=freelancer, status="assigned", contract_job_id=9)
        chain.get_job.return_value = {"jobId": 7, "status": "InProgress", "statusNumber": 1}

        assert sync_active_jobs_with_chain() == 1

        for job, expected in ((submitted, "submitted"), (disputed, "disputed"), (assigned, "in_progress")):
            job.refresh_from_db()
            assert job.status == expected
