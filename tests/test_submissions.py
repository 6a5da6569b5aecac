import pytest
from django.core.files.uploadedfile import SimpleUploadedFile

from apps.notifications.models import Notification
from apps.submissions.models import ProjectSubmission


def deliverable(name="site.zip"):
    return SimpleUploadedFile(name, b"PK\x03\x04", content_type="application/zip")


@pytest.fixture
def submitted_job(assigned_job, freelancer):
    submission = ProjectSubmission.objects.create(job=assigned_job, freelancer=freelancer)
    submission.files.create(filename="site.zip", ipfs_hash="QmSite", file_size=4, mime_type="application/zip")
    submission.mark_complete()
    assigned_job.status = "submitted"
    assigned_job.save()
    return assigned_job


@pytest.mark.django_db
class TestUploadSubmission:
    def test_first_upload_starts_work(self, auth, freelancer, assigned_job, pinata):
        r = auth(freelancer).post(f"/api/submissions/{assigned_job.id}/upload/", {
            "files": [deliverable("a.zip"), deliverable("b.zip")],
            "description": "First cut",
        }, format="multipart")

        assert r.status_code == 200
        data = r.json()
        assert data["message"] == "Files uploaded successfully"
        assert [f["filename"] for f in data["submission"]["files"]] == ["a.zip", "b.zip"]
        assert data["fileUrls"][0]["url"] == "https://ipfs.test/ipfs/QmTestHash1"

        assigned_job.refresh_from_db()
        assert assigned_job.status == "in_progress"

    def test_second_upload_appends(self, auth, freelancer, assigned_job, pinata):
        c = auth(freelancer)
        c.post(f"/api/submissions/{assigned_job.id}/upload/", {"files": [deliverable()]}, format="multipart")
        r = c.post(f"/api/submissions/{assigned_job.id}/upload/", {
            "files": [deliverable("v2.zip")], "description": "Second cut",
        }, format="multipart")

        assert r.status_code == 200
        assert len(r.json()["submission"]["files"]) == 2
        assert r.json()["submission"]["description"] == "Second cut"
        assert ProjectSubmission.objects.count() == 1

    def test_only_assigned_freelancer(self, auth, make_user, assigned_job, pinata):
        r = auth(make_user("freelancer")).post(
            f"/api/submissions/{assigned_job.id}/upload/", {"files": [deliverable()]}, format="multipart"
        )
        assert r.status_code == 403

    def test_no_files(self, auth, freelancer, assigned_job, pinata):
        r = auth(freelancer).post(f"/api/submissions/{assigned_job.id}/upload/", {}, format="multipart")
        assert r.status_code == 400
        assert r.json()["message"] == "No files uploaded"

    def test_wrong_job_state(self, auth, freelancer, make_job, pinata):
        job = make_job(freelancer=freelancer, status="completed")
        r = auth(freelancer).post(f"/api/submissions/{job.id}/upload/", {"files": [deliverable()]}, format="multipart")
        assert r.status_code == 400

    def test_ipfs_failure_saves_nothing(self, auth, freelancer, assigned_job, settings):
        settings.PINATA_JWT = ""
        r = auth(freelancer).post(
            f"/api/submissions/{assigned_job.id}/upload/", {"files": [deliverable()]}, format="multipart"
        )
        assert r.status_code == 500
        assert r.json()["message"] == "Failed to upload file to IPFS"
        assert not ProjectSubmission.objects.exists()


@pytest.mark.django_db
class TestCompleteAndApprove:
    def test_mark_complete(self, auth, client_user, freelancer, make_job):
        job = make_job(freelancer=freelancer, status="in_progress")
        ProjectSubmission.objects.create(job=job, freelancer=freelancer)

        r = auth(freelancer).patch(f"/api/submissions/{job.id}/complete/")

        assert r.status_code == 200
        job.refresh_from_db()
        assert job.status == "submitted"
        assert ProjectSubmission.objects.get(job=job).is_marked_complete
        assert Notification.objects.filter(recipient=client_user, notif_type="WORK_SUBMITTED").exists()

    def test_mark_complete_needs_submission(self, auth, freelancer, make_job):
        job = make_job(freelancer=freelancer, status="in_progress")
        r = auth(freelancer).patch(f"/api/submissions/{job.id}/complete/")
        assert r.status_code == 400
        assert r.json()["message"].startswith("No submission found")

    def test_mark_complete_needs_in_progress(self, auth, freelancer, assigned_job):
        r = auth(freelancer).patch(f"/api/submissions/{assigned_job.id}/complete/")
        assert r.status_code == 400
        assert r.json()["message"] == "Job is not in progress"

    def test_client_approves(self, auth, client_user, freelancer, submitted_job):
        r = auth(client_user).patch(
            f"/api/submissions/{submitted_job.id}/approve/", {"feedback": "Great"}, format="json"
        )

        assert r.status_code == 200
        submitted_job.refresh_from_db()
        assert submitted_job.status == "completed"
        submission = ProjectSubmission.objects.get(job=submitted_job)
        assert submission.approval_status == "approved"
        assert submission.feedback == "Great"
        assert Notification.objects.filter(recipient=freelancer, notif_type="WORK_APPROVED").exists()

    def test_freelancer_cannot_approve(self, auth, freelancer, submitted_job):
        r = auth(freelancer).patch(f"/api/submissions/{submitted_job.id}/approve/")
        assert r.status_code == 403

    def test_approve_unfinished_work(self, auth, client_user, freelancer, make_job):
        job = make_job(freelancer=freelancer, status="in_progress")
        ProjectSubmission.objects.create(job=job, freelancer=freelancer)
        r = auth(client_user).patch(f"/api/submissions/{job.id}/approve/")
        assert r.status_code == 400
        assert r.json()["message"] == "Project not marked as complete by freelancer"

    def test_approve_wrong_state(self, auth, client_user, assigned_job):
        r = auth(client_user).patch(f"/api/submissions/{assigned_job.id}/approve/")
        assert r.status_code == 400
        assert "Current status: assigned" in r.json()["message"]


@pytest.mark.django_db
class TestSubmissionDetail:
    def test_party_sees_files_with_urls(self, auth, client_user, submitted_job):
        r = auth(client_user).get(f"/api/submissions/{submitted_job.id}/")
        assert r.status_code == 200
        submission = r.json()["submission"]
        assert submission["files"][0]["url"] == "https://ipfs.test/ipfs/QmSite"
        assert submission["isMarkedComplete"] is True
        assert submission["clientApproval"]["status"] == "pending"

    def test_outsider(self, auth, make_user, submitted_job):
        r = auth(make_user()).get(f"/api/submissions/{submitted_job.id}/")
        assert r.status_code == 403

    def test_missing(self, auth, client_user, assigned_job):
        r = auth(client_user).get(f"/api/submissions/{assigned_job.id}/")
        assert r.status_code == 404
        assert r.json()["message"] == "No submission found"
