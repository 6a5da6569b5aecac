import pytest

from apps.applications.models import Application
from apps.notifications.models import Notification


@pytest.mark.django_db
class TestJobMessages:
    def test_client_messages_assigned_freelancer(self, auth, client_user, freelancer, assigned_job):
        r = auth(client_user).post("/api/messages/", {
            "jobId": assigned_job.id, "content": "How is it going?",
        }, format="json")

        assert r.status_code == 201
        assert r.json()["sender"]["id"] == client_user.id
        notif = Notification.objects.get(recipient=freelancer)
        assert notif.notif_type == "NEW_MESSAGE"
        assert notif.data["jobId"] == assigned_job.id

    def test_applicant_can_talk_to_client(self, auth, client_user, make_user, make_job):
        job = make_job()
        applicant = make_user("freelancer")
        Application.objects.create(job=job, freelancer=applicant, proposal="Hi")

        r = auth(applicant).post("/api/messages/", {"jobId": job.id, "content": "Question"}, format="json")

        assert r.status_code == 201
        assert Notification.objects.filter(recipient=client_user, notif_type="NEW_MESSAGE").exists()

    def test_outsider_cannot_post(self, auth, make_user, assigned_job):
        r = auth(make_user()).post("/api/messages/", {
            "jobId": assigned_job.id, "content": "spam",
        }, format="json")
        assert r.status_code == 403
        assert r.json()["message"] == "Not allowed"

    def test_empty_message(self, auth, client_user, assigned_job):
        r = auth(client_user).post("/api/messages/", {"jobId": assigned_job.id, "content": ""}, format="json")
        assert r.status_code == 400

    def test_list_in_order(self, auth, client_user, freelancer, assigned_job):
        auth(client_user).post("/api/messages/", {"jobId": assigned_job.id, "content": "one"}, format="json")
        auth(freelancer).post("/api/messages/", {"jobId": assigned_job.id, "content": "two"}, format="json")

        r = auth(freelancer).get(f"/api/messages/{assigned_job.id}/")
        assert r.status_code == 200
        assert [m["content"] for m in r.json()] == ["one", "two"]

    def test_outsider_cannot_read(self, auth, make_user, assigned_job):
        r = auth(make_user()).get(f"/api/messages/{assigned_job.id}/")
        assert r.status_code == 403


@pytest.mark.django_db
class TestNotifications:
    def test_list_own(self, auth, client_user, freelancer):
        Notification.objects.create(recipient=client_user, title="mine", message="a")
        Notification.objects.create(recipient=freelancer, title="theirs", message="b")

        r = auth(client_user).get("/api/notifications/")
        assert r.status_code == 200
        assert [n["title"] for n in r.json()] == ["mine"]
        assert r.json()[0]["read"] is False

    def test_create(self, auth, client_user, freelancer):
        r = auth(client_user).post("/api/notifications/", {
            "userId": freelancer.id,
            "message": "Milestone funded",
            "data": {"jobId": 1},
        }, format="json")

        assert r.status_code == 201
        assert r.json()["type"] == "SYSTEM"
        assert r.json()["userId"] == freelancer.id

    def test_mark_read(self, auth, client_user):
        notif = Notification.objects.create(recipient=client_user, message="hello")
        r = auth(client_user).patch(f"/api/notifications/{notif.id}/read/")
        assert r.status_code == 200
        assert r.json()["read"] is True

    def test_cannot_mark_others(self, auth, client_user, freelancer):
        notif = Notification.objects.create(recipient=freelancer, message="hello")
        r = auth(client_user).patch(f"/api/notifications/{notif.id}/read/")
        assert r.status_code == 403
