import pytest

from apps.reviews.models import Review


@pytest.fixture
def finished_job(make_job, freelancer):
    return make_job(freelancer=freelancer, status="completed")


@pytest.mark.django_db
class TestReviews:
    def test_client_reviews_freelancer(self, auth, client_user, freelancer, finished_job):
        r = auth(client_user).post("/api/reviews/", {
            "jobId": finished_job.id,
            "reviewee": freelancer.id,
            "rating": 5,
            "comment": "Fast and clean",
        }, format="json")

        assert r.status_code == 201
        data = r.json()
        assert data["reviewer"]["id"] == client_user.id
        assert data["reviewee"]["id"] == freelancer.id
        assert data["job"]["id"] == finished_job.id

    def test_duplicate(self, auth, client_user, freelancer, finished_job):
        Review.objects.create(job=finished_job, reviewer=client_user, reviewee=freelancer, rating=4)
        r = auth(client_user).post("/api/reviews/", {
            "jobId": finished_job.id, "reviewee": freelancer.id, "rating": 5,
        }, format="json")
        assert r.status_code == 400
        assert r.json()["message"] == "Already reviewed"

    def test_rating_range(self, auth, client_user, freelancer, finished_job):
        r = auth(client_user).post("/api/reviews/", {
            "jobId": finished_job.id, "reviewee": freelancer.id, "rating": 6,
        }, format="json")
        assert r.status_code == 400

    def test_outsider_cannot_review(self, auth, make_user, freelancer, finished_job):
        r = auth(make_user()).post("/api/reviews/", {
            "jobId": finished_job.id, "reviewee": freelancer.id, "rating": 1,
        }, format="json")
        assert r.status_code == 400

    def test_cannot_review_self(self, auth, client_user, finished_job):
        r = auth(client_user).post("/api/reviews/", {
            "jobId": finished_job.id, "reviewee": client_user.id, "rating": 5,
        }, format="json")
        assert r.status_code == 400

    def test_public_list(self, api_client, client_user, freelancer, finished_job):
        Review.objects.create(job=finished_job, reviewer=client_user, reviewee=freelancer, rating=4)
        r = api_client.get(f"/api/reviews/{freelancer.id}/")
        assert r.status_code == 200
        assert [rv["rating"] for rv in r.json()] == [4]

        r = api_client.get(f"/api/reviews/{client_user.id}/")
        assert r.json() == []
