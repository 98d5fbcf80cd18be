import pytest
from fastapi.testclient import TestClient

from app.api.deps import get_completion_client, get_store
from app.career.errors import UpstreamBillingExhausted, UpstreamFailure, UpstreamRateLimited
from app.main import app

from helpers import FakeAIClient, answer_all, seeded_store


@pytest.fixture
def store():
    store = seeded_store()
    yield store
    store.close()


@pytest.fixture
def ai_client():
    return FakeAIClient()


@pytest.fixture
def client(store, ai_client):
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_completion_client] = lambda: ai_client
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth(store):
    token = store.create_session_token("student-1")
    return {"Authorization": f"Bearer {token}"}


def test_analyze_requires_authorization(client) -> None:
    response = client.post("/v1/career/analyze")

    assert response.status_code == 401
    assert response.json() == {"error": "No authorization header", "code": "unauthorized"}


def test_analyze_rejects_unknown_token(client) -> None:
    response = client.post("/v1/career/analyze", headers={"Authorization": "Bearer nope"})

    assert response.status_code == 401
    assert response.json()["code"] == "unauthorized"


def test_analyze_without_answers_is_bad_input(client, auth) -> None:
    response = client.post("/v1/career/analyze", headers=auth)

    assert response.status_code == 400
    assert response.json()["code"] == "bad_input"


def test_analyze_success_returns_recommendation(client, auth, store) -> None:
    answer_all(store, "student-1", {"technical": 5})

    response = client.post("/v1/career/analyze", headers=auth)

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["recommendation"]["dominant_domain"] == "Technology"
    assert body["recommendation"]["primary_career"] == "Full-Stack Software Engineer"
    assert body["ai_analysis"].startswith("### Primary Career Recommendation")

    latest = client.get("/v1/career/recommendation", headers=auth)
    assert latest.status_code == 200
    assert latest.json()["primary_career"] == "Full-Stack Software Engineer"


@pytest.mark.parametrize(
    ("error", "status", "code"),
    [
        (UpstreamRateLimited(), 429, "rate_limited"),
        (UpstreamBillingExhausted(), 402, "payment_required"),
        (UpstreamFailure(), 500, "internal"),
    ],
)
def test_upstream_errors_map_to_status(client, auth, store, ai_client, error, status, code) -> None:
    answer_all(store, "student-1", {"business": 5})
    ai_client.error = error

    response = client.post("/v1/career/analyze", headers=auth)

    assert response.status_code == status
    assert response.json() == {"error": error.message, "code": code}
    assert store.get_recommendation("student-1") is None


def test_recommendation_missing_is_404(client, auth) -> None:
    response = client.get("/v1/career/recommendation", headers=auth)

    assert response.status_code == 404


def test_questions_are_listed_in_order(client) -> None:
    response = client.get("/v1/assessment/questions")

    assert response.status_code == 200
    orders = [item["order_number"] for item in response.json()]
    assert orders == sorted(orders)
    assert len(orders) == 20


def test_answers_are_validated_and_saved(client, auth, store) -> None:
    bad_value = client.put(
        "/v1/assessment/answers",
        headers=auth,
        json={"answers": [{"question_id": "q01", "value": 9}]},
    )
    assert bad_value.status_code == 422

    unknown = client.put(
        "/v1/assessment/answers",
        headers=auth,
        json={"answers": [{"question_id": "q99", "value": 3}]},
    )
    assert unknown.status_code == 400

    saved = client.put(
        "/v1/assessment/answers",
        headers=auth,
        json={"answers": [{"question_id": "q01", "value": 4}, {"question_id": "q02", "value": 2}]},
    )
    assert saved.status_code == 200
    assert saved.json() == {"saved": 2, "total_questions": 20}
    assert len(store.get_answers_with_question_domain("student-1")) == 2


def test_profile_round_trip(client, auth) -> None:
    assert client.get("/v1/profile", headers=auth).status_code == 404

    put = client.put(
        "/v1/profile",
        headers=auth,
        json={"full_name": "Asha", "main_skill": "drawing", "location_state": "Maharashtra"},
    )
    assert put.status_code == 200

    got = client.get("/v1/profile", headers=auth)
    assert got.status_code == 200
    assert got.json()["full_name"] == "Asha"
    assert got.json()["location_state"] == "Maharashtra"


def test_colleges_follow_recommended_domain(client, auth, store) -> None:
    answer_all(store, "student-1", {"musical": 5, "music": 5})
    client.post("/v1/career/analyze", headers=auth)

    response = client.get("/v1/colleges", headers=auth)

    assert response.status_code == 200
    body = response.json()
    assert body["domain"] == "Music"
    assert body["colleges"]
    assert all(college["domain"] == "Music" for college in body["colleges"])


def test_analytics_summary_requires_api_key(client) -> None:
    response = client.get("/v1/analytics/summary")

    assert response.status_code == 401
