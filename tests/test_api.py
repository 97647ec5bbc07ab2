"""Tests for the planning HTTP endpoints."""

from uuid import uuid4

from fastapi.testclient import TestClient

from nutriplan.api.app import create_app
from nutriplan.domain.plans import MealPlanType, StoredProfile

PROFILE = {
    "gender": "female",
    "age": 30,
    "weight_kg": 70,
    "height_cm": 165,
    "activity_level": "moderate",
    "goal": "weight_maintenance",
}


def test_health_endpoint(container) -> None:
    client = TestClient(create_app(container))

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_targets_endpoint(container) -> None:
    client = TestClient(create_app(container))

    response = client.post("/targets", json=PROFILE)

    assert response.status_code == 200
    assert response.json() == {
        "target_calories": 2201,
        "target_protein_g": 138,
        "target_carbs_g": 83,
        "target_fats_g": 147,
    }


def test_targets_endpoint_rejects_unsafe_deficit(container) -> None:
    client = TestClient(create_app(container))
    payload = {
        **PROFILE,
        "weight_kg": 50,
        "height_cm": 160,
        "activity_level": "very_low",
        "goal": "weight_loss",
        "weight_loss_rate_kg_week": 1.0,
    }

    response = client.post("/targets", json=payload)

    assert response.status_code == 422
    error = response.json()["error"]
    assert error["code"] == "BELOW_MINIMUM_CALORIES"
    assert error["minimum_calories"] == 1400
    assert error["calculated_calories"] == 327


def test_targets_endpoint_requires_rate_for_weight_loss(container) -> None:
    client = TestClient(create_app(container))

    response = client.post("/targets", json={**PROFILE, "goal": "weight_loss"})

    assert response.status_code == 422
    assert response.json()["error"]["code"] == "MISSING_WEIGHT_LOSS_RATE"


def test_weight_loss_options_endpoint(container) -> None:
    client = TestClient(create_app(container))

    response = client.post("/targets/weight-loss-options", json=PROFILE)

    assert response.status_code == 200
    options = response.json()
    assert [option["rate_kg_week"] for option in options] == [0.25, 0.5, 0.75, 1.0]
    assert [option["is_disabled"] for option in options] == [
        False,
        False,
        True,
        True,
    ]
    assert options[0]["reason_disabled"] is None


def test_generate_plan_endpoint(container, profile_repository, targets) -> None:
    client = TestClient(create_app(container))
    user_id = uuid4()
    profile_repository.profiles[user_id] = StoredProfile(
        user_id=user_id, targets=targets, meal_plan_type=MealPlanType.THREE_MAIN
    )

    response = client.post(f"/users/{user_id}/plan", params={"start": "2026-03-02"})
    repeated = client.post(f"/users/{user_id}/plan", params={"start": "2026-03-02"})

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "success"
    assert data["generated_days"] == 7
    assert data["message"] == "Meal plan generated for 7 days"
    assert data["dates"][0] == "2026-03-02"
    assert data["dates"][-1] == "2026-03-08"
    assert repeated.status_code == 409
    assert repeated.json()["error"]["code"] == "MEAL_PLAN_EXISTS"


def test_generate_plan_endpoint_unknown_user(container) -> None:
    client = TestClient(create_app(container))

    response = client.post(f"/users/{uuid4()}/plan")

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "PROFILE_NOT_FOUND"
