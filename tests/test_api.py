"""Tests for the HTTP API."""

from fastapi.testclient import TestClient

from food_analyzer.api.app import create_app
from food_analyzer.services.chat import UpstreamError
from tests.conftest import FakeChatClient

IMAGE = "data:image/jpeg;base64,ZmFrZQ=="


def test_root_and_health(container) -> None:
    client = TestClient(create_app(container))

    assert client.get("/").json()["status"] == "operational"
    assert client.get("/health").json() == {"status": "ok"}


def test_analyze_food_returns_normalized_payload(
    container, vision_client: FakeChatClient
) -> None:
    client = TestClient(create_app(container))

    response = client.post("/api/analyze-food", json={"image": IMAGE})

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["data"]["meal_name"] == "Pasta Meal"
    assert body["data"]["ingredients"] == ["Pasta (100g) 200kcal"]
    assert len(body["data"]["vitamins"]) == 13
    assert vision_client.calls


def test_analyze_food_client_style(container) -> None:
    container.settings.output_format = "client"
    client = TestClient(create_app(container))

    response = client.post("/api/analyze-food", json={"image": IMAGE})

    data = response.json()["data"]
    assert data["ingredients"][0]["name"] == "Pasta"
    assert "ingredient_nutrients" in data


def test_analyze_food_requires_image(
    container, vision_client: FakeChatClient
) -> None:
    client = TestClient(create_app(container))

    response = client.post("/api/analyze-food", json={})

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "Image data is required"}
    assert vision_client.calls == []


def test_upstream_errors_keep_status(container, vision_client: FakeChatClient) -> None:
    vision_client.error = UpstreamError("Model API request timed out", 504)
    client = TestClient(create_app(container))

    response = client.post("/api/analyze-food", json={"image": IMAGE})

    assert response.status_code == 504
    assert response.json() == {
        "success": False,
        "error": "Model API request timed out",
    }


def test_local_environment_adds_error_details(
    container, vision_client: FakeChatClient
) -> None:
    container.settings.environment = "local"
    vision_client.error = UpstreamError("Model API error: 500", 500)
    client = TestClient(create_app(container))

    response = client.post("/api/analyze-food", json={"image": IMAGE})

    assert response.status_code == 500
    assert "details" in response.json()


def test_fix_food_endpoint(container, revision_client: FakeChatClient) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/api/fix-food",
        json={
            "food_data": {"name": "Omelette", "calories": 320},
            "instructions": "Make it lighter",
        },
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["meal_name"] == "Lighter Omelette"
    assert data["calories"] == 210
    assert "Make it lighter" in revision_client.calls[0]["messages"][1]["content"]


def test_nutrition_endpoint(container, revision_client: FakeChatClient) -> None:
    revision_client.response = '{"calories": 95, "protein": 0.5, "carbs": 25}'
    client = TestClient(create_app(container))

    response = client.post(
        "/api/nutrition", json={"food_name": "Apple", "query": "one medium apple"}
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["meal_name"] == "Apple"
    assert data["calories"] == 95
    assert data["carbs"] == 25.0


def test_invalid_body_is_rejected(container) -> None:
    client = TestClient(create_app(container))

    response = client.post("/api/fix-food", json={"food_data": "not an object"})

    assert response.status_code == 422


def test_overflowing_totals_are_capped(
    container, vision_client: FakeChatClient
) -> None:
    vision_client.response = (
        '{"meal_name": "x", "ingredients": ['
        '{"name": "a", "protein": 1e308}, {"name": "b", "protein": 1e308}]}'
    )
    client = TestClient(create_app(container))

    response = client.post("/api/analyze-food", json={"image": IMAGE})

    assert response.status_code == 200
    assert response.json()["data"]["protein"] == 1e15


def test_serialization_failure_uses_error_envelope(container) -> None:
    container.settings.output_format = "xml"
    client = TestClient(create_app(container))

    response = client.post("/api/analyze-food", json={"image": IMAGE})

    assert response.status_code == 500
    assert response.json() == {
        "success": False,
        "error": "Server error processing request",
    }
