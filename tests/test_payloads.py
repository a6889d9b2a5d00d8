"""Tests for payload serialization."""

import json

import pytest

from food_analyzer.services.normalization import normalize_model_response
from food_analyzer.services.payloads import to_payload
from tests.conftest import LEGACY_RESPONSE, PASTA_RESPONSE


def test_server_payload_layout() -> None:
    record = normalize_model_response(PASTA_RESPONSE)

    payload = to_payload(record, "server")

    assert payload["meal_name"] == "Pasta Meal"
    assert payload["ingredients"] == ["Pasta (100g) 200kcal"]
    assert payload["ingredient_macros"] == [{"protein": 5.0, "fat": 1.1, "carbs": 42.5}]
    assert payload["calories"] == 200
    assert payload["health_score"] == "6/10"
    assert payload["vitamins"]["vitamin_c"] == "12 mg"
    assert payload["vitamins"]["vitamin_a"] == "160 mcg"
    assert payload["other"]["fiber"] == "6.45 g"


def test_client_payload_layout() -> None:
    record = normalize_model_response(PASTA_RESPONSE)

    payload = to_payload(record, "client")

    assert payload["ingredients"] == [
        {
            "name": "Pasta",
            "amount": "100g",
            "calories": 200,
            "protein": 5.0,
            "fat": 1.1,
            "carbs": 42.5,
        }
    ]
    nutrients = payload["ingredient_nutrients"][0]
    assert nutrients["nutrients"] == {
        "protein": "5 g",
        "fat": "1.1 g",
        "carbs": "42.5 g",
    }
    assert nutrients["vitamins"] == {}


@pytest.mark.parametrize("style", ["server", "client"])
def test_payloads_normalize_back_to_same_totals(style: str) -> None:
    record = normalize_model_response(LEGACY_RESPONSE)

    again = normalize_model_response(json.dumps(to_payload(record, style)))

    assert again.meal_name == record.meal_name
    assert again.calories == record.calories
    assert (again.protein_g, again.fat_g, again.carbs_g) == (
        record.protein_g,
        record.fat_g,
        record.carbs_g,
    )
    assert [item.name for item in again.ingredients] == ["Chicken", "Rice"]
    assert again.ingredients[0].protein_g == 37.5
    assert again.vitamins == record.vitamins


def test_unknown_style_is_rejected() -> None:
    record = normalize_model_response(PASTA_RESPONSE)

    with pytest.raises(ValueError):
        to_payload(record, "xml")  # type: ignore[arg-type]
