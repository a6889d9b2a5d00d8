"""Tests for response shape detection."""

from food_analyzer.domain.shapes import (
    FlatNutrientMap,
    IngredientMacrosArray,
    IngredientNutrientsArray,
    LegacyMealArray,
    Unrecognized,
)
from food_analyzer.services.shapes import detect_shape


def test_ingredient_nutrients_wins_over_ingredients() -> None:
    payload = {
        "meal_name": "Salad",
        "ingredients": ["Lettuce"],
        "ingredient_nutrients": [{"name": "Lettuce", "nutrients": {"protein": 1}}],
    }

    shape = detect_shape(payload)

    assert isinstance(shape, IngredientNutrientsArray)
    assert shape.entries == payload["ingredient_nutrients"]


def test_ingredients_with_meal_name() -> None:
    payload = {
        "meal_name": "Pasta Meal",
        "ingredients": ["Pasta (100g) 200kcal"],
        "ingredient_macros": [{"protein": 7, "fat": 1, "carbs": 43}],
    }

    shape = detect_shape(payload)

    assert isinstance(shape, IngredientMacrosArray)
    assert shape.macros == [{"protein": 7, "fat": 1, "carbs": 43}]


def test_ingredients_without_macros_list() -> None:
    shape = detect_shape({"meal_name": "Toast", "ingredients": ["Bread"]})

    assert isinstance(shape, IngredientMacrosArray)
    assert shape.macros == []


def test_legacy_meal_array() -> None:
    shape = detect_shape({"meal": [{"dish": "Soup"}, "garbage"]})

    assert isinstance(shape, LegacyMealArray)
    assert shape.dishes == [{"dish": "Soup"}]


def test_flat_nutrient_map() -> None:
    assert isinstance(detect_shape({"calories": "250 kcal"}), FlatNutrientMap)
    assert isinstance(detect_shape({"protein": 20, "ingredients": []}), FlatNutrientMap)


def test_ingredients_without_meal_name_are_unrecognized() -> None:
    shape = detect_shape({"ingredients": ["Pasta"], "calories": 200})

    assert isinstance(shape, Unrecognized)


def test_non_objects_are_unrecognized() -> None:
    assert isinstance(detect_shape([1, 2, 3]), Unrecognized)
    assert isinstance(detect_shape("text"), Unrecognized)
    assert isinstance(detect_shape(None), Unrecognized)
    assert isinstance(detect_shape({"meal": []}), Unrecognized)
