"""Tests for ingredient normalization."""

from food_analyzer.domain.meals import Quantity
from food_analyzer.services.ingredients import (
    heuristic_macros,
    normalize_ingredient,
    parse_ingredient_text,
)
from food_analyzer.services.nutrient_maps import NutrientMaps


def test_parse_ingredient_text_full() -> None:
    assert parse_ingredient_text("Pasta (100g) 200kcal") == ("Pasta", "100g", 200)


def test_parse_ingredient_text_partial() -> None:
    assert parse_ingredient_text("Chicken 250 kcal") == ("Chicken", "30g", 250)
    assert parse_ingredient_text("Salad") == ("Salad", "30g", 75)
    assert parse_ingredient_text("") == ("Unknown Ingredient", "30g", 75)


def test_heuristic_macros_by_keyword() -> None:
    assert heuristic_macros("Grilled Chicken", 250) == (37.5, 11.1, 0.0)
    assert heuristic_macros("Rice", 100) == (2.5, 0.6, 21.3)
    assert heuristic_macros("Avocado", 90) == (2.3, 8.0, 2.3)
    assert heuristic_macros("Mystery stew", 100) == (5.0, 3.3, 12.5)


def test_string_entry_uses_heuristic() -> None:
    record = normalize_ingredient("Chicken (150g) 250kcal")

    assert record.name == "Chicken"
    assert record.amount == "150g"
    assert record.calories == 250
    assert record.protein_g > record.carbs_g
    assert record.vitamins == {}
    assert record.shared_nutrients is False


def test_parallel_macros_are_coerced() -> None:
    record = normalize_ingredient(
        "Rice (100g) 130kcal", {"protein": "2.7g", "fat": 0.3, "carbs": 28}
    )

    assert (record.protein_g, record.fat_g, record.carbs_g) == (2.7, 0.3, 28.0)


def test_object_entry_with_nutrition_container() -> None:
    record = normalize_ingredient(
        {
            "name": "Egg",
            "nutrition": {
                "calories": 78,
                "protein": 6.3,
                "fat": 5.3,
                "carbohydrates": 0.6,
                "iron": 0.9,
            },
        }
    )

    assert record.amount == "30g"
    assert record.calories == 78
    assert (record.protein_g, record.fat_g, record.carbs_g) == (6.3, 5.3, 0.6)
    assert record.minerals == {"iron": Quantity(magnitude=0.9, unit="mg")}


def test_missing_macro_keys_default_to_zero() -> None:
    record = normalize_ingredient({"name": "Broth", "calories": 15, "protein": 2})

    assert (record.protein_g, record.fat_g, record.carbs_g) == (2.0, 0.0, 0.0)


def test_inclusion_threshold_boundary() -> None:
    record = normalize_ingredient(
        {
            "name": "Spinach",
            "amount": "50g",
            "calories": 12,
            "nutrients": {
                "protein": 1.4,
                "fat": 0.2,
                "carbs": 1.8,
                "iron": 0.4,
                "zinc": 0.39,
                "vitamin_k": "0.4 mcg",
                "vitamin_e": "0.39 mg",
            },
        }
    )

    assert record.minerals == {"iron": Quantity(magnitude=0.4, unit="mg")}
    assert record.vitamins == {"vitamin_k": Quantity(magnitude=0.4, unit="mcg")}


def test_nested_maps_and_unknown_keys() -> None:
    record = normalize_ingredient(
        {
            "name": "Kale",
            "vitamins": {"C": 40, "b6": 0.1},
            "minerals": {"Calcium": {"value": 75, "unit": "g"}, "boron": 1},
            "other": {"Dietary Fiber": 2},
        }
    )

    assert record.vitamins == {"vitamin_c": Quantity(magnitude=40.0, unit="mg")}
    assert record.minerals["calcium"] == Quantity(magnitude=75.0, unit="mg")
    assert record.minerals["boron"] == Quantity(magnitude=1.0, unit="mg")
    assert record.other == {"fiber": Quantity(magnitude=2.0, unit="g")}


def test_shared_maps_are_copied_unfiltered() -> None:
    shared = NutrientMaps(vitamins={"vitamin_c": Quantity(magnitude=0.1, unit="mg")})

    record = normalize_ingredient("Pasta", shared=shared)

    assert record.shared_nutrients is True
    assert record.vitamins == {"vitamin_c": Quantity(magnitude=0.1, unit="mg")}


def test_shared_maps_not_used_when_ingredient_has_nutrients() -> None:
    shared = NutrientMaps(vitamins={"vitamin_c": Quantity(magnitude=9.0, unit="mg")})

    record = normalize_ingredient(
        {"name": "Carrot", "vitamins": {"a": 0.2}}, shared=shared
    )

    assert record.shared_nutrients is False
    assert record.vitamins == {}


def test_unusable_entry_gets_defaults() -> None:
    record = normalize_ingredient(None)

    assert record.name == "Unknown Ingredient"
    assert record.amount == "30g"
    assert record.calories == 75
