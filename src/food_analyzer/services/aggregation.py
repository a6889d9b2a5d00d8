"""Meal-level aggregation of normalized ingredients."""

import re
from collections.abc import Mapping

from food_analyzer.domain.meals import CanonicalMealRecord, IngredientRecord, Quantity
from food_analyzer.domain.nutrients import Category, EstimateBasis, all_specs
from food_analyzer.domain.shapes import (
    FlatNutrientMap,
    IngredientMacrosArray,
    IngredientNutrientsArray,
    LegacyMealArray,
    Shape,
)
from food_analyzer.services.coercion import (
    clamp_magnitude,
    coerce_value,
    round_half_up,
)
from food_analyzer.services.ingredients import normalize_ingredient
from food_analyzer.services.nutrient_maps import NutrientMaps, top_level_maps

ANALYZED_MEAL = "Analyzed Meal"
DEFAULT_HEALTH_SCORE = 5

_SCORE_FRACTION = re.compile(r"(\d+\.?\d*)\s*/\s*(\d+\.?\d*)")
_DIGIT = re.compile(r"\d")
_MACROS = ("calories", "protein", "fat", "carbs")


def record_from_shape(shape: Shape) -> CanonicalMealRecord:
    """Build the canonical record for a recognized response shape."""
    if isinstance(shape, IngredientNutrientsArray):
        top_level = top_level_maps(shape.payload)
        ingredients = [
            normalize_ingredient(entry, shared=top_level) for entry in shape.entries
        ]
        return aggregate(
            meal_name=_meal_name(shape.payload),
            ingredients=ingredients,
            totals=shape.payload,
            top_level=top_level,
        )

    if isinstance(shape, IngredientMacrosArray):
        top_level = top_level_maps(shape.payload)
        ingredients = [
            normalize_ingredient(
                entry,
                shape.macros[index] if index < len(shape.macros) else None,
                shared=top_level,
            )
            for index, entry in enumerate(shape.entries)
        ]
        return aggregate(
            meal_name=_meal_name(shape.payload),
            ingredients=ingredients,
            totals=shape.payload,
            top_level=top_level,
        )

    if isinstance(shape, LegacyMealArray):
        return _legacy_record(shape)

    if isinstance(shape, FlatNutrientMap):
        top_level = top_level_maps(shape.payload)
        entry: dict[str, object] = {
            "name": "Mixed ingredients",
            "amount": "100g",
            "calories": shape.payload.get("calories", 0),
        }
        for key in ("protein", "fat", "carbs", "carbohydrates"):
            if key in shape.payload:
                entry[key] = shape.payload[key]
        return aggregate(
            meal_name=_meal_name(shape.payload),
            ingredients=[normalize_ingredient(entry, shared=top_level)],
            totals=shape.payload,
            top_level=top_level,
        )

    raise TypeError(f"No record can be built from {type(shape).__name__}")


def aggregate(
    *,
    meal_name: str,
    ingredients: list[IngredientRecord],
    totals: Mapping[str, object],
    top_level: NutrientMaps,
) -> CanonicalMealRecord:
    """Combine ingredients and source totals into a complete meal record.

    Source totals win when present and non-zero; otherwise the ingredient sums
    are used. Every schema nutrient missing from the source is estimated.
    """
    calories = int(
        _total(totals.get("calories"), sum(item.calories for item in ingredients), 0)
    )
    protein = _total(totals.get("protein"), sum(i.protein_g for i in ingredients), 1)
    fat = _total(totals.get("fat"), sum(item.fat_g for item in ingredients), 1)
    carbs_raw = totals.get("carbs", totals.get("carbohydrates"))
    carbs = _total(carbs_raw, sum(item.carbs_g for item in ingredients), 1)

    maps = top_level.copy()
    _merge_ingredient_nutrients(maps, ingredients)
    basis = {
        EstimateBasis.CALORIES: float(calories),
        EstimateBasis.FAT: fat,
        EstimateBasis.CARBS: carbs,
    }
    vitamins = _complete(maps.vitamins, Category.VITAMINS, basis)
    minerals = _complete(maps.minerals, Category.MINERALS, basis)
    other = _complete(maps.other, Category.OTHER, basis)

    health_score = normalize_health_score(totals.get("health_score"))
    if health_score is None:
        score = compute_health_score(
            protein=protein,
            fat=fat,
            calories=calories,
            vitamin_c=vitamins["vitamin_c"].magnitude,
        )
        health_score = f"{score}/10"

    return CanonicalMealRecord(
        meal_name=meal_name.strip() or ANALYZED_MEAL,
        ingredients=list(ingredients),
        calories=calories,
        protein_g=protein,
        fat_g=fat,
        carbs_g=carbs,
        health_score=health_score,
        vitamins=vitamins,
        minerals=minerals,
        other=other,
    )


def compute_health_score(
    *, protein: float, fat: float, calories: float, vitamin_c: float
) -> int:
    """Score a meal from 1 to 10 from its protein, vitamin C, fat and energy."""
    denominator = fat * 0.3 + calories / 100
    if denominator <= 0:
        return DEFAULT_HEALTH_SCORE
    score = round_half_up((protein * 0.5 + vitamin_c * 0.3) / denominator)
    return int(min(10, max(1, score)))


def normalize_health_score(raw: object) -> str | None:
    """Render a source health score as "N/10" clamped to [1, 10].

    Returns None when the source carries no number at all.
    """
    if isinstance(raw, str):
        if _DIGIT.search(raw) is None:
            return None
        value = coerce_value(raw)
        match = _SCORE_FRACTION.search(raw)
        if match and float(match.group(2)) > 0:
            value = float(match.group(1)) / float(match.group(2)) * 10
    elif isinstance(raw, (int, float)) and not isinstance(raw, bool):
        value = coerce_value(raw)
    else:
        return None
    score = round_half_up(clamp_magnitude(value))
    return f"{int(min(10, max(1, score)))}/10"


def _legacy_record(shape: LegacyMealArray) -> CanonicalMealRecord:
    top_level = NutrientMaps()
    for source in (*shape.dishes, shape.payload):
        top_level.add_missing(top_level_maps(source))

    ingredients = []
    for dish in shape.dishes:
        entries = dish.get("ingredients")
        if isinstance(entries, list):
            ingredients.extend(
                normalize_ingredient(entry, shared=top_level) for entry in entries
            )

    totals: dict[str, object] = {
        key: sum(coerce_value(dish.get(key)) for dish in shape.dishes)
        for key in _MACROS
    }
    first = shape.dishes[0]
    totals["health_score"] = first.get(
        "health_score", shape.payload.get("health_score")
    )
    return aggregate(
        meal_name=_meal_name({"dish": first.get("dish")}),
        ingredients=ingredients,
        totals=totals,
        top_level=top_level,
    )


def _meal_name(payload: Mapping[str, object]) -> str:
    for key in ("meal_name", "name", "dish"):
        value = payload.get(key)
        if isinstance(value, str) and value.strip():
            return value
    return ANALYZED_MEAL


def _total(raw: object, fallback: float, digits: int) -> float:
    value = coerce_value(raw)
    if value <= 0:
        value = fallback
    return round_half_up(clamp_magnitude(value), digits)


def _merge_ingredient_nutrients(
    maps: NutrientMaps, ingredients: list[IngredientRecord]
) -> None:
    """Add summed per-ingredient values for keys the source did not supply."""
    for category in Category:
        sums: dict[str, Quantity] = {}
        for ingredient in ingredients:
            if ingredient.shared_nutrients:
                continue
            for key, quantity in _ingredient_map(ingredient, category).items():
                current = sums.get(key)
                magnitude = quantity.magnitude + (current.magnitude if current else 0.0)
                sums[key] = Quantity(magnitude=magnitude, unit=quantity.unit)
        target = maps.for_category(category)
        for key, quantity in sums.items():
            if key not in target:
                target[key] = Quantity(
                    magnitude=round_half_up(clamp_magnitude(quantity.magnitude), 3),
                    unit=quantity.unit,
                )


def _ingredient_map(
    ingredient: IngredientRecord, category: Category
) -> dict[str, Quantity]:
    if category is Category.VITAMINS:
        return ingredient.vitamins
    if category is Category.MINERALS:
        return ingredient.minerals
    return ingredient.other


def _complete(
    values: dict[str, Quantity],
    category: Category,
    basis: dict[EstimateBasis, float],
) -> dict[str, Quantity]:
    """Return the map in schema order with every missing key estimated."""
    completed: dict[str, Quantity] = {}
    for spec in all_specs(category):
        if spec.key in values:
            completed[spec.key] = values[spec.key]
        else:
            estimate = round_half_up(spec.multiplier * basis[spec.basis], 3)
            completed[spec.key] = Quantity(magnitude=estimate, unit=spec.unit)
    for key, quantity in values.items():
        completed.setdefault(key, quantity)
    return completed
