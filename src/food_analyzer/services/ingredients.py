"""Normalization of single ingredient entries."""

import re

from food_analyzer.domain.meals import IngredientRecord
from food_analyzer.domain.nutrients import Category
from food_analyzer.services.coercion import (
    coerce_calories,
    coerce_value,
    round_half_up,
)
from food_analyzer.services.nutrient_maps import (
    INCLUSION_THRESHOLD,
    NutrientMaps,
    NutrientSource,
    collect,
    nested_sources,
)

DEFAULT_AMOUNT = "30g"
DEFAULT_CALORIES = 75
UNKNOWN_INGREDIENT = "Unknown Ingredient"

_AMOUNT = re.compile(r"\(([^)]+)\)")
_CALORIES = re.compile(r"(\d+(?:\.\d+)?)\s*kcal", re.IGNORECASE)

_MACRO_CONTAINERS = ("nutrients", "nutrition", "nutrition_values")

# Calorie fractions (protein, fat, carbs) by ingredient keyword, first match wins.
_MACRO_SPLITS: tuple[tuple[tuple[str, ...], tuple[float, float, float]], ...] = (
    (
        (
            "chicken",
            "beef",
            "pork",
            "lamb",
            "turkey",
            "duck",
            "steak",
            "bacon",
            "ham",
            "sausage",
            "meat",
            "poultry",
            "fish",
            "salmon",
            "tuna",
            "shrimp",
        ),
        (0.6, 0.4, 0.0),
    ),
    (("cheese", "avocado", "nut", "oil", "butter"), (0.1, 0.8, 0.1)),
    (
        (
            "rice",
            "pasta",
            "noodle",
            "bread",
            "potato",
            "grain",
            "oat",
            "quinoa",
            "tortilla",
            "cereal",
            "starch",
        ),
        (0.1, 0.05, 0.85),
    ),
    (
        (
            "vegetable",
            "broccoli",
            "spinach",
            "lettuce",
            "kale",
            "carrot",
            "cucumber",
            "tomato",
            "salad",
        ),
        (0.3, 0.0, 0.7),
    ),
    (
        ("fruit", "apple", "banana", "berry", "orange", "mango", "grape", "melon"),
        (0.05, 0.05, 0.9),
    ),
)
_DEFAULT_SPLIT = (0.2, 0.3, 0.5)


def parse_ingredient_text(text: str) -> tuple[str, str, int]:
    """Split "Pasta (100g) 200kcal" into name, amount and calories.

    Missing parts fall back to the defaults, so plain "Pasta" is a 30g,
    75 kcal ingredient.
    """
    name = text.strip()
    amount = DEFAULT_AMOUNT
    calories = DEFAULT_CALORIES

    amount_match = _AMOUNT.search(text)
    calories_match = _CALORIES.search(text)
    if amount_match:
        amount = amount_match.group(1).strip() or DEFAULT_AMOUNT
        name = text[: amount_match.start()].strip()
    elif calories_match:
        name = text[: calories_match.start()].strip()
    if calories_match:
        calories = coerce_calories(calories_match.group(1))
    return name or UNKNOWN_INGREDIENT, amount, calories


def heuristic_macros(name: str, calories: float) -> tuple[float, float, float]:
    """Estimate protein, fat and carb grams from the ingredient name."""
    lowered = name.lower()
    protein_share, fat_share, carbs_share = _DEFAULT_SPLIT
    for keywords, split in _MACRO_SPLITS:
        if any(keyword in lowered for keyword in keywords):
            protein_share, fat_share, carbs_share = split
            break
    return (
        round_half_up(calories * protein_share / 4, 1),
        round_half_up(calories * fat_share / 9, 1),
        round_half_up(calories * carbs_share / 4, 1),
    )


def normalize_ingredient(
    raw: object,
    parallel_macro: object | None = None,
    shared: NutrientMaps | None = None,
    threshold: float | None = INCLUSION_THRESHOLD,
) -> IngredientRecord:
    """Build an ingredient record from a string or object entry.

    ``parallel_macro`` is the matching element of an ``ingredient_macros``
    list. ``shared`` holds the meal-level nutrient maps that are copied, as
    is, onto ingredients that carry no nutrients of their own. ``threshold`` is
    the smallest value kept from the entry itself; ``None`` keeps every value.
    """
    macro_object = parallel_macro if isinstance(parallel_macro, dict) else None
    if isinstance(raw, str):
        name, amount, calories = parse_ingredient_text(raw)
        entry: dict[str, object] = {}
    elif isinstance(raw, dict):
        entry = raw
        name = _text(raw.get("name")) or UNKNOWN_INGREDIENT
        amount = _text(raw.get("amount")) or DEFAULT_AMOUNT
        calories = _entry_calories(raw, macro_object)
    else:
        entry = {}
        name, amount, calories = UNKNOWN_INGREDIENT, DEFAULT_AMOUNT, DEFAULT_CALORIES

    macro_source = _find_macro_source(entry, macro_object)
    if macro_source is None:
        protein, fat, carbs = heuristic_macros(name, calories)
    else:
        protein = _grams(macro_source.get("protein"))
        fat = _grams(macro_source.get("fat"))
        carbs = _grams(macro_source.get("carbs", macro_source.get("carbohydrates")))

    nutrients, seen = collect(
        _nutrient_sources(entry, macro_object), threshold=threshold
    )
    shared_nutrients = False
    if not seen and shared is not None and not shared.is_empty():
        nutrients = shared.copy()
        shared_nutrients = True

    return IngredientRecord(
        name=name,
        amount=amount,
        calories=calories,
        protein_g=protein,
        fat_g=fat,
        carbs_g=carbs,
        vitamins=nutrients.vitamins,
        minerals=nutrients.minerals,
        other=nutrients.other,
        shared_nutrients=shared_nutrients,
    )


def _text(value: object) -> str:
    if isinstance(value, (str, int, float)) and not isinstance(value, bool):
        return str(value).strip()
    return ""


def _grams(raw: object) -> float:
    return round_half_up(max(coerce_value(raw), 0.0), 1)


def _entry_calories(entry: dict[str, object], macro_object: dict | None) -> int:
    if "calories" in entry:
        return coerce_calories(entry["calories"])
    for container in (macro_object, *(entry.get(key) for key in _MACRO_CONTAINERS)):
        if isinstance(container, dict) and "calories" in container:
            return coerce_calories(container["calories"])
    return DEFAULT_CALORIES


def _find_macro_source(
    entry: dict[str, object], macro_object: dict | None
) -> dict[str, object] | None:
    """Return the first object carrying structured protein/fat/carb values."""
    candidates = [macro_object]
    candidates.extend(entry.get(key) for key in _MACRO_CONTAINERS)
    candidates.append(entry)
    for candidate in candidates:
        if isinstance(candidate, dict) and any(
            key in candidate for key in ("protein", "fat", "carbs", "carbohydrates")
        ):
            return candidate
    return None


def _nutrient_sources(
    entry: dict[str, object], macro_object: dict | None
) -> list[NutrientSource]:
    sources = nested_sources(entry)
    nutrients = entry.get("nutrients")
    if isinstance(nutrients, dict):
        sources.append(NutrientSource(values=nutrients, fallback=Category.OTHER))
    for key in ("nutrition", "nutrition_values"):
        value = entry.get(key)
        if isinstance(value, dict):
            sources.append(NutrientSource(values=value, fallback=None))
    sources.append(NutrientSource(values=entry, fallback=None))
    if macro_object is not None:
        sources.extend(nested_sources(macro_object))
        sources.append(NutrientSource(values=macro_object, fallback=None))
    return sources
