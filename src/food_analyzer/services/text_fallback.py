"""Extraction of meal data from free-text model answers."""

import logging
import re

from food_analyzer.domain.meals import CanonicalMealRecord, IngredientRecord, Quantity
from food_analyzer.domain.nutrients import DEFAULT_UNIT, category_of, unit_for
from food_analyzer.services.aggregation import aggregate
from food_analyzer.services.coercion import clamp_magnitude, coerce_value
from food_analyzer.services.ingredients import (
    normalize_ingredient,
    parse_ingredient_text,
)
from food_analyzer.services.nutrient_maps import NutrientMaps

MIXED_MEAL = "Mixed Meal"

_logger = logging.getLogger(__name__)

_FOOD_ITEM = re.compile(r"^food item\s*\d+\s*:\s*(.*)$", re.IGNORECASE)
_VITAMIN_MENTION = re.compile(
    r"vitamin\s+([a-z]\d{0,2})\s*:\s*(\d+\.?\d*)", re.IGNORECASE
)
_MINERAL_MENTION = re.compile(
    r"\b(iron|calcium|zinc|magnesium|potassium|sodium)\s*:\s*(\d+\.?\d*)",
    re.IGNORECASE,
)
_TOTAL_MARKERS = {
    "calories:": "calories",
    "protein:": "protein",
    "fat:": "fat",
    "carbs:": "carbs",
    "carbohydrates:": "carbs",
    "vitamin c:": "vitamin_c",
}

# Typical values per 100g for foods the model often names without numbers.
KNOWN_FOODS: tuple[tuple[tuple[str, ...], dict[str, object]], ...] = (
    (
        ("pasta", "noodle"),
        {
            "amount": "100g",
            "calories": 200,
            "protein": 7.5,
            "fat": 1.1,
            "carbs": 43.2,
            "vitamins": {"b1": 0.2, "b2": 0.1, "b3": 1.7, "b6": 0.1, "folate": 18},
            "minerals": {
                "iron": 1.8,
                "magnesium": 53,
                "phosphorus": 189,
                "zinc": 1.3,
                "selenium": 63.2,
                "potassium": 223,
            },
        },
    ),
    (
        ("rice",),
        {
            "amount": "100g",
            "calories": 130,
            "protein": 2.7,
            "fat": 0.3,
            "carbs": 28.2,
            "vitamins": {"b1": 0.1, "b3": 1.6, "b6": 0.15, "folate": 8},
            "minerals": {
                "iron": 0.4,
                "magnesium": 25,
                "phosphorus": 115,
                "zinc": 1.2,
                "selenium": 15.1,
                "potassium": 115,
            },
        },
    ),
    (
        ("watermelon",),
        {
            "amount": "100g",
            "calories": 30,
            "protein": 0.6,
            "fat": 0.2,
            "carbs": 7.6,
            "vitamins": {"a": 569, "c": 8.1, "b6": 0.045, "b1": 0.033},
            "minerals": {
                "potassium": 112,
                "magnesium": 10,
                "phosphorus": 11,
                "zinc": 0.1,
            },
        },
    ),
    (
        ("pineapple",),
        {
            "amount": "100g",
            "calories": 50,
            "protein": 0.5,
            "fat": 0.1,
            "carbs": 13.1,
            "vitamins": {"c": 47.8, "b1": 0.079, "b6": 0.112, "folate": 18},
            "minerals": {
                "manganese": 0.927,
                "copper": 0.110,
                "potassium": 109,
                "magnesium": 12,
            },
        },
    ),
)

_GENERIC_FOOD: dict[str, object] = {
    "amount": "30g",
    "calories": 75,
    "protein": 3.0,
    "fat": 2.0,
    "carbs": 10.0,
}

_PLACEHOLDER: dict[str, object] = {
    "name": "Mixed ingredients",
    "amount": "100g",
    "calories": 200,
    "protein": 10.0,
    "fat": 7.0,
    "carbs": 30.0,
}
_PLACEHOLDER_NUTRIENTS: dict[str, object] = {
    "vitamins": {"c": 2.0, "a": 100, "b1": 0.1, "b2": 0.2},
    "minerals": {"calcium": 30, "iron": 1.2, "potassium": 150, "magnesium": 20},
}

_DEFAULT_TOTALS: dict[str, object] = {
    "calories": 500,
    "protein": 20,
    "fat": 15,
    "carbs": 60,
    "health_score": "6/10",
}


def extract_from_text(text: str) -> CanonicalMealRecord:
    """Read "Food item", "Ingredients:" and total lines into a meal record.

    Totals are summed over every matching line so answers listing several
    food items add up. Text without any marker yields :func:`default_record`.
    """
    mentions = _mentioned_nutrients(text)
    meal_name: str | None = None
    ingredients: list[IngredientRecord] = []
    totals = dict.fromkeys(_TOTAL_MARKERS.values(), 0.0)
    matched = False

    for raw_line in text.splitlines():
        line = raw_line.strip()
        lowered = line.lower()
        food_item = _FOOD_ITEM.match(line)
        if food_item:
            matched = True
            if meal_name is None and food_item.group(1).strip():
                meal_name = food_item.group(1).strip()
            continue
        if lowered.startswith("ingredients:"):
            matched = True
            for part in line[len("ingredients:") :].split(","):
                if part.strip():
                    ingredients.append(_text_ingredient(part.strip(), mentions))
            continue
        for marker, key in _TOTAL_MARKERS.items():
            if lowered.startswith(marker):
                matched = True
                totals[key] += coerce_value(line[len(marker) :])
                break

    if not matched:
        _logger.info("No meal markers found in model text, using default record")
        return default_record(mentions)

    top_level = mentions.copy()
    if totals["vitamin_c"] > 0:
        top_level.vitamins["vitamin_c"] = Quantity(
            magnitude=clamp_magnitude(totals["vitamin_c"]), unit="mg"
        )
    if not ingredients:
        ingredients.append(_placeholder_ingredient(mentions))
    return aggregate(
        meal_name=meal_name or MIXED_MEAL,
        ingredients=ingredients,
        totals=totals,
        top_level=top_level,
    )


def default_record(mentions: NutrientMaps | None = None) -> CanonicalMealRecord:
    """Return the fixed record used when nothing could be extracted."""
    top_level = mentions or NutrientMaps()
    return aggregate(
        meal_name=MIXED_MEAL,
        ingredients=[_placeholder_ingredient(top_level)],
        totals=_DEFAULT_TOTALS,
        top_level=top_level,
    )


def _text_ingredient(part: str, mentions: NutrientMaps) -> IngredientRecord:
    name, amount, calories = parse_ingredient_text(part)
    lowered = name.lower()
    entry = dict(_GENERIC_FOOD)
    for keywords, food in KNOWN_FOODS:
        if any(keyword in lowered for keyword in keywords):
            entry = dict(food)
            break
    entry["name"] = name
    if "(" in part and ")" in part:
        entry["amount"] = amount
    if "kcal" in part.lower():
        entry["calories"] = calories
    return normalize_ingredient(entry, shared=mentions, threshold=None)


def _placeholder_ingredient(mentions: NutrientMaps) -> IngredientRecord:
    if mentions.is_empty():
        return normalize_ingredient(
            {**_PLACEHOLDER, **_PLACEHOLDER_NUTRIENTS}, threshold=None
        )
    return normalize_ingredient(_PLACEHOLDER, shared=mentions)


def _mentioned_nutrients(text: str) -> NutrientMaps:
    """Collect "Vitamin A: 12" and "Iron: 3" style mentions anywhere in the text."""
    maps = NutrientMaps()
    for letter, value in _VITAMIN_MENTION.findall(text):
        key = f"vitamin_{letter.lower()}"
        maps.vitamins[key] = Quantity(magnitude=coerce_value(value), unit=_unit(key))
    for mineral, value in _MINERAL_MENTION.findall(text):
        key = mineral.lower()
        maps.minerals[key] = Quantity(magnitude=coerce_value(value), unit=_unit(key))
    return maps


def _unit(key: str) -> str:
    category = category_of(key)
    return unit_for(category, key) if category else DEFAULT_UNIT
