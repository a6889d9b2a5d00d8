"""JSON payloads rendered from canonical meal records."""

from typing import Literal

from food_analyzer.domain.meals import (
    CanonicalMealRecord,
    IngredientRecord,
    Quantity,
    format_number,
)

PayloadStyle = Literal["server", "client"]


def to_payload(
    record: CanonicalMealRecord, style: PayloadStyle = "server"
) -> dict[str, object]:
    """Serialize a record in the server-facing or client-facing layout.

    The server layout lists ingredients as ``"Name (amount) Nkcal"`` strings
    with numeric ``ingredient_macros``; the client layout lists ingredient
    objects with ``ingredient_nutrients`` rendered as ``"<n> <unit>"``. Both
    are accepted again by the normalizer.
    """
    payload: dict[str, object] = {"meal_name": record.meal_name}
    if style == "client":
        payload["ingredients"] = [
            _ingredient_object(item) for item in record.ingredients
        ]
        payload["ingredient_nutrients"] = [
            _ingredient_nutrients(item) for item in record.ingredients
        ]
    elif style == "server":
        payload["ingredients"] = [
            _ingredient_line(item) for item in record.ingredients
        ]
        payload["ingredient_macros"] = [
            _ingredient_macros(item) for item in record.ingredients
        ]
    else:
        raise ValueError(f"Unknown payload style: {style}")

    payload.update(
        {
            "calories": record.calories,
            "protein": record.protein_g,
            "fat": record.fat_g,
            "carbs": record.carbs_g,
            "health_score": record.health_score,
            "vitamins": _render(record.vitamins),
            "minerals": _render(record.minerals),
            "other": _render(record.other),
        }
    )
    return payload


def _render(values: dict[str, Quantity]) -> dict[str, str]:
    return {key: str(quantity) for key, quantity in values.items()}


def _ingredient_line(item: IngredientRecord) -> str:
    return f"{item.name} ({item.amount}) {item.calories}kcal"


def _ingredient_macros(item: IngredientRecord) -> dict[str, float]:
    macros = {"protein": item.protein_g, "fat": item.fat_g, "carbs": item.carbs_g}
    if not item.shared_nutrients:
        for values in (item.vitamins, item.minerals, item.other):
            macros.update({key: q.magnitude for key, q in values.items()})
    return macros


def _ingredient_object(item: IngredientRecord) -> dict[str, object]:
    return {
        "name": item.name,
        "amount": item.amount,
        "calories": item.calories,
        "protein": item.protein_g,
        "fat": item.fat_g,
        "carbs": item.carbs_g,
    }


def _ingredient_nutrients(item: IngredientRecord) -> dict[str, object]:
    entry: dict[str, object] = {
        "name": item.name,
        "amount": item.amount,
        "calories": item.calories,
        "nutrients": {
            "protein": f"{format_number(item.protein_g)} g",
            "fat": f"{format_number(item.fat_g)} g",
            "carbs": f"{format_number(item.carbs_g)} g",
        },
    }
    if not item.shared_nutrients:
        entry["vitamins"] = _render(item.vitamins)
        entry["minerals"] = _render(item.minerals)
        entry["other"] = _render(item.other)
    return entry
