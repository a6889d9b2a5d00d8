"""Classification of parsed model responses into known shapes."""

from food_analyzer.domain.shapes import (
    FlatNutrientMap,
    IngredientMacrosArray,
    IngredientNutrientsArray,
    LegacyMealArray,
    Shape,
    Unrecognized,
)

_MACRO_KEYS = ("calories", "protein", "fat", "carbs")


def detect_shape(parsed: object) -> Shape:
    """Return the first matching shape for a parsed JSON value.

    Order matters: a payload may loosely satisfy several shapes, and the
    richer per-ingredient layouts win over the older ones.
    """
    if not isinstance(parsed, dict):
        return Unrecognized()

    ingredient_nutrients = parsed.get("ingredient_nutrients")
    if _is_non_empty_list(ingredient_nutrients):
        return IngredientNutrientsArray(payload=parsed, entries=ingredient_nutrients)

    ingredients = parsed.get("ingredients")
    if _is_non_empty_list(ingredients) and parsed.get("meal_name") is not None:
        macros = parsed.get("ingredient_macros")
        return IngredientMacrosArray(
            payload=parsed,
            entries=ingredients,
            macros=macros if isinstance(macros, list) else [],
        )

    meal = parsed.get("meal")
    if _is_non_empty_list(meal):
        dishes = [dish for dish in meal if isinstance(dish, dict)]
        if dishes:
            return LegacyMealArray(payload=parsed, dishes=dishes)

    if not _is_non_empty_list(ingredients) and any(
        _is_scalar(parsed.get(key)) for key in _MACRO_KEYS
    ):
        return FlatNutrientMap(payload=parsed)

    return Unrecognized()


def _is_non_empty_list(value: object) -> bool:
    return isinstance(value, list) and len(value) > 0


def _is_scalar(value: object) -> bool:
    return isinstance(value, (int, float, str)) and not isinstance(value, bool)
