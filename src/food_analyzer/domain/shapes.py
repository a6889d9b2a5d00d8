"""Response shapes returned by the upstream model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class IngredientNutrientsArray:
    """Per-ingredient objects with a nested ``nutrients`` map."""

    payload: dict[str, object]
    entries: list[object]


@dataclass(frozen=True)
class IngredientMacrosArray:
    """Named meal with ingredient list and optional parallel macro list."""

    payload: dict[str, object]
    entries: list[object]
    macros: list[object]


@dataclass(frozen=True)
class LegacyMealArray:
    """Oldest format: a ``meal`` list of dishes with string ingredients."""

    payload: dict[str, object]
    dishes: list[dict[str, object]]


@dataclass(frozen=True)
class FlatNutrientMap:
    """Top-level macro scalars without an ingredient list."""

    payload: dict[str, object]


@dataclass(frozen=True)
class Unrecognized:
    """Nothing usable; the raw text goes to the text fallback."""


Shape = (
    IngredientNutrientsArray
    | IngredientMacrosArray
    | LegacyMealArray
    | FlatNutrientMap
    | Unrecognized
)
