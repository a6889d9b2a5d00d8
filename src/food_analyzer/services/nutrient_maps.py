"""Collection of vitamin, mineral and other nutrient maps from raw payloads."""

from collections.abc import Iterable
from dataclasses import dataclass, field

from food_analyzer.domain.meals import Quantity
from food_analyzer.domain.nutrients import (
    Category,
    canonical_key,
    category_of,
    unit_for,
)
from food_analyzer.services.coercion import coerce_value

INCLUSION_THRESHOLD = 0.4

MACRO_KEYS = frozenset(
    {"name", "amount", "calories", "protein", "fat", "carbs", "carbohydrates"}
)

_NESTED_MAPS: tuple[tuple[str, Category], ...] = (
    ("vitamins", Category.VITAMINS),
    ("minerals", Category.MINERALS),
    ("other", Category.OTHER),
    ("other_nutrients", Category.OTHER),
)


@dataclass
class NutrientMaps:
    """Mutable accumulator for the three nutrient categories."""

    vitamins: dict[str, Quantity] = field(default_factory=dict)
    minerals: dict[str, Quantity] = field(default_factory=dict)
    other: dict[str, Quantity] = field(default_factory=dict)

    def for_category(self, category: Category) -> dict[str, Quantity]:
        """Return the map holding keys of a category."""
        if category is Category.VITAMINS:
            return self.vitamins
        if category is Category.MINERALS:
            return self.minerals
        return self.other

    def is_empty(self) -> bool:
        """Return true when no category holds any key."""
        return not (self.vitamins or self.minerals or self.other)

    def add_missing(self, other: "NutrientMaps") -> None:
        """Copy the keys of ``other`` that are not present yet."""
        for category in Category:
            target = self.for_category(category)
            for key, quantity in other.for_category(category).items():
                target.setdefault(key, quantity)

    def copy(self) -> "NutrientMaps":
        """Return a shallow copy with independent dicts."""
        return NutrientMaps(
            vitamins=dict(self.vitamins),
            minerals=dict(self.minerals),
            other=dict(self.other),
        )


@dataclass(frozen=True)
class NutrientSource:
    """A raw mapping plus the category its unknown keys fall back to.

    ``fallback`` of ``None`` means only recognized schema keys are read,
    which is how flat ingredient objects are scanned.
    """

    values: dict[str, object]
    fallback: Category | None


def nested_sources(raw: dict[str, object]) -> list[NutrientSource]:
    """Return the nested vitamin/mineral/other maps of an object."""
    sources = []
    for key, category in _NESTED_MAPS:
        value = raw.get(key)
        if isinstance(value, dict):
            sources.append(NutrientSource(values=value, fallback=category))
    return sources


def collect(
    sources: Iterable[NutrientSource], threshold: float | None = None
) -> tuple[NutrientMaps, bool]:
    """Coerce and route every nutrient of the given sources.

    Returns the maps and whether any nutrient key was seen at all, before the
    threshold was applied. Later sources never overwrite earlier ones.
    """
    maps = NutrientMaps()
    seen = False
    for source in sources:
        for raw_key, raw_value in source.values.items():
            if not isinstance(raw_key, str) or raw_key.strip().lower() in MACRO_KEYS:
                continue
            key = canonical_key(raw_key)
            category = category_of(key) or source.fallback
            if category is None or not _is_nutrient_value(raw_value):
                continue
            seen = True
            value = coerce_value(raw_value)
            if threshold is not None and value < threshold:
                continue
            target = maps.for_category(category)
            if key not in target:
                target[key] = Quantity(magnitude=value, unit=unit_for(category, key))
    return maps, seen


def top_level_maps(payload: dict[str, object]) -> NutrientMaps:
    """Collect meal-level nutrient maps and top-level nutrient scalars."""
    sources = nested_sources(payload)
    scalars = {
        key: value
        for key, value in payload.items()
        if isinstance(key, str) and isinstance(value, (int, float, str))
    }
    sources.append(NutrientSource(values=scalars, fallback=None))
    maps, _ = collect(sources)
    return maps


def _is_nutrient_value(value: object) -> bool:
    if isinstance(value, dict):
        return "value" in value or "amount" in value
    return not isinstance(value, list)
