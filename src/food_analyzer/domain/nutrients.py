"""Registry of recognized nutrients and their canonical units."""

import re
from dataclasses import dataclass
from enum import Enum


class Category(str, Enum):
    """Nutrient map a key belongs to."""

    VITAMINS = "vitamins"
    MINERALS = "minerals"
    OTHER = "other"


class EstimateBasis(str, Enum):
    """Meal total an estimated nutrient is proportional to."""

    CALORIES = "calories"
    FAT = "fat"
    CARBS = "carbs"


@dataclass(frozen=True)
class NutrientSpec:
    """Canonical unit and estimate multiplier for one nutrient key."""

    key: str
    unit: str
    basis: EstimateBasis
    multiplier: float


DEFAULT_UNIT = "mg"

_CAL = EstimateBasis.CALORIES
_FAT = EstimateBasis.FAT
_CARBS = EstimateBasis.CARBS

_TABLE: dict[Category, tuple[NutrientSpec, ...]] = {
    Category.VITAMINS: (
        NutrientSpec("vitamin_a", "mcg", _CAL, 0.8),
        NutrientSpec("vitamin_c", "mg", _CAL, 0.06),
        NutrientSpec("vitamin_d", "mcg", _CAL, 0.004),
        NutrientSpec("vitamin_e", "mg", _CAL, 0.01),
        NutrientSpec("vitamin_k", "mcg", _CAL, 0.05),
        NutrientSpec("vitamin_b1", "mg", _CAL, 0.0006),
        NutrientSpec("vitamin_b2", "mg", _CAL, 0.0007),
        NutrientSpec("vitamin_b3", "mg", _CAL, 0.008),
        NutrientSpec("vitamin_b5", "mg", _CAL, 0.003),
        NutrientSpec("vitamin_b6", "mg", _CAL, 0.0008),
        NutrientSpec("vitamin_b7", "mcg", _CAL, 0.015),
        NutrientSpec("vitamin_b9", "mcg", _CAL, 0.2),
        NutrientSpec("vitamin_b12", "mcg", _CAL, 0.0012),
    ),
    Category.MINERALS: (
        NutrientSpec("calcium", "mg", _CAL, 0.2),
        NutrientSpec("iron", "mg", _CAL, 0.08),
        NutrientSpec("magnesium", "mg", _CAL, 0.15),
        NutrientSpec("phosphorus", "mg", _CAL, 0.35),
        NutrientSpec("potassium", "mg", _CAL, 1.2),
        NutrientSpec("sodium", "mg", _CAL, 1.0),
        NutrientSpec("zinc", "mg", _CAL, 0.005),
        NutrientSpec("copper", "mg", _CAL, 0.0005),
        NutrientSpec("manganese", "mg", _CAL, 0.001),
        NutrientSpec("selenium", "mcg", _CAL, 0.03),
        NutrientSpec("iodine", "mcg", _CAL, 0.07),
        NutrientSpec("chromium", "mcg", _CAL, 0.017),
        NutrientSpec("molybdenum", "mcg", _CAL, 0.022),
        NutrientSpec("fluoride", "mg", _CAL, 0.0015),
        NutrientSpec("chloride", "mg", _CAL, 1.5),
    ),
    Category.OTHER: (
        NutrientSpec("fiber", "g", _CARBS, 0.15),
        NutrientSpec("cholesterol", "mg", _FAT, 10.0),
        NutrientSpec("sugar", "g", _CARBS, 0.3),
        NutrientSpec("saturated_fat", "g", _FAT, 0.35),
        NutrientSpec("omega_3", "g", _FAT, 0.02),
        NutrientSpec("omega_6", "g", _FAT, 0.15),
    ),
}

_ALIASES = {
    "thiamin": "vitamin_b1",
    "thiamine": "vitamin_b1",
    "riboflavin": "vitamin_b2",
    "niacin": "vitamin_b3",
    "pantothenic_acid": "vitamin_b5",
    "pyridoxine": "vitamin_b6",
    "biotin": "vitamin_b7",
    "folate": "vitamin_b9",
    "folic_acid": "vitamin_b9",
    "cobalamin": "vitamin_b12",
    "dietary_fiber": "fiber",
    "fibre": "fiber",
    "sugars": "sugar",
    "saturated": "saturated_fat",
    "sat_fat": "saturated_fat",
    "omega3": "omega_3",
    "omega6": "omega_6",
}

_VITAMIN_LETTER = re.compile(r"^(?:vitamin_?)?([acdek]|b\d{1,2})$")
_SEPARATORS = re.compile(r"[\s\-]+")

_BY_KEY: dict[str, tuple[Category, NutrientSpec]] = {
    spec.key: (category, spec) for category, specs in _TABLE.items() for spec in specs
}


def all_keys(category: Category) -> tuple[str, ...]:
    """Return every recognized key of a category in table order."""
    return tuple(spec.key for spec in _TABLE[category])


def all_specs(category: Category) -> tuple[NutrientSpec, ...]:
    """Return the nutrient specs of a category in table order."""
    return _TABLE[category]


def unit_for(category: Category, key: str) -> str:
    """Return the canonical unit for a key, or the default unit if unknown."""
    entry = _BY_KEY.get(key)
    if entry is None or entry[0] is not category:
        return DEFAULT_UNIT
    return entry[1].unit


def category_of(key: str) -> Category | None:
    """Return the category of a canonical key, if it is recognized."""
    entry = _BY_KEY.get(key)
    return entry[0] if entry else None


def canonical_key(raw_key: str) -> str:
    """Normalize a nutrient name such as "Vitamin A" or "b12" to a table key."""
    key = _SEPARATORS.sub("_", raw_key.strip().lower())
    key = _ALIASES.get(key, key)
    match = _VITAMIN_LETTER.match(key)
    if match:
        return f"vitamin_{match.group(1)}"
    return key
