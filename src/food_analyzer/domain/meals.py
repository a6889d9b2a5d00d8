"""Canonical meal records produced by response normalization."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Quantity:
    """Nutrient amount with its canonical unit."""

    magnitude: float
    unit: str

    def __str__(self) -> str:
        return f"{format_number(self.magnitude)} {self.unit}"


@dataclass(frozen=True)
class IngredientRecord:
    """Single ingredient with required macros and sparse micronutrients."""

    name: str
    amount: str = "30g"
    calories: int = 75
    protein_g: float = 0.0
    fat_g: float = 0.0
    carbs_g: float = 0.0
    vitamins: dict[str, Quantity] = field(default_factory=dict)
    minerals: dict[str, Quantity] = field(default_factory=dict)
    other: dict[str, Quantity] = field(default_factory=dict)
    shared_nutrients: bool = False


@dataclass(frozen=True)
class CanonicalMealRecord:
    """Normalized nutrition analysis for one meal."""

    meal_name: str
    ingredients: list[IngredientRecord]
    calories: int
    protein_g: float
    fat_g: float
    carbs_g: float
    health_score: str
    vitamins: dict[str, Quantity]
    minerals: dict[str, Quantity]
    other: dict[str, Quantity]


def format_number(value: float) -> str:
    """Render a number without trailing zeros, e.g. 12.0 -> "12"."""
    text = f"{value:.3f}".rstrip("0").rstrip(".")
    return "0" if text in {"", "-0"} else text
