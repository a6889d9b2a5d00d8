"""Client-side preview helpers for canonical meal records."""

from food_analyzer.domain.meals import CanonicalMealRecord


def flatten_nutrients(record: CanonicalMealRecord) -> dict[str, str]:
    """Merge the vitamin, mineral and other maps into one display map."""
    flattened: dict[str, str] = {}
    for values in (record.vitamins, record.minerals, record.other):
        for key, quantity in values.items():
            flattened.setdefault(key, str(quantity))
    return flattened


def format_meal_summary(record: CanonicalMealRecord) -> str:
    """Format a meal record as a short multi-line summary."""
    lines = [
        record.meal_name,
        f"Total: {record.calories} kcal, "
        f"{record.protein_g:.1f}P / "
        f"{record.fat_g:.1f}F / "
        f"{record.carbs_g:.1f}C",
        f"Health score: {record.health_score}",
        "Ingredients:",
    ]
    for item in record.ingredients:
        lines.append(
            f"- {item.name} ({item.amount}): {item.calories} kcal "
            f"({item.protein_g:.1f}P/{item.fat_g:.1f}F/{item.carbs_g:.1f}C)"
        )
    nutrients = flatten_nutrients(record)
    if nutrients:
        lines.append("Nutrients:")
        lines.extend(f"- {key}: {value}" for key, value in nutrients.items())
    return "\n".join(lines)
