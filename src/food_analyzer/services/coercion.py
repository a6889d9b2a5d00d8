"""Lenient numeric coercion for loosely typed model output."""

import math
import re
from decimal import ROUND_HALF_UP, Decimal

_NUMBER = re.compile(r"\d+\.?\d*")
_ROUNDING_LIMIT = 1e15


def coerce_value(raw: object) -> float:
    """Return the numeric magnitude of a raw value, or 0.0 if there is none.

    Numbers are returned as-is, strings yield their first numeral
    ("12.5 mg" -> 12.5), and ``{"value": ..., "unit": ...}`` objects are
    unwrapped through ``value`` or ``amount``.
    """
    while isinstance(raw, dict):
        key = next((key for key in ("value", "amount") if key in raw), None)
        if key is None:
            return 0.0
        raw = raw[key]
    if isinstance(raw, bool):
        return 0.0
    if isinstance(raw, (int, float)):
        try:
            value = float(raw)
        except OverflowError:
            return 0.0
        return value if math.isfinite(value) else 0.0
    if isinstance(raw, str):
        match = _NUMBER.search(raw.replace(",", ""))
        if match is None:
            return 0.0
        value = float(match.group(0))
        return value if math.isfinite(value) else 0.0
    return 0.0


def clamp_magnitude(value: float) -> float:
    """Bound a summed magnitude to [0, 1e15]; NaN becomes 0."""
    if math.isnan(value):
        return 0.0
    return min(max(value, 0.0), _ROUNDING_LIMIT)


def coerce_calories(raw: object) -> int:
    """Coerce a calorie value to a non-negative whole number."""
    value = clamp_magnitude(coerce_value(raw))
    return int(round_half_up(value))


def round_half_up(value: float, digits: int = 0) -> float:
    """Round like a calculator: 21.25 -> 21.3, 2.5 -> 3."""
    if not math.isfinite(value) or abs(value) >= _ROUNDING_LIMIT:
        return value
    exponent = Decimal(1).scaleb(-digits)
    return float(Decimal(str(value)).quantize(exponent, rounding=ROUND_HALF_UP))
