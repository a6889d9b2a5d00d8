"""Entry point that turns raw model output into a canonical meal record."""

import json
import logging
import re

from food_analyzer.domain.meals import CanonicalMealRecord
from food_analyzer.domain.shapes import Unrecognized
from food_analyzer.services.aggregation import record_from_shape
from food_analyzer.services.shapes import detect_shape
from food_analyzer.services.text_fallback import default_record, extract_from_text

_logger = logging.getLogger(__name__)

_FENCED_JSON = re.compile(r"```(?:json)?\s*\n(.*?)\n?```", re.DOTALL | re.IGNORECASE)


def normalize_model_response(raw_text: str) -> CanonicalMealRecord:
    """Normalize any model answer into a complete meal record.

    The text is parsed as JSON directly, then from a fenced ```json block, then
    from the first ``{`` to the last ``}``. Parsed objects go through shape
    detection; anything unrecognized is read as free text. This never raises.
    """
    if not isinstance(raw_text, str):
        _logger.warning("Model response is not text, using default record")
        return default_record()
    return normalize_parsed(parse_model_json(raw_text), raw_text)


def normalize_parsed(parsed: object, raw_text: str) -> CanonicalMealRecord:
    """Build the record for an already parsed value, falling back to the text."""
    shape = detect_shape(parsed)
    if isinstance(shape, Unrecognized):
        _logger.info("Response shape not recognized, extracting from text")
        return extract_from_text(raw_text)
    _logger.info("Detected response shape %s", type(shape).__name__)
    return record_from_shape(shape)


def parse_model_json(raw_text: str) -> object | None:
    """Return the first JSON value that can be read from the text, or None."""
    parsed = _loads(raw_text.strip())
    if parsed is not None:
        _logger.info("Parsed model response as JSON")
        return parsed

    fenced = _FENCED_JSON.search(raw_text)
    if fenced:
        parsed = _loads(fenced.group(1).strip())
        if parsed is not None:
            _logger.info("Parsed JSON from fenced code block")
            return parsed

    start = raw_text.find("{")
    end = raw_text.rfind("}")
    if start != -1 and end > start:
        parsed = _loads(raw_text[start : end + 1])
        if parsed is not None:
            _logger.info("Parsed JSON object embedded in text")
            return parsed

    _logger.info("No JSON found in model response")
    return None


def _loads(text: str) -> object | None:
    if not text:
        return None
    try:
        return json.loads(text)
    except (ValueError, RecursionError):
        return None
