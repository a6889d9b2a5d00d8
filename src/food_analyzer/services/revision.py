"""Food revision and nutrition calculation through a text chat model."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass

from food_analyzer.domain.meals import CanonicalMealRecord
from food_analyzer.services.chat import ChatClient
from food_analyzer.services.normalization import normalize_parsed, parse_model_json

_logger = logging.getLogger(__name__)

FIX_SYSTEM_PROMPT = (
    "You are a nutrition expert specialized in analyzing and improving food "
    "recipes. Always respond with valid JSON."
)
NUTRITION_SYSTEM_PROMPT = (
    "You are a specialized nutrition calculator. Analyze food ingredients and "
    "provide accurate nutrition information in valid JSON format."
)

DEFAULT_FIX_INSTRUCTION = (
    "Analyze and improve this food. For each ingredient, estimate and return its "
    "calories, protein, fat, carbs, fiber, sugar, ALL vitamins (A, C, D, E, K, B1, "
    "B2, B3, B5, B6, B7, B9, B12), and ALL minerals (calcium, iron, magnesium, "
    "phosphorus, potassium, sodium, zinc, copper, manganese, selenium, iodine, "
    "chromium, molybdenum, fluoride, chloride) as accurately as possible, even if "
    "not present in the original data. Always include all these fields for every "
    "ingredient."
)
DEFAULT_MODIFY_INSTRUCTION = "Analyze and improve this food"

_MODIFY_HEADER = "Analyze and modify the following food based on instructions:\n\n"
_RESPOND_WITH = "\nPlease respond with a valid JSON object using this structure:\n"

_FOOD_STRUCTURE = """{
  "name": "Updated Food Name",
  "calories": 123,
  "protein": 30,
  "fat": 5,
  "carbs": 20,
  "ingredients": [
    {
      "name": "Ingredient 1",
      "amount": "100g",
      "calories": 100,
      "protein": 10,
      "fat": 2,
      "carbs": 5,
      "fiber": 2,
      "sugar": 3,
      "vitamin_c": 20,
      "iron": 1
    }
  ]
}"""

_TOTALS_STRUCTURE = """{
  "calories": 250,
  "protein": 20,
  "fat": 10,
  "carbs": 15
}"""


@dataclass
class RevisionService:
    """Service that asks the model to revise foods or calculate their nutrition."""

    client: ChatClient
    model: str
    timeout: float
    max_tokens: int | None = None

    async def fix_food(
        self,
        *,
        food_data: Mapping[str, object] | None,
        instructions: str | None = None,
        operation_type: str | None = None,
        query: str | None = None,
    ) -> CanonicalMealRecord:
        """Revise a food and its ingredients following the given instructions."""
        prompt = _MODIFY_HEADER
        if food_data:
            prompt += _describe_food(food_data.get("name"), food_data, required=True)
        if query:
            prompt += f"Query: {query}\n"
        prompt += f"\nInstruction: {instructions or DEFAULT_FIX_INSTRUCTION}\n"
        if operation_type:
            prompt += f"Operation type: {operation_type}\n"
        prompt += _RESPOND_WITH + _FOOD_STRUCTURE
        name = food_data.get("name") if food_data else None
        return await self._run(
            FIX_SYSTEM_PROMPT, prompt, temperature=0.3, fallback_name=name
        )

    async def calculate(  # noqa: PLR0913
        self,
        *,
        food_name: str | None = None,
        serving_size: str | None = None,
        query: str | None = None,
        current_data: Mapping[str, object] | None = None,
        operation_type: str | None = None,
        instructions: str | None = None,
    ) -> CanonicalMealRecord:
        """Calculate nutrition for a food, or modify ``current_data`` if given."""
        if current_data:
            prompt = _MODIFY_HEADER
            prompt += _describe_food(food_name, current_data, required=False)
            prompt += f"\nInstruction: {instructions or DEFAULT_MODIFY_INSTRUCTION}\n"
            if operation_type:
                prompt += f"Operation type: {operation_type}\n"
            prompt += _RESPOND_WITH + _FOOD_STRUCTURE
        else:
            prompt = "Calculate accurate nutrition values for the following food:"
            if food_name:
                prompt += f"\nFood: {food_name}"
            if serving_size:
                prompt += f"\nServing size: {serving_size}"
            if query:
                prompt += f"\nQuery: {query}"
            prompt += "\n\nPlease provide a valid JSON response with the following "
            prompt += "structure:\n" + _TOTALS_STRUCTURE
        return await self._run(
            NUTRITION_SYSTEM_PROMPT, prompt, temperature=0.2, fallback_name=food_name
        )

    async def _run(
        self,
        system_prompt: str,
        prompt: str,
        *,
        temperature: float,
        fallback_name: object,
    ) -> CanonicalMealRecord:
        _logger.info("Sending revision prompt (%s characters)", len(prompt))
        content = await self.client.complete(
            model=self.model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": prompt},
            ],
            temperature=temperature,
            max_tokens=self.max_tokens,
            timeout=self.timeout,
        )
        parsed = parse_model_json(content)
        if isinstance(parsed, dict):
            parsed = _with_meal_name(parsed, fallback_name)
        return normalize_parsed(parsed, content)


def _with_meal_name(
    parsed: dict[str, object], fallback_name: object
) -> dict[str, object]:
    """Expose the food ``name`` as ``meal_name`` so object ingredients are read."""
    if parsed.get("meal_name") is not None:
        return parsed
    name = parsed.get("name")
    if not isinstance(name, str) or not name.strip():
        name = fallback_name if isinstance(fallback_name, str) else ""
    return {**parsed, "meal_name": name}


def _describe_food(
    name: object, data: Mapping[str, object], *, required: bool
) -> str:
    """Render a food and its ingredients as prompt lines."""
    lines = [f"Food: {name or 'Unknown'}"]
    for key in ("calories", "protein", "fat", "carbs"):
        value = data.get(key)
        if required or value:
            lines.append(f"Total {key}: {value or '0'}")
    ingredients = data.get("ingredients")
    if isinstance(ingredients, list):
        lines.append("Ingredients:")
        for ingredient in ingredients:
            if isinstance(ingredient, Mapping):
                lines.append(
                    f"- {ingredient.get('name')} ({ingredient.get('amount')}): "
                    f"{ingredient.get('calories')} calories, "
                    f"{ingredient.get('protein')}g protein, "
                    f"{ingredient.get('fat')}g fat, "
                    f"{ingredient.get('carbs')}g carbs"
                )
            else:
                lines.append(f"- {ingredient}")
    return "\n".join(lines) + "\n"
