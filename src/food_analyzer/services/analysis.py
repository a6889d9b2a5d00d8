"""Food image analysis through a vision-capable chat model."""

import logging
from dataclasses import dataclass

from food_analyzer.domain.meals import CanonicalMealRecord
from food_analyzer.services.chat import ChatClient
from food_analyzer.services.normalization import normalize_model_response

_logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "[STRICTLY JSON ONLY] You are a nutrition expert analyzing food images. "
    "OUTPUT MUST BE VALID JSON AND NOTHING ELSE.\n\n"
    "FORMAT RULES:\n"
    '1. Return a single meal name for the entire image (e.g., "Pasta Meal", '
    '"Breakfast Plate")\n'
    '2. List ingredients with weights and calories (e.g., "Pasta (100g) 200kcal")\n'
    "3. Return total values for calories, protein, fat, carbs, vitamin C\n"
    "4. Add a health score (1-10)\n"
    "5. Provide an exact macronutrient breakdown (protein, fat, carbs) for each "
    "ingredient\n"
    "6. Use decimal places and realistic estimates\n"
    "7. Do not respond with markdown code blocks or explanations\n"
    "8. Only return a raw JSON object\n\n"
    "EXACT FORMAT REQUIRED:\n"
    "{\n"
    '  "meal_name": "Meal Name",\n'
    '  "ingredients": ["Item1 (weight) calories", "Item2 (weight) calories"],\n'
    '  "ingredient_macros": [\n'
    '    {"protein": 12.5, "fat": 5.2, "carbs": 45.7},\n'
    '    {"protein": 8.3, "fat": 3.1, "carbs": 28.3}\n'
    "  ],\n"
    '  "calories": number,\n'
    '  "protein": number,\n'
    '  "fat": number,\n'
    '  "carbs": number,\n'
    '  "vitamin_c": number,\n'
    '  "health_score": "score/10"\n'
    "}"
)

USER_PROMPT = (
    "Return only raw JSON. Analyze this food image and return nutrition data in "
    "the exact format above, with accurate protein, fat and carb values for each "
    "ingredient."
)


@dataclass
class AnalysisService:
    """Service that sends a food image to the model and normalizes the answer."""

    client: ChatClient
    model: str
    temperature: float
    max_tokens: int | None
    timeout: float

    async def analyze(self, image_data_url: str) -> CanonicalMealRecord:
        """Analyze a base64 data URI image and return the canonical record."""
        _logger.info("Analyzing food image (%s characters)", len(image_data_url))
        content = await self.client.complete(
            model=self.model,
            messages=build_messages(image_data_url),
            temperature=self.temperature,
            max_tokens=self.max_tokens,
            timeout=self.timeout,
        )
        return normalize_model_response(content)


def build_messages(image_data_url: str) -> list[dict[str, object]]:
    """Return the chat messages for one image analysis request."""
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {
            "role": "user",
            "content": [
                {"type": "text", "text": USER_PROMPT},
                {"type": "image_url", "image_url": {"url": image_data_url}},
            ],
        },
    ]
