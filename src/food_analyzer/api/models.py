"""Pydantic models for API request payloads."""

from pydantic import BaseModel


class AnalyzeFoodRequest(BaseModel):
    """Food image analysis request with a base64 data URI."""

    image: str | None = None


class FixFoodRequest(BaseModel):
    """Request to revise a food and its ingredients."""

    food_data: dict[str, object] | None = None
    instructions: str | None = None
    operation_type: str | None = None
    query: str | None = None


class NutritionRequest(BaseModel):
    """Request to calculate nutrition for a food or modify existing data."""

    food_name: str | None = None
    serving_size: str | None = None
    query: str | None = None
    current_data: dict[str, object] | None = None
    operation_type: str | None = None
    instructions: str | None = None
