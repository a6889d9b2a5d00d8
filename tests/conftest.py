"""Shared test fixtures."""

import json
from dataclasses import dataclass, field

import pytest

from food_analyzer.config import Settings
from food_analyzer.containers import AppContainer
from food_analyzer.services.analysis import AnalysisService
from food_analyzer.services.chat import ChatClient, UpstreamError
from food_analyzer.services.revision import RevisionService

PASTA_RESPONSE = json.dumps(
    {
        "meal_name": "Pasta Meal",
        "ingredients": ["Pasta (100g) 200kcal"],
        "calories": 200,
        "protein": 7,
        "fat": 1,
        "carbs": 43,
        "health_score": "6/10",
    }
)

LEGACY_RESPONSE = json.dumps(
    {
        "meal": [
            {
                "dish": "Grilled Chicken",
                "calories": 350,
                "ingredients": ["Chicken (150g) 250kcal", "Rice (100g) 100kcal"],
            }
        ]
    }
)

FIXED_FOOD_RESPONSE = json.dumps(
    {
        "name": "Lighter Omelette",
        "calories": 210,
        "protein": 18,
        "fat": 14,
        "carbs": 3,
        "ingredients": [
            {
                "name": "Egg whites",
                "amount": "120g",
                "calories": 60,
                "protein": 13,
                "fat": 0.2,
                "carbs": 0.8,
                "potassium": 195,
                "vitamin_b2": 0.5,
                "vitamin_b12": 0.1,
            },
            {
                "name": "Olive oil",
                "amount": "10g",
                "calories": 90,
                "protein": 0,
                "fat": 10,
                "carbs": 0,
                "vitamin_e": 1.4,
            },
        ],
    }
)


@dataclass
class FakeChatClient(ChatClient):
    """Fake chat client returning a fixed answer and recording requests."""

    response: str = PASTA_RESPONSE
    error: UpstreamError | None = None
    calls: list[dict[str, object]] = field(default_factory=list)

    async def complete(  # noqa: PLR0913
        self,
        *,
        model: str,
        messages: list[dict[str, object]],
        temperature: float,
        max_tokens: int | None,
        timeout: float,
    ) -> str:
        self.calls.append(
            {
                "model": model,
                "messages": messages,
                "temperature": temperature,
                "max_tokens": max_tokens,
                "timeout": timeout,
            }
        )
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def settings() -> Settings:
    return Settings(
        openai_api_key="openai-key",
        revision_api_key="revision-key",
        environment="test",
    )


@pytest.fixture
def vision_client() -> FakeChatClient:
    return FakeChatClient()


@pytest.fixture
def revision_client() -> FakeChatClient:
    return FakeChatClient(response=FIXED_FOOD_RESPONSE)


@pytest.fixture
def container(
    settings: Settings,
    vision_client: FakeChatClient,
    revision_client: FakeChatClient,
) -> AppContainer:
    analysis_service = AnalysisService(
        client=vision_client,
        model=settings.openai_model,
        temperature=settings.openai_temperature,
        max_tokens=settings.openai_max_tokens,
        timeout=settings.upstream_timeout_seconds,
    )
    revision_service = RevisionService(
        client=revision_client,
        model=settings.revision_model,
        timeout=settings.upstream_timeout_seconds,
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        analysis_service=analysis_service,
        revision_service=revision_service,
        close_resources=close_resources,
    )
