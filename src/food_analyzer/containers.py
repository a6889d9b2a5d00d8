"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from food_analyzer.adapters.openai_chat_client import OpenAIChatClient
from food_analyzer.config import Settings
from food_analyzer.services.analysis import AnalysisService
from food_analyzer.services.revision import RevisionService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    analysis_service: AnalysisService
    revision_service: RevisionService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    vision_client = OpenAIChatClient.create(resolved_settings.openai_api_key)
    revision_client = OpenAIChatClient.create(
        resolved_settings.revision_api_key or resolved_settings.openai_api_key,
        base_url=resolved_settings.revision_base_url,
    )
    analysis_service = AnalysisService(
        client=vision_client,
        model=resolved_settings.openai_model,
        temperature=resolved_settings.openai_temperature,
        max_tokens=resolved_settings.openai_max_tokens,
        timeout=resolved_settings.upstream_timeout_seconds,
    )
    revision_service = RevisionService(
        client=revision_client,
        model=resolved_settings.revision_model,
        timeout=resolved_settings.upstream_timeout_seconds,
    )

    async def close_resources() -> None:
        await vision_client.close()
        await revision_client.close()

    return AppContainer(
        settings=resolved_settings,
        analysis_service=analysis_service,
        revision_service=revision_service,
        close_resources=close_resources,
    )
