"""OpenAI chat-completions client for model calls."""

import logging
from dataclasses import dataclass

from openai import (
    APIConnectionError,
    APIStatusError,
    APITimeoutError,
    AsyncOpenAI,
)

from food_analyzer.services.chat import ChatClient, UpstreamError

_logger = logging.getLogger(__name__)


@dataclass
class OpenAIChatClient(ChatClient):
    """Chat client backed by the OpenAI chat completions API.

    Also used for OpenAI-compatible providers through ``base_url``.
    """

    client: AsyncOpenAI

    @classmethod
    def create(cls, api_key: str, base_url: str | None = None) -> "OpenAIChatClient":
        """Create a chat client with SDK retries disabled."""
        return cls(
            client=AsyncOpenAI(api_key=api_key, base_url=base_url, max_retries=0)
        )

    async def complete(  # noqa: PLR0913
        self,
        *,
        model: str,
        messages: list[dict[str, object]],
        temperature: float,
        max_tokens: int | None,
        timeout: float,
    ) -> str:
        """Request one JSON-mode completion and return its message content."""
        request_payload: dict[str, object] = {
            "model": model,
            "messages": messages,
            "temperature": temperature,
            "response_format": {"type": "json_object"},
            "timeout": timeout,
        }
        if max_tokens:
            request_payload["max_tokens"] = max_tokens

        try:
            response = await self.client.chat.completions.create(**request_payload)
        except APITimeoutError as exc:
            _logger.warning("Model request timed out after %ss", timeout)
            raise UpstreamError("Model API request timed out", 504) from exc
        except APIStatusError as exc:
            _logger.warning("Model API error %s", exc.status_code)
            raise UpstreamError(
                f"Model API error: {exc.status_code}", exc.status_code
            ) from exc
        except APIConnectionError as exc:
            _logger.warning("Could not reach model API: %s", exc)
            raise UpstreamError("Could not reach model API", 502) from exc

        content = response.choices[0].message.content if response.choices else None
        if not content:
            raise UpstreamError("Model API returned an empty response", 502)
        return content

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.client.close()
