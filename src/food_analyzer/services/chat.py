"""Chat-completion interface shared by the model-backed services."""

from typing import Protocol


class UpstreamError(Exception):
    """Failure reported by, or while reaching, the upstream model API."""

    def __init__(self, message: str, status_code: int = 502) -> None:
        super().__init__(message)
        self.status_code = status_code


class ChatClient(Protocol):
    """Interface for chat-completion calls that return the message text."""

    async def complete(  # noqa: PLR0913
        self,
        *,
        model: str,
        messages: list[dict[str, object]],
        temperature: float,
        max_tokens: int | None,
        timeout: float,
    ) -> str:
        """Return the content of the first completion choice."""
