from abc import ABC, abstractmethod
from typing import Any


class BaseChatClient(ABC):
    """Contract for provider-specific chat completion clients."""

    @abstractmethod
    def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        top_p: float,
        max_tokens: int,
        messages: list[dict[str, Any]],
        json_schema: dict[str, Any] | None = None,
    ) -> str:
        """Return provider response as plain text.

        Raises:
            GatewayError: or one of its subclasses on any provider failure.
        """
