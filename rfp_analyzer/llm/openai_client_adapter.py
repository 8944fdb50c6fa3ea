from typing import Any

import httpx
import openai

from rfp_analyzer.llm.client_base import BaseChatClient
from rfp_analyzer.llm.exceptions import (
    AuthError,
    GatewayError,
    GatewayTimeoutError,
    RateLimitError,
)


class OpenAIClientAdapter(BaseChatClient):
    """Chat client built on the OpenAI-compatible API (OpenRouter by default)."""

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str | None = None,
        default_headers: dict[str, str] | None = None,
    ) -> None:
        self._client = openai.OpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
            default_headers=default_headers,
            max_retries=0,
        )

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
        extra: dict[str, Any] = {}
        if json_schema is not None:
            extra["response_format"] = {"type": "json_object"}
        try:
            response = self._client.chat.completions.create(
                model=model,
                temperature=temperature,
                top_p=top_p,
                max_tokens=max_tokens,
                messages=messages,  # type: ignore[arg-type]
                stream=False,
                **extra,
            )
        except openai.RateLimitError as exc:
            raise RateLimitError(f"Rate limit exceeded: {exc}") from exc
        except openai.AuthenticationError as exc:
            raise AuthError(f"Invalid API key: {exc}") from exc
        except (openai.APITimeoutError, httpx.TimeoutException) as exc:
            raise GatewayTimeoutError(f"Request timeout: {exc}") from exc
        except (openai.APIConnectionError, httpx.HTTPError) as exc:
            raise GatewayError(f"AI provider network error: {exc}") from exc
        except openai.APIError as exc:
            raise GatewayError(f"AI processing failed: {exc.message}") from exc

        if not response.choices:
            raise GatewayError("No response from AI provider")
        content = response.choices[0].message.content
        if content is None:
            raise GatewayError("AI provider returned empty response")
        return content
