from unittest.mock import MagicMock, patch

import httpx
import openai
import pytest

from rfp_analyzer.llm.exceptions import AuthError, GatewayError, GatewayTimeoutError, RateLimitError
from rfp_analyzer.llm.openai_client_adapter import OpenAIClientAdapter

MESSAGES = [{"role": "user", "content": "hi"}]


def _make_mock_response(content: str | None) -> MagicMock:
    choice = MagicMock()
    choice.message.content = content
    response = MagicMock()
    response.choices = [choice]
    return response


def _status_error(cls: type[openai.APIStatusError], status_code: int) -> openai.APIStatusError:
    request = httpx.Request("POST", "https://openrouter.ai/api/v1/chat/completions")
    response = httpx.Response(status_code, request=request)
    return cls("provider said no", response=response, body=None)


def _call(mock_client: MagicMock, json_schema: dict | None = None) -> str:
    with patch(
        "rfp_analyzer.llm.openai_client_adapter.openai.OpenAI",
        return_value=mock_client,
    ):
        adapter = OpenAIClientAdapter(api_key="k", timeout_seconds=30)
        return adapter.create_chat_completion(
            model="m",
            temperature=0.1,
            top_p=0.9,
            max_tokens=100,
            messages=MESSAGES,
            json_schema=json_schema,
        )


class TestOpenAIClientAdapter:
    def test_returns_content(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.return_value = _make_mock_response('{"ok": true}')

        assert _call(mock_client, {"type": "object"}) == '{"ok": true}'

    def test_requests_json_object_when_schema_given(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.return_value = _make_mock_response("{}")

        _call(mock_client, {"type": "object"})

        kwargs = mock_client.chat.completions.create.call_args.kwargs
        assert kwargs["response_format"] == {"type": "json_object"}
        assert kwargs["top_p"] == 0.9
        assert kwargs["max_tokens"] == 100
        assert kwargs["messages"] == MESSAGES

    def test_free_text_request_has_no_response_format(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.return_value = _make_mock_response("hello")

        assert _call(mock_client) == "hello"
        assert "response_format" not in mock_client.chat.completions.create.call_args.kwargs

    def test_disables_sdk_retries(self) -> None:
        with patch("rfp_analyzer.llm.openai_client_adapter.openai.OpenAI") as mock_cls:
            OpenAIClientAdapter(
                api_key="k",
                timeout_seconds=30,
                base_url="https://openrouter.ai/api/v1",
                default_headers={"X-Title": "RFP Analysis Server"},
            )
        kwargs = mock_cls.call_args.kwargs
        assert kwargs["max_retries"] == 0
        assert kwargs["timeout"] == 30
        assert kwargs["default_headers"] == {"X-Title": "RFP Analysis Server"}


class TestOpenAIClientAdapterErrors:
    def test_empty_content(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.return_value = _make_mock_response(None)
        with pytest.raises(GatewayError, match="empty response"):
            _call(mock_client)

    def test_no_choices(self) -> None:
        mock_client = MagicMock()
        response = MagicMock()
        response.choices = []
        mock_client.chat.completions.create.return_value = response
        with pytest.raises(GatewayError, match="No response"):
            _call(mock_client)

    def test_rate_limit(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.side_effect = _status_error(
            openai.RateLimitError, 429
        )
        with pytest.raises(RateLimitError):
            _call(mock_client)

    def test_authentication(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.side_effect = _status_error(
            openai.AuthenticationError, 401
        )
        with pytest.raises(AuthError):
            _call(mock_client)

    def test_sdk_timeout(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.side_effect = openai.APITimeoutError(
            request=MagicMock()
        )
        with pytest.raises(GatewayTimeoutError):
            _call(mock_client)

    def test_httpx_timeout(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.side_effect = httpx.TimeoutException("timeout")
        with pytest.raises(GatewayTimeoutError):
            _call(mock_client)

    def test_connection_failure(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.side_effect = openai.APIConnectionError(
            request=MagicMock()
        )
        with pytest.raises(GatewayError, match="network error") as exc_info:
            _call(mock_client)
        assert not isinstance(exc_info.value, GatewayTimeoutError)

    def test_other_api_error(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.side_effect = openai.APIError(
            message="server error",
            request=MagicMock(),
            body=None,
        )
        with pytest.raises(GatewayError, match="AI processing failed: server error"):
            _call(mock_client)
