from typing import ClassVar

from rfp_analyzer.config.settings import Settings
from rfp_analyzer.llm.client_base import BaseChatClient
from rfp_analyzer.llm.example_client_adapter import ExampleClientAdapter
from rfp_analyzer.llm.gateway import LlmGateway
from rfp_analyzer.llm.openai_client_adapter import OpenAIClientAdapter


class LlmGatewayFactory:
    """Creates the configured LLM gateway."""

    OPENAI_COMPATIBLE_BASE_URLS: ClassVar[dict[str, str]] = {
        "openrouter": "https://openrouter.ai/api/v1",
        "groq": "https://api.groq.com/openai/v1",
        "together": "https://api.together.xyz/v1",
        "deepseek": "https://api.deepseek.com/v1",
        "ollama": "http://localhost:11434/v1",
    }

    @classmethod
    def create(cls, settings: Settings) -> LlmGateway:
        """Create a configured gateway from application settings."""
        return LlmGateway(
            client=cls.create_client(settings),
            model=settings.llm_model_name,
            temperature=settings.llm_temperature,
            top_p=settings.llm_top_p,
            max_tokens=settings.llm_max_tokens,
        )

    @classmethod
    def create_client(cls, settings: Settings) -> BaseChatClient:
        provider = settings.llm_provider.strip().lower()
        if provider == "example":
            return ExampleClientAdapter()
        base_url = cls._resolve_base_url(provider, settings)
        if not settings.llm_api_key and provider != "ollama":
            raise ValueError(f"llm_api_key is required for llm_provider={provider}")
        headers = None
        if provider == "openrouter":
            headers = {
                "HTTP-Referer": settings.llm_app_referer,
                "X-Title": settings.llm_app_title,
            }
        return OpenAIClientAdapter(
            api_key=settings.llm_api_key or "ollama",
            timeout_seconds=settings.llm_timeout_seconds,
            base_url=base_url,
            default_headers=headers,
        )

    @classmethod
    def _resolve_base_url(cls, provider: str, settings: Settings) -> str | None:
        override = settings.llm_base_url.strip()
        if override:
            return override
        if provider == "openai":
            return None
        if provider == "openai_compatible":
            raise ValueError(
                "llm_base_url is required for llm_provider=openai_compatible"
            )
        default_base_url = cls.OPENAI_COMPATIBLE_BASE_URLS.get(provider)
        if default_base_url is not None:
            return default_base_url
        supported = [
            "example",
            "openai",
            "openai_compatible",
            *sorted(cls.OPENAI_COMPATIBLE_BASE_URLS),
        ]
        raise ValueError(f"Unknown LLM provider '{provider}'. Choose from: {supported}")
