class GatewayError(Exception):
    """Raised when the LLM provider call fails."""


class RateLimitError(GatewayError):
    """Raised when the provider rejects the call with HTTP 429."""


class AuthError(GatewayError):
    """Raised when the provider rejects the API key (HTTP 401)."""


class GatewayTimeoutError(GatewayError):
    """Raised when the provider does not answer within the client timeout."""


class PromptTemplateError(Exception):
    """Raised when a bundled prompt template cannot be loaded."""


def summarize_gateway_error(exc: Exception) -> str:
    """User-facing summary of a provider failure, without upstream detail."""
    if isinstance(exc, RateLimitError):
        return "Rate limit exceeded. Please try again later."
    if isinstance(exc, AuthError):
        return "Invalid API key. Please check the LLM provider configuration."
    if isinstance(exc, GatewayTimeoutError):
        return "Request timeout. The document might be too large or complex."
    return "AI processing failed."
