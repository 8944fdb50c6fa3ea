"""Offline chat client adapter.

Use this module as a reference when implementing new provider adapters.
Implement BaseChatClient and register the provider in ChatClientFactory.
"""

import json
from typing import Any, ClassVar

from rfp_analyzer.llm.client_base import BaseChatClient


class ExampleClientAdapter(BaseChatClient):
    """Adapter that answers without any network call.

    Structured requests get every schema property answered with the
    not-specified marker; free-text requests get a fixed reply. Useful for
    local development and tests.
    """

    NOT_SPECIFIED: ClassVar[str] = "Not specified in RFP"
    CHAT_REPLY: ClassVar[str] = "This information is not specified in the uploaded document(s)."

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
        _ = model, temperature, top_p, max_tokens, messages
        if json_schema is None:
            return self.CHAT_REPLY
        properties = json_schema.get("properties") or {}
        return json.dumps({key: self.NOT_SPECIFIED for key in properties})
