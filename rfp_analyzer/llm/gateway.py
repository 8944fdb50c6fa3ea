"""Single-turn wrapper around the chat completion provider."""

import json
from collections.abc import Sequence
from typing import Any

from rfp_analyzer.documents.models import PreparedDocument
from rfp_analyzer.llm.client_base import BaseChatClient
from rfp_analyzer.llm.exceptions import GatewayError
from rfp_analyzer.llm.models import Failed, LlmResult, Raw, Structured
from rfp_analyzer.logging.logger import Log


class LlmGateway:
    """Builds multimodal messages, calls the provider and shapes the reply.

    Transport failures raise ``GatewayError`` subclasses from the client.
    Content-level outcomes come back as ``Structured``, ``Raw`` or ``Failed``.
    """

    def __init__(
        self,
        *,
        client: BaseChatClient,
        model: str,
        temperature: float = 0.1,
        top_p: float = 0.9,
        max_tokens: int = 4000,
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = max(0.0, min(1.0, temperature))
        self._top_p = top_p
        self._max_tokens = max_tokens

    @property
    def model(self) -> str:
        return self._model

    def invoke(
        self,
        prompt: str,
        documents: Sequence[PreparedDocument] = (),
        json_schema: dict[str, Any] | None = None,
    ) -> LlmResult:
        """Send one completion request.

        Raises:
            GatewayError: on any provider failure (rate limit, auth, timeout, other).
        """
        messages = self.build_messages(prompt, documents, json_schema)
        Log.info(
            "Sending request to LLM provider",
            model=self._model,
            documents=len(documents),
            structured=json_schema is not None,
        )
        content = self._client.create_chat_completion(
            model=self._model,
            temperature=self._temperature,
            top_p=self._top_p,
            max_tokens=self._max_tokens,
            messages=messages,
            json_schema=json_schema,
        )
        Log.debug("LLM raw response", chars=len(content))
        if json_schema is None:
            return Raw(content)
        return self.parse_structured(content)

    @staticmethod
    def build_messages(
        prompt: str,
        documents: Sequence[PreparedDocument] = (),
        json_schema: dict[str, Any] | None = None,
    ) -> list[dict[str, Any]]:
        """Build the single user message sent to the provider."""
        schema_instruction = ""
        if json_schema is not None:
            schema_instruction = (
                "\n\nPlease respond with a valid JSON object matching this schema: "
                f"{json.dumps(json_schema)}"
            )

        if not documents:
            return [{"role": "user", "content": prompt + schema_instruction}]

        text = (
            f"{prompt}\n\nI have provided {len(documents)} document(s) for analysis. "
            "Please analyze the content and respond based on the documents provided."
        )
        attachments: list[dict[str, Any]] = []
        for document in documents:
            if document.kind == "text":
                text += (
                    f"\n\n--- Document Content: {document.filename} ---\n"
                    f"{document.content}\n--- End of Document ---\n"
                )
            elif document.mime_type.startswith("image/"):
                attachments.append(
                    {
                        "type": "image_url",
                        "image_url": {
                            "url": f"data:{document.mime_type};base64,{document.content}",
                            "detail": "high",
                        },
                    }
                )
            else:
                Log.warning(
                    "Document type not supported for attachment",
                    document=document.filename,
                    mime_type=document.mime_type,
                )
                text += (
                    f"\n\nDocument: {document.filename} ({document.mime_type}) - "
                    "Document type not supported for analysis."
                )

        content = [{"type": "text", "text": text + schema_instruction}, *attachments]
        return [{"role": "user", "content": content}]

    @staticmethod
    def parse_structured(raw: str) -> LlmResult:
        """Parse a JSON reply, falling back to the raw text when it is not an object."""
        cleaned = raw.strip()
        if cleaned.startswith("```"):
            lines = cleaned.splitlines()
            if lines and lines[0].startswith("```"):
                lines = lines[1:]
            if lines and lines[-1].strip() == "```":
                lines = lines[:-1]
            cleaned = "\n".join(lines)

        try:
            parsed = json.loads(cleaned)
        except json.JSONDecodeError as exc:
            Log.warning("Failed to parse JSON response", error=str(exc))
            return Raw(raw)

        if not isinstance(parsed, dict):
            return Raw(raw)
        if parsed.get("error"):
            return Failed(GatewayError(str(parsed["error"])))
        return Structured(parsed)
