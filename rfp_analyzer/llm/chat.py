from collections.abc import Sequence
from dataclasses import dataclass

from rfp_analyzer.documents.models import PreparedDocument
from rfp_analyzer.llm.gateway import LlmGateway
from rfp_analyzer.llm.models import Failed, LlmResult, Raw, Structured
from rfp_analyzer.llm.prompt_loader import load_prompt_template
from rfp_analyzer.logging.logger import Log

NO_DOCUMENT_ACCESS_NOTE = (
    "Note: I'm currently unable to directly access the uploaded documents, but I can "
    "provide general RFP analysis guidance based on your question."
)


@dataclass(frozen=True)
class ChatTurn:
    """One earlier message in the conversation."""

    sender: str
    message: str


class ChatAssistant:
    """Free-text RFP chat with optional document context."""

    def __init__(self, gateway: LlmGateway, history_limit: int = 10) -> None:
        self._gateway = gateway
        self._history_limit = history_limit

    def chat(
        self,
        message: str,
        documents: Sequence[PreparedDocument] = (),
        history: Sequence[ChatTurn] = (),
    ) -> str:
        """Answer a user message.

        Tries once with the documents attached, then once without them.
        The error from the second attempt propagates.
        """
        prompt = self.build_prompt(message, documents, history)
        try:
            return self._reply_text(self._gateway.invoke(prompt, documents))
        except Exception as exc:
            Log.warning("Document-based chat failed, retrying text-only", error=str(exc))

        return self._reply_text(self._gateway.invoke(f"{prompt}\n\n{NO_DOCUMENT_ACCESS_NOTE}"))

    def build_prompt(
        self,
        message: str,
        documents: Sequence[PreparedDocument],
        history: Sequence[ChatTurn],
    ) -> str:
        prompt = load_prompt_template("chat_assistant")
        if documents:
            prompt += f"I have provided {len(documents)} document(s) for analysis. "

        recent = list(history)[-self._history_limit:] if self._history_limit > 0 else []
        if recent:
            lines = "\n".join(f"{turn.sender}: {turn.message}" for turn in recent)
            prompt += f"Previous Conversation:\n{lines}\n\n"

        return prompt + f"User Question: {message}\n\nPlease provide your response:"

    @staticmethod
    def _reply_text(result: LlmResult) -> str:
        match result:
            case Raw(text=text):
                return text
            case Structured(data=data):
                return str(data)
            case Failed(error=error):
                raise error
