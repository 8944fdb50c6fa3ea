from fastapi import APIRouter, Depends, Query

from rfp_analyzer.analysis.exceptions import AnalysisValidationError
from rfp_analyzer.documents.exceptions import DocumentError
from rfp_analyzer.documents.models import PreparedDocument
from rfp_analyzer.llm.chat import ChatTurn
from rfp_analyzer.llm.exceptions import GatewayError, summarize_gateway_error
from rfp_analyzer.logging.logger import Log
from rfp_analyzer.server.dependencies import get_current_owner, get_services
from rfp_analyzer.server.models import ChatMessageRequest
from rfp_analyzer.server.services import ServiceContainer

router = APIRouter(prefix="/chat", tags=["chat"])

USER_SENDER = "user"
AI_SENDER = "ai"


def apology_message(exc: Exception) -> str:
    reason = summarize_gateway_error(exc) if isinstance(exc, GatewayError) else str(exc)
    return (
        f"I apologize, but I encountered an error processing your request: {reason} "
        "Please try again or try with a different approach."
    )


def _prepare_chat_documents(
    services: ServiceContainer, document_id: str | None, owner_id: str
) -> tuple[list[PreparedDocument], str | None]:
    """The referenced document and its id, or nothing when it cannot be loaded."""
    if not document_id:
        return [], None
    try:
        document = services.documents.find_by_id(document_id, owner_id)
        return [services.preparer.prepare(document.file_path, document.mime_type)], document.id
    except DocumentError as exc:
        Log.warning("Chat continues without document", document_id=document_id, error=str(exc))
        return [], None


@router.post("/messages")
def send_message(
    body: ChatMessageRequest,
    owner_id: str = Depends(get_current_owner),
    services: ServiceContainer = Depends(get_services),
):
    """Store the user message, ask the assistant, store its reply."""
    if not body.session_id.strip() or not body.message.strip():
        raise AnalysisValidationError("session_id and message are required")

    history = services.chat_messages.recent(
        body.session_id, owner_id, services.settings.chat_history_limit
    )
    documents, attached_id = _prepare_chat_documents(services, body.document_id, owner_id)
    user_message = services.chat_messages.add(
        session_id=body.session_id,
        owner_id=owner_id,
        sender=USER_SENDER,
        message=body.message,
        document_id=attached_id,
    )

    try:
        reply = services.chat_assistant.chat(
            body.message,
            documents,
            [ChatTurn(sender=turn.sender, message=turn.message) for turn in history],
        )
        status_message = "Messages sent successfully"
    except Exception as exc:
        Log.error("Chat reply failed", session_id=body.session_id, error=str(exc))
        reply = apology_message(exc)
        status_message = "Message sent, but AI response failed"

    ai_message = services.chat_messages.add(
        session_id=body.session_id,
        owner_id=owner_id,
        sender=AI_SENDER,
        message=reply,
        document_id=attached_id,
    )
    return {
        "user_message": user_message.to_dict(),
        "ai_message": ai_message.to_dict(),
        "message": status_message,
    }


@router.get("/messages/{session_id}")
def list_messages(
    session_id: str,
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    owner_id: str = Depends(get_current_owner),
    services: ServiceContainer = Depends(get_services),
):
    messages = services.chat_messages.list_for_session(
        session_id, owner_id, limit=limit, offset=offset
    )
    return {"messages": [message.to_dict() for message in messages]}
