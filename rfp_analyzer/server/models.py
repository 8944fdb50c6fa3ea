from pydantic import BaseModel


class QuickAnalysisRequest(BaseModel):
    document_id: str
    custom_questions: list[str] | None = None


class CustomAnalysisRequest(BaseModel):
    document_id: str
    questions: list[str] | None = None
    analysis_name: str | None = None


class CompareDocumentsRequest(BaseModel):
    document_ids: list[str] | None = None
    questions: list[str] | None = None


class ChatMessageRequest(BaseModel):
    session_id: str
    message: str
    document_id: str | None = None
