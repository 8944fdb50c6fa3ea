from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from rfp_analyzer.analysis.questions import CATEGORY_KEYWORDS, categorize_question
from rfp_analyzer.llm.prompts import NOT_SPECIFIED


@dataclass
class AnalysisResultRecord:
    """Represents a row from the analysis_results table."""

    id: str
    document_id: str
    owner_id: str
    analysis_type: str
    questions: list[str] = field(default_factory=list)
    answers: dict[str, str] = field(default_factory=dict)
    metadata: dict[str, Any] | None = None
    created_at: datetime | None = None
    document_name: str | None = None
    document_mime_type: str | None = None

    @property
    def question_count(self) -> int:
        return len(self.questions)

    @property
    def answered_count(self) -> int:
        """Answers that are non-empty and not the not-specified marker."""
        return sum(
            1
            for answer in self.answers.values()
            if isinstance(answer, str)
            and answer.strip()
            and answer.lower() != NOT_SPECIFIED.lower()
        )

    @property
    def completion_rate(self) -> int:
        total = self.question_count
        return round(self.answered_count / total * 100) if total else 0

    def answer_for(self, question: str) -> str:
        return self.answers.get(question) or NOT_SPECIFIED

    def export_rows(self) -> list[dict[str, Any]]:
        """One spreadsheet row per stored question, in asked order."""
        return [
            {"Serial No": index, "Question": question, "Answer": self.answer_for(question)}
            for index, question in enumerate(self.questions, start=1)
        ]

    def answers_by_category(self) -> dict[str, list[dict[str, str]]]:
        grouped: dict[str, list[dict[str, str]]] = {name: [] for name in CATEGORY_KEYWORDS}
        grouped["Other"] = []
        for question in self.questions:
            grouped[categorize_question(question)].append(
                {"question": question, "answer": self.answer_for(question)}
            )
        return {name: items for name, items in grouped.items() if items}

    def to_dict(self, include_views: bool = False) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "document_id": self.document_id,
            "analysis_type": self.analysis_type,
            "questions": self.questions,
            "answers": self.answers,
            "metadata": self.metadata,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "document": {
                "id": self.document_id,
                "original_name": self.document_name,
                "mime_type": self.document_mime_type,
            },
        }
        if include_views:
            data["question_count"] = self.question_count
            data["answered_count"] = self.answered_count
            data["completion_rate"] = self.completion_rate
            data["answers_by_category"] = self.answers_by_category()
        return data


@dataclass
class AnalysisStats:
    """Per-owner aggregate counts over analysis_results."""

    total_analyses: int = 0
    unique_documents_analyzed: int = 0
    by_type: dict[str, dict[str, int]] = field(default_factory=dict)


@dataclass
class ChatMessageRecord:
    """Represents a row from the chat_messages table."""

    id: str
    session_id: str
    owner_id: str
    sender: str
    message: str
    document_id: str | None = None
    created_at: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "session_id": self.session_id,
            "sender": self.sender,
            "message": self.message,
            "document_id": self.document_id,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
