from dataclasses import dataclass, field
from typing import Any

from rfp_analyzer.documents.models import UploadedDocument


@dataclass
class AnalysisOutcome:
    """Merged result of one chunked analysis run over a single document."""

    document: UploadedDocument
    questions: list[str]
    answers: dict[str, str] = field(default_factory=dict)
    chunks_processed: int = 0
    chunks_failed: int = 0
    result_id: str | None = None

    @property
    def questions_analyzed(self) -> int:
        return len(self.questions)

    def document_summary(self) -> dict[str, str]:
        return {
            "id": self.document.id,
            "name": self.document.original_name,
            "type": self.document.mime_type,
        }


@dataclass
class ComparisonEntry:
    """One document's column in a comparison; ``error`` is set when it was skipped."""

    document_id: str
    document_name: str | None = None
    answers: dict[str, str] = field(default_factory=dict)
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "document_id": self.document_id,
            "document_name": self.document_name,
            "analysis": self.answers,
        }
        if self.error is not None:
            data["error"] = self.error
        return data


@dataclass
class ComparisonOutcome:
    questions: list[str]
    entries: list[ComparisonEntry] = field(default_factory=list)

    @property
    def documents_analyzed(self) -> int:
        return sum(1 for entry in self.entries if entry.error is None)

    @property
    def documents_failed(self) -> int:
        return sum(1 for entry in self.entries if entry.error is not None)
