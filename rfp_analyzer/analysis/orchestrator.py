import time
from collections.abc import Sequence
from pathlib import Path

from rfp_analyzer.analysis.models import AnalysisOutcome, ComparisonEntry, ComparisonOutcome
from rfp_analyzer.analysis.questions import PREDEFINED_QUESTIONS, chunk_questions
from rfp_analyzer.analysis.rate_limit import RateLimitPolicy
from rfp_analyzer.config.settings import Settings
from rfp_analyzer.database.repositories.analysis_results_repository import AnalysisResultsRepository
from rfp_analyzer.database.repositories.uploaded_documents_repository import UploadedDocumentsRepository
from rfp_analyzer.documents.file_loader import FileLoader
from rfp_analyzer.documents.models import PreparedDocument, UploadedDocument
from rfp_analyzer.documents.preparer import DocumentPreparer
from rfp_analyzer.llm.gateway import LlmGateway
from rfp_analyzer.llm.models import Failed, LlmResult, Raw, Structured
from rfp_analyzer.llm.prompts import (
    ANALYSIS_FAILED,
    NOT_SPECIFIED,
    build_analysis_prompt,
    build_text_only_prompt,
)
from rfp_analyzer.logging.logger import Log
from rfp_analyzer.pdf.factory import PdfExtractorFactory

QUICK_ANALYSIS = "quick_rfp_analysis"
DEFAULT_COMPARISON_QUESTION_COUNT = 20


class AnalysisOrchestrator:
    """Answers a question list against one document, chunk by chunk.

    Pipeline: look up -> prepare -> chunk -> ask (with text-only fallback)
    -> merge -> persist. A failing chunk gets placeholder answers and never
    aborts the run; lookup and preparation failures do.
    """

    def __init__(
        self,
        doc_repo: UploadedDocumentsRepository,
        results_repo: AnalysisResultsRepository,
        preparer: DocumentPreparer,
        gateway: LlmGateway,
        rate_limit: RateLimitPolicy,
        chunk_size: int = 20,
    ) -> None:
        self._doc_repo = doc_repo
        self._results_repo = results_repo
        self._preparer = preparer
        self._gateway = gateway
        self._rate_limit = rate_limit
        self._chunk_size = chunk_size

    def analyze(
        self,
        document_id: str,
        owner_id: str,
        questions: Sequence[str] | None = None,
        analysis_type: str = QUICK_ANALYSIS,
        chunk_size: int | None = None,
        persist: bool = True,
    ) -> AnalysisOutcome:
        """Run every question against the document and return the merged answers.

        Raises:
            DocumentNotFoundError: if the owner has no such document.
            DocumentReadError: if the file cannot be read or is too large.
        """
        asked = list(questions) if questions is not None else list(PREDEFINED_QUESTIONS)
        document = self._doc_repo.find_by_id(document_id, owner_id)
        return self._analyze_document(
            document,
            owner_id,
            asked,
            analysis_type=analysis_type,
            chunk_size=chunk_size,
            persist=persist,
        )

    def compare(
        self,
        document_ids: Sequence[str],
        owner_id: str,
        questions: Sequence[str] | None = None,
    ) -> ComparisonOutcome:
        """Answer the same questions for several documents without persisting.

        A document that cannot be found or analyzed becomes an error entry;
        the remaining documents are still analyzed.
        """
        asked = (
            list(questions)
            if questions
            else list(PREDEFINED_QUESTIONS[:DEFAULT_COMPARISON_QUESTION_COUNT])
        )
        comparison = ComparisonOutcome(questions=asked)
        for document_id in document_ids:
            document: UploadedDocument | None = None
            try:
                document = self._doc_repo.find_by_id(document_id, owner_id)
                outcome = self._analyze_document(
                    document,
                    owner_id,
                    asked,
                    analysis_type="comparison",
                    chunk_size=len(asked),
                    persist=False,
                )
            except Exception as exc:
                Log.error(
                    "Skipping document in comparison",
                    exc_info=True,
                    document_id=document_id,
                    error=str(exc),
                )
                comparison.entries.append(
                    ComparisonEntry(
                        document_id=document_id,
                        document_name=document.original_name if document else None,
                        error=str(exc),
                    )
                )
                continue
            comparison.entries.append(
                ComparisonEntry(
                    document_id=document_id,
                    document_name=document.original_name,
                    answers=outcome.answers,
                )
            )
        return comparison

    def _analyze_document(
        self,
        document: UploadedDocument,
        owner_id: str,
        asked: list[str],
        analysis_type: str,
        chunk_size: int | None,
        persist: bool,
    ) -> AnalysisOutcome:
        started = time.monotonic()
        prepared = self._preparer.prepare(document.file_path, document.mime_type)

        chunks = chunk_questions(asked, chunk_size or self._chunk_size)
        outcome = AnalysisOutcome(document=document, questions=asked)
        Log.info(
            "Starting analysis",
            document=document.original_name,
            questions=len(asked),
            chunks=len(chunks),
        )

        for index, chunk in enumerate(chunks, start=1):
            if index > 1:
                self._rate_limit.wait()
            answered = self._analyze_chunk(chunk, prepared, document.original_name, index)
            if answered is None:
                outcome.chunks_failed += 1
            outcome.chunks_processed += 1
            outcome.answers.update(self._merge(chunk, answered))

        elapsed = round(time.monotonic() - started, 2)
        Log.info(
            "Analysis finished",
            document=document.original_name,
            chunks=outcome.chunks_processed,
            failed_chunks=outcome.chunks_failed,
            seconds=elapsed,
        )

        if persist:
            record = self._results_repo.create(
                document_id=document.id,
                owner_id=owner_id,
                analysis_type=analysis_type,
                questions=asked,
                answers=outcome.answers,
                metadata={
                    "model": self._gateway.model,
                    "chunks_processed": outcome.chunks_processed,
                    "chunks_failed": outcome.chunks_failed,
                    "processing_seconds": elapsed,
                    "document_name": document.original_name,
                },
            )
            outcome.result_id = record.id
        return outcome

    def _analyze_chunk(
        self,
        chunk: list[str],
        prepared: PreparedDocument,
        document_name: str,
        index: int,
    ) -> dict[str, object] | None:
        """Return the parsed answer object, or None when the chunk failed.

        Only a raised call is retried text-only; a reply that is not an
        answer object is final.
        """
        Log.info("Analyzing chunk", document=document_name, chunk=index, questions=len(chunk))
        prompt = build_analysis_prompt(chunk)
        try:
            result = self._gateway.invoke(prompt.text, [prepared], prompt.json_schema)
        except Exception as exc:
            Log.warning(
                "Chunk analysis failed, retrying text-only",
                document=document_name,
                chunk=index,
                reason=f"{type(exc).__name__}: {exc}",
            )
            fallback = build_text_only_prompt(chunk)
            try:
                result = self._gateway.invoke(fallback.text, (), fallback.json_schema)
            except Exception as retry_exc:
                result = Failed(retry_exc)

        data = self._structured_data(result)
        if data is None:
            Log.error(
                "Chunk analysis failed",
                document=document_name,
                chunk=index,
                reason=self._describe(result),
            )
        return data

    @staticmethod
    def _merge(chunk: list[str], data: dict[str, object] | None) -> dict[str, str]:
        if data is None:
            return {question: ANALYSIS_FAILED for question in chunk}
        merged = {}
        for question in chunk:
            answer = data.get(question)
            merged[question] = str(answer) if answer else NOT_SPECIFIED
        return merged

    @staticmethod
    def _structured_data(result: LlmResult) -> dict[str, object] | None:
        match result:
            case Structured(data=data):
                return data
            case _:
                return None

    @staticmethod
    def _describe(result: LlmResult) -> str:
        match result:
            case Failed(error=error):
                return f"{type(error).__name__}: {error}"
            case Raw():
                return "response was not a JSON object"
            case _:
                return "unknown"


def build_orchestrator(settings: Settings, gateway: LlmGateway) -> AnalysisOrchestrator:
    """Build an AnalysisOrchestrator with all required adapters."""
    file_loader = FileLoader(
        max_size_bytes=settings.max_document_size_bytes,
        files_root=Path(settings.files_root),
    )
    preparer = DocumentPreparer(file_loader, PdfExtractorFactory.create(settings))
    return AnalysisOrchestrator(
        doc_repo=UploadedDocumentsRepository(),
        results_repo=AnalysisResultsRepository(),
        preparer=preparer,
        gateway=gateway,
        rate_limit=RateLimitPolicy(settings.llm_rate_limit_per_minute),
        chunk_size=settings.analysis_chunk_size,
    )
