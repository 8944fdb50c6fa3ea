from typing import Any

from fastapi import APIRouter, Depends, Query

from rfp_analyzer.analysis.exceptions import AnalysisResultNotFoundError, AnalysisValidationError
from rfp_analyzer.analysis.models import AnalysisOutcome
from rfp_analyzer.analysis.orchestrator import QUICK_ANALYSIS
from rfp_analyzer.analysis.questions import PREDEFINED_QUESTIONS, QUESTION_CATEGORIES
from rfp_analyzer.llm.models import Failed, Raw, Structured
from rfp_analyzer.logging.logger import Log
from rfp_analyzer.server.dependencies import get_current_owner, get_services
from rfp_analyzer.server.models import (
    CompareDocumentsRequest,
    CustomAnalysisRequest,
    QuickAnalysisRequest,
)
from rfp_analyzer.server.services import ServiceContainer

router = APIRouter(prefix="/analysis", tags=["analysis"])

CUSTOM_ANALYSIS = "custom_analysis"
MIN_COMPARE_DOCUMENTS = 2
MAX_COMPARE_DOCUMENTS = 5
CONNECTION_TEST_PROMPT = (
    'Hello, please respond with "AI connection successful" to confirm the '
    "connection is working."
)


def _analysis_response(message: str, outcome: AnalysisOutcome) -> dict[str, Any]:
    return {
        "message": message,
        "analysis": outcome.answers,
        "document": outcome.document_summary(),
        "questions_analyzed": outcome.questions_analyzed,
        "chunks_processed": outcome.chunks_processed,
        "chunks_failed": outcome.chunks_failed,
        "result_id": outcome.result_id,
    }


def _clean_questions(questions: list[str]) -> list[str]:
    """Drop blank entries; kept questions stay byte-for-byte as sent."""
    return [question for question in questions if question.strip()]


@router.post("/rfp-quick-analysis")
def quick_analysis(
    body: QuickAnalysisRequest,
    owner_id: str = Depends(get_current_owner),
    services: ServiceContainer = Depends(get_services),
):
    """Answer the predefined question set, or the caller's own list, in chunks."""
    if not body.document_id.strip():
        raise AnalysisValidationError("document_id is required")
    questions = _clean_questions(body.custom_questions or []) or None
    outcome = services.orchestrator.analyze(
        body.document_id,
        owner_id,
        questions=questions,
        analysis_type=QUICK_ANALYSIS,
    )
    return _analysis_response("Quick RFP analysis completed successfully", outcome)


@router.post("/custom-analysis")
def custom_analysis(
    body: CustomAnalysisRequest,
    owner_id: str = Depends(get_current_owner),
    services: ServiceContainer = Depends(get_services),
):
    """Answer up to the configured maximum of caller questions in a single call."""
    if not body.document_id.strip():
        raise AnalysisValidationError("document_id is required")
    questions = _clean_questions(body.questions or [])
    if not questions:
        raise AnalysisValidationError("document_id and questions array are required")
    limit = services.settings.custom_analysis_max_questions
    if len(questions) > limit:
        raise AnalysisValidationError(f"Maximum {limit} questions allowed per analysis")

    outcome = services.orchestrator.analyze(
        body.document_id,
        owner_id,
        questions=questions,
        analysis_type=body.analysis_name or CUSTOM_ANALYSIS,
        chunk_size=len(questions),
    )
    return _analysis_response("Custom analysis completed successfully", outcome)


@router.post("/compare-documents")
def compare_documents(
    body: CompareDocumentsRequest,
    owner_id: str = Depends(get_current_owner),
    services: ServiceContainer = Depends(get_services),
):
    document_ids = body.document_ids or []
    if len(document_ids) < MIN_COMPARE_DOCUMENTS:
        raise AnalysisValidationError("At least 2 document IDs are required for comparison")
    if len(document_ids) > MAX_COMPARE_DOCUMENTS:
        raise AnalysisValidationError("Maximum 5 documents can be compared at once")

    comparison = services.orchestrator.compare(
        document_ids, owner_id, questions=_clean_questions(body.questions or []) or None
    )
    return {
        "message": "Document comparison completed",
        "comparisons": [entry.to_dict() for entry in comparison.entries],
        "questions": comparison.questions,
        "documents_analyzed": comparison.documents_analyzed,
        "documents_failed": comparison.documents_failed,
    }


@router.get("/predefined-questions")
def predefined_questions():
    return {
        "questions": list(PREDEFINED_QUESTIONS),
        "total": len(PREDEFINED_QUESTIONS),
        "categories": QUESTION_CATEGORIES,
    }


@router.get("/results")
def list_results(
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    analysis_type: str | None = None,
    owner_id: str = Depends(get_current_owner),
    services: ServiceContainer = Depends(get_services),
):
    records, total = services.results.list_for_owner(
        owner_id, limit=limit, offset=offset, analysis_type=analysis_type
    )
    return {
        "analyses": [record.to_dict() for record in records],
        "pagination": {
            "total": total,
            "limit": limit,
            "offset": offset,
            "has_more": offset + len(records) < total,
        },
    }


@router.get("/results/{result_id}")
def get_result(
    result_id: str,
    owner_id: str = Depends(get_current_owner),
    services: ServiceContainer = Depends(get_services),
):
    record = services.results.find_by_id(result_id, owner_id)
    if record is None:
        raise AnalysisResultNotFoundError(result_id)
    return {"analysis": record.to_dict(include_views=True)}


@router.get("/results/{result_id}/export")
def export_result(
    result_id: str,
    owner_id: str = Depends(get_current_owner),
    services: ServiceContainer = Depends(get_services),
):
    """Rows for a spreadsheet download, one per question."""
    record = services.results.find_by_id(result_id, owner_id)
    if record is None:
        raise AnalysisResultNotFoundError(result_id)
    return {"rows": record.export_rows()}


@router.delete("/results/{result_id}")
def delete_result(
    result_id: str,
    owner_id: str = Depends(get_current_owner),
    services: ServiceContainer = Depends(get_services),
):
    if not services.results.delete(result_id, owner_id):
        raise AnalysisResultNotFoundError(result_id)
    Log.info("Deleted analysis result", result_id=result_id)
    return {"message": "Analysis result deleted successfully"}


@router.get("/stats")
def analysis_stats(
    owner_id: str = Depends(get_current_owner),
    services: ServiceContainer = Depends(get_services),
):
    stats = services.results.stats_for_owner(owner_id)
    return {
        "overall": {
            "total_analyses": stats.total_analyses,
            "unique_documents_analyzed": stats.unique_documents_analyzed,
        },
        "by_type": stats.by_type,
    }


@router.get("/test-ai")
def check_ai_connection(
    owner_id: str = Depends(get_current_owner),
    services: ServiceContainer = Depends(get_services),
):
    """Round-trip a fixed prompt to check provider connectivity."""
    result = services.gateway.invoke(CONNECTION_TEST_PROMPT)
    match result:
        case Raw(text=text):
            response: Any = text
        case Structured(data=data):
            response = data
        case Failed(error=error):
            raise error
    return {"message": "AI provider connection test successful", "response": response}
