from dataclasses import dataclass
from pathlib import Path

from rfp_analyzer.analysis.orchestrator import AnalysisOrchestrator, build_orchestrator
from rfp_analyzer.config.settings import Settings
from rfp_analyzer.database.repositories.analysis_results_repository import AnalysisResultsRepository
from rfp_analyzer.database.repositories.chat_messages_repository import ChatMessagesRepository
from rfp_analyzer.database.repositories.uploaded_documents_repository import UploadedDocumentsRepository
from rfp_analyzer.documents.file_loader import FileLoader
from rfp_analyzer.documents.preparer import DocumentPreparer
from rfp_analyzer.llm.chat import ChatAssistant
from rfp_analyzer.llm.factory import LlmGatewayFactory
from rfp_analyzer.llm.gateway import LlmGateway
from rfp_analyzer.pdf.factory import PdfExtractorFactory


@dataclass
class ServiceContainer:
    """Everything a request handler needs, built once at startup."""

    settings: Settings
    gateway: LlmGateway
    orchestrator: AnalysisOrchestrator
    chat_assistant: ChatAssistant
    preparer: DocumentPreparer
    documents: UploadedDocumentsRepository
    results: AnalysisResultsRepository
    chat_messages: ChatMessagesRepository


def build_services(settings: Settings) -> ServiceContainer:
    """Build a ServiceContainer with all required adapters."""
    gateway = LlmGatewayFactory.create(settings)
    file_loader = FileLoader(
        max_size_bytes=settings.max_document_size_bytes,
        files_root=Path(settings.files_root),
    )
    return ServiceContainer(
        settings=settings,
        gateway=gateway,
        orchestrator=build_orchestrator(settings, gateway),
        chat_assistant=ChatAssistant(gateway, history_limit=settings.chat_history_limit),
        preparer=DocumentPreparer(file_loader, PdfExtractorFactory.create(settings)),
        documents=UploadedDocumentsRepository(),
        results=AnalysisResultsRepository(),
        chat_messages=ChatMessagesRepository(),
    )
