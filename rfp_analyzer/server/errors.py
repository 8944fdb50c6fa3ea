"""Maps domain exceptions onto ``{"error": ..., "details"?: ...}`` JSON responses."""

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from rfp_analyzer.analysis.exceptions import AnalysisResultNotFoundError, AnalysisValidationError
from rfp_analyzer.config.settings import Settings
from rfp_analyzer.documents.exceptions import DocumentNotFoundError, DocumentReadError
from rfp_analyzer.llm.exceptions import (
    AuthError,
    GatewayError,
    GatewayTimeoutError,
    RateLimitError,
    summarize_gateway_error,
)
from rfp_analyzer.logging.logger import Log


def error_body(error: str, details: str | None = None) -> dict[str, str]:
    body = {"error": error}
    if details:
        body["details"] = details
    return body


def gateway_status(exc: GatewayError) -> int:
    if isinstance(exc, RateLimitError):
        return status.HTTP_429_TOO_MANY_REQUESTS
    if isinstance(exc, AuthError):
        return status.HTTP_502_BAD_GATEWAY
    if isinstance(exc, GatewayTimeoutError):
        return status.HTTP_504_GATEWAY_TIMEOUT
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def register_exception_handlers(app: FastAPI, settings: Settings) -> None:
    """Install the JSON error handlers on ``app``."""

    @app.exception_handler(DocumentNotFoundError)
    def handle_document_not_found(request: Request, exc: DocumentNotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content=error_body("Document not found"))

    @app.exception_handler(AnalysisResultNotFoundError)
    def handle_result_not_found(
        request: Request, exc: AnalysisResultNotFoundError
    ) -> JSONResponse:
        return JSONResponse(status_code=404, content=error_body("Analysis result not found"))

    @app.exception_handler(AnalysisValidationError)
    def handle_validation(request: Request, exc: AnalysisValidationError) -> JSONResponse:
        return JSONResponse(status_code=400, content=error_body(str(exc)))

    @app.exception_handler(RequestValidationError)
    def handle_body_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in exc.errors()
        )
        return JSONResponse(status_code=400, content=error_body("Invalid request", problems))

    @app.exception_handler(DocumentReadError)
    def handle_document_read(request: Request, exc: DocumentReadError) -> JSONResponse:
        Log.error("Document could not be prepared", path=request.url.path, error=str(exc))
        return JSONResponse(
            status_code=500,
            content=error_body("Failed to process document", str(exc)),
        )

    @app.exception_handler(GatewayError)
    def handle_gateway(request: Request, exc: GatewayError) -> JSONResponse:
        Log.error("LLM provider call failed", path=request.url.path, error=str(exc))
        details = str(exc) if settings.is_development else None
        return JSONResponse(
            status_code=gateway_status(exc),
            content=error_body(summarize_gateway_error(exc), details),
        )

    @app.exception_handler(HTTPException)
    def handle_http(request: Request, exc: HTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(str(exc.detail)),
            headers=exc.headers,
        )

    @app.exception_handler(Exception)
    def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        Log.error("Unhandled error", exc_info=True, path=request.url.path, error=str(exc))
        return JSONResponse(status_code=500, content=error_body("Internal server error"))
