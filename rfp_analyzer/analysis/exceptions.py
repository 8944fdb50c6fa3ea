class AnalysisError(Exception):
    """Base exception for analysis request errors."""


class AnalysisValidationError(AnalysisError):
    """Raised when an analysis request is missing fields or breaks limits."""


class AnalysisResultNotFoundError(AnalysisError):
    """Raised when a stored analysis result does not exist for the caller."""
