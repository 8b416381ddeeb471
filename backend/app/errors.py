"""Errors raised while analyzing a request, rendered as `{"error": ..., **extra}` bodies."""
from typing import Any, Dict, Optional


class AnalyzerError(Exception):
    """Base error rendered as a JSON body with an `error` key."""

    status_code = 500
    message = "Server exception"

    def __init__(self, message: Optional[str] = None, **extra: Any):
        self.error = message or self.message
        self.extra = extra
        super().__init__(self.error)

    def to_body(self) -> Dict[str, Any]:
        return {"error": self.error, **self.extra}


class MissingInput(AnalyzerError):
    status_code = 400
    message = "resumeText and jobDescription are required"


class InvalidInput(AnalyzerError):
    status_code = 400
    message = "resumeText and jobDescription must be text"


class MissingCredential(AnalyzerError):
    status_code = 500
    message = "Missing GROQ_API_KEY in environment"


class PayloadTooLarge(AnalyzerError):
    status_code = 413
    message = "Request body too large"


class UpstreamError(AnalyzerError):
    """Scoring call failed. Carries the upstream status and body for diagnosis."""

    status_code = 502
    message = "Groq API error"

    def __init__(self, status: int, detail: Any, message: Optional[str] = None):
        self.status = status
        self.detail = detail
        super().__init__(message, status=status, detail=detail)


class MalformedUpstreamOutput(UpstreamError):
    message = "Groq returned malformed analysis JSON"
