"""Error taxonomy shared by the API, the AI gateway and the client layer.

Every error renders to the same ``{"error": ..., "details": ...}`` body.
"""

from typing import Any


class AppError(Exception):
    """Base class for errors that map onto an HTTP status."""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None, details: Any = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.message, "details": self.details}


class ValidationError(AppError):
    """Missing or malformed required field. Never retried, shown inline."""

    status_code = 400
    default_message = "Validation failed"


class NotFoundError(AppError):
    """Referenced record does not exist."""

    status_code = 404
    default_message = "Not found"


class InfrastructureError(AppError):
    """Store unreachable or AI call failed."""

    status_code = 503
    default_message = "Service unavailable"


class MalformedAIResponse(AppError):
    """Model output could not be decoded into the expected structure."""

    status_code = 502
    default_message = "The AI returned a response in an invalid format. Please try again."
