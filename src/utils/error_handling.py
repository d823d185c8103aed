"""Custom exceptions and helpers for consistent error responses."""

from typing import Any, Dict, List, Optional

from utils.responses import json_response


class AppError(Exception):
    """Base class for application errors."""

    public_message = "Invalid Request"

    def __init__(self, message: str, status_code: int = 400):
        super().__init__(message)
        self.status_code = status_code

    def to_body(self) -> Dict[str, Any]:
        return {"error": self.public_message}


class MalformedInputError(AppError):
    """Raised when a request body is not the JSON object we expect."""

    public_message = "Invalid content, expected valid JSON"

    def __init__(self, message: str = "Request body is not a JSON object"):
        super().__init__(message, status_code=400)


class ValidationFailedError(AppError):
    """Raised when one or more purchase fields break their rule."""

    public_message = "Invalid Request"

    def __init__(self, errors: List[Any]):
        super().__init__(f"{len(errors)} field(s) failed validation", status_code=400)
        self.errors = list(errors)

    def to_body(self) -> Dict[str, Any]:
        return {
            "error": self.public_message,
            "errors": [e.model_dump() for e in self.errors],
        }


class UnknownGigError(AppError):
    """Raised when a syntactically valid gig slug is not in the catalog."""

    public_message = "Invalid gig"

    def __init__(self, slug: str):
        super().__init__(f"Gig {slug!r} does not exist", status_code=400)
        self.slug = slug


class NotFoundError(AppError):
    """Raised when a requested resource is missing."""

    def __init__(self, message: str = "Resource not found"):
        super().__init__(message, status_code=404)
        self.public_message = message


class DependencyUnavailableError(AppError):
    """
    Raised when DynamoDB, SNS, SQS or the mail transport fails.

    The message is for logs only; clients get a generic server error.
    """

    public_message = "Internal Server Error"

    def __init__(self, dependency: str, message: str, cause: Optional[Exception] = None):
        super().__init__(f"{dependency}: {message}", status_code=500)
        self.dependency = dependency
        self.cause = cause


class EnvelopeError(AppError):
    """Raised when a queue message is not a valid SNS notification envelope."""

    def __init__(self, message: str):
        super().__init__(message, status_code=500)


class MalformedEventError(AppError):
    """Raised when the unwrapped payload is not a valid purchase event."""

    def __init__(self, message: str):
        super().__init__(message, status_code=500)


class DeliveryPartialFailureError(AppError):
    """Raised when a notification was sent but its queue message could not be deleted."""

    def __init__(self, message_id: str, cause: Optional[Exception] = None):
        super().__init__(f"Message {message_id} sent but not acknowledged", status_code=500)
        self.message_id = message_id
        self.cause = cause


def to_response(error: AppError) -> Dict[str, Any]:
    """Convert an AppError into a Lambda proxy integration response."""
    return json_response(error.status_code, error.to_body())
