"""
Word REST API: Exception Hierarchy
===================================

What:  Application-specific exceptions, one per entry of the error taxonomy.
How:   Each class declares its HTTP status and machine-readable code. A single
       exception handler in main.py renders any WordApiError as
       {"error": {"code": ..., "message": ...}} with that status.
Who:   Raised by the validation layer and repositories; rendered by main.py.

Exception Hierarchy:
    WordApiError (base)
    ├── ValidationError          → 400 VALIDATION_ERROR
    ├── NotFoundError            → 404 NOT_FOUND
    ├── ConflictError            → 409 CONFLICT
    ├── InternalError            → 500 INTERNAL_ERROR
    └── ServiceUnavailableError  → 503 SERVICE_UNAVAILABLE

`context` holds server-side debugging details (constraint names, driver error
types). It is logged but never included in a response body.
"""

from typing import Any, Dict, List, Optional


class WordApiError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    status_code: int = 500
    code: str = "INTERNAL_ERROR"

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)

    def to_response(self) -> Dict[str, Any]:
        """Serializable error body shared by every error response."""
        return {"error": {"code": self.code, "message": self.message}}


class ValidationError(WordApiError):
    """
    Raised when client input fails validation.

    Carries one entry per failing field so the client can fix every problem
    in a single round trip:

        {
            "error": {
                "code": "VALIDATION_ERROR",
                "message": "Request validation failed",
                "details": [
                    {"field": "name", "message": "Name cannot be empty"},
                    {"field": "email", "message": "Invalid email format"}
                ]
            }
        }
    """

    status_code = 400
    code = "VALIDATION_ERROR"

    def __init__(
        self,
        message: str = "Request validation failed",
        details: Optional[List[Dict[str, str]]] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
        self.details = details or []

    @property
    def fields(self) -> List[str]:
        return [d["field"] for d in self.details]

    def to_response(self) -> Dict[str, Any]:
        body = super().to_response()
        if self.details:
            body["error"]["details"] = self.details
        return body


class NotFoundError(WordApiError):
    """
    Raised when a referenced id does not exist.

    Used both for direct lookups (GET /api/users/{id}) and for a foreign key
    that points at a missing parent (POST /api/posts with an unknown user_id).
    """

    status_code = 404
    code = "NOT_FOUND"

    def __init__(
        self,
        resource: str = "Resource",
        resource_id: Optional[Any] = None,
        message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        if message is None:
            message = f"{resource} not found"
            if resource_id is not None:
                message = f"{resource} with id {resource_id} not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = str(resource_id)
        super().__init__(message=message, context=ctx)
        self.resource = resource
        self.resource_id = resource_id


class ConflictError(WordApiError):
    """Raised when a write violates a uniqueness constraint (e.g. duplicate email)."""

    status_code = 409
    code = "CONFLICT"

    def __init__(
        self,
        message: str = "Resource already exists",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class InternalError(WordApiError):
    """
    Raised for unexpected storage failures or any unclassified fault.

    The message returned to the client is always generic; the driver error
    type is kept in `context` for the server log.
    """

    status_code = 500
    code = "INTERNAL_ERROR"

    def __init__(
        self,
        message: str = "An internal server error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ServiceUnavailableError(WordApiError):
    """
    Raised when the database cannot be reached in time.

    When:  The connection pool stayed exhausted for DB_POOL_TIMEOUT seconds,
           or the server refused/dropped the connection.
    HTTP:  503 with a Retry-After hint.
    """

    status_code = 503
    code = "SERVICE_UNAVAILABLE"

    def __init__(
        self,
        message: str = "The service is temporarily unavailable. Please try again later.",
        retry_after: int = 1,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
        self.retry_after = retry_after
