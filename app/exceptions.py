from typing import Any, List, Mapping, Optional


class MealPlannerError(Exception):
    """Base class for errors that map onto an HTTP response.

    Attributes:
        message: human-readable message
        details: optional mapping with extra context
        code: optional machine-readable error code
        http_status: suggested HTTP status code for handlers
    """

    http_status = 500
    default_message = "Internal server error"

    def __init__(
        self,
        message: Optional[str] = None,
        details: Optional[Mapping[str, Any]] = None,
        code: Optional[str] = None,
    ):
        message = message or self.default_message
        super().__init__(message)
        self.message = message
        self.details = details
        self.code = code

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"message": self.message}
        if self.code:
            payload["code"] = self.code
        if self.details:
            payload["details"] = dict(self.details)
        return payload

    def __str__(self) -> str:
        return self.message


class ServiceValidationError(MealPlannerError):
    """Raised when input data is invalid or a precondition for a service call is not met.

    ``errors`` carries field-level problems as ``{"field", "message"}`` dicts.
    """

    http_status = 400
    default_message = "Validation failed"

    def __init__(
        self,
        message: Optional[str] = None,
        errors: Optional[List[Mapping[str, str]]] = None,
        details: Optional[Mapping[str, Any]] = None,
        code: Optional[str] = None,
    ):
        super().__init__(message, details=details, code=code)
        self.errors = [dict(e) for e in errors or []]

    def to_dict(self) -> dict:
        payload = super().to_dict()
        if self.errors:
            payload["errors"] = self.errors
        return payload


class NotFoundError(MealPlannerError):
    """Raised when a requested resource was not found (or is not owned by the caller)."""

    http_status = 404
    default_message = "Not found"


class ConflictError(MealPlannerError):
    """Raised when a unique constraint would be violated (e.g., two plans for one week).

    Reported as a 400 like any other rejected write.
    """

    http_status = 400
    default_message = "Duplicate field value entered"


class UnauthorizedError(MealPlannerError):
    """Raised when authentication fails."""

    http_status = 401
    default_message = "Not authorized to access this route"
