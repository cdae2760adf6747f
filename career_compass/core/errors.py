"""API error classes.

HTTP status codes and error codes shared by the wizard, the career
services, and the API layer.

WHY CUSTOM ERROR CLASSES:
- Consistent error response format across all endpoints
- Easy to map to HTTP status codes in exception handlers
- Type-safe error handling in services and the wizard controller
"""


class APIError(Exception):
    """Base class for API errors.

    All API errors have a code, message, and HTTP status.
    Subclasses set default status_code.

    Attributes:
        code: Machine-readable error code (e.g., "NOT_FOUND").
        message: Human-readable error message.
        status_code: HTTP status code to return.
        details: Optional list of additional error details.
    """

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 500,
        details: list[dict] | None = None,
    ) -> None:
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(message)


class ValidationError(APIError):
    """Field validation failed (400).

    Use for malformed wizard actions, unknown fields, etc.
    """

    def __init__(
        self,
        message: str,
        details: list[dict] | None = None,
    ) -> None:
        super().__init__(
            code="VALIDATION_ERROR",
            message=message,
            status_code=400,
            details=details,
        )


class NotFoundError(APIError):
    """Resource not found (404).

    Use when a wizard session, experience, or education entry doesn't exist.
    """

    def __init__(self, resource: str, resource_id: str | None = None) -> None:
        if resource_id:
            message = f"{resource} with id '{resource_id}' not found"
        else:
            message = f"{resource} not found"
        super().__init__(
            code="NOT_FOUND",
            message=message,
            status_code=404,
        )


class InvalidStateError(APIError):
    """Business rule violation (422).

    Use when a request is syntactically valid but the wizard cannot accept it.
    E.g., editing a profile after it was finalized, or jumping steps while
    the add-experience sub-flow is open.
    """

    def __init__(self, message: str) -> None:
        super().__init__(
            code="INVALID_STATE_TRANSITION",
            message=message,
            status_code=422,
        )


class ProfileGenerationError(APIError):
    """Whole-profile career generation failed (502).

    Raised by the generation service when the career profile cannot be
    produced. Unlike suggestion lists there is no meaningful static fallback,
    so callers surface an error state and offer a retry.
    """

    def __init__(
        self,
        message: str = "We couldn't generate your career profile. Please try again.",
    ) -> None:
        super().__init__(
            code="PROFILE_GENERATION_FAILED",
            message=message,
            status_code=502,
        )


class SessionLimitError(APIError):
    """Too many wizard sessions are open (503).

    Sessions live in process memory, so the registry caps how many it holds.
    """

    def __init__(self, limit: int) -> None:
        super().__init__(
            code="SESSION_LIMIT_REACHED",
            message=f"Too many open wizard sessions (limit {limit}). Try again later.",
            status_code=503,
        )
