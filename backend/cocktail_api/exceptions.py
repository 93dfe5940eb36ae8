"""
Cocktail API — Custom Exception Hierarchy
===========================================

What:  Application-specific exceptions for every way a request can be refused.
Why:   Guards and handlers raise; global exception handlers (registered in
       main.py) turn each type into the right status code and JSON body.
How:   Each exception carries a message and a context dict. The context holds
       the extra fields that go on the wire next to `error` and `message`
       (hint, details, userPermissions, retryAfter, ...).

Exception Hierarchy:
    CocktailAPIError (base)              → 500
    ├── ValidationError                  → 400 "Validation failed"
    ├── BadRequestError                  → 400 "Bad Request"
    │   └── InvalidArgumentError         → 400 (raised by services)
    ├── UnauthenticatedError             → 401 "Unauthorized"
    ├── ForbiddenError                   → 403 "Forbidden"
    ├── NotFoundError                    → 404 "Not Found"
    ├── RateLimitExceededError           → 429 "Rate limit exceeded"
    └── InternalError                    → 500 "Internal Server Error"

Error body:
    {"error": <label>, "message": <text>, ...context, "request_id": <id>}
"""

from enum import Enum
from typing import Any, Dict, List, Optional


class CocktailAPIError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  Human-readable description (returned to the client)
        context:  Extra wire fields merged into the error body
    """

    status_code: int = 500
    error: str = "Internal Server Error"

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"error": self.error, "message": self.message}
        body.update(self.context)
        return body


class ValidationError(CocktailAPIError):
    """
    Raised when a request body fails validation.

    Carries every violation at once so the client can fix them in one round trip.

    Example response:
        {
            "error": "Validation failed",
            "message": "Request body contains invalid data",
            "details": ["Name is required and must be a non-empty string", ...]
        }
    """

    status_code = 400
    error = "Validation failed"

    def __init__(
        self,
        details: Optional[List[str]] = None,
        message: str = "Request body contains invalid data",
    ):
        self.details = list(details or [])
        super().__init__(message=message, context={"details": self.details})


class BadRequestError(CocktailAPIError):
    """Malformed query parameters or other request-level mistakes."""

    status_code = 400
    error = "Bad Request"


class InvalidArgumentError(BadRequestError):
    """
    Raised by services when called with an argument they cannot work with.

    Example: CatalogService.search("   ").
    """

    def __init__(self, message: str = "Invalid argument", argument: Optional[str] = None):
        context = {"argument": argument} if argument else None
        super().__init__(message=message, context=context)
        self.argument = argument


class AuthFailure(str, Enum):
    """Why authentication was refused."""

    MISSING_HEADER = "MissingHeader"
    MALFORMED_HEADER = "MalformedHeader"
    INVALID_CREDENTIAL = "InvalidCredential"
    MALFORMED_TOKEN = "MalformedToken"
    UNAUTHENTICATED = "Unauthenticated"


class UnauthenticatedError(CocktailAPIError):
    """
    Raised when the caller could not be identified.

    HTTP:    401 Unauthorized
    When:    Missing/malformed Authorization header, unknown API key or token,
             or an authorization guard reached without an attached principal.
    """

    status_code = 401
    error = "Unauthorized"

    def __init__(
        self,
        reason: AuthFailure,
        message: str,
        hint: Optional[str] = None,
    ):
        context: Dict[str, Any] = {"reason": reason.value}
        if hint:
            context["hint"] = hint
        super().__init__(message=message, context=context)
        self.reason = reason
        self.hint = hint


class ForbiddenError(CocktailAPIError):
    """
    Raised when an authenticated principal lacks a permission or role.

    HTTP:    403 Forbidden
    Context: userPermissions or userRole, so the client sees what it does have.
    """

    status_code = 403
    error = "Forbidden"

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, context=context)


class NotFoundError(CocktailAPIError):
    """Requested resource or route does not exist."""

    status_code = 404
    error = "Not Found"

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        message: Optional[str] = None,
    ):
        if message is None:
            message = f"The requested {resource} was not found"
            if resource_id:
                message = f"{resource} '{resource_id}' was not found"
        super().__init__(message=message)
        self.resource = resource
        self.resource_id = resource_id


class RateLimitExceededError(CocktailAPIError):
    """
    Raised when a client exceeds a rate limiter's ceiling for the current window.

    HTTP:    429 Too Many Requests
    Response includes:
        - retryAfter: seconds until the window resets
        - Retry-After header for HTTP-compliant clients
    """

    status_code = 429
    error = "Rate limit exceeded"

    def __init__(
        self,
        retry_after: int,
        message: str = "Too many requests, please try again later",
    ):
        super().__init__(message=message, context={"retryAfter": retry_after})
        self.retry_after = retry_after


class InternalError(CocktailAPIError):
    """
    Wraps an unexpected failure caught at a handler boundary.

    `details` carries the underlying error text for diagnostics.
    """

    status_code = 500
    error = "Internal Server Error"

    def __init__(self, message: str = "Internal server error", details: Optional[str] = None):
        context = {"details": details} if details is not None else None
        super().__init__(message=message, context=context)
        self.details = details
