"""
Gif Catalog Backend — Custom Exception Hierarchy
==================================================

What:  Application-specific exceptions for the record store, the API and
       the client components.
Why:   Services raise domain errors; global handlers registered in main.py
       turn them into JSON responses with the right status code. Routes stay
       free of try/except blocks.
How:   Each exception carries a user-facing message and an optional context
       dict that is logged and returned as `details`.

Exception Hierarchy:
    GifCatalogError (base)
    ├── ValidationError    → 422 Unprocessable Entity (blank field, duplicate name)
    ├── NotFoundError      → 404 Not Found
    ├── DatabaseError      → 500 Internal Server Error
    └── NetworkError       → client side only (fetch failed or non-2xx)
"""

from typing import Any, Dict, List, Optional


class GifCatalogError(Exception):
    """
    Base exception for all Gif Catalog errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = dict(context or {})
        super().__init__(self.message)


class ValidationError(GifCatalogError):
    """
    Raised when a gif cannot be saved because it breaks a data rule.

    When:    `name` or `url` missing, blank or too long; `likes` not an
             integer or out of range; `name` already taken.
    HTTP:    422 Unprocessable Entity

    `errors` holds one full message per failed rule, e.g.
    ["Name can't be blank", "Url can't be blank"]. Clients can show them
    as-is. The summary `message` joins them.

    Example response:
        {
            "error": "validation_error",
            "message": "Validation failed: Name has already been taken",
            "errors": ["Name has already been taken"],
            "details": {"fields": ["name"]},
            "request_id": "a1b2c3d4"
        }
    """

    def __init__(
        self,
        errors: Optional[List[str]] = None,
        fields: Optional[List[str]] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        self.errors = list(errors or [])
        self.fields = list(fields or [])
        ctx = dict(context or {})
        if self.fields:
            ctx["fields"] = self.fields
        message = "Validation failed"
        if self.errors:
            message = f"Validation failed: {', '.join(self.errors)}"
        super().__init__(message=message, context=ctx)


class NotFoundError(GifCatalogError):
    """
    Raised when a requested record does not exist.

    When:    GET /api/v1/gifs/{id} with an id that was never issued.
    HTTP:    404 Not Found

    SQLAlchemy returns None for missing rows; the store converts that into
    this exception so the handler can pick the status code.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = dict(context or {})
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class DatabaseError(GifCatalogError):
    """
    Raised when a database operation fails unexpectedly.

    HTTP:    500 Internal Server Error

    The message returned to the client is always generic. The original
    exception type goes into `context` and is logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NetworkError(GifCatalogError):
    """
    Raised by the API client when a request does not produce usable JSON.

    Covers transport failures (connection refused, DNS), non-2xx responses
    and bodies that are not valid JSON. For HTTP failures the message reads
    "<status> (<reason>)", e.g. "422 (Unprocessable Entity)".
    """

    def __init__(
        self,
        message: str = "Network request failed",
        status_code: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = dict(context or {})
        if status_code is not None:
            ctx["status_code"] = status_code
        super().__init__(message=message, context=ctx)
        self.status_code = status_code
