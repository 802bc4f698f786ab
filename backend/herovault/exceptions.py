"""
HeroVault Backend - Custom Exception Hierarchy
===============================================

What:  Application-specific exceptions for the three failure classes of
       the record facade.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with correct HTTP status codes.
Who:   Raised by services; caught by global handlers.

Exception Hierarchy:
    HeroVaultError (base)
    ├── ValidationError          → 400 Bad Request
    ├── NotFoundError            → 404 Not Found
    └── StoreError               → 500 Internal Server Error
        └── UploadTooLargeError  → 500 Internal Server Error

No error is retried; every one of them reaches the client.
"""

from typing import Any, Dict, List, Optional

# Leading `loc` entries FastAPI adds to request validation errors
REQUEST_LOCATIONS = {"body", "query", "path", "header", "cookie", "form"}


class HeroVaultError(Exception):
    """
    Base exception for all HeroVault application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged; returned only for store errors
                  when EXPOSE_ERROR_DETAILS is enabled)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(HeroVaultError):
    """
    Raised when client input fails validation.

    What:    Missing or empty required field, or a missing mandatory upload.
    HTTP:    400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "message": "All fields are required",
            "details": {"fields": ["characterName"]}
        }
    """

    def __init__(
        self,
        message: str = "Validation failed",
        fields: Optional[List[str]] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if fields:
            ctx["fields"] = list(fields)
        super().__init__(message=message, context=ctx)
        self.fields = list(fields or [])

    @classmethod
    def from_errors(cls, errors: List[Dict[str, Any]]) -> "ValidationError":
        """
        Build one ValidationError from pydantic-style error dicts.

        Accepts both `pydantic.ValidationError.errors()` and FastAPI's
        `RequestValidationError.errors()`; the request location prefix
        ("body", "query", ...) is dropped from field names.
        """
        missing: List[str] = []
        problems: List[Dict[str, str]] = []
        for err in errors:
            loc = list(err.get("loc") or ())
            if loc and loc[0] in REQUEST_LOCATIONS:
                loc = loc[1:]
            field = ".".join(str(part) for part in loc) or "body"
            if err.get("type") in ("missing", "empty"):
                missing.append(field)
            problems.append({"field": field, "message": str(err.get("msg", "Invalid value"))})

        if missing and len(missing) == len(problems):
            message = f"Missing required fields: {', '.join(missing)}"
        else:
            message = f"Invalid fields: {', '.join(p['field'] for p in problems)}"
        fields = [p["field"] for p in problems]
        return cls(message=message, fields=fields, context={"errors": problems})


class NotFoundError(HeroVaultError):
    """
    Raised when a requested record does not exist.

    What:    The identifier does not resolve to a stored record.
    When:    GET/PUT/DELETE /api/<entity>/{id} with an unknown or malformed id.
    HTTP:    404 Not Found

    The store returns None for missing records; services convert that None
    into this exception so HTTP concerns stay out of the store layer.
    """

    def __init__(
        self,
        resource: str = "Record",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource.lower()} was not found"
        if resource_id:
            message = f"{resource} with id {resource_id} not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource = resource
        self.resource_id = resource_id


class StoreError(HeroVaultError):
    """
    Raised when a store operation fails.

    What:    Connection lost, constraint violation, malformed row, timeout.
    HTTP:    500 Internal Server Error

    The `context["error"]` entry holds the underlying failure text. The
    handler returns it to the client only when EXPOSE_ERROR_DETAILS is on.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class UploadTooLargeError(StoreError):
    """
    Raised when an uploaded file exceeds MAX_UPLOAD_SIZE.

    HTTP:    500 Internal Server Error (the upload limit is enforced at the
             transport layer, alongside the store errors)
    """

    def __init__(
        self,
        size: int,
        limit: int,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"File size ({size} bytes) exceeds maximum of {limit} bytes"
        ctx = context or {}
        ctx.update({"error": "File too large", "size": size, "limit": limit})
        super().__init__(message=message, context=ctx)
        self.size = size
        self.limit = limit
