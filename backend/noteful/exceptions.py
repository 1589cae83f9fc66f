"""
Noteful Backend — Custom Exception Hierarchy
=============================================

What:  Application-specific exceptions for the error scenarios of the API.
How:   Each exception carries a message and optional context dict. Global
       exception handlers (registered in main.py) turn them into structured
       JSON error responses with the right HTTP status.
Who:   Raised by services; caught by global handlers.

Exception Hierarchy:
    NotefulError (base)         → 500 Internal Server Error
    ├── ValidationError         → 400 Bad Request (client can fix)
    ├── NotFoundError           → 404 Not Found
    └── DatabaseError           → 500 Internal Server Error (store failure)
"""

from typing import Any, Dict, Optional


class NotefulError(Exception):
    """
    Base exception for all Noteful application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, returned only for validation errors)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(NotefulError):
    """
    Raised when client input fails validation.

    When:    Missing or empty `title`, `tags` not a list, missing folder/tag
             name, duplicate folder/tag name.
    HTTP:    400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "message": "Missing `title` in request body",
            "details": {"field": "title"}
        }
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NotFoundError(NotefulError):
    """
    Raised when a requested resource does not exist.

    When:    GET /api/notes/{id} (or a folder/tag) with an unknown id; PUT on a
             note that was never created or already deleted.
    HTTP:    404 Not Found
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id is not None:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource = resource
        self.resource_id = resource_id


class DatabaseError(NotefulError):
    """
    Raised when the relational store fails.

    When:    Connection lost mid-query, foreign key violation (e.g. unknown tag
             id in a note's tag list), deadlock, etc.
    HTTP:    500 Internal Server Error

    The client always gets a generic message; the original error type is kept
    in `context` for the server-side log only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
