"""
Noteful API - Custom Exception Hierarchy
========================================

What:  Application-specific exceptions for the error scenarios of the API.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return `{"error": {"message": ...}}` bodies with the matching status.
Who:   Raised by validators and services; caught by global handlers.

Exception Hierarchy:
    NotefulError (base)          → 500 Internal Server Error
    ├── ValidationError          → 400 Bad Request (client can fix)
    ├── NotFoundError            → 404 Not Found
    ├── ConstraintError          → 400 Bad Request (integrity violation)
    └── DatabaseError            → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class NotefulError(Exception):
    """
    Base exception for all Noteful application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
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
    Raised when a request body is missing required fields.

    HTTP:    400 Bad Request

    Example response:
        {"error": {"message": "Request body must contain 'folder name'"}}
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

    HTTP:    404 Not Found

    SQLAlchemy returns None for missing rows; services convert that None
    into this exception. The message names the resource type:
    "Folder doesn't exist", "Note doesn't exist".
    """

    def __init__(
        self,
        resource: str = "Resource",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"{resource} doesn't exist"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource = resource
        self.resource_id = resource_id


class ConstraintError(NotefulError):
    """
    Raised when the store rejects a write because of an integrity rule.

    When:    A note references a folder id that does not exist.
    HTTP:    400 Bad Request
    """

    def __init__(
        self,
        message: str = "Request violates a data constraint",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(NotefulError):
    """
    Raised when database operations fail unexpectedly.

    HTTP:    500 Internal Server Error

    The message returned to the client is always generic. Driver errors,
    SQL and constraint names go to the server log through `context`.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
