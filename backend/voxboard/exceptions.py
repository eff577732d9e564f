"""
Voxboard Backend - Custom Exception Hierarchy
==============================================

What:  Application-specific exceptions for every failure the API reports.
How:   Each exception carries a user-facing message and an optional context
       dict. Global handlers (registered in main.py) translate them into the
       JSON error envelope with the matching HTTP status code.
Who:   Raised by adapters and services; caught by the global handlers.

Exception Hierarchy:
    VoxboardError (base)             -> 500, message returned as-is
    ├── ValidationError              -> 400 Bad Request
    │   └── DuplicateError           -> 400 Bad Request (unique key taken)
    ├── NotFoundError                -> 404 Not Found
    ├── ExternalServiceError         -> 500, generic message
    │   ├── SynthesisError           (Text-to-Speech)
    │   ├── StorageError             (Cloud Storage)
    │   └── GenerationError          (Gemini)
    └── PersistenceError             -> 500, generic message

Context is logged server-side and never returned for the 500 family.
"""

from typing import Any, Dict, Optional


class VoxboardError(Exception):
    """
    Base exception for all Voxboard application errors.

    Attributes:
        message:  User-facing error description
        context:  Additional debug info (logged, not returned for 5xx errors)
    """

    status_code = 500
    error_code = "server_error"

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(VoxboardError):
    """
    Raised when client input fails validation.

    When:  Missing required fields, rating out of range, unsupported upload.
    HTTP:  400 Bad Request
    """

    status_code = 400
    error_code = "validation_error"

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


class DuplicateError(ValidationError):
    """
    Raised when a create operation hits an existing unique key.

    When:  A History or Profile already exists for the email.
    HTTP:  400 Bad Request (creation is rejected, never upserted)
    """

    error_code = "already_exists"

    def __init__(
        self,
        resource: str = "resource",
        key: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"{resource.capitalize()} already exists"
        if key:
            message = f"{resource.capitalize()} for '{key}' already exists"
        ctx = context or {}
        ctx["resource"] = resource
        super().__init__(message=message, field="email", context=ctx)


class NotFoundError(VoxboardError):
    """
    Raised when a requested resource does not exist.

    SQLAlchemy returns None (or an empty list) for missing rows; services
    convert that into this exception.
    HTTP:  404 Not Found
    """

    status_code = 404
    error_code = "not_found"

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        if message is None:
            message = f"The requested {resource} was not found"
            if resource_id:
                message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class ExternalServiceError(VoxboardError):
    """
    Raised when a Google Cloud dependency fails.

    HTTP:  500 Internal Server Error. The response carries a generic message;
           the provider error is only logged.
    """

    error_code = "external_service_error"

    def __init__(
        self,
        message: str = "An external service failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class SynthesisError(ExternalServiceError):
    """Text-to-Speech failed or returned no audio."""

    def __init__(
        self,
        message: str = "Speech synthesis failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class StorageError(ExternalServiceError):
    """Cloud Storage upload/delete failed (transport, auth, missing bucket)."""

    def __init__(
        self,
        message: str = "Blob storage operation failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class GenerationError(ExternalServiceError):
    """Gemini failed after all retries or produced no text."""

    def __init__(
        self,
        message: str = "Failed to generate content",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class PersistenceError(VoxboardError):
    """
    Raised when a database operation fails unexpectedly.

    HTTP:  500 Internal Server Error. The SQL error is logged, never returned.
    """

    error_code = "persistence_error"

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
