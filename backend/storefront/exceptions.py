"""
Storefront Backend — Custom Exception Hierarchy
=================================================

What:  Application-specific exceptions for the catalog and asset services.
How:   Each exception carries a message and an optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with the matching HTTP status.

Exception Hierarchy:
    StorefrontError (base)        → 500
    ├── ValidationError           → 400 Bad Request (client can fix)
    │   └── FileTooLargeError     → 400 Bad Request (upload over size limit)
    ├── NotFoundError             → 404 Not Found
    ├── FileStorageError          → 500 Internal Server Error
    └── DatabaseError             → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class StorefrontError(Exception):
    """
    Base exception for all Storefront application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned for 5xx errors)
    """

    error_code = "server_error"

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(StorefrontError):
    """
    Raised when client input fails validation.

    When:    Wrong image count, disallowed file type, missing form fields,
             malformed `colors` JSON, unparseable price.
    HTTP:    400 Bad Request
    """

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


class FileTooLargeError(ValidationError):
    """
    Raised when an uploaded file exceeds the configured size limit.

    Kept separate from ValidationError so clients can tell "file too large"
    apart from other upload failures (error code `file_too_large`).
    """

    error_code = "file_too_large"

    def __init__(
        self,
        max_size: int,
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        max_mb = max_size / (1024 * 1024)
        ctx = context or {}
        ctx["max_size_mb"] = round(max_mb, 2)
        super().__init__(
            message=f"File too large. Maximum size is {max_mb:.0f} MB.",
            field=field,
            context=ctx,
        )
        self.max_size = max_size


class NotFoundError(StorefrontError):
    """
    Raised when a requested record does not exist.

    The repository returns None for missing records; services convert that
    into NotFoundError so routes stay free of status-code logic.
    HTTP:    404 Not Found
    """

    error_code = "not_found"

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"{resource.capitalize()} not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource = resource
        self.resource_id = resource_id


class FileStorageError(StorefrontError):
    """
    Raised when a file system operation on the upload directory fails.

    When:    Disk full, permission denied, blob already missing on delete.
    HTTP:    500 Internal Server Error
    The message is returned to the client; the OS error stays in `context`.
    """

    def __init__(
        self,
        message: str = "File storage operation failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(StorefrontError):
    """
    Raised when a repository operation fails unexpectedly.

    The message returned to the client is always generic; driver details
    are logged server-side only.
    HTTP:    500 Internal Server Error
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
