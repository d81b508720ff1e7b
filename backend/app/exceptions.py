"""
Device Registry Backend — Custom Exception Hierarchy
======================================================

What:  Defines application-specific exceptions for different error scenarios.
Why:   Custom exceptions enable targeted error handling with appropriate HTTP
       status codes. Global exception handlers (registered in main.py) catch
       these and return the matching response.
Who:   Raised by services; caught by global handlers.

Exception Hierarchy:
    DeviceRegistryError (base)
    ├── NotFoundError       → 404 Not Found (empty body or plain message)
    ├── PayloadDecodeError  → 500 Internal Server Error (stored JSON is malformed)
    └── DatabaseError       → 500 Internal Server Error (query or mutation failed)

Request body validation is handled by FastAPI itself (RequestValidationError),
mapped to 400 in main.py.
"""

from typing import Any, Dict, Optional


class DeviceRegistryError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  Error description
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


class NotFoundError(DeviceRegistryError):
    """
    Raised when a requested resource, or an entity referenced by name,
    does not exist.

    HTTP: 404 Not Found

    When `detail` is given it is returned to the client as a plain JSON
    string (e.g. "DeviceType not found."); otherwise the body is empty.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[Any] = None,
        detail: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = detail or f"The requested {resource} was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource = resource
        self.detail = detail


class PayloadDecodeError(DeviceRegistryError):
    """
    Raised when a device's stored additional-properties text is not valid JSON.

    HTTP: 500 Internal Server Error

    Kept apart from DatabaseError: the query succeeded, the stored data is bad.
    """

    title = "Invalid additional properties"

    def __init__(
        self,
        message: str = "Stored additional properties are not valid JSON",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(DeviceRegistryError):
    """
    Raised when database operations fail unexpectedly.

    HTTP: 500 Internal Server Error

    `title` names the failed operation ("Cannot create new device");
    `message` carries the underlying error text, which is returned as the
    problem `detail`. This service is not security-hardened.
    """

    def __init__(
        self,
        message: str = "A database error occurred.",
        title: str = "Server error",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
        self.title = title
