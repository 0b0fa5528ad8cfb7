"""
Movies API — Custom Exception Hierarchy
=========================================

What:  Application-specific exceptions for the error scenarios of the service.
How:   Each exception carries a message and an optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return JSON error envelopes with the matching HTTP status code.
Who:   Raised by the storage layer and routes; caught by global handlers.

Exception Hierarchy:
    MoviesAPIError (base)   → 500 Internal Server Error
    ├── NotFoundError       → 404 Not Found
    └── DatabaseError       → 500 Internal Server Error

Undecodable request bodies never reach this hierarchy: FastAPI raises
RequestValidationError, which main.py maps to 400.
"""

from typing import Any, Dict, Optional


class MoviesAPIError(Exception):
    """
    Base exception for all Movies API errors.

    Attributes:
        message:  Client-facing error description (returned in the response body)
        context:  Extra debug info (logged, and returned as `details` where the
                  handler chooses to)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class NotFoundError(MoviesAPIError):
    """
    Raised when a requested movie does not exist.

    When:    GET or PUT /movies/{id} with an id that matches no document.
    HTTP:    404 Not Found

    The message is the fixed text "Movie not found" unless overridden; the id
    is kept in the context for logging.
    """

    def __init__(
        self,
        resource: str = "Movie",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"{resource} not found"
        ctx = context or {}
        ctx["resource"] = resource.lower()
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource_id = resource_id


class DatabaseError(MoviesAPIError):
    """
    Raised when a MongoDB operation fails.

    When:    Server selection timeout, lost connection, duplicate primary key,
             or any other driver error on read or write.
    HTTP:    500 Internal Server Error

    The driver's error text is the message and is returned to the client, so
    that a failed list reports what went wrong. The operation name and the
    driver exception type go into the context.
    """

    def __init__(
        self,
        message: str = "A database error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
