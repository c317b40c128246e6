"""
Travel API — Custom Exception Hierarchy
=========================================

What:  Application-specific exceptions carrying a message and debug context.
How:   Services raise these; global handlers in main.py turn them into
       JSON error responses.

Exception Hierarchy:
    TravelApiError (base)
    └── DatabaseError    → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class TravelApiError(Exception):
    """
    Base exception for all Travel API errors.

    Attributes:
        message:  Error description returned in the response body
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


class DatabaseError(TravelApiError):
    """
    Raised when a query or connection attempt fails.

    Connectivity loss, constraint violations and missing tables all map here;
    clients cannot tell them apart.
    HTTP: 500 Internal Server Error
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


def driver_message(exc: BaseException) -> str:
    """
    Extract the underlying driver's error text from a SQLAlchemy exception.

    SQLAlchemy's DBAPIError wraps the driver exception in ``.orig``; its str()
    appends SQL and a documentation link, which we don't want in responses.
    """
    orig = getattr(exc, "orig", None)
    if orig is not None:
        return str(orig)
    return str(exc) or type(exc).__name__
