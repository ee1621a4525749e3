"""CIAM-specific exceptions for error handling."""
from __future__ import annotations
from typing import List, Optional


class CiamError(Exception):
    """Base exception for all CIAM operations."""
    pass


class InvalidArgument(CiamError, ValueError):
    """Client-side precondition violated before any request was sent.

    Attributes:
        field: Name of the offending argument
        message: Human readable reason
    """

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(message)


class InvalidToken(CiamError):
    """The service rejected the bearer token."""

    def __init__(self, message: str = "Invalid CIAM token"):
        self.message = message
        super().__init__(message)


class PermissionDenied(CiamError):
    """Token is valid but lacks one or more permission flags.

    Attributes:
        missing: Flags the service reported as missing
    """

    def __init__(self, missing: Optional[List[str]] = None, message: str = "Missing permissions"):
        self.missing = list(missing or [])
        self.message = message
        super().__init__(f"{message}: [{', '.join(self.missing)}]")


class TransportError(CiamError):
    """Unexpected HTTP status from the CIAM API.

    Attributes:
        status_code: HTTP status code
        message: Error message from response
        endpoint: API endpoint that failed
    """

    def __init__(self, status_code: int, message: str, endpoint: str):
        self.status_code = status_code
        self.message = message
        self.endpoint = endpoint
        super().__init__(f"[{status_code}] {endpoint}: {message}")
