"""Core CIAM client logic: validation, results, and the HTTP services."""
from .exceptions import CiamError, InvalidArgument, InvalidToken, PermissionDenied, TransportError
from .result import ABSENT, Found, Result, decode

__all__ = [
    "ABSENT",
    "Found",
    "Result",
    "decode",
    "CiamError",
    "InvalidArgument",
    "InvalidToken",
    "PermissionDenied",
    "TransportError",
]
