"""Python client for the CIAM identity and access management service."""
from .core.client import (
    Ciam,
    CiamClient,
    CheckSubjectType,
    PermissionCheckRequest,
    PermissionCheckResult,
    PermissionService,
    RoleService,
    UserService,
)
from .core.exceptions import CiamError, InvalidArgument, InvalidToken, PermissionDenied, TransportError
from .core.result import ABSENT, Found, Result

__version__ = "0.1.0"

__all__ = [
    "Ciam",
    "CiamClient",
    "CheckSubjectType",
    "PermissionCheckRequest",
    "PermissionCheckResult",
    "PermissionService",
    "RoleService",
    "UserService",
    "CiamError",
    "InvalidArgument",
    "InvalidToken",
    "PermissionDenied",
    "TransportError",
    "ABSENT",
    "Found",
    "Result",
]
