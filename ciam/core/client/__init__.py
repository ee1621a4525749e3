"""CIAM API client library.

This package provides a small, testable interface to the CIAM HTTP API.

Architecture:
- client.py: HTTP client with bearer authentication and status mapping
- users.py: User operations (get, create, update, delete, list)
- roles.py: Role operations
- permissions.py: Permission operations and permission checks
- models.py: Permission check request/response shapes

Usage:
    from ciam.core.client import Ciam

    ciam = Ciam("my-token")
    result = ciam.check_permissions("discordUser", "123456789", ["ciam.role.get"])
    if result and result.value.allowed:
        ...
"""
from __future__ import annotations
from typing import Any, Dict, Optional, Sequence, Union

from .client import CiamClient, DEFAULT_BASE_URL, REQUEST_TIMEOUT, parse_missing_permissions
from .models import CheckSubjectType, PermissionCheckRequest, PermissionCheckResult
from .permissions import PermissionService
from .roles import RoleService
from .users import DEFAULT_PAGE_SIZE, UserService
from ..result import Result


class Ciam:
    """Entry point bundling the user, role and permission services.

    Usage:
        ciam = Ciam("my-token", base_url="https://ciam.example.net")
        user = ciam.get_user("0123456789abcdef01234567")
        other = ciam.reconfigure(token="other-token")
    """

    def __init__(self, token: str, base_url: str = DEFAULT_BASE_URL, timeout: float = REQUEST_TIMEOUT):
        self._init_from_client(CiamClient(token, base_url, timeout))

    def _init_from_client(self, client: CiamClient) -> None:
        self.client = client
        self.users = UserService(client)
        self.roles = RoleService(client)
        self.permissions = PermissionService(client)

    @classmethod
    def from_client(cls, client: CiamClient) -> "Ciam":
        instance = cls.__new__(cls)
        instance._init_from_client(client)
        return instance

    @classmethod
    def from_settings(cls, config) -> "Ciam":
        """Build a client from a :class:`ciam.config.CiamConfig`."""
        return cls(config.token, config.base_url, config.timeout)

    def reconfigure(
        self,
        token: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> "Ciam":
        """Return a new Ciam with the given settings replaced; self is unchanged."""
        return Ciam.from_client(self.client.reconfigure(token=token, base_url=base_url, timeout=timeout))

    def validate_token(self) -> bool:
        return self.client.validate_token()

    # Users
    def get_user(self, user_id: str) -> Result:
        return self.users.get_user(user_id)

    def create_user(
        self,
        name: str,
        roles: Sequence[str] = (),
        permissions: Sequence[str] = (),
        discord_id: Optional[str] = None,
    ) -> Result:
        return self.users.create_user(name, roles, permissions, discord_id=discord_id)

    def delete_user(self, user_id: str) -> Result:
        return self.users.delete_user(user_id)

    def list_users(self, skip: int = 0, limit: int = DEFAULT_PAGE_SIZE) -> Result:
        return self.users.list_users(skip, limit)

    # Roles
    def get_role(self, role_id: str) -> Result:
        return self.roles.get_role(role_id)

    def create_role(self, name: str, description: str, permissions: Sequence[str] = ()) -> Result:
        return self.roles.create_role(name, description, permissions)

    def delete_role(self, role_id: str) -> Result:
        return self.roles.delete_role(role_id)

    # Permissions
    def create_permission(self, name: str, description: str, flag: str) -> Result:
        return self.permissions.create_permission(name, description, flag)

    def update_permission(self, permission: Dict[str, Any]) -> Result:
        return self.permissions.update_permission(permission)

    def check_permissions(
        self,
        subject_type: Union[str, CheckSubjectType],
        subject_id: str,
        required: Sequence[str],
        additional: Optional[Sequence[str]] = (),
        include_missing: bool = False,
    ) -> Result:
        return self.permissions.check_permissions(
            subject_type, subject_id, required, additional, include_missing=include_missing
        )


__all__ = [
    "Ciam",
    "CiamClient",
    "DEFAULT_BASE_URL",
    "REQUEST_TIMEOUT",
    "parse_missing_permissions",

    # Models
    "CheckSubjectType",
    "PermissionCheckRequest",
    "PermissionCheckResult",

    # Services
    "UserService",
    "RoleService",
    "PermissionService",
]
