"""CIAM user management operations."""
from __future__ import annotations
from typing import Any, Dict, Optional, Sequence

from .. import validators as check
from ..result import Result
from .client import CiamClient

DEFAULT_PAGE_SIZE = 100
MAX_PAGE_SIZE = 100


def page_params(skip: int, limit: int) -> Dict[str, int]:
    """Validate and build ``skip``/``limit`` query parameters for list endpoints."""
    check.minimum(skip, 0, "skip")
    check.in_range(limit, 1, MAX_PAGE_SIZE, "limit")
    return {"skip": skip, "limit": limit}


class UserService:
    """Service for managing CIAM users."""

    def __init__(self, client: CiamClient):
        """Initialize user service.

        Args:
            client: CIAM client carrying the bearer token
        """
        self.client = client

    def get_user(self, user_id: str) -> Result:
        """Fetch a user by object id.

        Args:
            user_id: 24 character hex id

        Returns:
            Found(user) or ABSENT if no such user exists
        """
        check.object_id(user_id)
        return self.client.get(f"/user/{user_id}")

    def get_self(self) -> Result:
        """Fetch the user that owns the configured token."""
        return self.client.get("/user")

    def create_user(
        self,
        name: str,
        roles: Sequence[str] = (),
        permissions: Sequence[str] = (),
        discord_id: Optional[str] = None,
    ) -> Result:
        """Create a new user.

        Args:
            name: Display name
            roles: Role object ids to assign
            permissions: Permission flags granted directly to the user
            discord_id: Linked Discord account, if any

        Returns:
            Found(user) as created by the service
        """
        check.not_empty(name, "name")
        check.object_ids(roles, "roles")
        check.flags(permissions, "permissions")
        payload: Dict[str, Any] = {
            "name": name,
            "roles": list(roles),
            "permissions": list(permissions),
        }
        if discord_id is not None:
            check.discord_id(discord_id, "discordId")
            payload["discordId"] = discord_id
        return self.client.post("/user/create", json=payload)

    def update_user(self, user: Dict[str, Any]) -> Result:
        """Replace a user record; ``user["_id"]`` selects the record."""
        check.object_id(user.get("_id"), "_id")
        if "permissions" in user:
            check.flags(user["permissions"], "permissions")
        if "roles" in user:
            check.object_ids(user["roles"], "roles")
        return self.client.post("/user/update", json=user)

    def delete_user(self, user_id: str) -> Result:
        check.object_id(user_id)
        return self.client.delete(f"/user/{user_id}")

    def list_users(self, skip: int = 0, limit: int = DEFAULT_PAGE_SIZE) -> Result:
        """List users one page at a time.

        Args:
            skip: Number of records to skip (>= 0)
            limit: Page size (1..100)

        Returns:
            Found(list of users)
        """
        return self.client.get("/user/list", params=page_params(skip, limit))
