"""CIAM role management operations."""
from __future__ import annotations
from typing import Any, Dict, Sequence

from .. import validators as check
from ..result import Result
from .client import CiamClient
from .users import DEFAULT_PAGE_SIZE, page_params


class RoleService:
    """Service for managing CIAM roles."""

    def __init__(self, client: CiamClient):
        """Initialize role service.

        Args:
            client: CIAM client carrying the bearer token
        """
        self.client = client

    def get_role(self, role_id: str) -> Result:
        """Fetch a role by object id, ABSENT if it does not exist."""
        check.object_id(role_id)
        return self.client.get(f"/role/{role_id}")

    def create_role(self, name: str, description: str, permissions: Sequence[str] = ()) -> Result:
        """Create a role carrying a set of permission flags.

        Args:
            name: Role name
            description: Free text description
            permissions: Flags granted by the role; wildcards allowed

        Returns:
            Found(role) as created by the service
        """
        check.not_empty(name, "name")
        check.not_empty(description, "description")
        check.flags(permissions, "permissions")
        payload = {
            "name": name,
            "description": description,
            "permissions": list(permissions),
        }
        return self.client.post("/role/create", json=payload)

    def update_role(self, role: Dict[str, Any]) -> Result:
        check.object_id(role.get("_id"), "_id")
        if "permissions" in role:
            check.flags(role["permissions"], "permissions")
        return self.client.post("/role/update", json=role)

    def delete_role(self, role_id: str) -> Result:
        check.object_id(role_id)
        return self.client.delete(f"/role/{role_id}")

    def list_roles(self, skip: int = 0, limit: int = DEFAULT_PAGE_SIZE) -> Result:
        return self.client.get("/role/list", params=page_params(skip, limit))
