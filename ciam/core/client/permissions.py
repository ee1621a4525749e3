"""CIAM permission management and permission checks."""
from __future__ import annotations
import logging
from typing import Any, Dict, Optional, Sequence, Union

from .. import validators as check
from ..result import Result
from .client import CiamClient
from .models import CheckSubjectType, PermissionCheckRequest, PermissionCheckResult, SUBJECT_TYPES
from .users import DEFAULT_PAGE_SIZE, page_params

logger = logging.getLogger(__name__)


class PermissionService:
    """Service for managing CIAM permissions."""

    def __init__(self, client: CiamClient):
        """Initialize permission service.

        Args:
            client: CIAM client carrying the bearer token
        """
        self.client = client

    def get_permission(self, flag: str) -> Result:
        check.strict_flag(flag)
        return self.client.get(f"/permission/{flag}")

    def create_permission(self, name: str, description: str, flag: str) -> Result:
        """Register a new permission flag.

        Args:
            name: Permission name
            description: Free text description
            flag: Concrete flag, wildcards are rejected

        Returns:
            Found(permission) as created by the service
        """
        check.not_empty(name, "name")
        check.not_empty(description, "description")
        check.strict_flag(flag)
        payload = {
            "name": name,
            "description": description,
            "flag": flag,
        }
        return self.client.post("/permission/create", json=payload)

    def update_permission(self, permission: Dict[str, Any]) -> Result:
        """Replace a permission record; ``permission["flag"]`` selects the record."""
        check.strict_flag(permission.get("flag"))
        return self.client.post("/permission/update", json=permission)

    def delete_permission(self, flag: str) -> Result:
        check.strict_flag(flag)
        return self.client.delete(f"/permission/{flag}")

    def my_permissions(self) -> Result:
        """List the flags held by the owner of the configured token."""
        return self.client.get("/permission/me")

    def list_permissions(self, skip: int = 0, limit: int = DEFAULT_PAGE_SIZE) -> Result:
        return self.client.get("/permission/list", params=page_params(skip, limit))

    def check_permissions(
        self,
        subject_type: Union[str, CheckSubjectType],
        subject_id: str,
        required: Sequence[str],
        additional: Optional[Sequence[str]] = (),
        include_missing: bool = False,
    ) -> Result:
        """Ask the service whether a subject holds every required flag.

        All arguments are validated before the request is issued; a
        validation failure means nothing was sent.

        Args:
            subject_type: "user", "role" or "discordUser"
            subject_id: Object id for users and roles, Discord id otherwise
            required: Flags the subject must hold (at least one)
            additional: Temporary grants considered alongside the subject's own;
                None is the same as no grants
            include_missing: Ask the service to list the flags that were missing

        Returns:
            Found(PermissionCheckResult) or ABSENT

        Raises:
            InvalidArgument: If any argument is malformed
        """
        if isinstance(subject_type, CheckSubjectType):
            subject_type = subject_type.value
        check.one_of(subject_type, SUBJECT_TYPES, "subjectType")
        if subject_type == CheckSubjectType.DISCORD_USER.value:
            check.discord_id(subject_id, "id")
        else:
            check.object_id(subject_id, "id")
        check.not_empty(required, "required")
        check.flags(required, "required")
        if additional is None:
            additional = ()
        check.flags(additional, "additional")
        check.boolean(include_missing, "includeMissing")

        request = PermissionCheckRequest(
            subject_type=subject_type,
            id=subject_id,
            required=list(required),
            additional=list(additional),
            include_missing=include_missing,
        )
        logger.debug("Checking %d flag(s) for %s %s", len(request.required), subject_type, subject_id)
        result = self.client.post("/permission/has", json=request.to_payload())
        return result.map(PermissionCheckResult.from_json)
