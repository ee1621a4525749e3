"""Request and response shapes for permission checks."""
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from ..exceptions import TransportError


class CheckSubjectType(str, Enum):
    """How the ``id`` of a permission check is interpreted."""
    USER = "user"
    ROLE = "role"
    DISCORD_USER = "discordUser"


SUBJECT_TYPES = tuple(member.value for member in CheckSubjectType)


@dataclass(frozen=True)
class PermissionCheckRequest:
    subject_type: str
    id: str
    required: List[str]
    additional: List[str] = field(default_factory=list)
    include_missing: bool = False

    def to_payload(self) -> Dict[str, Any]:
        """Serialize to the camelCase body expected by ``POST /permission/has``."""
        return {
            "subjectType": self.subject_type,
            "id": self.id,
            "required": list(self.required),
            "additional": list(self.additional),
            "includeMissing": self.include_missing,
        }


@dataclass(frozen=True)
class PermissionCheckResult:
    """Outcome of a permission check.

    The service owns the exact shape; ``raw`` keeps the body as received.
    ``missing`` is only populated when the check was made with
    ``include_missing=True`` and the subject was denied.
    """
    allowed: bool
    missing: Optional[List[str]] = None
    raw: Any = None

    @classmethod
    def from_json(cls, body: Union[Dict[str, Any], bool]) -> "PermissionCheckResult":
        if isinstance(body, bool):
            return cls(allowed=body, raw=body)
        if not isinstance(body, dict):
            raise TransportError(200, f"Unexpected permission check response: {body!r}", "/permission/has")
        missing = body.get("missing")
        return cls(
            allowed=bool(body.get("allowed")),
            missing=list(missing) if missing is not None else None,
            raw=body,
        )
