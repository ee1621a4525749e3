"""Input validation helpers for CIAM request arguments.

Every predicate returns ``None`` when the value is acceptable and raises
:class:`~ciam.core.exceptions.InvalidArgument` naming the field otherwise.
Nothing here touches the network.
"""
from __future__ import annotations
import math
import re
from collections.abc import Iterable
from typing import Any, Collection, Optional, Sequence, Sized

from .exceptions import InvalidArgument

OBJECT_ID_PATTERN = re.compile(r"[a-f0-9]{24}")
DISCORD_ID_PATTERN = re.compile(r"[0-9]+")

_SEGMENT = r"[A-Za-z0-9_-]+"
FLAG_PATTERN = re.compile(rf"{_SEGMENT}(?:\.{_SEGMENT})*(?:\.\*)?")
STRICT_FLAG_PATTERN = re.compile(rf"{_SEGMENT}(?:\.{_SEGMENT})*")


def not_empty(value: Optional[Sized], field: str) -> None:
    """Reject ``None``, empty strings and empty sequences.

    Args:
        value: String or sequence to check
        field: Field name for error messages (e.g., "name")

    Raises:
        InvalidArgument: If value is missing or empty
    """
    if value is None:
        raise InvalidArgument(field, f"{field} is required")
    try:
        size = len(value)
    except TypeError:
        raise InvalidArgument(field, f"{field} must be a string or sequence") from None
    if size == 0:
        raise InvalidArgument(field, f"{field} must not be empty")


def object_id(value: Any, field: str = "id") -> None:
    """Require a 24 character lowercase hexadecimal identifier.

    Raises:
        InvalidArgument: If value is not a valid object id
    """
    if not isinstance(value, str) or not OBJECT_ID_PATTERN.fullmatch(value):
        raise InvalidArgument(field, f"{field} must be a 24 character lowercase hex object id")


def discord_id(value: Any, field: str = "id") -> None:
    """Require a non-empty all-digit Discord snowflake."""
    if not isinstance(value, str) or not DISCORD_ID_PATTERN.fullmatch(value):
        raise InvalidArgument(field, f"{field} must be a numeric Discord id")


def minimum(value: float, floor: float, field: str) -> None:
    """Raise if value is below floor."""
    _require_number(value, field)
    if value < floor:
        raise InvalidArgument(field, f"{field} must be at least {floor}")


def in_range(value: float, lo: float, hi: float, field: str) -> None:
    """Raise if value lies outside the inclusive range [lo, hi]."""
    _require_number(value, field)
    if value < lo or value > hi:
        raise InvalidArgument(field, f"{field} must be between {lo} and {hi}")


def one_of(value: Any, allowed: Collection[Any], field: str) -> None:
    """Raise unless value is a member of allowed."""
    try:
        member = value in allowed
    except TypeError:
        member = False
    if not member:
        choices = ", ".join(str(choice) for choice in allowed)
        raise InvalidArgument(field, f"{field} must be one of: {choices}")


def boolean(value: Any, field: str) -> None:
    """Raise unless value is a real bool; strings like "false" are rejected."""
    if not isinstance(value, bool):
        raise InvalidArgument(field, f"{field} must be true or false")


def flag(value: Any, field: str = "flag") -> None:
    """Validate a permission flag such as ``ciam.role.get`` or ``ciam.role.*``.

    Args:
        value: Flag to validate
        field: Field name for error messages

    Raises:
        InvalidArgument: If value is not a valid flag
    """
    if not isinstance(value, str) or not FLAG_PATTERN.fullmatch(value):
        raise InvalidArgument(field, f"{field} is not a valid permission flag: {value!r}")


def strict_flag(value: Any, field: str = "flag") -> None:
    """Validate a permission flag that must not end in a wildcard segment."""
    if isinstance(value, str) and STRICT_FLAG_PATTERN.fullmatch(value):
        return
    if isinstance(value, str) and FLAG_PATTERN.fullmatch(value):
        raise InvalidArgument(field, f"{field} must not end in a wildcard: {value!r}")
    raise InvalidArgument(field, f"{field} is not a valid permission flag: {value!r}")


def flags(values: Iterable[Any], field: str, strict: bool = False) -> None:
    """Validate every flag in values, reporting the index of the first bad one."""
    _require_sequence(values, field)
    check = strict_flag if strict else flag
    for index, value in enumerate(values):
        try:
            check(value, field)
        except InvalidArgument as exc:
            raise InvalidArgument(field, f"{field}[{index}]: {exc.message}") from None


def object_ids(values: Sequence[Any], field: str) -> None:
    _require_sequence(values, field)
    for index, value in enumerate(values):
        if not isinstance(value, str) or not OBJECT_ID_PATTERN.fullmatch(value):
            raise InvalidArgument(field, f"{field}[{index}] must be a 24 character lowercase hex object id")


def _require_number(value: Any, field: str) -> None:
    # bool is an int subclass but never a meaningful count
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidArgument(field, f"{field} must be a number")
    if not math.isfinite(value):
        raise InvalidArgument(field, f"{field} must be a finite number")


def _require_sequence(values: Any, field: str) -> None:
    if isinstance(values, (str, bytes)) or not isinstance(values, Iterable):
        raise InvalidArgument(field, f"{field} must be a list, not {type(values).__name__}")
