"""Explicit lookup results for CIAM responses.

The service answers a missing resource with 404 and sometimes answers a
successful call with no body at all. Both decode to :data:`ABSENT`; anything
else is wrapped in :class:`Found`.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar, Union

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class Found(Generic[T]):
    """A response that carried a value."""
    value: T

    def __bool__(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default: Any) -> T:
        return self.value

    def map(self, fn: Callable[[T], U]) -> "Found[U]":
        return Found(fn(self.value))


class _Absent:
    """The resource does not exist or the service returned nothing."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "ABSENT"

    @property
    def value(self) -> None:
        return None

    def unwrap(self):
        raise LookupError("CIAM returned no result")

    def unwrap_or(self, default: Any) -> Any:
        return default

    def map(self, fn: Callable[[Any], Any]) -> "_Absent":
        return self


ABSENT = _Absent()

Result = Union[Found[T], _Absent]


def decode(status_code: int, body: Any) -> Result:
    """Turn an HTTP status and decoded body into a lookup result.

    Args:
        status_code: HTTP status (errors other than 404 are handled upstream)
        body: JSON-decoded body, raw text, or None when there was no content

    Returns:
        ABSENT for 404 or an empty body, Found(body) otherwise
    """
    if status_code == 404:
        return ABSENT
    if body is None or body == "" or body == b"":
        return ABSENT
    return Found(body)
