"""
Type definitions for wenfit.

Provides the parse sentinels, the safe_parse result types (Ok/Err) and
type aliases shared across the engine.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Generic, TypeVar, Union

if TYPE_CHECKING:
    from .errors.validation_error import ValidationError

T = TypeVar("T")


class _Marker(Enum):
    """
    Distinguished markers that never occur in validated data.

    INVALID: returned by a schema's `_parse` when it (or a descendant)
        recorded at least one error on the context.
    MISSING: stands in for an absent value (a key not present in a record,
        or no input at all).
    """

    INVALID = "INVALID"
    MISSING = "MISSING"

    def __repr__(self) -> str:
        return self.name

    def __bool__(self) -> bool:
        return False


INVALID = _Marker.INVALID
MISSING = _Marker.MISSING


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Successful safe_parse result containing the validated value."""

    data: T

    @property
    def success(self) -> bool:
        return True

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False


@dataclass(frozen=True, slots=True)
class Err:
    """Failed safe_parse result containing the ValidationError."""

    error: ValidationError

    @property
    def success(self) -> bool:
        return False

    @property
    def errors(self):
        return self.error.errors

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True


# Type aliases
PathSegment = Union[str, int]
Path = tuple[PathSegment, ...]
ParseResult = Union[T, _Marker, Any]
SafeParseResult = Union[Ok[T], Err]
