"""
Helpers shared by schema implementations.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date
from typing import Any

from ..context import ParseContext
from ..errors.validation_error import ValidationErrorData
from ..types import MISSING


def is_number(value: Any) -> bool:
    """int or float, never bool."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def type_name(value: Any) -> str:
    """JSON-flavoured name of a value's type, for error metadata."""
    if value is MISSING:
        return "undefined"
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if is_number(value):
        if isinstance(value, float) and math.isnan(value):
            return "NaN"
        return "number"
    if isinstance(value, str):
        return "string"
    if is_sequence(value):
        return "array"
    if isinstance(value, Mapping):
        return "object"
    if isinstance(value, date):
        return "date"
    return type(value).__name__


def same_kind(a: Any, b: Any) -> bool:
    """Strict equality: equal values of the same primitive kind (no coercion)."""
    if isinstance(a, bool) or isinstance(b, bool):
        return isinstance(a, bool) and isinstance(b, bool) and a == b
    if is_number(a) and is_number(b):
        return a == b
    return type(a) is type(b) and a == b


@dataclass(frozen=True, slots=True)
class Constraint:
    """A configured check with an optional per-schema message."""

    value: Any = None
    message: str | None = None


def report(
    ctx: ParseContext,
    code: str,
    constraint: Constraint,
    default_message: str,
    meta: Mapping[str, Any] | None = None,
) -> None:
    """Record a constraint failure; a per-schema message overrides templates."""
    if constraint.message:
        ctx.add_error(
            ValidationErrorData(
                path=ctx.get_current_path(), message=constraint.message, code=code, meta=meta
            )
        )
    else:
        ctx.add_error_with_template(code, default_message, meta)
