"""
DateSchema - validation for datetime/date values.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Any

from ...context import ParseContext
from ...errors.codes import ErrorCodes
from ...types import INVALID
from ..schema import Schema
from ..util import Constraint, report, type_name


def _as_datetime(value: date) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime(value.year, value.month, value.day)


def _comparable(left: datetime, right: datetime) -> tuple[datetime, datetime]:
    """Align tz-awareness; naive values are taken as UTC."""
    if (left.tzinfo is None) != (right.tzinfo is None):
        if left.tzinfo is None:
            left = left.replace(tzinfo=timezone.utc)
        else:
            right = right.replace(tzinfo=timezone.utc)
    return left, right


class DateSchema(Schema):
    """Schema for `datetime.datetime` and `datetime.date` instances."""

    def __init__(self, constraints: dict[str, Constraint] | None = None):
        self._constraints: dict[str, Constraint] = dict(constraints or {})

    def __repr__(self) -> str:
        return f"DateSchema({sorted(self._constraints)!r})"

    def _parse(self, value: Any, ctx: ParseContext) -> Any:
        if not isinstance(value, date):
            ctx.add_error_with_template(
                ErrorCodes.INVALID_TYPE,
                "Expected date",
                {"expected": "date", "received": type_name(value)},
            )
            return INVALID

        c = self._constraints
        actual = _as_datetime(value)

        if "min" in c:
            lower, current = _comparable(c["min"].value, actual)
            if current < lower:
                report(
                    ctx, ErrorCodes.DATE_MIN, c["min"],
                    f"Date must be at or after {c['min'].value.isoformat()}",
                    {"min": c["min"].value.isoformat(), "actual": actual.isoformat()},
                )
                return INVALID

        if "max" in c:
            upper, current = _comparable(c["max"].value, actual)
            if current > upper:
                report(
                    ctx, ErrorCodes.DATE_MAX, c["max"],
                    f"Date must be at or before {c['max'].value.isoformat()}",
                    {"max": c["max"].value.isoformat(), "actual": actual.isoformat()},
                )
                return INVALID

        return value

    def _with(self, name: str, value: date, message: str | None) -> DateSchema:
        if not isinstance(value, date):
            raise TypeError(f"Date {name} must be a date, got {type(value).__name__}")
        return DateSchema({**self._constraints, name: Constraint(_as_datetime(value), message)})

    def min(self, value: date, message: str | None = None) -> DateSchema:
        return self._with("min", value, message)

    def max(self, value: date, message: str | None = None) -> DateSchema:
        return self._with("max", value, message)

    def to_json_schema(self) -> dict[str, Any]:
        c = self._constraints
        schema: dict[str, Any] = {"type": "string", "format": "date-time"}
        if "min" in c:
            schema["formatMinimum"] = c["min"].value.isoformat()
        if "max" in c:
            schema["formatMaximum"] = c["max"].value.isoformat()
        return schema
