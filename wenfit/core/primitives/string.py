"""
StringSchema - validation for str values.
"""

from __future__ import annotations

import re
from typing import Any, Pattern, Union
from urllib.parse import urlparse

from ...context import ParseContext
from ...errors.codes import ErrorCodes
from ...types import INVALID
from ..schema import Schema, TransformSchema
from ..util import Constraint, report, type_name

_EMAIL = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def _is_url(value: str) -> bool:
    try:
        parsed = urlparse(value)
    except ValueError:
        return False
    return bool(parsed.scheme) and bool(parsed.netloc)


class StringSchema(Schema):
    """Schema for str values with optional length, pattern and format checks."""

    def __init__(self, constraints: dict[str, Constraint] | None = None):
        self._constraints: dict[str, Constraint] = dict(constraints or {})

    def __repr__(self) -> str:
        return f"StringSchema({sorted(self._constraints)!r})"

    def _parse(self, value: Any, ctx: ParseContext) -> Any:
        if not isinstance(value, str):
            ctx.add_error_with_template(
                ErrorCodes.INVALID_TYPE,
                "Expected string",
                {"expected": "string", "received": type_name(value)},
            )
            return INVALID

        c = self._constraints
        size = len(value)

        if "min" in c and size < c["min"].value:
            report(
                ctx, ErrorCodes.STRING_MIN, c["min"],
                f"String must be at least {c['min'].value} characters",
                {"min": c["min"].value, "actual": size},
            )
            return INVALID

        if "max" in c and size > c["max"].value:
            report(
                ctx, ErrorCodes.STRING_MAX, c["max"],
                f"String must be at most {c['max'].value} characters",
                {"max": c["max"].value, "actual": size},
            )
            return INVALID

        if "length" in c and size != c["length"].value:
            report(
                ctx, ErrorCodes.STRING_LENGTH, c["length"],
                f"String must be exactly {c['length'].value} characters",
                {"length": c["length"].value, "actual": size},
            )
            return INVALID

        if "pattern" in c and not c["pattern"].value.search(value):
            report(
                ctx, ErrorCodes.STRING_PATTERN, c["pattern"],
                "String does not match pattern",
                {"pattern": c["pattern"].value.pattern},
            )
            return INVALID

        if "email" in c and not _EMAIL.match(value):
            report(ctx, ErrorCodes.STRING_EMAIL, c["email"], "Invalid email format")
            return INVALID

        if "url" in c and not _is_url(value):
            report(ctx, ErrorCodes.STRING_URL, c["url"], "Invalid URL format")
            return INVALID

        return value

    # Constraints

    def _with(self, name: str, value: Any = None, message: str | None = None) -> StringSchema:
        return StringSchema({**self._constraints, name: Constraint(value, message)})

    def min(self, length: int, message: str | None = None) -> StringSchema:
        return self._with("min", length, message)

    def max(self, length: int, message: str | None = None) -> StringSchema:
        return self._with("max", length, message)

    def length(self, length: int, message: str | None = None) -> StringSchema:
        return self._with("length", length, message)

    def pattern(self, regex: Union[str, Pattern[str]], message: str | None = None) -> StringSchema:
        """Require a match anywhere in the string (use anchors for a full match)."""
        return self._with("pattern", re.compile(regex), message)

    def email(self, message: str | None = None) -> StringSchema:
        return self._with("email", message=message)

    def url(self, message: str | None = None) -> StringSchema:
        return self._with("url", message=message)

    # Transforms

    def trim(self) -> TransformSchema:
        return self.transform(str.strip)

    def to_lower(self) -> TransformSchema:
        return self.transform(str.lower)

    def to_upper(self) -> TransformSchema:
        return self.transform(str.upper)

    def to_json_schema(self) -> dict[str, Any]:
        c = self._constraints
        schema: dict[str, Any] = {"type": "string"}
        if "min" in c:
            schema["minLength"] = c["min"].value
        if "max" in c:
            schema["maxLength"] = c["max"].value
        if "length" in c:
            schema["minLength"] = schema["maxLength"] = c["length"].value
        if "pattern" in c:
            schema["pattern"] = c["pattern"].value.pattern
        if "email" in c:
            schema["format"] = "email"
        if "url" in c:
            schema["format"] = "uri"
        return schema
