"""
BooleanSchema - validation for bool values.
"""

from __future__ import annotations

from typing import Any

from ...context import ParseContext
from ...errors.codes import ErrorCodes
from ...types import INVALID
from ..schema import Schema
from ..util import type_name


class BooleanSchema(Schema):
    def _parse(self, value: Any, ctx: ParseContext) -> Any:
        if not isinstance(value, bool):
            ctx.add_error_with_template(
                ErrorCodes.INVALID_TYPE,
                "Expected boolean",
                {"expected": "boolean", "received": type_name(value)},
            )
            return INVALID
        return value

    def __repr__(self) -> str:
        return "BooleanSchema()"

    def to_json_schema(self) -> dict[str, Any]:
        return {"type": "boolean"}
