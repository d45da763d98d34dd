"""
EnumSchema - membership in a fixed list of literal values.
"""

from __future__ import annotations

from typing import Any, Sequence, Union

from ...context import ParseContext
from ...errors.codes import ErrorCodes
from ...types import INVALID
from ..schema import Schema
from ..util import is_number, same_kind

Literal = Union[str, int, float]


class EnumSchema(Schema):
    """
    Schema accepting exactly one of a non-empty, ordered list of literals.

    Membership never coerces: "1" does not match 1 and True does not match 1.
    """

    def __init__(self, values: Sequence[Literal]):
        if isinstance(values, (str, bytes)):
            raise TypeError("Enum values must be a sequence of literals, not a string")
        values = tuple(values)
        if not values:
            raise ValueError("Enum must have at least one value")
        for value in values:
            if not (isinstance(value, str) or is_number(value)):
                raise TypeError(
                    f"Enum values must be strings or numbers, got {type(value).__name__}"
                )
        self._values = values

    @property
    def values(self) -> tuple[Literal, ...]:
        return self._values

    def __repr__(self) -> str:
        return f"EnumSchema({list(self._values)!r})"

    def _parse(self, value: Any, ctx: ParseContext) -> Any:
        for allowed in self._values:
            if same_kind(allowed, value):
                return value

        ctx.add_error_with_template(
            ErrorCodes.ENUM_INVALID,
            f"Invalid enum value. Expected one of: {', '.join(str(v) for v in self._values)}",
            {"allowed_values": list(self._values), "received": value},
        )
        return INVALID

    def to_json_schema(self) -> dict[str, Any]:
        schema: dict[str, Any] = {"enum": list(self._values)}
        if all(isinstance(v, str) for v in self._values):
            schema["type"] = "string"
        elif all(isinstance(v, int) for v in self._values):
            schema["type"] = "integer"
        elif all(is_number(v) for v in self._values):
            schema["type"] = "number"
        return schema
