"""
NumberSchema - validation for int/float values, plus string-to-number coercion.
"""

from __future__ import annotations

import math
import re
from abc import abstractmethod
from typing import Any

from ...context import ParseContext
from ...errors.codes import ErrorCodes
from ...errors.validation_error import ValidationErrorData
from ...types import INVALID
from ..schema import Schema
from ..util import Constraint, is_number, report, type_name

# Plain decimal notation only: no underscores, no inf/nan words
_INT_LITERAL = re.compile(r"[+-]?[0-9]+")
_FLOAT_LITERAL = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


def _is_finite(value: int | float) -> bool:
    # ints of any size are finite
    return isinstance(value, int) or math.isfinite(value)


def _is_integral(value: int | float) -> bool:
    return isinstance(value, int) or (math.isfinite(value) and value.is_integer())


class NumberSchema(Schema):
    """
    Schema for numbers (int or float; bool is rejected).

    Checks run finite, min, max, int, positive, negative; the first failing
    check is the only one reported.
    """

    def __init__(self, constraints: dict[str, Constraint] | None = None):
        self._constraints: dict[str, Constraint] = dict(constraints or {})

    def __repr__(self) -> str:
        return f"NumberSchema({sorted(self._constraints)!r})"

    def _parse(self, value: Any, ctx: ParseContext) -> Any:
        if not is_number(value):
            ctx.add_error_with_template(
                ErrorCodes.INVALID_TYPE,
                "Expected number",
                {"expected": "number", "received": type_name(value)},
            )
            return INVALID

        if isinstance(value, float) and math.isnan(value):
            ctx.add_error_with_template(
                ErrorCodes.INVALID_TYPE,
                "Expected number, received NaN",
                {"expected": "number", "received": "NaN"},
            )
            return INVALID

        c = self._constraints

        if "finite" in c and not _is_finite(value):
            report(ctx, ErrorCodes.NUMBER_FINITE, c["finite"], "Number must be finite")
            return INVALID

        if "min" in c and value < c["min"].value:
            report(
                ctx, ErrorCodes.NUMBER_MIN, c["min"],
                f"Number must be at least {c['min'].value}",
                {"min": c["min"].value, "actual": value},
            )
            return INVALID

        if "max" in c and value > c["max"].value:
            report(
                ctx, ErrorCodes.NUMBER_MAX, c["max"],
                f"Number must be at most {c['max'].value}",
                {"max": c["max"].value, "actual": value},
            )
            return INVALID

        if "int" in c and not _is_integral(value):
            report(
                ctx, ErrorCodes.NUMBER_INT, c["int"],
                "Number must be an integer", {"actual": value},
            )
            return INVALID

        if "positive" in c and value <= 0:
            report(
                ctx, ErrorCodes.NUMBER_POSITIVE, c["positive"],
                "Number must be positive", {"actual": value},
            )
            return INVALID

        if "negative" in c and value >= 0:
            report(
                ctx, ErrorCodes.NUMBER_NEGATIVE, c["negative"],
                "Number must be negative", {"actual": value},
            )
            return INVALID

        return value

    def _with(self, name: str, value: Any = None, message: str | None = None) -> NumberSchema:
        if value is not None and not is_number(value):
            raise TypeError(f"Number {name} must be a number, got {type(value).__name__}")
        return NumberSchema({**self._constraints, name: Constraint(value, message)})

    def min(self, value: float, message: str | None = None) -> NumberSchema:
        return self._with("min", value, message)

    def max(self, value: float, message: str | None = None) -> NumberSchema:
        return self._with("max", value, message)

    def int(self, message: str | None = None) -> NumberSchema:
        return self._with("int", message=message)

    def positive(self, message: str | None = None) -> NumberSchema:
        return self._with("positive", message=message)

    def negative(self, message: str | None = None) -> NumberSchema:
        return self._with("negative", message=message)

    def finite(self, message: str | None = None) -> NumberSchema:
        return self._with("finite", message=message)

    @property
    def is_int(self) -> bool:
        return "int" in self._constraints

    def to_json_schema(self) -> dict[str, Any]:
        c = self._constraints
        schema: dict[str, Any] = {"type": "integer" if self.is_int else "number"}
        if "min" in c:
            schema["minimum"] = c["min"].value
        if "max" in c:
            schema["maximum"] = c["max"].value
        return schema


class _StringToNumberSchema(Schema):
    """
    Parses a numeric string into a number.

    Surrounding whitespace is ignored. Only plain decimal notation is
    accepted: digit-group underscores ("1_000") and the words "inf",
    "infinity" and "nan" are rejected.
    """

    kind: str = ""
    code: ErrorCodes = ErrorCodes.NUMBER_PARSE_FLOAT

    @abstractmethod
    def _convert(self, value: str) -> Any:
        """Convert a stripped string, raising ValueError if it is not a number."""

    def _parse(self, value: Any, ctx: ParseContext) -> Any:
        if not isinstance(value, str):
            ctx.add_error(
                ValidationErrorData(
                    path=ctx.get_current_path(),
                    message=f"Expected string for {self.kind} parsing",
                    code=ErrorCodes.INVALID_TYPE,
                    meta={"expected": "string", "received": type_name(value)},
                )
            )
            return INVALID
        try:
            return self._convert(value.strip())
        except ValueError:
            ctx.add_error_with_template(
                self.code,
                f"Failed to parse string as {self.kind}",
                {"actual": value},
            )
            return INVALID


class StringToIntSchema(_StringToNumberSchema):
    kind = "integer"
    code = ErrorCodes.NUMBER_PARSE_INT

    def _convert(self, value: str) -> int:
        if not _INT_LITERAL.fullmatch(value):
            raise ValueError(value)
        return int(value, 10)

    def to_json_schema(self) -> dict[str, Any]:
        return {"type": "string", "pattern": r"^\s*[+-]?[0-9]+\s*$"}


class StringToFloatSchema(_StringToNumberSchema):
    kind = "float"
    code = ErrorCodes.NUMBER_PARSE_FLOAT

    def _convert(self, value: str) -> float:
        if not _FLOAT_LITERAL.fullmatch(value):
            raise ValueError(value)
        return float(value)

    def to_json_schema(self) -> dict[str, Any]:
        return {"type": "string"}
