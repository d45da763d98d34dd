"""
ArraySchema - validation for sequences with an element schema and length bounds.
"""

from __future__ import annotations

from typing import Any

from ..context import ParseContext
from ..errors.codes import ErrorCodes
from ..types import INVALID, MISSING
from .schema import Schema
from .util import Constraint, is_sequence, report, type_name


class ArraySchema(Schema):
    """
    Schema for lists (and tuples) whose elements all match one schema.

    Every element is validated, even after an earlier one fails. Constraint
    violations are reported at the array's own path, after element errors.
    The output is a new list.
    """

    def __init__(self, element: Schema, bounds: dict[str, Constraint] | None = None):
        if not isinstance(element, Schema):
            raise TypeError(f"Element must be a Schema, got {type(element).__name__}")
        self._element = element
        self._bounds: dict[str, Constraint] = dict(bounds or {})

    @property
    def element(self) -> Schema:
        return self._element

    def __repr__(self) -> str:
        return f"ArraySchema({self._element!r})"

    def _check(self, value: Any, ctx: ParseContext) -> bool:
        if not is_sequence(value):
            ctx.add_error_with_template(
                ErrorCodes.INVALID_TYPE,
                "Expected array",
                {"expected": "array", "received": type_name(value)},
            )
            return False
        if ctx.has_visited(value):
            ctx.add_error_with_template(
                ErrorCodes.CIRCULAR_REFERENCE, "Circular reference detected"
            )
            return False
        return True

    def _check_bounds(self, size: int, ctx: ParseContext) -> bool:
        ok = True
        lower = self._bounds.get("min")
        if lower is not None and size < lower.value:
            report(
                ctx, ErrorCodes.ARRAY_MIN, lower,
                f"Array must have at least {lower.value} elements",
                {"min": lower.value, "actual": size},
            )
            ok = False
        upper = self._bounds.get("max")
        if upper is not None and size > upper.value:
            report(
                ctx, ErrorCodes.ARRAY_MAX, upper,
                f"Array must have at most {upper.value} elements",
                {"max": upper.value, "actual": size},
            )
            ok = False
        exact = self._bounds.get("length")
        if exact is not None and size != exact.value:
            report(
                ctx, ErrorCodes.ARRAY_LENGTH, exact,
                f"Array must have exactly {exact.value} elements",
                {"length": exact.value, "actual": size},
            )
            ok = False
        return ok

    def _parse(self, value: Any, ctx: ParseContext) -> Any:
        if not self._check(value, ctx):
            return INVALID

        result: list[Any] = []
        failed = False
        with ctx.visiting(value):
            for index, item in enumerate(value):
                with ctx.path_segment(index):
                    item_result = self._element._parse(item, ctx)
                if item_result is INVALID:
                    failed = True
                else:
                    result.append(None if item_result is MISSING else item_result)

        if not self._check_bounds(len(value), ctx):
            failed = True
        return INVALID if failed else result

    async def _parse_async(self, value: Any, ctx: ParseContext) -> Any:
        if not self._check(value, ctx):
            return INVALID

        result: list[Any] = []
        failed = False
        with ctx.visiting(value):
            for index, item in enumerate(value):
                with ctx.path_segment(index):
                    item_result = await self._element._parse_async(item, ctx)
                if item_result is INVALID:
                    failed = True
                else:
                    result.append(None if item_result is MISSING else item_result)

        if not self._check_bounds(len(value), ctx):
            failed = True
        return INVALID if failed else result

    # Constraints

    def _with(self, name: str, value: int, message: str | None) -> ArraySchema:
        if not isinstance(value, int) or isinstance(value, bool) or value < 0:
            raise ValueError(f"Array {name} must be a non-negative integer, got {value!r}")
        return ArraySchema(self._element, {**self._bounds, name: Constraint(value, message)})

    def min(self, length: int, message: str | None = None) -> ArraySchema:
        return self._with("min", length, message)

    def max(self, length: int, message: str | None = None) -> ArraySchema:
        return self._with("max", length, message)

    def length(self, length: int, message: str | None = None) -> ArraySchema:
        return self._with("length", length, message)

    def nonempty(self, message: str | None = None) -> ArraySchema:
        """Alias for min(1)."""
        return self.min(1, message or "Array must not be empty")

    def to_json_schema(self) -> dict[str, Any]:
        schema: dict[str, Any] = {"type": "array", "items": self._element.to_json_schema()}
        if "min" in self._bounds:
            schema["minItems"] = self._bounds["min"].value
        if "max" in self._bounds:
            schema["maxItems"] = self._bounds["max"].value
        if "length" in self._bounds:
            schema["minItems"] = schema["maxItems"] = self._bounds["length"].value
        return schema
