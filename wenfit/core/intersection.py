"""
IntersectionSchema - input must satisfy every member schema.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Sequence

from ..context import ParseContext
from ..errors.codes import ErrorCodes
from ..errors.validation_error import ValidationErrorData
from ..types import INVALID, MISSING, Path
from .schema import Schema
from .util import is_sequence, same_kind

logger = logging.getLogger(__name__)


class _MergeConflict(Exception):
    """Internal signal: two member outputs disagree at `path`."""

    def __init__(self, path: Path, left: Any, right: Any):
        self.path = path
        self.left = left
        self.right = right


def merge_values(left: Any, right: Any, path: Path = ()) -> Any:
    """
    Merge two validated values.

    Mappings merge key-wise (recursively where both sides have the key),
    equal-length sequences merge element-wise, anything else must be equal
    and of the same kind.

    Raises:
        _MergeConflict: If the values cannot be reconciled.
    """
    if left is MISSING:
        return right
    if right is MISSING:
        return left

    if isinstance(left, Mapping) and isinstance(right, Mapping):
        merged = dict(left)
        for key, item in right.items():
            merged[key] = merge_values(left[key], item, (*path, key)) if key in left else item
        return merged

    if is_sequence(left) and is_sequence(right):
        if len(left) != len(right):
            raise _MergeConflict(path, left, right)
        return [
            merge_values(a, b, (*path, index))
            for index, (a, b) in enumerate(zip(left, right))
        ]

    if same_kind(left, right):
        return left
    raise _MergeConflict(path, left, right)


class IntersectionSchema(Schema):
    """
    Validates the same input against every member and merges the results.

    Members run in isolated child contexts. Any member failure produces one
    INTERSECTION_INVALID error whose `intersection_errors` meta lists the
    failing members' errors. Results that cannot be merged are an error too;
    no precedence rule picks a winner.
    """

    def __init__(self, schemas: Sequence[Schema]):
        schemas = list(schemas)
        if not schemas:
            raise ValueError("Intersection must have at least one schema")
        for schema in schemas:
            if not isinstance(schema, Schema):
                raise TypeError(
                    f"Intersection members must be Schemas, got {type(schema).__name__}"
                )
        self._schemas = tuple(schemas)

    @property
    def schemas(self) -> tuple[Schema, ...]:
        return self._schemas

    @property
    def accepts_missing(self) -> bool:
        return all(schema.accepts_missing for schema in self._schemas)

    def __repr__(self) -> str:
        return f"IntersectionSchema({list(self._schemas)!r})"

    def __and__(self, other: Schema) -> Schema:
        return IntersectionSchema([*self._schemas, other])

    def _combine(
        self,
        results: list[Any],
        failures: list[list[ValidationErrorData]],
        ctx: ParseContext,
    ) -> Any:
        if failures:
            ctx.add_error_with_template(
                ErrorCodes.INTERSECTION_INVALID,
                "Input did not satisfy all intersection members",
                {"intersection_errors": failures},
            )
            return INVALID

        merged = results[0]
        try:
            for result in results[1:]:
                merged = merge_values(merged, result)
        except _MergeConflict as conflict:
            logger.debug("Intersection conflict at %s", conflict.path)
            location = ".".join(str(s) for s in conflict.path) or "root"
            ctx.add_error_with_template(
                ErrorCodes.INTERSECTION_INVALID,
                f"Intersection members produced conflicting values at {location}",
                {"conflict_path": list(conflict.path), "values": [conflict.left, conflict.right]},
            )
            return INVALID
        return merged

    def _parse(self, value: Any, ctx: ParseContext) -> Any:
        results: list[Any] = []
        failures: list[list[ValidationErrorData]] = []
        for schema in self._schemas:
            attempt = ctx.child()
            result = schema._parse(value, attempt)
            if attempt.is_async_validation():
                ctx.mark_async()
            if attempt.has_errors():
                failures.append(attempt.get_errors())
            else:
                results.append(result)
        return self._combine(results, failures, ctx)

    async def _parse_async(self, value: Any, ctx: ParseContext) -> Any:
        results: list[Any] = []
        failures: list[list[ValidationErrorData]] = []
        for schema in self._schemas:
            attempt = ctx.child()
            result = await schema._parse_async(value, attempt)
            if attempt.is_async_validation():
                ctx.mark_async()
            if attempt.has_errors():
                failures.append(attempt.get_errors())
            else:
                results.append(result)
        return self._combine(results, failures, ctx)

    def to_json_schema(self) -> dict[str, Any]:
        return {"allOf": [schema.to_json_schema() for schema in self._schemas]}
