"""
ObjectSchema - validation for mapping types with declared fields.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any, Iterable

from ..context import ParseContext
from ..errors.codes import ErrorCodes
from ..types import INVALID, MISSING
from .schema import Schema
from .util import type_name


class UnknownKeys(Enum):
    """What to do with input keys that are not part of the shape."""

    STRIP = "strip"  # Drop them from the output
    STRICT = "strict"  # Report UNKNOWN_KEYS
    PASSTHROUGH = "passthrough"  # Copy them to the output unchanged


class ObjectSchema(Schema):
    """
    Schema for mappings with a fixed set of fields.

    Every field is validated, even after an earlier field fails, so one run
    reports every broken field. The output is a new dict.
    """

    def __init__(
        self,
        shape: Mapping[str, Schema],
        unknown_keys: UnknownKeys = UnknownKeys.STRIP,
    ):
        for key, field_schema in shape.items():
            if not isinstance(field_schema, Schema):
                raise TypeError(
                    f"Field {key!r} must be a Schema, got {type(field_schema).__name__}"
                )
        self._shape: dict[str, Schema] = dict(shape)
        self._unknown_keys = unknown_keys

    @property
    def shape(self) -> Mapping[str, Schema]:
        return dict(self._shape)

    @property
    def unknown_keys(self) -> UnknownKeys:
        return self._unknown_keys

    def __repr__(self) -> str:
        return f"ObjectSchema({list(self._shape)!r}, unknown_keys={self._unknown_keys.value})"

    # Validation

    def _check(self, value: Any, ctx: ParseContext) -> bool:
        if not isinstance(value, Mapping):
            ctx.add_error_with_template(
                ErrorCodes.INVALID_TYPE,
                "Expected object",
                {"expected": "object", "received": type_name(value)},
            )
            return False
        if ctx.has_visited(value):
            ctx.add_error_with_template(
                ErrorCodes.CIRCULAR_REFERENCE, "Circular reference detected"
            )
            return False
        return True

    def _missing_required(self, key: str, field_schema: Schema, value: Mapping, ctx: ParseContext) -> bool:
        if key in value or field_schema.accepts_missing:
            return False
        with ctx.path_segment(key):
            ctx.add_error_with_template(
                ErrorCodes.REQUIRED,
                f"Required property '{key}' is missing",
                {"field": key},
            )
        return True

    def _apply_unknown_keys(self, value: Mapping, result: dict[str, Any], failed: bool, ctx: ParseContext) -> Any:
        if self._unknown_keys is UnknownKeys.STRICT:
            unknown = [key for key in value if key not in self._shape]
            if unknown:
                ctx.add_error_with_template(
                    ErrorCodes.UNKNOWN_KEYS,
                    f"Unknown properties: {', '.join(str(k) for k in unknown)}",
                    {"unknown_keys": unknown},
                )
                failed = True
        elif self._unknown_keys is UnknownKeys.PASSTHROUGH:
            for key, item in value.items():
                if key not in self._shape:
                    result[key] = item

        return INVALID if failed else result

    def _parse(self, value: Any, ctx: ParseContext) -> Any:
        if not self._check(value, ctx):
            return INVALID

        result: dict[str, Any] = {}
        failed = False

        with ctx.visiting(value):
            for key, field_schema in self._shape.items():
                if self._missing_required(key, field_schema, value, ctx):
                    failed = True
                    continue

                with ctx.path_segment(key):
                    field_result = field_schema._parse(value.get(key, MISSING), ctx)

                if field_result is INVALID:
                    failed = True
                elif field_result is not MISSING:
                    result[key] = field_result

        return self._apply_unknown_keys(value, result, failed, ctx)

    async def _parse_async(self, value: Any, ctx: ParseContext) -> Any:
        if not self._check(value, ctx):
            return INVALID

        result: dict[str, Any] = {}
        failed = False

        with ctx.visiting(value):
            for key, field_schema in self._shape.items():
                if self._missing_required(key, field_schema, value, ctx):
                    failed = True
                    continue

                with ctx.path_segment(key):
                    field_result = await field_schema._parse_async(value.get(key, MISSING), ctx)

                if field_result is INVALID:
                    failed = True
                elif field_result is not MISSING:
                    result[key] = field_result

        return self._apply_unknown_keys(value, result, failed, ctx)

    # Derived schemas

    def _derive(self, shape: Mapping[str, Schema], unknown_keys: UnknownKeys | None = None) -> ObjectSchema:
        return ObjectSchema(shape, unknown_keys or self._unknown_keys)

    def strict(self) -> ObjectSchema:
        """Report unknown keys as UNKNOWN_KEYS."""
        return self._derive(self._shape, UnknownKeys.STRICT)

    def strip(self) -> ObjectSchema:
        """Drop unknown keys from the output (the default)."""
        return self._derive(self._shape, UnknownKeys.STRIP)

    def passthrough(self) -> ObjectSchema:
        """Copy unknown keys into the output unchanged."""
        return self._derive(self._shape, UnknownKeys.PASSTHROUGH)

    def pick(self, keys: Iterable[str]) -> ObjectSchema:
        wanted = set(keys)
        return self._derive({k: v for k, v in self._shape.items() if k in wanted})

    def omit(self, keys: Iterable[str]) -> ObjectSchema:
        unwanted = set(keys)
        return self._derive({k: v for k, v in self._shape.items() if k not in unwanted})

    def extend(self, extension: Mapping[str, Schema]) -> ObjectSchema:
        return self._derive({**self._shape, **extension})

    def merge(self, other: ObjectSchema) -> ObjectSchema:
        return self._derive({**self._shape, **other._shape})

    def to_json_schema(self) -> dict[str, Any]:
        properties = {key: s.to_json_schema() for key, s in self._shape.items()}
        required = [key for key, s in self._shape.items() if not s.accepts_missing]

        schema: dict[str, Any] = {"type": "object", "properties": properties}
        if required:
            schema["required"] = required
        schema["additionalProperties"] = self._unknown_keys is not UnknownKeys.STRICT
        return schema
