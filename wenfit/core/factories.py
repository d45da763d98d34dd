"""
Factory functions for building schemas.

Provides the lowercase constructors that make up the public schema DSL.
"""

from __future__ import annotations

from typing import Callable, Mapping, Sequence

from .array import ArraySchema
from .intersection import IntersectionSchema
from .object import ObjectSchema, UnknownKeys
from .primitives import (
    BooleanSchema,
    DateSchema,
    EnumSchema,
    NumberSchema,
    StringSchema,
    StringToFloatSchema,
    StringToIntSchema,
)
from .schema import LazySchema, Schema
from .union import UnionSchema


def string() -> StringSchema:
    """
    Validate a str value.

    Usage:
        string().min(1).max(100)
        string().email()
        string().pattern(r"^[a-z]+$").trim()
    """
    return StringSchema()


def number() -> NumberSchema:
    """
    Validate an int or float (bool is rejected).

    Usage:
        number().min(0)
        number().int().positive()
    """
    return NumberSchema()


def boolean() -> BooleanSchema:
    """Validate a bool value."""
    return BooleanSchema()


def date() -> DateSchema:
    """Validate a datetime/date instance."""
    return DateSchema()


def enum_schema(values: Sequence[str | int | float]) -> EnumSchema:
    """
    Validate membership in a fixed list of literals.

    Usage:
        enum_schema(["active", "inactive", "pending"])
        enum_schema([1, 2, 3])
    """
    return EnumSchema(values)


def object(
    shape: Mapping[str, Schema], *, unknown_keys: UnknownKeys = UnknownKeys.STRIP
) -> ObjectSchema:
    """
    Validate a mapping with declared fields.

    Unknown keys are stripped from the output unless `.strict()` or
    `.passthrough()` is used.

    Usage:
        object({
            "name": string().min(1),
            "email": string().email().optional(),
            "tags": array(string()),
        })
    """
    return ObjectSchema(shape, unknown_keys)


def array(element: Schema) -> ArraySchema:
    """
    Validate a list whose elements all match `element`.

    Usage:
        array(string()).min(1).max(10)
    """
    return ArraySchema(element)


def union(options: Sequence[Schema]) -> UnionSchema:
    """
    Validate against the first matching option.

    Usage:
        union([string(), number()])
        string() | number()  # Same as above
    """
    return UnionSchema(options)


def intersection(schemas: Sequence[Schema]) -> IntersectionSchema:
    """
    Validate against every schema and merge the results.

    Usage:
        intersection([object({"id": number()}), object({"name": string()})])
        base & extra  # Same as intersection([base, extra])
    """
    return IntersectionSchema(schemas)


def lazy(factory: Callable[[], Schema]) -> LazySchema:
    """
    Defer construction of a schema, for recursive definitions.

    Usage:
        category = lazy(lambda: object({
            "name": string(),
            "parent": category.optional(),
        }))
    """
    return LazySchema(factory)


def coerce_int() -> StringToIntSchema:
    """Parse a numeric string into an int."""
    return StringToIntSchema()


def coerce_float() -> StringToFloatSchema:
    """Parse a numeric string into a float."""
    return StringToFloatSchema()
