"""
Schema classes and the factory functions used to build them.
"""

from .array import ArraySchema
from .factories import (
    array,
    boolean,
    coerce_float,
    coerce_int,
    date,
    enum_schema,
    intersection,
    lazy,
    number,
    object,
    string,
    union,
)
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
from .schema import (
    DefaultSchema,
    LazySchema,
    NullableSchema,
    OptionalSchema,
    RefineSchema,
    Schema,
    TransformSchema,
)
from .union import UnionSchema

__all__ = [
    # Base
    "Schema",
    "OptionalSchema",
    "NullableSchema",
    "DefaultSchema",
    "TransformSchema",
    "RefineSchema",
    "LazySchema",
    # Composites
    "ObjectSchema",
    "UnknownKeys",
    "ArraySchema",
    "UnionSchema",
    "IntersectionSchema",
    # Primitives
    "StringSchema",
    "NumberSchema",
    "BooleanSchema",
    "DateSchema",
    "EnumSchema",
    "StringToIntSchema",
    "StringToFloatSchema",
    # Factories
    "string",
    "number",
    "boolean",
    "date",
    "enum_schema",
    "object",
    "array",
    "union",
    "intersection",
    "lazy",
    "coerce_int",
    "coerce_float",
]
