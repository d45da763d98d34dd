"""
Pydantic interop for wenfit schemas.

Provides to_pydantic() for compiling an ObjectSchema into a model class.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal
from typing import Optional as TypingOptional
from typing import Union

from pydantic import BaseModel, create_model

from .core import (
    ArraySchema,
    BooleanSchema,
    DateSchema,
    DefaultSchema,
    EnumSchema,
    IntersectionSchema,
    NullableSchema,
    NumberSchema,
    ObjectSchema,
    OptionalSchema,
    RefineSchema,
    Schema,
    StringSchema,
    StringToFloatSchema,
    StringToIntSchema,
    UnionSchema,
)


def to_pydantic(name: str, schema: ObjectSchema) -> type[BaseModel]:
    """
    Compile an object schema to a Pydantic model.

    Args:
        name: Name of the generated model class
        schema: ObjectSchema describing the model's fields

    Returns:
        A Pydantic BaseModel subclass

    Usage:
        User = to_pydantic("User", object({
            "name": string(),
            "email": string().optional(),
        }))
        user = User(name="Alice")
    """
    if not isinstance(schema, ObjectSchema):
        raise TypeError("Schema must be an ObjectSchema")

    fields: dict[str, Any] = {}
    for key, field_schema in schema.shape.items():
        fields[key] = _extract_pydantic_field(field_schema, f"{name}_{key}")

    return create_model(name, **fields)


def _extract_pydantic_field(schema: Schema, model_name: str) -> tuple[Any, Any]:
    """Extract Pydantic field type and default from a field schema."""
    match schema:
        case OptionalSchema(inner=inner):
            return (TypingOptional[_python_type(inner, model_name)], None)
        case DefaultSchema(inner=inner, default_value=default):
            return (_python_type(inner, model_name), default)
        case NullableSchema(inner=inner) if inner.accepts_missing:
            field_type, _ = _extract_pydantic_field(inner, model_name)
            return (TypingOptional[field_type], None)

    return (_python_type(schema, model_name), ...)


def _python_type(schema: Schema, model_name: str) -> Any:
    """Best-effort Python type for a schema's output."""
    match schema:
        case StringSchema():
            return str
        case NumberSchema(is_int=True) | StringToIntSchema():
            return int
        case NumberSchema() | StringToFloatSchema():
            return float
        case BooleanSchema():
            return bool
        case DateSchema():
            return datetime
        case EnumSchema(values=values):
            return Literal[values]
        case ArraySchema(element=element):
            return list[_python_type(element, f"{model_name}_item")]  # type: ignore[misc]
        case ObjectSchema():
            return to_pydantic(model_name, schema)
        case UnionSchema(options=options):
            return Union[tuple(_python_type(o, model_name) for o in options)]
        case NullableSchema(inner=inner) | OptionalSchema(inner=inner):
            return TypingOptional[_python_type(inner, model_name)]
        case DefaultSchema(inner=inner) | RefineSchema(inner=inner):
            return _python_type(inner, model_name)
        case IntersectionSchema():
            return dict[str, Any]

    return Any
