"""
wenfit - composable runtime data validation.

Usage:
    from wenfit import object, string, number, array

    user = object({
        "name": string().min(1),
        "age": number().min(0).optional(),
        "tags": array(string()),
    })

    data = user.parse(payload)          # raises ValidationError
    result = user.safe_parse(payload)   # Ok(data) or Err(error)
"""

from .context import ParseContext
from .core import (
    ArraySchema,
    BooleanSchema,
    DateSchema,
    DefaultSchema,
    EnumSchema,
    IntersectionSchema,
    LazySchema,
    NullableSchema,
    NumberSchema,
    ObjectSchema,
    OptionalSchema,
    RefineSchema,
    Schema,
    StringSchema,
    StringToFloatSchema,
    StringToIntSchema,
    TransformSchema,
    UnionSchema,
    UnknownKeys,
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
from .errors import (
    AsyncValidationRequired,
    ErrorCodes,
    MessageRegistry,
    MessageTemplate,
    ValidationError,
    ValidationErrorData,
    clear_error_messages,
    error_messages,
    get_message_registry,
    set_error_message,
    set_error_messages,
)
from .interop import to_pydantic
from .plugins import GlobalValidationRule, Plugin, PluginRegistry, plugin_registry
from .transformers import Transformer, TransformerPipeline
from .types import INVALID, MISSING, Err, Ok

__all__ = [
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
    # Schema classes
    "Schema",
    "OptionalSchema",
    "NullableSchema",
    "DefaultSchema",
    "TransformSchema",
    "RefineSchema",
    "LazySchema",
    "ObjectSchema",
    "UnknownKeys",
    "ArraySchema",
    "UnionSchema",
    "IntersectionSchema",
    "StringSchema",
    "NumberSchema",
    "BooleanSchema",
    "DateSchema",
    "EnumSchema",
    "StringToIntSchema",
    "StringToFloatSchema",
    # Results
    "Ok",
    "Err",
    "INVALID",
    "MISSING",
    "ParseContext",
    # Errors
    "ErrorCodes",
    "ValidationError",
    "ValidationErrorData",
    "AsyncValidationRequired",
    # Messages
    "MessageRegistry",
    "MessageTemplate",
    "get_message_registry",
    "set_error_messages",
    "set_error_message",
    "clear_error_messages",
    "error_messages",
    # Transformers
    "Transformer",
    "TransformerPipeline",
    # Plugins
    "Plugin",
    "PluginRegistry",
    "GlobalValidationRule",
    "plugin_registry",
    # Interop
    "to_pydantic",
]
