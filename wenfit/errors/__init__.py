from .codes import ErrorCodes
from .messages import (
    MessageRegistry,
    MessageTemplate,
    clear_error_messages,
    error_messages,
    get_message_registry,
    set_error_message,
    set_error_messages,
)
from .validation_error import AsyncValidationRequired, ValidationError, ValidationErrorData

__all__ = [
    "ErrorCodes",
    "ValidationError",
    "ValidationErrorData",
    "AsyncValidationRequired",
    "MessageRegistry",
    "MessageTemplate",
    "get_message_registry",
    "set_error_messages",
    "set_error_message",
    "clear_error_messages",
    "error_messages",
]
