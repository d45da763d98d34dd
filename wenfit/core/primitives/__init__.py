from .boolean import BooleanSchema
from .date import DateSchema
from .enum import EnumSchema
from .number import NumberSchema, StringToFloatSchema, StringToIntSchema
from .string import StringSchema

__all__ = [
    "BooleanSchema",
    "DateSchema",
    "EnumSchema",
    "NumberSchema",
    "StringSchema",
    "StringToFloatSchema",
    "StringToIntSchema",
]
