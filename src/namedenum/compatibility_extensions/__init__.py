from .base_model import base_model
from .enum import to_enum
from .int_enum import to_int_enum
from .json_schema import json_schema
from .regex import regex_str, regex_pattern
from .sqlalchemy_enum import sqlalchemy_enum
from .str_enum import to_str_enum

__all__ = [
    "base_model",
    "json_schema",
    "regex_pattern",
    "regex_str",
    "sqlalchemy_enum",
    "to_enum",
    "to_int_enum",
    "to_str_enum",
]
