from __future__ import annotations

from typing import Any

from namedenum.errors import EnumError


def core_schema_for(enum_cls: type) -> Any:
    """
    pydantic-core schema for an Enum class.

    Validation accepts an instance (swapped for the canonical one), a name or
    an ordinal. JSON serialization emits the name; python mode keeps the
    instance.
    """
    from pydantic_core import core_schema

    def validate(value: Any) -> Any:
        if isinstance(value, enum_cls):
            return value.refresh()
        try:
            if isinstance(value, str):
                return enum_cls.value_of(value)
            return enum_cls.from_ordinal(value)
        except EnumError as e:
            raise ValueError(str(e)) from e

    return core_schema.no_info_plain_validator_function(
        validate,
        serialization=core_schema.plain_serializer_function_ser_schema(
            lambda member: member.name,
            when_used="json",
        ),
    )
