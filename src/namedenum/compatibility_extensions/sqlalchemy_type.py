from __future__ import annotations

from typing import Any

from sqlalchemy import Enum
from sqlalchemy.types import TypeDecorator


class NamedEnumType(TypeDecorator):
    """Column type storing an Enum instance by name.

    Rows read back are canonical instances::

        Column("align", NamedEnumType(TextAlign))
    """

    impl = Enum
    cache_ok = True

    def __init__(self, enum_cls: type, **kwargs: Any) -> None:
        self.enum_cls = enum_cls
        kwargs.setdefault("name", enum_cls.__name__.lower())
        super().__init__(*enum_cls.ordinals(), **kwargs)

    def process_bind_param(self, value: Any, dialect: Any) -> str | None:
        if value is None:
            return None
        if isinstance(value, self.enum_cls):
            return value.name
        return self.enum_cls.value_of(value).name

    def process_result_value(self, value: Any, dialect: Any) -> Any:
        if value is None:
            return None
        return self.enum_cls.value_of(value)
