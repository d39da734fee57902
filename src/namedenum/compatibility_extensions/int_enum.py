from enum import IntEnum

from namedenum import core


def to_int_enum(cls: core.EnumMeta) -> type[IntEnum]:
    return IntEnum(cls.__name__, list(cls.ordinals().items()), module=cls.__module__)
