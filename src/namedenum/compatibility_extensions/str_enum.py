from enum import StrEnum

from namedenum import core


def to_str_enum(cls: core.EnumMeta) -> type[StrEnum]:
    """Convert to a stdlib ``StrEnum`` mapping each name to its translation."""
    members = [(member.name, member.translate()) for member in cls]
    if not all(isinstance(v, str) for _, v in members):
        raise TypeError("to_str_enum needs translations() to return strings")
    return StrEnum(cls.__name__, members, module=cls.__module__)
