from enum import Enum

from namedenum import core


def to_enum(cls: core.EnumMeta) -> type[Enum]:
    """Convert to a stdlib ``Enum`` whose values are the ordinals."""
    return Enum(cls.__name__, list(cls.ordinals().items()), module=cls.__module__)
