from typing import Any


def sqlalchemy_enum(cls, **kwargs: Any):
    """A plain ``sqlalchemy.Enum`` over the declared names."""
    try:
        from sqlalchemy import Enum
    except ImportError as e:
        raise RuntimeError("Install sqlalchemy to use .sqlalchemy_enum") from e
    kwargs.setdefault("name", cls.__name__.lower())
    return Enum(*cls.ordinals(), **kwargs)
