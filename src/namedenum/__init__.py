from __future__ import annotations

import logging

from .core import Enum, EnumMeta, make_enum
from .errors import (
    AmbiguousNameError,
    DeclarationError,
    EnumError,
    InvalidArgumentError,
    MissingTranslationError,
    UnknownNameError,
    UnknownOrdinalError,
)
from .interfaces import Comparable, Enumerable, Instantiatable
from .registry import Registry, shared_registry
from .stubgen import main as nestub

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Enum", "EnumMeta", "make_enum",
    "Registry", "shared_registry",
    "Comparable", "Enumerable", "Instantiatable",
    "EnumError", "InvalidArgumentError", "UnknownNameError", "UnknownOrdinalError",
    "DeclarationError", "AmbiguousNameError", "MissingTranslationError",
    "plugin",
    "compatibility_extensions",
    "nestub",
]


def __getattr__(name: str):
    if name == "plugin":
        from .mypy_plugin import plugin
        return plugin
    if name == "compatibility_extensions":
        from . import compatibility_extensions
        return compatibility_extensions
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
