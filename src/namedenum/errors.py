"""Exception hierarchy for named enumerations.

Every error raised by a factory or instance operation derives from
:class:`EnumError` and also from the builtin exception a caller would
naturally catch (``TypeError``, ``LookupError``, ``IndexError`` or
``ValueError``).
"""

from __future__ import annotations

from typing import Any

__all__ = [
    "EnumError",
    "InvalidArgumentError",
    "UnknownNameError",
    "UnknownOrdinalError",
    "DeclarationError",
    "AmbiguousNameError",
    "MissingTranslationError",
]


class EnumError(Exception):
    """Base exception for all enumeration errors.

    Attributes:
        enum_type: The enumeration class the failing call was made on.
        key: The offending name or ordinal.
    """

    def __init__(self, message: str, *, enum_type: type | None = None, key: Any = None) -> None:
        super().__init__(message)
        self.enum_type = enum_type
        self.key = key


class InvalidArgumentError(EnumError, TypeError):
    """A name or ordinal argument has the wrong type."""


class UnknownNameError(EnumError, LookupError):
    """The requested name is not part of the declaration."""


class UnknownOrdinalError(EnumError, IndexError):
    """The requested ordinal is outside the declared range."""


class DeclarationError(EnumError, ValueError):
    """The enumeration's declaration breaks its own contract."""


class AmbiguousNameError(DeclarationError):
    """A name is declared more than once.

    This is a bug in the declaration, surfaced when the name is looked up.
    """


class MissingTranslationError(AmbiguousNameError):
    """``translations()`` has no entry for a declared name."""
