"""Capability protocols satisfied by every ``Enum`` subclass.

They are structural: any object providing the methods qualifies, which is
what ``Enum.equals`` relies on when it is handed a foreign comparable.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, Protocol, Self, runtime_checkable

__all__ = ["Comparable", "Enumerable", "Instantiatable"]


@runtime_checkable
class Comparable(Protocol):
    def equals(self, comparable: Comparable, type_safe: bool = True) -> bool:
        """Return ``True`` if *comparable* is equal to this object."""
        ...

    def compare_value(self) -> Any:
        """Return the value ``equals`` compares."""
        ...


@runtime_checkable
class Enumerable(Protocol):
    """Class-level surface of an enumeration type."""

    @classmethod
    def names(cls) -> tuple[str, ...]: ...

    @classmethod
    def ordinals(cls) -> dict[str, int]: ...

    @classmethod
    def translations(cls) -> dict[str, str]: ...

    @classmethod
    def enumerations(cls, filter: Iterable[str] | str | None = None) -> list[Any]: ...

    @classmethod
    def value_of(cls, name: str) -> Any: ...

    @classmethod
    def from_ordinal(cls, ordinal: int) -> Any: ...

    @classmethod
    def has(cls, name: object) -> bool: ...


@runtime_checkable
class Instantiatable(Enumerable, Comparable, Protocol):
    """An enumeration instance: a named, ordered, canonical value."""

    @property
    def name(self) -> str: ...

    @property
    def ordinal(self) -> int: ...

    def translate(self) -> str: ...

    def hash_code(self) -> str: ...

    def refresh(self) -> Self: ...
