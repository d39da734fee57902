"""Memoization table that makes enumeration instances canonical.

The registry maps an instance's identity key (see ``Enum.hash_code``) to the
first instance stored under it. Entries are added lazily and never removed.

Thread Safety:
    Reads are lock free. Inserts take a lock and use insert-if-absent, so two
    threads racing on the same first access both get the winning instance and
    the losing candidate is dropped.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .core import Enum

__all__ = ["Registry", "shared_registry"]

logger = logging.getLogger(__name__)


class Registry:
    """Identity key -> canonical instance store."""

    __slots__ = ("_entries", "_lock")

    def __init__(self) -> None:
        self._entries: dict[str, Enum] = {}
        self._lock = threading.Lock()

    def intern(self, candidate: Enum) -> Enum:
        """Return the canonical instance for *candidate*'s identity key.

        Stores *candidate* if nothing is registered under its key yet.
        """
        key = candidate.hash_code()
        entry = self._entries.get(key)
        if entry is not None:
            return entry
        with self._lock:
            entry = self._entries.setdefault(key, candidate)
        if entry is candidate:
            logger.debug("Registered %r under %s", candidate, key)
        return entry

    def get(self, key: str) -> Enum | None:
        return self._entries.get(key)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"<Registry entries={len(self._entries)}>"


_shared: Registry | None = None
_shared_lock = threading.Lock()


def shared_registry() -> Registry:
    """Return the process-wide registry, creating it on first use.

    Used by every enumeration type that was not given its own ``registry=``.
    """
    global _shared
    if _shared is None:
        with _shared_lock:
            if _shared is None:
                _shared = Registry()
    return _shared
