"""
namedenum: closed sets of named, ordered, canonical constants.

A concrete enumeration declares its names once; every name maps to exactly
one shared instance per process, reachable by name, by ordinal or through a
generated accessor.

Minimal example::

    class TextAlign(Enum):
        _names_ = ("LEFT", "CENTER", "RIGHT")

    TextAlign.LEFT()                 # <TextAlign.LEFT: 0>
    TextAlign.value_of("LEFT")       # the very same object
    TextAlign.from_ordinal(2).name   # "RIGHT"
    TextAlign.LEFT().equals(TextAlign.RIGHT())   # False
    list(TextAlign)                  # [LEFT, CENTER, RIGHT] instances

Names may also come from an overridden ``names()`` classmethod::

    class Direction(Enum):
        @classmethod
        def names(cls):
            return ("NORTH", "EAST", "SOUTH", "WEST")

Equality is identity. A copied or unpickled instance is a different object
and does not compare equal until ``refresh()`` swaps it back for the
canonical one.
"""

from __future__ import annotations

import hashlib
import keyword
import logging
import operator
import sys
import threading
from collections.abc import Iterable, Iterator
from typing import Any, ClassVar, Self

from .errors import (
    AmbiguousNameError,
    InvalidArgumentError,
    MissingTranslationError,
    UnknownNameError,
    UnknownOrdinalError,
)
from .interfaces import Comparable
from .registry import Registry, shared_registry

__all__ = ["Enum", "EnumMeta", "make_enum"]

logger = logging.getLogger(__name__)

# Reentrant: a names() override may itself look up another enumeration.
_declaration_lock = threading.RLock()


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _parse_names(raw: object, owner: str) -> tuple[str, ...]:
    """Normalize a ``_names_`` declaration into a tuple of names.

    Accepts a whitespace- or comma-separated string (``"LEFT, CENTER"``) or
    any iterable of strings. Order and duplicates are kept as declared.

    Raises:
        InvalidArgumentError: If *raw* is not a string or an iterable of strings.
    """
    if isinstance(raw, str):
        return tuple(name for name in raw.replace(",", " ").split() if name)
    if not isinstance(raw, Iterable):
        raise InvalidArgumentError(
            f"{owner}._names_ must be a str or an iterable of str, "
            f"got {type(raw).__name__}",
            key=raw,
        )
    names = tuple(raw)
    for name in names:
        if not isinstance(name, str):
            raise InvalidArgumentError(
                f"{owner}._names_ contains {name!r} (type {type(name).__name__}); "
                "names must be strings.",
                key=name,
            )
    return names


class _Declaration:
    """Frozen snapshot of a type's ``names()`` plus a name -> positions index."""

    __slots__ = ("names", "_positions")

    def __init__(self, cls: type, names: Iterable[str]) -> None:
        self.names: tuple[str, ...] = tuple(names)
        positions: dict[str, list[int]] = {}
        for ordinal, name in enumerate(self.names):
            if not isinstance(name, str):
                raise InvalidArgumentError(
                    f"{cls.__name__}.names() returned {name!r} "
                    f"(type {type(name).__name__}); names must be strings.",
                    enum_type=cls,
                    key=name,
                )
            positions.setdefault(name, []).append(ordinal)
        self._positions = positions

    def ordinal_of(self, cls: type, name: str) -> int:
        positions = self._positions.get(name)
        if positions is None:
            raise UnknownNameError(
                f"{cls.__name__} has no member named {name!r}",
                enum_type=cls,
                key=name,
            )
        if len(positions) > 1:
            raise AmbiguousNameError(
                f"{name!r} is declared {len(positions)} times in {cls.__name__} "
                f"(ordinals {positions}); names must be unique.",
                enum_type=cls,
                key=name,
            )
        return positions[0]

    def ensure_unique(self, cls: type) -> None:
        for name in self._positions:
            self.ordinal_of(cls, name)


def _is_concrete(cls: type) -> bool:
    """Return ``True`` if *cls* (or a base below ``Enum``) declares names."""
    for klass in cls.__mro__:
        if klass is Enum:
            return False
        attrs = vars(klass)
        if "names" in attrs or attrs.get("_names_") is not None:
            return True
    return False


def _find_attr(cls: type, name: str) -> Any:
    for klass in cls.__mro__:
        if name in vars(klass):
            return vars(klass)[name]
    return _MISSING


_MISSING = object()


class _NamedAccessor:
    """Class attribute that turns ``TextAlign.LEFT()`` into ``value_of("LEFT")``.

    Resolves against the class it is read from, so accessors inherited
    through ``extend=True`` produce instances of the subclass.
    """

    __slots__ = ("name",)

    def __init__(self, name: str) -> None:
        self.name = name

    def __get__(self, instance: object, owner: type | None = None) -> Any:
        if owner is None:
            owner = type(instance)
        name = self.name

        def accessor() -> Any:
            return owner.value_of(name)

        accessor.__name__ = name
        accessor.__qualname__ = f"{owner.__qualname__}.{name}"
        accessor.__doc__ = f"Return the canonical {owner.__name__}.{name} instance."
        return accessor

    def __repr__(self) -> str:
        return f"<named accessor {self.name!r}>"


class _WithdrawnAccessor:
    """Hides an inherited accessor whose name the subclass no longer declares."""

    __slots__ = ("name",)

    def __init__(self, name: str) -> None:
        self.name = name

    def __get__(self, instance: object, owner: type | None = None) -> Any:
        if owner is None:
            owner = type(instance)
        raise AttributeError(f"{owner.__name__} does not declare {self.name!r}")


def _on_metaclass(cls: type, name: str) -> bool:
    return any(name in vars(klass) for klass in type(cls).__mro__)


def _install_accessors(cls: EnumMeta) -> set[str]:
    """Install one ``_NamedAccessor`` per declared identifier name.

    Names already bound on the class, its bases or its metaclass are left
    alone. Returns the names that now resolve to an accessor on *cls*.
    """
    installed: set[str] = set()
    for name in dict.fromkeys(cls._declaration().names):
        if not name.isidentifier() or keyword.iskeyword(name):
            logger.debug("%s: no accessor for %r (not an identifier)", cls.__name__, name)
            continue
        existing = _find_attr(cls, name)
        if isinstance(existing, _NamedAccessor):
            installed.add(name)
            continue
        if isinstance(existing, _WithdrawnAccessor):
            existing = _MISSING
        if existing is not _MISSING or _on_metaclass(cls, name):
            logger.warning(
                "%s: accessor %r would shadow an existing attribute; "
                "use %s.value_of(%r) instead",
                cls.__name__, name, cls.__name__, name,
            )
            continue
        type.__setattr__(cls, name, _NamedAccessor(name))
        installed.add(name)
    logger.debug("%s: %d named accessor(s)", cls.__name__, len(installed))
    return installed


# ---------------------------------------------------------------------------
# Metaclass
# ---------------------------------------------------------------------------

class EnumMeta(type):
    """Metaclass that powers ``Enum``.

    Responsibilities:

    1. **Declaration**: normalizes ``_names_`` and guards subclassing of a
       type that already declares names (``extend=True`` is required).
    2. **Named accessors**: installs ``TextAlign.LEFT()`` style accessors
       for every declared identifier.
    3. **Container protocol**: makes the *class itself* iterable, sized,
       indexable by name and supportive of ``in``.
    """

    # ---- Internal attributes set on every Enum subclass ----
    #
    # _registry_:            Registry | None   explicit registry, None -> shared
    # _generate_accessors_:  bool              whether accessors are installed
    # _accessors_:           frozenset[str]    names resolving to accessors
    # _declaration_:         _Declaration      cached names() (own __dict__ only)

    def __new__(
        mcls,
        name: str,
        bases: tuple[type, ...],
        ns: dict[str, Any],
        *,
        extend: bool = False,
        registry: Registry | None = None,
        accessors: bool | None = None,
        **kwds: Any,
    ) -> EnumMeta:
        """Create a new Enum class.

        Args:
            extend: Required to subclass a type that already declares names.
                A ``_names_`` on the subclass is appended to the inherited ones.
            registry: Registry holding this type's canonical instances.
                ``None`` inherits the parent's, and the root uses
                :func:`shared_registry`.
            accessors: Install named accessors. ``None`` inherits the
                parent's setting (``True`` at the root).

        Raises:
            TypeError: On multiple Enum bases or subclassing a declared type
                without ``extend=True``.
            InvalidArgumentError: If ``_names_`` is malformed.
        """
        cls = super().__new__(mcls, name, bases, ns, **kwds)

        enum_bases = [b for b in bases if isinstance(b, EnumMeta)]
        if not enum_bases:
            cls._registry_ = registry
            cls._generate_accessors_ = True if accessors is None else accessors
            cls._accessors_ = frozenset()
            return cls

        if len(enum_bases) > 1:
            raise TypeError(
                f"{name} may not inherit from multiple Enum bases "
                f"({', '.join(b.__name__ for b in enum_bases)})."
            )
        base = enum_bases[0]

        if not extend and _is_concrete(base):
            raise TypeError(
                f"{name} inherits from {base.__name__}, which already declares names; "
                f"use `class {name}({base.__name__}, extend=True): ...` to extend it."
            )

        cls._registry_ = base._registry_ if registry is None else registry
        cls._generate_accessors_ = (
            base._generate_accessors_ if accessors is None else accessors
        )

        if ns.get("_names_") is not None:
            own = _parse_names(ns["_names_"], name)
            if extend and _is_concrete(base):
                own = tuple(base.names()) + own
            type.__setattr__(cls, "_names_", own)
            if "names" not in ns and _find_attr(cls, "names") is not vars(Enum)["names"]:
                # A parent's names() override would hide the extended _names_.
                type.__setattr__(cls, "names", vars(Enum)["names"])

        installed: set[str] = set()
        if _is_concrete(cls):
            if cls._generate_accessors_:
                installed = _install_accessors(cls)
            else:
                declared = set(cls._declaration().names)
                installed = {n for n in base._accessors_ if n in declared}
            for stale in base._accessors_ - installed:
                if stale not in ns:
                    type.__setattr__(cls, stale, _WithdrawnAccessor(stale))
        cls._accessors_ = frozenset(installed)
        return cls

    # ---- Mutation prevention ----

    def __setattr__(cls, name: str, value: Any) -> None:
        if name in getattr(cls, "_accessors_", ()):
            raise AttributeError(f"Cannot reassign '{cls.__name__}.{name}'")
        if name == "_names_" and "_declaration_" in cls.__dict__:
            raise AttributeError(f"The declaration of {cls.__name__} is immutable")
        super().__setattr__(name, value)

    def __delattr__(cls, name: str) -> None:
        if name in getattr(cls, "_accessors_", ()):
            raise AttributeError(f"Cannot delete '{cls.__name__}.{name}'")
        super().__delattr__(name)

    # ---- Construction ----

    def __call__(cls, name: str) -> Any:
        """``TextAlign("LEFT")`` is ``TextAlign.value_of("LEFT")``."""
        return cls.value_of(name)

    # ---- Container protocol (operates on the *class*) ----

    def __iter__(cls) -> Iterator[Any]:
        return iter(cls.enumerations())

    def __reversed__(cls) -> Iterator[Any]:
        return reversed(cls.enumerations())

    def __len__(cls) -> int:
        return len(cls._declaration().names)

    def __bool__(cls) -> bool:
        return _is_concrete(cls) and bool(cls._declaration().names)

    def __contains__(cls, item: object) -> bool:
        """Accepts a name or an instance of exactly this type.

        Example::

            "LEFT" in TextAlign          # True
            TextAlign.LEFT() in TextAlign  # True
            "UP" in TextAlign            # False
        """
        if isinstance(item, str):
            return cls.has(item)
        if type(item) is cls:
            return cls.has(item.name)
        return False

    def __getitem__(cls, name: str) -> Any:
        return cls.value_of(name)

    def __repr__(cls) -> str:
        if not _is_concrete(cls):
            return f"<Enum '{cls.__name__}'>"
        return f"<Enum '{cls.__name__}' [{', '.join(cls.names())}]>"

    # ---- Conversions (library-facing) ----

    def to_enum(cls) -> Any:
        from .compatibility_extensions import to_enum
        return to_enum(cls)

    def to_int_enum(cls) -> Any:
        from .compatibility_extensions import to_int_enum
        return to_int_enum(cls)

    def to_str_enum(cls) -> Any:
        from .compatibility_extensions import to_str_enum
        return to_str_enum(cls)

    def json_schema(cls, **kwargs: Any) -> dict[str, Any]:
        from .compatibility_extensions import json_schema
        return json_schema(cls, **kwargs)

    def base_model(cls, **kwargs: Any) -> Any:
        from .compatibility_extensions import base_model
        return base_model(cls, **kwargs)

    def sqlalchemy_enum(cls, **kwargs: Any) -> Any:
        from .compatibility_extensions import sqlalchemy_enum
        return sqlalchemy_enum(cls, **kwargs)

    def sqlalchemy_type(cls, **kwargs: Any) -> Any:
        from .compatibility_extensions.sqlalchemy_type import NamedEnumType
        return NamedEnumType(cls, **kwargs)

    def regex_str(cls) -> str:
        from .compatibility_extensions import regex_str
        return regex_str(cls)

    def regex_pattern(cls, flags: int = 0) -> Any:
        from .compatibility_extensions import regex_pattern
        return regex_pattern(cls, flags)


# ---------------------------------------------------------------------------
# Base class
# ---------------------------------------------------------------------------

class Enum(metaclass=EnumMeta):
    """Base class for named enumerations.

    Subclass and declare the names, either as ``_names_`` or by overriding
    the ``names()`` classmethod::

        class TextAlign(Enum):
            _names_ = ("LEFT", "CENTER", "RIGHT")

    Instances are created only by the factory (``value_of``,
    ``from_ordinal``, the named accessors, or calling the class with a
    name) and are canonical: one object per name per process.

    Override ``translations()`` to give names a display form::

        class TextAlign(Enum):
            _names_ = ("LEFT", "CENTER", "RIGHT")

            @classmethod
            def translations(cls):
                return {"LEFT": "Left", "CENTER": "Centered", "RIGHT": "Right"}

        str(TextAlign.CENTER())   # "Centered"
    """

    __slots__ = ("_name", "_ordinal")

    _names_: ClassVar[str | Iterable[str] | None] = None

    @classmethod
    def __init_subclass__(
            cls,
            *,
            extend: bool = False,
            registry: Registry | None = None,
            accessors: bool = True,
            **kwargs: Any,
    ) -> None:
        """Declares the class keywords for type checkers; ``EnumMeta`` consumes them."""
        super().__init_subclass__(**kwargs)

    # ---- Declaration ----

    @classmethod
    def names(cls) -> tuple[str, ...]:
        """Return the declared names in ordinal order.

        Override this classmethod, or set ``_names_``, in concrete types.

        Raises:
            NotImplementedError: If the type declares no names.
        """
        if cls._names_ is None:
            raise NotImplementedError(
                f"{cls.__name__} declares no names; set _names_ or override names()"
            )
        return tuple(cls._names_)

    @classmethod
    def translations(cls) -> dict[str, str]:
        """Return ``{name: display string}``. Identity unless overridden."""
        return {name: name for name in cls.names()}

    @classmethod
    def _declaration(cls) -> _Declaration:
        decl = cls.__dict__.get("_declaration_")
        if decl is None:
            with _declaration_lock:
                decl = cls.__dict__.get("_declaration_")
                if decl is None:
                    decl = _Declaration(cls, cls.names())
                    type.__setattr__(cls, "_declaration_", decl)
        return decl

    @classmethod
    def _registry(cls) -> Registry:
        registry = cls._registry_
        return shared_registry() if registry is None else registry

    # ---- Factory ----

    @classmethod
    def value_of(cls, name: str) -> Self:
        """Return the canonical instance declared as *name*.

        The name must match a declared name exactly.

        Raises:
            InvalidArgumentError: If *name* is not a ``str``.
            UnknownNameError: If *name* is not declared.
            AmbiguousNameError: If *name* is declared more than once.
        """
        if not isinstance(name, str):
            raise InvalidArgumentError(
                f"{cls.__name__} members are identified by str, "
                f"got {type(name).__name__}",
                enum_type=cls,
                key=name,
            )
        ordinal = cls._declaration().ordinal_of(cls, name)
        return cls._registry().intern(cls._create(name, ordinal))

    @classmethod
    def from_ordinal(cls, ordinal: int) -> Self:
        """Return the canonical instance at declaration position *ordinal*.

        Raises:
            InvalidArgumentError: If *ordinal* is not integer-like (``bool``
                included).
            UnknownOrdinalError: If *ordinal* is negative or past the end.
        """
        if isinstance(ordinal, bool):
            index = None
        else:
            try:
                index = operator.index(ordinal)
            except TypeError:
                index = None
        if index is None:
            raise InvalidArgumentError(
                f"{cls.__name__} ordinals are integers, got {type(ordinal).__name__}",
                enum_type=cls,
                key=ordinal,
            )
        names = cls._declaration().names
        if not 0 <= index < len(names):
            raise UnknownOrdinalError(
                f"{cls.__name__} has no member with ordinal {index} "
                f"(valid: 0..{len(names) - 1})",
                enum_type=cls,
                key=index,
            )
        return cls.value_of(names[index])

    @classmethod
    def has(cls, name: object) -> bool:
        """Return ``True`` if *name* is declared.

        Raises:
            AmbiguousNameError: If *name* is declared more than once.
        """
        if not isinstance(name, str):
            return False
        try:
            cls._declaration().ordinal_of(cls, name)
        except UnknownNameError:
            return False
        return True

    @classmethod
    def ordinals(cls) -> dict[str, int]:
        """Return ``{name: ordinal}``, the inverse of ``names()``.

        Raises:
            AmbiguousNameError: If any name is declared more than once.
        """
        decl = cls._declaration()
        decl.ensure_unique(cls)
        return {name: ordinal for ordinal, name in enumerate(decl.names)}

    @classmethod
    def enumerations(cls, filter: Iterable[str] | str | None = None) -> list[Self]:
        """Return one canonical instance per declared name, in ordinal order.

        With *filter*, only names that are both declared and in *filter* are
        returned (still in ordinal order, each once). Undeclared names in the
        filter are ignored.
        """
        names: Iterable[str] = cls._declaration().names
        if filter is not None:
            wanted = {filter} if isinstance(filter, str) else set(filter)
            names = [name for name in names if name in wanted]
        return [cls.value_of(name) for name in dict.fromkeys(names)]

    @classmethod
    def _create(cls, name: str, ordinal: int) -> Self:
        self = object.__new__(cls)
        object.__setattr__(self, "_name", name)
        object.__setattr__(self, "_ordinal", ordinal)
        return self

    # ---- Instance operations ----

    @property
    def name(self) -> str:
        """The declared name."""
        return self._name

    @property
    def ordinal(self) -> int:
        """Zero-based position of the name in the declaration."""
        return self._ordinal

    def translate(self) -> str:
        """Return the display string from ``translations()``.

        Raises:
            MissingTranslationError: If ``translations()`` omits this name.
        """
        cls = type(self)
        try:
            return cls.translations()[self._name]
        except KeyError:
            raise MissingTranslationError(
                f"{cls.__name__}.translations() has no entry for {self._name!r}",
                enum_type=cls,
                key=self._name,
            ) from None

    def hash_code(self) -> str:
        """Return the identity key over (type, name, ordinal).

        The type part includes the class object's identity, so the key is
        only meaningful inside the current process.
        """
        cls = type(self)
        ident = f"{cls.__module__}.{cls.__qualname__}@{id(cls):x}\x00{self._name}\x00{self._ordinal}"
        return hashlib.md5(ident.encode("utf-8"), usedforsecurity=False).hexdigest()

    def equals(self, comparable: object, type_safe: bool = True) -> bool:
        """Return ``True`` if *comparable* is this very instance.

        *type_safe* is accepted for ``Comparable`` compatibility and ignored:
        canonical instances are only ever equal to themselves.
        """
        if not isinstance(comparable, Comparable):
            return False
        return self.compare_value() is comparable.compare_value()

    def compare_value(self) -> Self:
        return self

    def refresh(self) -> Self:
        """Return the canonical instance for this name.

        Use after ``copy``/``pickle`` produced a detached duplicate.
        """
        return type(self).value_of(self._name)

    # ---- Dunder ----

    def __str__(self) -> str:
        return self.translate()

    def __repr__(self) -> str:
        return f"<{type(self).__name__}.{self._name}: {self._ordinal}>"

    def __setattr__(self, key: str, value: Any) -> None:
        # Slots may be filled once (copy/unpickle); afterwards instances are frozen.
        if key in Enum.__slots__ and not hasattr(self, key):
            object.__setattr__(self, key, value)
            return
        raise AttributeError(f"{type(self).__name__} instances are immutable")

    def __delattr__(self, key: str) -> None:
        raise AttributeError(f"{type(self).__name__} instances are immutable")

    # ---- pydantic v2 integration ----

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type: Any, handler: Any) -> Any:
        from .compatibility_extensions.pydantic import core_schema_for
        return core_schema_for(cls)

    @classmethod
    def __get_pydantic_json_schema__(cls, core_schema: Any, handler: Any) -> dict[str, Any]:
        return cls.json_schema()


def make_enum(typename: str, *names: str, module: str | None = None, **kwds: Any) -> EnumMeta:
    """Build a concrete ``Enum`` subclass from a list of names.

    Accepts names as separate arguments or as one whitespace/comma separated
    string::

        TextAlign = make_enum("TextAlign", "LEFT", "CENTER", "RIGHT")
        TextAlign = make_enum("TextAlign", "LEFT CENTER RIGHT")

    Keyword arguments (``registry=``, ``accessors=``) are passed on as
    class keywords.
    """
    if module is None:
        try:
            module = sys._getframe(1).f_globals.get("__name__", "__main__")
        except (AttributeError, ValueError):
            pass
    ns: dict[str, Any] = {"_names_": names[0] if len(names) == 1 else names}
    if module is not None:
        ns["__module__"] = module
    return EnumMeta(typename, (Enum,), ns, **kwds)
