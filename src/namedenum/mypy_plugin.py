"""
mypy plugin for namedenum.

Named accessors (``TextAlign.LEFT()``) are installed by the metaclass at
runtime, so mypy cannot see them. For classes whose names are declared as a
literal ``_names_``, this plugin adds them as classmethods returning the
class:

    class TextAlign(Enum):
        _names_ = ("LEFT", "CENTER", "RIGHT")

    reveal_type(TextAlign.LEFT())   # TextAlign

It also reports subclassing a class that already declares names without
``extend=True``.

Enable in mypy.ini / pyproject.toml:

    [mypy]
    plugins = namedenum.mypy_plugin

Names coming from an overridden ``names()`` are not visible statically;
generate stubs with ``nestub`` for those.
"""

from __future__ import annotations

import keyword
from typing import Any, Callable

from mypy.nodes import (
    AssignmentStmt,
    Decorator,
    Expression,
    FuncDef,
    ListExpr,
    NameExpr,
    StrExpr,
    TupleExpr,
    TypeInfo,
)
from mypy.plugin import ClassDefContext, Plugin
from mypy.plugins.common import add_method_to_class
from mypy.types import Instance


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

METADATA_KEY = "namedenum"

# Fully-qualified names of the Enum base class.
_BASE_FULLNAMES: frozenset[str] = frozenset(
    {
        "namedenum.Enum",
        "namedenum.core.Enum",
    }
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _extract_names(expr: Expression) -> list[str] | None:
    """Return the names of a literal ``_names_`` value, or None if not literal."""
    if isinstance(expr, StrExpr):
        return [n for n in expr.value.replace(",", " ").split() if n]
    if isinstance(expr, (TupleExpr, ListExpr)):
        names: list[str] = []
        for item in expr.items:
            if not isinstance(item, StrExpr):
                return None
            names.append(item.value)
        return names
    return None


def _get_bool_kwarg(ctx: ClassDefContext, name: str) -> bool | None:
    """Extract a boolean keyword argument from a class definition."""
    expr = ctx.cls.keywords.get(name)
    if isinstance(expr, NameExpr):
        if expr.name == "True":
            return True
        if expr.name == "False":
            return False
    return None


def _defined_in_bases(info: TypeInfo, name: str) -> bool:
    return any(name in base.names for base in info.mro[1:])


# ---------------------------------------------------------------------------
# Plugin
# ---------------------------------------------------------------------------


class NamedEnumPlugin(Plugin):
    """
    Hook:

    get_base_class_hook -- processes Enum class definitions, records the
    declared names in TypeInfo metadata, validates extend=True and adds the
    accessor classmethods.
    """

    def get_base_class_hook(
        self,
        fullname: str,
    ) -> Callable[[ClassDefContext], None] | None:
        if fullname in _BASE_FULLNAMES:
            return self._on_class_def
        sym = self.lookup_fully_qualified(fullname)
        if sym and isinstance(sym.node, TypeInfo):
            if self._is_namedenum_typeinfo(sym.node):
                return self._on_class_def
        return None

    def _is_namedenum_typeinfo(self, info: TypeInfo) -> bool:
        if METADATA_KEY in info.metadata:
            return True
        return any(base.fullname in _BASE_FULLNAMES for base in info.mro[1:])

    def _on_class_def(self, ctx: ClassDefContext) -> None:
        info = ctx.cls.info

        extend = _get_bool_kwarg(ctx, "extend") or False
        accessors_kwarg = _get_bool_kwarg(ctx, "accessors")

        # --- Inherit parent metadata ---
        parent: dict[str, Any] | None = None
        parent_name = ""
        for base in info.mro[1:]:
            meta = base.metadata.get(METADATA_KEY)
            if meta is not None:
                parent = meta
                parent_name = base.name
                break

        parent_declared = bool(parent and parent.get("declared"))
        inherited_names: list[str] = list(parent["names"]) if parent else []
        inherited_accessors: set[str] = set(parent["accessors"]) if parent else set()
        generate = (
            accessors_kwarg
            if accessors_kwarg is not None
            else (parent.get("generate", True) if parent else True)
        )

        if parent_declared and not extend:
            ctx.api.fail(
                f"Cannot subclass '{parent_name}' without extend=True; "
                f"it already declares names",
                ctx.cls,
            )

        # --- Collect own declaration ---
        own_names: list[str] | None = None
        declares = False
        overrides_names = False
        for stmt in ctx.cls.defs.body:
            if isinstance(stmt, AssignmentStmt) and len(stmt.lvalues) == 1:
                lvalue = stmt.lvalues[0]
                if isinstance(lvalue, NameExpr) and lvalue.name == "_names_":
                    declares = True
                    own_names = _extract_names(stmt.rvalue)
            elif isinstance(stmt, (FuncDef, Decorator)) and stmt.name == "names":
                declares = True
                overrides_names = True

        if overrides_names:
            # names() decides at runtime; nothing is known statically.
            names: list[str] = []
            inherited_accessors = set()
        else:
            names = inherited_names + (own_names or [])

        # --- Add accessors ---
        accessors: set[str] = set()
        if generate:
            return_type = Instance(info, [])
            for name in dict.fromkeys(names):
                if not name.isidentifier() or keyword.iskeyword(name):
                    continue
                sym = info.names.get(name)
                if sym is not None and not sym.plugin_generated:
                    continue
                if name not in inherited_accessors and _defined_in_bases(info, name):
                    continue
                add_method_to_class(
                    ctx.api,
                    ctx.cls,
                    name,
                    args=[],
                    return_type=return_type,
                    is_classmethod=True,
                )
                accessors.add(name)

        # --- Persist metadata ---
        info.metadata[METADATA_KEY] = {
            "declared": parent_declared or declares,
            "names": names,
            "accessors": sorted(accessors | inherited_accessors),
            "generate": generate,
        }


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def plugin(version: str) -> type[Plugin]:
    """Mypy plugin entry point."""
    return NamedEnumPlugin
