"""
nestub: write ``.pyi`` stubs that declare the named accessors.

Accessors such as ``TextAlign.LEFT()`` are installed when the class is
created, so static type checkers never see them. Running::

    nestub myapp --out typings

imports every module under ``myapp``, finds concrete ``Enum`` subclasses
and writes overlay stubs (``typings/myapp/models.pyi``) suitable for
pyright's ``stubPath`` or ``MYPYPATH``::

    class TextAlign(Enum):
        @classmethod
        def LEFT(cls) -> TextAlign: ...
"""

from __future__ import annotations

import argparse
import importlib
import inspect
import logging
import pkgutil
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Sequence

from .core import Enum, _is_concrete

logger = logging.getLogger(__name__)


# ----------------------------
# Discovery
# ----------------------------

def _iter_modules(root: str) -> Iterable[str]:
    pkg = importlib.import_module(root)
    yield root
    if hasattr(pkg, "__path__"):
        for modinfo in pkgutil.walk_packages(pkg.__path__, pkg.__name__ + "."):
            yield modinfo.name


@dataclass(frozen=True)
class EnumInfo:
    module: str
    name: str        # attribute name in the module
    cls: type

    @property
    def own_accessors(self) -> tuple[str, ...]:
        inherited: set[str] = set()
        for base in self.cls.__bases__:
            inherited |= set(getattr(base, "_accessors_", ()))
        return tuple(
            n for n in dict.fromkeys(self.cls.names())
            if n in self.cls._accessors_ and n not in inherited
        )


def find_enums(root: str) -> list[EnumInfo]:
    """Return the concrete Enum subclasses defined in *root* and its submodules."""
    infos: list[EnumInfo] = []
    for modname in _iter_modules(root):
        try:
            mod = importlib.import_module(modname)
        except Exception:
            logger.warning("Skipping %s: import failed", modname, exc_info=True)
            continue
        for attr, obj in inspect.getmembers(mod, inspect.isclass):
            if obj is Enum or not issubclass(obj, Enum):
                continue
            if obj.__module__ != mod.__name__ or obj.__qualname__ != attr:
                continue
            if not _is_concrete(obj):
                continue
            infos.append(EnumInfo(module=mod.__name__, name=attr, cls=obj))
    return infos


# ----------------------------
# Rendering
# ----------------------------

def _base_decl(info: EnumInfo, local: dict[type, str], imports: set[str]) -> str:
    parts: list[str] = []
    for base in info.cls.__bases__:
        if base is Enum:
            parts.append("Enum")
        elif base in local:
            parts.append(local[base])
        else:
            imports.add(f"from {base.__module__} import {base.__name__}")
            parts.append(base.__name__)
    if any(_is_concrete(b) for b in info.cls.__bases__ if issubclass(b, Enum)):
        parts.append("extend=True")
    return ", ".join(parts)


def render_stub_module(enums: Sequence[EnumInfo]) -> str:
    """Render the overlay stub for the enums of one module.

    Parents are emitted before their subclasses.
    """
    ordered = sorted(enums, key=lambda e: (len(e.cls.__mro__), e.name))
    local = {e.cls: e.name for e in ordered}
    imports: set[str] = set()

    blocks: list[str] = []
    for e in ordered:
        lines = [f"class {e.name}({_base_decl(e, local, imports)}):\n"]
        accessors = e.own_accessors
        if not accessors:
            lines.append("    ...\n")
        for i, name in enumerate(accessors):
            if i:
                lines.append("\n")
            lines.append("    @classmethod\n")
            lines.append(f"    def {name}(cls) -> {e.name}: ...\n")
        blocks.append("".join(lines))

    out = ["from __future__ import annotations\n\n", "from namedenum import Enum\n"]
    out.extend(line + "\n" for line in sorted(imports))
    out.append("\n\n")
    out.append("\n\n".join(blocks))
    return "".join(out)


def _module_to_stub_path(stub_root: Path, module: str) -> Path:
    mod = importlib.import_module(module)
    rel = Path(*module.split("."))
    if hasattr(mod, "__path__"):
        return stub_root / rel / "__init__.pyi"
    return stub_root / (str(rel) + ".pyi")


# ----------------------------
# CLI
# ----------------------------

def _parse_out_args(raw: list[str] | None) -> list[Path]:
    """
    Supports:
      --out typings
      --out typings --out stubs
      --out "typings,stubs"
      --out "typings;stubs"
    """
    if not raw:
        return [Path("typings")]
    out: list[Path] = []
    for item in raw:
        for part in item.replace(";", ",").split(","):
            part = part.strip()
            if part and Path(part) not in out:
                out.append(Path(part))
    return out


def main(argv: Sequence[str] | None = None) -> int:
    ap = argparse.ArgumentParser(prog="nestub", description=__doc__.splitlines()[1])
    ap.add_argument("root", help="Root import (package or module) to scan, e.g. myapp")
    ap.add_argument(
        "--out",
        action="append",
        help="Stub output directory (repeatable, or comma/semicolon-separated). Default: typings",
    )
    args = ap.parse_args(argv)

    out_roots = _parse_out_args(args.out)
    infos = find_enums(args.root)

    by_module: dict[str, list[EnumInfo]] = {}
    for e in infos:
        by_module.setdefault(e.module, []).append(e)

    written = 0
    for module, enums in by_module.items():
        text = render_stub_module(enums)
        for stub_root in out_roots:
            out_path = _module_to_stub_path(stub_root, module)
            out_path.parent.mkdir(parents=True, exist_ok=True)
            out_path.write_text(text, encoding="utf-8")
            written += 1

    print(f"Wrote {written} stub file(s) for {len(infos)} Enum subclasses.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
