"""Tests for the namedenum mypy plugin.

mypy runs once over a snippet module; each test checks one expected line of
its report.
"""
from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

mypy_api = pytest.importorskip("mypy.api")

SRC = Path(__file__).resolve().parents[1] / "src"
PLUGIN = SRC / "namedenum" / "mypy_plugin.py"

SNIPPET = '''
from typing import reveal_type

from namedenum import Enum


class TextAlign(Enum):
    _names_ = ("LEFT", "CENTER", "RIGHT")


class More(TextAlign, extend=True):
    _names_ = "JUSTIFY"


class Direction(Enum):
    @classmethod
    def names(cls):
        return ("NORTH", "SOUTH")


class Quiet(Enum, accessors=False):
    _names_ = ("A",)


class Broken(TextAlign):
    pass


class Reordered(TextAlign, extend=True):
    @classmethod
    def names(cls):
        return ("UP", "DOWN")


reveal_type(TextAlign.LEFT())
reveal_type(TextAlign.value_of("RIGHT"))
reveal_type(More.JUSTIFY())
reveal_type(More.LEFT())
reveal_type(Reordered.LEFT())
TextAlign.FOO()
TextAlign.JUSTIFY()
Direction.NORTH()
Quiet.A()


def align(a: TextAlign) -> None: ...


align(TextAlign.CENTER())
align(More.JUSTIFY())
align(Direction.from_ordinal(0))
'''


@pytest.fixture(scope="module")
def report(tmp_path_factory) -> list[str]:
    tmp = tmp_path_factory.mktemp("mypy")
    snippet = tmp / "snippet.py"
    snippet.write_text(textwrap.dedent(SNIPPET))
    config = tmp / "mypy.ini"
    config.write_text(textwrap.dedent(f"""
        [mypy]
        plugins = {PLUGIN}
        mypy_path = {SRC}
        follow_imports = silent
        show_error_codes = False
    """))
    stdout, stderr, _ = mypy_api.run([
        str(snippet),
        "--config-file", str(config),
        "--cache-dir", str(tmp / ".mypy_cache"),
        "--no-error-summary",
        "--hide-error-context",
    ])
    assert not stderr, stderr
    return stdout.splitlines()


def _line(report: list[str], number: int) -> str:
    matches = [line for line in report if f"snippet.py:{number}:" in line]
    return "\n".join(matches)


def _number(fragment: str) -> int:
    lines = textwrap.dedent(SNIPPET).splitlines()
    return next(i for i, line in enumerate(lines, 1) if line.startswith(fragment))


class TestAccessors:
    def test_accessor_returns_class(self, report):
        line = _line(report, _number("reveal_type(TextAlign.LEFT())"))
        assert 'Revealed type is "snippet.TextAlign"' in line

    def test_factory_returns_class(self, report):
        line = _line(report, _number('reveal_type(TextAlign.value_of("RIGHT"))'))
        assert 'Revealed type is "snippet.TextAlign"' in line

    def test_extended_accessor(self, report):
        line = _line(report, _number("reveal_type(More.JUSTIFY())"))
        assert 'Revealed type is "snippet.More"' in line

    def test_inherited_accessor_returns_subclass(self, report):
        line = _line(report, _number("reveal_type(More.LEFT())"))
        assert 'Revealed type is "snippet.More"' in line

    def test_names_override_drops_inherited_accessors(self, report):
        line = _line(report, _number("reveal_type(Reordered.LEFT())"))
        assert 'Revealed type is "snippet.Reordered"' not in line
        assert 'Revealed type is "snippet.TextAlign"' in line

    def test_unknown_name(self, report):
        assert 'has no attribute "FOO"' in _line(report, _number("TextAlign.FOO()"))

    def test_parent_lacks_extended_name(self, report):
        assert 'has no attribute "JUSTIFY"' in _line(report, _number("TextAlign.JUSTIFY()"))

    def test_names_override_not_visible(self, report):
        assert 'has no attribute "NORTH"' in _line(report, _number("Direction.NORTH()"))

    def test_accessors_disabled(self, report):
        assert 'has no attribute "A"' in _line(report, _number("Quiet.A()"))

    def test_accessor_passes_as_argument(self, report):
        assert _line(report, _number("align(TextAlign.CENTER())")) == ""
        assert _line(report, _number("align(More.JUSTIFY())")) == ""

    def test_other_enum_rejected(self, report):
        line = _line(report, _number("align(Direction.from_ordinal(0))"))
        assert "incompatible type" in line


class TestExtend:
    def test_subclass_without_extend(self, report):
        line = _line(report, _number("class Broken(TextAlign):"))
        assert "Cannot subclass 'TextAlign' without extend=True" in line

    def test_subclass_with_extend(self, report):
        assert _line(report, _number("class More(TextAlign, extend=True):")) == ""
