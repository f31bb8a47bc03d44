from __future__ import annotations

import dataclasses
import datetime
import enum
import io
import math
import os
import re
import sys
import types
from typing import Any

import pytest

from vinspect import (
    NULL,
    CustomType,
    Options,
    UtfCodepoint,
    inspect,
    inspect_array,
    inspect_list,
    render,
)


@dataclasses.dataclass
class Point(CustomType):
    x: int
    y: int


@dataclasses.dataclass
class Pair(CustomType):
    first: Any
    second: Any


@dataclasses.dataclass
class Ok(CustomType):
    _0: Any


class Foo(CustomType):
    pass


@dataclasses.dataclass
class Plain:
    v: int


class Thing:
    def __init__(self, name):
        self.name = name


class Empty:
    pass


class Color(enum.Enum):
    RED = 1


class Meters(int):
    def __repr__(self):
        return f"{int(self)}m"

    __str__ = __repr__


class Temp(float):
    def __repr__(self):
        return "Temp(3)"


class Level(enum.IntEnum):
    LOW = 1


class Broken:
    __slots__ = ()

    def __repr__(self):
        raise RuntimeError("boom")


def test_leaves():
    assert inspect(True) == "True"
    assert inspect(False) == "False"
    assert inspect(None) == "Nil"
    assert inspect(NULL) == "//py(null)"
    assert inspect(42) == "42"
    assert inspect(-7) == "-7"
    assert inspect(10**30) == "1" + "0" * 30
    assert inspect(1.0) == "1.0"
    assert inspect(1e22) == "1.0e22"
    assert inspect(math.inf) == "inf.0"
    assert inspect("a\nb") == '"a\\nb"'
    assert inspect(b"\x00\x01") == "<<0, 1>>"
    assert inspect(bytearray(b"\xff")) == "<<255>>"
    assert inspect(UtfCodepoint(ord("z"))) == "//utfcodepoint(z)"


def test_leaves_are_single_line():
    for v in (True, None, 12345678901234567890, b"x" * 100, "a\nb" * 50):
        assert "\n" not in inspect(v, break_length=5)


def test_functions():
    def f(a, b, c=1):
        pass

    assert inspect(f) == "//fn(a, b) { ... }"
    assert inspect(lambda: 0) == "//fn() { ... }"
    assert inspect([lambda x: x]) == "[//fn(a) { ... }]"


def test_composites():
    assert inspect((1, "a")) == '#(1, "a")'
    assert inspect(()) == "#()"
    assert inspect([]) == "[]"
    assert inspect({}) == "dict.from_list([])"
    assert inspect([1, 2, 3]) == "[1, 2, 3]"
    assert inspect([[1, 2], (3, [4])]) == "[[1, 2], #(3, [4])]"
    assert (
        inspect({"a": 1, 2: [None]})
        == 'dict.from_list([#("a", 1), #(2, [Nil])])'
    )


def test_records():
    assert inspect(Foo()) == "Foo"
    assert inspect(Point(1, 2)) == "Point(x: 1, y: 2)"
    assert inspect(Ok([1])) == "Ok([1])"
    assert inspect([Ok(Foo())]) == "[Ok(Foo)]"


PAIR = """\
Pair(
  first: "aaaaaaaaaa",
  second: "bbbbbbbbbb",
)\
"""


def test_record_folding():
    assert inspect(Pair("a" * 10, "b" * 10), break_length=20) == PAIR
    assert inspect(Pair("a" * 10, "b" * 10), break_length=80) == (
        'Pair(first: "aaaaaaaaaa", second: "bbbbbbbbbb")'
    )


OBJ = """\
//py({
  "alpha": "aaaaaaaaaa",
  "beta": "bbbbbbbbbb",
})\
"""


def test_objects():
    assert inspect(Thing("x")) == '//py(Thing { "name": "x" })'
    assert inspect(Empty()) == "//py(Empty {})"
    assert inspect(Plain(1)) == '//py(Plain { "v": 1 })'
    assert inspect(types.SimpleNamespace(a=1)) == '//py({ "a": 1 })'
    ns = types.SimpleNamespace(alpha="a" * 10, beta="b" * 10)
    assert inspect(ns, break_length=20) == OBJ


def test_host_values():
    assert inspect({3, 1, 2}) == "//py(set(1, 2, 3))"
    assert inspect(frozenset()) == "//py(frozenset())"
    assert inspect(re.compile("a+")) == "//py(re.compile('a+'))"
    assert (
        inspect(datetime.datetime(2020, 1, 2, 3, 4, 5))
        == '//py(datetime("2020-01-02T03:04:05"))'
    )
    assert inspect(datetime.date(2020, 1, 2)) == '//py(date("2020-01-02"))'
    assert inspect(Color.RED) == "//py(<Color.RED: 1>)"
    assert inspect(object()).startswith("//py(<object object at 0x")


def test_broken_repr():
    with pytest.warns(RuntimeWarning, match="repr"):
        text = inspect(Broken())
    assert text.startswith("//py(<")
    assert "Broken object at" in text


def test_cycles():
    lst: list[Any] = [1]
    lst.append(lst)
    assert inspect(lst) == "[1, //recursive]"
    d: dict[str, Any] = {}
    d["self"] = d
    assert inspect(d) == 'dict.from_list([#("self", //recursive)])'
    # Shared values that are not cycles are printed in full
    x = [1]
    assert inspect([x, x]) == "[[1], [1]]"


FIFTY = """\
[
  0, 1, 2, 3, 4,
  5, 6, 7, 8, 9,
"""


def test_folding():
    out = inspect(list(range(50)), break_length=20)
    lines = out.splitlines()
    assert out.startswith(FIFTY)
    assert lines[0] == "["
    assert lines[-1] == "]"
    assert all(line.startswith("  ") for line in lines[1:-1])
    assert all(len(line) <= 20 for line in lines)
    assert lines[-2].endswith(",")
    assert lines[-2] == "  46, 47, 48, 49,"


NESTED = """\
[
  [
    1, 2,
    3, 4,
    5,
  ], \n\
  6,
]\
"""


def test_nested_folding():
    assert inspect([[1, 2, 3, 4, 5], 6], break_length=12) == NESTED


MAP = """\
dict.from_list([
  #("a", [1, 2]),
  #("b", []),
])\
"""


def test_map_folding():
    assert inspect({"a": [1, 2], "b": []}, break_length=20) == MAP


def test_width_respected():
    value = [list(range(10)) for _ in range(5)]
    for width in (30, 40, 60):
        out = inspect(value, break_length=width)
        assert all(len(line) <= width for line in out.splitlines()), out
        assert ", ]" not in out and ", )" not in out


def test_determinism():
    v = {"k": [Point(1, 2), {1, 2, 3}, (b"ab", 1.5)], "l": list(range(40))}
    for width in (10, 40, 80):
        assert inspect(v, break_length=width) == inspect(
            v, break_length=width
        )


def test_options():
    assert inspect([1, 2, 3], Options(break_length=80)) == "[1, 2, 3]"
    assert inspect([1, 2, 3], Options(break_length=80), break_length=5) == (
        "[\n  1,\n  2,\n  3,\n]"
    )


def test_default_break_length(monkeypatch):
    monkeypatch.setattr(sys, "stdout", io.StringIO())
    assert render.default_break_length() == 80

    class FakeTTY(io.StringIO):
        def isatty(self):
            return True

    monkeypatch.setattr(sys, "stdout", FakeTTY())
    monkeypatch.setattr(
        render.shutil,
        "get_terminal_size",
        lambda *args: os.terminal_size((12, 24)),
    )
    assert render.default_break_length() == 12
    assert inspect(list(range(8))) == "[\n  0, 1, 2,\n  3, 4, 5,\n  6, 7,\n]"


def test_helpers():
    assert inspect_list([1, "b"]) == '[1, "b"]'
    assert inspect_array([1, 2], prefix="#(", suffix=")") == "#(1, 2)"
    assert (
        inspect_array(range(8), Options(break_length=12))
        == "[\n  0, 1, 2,\n  3, 4, 5,\n  6, 7,\n]"
    )


def test_huge_ints():
    assert inspect(10**5000) == "1" + "0" * 5000
    assert inspect(-(10**5000)) == "-1" + "0" * 5000
    text = inspect([10**5000 + 7])
    assert len(text) == 5003
    assert text.endswith("0" * 4999 + "7]")


def test_number_subclasses_print_as_numbers():
    assert inspect(Meters(5)) == "5"
    assert inspect(Temp(3)) == "3.0"
    assert inspect(Level.LOW) == "1"
    assert inspect([Meters(-2), Temp(3)]) == "[-2, 3.0]"


def test_closed_stdout(monkeypatch):
    closed = io.StringIO()
    closed.close()
    monkeypatch.setattr(sys, "stdout", closed)
    assert render.default_break_length() == 80
    assert inspect([1]) == "[1]"


def test_type_names_are_escaped():
    Weird = type("A\nB", (CustomType,), {})
    assert inspect(Weird()) == "A\\nB"
    Shape = dataclasses.make_dataclass("S\tq", ["x"], bases=(CustomType,))
    assert inspect(Shape(1)) == "S\\tq(x: 1)"
    Odd = type("X\nY", (), {})
    assert inspect(Odd()) == "//py(X\\nY {})"
    for v in (Weird(), Shape(1), Odd()):
        assert "\n" not in inspect(v, break_length=5)
