"""
``vinspect.render``: From values to text
========================================

:func:`inspect` classifies a value (see :mod:`vinspect.classify`), renders
leaves directly and turns composites into a ``(prefix, children, suffix)``
triple that is laid out by :func:`vinspect.layout.fold`.

Children are rendered with a width that is two columns narrower than their
parent's, the room taken by the indentation if the parent gets folded.

  >>> inspect([1, 2.0, "three", (None, True)])
  '[1, 2.0, "three", #(Nil, True)]'
  >>> print(inspect({"a": [1, 2], "b": []}, break_length=20))
  dict.from_list([
    #("a", [1, 2]),
    #("b", []),
  ])
"""
from __future__ import annotations

import dataclasses
import shutil
import sys
from typing import Any, Final, Iterable

from . import layout, leaves
from .classify import (
    Absent,
    Boolean,
    ByteSequence,
    Float,
    Function,
    HostNull,
    HostSet,
    Integer,
    KeyedObject,
    List,
    Map,
    Opaque,
    Record,
    ScalarCodepoint,
    String,
    Tuple,
    classify,
)
from .layout import Chunk

__all__ = (
    "Options",
    "RenderContext",
    "inspect",
    "inspect_array",
    "inspect_list",
    "render",
)

#: Width used when we are not writing to a terminal
DEFAULT_BREAK_LENGTH: Final = 80


def default_break_length() -> int:
    """The width of the terminal if stdout is one, 80 otherwise."""
    isatty = getattr(sys.stdout, "isatty", None)
    try:
        tty = isatty is not None and isatty()
    except (ValueError, OSError):
        # closed or detached stream
        tty = False
    if tty:
        columns, _ = shutil.get_terminal_size()
        return columns
    return DEFAULT_BREAK_LENGTH


@dataclasses.dataclass(frozen=True, slots=True)
class Options:
    """Options for :func:`inspect`

    Attributes:
      break_length(int | None): Maximum preferred line width. ``None`` picks
        :func:`default_break_length`. Values that are too small are not
        rejected, every item just ends up on its own line.
    """

    break_length: int | None = None


@dataclasses.dataclass(frozen=True, slots=True)
class RenderContext:
    """State passed down while rendering a value.

    A context is never mutated: children get their own copy.

    Attributes:
      max_width(int): Width available for the value being rendered.
      seen(frozenset[int]): ids of the composites we are currently inside of.
    """

    max_width: int
    seen: frozenset[int] = frozenset()

    @classmethod
    def from_options(cls, options: Options | None = None) -> RenderContext:
        width = None if options is None else options.break_length
        if width is None:
            width = default_break_length()
        return cls(max_width=width)

    def child(self) -> RenderContext:
        return dataclasses.replace(self, max_width=self.max_width - 2)

    def enter(self, v: Any) -> RenderContext:
        return dataclasses.replace(self, seen=self.seen | {id(v)})


def _chunks(items: Iterable[Any], ctx: RenderContext) -> Iterable[Chunk]:
    child = ctx.child()
    for item in items:
        yield Chunk.of(render(item, child))


def _fold(
    prefix: str, items: Iterable[Any], suffix: str, ctx: RenderContext
) -> str:
    return layout.fold(prefix, _chunks(items, ctx), suffix, ctx.max_width)


def _render_pair(key: Any, value: Any, ctx: RenderContext) -> str:
    return _fold("#(", (key, value), ")", ctx)


def _render_record(
    tag: str, fields: tuple[tuple[str | None, Any], ...], ctx: RenderContext
) -> str:
    child = ctx.child()
    chunks = (
        Chunk.of(render(value, child))
        if name is None
        else layout.label(leaves.sanitize(name), Chunk.of(render(value, child)))
        for name, value in fields
    )
    return layout.fold(leaves.sanitize(tag) + "(", chunks, ")", ctx.max_width)


def _render_object(
    type_name: str | None,
    fields: tuple[tuple[Any, Any], ...],
    ctx: RenderContext,
) -> str:
    child = ctx.child()
    head = "" if type_name is None else leaves.sanitize(type_name) + " "
    chunks = (
        layout.label(render(key, child), Chunk.of(render(value, child)))
        for key, value in fields
    )
    return layout.fold(
        leaves.FOREIGN_OPEN + head + "{",
        chunks,
        "}" + leaves.FOREIGN_CLOSE,
        ctx.max_width,
        pad=" ",
    )


def _render_set(
    type_name: str, items: tuple[Any, ...], ctx: RenderContext
) -> str:
    child = ctx.child()
    # Sets have no stable iteration order
    rendered = sorted(render(item, child) for item in items)
    return layout.fold(
        leaves.FOREIGN_OPEN + leaves.sanitize(type_name) + "(",
        (Chunk.of(text) for text in rendered),
        ")" + leaves.FOREIGN_CLOSE,
        ctx.max_width,
    )


def render(v: Any, ctx: RenderContext) -> str:
    """Render *v* within the width of *ctx*."""
    kind = classify(v)
    match kind:
        case Boolean(value):
            return leaves.TRUE if value else leaves.FALSE
        case HostNull():
            return leaves.FOREIGN_NULL
        case Absent():
            return leaves.NIL
        case String(s):
            return leaves.inspect_string(s)
        case Integer(i):
            return leaves.inspect_int(i)
        case Float(f):
            return leaves.float_to_string(f)
        case ScalarCodepoint(c):
            return leaves.inspect_utf_codepoint(c)
        case ByteSequence(data):
            return leaves.inspect_bit_array(data)
        case Function(arity):
            return leaves.inspect_function(arity)
        case Opaque(text):
            return leaves.inspect_foreign(text)
        case Record(tag, ()):
            return leaves.sanitize(tag)

    if id(v) in ctx.seen:
        return leaves.RECURSIVE
    ctx = ctx.enter(v)

    match kind:
        case Tuple(items):
            return _fold("#(", items, ")", ctx)
        case List(items):
            return _fold("[", items, "]", ctx)
        case Map(items):
            child = ctx.child()
            return layout.fold(
                "dict.from_list([",
                (
                    Chunk.of(_render_pair(key, value, child))
                    for key, value in items
                ),
                "])",
                ctx.max_width,
            )
        case Record(tag, fields):
            return _render_record(tag, fields, ctx)
        case KeyedObject(type_name, fields):
            return _render_object(type_name, fields, ctx)
        case HostSet(type_name, items):
            return _render_set(type_name, items, ctx)
    # unreachable
    assert False, kind  # pragma: no cover


def inspect(
    value: Any,
    options: Options | None = None,
    *,
    break_length: int | None = None,
) -> str:
    """Render *value* as debug text.

    Args:
      value: Any python value
      options(Options | None):
      break_length(int | None): Shortcut for ``Options(break_length=...)``,
        takes precedence over *options*.

    Returns:
      str:
    """
    if break_length is not None:
        options = Options(break_length=break_length)
    return render(value, RenderContext.from_options(options))


def inspect_array(
    items: Iterable[Any],
    options: Options | None = None,
    *,
    prefix: str = "[",
    suffix: str = "]",
) -> str:
    """Render *items* between *prefix* and *suffix*

    >>> inspect_array(range(3), prefix="#(", suffix=")")
    '#(0, 1, 2)'
    """
    ctx = RenderContext.from_options(options).enter(items)
    return _fold(prefix, items, suffix, ctx)


def inspect_list(items: list[Any], options: Options | None = None) -> str:
    return inspect_array(items, options)
