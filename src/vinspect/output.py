"""
``vinspect.output``: Writing and silencing debug output
=======================================================

The renderer itself never writes anything. This module is the boundary with
the process' output streams:

+ :func:`debug` writes the rendering of a value to a :class:`Sink`.
+ :func:`silence` and :func:`unsilence` swap ``sys.stdout`` and
  ``sys.stderr`` for a sink that discards everything. Test harnesses use them
  to hide incidental output around assertions.
"""
from __future__ import annotations

import contextlib
import io
import sys
import typing
from typing import Any, Iterator, Protocol, TextIO, TypeVar

from .render import Options, inspect

__all__ = (
    "Sink",
    "NullSink",
    "debug",
    "silence",
    "unsilence",
    "silenced",
)

T = TypeVar("T")


@typing.runtime_checkable
class Sink(Protocol):
    "Anything text can be written to."

    def write(self, s: str, /) -> Any:  # pragma: no cover
        ...


class NullSink(io.TextIOBase):
    "A text stream that discards everything written to it."

    def write(self, s: str) -> int:
        return len(s)


# Streams replaced by `silence`, innermost last
_SAVED: list[tuple[TextIO, TextIO]] = []


def silence() -> None:
    """Discard everything written to ``sys.stdout`` and ``sys.stderr``.

    Calls can be nested, every call should be matched by a call to
    :func:`unsilence`.
    """
    _SAVED.append((sys.stdout, sys.stderr))
    sys.stdout = sys.stderr = NullSink()


def unsilence() -> None:
    """Restore the streams replaced by the last call to :func:`silence`.

    Does nothing if the streams are not silenced.
    """
    if _SAVED:
        sys.stdout, sys.stderr = _SAVED.pop()


@contextlib.contextmanager
def silenced() -> Iterator[None]:
    """Context manager version of :func:`silence`::

      with silenced():
          print("nobody will see this")
    """
    silence()
    try:
        yield
    finally:
        unsilence()


def debug(
    value: T, *, sink: Sink | None = None, options: Options | None = None
) -> T:
    """Write the rendering of *value* on its own line and return *value*.

    This makes it easy to peek at values in the middle of an expression::

      total = sum(debug([x * 2 for x in xs]))

    Args:
      value: The value to print
      sink(Sink | None): Where to write, defaults to ``sys.stderr`` (looked up
        when :func:`debug` is called).
      options(Options | None): Passed to :func:`~vinspect.inspect`
    """
    if sink is None:
        sink = sys.stderr
    sink.write(inspect(value, options) + "\n")
    return value
