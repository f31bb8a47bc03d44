"""``vinspect.layout``: Greedy folding of rendered values
=======================================================

Composite values are rendered in two steps: every child is rendered on its own
(with a narrower width) and the resulting :class:`Chunk` s are packed into
lines by :func:`fold`.

The packing is greedy: single line chunks are appended to the current line as
long as they fit, multi-line chunks always get lines of their own. This is not
the optimal layout but it is predictable and linear in the size of the output.

  >>> print(fold("[", [Chunk.of("1"), Chunk.of("2")], "]", width=80))
  [1, 2]
  >>> print(fold("[", [Chunk.of(str(i)) for i in range(8)], "]", width=12))
  [
    0, 1, 2,
    3, 4, 5,
    6, 7,
  ]

"""

from __future__ import annotations

import dataclasses
from typing import Final, Iterable, Sequence

__all__ = (
    "Chunk",
    "SEP",
    "INDENT",
    "label",
    "pack",
    "wrap",
    "fold",
)

#: Separator appended to every item
SEP: Final = ", "

#: Indentation of the lines of a folded composite
INDENT: Final = "  "

# Room kept at the end of a line for the separator and a closing bracket.
SLACK: Final = 3


@dataclasses.dataclass(frozen=True, slots=True)
class Chunk:
    """The rendering of one value: one or more lines of text."""

    lines: tuple[str, ...]

    @classmethod
    def of(cls, text: str) -> Chunk:
        return cls(tuple(text.split("\n")))

    @property
    def is_single_line(self) -> bool:
        return len(self.lines) == 1

    @property
    def width(self) -> int:
        return max(len(line) for line in self.lines)

    def __str__(self) -> str:
        return "\n".join(self.lines)


def label(name: str, chunk: Chunk) -> Chunk:
    """Prefix the first line of *chunk* with ``name: ``

    >>> label("x", Chunk.of("1"))
    Chunk(lines=('x: 1',))
    """
    first, *rest = chunk.lines
    return Chunk((f"{name}: {first}", *rest))


def _collapse(line: str) -> str:
    "Turn a trailing ``', '`` into ``','``"
    if line.endswith(SEP):
        return line[:-1]
    return line


def pack(chunks: Iterable[Chunk], width: int) -> list[str]:
    """Greedily pack *chunks* into lines.

    Every item in the result is followed by a separator. Lines closed because
    the next item didn't fit end with ``","``; lines closed because a
    multi-line item follows are kept as is.

    Args:
      chunks: The rendered children
      width(int): The width available to the parent (*not* to the children)

    Returns:
      list[str]: The non-blank lines, not indented.
    """
    lines: list[str] = []
    current = ""
    for chunk in chunks:
        if chunk.is_single_line:
            item = chunk.lines[0] + SEP
            if current and len(current) + len(item) + SLACK > width:
                lines.append(_collapse(current))
                current = item
            else:
                current += item
        else:
            # A multi-line chunk cannot share a line with anything else:
            # merging it would break its indentation.
            *head, last = chunk.lines
            if current:
                lines.append(current)
            lines.extend(head)
            lines.append(last + SEP)
            current = ""
    if current:
        lines.append(current)
    return [line for line in lines if line.strip()]


def wrap(prefix: str, lines: Sequence[str], suffix: str, *, pad: str = "") -> str:
    """Surround packed *lines* with *prefix* and *suffix*.

    A single line stays on the same line as the brackets (with *pad* on each
    side of it); several lines are indented and the brackets get lines of
    their own.
    """
    match lines:
        case []:
            return prefix + suffix
        case [line]:
            return prefix + pad + line.removesuffix(SEP) + pad + suffix
        case _:
            body = "\n".join(INDENT + line for line in lines)
            return f"{prefix}\n{_collapse(body)}\n{suffix}"


def fold(
    prefix: str,
    chunks: Iterable[Chunk],
    suffix: str,
    width: int,
    *,
    pad: str = "",
) -> str:
    """Lay out already rendered children between *prefix* and *suffix*.

    Args:
      prefix(str): Opening bracket, e.g. ``"["``
      chunks: Children rendered with a width of ``width - 2``
      suffix(str): Closing bracket
      width(int): Maximum preferred line width
      pad(str): Inserted inside the brackets when everything fits on one line

    Returns:
      str:
    """
    return wrap(prefix, pack(chunks, width), suffix, pad=pad)
