"""
``vinspect.values``: Value kinds python doesn't have
====================================================

Most values are rendered from their native python types (:class:`list`,
:class:`tuple`, :class:`dict`...). The few kinds that python has no type for
are defined here.
"""
from __future__ import annotations

import dataclasses
import enum
import re
from typing import Any, Final, Iterator

__all__ = (
    "CustomType",
    "UtfCodepoint",
    "NULL",
    "record_fields",
    "is_positional",
)


class _Null(enum.Enum):
    NULL = enum.auto()

    def __repr__(self) -> str:
        return "NULL"


#: A null coming from outside of the value model. It is rendered differently
#: from :const:`None` (which is rendered as ``Nil``).
NULL: Final = _Null.NULL


@dataclasses.dataclass(frozen=True, slots=True)
class UtfCodepoint:
    """A single unicode scalar value (not a string).

    Args:
      value(int): the code point
    """

    value: int

    def __post_init__(self) -> None:
        if not 0 <= self.value <= 0x10FFFF or 0xD800 <= self.value <= 0xDFFF:
            raise ValueError(f"Not a unicode scalar value: {self.value:#x}")


class CustomType:
    """Base class for tagged records.

    The name of the class is used as the tag. Fields are the dataclass fields
    if the subclass is a dataclass, its instance attributes otherwise::

      @dataclasses.dataclass
      class Point(CustomType):
          x: int
          y: int

    renders as ``Point(x: 1, y: 2)``. Fields whose name is a number
    (optionally preceded by an underscore, e.g. ``_0``) are positional: only
    their value is printed.
    """

    __slots__ = ()


_POSITIONAL = re.compile(r"_?[0-9]+")


def is_positional(label: str | None) -> bool:
    """
    >>> is_positional("_0"), is_positional("12"), is_positional("x")
    (True, True, False)
    """
    return label is None or _POSITIONAL.fullmatch(label) is not None


def record_fields(record: Any) -> Iterator[tuple[str, Any]]:
    """The ``(label, value)`` pairs of a record, in declaration order."""
    if dataclasses.is_dataclass(record):
        for field in dataclasses.fields(record):
            yield field.name, getattr(record, field.name)
    else:
        yield from getattr(record, "__dict__", {}).items()
