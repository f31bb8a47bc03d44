"""
``vinspect.leaves``: Rendering of atomic values
===============================================

None of the functions in this module recurse and none of them ever return more
than one line of text.
"""
from __future__ import annotations

from typing import Final, Iterable

__all__ = (
    "TRUE",
    "FALSE",
    "NIL",
    "FOREIGN_NULL",
    "RECURSIVE",
    "inspect_int",
    "float_to_string",
    "inspect_string",
    "inspect_bit_array",
    "inspect_utf_codepoint",
    "inspect_function",
    "inspect_foreign",
    "sanitize",
)

TRUE: Final = "True"
FALSE: Final = "False"
NIL: Final = "Nil"

#: Marks values that do not belong to the value model (host objects, null...)
FOREIGN_OPEN: Final = "//py("
FOREIGN_CLOSE: Final = ")"

FOREIGN_NULL: Final = FOREIGN_OPEN + "null" + FOREIGN_CLOSE

#: Printed instead of a value that contains itself
RECURSIVE: Final = "//recursive"


def _mk_escape_table(quoted: bool) -> dict[int, str]:
    table = {
        c: f"\\u{{{c:04X}}}"
        for c in (*range(0x20), *range(0x7F, 0xA0))
    }
    table[ord("\n")] = "\\n"
    table[ord("\r")] = "\\r"
    table[ord("\t")] = "\\t"
    table[ord("\f")] = "\\f"
    if quoted:
        table[ord("\\")] = "\\\\"
        table[ord('"')] = '\\"'
    return table


_STRING_ESCAPES: Final = _mk_escape_table(quoted=True)
_TEXT_ESCAPES: Final = _mk_escape_table(quoted=False)


# Kept well under the smallest limit `sys.set_int_max_str_digits` accepts.
_INT_CHUNK_DIGITS: Final = 512
_INT_CHUNK: Final = 10**_INT_CHUNK_DIGITS


def _digits(n: int) -> str:
    parts = []
    while n >= _INT_CHUNK:
        n, low = divmod(n, _INT_CHUNK)
        parts.append(int.__repr__(low).zfill(_INT_CHUNK_DIGITS))
    parts.append(int.__repr__(n))
    return "".join(reversed(parts))


def inspect_int(value: int) -> str:
    """Exact decimal text of an integer, whatever its size.

    Subclasses are printed as plain integers.

    >>> inspect_int(-12)
    '-12'
    """
    n = int.__int__(value)
    if n < 0:
        return "-" + _digits(-n)
    return _digits(n)


def float_to_string(value: float) -> str:
    """Render a float so that it always contains a ``.``

    >>> float_to_string(1.0), float_to_string(1e22), float_to_string(2.5e-07)
    ('1.0', '1.0e22', '2.5e-07')
    """
    text = float.__repr__(value).replace("+", "", 1)
    if "." in text:
        return text
    mantissa, e, exponent = text.partition("e")
    if e:
        return f"{mantissa}.0e{exponent}"
    return text + ".0"


def inspect_string(s: str) -> str:
    r"""Quote and escape a string

    >>> print(inspect_string('say "hi"\n'))
    "say \"hi\"\n"
    """
    return '"' + s.translate(_STRING_ESCAPES) + '"'


def sanitize(text: str) -> str:
    "Escape the control characters in a text we didn't produce."
    return text.translate(_TEXT_ESCAPES)


def inspect_bit_array(data: Iterable[int]) -> str:
    """
    >>> inspect_bit_array(b"\\x01\\xff")
    '<<1, 255>>'
    """
    return "<<" + ", ".join(str(b) for b in data) + ">>"


def inspect_utf_codepoint(value: int) -> str:
    return f"//utfcodepoint({sanitize(chr(value))})"


def inspect_function(arity: int) -> str:
    """
    >>> inspect_function(2)
    '//fn(a, b) { ... }'
    """
    args = ", ".join(chr(ord("a") + i) for i in range(arity))
    return f"//fn({args}) {{ ... }}"


def inspect_foreign(text: str) -> str:
    return FOREIGN_OPEN + sanitize(text) + FOREIGN_CLOSE
