"""Render python values as width-aware debug text"""
from __future__ import annotations

from importlib import metadata

from .classify import register
from .leaves import (
    float_to_string,
    inspect_bit_array,
    inspect_string,
    inspect_utf_codepoint,
)
from .output import debug, silence, silenced, unsilence
from .render import Options, inspect, inspect_array, inspect_list
from .values import NULL, CustomType, UtfCodepoint

# https://packaging.python.org/en/latest/guides/single-sourcing-package-version/
__version__ = metadata.version(__name__)

__all__ = (
    "CustomType",
    "NULL",
    "Options",
    "UtfCodepoint",
    "debug",
    "float_to_string",
    "inspect",
    "inspect_array",
    "inspect_bit_array",
    "inspect_list",
    "inspect_string",
    "inspect_utf_codepoint",
    "register",
    "silence",
    "silenced",
    "unsilence",
)
