"""
``vinspect.cli``: Render python literals from the command line
==============================================================

::

  $ vinspect --width 20 '[[0, 1, 2], {"a": (1, 2)}]'

"""
from __future__ import annotations

import ast
from typing import Any, TextIO

import click

from .render import inspect


def _parse(source: str) -> Any:
    try:
        return ast.literal_eval(source.strip())
    except (ValueError, TypeError, SyntaxError, MemoryError, RecursionError):
        raise click.UsageError(
            f"Not a python literal: {source.strip()[:60]!r}"
        ) from None


@click.command()
@click.argument("expression", required=False)
@click.option(
    "-w",
    "--width",
    type=int,
    default=None,
    help="Maximum line width (defaults to the terminal's width or 80).",
)
@click.option(
    "-f",
    "--file",
    "file",
    type=click.File("r"),
    default=None,
    help="Read the literal from a file ('-' for stdin).",
)
def main(expression: str | None, width: int | None, file: TextIO | None) -> None:
    """Pretty print the python literal EXPRESSION.

    If neither EXPRESSION nor --file is given the literal is read from stdin.
    """
    if expression is not None and file is not None:
        raise click.UsageError("Pass either EXPRESSION or --file, not both")
    if expression is None:
        if file is None:
            file = click.get_text_stream("stdin")
        expression = file.read()
    click.echo(inspect(_parse(expression), break_length=width))
