"""Offset-to-position resolution and caret diagnostics.

Positions are only resolved when an error is reported, never while
tokenizing or parsing.
"""
from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import NoReturn, Optional, TextIO

from .errors import SprigError


@dataclass(frozen=True)
class Pos:
    line: int
    column: int
    line_text: str


def resolve_position(source: str, offset: int) -> Pos:
    """Map a source offset to a 1-based line/column plus that line's text."""
    line = 1
    column = 1

    for idx, ch in enumerate(source):
        if idx == offset:
            break

        column += 1
        if ch == '\n':
            column = 1
            line += 1

    lines = source.split('\n')
    line_text = lines[line - 1].rstrip('\r') if line <= len(lines) else ''
    return Pos(line, column, line_text)


def format_diagnostic(source: str, error: SprigError) -> str:
    pos = resolve_position(source, error.pos)
    fill = ' ' * (pos.column - 1)
    return (
        f"Error at {pos.line}:{pos.column}: {error.message}\n"
        f" {pos.line} | {pos.line_text}\n"
        f" {pos.line} | {fill}~"
    )


def report_and_exit(source: str, error: SprigError, stream: Optional[TextIO] = None) -> NoReturn:
    """Write the diagnostic for `error` and exit with status 1."""
    out = stream if stream is not None else sys.stdout
    out.write(format_diagnostic(source, error) + "\n")
    out.flush()
    raise SystemExit(1)
