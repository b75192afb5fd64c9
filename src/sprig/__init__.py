"""Sprig front-end: tokenizer, recursive-descent parser and diagnostics."""

from .diagnostics import Pos, format_diagnostic, report_and_exit, resolve_position
from .errors import LexError, ParseError, SprigError
from .lexer_rd import tokenize
from .parser_rd import Parser, iter_expressions, parse_next_expression, parse_source

__all__ = [
    'LexError',
    'ParseError',
    'Parser',
    'Pos',
    'SprigError',
    'format_diagnostic',
    'iter_expressions',
    'parse_next_expression',
    'parse_source',
    'report_and_exit',
    'resolve_position',
    'tokenize',
]
