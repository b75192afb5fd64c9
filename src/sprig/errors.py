"""Error types raised by the Sprig lexer and parser.

Every error carries the source offset it is anchored at; turning that offset
into a line/column is left to `sprig.diagnostics`, and only happens when the
error is actually reported.
"""
from __future__ import annotations

from .token_types import Tok


class SprigError(Exception):
    """Base class for front-end errors with a source offset"""

    def __init__(self, message: str, pos: int):
        self.message = message
        self.pos = pos
        super().__init__(f"{message} at offset {pos}")


class LexError(SprigError):
    """Lexical analysis error"""
    pass


class UnknownEscapeSequence(LexError):
    pass


class UnterminatedString(LexError):
    pass


class InvalidIntegerCharacter(LexError):
    pass


class ParseError(SprigError):
    """Parse error anchored at a token"""

    def __init__(self, message: str, token: Tok):
        self.token: Tok = token
        super().__init__(message, token.pos)


class ExpectedName(ParseError):
    pass


class ExpectedClosingParenthesis(ParseError):
    pass


class UnexpectedToken(ParseError):
    pass


class UnexpectedEndOfInput(ParseError):
    pass
