"""
Lexer for Sprig

Tokenizes Sprig source code into a list of tokens.

Features:
- Single-pass tokenization, no lookahead beyond one character
- Every token records the offset of its first character
- String escapes: \\" \\t \\n
- Decimal and 0x-prefixed hexadecimal integers
"""

from typing import List, Optional

from .errors import (
    InvalidIntegerCharacter,
    LexError,
    UnknownEscapeSequence,
    UnterminatedString,
)
from .token_types import PUNCTUATION, TT, Tok

__all__ = ['Lexer', 'LexError', 'TT', 'Tok', 'tokenize']

# ============================================================================
# Lexer Implementation
# ============================================================================

HEX_DIGITS = '0123456789abcdef'

# Integers are 64-bit signed and wrap silently
INT_BITS = 64

class Lexer:
    """
    Sprig lexer.

    Characters are classified in a fixed priority order at the start of
    each token: punctuation, string, integer, comment, name. Whitespace
    between tokens is dropped.
    """

    ESCAPES = {
        '"': '"',
        't': '\t',
        'n': '\n',
    }

    # Characters that end an integer literal without being part of it
    INTEGER_STOPS = (')', ']')

    # Characters that end a name. Brackets and quotes are absorbed.
    NAME_STOPS = ('(', ')', '"')

    def __init__(self, source: str):
        self.source = source
        self.pos = 0
        self.tokens: List[Tok] = []

    # ========================================================================
    # Main Tokenization
    # ========================================================================

    def tokenize(self) -> List[Tok]:
        """Tokenize entire source, return token list"""
        while not self.at_end():
            self.scan_token()
        return self.tokens

    def scan_token(self):
        """Scan next token"""
        ch = self.peek()

        if ch in PUNCTUATION:
            self.emit(PUNCTUATION[ch], None, self.pos)
            self.advance()
            return

        if ch == '"':
            self.scan_string()
            return

        if is_digit(ch) or (ch == '-' and is_digit(self.peek(1))):
            self.scan_integer()
            return

        if ch == '#':
            self.skip_comment()
            return

        if is_whitespace(ch):
            self.advance()
            return

        self.scan_name()

    # ========================================================================
    # Token Scanners
    # ========================================================================

    def scan_string(self):
        """Scan string literal: "...", decoding escapes"""
        start = self.pos
        last = self.pos
        self.advance()  # Opening quote
        content = ''

        while True:
            if self.at_end():
                raise UnterminatedString("Unterminated string", last)

            last = self.pos
            ch = self.advance()

            if ch == '"':
                break

            if ch == '\\':
                if self.at_end():
                    raise UnterminatedString("Unterminated string", last)
                esc = self.advance()
                if esc not in self.ESCAPES:
                    raise UnknownEscapeSequence(f"Unknown escape sequence '\\{esc}'", last)
                content += self.ESCAPES[esc]
            else:
                content += ch

        self.emit(TT.STRING, content, start)

    def scan_integer(self):
        """Scan integer literal, optionally negative or 0x-prefixed"""
        start = self.pos
        first = self.advance()
        sign = -1 if first == '-' else 1
        value = 0 if first == '-' else int(first)

        base = 10
        if first == '0' and self.peek() == 'x':
            self.advance()
            base = 16

        while not self.at_end():
            ch = self.peek()
            if is_whitespace(ch) or ch in self.INTEGER_STOPS:
                break

            digit = self.digit_value(ch, base)
            if digit is None:
                raise InvalidIntegerCharacter("Unexpected character in integer literal", self.pos)

            self.advance()
            value = value * base + digit

        self.emit(TT.INTEGER, wrap_int(value * sign), start)

    def scan_name(self):
        """Scan name: everything up to whitespace, parentheses or a double quote"""
        start = self.pos
        value = self.advance()

        while not self.at_end():
            ch = self.peek()
            if is_whitespace(ch) or ch in self.NAME_STOPS:
                break
            value += self.advance()

        self.emit(TT.NAME, value, start)

    # ========================================================================
    # Utilities
    # ========================================================================

    def at_end(self) -> bool:
        return self.pos >= len(self.source)

    def peek(self, offset: int = 0) -> str:
        """Look ahead at character, '' past the end"""
        idx = self.pos + offset
        if idx < len(self.source):
            return self.source[idx]
        return ''

    def advance(self) -> str:
        """Consume one character and return it"""
        ch = self.source[self.pos]
        self.pos += 1
        return ch

    @staticmethod
    def digit_value(ch: str, base: int) -> Optional[int]:
        """Value of an ASCII digit in the given base, or None"""
        if len(ch) != 1 or not ch.isascii():
            return None
        idx = HEX_DIGITS.find(ch.lower())
        if idx < 0 or idx >= base:
            return None
        return idx

    def skip_comment(self):
        """Skip comment up to and including the newline"""
        while not self.at_end():
            if self.advance() == '\n':
                break

    def emit(self, token_type: TT, value, pos: int):
        """Emit a token"""
        self.tokens.append(Tok(type=token_type, value=value, pos=pos))


def is_digit(ch: str) -> bool:
    return len(ch) == 1 and '0' <= ch <= '9'


# str.isspace() also accepts the ASCII separators, which are not White_Space
NOT_WHITESPACE = ('\x1c', '\x1d', '\x1e', '\x1f')


def is_whitespace(ch: str) -> bool:
    return ch.isspace() and ch not in NOT_WHITESPACE


def wrap_int(value: int) -> int:
    """Wrap an arbitrary int to signed INT_BITS two's complement"""
    half = 1 << (INT_BITS - 1)
    return ((value + half) % (1 << INT_BITS)) - half


def tokenize(source: str) -> List[Tok]:
    """Convenience function to tokenize source"""
    lexer = Lexer(source)
    return lexer.tokenize()
