"""
Token Types for the Sprig front-end

Shared between lexer and parser to avoid circular dependencies.
"""

from typing import Any
from dataclasses import dataclass
from enum import Enum, auto


class TT(Enum):
    """Token Types"""

    # Punctuation
    LPAR = auto()
    RPAR = auto()
    LSQB = auto()
    RSQB = auto()
    QUOTE = auto()

    # Valued
    NAME = auto()
    INTEGER = auto()
    STRING = auto()


PUNCTUATION = {
    '(': TT.LPAR,
    ')': TT.RPAR,
    '[': TT.LSQB,
    ']': TT.RSQB,
    "'": TT.QUOTE,
}

READABLE_NAMES = {
    TT.LPAR: 'opening parenthesis',
    TT.RPAR: 'closing parenthesis',
    TT.LSQB: 'opening bracket',
    TT.RSQB: 'closing bracket',
    TT.QUOTE: 'quote',
    TT.NAME: 'name',
    TT.INTEGER: 'integer',
    TT.STRING: 'string',
}

_PUNCT_TEXT = {tt: ch for ch, tt in PUNCTUATION.items()}

# Inverse of the string escapes the lexer understands
_ESCAPES = {
    '"': '\\"',
    '\t': '\\t',
    '\n': '\\n',
}


@dataclass(frozen=True)
class Tok:
    """Token with its source offset.

    `pos` is an index into the source str (code points, not bytes); it
    matches the byte offset only for ASCII text.
    """

    type: TT
    value: Any
    pos: int

    def describe(self) -> str:
        """Readable token kind, as used in diagnostics"""
        return READABLE_NAMES[self.type]

    def to_source(self) -> str:
        """Render the token back into source text"""
        if self.type in _PUNCT_TEXT:
            return _PUNCT_TEXT[self.type]
        if self.type == TT.INTEGER:
            return str(self.value)
        if self.type == TT.STRING:
            return '"' + ''.join(_ESCAPES.get(ch, ch) for ch in self.value) + '"'
        return self.value

    def __repr__(self):
        if self.value is None:
            return f"Tok({self.type.name}, @{self.pos})"
        return f"Tok({self.type.name}, {self.value!r}, @{self.pos})"
