"""
Recursive Descent Parser for Sprig

Grammar (one expression at a time):

    expr    := NAME | INTEGER | STRING | '(' form ')'
    form    := 'fn' NAME expr expr
             | 'let' NAME NAME
             | 'do' expr*
             | 'args' expr*
             | NAME expr*

The special-form names are only reserved directly after '('; anywhere else
they are ordinary names.

Structure:
- Parser: index cursor over a fully tokenized source
- parse_expr: returns one Expr, or None at a clean end of input
- Errors are raised immediately; there is no recovery
"""

from typing import Callable, Dict, Iterator, List, Optional

from .errors import (
    ExpectedClosingParenthesis,
    ExpectedName,
    ParseError,
    UnexpectedEndOfInput,
    UnexpectedToken,
)
from .lexer_rd import tokenize
from .token_types import TT, Tok
from .tree import (
    ArgumentList,
    Expr,
    FunctionCall,
    FunctionDefinition,
    IntegerLiteral,
    Sequence,
    StringLiteral,
    VariableDeclaration,
    VariableReference,
)

__all__ = ['ParseError', 'Parser', 'iter_expressions', 'parse_next_expression', 'parse_source']

# ============================================================================
# Parser
# ============================================================================

class Parser:
    """
    Recursive descent parser for Sprig.

    The cursor is a plain index into the token list; `peek` never
    consumes and returns None past the end.
    """

    def __init__(self, tokens: List[Tok]):
        self.tokens = tokens
        self.pos = 0

        self.forms: Dict[str, Callable[[Tok, Tok], Expr]] = {
            'fn': self.parse_define_fn,
            'let': self.parse_let,
            'do': self.parse_do,
            'args': self.parse_args,
        }

    # ========================================================================
    # Token Navigation
    # ========================================================================

    def at_end(self) -> bool:
        return self.pos >= len(self.tokens)

    def peek(self) -> Optional[Tok]:
        """Look ahead at the next token"""
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return None

    def advance(self) -> Optional[Tok]:
        """Consume the next token, None at end of input"""
        tok = self.peek()
        if tok is not None:
            self.pos += 1
        return tok

    def check(self, *types: TT) -> bool:
        """Check if the next token matches any of the given types"""
        tok = self.peek()
        return tok is not None and tok.type in types

    def expect_name(self, anchor: Tok, what: str) -> str:
        """Consume a NAME token and return its text.

        `anchor` is the token blamed when input ends here.
        """
        tok = self.advance()
        if tok is None:
            raise UnexpectedEndOfInput(
                f"Unexpected end of input, was expecting {what}", anchor
            )
        if tok.type != TT.NAME:
            raise ExpectedName(f"Unexpected {tok.describe()}, was expecting {what}", tok)
        return tok.value

    # ========================================================================
    # Expressions
    # ========================================================================

    def parse_expr(self) -> Optional[Expr]:
        """
        Parse a single expression.

        Returns None when the input is exhausted before the expression starts.
        """
        tok = self.advance()
        if tok is None:
            return None

        if tok.type == TT.NAME:
            return VariableReference(tok.value)
        if tok.type == TT.INTEGER:
            return IntegerLiteral(tok.value)
        if tok.type == TT.STRING:
            return StringLiteral(tok.value)
        if tok.type == TT.LPAR:
            return self.parse_form(tok)

        raise UnexpectedToken(f"Unexpected {tok.describe()}", tok)

    def parse_required(self, anchor: Tok, what: str) -> Expr:
        """Parse an expression that must be present inside a form"""
        expr = self.parse_expr()
        if expr is None:
            raise UnexpectedEndOfInput(
                f"Unexpected end of input, was expecting {what}", anchor
            )
        return expr

    def parse_form(self, lpar: Tok) -> Expr:
        """
        Parse a parenthesized form after its opening parenthesis:
        '(' NAME ... ')'
        """
        head = self.advance()
        if head is None:
            raise UnexpectedEndOfInput("Unexpected end of input, was expecting a name", lpar)
        if head.type != TT.NAME:
            raise ExpectedName(f"Unexpected {head.describe()}, was expecting a name", head)

        rule = self.forms.get(head.value, self.parse_fn_call)
        result = rule(lpar, head)

        rpar = self.advance()
        if rpar is None:
            raise UnexpectedEndOfInput(
                "Unexpected end of input, was expecting a closing parenthesis "
                "to close this expression",
                lpar,
            )
        if rpar.type != TT.RPAR:
            raise ExpectedClosingParenthesis(
                f"Unexpected {rpar.describe()}, was expecting a closing parenthesis", rpar
            )
        return result

    def parse_until_rpar(self, lpar: Tok) -> List[Expr]:
        """Parse expressions up to (not including) the closing parenthesis"""
        exprs: List[Expr] = []
        while not self.at_end() and not self.check(TT.RPAR):
            exprs.append(self.parse_required(lpar, "an expression"))
        return exprs

    # ========================================================================
    # Special Forms
    # ========================================================================

    def parse_define_fn(self, lpar: Tok, fn_tok: Tok) -> Expr:
        """(fn NAME params body)"""
        name = self.expect_name(fn_tok, "a name for this function")
        params = self.parse_required(fn_tok, "a parameter list for this function")
        body = self.parse_required(fn_tok, "a body for this function")
        return FunctionDefinition(name, params, body)

    def parse_let(self, lpar: Tok, let_tok: Tok) -> Expr:
        """(let NAME TYPE)"""
        name = self.expect_name(let_tok, "a name for this variable")
        type_name = self.expect_name(let_tok, "a type name for this variable")
        return VariableDeclaration(name, type_name)

    def parse_do(self, lpar: Tok, do_tok: Tok) -> Expr:
        """(do expr*)"""
        return Sequence(tuple(self.parse_until_rpar(lpar)))

    def parse_args(self, lpar: Tok, args_tok: Tok) -> Expr:
        """(args expr*)"""
        return ArgumentList(tuple(self.parse_until_rpar(lpar)))

    def parse_fn_call(self, lpar: Tok, name_tok: Tok) -> Expr:
        """(NAME expr*)"""
        return FunctionCall(name_tok.value, tuple(self.parse_until_rpar(lpar)))


# ============================================================================
# Entry Points
# ============================================================================

def parse_next_expression(parser: Parser) -> Optional[Expr]:
    """Parse the next top-level expression, None once the tokens run out."""
    return parser.parse_expr()


def iter_expressions(tokens: List[Tok]) -> Iterator[Expr]:
    """Yield top-level expressions until the tokens run out."""
    parser = Parser(tokens)
    while True:
        expr = parse_next_expression(parser)
        if expr is None:
            return
        yield expr


def parse_source(source: str) -> List[Expr]:
    """
    Parse Sprig source code to a list of top-level expressions.

    Raises LexError or ParseError at the first problem.
    """
    return list(iter_expressions(tokenize(source)))
