"""AST node classes produced by the Sprig parser.

Nodes are frozen dataclasses that own their children by value, so a parsed
program is a plain tree and two trees compare equal when their structure and
values match. For dumps, every node converts to a `lark.Tree` with
`to_tree()`, which keeps the pretty-printer shared with other Lark tooling.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple, Union

from lark import Token, Tree
from typing_extensions import TypeAlias


@dataclass(frozen=True)
class VariableReference:
    name: str

    def to_tree(self) -> Tree:
        return Tree('variable_ref', [Token('NAME', self.name)])


@dataclass(frozen=True)
class IntegerLiteral:
    value: int

    def to_tree(self) -> Tree:
        return Tree('integer', [Token('INTEGER', str(self.value))])


@dataclass(frozen=True)
class StringLiteral:
    value: str

    def to_tree(self) -> Tree:
        return Tree('string', [Token('STRING', self.value)])


@dataclass(frozen=True)
class FunctionCall:
    name: str
    arguments: Tuple[Expr, ...] = ()

    def to_tree(self) -> Tree:
        return Tree('fn_call', [Token('NAME', self.name)] + [a.to_tree() for a in self.arguments])


@dataclass(frozen=True)
class ArgumentList:
    """Formal parameters of a function definition: `(args a b ...)`.

    Elements are expected to be VariableReference nodes but any expression
    is accepted here.
    """
    arguments: Tuple[Expr, ...] = ()

    def to_tree(self) -> Tree:
        return Tree('args', [a.to_tree() for a in self.arguments])


@dataclass(frozen=True)
class FunctionDefinition:
    name: str
    parameters: Expr
    body: Expr

    def to_tree(self) -> Tree:
        return Tree('define_fn', [
            Token('NAME', self.name),
            self.parameters.to_tree(),
            self.body.to_tree(),
        ])


@dataclass(frozen=True)
class Sequence:
    """A `do` block; expressions evaluate in order."""
    expressions: Tuple[Expr, ...] = ()

    def to_tree(self) -> Tree:
        return Tree('do', [e.to_tree() for e in self.expressions])


@dataclass(frozen=True)
class VariableDeclaration:
    name: str
    declared_type: str

    def to_tree(self) -> Tree:
        return Tree('let', [Token('NAME', self.name), Token('TYPE', self.declared_type)])


Expr: TypeAlias = Union[
    VariableReference,
    IntegerLiteral,
    StringLiteral,
    FunctionCall,
    ArgumentList,
    FunctionDefinition,
    Sequence,
    VariableDeclaration,
]


def pretty(expr: Expr, indent: str = '  ') -> str:
    """Indented, one-node-per-line rendering of an expression."""
    return expr.to_tree().pretty(indent)
