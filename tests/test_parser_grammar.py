from __future__ import annotations

from textwrap import dedent
from typing import List, Tuple

import pytest

from tests.support.harness import (
    ArgumentList,
    Expr,
    FunctionCall,
    FunctionDefinition,
    IntegerLiteral,
    Parser,
    Ref,
    Sequence,
    StringLiteral,
    VariableDeclaration,
    parse_next_expression,
    parse_one,
    parse_source,
    tokenize,
)

GRAMMAR_CASES: List[Tuple[str, str, Expr]] = [
    ("name", "x", Ref("x")),
    ("integer", "42", IntegerLiteral(42)),
    ("negative-integer", "-3", IntegerLiteral(-3)),
    ("string", '"hi"', StringLiteral("hi")),
    ("call-no-args", "(f)", FunctionCall("f")),
    (
        "call-with-args",
        "(+ 1 2)",
        FunctionCall("+", (IntegerLiteral(1), IntegerLiteral(2))),
    ),
    (
        "call-nested",
        '(print (concat "a" b))',
        FunctionCall("print", (FunctionCall("concat", (StringLiteral("a"), Ref("b"))),)),
    ),
    ("let", "(let x int)", VariableDeclaration("x", "int")),
    ("let-bracketed-type-name", "(let xs int[])", VariableDeclaration("xs", "int[]")),
    ("do-empty", "(do)", Sequence()),
    (
        "do",
        "(do 1 x)",
        Sequence((IntegerLiteral(1), Ref("x"))),
    ),
    ("args-empty", "(args)", ArgumentList()),
    ("args", "(args a b)", ArgumentList((Ref("a"), Ref("b")))),
    ("args-any-expression", "(args 1 (f))", ArgumentList((IntegerLiteral(1), FunctionCall("f")))),
    (
        "fn",
        "(fn add (args a b) (do (+ a b)))",
        FunctionDefinition(
            "add",
            ArgumentList((Ref("a"), Ref("b"))),
            Sequence((FunctionCall("+", (Ref("a"), Ref("b"))),)),
        ),
    ),
    (
        "fn-plain-body",
        "(fn one (args) 1)",
        FunctionDefinition("one", ArgumentList(), IntegerLiteral(1)),
    ),
    # Special-form names are only reserved right after '('
    ("keyword-as-reference", "fn", Ref("fn")),
    ("keyword-as-argument", "(f let do)", FunctionCall("f", (Ref("let"), Ref("do")))),
    (
        "keyword-call-inside-call",
        "(g (args))",
        FunctionCall("g", (ArgumentList(),)),
    ),
]


@pytest.mark.parametrize(
    "source,expected",
    [pytest.param(src, exp, id=name) for name, src, exp in GRAMMAR_CASES],
)
def test_grammar(source: str, expected: Expr) -> None:
    assert parse_one(source) == expected


def test_multiple_top_level_expressions() -> None:
    source = dedent(
        """\
        # declarations
        (let count int)
        (fn inc (args n) (+ n 1))

        (inc count)
        """
    )

    assert parse_source(source) == [
        VariableDeclaration("count", "int"),
        FunctionDefinition("inc", ArgumentList((Ref("n"),)), FunctionCall("+", (Ref("n"), IntegerLiteral(1)))),
        FunctionCall("inc", (Ref("count"),)),
    ]


def test_empty_input_yields_none() -> None:
    parser = Parser([])
    assert parse_next_expression(parser) is None
    assert parse_next_expression(parser) is None


def test_comment_only_input_has_no_expressions() -> None:
    assert parse_source("# nothing here\n") == []


def test_next_expression_walks_one_at_a_time() -> None:
    parser = Parser(tokenize("a (f 1) 2"))

    assert parse_next_expression(parser) == Ref("a")
    assert parse_next_expression(parser) == FunctionCall("f", (IntegerLiteral(1),))
    assert parse_next_expression(parser) == IntegerLiteral(2)
    assert parse_next_expression(parser) is None


def test_each_parser_owns_its_cursor() -> None:
    tokens = tokenize("(f) (g)")
    first = Parser(tokens)
    second = Parser(tokens)

    assert parse_next_expression(first) == FunctionCall("f")
    assert parse_next_expression(second) == FunctionCall("f")
    assert parse_next_expression(first) == FunctionCall("g")


def test_nodes_are_immutable() -> None:
    expr = parse_one("(let x int)")
    with pytest.raises(AttributeError):
        expr.name = "y"  # type: ignore[misc]


def test_pretty_dump() -> None:
    from sprig.tree import pretty

    out = pretty(parse_one("(fn id (args x) x)"))
    lines = out.splitlines()

    assert lines[0] == "define_fn"
    assert lines[1].strip() == "id"
    assert lines[2].strip() == "args"
    assert "variable_ref" in lines[3]
