from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path
from typing import List, Optional

from .diagnostics import report_and_exit
from .errors import SprigError
from .lexer_rd import tokenize
from .parser_rd import Parser, parse_next_expression
from .token_types import Tok
from .tree import Expr, pretty

DEFAULT_SOURCE = "test"

def trace_enabled() -> bool:
    return os.environ.get("SPRIG_TRACE", "") not in ("", "0")

def default_source() -> str:
    return os.environ.get("SPRIG_SOURCE") or DEFAULT_SOURCE

def _load_source(arg: Optional[str]) -> str:
    """
    Resolve CLI input into source text.
    - None => the default source file (SPRIG_SOURCE or ./test).
    - "-" => read stdin.
    - Existing path => read file contents.
    - Otherwise treat the argument as literal source.
    """

    if arg is None:
        return _read_file(Path(default_source()))

    if arg == "-":
        return sys.stdin.read()

    candidate = Path(arg)
    try:
        is_file = candidate.is_file()
    except OSError:
        # e.g. ENAMETOOLONG for long literal programs
        is_file = False

    if is_file:
        return _read_file(candidate)

    return arg

def _read_file(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SystemExit(f"Cannot read {path}: {exc.strerror}") from None
    except UnicodeDecodeError as exc:
        raise SystemExit(f"Cannot read {path}: {exc.reason}") from None

def _dump_tokens(tokens: List[Tok]) -> None:
    print("Tokens:")
    for tok in tokens:
        print(f"  {tok!r}")

def _dump_expr(expr: Expr) -> None:
    print("Expr:")
    print(pretty(expr), end="")

def run(source: str, show_tokens: bool = False, show_tree: bool = False) -> List[Expr]:
    """Tokenize and parse every top-level expression, dumping as requested."""
    tokens = tokenize(source)

    if show_tokens:
        _dump_tokens(tokens)

    parser = Parser(tokens)
    exprs: List[Expr] = []

    while True:
        expr = parse_next_expression(parser)
        if expr is None:
            break
        if show_tree:
            _dump_expr(expr)
        exprs.append(expr)

    return exprs

def main(argv: Optional[List[str]] = None) -> None:
    ap = argparse.ArgumentParser(prog="sprig", description="Tokenize and parse a Sprig source file")
    ap.add_argument("source", nargs="?", help="Path, '-' for stdin, or literal source (defaults to ./test)")
    ap.add_argument("--tokens", action="store_true", help="Print the token list")
    ap.add_argument("--tree", action="store_true", help="Print each parsed expression")

    args = ap.parse_args(argv)
    trace = trace_enabled()

    source = _load_source(args.source)

    try:
        run(source, show_tokens=args.tokens or trace, show_tree=args.tree or trace)
    except SprigError as err:
        report_and_exit(source, err)

if __name__ == "__main__":
    main()
