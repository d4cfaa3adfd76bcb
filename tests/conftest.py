import io
from collections.abc import Callable

import pytest

from lox.lox_ast import ASTNode
from lox.lox_eval import Evaluator
from lox.lox_lexer import lex, significant_tokens
from lox.lox_parser import Parser


def parse_source(source: str) -> list[ASTNode]:
    return Parser(significant_tokens(lex(source))).parse()


@pytest.fixture  # type: ignore[misc]
def run_program() -> Callable[[str], list[str]]:
    """Runs a whole program and returns the printed lines."""

    def run(source: str) -> list[str]:
        out = io.StringIO()
        Evaluator(out=out).execute(parse_source(source))
        return out.getvalue().splitlines()

    return run
