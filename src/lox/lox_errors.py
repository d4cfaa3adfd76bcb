"""
Error taxonomy for the Lox front-end and evaluator.

Classes:
    LoxError: Base class carrying a message and an optional source position.
    LexError: Raised by the lexer (unterminated string, malformed number, bad character).
    ParseError: Raised by the parser; carries the offending token and the production.
    EvalError: Raised by the evaluator; carries the node being evaluated when known.

Every stage fails fast on the first error. None of these are caught inside the
core; the CLI and REPL decide how to report them.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:  # pragma: no cover
    from lox.lox_ast import ASTNode
    from lox.lox_lexer import Token


class LoxError(Exception):
    """Base class for all Lox errors.

    Attributes:
        message (str): Human readable description without position.
        line (int): 1-based source line, 0 when unknown.
        col (int): 1-based source column, 0 when unknown.
    """

    kind = "LoxError"

    def __init__(self, message: str, line: int = 0, col: int = 0) -> None:
        self.message = message
        self.line = line
        self.col = col
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.line:
            return f"{self.message} at line {self.line}, col {self.col}"
        return self.message

    def __eq__(self, other: Any) -> bool:
        return (
            type(self) is type(other)
            and self.message == other.message
            and self.line == other.line
            and self.col == other.col
        )

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.message, self.line, self.col))


class LexError(LoxError):
    kind = "LexError"


class ParseError(LoxError):
    """Raised when the token stream does not match the grammar.

    Attributes:
        token (Token | None): The unexpected token.
        production (str): Grammar rule being matched, e.g. ``"primary"``.
    """

    kind = "ParseError"

    def __init__(
        self, message: str, token: Token | None = None, production: str = ""
    ) -> None:
        self.token = token
        self.production = production
        line = token.line if token is not None else 0
        col = token.col if token is not None else 0
        super().__init__(message, line, col)

    def __str__(self) -> str:
        base = super().__str__()
        return f"{base} (in {self.production})" if self.production else base


class EvalError(LoxError):
    """Raised when a tree cannot be evaluated.

    Attributes:
        node (ASTNode | None): The node that failed, if known.
    """

    kind = "EvalError"

    def __init__(self, message: str, node: ASTNode | None = None) -> None:
        self.node = node
        line = node.line if node is not None else 0
        col = node.col if node is not None else 0
        super().__init__(message, line, col)


__all__ = ["EvalError", "LexError", "LoxError", "ParseError"]
