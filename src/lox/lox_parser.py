"""
Lox Language Parser

Parses a filtered Lox token stream into a list of `ASTNode` statements.

The parser is a classic recursive descent over the grammar below, one method per
rule, each binary level left-associative and assignment right-associative:

    program     → declaration* END
    declaration → "var" IDENT ("=" expression)? ";" | statement
    statement   → "print" expression ";" | block | ifStmt | expression ";"
    block       → "{" declaration* "}"
    ifStmt      → "if" expression statement ("else" statement)?
    expression  → assignment
    assignment  → IDENT "=" assignment | logic_or
    logic_or    → logic_and ("or" logic_and)*
    logic_and   → equality ("and" equality)*
    equality    → comparison (("!=" | "==") comparison)*
    comparison  → term ((">" | ">=" | "<" | "<=") term)*
    term        → factor (("-" | "+") factor)*
    factor      → unary (("/" | "*") unary)*
    unary       → ("!" | "-") unary | primary
    primary     → NUMBER | STRING | "true" | "false" | "nil" | "(" expression ")" | IDENT

Scoping
-------
The parser owns an `Environment` that mirrors the block structure of the
program. Names are resolved at parse time: referencing or assigning a name that
is not declared on the current scope chain is a `ParseError`, even if it is
declared further down the program. Redeclaring a name in the same scope is
allowed and only recorded in `Parser.warnings`.

This is sound only because the language has no functions; a name can never be
referenced before the statement declaring it has run.

Termination
-----------
Every statement ends with `;`, except that the end of the token stream also
terminates the final statement.

Raises
------
ParseError
    On the first token that does not fit the grammar. There is no recovery.
"""

from __future__ import annotations

from collections.abc import Callable

from lox.lox_ast import ASTNode
from lox.lox_env import Environment
from lox.lox_errors import ParseError
from lox.lox_lexer import Token

EQUALITY_OPS = ("BANG_EQUAL", "EQUAL_EQUAL")
COMPARISON_OPS = ("GREATER", "GREATER_EQUAL", "LESS", "LESS_EQUAL")
TERM_OPS = ("MINUS", "PLUS")
FACTOR_OPS = ("SLASH", "STAR")
UNARY_OPS = ("BANG", "MINUS")


class Parser:
    """
    Lox Parser Class

    Attributes
    ----------
    tokens : list[Token]
        The significant (whitespace-free) token stream.
    position : int
        Current index into the token stream.
    scope : Environment[ASTNode]
        Live scope chain mapping names to their declaring `variable` node.
    warnings : list[str]
        Non-fatal diagnostics, e.g. same-scope redeclarations.

    Methods
    -------
    parse() -> list[ASTNode]
        Parse a complete program.
    parse_declaration() -> ASTNode
        Parse one `var` declaration or statement.
    parse_expression() -> ASTNode
        Parse a single expression.
    """

    def __init__(
        self, tokens: list[Token], scope: Environment[ASTNode] | None = None
    ) -> None:
        self.tokens: list[Token] = tokens
        self.position: int = 0
        self.scope: Environment[ASTNode] = scope if scope is not None else Environment()
        self.warnings: list[str] = []

    # Cursor helpers

    def current(self) -> Token:
        if self.position < len(self.tokens):
            return self.tokens[self.position]
        last = self.tokens[-1] if self.tokens else None
        if last is not None and last.type == "EOF":
            return last
        line = last.line if last is not None else 0
        col = last.col + len(last.lexeme()) if last is not None else 0
        return Token("EOF", "", line, col)

    def peek(self, offset: int = 1) -> Token:
        index = self.position + offset
        if index < len(self.tokens):
            return self.tokens[index]
        return Token("EOF", "")

    def advance(self) -> Token:
        tok = self.current()
        if tok.type != "EOF":
            self.position += 1
        return tok

    def at_end(self) -> bool:
        return self.current().type == "EOF"

    def check(self, *types: str) -> bool:
        return self.current().type in types

    def match(self, *types: str, production: str = "", message: str = "") -> Token:
        """Consumes the current token if its type is in `types`, else raises."""
        tok = self.current()
        if tok.type in types:
            return self.advance()
        expected = " or ".join(repr(t) for t in types)
        raise ParseError(
            message or f"Expected {expected}, got {tok.type} '{tok}'", tok, production
        )

    def end_statement(self, production: str) -> None:
        """Consumes the terminating ';'. End of input also terminates."""
        if self.at_end():
            return
        self.match(
            "SEMICOLON",
            production=production,
            message=f"Expected ';' after {production}, got '{self.current()}'",
        )

    # Program and statements

    def parse(self) -> list[ASTNode]:
        """Parse a full Lox program and return its top-level statements."""
        ast: list[ASTNode] = []
        while not self.at_end():
            ast.append(self.parse_declaration())
        return ast

    def parse_declaration(self) -> ASTNode:
        if self.check("VAR"):
            return self.parse_var()
        return self.parse_statement()

    def parse_var(self) -> ASTNode:
        """Parse `var IDENT ("=" expression)? ";"` and declare the name."""
        var_tok = self.match("VAR", production="declaration")
        name_tok = self.match(
            "IDENT",
            production="declaration",
            message=f"Expected variable name after 'var', got '{self.current()}'",
        )
        children: list[ASTNode] = []
        if self.check("EQUAL"):
            self.advance()
            # Resolved before the name is declared: `var x = x;` sees the outer x
            children.append(self.parse_expression())
        self.end_statement("variable declaration")

        node = ASTNode(
            "variable",
            name_tok.value,
            children,
            line=var_tok.line,
            col=var_tok.col,
        )
        if self.scope.declare(name_tok.value, node):
            self.warnings.append(
                f"Variable '{name_tok.value}' redeclared in the same scope "
                f"at line {name_tok.line}, col {name_tok.col}"
            )
        return node

    def parse_statement(self) -> ASTNode:
        tok = self.current()
        if tok.type == "PRINT":
            return self.parse_print()
        if tok.type == "LEFT_BRACE":
            return self.parse_block()
        if tok.type == "IF":
            return self.parse_if()
        if tok.type == "VAR":
            raise ParseError(
                "Variable declaration not allowed here", tok, "statement"
            )
        expr = self.parse_expression()
        self.end_statement("expression")
        return expr

    def parse_print(self) -> ASTNode:
        print_tok = self.match("PRINT", production="print")
        expr = self.parse_expression()
        self.end_statement("print statement")
        return ASTNode("print", children=[expr], line=print_tok.line, col=print_tok.col)

    def parse_block(self) -> ASTNode:
        """Parse a `{}`-enclosed block in its own scope."""
        open_tok = self.match("LEFT_BRACE", production="block")
        stmts: list[ASTNode] = []
        with self.scope.scope():
            while not self.check("RIGHT_BRACE"):
                if self.at_end():
                    raise ParseError(
                        f"Expected '}}' to close block opened at line {open_tok.line}, "
                        "got end of input",
                        self.current(),
                        "block",
                    )
                stmts.append(self.parse_declaration())
        self.match("RIGHT_BRACE", production="block")
        return ASTNode("block", children=stmts, line=open_tok.line, col=open_tok.col)

    def parse_if(self) -> ASTNode:
        """Parse `if` with its condition and both branches left unevaluated."""
        if_tok = self.match("IF", production="if statement")
        if self.at_end():
            raise ParseError("Expected condition after 'if'", self.current(), "if statement")
        condition = self.parse_expression()
        if self.at_end():
            raise ParseError(
                "Expected statement after 'if' condition", self.current(), "if statement"
            )
        then_branch = self.parse_statement()
        else_branch: list[ASTNode] = []
        if self.check("ELSE"):
            self.advance()
            if self.at_end():
                raise ParseError(
                    "Expected statement after 'else'", self.current(), "if statement"
                )
            else_branch.append(self.parse_statement())
        return ASTNode(
            "if",
            value=condition,
            children=[then_branch],
            else_children=else_branch,
            line=if_tok.line,
            col=if_tok.col,
        )

    # Expressions

    def parse_expression(self) -> ASTNode:
        return self.parse_assignment()

    def parse_assignment(self) -> ASTNode:
        tok = self.current()
        if tok.type == "IDENT" and self.peek().type == "EQUAL":
            self.advance()
            self.advance()
            if tok.value not in self.scope:
                raise ParseError(
                    f"Assignment to undeclared variable '{tok.value}'", tok, "assignment"
                )
            value = self.parse_assignment()
            return ASTNode("assign", tok.value, [value], line=tok.line, col=tok.col)

        expr = self.parse_or()
        if self.check("EQUAL"):
            raise ParseError("Invalid assignment target", self.current(), "assignment")
        return expr

    def parse_or(self) -> ASTNode:
        node = self.parse_and()
        while self.check("OR"):
            op_tok = self.advance()
            right = self.parse_and()
            node = ASTNode("or", children=[node, right], line=op_tok.line, col=op_tok.col)
        return node

    def parse_and(self) -> ASTNode:
        node = self.parse_equality()
        while self.check("AND"):
            op_tok = self.advance()
            right = self.parse_equality()
            node = ASTNode("and", children=[node, right], line=op_tok.line, col=op_tok.col)
        return node

    def _binary_level(
        self, operators: tuple[str, ...], operand: Callable[[], ASTNode]
    ) -> ASTNode:
        node = operand()
        while self.check(*operators):
            op_tok = self.advance()
            right = operand()
            node = ASTNode(
                "binary", op_tok.value, [node, right], line=op_tok.line, col=op_tok.col
            )
        return node

    def parse_equality(self) -> ASTNode:
        return self._binary_level(EQUALITY_OPS, self.parse_comparison)

    def parse_comparison(self) -> ASTNode:
        return self._binary_level(COMPARISON_OPS, self.parse_term)

    def parse_term(self) -> ASTNode:
        return self._binary_level(TERM_OPS, self.parse_factor)

    def parse_factor(self) -> ASTNode:
        return self._binary_level(FACTOR_OPS, self.parse_unary)

    def parse_unary(self) -> ASTNode:
        if self.check(*UNARY_OPS):
            op_tok = self.advance()
            operand = self.parse_unary()
            return ASTNode(
                "unary", op_tok.value, [operand], line=op_tok.line, col=op_tok.col
            )
        return self.parse_primary()

    def parse_primary(self) -> ASTNode:
        tok = self.current()
        kind = tok.type

        if kind == "NUMBER":
            self.advance()
            return ASTNode("number", tok.literal, line=tok.line, col=tok.col)
        if kind == "STRING":
            self.advance()
            return ASTNode("string", tok.value, line=tok.line, col=tok.col)
        if kind in ("TRUE", "FALSE"):
            self.advance()
            return ASTNode("boolean", kind == "TRUE", line=tok.line, col=tok.col)
        if kind == "NIL":
            self.advance()
            return ASTNode("nil", line=tok.line, col=tok.col)
        if kind == "LEFT_PAREN":
            self.advance()
            inner = self.parse_expression()
            self.match(
                "RIGHT_PAREN",
                production="primary",
                message=f"Expected ')' after expression, got '{self.current()}'",
            )
            return ASTNode("group", children=[inner], line=tok.line, col=tok.col)
        if kind == "IDENT":
            if tok.value not in self.scope:
                raise ParseError(f"Undeclared variable '{tok.value}'", tok, "primary")
            self.advance()
            return ASTNode("identifier", tok.value, line=tok.line, col=tok.col)
        if kind == "EOF":
            raise ParseError("Expected expression, got end of input", tok, "primary")
        raise ParseError(f"Expected expression, got '{tok}'", tok, "primary")


def parse(tokens: list[Token], scope: Environment[ASTNode] | None = None) -> list[ASTNode]:
    """Parse a filtered token stream into top-level statements."""
    return Parser(tokens, scope).parse()


__all__ = ["Parser", "parse"]
