"""
Defines the abstract syntax tree (AST) node structure for the Lox language.

Classes:
    ASTNode:
        A node in the syntax tree, produced by the parser and consumed by the evaluator.
        Each node owns its children; the tree is never shared and never mutated after parsing.

    ASTDict:
        TypedDict representation for serializing ASTNode instances to plain Python dictionaries,
        suitable for JSON output or debugging.

Node kinds and field usage:
    binary      value=operator, children=[left, right]
    unary       value=operator, children=[operand]
    boolean     value=bool
    number      value=Number
    string      value=str
    nil         -
    group       children=[inner]
    variable    value=name, children=[initializer] or []   (a `var` declaration)
    identifier  value=name                                (a resolved reference)
    assign      value=name, children=[expression]
    print       children=[expression]
    block       children=statements
    if          value=condition, children=[then], else_children=[else] or []
    or / and    children=[left, right]

Example:
    node = ASTNode("binary", "+", [ASTNode("number", Number.integer(1)), ASTNode("number", Number.integer(2))])
    str(node)  # "(+ 1 2)"
"""

from typing import Any, TypedDict, Union

from lox.lox_value import Number


class ASTDict(TypedDict, total=False):
    """
    TypedDict representation of an ASTNode used for serialization.

    Fields:
        kind (str): The type of AST node (e.g., "binary", "print", "if").
        value (Any): The node's value; numbers become {"kind", "value"} dicts,
            nested nodes become nested ASTDicts.
        line (int): Line number in the source code where the node originates.
        col (int): Column number in the source code where the node originates.
        children (List[ASTDict]): Primary child nodes in the AST hierarchy.
        else_children (List[ASTDict]): Alternate branch nodes (the `else` statement).
    """

    kind: str
    value: Any
    line: int
    col: int
    children: list["ASTDict"]
    else_children: list["ASTDict"]


class ASTNode:
    """
    Represents a node in the abstract syntax tree (AST) for the Lox language.

    Args:
        kind (str): The type of node (see module docstring).
        value (str | bool | Number | ASTNode, optional): Operator, name, literal, or condition node.
        children (list[ASTNode], optional): Primary child nodes in the syntax tree.
        line (int): Source line number (default is 0).
        col (int): Source column number (default is 0).
        else_children (list[ASTNode], optional): The `else` branch of an `if`.
    """

    def __init__(
        self,
        kind: str,
        value: Union[str, bool, Number, "ASTNode"] | None = None,
        children: list["ASTNode"] | None = None,
        line: int = 0,
        col: int = 0,
        else_children: list["ASTNode"] | None = None,
    ):
        self.kind = kind
        self.value = value
        self.children: list["ASTNode"] = children or []
        self.line = line
        self.col = col
        self.else_children: list["ASTNode"] = else_children or []

    def __repr__(self) -> str:
        parts = [f"{self.kind}"]
        if self.value is not None:
            parts.append(f"value={repr(self.value)}")
        if self.children:
            preview = ", ".join(repr(c) for c in self.children[:3])
            if len(self.children) > 3:
                preview += ", ..."
            parts.append(f"children=[{preview}]")
        if self.else_children:
            preview = ", ".join(repr(c) for c in self.else_children)
            parts.append(f"else_children=[{preview}]")
        return f"ASTNode({', '.join(parts)})"

    def __str__(self) -> str:
        """Parenthesized prefix rendering, e.g. ``(+ 1 (group 2))``."""
        kind = self.kind
        if kind in ("binary", "unary"):
            inner = " ".join(str(c) for c in self.children)
            return f"({self.value} {inner})"
        if kind in ("or", "and"):
            return f"({kind} {self.children[0]} {self.children[1]})"
        if kind == "boolean":
            return "true" if self.value else "false"
        if kind == "nil":
            return "nil"
        if kind == "string":
            return f'"{self.value}"'
        if kind in ("number", "identifier"):
            return str(self.value)
        if kind == "group":
            return f"(group {self.children[0]})"
        if kind == "variable":
            init = f" {self.children[0]}" if self.children else ""
            return f"(var {self.value}{init})"
        if kind == "assign":
            return f"(= {self.value} {self.children[0]})"
        if kind == "print":
            return f"(print {self.children[0]})"
        if kind == "block":
            return "(block" + "".join(f" {c}" for c in self.children) + ")"
        if kind == "if":
            text = f"(if {self.value} {self.children[0]}"
            if self.else_children:
                text += f" {self.else_children[0]}"
            return text + ")"
        return repr(self)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, ASTNode):
            return False
        return (
            self.kind == other.kind
            and self.value == other.value
            and self.line == other.line
            and self.col == other.col
            and self.children == other.children
            and self.else_children == other.else_children
        )

    def to_dict(self) -> ASTDict:
        val: Any = self.value  # use separate var, don't reuse self.value
        if isinstance(val, ASTNode):
            val = val.to_dict()
        elif isinstance(val, Number):
            val = {"kind": val.kind, "value": val.value}

        return {
            "kind": self.kind,
            "value": val,
            "line": self.line,
            "col": self.col,
            "children": [c.to_dict() for c in self.children],
            "else_children": [c.to_dict() for c in self.else_children],
        }


__all__ = ["ASTDict", "ASTNode"]
