"""
Tree-walking evaluator for the Lox language.

This module defines the `Evaluator` class, which walks parsed `ASTNode` trees
and produces `EvaluateResult` values, performing the program's side effects
(printing and variable binding) along the way.

Behavior:
    - Dispatches each node to an `eval_<kind>` method.
    - Keeps its own runtime `Environment`; blocks push and pop a frame.
    - Evaluates `if` conditions when the `if` runs, never at parse time, so the
      same tree may be evaluated repeatedly against different bindings.
    - `and`/`or` short-circuit on a deciding boolean left operand; otherwise the
      right operand is the result and must be a boolean. There is no truthiness.
    - Numbers never mix kinds (see `lox_value.Number`).

Raises:
    - `EvalError`: On any operand-kind mismatch, undefined operator, non-boolean
      condition, integer division by zero, or unknown node kind.
"""

import sys
from typing import TextIO, cast

from lox.lox_ast import ASTNode
from lox.lox_env import Environment
from lox.lox_errors import EvalError
from lox.lox_value import (
    BOOLEAN,
    NUMBER,
    STRING,
    EvaluateResult,
    Number,
)


class Evaluator:
    """Evaluates Lox AST nodes.

    Attributes:
        environment (Environment[EvaluateResult]): Runtime scope chain.
        out (TextIO | None): Stream that `print` writes to; None means the
            current `sys.stdout` at print time.
    """

    def __init__(
        self,
        environment: Environment[EvaluateResult] | None = None,
        out: TextIO | None = None,
    ) -> None:
        self.environment: Environment[EvaluateResult] = (
            environment if environment is not None else Environment()
        )
        self.out = out

    def execute(self, nodes: list[ASTNode]) -> list[EvaluateResult]:
        """Evaluates top-level statements in order, one result per statement."""
        return [self.evaluate(node) for node in nodes]

    def evaluate(self, node: ASTNode) -> EvaluateResult:
        """Dispatches `node` to its `eval_<kind>` method."""
        method = getattr(self, f"eval_{node.kind}", None)
        if method is None:
            raise EvalError(f"No evaluation rule for node kind '{node.kind}'", node)
        result: EvaluateResult = method(node)
        return result

    # Literals

    def eval_boolean(self, node: ASTNode) -> EvaluateResult:
        return EvaluateResult.boolean(bool(node.value))

    def eval_number(self, node: ASTNode) -> EvaluateResult:
        if not isinstance(node.value, Number):
            raise EvalError(f"Malformed number literal {node.value!r}", node)
        return EvaluateResult.number(node.value)

    def eval_string(self, node: ASTNode) -> EvaluateResult:
        return EvaluateResult.string(str(node.value))

    def eval_nil(self, node: ASTNode) -> EvaluateResult:
        return EvaluateResult.nil()

    def eval_group(self, node: ASTNode) -> EvaluateResult:
        return self.evaluate(node.children[0])

    # Statements

    def eval_print(self, node: ASTNode) -> EvaluateResult:
        result = self.evaluate(node.children[0])
        print(str(result), file=self.out if self.out is not None else sys.stdout)
        return result

    def eval_block(self, node: ASTNode) -> EvaluateResult:
        result = EvaluateResult.nil()
        with self.environment.scope():
            for stmt in node.children:
                result = self.evaluate(stmt)
        return result

    def eval_if(self, node: ASTNode) -> EvaluateResult:
        if not isinstance(node.value, ASTNode):
            raise EvalError("'if' without a condition", node)
        condition = self.evaluate(node.value)
        if condition.kind != BOOLEAN:
            raise EvalError(
                f"'if' condition must be a boolean, got {condition.kind.lower()}", node
            )
        if condition.value:
            return self.evaluate(node.children[0])
        if node.else_children:
            return self.evaluate(node.else_children[0])
        return EvaluateResult.nil()

    # Variables

    def eval_variable(self, node: ASTNode) -> EvaluateResult:
        value = self.evaluate(node.children[0]) if node.children else EvaluateResult.nil()
        self.environment.declare(str(node.value), value)
        return value

    def eval_identifier(self, node: ASTNode) -> EvaluateResult:
        try:
            return self.environment.lookup(str(node.value))
        except KeyError:
            raise EvalError(f"Undefined variable '{node.value}'", node) from None

    def eval_assign(self, node: ASTNode) -> EvaluateResult:
        value = self.evaluate(node.children[0])
        if not self.environment.assign(str(node.value), value):
            raise EvalError(f"Undefined variable '{node.value}'", node)
        return value

    # Logic

    def _logical(self, node: ASTNode, short_circuit_on: bool) -> EvaluateResult:
        left = self.evaluate(node.children[0])
        # Only a boolean left side decides; anything else falls through
        if left.kind == BOOLEAN and left.value is short_circuit_on:
            return left
        right = self.evaluate(node.children[1])
        if right.kind != BOOLEAN:
            raise EvalError(
                f"Right operand of '{node.kind}' must be a boolean, got {right.kind.lower()}",
                node,
            )
        return right

    def eval_or(self, node: ASTNode) -> EvaluateResult:
        return self._logical(node, short_circuit_on=True)

    def eval_and(self, node: ASTNode) -> EvaluateResult:
        return self._logical(node, short_circuit_on=False)

    # Operators

    def eval_unary(self, node: ASTNode) -> EvaluateResult:
        operand = self.evaluate(node.children[0])
        op = node.value
        if op == "-" and operand.kind == NUMBER:
            return EvaluateResult.number(-cast(Number, operand.value))
        if op == "!" and operand.kind == BOOLEAN:
            return EvaluateResult.boolean(not operand.value)
        raise EvalError(
            f"Operator '{op}' not defined for {operand.kind.lower()}", node
        )

    def eval_binary(self, node: ASTNode) -> EvaluateResult:
        left = self.evaluate(node.children[0])
        right = self.evaluate(node.children[1])
        op = node.value

        if left.kind == NUMBER and right.kind == NUMBER:
            return self._binary_number(
                node, op, cast(Number, left.value), cast(Number, right.value)
            )

        if left.kind == STRING and right.kind == STRING:
            if op == "+":
                return EvaluateResult.string(f"{left.value}{right.value}")
            if op == "==":
                return EvaluateResult.boolean(left.value == right.value)
            raise EvalError(f"Operator '{op}' not defined for strings", node)

        raise EvalError(
            f"Operator '{op}' not defined for {left.kind.lower()} and {right.kind.lower()}",
            node,
        )

    def _binary_number(
        self, node: ASTNode, op: object, left: Number, right: Number
    ) -> EvaluateResult:
        try:
            if op == "+":
                return EvaluateResult.number(left + right)
            if op == "-":
                return EvaluateResult.number(left - right)
            if op == "*":
                return EvaluateResult.number(left * right)
            if op == "/":
                return EvaluateResult.number(left / right)
            if op == ">":
                return EvaluateResult.boolean(left > right)
            if op == "<":
                return EvaluateResult.boolean(left < right)
            if op == ">=":
                return EvaluateResult.boolean(left >= right)
            if op == "<=":
                return EvaluateResult.boolean(left <= right)
            if op == "==":
                return EvaluateResult.boolean(left == right)
            if op == "!=":
                return EvaluateResult.boolean(left != right)
        except EvalError as e:
            # Attach the failing node's position
            raise EvalError(e.message, node) from e
        raise EvalError(f"Unknown binary operator '{op}'", node)


def evaluate(nodes: list[ASTNode], out: TextIO | None = None) -> list[EvaluateResult]:
    """Evaluates `nodes` with a fresh global environment."""
    return Evaluator(out=out).execute(nodes)


__all__ = ["Evaluator", "evaluate"]
