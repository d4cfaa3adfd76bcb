"""
Runtime value model for the Lox language.

Classes:
    Number: A numeric value tagged as either INTEGER or FLOAT.
    EvaluateResult: The closed set of runtime values (BOOLEAN, NUMBER, STRING, NIL).

Numbers never widen: arithmetic and ordering between an integer and a float
raise `EvalError`. Equality between different kinds is simply False.

Example:
    >>> Number.integer(7) / Number.integer(2)
    Number(INTEGER, 3)
    >>> str(EvaluateResult.number(Number.float_(2.5)))
    '2.5'
"""

from __future__ import annotations

import math
from decimal import Decimal
from typing import Any

from lox.lox_errors import EvalError

INTEGER = "INTEGER"
FLOAT = "FLOAT"


class Number:
    """An integer or floating-point magnitude tagged by its kind.

    Attributes:
        kind (str): Either ``"INTEGER"`` or ``"FLOAT"``.
        value (int | float): The Python magnitude, matching ``kind``.
    """

    __slots__ = ("kind", "value")

    def __init__(self, kind: str, value: int | float) -> None:
        if kind == INTEGER:
            value = int(value)
        elif kind == FLOAT:
            value = float(value)
        else:
            raise ValueError(f"Unknown number kind: {kind!r}")
        self.kind = kind
        self.value = value

    @classmethod
    def integer(cls, value: int) -> Number:
        return cls(INTEGER, value)

    @classmethod
    def float_(cls, value: float) -> Number:
        return cls(FLOAT, value)

    @classmethod
    def from_lexeme(cls, text: str) -> Number:
        """Builds a Number from a digit run; one '.' makes it a float."""
        if "." in text:
            return cls(FLOAT, float(text))
        return cls(INTEGER, int(text))

    @property
    def is_integer(self) -> bool:
        return self.kind == INTEGER

    def _same_kind(self, other: Number, verb: str) -> None:
        if self.kind != other.kind:
            raise EvalError(
                f"Cannot {verb} {self.kind.lower()} and {other.kind.lower()}"
            )

    def __add__(self, other: Number) -> Number:
        self._same_kind(other, "add")
        return Number(self.kind, self.value + other.value)

    def __sub__(self, other: Number) -> Number:
        self._same_kind(other, "subtract")
        return Number(self.kind, self.value - other.value)

    def __mul__(self, other: Number) -> Number:
        self._same_kind(other, "multiply")
        return Number(self.kind, self.value * other.value)

    def __truediv__(self, other: Number) -> Number:
        self._same_kind(other, "divide")
        if self.is_integer:
            if other.value == 0:
                raise EvalError("Integer division by zero")
            # Truncate toward zero
            quotient = abs(self.value) // abs(other.value)
            if (self.value < 0) != (other.value < 0):
                quotient = -quotient
            return Number(INTEGER, quotient)
        if other.value == 0.0:
            if self.value == 0.0 or math.isnan(self.value):
                return Number(FLOAT, math.nan)
            sign = math.copysign(1.0, self.value) * math.copysign(1.0, other.value)
            return Number(FLOAT, math.copysign(math.inf, sign))
        return Number(FLOAT, self.value / other.value)

    def __neg__(self) -> Number:
        return Number(self.kind, -self.value)

    def __lt__(self, other: Number) -> bool:
        self._same_kind(other, "compare")
        return self.value < other.value

    def __le__(self, other: Number) -> bool:
        self._same_kind(other, "compare")
        return self.value <= other.value

    def __gt__(self, other: Number) -> bool:
        self._same_kind(other, "compare")
        return self.value > other.value

    def __ge__(self, other: Number) -> bool:
        self._same_kind(other, "compare")
        return self.value >= other.value

    def __eq__(self, other: Any) -> bool:
        return (
            isinstance(other, Number)
            and self.kind == other.kind
            and self.value == other.value
        )

    def __hash__(self) -> int:
        return hash((self.kind, self.value))

    def __repr__(self) -> str:
        return f"Number({self.kind}, {self.value!r})"

    def __str__(self) -> str:
        if self.is_integer:
            return str(self.value)
        value = self.value
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "inf" if value > 0 else "-inf"
        if value.is_integer():
            return str(int(value))
        text = repr(value)
        if "e" in text or "E" in text:
            text = format(Decimal(text), "f")
        return text


BOOLEAN = "BOOLEAN"
NUMBER = "NUMBER"
STRING = "STRING"
NIL = "NIL"


class EvaluateResult:
    """A runtime value: exactly one of BOOLEAN, NUMBER, STRING or NIL.

    Attributes:
        kind (str): The value kind tag.
        value (bool | Number | str | None): The payload for that kind.
    """

    __slots__ = ("kind", "value")

    def __init__(self, kind: str, value: bool | Number | str | None = None) -> None:
        self.kind = kind
        self.value = value

    @classmethod
    def boolean(cls, value: bool) -> EvaluateResult:
        return cls(BOOLEAN, bool(value))

    @classmethod
    def number(cls, value: Number) -> EvaluateResult:
        return cls(NUMBER, value)

    @classmethod
    def string(cls, value: str) -> EvaluateResult:
        return cls(STRING, value)

    @classmethod
    def nil(cls) -> EvaluateResult:
        return cls(NIL, None)

    @property
    def is_nil(self) -> bool:
        return self.kind == NIL

    def __eq__(self, other: Any) -> bool:
        return (
            isinstance(other, EvaluateResult)
            and self.kind == other.kind
            and self.value == other.value
        )

    def __hash__(self) -> int:
        return hash((self.kind, self.value))

    def __repr__(self) -> str:
        if self.kind == NIL:
            return "EvaluateResult(NIL)"
        return f"EvaluateResult({self.kind}, {self.value!r})"

    def __str__(self) -> str:
        if self.kind == BOOLEAN:
            return "true" if self.value else "false"
        if self.kind == NIL:
            return "nil"
        return str(self.value)


__all__ = [
    "BOOLEAN",
    "FLOAT",
    "INTEGER",
    "NIL",
    "NUMBER",
    "STRING",
    "EvaluateResult",
    "Number",
]
