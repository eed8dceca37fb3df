# -----------------------------------------------------------------------------
# Expression tree
# Purpose: The closed set of node types the parser produces and the
# interpreter walks. Literal covers both scalar and vector literals; Variable
# only ever appears as a top-level statement.
# -----------------------------------------------------------------------------

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Union

from .units import Unit
from .value import Value


class BinaryOperation(Enum):
    ADD = "add"
    SUBTRACT = "subtract"
    MULTIPLY = "multiply"
    DIVIDE = "divide"

    @property
    def symbol(self) -> str:
        return _SYMBOLS[self]

    @classmethod
    def from_symbol(cls, symbol: str) -> "BinaryOperation":
        for op, sym in _SYMBOLS.items():
            if sym == symbol:
                return op
        raise ValueError(f"Unsupported binary operation {symbol}")


_SYMBOLS = {
    BinaryOperation.ADD: "+",
    BinaryOperation.SUBTRACT: "-",
    BinaryOperation.MULTIPLY: "*",
    BinaryOperation.DIVIDE: "/",
}


@dataclass(frozen=True)
class Literal:
    value: Value
    unit: Unit


@dataclass(frozen=True)
class Name:
    name: str


@dataclass(frozen=True)
class Expression:
    operation: BinaryOperation
    lhs: "Node"
    rhs: "Node"


@dataclass(frozen=True)
class Variable:
    name: str
    expr: "Node"


Node = Union[Literal, Name, Expression, Variable]
