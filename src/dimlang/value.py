# -----------------------------------------------------------------------------
# Numeric payloads
# Purpose:
#   Unit-free arithmetic over Scalar and Vector for all four shape pairings:
#     scalar∘scalar → scalar
#     scalar∘vector, vector∘scalar → vector (scalar broadcast, order kept)
#     vector∘vector → vector (element-wise, lengths must match)
# Safety:
#   - VectorLengthMismatch instead of truncating to the shorter operand.
#   - DivisionByZero instead of inf/nan.
# -----------------------------------------------------------------------------

from __future__ import annotations
import operator
from dataclasses import dataclass
from typing import Iterable, List, Tuple, Union

from .errors import DivisionByZero, VectorLengthMismatch



def _divide(a: float, b: float) -> float:
    if b == 0:
        raise DivisionByZero(f"Division by zero ({a} / {b})")
    return a / b


# operation name → float combinator
_OPS = {
    "add": operator.add,
    "subtract": operator.sub,
    "multiply": operator.mul,
    "divide": _divide,
}


class _Arithmetic:
    # Shared operator plumbing; subclasses supply _apply.
    def _apply(self, other: "Value", operation: str) -> "Value":
        raise NotImplementedError

    def __add__(self, other):
        if not isinstance(other, (Scalar, Vector)):
            return NotImplemented
        return self._apply(other, "add")

    def __sub__(self, other):
        if not isinstance(other, (Scalar, Vector)):
            return NotImplemented
        return self._apply(other, "subtract")

    def __mul__(self, other):
        if not isinstance(other, (Scalar, Vector)):
            return NotImplemented
        return self._apply(other, "multiply")

    def __truediv__(self, other):
        if not isinstance(other, (Scalar, Vector)):
            return NotImplemented
        return self._apply(other, "divide")


@dataclass(frozen=True)
class Scalar(_Arithmetic):
    magnitude: float

    def __post_init__(self):
        object.__setattr__(self, "magnitude", float(self.magnitude))

    def _apply(self, other: "Value", operation: str) -> "Value":
        fn = _OPS[operation]
        if isinstance(other, Scalar):
            return Scalar(fn(self.magnitude, other.magnitude))
        # scalar is the left operand: s - v_i, s / v_i
        return Vector(tuple(fn(self.magnitude, x) for x in other.elements))

    def to_python(self) -> float:
        return self.magnitude


@dataclass(frozen=True)
class Vector(_Arithmetic):
    elements: Tuple[float, ...]

    def __post_init__(self):
        if len(self.elements) == 0:
            raise ValueError("Vector must hold at least one element")
        object.__setattr__(self, "elements", tuple(float(x) for x in self.elements))

    @classmethod
    def of(cls, values: Iterable[float]) -> "Vector":
        return cls(tuple(values))

    def _apply(self, other: "Value", operation: str) -> "Value":
        fn = _OPS[operation]
        if isinstance(other, Scalar):
            return Vector(tuple(fn(x, other.magnitude) for x in self.elements))
        if len(self.elements) != len(other.elements):
            raise VectorLengthMismatch(operation, len(self.elements), len(other.elements))
        return Vector(tuple(fn(a, b) for a, b in zip(self.elements, other.elements)))

    def to_python(self) -> List[float]:
        return list(self.elements)

    def __len__(self) -> int:
        return len(self.elements)


Value = Union[Scalar, Vector]
