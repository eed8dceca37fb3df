# -----------------------------------------------------------------------------
# DimensionedValue: a numeric payload paired with its Unit
# Purpose:
#   Arithmetic that (1) checks/composes units, (2) normalizes each operand to
#   its dimension's base unit via the unit's conversion rate, (3) applies the
#   Value-level operation. Results are always stored in base units; the unit
#   tag is nominal (lhs unit for + and -, composed unit for * and /).
# -----------------------------------------------------------------------------

from __future__ import annotations
from dataclasses import dataclass

from .units import Unit
from .value import Scalar, Value


@dataclass(frozen=True)
class DimensionedValue:
    value: Value
    unit: Unit
    # True once the payload has been normalized (every arithmetic result);
    # literals start False and are scaled by unit.conversion_rate() on use.
    in_base_units: bool = False

    def normalized(self) -> Value:
        if self.in_base_units:
            return self.value
        return self.value * Scalar(self.unit.conversion_rate())

    def _combine(self, other: "DimensionedValue", operation: str) -> "DimensionedValue":
        # Unit first: a dimension mismatch or a composed unit with no usable
        # conversion rate is reported before any numeric work.
        if operation == "add":
            unit = self.unit + other.unit
            value = self.normalized() + other.normalized()
        elif operation == "subtract":
            unit = self.unit - other.unit
            value = self.normalized() - other.normalized()
        elif operation == "multiply":
            unit = self.unit * other.unit
            unit.conversion_rate()
            value = self.normalized() * other.normalized()
        elif operation == "divide":
            unit = self.unit / other.unit
            unit.conversion_rate()
            value = self.normalized() / other.normalized()
        else:
            raise ValueError(f"Unsupported operation: {operation}")
        return DimensionedValue(value=value, unit=unit, in_base_units=True)

    def __add__(self, other):
        if not isinstance(other, DimensionedValue):
            return NotImplemented
        return self._combine(other, "add")

    def __sub__(self, other):
        if not isinstance(other, DimensionedValue):
            return NotImplemented
        return self._combine(other, "subtract")

    def __mul__(self, other):
        if not isinstance(other, DimensionedValue):
            return NotImplemented
        return self._combine(other, "multiply")

    def __truediv__(self, other):
        if not isinstance(other, DimensionedValue):
            return NotImplemented
        return self._combine(other, "divide")

    def in_unit(self) -> Value:
        """Payload re-expressed in the nominal unit (undoes normalization)."""
        if not self.in_base_units:
            return self.value
        return self.value / Scalar(self.unit.conversion_rate())

    def __str__(self) -> str:
        payload = self.value.to_python()
        if isinstance(payload, list):
            payload = "[" + " ".join(f"{x:g}" for x in payload) + "]"
        else:
            payload = f"{payload:g}"
        return f"{payload}[{self.unit}]"
