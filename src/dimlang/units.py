# -----------------------------------------------------------------------------
# Units & Dimensions
# Purpose:
#   Represent a unit as integer exponents over UnitIdentity tags, with the
#   matching exponents over DimensionIdentity tags derived alongside it, and
#   define the unit algebra used by dimensioned arithmetic:
#     a + b, a - b  → dimensions must match; result is `a`
#     a * b         → exponents summed per identity
#     a / b         → rhs exponents subtracted
# Scope:
#   - Static facts (dimension membership, conversion rate, symbol) come from
#     the unit catalog; see catalog.py.
#   - Raises DimensionMismatch on additive mixing of dimensions.
#   - Raises UnsupportedUnit when an exponent pushes the conversion rate
#     past float range (e.g. [km^103], [km^-400]).
# -----------------------------------------------------------------------------

from __future__ import annotations
import math
from enum import Enum
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Tuple

from .errors import DimensionMismatch, UnsupportedUnit


class DimensionIdentity(Enum):
    NONE = "none"
    TIME = "time"
    LENGTH = "length"
    CURRENCY = "currency"

    @property
    def label(self) -> str:
        from .catalog import default_catalog
        return default_catalog().dimensions[self].label


class UnitIdentity(Enum):
    METER = "meter"
    KILOMETER = "kilometer"
    SECOND = "second"
    MINUTE = "minute"
    HOUR = "hour"
    DAY = "day"
    USD = "usd"
    GBP = "gbp"
    NONE = "none"

    @property
    def dimension(self) -> DimensionIdentity:
        from .catalog import default_catalog
        return default_catalog().units[self].dimension

    @property
    def conversion_rate(self) -> float:
        # Multiplier to this unit's dimension base (kilometer → 1000.0, minute → 1/1440)
        from .catalog import default_catalog
        return default_catalog().units[self].rate

    @property
    def symbol(self) -> str:
        from .catalog import default_catalog
        return default_catalog().units[self].symbol


def _render(parts: Iterable[Tuple[str, int]], empty: str) -> str:
    # "a*b^2/c", "1/s", "m/(s*d)"; `empty` when nothing is left
    num = [(s, p) for s, p in parts if p > 0]
    den = [(s, -p) for s, p in parts if p < 0]

    def join(items):
        return "*".join(s if p == 1 else f"{s}^{p}" for s, p in items)

    if not num and not den:
        return empty
    top = join(num) if num else "1"
    if not den:
        return top
    bottom = join(den)
    return f"{top}/({bottom})" if len(den) > 1 else f"{top}/{bottom}"


class Dimension:
    """
    Exponents over DimensionIdentity. Zero exponents are dropped, and the
    dimensionless key never affects equality, so `m/m` compares equal to `1`.
    """
    __slots__ = ("_exponents",)

    def __init__(self, exponents: Mapping[DimensionIdentity, int] | None = None):
        self._exponents = MappingProxyType({d: p for d, p in (exponents or {}).items() if p})

    @property
    def exponents(self) -> Mapping[DimensionIdentity, int]:
        return self._exponents

    def _significant(self) -> Dict[DimensionIdentity, int]:
        return {d: p for d, p in self._exponents.items() if d is not DimensionIdentity.NONE}

    @property
    def is_dimensionless(self) -> bool:
        return not self._significant()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Dimension):
            return NotImplemented
        return self._significant() == other._significant()

    def __hash__(self) -> int:
        return hash(frozenset(self._significant().items()))

    def __str__(self) -> str:
        sig = self._significant()
        return _render([(d.label, sig[d]) for d in DimensionIdentity if d in sig], "dimensionless")

    def __repr__(self) -> str:
        return f"Dimension({dict((d.value, p) for d, p in self._exponents.items())})"


class Unit:
    """
    Immutable map UnitIdentity → exponent plus its derived Dimension.
    Build simple units with Unit.of(UnitIdentity.KILOMETER); compound units
    come out of `*` and `/`.
    """
    __slots__ = ("_exponents", "_dimension")

    def __init__(self, exponents: Mapping[UnitIdentity, int] | None = None):
        exps = {u: int(p) for u, p in (exponents or {}).items() if p}
        dims: Dict[DimensionIdentity, int] = {}
        for u, p in exps.items():
            dims[u.dimension] = dims.get(u.dimension, 0) + p
        self._exponents = MappingProxyType(exps)
        self._dimension = Dimension(dims)

    @classmethod
    def of(cls, identity: UnitIdentity, power: int = 1) -> "Unit":
        if power == 0:
            raise UnsupportedUnit(f"Unsupported exponent 0 for unit {identity.value}")
        unit = cls({identity: power})
        unit.conversion_rate()
        return unit

    @classmethod
    def dimensionless(cls) -> "Unit":
        return cls.of(UnitIdentity.NONE)

    @property
    def exponents(self) -> Mapping[UnitIdentity, int]:
        return self._exponents

    @property
    def dimension(self) -> Dimension:
        return self._dimension

    def conversion_rate(self) -> float:
        # Must be finite and non-zero, otherwise the unit cannot be normalized
        rate = 1.0
        try:
            for u, p in self._exponents.items():
                rate *= u.conversion_rate ** p
        except OverflowError:
            rate = math.inf
        if not math.isfinite(rate) or rate == 0.0:
            raise UnsupportedUnit(f"Unsupported unit [{self}]: conversion rate out of range")
        return rate

    def describe(self) -> str:
        return str(self._dimension)

    # ---- algebra ------------------------------------------------------------

    def _merge(self, other: "Unit", sign: int) -> "Unit":
        exps = dict(self._exponents)
        for u, p in other._exponents.items():
            exps[u] = exps.get(u, 0) + sign * p
        return Unit(exps)

    def _same_dimension(self, other: "Unit", operation: str) -> "Unit":
        if self._dimension != other._dimension:
            raise DimensionMismatch(operation, self, other)
        return self

    def __add__(self, other: "Unit") -> "Unit":
        if not isinstance(other, Unit):
            return NotImplemented
        return self._same_dimension(other, "add")

    def __sub__(self, other: "Unit") -> "Unit":
        if not isinstance(other, Unit):
            return NotImplemented
        return self._same_dimension(other, "subtract")

    def __mul__(self, other: "Unit") -> "Unit":
        if not isinstance(other, Unit):
            return NotImplemented
        return self._merge(other, 1)

    def __truediv__(self, other: "Unit") -> "Unit":
        if not isinstance(other, Unit):
            return NotImplemented
        return self._merge(other, -1)

    # ---- identity & display -------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Unit):
            return NotImplemented
        return dict(self._exponents) == dict(other._exponents)

    def __hash__(self) -> int:
        return hash(frozenset(self._exponents.items()))

    def __str__(self) -> str:
        parts = [(u.symbol, self._exponents[u]) for u in UnitIdentity
                 if u in self._exponents and u is not UnitIdentity.NONE]
        return _render(parts, "1")

    def __repr__(self) -> str:
        return f"Unit({dict((u.value, p) for u, p in self._exponents.items())})"
