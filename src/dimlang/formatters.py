from __future__ import annotations
from typing import Dict, List

from .dimensioned import DimensionedValue
from .models import BindingOut

ROUND_SIG = 6


def _sig(x: float, n: int = ROUND_SIG) -> float:
    from math import floor, isfinite, log10
    if x == 0 or not isfinite(x):
        return x
    p = -int(floor(log10(abs(x)))) + (n - 1)
    return round(x, p)


def _fmt(payload) -> str:
    if isinstance(payload, list):
        return "[" + " ".join(f"{_sig(x):g}" for x in payload) + "]"
    return f"{_sig(payload):g}"


def binding_out(name: str, dv: DimensionedValue) -> BindingOut:
    in_unit = dv.in_unit().to_python()
    return BindingOut(
        name=name,
        value=dv.value.to_python(),
        unit=str(dv.unit),
        dimension=dv.unit.describe(),
        in_unit=in_unit,
        in_base_units=dv.in_base_units,
        display=f"{_fmt(in_unit)}[{dv.unit}]",
    )


def bindings_out(memory: Dict[str, DimensionedValue]) -> Dict[str, BindingOut]:
    return {name: binding_out(name, dv) for name, dv in memory.items()}


def binding_lines(bindings: Dict[str, BindingOut]) -> List[str]:
    # One "name = payload[unit]  (dimension)" line per binding, in binding order.
    lines = []
    for name, b in bindings.items():
        lines.append(f"{name} = {b.display}  ({b.dimension})")
    return lines
