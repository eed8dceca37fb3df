from __future__ import annotations
from typing import Any, Dict, List, Optional, Union
from pydantic import BaseModel, Field

Payload = Union[float, List[float]]


class BindingOut(BaseModel):
    name: str
    value: Payload           # stored payload (base units once computed)
    unit: str                # nominal unit tag, e.g. "m*km"
    dimension: str           # e.g. "length^2"
    in_unit: Payload         # payload re-expressed in the nominal unit
    in_base_units: bool
    display: str


class RunRequest(BaseModel):
    source: str = Field(..., description="Program text, one or more `name = expr;` statements per line")
    trace: bool = True


class RunResult(BaseModel):
    ok: bool
    bindings: Dict[str, BindingOut] = Field(default_factory=dict)
    statements: int = 0
    executed: int = 0
    error: Optional[str] = None
    error_kind: Optional[str] = None
    trace: List[Dict[str, Any]] = Field(default_factory=list)
