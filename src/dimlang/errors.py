# -----------------------------------------------------------------------------
# Error taxonomy for the interpreter
# Purpose:
#   One exception type per failure the language can hit, all rooted at
#   DimlangError so callers (CLI, API, tests) can catch the family or assert
#   on a specific kind. `kind` doubles as the `error_kind` reported in results.
# -----------------------------------------------------------------------------

from __future__ import annotations
from typing import Any


class DimlangError(Exception):
    kind = "evaluation_error"


class EvaluationError(DimlangError): pass


class CatalogError(DimlangError):
    kind = "catalog_error"


class UnsupportedUnit(DimlangError):
    kind = "unsupported_unit"


class DimensionMismatch(DimlangError):
    """
    Raised when `+` or `-` combines units of different dimensions.
    The message names both operand units and both dimensions.
    """
    kind = "dimension_mismatch"

    def __init__(self, operation: str, lhs: Any, rhs: Any):
        self.operation = operation
        self.lhs = lhs
        self.rhs = rhs
        super().__init__(
            f"Cannot {operation} [{lhs}] ({lhs.describe()}) and [{rhs}] ({rhs.describe()}): "
            f"dimensions differ"
        )


class UndefinedVariable(DimlangError):
    kind = "undefined_variable"

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Undefined variable '{name}'")


class VectorLengthMismatch(DimlangError):
    kind = "vector_length_mismatch"

    def __init__(self, operation: str, lhs_len: int, rhs_len: int):
        self.operation = operation
        self.lhs_len = lhs_len
        self.rhs_len = rhs_len
        super().__init__(
            f"Cannot {operation} vectors of length {lhs_len} and {rhs_len} element-wise"
        )


class DivisionByZero(DimlangError):
    kind = "division_by_zero"


class ParseError(DimlangError):
    kind = "parse_error"

    def __init__(self, message: str, remainder: str = "", line_no: int | None = None):
        self.remainder = remainder
        self.line_no = line_no
        where = f"line {line_no}: " if line_no is not None else ""
        super().__init__(f"{where}{message}" + (f", input remaining {remainder!r}" if remainder else ""))
