"""Interpreter for a line-oriented expression language with unit-carrying literals."""

from .dimensioned import DimensionedValue
from .errors import (
    CatalogError,
    DimensionMismatch,
    DimlangError,
    DivisionByZero,
    EvaluationError,
    ParseError,
    UndefinedVariable,
    UnsupportedUnit,
    VectorLengthMismatch,
)
from .interpreter import Interpreter, Memory, evaluate, run_program
from .parser import parse_expression, parse_line, parse_program
from .tree import BinaryOperation, Expression, Literal, Name, Variable
from .units import Dimension, DimensionIdentity, Unit, UnitIdentity
from .value import Scalar, Vector

__version__ = "0.1.0"
