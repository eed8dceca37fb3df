# -----------------------------------------------------------------------------
# Interpreter: evaluate expression trees against a variable store
# Responsibilities:
#   • evaluate(): recursive walk of Literal / Name / Expression nodes
#   • Interpreter: owns one Memory, executes Variable statements in order
#     (last write wins, no forward references)
#   • run_program(): non-raising entry point that parses (if given text),
#     executes, and reports bindings, errors and the trace as a RunResult
# -----------------------------------------------------------------------------

from __future__ import annotations
from typing import Callable, Dict, List, Optional, Sequence, Union

from .dimensioned import DimensionedValue
from .errors import DimlangError, EvaluationError, UndefinedVariable
from .formatters import bindings_out
from .models import BindingOut, RunResult
from .tracer import Tracer
from .tree import BinaryOperation, Expression, Literal, Name, Node, Variable

Memory = Dict[str, DimensionedValue]

_DISPATCH: Dict[BinaryOperation, Callable[[DimensionedValue, DimensionedValue], DimensionedValue]] = {
    BinaryOperation.ADD: lambda a, b: a + b,
    BinaryOperation.SUBTRACT: lambda a, b: a - b,
    BinaryOperation.MULTIPLY: lambda a, b: a * b,
    BinaryOperation.DIVIDE: lambda a, b: a / b,
}


def evaluate(node: Node, memory: Memory, trace: Optional[Tracer] = None) -> DimensionedValue:
    """
    Evaluate an expression node against `memory`.
    - Literal → DimensionedValue as written (not yet normalized)
    - Name → bound value, UndefinedVariable if absent
    - Expression → lhs, then rhs, then the operator (both sides always evaluated)
    Variable is a statement, not an expression, and is rejected here.
    """
    if isinstance(node, Literal):
        dv = DimensionedValue(value=node.value, unit=node.unit)
        if trace is not None:
            trace.add("literal", {"value": str(dv)})
        return dv
    if isinstance(node, Name):
        if node.name not in memory:
            raise UndefinedVariable(node.name)
        dv = memory[node.name]
        if trace is not None:
            trace.add("lookup", {"name": node.name, "value": str(dv)})
        return dv
    if isinstance(node, Expression):
        lhs = evaluate(node.lhs, memory, trace)
        rhs = evaluate(node.rhs, memory, trace)
        result = _DISPATCH[node.operation](lhs, rhs)
        if trace is not None:
            trace.add("operation", {
                "op": node.operation.symbol,
                "lhs": str(lhs),
                "rhs": str(rhs),
                "result": str(result),
                "dimension": result.unit.describe(),
            })
        return result
    raise EvaluationError(f"Cannot evaluate {type(node).__name__} as an expression")


class Interpreter:
    def __init__(self, program: Sequence[Variable], tracer: Optional[Tracer] = None):
        self.program: List[Variable] = list(program)
        self.memory: Memory = {}
        self.tracer = tracer
        self.executed = 0

    def execute(self, statement: Variable) -> DimensionedValue:
        if not isinstance(statement, Variable):
            raise EvaluationError(f"Expected a variable binding, got {type(statement).__name__}")
        result = evaluate(statement.expr, self.memory, self.tracer)
        self.memory[statement.name] = result
        self.executed += 1
        if self.tracer is not None:
            self.tracer.add("bind", {"name": statement.name, "value": str(result)})
        return result

    def run(self) -> Memory:
        # Single linear pass; the first error stops execution and propagates.
        for statement in self.program[self.executed:]:
            self.execute(statement)
        return self.memory


def _bindings_after_error(interp: Optional[Interpreter], trace: Tracer) -> Dict[str, BindingOut]:
    # Failure path: rendering must not raise a second error out of the funnel
    if interp is None:
        return {}
    try:
        return bindings_out(interp.memory)
    except DimlangError as e:
        trace.add("bindings_dropped", {"kind": e.kind, "message": str(e)})
        return {}


def run_program(program: Union[str, Sequence[Variable]], tracer: Optional[Tracer] = None) -> RunResult:
    """
    Run a program and report the outcome without raising for language errors.
    Bindings made before a failing statement are kept in the result.
    """
    trace = tracer if tracer is not None else Tracer()
    interp: Optional[Interpreter] = None
    statements: Sequence[Variable] = []
    try:
        if isinstance(program, str):
            from .parser import parse_program
            statements = parse_program(program)
            trace.add("parsed", {"statements": len(statements)})
        else:
            statements = program
        interp = Interpreter(statements, tracer=trace)
        interp.run()
        return RunResult(
            ok=True,
            bindings=bindings_out(interp.memory),
            statements=len(statements),
            executed=interp.executed,
            trace=trace.steps(),
        )
    except DimlangError as e:
        # Uniform error funnel with typed error_kind and full trace
        trace.add("error", {"kind": e.kind, "message": str(e)})
        return RunResult(
            ok=False,
            bindings=_bindings_after_error(interp, trace),
            statements=len(statements),
            executed=interp.executed if interp else 0,
            error=str(e),
            error_kind=e.kind,
            trace=trace.steps(),
        )
