# -----------------------------------------------------------------------------
# Line parser
# Purpose: Turn source lines such as
#     x = (2[m] * 2[km]); y = [1 2 3][meters]; z = (x + y);
# into Variable statements over the expression tree.
# Grammar (whitespace allowed between tokens):
#   line       := variable*
#   variable   := name "=" operand ";"
#   operand    := number unit | vector unit | name | expression
#   expression := "(" operand op operand ")"        op: + - * /
#   vector     := "[" number (ws number)* "]"
#   unit       := "[" alias ("^" int)? "]"          alias: see data/units.yaml
# -----------------------------------------------------------------------------

from __future__ import annotations
import re
from typing import List, Optional

from .catalog import default_catalog
from .errors import ParseError
from .tree import BinaryOperation, Expression, Literal, Name, Node, Variable
from .units import Unit
from .value import Scalar, Vector

# Regex fragment for a numeric literal: integers, decimals, scientific notation
_NUM = r"[-+]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][-+]?\d+)?"

_NUM_RE = re.compile(_NUM)
_NAME_RE = re.compile(r"[A-Za-z][A-Za-z0-9_]*")
_UNIT_RE = re.compile(r"\[\s*([^\[\]\s^]+)\s*(?:\^\s*([-+]?\d+)\s*)?\]")
_WS_RE = re.compile(r"[ \t]*")
_OPERATORS = "+-*/^"


class _Cursor:
    def __init__(self, text: str, line_no: Optional[int] = None):
        self.text = text
        self.pos = 0
        self.mark = 0   # start of the statement being parsed
        self.line_no = line_no

    def rest(self) -> str:
        return self.text[self.mark:]

    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def peek(self) -> str:
        return self.text[self.pos] if self.pos < len(self.text) else ""

    def skip_ws(self) -> None:
        self.pos = _WS_RE.match(self.text, self.pos).end()

    def match(self, pattern: "re.Pattern[str]") -> Optional["re.Match[str]"]:
        m = pattern.match(self.text, self.pos)
        if m:
            self.pos = m.end()
        return m

    def expect(self, token: str) -> None:
        self.skip_ws()
        if not self.text.startswith(token, self.pos):
            self.fail(f"expected {token!r}")
        self.pos += len(token)

    def fail(self, message: str):
        raise ParseError(message, remainder=self.rest(), line_no=self.line_no)


def _parse_unit(cur: _Cursor) -> Unit:
    m = cur.match(_UNIT_RE)
    if not m:
        cur.fail("expected a unit such as [m] or [km^1]")
    identity = default_catalog().resolve(m.group(1))
    power = int(m.group(2)) if m.group(2) is not None else 1
    return Unit.of(identity, power)


def _parse_number(cur: _Cursor) -> Literal:
    m = cur.match(_NUM_RE)
    if not m:
        cur.fail("expected a number, vector, name or '('")
    value = Scalar(float(m.group(0)))
    return Literal(value=value, unit=_parse_unit(cur))


def _parse_vector(cur: _Cursor) -> Literal:
    cur.expect("[")
    elements: List[float] = []
    cur.skip_ws()
    if cur.peek() == "]":
        cur.fail("vector literal must hold at least one number")
    while True:
        m = cur.match(_NUM_RE)
        if not m:
            cur.fail("expected a number inside vector")
        elements.append(float(m.group(0)))
        end = cur.pos
        cur.skip_ws()
        if cur.peek() == "]":
            break
        # "[1-2]" and "[1.2.3]" are errors, not two numbers
        if cur.pos == end:
            cur.fail("expected whitespace between vector elements")
    cur.expect("]")
    return Literal(value=Vector.of(elements), unit=_parse_unit(cur))


def _parse_expression(cur: _Cursor) -> Expression:
    cur.expect("(")
    lhs = _parse_operand(cur)
    cur.skip_ws()
    symbol = cur.peek()
    if not symbol or symbol not in _OPERATORS:
        cur.fail("expected an operator")
    if symbol == "^":
        cur.fail("Unsupported binary operation ^")
    cur.pos += 1
    rhs = _parse_operand(cur)
    cur.expect(")")
    return Expression(operation=BinaryOperation.from_symbol(symbol), lhs=lhs, rhs=rhs)


def _parse_operand(cur: _Cursor) -> Node:
    cur.skip_ws()
    ch = cur.peek()
    if ch == "(":
        return _parse_expression(cur)
    if ch == "[":
        return _parse_vector(cur)
    if ch.isascii() and ch.isalpha():
        return Name(cur.match(_NAME_RE).group(0))
    return _parse_number(cur)


def _parse_variable(cur: _Cursor) -> Variable:
    cur.skip_ws()
    m = cur.match(_NAME_RE)
    if not m:
        cur.fail("expected a variable name")
    cur.expect("=")
    expr = _parse_operand(cur)
    cur.expect(";")
    return Variable(name=m.group(0), expr=expr)


def parse_line(text: str, line_no: Optional[int] = None) -> List[Variable]:
    """Parse every `name = expr;` statement on one line; leftover input is an error."""
    cur = _Cursor(text, line_no)
    out: List[Variable] = []
    while True:
        cur.skip_ws()
        if cur.at_end():
            return out
        cur.mark = cur.pos
        out.append(_parse_variable(cur))


def parse_expression(text: str) -> Node:
    """Parse a single operand (number, vector, name or parenthesized expression)."""
    cur = _Cursor(text)
    node = _parse_operand(cur)
    cur.skip_ws()
    if not cur.at_end():
        cur.fail("unexpected trailing input")
    return node


def parse_program(text: str) -> List[Variable]:
    """
    Parse a whole script: blank lines and lines starting with '#' are skipped,
    every other line must consist entirely of statements.
    """
    program: List[Variable] = []
    for line_no, line in enumerate(text.splitlines(), start=1):
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        program.extend(parse_line(stripped, line_no))
    return program
