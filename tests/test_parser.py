import pytest

from dimlang.errors import ParseError, UnsupportedUnit
from dimlang.parser import parse_expression, parse_line, parse_program
from dimlang.tree import BinaryOperation, Expression, Literal, Name, Variable
from dimlang.units import Unit, UnitIdentity
from dimlang.value import Scalar, Vector

U = UnitIdentity
OP = BinaryOperation
M = Unit.of(U.METER)
KM = Unit.of(U.KILOMETER)


def _lit(x, unit):
    return Literal(Scalar(x), unit)


def test_parse_number():
    assert parse_expression("11e-1[m]") == _lit(1.1, M)
    assert parse_expression("1[meter]") == _lit(1.0, M)
    assert parse_expression("1.1[km]") == _lit(1.1, KM)
    assert parse_expression("9999999.987654[m]") == _lit(9999999.987654, M)
    assert parse_expression("-2[kilometers]") == _lit(-2.0, KM)


def test_unit_exponent_is_optional():
    assert parse_expression("1[m^1]") == parse_expression("1[m]")
    assert parse_expression("3[km^2]") == _lit(3.0, Unit.of(U.KILOMETER, 2))


def test_unit_aliases_cover_every_identity():
    cases = {
        "s": U.SECOND, "min": U.MINUTE, "hours": U.HOUR, "day": U.DAY,
        "USD": U.USD, "$": U.USD, "gbp": U.GBP, "none": U.NONE,
    }
    for alias, ident in cases.items():
        assert parse_expression(f"1[{alias}]").unit == Unit.of(ident)


def test_parse_vector():
    node = parse_expression("[1 2 3][m]")
    assert node == Literal(Vector.of([1, 2, 3]), M)
    node = parse_expression("[ -1.5  2e3 ][km]")
    assert node == Literal(Vector.of([-1.5, 2000]), KM)


@pytest.mark.parametrize("text", ["[1-2][m]", "[1.2.3][m]", "[1+2][m]", "[1 2-3][m]"])
def test_vector_elements_need_whitespace(text):
    with pytest.raises(ParseError) as exc:
        parse_expression(text)
    assert "whitespace" in str(exc.value)


def test_vector_signed_elements_with_whitespace():
    assert parse_expression("[1 -2][m]") == Literal(Vector.of([1, -2]), M)


def test_parse_name():
    assert parse_expression("test") == Name("test")
    assert parse_expression("speed_2") == Name("speed_2")


def test_parse_variable():
    assert parse_line("test = 1.2[m];") == [Variable("test", _lit(1.2, M))]
    assert parse_line("var = -2[kilometers];") == [Variable("var", _lit(-2.0, KM))]


def test_parse_expression():
    assert parse_expression("(2[km] / 2[m])") == Expression(OP.DIVIDE, _lit(2.0, KM), _lit(2.0, M))
    assert parse_expression("((2[m] / 2[km]) + (4[km] * 4[m]))") == Expression(
        OP.ADD,
        Expression(OP.DIVIDE, _lit(2.0, M), _lit(2.0, KM)),
        Expression(OP.MULTIPLY, _lit(4.0, KM), _lit(4.0, M)),
    )
    assert parse_expression("(2[m]-1[m])") == Expression(OP.SUBTRACT, _lit(2.0, M), _lit(1.0, M))


def test_parse_variable_expression():
    assert parse_line("var = ((2[m] * 3[kilometers]) * (4[meters] + 5[km]));") == [
        Variable("var", Expression(
            OP.MULTIPLY,
            Expression(OP.MULTIPLY, _lit(2.0, M), _lit(3.0, KM)),
            Expression(OP.ADD, _lit(4.0, M), _lit(5.0, KM)),
        ))
    ]


def test_parse_variables_and_abstract_expressions():
    assert parse_line("x = (2[m] * 2[kilometer]); y = 1[km]; z = (x + y);") == [
        Variable("x", Expression(OP.MULTIPLY, _lit(2.0, M), _lit(2.0, KM))),
        Variable("y", _lit(1.0, KM)),
        Variable("z", Expression(OP.ADD, Name("x"), Name("y"))),
    ]


def test_leftover_input_is_an_error():
    with pytest.raises(ParseError) as exc:
        parse_line("x = 1[m]; garbage")
    assert exc.value.remainder == "garbage"


def test_missing_semicolon():
    with pytest.raises(ParseError):
        parse_line("x = 1[m]")


def test_power_operator_rejected():
    with pytest.raises(ParseError) as exc:
        parse_line("x = (2[m] ^ 2[m]);")
    assert "^" in str(exc.value)


def test_unknown_unit():
    with pytest.raises(UnsupportedUnit):
        parse_expression("1[furlong]")
    with pytest.raises(UnsupportedUnit):
        parse_expression("1[m^0]")


def test_number_requires_unit():
    with pytest.raises(ParseError):
        parse_expression("1")


def test_parse_program_skips_blank_and_comment_lines():
    text = "# header\n\nx = 1[m];\n   \ny = (x + 2[km]); z = y;\n"
    program = parse_program(text)
    assert [v.name for v in program] == ["x", "y", "z"]


def test_parse_program_reports_line_number():
    with pytest.raises(ParseError) as exc:
        parse_program("x = 1[m];\n\ny = (x + );\n")
    assert exc.value.line_no == 3
    assert "line 3" in str(exc.value)


def test_load_program_from_file(tmp_path):
    from dimlang.loader import load_program

    path = tmp_path / "script.cr"
    path.write_text("a = 1[m];\n\nb = (a * 2[km]);\n", encoding="utf-8")
    assert [v.name for v in load_program(path)] == ["a", "b"]
