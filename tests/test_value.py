import pytest

from dimlang.errors import DivisionByZero, VectorLengthMismatch
from dimlang.value import Scalar, Vector


def test_scalar_scalar():
    assert Scalar(2) + Scalar(3) == Scalar(5.0)
    assert Scalar(2) - Scalar(3) == Scalar(-1.0)
    assert Scalar(2) * Scalar(3) == Scalar(6.0)
    assert Scalar(3) / Scalar(2) == Scalar(1.5)


def test_scalar_on_the_left_keeps_order():
    v = Vector.of([1, 2, 4])
    assert Scalar(1) - v == Vector.of([0, -1, -3])
    assert Scalar(8) / v == Vector.of([8, 4, 2])
    assert Scalar(1) + v == Vector.of([2, 3, 5])
    assert Scalar(2) * v == Vector.of([2, 4, 8])


def test_vector_on_the_left_keeps_order():
    v = Vector.of([1, 2, 4])
    assert v - Scalar(1) == Vector.of([0, 1, 3])
    assert v / Scalar(2) == Vector.of([0.5, 1, 2])
    assert v + Scalar(1) == Vector.of([2, 3, 5])
    assert v * Scalar(3) == Vector.of([3, 6, 12])


def test_scalar_minus_vector_differs_from_vector_minus_scalar():
    v = Vector.of([1, 2, 3])
    a = Scalar(1) - v
    b = v - Scalar(1)
    assert a.elements == tuple(-x for x in b.elements)


def test_vector_vector_elementwise():
    a = Vector.of([1, 2, 3])
    b = Vector.of([4, 5, 6])
    assert a + b == Vector.of([5, 7, 9])
    assert a - b == Vector.of([-3, -3, -3])
    assert a * b == Vector.of([4, 10, 18])
    assert b / a == Vector.of([4, 2.5, 2])


def test_vector_length_mismatch_is_an_error():
    with pytest.raises(VectorLengthMismatch) as exc:
        Vector.of([1, 2, 3]) + Vector.of([1, 2])
    assert (exc.value.lhs_len, exc.value.rhs_len) == (3, 2)


def test_division_by_zero():
    with pytest.raises(DivisionByZero):
        Scalar(1) / Scalar(0)
    with pytest.raises(DivisionByZero):
        Vector.of([1, 2]) / Scalar(0)
    with pytest.raises(DivisionByZero):
        Scalar(1) / Vector.of([1, 0])


def test_vectors_are_never_empty():
    with pytest.raises(ValueError):
        Vector(())


def test_to_python():
    assert Scalar(2).to_python() == 2.0
    assert Vector.of([1, 2]).to_python() == [1.0, 2.0]
    assert len(Vector.of([1, 2, 3])) == 3
