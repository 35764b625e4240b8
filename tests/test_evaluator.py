"""Tests for checked fixed-width evaluation."""

import pytest

from intcalc.ast_nodes import BinaryOp, Expr, IntegerLiteral, OperatorKind, UnaryNegate
from intcalc.config import IntWidth
from intcalc.errors import EvalError, EvalErrorKind, InternalError
from intcalc.evaluator import Evaluator, truncating_divmod

I32_MAX = 2147483647
I32_MIN = -2147483648


def lit(v):
    return IntegerLiteral(v)


def binop(left, op, right):
    return BinaryOp(left=left, operator=op, right=right)


def i32_min():
    # not writable as a literal
    return binop(UnaryNegate(lit(I32_MAX)), OperatorKind.SUBTRACT, lit(1))


@pytest.mark.parametrize(
    "left, right, quotient, remainder",
    [
        (7, 2, 3, 1),
        (-7, 2, -3, -1),
        (7, -2, -3, 1),
        (-7, -2, 3, -1),
        (-7, 3, -2, -1),
        (6, 3, 2, 0),
        (0, -5, 0, 0),
    ],
)
def test_truncating_division(left, right, quotient, remainder):
    assert truncating_divmod(left, right) == (quotient, remainder)
    ev = Evaluator()
    l_node = lit(left) if left >= 0 else UnaryNegate(lit(-left))
    r_node = lit(right) if right >= 0 else UnaryNegate(lit(-right))
    assert ev.evaluate(binop(l_node, OperatorKind.DIVIDE, r_node)) == quotient
    assert ev.evaluate(binop(l_node, OperatorKind.MODULO, r_node)) == remainder


def test_basic_arithmetic():
    ev = Evaluator()
    assert ev.evaluate(binop(lit(5), OperatorKind.ADD, lit(5))) == 10
    assert ev.evaluate(binop(lit(5), OperatorKind.SUBTRACT, lit(7))) == -2
    assert ev.evaluate(binop(lit(6), OperatorKind.MULTIPLY, lit(7))) == 42
    assert ev.evaluate(UnaryNegate(UnaryNegate(lit(5)))) == 5


@pytest.mark.parametrize("op", [OperatorKind.DIVIDE, OperatorKind.MODULO])
def test_division_by_zero(op):
    with pytest.raises(EvalError) as ei:
        Evaluator().evaluate(binop(lit(5), op, lit(0)))
    assert ei.value.kind is EvalErrorKind.DIVISION_BY_ZERO


def test_zero_divided_by_zero():
    with pytest.raises(EvalError) as ei:
        Evaluator().evaluate(binop(lit(0), OperatorKind.DIVIDE, lit(0)))
    assert ei.value.kind is EvalErrorKind.DIVISION_BY_ZERO


def test_minimum_value_reachable():
    assert Evaluator().evaluate(i32_min()) == I32_MIN


@pytest.mark.parametrize(
    "node",
    [
        binop(lit(I32_MAX), OperatorKind.ADD, lit(1)),
        binop(i32_min(), OperatorKind.SUBTRACT, lit(1)),
        binop(lit(65536), OperatorKind.MULTIPLY, lit(65536)),
        UnaryNegate(i32_min()),
        binop(i32_min(), OperatorKind.DIVIDE, UnaryNegate(lit(1))),
    ],
)
def test_overflow(node):
    with pytest.raises(EvalError) as ei:
        Evaluator().evaluate(node)
    assert ei.value.kind is EvalErrorKind.OVERFLOW


def test_minimum_modulo_minus_one_is_zero():
    assert Evaluator().evaluate(binop(i32_min(), OperatorKind.MODULO, UnaryNegate(lit(1)))) == 0


def test_intermediate_overflow_is_not_hidden():
    # result fits, but MAX + 1 does not
    node = binop(binop(lit(I32_MAX), OperatorKind.ADD, lit(1)), OperatorKind.SUBTRACT, lit(1))
    with pytest.raises(EvalError) as ei:
        Evaluator().evaluate(node)
    assert ei.value.kind is EvalErrorKind.OVERFLOW


def test_custom_width():
    ev = Evaluator(IntWidth(8))
    assert ev.evaluate(binop(lit(100), OperatorKind.ADD, lit(27))) == 127
    with pytest.raises(EvalError):
        ev.evaluate(binop(lit(100), OperatorKind.ADD, lit(28)))
    with pytest.raises(EvalError) as ei:
        ev.evaluate(lit(300))
    assert ei.value.kind is EvalErrorKind.OVERFLOW


def test_wide_width():
    ev = Evaluator(IntWidth(64))
    assert ev.evaluate(binop(lit(I32_MAX), OperatorKind.ADD, lit(1))) == I32_MAX + 1


def test_left_error_wins():
    div_zero = binop(lit(1), OperatorKind.DIVIDE, lit(0))
    overflow = binop(lit(I32_MAX), OperatorKind.ADD, lit(1))
    with pytest.raises(EvalError) as ei:
        Evaluator().evaluate(binop(div_zero, OperatorKind.ADD, overflow))
    assert ei.value.kind is EvalErrorKind.DIVISION_BY_ZERO
    with pytest.raises(EvalError) as ei:
        Evaluator().evaluate(binop(overflow, OperatorKind.ADD, div_zero))
    assert ei.value.kind is EvalErrorKind.OVERFLOW


def test_long_left_deep_chain():
    node = lit(1)
    for _ in range(5000):
        node = binop(node, OperatorKind.ADD, lit(1))
    assert Evaluator().evaluate(node) == 5001


def test_unknown_node_type():
    with pytest.raises(InternalError):
        Evaluator().evaluate(Expr())
