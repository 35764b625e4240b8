"""intcalc.evaluator

Reduces an expression tree to a single fixed-width integer.

Arithmetic is checked: any intermediate result outside the configured width
raises `EvalError(OVERFLOW)` instead of wrapping. Division truncates toward
zero and the remainder takes the sign of the dividend, e.g. `-7 / 2 == -3`
and `-7 % 3 == -1`.

The tree is walked with an explicit stack, so a long chain such as
`1 + 1 + ... + 1` (a left-deep tree) does not grow the interpreter stack.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from intcalc.ast_nodes import BinaryOp, Expr, IntegerLiteral, OperatorKind, UnaryNegate
from intcalc.config import DEFAULT_BITS, IntWidth
from intcalc.errors import EvalError, EvalErrorKind, InternalError

logger = logging.getLogger(__name__)


def truncating_divmod(left: int, right: int) -> Tuple[int, int]:
    """Quotient rounded toward zero and the matching remainder"""
    quotient = abs(left) // abs(right)
    if (left < 0) != (right < 0):
        quotient = -quotient
    return quotient, left - right * quotient


class Evaluator:
    """Evaluator for expression trees"""

    def __init__(self, width: Optional[IntWidth] = None):
        self.width = width or IntWidth(DEFAULT_BITS)

    def evaluate(self, node: Expr) -> int:
        values: List[int] = []
        # (node, children_done)
        work: List[Tuple[Expr, bool]] = [(node, False)]
        while work:
            current, children_done = work.pop()

            if isinstance(current, IntegerLiteral):
                values.append(self._checked(current.value, f"literal {current.value}"))
                continue

            if isinstance(current, UnaryNegate):
                if children_done:
                    operand = values.pop()
                    values.append(self._checked(-operand, f"-({operand})"))
                else:
                    work.append((current, True))
                    work.append((current.operand, False))
                continue

            if isinstance(current, BinaryOp):
                if children_done:
                    right = values.pop()
                    left = values.pop()
                    values.append(self._apply(current.operator, left, right))
                else:
                    # right is pushed first so the left operand runs first
                    work.append((current, True))
                    work.append((current.right, False))
                    work.append((current.left, False))
                continue

            raise InternalError(f"cannot evaluate {type(current).__name__}")

        if len(values) != 1:
            raise InternalError(f"evaluation left {len(values)} values")
        return values[0]

    def _apply(self, op: OperatorKind, left: int, right: int) -> int:
        desc = f"{left} {op.symbol} {right}"
        if op is OperatorKind.ADD:
            return self._checked(left + right, desc)
        if op is OperatorKind.SUBTRACT:
            return self._checked(left - right, desc)
        if op is OperatorKind.MULTIPLY:
            return self._checked(left * right, desc)
        if op in (OperatorKind.DIVIDE, OperatorKind.MODULO):
            if right == 0:
                logger.debug("division by zero in %s", desc)
                raise EvalError(EvalErrorKind.DIVISION_BY_ZERO, f"division by zero in {desc}")
            quotient, remainder = truncating_divmod(left, right)
            if op is OperatorKind.DIVIDE:
                return self._checked(quotient, desc)
            # min % -1 is 0 even though min / -1 overflows
            return remainder
        raise InternalError(f"unknown operator {op!r}")

    def _checked(self, value: int, desc: str) -> int:
        if not self.width.contains(value):
            logger.debug("%s overflows %s", desc, self.width)
            raise EvalError(EvalErrorKind.OVERFLOW, f"{desc} overflows {self.width}")
        return value

