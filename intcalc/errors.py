"""intcalc.errors

Exception hierarchy shared by every stage of the calculator.

Stage modules define their own subclasses (`LexerError`, `ParserError`) so a
caller can tell where a failure came from, while `CalcError` catches them all.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class CalcError(Exception):
    """Base class for all calculator errors"""


class ParseError(CalcError):
    """Input does not match the expression grammar"""

    def __init__(self, message: str, offset: int, expected: Optional[str] = None):
        self.message = message
        self.offset = offset
        self.expected = expected
        text = f"{message} at offset {offset}"
        if expected:
            text += f" (expected {expected})"
        super().__init__(text)


class EvalErrorKind(Enum):
    DIVISION_BY_ZERO = "division by zero"
    OVERFLOW = "overflow"


class EvalError(CalcError):
    """Evaluation of a well-formed tree failed"""

    def __init__(self, kind: EvalErrorKind, message: Optional[str] = None):
        self.kind = kind
        self.message = message or kind.value
        super().__init__(self.message)


class InternalError(CalcError):
    """A stage received input its predecessor should never produce"""
