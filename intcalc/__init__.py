"""
intcalc - fixed-width integer expression calculator

Reads one line of arithmetic over signed integers, parses it with
standard precedence and associativity, and evaluates it with checked
arithmetic.
"""

__version__ = "0.1.0"
__license__ = "MIT"

from .errors import CalcError, ParseError, EvalError, EvalErrorKind, InternalError
from .config import CalculatorConfig, IntWidth
from .lexer import Lexer, Token, TokenType, LexerError
from .parser import Parser, ParserError
from .builder import TreeBuilder, OperatorTable, DEFAULT_OPERATORS
from .evaluator import Evaluator
from .calculator import Calculator, CalculationResult, parse_and_evaluate

__all__ = [
    'CalcError',
    'ParseError',
    'EvalError',
    'EvalErrorKind',
    'InternalError',
    'CalculatorConfig',
    'IntWidth',
    'Lexer',
    'Token',
    'TokenType',
    'LexerError',
    'Parser',
    'ParserError',
    'TreeBuilder',
    'OperatorTable',
    'DEFAULT_OPERATORS',
    'Evaluator',
    'Calculator',
    'CalculationResult',
    'parse_and_evaluate',
]
