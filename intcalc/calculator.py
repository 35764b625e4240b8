"""
Main Calculator Driver

Orchestrates the evaluation pipeline: lex, recognize, build, evaluate.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from intcalc.ast_nodes import Expr, SyntaxNode
from intcalc.builder import DEFAULT_OPERATORS, OperatorTable, TreeBuilder
from intcalc.config import CalculatorConfig
from intcalc.errors import CalcError
from intcalc.evaluator import Evaluator
from intcalc.lexer import Lexer, Token
from intcalc.parser import Parser

logger = logging.getLogger(__name__)


@dataclass
class CalculationResult:
    """Result of evaluating one line"""
    success: bool
    value: Optional[int] = None
    error: Optional[CalcError] = None
    ast: Optional[Expr] = None


class Calculator:
    """Main calculator class orchestrating all stages"""

    def __init__(
        self,
        config: Optional[CalculatorConfig] = None,
        *,
        operators: OperatorTable = DEFAULT_OPERATORS,
    ):
        self.config = config or CalculatorConfig()
        self.operators = operators

    def parse_and_evaluate(self, line: str) -> int:
        """Evaluate one line, raising CalcError on failure"""
        return self.evaluate(self.get_ast(line))

    def calculate(self, line: str) -> CalculationResult:
        """Evaluate one line without raising"""
        ast = None
        try:
            ast = self.get_ast(line)
            value = self.evaluate(ast)
        except CalcError as e:
            logger.debug("line %r failed: %s", line, e)
            return CalculationResult(success=False, error=e, ast=ast)
        return CalculationResult(success=True, value=value, ast=ast)

    def get_tokens(self, line: str) -> List[Token]:
        """Get tokens from one line"""
        lexer = Lexer(line)
        tokens = lexer.tokenize()
        if lexer.has_errors():
            # first error only; later ones are usually fallout
            raise lexer.get_errors()[0]
        logger.debug("lexed %d tokens", len(tokens) - 1)
        return tokens

    def get_syntax_tree(self, line: str) -> SyntaxNode:
        """Get the concrete syntax tree of one line"""
        parser = Parser(
            self.get_tokens(line),
            source=line,
            width=self.config.width,
            max_depth=self.config.max_depth,
        )
        return parser.parse()

    def get_ast(self, line: str) -> Expr:
        """Get the expression tree of one line"""
        ast = TreeBuilder(self.operators).build(self.get_syntax_tree(line))
        logger.debug("parsed %r", line)
        return ast

    def evaluate(self, ast: Expr) -> int:
        """Evaluate an expression tree"""
        value = Evaluator(self.config.width).evaluate(ast)
        logger.debug("value %d", value)
        return value


def parse_and_evaluate(line: str, *, config: Optional[CalculatorConfig] = None) -> int:
    """Evaluate one line of integer arithmetic.

    Raises `ParseError` when the line does not match the grammar and
    `EvalError` when evaluation divides by zero or overflows.
    """
    return Calculator(config).parse_and_evaluate(line)
