"""
Syntax Tree Node Definitions for integer expressions

Two families of nodes live here:

- `SyntaxNode`: the concrete syntax produced by the recognizer. An `EXPR`
  node holds the flat sequence of prefix operators, primaries and infix
  operators exactly as they appeared in the line; parenthesized groups are
  nested `EXPR` nodes.
- `Expr` subclasses: the abstract syntax tree produced by the tree builder
  and consumed by the evaluator.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import List, Optional


# ============== Concrete Syntax ==============

class Rule(Enum):
    """Grammar rule a concrete node was recognized by"""
    EXPR = auto()
    INTEGER = auto()
    UNARY_MINUS = auto()
    ADD = auto()
    SUBTRACT = auto()
    MULTIPLY = auto()
    DIVIDE = auto()
    MODULO = auto()


@dataclass
class SyntaxNode:
    """Node of the concrete syntax tree"""
    rule: Rule
    text: str
    offset: int
    value: Optional[int] = None  # INTEGER only
    inner: Optional[List['SyntaxNode']] = None  # EXPR only

    def __repr__(self) -> str:
        if self.rule is Rule.EXPR:
            return f"SyntaxNode(EXPR, {self.inner!r})"
        return f"SyntaxNode({self.rule.name}, {self.text!r}, @{self.offset})"


# ============== Abstract Syntax ==============

class OperatorKind(Enum):
    """Binary operators, valued by their source symbol"""
    ADD = '+'
    SUBTRACT = '-'
    MULTIPLY = '*'
    DIVIDE = '/'
    MODULO = '%'

    @property
    def symbol(self) -> str:
        return self.value


@dataclass(frozen=True)
class Expr:
    """Base class for all expression nodes"""


@dataclass(frozen=True)
class IntegerLiteral(Expr):
    value: int


@dataclass(frozen=True)
class UnaryNegate(Expr):
    operand: Expr


@dataclass(frozen=True)
class BinaryOp(Expr):
    left: Expr
    operator: OperatorKind
    right: Expr


# ============== Utility Functions ==============

def to_infix(node: Expr) -> str:
    """Render a tree as infix text with explicit parentheses.

    Every binary node and every negation is wrapped, so the text parses back
    to a tree of the same shape regardless of precedence rules.
    """
    if isinstance(node, IntegerLiteral):
        return str(node.value)
    if isinstance(node, UnaryNegate):
        return f"(-{to_infix(node.operand)})"
    if isinstance(node, BinaryOp):
        return f"({to_infix(node.left)} {node.operator.symbol} {to_infix(node.right)})"
    raise TypeError(f"not an expression node: {node!r}")


def print_ast(node: Expr, indent: int = 0) -> str:
    """Pretty-print AST node"""
    prefix = "  " * indent

    if isinstance(node, IntegerLiteral):
        return f"{prefix}IntegerLiteral({node.value})\n"

    elif isinstance(node, UnaryNegate):
        result = f"{prefix}UnaryNegate\n"
        result += print_ast(node.operand, indent + 1)
        return result

    elif isinstance(node, BinaryOp):
        result = f"{prefix}BinaryOp({node.operator.name})\n"
        result += print_ast(node.left, indent + 1)
        result += print_ast(node.right, indent + 1)
        return result

    else:
        return f"{prefix}{node.__class__.__name__}\n"
