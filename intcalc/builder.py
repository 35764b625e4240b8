"""intcalc.builder

Precedence-climbing tree builder.

Turns the recognizer's flat `EXPR` sequences into an `Expr` tree. The
precedence and associativity rules come from an `OperatorTable`; the default
table is an immutable module constant.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import List, Mapping, Optional, Tuple

from intcalc.ast_nodes import (
    BinaryOp,
    Expr,
    IntegerLiteral,
    OperatorKind,
    Rule,
    SyntaxNode,
    UnaryNegate,
)
from intcalc.errors import InternalError


@dataclass(frozen=True)
class OperatorTable:
    """Infix precedences (higher binds tighter) and the prefix precedence.

    All infix operators are left-associative. The prefix operator must bind
    tighter than every infix operator.
    """
    infix: Mapping[Rule, Tuple[int, OperatorKind]]
    prefix: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "infix", MappingProxyType(dict(self.infix)))
        for rule, (precedence, _) in self.infix.items():
            if precedence >= self.prefix:
                raise ValueError(
                    f"infix {rule.name} precedence {precedence} must be below prefix precedence {self.prefix}"
                )


DEFAULT_OPERATORS = OperatorTable(
    infix={
        Rule.ADD: (1, OperatorKind.ADD),
        Rule.SUBTRACT: (1, OperatorKind.SUBTRACT),
        Rule.MULTIPLY: (2, OperatorKind.MULTIPLY),
        Rule.DIVIDE: (2, OperatorKind.DIVIDE),
        Rule.MODULO: (2, OperatorKind.MODULO),
    },
    prefix=3,
)


class _Frame:
    """One EXPR sequence being built.

    Each entry of `pending` is a suspended climb: an operator still waiting
    for its operand, stored with the threshold that operand was started at.
    """

    def __init__(self, node: SyntaxNode):
        if node.rule is not Rule.EXPR or node.inner is None:
            raise InternalError(f"expected an EXPR node to build, found {node!r}")
        self.nodes: List[SyntaxNode] = node.inner
        self.index = 0
        self.operands: List[Expr] = []
        # (min_precedence, operator); None is prefix negation
        self.pending: List[Tuple[int, Optional[OperatorKind]]] = []
        self.want_operand = True

    def next(self) -> Optional[SyntaxNode]:
        if self.index >= len(self.nodes):
            return None
        node = self.nodes[self.index]
        self.index += 1
        return node

    def fold(self, precedence: Optional[int] = None) -> None:
        """Close every suspended climb an operator of `precedence` would end.

        With no precedence (end of the sequence) every climb is closed.
        """
        while self.pending:
            min_precedence, kind = self.pending[-1]
            if precedence is not None and precedence >= min_precedence:
                break
            self.pending.pop()
            if kind is None:
                self.operands.append(UnaryNegate(operand=self.operands.pop()))
            else:
                right = self.operands.pop()
                left = self.operands.pop()
                self.operands.append(BinaryOp(left=left, operator=kind, right=right))


class TreeBuilder:
    """Builds expression trees from concrete syntax.

    Precedence climbing without recursion: where the recursive form would
    call itself for a right operand, the operator is pushed onto the current
    frame's `pending` stack together with the operand's threshold, and a
    parenthesized group pushes a new frame. Nesting depth therefore never
    touches the interpreter stack.
    """

    def __init__(self, table: OperatorTable = DEFAULT_OPERATORS):
        self.table = table

    def build(self, node: SyntaxNode) -> Expr:
        frames = [_Frame(node)]
        while True:
            frame = frames[-1]
            item = frame.next()

            if item is None:
                if frame.want_operand:
                    raise InternalError("expected operand, found end of expression")
                frame.fold()
                if len(frame.operands) != 1:
                    raise InternalError(f"expression built {len(frame.operands)} operands")
                frames.pop()
                if not frames:
                    return frame.operands[0]
                frames[-1].operands.append(frame.operands[0])
                frames[-1].want_operand = False

            elif frame.want_operand:
                self._operand(frames, item)

            else:
                info = self.table.infix.get(item.rule)
                if info is None:
                    raise InternalError(f"expected infix operator, found {item.rule.name} at offset {item.offset}")
                precedence, kind = info
                frame.fold(precedence)
                # +1: an equal-precedence operator on the right ends the operand,
                # so the fold above groups it from the left.
                frame.pending.append((precedence + 1, kind))
                frame.want_operand = True

    def _operand(self, frames: List[_Frame], node: SyntaxNode) -> None:
        frame = frames[-1]
        if node.rule is Rule.UNARY_MINUS:
            # negation wraps only the operand climbed at the prefix precedence
            frame.pending.append((self.table.prefix, None))
        elif node.rule is Rule.INTEGER:
            if node.value is None:
                raise InternalError(f"INTEGER node without value at offset {node.offset}")
            frame.operands.append(IntegerLiteral(value=node.value))
            frame.want_operand = False
        elif node.rule is Rule.EXPR:
            frames.append(_Frame(node))
        else:
            raise InternalError(f"expected operand, found {node.rule.name} at offset {node.offset}")
