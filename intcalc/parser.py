"""intcalc.parser

Recursive-descent recognizer for one line of integer arithmetic.

Grammar (whitespace between tokens is already dropped by the lexer):

    equation := expr EOF
    expr     := term (infix_op term)*
    term     := INTEGER | "(" expr ")" | "-" term
    infix_op := "+" | "-" | "*" | "/" | "%"

The recognizer does not apply precedence. It records each `expr` as the flat
sequence `prefix* primary (infix prefix* primary)*` in a `SyntaxNode`, which
the tree builder later restructures.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from intcalc.ast_nodes import Rule, SyntaxNode
from intcalc.config import DEFAULT_BITS, DEFAULT_MAX_DEPTH, MAX_DEPTH, IntWidth
from intcalc.errors import ParseError
from intcalc.lexer import Token, TokenType


INFIX_RULES: Dict[TokenType, Rule] = {
    TokenType.PLUS: Rule.ADD,
    TokenType.MINUS: Rule.SUBTRACT,
    TokenType.STAR: Rule.MULTIPLY,
    TokenType.SLASH: Rule.DIVIDE,
    TokenType.PERCENT: Rule.MODULO,
}

EXPECTED_TERM = "an integer, '(' or '-'"


class ParserError(ParseError):
    """Parser error"""
    def __init__(self, message: str, token: Token, expected: Optional[str] = None):
        self.token = token
        super().__init__(message, token.offset, expected)


class Parser:
    """Parser for a single expression line"""

    def __init__(
        self,
        tokens: List[Token],
        *,
        source: Optional[str] = None,
        width: Optional[IntWidth] = None,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ):
        self.tokens: List[Token] = list(tokens)
        if not self.tokens or self.tokens[-1].type != TokenType.EOF:
            end = len(source) if source is not None else 0
            self.tokens.append(Token(TokenType.EOF, '', end))
        self.position = 0
        self.current_token: Token = self.tokens[0]
        self.source = source
        self.width = width or IntWidth(DEFAULT_BITS)
        if not 1 <= max_depth <= MAX_DEPTH:
            raise ValueError(f"max_depth must be 1 to {MAX_DEPTH}, got {max_depth}")
        self.max_depth = max_depth
        # parentheses and unary minus currently open around the cursor
        self._depth = 0

    def parse(self) -> SyntaxNode:
        """Parse the whole line into an EXPR node"""
        first = self.current_token
        inner = self._parse_expr()
        if not self._at(TokenType.EOF):
            tok = self.current_token
            if tok.type == TokenType.RPAREN:
                raise ParserError("Unmatched ')'", tok, "an operator or end of input")
            raise ParserError(f"Unexpected {tok.value!r}", tok, "an operator or end of input")
        end = self.tokens[self.position - 1]
        return SyntaxNode(
            rule=Rule.EXPR,
            text=self._text(first, end),
            offset=first.offset,
            inner=inner,
        )

    def advance(self) -> Token:
        """Move to next token"""
        if self.position < len(self.tokens) - 1:
            self.position += 1
            self.current_token = self.tokens[self.position]
        return self.current_token

    # -----------------
    # Helpers
    # -----------------

    def _at(self, t: TokenType) -> bool:
        return self.current_token.type == t

    def _expect(self, t: TokenType, msg: str, expected: str) -> Token:
        tok = self.current_token
        if tok.type != t:
            raise ParserError(msg, tok, expected)
        self.advance()
        return tok

    def _enter(self, tok: Token) -> None:
        if self._depth >= self.max_depth:
            raise ParserError(
                f"Expression nested too deeply (limit {self.max_depth})",
                tok,
            )
        self._depth += 1

    def _text(self, start: Token, end: Token) -> str:
        stop = end.offset + len(end.value)
        if self.source is not None:
            return self.source[start.offset:stop]
        toks = self.tokens[self.tokens.index(start):self.tokens.index(end) + 1]
        return " ".join(t.value for t in toks)

    # -----------------
    # Grammar rules
    # -----------------

    def _parse_expr(self) -> List[SyntaxNode]:
        nodes: List[SyntaxNode] = []
        self._parse_term(nodes)
        while self.current_token.type in INFIX_RULES:
            op = self.current_token
            self.advance()
            nodes.append(SyntaxNode(rule=INFIX_RULES[op.type], text=op.value, offset=op.offset))
            self._parse_term(nodes)
        return nodes

    def _parse_term(self, nodes: List[SyntaxNode]) -> None:
        prefixes = 0
        while self._at(TokenType.MINUS):
            tok = self.current_token
            self._enter(tok)
            prefixes += 1
            self.advance()
            nodes.append(SyntaxNode(rule=Rule.UNARY_MINUS, text=tok.value, offset=tok.offset))

        tok = self.current_token
        if tok.type == TokenType.INTEGER:
            self.advance()
            nodes.append(SyntaxNode(
                rule=Rule.INTEGER,
                text=tok.value,
                offset=tok.offset,
                value=self._integer_value(tok),
            ))
        elif tok.type == TokenType.LPAREN:
            self._enter(tok)
            self.advance()
            inner = self._parse_expr()
            close = self._expect(TokenType.RPAREN, "Unbalanced parenthesis", "')' or an operator")
            self._depth -= 1
            nodes.append(SyntaxNode(
                rule=Rule.EXPR,
                text=self._text(tok, close),
                offset=tok.offset,
                inner=inner,
            ))
        elif tok.type == TokenType.EOF:
            raise ParserError("Unexpected end of input", tok, EXPECTED_TERM)
        else:
            raise ParserError(f"Unexpected {tok.value!r}", tok, EXPECTED_TERM)

        self._depth -= prefixes

    def _integer_value(self, tok: Token) -> int:
        digits = tok.value.lstrip('0') or '0'
        # Longer than the largest bound cannot be in range; skip int() so huge
        # literals never reach the interpreter's str->int digit limit.
        if len(digits) <= len(str(self.width.max_value)):
            value = int(digits)
            if self.width.contains(value):
                return value
        raise ParserError(
            f"Integer literal {tok.value} out of range for {self.width}",
            tok,
            f"an integer in [{self.width.min_value}, {self.width.max_value}]",
        )
