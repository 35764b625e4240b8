"""
Lexical Analyzer (Lexer) for integer expressions

Converts one line of input into a stream of tokens for the parser.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Dict, List, Optional

from intcalc.errors import ParseError


class TokenType(Enum):
    """Token types for the expression lexer"""
    # Literals
    INTEGER = auto()

    # Operators
    PLUS = auto()                # +
    MINUS = auto()               # -
    STAR = auto()                # *
    SLASH = auto()               # /
    PERCENT = auto()             # %

    # Delimiters
    LPAREN = auto()              # (
    RPAREN = auto()              # )

    # Special
    EOF = auto()


SINGLE_CHAR_TOKENS: Dict[str, TokenType] = {
    '+': TokenType.PLUS,
    '-': TokenType.MINUS,
    '*': TokenType.STAR,
    '/': TokenType.SLASH,
    '%': TokenType.PERCENT,
    '(': TokenType.LPAREN,
    ')': TokenType.RPAREN,
}

WHITESPACE = ' \t'
DIGITS = '0123456789'


@dataclass
class Token:
    """Represents a lexical token"""
    type: TokenType
    value: str
    offset: int

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {repr(self.value)}, @{self.offset})"


class LexerError(ParseError):
    """Character that cannot start any token"""


class Lexer:
    """Lexical analyzer for a single expression line"""

    def __init__(self, source: str):
        """Initialize lexer with source text"""
        self.source = source
        self.position = 0
        self.tokens: List[Token] = []
        self.errors: List[LexerError] = []

    def current_char(self) -> Optional[str]:
        """Get current character without consuming"""
        if self.position >= len(self.source):
            return None
        return self.source[self.position]

    def advance(self) -> Optional[str]:
        """Consume and return current character"""
        if self.position >= len(self.source):
            return None
        char = self.source[self.position]
        self.position += 1
        return char

    def skip_whitespace(self) -> None:
        """Skip spaces and tabs"""
        while self.current_char() and self.current_char() in WHITESPACE:
            self.advance()

    def read_integer(self) -> str:
        """Read a run of ASCII decimal digits"""
        num_str = ""
        # str.isdigit() accepts non-ASCII digits, which the grammar does not.
        while self.current_char() and self.current_char() in DIGITS:
            num_str += self.advance()
        return num_str

    def tokenize(self) -> List[Token]:
        """Tokenize the entire line"""
        self.position = 0
        self.tokens = []
        self.errors = []

        while self.position < len(self.source):
            self.skip_whitespace()

            if self.position >= len(self.source):
                break

            token_offset = self.position
            char = self.current_char()

            if char in DIGITS:
                value = self.read_integer()
                self.tokens.append(Token(TokenType.INTEGER, value, token_offset))

            elif char in SINGLE_CHAR_TOKENS:
                self.advance()
                self.tokens.append(Token(SINGLE_CHAR_TOKENS[char], char, token_offset))

            else:
                self.errors.append(LexerError(
                    f"Unexpected character {char!r}",
                    token_offset,
                    "an integer, an operator, a parenthesis or whitespace",
                ))
                self.advance()

        self.tokens.append(Token(TokenType.EOF, '', len(self.source)))

        return self.tokens

    def has_errors(self) -> bool:
        """Check if any lexer errors occurred"""
        return len(self.errors) > 0

    def get_errors(self) -> List[LexerError]:
        """Get all lexer errors"""
        return self.errors
