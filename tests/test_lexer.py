"""
Unit tests for the Lexer module
"""

import pytest
from intcalc.errors import ParseError
from intcalc.lexer import Lexer, Token, TokenType, LexerError


class TestLexerBasics:
    """Test basic lexer functionality"""

    def test_empty_input(self):
        """Test lexer with empty input"""
        lexer = Lexer("")
        tokens = lexer.tokenize()
        assert len(tokens) == 1
        assert tokens[0].type == TokenType.EOF
        assert tokens[0].offset == 0

    def test_simple_expression(self):
        lexer = Lexer("12 + 3")
        tokens = lexer.tokenize()
        assert tokens == [
            Token(TokenType.INTEGER, "12", 0),
            Token(TokenType.PLUS, "+", 3),
            Token(TokenType.INTEGER, "3", 5),
            Token(TokenType.EOF, "", 6),
        ]
        assert not lexer.has_errors()

    def test_all_operators_and_delimiters(self):
        tokens = Lexer("+-*/%()").tokenize()
        assert [t.type for t in tokens] == [
            TokenType.PLUS,
            TokenType.MINUS,
            TokenType.STAR,
            TokenType.SLASH,
            TokenType.PERCENT,
            TokenType.LPAREN,
            TokenType.RPAREN,
            TokenType.EOF,
        ]


class TestWhitespace:
    """Only spaces and tabs separate tokens"""

    def test_tabs_and_spaces(self):
        tokens = Lexer("\t7\t*\t(1) ").tokenize()
        assert [(t.type, t.offset) for t in tokens] == [
            (TokenType.INTEGER, 1),
            (TokenType.STAR, 3),
            (TokenType.LPAREN, 5),
            (TokenType.INTEGER, 6),
            (TokenType.RPAREN, 7),
            (TokenType.EOF, 9),
        ]

    def test_whitespace_splits_integers(self):
        tokens = Lexer("12 34").tokenize()
        assert [t.value for t in tokens[:-1]] == ["12", "34"]

    def test_newline_is_rejected(self):
        lexer = Lexer("1\n")
        lexer.tokenize()
        assert lexer.has_errors()
        assert lexer.get_errors()[0].offset == 1


class TestNumbers:
    """Test integer literal lexing"""

    def test_leading_zeros_kept(self):
        tokens = Lexer("007").tokenize()
        assert tokens[0].type == TokenType.INTEGER
        assert tokens[0].value == "007"

    def test_minus_is_separate_token(self):
        tokens = Lexer("--5").tokenize()
        assert [t.type for t in tokens] == [TokenType.MINUS, TokenType.MINUS, TokenType.INTEGER, TokenType.EOF]

    def test_non_ascii_digit_rejected(self):
        lexer = Lexer("٣")
        lexer.tokenize()
        assert lexer.has_errors()


class TestErrors:
    """Test lexer error reporting"""

    def test_unexpected_character(self):
        lexer = Lexer("5 $ 3")
        tokens = lexer.tokenize()
        assert lexer.has_errors()
        err = lexer.get_errors()[0]
        assert isinstance(err, LexerError)
        assert isinstance(err, ParseError)
        assert err.offset == 2
        assert "'$'" in str(err)
        assert err.expected
        # lexing continues past the bad character
        assert [t.value for t in tokens[:-1]] == ["5", "3"]

    def test_every_bad_character_reported(self):
        lexer = Lexer("1.5 ^ x")
        lexer.tokenize()
        assert [e.offset for e in lexer.get_errors()] == [1, 4, 6]

    def test_tokenize_resets_errors(self):
        lexer = Lexer("?")
        lexer.tokenize()
        lexer.tokenize()
        assert len(lexer.get_errors()) == 1
