"""
Token definitions for the MiniC scanner.

The language only knows seven token kinds. Operators and punctuation all
share the SYMBOL kind; the parser dispatches on the lexeme.

Author: xwest
"""

from enum import Enum
from dataclasses import dataclass
from typing import FrozenSet


class TokenType(Enum):
    """Token kinds produced by the scanner."""

    KEYWORD = "KEYWORD"
    IDENTIFIER = "IDENTIFIER"
    INTEGER = "INTEGER"
    FLOAT = "FLOAT"
    CHAR = "CHAR"
    SYMBOL = "SYMBOL"
    EOF = "EOF"             # never emitted by the scanner, synthesized by the parser


@dataclass(frozen=True)
class SourceLocation:
    """
    A position in the comment-stripped source text.

    Used for verbose diagnostics only; token listings never show it.
    """
    filename: str
    line: int
    column: int
    offset: int

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}"

    def __repr__(self) -> str:
        return f"SourceLocation({self.filename!r}, {self.line}, {self.column}, {self.offset})"


@dataclass(frozen=True)
class Token:
    """A lexical token: kind plus the raw lexeme."""
    type: TokenType
    lexeme: str
    location: SourceLocation

    def __str__(self) -> str:
        return f'TOKEN({self.type.value}, "{self.lexeme}")'

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.lexeme!r}, {self.location!r})"

    @property
    def is_literal(self) -> bool:
        return self.type in LITERAL_TYPES

    @property
    def is_keyword(self) -> bool:
        return self.type == TokenType.KEYWORD

    def is_symbol(self, lexeme: str) -> bool:
        """Check for a specific operator or punctuation symbol."""
        return self.type == TokenType.SYMBOL and self.lexeme == lexeme


# Reserved words. Everything else that looks like a name is an IDENTIFIER.
KEYWORDS: FrozenSet[str] = frozenset({
    "int", "float", "char", "return",
    "if", "else", "while", "for",
})

# Declaration keywords accepted in front of a variable name
TYPE_KEYWORDS = ("int", "float", "char")

# Relational / equality operators, tried before the one-character symbols
TWO_CHAR_OPERATORS = ("==", "!=", "<=", ">=")

SINGLE_CHAR_SYMBOLS: FrozenSet[str] = frozenset("+-*/=<>(){};")

ARITHMETIC_OPERATORS = ("+", "-", "*", "/")

LITERAL_TYPES = frozenset({TokenType.INTEGER, TokenType.FLOAT, TokenType.CHAR})

WHITESPACE = " \t\n\r\f\v"
DIGITS = "0123456789"
