"""
MiniC Lexer Package

Hand-written, priority-ordered scanner for the MiniC language.

Key Features:
- Comment stripping (// and /* */) before tokenization
- Fixed-priority longest-run matching, no regex engine
- Silent skip of unrecognized characters (recorded as warnings only)

Author: xwest
"""

from .tokens import Token, TokenType, SourceLocation, KEYWORDS
from .lexer import Lexer, strip_comments, tokenize_string, tokenize_file, serialize_tokens
from .errors import Diagnostic, LexerWarning

__all__ = [
    "Lexer",
    "Token",
    "TokenType",
    "SourceLocation",
    "KEYWORDS",
    "strip_comments",
    "tokenize_string",
    "tokenize_file",
    "serialize_tokens",
    "Diagnostic",
    "LexerWarning",
]
