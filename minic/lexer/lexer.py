"""
MiniC Lexer - turns source text into tokens

Comments go first, in a separate pass, so that `a/*x*/b` glues into one
identifier. After that the scanner walks the text once and at each position
tries the patterns in a fixed priority order; the first one that matches
wins and consumes its longest run.

Author: xwest
"""

import logging
from typing import List, Optional

from .tokens import (
    Token, TokenType, SourceLocation, KEYWORDS, TWO_CHAR_OPERATORS,
    SINGLE_CHAR_SYMBOLS, WHITESPACE, DIGITS,
)
from .errors import LexerWarning

logger = logging.getLogger(__name__)


def strip_comments(source: str) -> str:
    """
    Remove // and /* */ comments.

    The newline ending a line comment is kept. Nothing else is inserted in
    place of a comment, and an unterminated block comment eats the rest of
    the input.
    """
    out = []
    i = 0
    n = len(source)
    in_line = False
    in_block = False

    while i < n:
        ch = source[i]
        nxt = source[i + 1] if i + 1 < n else ""

        if in_line:
            if ch == "\n":
                in_line = False
                out.append(ch)
            i += 1
            continue

        if in_block:
            if ch == "*" and nxt == "/":
                in_block = False
                i += 2
            else:
                i += 1
            continue

        if ch == "/" and nxt == "/":
            in_line = True
            i += 2
            continue
        if ch == "/" and nxt == "*":
            in_block = True
            i += 2
            continue

        out.append(ch)
        i += 1

    return "".join(out)


def _is_ident_start(ch: str) -> bool:
    return ch == "_" or ("a" <= ch <= "z") or ("A" <= ch <= "Z")


def _is_ident_continue(ch: str) -> bool:
    return _is_ident_start(ch) or ch in DIGITS


class Lexer:
    """
    MiniC lexical analyzer.

    Priority order at every position:
        1. whitespace (discarded)
        2. two-character operators  == != <= >=
        3. one-character symbols    + - * / = < > ( ) { } ;
        4. character literal        'x'
        5. float literal            digits . digits
        6. integer literal          digits
        7. identifier / keyword

    Anything else is skipped without an error. The returned list has no
    end marker; callers stop at the end of the list.
    """

    def __init__(self, source: str, filename: str = "<unknown>"):
        self.source = source
        self.filename = filename
        self.text = ""
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens: List[Token] = []
        self.warnings: List[LexerWarning] = []

    def tokenize(self) -> List[Token]:
        """Scan the whole source and return the token list."""
        self.text = strip_comments(self.source)
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens = []
        self.warnings = []

        while self.pos < len(self.text):
            if self.text[self.pos] in WHITESPACE:
                self._advance()
                continue

            token = self._next_token()
            if token is not None:
                self.tokens.append(token)
                continue

            # Silent skip: unknown characters never stop the scan
            location = self._location()
            char = self.text[self.pos]
            self.warnings.append(LexerWarning(char, location))
            logger.debug("skipping unrecognized character %r at %s", char, location)
            self._advance()

        logger.debug("scanned %d tokens from %s", len(self.tokens), self.filename)
        return self.tokens

    def _next_token(self) -> Optional[Token]:
        """Try each pattern in priority order at the current position."""
        location = self._location()
        current = self.text[self.pos]

        two = self.text[self.pos:self.pos + 2]
        if two in TWO_CHAR_OPERATORS:
            return self._emit(TokenType.SYMBOL, 2, location)

        if current in SINGLE_CHAR_SYMBOLS:
            return self._emit(TokenType.SYMBOL, 1, location)

        if current == "'" and self._peek(2) == "'" and self._peek(1) not in ("'", ""):
            return self._emit(TokenType.CHAR, 3, location)

        if current in DIGITS:
            int_end = self._scan_digits(self.pos)
            if int_end < len(self.text) and self.text[int_end] == ".":
                frac_end = self._scan_digits(int_end + 1)
                if frac_end > int_end + 1:
                    return self._emit(TokenType.FLOAT, frac_end - self.pos, location)
            return self._emit(TokenType.INTEGER, int_end - self.pos, location)

        if _is_ident_start(current):
            end = self.pos + 1
            while end < len(self.text) and _is_ident_continue(self.text[end]):
                end += 1
            lexeme = self.text[self.pos:end]
            kind = TokenType.KEYWORD if lexeme in KEYWORDS else TokenType.IDENTIFIER
            return self._emit(kind, end - self.pos, location)

        return None

    def _emit(self, kind: TokenType, length: int, location: SourceLocation) -> Token:
        lexeme = self.text[self.pos:self.pos + length]
        self._advance_by(length)
        return Token(kind, lexeme, location)

    def _scan_digits(self, start: int) -> int:
        end = start
        while end < len(self.text) and self.text[end] in DIGITS:
            end += 1
        return end

    def _location(self) -> SourceLocation:
        return SourceLocation(self.filename, self.line, self.column, self.pos)

    def _advance(self):
        """Advance position by one character, updating line/column."""
        if self.pos < len(self.text):
            if self.text[self.pos] == "\n":
                self.line += 1
                self.column = 1
            else:
                self.column += 1
            self.pos += 1

    def _advance_by(self, count: int):
        for _ in range(count):
            self._advance()

    def _peek(self, offset: int = 1) -> str:
        peek_pos = self.pos + offset
        if peek_pos < len(self.text):
            return self.text[peek_pos]
        return ""

    def has_warnings(self) -> bool:
        return len(self.warnings) > 0


def tokenize_string(source: str, filename: str = "<string>") -> List[Token]:
    """Convenience wrapper: scan a source string."""
    return Lexer(source, filename).tokenize()


def tokenize_file(filepath: str) -> List[Token]:
    """
    Scan a source file.

    Raises:
        OSError: If the file cannot be read
    """
    with open(filepath, "r", encoding="utf-8") as f:
        source = f.read()

    return tokenize_string(source, filepath)


def serialize_tokens(tokens: List[Token]) -> str:
    """Token listing, one `TOKEN(<kind>, "<lexeme>")` line per token."""
    return "".join(f"{token}\n" for token in tokens)
