"""
MiniC Recursive Descent Parser

The grammar is deliberately narrow:

    Program    := { Function | Statement }
    Function   := "int" "main" "(" ")" "{" { VarDecl | Return } "}"
    Statement  := VarDecl | Assignment | Return
    VarDecl    := ("int" | "float" | "char") IDENTIFIER [ "=" Expression ] ";"
    Assignment := IDENTIFIER "=" Expression ";"
    Return     := "return" [ Expression ] ";"
    Expression := Operand [ ("+" | "-" | "*" | "/") Operand ]
    Operand    := IDENTIFIER | INTEGER | FLOAT | CHAR | Call
    Call       := IDENTIFIER "(" { Operand } ")"

There is no precedence climbing and no parenthesized grouping. Tokens that
do not start a recognized construct are skipped, so the parser always
terminates and never rejects a whole program.

Author: xwest
"""

import logging
from typing import List, Optional

from ..lexer.tokens import (
    Token, TokenType, SourceLocation, TYPE_KEYWORDS, ARITHMETIC_OPERATORS,
)
from ..lexer.errors import Diagnostic
from .ast_nodes import (
    ASTNode, Program, Function, ReturnType, Block, VarDecl, Assignment,
    Return, BinaryOp, Call, Identifier, Literal,
)
from .errors import (
    ParseError, create_expected_token_diagnostic, create_missing_name_error,
    create_missing_assign_error, create_invalid_initializer_error,
    create_missing_operand_error, create_invalid_assignment_error,
)

logger = logging.getLogger(__name__)


class Parser:
    """
    MiniC parser.

    Syntax diagnostics are collected on `self.diagnostics` in the order they
    are found; the pipeline copies them into the compilation context ahead
    of the semantic diagnostics.
    """

    def __init__(self, tokens: List[Token], filename: str = "<unknown>"):
        """
        Initialize parser with a list of tokens.

        Args:
            tokens: Tokens from the scanner (no end marker)
            filename: Used for the location of the synthesized EOF token
        """
        self.tokens = tokens
        self.filename = filename
        self.current = 0
        self.diagnostics: List[Diagnostic] = []

    def parse(self) -> Program:
        """Parse the whole token list into a Program node."""
        items: List[ASTNode] = []

        while not self._is_at_end():
            start = self.current

            if self._at_main():
                node = self._parse_function()
            else:
                node = self._parse_statement()

            if node is not None:
                items.append(node)
            elif self.current == start:
                # Not the start of anything we know: skip it
                self._advance()

        logger.debug("parsed %d top-level items with %d syntax diagnostics",
                     len(items), len(self.diagnostics))
        return Program(items)

    # ========================================================================
    # Functions
    # ========================================================================

    def _at_main(self) -> bool:
        return (self._peek().is_keyword and self._peek().lexeme == "int"
                and self._peek(1).type == TokenType.IDENTIFIER
                and self._peek(1).lexeme == "main")

    def _parse_function(self) -> Function:
        """Parse `int main() { ... }`."""
        self._advance()  # int
        name_token = self._advance()

        self._consume("(")
        self._consume(")")
        self._consume("{")

        statements: List[ASTNode] = []
        while not self._is_at_end() and not self._check("}"):
            start = self.current
            token = self._peek()

            stmt = None
            if token.is_keyword and token.lexeme in TYPE_KEYWORDS:
                stmt = self._guarded(self._parse_var_decl)
            elif token.is_keyword and token.lexeme == "return":
                stmt = self._guarded(self._parse_return)

            if stmt is not None:
                statements.append(stmt)
            elif self.current == start:
                # if/while/for and anything else are not parsed in a body
                self._advance()

        self._consume("}")
        return Function(name_token.lexeme, ReturnType("int"), Block(statements))

    # ========================================================================
    # Statements
    # ========================================================================

    def _parse_statement(self) -> Optional[ASTNode]:
        """Top-level statement: declaration, assignment or return."""
        token = self._peek()

        if token.is_keyword and token.lexeme in TYPE_KEYWORDS:
            return self._guarded(self._parse_var_decl)
        if token.type == TokenType.IDENTIFIER:
            return self._guarded(self._parse_assignment)
        if token.is_keyword and token.lexeme == "return":
            return self._guarded(self._parse_return)
        return None

    def _guarded(self, parse_fn) -> Optional[ASTNode]:
        """Run a statement parser, turning a ParseError into a diagnostic."""
        try:
            return parse_fn()
        except ParseError as e:
            self.diagnostics.append(e.diagnostic)
            return None

    def _parse_var_decl(self) -> VarDecl:
        type_token = self._advance()

        name_token = self._peek()
        if name_token.type != TokenType.IDENTIFIER:
            raise create_missing_name_error(type_token.lexeme, name_token)
        self._advance()

        initializer = None
        if self._match("="):
            initializer = self._parse_expression()
            if initializer is None:
                raise create_invalid_initializer_error(name_token.lexeme, self._peek())

        self._consume(";")
        return VarDecl(type_token.lexeme, name_token.lexeme, initializer)

    def _parse_assignment(self) -> Assignment:
        name_token = self._advance()

        if not self._match("="):
            raise create_missing_assign_error(name_token.lexeme, self._peek())

        expression = self._parse_expression()
        if expression is None:
            raise create_invalid_assignment_error(name_token.lexeme, self._peek())

        self._consume(";")
        return Assignment(name_token.lexeme, expression)

    def _parse_return(self) -> Return:
        self._advance()  # return
        expression = self._parse_expression()
        self._consume(";")
        return Return(expression)

    # ========================================================================
    # Expressions
    # ========================================================================

    def _parse_expression(self) -> Optional[ASTNode]:
        """Operand, optionally followed by exactly one operator and operand."""
        left = self._parse_operand()
        if left is None:
            return None

        op_token = self._peek()
        if op_token.type == TokenType.SYMBOL and op_token.lexeme in ARITHMETIC_OPERATORS:
            self._advance()
            right = self._parse_operand()
            if right is None:
                raise create_missing_operand_error(op_token.lexeme, self._peek())
            return BinaryOp(op_token.lexeme, left, right)

        return left

    def _parse_operand(self) -> Optional[ASTNode]:
        """Identifier, literal or call. Consumes nothing on failure."""
        token = self._peek()

        if token.type == TokenType.IDENTIFIER:
            self._advance()
            if self._check("("):
                return self._parse_call(token)
            return Identifier(token.lexeme)

        if token.is_literal:
            self._advance()
            return Literal(token.lexeme, token.type)

        return None

    def _parse_call(self, name_token: Token) -> Call:
        self._advance()  # (
        args: List[ASTNode] = []
        while not self._is_at_end() and not self._check(")"):
            arg = self._parse_operand()
            if arg is None:
                break
            args.append(arg)
        self._consume(")")
        return Call(name_token.lexeme, args)

    # ========================================================================
    # Token helpers
    # ========================================================================

    def _is_at_end(self) -> bool:
        return self.current >= len(self.tokens)

    def _peek(self, offset: int = 0) -> Token:
        index = self.current + offset
        if index < len(self.tokens):
            return self.tokens[index]
        return self._eof_token()

    def _advance(self) -> Token:
        token = self._peek()
        if not self._is_at_end():
            self.current += 1
        return token

    def _check(self, lexeme: str) -> bool:
        return self._peek().is_symbol(lexeme)

    def _match(self, lexeme: str) -> bool:
        if self._check(lexeme):
            self._advance()
            return True
        return False

    def _consume(self, lexeme: str) -> bool:
        """Expect a symbol; record a diagnostic and go on if it is missing."""
        if self._match(lexeme):
            return True
        self.diagnostics.append(create_expected_token_diagnostic(lexeme, self._peek()))
        return False

    def _eof_token(self) -> Token:
        if self.tokens:
            last = self.tokens[-1].location
            location = SourceLocation(last.filename, last.line,
                                      last.column + len(self.tokens[-1].lexeme),
                                      last.offset + len(self.tokens[-1].lexeme))
        else:
            location = SourceLocation(self.filename, 1, 1, 0)
        return Token(TokenType.EOF, "", location)


def parse_program(tokens: List[Token], diagnostics: Optional[List[Diagnostic]] = None) -> Program:
    """
    Parse tokens into a Program.

    Syntax diagnostics are appended to `diagnostics` when one is given.
    """
    parser = Parser(tokens)
    program = parser.parse()
    if diagnostics is not None:
        diagnostics.extend(parser.diagnostics)
    return program
