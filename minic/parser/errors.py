"""
Error handling for the MiniC parser.

Syntax problems never abort a parse. A missing token is recorded and the
parser carries on as if it had been there; a malformed statement raises
ParseError internally, which the statement loop turns into a diagnostic
and a skipped statement.

Author: xwest
"""

from typing import Optional

from ..lexer.tokens import Token, SourceLocation
from ..lexer.errors import Diagnostic


class ParseError(Exception):
    """
    Raised inside the parser when a statement cannot be built.

    Never escapes Parser.parse(); the diagnostic is collected instead.
    """

    def __init__(self, message: str, location: Optional[SourceLocation] = None,
                 token: Optional[Token] = None, code: Optional[str] = None):
        super().__init__(message)
        self.diagnostic = Diagnostic(
            message=message,
            severity="error",
            code=code,
            location=location,
        )
        self.token = token

    def __str__(self) -> str:
        return str(self.diagnostic)


PARSER_ERROR_CODES = {
    "P001": "Expected token not found",
    "P002": "Missing variable name in declaration",
    "P003": "Missing '=' in assignment",
    "P004": "Invalid initializer",
    "P005": "Missing operand after operator",
    "P006": "Invalid assignment expression",
}


def create_expected_token_diagnostic(expected: str, found: Token) -> Diagnostic:
    """`Expected '<token>' but got '<actual>'`"""
    return Diagnostic(
        message=f"Expected '{expected}' but got '{found.lexeme}'",
        code="P001",
        location=found.location,
    )


def create_missing_name_error(type_name: str, found: Token) -> ParseError:
    return ParseError(
        f"Expected variable name after '{type_name}'.",
        location=found.location,
        token=found,
        code="P002",
    )


def create_missing_assign_error(name: str, found: Token) -> ParseError:
    return ParseError(
        f"Expected '=' after identifier '{name}'.",
        location=found.location,
        token=found,
        code="P003",
    )


def create_invalid_initializer_error(name: str, found: Token) -> ParseError:
    return ParseError(
        f"Invalid initializer for '{name}'.",
        location=found.location,
        token=found,
        code="P004",
    )


def create_missing_operand_error(operator: str, found: Token) -> ParseError:
    return ParseError(
        f"Expected operand after '{operator}' but got '{found.lexeme}'",
        location=found.location,
        token=found,
        code="P005",
    )


def create_invalid_assignment_error(name: str, found: Token) -> ParseError:
    return ParseError(
        f"Invalid expression in assignment to '{name}'.",
        location=found.location,
        token=found,
        code="P006",
    )
