"""
Semantic diagnostics for MiniC.

Nothing here is raised. Each helper builds a Diagnostic with the exact
message text shown to the user plus a stable code for tooling.

Author: xwest
"""

from typing import Optional

from ..lexer.tokens import SourceLocation
from ..lexer.errors import Diagnostic


SEMANTIC_ERROR_CODES = {
    "S001": "Type mismatch in initialization",
    "S002": "Type mismatch in binary operation",
    "S003": "Type mismatch in assignment",
    "S010": "Undeclared variable",
    "S011": "Variable re-declared",
    "S012": "Assignment to undeclared variable",
    "S020": "Function not defined",
}


def create_redeclaration_error(name: str, location: Optional[SourceLocation] = None) -> Diagnostic:
    return Diagnostic(f"Variable '{name}' re-declared.", code="S011", location=location)


def create_undeclared_variable_error(name: str, location: Optional[SourceLocation] = None) -> Diagnostic:
    return Diagnostic(f"Undeclared variable: {name}.", code="S010", location=location)


def create_initialization_mismatch_error(name: str, expected: str, actual: str) -> Diagnostic:
    return Diagnostic(
        f"Type mismatch in initialization of '{name}': expected {expected}, got {actual}.",
        code="S001",
    )


def create_binary_mismatch_error(left: str, right: str) -> Diagnostic:
    return Diagnostic(f"Type mismatch in binary operation: {left} vs {right}.", code="S002")


def create_undeclared_assignment_error(name: str) -> Diagnostic:
    return Diagnostic(f"Assignment to undeclared variable: {name}.", code="S012")


def create_assignment_mismatch_error(name: str, expected: str, actual: str) -> Diagnostic:
    return Diagnostic(
        f"Type mismatch in assignment to '{name}': expected {expected}, got {actual}.",
        code="S003",
    )


def create_undefined_function_error(name: str) -> Diagnostic:
    return Diagnostic(f"Function not defined: {name}.", code="S020")
