"""
Diagnostic records shared by every MiniC stage.

The scanner itself never fails: characters it cannot match are dropped.
Those drops are kept as LexerWarning records so tooling can show them, but
they are never added to the compilation diagnostics.

Author: xwest
"""

from typing import Optional
from dataclasses import dataclass

from .tokens import SourceLocation


@dataclass
class Diagnostic:
    """One human-readable message plus its classification."""
    message: str
    severity: str = "error"  # "error", "warning", "info"
    code: Optional[str] = None
    location: Optional[SourceLocation] = None

    def __str__(self) -> str:
        return self.message

    def format(self) -> str:
        """Long form with severity, code and location."""
        prefix = self.severity.upper()
        if self.code:
            prefix += f"[{self.code}]"
        result = f"{prefix}: {self.message}"
        if self.location is not None:
            result += f"\n  --> {self.location}"
        return result


class LexerWarning:
    """A character the scanner skipped."""

    def __init__(self, char: str, location: SourceLocation):
        self.char = char
        self.diagnostic = Diagnostic(
            message=f"Skipped unrecognized character: {char!r}",
            severity="warning",
            code="L001",
            location=location,
        )

    def __str__(self) -> str:
        return str(self.diagnostic)

    def __repr__(self) -> str:
        return f"LexerWarning({self.char!r}, {self.diagnostic.location!r})"


ERROR_CODES = {
    "L001": "Unrecognized character skipped",
}
