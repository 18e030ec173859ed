"""
Per-run analysis state.

The symbol table and the diagnostics list are the only mutable state the
pipeline shares between stages. They travel together in one context object
that is reset at the start of every run. A context is not reentrant: one
run at a time.

Author: xwest
"""

from typing import List, Optional

from ..config import CompilerConfig, DEFAULT_CONFIG
from ..lexer.errors import Diagnostic
from .symbol_table import SymbolTable


class CompilationContext:
    """Symbol table + diagnostics + configuration for one pipeline run."""

    def __init__(self, config: Optional[CompilerConfig] = None):
        self.config = config or DEFAULT_CONFIG
        self.symbol_table = SymbolTable()
        self.diagnostics: List[Diagnostic] = []

    def reset(self):
        """Forget everything from the previous run."""
        self.symbol_table.clear()
        self.diagnostics.clear()

    def report(self, diagnostic: Diagnostic):
        self.diagnostics.append(diagnostic)

    def has_errors(self) -> bool:
        return any(d.severity == "error" for d in self.diagnostics)

    def messages(self) -> List[str]:
        """Diagnostics as plain strings, in the order they were reported."""
        return [str(d) for d in self.diagnostics]
