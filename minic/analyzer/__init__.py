"""
MiniC Semantic Analyzer Package

Implements the checks and evaluation that run on the parsed tree:
- Flat, single-scope symbol table
- Type inference over literals, identifiers, binary ops and calls
- Known-function whitelist checking
- A reference interpreter for initializers

Author: xwest
"""

from .semantic_analyzer import SemanticAnalyzer, AnalysisResult, analyze
from .symbol_table import SymbolTable, Symbol, UNKNOWN_TYPE
from .context import CompilationContext
from .interpreter import Interpreter, run
from .errors import SEMANTIC_ERROR_CODES

__all__ = [
    # Main analyzer
    "SemanticAnalyzer", "AnalysisResult", "analyze",

    # Symbol management
    "SymbolTable", "Symbol", "UNKNOWN_TYPE",

    # Per-run state
    "CompilationContext",

    # Reference interpreter
    "Interpreter", "run",

    # Error handling
    "SEMANTIC_ERROR_CODES",
]
