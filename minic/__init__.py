"""
MiniC Compiler Package

A miniature source-to-execution pipeline for a tiny C-like language.

Architecture:
    minic/
    ├── lexer/           # Comment stripping and tokenization
    ├── parser/          # Restricted grammar and AST generation
    ├── analyzer/        # Symbol table, type checks, reference interpreter
    ├── ir/              # Textual register IR generation
    ├── optimizer/       # Constant folding peephole pass
    ├── backend/         # Result extraction and LLVM native backend
    ├── pipeline.py      # Stage entry points
    └── cli.py           # minic command

Author: xwest
License: MIT
"""

__version__ = "0.1.0"
__author__ = "xwest"
__license__ = "MIT"

from .config import CompilerConfig, DEFAULT_CONFIG
from .lexer import Lexer
from .parser import Parser
from .analyzer import SemanticAnalyzer, CompilationContext, Interpreter
from .ir import IRGenerator
from .optimizer import ConstantFolder
from .backend import ResultExtractor, LLVMBackend, BackendError
from .pipeline import (
    compile_source, CompilationResult,
    run_lexer, run_ast, run_ir, run_optimized_ir, run_codegen, run_native,
)

__all__ = [
    # Core classes
    "Lexer",
    "Parser",
    "SemanticAnalyzer",
    "Interpreter",
    "IRGenerator",
    "ConstantFolder",
    "ResultExtractor",
    "LLVMBackend",

    # Configuration and state
    "CompilerConfig",
    "DEFAULT_CONFIG",
    "CompilationContext",

    # Pipeline
    "compile_source",
    "CompilationResult",
    "run_lexer",
    "run_ast",
    "run_ir",
    "run_optimized_ir",
    "run_codegen",
    "run_native",
    "BackendError",

    # Version info
    "__version__",
    "__author__",
    "__license__",
]
