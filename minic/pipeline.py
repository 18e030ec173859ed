"""
Pipeline driver for MiniC.

Each stage is exposed as a string-in/string-out function so a host (the
CLI, an editor, a web page) can show any stage's output without knowing
about tokens or trees. `compile_source` runs everything once and keeps
every intermediate.

Every stage function starts from a freshly reset context, so nothing
leaks from one call to the next. None of them raises on bad input.

Author: xwest
"""

import logging
from typing import Dict, List, Optional, Tuple
from dataclasses import dataclass, field

from .config import CompilerConfig, DEFAULT_CONFIG
from .lexer import Lexer, Token, Diagnostic, serialize_tokens
from .parser import Program, parse_program, format_ast
from .analyzer import CompilationContext, SemanticAnalyzer, Interpreter
from .ir import IRGenerator
from .optimizer import fold
from .backend import ResultExtractor, LLVMBackend, BackendError, create_backend

logger = logging.getLogger(__name__)


SEMANTIC_ERRORS_HEADER = "--- Semantic Errors ---"
SEMANTIC_PASSED = "✅ Semantic analysis passed."


@dataclass
class CompilationResult:
    """Every intermediate of one full run. The AST itself is not kept."""
    source: str
    tokens: List[Token] = field(default_factory=list)
    ast_report: str = ""
    diagnostics: List[Diagnostic] = field(default_factory=list)
    symbols: Dict[str, str] = field(default_factory=dict)
    environment: Dict[str, int] = field(default_factory=dict)
    ir: str = ""
    optimized_ir: str = ""
    result: str = ""

    @property
    def has_errors(self) -> bool:
        return len(self.diagnostics) > 0

    @property
    def token_listing(self) -> str:
        return serialize_tokens(self.tokens)


def _front_end(source: str, context: CompilationContext) -> Tuple[List[Token], Program]:
    """Scan, parse and analyze into `context`, returning tokens and tree."""
    context.reset()

    tokens = Lexer(source).tokenize()
    root = parse_program(tokens, context.diagnostics)
    SemanticAnalyzer(context).analyze(root)
    return tokens, root


def format_report(root: Program, diagnostics: List[Diagnostic]) -> str:
    """AST printout followed by the semantic verdict."""
    report = format_ast(root)
    if diagnostics:
        report += "\n" + SEMANTIC_ERRORS_HEADER + "\n"
        report += "".join(f"❌ {d}\n" for d in diagnostics)
    else:
        report += "\n" + SEMANTIC_PASSED + "\n"
    return report


def compile_source(source: str, config: Optional[CompilerConfig] = None,
                   context: Optional[CompilationContext] = None) -> CompilationResult:
    """
    Run the full pipeline once.

    Args:
        source: MiniC source text
        config: Compiler configuration (defaults to DEFAULT_CONFIG)
        context: Context to reuse; it is reset first

    Returns:
        CompilationResult with tokens, report, diagnostics, environment,
        IR, folded IR and the extracted result
    """
    config = config or (context.config if context else DEFAULT_CONFIG)
    if context is None:
        context = CompilationContext(config)
    else:
        context.config = config

    result = CompilationResult(source)
    result.tokens, root = _front_end(source, context)

    if not context.diagnostics:
        result.environment = dict(Interpreter().run(root))
        logger.debug("runtime environment: %s", result.environment)
        if config.watch_variable in result.environment:
            logger.info("Value of %s: %d", config.watch_variable,
                        result.environment[config.watch_variable])

    result.ast_report = format_report(root, context.diagnostics)
    result.diagnostics = list(context.diagnostics)
    result.symbols = context.symbol_table.as_dict()

    result.ir = IRGenerator(config).generate(root)
    del root

    result.optimized_ir = fold(result.ir, config.fold_banner)
    result.result = str(ResultExtractor().extract(result.optimized_ir))

    logger.debug("compiled %d tokens, %d diagnostics, result %r",
                 len(result.tokens), len(result.diagnostics), result.result)
    return result


# ============================================================================
# Stage entry points
# ============================================================================

def run_lexer(source: str) -> str:
    """Token listing, one `TOKEN(KIND, "lexeme")` per line."""
    return serialize_tokens(Lexer(source).tokenize())


def run_ast(source: str, config: Optional[CompilerConfig] = None) -> str:
    """AST printout plus semantic diagnostics (or the success marker)."""
    return compile_source(source, config).ast_report


def run_ir(source: str, config: Optional[CompilerConfig] = None) -> str:
    """Unoptimized IR text."""
    config = config or DEFAULT_CONFIG
    context = CompilationContext(config)
    _, root = _front_end(source, context)
    return IRGenerator(config).generate(root)


def run_optimized_ir(ir_text: str, config: Optional[CompilerConfig] = None) -> str:
    """Constant-folded IR text with the banner line on top."""
    config = config or DEFAULT_CONFIG
    return fold(ir_text, config.fold_banner)


def run_codegen(source: str, config: Optional[CompilerConfig] = None) -> str:
    """Execution result line: IR, then folding, then extraction."""
    ir_text = run_ir(source, config)
    optimized = run_optimized_ir(ir_text, config)
    return str(ResultExtractor().extract(optimized))


def run_native(source: str, config: Optional[CompilerConfig] = None,
               backend: Optional[LLVMBackend] = None) -> str:
    """Run `main` natively through LLVM and report its return value."""
    ir_text = run_ir(source, config)
    try:
        backend = backend or create_backend()
        value = backend.run_main(ir_text)
    except BackendError as e:
        logger.debug("native backend rejected IR:\n%s", e.ir_text or ir_text)
        return f"Native error: {e}"
    return f"Native result: {value}"


def run_assembly(source: str, config: Optional[CompilerConfig] = None,
                 backend: Optional[LLVMBackend] = None) -> str:
    """Target assembly for the program, or the backend's error line."""
    ir_text = run_ir(source, config)
    try:
        backend = backend or create_backend()
        return backend.emit_assembly(ir_text)
    except BackendError as e:
        return f"Native error: {e}"
