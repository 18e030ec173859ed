"""
Semantic analyzer for MiniC.

One depth-first pass over the tree in source order. Declarations go into
the flat symbol table as they are met, expressions are checked bottom-up,
and every problem is appended to the context's diagnostics. Nothing stops
the walk early.

Author: xwest
"""

import logging
from typing import List, Optional
from dataclasses import dataclass

from ..lexer.errors import Diagnostic
from ..parser.ast_nodes import *
from .context import CompilationContext
from .symbol_table import SymbolTable, UNKNOWN_TYPE
from .errors import (
    create_redeclaration_error, create_undeclared_variable_error,
    create_initialization_mismatch_error, create_binary_mismatch_error,
    create_undeclared_assignment_error, create_assignment_mismatch_error,
    create_undefined_function_error,
)

logger = logging.getLogger(__name__)


@dataclass
class AnalysisResult:
    """Results of semantic analysis."""
    ast: Program
    symbol_table: SymbolTable
    diagnostics: List[Diagnostic]

    def has_errors(self) -> bool:
        return len(self.diagnostics) > 0


class SemanticAnalyzer(ASTVisitor):
    """
    Flat-scope checker with type inference.

    Checks performed:
    - redeclaration (first declaration wins)
    - use of undeclared variables
    - initializer / assignment / binary operand type agreement
    - calls and function definitions against the known-function whitelist
    """

    def __init__(self, context: Optional[CompilationContext] = None):
        self.context = context or CompilationContext()

    @property
    def symbol_table(self) -> SymbolTable:
        return self.context.symbol_table

    def analyze(self, ast: Program) -> AnalysisResult:
        """Walk the whole tree. Does not reset the context."""
        before = len(self.context.diagnostics)
        self.visit(ast)
        logger.debug("semantic analysis added %d diagnostics, %d symbols declared",
                     len(self.context.diagnostics) - before, len(self.symbol_table))
        return AnalysisResult(ast, self.symbol_table, self.context.diagnostics)

    # ========================================================================
    # Type inference
    # ========================================================================

    def infer_type(self, node: ASTNode) -> str:
        """
        Type of an expression node: "int", "float", a declared type, or "unknown".

        Literals are "float" when their text has a decimal point and "int"
        otherwise, so a character literal is never "char".
        """
        if isinstance(node, Literal):
            result = "float" if "." in node.text else "int"
        elif isinstance(node, Identifier):
            result = self.symbol_table.type_of(node.name)
        elif isinstance(node, BinaryOp):
            left = self.infer_type(node.left)
            right = self.infer_type(node.right)
            if left == "float" or right == "float":
                result = "float"
            elif left == "int" and right == "int":
                result = "int"
            else:
                result = UNKNOWN_TYPE
        elif isinstance(node, Call):
            # every whitelisted function is integer valued
            result = "int"
        else:
            result = UNKNOWN_TYPE

        node.inferred_type = result
        return result

    # ========================================================================
    # Visitors
    # ========================================================================

    def visit_VarDecl(self, node: VarDecl):
        name_node = node.children[1]
        declared = node.declared_type

        if self.symbol_table.declare(node.name, declared):
            name_node.is_declared = True
        else:
            self.context.report(create_redeclaration_error(node.name))

        initializer = node.initializer
        if initializer is not None:
            self.visit(initializer)
            actual = self.infer_type(initializer)
            if actual != declared:
                self.context.report(
                    create_initialization_mismatch_error(node.name, declared, actual))

    def visit_Identifier(self, node: Identifier):
        if node.name in self.symbol_table:
            node.is_declared = True
        else:
            self.context.report(create_undeclared_variable_error(node.name))
        self.infer_type(node)

    def visit_Literal(self, node: Literal):
        self.infer_type(node)

    def visit_BinaryOp(self, node: BinaryOp):
        self.visit(node.left)
        self.visit(node.right)

        left = self.infer_type(node.left)
        right = self.infer_type(node.right)
        if left != right:
            self.context.report(create_binary_mismatch_error(left, right))
        self.infer_type(node)

    def visit_Assignment(self, node: Assignment):
        expected = self.symbol_table.lookup(node.name)
        if expected is None:
            self.context.report(create_undeclared_assignment_error(node.name))
            return

        node.is_declared = True
        self.visit(node.expression)
        actual = self.infer_type(node.expression)
        if actual != expected:
            self.context.report(create_assignment_mismatch_error(node.name, expected, actual))

    def visit_Function(self, node: Function):
        self._check_known_function(node.name)
        self.generic_visit(node)

    def visit_Call(self, node: Call):
        for arg in node.args:
            self.visit(arg)
        self._check_known_function(node.name)
        self.infer_type(node)

    def _check_known_function(self, name: str):
        if name not in self.context.config.known_functions:
            self.context.report(create_undefined_function_error(name))


def analyze(ast: Program, context: Optional[CompilationContext] = None) -> AnalysisResult:
    """Convenience wrapper around SemanticAnalyzer.analyze."""
    return SemanticAnalyzer(context).analyze(ast)
