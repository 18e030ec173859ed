"""
MiniC Parser Package

Recursive descent parser for the restricted MiniC grammar. Produces a
tree of exclusively-owned nodes and collects syntax diagnostics instead
of raising.

Author: xwest
"""

from .ast_nodes import *
from .parser import Parser, parse_program
from .errors import ParseError

__all__ = [
    # Core parser
    "Parser", "parse_program",

    # AST nodes
    "AST", "ASTNode", "ASTNodeType", "ASTVisitor",
    "Program", "Function", "ReturnType", "Block",
    "VarDecl", "TypeName", "Name", "Assignment", "Return",
    "BinaryOp", "Call", "Identifier", "Literal",
    "format_ast",

    # Error handling
    "ParseError",
]
