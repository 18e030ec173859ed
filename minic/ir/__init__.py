"""
MiniC Intermediate Representation Package

Lowers the AST into LLVM-flavoured register IR text.

Key Features:
- One `define i32 @name()` per function
- alloca/store/load stack slots for variables
- Monotonic register numbering per function, starting at 1
- Integer and float opcodes chosen from operand types

Author: xwest
"""

from .ir_generator import IRGenerator, IRGenContext, lower, format_float, sanitize_name

__all__ = [
    # Core IR components
    "IRGenerator",
    "IRGenContext",
    "lower",

    # Helpers
    "format_float",
    "sanitize_name",
]
