"""
MiniC Optimizer Package

Single-pass textual peephole optimization over generated IR.

Author: xwest
"""

from .constant_folding import ConstantFolder, fold, FOLDABLE_OPCODES

__all__ = [
    "ConstantFolder",
    "fold",
    "FOLDABLE_OPCODES",
]
