"""
Backend errors for MiniC.

Author: xwest
"""

from typing import Optional


class BackendError(Exception):
    """LLVM rejected the IR, or native compilation/execution failed."""

    def __init__(self, message: str, ir_text: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.ir_text = ir_text

    def __str__(self) -> str:
        return self.message
