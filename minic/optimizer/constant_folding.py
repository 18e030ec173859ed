"""
Constant folding peephole pass for MiniC IR.

Works on IR text one line at a time, with no knowledge of the AST and no
data flow between lines. An integer instruction whose two operands are
both literals is replaced by its value.

Folded lines are always written back with the `add` opcode, whatever the
source opcode was (`%3 = mul i32 6, 7` becomes `%3 = add i32 42`).
Downstream pattern matching relies on that shape, so it is kept.

Author: xwest
"""

import re
import logging
from typing import List, Optional

from ..arith import apply_int_op, wrap_i32
from ..config import FOLD_BANNER

logger = logging.getLogger(__name__)


FOLDABLE_OPCODES = ("add", "sub", "mul", "sdiv")

CONSTANT_OP = re.compile(r"^(\s*%\w+ = )(\w+) i32 (-?\d+), (-?\d+)")


class ConstantFolder:
    """Single forward pass; no iteration to a fixed point."""

    def __init__(self, banner: Optional[str] = None):
        self.banner = FOLD_BANNER if banner is None else banner
        self.folded_count = 0

    def fold(self, ir_text: str) -> str:
        self.folded_count = 0
        lines = _split_lines(ir_text)

        # A second pass over already folded text must not stack banners
        has_banner = bool(lines) and lines[0] == self.banner

        output: List[str] = [] if has_banner else [self.banner]
        for line in lines:
            output.append(self.fold_line(line))

        logger.debug("folded %d of %d IR lines", self.folded_count, len(lines))
        return "".join(line + "\n" for line in output)

    def fold_line(self, line: str) -> str:
        """Fold one line, or return it unchanged."""
        match = CONSTANT_OP.match(line)
        if match is None:
            return line

        prefix, opcode, lhs, rhs = match.groups()
        if opcode not in FOLDABLE_OPCODES:
            return line

        try:
            result = apply_int_op(opcode, wrap_i32(int(lhs)), wrap_i32(int(rhs)))
        except ZeroDivisionError:
            # leave `sdiv i32 N, 0` exactly as written
            return line

        self.folded_count += 1
        return f"{prefix}add i32 {result}"


def _split_lines(text: str) -> List[str]:
    """Split on newlines like a getline loop: no phantom empty last line."""
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


def fold(ir_text: str, banner: Optional[str] = None) -> str:
    """Run one constant folding pass over `ir_text`."""
    return ConstantFolder(banner).fold(ir_text)
