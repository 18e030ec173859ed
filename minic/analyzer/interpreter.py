"""
Reference interpreter for MiniC.

Evaluates variable initializers over 32-bit signed integers so the driver
can report what the program computes. It is a debugging aid only: nothing
it produces feeds the IR or the extracted result.

Author: xwest
"""

import logging
from typing import Dict, Optional

from ..arith import apply_int_op, parse_leading_int, FUNCTION_TABLE
from ..parser.ast_nodes import ASTNode, VarDecl, Literal, Identifier, BinaryOp, Call

logger = logging.getLogger(__name__)


class Interpreter:
    """Pre-order evaluator of VarDecl initializers."""

    def __init__(self):
        self.environment: Dict[str, int] = {}

    def run(self, root: Optional[ASTNode]) -> Dict[str, int]:
        """Evaluate every initialized declaration under `root`, in source order."""
        self.environment = {}
        if root is None:
            return self.environment

        for node in root.walk():
            if isinstance(node, VarDecl) and node.initializer is not None:
                value = self.evaluate(node.initializer)
                self.environment[node.name] = value
                logger.debug("%s = %d", node.name, value)

        return self.environment

    def evaluate(self, node: ASTNode) -> int:
        if isinstance(node, Literal):
            # stoi semantics: "2.5" -> 2, "'a'" -> 0
            value = parse_leading_int(node.text)
            return value if value is not None else 0

        if isinstance(node, Identifier):
            return self.environment.get(node.name, 0)

        if isinstance(node, BinaryOp):
            return self._apply(node.operator, self.evaluate(node.left), self.evaluate(node.right))

        if isinstance(node, Call):
            operator = FUNCTION_TABLE.get(node.name)
            args = [self.evaluate(arg) for arg in node.args]
            if operator is None or len(args) != 2:
                return 0
            return self._apply(operator, args[0], args[1])

        return 0

    def _apply(self, operator: str, lhs: int, rhs: int) -> int:
        try:
            return apply_int_op(operator, lhs, rhs)
        except ZeroDivisionError:
            return 0


def run(root: Optional[ASTNode]) -> Dict[str, int]:
    """Evaluate `root` with a fresh interpreter and return the environment."""
    return Interpreter().run(root)
