"""
IR Generator for MiniC.

Lowers the AST into LLVM-flavoured textual IR: one `define i32 @<name>()`
per function, stack slots via alloca/store/load, and numbered registers
for every computed value.

Author: xwest
"""

import logging
from typing import Dict, List, Optional
from dataclasses import dataclass, field

from ..config import CompilerConfig, DEFAULT_CONFIG
from ..lexer.tokens import TokenType
from ..parser.ast_nodes import *

logger = logging.getLogger(__name__)


INT_OPCODES = {"+": "add", "-": "sub", "*": "mul", "/": "sdiv"}
FLOAT_OPCODES = {"+": "fadd", "-": "fsub", "*": "fmul", "/": "fdiv"}


@dataclass
class IRGenContext:
    """Per-function lowering state."""
    function_name: str
    var_types: Dict[str, str] = field(default_factory=dict)  # variable -> IR storage type
    next_register: int = 1
    lines: List[str] = field(default_factory=list)

    def new_register(self) -> str:
        reg = f"%{self.next_register}"
        self.next_register += 1
        return reg

    def emit(self, line: str):
        self.lines.append("  " + line)


def sanitize_name(name: str) -> str:
    """Drop every whitespace character from a variable name."""
    return "".join(ch for ch in name if not ch.isspace())


def format_float(text: str) -> str:
    """C `%e` rendering with six fractional digits: "2.5" -> "2.500000e+00"."""
    return f"{float(text):.6e}"


class IRGenerator:
    """
    Generates textual IR from a parsed AST.

    Only Function items are lowered; top-level statements outside a
    function produce no IR. Inside a block, VarDecl and Return are the
    only statements that emit anything.
    """

    def __init__(self, config: Optional[CompilerConfig] = None):
        """Initialize the IR generator."""
        self.config = config or DEFAULT_CONFIG
        self.context: Optional[IRGenContext] = None

    def generate(self, root: Optional[ASTNode]) -> str:
        """
        Lower a whole program.

        Args:
            root: Program node (None lowers to empty text)

        Returns:
            IR text, one function after another, each ending in "}\\n"
        """
        if root is None:
            return ""

        output: List[str] = []
        for item in root.children:
            if isinstance(item, Function):
                output.extend(self._generate_function(item))

        logger.debug("generated %d lines of IR", len(output))
        return "".join(line + "\n" for line in output)

    def _generate_function(self, func: Function) -> List[str]:
        self.context = IRGenContext(func.name)
        header = f"define i32 @{func.name}() {{"

        body = func.body
        if body is None:
            return [header, "  ret i32 0", "}"]

        for stmt in body.statements:
            if isinstance(stmt, VarDecl):
                self._generate_var_decl(stmt)
            elif isinstance(stmt, Return):
                self._generate_return(stmt)

        return [header] + self.context.lines + ["}"]

    # ========================================================================
    # Statements
    # ========================================================================

    def _generate_var_decl(self, decl: VarDecl):
        ir_type = self.config.storage_type(decl.declared_type)
        self.context.var_types[decl.name] = ir_type
        slot = sanitize_name(decl.name)

        self.context.emit(f"%{slot} = alloca {ir_type}")

        if decl.initializer is not None:
            value = self._generate_expression(decl.initializer)
            self.context.emit(f"store {ir_type} {value}, {ir_type}* %{slot}")

    def _generate_return(self, ret: Return):
        if ret.expression is None:
            self.context.emit("ret i32 0")
            return

        value = self._generate_expression(ret.expression)
        # The terminator is always i32, whatever the expression type
        self.context.emit(f"ret i32 {value}")

    # ========================================================================
    # Expressions
    # ========================================================================

    def _generate_expression(self, expr: ASTNode) -> str:
        """Emit the instructions for `expr` and return the operand naming its value."""
        if isinstance(expr, Literal):
            return self._generate_literal(expr)

        if isinstance(expr, Identifier):
            ir_type = self._type_of(expr.name)
            reg = self.context.new_register()
            self.context.emit(f"{reg} = load {ir_type}, {ir_type}* %{sanitize_name(expr.name)}")
            return reg

        if isinstance(expr, BinaryOp):
            return self._generate_binary_op(expr)

        if isinstance(expr, Call):
            args = [self._generate_expression(arg) for arg in expr.args]
            reg = self.context.new_register()
            arg_list = ", ".join(f"i32 {arg}" for arg in args)
            self.context.emit(f"{reg} = call i32 @{expr.name}({arg_list})")
            return reg

        return "0"

    def _generate_literal(self, literal: Literal) -> str:
        text = literal.text

        if literal.literal_type == TokenType.CHAR and len(text) >= 3:
            return str(ord(text[1:-1][0]))
        if "." in text:
            return format_float(text)
        if len(text) == 1 and not text.isdigit():
            return str(ord(text))
        return text

    def _generate_binary_op(self, expr: BinaryOp) -> str:
        left = self._generate_expression(expr.left)
        right = self._generate_expression(expr.right)

        ir_type = self._binary_type(expr)
        opcodes = FLOAT_OPCODES if ir_type == "float" else INT_OPCODES
        opcode = opcodes.get(expr.operator, opcodes["+"])

        reg = self.context.new_register()
        self.context.emit(f"{reg} = {opcode} {ir_type} {left}, {right}")
        return reg

    def _binary_type(self, expr: BinaryOp) -> str:
        """Numeric type of a binary op, taken from the first operand that tells."""
        if isinstance(expr.left, Identifier):
            return self._type_of(expr.left.name)
        if isinstance(expr.right, Identifier):
            return self._type_of(expr.right.name)
        if isinstance(expr.left, Literal) and "." in expr.left.text:
            return "float"
        return self.config.default_storage_type

    def _type_of(self, name: str) -> str:
        return self.context.var_types.get(name, self.config.default_storage_type)


def lower(root: Optional[ASTNode], config: Optional[CompilerConfig] = None) -> str:
    """Lower `root` to IR text."""
    return IRGenerator(config).generate(root)
