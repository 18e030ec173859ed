"""
LLVM Backend for MiniC.

Hands generated IR text to LLVM through llvmlite: verification, target
assembly (what `llc` would print) and in-process execution of `main`
with MCJIT.

The IR must be the unoptimized output of the IR generator. Folded lines
(`%3 = add i32 42`) have a single operand and LLVM rejects them.

Author: xwest
"""

import re
import logging
from ctypes import CFUNCTYPE, c_int32
from typing import List, Optional, Set

import llvmlite.binding as llvm
import llvmlite.ir as ll

from ..arith import FUNCTION_TABLE
from .errors import BackendError

logger = logging.getLogger(__name__)


CALLEE = re.compile(r"call i32 @(\w+)\(")
DEFINED = re.compile(r"^define [^@]*@(\w+)\(", re.MULTILINE)

_initialized = False


def _initialize_llvm():
    global _initialized
    if not _initialized:
        llvm.initialize_native_target()
        llvm.initialize_native_asmprinter()
        _initialized = True


class LLVMBackend:
    """
    LLVM backend for MiniC.

    Calls to the arithmetic helpers (add, sub, mul, div, divide) that the
    IR does not define itself are linked against generated definitions.
    Helper division by zero returns 0, like the reference interpreter.
    """

    def __init__(self, target_triple: Optional[str] = None, optimization_level: int = 0):
        """
        Initialize the LLVM backend.

        Args:
            target_triple: Target triple (e.g., "x86_64-pc-linux-gnu")
            optimization_level: Code generation optimization level (0-3)
        """
        _initialize_llvm()

        self.target_triple = target_triple or llvm.get_default_triple()
        self.optimization_level = optimization_level

    # ========================================================================
    # Module construction
    # ========================================================================

    def prepare(self, ir_text: str) -> str:
        """Return `ir_text` with helper definitions appended where needed."""
        called = self._called_functions(ir_text)
        defined = set(DEFINED.findall(ir_text))

        # Only the arithmetic helpers are callable, even when the IR defines others
        unknown = [name for name in called if name not in FUNCTION_TABLE]
        if unknown:
            raise BackendError(f"call to unsupported function '{unknown[0]}'", ir_text)

        missing = [name for name in called if name not in defined]
        if not missing:
            return ir_text

        helpers = ll.Module(name="minic_helpers")
        definitions = [str(self._build_helper(helpers, name)) for name in missing]
        logger.debug("linking helper functions: %s", ", ".join(missing))
        return ir_text + "\n" + "\n".join(definitions) + "\n"

    def parse(self, ir_text: str) -> "llvm.ModuleRef":
        """Parse and verify IR text into an LLVM module."""
        source = self.prepare(ir_text)
        try:
            module = llvm.parse_assembly(source)
            module.verify()
        except RuntimeError as e:
            raise BackendError(str(e).strip(), source) from e

        module.triple = self.target_triple
        return module

    def verify(self, ir_text: str) -> bool:
        """True if LLVM accepts the IR; raises BackendError otherwise."""
        self.parse(ir_text)
        return True

    def _called_functions(self, ir_text: str) -> List[str]:
        seen: Set[str] = set()
        names = []
        for name in CALLEE.findall(ir_text):
            if name not in seen:
                seen.add(name)
                names.append(name)
        return names

    def _build_helper(self, module: "ll.Module", name: str) -> "ll.Function":
        """Define `i32 @name(i32, i32)` for one of the arithmetic helpers."""
        i32 = ll.IntType(32)
        func = ll.Function(module, ll.FunctionType(i32, [i32, i32]), name=name)
        lhs, rhs = func.args
        builder = ll.IRBuilder(func.append_basic_block(name="entry"))

        operator = FUNCTION_TABLE[name]
        if operator == "+":
            result = builder.add(lhs, rhs)
        elif operator == "-":
            result = builder.sub(lhs, rhs)
        elif operator == "*":
            result = builder.mul(lhs, rhs)
        else:
            zero = ll.Constant(i32, 0)
            is_zero = builder.icmp_signed("==", rhs, zero)
            divisor = builder.select(is_zero, ll.Constant(i32, 1), rhs)
            result = builder.select(is_zero, zero, builder.sdiv(lhs, divisor))

        builder.ret(result)
        return func

    # ========================================================================
    # Code generation
    # ========================================================================

    def _target_machine(self) -> "llvm.TargetMachine":
        try:
            target = llvm.Target.from_triple(self.target_triple)
        except RuntimeError as e:
            raise BackendError(str(e).strip()) from e
        return target.create_target_machine(opt=self.optimization_level, codemodel="default")

    def emit_assembly(self, ir_text: str) -> str:
        """Target assembly for the IR."""
        module = self.parse(ir_text)
        return self._target_machine().emit_assembly(module)

    def emit_object(self, ir_text: str) -> bytes:
        """Object file bytes for the IR."""
        module = self.parse(ir_text)
        return self._target_machine().emit_object(module)

    def run_main(self, ir_text: str) -> int:
        """
        JIT-compile the IR and call `main`.

        Returns:
            The i32 that main returns

        Raises:
            BackendError: if the IR is rejected or has no main
        """
        if "main" not in DEFINED.findall(ir_text):
            raise BackendError("no definition of 'main'", ir_text)

        module = self.parse(ir_text)
        engine = llvm.create_mcjit_compiler(llvm.parse_assembly(""), self._target_machine())
        engine.add_module(module)
        engine.finalize_object()
        engine.run_static_constructors()

        address = engine.get_function_address("main")
        main = CFUNCTYPE(c_int32)(address)
        result = main()
        logger.debug("native main returned %d", result)
        return result


def create_backend(target_triple: Optional[str] = None) -> LLVMBackend:
    """Create an LLVM backend for the host (or the given triple)."""
    return LLVMBackend(target_triple)
