"""
Execution result extraction for MiniC IR.

This is not an executor. It recognizes a handful of textual shapes in the
IR and reports the integer they denote:

1. a literal return terminator: `ret i32 42`
2. a two-literal call of a known arithmetic function:
   `call i32 @add(i32 2, i32 3)`
3. a register return traced back through store/load, folded constants,
   integer binary ops and calls: `ret i32 %4`

Anything else is reported as an error string. Nothing here raises.

Author: xwest
"""

import re
import logging
from typing import List, Optional, Tuple
from dataclasses import dataclass

from ..arith import FUNCTION_TABLE, apply_int_op, parse_leading_int, wrap_i32, wrap_int

logger = logging.getLogger(__name__)


DIRECT_RETURN = re.compile(r"ret i32 (\d+)")
CALL_PATTERN = re.compile(r"call i32 @(\w+)\(i32 (\d+), i32 (\d+)\)")

# Line shapes understood by the return tracer
REGISTER_RETURN = re.compile(r"^\s*ret i32 (%\w+)\s*$")
DEFINITION = re.compile(r"^\s*(%\w+) = (.*?)\s*$")
LOAD_FORM = re.compile(r"^load i(\d+), i\d+\* (%\w+)$")
STORE_FORM = re.compile(r"^\s*store (i\d+) (\S+), i\d+\* (%\w+)\s*$")
FOLDED_FORM = re.compile(r"^add i32 (-?\d+)$")
BINARY_FORM = re.compile(r"^(add|sub|mul|sdiv) i(\d+) (\S+), (\S+)$")
CALL_FORM = re.compile(r"^call i32 @(\w+)\((.*)\)$")
CALL_ARG = re.compile(r"^i32 (\S+)$")


@dataclass
class ExtractionResult:
    """Outcome of extraction; `str()` is the user-facing line."""
    value: Optional[int] = None
    error: Optional[str] = None
    raw_value: Optional[str] = None  # literal text for a direct return

    @property
    def success(self) -> bool:
        return self.error is None

    def __str__(self) -> str:
        if self.error is not None:
            return f"Execution error: {self.error}"
        shown = self.raw_value if self.raw_value is not None else str(self.value)
        return f"Execution result: {shown}"


class ResultExtractor:
    """Pattern-matching result extractor."""

    def extract(self, ir_text: str) -> ExtractionResult:
        # 1. direct return anywhere in the text
        match = DIRECT_RETURN.search(ir_text)
        if match:
            logger.debug("direct return %s", match.group(1))
            return ExtractionResult(value=parse_leading_int(match.group(1)),
                                    raw_value=match.group(1))

        # 2. call of a known function with two literal arguments
        match = CALL_PATTERN.search(ir_text)
        if match:
            name, lhs, rhs = match.groups()
            logger.debug("call pattern @%s(%s, %s)", name, lhs, rhs)
            return self._dispatch_call(name, lhs, rhs)

        # 3. follow a register return back to constants
        value = ReturnTracer(ir_text).trace()
        if value is not None:
            logger.debug("traced register return to %d", value)
            return ExtractionResult(value=value)

        return ExtractionResult(error="no recognizable return.")

    def _dispatch_call(self, name: str, lhs: str, rhs: str) -> ExtractionResult:
        operator = FUNCTION_TABLE.get(name)
        if operator is None:
            return ExtractionResult(error=f"unsupported function '{name}'")
        try:
            return ExtractionResult(value=apply_int_op(operator, wrap_i32(int(lhs)), wrap_i32(int(rhs))))
        except ZeroDivisionError:
            return ExtractionResult(error="division by zero")


class ReturnTracer:
    """
    Resolves `ret i32 %N` to an integer by walking backwards through the
    lines of the enclosing function. Each lookup only considers lines
    above the one being resolved, so tracing always terminates.
    """

    def __init__(self, ir_text: str):
        self.lines: List[str] = ir_text.split("\n")
        self.function_start = 0

    def trace(self) -> Optional[int]:
        for index, line in enumerate(self.lines):
            if line.startswith("define"):
                self.function_start = index
            match = REGISTER_RETURN.match(line)
            if match:
                return self._resolve(match.group(1), index)
        return None

    def _resolve(self, operand: str, before: int) -> Optional[int]:
        """Integer value of a literal or register operand used on line `before`."""
        if not operand.startswith("%"):
            if re.fullmatch(r"-?\d+", operand) is None:
                return None
            return wrap_i32(int(operand))

        found = self._find_definition(operand, before)
        if found is None:
            return None
        index, body = found

        match = FOLDED_FORM.match(body)
        if match:
            return wrap_i32(int(match.group(1)))

        match = LOAD_FORM.match(body)
        if match:
            value = self._resolve_slot(match.group(2), index)
            return None if value is None else wrap_int(value, int(match.group(1)))

        match = BINARY_FORM.match(body)
        if match:
            opcode, bits, lhs, rhs = match.groups()
            return self._apply(opcode, [lhs, rhs], index, int(bits))

        match = CALL_FORM.match(body)
        if match:
            name, arg_text = match.groups()
            operator = FUNCTION_TABLE.get(name)
            args = [a.strip() for a in arg_text.split(",")] if arg_text.strip() else []
            if operator is None or len(args) != 2:
                return None
            operands = []
            for arg in args:
                arg_match = CALL_ARG.match(arg)
                if arg_match is None:
                    return None
                operands.append(arg_match.group(1))
            return self._apply(operator, operands, index)

        return None

    def _resolve_slot(self, slot: str, before: int) -> Optional[int]:
        """Value of the most recent store into `slot` above line `before`."""
        for index in range(before - 1, self.function_start - 1, -1):
            match = STORE_FORM.match(self.lines[index])
            if match and match.group(3) == slot:
                return self._resolve(match.group(2), index)
        return None

    def _find_definition(self, register: str, before: int) -> Optional[Tuple[int, str]]:
        for index in range(before - 1, self.function_start - 1, -1):
            match = DEFINITION.match(self.lines[index])
            if match and match.group(1) == register:
                return index, match.group(2)
        return None

    def _apply(self, operator: str, operands: List[str], index: int,
               bits: int = 32) -> Optional[int]:
        values = [self._resolve(operand, index) for operand in operands]
        if any(value is None for value in values):
            return None
        try:
            return wrap_int(apply_int_op(operator, values[0], values[1]), bits)
        except ZeroDivisionError:
            return None


def extract(ir_text: str) -> str:
    """Extract the execution result line from IR text."""
    return str(ResultExtractor().extract(ir_text))
