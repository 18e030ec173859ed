"""
32-bit signed integer arithmetic shared by the interpreter, the constant
folder and the result extractor.

Author: xwest
"""

import re
from typing import Dict, Optional


# IR opcode / source operator -> canonical operator
OPERATORS: Dict[str, str] = {
    "+": "+", "-": "-", "*": "*", "/": "/",
    "add": "+", "sub": "-", "mul": "*", "sdiv": "/",
}

# Named functions the result extractor and the interpreter know how to compute
FUNCTION_TABLE: Dict[str, str] = {
    "add": "+",
    "sub": "-",
    "mul": "*",
    "div": "/",
    "divide": "/",
}

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def wrap_int(value: int, bits: int = 32) -> int:
    """Wrap an arbitrary Python int to a two's complement integer of `bits` width."""
    value &= (1 << bits) - 1
    if value >= 1 << (bits - 1):
        value -= 1 << bits
    return value


def wrap_i32(value: int) -> int:
    """Wrap an arbitrary Python int to two's complement i32."""
    return wrap_int(value, 32)


def trunc_div(lhs: int, rhs: int) -> int:
    """Integer division rounding toward zero, like C."""
    quotient = abs(lhs) // abs(rhs)
    return quotient if (lhs < 0) == (rhs < 0) else -quotient


def apply_int_op(op: str, lhs: int, rhs: int) -> int:
    """
    Apply an arithmetic operator or IR opcode on i32 values.

    Raises:
        ZeroDivisionError: on division by zero; callers decide what that means
        KeyError: for an unknown operator
    """
    canonical = OPERATORS[op]
    if canonical == "+":
        result = lhs + rhs
    elif canonical == "-":
        result = lhs - rhs
    elif canonical == "*":
        result = lhs * rhs
    else:
        if rhs == 0:
            raise ZeroDivisionError(f"{lhs} / 0")
        result = trunc_div(lhs, rhs)
    return wrap_i32(result)


def parse_leading_int(text: str) -> Optional[int]:
    """
    Parse the leading base-10 integer of `text` the way C's stoi does:
    "42" -> 42, "2.5" -> 2, "'a'" -> None.
    """
    match = _LEADING_INT.match(text)
    if match is None:
        return None
    return wrap_i32(int(match.group(1)))
