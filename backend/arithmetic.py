import math
import operator
from enum import Enum

import numpy as np


class CalcError(Exception):
    pass


class DivideByZero(CalcError):
    pass


class NonFinite(CalcError):
    pass


class Operator(str, Enum):
    """The four binary operators a calculator key can select."""

    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"
    DIVIDE = "/"

    @property
    def symbol(self) -> str:
        return _SYMBOLS[self]

    @classmethod
    def from_key(cls, key: str) -> "Operator":
        """
        Accept the ASCII operator characters plus the printed keypad glyphs
        (x, ×, ÷, −). Raises ValueError for anything else.
        """
        if isinstance(key, cls):
            return key
        key = _ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            raise ValueError(f"Unsupported operator: {key!r}")


_SYMBOLS = {
    Operator.ADD: "+",
    Operator.SUBTRACT: "−",
    Operator.MULTIPLY: "×",
    Operator.DIVIDE: "÷",
}

_ALIASES = {
    "x": "*",
    "X": "*",
    "×": "*",
    "÷": "/",
    "−": "-",
}

_OPS = {
    Operator.ADD: operator.add,
    Operator.SUBTRACT: operator.sub,
    Operator.MULTIPLY: operator.mul,
    Operator.DIVIDE: operator.truediv,
}


def apply(a: float, op: Operator, b: float) -> float:
    """
    Apply one binary operator. Returns a plain float.

    Raises DivideByZero when dividing by zero and NonFinite when an operand
    or the result is infinite/NaN (e.g. 1e308 * 10).
    """
    op = Operator.from_key(op)
    if not (math.isfinite(a) and math.isfinite(b)):
        raise NonFinite(f"Operand is not finite: {a!r} {op.value} {b!r}")
    if op is Operator.DIVIDE and b == 0:
        raise DivideByZero("Division by zero")

    # float64 scalars honour errstate, so overflow surfaces as FloatingPointError
    with np.errstate(over="raise", invalid="raise"):
        try:
            value = _OPS[op](np.float64(a), np.float64(b))
        except FloatingPointError as e:
            raise NonFinite(str(e))

    if not np.isfinite(value):
        raise NonFinite(f"Result is not finite: {a!r} {op.value} {b!r}")
    return float(value)
