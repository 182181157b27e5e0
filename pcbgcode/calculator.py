"""A basic calculator with memory and degree/radian modes."""

from __future__ import annotations

import math
from enum import IntEnum

from pcbgcode.strings import _strtod

UNARY_BEGIN = 0x80
ANGLE_IN = 0x40
ANGLE_OUT = 0x20


class Operation(IntEnum):
    INVALID = 0
    CLEAR = 1
    ENTER = 2
    ADD = 3
    SUBTRACT = 4
    DIVIDE = 5
    MULTIPLY = 6
    RADIAN = 7
    DEGREE = 8
    MEMORY_PLUS = 0x80
    MEMORY_STORE = 0x81
    MEMORY_RECALL = 0x82
    MEMORY_CLEAR = 0x83
    SINE = 0xC0
    COSINE = 0xC1
    TANGENT = 0xC2
    ARC_SINE = 0xC3
    ARC_COSINE = 0xC4
    ARC_TANGENT = 0xC5
    INV_SINE = 0xA0
    INV_COSINE = 0xA1
    INV_TANGENT = 0xA2


class AngleMode(IntEnum):
    INVALID = 0
    RADIAN = 1
    DEGREE = 2


_FUNCTIONS = {
    Operation.SINE: math.sin,
    Operation.COSINE: math.cos,
    Operation.TANGENT: math.tan,
    Operation.ARC_SINE: math.asin,
    Operation.ARC_COSINE: math.acos,
    Operation.ARC_TANGENT: math.atan,
}


def format_number(n: float) -> str:
    """Format a number with ``%f``."""
    return "%f" % n


def is_unary(op: int) -> bool:
    """True for operations that take a single operand."""
    return bool(op & UNARY_BEGIN)


class Calculator:
    """Accumulator, entry line, result display and memory; starts in degrees."""

    def __init__(self) -> None:
        self.angle_mode = AngleMode.INVALID
        self.mode_str = ""
        self.memory = 0
        self.accum = 0.0
        self.result = "0"
        self.entry = "0"
        self.entering = False
        self.set_angle_mode(AngleMode.DEGREE)

    def _set_result(self, r: float) -> str:
        self.result = format_number(r)
        return self.result

    def enter(self, text: str) -> None:
        """Type ``text``: starts a new entry or extends the current one."""
        if not self.entering:
            self.entry = text
            self.entering = True
        else:
            self.entry += text

    def set_angle_mode(self, mode: int) -> float:
        """Switch angle mode, converting the shown value between units."""
        mode = AngleMode(mode)
        result = _strtod(self.result)
        num = self.entry if self.entry != "" else self.result
        if self.angle_mode is AngleMode.DEGREE and mode is AngleMode.RADIAN:
            result = _strtod(num) / 180 * math.pi
        elif self.angle_mode is AngleMode.RADIAN and mode is AngleMode.DEGREE:
            result = _strtod(num) / math.pi * 180
        self.angle_mode = mode
        if mode is AngleMode.RADIAN:
            self.mode_str = "rad"
        elif mode is AngleMode.DEGREE:
            self.mode_str = "deg"
        self.entry = format_number(result)
        self._set_result(result)
        return result

    def rad(self, n: float) -> float:
        """``n`` in radians, taking the angle mode into account."""
        return n if self.angle_mode is AngleMode.RADIAN else n / 180 * math.pi

    def unrad(self, n: float) -> float:
        """Radians ``n`` expressed in the current angle mode."""
        return n if self.angle_mode is AngleMode.RADIAN else n / math.pi * 180

    def _store(self, n: float) -> None:
        # Memory holds whole numbers only.
        self.memory = int(n)

    def calc(self, a: str, operation: int) -> float:
        """Apply ``operation`` with operand ``a``; returns the accumulator.

        Raises ValueError for operations the calculator does not perform.
        """
        op = Operation(operation)
        self.entering = False
        ra = _strtod(a)
        if self.entry == "" and self.result != "" and is_unary(op):
            ra = _strtod(self.result)
        if op & ANGLE_IN:
            ra = self.rad(ra)

        no_clear = False
        if op is Operation.ENTER:
            self.accum = ra
            self._set_result(self.accum)
        elif op is Operation.ADD:
            self.accum += ra
        elif op is Operation.SUBTRACT:
            self.accum -= ra
        elif op is Operation.DIVIDE:
            self.accum /= ra
        elif op is Operation.MULTIPLY:
            self.accum *= ra
        elif op is Operation.DEGREE:
            self.accum = self.set_angle_mode(AngleMode.DEGREE)
        elif op is Operation.RADIAN:
            self.accum = self.set_angle_mode(AngleMode.RADIAN)
        elif op is Operation.MEMORY_PLUS:
            self._store(ra + self.memory)
            self.accum = ra
        elif op is Operation.MEMORY_STORE:
            self._store(ra)
            self.accum = ra
        elif op is Operation.MEMORY_RECALL:
            self.entry = format_number(self.memory)
            no_clear = True
            self.accum = ra
        elif op is Operation.MEMORY_CLEAR:
            self.memory = 0
            self.accum = ra
        elif op in _FUNCTIONS:
            self.accum = _FUNCTIONS[op](ra)
        elif op is Operation.CLEAR:
            self.accum = 0.0
        else:
            raise ValueError(f"invalid operation {op.name}")

        if op & ANGLE_OUT:
            self.accum = self.unrad(self.accum)
        self._set_result(self.accum)
        if not no_clear:
            self.entry = ""
        return self.accum