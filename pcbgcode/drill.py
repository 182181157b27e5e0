"""Drill rack files and drill substitution."""

from __future__ import annotations

import os
from collections import defaultdict
from collections.abc import Iterable
from pathlib import Path

from pcbgcode.common import Units
from pcbgcode.library import GcodeError
from pcbgcode.strings import elided_path, lookup, ltrim, real_to_string
from pcbgcode.units import DEFAULT_SCALAR, conv_to_units, convert, in_range

TOOL_FLD = "tool"
DRILL_FLD = "drill_size"
MIN_FLD = "minimum"
MAX_FLD = "maximum"
LENGTH_FLD = "length"
DRILL_SEP = "\t"


class DrillRack:
    """The drills in stock, and which of them were used for which holes."""

    def __init__(self, rows: Iterable[str] = (), name: str = "?", scalar: int = DEFAULT_SCALAR) -> None:
        self.rows = list(rows)
        self.name = name
        self.scalar = scalar
        self.sub_counts: defaultdict[int, int] = defaultdict(int)
        self.mins: defaultdict[int, float] = defaultdict(float)
        self.maxs: defaultdict[int, float] = defaultdict(float)
        self.did_subs = False
        self.last_match = -1
        self.messages: list[str] = []

    @property
    def has_rack(self) -> bool:
        return bool(self.rows)

    def _inch(self, n: float) -> float:
        return convert(n, Units.INTERNALS, Units.INCHES, self.scalar)

    def _mm(self, n: float) -> float:
        return convert(n, Units.INTERNALS, Units.MILLIMETERS, self.scalar)

    def _field(self, key: str, name: str) -> int:
        return conv_to_units(lookup(self.rows, key, name, DRILL_SEP), self.scalar)

    def _message(self, msg: str) -> None:
        self.messages.append("Rack file: " + elided_path(self.name, 30) + ":\n" + msg)

    def drill_for(self, req_size: int) -> int:
        """Size of a stocked drill for a hole of ``req_size``, or ``req_size`` itself."""
        if not self.has_rack:
            return req_size
        self.last_match = -1
        for i in range(len(self.rows)):
            key = "T%02d" % i
            drill_size = self._field(key, DRILL_FLD)
            minimum = self._field(key, MIN_FLD)
            maximum = self._field(key, MAX_FLD)
            if in_range(req_size, minimum, maximum):
                req_inch = self._inch(req_size)
                if self.mins[i] == 0:
                    self.mins[i] = req_inch
                self.mins[i] = min(self.mins[i], req_inch)
                self.maxs[i] = max(self.maxs[i], req_inch)
                self.sub_counts[i] += 1
                self.did_subs = True
                self.last_match = i
                return drill_size
        self._message(
            "No drill sub for " + real_to_string(self._inch(req_size)) + '" '
            + real_to_string(self._mm(req_size)) + "mm"
        )
        return req_size

    def tool_number_for(self, req_size: int, default_tool: int) -> int:
        """Tool number of the drill chosen for ``req_size``, or ``default_tool``."""
        if not self.has_rack:
            return default_tool
        self.drill_for(req_size)
        if self.last_match == -1:
            self.last_match = default_tool
        return self.last_match


def read_rack_file(path: str | Path) -> DrillRack:
    """Load a rack file, skipping ``#`` comment lines.

    Raises GcodeError when the file defines no drills.
    """
    lines = Path(path).read_text().splitlines()
    rows = [line for line in lines if not ltrim(line).startswith("#")]
    if not rows:
        raise GcodeError(f"There are no drills defined in {path}")
    return DrillRack(rows, name=str(path))


def _exists(path: str) -> bool:
    return bool(path) and os.path.isfile(path)


def find_rack_file(board_file: str, default_drill_file: str, install_path: str) -> str | None:
    """Choose the rack file for a board, or None when none is configured."""
    board_rack = os.path.splitext(board_file)[0] + ".drl"
    fallback = install_path + "/settings/default.drl"
    for candidate in (board_rack, default_drill_file, fallback):
        if _exists(candidate):
            return candidate
    if default_drill_file:
        raise GcodeError(
            "Cannot open the default drill rack file",
            f"{default_drill_file}; also tried {fallback}. Use setup to select "
            "a file, or clear the setting if you don't want to use one.",
        )
    return None