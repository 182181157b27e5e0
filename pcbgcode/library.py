"""Output-unit scaling, machine mode selection and small system helpers."""

from __future__ import annotations

import glob
import re

from pcbgcode.common import Side, Units
from pcbgcode.settings import GcodeFormats
from pcbgcode.units import DEFAULT_SCALAR, convert

OS_INVALID = 0
OS_UNKNOWN = 1
OS_MACOSX = 2
OS_LINUX = 3
OS_WINDOWS = 4

_OUTPUT_UNITS = (Units.MICRONS, Units.MILLIMETERS, Units.MILS, Units.INCHES)
_INT_PREFIX = re.compile(r"\s*[+-]?\d+")


class GcodeError(Exception):
    """A problem that stops G-code generation."""

    def __init__(self, message: str, details: str = "") -> None:
        super().__init__(f"{message}: {details}" if details else message)
        self.message = message
        self.details = details


def to_output_units(n: float, output_units: int, scalar: int = DEFAULT_SCALAR) -> float:
    """Convert the internal measure ``n`` to the chosen output unit.

    Any unit other than microns, millimetres, mils or inches gives inches.
    """
    try:
        unit = Units(output_units)
    except ValueError:
        unit = Units.INCHES
    if unit not in _OUTPUT_UNITS:
        unit = Units.INCHES
    return convert(n, Units.INTERNALS, unit, scalar)


def get_mode(output_units: int, formats: GcodeFormats, with_comment: bool) -> str:
    """The command that sets the machine to the chosen unit of measure."""
    try:
        unit = Units(output_units)
    except ValueError:
        unit = None
    if unit is Units.MICRONS:
        return formats.micron_mode
    if unit is Units.MILLIMETERS:
        prefix = formats.metric_mode_comment if with_comment else ""
        return prefix + formats.metric_mode
    if unit is Units.MILS:
        return formats.mil_mode
    if unit is Units.INCHES:
        prefix = formats.inch_mode_comment if with_comment else ""
        return prefix + formats.inch_mode
    return "M02 (Unknown mode in get_mode)"


def scale_x(
    x: float,
    side: int,
    output_units: int,
    x_offset: float = 0.0,
    flip_in_y: bool = False,
    mirror_bottom: bool = False,
) -> float:
    """X in output units; negated on the bottom unless flipped in Y or mirrored."""
    scaled = to_output_units(x, output_units) + x_offset
    if Side(side) is Side.BOTTOM and not flip_in_y and not mirror_bottom:
        scaled = -scaled
    return scaled


def scale_y(
    y: float,
    side: int,
    output_units: int,
    y_offset: float = 0.0,
    flip_in_y: bool = False,
    mirror_bottom: bool = False,
) -> float:
    """Y in output units; negated on the bottom when flipped in Y and not mirrored."""
    scaled = to_output_units(y, output_units) + y_offset
    if Side(side) is Side.BOTTOM and flip_in_y and not mirror_bottom:
        scaled = -scaled
    return scaled


def my_strtol(s: str) -> int:
    """Leading integer of ``s`` after skipping leading zeros; 0 when none."""
    match = _INT_PREFIX.match(s.lstrip("0"))
    return int(match.group()) if match else 0


def file_exists(pattern: str) -> bool:
    """True when the glob ``pattern`` matches at least one path."""
    return len(glob.glob(pattern)) > 0


def get_os() -> int:
    """Guess the operating system from well-known directories."""
    if file_exists("/Applications/*"):
        return OS_MACOSX
    if file_exists("/home/*"):
        return OS_LINUX
    return OS_WINDOWS