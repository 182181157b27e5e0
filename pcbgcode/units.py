"""Unit conversion, drill size parsing and wire-gauge drill tables."""

from __future__ import annotations

from bisect import bisect_right

from pcbgcode.common import Units
from pcbgcode.strings import _strtod

MM_PER_INCH = 25.4
MICRONS_PER_MM = 1000
MILS_PER_INCH = 1000
EPSILON = 0.0001
DEFAULT_SCALAR = 320000

# Layout editor versions at which the internal resolution changed, with the
# number of internal units per millimetre from that version on.
_SCALAR_HISTORY = ((0, 10000), (6, 320000))

NUM_WIRE_DRILL_SIZES = 80

DRILL_SIZES_INCHES = (
    0.000,
    0.228, 0.221, 0.213, 0.209, 0.206,
    0.204, 0.201, 0.199, 0.196, 0.194,
    0.191, 0.189, 0.185, 0.182, 0.180,
    0.177, 0.173, 0.169, 0.166, 0.161,
    0.159, 0.157, 0.154, 0.152, 0.149,
    0.147, 0.144, 0.141, 0.136, 0.129,
    0.120, 0.116, 0.113, 0.111, 0.110,
    0.106, 0.104, 0.101, 0.099, 0.098,
    0.096, 0.094, 0.089, 0.086, 0.082,
    0.081, 0.079, 0.076, 0.073, 0.070,
    0.067, 0.064, 0.059, 0.055, 0.052,
    0.046, 0.043, 0.042, 0.041, 0.040,
    0.039, 0.038, 0.037, 0.036, 0.035,
    0.033, 0.032, 0.031, 0.029, 0.028,
    0.026, 0.025, 0.024, 0.023, 0.021,
    0.020, 0.018, 0.016, 0.015, 0.014,
)

DRILL_SIZES_MM = (
    0.000,
    5.791, 5.613, 5.410, 5.309, 5.220,
    5.182, 5.105, 5.055, 4.978, 4.915,
    4.851, 4.801, 4.699, 4.623, 4.572,
    4.496, 4.394, 4.305, 4.216, 4.089,
    4.039, 3.988, 3.912, 3.861, 3.797,
    3.734, 3.658, 3.569, 3.454, 3.264,
    3.048, 2.946, 2.870, 2.819, 2.794,
    2.705, 2.642, 2.578, 2.527, 2.489,
    2.438, 2.375, 2.261, 2.184, 2.083,
    2.057, 1.994, 1.930, 1.854, 1.778,
    1.702, 1.613, 1.511, 1.397, 1.321,
    1.181, 1.092, 1.067, 1.041, 1.016,
    0.991, 0.965, 0.940, 0.914, 0.889,
    0.838, 0.813, 0.787, 0.742, 0.711,
    0.660, 0.635, 0.610, 0.572, 0.533,
    0.508, 0.457, 0.406, 0.368, 0.343,
)


def internal_scalar(eagle_version: int) -> int:
    """Internal units per millimetre for a given layout editor version."""
    versions = [version for version, _ in _SCALAR_HISTORY]
    position = bisect_right(versions, eagle_version) - 1
    if position < 0:
        raise ValueError(f"unknown layout editor version {eagle_version}")
    return _SCALAR_HISTORY[position][1]


def _internals_per(units: int, scalar: int) -> float:
    unit = Units(units)
    if unit is Units.MICRONS:
        return scalar // 1000
    if unit is Units.MILLIMETERS:
        return scalar
    if unit is Units.MILS:
        return int(round(MM_PER_INCH * (scalar // 1000)))
    if unit is Units.INCHES:
        return int(round(MM_PER_INCH * scalar))
    return 1


def get_units(s: str) -> str:
    """The two-letter unit suffix of ``s``, or ``#`` for wire-gauge numbers."""
    units = s[-2:]
    if units[1:2] == "#":
        return "#"
    return units


def convert(value: float, old_units: int, new_units: int, scalar: int = DEFAULT_SCALAR) -> float:
    """Convert ``value`` between units; invalid units raise ValueError."""
    return value * _internals_per(old_units, scalar) / _internals_per(new_units, scalar)


def drill_size_inches(num: float) -> float:
    """Diameter in inches of wire-gauge drill ``num`` (0 to 80)."""
    index = int(num)
    if not 0 <= index <= NUM_WIRE_DRILL_SIZES:
        raise ValueError(f"no wire-gauge drill number {num}")
    return DRILL_SIZES_INCHES[index]


def drill_size_mm(num: float) -> float:
    """Diameter in millimetres of wire-gauge drill ``num`` (0 to 80)."""
    index = int(num)
    if not 0 <= index <= NUM_WIRE_DRILL_SIZES:
        raise ValueError(f"no wire-gauge drill number {num}")
    return DRILL_SIZES_MM[index]


def drill_number(inches: float) -> int:
    """Scan the wire-gauge table down from the highest number."""
    i = NUM_WIRE_DRILL_SIZES
    while i > 0 and DRILL_SIZES_INCHES[i] > inches:
        i -= 1
    return i


def conv_to_units(s: str, scalar: int = DEFAULT_SCALAR) -> int:
    """Convert a size such as ``0.032in``, ``62ml``, ``0.43mm`` or ``60#`` to internal units.

    Without a suffix, values up to 0.25 are inches, up to 6 millimetres,
    and larger values wire-gauge drill numbers.
    """
    s = s.lower()
    units = get_units(s)
    num = _strtod(s)

    if units == "mm":
        val = convert(num, Units.MILLIMETERS, Units.INTERNALS, scalar)
    elif units == "in":
        val = convert(num, Units.INCHES, Units.INTERNALS, scalar)
    elif units == "ml":
        val = convert(num, Units.MILS, Units.INTERNALS, scalar)
    elif units == "mc":
        val = num
    elif units == "#":
        val = convert(drill_size_inches(num), Units.INCHES, Units.INTERNALS, scalar)
    elif num <= 0.25:
        val = convert(num, Units.INCHES, Units.INTERNALS, scalar)
    elif num <= 6:
        val = convert(num, Units.MILLIMETERS, Units.INTERNALS, scalar)
    else:
        val = convert(drill_size_inches(num), Units.INCHES, Units.INTERNALS, scalar)
    return int(round(val))


def in_range(val: float, min_val: float, max_val: float) -> bool:
    """True when ``min_val <= val <= max_val``."""
    return min_val <= val <= max_val


def close(a: float, b: float, epsilon: float = EPSILON) -> bool:
    """True when ``a`` and ``b`` differ by less than ``epsilon``."""
    return abs(a - b) < epsilon


def close2(xa: float, xb: float, ya: float, yb: float, epsilon: float = EPSILON) -> bool:
    """True when both coordinate pairs are close."""
    return close(xa, xb, epsilon) and close(ya, yb, epsilon)


def close3(
    xa: float, xb: float, ya: float, yb: float, za: float, zb: float, epsilon: float = EPSILON
) -> bool:
    """True when all three coordinate pairs are close."""
    return close2(xa, xb, ya, yb, epsilon) and close(za, zb, epsilon)