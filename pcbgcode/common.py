"""Shared constants, phases and installation profile handling."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import IntEnum
from pathlib import Path
from typing import Iterable

from pcbgcode.strings import remove_last_dir


class Units(IntEnum):
    MICRONS = 0
    MILLIMETERS = 1
    MILS = 2
    INCHES = 3
    INTERNALS = 4


class Side(IntEnum):
    TOP = 0
    BOTTOM = 1
    MILL = 2
    TEXT = 3
    ALL = 4


class Phase(IntEnum):
    INVALID = 0
    TOP_OUT_GEN = 1
    TOP_OUT_WRITE = 2
    TOP_FILL_GEN = 3
    TOP_FILL_WRITE = 4
    BOTTOM_OUT_GEN = 5
    BOTTOM_OUT_WRITE = 6
    BOTTOM_FILL_GEN = 7
    BOTTOM_FILL_WRITE = 8
    TOP_DRILL = 9
    BOTTOM_DRILL = 10
    MILL = 11
    TEXT = 12
    LAST_PHASE = 13


PHASE_NAMES = (
    "invalid",
    "Gen_Top_Outlines",
    "Write_Top_Outlines",
    "Gen_Top_Fill",
    "Write_Top_Fill",
    "Gen_Bottom_Outlines",
    "Write_Bottom_Outlines",
    "Gen_Bottom_Fill",
    "Write_Bottom_Fill",
    "Top_Drills",
    "Bottom_Drills",
    "Milling",
    "Text",
    "Finished!",
)

COORD_TOLERANCE = 0.0001
OUTLINES_SIGNAL_NAME = "_OUTLINES_"
TOP_LAYER = 1
BOTTOM_LAYER = 16
MILL_LAYER = 46
TEXT_LAYER = 46
ROUND_FACTOR = 1000
BORDER_SIZE = 0.001

IS_SETUP_FILE_NAME = "pcb_gcode_is_setup"
NONE = "NONE"
_MARKER = "source/pcb-gcode.h"
_MAX_ULP_PATHS = 10


@dataclass(frozen=True)
class Profile:
    """The machine profile chosen at setup."""

    file_name: str = NONE
    author: str = NONE
    description: str = NONE


def phase_name(phase: int) -> str:
    """Human-readable name of a phase."""
    return PHASE_NAMES[Phase(phase)]


def read_profile(path: str | Path) -> Profile:
    """Read the current profile from the install directory ``path``."""
    setup_file = Path(path) / IS_SETUP_FILE_NAME
    if not setup_file.is_file():
        return Profile()
    lines = setup_file.read_text().splitlines()
    fields = (lines + ["", "", ""])[:3]
    return Profile(*fields)


def write_profile(path: str | Path, profile_fields: str) -> Profile:
    """Store a tab-separated ``file<TAB>author<TAB>description`` profile."""
    fields = (profile_fields.split("\t") + ["", "", ""])[:3]
    profile = Profile(*fields)
    setup_file = Path(path) / IS_SETUP_FILE_NAME
    setup_file.write_text(
        f"{profile.file_name}\n{profile.author}\n{profile.description}\n"
    )
    return profile


def program_is_setup(path: str | Path) -> bool:
    """True once a profile has been written into ``path``."""
    return read_profile(path).description != NONE


def _has_marker(directory: str) -> bool:
    return os.path.exists(directory + "/" + _MARKER)


def find_install_path(board_dir: str, ulp_paths: Iterable[str] = ()) -> str:
    """Find the directory holding the program's files.

    Walks up from ``board_dir``, then tries the user-language-program
    paths in order. Raises FileNotFoundError when nothing matches.
    """
    path = str(board_dir)
    last_path = path
    while path:
        path = remove_last_dir(path)
        if _has_marker(path):
            return path
        if path == last_path:
            break
        last_path = path

    for index, candidate in enumerate(ulp_paths):
        if not candidate or index >= _MAX_ULP_PATHS:
            break
        if _has_marker(candidate):
            return candidate

    raise FileNotFoundError(
        "cannot find the installation directory; add it to the "
        "User Language Programs directories"
    )