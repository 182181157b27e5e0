"""Machine, board, output and G-code format settings."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Mapping

from pcbgcode.common import Side, Units


@dataclass(frozen=True)
class GcodeFormats:
    """printf-style templates for every piece of G-code written."""

    filenames_8_characters: bool = False
    comment_begin: str = "("
    comment_end: str = ")"
    eol: str = "\n"
    param: str = "P"
    coord_format: str = "%-7.4f "
    feed_format: str = "F%-5.0f "
    rapid: str = "G00 "
    feed: str = "G01 "
    arc_cw: str = "G02 "
    arc_ccw: str = "G03 "
    operator_pause: str = "M06 "
    drill_code: str = "G82 "
    tool_code: str = "T%02d "
    tool_mm_format: str = "%1.3fmm"
    tool_inch_format: str = "%1.4fin"

    @property
    def ij_format(self) -> str:
        return "I" + self.coord_format + "J" + self.coord_format

    # Modes
    @property
    def inch_mode(self) -> str:
        return "G20" + self.eol

    @property
    def inch_mode_comment(self) -> str:
        return self.comment_begin + "Inch Mode" + self.comment_end + self.eol

    @property
    def metric_mode(self) -> str:
        return "G21" + self.eol

    @property
    def metric_mode_comment(self) -> str:
        return self.comment_begin + "Metric Mode" + self.comment_end + self.eol

    @property
    def mil_mode(self) -> str:
        return "M02 (Please setup MIL_MODE in gcode-defaults.h)" + self.eol

    @property
    def micron_mode(self) -> str:
        return "M02 (Please setup MICRON_MODE in gcode-defaults.h)" + self.eol

    @property
    def absolute_mode(self) -> str:
        return (
            self.comment_begin + "Absolute Coordinates" + self.comment_end
            + self.eol + "G90" + self.eol
        )

    # G and M codes
    @property
    def dwell(self) -> str:
        return "G04 " + self.param + "%f" + self.eol

    @property
    def spindle_on(self) -> str:
        return "M03" + self.eol + self.dwell

    @property
    def spindle_off(self) -> str:
        return "M05" + self.eol

    @property
    def end_program(self) -> str:
        return "M02" + self.eol

    # Coordinates
    @property
    def move_x(self) -> str:
        return "X" + self.coord_format

    @property
    def move_y(self) -> str:
        return "Y" + self.coord_format

    @property
    def move_xy(self) -> str:
        return "X" + self.coord_format + "Y" + self.coord_format

    @property
    def move_z(self) -> str:
        return "Z" + self.coord_format

    @property
    def move_xyz(self) -> str:
        return self.move_xy + self.move_z

    # Rapids
    @property
    def rapid_move_x(self) -> str:
        return self.rapid + self.move_x

    @property
    def rapid_move_y(self) -> str:
        return self.rapid + self.move_y

    @property
    def rapid_move_xy(self) -> str:
        return self.rapid + self.move_xy

    @property
    def rapid_move_xy_home(self) -> str:
        return self.rapid + "X0 Y0"

    @property
    def rapid_move_z(self) -> str:
        return self.rapid + self.move_z

    @property
    def rapid_move_xyz(self) -> str:
        return self.rapid + self.move_xyz

    # Feeds
    @property
    def feed_move_x(self) -> str:
        return self.feed + self.move_x

    @property
    def feed_move_y(self) -> str:
        return self.feed + self.move_y

    @property
    def feed_move_xy(self) -> str:
        return self.feed + self.move_xy

    @property
    def feed_move_xy_with_rate(self) -> str:
        return self.feed + self.move_xy + self.feed_format

    @property
    def feed_move_z(self) -> str:
        return self.feed + self.move_z

    @property
    def feed_move_z_with_rate(self) -> str:
        return self.feed + self.move_z + self.feed_format

    @property
    def feed_move_xyz(self) -> str:
        return self.feed + self.move_xyz

    # Drilling
    @property
    def release_plane(self) -> str:
        return "R" + self.coord_format

    @property
    def dwell_time(self) -> str:
        return self.param + "%f"

    @property
    def drill_first_hole(self) -> str:
        return (
            self.drill_code + self.move_xyz + self.feed_format
            + self.release_plane + self.dwell_time + self.eol
        )

    @property
    def drill_hole(self) -> str:
        return self.drill_code + self.move_xy + self.eol

    # Tool change
    @property
    def tool_change(self) -> str:
        return self.operator_pause + self.tool_code + " ; " + self.coord_format + self.eol

    @property
    def tool_change_table_header(self) -> str:
        return (
            self.comment_begin
            + " Tool|       Size       |  Min Sub |  Max Sub |   Count "
            + self.comment_end + self.eol
        )

    def tool_change_table_row(
        self,
        tool_number: int,
        size_mm: float,
        size_inch: float,
        min_drill: float,
        max_drill: float,
        count: int,
    ) -> str:
        """One row of the tool table written as a comment."""
        template = (
            self.comment_begin + " "
            + self.tool_code + "| " + self.tool_mm_format + " "
            + self.tool_inch_format + " | " + self.tool_inch_format + " | "
            + self.tool_inch_format + " | "
            + "   %4d" + " "
            + self.comment_end + self.eol
        )
        return template % (tool_number, size_mm, size_inch, min_drill, max_drill, count)

    # Circles and arcs
    @property
    def circle_top(self) -> str:
        return self.arc_cw + self.move_xy + self.ij_format + self.eol

    @property
    def circle_bottom(self) -> str:
        return self.arc_ccw + self.move_xy + self.ij_format + self.eol


@dataclass(frozen=True)
class PcbDefaults:
    """What to generate from a board and how."""

    single_pass: bool = False
    iso_min: float = 0.001
    iso_max: float = 0.020
    iso_step: float = 0.005
    generate_top_outlines: bool = False
    generate_top_drill: bool = False
    generate_top_fill: bool = False
    generate_bottom_outlines: bool = True
    generate_bottom_drill: bool = True
    generate_bottom_fill: bool = False
    mirror_bottom: bool = False
    simple_drill_code: bool = False
    generate_milling: bool = False
    generate_text: bool = False
    spot_drill: bool = True
    spot_drill_depth: float = -0.011
    do_tool_change_with_zero_step: bool = True
    flip_board_in_y: bool = False
    output_units: Units = Units.INCHES


@dataclass(frozen=True)
class GcodeOptions:
    """General output options and file naming templates."""

    show_progress: bool = False
    restore_menu_file: str = "pcb-gcode-menu.scr"
    nc_file_comment_from_board: bool = True
    nc_file_comment_date: bool = True
    nc_file_comment_machine_settings: bool = True
    nc_file_comment_pcb_defaults_settings: bool = True
    user_gcode: bool = False
    debug_flag: bool = True
    compact_gcode: bool = False
    use_line_numbers: bool = False
    line_number_format: str = "N%05d "
    show_preview: bool = True
    filename_base: str = "$BOARD_PATH/$BOARD_NAME"
    filename_top_etch_file: str = ".$SIDE.$FILE.$EXT"
    filename_top_drill_file: str = ".$SIDE.$FILE.$EXT"
    filename_top_mill_file: str = ".$SIDE.$FILE.$EXT"
    filename_top_text_file: str = ".$SIDE.$FILE.$EXT"
    filename_top_fill_file: str = ""
    filename_bot_etch_file: str = ".$SIDE.$FILE.$EXT"
    filename_bot_drill_file: str = ".$SIDE.$FILE.$EXT"
    filename_bot_mill_file: str = ".$SIDE.$FILE.$EXT"
    filename_bot_text_file: str = ".$SIDE.$FILE.$EXT"
    filename_bot_fill_file: str = ""
    etch_file_name: str = "etch"
    drill_file_name: str = "drill"
    mill_file_name: str = "mill"
    text_file_name: str = "text"
    top_file_name: str = "top"
    bot_file_name: str = "bot"
    default_extension: str = "tap"
    default_drill_file: str = ""


@dataclass(frozen=True)
class MachineSettings:
    """Heights, depths, feeds and positions of the machine."""

    default_z_high: float = 0.5
    default_z_up: float = 0.1
    default_z_down: float = -0.007
    drill_depth: float = -0.032
    drill_dwell: float = 1.0
    spindle_on_time: float = 3.0
    milling_depth: float = -0.010
    text_depth: float = -0.005
    tool_change_pos_x: float = 0.5
    tool_change_pos_y: float = 0.6
    tool_change_pos_z: float = 1.0
    feed_rate: float = 20.0
    feed_rate_z: float = 10.0
    default_width: float = 0.007
    x_offset: float = 0.0
    y_offset: float = 0.0
    x_home: float = 0.0
    y_home: float = 0.0
    epsilon: float = 0.0001


USER_GCODE_KINDS = (
    "file_begin",
    "file_end",
    "outline_begin",
    "outline_between",
    "outline_end",
    "drill_begin",
    "drill_end",
    "fill_begin",
    "fill_end",
    "mill_begin",
    "mill_end",
    "tool_change_begin",
    "tool_changed",
    "tool_zero_begin",
    "tool_zero_end",
    "tool_change_end",
)


def _default_user_codes() -> Mapping[str, Mapping[Side, str]]:
    table = {
        "file_begin": ("(Beginning of every file)\n",
                       "(Beginning of every bottom file)\n",
                       "(Beginning of every top file)\n"),
        "file_end": ("(End of every file)\n",
                     "(End of every bottom file)\n",
                     "(End of every top file)\n"),
        "outline_begin": ("(Outline Begin)\n",
                          "(Bottom outline Begin)\n",
                          "(Top outline Begin)\n"),
        "outline_between": ("(Between Passes)\n",
                            "(Bottom between passes)\n",
                            "(Top between passes)\n"),
        "outline_end": ("(Outline End)\n",
                        "(Bottom outline End)\n",
                        "(Top outline End)\n"),
        "drill_begin": ("(Beginning of All Drill files)\n",
                        "(Bottom Drill Begin)\n",
                        "(Top Drill Begin)\n"),
        "drill_end": ("(End of all Drill Files)\n",
                      "(Bottom Drill End)\n",
                      "(Top Drill End)\n"),
        "fill_begin": ("(Fill Begin)\n", "(Bottom Fill Begin)\n", "(Top Fill Begin)\n"),
        "fill_end": ("(Fill End)\n", "(Bottom Fill End)\n", "(Top Fill End)\n"),
        "mill_begin": ("(MILL Begin)\n", "(Bottom MILL Begin)\n", "(Top MILL Begin)\n"),
        "mill_end": ("(MILL End)\n", "(Bottom MILL End)\n", "(Top MILL End)\n"),
        "tool_change_begin": ("(Tool Change Begin)\n",
                              "(Bottom Tool Change Begin)\n",
                              "(Top Tool Change Begin)\n"),
        "tool_changed": ("(Tool changed)\n",
                         "(Bottom Tool changed)\n",
                         "(Top Tool changed)\n"),
        "tool_zero_begin": ("(Tool zero begin)\n",
                            "(Bottom Tool zero begin)\n",
                            "(Top Tool zero begin)\n"),
        "tool_zero_end": ("(Tool zero end)\n",
                          "(Bottom Tool zero end)\n",
                          "(Top Tool zero end)\n"),
        "tool_change_end": ("(Tool Change End)\n",
                            "(Bottom Tool Change End)\n",
                            "(Top Tool Changed End)\n"),
    }
    return MappingProxyType({
        kind: MappingProxyType({Side.ALL: every, Side.BOTTOM: bottom, Side.TOP: top})
        for kind, (every, bottom, top) in table.items()
    })


@dataclass(frozen=True)
class UserGcode:
    """User-supplied G-code inserted at fixed points, per side."""

    codes: Mapping[str, Mapping[Side, str]] = field(
        default_factory=_default_user_codes, hash=False
    )

    def text(self, kind: str, side: int) -> str:
        """Code of ``kind`` for ``side``; empty when none is defined.

        Raises ValueError for an unknown kind.
        """
        if kind not in USER_GCODE_KINDS:
            raise ValueError(f"unknown user G-code kind {kind!r}")
        return self.codes.get(kind, {}).get(Side(side), "")


@dataclass(frozen=True)
class Settings:
    """Every setting group together."""

    formats: GcodeFormats = field(default_factory=GcodeFormats)
    defaults: PcbDefaults = field(default_factory=PcbDefaults)
    options: GcodeOptions = field(default_factory=GcodeOptions)
    machine: MachineSettings = field(default_factory=MachineSettings)
    user_gcode: UserGcode = field(default_factory=UserGcode)


def release_settings() -> Settings:
    """The settings shipped for normal use."""
    return Settings()


def safe_settings() -> Settings:
    """The conservative fallback settings."""
    return Settings(
        defaults=replace(
            PcbDefaults(),
            simple_drill_code=True,
            do_tool_change_with_zero_step=False,
        ),
        options=replace(
            GcodeOptions(),
            nc_file_comment_machine_settings=False,
            nc_file_comment_pcb_defaults_settings=False,
            debug_flag=False,
        ),
        machine=replace(
            MachineSettings(),
            tool_change_pos_x=0.0,
            tool_change_pos_y=0.0,
            tool_change_pos_z=0.0,
        ),
    )