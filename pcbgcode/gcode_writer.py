"""Writes G-code text, skipping moves to the position the machine is already at."""

from __future__ import annotations

import io
import time
from typing import TextIO

from pcbgcode.common import Phase, Side
from pcbgcode.library import get_mode
from pcbgcode.settings import Settings
from pcbgcode.strings import elided_path, fmt
from pcbgcode.units import close

LINE_NUMBER_INCREMENT = 10
UNKNOWN_POSITION = -999.999

_OUTLINE_PHASES = (Phase.TOP_OUT_WRITE, Phase.BOTTOM_OUT_WRITE)
_DRILL_PHASES = (Phase.TOP_DRILL, Phase.BOTTOM_DRILL)
_FILL_PHASES = (Phase.TOP_FILL_WRITE, Phase.BOTTOM_FILL_WRITE)


def _kind_for(phase: int) -> str:
    if phase in _OUTLINE_PHASES:
        return "outline"
    if phase in _DRILL_PHASES:
        return "drill"
    if phase in _FILL_PHASES:
        return "fill"
    if phase == Phase.MILL:
        return "mill"
    raise ValueError(f"unknown phase {phase} for user G-code")


class GcodeWriter:
    """Writes G-code for one side of a board to a text stream."""

    def __init__(
        self,
        settings: Settings | None = None,
        side: int = Side.TOP,
        stream: TextIO | None = None,
    ) -> None:
        self.settings = settings if settings is not None else Settings()
        self.side = Side(side)
        self.stream: TextIO = stream if stream is not None else io.StringIO()
        self.line_number = 0
        self.cur_x = UNKNOWN_POSITION
        self.cur_y = UNKNOWN_POSITION
        self.cur_z = UNKNOWN_POSITION

    @property
    def text(self) -> str:
        """Everything written so far, when writing to an in-memory stream."""
        if isinstance(self.stream, io.StringIO):
            return self.stream.getvalue()
        raise TypeError("the output stream does not keep its text")

    # Basic output

    @property
    def _eol(self) -> str:
        return self.settings.formats.eol

    def _close(self, a: float, b: float) -> bool:
        return close(a, b, self.settings.machine.epsilon)

    def out(self, s: str) -> int:
        """Write ``s`` line by line; returns the line number before writing."""
        old_line_number = self.line_number
        options = self.settings.options
        lines = s.split("\n")
        last = len(lines) - 1
        for i, line in enumerate(lines):
            if not line or line == "EOL":
                continue
            if options.use_line_numbers:
                self.stream.write(options.line_number_format % self.line_number)
            self.stream.write(line)
            if i < last or s.endswith("\n"):
                self.stream.write(self._eol)
            self.line_number += LINE_NUMBER_INCREMENT
        return old_line_number

    def eol(self) -> None:
        """Write a line ending."""
        self.stream.write(self._eol)
        self.line_number += LINE_NUMBER_INCREMENT

    # Moves without a G word

    def xy(self, x: float, y: float) -> None:
        """Move in X and Y using the modal motion command."""
        formats = self.settings.formats
        x_same = self._close(x, self.cur_x)
        y_same = self._close(y, self.cur_y)
        if x_same and y_same:
            return
        if self.settings.options.compact_gcode:
            if not x_same and not y_same:
                self.out(fmt(formats.move_xy, x, y) + self._eol)
                self.cur_x, self.cur_y = x, y
                return
            if not x_same:
                self.out(fmt(formats.move_x, x) + self._eol)
                self.cur_x, self.cur_y = x, y
                return
            self.out(fmt(formats.move_y, y) + self._eol)
            self.cur_y = y
            return
        self.out(fmt(formats.move_xy, x, y) + self._eol)
        self.cur_x, self.cur_y = x, y

    # Feed moves

    def rate(self, f: float) -> None:
        """Write a feed rate word."""
        self.out(fmt(self.settings.formats.feed_format, f))

    def fx(self, x: float) -> None:
        if not self._close(x, self.cur_x):
            self.out(fmt(self.settings.formats.feed_move_x, x) + self._eol)
            self.cur_x = x

    def fy(self, y: float) -> None:
        if not self._close(y, self.cur_y):
            self.out(fmt(self.settings.formats.feed_move_y, y) + self._eol)
            self.cur_y = y

    def fz(self, z: float) -> None:
        if not self._close(z, self.cur_z):
            self.out(fmt(self.settings.formats.feed_move_z, z) + self._eol)
            self.cur_z = z

    def fzr(self, z: float, f: float) -> None:
        """Feed in Z at rate ``f``; always written, since it sets the rate."""
        self.out(fmt(self.settings.formats.feed_move_z_with_rate, z, f) + self._eol)
        self.cur_z = z

    def fxy(self, x: float, y: float) -> None:
        if not self._close(x, self.cur_x) or not self._close(y, self.cur_y):
            self.out(fmt(self.settings.formats.feed_move_xy, x, y) + self._eol)
            self.cur_x, self.cur_y = x, y

    def fxyr(self, x: float, y: float, f: float) -> None:
        """Feed in X and Y at rate ``f``; always written, since it sets the rate."""
        self.out(fmt(self.settings.formats.feed_move_xy_with_rate, x, y, f) + self._eol)

    def fxyz(self, x: float, y: float, z: float) -> None:
        if (
            not self._close(x, self.cur_x)
            or not self._close(y, self.cur_y)
            or not self._close(z, self.cur_z)
        ):
            self.out(fmt(self.settings.formats.feed_move_xyz, x, y, z) + self._eol)
            self.cur_x, self.cur_y, self.cur_z = x, y, z

    # Rapid moves

    def rx(self, x: float) -> None:
        if not self._close(x, self.cur_x):
            self.out(fmt(self.settings.formats.rapid_move_x, x) + self._eol)
            self.cur_x = x

    def ry(self, y: float) -> None:
        if not self._close(y, self.cur_y):
            self.out(fmt(self.settings.formats.rapid_move_y, y) + self._eol)
            self.cur_y = y

    def rz(self, z: float) -> None:
        if not self._close(z, self.cur_z):
            self.out(fmt(self.settings.formats.rapid_move_z, z) + self._eol)
            self.cur_z = z

    def rxy(self, x: float, y: float) -> None:
        if not self._close(x, self.cur_x) or not self._close(y, self.cur_y):
            self.out(fmt(self.settings.formats.rapid_move_xy, x, y) + self._eol)
            self.cur_x, self.cur_y = x, y

    def rxyz(self, x: float, y: float, z: float) -> None:
        if (
            not self._close(x, self.cur_x)
            or not self._close(y, self.cur_y)
            or not self._close(z, self.cur_z)
        ):
            self.out(fmt(self.settings.formats.rapid_move_xyz, x, y, z) + self._eol)
            self.cur_x, self.cur_y, self.cur_z = x, y, z

    # Comments and headers

    def comment(self, text: str) -> None:
        """Write ``text`` as a comment line; nothing for an empty string."""
        if text:
            formats = self.settings.formats
            self.out(formats.comment_begin + text + formats.comment_end + self._eol)

    def file_heading(
        self,
        program_name: str,
        board_name: str = "",
        profile_name: str = "NONE",
        width: float | None = None,
        timestamp: str | None = None,
    ) -> None:
        """Write the descriptive comments at the top of a file."""
        options = self.settings.options
        machine = self.settings.machine
        defaults = self.settings.defaults
        formats = self.settings.formats
        coord = formats.coord_format
        if width is None:
            width = machine.default_width

        if options.nc_file_comment_from_board:
            self.comment(elided_path(program_name, 30))
            if board_name:
                self.comment("This file generated from the board:")
                self.comment(elided_path(board_name, 30))

        if (
            options.nc_file_comment_from_board
            or options.nc_file_comment_date
            or options.nc_file_comment_machine_settings
            or options.nc_file_comment_pcb_defaults_settings
            or options.debug_flag
        ):
            self.comment("Current profile is " + elided_path(profile_name, 30))

        if options.nc_file_comment_date:
            stamp = timestamp if timestamp is not None else time.ctime()
            self.comment("This file generated " + stamp)

        if options.nc_file_comment_machine_settings:
            self.comment("Settings from pcb-machine.h")
            self.comment("  Tool Size")
            self.comment(fmt(coord, width))
            self.comment("Z Axis Settings")
            self.comment("  High     Up        Down     Drill")
            self.comment(
                "\t".join(
                    fmt(coord, value)
                    for value in (
                        machine.default_z_high,
                        machine.default_z_up,
                        machine.default_z_down,
                        machine.drill_depth,
                    )
                )
            )
            self.comment(fmt("spindle on time = %6.4f", machine.spindle_on_time))
            self.comment(fmt("milling depth = %6.4f", machine.milling_depth))
            self.comment(fmt("text depth = %6.4f", machine.text_depth))
            self.comment(
                fmt(
                    "tool change at " + coord + coord + coord,
                    machine.tool_change_pos_x,
                    machine.tool_change_pos_y,
                    machine.tool_change_pos_z,
                )
            )
            self.comment("feed rate xy = " + fmt(formats.feed_format, machine.feed_rate))
            self.comment("feed rate z  = " + fmt(formats.feed_format, machine.feed_rate_z))

        if options.nc_file_comment_pcb_defaults_settings:
            self.comment("Settings from pcb-defaults.h")
            self.comment(fmt("isolate min = %6.4f", defaults.iso_min))
            self.comment(fmt("isolate max = %6.4f", defaults.iso_max))
            self.comment(fmt("isolate step = %6.4f", defaults.iso_step))
            generated = "".join(
                label
                for enabled, label in (
                    (defaults.generate_top_outlines, "top outlines, "),
                    (defaults.generate_top_drill, "top drill, "),
                    (defaults.generate_top_fill, "top fill, "),
                    (defaults.generate_bottom_outlines, "bottom outlines, "),
                    (defaults.generate_bottom_drill, "bottom drill, "),
                    (defaults.generate_bottom_fill, "bottom fill"),
                )
                if enabled
            )
            self.comment("Generated " + generated)
            self.comment("Unit of measure: " + defaults.output_units.name.lower())

    def begin_gcode(self) -> None:
        """Write the unit mode, absolute mode, home move and spindle start."""
        formats = self.settings.formats
        machine = self.settings.machine
        self.out(
            get_mode(
                self.settings.defaults.output_units,
                formats,
                self.settings.options.nc_file_comment_pcb_defaults_settings,
            )
        )
        self.out(formats.absolute_mode)
        self.rxy(machine.x_home, machine.y_home)
        self.out(fmt(formats.spindle_on, machine.spindle_on_time))

    def end_gcode(self) -> None:
        """Raise the tool, stop the spindle and end the program."""
        formats = self.settings.formats
        self.rz(self.settings.machine.default_z_high)
        self.out(formats.spindle_off)
        self.out(formats.end_program)

    # User G-code

    def _user(self, kind: str, side: int) -> str:
        return self.settings.user_gcode.text(kind, side)

    def _user_pair(self, kind: str, all_first: bool) -> None:
        sides = (Side.ALL, self.side) if all_first else (self.side, Side.ALL)
        for side in sides:
            self.out(self._user(kind, side))

    def kind_begin(self, phase: int) -> None:
        """User code at the start of an outline, drill, fill or mill file."""
        if not self.settings.options.user_gcode:
            return
        self._user_pair(_kind_for(phase) + "_begin", all_first=True)

    def between_outline_passes(self) -> None:
        if self.settings.options.user_gcode:
            self._user_pair("outline_between", all_first=True)

    def kind_end(self, phase: int) -> None:
        """User code at the end of an outline, drill, fill or mill file."""
        if not self.settings.options.user_gcode:
            return
        self._user_pair(_kind_for(phase) + "_end", all_first=False)

    def tool_change_begin(self) -> None:
        if self.settings.options.user_gcode:
            self._user_pair("tool_change_begin", all_first=True)

    def tool_changed(self) -> None:
        if self.settings.options.user_gcode:
            self._user_pair("tool_changed", all_first=False)

    def tool_zero_begin(self) -> None:
        if self.settings.options.user_gcode:
            self._user_pair("tool_zero_begin", all_first=True)

    def tool_zero_end(self) -> None:
        if self.settings.options.user_gcode:
            self._user_pair("tool_zero_end", all_first=False)

    def tool_change_end(self) -> None:
        if self.settings.options.user_gcode:
            self._user_pair("tool_change_end", all_first=False)

    def file_preamble(
        self,
        phase: int,
        program_name: str,
        board_name: str = "",
        profile_name: str = "NONE",
        width: float | None = None,
        timestamp: str | None = None,
    ) -> None:
        """Heading comments followed by the user's file and kind codes."""
        self.file_heading(program_name, board_name, profile_name, width, timestamp)
        if self.settings.options.user_gcode:
            self._user_pair("file_begin", all_first=True)
            self.kind_begin(phase)

    def file_postamble(self, phase: int) -> None:
        """The user's kind and file closing codes."""
        if self.settings.options.user_gcode:
            self.kind_end(phase)
            self._user_pair("file_end", all_first=False)

    # Drilling

    def _simple_drill(self, x: float, y: float, depth: float) -> None:
        machine = self.settings.machine
        self.rxy(x, y)
        self.fzr(depth, machine.feed_rate_z)
        self.rz(machine.default_z_up)

    def drill_first_hole(self, x: float, y: float, depth: float) -> None:
        """Drill the first hole, setting up the canned cycle when it is used."""
        if self.settings.defaults.simple_drill_code:
            self._simple_drill(x, y, depth)
            return
        machine = self.settings.machine
        self.out(
            self.settings.formats.drill_first_hole
            % (x, y, depth, machine.feed_rate_z, machine.default_z_up, machine.drill_dwell)
        )

    def drill_hole(self, x: float, y: float, depth: float) -> None:
        """Drill a further hole."""
        if self.settings.defaults.simple_drill_code:
            self._simple_drill(x, y, depth)
            return
        self.out(fmt(self.settings.formats.drill_hole, x, y))