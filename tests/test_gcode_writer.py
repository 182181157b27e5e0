import io
from dataclasses import replace

import pytest

from pcbgcode.common import Phase, Side
from pcbgcode.gcode_writer import LINE_NUMBER_INCREMENT, GcodeWriter
from pcbgcode.settings import GcodeOptions, PcbDefaults, Settings


def make(side=Side.TOP, **option_changes):
    defaults_changes = option_changes.pop("defaults", {})
    settings = Settings(
        options=replace(GcodeOptions(), **option_changes),
        defaults=replace(PcbDefaults(), **defaults_changes),
    )
    return GcodeWriter(settings, side=side)


def test_out_returns_old_line_number_and_counts_lines():
    w = make()
    assert w.out("G90\n") == 0
    assert w.out("a\nb\n") == LINE_NUMBER_INCREMENT
    assert w.line_number == 3 * LINE_NUMBER_INCREMENT
    assert w.text == "G90\na\nb\n"


def test_out_without_trailing_newline():
    w = make()
    w.out("a\nb")
    assert w.text == "a\nb"


def test_out_skips_empty_lines():
    w = make()
    w.out("")
    w.out("\n\n")
    assert w.text == ""
    assert w.line_number == 0


def test_line_numbers_are_prefixed():
    w = make(use_line_numbers=True)
    w.out("G90\nG20\n")
    assert w.text == "N00000 G90\nN00010 G20\n"


def test_eol_counts_a_line():
    w = make()
    w.eol()
    assert w.text == "\n"
    assert w.line_number == LINE_NUMBER_INCREMENT


def test_rapid_z_is_written_once():
    w = make()
    w.rz(0.5)
    w.rz(0.5)
    assert w.text == "G00 Z0.5000  \n"
    assert w.cur_z == 0.5


def test_rxy_skips_same_position():
    w = make()
    w.rxy(1.0, 2.0)
    first = w.text
    w.rxy(1.0, 2.0)
    assert w.text == first
    assert first.startswith("G00 X")
    assert (w.cur_x, w.cur_y) == (1.0, 2.0)


def test_xy_compact_writes_only_changed_axis():
    w = make(compact_gcode=True)
    w.xy(1.0, 2.0)
    w.xy(3.0, 2.0)
    lines = w.text.splitlines()
    assert len(lines) == 2
    assert lines[0].startswith("X") and "Y" in lines[0]
    assert lines[1].startswith("X") and "Y" not in lines[1]


def test_xy_not_compact_writes_both_axes():
    w = make(compact_gcode=False)
    w.xy(1.0, 2.0)
    w.xy(3.0, 2.0)
    lines = w.text.splitlines()
    assert all("X" in line and "Y" in line for line in lines)
    assert len(lines) == 2


def test_feed_moves_update_position():
    w = make()
    w.fxyz(1.0, 2.0, -0.1)
    w.fx(1.0)
    w.fy(2.0)
    w.fz(-0.1)
    assert len(w.text.splitlines()) == 1
    assert w.text.startswith("G01 X")


def test_rate_moves_always_written():
    w = make()
    w.fzr(-0.1, 10.0)
    w.fzr(-0.1, 10.0)
    w.fxyr(1.0, 1.0, 20.0)
    w.fxyr(1.0, 1.0, 20.0)
    lines = w.text.splitlines()
    assert len(lines) == 4
    assert all("F" in line for line in lines)


def test_comment():
    w = make()
    w.comment("")
    w.comment("hello")
    assert w.text == "(hello)\n"


def test_begin_and_end_gcode():
    w = make()
    w.begin_gcode()
    assert w.text.startswith("(Inch Mode)\nG20\n(Absolute Coordinates)\nG90\n")
    assert "M03\n" in w.text
    w.end_gcode()
    assert w.text.endswith("M05\nM02\n")
    assert w.cur_z == w.settings.machine.default_z_high


def test_user_code_off_writes_nothing():
    w = make(user_gcode=False)
    w.kind_begin(Phase.TOP_OUT_WRITE)
    w.tool_change_begin()
    w.tool_changed()
    w.tool_change_end()
    w.file_postamble(Phase.TOP_DRILL)
    assert w.text == ""


def test_kind_begin_and_end_order():
    w = make(side=Side.TOP, user_gcode=True)
    w.kind_begin(Phase.TOP_OUT_WRITE)
    assert w.text == "(Outline Begin)\n(Top outline Begin)\n"
    w2 = make(side=Side.BOTTOM, user_gcode=True)
    w2.kind_end(Phase.BOTTOM_DRILL)
    assert w2.text == "(Bottom Drill End)\n(End of all Drill Files)\n"


def test_kind_begin_rejects_unknown_phase():
    w = make(user_gcode=True)
    with pytest.raises(ValueError):
        w.kind_begin(Phase.TEXT)


def test_tool_change_user_codes():
    w = make(side=Side.TOP, user_gcode=True)
    w.tool_change_begin()
    w.tool_change_end()
    assert w.text == (
        "(Tool Change Begin)\n(Top Tool Change Begin)\n"
        "(Top Tool Changed End)\n(Tool Change End)\n"
    )


def test_preamble_and_postamble_with_user_code():
    w = make(side=Side.TOP, user_gcode=True)
    w.file_preamble(Phase.MILL, "prog", "board.brd", "profile", timestamp="now")
    assert "(Current profile is profile)\n" in w.text
    assert "(This file generated now)\n" in w.text
    assert w.text.endswith("(MILL Begin)\n(Top MILL Begin)\n")
    w.file_postamble(Phase.MILL)
    assert w.text.endswith("(Top MILL End)\n(MILL End)\n(End of every top file)\n(End of every file)\n")


def test_heading_without_flags_is_empty():
    w = make(
        nc_file_comment_from_board=False,
        nc_file_comment_date=False,
        nc_file_comment_machine_settings=False,
        nc_file_comment_pcb_defaults_settings=False,
        debug_flag=False,
    )
    w.file_heading("prog", "board.brd", "profile", 0.01, "now")
    assert w.text == ""


def test_heading_settings_comments():
    w = make()
    w.file_heading("prog", "", "p", 0.01, "now")
    assert "(Settings from pcb-machine.h)\n" in w.text
    assert "(Settings from pcb-defaults.h)\n" in w.text
    assert "(Generated bottom outlines, bottom drill, )\n" in w.text
    assert all(line.startswith("(") and line.endswith(")") for line in w.text.splitlines())


def test_drill_canned_cycle():
    w = make(defaults={"simple_drill_code": False})
    w.drill_first_hole(1.0, 2.0, -0.032)
    w.drill_hole(3.0, 4.0, -0.032)
    lines = w.text.splitlines()
    assert len(lines) == 2
    assert all(line.startswith("G82 ") for line in lines)
    assert "R" in lines[0] and "P" in lines[0]


def test_drill_simple_code():
    w = make(defaults={"simple_drill_code": True})
    w.drill_hole(1.0, 2.0, -0.032)
    lines = w.text.splitlines()
    assert [line[:3] for line in lines] == ["G00", "G01", "G00"]
    assert w.cur_z == w.settings.machine.default_z_up


def test_text_requires_string_stream():
    class Sink(io.TextIOBase):
        def write(self, s):
            return len(s)

    w = GcodeWriter(stream=Sink())
    w.out("G90\n")
    with pytest.raises(TypeError):
        _ = w.text
    assert w.line_number == LINE_NUMBER_INCREMENT