import dataclasses

import pytest

from pcbgcode.common import Side, Units
from pcbgcode.settings import (
    USER_GCODE_KINDS,
    GcodeFormats,
    UserGcode,
    release_settings,
    safe_settings,
)
from pcbgcode.strings import fmt


@pytest.fixture
def formats():
    return GcodeFormats()


def test_release_machine_tool_change_position():
    machine = release_settings().machine
    assert (machine.tool_change_pos_x, machine.tool_change_pos_y, machine.tool_change_pos_z) == (
        0.5,
        0.6,
        1.0,
    )
    assert machine.drill_depth == -0.032


def test_safe_machine_tool_change_position_is_origin():
    machine = safe_settings().machine
    assert (machine.tool_change_pos_x, machine.tool_change_pos_y, machine.tool_change_pos_z) == (
        0.0,
        0.0,
        0.0,
    )
    assert machine.default_z_high == release_settings().machine.default_z_high


def test_drill_code_choices_differ_between_profiles():
    assert safe_settings().defaults.simple_drill_code is True
    assert release_settings().defaults.simple_drill_code is False
    assert safe_settings().defaults.do_tool_change_with_zero_step is False
    assert release_settings().defaults.do_tool_change_with_zero_step is True


def test_output_units_are_inches():
    assert release_settings().defaults.output_units == Units.INCHES
    assert safe_settings().defaults.output_units == Units.INCHES


def test_options_debug_and_comments():
    assert safe_settings().options.debug_flag is False
    assert release_settings().options.debug_flag is True
    assert safe_settings().options.nc_file_comment_machine_settings is False
    assert release_settings().options.restore_menu_file == "pcb-gcode-menu.scr"
    assert release_settings().options.filename_base == "$BOARD_PATH/$BOARD_NAME"


def test_settings_are_frozen():
    settings = release_settings()
    with pytest.raises(dataclasses.FrozenInstanceError):
        settings.machine.feed_rate = 1.0
    assert settings.machine.feed_rate == 20.0


def test_user_gcode_text_per_side():
    user = UserGcode()
    assert user.text("file_begin", Side.ALL) == "(Beginning of every file)\n"
    assert user.text("file_begin", Side.TOP) == "(Beginning of every top file)\n"
    assert user.text("tool_change_end", Side.TOP) == "(Top Tool Changed End)\n"
    assert user.text("outline_between", Side.BOTTOM) == "(Bottom between passes)\n"


def test_user_gcode_missing_side_is_empty():
    assert UserGcode().text("mill_begin", Side.MILL) == ""


def test_user_gcode_unknown_kind_raises():
    with pytest.raises(ValueError):
        UserGcode().text("no_such_kind", Side.TOP)


@pytest.mark.parametrize("kind", USER_GCODE_KINDS)
def test_every_kind_has_all_top_and_bottom_comments(kind):
    user = UserGcode()
    for side in (Side.ALL, Side.TOP, Side.BOTTOM):
        text = user.text(kind, side)
        assert text.startswith("(") and text.endswith(")\n")


def test_rapid_and_feed_templates(formats):
    assert formats.rapid_move_xy == formats.rapid + formats.move_xy
    assert formats.rapid_move_xy.startswith("G00 ")
    assert formats.feed_move_z.startswith("G01 ")
    assert formats.rapid_move_xy_home == "G00 X0 Y0"


def test_drill_templates(formats):
    assert formats.drill_hole == formats.drill_code + formats.move_xy + formats.eol
    first = fmt(formats.drill_first_hole, 1.0, 2.0, -0.032, 10.0, 0.1, 1.0)
    assert first.startswith("G82 X")
    assert first.endswith(formats.eol)
    assert formats.drill_first_hole.count("%") == 6


def test_absolute_and_unit_modes(formats):
    assert formats.absolute_mode.endswith("G90" + formats.eol)
    assert formats.inch_mode == "G20" + formats.eol
    assert formats.metric_mode == "G21" + formats.eol
    assert formats.inch_mode_comment.startswith(formats.comment_begin)


def test_spindle_on_includes_dwell(formats):
    assert formats.spindle_on.endswith(formats.dwell)
    assert fmt(formats.spindle_on, 3.0).startswith("M03")


def test_changing_eol_propagates(formats):
    crlf = dataclasses.replace(formats, eol="\r\n")
    assert crlf.inch_mode.endswith("\r\n")
    assert crlf.circle_top.endswith("\r\n")
    assert crlf.spindle_off == "M05\r\n"


def test_tool_change_table_row(formats):
    row = formats.tool_change_table_row(1, 0.8, 0.0315, 0.03, 0.032, 5)
    assert row == "( T01 | 0.800mm 0.0315in | 0.0300in | 0.0320in |       5 )\n"


def test_tool_change_table_row_shape(formats):
    row = formats.tool_change_table_row(12, 1.0, 0.04, 0.039, 0.041, 3)
    assert row.startswith(formats.comment_begin + " T12 |")
    assert row.endswith(formats.comment_end + formats.eol)
    assert formats.tool_change_table_header.startswith(formats.comment_begin)


def test_circle_templates_differ_by_direction(formats):
    assert formats.circle_top.startswith("G02 ")
    assert formats.circle_bottom.startswith("G03 ")
    assert formats.circle_top[len("G02 "):] == formats.circle_bottom[len("G03 "):]