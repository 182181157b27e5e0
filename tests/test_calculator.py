import math

import pytest

from pcbgcode.calculator import AngleMode, Calculator, Operation, format_number, is_unary


def test_starts_in_degrees():
    c = Calculator()
    assert c.angle_mode is AngleMode.DEGREE
    assert c.mode_str == "deg"
    assert c.result == format_number(0.0)


def test_enter_builds_entry_and_enter_sets_result():
    c = Calculator()
    c.enter("1")
    c.enter("2")
    assert c.entry == "12"
    assert c.calc(c.entry, Operation.ENTER) == 12.0
    assert c.result == format_number(12.0)
    assert c.entry == ""


def test_add():
    c = Calculator()
    c.calc("3", Operation.ENTER)
    assert c.calc("4", Operation.ADD) == 7.0


def test_sine_in_degrees():
    c = Calculator()
    assert c.calc("90", Operation.SINE) == pytest.approx(1.0)


def test_radian_mode():
    c = Calculator()
    c.calc("0", Operation.RADIAN)
    assert c.angle_mode is AngleMode.RADIAN
    assert c.mode_str == "rad"


def test_angle_mode_round_trip():
    c = Calculator()
    c.enter("180")
    assert c.set_angle_mode(AngleMode.RADIAN) == pytest.approx(math.pi)
    assert c.entry == format_number(math.pi)
    assert c.set_angle_mode(AngleMode.DEGREE) == pytest.approx(180, rel=1e-5)


@pytest.mark.parametrize("x", [0.0, 30.0, -45.5, 720.0])
def test_rad_unrad_inverse(x):
    c = Calculator()
    assert c.unrad(c.rad(x)) == pytest.approx(x)


def test_memory_store_and_recall():
    c = Calculator()
    c.calc("5", Operation.MEMORY_STORE)
    c.calc("", Operation.MEMORY_RECALL)
    assert c.entry == format_number(5)
    c.calc("", Operation.MEMORY_CLEAR)
    assert c.memory == 0


def test_memory_keeps_whole_numbers():
    c = Calculator()
    c.calc("2.5", Operation.MEMORY_STORE)
    assert c.memory == 2


def test_unary_uses_result_when_entry_empty():
    c = Calculator()
    c.calc("9", Operation.ENTER)
    c.calc("", Operation.MEMORY_STORE)
    assert c.memory == 9


def test_clear():
    c = Calculator()
    c.calc("9", Operation.ENTER)
    assert c.calc("", Operation.CLEAR) == 0


def test_invalid_operation_raises():
    c = Calculator()
    with pytest.raises(ValueError):
        c.calc("1", Operation.INV_SINE)
    with pytest.raises(ValueError):
        c.calc("1", Operation.INVALID)


def test_divide_by_zero():
    c = Calculator()
    c.calc("1", Operation.ENTER)
    with pytest.raises(ZeroDivisionError):
        c.calc("0", Operation.DIVIDE)


def test_is_unary():
    assert is_unary(Operation.MEMORY_PLUS)
    assert is_unary(Operation.SINE)
    assert not is_unary(Operation.ADD)