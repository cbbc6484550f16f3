"""
Tests for the display clamp
"""
import pytest

from calculator import clamp_display


@pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf"), None])
def test_failure_values_show_zero(value):
    assert clamp_display(value) == "0"


def test_zero_and_negative_zero():
    assert clamp_display(0.0) == "0"
    assert clamp_display(-0.0) == "0"


@pytest.mark.parametrize("value, expected", [
    (81.0, "81"),
    (-2.0, "-2"),
    (0.5, "0.5"),
    (0.00001, "0.00001"),
    (1.5e-7, "1.5e-7"),
    (123456789.123, "123456789.123"),
])
def test_natural_form(value, expected):
    assert clamp_display(value) == expected


@pytest.mark.parametrize("value, expected", [
    (1 / 3, "0.333333333333"),
    (2 / 3, "0.666666666667"),
    (0.1 + 0.2, "0.3"),
    (98765432109.87654, "98765432109.9"),
])
def test_wide_results_use_twelve_digits(value, expected):
    assert clamp_display(value) == expected


@pytest.mark.parametrize("value, expected", [
    (1e12, "1e+12"),
    (1234567890123.0, "1.23456789e+12"),
    (-1234567890123.0, "-1.23456789e+12"),
    (1e21, "1e+21"),
    (1e-10, "1e-10"),
    (2.5e-12, "2.5e-12"),
])
def test_extreme_magnitudes_use_ten_digits(value, expected):
    assert clamp_display(value) == expected


def test_integers_accepted():
    assert clamp_display(7) == "7"


@pytest.mark.parametrize("value, expected", [
    # exact ties round away from zero
    (1234567890500.0, "1.234567891e+12"),
    (-1234567890500.0, "-1.234567891e+12"),
    (-99999999999.25, "-99999999999.3"),
    (99999999999.25, "99999999999.3"),
])
def test_ties_round_half_up(value, expected):
    assert clamp_display(value) == expected


def test_rounding_carries_into_next_power():
    assert clamp_display(999999999999.75) == "1e+12"
    assert clamp_display(9999999999950000.0) == "1e+16"
