import math

import pytest

from dashboard.utils.numeric import coerce_float, round_half_up, safe_divide


@pytest.mark.parametrize(
    "raw, expected",
    [("12.5", 12.5), (" 7 ", 7.0), (3, 3.0), ("", None), ("  ", None), ("abc", None), (None, None), (math.nan, None), ("inf", None)],
)
def test_coerce_float(raw, expected):
    assert coerce_float(raw) == expected


def test_safe_divide_guards_zero_and_none():
    assert safe_divide(10, 4) == 2.5
    assert safe_divide(10, 0) is None
    assert safe_divide(None, 4) is None
    assert safe_divide("x", 4) is None


def test_round_half_up_differs_from_bankers_rounding():
    assert round(2.5) == 2
    assert round_half_up(2.5) == 3
    assert round_half_up(0.5) == 1
    assert round_half_up(-2.5) == -2
    assert round_half_up(8.25, 1) == 8.3
    assert round_half_up(141.42) == 141
