"""Tests for report rendering and value rounding.

The rounding rule keeps at most 1 fractional digit from 10 up, 2 in
[1, 10) and 3 below 1 (by magnitude), rounds half-even, trims trailing
zeros and uses a space for thousands and a comma as decimal separator.
"""

import pytest

from modelling.config import ReportStyle, RoundingBand
from modelling.errors import EmptyHorizon
from modelling.report import fraction_digits, render_report, report_to_frame, round_value
from modelling.series import ResultsStore


@pytest.mark.parametrize(
    "value, expected",
    [
        (9.96, "9,96"),
        (1.004, "1"),
        (0.0009, "0,001"),
        (10.0, "10"),
        (3.0, "3"),
        (0.0, "0"),
        (0.25, "0,25"),
        (1234.56, "1 234,6"),
        (1234567.0, "1 234 567"),
        (9.999, "10"),
        (-2.5, "-2,5"),
        (-1234.56, "-1 234,6"),
    ],
)
def test_round_value_bands(value, expected):
    assert round_value(value) == expected


def test_round_half_even():
    # 12.25 and 0.0625 are exact in binary
    assert round_value(12.25) == "12,2"
    assert round_value(12.75) == "12,8"
    assert round_value(0.0625) == "0,062"


def test_negative_zero_renders_as_zero():
    assert round_value(-0.0001) == "0"
    assert round_value(-0.0) == "0"


def test_special_values():
    assert round_value(float("nan")) == "NaN"
    assert round_value(float("inf")) == "inf"
    assert round_value(float("-inf")) == "-inf"


def test_huge_values_keep_every_digit():
    assert round_value(1e30) == "1 000 000 000 000 000 019 884 624 838 656"


def test_fraction_digits_by_magnitude():
    assert fraction_digits(10) == 1
    assert fraction_digits(-10) == 1
    assert fraction_digits(9.99) == 2
    assert fraction_digits(0.5) == 3


def test_custom_style():
    style = ReportStyle(
        grouping_separator="",
        decimal_separator=".",
        bands=[RoundingBand(min_magnitude=0, max_fraction_digits=2)],
    )
    assert round_value(1234.567, style) == "1234.57"


def test_render_report():
    store = ResultsStore(3)
    store.put("X", [1, 2, 2])
    store.put("Y", [2.5, 0.125, 1500])
    text = render_report(store, [2020, 2021, 2022])
    assert text == "LATA\t2020\t2021\t2022\nX\t1\t2\t2\nY\t2,5\t0,125\t1 500\n"


def test_render_is_deterministic():
    store = ResultsStore(2)
    store.put("A", [1 / 3, 2 / 3])
    assert render_report(store, [1, 2]) == render_report(store, [1, 2])


def test_render_without_years_fails():
    store = ResultsStore(1)
    store.put("A", [1])
    with pytest.raises(EmptyHorizon):
        render_report(store, [])


def test_render_empty_store_is_header_only():
    assert render_report(ResultsStore(2), [2020, 2021]) == "LATA\t2020\t2021\n"


def test_report_to_frame():
    df = report_to_frame("LATA\t2020\t2021\nX\t1\t2\nY\t1 500\t0,5\n")
    assert list(df.columns) == ["2020", "2021"]
    assert list(df.index) == ["X", "Y"]
    assert df.loc["Y", "2020"] == "1 500"
    assert df.index.name == "LATA"
