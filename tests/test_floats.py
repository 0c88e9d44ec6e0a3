import math
import re

import pytest

from minimalstdio.floats import (
    format_float,
    log10_of_positive,
    pow10_of_int,
    write_exponential,
)
from minimalstdio.output import Flag, Output


def render(value, precision=0, width=0, flags=Flag.NONE, exponential=True):
    out = Output()
    format_float(out, value, precision, width, flags, exponential)
    return out.getvalue()


# Values and expected strings from the library's own printf tests.
@pytest.mark.parametrize(
    "value, precision, flags, exponential, expected",
    [
        (392.65, 0, Flag.NONE, True, "3.926500e+02"),
        (456.789, 0, Flag.UPPERCASE, True, "4.567890E+02"),
        (1.0, 0, Flag.ADAPT_EXP, True, "1"),
        (456.789, 0, Flag.ADAPT_EXP | Flag.UPPERCASE, True, "456.789"),
        (1.0, 0, Flag.ADAPT_EXP | Flag.HASH, True, "1.00000"),
        (15.0, 4, Flag.ADAPT_EXP | Flag.PRECISION, True, "15"),
        (1.1, 0, Flag.NONE, False, "1.100000"),
        (1.0, 0, Flag.UPPERCASE, False, "1.000000"),
        (-1.234, 4, Flag.PRECISION, False, "-1.2340"),
        (0.99, 0, Flag.PRECISION, False, "1"),
        (1.5, 0, Flag.PRECISION, False, "2"),
        (2.5, 0, Flag.PRECISION, False, "2"),
        (0.99, 0, Flag.PRECISION | Flag.HASH, False, "1."),
    ],
)
def test_source_cases(value, precision, flags, exponential, expected):
    assert render(value, precision, 0, flags, exponential) == expected


def test_zero_padded_fixed_from_source():
    assert render(-197.0, 0, 12, Flag.ZEROPAD, False) == "-0197.000000"
    assert render(197.0, 0, 12, Flag.ZEROPAD | Flag.PLUS, False) == "+0197.000000"


@pytest.mark.parametrize("value", [0.0, 1.0, 0.125, 123456.0, 392.65, -0.0025])
def test_exponential_agrees_with_standard_e(value):
    assert render(value) == "%e" % value


@pytest.mark.parametrize("value", [1.0, 0.5, 15.0, 456.789, 100000.0, 1234567.0])
def test_adaptive_agrees_with_standard_g(value):
    assert render(value, flags=Flag.ADAPT_EXP) == "%g" % value


@pytest.mark.parametrize("value", [0.1, 123.456, -3.25, -0.0, 1e9])
def test_fixed_agrees_with_standard_f(value):
    assert render(value, exponential=False) == "%f" % value


def test_large_fixed_value_switches_to_exponential():
    assert render(2e9, exponential=False) == "%.0e" % 2e9


def test_zero_padded_exponential():
    assert render(392.65, 0, 15, Flag.ZEROPAD) == "%015e" % 392.65


def test_exponential_width_right_aligned():
    result = render(392.65, width=20)
    assert len(result) == 20
    assert result.lstrip() == "3.926500e+02"


def test_exponential_width_left_aligned():
    result = render(392.65, width=20, flags=Flag.LEFT)
    assert len(result) == 20
    assert result.rstrip() == "3.926500e+02"


@pytest.mark.parametrize("value", [1.5e200, -2.5e-250, 7.77e123])
def test_three_digit_exponent(value):
    result = render(value)
    assert re.fullmatch(r"-?\d\.\d{6}e[+-]\d{3}", result)
    assert math.isclose(float(result), value, rel_tol=1e-5)


@pytest.mark.parametrize("value", [3.5, -0.002718, 6.02e23, 1.6e-19, 299792458.0])
def test_exponential_round_trip(value):
    result = render(value)
    assert re.fullmatch(r"-?\d\.\d{6}e[+-]\d{2,3}", result)
    assert math.isclose(float(result), value, rel_tol=1e-6)


def test_precision_beyond_supported_pads_with_zeros():
    assert render(0.5, 20, 0, Flag.PRECISION, False) == "%.20f" % 0.5


def test_nan_and_infinities():
    assert render(math.nan) == "nan"
    assert render(math.inf) == "inf"
    assert render(math.inf, flags=Flag.PLUS) == "+inf"
    assert render(-math.inf) == "-inf"


def test_nan_is_padded_to_width():
    result = render(math.nan, width=5)
    assert len(result) == 5
    assert result.strip() == "nan"


def test_negative_precision_rejected():
    with pytest.raises(ValueError):
        render(1.0, precision=-1)


def test_negative_width_rejected():
    with pytest.raises(ValueError):
        render(1.0, width=-3)


def test_output_to_sink():
    collected = []
    out = Output(sink=collected.append)
    format_float(out, 392.65, 0, 0, Flag.NONE, True)
    assert "".join(collected) == "3.926500e+02"
    assert out.pos == len(collected)


def test_write_exponential_directly():
    out = Output()
    write_exponential(out, 123456.0, 2, 0, Flag.NONE)
    assert out.getvalue() == "%.2e" % 123456.0


@pytest.mark.parametrize("value", [1.0, 2.0, 7.5, 0.001, 12345.678, 1e100, 3e-200])
def test_log10_of_positive_is_close(value):
    assert abs(log10_of_positive(value) - math.log10(value)) < 0.01


@pytest.mark.parametrize("value", [0.0, -1.0, math.inf, math.nan])
def test_log10_of_positive_rejects_invalid(value):
    with pytest.raises(ValueError):
        log10_of_positive(value)


@pytest.mark.parametrize("exponent", [-300, -50, -17, -3, 1, 5, 17, 42, 300])
def test_pow10_of_int_is_close(exponent):
    assert math.isclose(pow10_of_int(exponent), 10.0**exponent, rel_tol=1e-6)


def test_pow10_of_int_zero_is_exact():
    assert pow10_of_int(0) == 1.0


def test_pow10_of_int_subnormal_boundary():
    assert pow10_of_int(-308) == 1e-308