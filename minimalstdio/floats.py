"""Exponential (``%e``/``%g`` style) rendering and floating-point dispatch."""

from __future__ import annotations

import math
import struct
import sys
from dataclasses import dataclass

from .fixed import (
    DECIMAL_BUFFER_SIZE,
    MAX_SUPPORTED_PRECISION,
    POWERS_OF_10,
    Components,
    get_components,
    write_components,
    write_decimal,
)
from .integers import format_integer
from .output import Flag, Output

__all__ = [
    "log10_of_positive",
    "pow10_of_int",
    "write_exponential",
    "format_float",
    "DEFAULT_FLOAT_PRECISION",
    "FLOAT_NOTATION_THRESHOLD",
]

#: Fractional digits used when no precision is given.
DEFAULT_FLOAT_PRECISION = 6

#: Magnitudes above this are printed in exponential notation even for ``%f``.
FLOAT_NOTATION_THRESHOLD = 1e9

_MANTISSA_BITS = 52
_EXPONENT_MASK = 0x7FF
_BASE_EXPONENT = 1023
_U64_MASK = (1 << 64) - 1
_DBL_MAX = sys.float_info.max
_DBL_MAX_10_EXP = sys.float_info.max_10_exp
_MAX_SUBNORMAL_EXPONENT_OF_10 = -308
_MAX_SUBNORMAL_POWER_OF_10 = 1e-308


def _to_bits(number: float) -> int:
    return struct.unpack("<Q", struct.pack("<d", number))[0]


def _from_bits(bits: int) -> float:
    return struct.unpack("<d", struct.pack("<Q", bits & _U64_MASK))[0]


def _exp2(number: float) -> int:
    """Unbiased binary exponent stored in ``number``."""
    return ((_to_bits(number) >> _MANTISSA_BITS) & _EXPONENT_MASK) - _BASE_EXPONENT


def _floor(x: float) -> int:
    """Floor for values whose floor fits an int, via truncation."""
    if x >= 0:
        return int(x)
    n = int(x)
    return n if float(n) == x else n - 1


@dataclass(frozen=True)
class _Scaling:
    raw_factor: float
    multiply: bool

    def apply(self, number: float) -> float:
        return number * self.raw_factor if self.multiply else number / self.raw_factor

    def unapply(self, normalized: float) -> float:
        return normalized / self.raw_factor if self.multiply else normalized * self.raw_factor

    def combined_with(self, extra_factor: float) -> _Scaling:
        """Scaling that also multiplies by ``extra_factor``."""
        if self.multiply:
            return _Scaling(self.raw_factor * extra_factor, True)
        # Divide the factor with the larger exponent by the smaller one.
        if abs(_exp2(self.raw_factor)) > abs(_exp2(extra_factor)):
            return _Scaling(self.raw_factor / extra_factor, False)
        return _Scaling(extra_factor / self.raw_factor, True)


def log10_of_positive(number: float) -> float:
    """Approximate base-10 logarithm of a positive finite ``number``.

    The binary mantissa's logarithm comes from a four-term Taylor expansion
    around 1.5; the binary exponent contributes exactly.
    """
    if not math.isfinite(number) or number <= 0:
        raise ValueError("number must be positive and finite")
    bits = _to_bits(number)
    exp2 = ((bits >> _MANTISSA_BITS) & _EXPONENT_MASK) - _BASE_EXPONENT
    mantissa = _from_bits(
        (bits & ((1 << _MANTISSA_BITS) - 1)) | (_BASE_EXPONENT << _MANTISSA_BITS)
    )
    z = mantissa - 1.5
    return (
        0.1760912590556812420
        + z * 0.2895296546021678851
        - z * z * 0.0965098848673892950
        + z * z * z * 0.0428932821632841311
        + exp2 * 0.30102999566398119521
    )


def pow10_of_int(exp10: int) -> float:
    """Approximate ``10 ** exp10`` without overflowing intermediate values."""
    if exp10 == _MAX_SUBNORMAL_EXPONENT_OF_10:
        return _MAX_SUBNORMAL_POWER_OF_10
    exp2 = _floor(exp10 * 3.321928094887362 + 0.5)
    z = exp10 * 2.302585092994046 - exp2 * 0.6931471805599453
    z2 = z * z
    power_of_2 = _from_bits((exp2 + _BASE_EXPONENT) << _MANTISSA_BITS)
    # exp(z) by a truncated continued fraction.
    return power_of_2 * (1 + 2 * z / (2 - z + (z2 / (6 + (z2 / (10 + z2 / 14))))))


def _normalized_components(
    negative: bool,
    precision: int,
    number: float,
    scaling: _Scaling,
    floored_exp10: int,
) -> Components:
    scaled = scaling.apply(number)
    if -floored_exp10 + precision >= _DBL_MAX_10_EXP - 1:
        # The precision cannot be folded into the scaling factor here.
        return get_components(-scaled if negative else scaled, precision)

    integral = int(scaled)
    remainder = number - scaling.unapply(float(integral))
    prec_power_of_10 = POWERS_OF_10[precision]
    scaled_remainder = scaling.combined_with(prec_power_of_10).apply(remainder)

    fractional = int(scaled_remainder)
    scaled_remainder -= float(fractional)
    if scaled_remainder >= 0.5:
        fractional += 1
    if scaled_remainder == 0.5:
        # Round half to even.
        fractional &= ~1
    if float(fractional) >= prec_power_of_10:
        fractional = 0
        integral += 1
    return Components(integral, fractional, negative)


def write_exponential(
    output: Output,
    number: float,
    precision: int,
    width: int,
    flags: Flag,
    prefix: str = "",
) -> None:
    """Write a finite ``number`` in exponential notation.

    With ADAPT_EXP set this follows ``%g``: ``precision`` counts significant
    digits and the exponent is dropped when the value suits plain notation.
    Precisions beyond the supported maximum are capped.
    """
    flags = Flag(flags)
    precision = min(precision, MAX_SUPPORTED_PRECISION)
    negative = math.copysign(1.0, number) < 0
    abs_number = -number if negative else number

    if abs_number == 0.0:
        floored_exp10 = 0
        covered = True
        raw_factor = 1.0
    else:
        floored_exp10 = _floor(log10_of_positive(abs_number))
        p10 = pow10_of_int(floored_exp10)
        if abs_number < p10:
            floored_exp10 -= 1
            p10 /= 10
        covered = abs(floored_exp10) < len(POWERS_OF_10)
        raw_factor = POWERS_OF_10[abs(floored_exp10)] if covered else p10

    decimal_only = False
    if flags & Flag.ADAPT_EXP:
        required_significant_digits = 1 if precision == 0 else precision
        decimal_only = -4 <= floored_exp10 < required_significant_digits
        adjusted = precision - 1 - floored_exp10 if decimal_only else precision - 1
        precision = min(max(adjusted, 0), MAX_SUPPORTED_PRECISION)
        flags |= Flag.PRECISION

    scaling = _Scaling(raw_factor, floored_exp10 < 0 and covered)
    if decimal_only or floored_exp10 == 0:
        components = get_components(-abs_number if negative else abs_number, precision)
    else:
        components = _normalized_components(
            negative, precision, abs_number, scaling, floored_exp10
        )

    # Account for rounding that rolls over into another digit, e.g. 9.99 -> 10.0.
    if decimal_only:
        if (
            flags & Flag.ADAPT_EXP
            and floored_exp10 >= -1
            and components.integral == POWERS_OF_10[floored_exp10 + 1]
        ):
            floored_exp10 += 1
            precision -= 1
    elif components.integral >= 10:
        floored_exp10 += 1
        components.integral = 1
        components.fractional = 0

    exp10_part_width = 0 if decimal_only else (4 if abs(floored_exp10) < 100 else 5)
    if flags & Flag.LEFT and exp10_part_width:
        decimal_part_width = 0
    elif width > exp10_part_width:
        decimal_part_width = width - exp10_part_width
    else:
        decimal_part_width = 0

    start_pos = output.pos
    write_components(components, output, precision, decimal_part_width, flags, prefix)

    if not decimal_only:
        output.put("E" if flags & Flag.UPPERCASE else "e")
        format_integer(
            output,
            abs(floored_exp10),
            floored_exp10 < 0,
            10,
            0,
            exp10_part_width - 1,
            Flag.ZEROPAD | Flag.PLUS,
        )
        if flags & Flag.LEFT:
            while output.pos - start_pos < width:
                output.put(" ")


def format_float(
    output: Output,
    value: float,
    precision: int,
    width: int,
    flags: Flag,
    prefer_exponential: bool,
) -> None:
    """Write ``value`` in fixed or exponential notation.

    NaN and infinities are spelled out. In fixed notation, magnitudes above
    :data:`FLOAT_NOTATION_THRESHOLD` switch to exponential notation, using
    the precision exactly as given.
    """
    if precision < 0 or width < 0:
        raise ValueError("precision and width must not be negative")
    flags = Flag(flags)
    value = float(value)

    if math.isnan(value):
        output.put_reversed("nan", width, flags)
        return
    if value < -_DBL_MAX:
        output.put_reversed("fni-", width, flags)
        return
    if value > _DBL_MAX:
        output.put_reversed("fni+" if flags & Flag.PLUS else "fni", width, flags)
        return

    if not prefer_exponential and (
        value > FLOAT_NOTATION_THRESHOLD or value < -FLOAT_NOTATION_THRESHOLD
    ):
        write_exponential(output, value, precision, width, flags)
        return

    if not flags & Flag.PRECISION:
        precision = DEFAULT_FLOAT_PRECISION

    # Digits beyond the supported precision are printed as zeros.
    padding: list[str] = []
    while len(padding) < DECIMAL_BUFFER_SIZE and precision > MAX_SUPPORTED_PRECISION:
        padding.append("0")
        precision -= 1
    precision = min(precision, MAX_SUPPORTED_PRECISION)
    prefix = "".join(padding)

    if prefer_exponential:
        write_exponential(output, value, precision, width, flags, prefix)
    else:
        write_decimal(output, value, precision, width, flags, prefix)