"""Fixed-point (``%f`` style) rendering of floating-point numbers."""

from __future__ import annotations

import math
from dataclasses import dataclass

from .output import Flag, Output

__all__ = [
    "Components",
    "get_components",
    "write_components",
    "write_decimal",
    "POWERS_OF_10",
    "MAX_SUPPORTED_PRECISION",
    "DECIMAL_BUFFER_SIZE",
]

#: Most characters one converted floating-point value may occupy.
DECIMAL_BUFFER_SIZE = 32

POWERS_OF_10 = tuple(float(10**n) for n in range(18))

#: Largest number of fractional digits computed exactly.
MAX_SUPPORTED_PRECISION = len(POWERS_OF_10) - 1


@dataclass
class Components:
    """A value split into integral digits and fractional digits scaled by the precision."""

    integral: int
    fractional: int
    is_negative: bool


def _check_precision(precision: int) -> None:
    if not 0 <= precision <= MAX_SUPPORTED_PRECISION:
        raise ValueError(
            f"precision must be between 0 and {MAX_SUPPORTED_PRECISION}"
        )


def get_components(number: float, precision: int) -> Components:
    """Split a finite ``number`` into rounded integral and fractional parts."""
    _check_precision(precision)
    is_negative = math.copysign(1.0, number) < 0
    abs_number = -number if is_negative else number
    integral = int(abs_number)
    scale = POWERS_OF_10[precision]
    remainder = (abs_number - float(integral)) * scale
    fractional = int(remainder)
    remainder -= float(fractional)

    if remainder > 0.5:
        fractional += 1
        # Rollover, e.g. 0.99 at precision 1 becomes 1.0.
        if float(fractional) >= scale:
            fractional = 0
            integral += 1
    elif remainder == 0.5 and (fractional == 0 or fractional & 1):
        fractional += 1

    if precision == 0:
        remainder = abs_number - float(integral)
        if (not remainder < 0.5 or remainder > 0.5) and integral & 1:
            # Exactly half and odd: 1.5 -> 2, but 2.5 -> 2.
            integral += 1

    return Components(integral, fractional, is_negative)


def write_components(
    components: Components,
    output: Output,
    precision: int,
    width: int,
    flags: Flag,
    prefix: str = "",
) -> None:
    """Write already split components to ``output``.

    ``prefix`` holds characters in reverse order that end up after the
    generated digits, such as zeros beyond the supported precision.
    """
    flags = Flag(flags)
    buf = list(prefix)
    integral = components.integral
    fractional = components.fractional

    if precision != 0:
        count = precision
        if flags & Flag.ADAPT_EXP and not flags & Flag.HASH and fractional > 0:
            # %g drops trailing zero digits.
            while fractional % 10 == 0:
                count -= 1
                fractional //= 10

        if fractional > 0 or not flags & Flag.ADAPT_EXP or flags & Flag.HASH:
            while len(buf) < DECIMAL_BUFFER_SIZE:
                count -= 1
                buf.append(str(fractional % 10))
                fractional //= 10
                if not fractional:
                    break
            # A count driven below zero pads until the buffer is full.
            while len(buf) < DECIMAL_BUFFER_SIZE and count != 0:
                buf.append("0")
                count -= 1
            if len(buf) < DECIMAL_BUFFER_SIZE:
                buf.append(".")
    elif flags & Flag.HASH and len(buf) < DECIMAL_BUFFER_SIZE:
        buf.append(".")

    while len(buf) < DECIMAL_BUFFER_SIZE:
        buf.append(str(integral % 10))
        integral //= 10
        if not integral:
            break

    if not flags & Flag.LEFT and flags & Flag.ZEROPAD:
        if width and (components.is_negative or flags & (Flag.PLUS | Flag.SPACE)):
            width -= 1
        while len(buf) < width and len(buf) < DECIMAL_BUFFER_SIZE:
            buf.append("0")

    if len(buf) < DECIMAL_BUFFER_SIZE:
        if components.is_negative:
            buf.append("-")
        elif flags & Flag.PLUS:
            buf.append("+")
        elif flags & Flag.SPACE:
            buf.append(" ")

    output.put_reversed("".join(buf), width, flags)


def write_decimal(
    output: Output,
    number: float,
    precision: int,
    width: int,
    flags: Flag,
    prefix: str = "",
) -> None:
    """Write a finite ``number`` in fixed-point notation."""
    write_components(get_components(number, precision), output, precision, width, flags, prefix)