"""Rendering of integers in binary, octal, decimal and hexadecimal."""

from __future__ import annotations

from .output import Flag, Output

__all__ = ["format_integer", "INTEGER_BUFFER_SIZE"]

#: Most characters one converted integer may occupy, padding included.
INTEGER_BUFFER_SIZE = 32

_LOWER_DIGITS = "0123456789abcdef"
_UPPER_DIGITS = _LOWER_DIGITS.upper()
_BASES = (2, 8, 10, 16)


def _finalize(
    output: Output,
    buf: list[str],
    negative: bool,
    base: int,
    precision: int,
    width: int,
    flags: Flag,
) -> None:
    """Add padding, prefix and sign to the reversed digits and emit them."""
    unpadded_len = len(buf)

    if not flags & Flag.LEFT:
        if width and flags & Flag.ZEROPAD and (negative or flags & (Flag.PLUS | Flag.SPACE)):
            width -= 1
        while flags & Flag.ZEROPAD and len(buf) < width and len(buf) < INTEGER_BUFFER_SIZE:
            buf.append("0")

    while len(buf) < precision and len(buf) < INTEGER_BUFFER_SIZE:
        buf.append("0")

    if base == 8 and len(buf) > unpadded_len:
        # Written zeros already satisfy the alternative form's leading zero.
        flags &= ~Flag.HASH

    if flags & (Flag.HASH | Flag.POINTER):
        if not flags & Flag.PRECISION and buf and (len(buf) == precision or len(buf) == width):
            # Give back padding digits to make room for the prefix.
            if unpadded_len < len(buf):
                buf.pop()
            if buf and base in (16, 2) and unpadded_len < len(buf):
                buf.pop()
        if base == 16 and len(buf) < INTEGER_BUFFER_SIZE:
            buf.append("X" if flags & Flag.UPPERCASE else "x")
        elif base == 2 and len(buf) < INTEGER_BUFFER_SIZE:
            buf.append("b")
        if len(buf) < INTEGER_BUFFER_SIZE:
            buf.append("0")

    if len(buf) < INTEGER_BUFFER_SIZE:
        if negative:
            buf.append("-")
        elif flags & Flag.PLUS:
            buf.append("+")
        elif flags & Flag.SPACE:
            buf.append(" ")

    output.put_reversed("".join(buf), width, flags)


def format_integer(
    output: Output,
    value: int,
    negative: bool,
    base: int,
    precision: int,
    width: int,
    flags: Flag,
) -> None:
    """Write the magnitude ``value`` to ``output`` in the given base.

    ``negative`` selects the minus sign; ``value`` itself must not be
    negative. The result never exceeds :data:`INTEGER_BUFFER_SIZE`
    characters before width padding.
    """
    if value < 0:
        raise ValueError("value must be a non-negative magnitude")
    if base not in _BASES:
        raise ValueError(f"unsupported base {base}")
    flags = Flag(flags)
    buf: list[str] = []

    if not value:
        if not flags & Flag.PRECISION:
            buf.append("0")
            flags &= ~Flag.HASH
        elif base == 16:
            flags &= ~Flag.HASH
    else:
        digits = _UPPER_DIGITS if flags & Flag.UPPERCASE else _LOWER_DIGITS
        while True:
            value, digit = divmod(value, base)
            buf.append(digits[digit])
            if not value or len(buf) >= INTEGER_BUFFER_SIZE:
                break

    _finalize(output, buf, negative, base, precision, width, flags)