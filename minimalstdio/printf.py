"""The printf family: format strings with ``%`` conversion specifiers."""

from __future__ import annotations

import operator
import sys
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Any

from .floats import format_float
from .integers import format_integer
from .output import MAX_CHARS, Flag, Output

__all__ = ["Writeback", "format_to", "sprintf", "snprintf", "fctprintf", "printf"]

_DIGITS = frozenset("0123456789")
_FLAG_CHARS = {
    "0": Flag.ZEROPAD,
    "-": Flag.LEFT,
    "+": Flag.PLUS,
    " ": Flag.SPACE,
    "#": Flag.HASH,
}
_INTEGER_BASES = {"d": 10, "i": 10, "u": 10, "x": 16, "X": 16, "o": 8, "b": 2}
_POINTER_WIDTH = 8 * 2 + 2


@dataclass
class Writeback:
    """Receives the number of characters produced so far for a ``%n`` specifier."""

    value: int = 0


class _FormatEnd(Exception):
    """The format string ended in the middle of a specifier."""


class _Cursor:
    """Position within a format string."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.index = 0

    @property
    def char(self) -> str:
        return self.text[self.index] if self.index < len(self.text) else ""

    def step(self) -> None:
        self.index += 1

    def advance(self) -> None:
        """Move on, giving up on the specifier if the format string ends."""
        self.index += 1
        if self.index >= len(self.text):
            raise _FormatEnd

    def number(self) -> int:
        start = self.index
        while self.char and self.char in _DIGITS:
            self.index += 1
        return int(self.text[start:self.index])


def _wrap(value: int, bits: int, signed: bool) -> int:
    """Reduce ``value`` to a C integer of ``bits`` bits."""
    value &= (1 << bits) - 1
    if signed and value >= 1 << (bits - 1):
        value -= 1 << bits
    return value


def _take(args: Iterator[Any]) -> Any:
    try:
        return next(args)
    except StopIteration:
        raise TypeError("not enough arguments for format string") from None


def _take_int(args: Iterator[Any]) -> int:
    return operator.index(_take(args))


def _parse_flags(cursor: _Cursor) -> Flag:
    flags = Flag.NONE
    while cursor.char and cursor.char in _FLAG_CHARS:
        flags |= _FLAG_CHARS[cursor.char]
        cursor.step()
    return flags


def _parse_length(cursor: _Cursor) -> Flag:
    char = cursor.char
    if char == "l":
        cursor.advance()
        if cursor.char == "l":
            cursor.advance()
            return Flag.LONG | Flag.LONG_LONG
        return Flag.LONG
    if char == "h":
        cursor.advance()
        if cursor.char == "h":
            cursor.advance()
            return Flag.SHORT | Flag.CHAR
        return Flag.SHORT
    if char in ("t", "j", "z"):
        cursor.advance()
        return Flag.LONG
    return Flag.NONE


def _write_integer(
    output: Output, spec: str, arg: int, precision: int, width: int, flags: Flag
) -> None:
    if spec in ("d", "i"):
        flags |= Flag.SIGNED
    base = _INTEGER_BASES[spec]
    if base == 10:
        flags &= ~Flag.HASH
    if spec == "X":
        flags |= Flag.UPPERCASE
    if flags & Flag.PRECISION:
        flags &= ~Flag.ZEROPAD

    if flags & Flag.SIGNED:
        if flags & (Flag.LONG | Flag.LONG_LONG):
            value = _wrap(arg, 64, True)
        else:
            value = _wrap(arg, 32, True)
            if flags & Flag.CHAR:
                value = _wrap(value, 8, True)
            elif flags & Flag.SHORT:
                value = _wrap(value, 16, True)
        format_integer(output, abs(value), value < 0, base, precision, width, flags)
        return

    flags &= ~(Flag.PLUS | Flag.SPACE)
    if flags & (Flag.LONG | Flag.LONG_LONG):
        value = _wrap(arg, 64, False)
    elif flags & Flag.CHAR:
        value = _wrap(arg, 8, False)
    elif flags & Flag.SHORT:
        value = _wrap(arg, 16, False)
    else:
        value = _wrap(arg, 32, False)
    format_integer(output, value, False, base, precision, width, flags)


def _write_char(output: Output, arg: Any, width: int, flags: Flag) -> None:
    if isinstance(arg, str):
        if len(arg) != 1:
            raise TypeError("%c requires a single character")
        char = arg
    else:
        char = chr(operator.index(arg) & 0xFF)
    padding = " " * max(width - 1, 0)
    if not flags & Flag.LEFT:
        for pad in padding:
            output.put(pad)
    output.put(char)
    if flags & Flag.LEFT:
        for pad in padding:
            output.put(pad)


def _write_string(output: Output, arg: Any, precision: int, width: int, flags: Flag) -> None:
    if arg is None:
        output.put_reversed(")llun(", width, flags)
        return
    if isinstance(arg, (bytes, bytearray)):
        arg = arg.decode("latin-1")
    if not isinstance(arg, str):
        raise TypeError("%s requires a string")
    text = arg.split("\0", 1)[0]
    if flags & Flag.PRECISION:
        text = text[:precision]
    padding = " " * max(width - len(text), 0)
    if not flags & Flag.LEFT:
        for pad in padding:
            output.put(pad)
    for char in text:
        output.put(char)
    if flags & Flag.LEFT:
        for pad in padding:
            output.put(pad)


def _write_pointer(output: Output, arg: Any, precision: int, flags: Flag) -> None:
    flags |= Flag.ZEROPAD | Flag.POINTER
    if arg is None:
        value = 0
    elif isinstance(arg, int):
        value = _wrap(arg, 64, False)
    else:
        value = id(arg)
    if value == 0:
        output.put_reversed(")lin(", _POINTER_WIDTH, flags)
    else:
        format_integer(output, value, False, 16, precision, _POINTER_WIDTH, flags)


def _write_back(output: Output, arg: Any, flags: Flag) -> None:
    if not isinstance(arg, Writeback):
        raise TypeError("%n requires a Writeback argument")
    if flags & Flag.CHAR:
        arg.value = _wrap(output.pos, 8, True)
    elif flags & Flag.SHORT:
        arg.value = _wrap(output.pos, 16, True)
    elif flags & (Flag.LONG | Flag.LONG_LONG):
        arg.value = _wrap(output.pos, 64, True)
    else:
        arg.value = _wrap(output.pos, 32, True)


def _format_specifier(cursor: _Cursor, output: Output, args: Iterator[Any]) -> None:
    cursor.advance()
    flags = _parse_flags(cursor)

    width = 0
    if cursor.char and cursor.char in _DIGITS:
        width = cursor.number()
    elif cursor.char == "*":
        requested = _take_int(args)
        if requested < 0:
            flags |= Flag.LEFT
            width = -requested
        else:
            width = requested
        cursor.advance()

    precision = 0
    if cursor.char == ".":
        flags |= Flag.PRECISION
        cursor.advance()
        if cursor.char in _DIGITS:
            precision = cursor.number()
        elif cursor.char == "*":
            precision = max(_take_int(args), 0)
            cursor.advance()

    flags |= _parse_length(cursor)

    spec = cursor.char
    if not spec:
        raise _FormatEnd
    cursor.step()

    if spec in _INTEGER_BASES:
        _write_integer(output, spec, _take_int(args), precision, width, flags)
    elif spec in ("f", "F"):
        if spec == "F":
            flags |= Flag.UPPERCASE
        format_float(output, float(_take(args)), precision, width, flags, False)
    elif spec in ("e", "E", "g", "G"):
        if spec in ("g", "G"):
            flags |= Flag.ADAPT_EXP
        if spec in ("E", "G"):
            flags |= Flag.UPPERCASE
        format_float(output, float(_take(args)), precision, width, flags, True)
    elif spec == "c":
        _write_char(output, _take(args), width, flags)
    elif spec == "s":
        _write_string(output, _take(args), precision, width, flags)
    elif spec == "p":
        _write_pointer(output, _take(args), precision, flags)
    elif spec == "n":
        _write_back(output, _take(args), flags)
    else:
        output.put(spec)


def format_to(output: Output, fmt: str, *args: Any) -> int:
    """Format ``args`` according to ``fmt`` into ``output``.

    Returns the total number of characters produced, including any that
    did not fit. A specifier cut off by the end of ``fmt`` ends formatting.
    """
    cursor = _Cursor(fmt)
    arg_iter = iter(args)
    try:
        while cursor.char:
            if cursor.char != "%":
                output.put(cursor.char)
                cursor.step()
                continue
            _format_specifier(cursor, output, arg_iter)
    except _FormatEnd:
        pass
    return output.pos


def sprintf(fmt: str, *args: Any) -> str:
    """Return the formatted text."""
    output = Output()
    format_to(output, fmt, *args)
    return output.getvalue()


def snprintf(size: int, fmt: str, *args: Any) -> tuple[str, int]:
    """Format into a buffer of ``size`` slots, terminator included.

    Returns the text that fit and the length the full text would have had;
    a length of ``size`` or more means the text was truncated.
    """
    output = Output(max_chars=size)
    count = format_to(output, fmt, *args)
    return output.getvalue(), count


def fctprintf(out: Callable[[str], object], fmt: str, *args: Any) -> int:
    """Send each formatted character to ``out``; return how many were sent."""
    return format_to(Output(max_chars=MAX_CHARS, sink=out), fmt, *args)


def printf(fmt: str, *args: Any) -> int:
    """Write the formatted text to standard output; return its length."""
    output = Output()
    count = format_to(output, fmt, *args)
    sys.stdout.write(output.getvalue())
    return count