"""Reading values out of a string according to a ``%`` format."""

from __future__ import annotations

import string

__all__ = ["ScanfError", "sscanf", "strtol", "EOF"]

#: Value reported where input ends before anything could be read.
EOF = -1

_MAX_BUFFER_LENGTH = 4096
_MAX_FORMAT_LENGTH = 256
_MAX_MATCH_SET_LENGTH = 32
_NUMERIC_BUFFER_SIZE = 32

_WHITESPACE = frozenset(" \t\n\v\f\r")
_ALNUM = frozenset(string.ascii_letters + string.digits)
_HEX_DIGITS = frozenset(string.hexdigits)

_LONG_MAX = 2**63 - 1
_LONG_MIN = -(2**63)

_INTEGER_BASES = {"u": 10, "d": 10, "o": 8, "x": 16, "X": 16, "i": 0}
_UNSIGNED_SPECS = frozenset("uoxX")


class ScanfError(ValueError):
    """Input is missing or the format string is malformed."""


def _isspace(char: str) -> bool:
    return char in _WHITESPACE


def _isalnum(char: str) -> bool:
    return char in _ALNUM


def _digit_value(char: str) -> int:
    if not _isalnum(char):
        return 99
    return int(char, 36)


def strtol(text: str, base: int) -> tuple[int, int]:
    """Parse a long integer at the start of ``text``.

    Leading whitespace and a sign are accepted. Base 0 picks hexadecimal
    for a ``0x`` prefix, octal for a leading ``0`` and decimal otherwise;
    base 16 also accepts the ``0x`` prefix. Returns the value and the
    index just past the digits used, or ``(0, 0)`` when there are none.
    Values out of range are clamped to the 64-bit limits.
    """
    if base != 0 and not 2 <= base <= 36:
        raise ValueError(f"unsupported base {base}")

    def char_at(index: int) -> str:
        return text[index] if index < len(text) else ""

    i = 0
    while _isspace(char_at(i)):
        i += 1
    negative = False
    if char_at(i) in ("-", "+") and char_at(i):
        negative = char_at(i) == "-"
        i += 1

    has_hex_prefix = (
        char_at(i) == "0" and char_at(i + 1) in ("x", "X") and char_at(i + 1) != ""
        and char_at(i + 2) in _HEX_DIGITS and char_at(i + 2) != ""
    )
    if base == 0:
        if has_hex_prefix:
            base = 16
            i += 2
        elif char_at(i) == "0":
            base = 8
        else:
            base = 10
    elif base == 16 and has_hex_prefix:
        i += 2

    start = i
    magnitude = 0
    while (digit := _digit_value(char_at(i))) < base:
        magnitude = magnitude * base + digit
        i += 1
    if i == start:
        return 0, 0

    if negative:
        value = _LONG_MIN if magnitude > -_LONG_MIN else -magnitude
    else:
        value = _LONG_MAX if magnitude > _LONG_MAX else magnitude
    return value, i


def _wrap(value: int, bits: int, signed: bool) -> int:
    value &= (1 << bits) - 1
    if signed and value >= 1 << (bits - 1):
        value -= 1 << bits
    return value


def sscanf(buffer: str | None, fmt: str | None) -> list[int | str]:
    """Read values from ``buffer`` as directed by ``fmt``.

    Supports ``%c``, ``%s``, ``%[...]`` (with ``^`` inversion), and the
    integer conversions ``%d %i %u %o %x %X`` with an optional ``l``,
    a maximum field width and ``*`` to skip assignment. Returns the
    assigned values in order; reading stops at the first literal that
    does not match. Raises :class:`ScanfError` when the buffer is missing
    or empty, the format is missing, or a character set is unterminated.
    """
    if buffer is None or len(buffer[:_MAX_BUFFER_LENGTH]) == 0:
        raise ScanfError("no input to read")
    if fmt is None:
        raise ScanfError("no format given")
    if len(fmt[:_MAX_FORMAT_LENGTH]) == 0:
        return []

    def bc(index: int) -> str:
        return buffer[index] if index < len(buffer) else ""

    def fc(index: int) -> str:
        return fmt[index] if index < len(fmt) else ""

    results: list[int | str] = []
    b = 0
    f = 0

    while fc(f):
        leading_spaces = _isspace(fc(f))
        while _isspace(fc(f)):
            f += 1
        if leading_spaces:
            while _isspace(bc(b)):
                b += 1

        # Literal characters must match the input exactly.
        while fc(f) != "%":
            if not fc(f):
                return results
            if _isspace(fc(f)):
                break
            if bc(b) != fc(f):
                return results
            b += 1
            f += 1

        if _isspace(fc(f)):
            continue

        f += 1  # past the '%'

        assign = True
        if fc(f) == "*":
            assign = False
            f += 1

        limit_width = False
        max_width = 0
        while fc(f) and fc(f) in string.digits:
            limit_width = True
            max_width = max_width * 10 + int(fc(f))
            f += 1

        long_arg = False
        if fc(f) == "l":
            long_arg = True
            f += 1

        match_set: list[str] = []
        member_of_set = True
        if fc(f) == "[":
            f += 1
            if fc(f) == "^":
                member_of_set = False
                f += 1
            if fc(f) == "]":
                match_set.append("]")
                f += 1
            while fc(f) != "]":
                if not fc(f):
                    raise ScanfError("unterminated character set in format")
                if len(match_set) < _MAX_MATCH_SET_LENGTH:
                    match_set.append(fc(f))
                f += 1
            if not match_set or match_set == ["]"]:
                raise ScanfError("empty character set in format")

        spec = fc(f)

        if spec == "c":
            if assign:
                results.append(bc(b) or "\0")
            b += 1

        elif spec and spec in _INTEGER_BASES:
            start = b
            collected: list[str] = []
            while _isspace(bc(b)):
                collected.append(bc(b))
                b += 1
            if bc(b) in ("-", "+") and bc(b):
                collected.append(bc(b))
                b += 1
            while (
                _isalnum(bc(b))
                and len(collected) < _NUMERIC_BUFFER_SIZE
                and (not limit_width or max_width > 0)
            ):
                collected.append(bc(b))
                b += 1
                max_width -= 1

            value, end = strtol("".join(collected), _INTEGER_BASES[spec])
            b = start + end

            if assign:
                unsigned = spec in _UNSIGNED_SPECS
                results.append(_wrap(value, 64 if long_arg else 32, not unsigned))

        elif spec == "]":
            while _isspace(bc(b)):
                b += 1
            chars: list[str] = []
            while bc(b):
                if (bc(b) in match_set) != member_of_set:
                    break
                if limit_width and max_width <= 0:
                    break
                chars.append(bc(b))
                b += 1
                max_width -= 1
            if assign:
                results.append("".join(chars))

        elif spec == "s":
            while _isspace(bc(b)):
                b += 1
            chars = []
            while bc(b) and not _isspace(bc(b)) and (not limit_width or max_width > 0):
                chars.append(bc(b))
                b += 1
                max_width -= 1
            if assign:
                results.append("".join(chars))

        f += 1

    return results