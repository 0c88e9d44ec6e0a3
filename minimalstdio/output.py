"""Character sinks used by the formatting routines."""

from __future__ import annotations

import enum
from collections.abc import Callable

__all__ = ["Flag", "Output", "MAX_CHARS"]

#: Largest number of characters a single formatting call may produce.
MAX_CHARS = 2**31 - 1


class Flag(enum.IntFlag):
    """Conversion flags gathered while parsing a format specifier."""

    NONE = 0
    ZEROPAD = 1 << 0
    LEFT = 1 << 1
    PLUS = 1 << 2
    SPACE = 1 << 3
    HASH = 1 << 4
    UPPERCASE = 1 << 5
    CHAR = 1 << 6
    SHORT = 1 << 7
    INT = 1 << 8
    LONG = 1 << 9
    LONG_LONG = 1 << 10
    PRECISION = 1 << 11
    ADAPT_EXP = 1 << 12
    POINTER = 1 << 13
    SIGNED = 1 << 14


class Output:
    """Destination for formatted characters.

    Characters go either to ``sink`` (a callable taking one character) or,
    when no sink is given, into an internal buffer of at most ``max_chars``
    slots, the last of which is reserved for the string terminator.
    ``pos`` always counts every character offered, including those dropped
    because the limit was reached.
    """

    def __init__(
        self,
        max_chars: int = MAX_CHARS,
        sink: Callable[[str], object] | None = None,
    ) -> None:
        if max_chars < 0:
            raise ValueError("max_chars must not be negative")
        self.max_chars = min(max_chars, MAX_CHARS)
        self.sink = sink
        self.pos = 0
        self._chars: list[str] = []

    def put(self, char: str) -> None:
        """Offer one character; it is written only while below the limit."""
        write_pos = self.pos
        self.pos += 1
        if write_pos >= self.max_chars:
            return
        if self.sink is not None:
            self.sink(char)
        else:
            self._chars.append(char)

    def put_reversed(self, text: str, width: int, flags: Flag) -> None:
        """Write ``text`` back to front, space-padded to ``width``.

        Padding goes on the left unless LEFT or ZEROPAD is set; with LEFT
        it goes on the right.
        """
        start_pos = self.pos
        if not flags & (Flag.LEFT | Flag.ZEROPAD):
            for _ in range(len(text), width):
                self.put(" ")
        for char in reversed(text):
            self.put(char)
        if flags & Flag.LEFT:
            while self.pos - start_pos < width:
                self.put(" ")

    def getvalue(self) -> str:
        """Return the buffered text as it stands once terminated.

        When the limit was reached, the final slot holds the terminator,
        so at most ``max_chars - 1`` characters remain. Outputs that feed
        a sink, or have no room at all, hold nothing.
        """
        if self.sink is not None or self.max_chars == 0:
            return ""
        end = self.pos if self.pos < self.max_chars else self.max_chars - 1
        return "".join(self._chars[:end])