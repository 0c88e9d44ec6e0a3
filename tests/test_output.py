import pytest

from minimalstdio.output import MAX_CHARS, Flag, Output


def test_put_collects_characters_in_buffer():
    out = Output()
    for char in "Test":
        out.put(char)
    assert out.getvalue() == "Test"
    assert out.pos == 4


def test_put_counts_characters_beyond_limit():
    out = Output(16)
    text = "Test Case a 1 2 3 12 c FF"
    for char in text:
        out.put(char)
    assert out.pos == len(text)
    assert out.getvalue() == text[:15]


def test_exact_fit_loses_last_char_to_terminator():
    out = Output(4)
    for char in "Test":
        out.put(char)
    assert out.getvalue() == "Tes"


def test_zero_size_output_discards_but_counts():
    out = Output(0)
    for char in "abc":
        out.put(char)
    assert out.getvalue() == ""
    assert out.pos == 3


def test_sink_receives_every_character():
    received = []
    out = Output(sink=received.append)
    for char in "Writeback":
        out.put(char)
    assert "".join(received) == "Writeback"
    assert out.pos == len("Writeback")
    assert out.getvalue() == ""


def test_sink_respects_max_chars():
    received = []
    out = Output(3, received.append)
    for char in "abcdef":
        out.put(char)
    assert received == ["a", "b", "c"]
    assert out.pos == 6


def test_negative_max_chars_rejected():
    with pytest.raises(ValueError):
        Output(-1)


def test_max_chars_is_clamped():
    out = Output(MAX_CHARS * 4)
    assert out.max_chars == MAX_CHARS


def test_put_reversed_without_width():
    out = Output()
    out.put_reversed(")llun(", 0, Flag.NONE)
    assert out.getvalue() == "(null)"


@pytest.mark.parametrize("width", [7, 10, 12])
def test_put_reversed_right_aligns(width):
    out = Output()
    out.put_reversed("7791", width, Flag.NONE)
    value = out.getvalue()
    assert len(value) == width
    assert value.endswith("1977")
    assert value.strip() == "1977"


@pytest.mark.parametrize("width", [7, 10, 12])
def test_put_reversed_left_aligns(width):
    out = Output()
    out.put_reversed("7791", width, Flag.LEFT)
    value = out.getvalue()
    assert len(value) == width
    assert value.startswith("1977")
    assert value.strip() == "1977"


def test_put_reversed_zeropad_adds_no_spaces():
    out = Output()
    out.put_reversed("7791", 10, Flag.ZEROPAD)
    assert out.getvalue() == "1977"


def test_put_reversed_left_padding_counts_from_start_of_call():
    out = Output()
    for char in "Test ":
        out.put(char)
    out.put_reversed("nan"[::-1], 6, Flag.LEFT)
    value = out.getvalue()
    assert value.startswith("Test nan")
    assert len(value) == len("Test ") + 6


def test_put_reversed_text_longer_than_width_is_not_cut():
    out = Output()
    out.put_reversed("7791-", 2, Flag.NONE)
    assert out.getvalue() == "-1977"


def test_combined_flags_drive_padding():
    flags = Flag.ZEROPAD | Flag.PLUS

    zeropadded = Output()
    zeropadded.put_reversed("7791", 8, flags)
    assert zeropadded.getvalue() == "1977"

    spaced = Output()
    spaced.put_reversed("7791", 8, flags & ~Flag.ZEROPAD)
    assert spaced.getvalue() == "    1977"

    left = Output()
    left.put_reversed("7791", 8, flags | Flag.LEFT)
    assert left.getvalue() == "1977    "