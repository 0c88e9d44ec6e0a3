# minimalstdio

A small, dependency-free library that formats and parses text the way the
C `printf` and `sscanf` families do, down to their edge cases: padding,
precision, alternate forms, rounding and the character counts they report.

## Formatting: `minimalstdio.printf`

```python
from minimalstdio.printf import sprintf, snprintf, Writeback

sprintf("%08.3f|%-6x|%#o", 3.14159, 255, 9)   # '0003.142|ff    |011'
snprintf(8, "Test %s", "Case")                 # ('Test Ca', 9)

count = Writeback()
sprintf("Test %n done", count)                 # count.value == 5
```

- `sprintf(fmt, *args)` – return the formatted text.
- `snprintf(size, fmt, *args)` – format into `size` slots, one of which is
  reserved for the terminator. Returns a tuple of the text that fit and the
  length the full text would have had; a length of `size` or more means the
  text was truncated.
- `fctprintf(out, fmt, *args)` – call `out` with each formatted character and
  return how many characters were produced.
- `printf(fmt, *args)` – write the formatted text to standard output and
  return its length.
- `format_to(output, fmt, *args)` – format into an existing
  `minimalstdio.output.Output` and return its character count.
- `Writeback` – receives the character count for a `%n` specifier in its
  `value` attribute.

Supported conversions are `%d %i %u %o %x %X %b %c %s %p %f %F %e %E %g %G %n %%`,
with the flags `- + space # 0`, a field width and precision (literal or `*`),
and the length modifiers `hh h l ll j z t`. Integer arguments are reduced to
the size of their C type (32 bits by default, 8 or 16 with `hh`/`h`, 64 with
`l`, `ll`, `j`, `z` or `t`). `%b` prints binary. `%c` takes a one-character
string or an integer code. `%s` stops at an embedded NUL and prints `(null)`
for `None`. `%p` takes an integer address (or uses the object's `id()`) and
prints `(nil)` for `None` or zero. Under `%f`, values whose magnitude exceeds
`1e9` are printed in exponential notation; NaN and infinities are spelled
`nan`, `inf` and `-inf`. An unknown conversion character is printed as is,
and a specifier cut off by the end of the format ends the output. Too few
arguments raise `TypeError`.

## Parsing: `minimalstdio.scanf`

```python
from minimalstdio.scanf import sscanf, strtol

sscanf("  one  two   12   13  ", "%*s %s %*d %d")   # ['two', 13]
sscanf("1234 0234 0x89ab", "%i %i %i")               # [1234, 156, 35243]
strtol("  -0x1f rest", 0)                            # (-31, 7)
```

- `sscanf(buffer, fmt)` – read values from `buffer` and return them as a list,
  in order. It supports `%c`, `%s`, character sets `%[...]` and `%[^...]`, and
  the integer conversions `%d %i %u %o %x %X`, with the `l` size modifier,
  maximum field widths and assignment suppression with `*`. Whitespace in the
  format skips any whitespace in the input; other literal characters must
  match exactly, and reading stops at the first one that does not. Integer
  results are reduced to 32 bits (64 with `l`); `%u %o %x %X` give unsigned
  values. An empty format returns an empty list.
- `strtol(text, base)` – parse a long integer at the start of `text`, with
  base detection for base 0 (`0x` for hexadecimal, leading `0` for octal).
  Returns the value and the index just past the digits, or `(0, 0)` when
  there are none; out-of-range values are clamped to the 64-bit limits.
- `ScanfError` – a `ValueError` raised where the C function would return
  `EOF`: a missing or empty buffer, a missing format, or an unterminated or
  empty character set.
- `EOF` – the constant `-1`.

## Building blocks

- `minimalstdio.output` – `Output`, a character destination that either
  buffers up to a limit or feeds a callable while always counting every
  character offered, and `Flag`, the conversion flags.
- `minimalstdio.integers` – `format_integer` writes an integer magnitude in
  base 2, 8, 10 or 16.
- `minimalstdio.fixed` – `get_components`, `write_components`,
  `write_decimal` and the `Components` dataclass for fixed-point output.
- `minimalstdio.floats` – `write_exponential`, `format_float`, and the
  approximations `log10_of_positive` and `pow10_of_int` they rely on.

## What it does not do

This is a library only: it has no command-line tool. It does not read from
files or streams (there is no `scanf` or `fscanf`), does not parse
floating-point input, and does not support `long double` conversions.

## Installing

```
pip install minimalstdio
```

To run the test suite:

```
pip install "minimalstdio[test]"
pytest
```