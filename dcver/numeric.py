"""Conversion of numeric CSV files to raw little-endian binary files."""

from __future__ import annotations

import math
import re
import struct
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Callable, Iterable, Iterator, TextIO, Union

from dcver.convert import MAX_LINE_LENGTH

PathLike = Union[str, Path]

_WHITESPACE = "[ \t\n\v\f\r]*"
_INT_FIELD = re.compile(_WHITESPACE + r"([+-]?[0-9]+)")
_FLOAT_FIELD = re.compile(
    _WHITESPACE
    + r"([+-]?(?:0x(?:[0-9a-f]+\.?[0-9a-f]*|\.[0-9a-f]+)(?:p[+-]?[0-9]+)?"
    r"|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:e[+-]?[0-9]+)?"
    r"|inf(?:inity)?"
    r"|nan(?:\([0-9a-z_]*\))?))",
    re.IGNORECASE,
)
_SEPARATORS = " ,\a\n"
_LONG_MIN = -(2**31)
_LONG_MAX = 2**31 - 1


@dataclass(frozen=True)
class CsvStats:
    """Shape of a CSV file and the outcome of converting it."""

    lines: int
    columns: int
    values: int
    newline_added: bool = False
    written: int = 0


def ensure_trailing_newline(path: PathLike) -> bool:
    """Append a newline to ``path`` unless it already ends with one.

    Returns True when a newline was added.
    """
    with open(path, "rb+") as handle:
        size = handle.seek(0, 2)
        if size:
            handle.seek(size - 1)
            if handle.read(1) == b"\n":
                return False
        handle.seek(0, 2)
        handle.write(b"\n")
    return True


def scan_csv(lines: Iterable[str]) -> CsvStats:
    """Count lines, the widest line and all values, by their separators."""
    line_count = 0
    max_cols = 0
    total = 0
    for line in lines:
        line_count += 1
        cols = line.count(",") + line.count("\n")
        total += cols
        max_cols = max(max_cols, cols)
    return CsvStats(lines=line_count, columns=max_cols, values=total)


def _chunks(handle: TextIO) -> Iterator[str]:
    """Yield lines as a fixed-size line reader would, splitting long ones."""
    return iter(lambda: handle.readline(MAX_LINE_LENGTH - 1), "")


def _to_int(text: str) -> int:
    value = min(max(int(text), _LONG_MIN), _LONG_MAX)
    return value & 0xFFFF


def _to_float(text: str) -> float:
    lowered = text.lower()
    if "nan" in lowered:
        return math.copysign(math.nan, -1.0 if lowered.startswith("-") else 1.0)
    if "inf" in lowered:
        return float(lowered)
    if "0x" in lowered:
        return float.fromhex(text)
    return float(text)


def _parse_chunk(
    chunk: str,
    pattern: re.Pattern[str],
    convert: Callable[[str], float],
    default: float,
) -> Iterator[float]:
    """Yield the numbers in one chunk; a field without a number yields ``default``."""
    pos = 0
    end = len(chunk)
    while pos < end:
        start = pos
        match = pattern.match(chunk, pos)
        if match is not None:
            value = convert(match.group(1))
            pos = match.end()
        else:
            value = default
        while pos < end and chunk[pos] in _SEPARATORS:
            pos += 1
        if pos == start:
            raise ValueError(f"cannot parse number at {chunk[start:].rstrip()!r}")
        yield value


def _convert(
    input_file: PathLike,
    output_file: PathLike,
    pattern: re.Pattern[str],
    convert: Callable[[str], float],
    default: float,
    fmt: str,
) -> CsvStats:
    newline_added = ensure_trailing_newline(input_file)
    with open(input_file, encoding="latin-1") as src:
        stats = scan_csv(_chunks(src))
    with open(input_file, encoding="latin-1") as src:
        values = [
            value
            for chunk in _chunks(src)
            for value in _parse_chunk(chunk, pattern, convert, default)
        ]
    Path(output_file).write_bytes(struct.pack(f"<{len(values)}{fmt}", *values))
    return replace(stats, newline_added=newline_added, written=len(values))


def convert_int_csv(input_file: PathLike, output_file: PathLike) -> CsvStats:
    """Write every integer of a CSV file as an unsigned 16-bit value.

    The input gets a trailing newline if it lacks one. Numbers are
    truncated to 16 bits; an empty field is written as 0.
    """
    return _convert(input_file, output_file, _INT_FIELD, _to_int, 0, "H")


def convert_float_csv(input_file: PathLike, output_file: PathLike) -> CsvStats:
    """Write every number of a CSV file as a 64-bit double.

    The input gets a trailing newline if it lacks one; an empty field is
    written as 0.0.
    """
    return _convert(input_file, output_file, _FLOAT_FIELD, _to_float, 0.0, "d")


def read_uint16(path: PathLike, count: int) -> list[int]:
    """Read ``count`` little-endian 16-bit values from ``path``.

    Values missing at the end of the file repeat the last one read.
    """
    with open(path, "rb") as src:
        data = src.read(2 * count)
    available = len(data) // 2
    values = list(struct.unpack(f"<{available}H", data[: 2 * available]))
    last = values[-1] if values else 0
    values.extend([last] * (count - available))
    return values