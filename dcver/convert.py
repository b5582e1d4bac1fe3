"""Packing of 0/1 matrices stored as CSV into a compact binary file."""

from __future__ import annotations

import re
from enum import IntEnum
from pathlib import Path
from typing import Iterable, Union

PathLike = Union[str, Path]

ROWS = 15544
COLS = 1200
PACKED_COLS = COLS // 8
MAX_LINE_LENGTH = 4096

# One "%d," conversion: optional whitespace, a signed integer, an optional comma.
_BIT_FIELD = re.compile(r"[ \t\n\v\f\r]*([+-]?[0-9]+),?")


class DataMode(IntEnum):
    """Kinds of data the converter understands."""

    UNDEFINED = 0
    CHAR = 1
    INT = 2
    FLOAT = 3


def pack_bits(bits: Iterable[int]) -> int:
    """Pack eight values into one byte, most significant bit first.

    Only the lowest bit of each value is used.
    """
    values = list(bits)
    if len(values) != 8:
        raise ValueError(f"expected 8 bits, got {len(values)}")
    result = 0
    for value in values:
        result = (result << 1) | (value & 1)
    return result


def unpack_byte(byte: int) -> list[int]:
    """Split a byte into its eight bits, most significant bit first."""
    if not 0 <= byte <= 0xFF:
        raise ValueError(f"byte out of range: {byte}")
    return [(byte >> shift) & 1 for shift in range(7, -1, -1)]


def _read_bits(text: str, count: int) -> tuple[list[int], int]:
    """Read up to ``count`` bits; return them and the last value seen.

    Reading stops at the first field that is not an integer; every bit
    after that repeats the last value read.
    """
    bits: list[int] = []
    last = 0
    pos = 0
    while len(bits) < count:
        match = _BIT_FIELD.match(text, pos)
        if match is None:
            break
        last = int(match.group(1)) & 1
        pos = match.end()
        bits.append(last)
    return bits, last


def csv_to_bin(csv_path: PathLike, bin_path: PathLike) -> None:
    """Pack a ROWS x COLS comma separated 0/1 matrix into ``bin_path``.

    Every eight consecutive values become one byte. When the input runs
    out or holds something other than an integer, the remaining cells
    repeat the last value read.
    """
    total_bits = ROWS * COLS
    with open(csv_path, encoding="latin-1") as src:
        text = src.read()
    bits, last = _read_bits(text, total_bits)
    bits.extend([last] * (-len(bits) % 8))
    packed = bytearray(pack_bits(bits[start:start + 8]) for start in range(0, len(bits), 8))
    fill = pack_bits([last] * 8)
    packed.extend(bytes([fill]) * (ROWS * PACKED_COLS - len(packed)))
    Path(bin_path).write_bytes(bytes(packed))


def bin_to_array(bin_path: PathLike) -> list[bytes]:
    """Read a packed file back as ROWS rows of PACKED_COLS bytes.

    A file that is too short is completed by repeating its last byte.
    """
    total = ROWS * PACKED_COLS
    with open(bin_path, "rb") as src:
        data = src.read(total)
    fill = data[-1:] or b"\x00"
    data += fill * (total - len(data))
    return [data[start:start + PACKED_COLS] for start in range(0, total, PACKED_COLS)]