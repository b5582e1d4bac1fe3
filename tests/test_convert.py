import itertools

import pytest

from dcver.convert import (
    PACKED_COLS,
    ROWS,
    bin_to_array,
    csv_to_bin,
    pack_bits,
    unpack_byte,
)


def test_pack_then_unpack_round_trips_every_pattern():
    for bits in itertools.product((0, 1), repeat=8):
        assert unpack_byte(pack_bits(bits)) == list(bits)


def test_unpack_then_pack_round_trips_every_byte():
    for byte in range(256):
        assert pack_bits(unpack_byte(byte)) == byte


def test_pack_bits_uses_only_lowest_bit():
    assert pack_bits([3, 2, 5, 4, 7, 6, 9, 8]) == pack_bits([1, 0, 1, 0, 1, 0, 1, 0])


def test_pack_bits_first_value_is_most_significant():
    assert pack_bits([1, 0, 0, 0, 0, 0, 0, 0]) == 0x80


@pytest.mark.parametrize("bits", [[], [1] * 7, [0] * 9])
def test_pack_bits_rejects_wrong_length(bits):
    with pytest.raises(ValueError):
        pack_bits(bits)


@pytest.mark.parametrize("byte", [-1, 256])
def test_unpack_byte_rejects_out_of_range(byte):
    with pytest.raises(ValueError):
        unpack_byte(byte)


def test_csv_to_bin_packs_and_pads(tmp_path):
    first = [1, 0, 1, 1, 0, 0, 1, 0]
    second = [0, 1, 1, 0, 1, 0, 0, 1]
    csv = tmp_path / "m.csv"
    csv.write_text(",".join(str(v) for v in first + second) + "\n")
    out = tmp_path / "m.bin"
    csv_to_bin(csv, out)
    data = out.read_bytes()
    assert len(data) == ROWS * PACKED_COLS
    assert data[0] == pack_bits(first)
    assert data[1] == pack_bits(second)
    assert set(data[2:]) == {pack_bits([second[-1]] * 8)}


def test_csv_to_bin_repeats_last_value_after_bad_field(tmp_path):
    csv = tmp_path / "m.csv"
    csv.write_text("1,1,x,0,0\n")
    out = tmp_path / "m.bin"
    csv_to_bin(csv, out)
    data = out.read_bytes()
    assert set(data) == {pack_bits([1] * 8)}


def test_csv_to_bin_accepts_multiline_input(tmp_path):
    row = [0, 1] * 4
    csv = tmp_path / "m.csv"
    csv.write_text("\n".join(",".join(str(v) for v in row) for _ in range(3)) + "\n")
    out = tmp_path / "m.bin"
    csv_to_bin(csv, out)
    assert out.read_bytes()[:3] == bytes([pack_bits(row)] * 3)


def test_csv_to_bin_missing_input(tmp_path):
    with pytest.raises(FileNotFoundError):
        csv_to_bin(tmp_path / "absent.csv", tmp_path / "out.bin")


def test_bin_to_array_round_trip(tmp_path):
    bits = [1, 1, 0, 0, 1, 0, 1, 0] * 3
    csv = tmp_path / "m.csv"
    csv.write_text(",".join(str(v) for v in bits) + "\n")
    out = tmp_path / "m.bin"
    csv_to_bin(csv, out)
    array = bin_to_array(out)
    assert len(array) == ROWS
    assert all(len(row) == PACKED_COLS for row in array)
    assert [unpack_byte(b) for b in array[0][:3]] == [bits[0:8], bits[8:16], bits[16:24]]


def test_bin_to_array_pads_short_file_with_last_byte(tmp_path):
    path = tmp_path / "short.bin"
    path.write_bytes(bytes([5, 7]))
    array = bin_to_array(path)
    assert array[0][0] == 5
    assert array[0][1] == 7
    assert array[-1][-1] == 7


def test_bin_to_array_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        bin_to_array(tmp_path / "absent.bin")