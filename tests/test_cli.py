import struct

import pytest

from dcver.cli import default_output_path, main, print_help
from dcver.convert import PACKED_COLS, ROWS


@pytest.mark.parametrize(
    "given, expected",
    [
        ("data.csv", "data.bin"),
        ("data", "data.bin"),
        ("a.b.c", "a.b.bin"),
    ],
)
def test_default_output_path(given, expected):
    assert default_output_path(given) == expected


def test_print_help_mentions_options(capsys):
    print_help("prog")
    out = capsys.readouterr().out
    assert "Usage: prog [options]" in out
    assert "-m, --mode <mode>" in out


def test_version(capsys):
    assert main(["-v"]) == 0
    assert "Version 1.0" in capsys.readouterr().out


def test_help_long(capsys):
    assert main(["--help"]) == 0
    assert "lab2bin: datafile convert tools" in capsys.readouterr().out


def test_non_option_arguments(capsys):
    assert main(["extra"]) == 1
    out = capsys.readouterr().out
    assert "Non-option arguments: extra" in out
    assert "Use -h or --help for usage information." in out


def test_unknown_option(capsys):
    assert main(["-x"]) == 1
    assert "Unknown option character `\\x78'." in capsys.readouterr().err


def test_missing_argument(capsys):
    assert main(["-i"]) == 1
    assert "Option -i requires an argument." in capsys.readouterr().err


def test_float_mode_default_output(tmp_path, capsys):
    src = tmp_path / "values.csv"
    src.write_text("1.5,2.5\n3,4")
    assert main(["-i", str(src)]) == 0
    data = (tmp_path / "values.bin").read_bytes()
    assert list(struct.unpack("<4d", data)) == [1.5, 2.5, 3.0, 4.0]
    out = capsys.readouterr().out
    assert "Data mode not specified, using default: float" in out
    assert "已在文件末尾添加换行符" in out


def test_int_mode_with_long_options(tmp_path, capsys):
    src = tmp_path / "ints.csv"
    src.write_text("1,2\n3,4\n")
    dst = tmp_path / "out.dat"
    assert main([f"--input={src}", "--output", str(dst), "-m", "int"]) == 0
    assert list(struct.unpack("<4H", dst.read_bytes())) == [1, 2, 3, 4]
    out = capsys.readouterr().out
    assert "Data mode: int" in out
    assert "数据：0004" in out


def test_bin_mode(tmp_path, capsys):
    src = tmp_path / "bits.csv"
    src.write_text("1,0,1,0,1,0,1,0\n")
    dst = tmp_path / "bits.bin"
    assert main(["-i", str(src), "-o", str(dst), "-m", "bin"]) == 0
    data = dst.read_bytes()
    assert len(data) == ROWS * PACKED_COLS
    assert data[0] == 0b10101010
    assert "CSV 转 BIN 完成" in capsys.readouterr().out


def test_char_mode_writes_nothing(tmp_path, capsys):
    src = tmp_path / "c.csv"
    src.write_text("1,2\n")
    assert main(["-i", str(src), "-m", "char"]) == 0
    assert not (tmp_path / "c.bin").exists()
    assert "Data mode: char" in capsys.readouterr().out


def test_unknown_mode(capsys):
    assert main(["-m", "xyz"]) == 0
    assert "Unknown data mode, using default: int" in capsys.readouterr().out


def test_missing_input_file(tmp_path, capsys):
    missing = tmp_path / "absent.csv"
    assert main(["-i", str(missing), "-m", "float"]) == 1
    assert "打开失败" in capsys.readouterr().out


def test_no_input_for_conversion(capsys):
    assert main(["-m", "float"]) == 1
    assert "No input file specified." in capsys.readouterr().err