"""Command-line front end: convert CSV data files to binary files."""

from __future__ import annotations

import sys
from typing import Optional, Sequence

from dcver.convert import bin_to_array, csv_to_bin
from dcver.getopt import Getopt
from dcver.numeric import CsvStats, convert_float_csv, convert_int_csv, read_uint16
from dcver.options import HasArg, LongOption

PROG_NAME = "dcver"
VERSION = "1.0"
DEFAULT_MODE = "float"
_CHECK_COUNT = 2070
_CHECK_SHOWN_AFTER = 2050

_LONG_OPTIONS = (
    LongOption("help", HasArg.NONE, None, "h"),
    LongOption("version", HasArg.NONE, None, "v"),
    LongOption("input", HasArg.REQUIRED, None, "i"),
    LongOption("output", HasArg.REQUIRED, None, "o"),
    LongOption("mode", HasArg.REQUIRED, None, "m"),
)


class _OpenError(Exception):
    """A file needed by a conversion could not be opened."""


def print_help(prog_name: str) -> None:
    """Print the usage message."""
    print("lab2bin: datafile convert tools\n")
    print(f"Usage: {prog_name} [options]")
    print("Options:")
    print("  -h, --help             Show this help message")
    print("  -v, --version          Show the version")
    print("  -i, --input <file>     Specify input file")
    print("  -o, --output <file>    Specify output file")
    print("  -m, --mode <mode>      Specify data mode (bin, char, int, float)")


def default_output_path(input_file: str) -> str:
    """Replace everything from the last '.' of ``input_file`` with '.bin'.

    Without a '.', '.bin' is appended.
    """
    dot = input_file.rfind(".")
    if dot < 0:
        return input_file + ".bin"
    return input_file[:dot] + ".bin"


def _print_stats(stats: CsvStats) -> None:
    if stats.newline_added:
        print("已在文件末尾添加换行符")
    else:
        print("文件末尾已有换行符")
    print("文件处理:")
    print(f"行数: {stats.lines}, 列数: {stats.columns}, 数据个数: {stats.values}")


def _process_bin(input_file: str, output_file: str) -> None:
    try:
        csv_to_bin(input_file, output_file)
    except OSError as exc:
        raise _OpenError(f"文件{exc.filename}打开失败") from exc
    print("CSV 转 BIN 完成")
    try:
        rows = bin_to_array(output_file)
    except OSError as exc:
        raise _OpenError("无法打开bin文件") from exc
    print("BIN 文件已解压为 0/1 矩阵")
    print("第1行前20位:")
    print("".join(f"{value} " for value in rows[-1]))


def _process_int(input_file: str, output_file: str) -> None:
    try:
        stats = convert_int_csv(input_file, output_file)
    except OSError as exc:
        raise _OpenError(f"文件{exc.filename}打开失败") from exc
    _print_stats(stats)
    try:
        values = read_uint16(output_file, _CHECK_COUNT)
    except OSError as exc:
        raise _OpenError(f"文件{output_file}打开失败") from exc
    for value in values[_CHECK_SHOWN_AFTER + 1:]:
        print(f"数据：{value:04d}")


def _process_float(input_file: str, output_file: str) -> None:
    try:
        stats = convert_float_csv(input_file, output_file)
    except OSError as exc:
        raise _OpenError(f"文件{exc.filename}打开失败") from exc
    _print_stats(stats)


def _report_bad_option(optopt: object) -> None:
    if optopt in ("i", "o", "m"):
        print(f"Option -{optopt} requires an argument.", file=sys.stderr)
    else:
        code = ord(optopt) if isinstance(optopt, str) else int(optopt)
        print(f"Unknown option character `\\x{code:x}'.", file=sys.stderr)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the converter on ``argv`` (without the program name); return the exit status."""
    args = list(sys.argv[1:] if argv is None else argv)
    parser = Getopt([PROG_NAME, *args], "hvi:o:m:", _LONG_OPTIONS)

    input_file: Optional[str] = None
    output_file: Optional[str] = None
    data_mode: Optional[str] = None

    while (code := parser.next()) is not None:
        if code == "h":
            print_help(PROG_NAME)
            return 0
        if code == "v":
            print(f"Version {VERSION}")
            return 0
        if code == "i":
            input_file = parser.optarg
        elif code == "o":
            output_file = parser.optarg
        elif code == "m":
            data_mode = parser.optarg
        elif code == "?":
            _report_bad_option(parser.optopt)
            return 1
        else:
            print_help(PROG_NAME)
            return 1

    operands = parser.argv[parser.optind:]
    if operands:
        print("Non-option arguments: " + "".join(f"{arg} " for arg in operands))
        print("options start with - or --")
        print("Use -h or --help for usage information.")
        return 1

    if input_file:
        print(f"Input file: {input_file}")
    if output_file:
        print(f"Output file: {output_file}")
    if input_file is not None and output_file is None:
        print(f"Default output file: {input_file}")
        dot = input_file.rfind(".")
        print(f"dot_position: {input_file[dot:] if dot >= 0 else '(null)'}")
        output_file = default_output_path(input_file)
        print(f"Default output file: {output_file}")
        print(f"Output file not specified, using default: {output_file}")

    if data_mode is not None:
        print(f"Data mode: {data_mode}")
    else:
        data_mode = DEFAULT_MODE
        print(f"Data mode not specified, using default: {data_mode}")

    handlers = {"b": ("bin", _process_bin), "i": ("int", _process_int), "f": ("float", _process_float)}
    kind = data_mode[:1]
    if kind == "c":
        print("Data mode: char")
        return 0
    if kind not in handlers:
        print("Unknown data mode, using default: int")
        return 0

    name, handler = handlers[kind]
    print(f"Data mode: {name}")
    if input_file is None or output_file is None:
        print("No input file specified.", file=sys.stderr)
        return 1
    try:
        handler(input_file, output_file)
    except _OpenError as exc:
        print(exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())