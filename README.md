# dcver

`dcver` turns comma-separated data files into binary files. The `dcver`
command has these modes:

- **bin**: reads a fixed-size grid of 0/1 values (15544 rows by 1200
  columns) and packs every eight values into one byte, with the most
  significant bit first. If the input runs out or holds something that is
  not an integer, the remaining cells repeat the last value read. The
  packed file is then read back and the bytes of its last row are printed.
- **int**: reads integers from lines of any length and writes each one as
  an unsigned 16-bit little-endian value (truncated to 16 bits). An empty
  field is written as 0. The output is then read back as 2070 values and
  those after the first 2051 are printed.
- **float**: reads numbers (decimal, hexadecimal, `inf`, `nan`) and writes
  each one as a 64-bit little-endian double. An empty field is written as
  0.0. This is the default mode.

In int and float modes, if the input file does not end with a newline, one
is added to the input file itself before it is read. Both modes print the
number of lines, the widest line and the number of values found.

## Installation

```
pip install .
```

## Command line

```
dcver -i data.csv -o data.bin -m int
```

| Option | Meaning |
| --- | --- |
| `-h`, `--help` | Show the help message |
| `-v`, `--version` | Show the version |
| `-i`, `--input <file>` | Input file |
| `-o`, `--output <file>` | Output file |
| `-m`, `--mode <mode>` | Data mode: `bin`, `char`, `int` or `float` |

- If no output file is given, the input file name is used with everything
  from its last `.` replaced by `.bin`, or with `.bin` appended if it has no
  `.`.
- Only the first letter of the mode is checked, so `-m f` means float.
  A mode starting with any other letter prints a message and does nothing.
- Long options can be shortened to any unique prefix, such as `--in`.
- Arguments that are not options are reported, and the exit status is 1.
- bin, int and float modes need an input file; without one the command
  exits with status 1.

The exit status is 0 on success and 1 on a bad option, a missing input
file or a file that cannot be opened.

## What it does not do

The `char` mode is accepted but converts nothing. There is no command for
turning a binary file back into CSV; `dcver.convert.bin_to_array` and
`dcver.numeric.read_uint16` read binary files back only from Python.

## Library use

```python
from dcver.convert import pack_bits, unpack_byte, csv_to_bin, bin_to_array
from dcver.numeric import convert_float_csv, convert_int_csv, read_uint16, scan_csv

pack_bits([1, 0, 1, 0, 0, 0, 0, 1])   # 0xA1
unpack_byte(0xA1)                     # [1, 0, 1, 0, 0, 0, 0, 1]

stats = scan_csv(["1,2,3\n", "4,5\n"])
print(stats.lines, stats.columns, stats.values)   # 2 3 5

result = convert_float_csv("readings.csv", "readings.bin")
print(result.written, result.newline_added)
```

- `dcver.convert`: `pack_bits`, `unpack_byte`, `csv_to_bin`,
  `bin_to_array` (returns the rows as `bytes`), the `DataMode` enum and the
  grid size constants `ROWS`, `COLS` and `PACKED_COLS`.
- `dcver.numeric`: `ensure_trailing_newline`, `scan_csv`,
  `convert_int_csv`, `convert_float_csv` (both return a `CsvStats` with
  `lines`, `columns`, `values`, `newline_added` and `written`) and
  `read_uint16`, which repeats the last value when the file is short.

## Option parsing

`dcver.getopt` provides a parser that follows the GNU getopt conventions:
argument permutation, `--` to end options, `+` / `-` / `:` prefixes in the
option string, `POSIXLY_CORRECT`, abbreviated long options and `-W foo`.
Long options are described with `dcver.options.LongOption` and
`dcver.options.HasArg`.

```python
from dcver.getopt import getopt_long
from dcver.options import HasArg, LongOption

longopts = [LongOption("input", HasArg.REQUIRED, val="i")]
pairs, operands = getopt_long(["prog", "--input", "a.csv", "extra"], "i:", longopts)
# pairs == [("i", "a.csv")], operands == ["extra"]
```

`getopt` and `getopt_long_only` work the same way. For step-by-step
parsing, `Getopt(...).next()` returns one option code at a time and
exposes `optarg`, `optopt`, `optind` and `longind`.