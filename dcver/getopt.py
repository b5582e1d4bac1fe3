"""Command-line option parsing with GNU getopt semantics.

Short options are described by an option string ("ab:c::"), long options
by a sequence of :class:`LongOption`. Non-option arguments are permuted
to the end unless the option string starts with ``+`` or the environment
sets ``POSIXLY_CORRECT``. A leading ``-`` hands non-options back in order
with the code ``1``. A leading ``:`` (after any ``+`` or ``-``) silences
error messages and reports a missing argument as ``:``.
"""

from __future__ import annotations

import os
import sys
from enum import Enum
from typing import Iterator, Optional, Sequence, Union

from dcver.options import HasArg, LongOption

Code = Union[int, str]


class Ordering(Enum):
    """How non-option arguments are treated."""

    REQUIRE_ORDER = "require_order"
    PERMUTE = "permute"
    RETURN_IN_ORDER = "return_in_order"


def _is_nonoption(arg: str) -> bool:
    return not arg.startswith("-") or arg == "-"


class Getopt:
    """Incremental parser over a copy of ``argv`` (``argv[0]`` is the program name).

    After each call to :meth:`next`, ``optarg`` holds the option's argument,
    ``optopt`` the option that caused the last error and ``longind`` the
    index of the last long option matched. ``argv`` may be permuted; once
    parsing ends, ``argv[optind:]`` are the operands.
    """

    def __init__(
        self,
        argv: Sequence[str],
        optstring: str,
        longopts: Optional[Sequence[LongOption]] = None,
        long_only: bool = False,
        posixly_correct: bool = False,
        print_errors: bool = True,
    ) -> None:
        self.argv = list(argv)
        self.optstring = optstring
        self.longopts = list(longopts) if longopts is not None else None
        self.long_only = long_only
        self.posixly_correct = posixly_correct
        self.print_errors = print_errors
        self.optind = 1
        self.optarg: Optional[str] = None
        self.optopt: Code = "?"
        self.longind: Optional[int] = None
        self.ordering = Ordering.PERMUTE
        self._initialized = False
        self._options = optstring
        self._nextchar: Optional[str] = None
        self._first_nonopt = 1
        self._last_nonopt = 1

    def _warn(self, message: str) -> None:
        print(f"{self.argv[0]}: {message}", file=sys.stderr)

    def _initialize(self) -> None:
        if self.optind == 0:
            self.optind = 1
        self._first_nonopt = self._last_nonopt = self.optind
        self._nextchar = None
        options = self.optstring
        if options.startswith("-"):
            self.ordering = Ordering.RETURN_IN_ORDER
            options = options[1:]
        elif options.startswith("+"):
            self.ordering = Ordering.REQUIRE_ORDER
            options = options[1:]
        elif self.posixly_correct or os.environ.get("POSIXLY_CORRECT") is not None:
            self.ordering = Ordering.REQUIRE_ORDER
        else:
            self.ordering = Ordering.PERMUTE
        self._options = options
        self._initialized = True

    def _exchange(self) -> None:
        first, last, top = self._first_nonopt, self._last_nonopt, self.optind
        self.argv[first:top] = self.argv[last:top] + self.argv[first:last]
        self._first_nonopt += top - last
        self._last_nonopt = top

    def _process_long(self, prefix: str, long_only: bool, print_errors: bool) -> Optional[Code]:
        assert self.longopts is not None
        nextchar = self._nextchar or ""
        name, eq, value = nextchar.partition("=")
        options = self._options

        found: Optional[LongOption] = None
        index = -1
        for idx, opt in enumerate(self.longopts):
            if opt.name == name:
                found, index = opt, idx
                break

        if found is None:
            ambiguous: list[int] = []
            for idx, opt in enumerate(self.longopts):
                if not opt.name.startswith(name):
                    continue
                if found is None:
                    found, index = opt, idx
                elif (
                    long_only
                    or found.has_arg != opt.has_arg
                    or found.flag is not opt.flag
                    or found.val != opt.val
                ):
                    if not ambiguous:
                        ambiguous.append(index)
                    ambiguous.append(idx)
            if ambiguous:
                if print_errors:
                    choices = "".join(
                        f" '{prefix}{self.longopts[idx].name}'" for idx in ambiguous
                    )
                    self._warn(
                        f"option '{prefix}{nextchar}' is ambiguous; possibilities:{choices}"
                    )
                self._nextchar = ""
                self.optind += 1
                self.optopt = 0
                return "?"

        if found is None:
            if (
                not long_only
                or self.argv[self.optind][1:2] == "-"
                or nextchar[:1] not in options
            ):
                if print_errors:
                    self._warn(f"unrecognized option '{prefix}{nextchar}'")
                self._nextchar = None
                self.optind += 1
                self.optopt = 0
                return "?"
            return None

        self.optind += 1
        self._nextchar = None
        if eq:
            if found.has_arg != HasArg.NONE:
                self.optarg = value
            else:
                if print_errors:
                    self._warn(f"option '{prefix}{found.name}' doesn't allow an argument")
                self.optopt = found.val
                return "?"
        elif found.has_arg == HasArg.REQUIRED:
            if self.optind < len(self.argv):
                self.optarg = self.argv[self.optind]
                self.optind += 1
            else:
                if print_errors:
                    self._warn(f"option '{prefix}{found.name}' requires an argument")
                self.optopt = found.val
                return ":" if options.startswith(":") else "?"

        self.longind = index
        if found.flag is not None:
            found.flag(found.val)
            return 0
        return found.val

    def next(self) -> Optional[Code]:
        """Return the next option code, or None when the options are exhausted.

        Codes are the option character, a long option's ``val``, ``0`` when a
        flag callback was invoked, ``1`` for an in-order non-option, ``"?"``
        on error and ``":"`` for a missing argument in silent mode.
        """
        argv = self.argv
        argc = len(argv)
        if argc < 1:
            return None
        self.optarg = None
        if self.optind == 0 or not self._initialized:
            self._initialize()
        options = self._options
        print_errors = self.print_errors and not options.startswith(":")

        if not self._nextchar:
            if self._last_nonopt > self.optind:
                self._last_nonopt = self.optind
            if self._first_nonopt > self.optind:
                self._first_nonopt = self.optind
            if self.ordering is Ordering.PERMUTE:
                if self._first_nonopt != self._last_nonopt and self._last_nonopt != self.optind:
                    self._exchange()
                elif self._last_nonopt != self.optind:
                    self._first_nonopt = self.optind
                while self.optind < argc and _is_nonoption(argv[self.optind]):
                    self.optind += 1
                self._last_nonopt = self.optind
            if self.optind != argc and argv[self.optind] == "--":
                self.optind += 1
                if self._first_nonopt != self._last_nonopt and self._last_nonopt != self.optind:
                    self._exchange()
                elif self._first_nonopt == self._last_nonopt:
                    self._first_nonopt = self.optind
                self._last_nonopt = argc
                self.optind = argc
            if self.optind == argc:
                if self._first_nonopt != self._last_nonopt:
                    self.optind = self._first_nonopt
                return None
            arg = argv[self.optind]
            if _is_nonoption(arg):
                if self.ordering is Ordering.REQUIRE_ORDER:
                    return None
                self.optarg = arg
                self.optind += 1
                return 1
            if self.longopts is not None:
                if arg[1] == "-":
                    self._nextchar = arg[2:]
                    return self._process_long("--", self.long_only, print_errors)
                if self.long_only and (len(arg) > 2 or arg[1] not in options):
                    self._nextchar = arg[1:]
                    code = self._process_long("-", self.long_only, print_errors)
                    if code is not None:
                        return code
            self._nextchar = arg[1:]

        nextchar = self._nextchar
        c, rest = nextchar[0], nextchar[1:]
        self._nextchar = rest
        pos = options.find(c)
        if not rest:
            self.optind += 1
        if pos < 0 or c in ":;":
            if print_errors:
                self._warn(f"invalid option -- '{c}'")
            self.optopt = c
            return "?"
        spec = options[pos + 1:pos + 3]

        if c == "W" and spec[:1] == ";" and self.longopts is not None:
            if rest:
                target = rest
            elif self.optind == argc:
                if print_errors:
                    self._warn(f"option requires an argument -- '{c}'")
                self.optopt = c
                return ":" if options.startswith(":") else "?"
            else:
                target = argv[self.optind]
            self._nextchar = target
            self.optarg = None
            return self._process_long("-W ", False, print_errors)

        if spec[:1] == ":":
            if spec[1:2] == ":":
                if rest:
                    self.optarg = rest
                    self.optind += 1
                else:
                    self.optarg = None
            elif rest:
                self.optarg = rest
                self.optind += 1
            elif self.optind == argc:
                if print_errors:
                    self._warn(f"option requires an argument -- '{c}'")
                self.optopt = c
                c = ":" if options.startswith(":") else "?"
            else:
                self.optarg = argv[self.optind]
                self.optind += 1
            self._nextchar = None
        return c

    def __iter__(self) -> Iterator[tuple[Code, Optional[str]]]:
        """Yield ``(code, optarg)`` pairs until the options are exhausted."""
        while True:
            code = self.next()
            if code is None:
                return
            yield code, self.optarg


def _run(parser: Getopt) -> tuple[list[tuple[Code, Optional[str]]], list[str]]:
    found = list(parser)
    return found, parser.argv[parser.optind:]


def getopt(
    argv: Sequence[str], optstring: str
) -> tuple[list[tuple[Code, Optional[str]]], list[str]]:
    """Parse short options; return the ``(code, optarg)`` pairs and the operands."""
    return _run(Getopt(argv, optstring))


def getopt_long(
    argv: Sequence[str], optstring: str, longopts: Sequence[LongOption]
) -> tuple[list[tuple[Code, Optional[str]]], list[str]]:
    """Parse short and ``--`` long options; return the pairs and the operands."""
    return _run(Getopt(argv, optstring, longopts))


def getopt_long_only(
    argv: Sequence[str], optstring: str, longopts: Sequence[LongOption]
) -> tuple[list[tuple[Code, Optional[str]]], list[str]]:
    """Like :func:`getopt_long`, but long options may also start with one ``-``."""
    return _run(Getopt(argv, optstring, longopts, long_only=True))