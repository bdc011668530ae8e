"""
IPPcode19 Parser – command-line interface
=========================================

Usage
-----
::

    python -m ippcode_parser [OPTIONS] < program.src > program.xml

Options
-------
--help                Print usage and exit (cannot be combined).
--stats=FILE          Write the statistics selected below to FILE.
--loc                 Number of instructions.
--comments            Number of lines carrying a comment.
--labels              Number of distinct labels declared with LABEL.
--jumps               Number of JUMP, JUMPIFEQ and JUMPIFNEQ instructions.
--verbose, -v         Enable DEBUG logging on stderr.

Statistics are written in the order the flags were given.

Exit codes
----------
0 success, 10 bad arguments, 11 / 12 statistics file open / write failure,
21 wrong header, 22 unknown opcode, 23 any other lexical or syntax error
(input that is not valid UTF-8 included).
"""
from __future__ import annotations

import argparse
import logging
import sys

from .config import RunConfig, build_run_config
from .errors import IppcodeError, UsageError
from .models import STAT_COUNTERS
from .pipeline.analysis import IppcodeAnalysis

logger = logging.getLogger(__name__)

HELP_TEXT = """\
ippcode_parser loads code from standard input (stdin)
in the IPPcode19 language, checks lexical and syntactic correctness
of the code and outputs the XML representation of the program
to standard output (stdout). No additional arguments are required.
-------------------------------------------------------------------
Statistics: --stats=file
code statistics will be written to *file*

Parameters (--stats argument is required):
--loc       lines of code
--comments  lines with comments
--labels    number of unique defined labels
--jumps     number of conditional and unconditional jumps
"""


class _ArgumentParser(argparse.ArgumentParser):
    """Reports bad arguments as :class:`UsageError` instead of exiting with 2."""

    def error(self, message: str) -> None:  # type: ignore[override]
        raise UsageError(message)


class _CounterAction(argparse.Action):
    """Record a statistics counter flag, keeping command-line order."""

    def __init__(self, option_strings, dest, **kwargs) -> None:
        super().__init__(option_strings, dest, nargs=0, **kwargs)

    def __call__(self, parser, namespace, values, option_string=None) -> None:
        counters = list(getattr(namespace, self.dest) or [])
        counters.append(option_string.lstrip("-"))
        setattr(namespace, self.dest, counters)


def _build_parser() -> argparse.ArgumentParser:
    p = _ArgumentParser(
        prog="ippcode_parser",
        description="IPPcode19 parser – validate source and emit its XML form",
        add_help=False,
        allow_abbrev=False,
    )
    p.add_argument("--help", action="count", default=0, dest="help")
    p.add_argument(
        "--stats",
        action="append",
        default=None,
        metavar="FILE",
        help="Write the selected statistics to FILE",
    )
    for name in STAT_COUNTERS:
        p.add_argument(f"--{name}", action=_CounterAction, dest="counters", default=None)
    p.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose (DEBUG) logging",
    )
    return p


def parse_config(argv: list[str] | None = None) -> RunConfig:
    args = _build_parser().parse_args(argv)
    return build_run_config(
        help_count=args.help,
        stats_paths=args.stats or [],
        counters=args.counters or [],
        verbose=args.verbose,
    )


def main(argv: list[str] | None = None) -> int:
    try:
        config = parse_config(argv)
    except UsageError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return exc.exit_code

    if config.show_help:
        sys.stdout.write(HELP_TEXT)
        return 0

    logging.basicConfig(
        level=logging.DEBUG if config.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if hasattr(sys.stdin, "reconfigure"):
        sys.stdin.reconfigure(encoding="utf-8")

    analysis = IppcodeAnalysis(stats=config.stats)
    try:
        result = analysis.analyze_stream(sys.stdin)
    except IppcodeError as exc:
        logger.debug("Aborting with exit code %d", exc.exit_code)
        print(f"error: {exc}", file=sys.stderr)
        return exc.exit_code

    sys.stdout.write(result.to_xml())
    return 0


if __name__ == "__main__":
    sys.exit(main())
