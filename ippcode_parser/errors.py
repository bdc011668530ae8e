"""
Error taxonomy.

Every failure is fatal: the exception propagates to
:func:`ippcode_parser.cli.main`, which prints it and exits with the
``exit_code`` of its class.
"""
from __future__ import annotations

from typing import Optional


class IppcodeError(Exception):
    """Base class for every error the parser reports.

    Concrete subclasses set ``exit_code`` to their process exit status.
    """

    exit_code: int

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


# ---------------------------------------------------------------------------
# Configuration / I/O
# ---------------------------------------------------------------------------


class UsageError(IppcodeError):
    """Bad command-line flag combination."""

    exit_code = 10


class StatsOpenError(IppcodeError):
    """The statistics file could not be opened."""

    exit_code = 11


class StatsWriteError(IppcodeError):
    """Writing to the statistics file failed."""

    exit_code = 12


# ---------------------------------------------------------------------------
# Source errors
# ---------------------------------------------------------------------------


class SourceError(IppcodeError):
    """An error located in the source program."""

    def __init__(self, message: str, line: Optional[int] = None) -> None:
        super().__init__(message)
        self.line = line

    def at_line(self, line: int) -> "SourceError":
        """Attach *line* unless the error already knows where it happened."""
        if self.line is None:
            self.line = line
        return self

    def __str__(self) -> str:
        if self.line is not None:
            return f"line {self.line}: {self.message}"
        return self.message


class HeaderError(SourceError):
    """Missing or mismatched ``.IPPcode19`` header."""

    exit_code = 21


class UnknownOpcodeError(SourceError):
    exit_code = 22


class GrammarError(SourceError):
    """Lexical or syntactic error inside an instruction."""

    exit_code = 23


class OperandCountError(GrammarError):
    """Too many or too few operands for an opcode."""


class LexicalError(GrammarError):
    """An operand token has the wrong shape."""
