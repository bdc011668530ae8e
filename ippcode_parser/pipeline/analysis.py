"""
IppcodeAnalysis
===============

High-level facade combining :class:`ProgramParser` (validation and tree
building) with :class:`StatisticsReporter` (statistics file output).
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional, TextIO

from ..config import StatsConfig
from ..errors import LexicalError
from ..output.stats_reporter import StatisticsReporter
from .program_parser import ParseResult, ProgramParser

logger = logging.getLogger(__name__)


class IppcodeAnalysis:
    """
    Parse IPPcode19 source and optionally report statistics.

    Parameters
    ----------
    stats:
        Statistics destination and counters; *None* disables reporting.
    """

    def __init__(self, stats: Optional[StatsConfig] = None) -> None:
        self.stats = stats
        self._parser = ProgramParser()

    # ------------------------------------------------------------------
    # Primary API
    # ------------------------------------------------------------------

    def analyze_text(self, source: str) -> ParseResult:
        """
        Parse *source* and write statistics when configured.

        Statistics are only written after the whole program validated, so a
        source error never leaves a statistics file behind.
        """
        result = self._parser.parse_text(source)
        if self.stats is not None:
            StatisticsReporter(self.stats).write(result.statistics)
        return result

    def analyze_stream(self, stream: TextIO) -> ParseResult:
        return self.analyze_text(_read(stream.read))

    def analyze_file(self, file_path: str) -> ParseResult:
        """Parse the UTF-8 source file at *file_path*."""
        logger.info("Parsing file: %s", file_path)
        return self.analyze_text(_read(lambda: Path(file_path).read_text(encoding="utf-8")))


def _read(reader: Callable[[], str]) -> str:
    try:
        return reader()
    except UnicodeDecodeError as exc:
        raise LexicalError("Input is not valid UTF-8.") from exc
