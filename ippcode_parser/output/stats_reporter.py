"""
StatisticsReporter
==================

Writes the requested program statistics to a file, one value per line, in
the order the counters were requested on the command line.
"""
from __future__ import annotations

import logging

from ..config import StatsConfig
from ..errors import StatsOpenError, StatsWriteError
from ..models import ProgramStatistics

logger = logging.getLogger(__name__)


class StatisticsReporter:
    """
    Parameters
    ----------
    config:
        Destination path and ordered counter names.
    """

    def __init__(self, config: StatsConfig) -> None:
        self.config = config

    def render(self, stats: ProgramStatistics) -> str:
        return "".join(f"{stats.get(name)}\n" for name in self.config.counters)

    def write(self, stats: ProgramStatistics) -> None:
        """
        Write *stats* to the configured file.

        The file is opened once and closed on every path, including a failed
        write.

        Raises
        ------
        StatsOpenError
            The file cannot be opened for writing.
        StatsWriteError
            Writing or closing the file failed.
        """
        try:
            sink = open(self.config.path, "w", encoding="utf-8")
        except OSError as exc:
            logger.debug("Cannot open %s: %s", self.config.path, exc)
            raise StatsOpenError("Failed to open specified statistics file.") from exc

        try:
            with sink:
                sink.write(self.render(stats))
        except OSError as exc:
            logger.debug("Cannot write %s: %s", self.config.path, exc)
            raise StatsWriteError("Failed to write to specified statistics file.") from exc

        logger.info(
            "Statistics written to %s (%s)",
            self.config.path,
            ", ".join(self.config.counters) or "no counters",
        )
