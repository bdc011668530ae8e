"""
Run configuration.

The command-line layer collects raw flag occurrences; this module turns them
into a validated :class:`RunConfig`, independent of how the flags were read.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from .errors import UsageError
from .models import STAT_COUNTERS


@dataclass(frozen=True)
class StatsConfig:
    """Where to write statistics and which counters, in order."""

    path: str
    counters: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class RunConfig:
    show_help: bool = False
    stats: Optional[StatsConfig] = None
    verbose: bool = False


def build_stats_config(
    stats_paths: Sequence[str],
    counters: Sequence[str],
) -> Optional[StatsConfig]:
    """
    Validate the statistics flags.

    Parameters
    ----------
    stats_paths:
        Every value given to ``--stats`` (at most one is allowed).
    counters:
        Counter names in the order they appeared on the command line.

    Returns
    -------
    StatsConfig | None
        *None* when no statistics were requested.
    """
    if len(stats_paths) > 1:
        raise UsageError("Multiple declarations of --stats argument.")

    seen = set()
    for name in counters:
        if name not in STAT_COUNTERS:
            raise UsageError(f"Unknown statistics counter --{name}.")
        if name in seen:
            raise UsageError(f"Multiple declarations of --{name} argument.")
        seen.add(name)

    if not stats_paths:
        if counters:
            raise UsageError("Statistic expansion argument set without --stats argument.")
        return None

    if not stats_paths[0]:
        raise UsageError("--stats argument requires a file name.")
    return StatsConfig(path=stats_paths[0], counters=list(counters))


def build_run_config(
    help_count: int,
    stats_paths: Sequence[str],
    counters: Sequence[str],
    verbose: bool = False,
) -> RunConfig:
    """Combine all flags into a :class:`RunConfig`, rejecting bad combinations."""
    if help_count:
        if help_count > 1:
            raise UsageError("Multiple declarations of --help argument.")
        if stats_paths or counters or verbose:
            raise UsageError("--help argument cannot be combined with other arguments.")
        return RunConfig(show_help=True)

    return RunConfig(
        stats=build_stats_config(stats_paths, counters),
        verbose=verbose,
    )
