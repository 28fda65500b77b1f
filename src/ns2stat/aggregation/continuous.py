"""Continuous stats: cumulative snapshots over time.

One entry per retained game, holding the Stats of every retained game
up to and including it. Cumulative prefix, not a sliding window.
"""

from __future__ import annotations

from collections.abc import Iterable

from ns2stat.aggregation.stats import StatsAccumulator
from ns2stat.core.errors import InvalidRange
from ns2stat.models.types import GameSummary, Stats


def in_range(round_date: int, from_date: int | None, to_date: int | None) -> bool:
    """Inclusive range check; a None bound is unbounded."""
    if from_date is not None and round_date < from_date:
        return False
    if to_date is not None and round_date > to_date:
        return False
    return True


def check_range(from_date: int | None, to_date: int | None) -> None:
    """Raise InvalidRange when both bounds are set and from > to."""
    if from_date is not None and to_date is not None and from_date > to_date:
        raise InvalidRange(from_date, to_date)


def build_continuous(
    games: Iterable[GameSummary],
    from_date: int | None = None,
    to_date: int | None = None,
) -> list[tuple[int, Stats]]:
    """Build the continuous stats time series.

    Games are stable-sorted by round_date, so games sharing a timestamp
    keep their input order and are each emitted.

    Args:
        games: Game summaries in any order.
        from_date: Inclusive lower bound (epoch seconds), or None.
        to_date: Inclusive upper bound (epoch seconds), or None.

    Returns:
        List of (round_date, Stats) pairs. Empty when no game qualifies.

    Raises:
        InvalidRange: If from_date > to_date.
    """
    check_range(from_date, to_date)

    retained = sorted(
        (game for game in games if in_range(game.round_date, from_date, to_date)),
        key=lambda game: game.round_date,
    )

    accumulator = StatsAccumulator()
    series: list[tuple[int, Stats]] = []
    for game in retained:
        accumulator.add(game)
        series.append((game.round_date, accumulator.snapshot()))
    return series
