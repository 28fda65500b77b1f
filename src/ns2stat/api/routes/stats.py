"""Stats API endpoints.

GET /stats             - Stats over all genuine games
GET /stats/continuous  - Cumulative Stats after each genuine game in range
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from ns2stat.aggregation import aggregate, build_continuous, filter_genuine
from ns2stat.api.app import date_range, get_db_session
from ns2stat.db import repo
from ns2stat.db.repo import DbSession
from ns2stat.models.types import ContinuousEntry, Stats

router = APIRouter()


@router.get("/stats", response_model=Stats)
def get_stats(session: DbSession = Depends(get_db_session)) -> Stats:
    """Current stats. Zero-valued with latest_game=0 when there are no games."""
    return aggregate(filter_genuine(repo.get_game_summaries(session)))


@router.get("/stats/continuous", response_model=list[ContinuousEntry])
def get_continuous_stats(
    bounds: tuple[int | None, int | None] = Depends(date_range),
    session: DbSession = Depends(get_db_session),
) -> list[ContinuousEntry]:
    """Continuous stats over genuine games with round_date in [from, to].

    The range is applied before accumulating, so the first entry only
    contains its own game.
    """
    from_date, to_date = bounds
    games = filter_genuine(repo.get_game_summaries(session, from_date, to_date))
    return [
        ContinuousEntry(date=date, stats=stats)
        for date, stats in build_continuous(games, from_date, to_date)
    ]
