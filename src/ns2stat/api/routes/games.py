"""Games API endpoints.

GET /games         - Game summaries, optionally range-filtered
GET /games/latest  - Most recent game summary (null when none)
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from ns2stat.api.app import date_range, get_db_session
from ns2stat.db import repo
from ns2stat.db.repo import DbSession
from ns2stat.models.types import GameSummary

router = APIRouter()


@router.get("/games", response_model=list[GameSummary])
def list_games(
    bounds: tuple[int | None, int | None] = Depends(date_range),
    session: DbSession = Depends(get_db_session),
) -> list[GameSummary]:
    """List every stored game in [from, to], oldest first."""
    from_date, to_date = bounds
    return repo.get_game_summaries(session, from_date, to_date)


@router.get("/games/latest", response_model=GameSummary | None)
def latest_game(session: DbSession = Depends(get_db_session)) -> GameSummary | None:
    """Get the most recent game, or null if no game is stored."""
    game = repo.get_latest_game(session)
    return game.summary if game else None
