"""Teams API endpoint.

GET /teams/suggest - Balanced team suggestion for a player pool
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from ns2stat.aggregation import aggregate, filter_genuine
from ns2stat.api.app import get_db_session
from ns2stat.balance import score_per_game, suggest_teams
from ns2stat.core.errors import BalanceError
from ns2stat.db import repo
from ns2stat.db.repo import DbSession
from ns2stat.models.types import TeamSuggestion

router = APIRouter()


@router.get("/teams/suggest", response_model=TeamSuggestion)
def get_team_suggestion(
    players: list[str] = Query(..., description="Player pool"),
    marine_com: str | None = Query(None, description="Pinned marine commander"),
    alien_com: str | None = Query(None, description="Pinned alien commander"),
    session: DbSession = Depends(get_db_session),
) -> TeamSuggestion:
    """Suggest teams using score per game over genuine games as skill.

    Raises:
        HTTPException: 400 for an invalid commander or too few players.
    """
    stats = aggregate(filter_genuine(repo.get_game_summaries(session)))
    try:
        return suggest_teams(players, score_per_game(stats), marine_com, alien_com)
    except BalanceError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
