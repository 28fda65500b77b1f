"""Repository pattern for database operations.

Encapsulates all SQLAlchemy queries, keeping domain logic pure.
Returns domain models (not SQLAlchemy entities) to external callers.
Games always come back ordered by (round_date, seq).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from ns2stat.db.schema import GameRecord
from ns2stat.models.domain import GameEntity
from ns2stat.models.types import GameSummary

if TYPE_CHECKING:
    from sqlalchemy.orm import Session as DbSession
else:
    DbSession = Session

__all__ = ["DbSession"]


def _game_to_entity(record: GameRecord) -> GameEntity:
    """Convert SQLAlchemy GameRecord to domain entity."""
    return GameEntity(
        game_id=record.game_id,
        source_name=record.source_name,
        summary=GameSummary.model_validate_json(record.summary_json),
        seq=record.seq,
        ingested_at=record.ingested_at,
    )


def _ordered():
    return select(GameRecord).order_by(GameRecord.round_date, GameRecord.seq)


def get_games(
    session: DbSession,
    from_date: int | None = None,
    to_date: int | None = None,
) -> list[GameEntity]:
    """Get games with round_date in [from_date, to_date]; None is unbounded."""
    query = _ordered()
    if from_date is not None:
        query = query.where(GameRecord.round_date >= from_date)
    if to_date is not None:
        query = query.where(GameRecord.round_date <= to_date)
    return [_game_to_entity(r) for r in session.scalars(query)]


def get_game_summaries(
    session: DbSession,
    from_date: int | None = None,
    to_date: int | None = None,
) -> list[GameSummary]:
    """Same as get_games, summaries only."""
    return [game.summary for game in get_games(session, from_date, to_date)]


def get_latest_game(session: DbSession) -> GameEntity | None:
    """Get the most recent game (last ingested on a round_date tie)."""
    query = select(GameRecord).order_by(GameRecord.round_date.desc(), GameRecord.seq.desc())
    record = session.scalars(query.limit(1)).first()
    return _game_to_entity(record) if record else None


def get_existing_game_ids(session: DbSession) -> set[str]:
    """Get IDs of every stored game."""
    return set(session.scalars(select(GameRecord.game_id)))


def count_games(session: DbSession) -> int:
    """Count stored games."""
    return session.scalar(select(func.count()).select_from(GameRecord)) or 0


def create_game(session: DbSession, entity: GameEntity) -> GameEntity:
    """Create a new game record."""
    summary = entity.summary
    record = GameRecord(
        game_id=entity.game_id,
        source_name=entity.source_name,
        round_date=summary.round_date,
        map_name=summary.map_name,
        winning_team=summary.winning_team,
        round_length=summary.round_length,
        summary_json=summary.model_dump_json(),
    )
    session.add(record)
    return entity


def commit(session: DbSession) -> None:
    """Commit current transaction."""
    session.commit()
