"""Database schema for ns2stat.

A single games table holding one row per ingested round file.
The validated GameSummary is stored as JSON; the columns used for
filtering are denormalized next to it.
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Float, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class GameRecord(Base):
    """An ingested game.

    Invariant: UNIQUE(game_id)
    The same round file is never stored twice.
    seq preserves ingest order for games sharing a round_date.
    """

    __tablename__ = "games"

    seq: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    game_id: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    source_name: Mapped[str] = mapped_column(String(512), nullable=False)
    round_date: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    map_name: Mapped[str] = mapped_column(String(128), nullable=False)
    winning_team: Mapped[str] = mapped_column(String(8), nullable=False)
    round_length: Mapped[float] = mapped_column(Float, nullable=False)
    summary_json: Mapped[str] = mapped_column(Text, nullable=False)
    ingested_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=lambda: datetime.now(timezone.utc)
    )
