"""Domain models for ns2stat.

Pure Python dataclasses representing stored entities.
These models are independent of SQLAlchemy and used throughout
the application for clean separation from the database layer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from ns2stat.models.types import GameSummary


@dataclass
class GameEntity:
    """Domain model for an ingested game.

    seq and ingested_at are assigned by the game store; they are None
    for games loaded straight from disk.
    """

    game_id: str
    source_name: str
    summary: GameSummary
    seq: int | None = None
    ingested_at: datetime | None = None


@dataclass
class IngestReport:
    """Outcome of ingesting a data directory."""

    data_dir: str
    loaded: int = 0
    skipped: int = 0
    game_ids: list[str] = field(default_factory=list)
