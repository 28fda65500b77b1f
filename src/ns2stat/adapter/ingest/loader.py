"""Load raw round files from disk."""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import ValidationError

from ns2stat.adapter.ingest.schema import RawRound
from ns2stat.adapter.ingest.summarize import summarize_round
from ns2stat.core.errors import GameParseError
from ns2stat.core.identity import compute_game_id
from ns2stat.models.domain import GameEntity
from ns2stat.models.types import GameSummary

logger = logging.getLogger(__name__)


def parse_round(raw: bytes | str, path: Path | str = "<memory>") -> GameSummary:
    """Parse raw round JSON into a GameSummary.

    Raises:
        GameParseError: If the document is not valid JSON or does not match
            the raw round schema.
    """
    try:
        return summarize_round(RawRound.model_validate_json(raw))
    except ValidationError as e:
        raise GameParseError(path, f"{e.error_count()} validation error(s)") from e


def load_round_file(path: Path) -> GameEntity:
    """Load one round file.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        GameParseError: If the file can't be parsed.
    """
    raw = path.read_bytes()
    return GameEntity(
        game_id=compute_game_id(raw),
        source_name=path.name,
        summary=parse_round(raw, path),
    )


def load_games(data_dir: Path) -> list[GameEntity]:
    """Load every *.json round file in data_dir, sorted by file name.

    Raises:
        NotADirectoryError: If data_dir is not a directory.
        GameParseError: On the first file that can't be parsed.
    """
    data_dir = Path(data_dir)
    if not data_dir.is_dir():
        raise NotADirectoryError(f"Data path is not a directory: {data_dir}")

    paths = sorted(p for p in data_dir.glob("*.json") if p.is_file())
    games = [load_round_file(path) for path in paths]
    logger.info(f"Loaded {len(games)} round file(s) from {data_dir}")
    return games
