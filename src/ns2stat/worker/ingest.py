"""Data directory ingestion.

- Loads raw round files and stores the new ones in the game store
- Idempotent: files already stored (same game_id) are skipped
- Forbidden: aggregation, response shaping
"""

from __future__ import annotations

import logging
from pathlib import Path

from ns2stat.adapter.ingest import load_games
from ns2stat.db import repo
from ns2stat.db.repo import DbSession
from ns2stat.models.domain import IngestReport

logger = logging.getLogger(__name__)


def ingest_directory(session: DbSession, data_dir: Path) -> IngestReport:
    """Store every not-yet-ingested round file of data_dir.

    Nothing is committed if any file fails to parse.

    Args:
        session: Database session.
        data_dir: Directory of raw round files.

    Returns:
        IngestReport with loaded and skipped counts.

    Raises:
        NotADirectoryError: If data_dir is not a directory.
        GameParseError: If a round file can't be parsed.
    """
    games = load_games(data_dir)
    existing = repo.get_existing_game_ids(session)
    report = IngestReport(data_dir=str(data_dir))

    for game in games:
        if game.game_id in existing:
            report.skipped += 1
            continue
        repo.create_game(session, game)
        existing.add(game.game_id)
        report.loaded += 1
        report.game_ids.append(game.game_id)

    repo.commit(session)
    logger.info(
        f"Ingested {data_dir}: loaded={report.loaded} skipped={report.skipped} "
        f"stored={repo.count_games(session)}"
    )
    return report
