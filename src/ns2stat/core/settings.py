"""Runtime settings read from the environment.

NS2STAT_DB_PATH       SQLite file for the game store (default data/ns2stat.db)
NS2STAT_DATA_DIR      Directory of raw round files ingested on API start-up
NS2STAT_CORS_ORIGINS  Comma-separated list of allowed CORS origins
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_DB_PATH = Path("data/ns2stat.db")
DEFAULT_CORS_ORIGINS = ("http://localhost:3000", "http://127.0.0.1:3000")


def _path_env(name: str) -> Path | None:
    value = os.getenv(name)
    if not value:
        return None
    return Path(value)


def _list_env(name: str) -> list[str]:
    raw = os.getenv(name, "")
    return [value.strip() for value in raw.split(",") if value.strip()]


@dataclass(frozen=True)
class Settings:
    db_path: Path
    data_dir: Path | None
    cors_origins: tuple[str, ...]

    @classmethod
    def from_env(cls) -> Settings:
        return cls(
            db_path=_path_env("NS2STAT_DB_PATH") or DEFAULT_DB_PATH,
            data_dir=_path_env("NS2STAT_DATA_DIR"),
            cors_origins=tuple(_list_env("NS2STAT_CORS_ORIGINS")) or DEFAULT_CORS_ORIGINS,
        )
