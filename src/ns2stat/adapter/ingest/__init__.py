"""Ingestion adapters for raw round files.

- schema: pydantic models of the raw round JSON
- summarize: raw round -> GameSummary
- loader: file and directory loading
"""

from ns2stat.adapter.ingest.loader import load_games, load_round_file, parse_round
from ns2stat.adapter.ingest.schema import RawRound
from ns2stat.adapter.ingest.summarize import summarize_round

__all__ = [
    "RawRound",
    "load_games",
    "load_round_file",
    "parse_round",
    "summarize_round",
]
