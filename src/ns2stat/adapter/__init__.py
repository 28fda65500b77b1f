"""Adapter module for IO boundaries.

Adapters wrap external formats behind domain-focused interfaces.
Core logic only ever sees GameSummary values.

Structure:
- adapter/ingest/  - raw NS2 round files (JSON) -> GameSummary
"""

from ns2stat.adapter.ingest import load_games, load_round_file, parse_round, summarize_round

__all__ = [
    "load_games",
    "load_round_file",
    "parse_round",
    "summarize_round",
]
