"""Team balancing module.

- Splits a player pool into two teams of near-equal skill
- Honors pinned commanders
- Derives the default skill signal and past lineups from history
- Forbidden: database access, file IO
"""

from ns2stat.balance.skill import find_past_lineups, score_per_game
from ns2stat.balance.teams import (
    ExhaustiveSearch,
    GreedySearch,
    PartitionProblem,
    PartitionSearch,
    suggest_teams,
)

__all__ = [
    "ExhaustiveSearch",
    "GreedySearch",
    "PartitionProblem",
    "PartitionSearch",
    "find_past_lineups",
    "score_per_game",
    "suggest_teams",
]
