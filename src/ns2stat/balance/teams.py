"""Team suggestions by balanced partitioning.

The free players (everyone but pinned commanders) are split between
marines and aliens so that team sizes differ by at most one and the
absolute difference of skill sums is minimal.

Ties are broken by taking the partition whose sorted marine identifier
tuple is lexicographically smallest, so identical input always yields
the identical split.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Protocol

import numpy as np

from ns2stat.core.errors import InsufficientPlayers, InvalidCommander
from ns2stat.models.types import TeamSuggestion

logger = logging.getLogger(__name__)

# Above this many free players the exhaustive search (2**n) gives way to greedy
MAX_EXHAUSTIVE_PLAYERS = 22

# Imbalances closer than this to the optimum count as ties
TIE_TOLERANCE = 1e-9


@dataclass(frozen=True)
class PartitionProblem:
    """Input to a partition search.

    Attributes:
        players: Free players, sorted by identifier.
        skills: Skill of each free player, aligned with players.
        marine_fixed: Players pinned to marines.
        alien_fixed: Players pinned to aliens.
        marine_base: Skill sum of marine_fixed.
        alien_base: Skill sum of alien_fixed.
    """

    players: tuple[str, ...]
    skills: tuple[float, ...]
    marine_fixed: tuple[str, ...] = ()
    alien_fixed: tuple[str, ...] = ()
    marine_base: float = 0.0
    alien_base: float = 0.0

    @property
    def pool_size(self) -> int:
        return len(self.players) + len(self.marine_fixed) + len(self.alien_fixed)

    def marine_key(self, free_marines: Iterable[str]) -> tuple[str, ...]:
        """Sorted full marine team, the tie-break key."""
        return tuple(sorted((*self.marine_fixed, *free_marines)))


class PartitionSearch(Protocol):
    """Strategy choosing which free players play marines."""

    def search(self, problem: PartitionProblem) -> tuple[str, ...]:
        """Return the free players assigned to marines."""
        ...


class ExhaustiveSearch:
    """Evaluate every assignment of the free players.

    Each assignment is encoded as a bit pattern over the free players
    (bit i set = player i plays marines); the skill sums of all 2**n
    patterns are computed at once with numpy.
    """

    def search(self, problem: PartitionProblem) -> tuple[str, ...]:
        n = len(problem.players)
        # Doubling: index k of the arrays is the assignment with bit pattern k
        marine_sums = np.zeros(1, dtype=np.float64)
        marine_counts = np.zeros(1, dtype=np.int64)
        for skill in problem.skills:
            marine_sums = np.concatenate([marine_sums, marine_sums + skill])
            marine_counts = np.concatenate([marine_counts, marine_counts + 1])

        free_total = float(sum(problem.skills))
        marine_totals = problem.marine_base + marine_sums
        alien_totals = problem.alien_base + (free_total - marine_sums)
        imbalance = np.abs(marine_totals - alien_totals)

        size_diff = (len(problem.marine_fixed) + marine_counts) - (
            len(problem.alien_fixed) + n - marine_counts
        )
        valid = np.abs(size_diff) <= 1
        # np.inf never wins the argmin below
        imbalance = np.where(valid, imbalance, np.inf)

        best = imbalance.min()
        candidates = np.flatnonzero(imbalance <= best + TIE_TOLERANCE)

        # Pinned players are constant across candidates, so within one team
        # size the smallest sorted marine tuple is the one whose membership
        # bits, read in identifier order, are largest.
        order = sorted(range(n), key=lambda i: problem.players[i])
        finalists = []
        for size in np.unique(marine_counts[candidates]):
            group = candidates[marine_counts[candidates] == size]
            for i in order:
                if len(group) == 1:
                    break
                in_marines = ((group >> i) & 1).astype(bool)
                if in_marines.any():
                    group = group[in_marines]
            finalists.append(int(group[0]))

        def free_marines(mask: int) -> tuple[str, ...]:
            return tuple(p for i, p in enumerate(problem.players) if (mask >> i) & 1)

        chosen = min((free_marines(mask) for mask in finalists), key=problem.marine_key)
        logger.debug(
            f"Exhaustive search over {1 << n} assignments: "
            f"imbalance={best:.3f}, ties={len(candidates)}"
        )
        return chosen


class GreedySearch:
    """Assign players, strongest first, to the weaker team with room left.

    Fast for any pool size but not guaranteed optimal.
    """

    def search(self, problem: PartitionProblem) -> tuple[str, ...]:
        capacity = (problem.pool_size + 1) // 2
        marine_size, alien_size = len(problem.marine_fixed), len(problem.alien_fixed)
        marine_total, alien_total = problem.marine_base, problem.alien_base
        marines: list[str] = []

        order = sorted(
            zip(problem.players, problem.skills), key=lambda item: (-item[1], item[0])
        )
        for player, skill in order:
            to_marines = alien_size >= capacity or (
                marine_size < capacity and marine_total <= alien_total
            )
            if to_marines:
                marines.append(player)
                marine_size += 1
                marine_total += skill
            else:
                alien_size += 1
                alien_total += skill
        return tuple(marines)


def default_strategy(free_players: int) -> PartitionSearch:
    """Exhaustive search where feasible, greedy beyond."""
    if free_players <= MAX_EXHAUSTIVE_PLAYERS:
        return ExhaustiveSearch()
    return GreedySearch()


def suggest_teams(
    pool: Iterable[str],
    skill_of: Callable[[str], float],
    marine_com: str | None = None,
    alien_com: str | None = None,
    strategy: PartitionSearch | None = None,
) -> TeamSuggestion:
    """Suggest balanced marine and alien teams.

    Args:
        pool: Player identifiers; duplicates are ignored.
        skill_of: Skill signal per identifier.
        marine_com: Player pinned to marines as commander, if any.
        alien_com: Player pinned to aliens as commander, if any.
        strategy: Partition search; defaults to default_strategy().

    Returns:
        TeamSuggestion partitioning the pool.

    Raises:
        InsufficientPlayers: If the pool has fewer than 2 players.
        InvalidCommander: If a commander is not in the pool, or the same
            player is pinned to both teams.
    """
    players = sorted(set(pool))
    if len(players) < 2:
        raise InsufficientPlayers(len(players))

    members = set(players)
    for commander in (marine_com, alien_com):
        if commander is not None and commander not in members:
            raise InvalidCommander(commander)
    if marine_com is not None and marine_com == alien_com:
        raise InvalidCommander(marine_com, "cannot command both teams")

    skills = {player: float(skill_of(player)) for player in players}
    marine_fixed = (marine_com,) if marine_com is not None else ()
    alien_fixed = (alien_com,) if alien_com is not None else ()
    free = tuple(p for p in players if p != marine_com and p != alien_com)

    problem = PartitionProblem(
        players=free,
        skills=tuple(skills[p] for p in free),
        marine_fixed=marine_fixed,
        alien_fixed=alien_fixed,
        marine_base=sum(skills[p] for p in marine_fixed),
        alien_base=sum(skills[p] for p in alien_fixed),
    )
    if strategy is None:
        strategy = default_strategy(len(free))

    # Sorted, so the skill sums below add up in a fixed order
    marines = list(problem.marine_key(strategy.search(problem)))
    marine_set = set(marines)
    aliens = [p for p in players if p not in marine_set]

    return TeamSuggestion(
        marines=marines,
        aliens=aliens,
        marine_commander=marine_com,
        alien_commander=alien_com,
        marine_skill=sum(skills[p] for p in marines),
        alien_skill=sum(skills[p] for p in aliens),
    )
