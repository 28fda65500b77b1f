"""Pydantic models for ns2stat.

GameSummary and friends are the validated, read-only inputs of the core.
Stats and friends are the frozen snapshots it produces.
All models are serialized as-is by the API and the CLI.
"""

from __future__ import annotations

from typing import Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    NonNegativeFloat,
    NonNegativeInt,
    computed_field,
    model_validator,
)

Side = Literal["marines", "aliens"]
WinningTeam = Literal["none", "marines", "aliens"]

SIDES: tuple[Side, Side] = ("marines", "aliens")

# Sentinel for Stats.latest_game when no game has been folded in
NO_GAMES = 0


class FrozenModel(BaseModel):
    """Base for immutable models."""

    model_config = ConfigDict(frozen=True)


# ============================================================================
# Game Summary (input)
# ============================================================================


class PlayerSummary(FrozenModel):
    """Counters for one player in one game."""

    kills: NonNegativeInt = 0
    assists: NonNegativeInt = 0
    deaths: NonNegativeInt = 0
    score: NonNegativeInt = 0
    hits: NonNegativeInt = 0
    misses: NonNegativeInt = 0


class TeamSummary(FrozenModel):
    """One side of a game.

    Invariants:
    - commander, if set, is a key of players
    - rt_graph time offsets are non-decreasing
    """

    players: dict[str, PlayerSummary] = Field(default_factory=dict)
    commander: str | None = None
    rt_graph: list[tuple[NonNegativeFloat, int]] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_invariants(self) -> TeamSummary:
        if self.commander is not None and self.commander not in self.players:
            raise ValueError(f"commander {self.commander!r} is not a team member")
        offsets = [offset for offset, _ in self.rt_graph]
        if any(later < earlier for earlier, later in zip(offsets, offsets[1:])):
            raise ValueError("rt_graph time offsets must be non-decreasing")
        return self

    def is_commander(self, player: str) -> bool:
        return self.commander is not None and self.commander == player


class GameSummary(FrozenModel):
    """Canonical representation of one completed game."""

    round_date: NonNegativeInt
    winning_team: WinningTeam
    round_length: NonNegativeFloat
    map_name: str
    marines: TeamSummary = Field(default_factory=TeamSummary)
    aliens: TeamSummary = Field(default_factory=TeamSummary)

    @model_validator(mode="after")
    def _check_unique_players(self) -> GameSummary:
        both = self.marines.players.keys() & self.aliens.players.keys()
        if both:
            raise ValueError(f"players on both teams: {sorted(both)}")
        return self

    def team(self, side: Side) -> TeamSummary:
        return self.marines if side == "marines" else self.aliens

    def player_count(self) -> int:
        return len(self.marines.players) + len(self.aliens.players)


# ============================================================================
# Stats (output)
# ============================================================================


class Stat(FrozenModel):
    """A counter split by the team it was earned on."""

    marines: NonNegativeInt = 0
    aliens: NonNegativeInt = 0

    @computed_field
    @property
    def total(self) -> int:
        return self.marines + self.aliens

    def __add__(self, other: Stat) -> Stat:
        return Stat(marines=self.marines + other.marines, aliens=self.aliens + other.aliens)


class UserStats(FrozenModel):
    """Accumulated stats for one player identifier."""

    games: Stat = Stat()
    commander: Stat = Stat()
    wins: Stat = Stat()
    kills: Stat = Stat()
    assists: Stat = Stat()
    deaths: Stat = Stat()
    score: Stat = Stat()
    hits: Stat = Stat()
    misses: Stat = Stat()

    @computed_field
    @property
    def kd(self) -> float | None:
        """Kills per death; None without deaths."""
        if self.deaths.total == 0:
            return None
        return self.kills.total / self.deaths.total

    @computed_field
    @property
    def kda(self) -> float | None:
        """Kills plus assists per death; None without deaths."""
        if self.deaths.total == 0:
            return None
        return (self.kills.total + self.assists.total) / self.deaths.total


class MapStats(FrozenModel):
    """Win counts for one map. Draws count toward total_games only."""

    total_games: NonNegativeInt = 0
    marine_wins: NonNegativeInt = 0
    alien_wins: NonNegativeInt = 0


class Stats(FrozenModel):
    """Global snapshot of all games folded in so far."""

    latest_game: NonNegativeInt = NO_GAMES
    users: dict[str, UserStats] = Field(default_factory=dict)
    maps: dict[str, MapStats] = Field(default_factory=dict)
    total_games: NonNegativeInt = 0
    marine_wins: NonNegativeInt = 0
    alien_wins: NonNegativeInt = 0


class ContinuousEntry(FrozenModel):
    """One point of the continuous stats time series."""

    date: int
    stats: Stats


# ============================================================================
# Team Suggestion
# ============================================================================


class TeamSuggestion(FrozenModel):
    """Result of team balancing."""

    marines: list[str]
    aliens: list[str]
    marine_commander: str | None
    alien_commander: str | None
    marine_skill: float
    alien_skill: float

    @computed_field
    @property
    def imbalance(self) -> float:
        return abs(self.marine_skill - self.alien_skill)
