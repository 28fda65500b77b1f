"""Tests for pydantic models.

Tests validate:
1. GameSummary invariants are enforced
2. Literal type constraints enforced
3. Computed fields (totals, ratios, imbalance)
4. Models are immutable
"""

import pytest
from pydantic import ValidationError

from ns2stat.models.types import (
    GameSummary,
    PlayerSummary,
    Stat,
    TeamSuggestion,
    TeamSummary,
    UserStats,
)


class TestTeamSummary:
    """Test TeamSummary model."""

    def test_commander_must_be_member(self):
        """A commander outside the team is rejected."""
        with pytest.raises(ValidationError):
            TeamSummary(players={"A": PlayerSummary()}, commander="B")

    def test_commander_optional(self):
        """Teams without a commander are valid."""
        team = TeamSummary(players={"A": PlayerSummary()})
        assert team.commander is None
        assert not team.is_commander("A")

    def test_rt_graph_must_be_ordered(self):
        """Decreasing time offsets are rejected."""
        with pytest.raises(ValidationError):
            TeamSummary(rt_graph=[(20.0, 1), (10.0, 2)])

    def test_rt_graph_equal_offsets(self):
        """Equal offsets are allowed."""
        team = TeamSummary(rt_graph=[(10.0, 1), (10.0, 2)])
        assert team.rt_graph[-1] == (10.0, 2)

    def test_negative_counters_rejected(self):
        """Player counters are non-negative."""
        with pytest.raises(ValidationError):
            PlayerSummary(kills=-1)


class TestGameSummary:
    """Test GameSummary model."""

    def test_valid_game(self):
        """Valid game should create model."""
        game = GameSummary(
            round_date=1_600_000_000,
            winning_team="aliens",
            round_length=612.5,
            map_name="ns2_summit",
            marines={"players": {"A": {"kills": 1}}, "commander": "A"},
            aliens={"players": {"B": {}}},
        )
        assert game.team("marines").commander == "A"
        assert game.player_count() == 2

    def test_player_on_both_teams(self):
        """A player cannot appear on both teams."""
        with pytest.raises(ValidationError):
            GameSummary(
                round_date=1,
                winning_team="none",
                round_length=1.0,
                map_name="m",
                marines={"players": {"A": {}}},
                aliens={"players": {"A": {}}},
            )

    def test_invalid_winning_team(self):
        """winning_team must be none, marines or aliens."""
        with pytest.raises(ValidationError):
            GameSummary(round_date=1, winning_team="draw", round_length=1.0, map_name="m")

    def test_immutable(self):
        """Summaries cannot be modified."""
        game = GameSummary(round_date=1, winning_team="none", round_length=1.0, map_name="m")
        with pytest.raises(ValidationError):
            game.map_name = "other"

    def test_json_round_trip(self):
        """Summaries survive a JSON round trip."""
        game = GameSummary(
            round_date=5,
            winning_team="marines",
            round_length=300.0,
            map_name="ns2_veil",
            marines={"players": {"A": {"score": 3}}, "rt_graph": [(1.0, 1)]},
        )
        assert GameSummary.model_validate_json(game.model_dump_json()) == game


class TestStat:
    """Test Stat and UserStats computed fields."""

    def test_total_and_add(self):
        """total sums both sides; + adds per side."""
        stat = Stat(marines=2, aliens=3) + Stat(marines=1)
        assert stat == Stat(marines=3, aliens=3)
        assert stat.total == 6

    def test_total_serialized(self):
        """total is part of the JSON shape."""
        assert Stat(marines=1).model_dump() == {"marines": 1, "aliens": 0, "total": 1}

    def test_ratios(self):
        """kd and kda divide by total deaths."""
        user = UserStats(
            kills=Stat(marines=6, aliens=2),
            assists=Stat(aliens=4),
            deaths=Stat(marines=4),
        )
        assert user.kd == 2.0
        assert user.kda == 3.0

    def test_ratios_without_deaths(self):
        """Ratios are None without deaths."""
        user = UserStats(kills=Stat(marines=5))
        assert user.kd is None
        assert user.kda is None


class TestTeamSuggestion:
    """Test TeamSuggestion model."""

    def test_imbalance(self):
        """imbalance is the absolute skill gap."""
        suggestion = TeamSuggestion(
            marines=["a"],
            aliens=["b"],
            marine_commander=None,
            alien_commander=None,
            marine_skill=3.0,
            alien_skill=5.5,
        )
        assert suggestion.imbalance == 2.5
        assert suggestion.model_dump()["imbalance"] == 2.5
