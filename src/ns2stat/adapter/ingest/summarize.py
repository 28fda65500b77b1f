"""Summarize raw rounds into GameSummary.

Rules:
- A player belongs to the team they played longer on; a tie goes to
  their last team, and players with no team at all are skipped
- The identifier is the player name
- The commander is the team member with the most commander time
- rt_graph tracks the team's resource tower count after each change
"""

from __future__ import annotations

import logging

from ns2stat.adapter.ingest.schema import (
    TEAM_ALIENS,
    TEAM_MARINES,
    RawBuilding,
    RawPlayerStat,
    RawRound,
)
from ns2stat.models.types import SIDES, GameSummary, PlayerSummary, Side, TeamSummary

logger = logging.getLogger(__name__)

_TEAM_NUMBERS: dict[Side, int] = {"marines": TEAM_MARINES, "aliens": TEAM_ALIENS}
_WINNERS = {0: "none", 1: "marines", 2: "aliens"}

# Resource tower tech per team
RT_TECH_IDS: dict[Side, str] = {"marines": "Extractor", "aliens": "Harvester"}


def _player_side(stat: RawPlayerStat) -> Side | None:
    marine_time = stat.marines.time_played
    alien_time = stat.aliens.time_played
    if marine_time > alien_time:
        return "marines"
    if alien_time > marine_time:
        return "aliens"
    if stat.last_team == TEAM_MARINES:
        return "marines"
    if stat.last_team == TEAM_ALIENS:
        return "aliens"
    return None


def _tower_delta(building: RawBuilding) -> int:
    if building.destroyed or building.recycled or building.event in ("Destroyed", "Recycled"):
        # Unfinished towers never counted
        return -1 if building.built else 0
    if building.event is not None:
        return 1 if building.event == "Built" else 0
    return 1 if building.built else 0


def build_rt_graph(buildings: list[RawBuilding], side: Side) -> list[tuple[float, int]]:
    """Resource tower count over game time for one team."""
    team_number = _TEAM_NUMBERS[side]
    tech_id = RT_TECH_IDS[side]
    towers = 0
    graph: list[tuple[float, int]] = []
    relevant = sorted(
        (b for b in buildings if b.team == team_number and b.tech_id == tech_id),
        key=lambda b: b.game_time,
    )
    for building in relevant:
        delta = _tower_delta(building)
        if delta == 0:
            continue
        towers = max(towers + delta, 0)
        graph.append((building.game_time, towers))
    return graph


def summarize_round(raw: RawRound) -> GameSummary:
    """Convert a raw round into a GameSummary.

    Args:
        raw: Parsed raw round.

    Returns:
        Validated GameSummary.
    """
    players: dict[Side, dict[str, PlayerSummary]] = {side: {} for side in SIDES}
    play_time: dict[str, float] = {}
    commander_time: dict[Side, dict[str, float]] = {side: {} for side in SIDES}

    for steam_id, stat in raw.player_stats.items():
        side = _player_side(stat)
        if side is None:
            continue
        team_stats = stat.marines if side == "marines" else stat.aliens
        name = stat.player_name

        if name in play_time:
            logger.warning(f"Duplicate player name {name!r} (steam id {steam_id}) in round")
            if team_stats.time_played <= play_time[name]:
                continue
            for other in SIDES:
                players[other].pop(name, None)
                commander_time[other].pop(name, None)

        play_time[name] = team_stats.time_played
        players[side][name] = PlayerSummary(
            kills=team_stats.kills,
            assists=team_stats.assists,
            deaths=team_stats.deaths,
            score=team_stats.score,
            hits=team_stats.hits,
            misses=team_stats.misses,
        )
        if team_stats.commander_time > 0:
            commander_time[side][name] = team_stats.commander_time

    teams = {}
    for side in SIDES:
        candidates = commander_time[side]
        commander = None
        if candidates:
            commander = min(candidates, key=lambda n: (-candidates[n], n))
        teams[side] = TeamSummary(
            players=players[side],
            commander=commander,
            rt_graph=build_rt_graph(raw.buildings, side),
        )

    info = raw.round_info
    return GameSummary(
        round_date=info.round_date,
        winning_team=_WINNERS[info.winning_team],
        round_length=info.round_length,
        map_name=info.map_name,
        marines=teams["marines"],
        aliens=teams["aliens"],
    )
