"""Raw round file schema.

One JSON document per round, as written by the game server's stats
plugin. Only the keys the summary needs are modelled; everything else
(kill feed, research, locations, server info...) is ignored.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, NonNegativeFloat, NonNegativeInt

# Raw team numbers
TEAM_MARINES = 1
TEAM_ALIENS = 2

BuildingEvent = Literal["Built", "Destroyed", "Placed", "Recycled", "Teleported"]


class RawModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class RawTeamStats(RawModel):
    """A player's counters while on one team."""

    kills: NonNegativeInt = 0
    deaths: NonNegativeInt = 0
    assists: NonNegativeInt = 0
    score: NonNegativeInt = 0
    hits: NonNegativeInt = 0
    misses: NonNegativeInt = 0
    time_played: NonNegativeFloat = Field(0.0, alias="timePlayed")
    commander_time: NonNegativeFloat = Field(0.0, alias="commanderTime")


class RawPlayerStat(RawModel):
    marines: RawTeamStats = Field(default_factory=RawTeamStats, alias="1")
    aliens: RawTeamStats = Field(default_factory=RawTeamStats, alias="2")
    player_name: str = Field(alias="playerName")
    last_team: int = Field(0, alias="lastTeam")


class RawBuilding(RawModel):
    """A building completion, death or recycle."""

    team: int = Field(alias="teamNumber")
    game_time: NonNegativeFloat = Field(alias="gameTime")
    tech_id: str = Field(alias="techId")
    built: bool = False
    destroyed: bool = False
    recycled: bool = False
    event: BuildingEvent | None = None


class RawRoundInfo(RawModel):
    round_date: NonNegativeInt = Field(alias="roundDate")
    winning_team: Literal[0, 1, 2] = Field(alias="winningTeam")
    round_length: NonNegativeFloat = Field(alias="roundLength")
    map_name: str = Field(alias="mapName")


class RawRound(RawModel):
    """Top-level raw round document."""

    round_info: RawRoundInfo = Field(alias="RoundInfo")
    player_stats: dict[str, RawPlayerStat] = Field(default_factory=dict, alias="PlayerStats")
    buildings: list[RawBuilding] = Field(default_factory=list, alias="Buildings")
