"""Stats aggregation over game summaries.

Folds games into per-user, per-map and global counters.
Every function here is pure: inputs are never mutated and each call
returns freshly built frozen snapshots.
"""

from __future__ import annotations

from collections.abc import Iterable

from ns2stat.models.types import (
    NO_GAMES,
    SIDES,
    GameSummary,
    MapStats,
    Stat,
    Stats,
    UserStats,
)

# Per-game counters copied from PlayerSummary into UserStats
PLAYER_COUNTERS = ("kills", "assists", "deaths", "score", "hits", "misses")

USER_FIELDS = ("games", "commander", "wins") + PLAYER_COUNTERS

_SIDE_INDEX = {"marines": 0, "aliens": 1}


class StatsAccumulator:
    """Running fold of games into Stats.

    Counters are kept in plain mutable lists while folding. snapshot()
    freezes them into a new Stats; frozen UserStats/MapStats of entries
    untouched since the previous snapshot are reused, which is safe
    because they are immutable.
    """

    def __init__(self) -> None:
        self.latest_game = NO_GAMES
        self.total_games = 0
        self.marine_wins = 0
        self.alien_wins = 0
        # user -> field -> [marines, aliens]
        self._users: dict[str, dict[str, list[int]]] = {}
        # map -> [total_games, marine_wins, alien_wins]
        self._maps: dict[str, list[int]] = {}
        self._frozen_users: dict[str, UserStats] = {}
        self._frozen_maps: dict[str, MapStats] = {}
        self._dirty_users: set[str] = set()
        self._dirty_maps: set[str] = set()

    def add(self, game: GameSummary) -> None:
        """Fold one game into the running counters."""
        for side in SIDES:
            team = game.team(side)
            index = _SIDE_INDEX[side]
            won = game.winning_team == side

            for name, player in team.players.items():
                user = self._users.get(name)
                if user is None:
                    user = {field: [0, 0] for field in USER_FIELDS}
                    self._users[name] = user
                self._dirty_users.add(name)

                user["games"][index] += 1
                if team.is_commander(name):
                    user["commander"][index] += 1
                if won:
                    user["wins"][index] += 1
                for counter in PLAYER_COUNTERS:
                    user[counter][index] += getattr(player, counter)

        map_entry = self._maps.setdefault(game.map_name, [0, 0, 0])
        self._dirty_maps.add(game.map_name)
        map_entry[0] += 1
        self.total_games += 1
        if game.winning_team == "marines":
            map_entry[1] += 1
            self.marine_wins += 1
        elif game.winning_team == "aliens":
            map_entry[2] += 1
            self.alien_wins += 1

        if game.round_date > self.latest_game:
            self.latest_game = game.round_date

    def snapshot(self) -> Stats:
        """Freeze the current counters into a new Stats value."""
        # Counters are non-negative by construction, so validation is skipped
        for name in self._dirty_users:
            counters = self._users[name]
            self._frozen_users[name] = UserStats.model_construct(
                **{
                    field: Stat.model_construct(marines=m, aliens=a)
                    for field, (m, a) in counters.items()
                }
            )
        for name in self._dirty_maps:
            total, marine_wins, alien_wins = self._maps[name]
            self._frozen_maps[name] = MapStats.model_construct(
                total_games=total, marine_wins=marine_wins, alien_wins=alien_wins
            )
        self._dirty_users.clear()
        self._dirty_maps.clear()

        return Stats.model_construct(
            latest_game=self.latest_game,
            users=dict(self._frozen_users),
            maps=dict(self._frozen_maps),
            total_games=self.total_games,
            marine_wins=self.marine_wins,
            alien_wins=self.alien_wins,
        )


def aggregate(games: Iterable[GameSummary]) -> Stats:
    """Fold games into a Stats snapshot.

    Any input order is accepted. latest_game is the maximum round_date
    seen, or NO_GAMES for an empty input.

    Args:
        games: Validated game summaries.

    Returns:
        New frozen Stats.
    """
    accumulator = StatsAccumulator()
    for game in games:
        accumulator.add(game)
    return accumulator.snapshot()


def _merge_users(a: UserStats, b: UserStats) -> UserStats:
    return UserStats.model_construct(
        **{field: getattr(a, field) + getattr(b, field) for field in USER_FIELDS}
    )


def _merge_maps(a: MapStats, b: MapStats) -> MapStats:
    return MapStats.model_construct(
        total_games=a.total_games + b.total_games,
        marine_wins=a.marine_wins + b.marine_wins,
        alien_wins=a.alien_wins + b.alien_wins,
    )


def merge_stats(a: Stats, b: Stats) -> Stats:
    """Combine two snapshots field by field.

    Associative and commutative with Stats() as identity, so that
    aggregate(A + B) == merge_stats(aggregate(A), aggregate(B)).
    """
    users = dict(a.users)
    for name, user in b.users.items():
        users[name] = _merge_users(users[name], user) if name in users else user

    maps = dict(a.maps)
    for name, map_stats in b.maps.items():
        maps[name] = _merge_maps(maps[name], map_stats) if name in maps else map_stats

    return Stats.model_construct(
        latest_game=max(a.latest_game, b.latest_game),
        users=users,
        maps=maps,
        total_games=a.total_games + b.total_games,
        marine_wins=a.marine_wins + b.marine_wins,
        alien_wins=a.alien_wins + b.alien_wins,
    )
