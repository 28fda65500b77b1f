"""Skill signal and lineup history for team suggestions."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence

from ns2stat.models.types import GameSummary, Stats, UserStats


def _score_per_game(user: UserStats) -> float | None:
    if user.games.total == 0:
        return None
    return user.score.total / user.games.total


def score_per_game(stats: Stats, default: float | None = None) -> Callable[[str], float]:
    """Build a skill_of callable from historical stats.

    Skill is total score divided by games played. Players without history
    get default, or the mean skill of all known players when default is
    None (0.0 if nobody is known).

    Args:
        stats: Historical stats snapshot.
        default: Skill for unknown players.

    Returns:
        Callable mapping a player identifier to a skill value.
    """
    known: dict[str, float] = {}
    for name, user in stats.users.items():
        value = _score_per_game(user)
        if value is not None:
            known[name] = value

    if default is None:
        default = sum(known.values()) / len(known) if known else 0.0
    fallback = default

    def skill_of(player: str) -> float:
        return known.get(player, fallback)

    return skill_of


def find_past_lineups(
    games: Iterable[GameSummary],
    players: Sequence[str],
    marine_com: str | None = None,
    alien_com: str | None = None,
    limit: int = 4,
) -> list[GameSummary]:
    """Find past games played by exactly this roster and these commanders.

    Longest games come first.
    """
    roster = set(players)
    matches = [
        game
        for game in games
        if game.player_count() == len(roster)
        and game.marines.commander == marine_com
        and game.aliens.commander == alien_com
        and all(p in game.marines.players or p in game.aliens.players for p in roster)
    ]
    matches.sort(key=lambda game: game.round_length, reverse=True)
    return matches[:limit]
