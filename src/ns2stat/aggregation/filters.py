"""Game filters.

A "genuine" game lasted at least five minutes and had more than two
players on each team; shorter rounds and bot games skew the stats.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable

from ns2stat.models.types import GameSummary

MIN_ROUND_LENGTH = 300.0  # seconds
MIN_TEAM_SIZE = 3


def filter_by_length(
    games: Iterable[GameSummary], predicate: Callable[[float], bool]
) -> list[GameSummary]:
    """Keep games whose round_length satisfies predicate."""
    return [game for game in games if predicate(game.round_length)]


def filter_bot_games(games: Iterable[GameSummary]) -> list[GameSummary]:
    """Drop games that were likely bot games.

    Counts the players summarized onto each team. A player who switched
    sides counts once, for the team they played longer on, so a game
    kept up by switchers can fall below MIN_TEAM_SIZE here even though
    both sides saw three or more distinct players.
    """
    return [
        game
        for game in games
        if len(game.marines.players) >= MIN_TEAM_SIZE
        and len(game.aliens.players) >= MIN_TEAM_SIZE
    ]


def filter_genuine(games: Iterable[GameSummary]) -> list[GameSummary]:
    """Keep only genuine games, preserving order."""
    return filter_bot_games(filter_by_length(games, lambda length: length >= MIN_ROUND_LENGTH))
