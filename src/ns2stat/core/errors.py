"""Exception types raised by ns2stat.

Pure code raises these; the api and cli layers translate them
into client errors.
"""

from __future__ import annotations

from pathlib import Path


class Ns2StatError(Exception):
    """Base class for all ns2stat errors."""


class BalanceError(Ns2StatError, ValueError):
    """Team balancing was asked for something impossible."""


class InvalidCommander(BalanceError):
    """A pinned commander is not in the player pool."""

    def __init__(self, commander: str, reason: str = "is not in the player pool"):
        self.commander = commander
        super().__init__(f"Commander {commander!r} {reason}")


class InsufficientPlayers(BalanceError):
    """The player pool is too small to form two teams."""

    def __init__(self, pool_size: int):
        self.pool_size = pool_size
        super().__init__(f"Need at least 2 players to form teams, got {pool_size}")


class InvalidRange(Ns2StatError, ValueError):
    """A date range with from > to."""

    def __init__(self, from_date: int, to_date: int):
        self.from_date = from_date
        self.to_date = to_date
        super().__init__(f"Invalid range: from={from_date} is after to={to_date}")


class GameParseError(Ns2StatError):
    """A raw round file could not be parsed into a GameSummary."""

    def __init__(self, path: Path | str, detail: str | None = None):
        self.path = Path(path)
        message = f"Failed to parse file `{self.path}`"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
