"""Command-line interface for ns2stat.

    ns2stat stats DATA_DIR [--json] [--output PATH] [--continuous PATH]
    ns2stat teams DATA_DIR --teams A --teams B ... [--marine-com A] [--alien-com B]
    ns2stat ingest DATA_DIR [--db PATH]
    ns2stat serve [DATA_DIR] [--db PATH] [--address HOST] [--port PORT]
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated, Literal

import typer
from pydantic import TypeAdapter

from ns2stat.adapter.ingest import load_games
from ns2stat.aggregation import aggregate, build_continuous, filter_genuine
from ns2stat.balance import find_past_lineups, score_per_game, suggest_teams
from ns2stat.core.errors import BalanceError, GameParseError
from ns2stat.core.settings import Settings
from ns2stat.models.types import ContinuousEntry, GameSummary, Stats, TeamSummary

# Users need more kills and deaths than this to show up in the table
MIN_TABLE_KILLS = 50
MIN_TABLE_DEATHS = 50

Alignment = Literal["left", "right"]

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="Natural Selection 2 round statistics and team suggestions.",
)

DataDir = Annotated[
    Path,
    typer.Argument(help="Directory of raw round files (*.json)."),
]


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log debug output.")] = False,
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )


def _load_summaries(data_dir: Path) -> list[GameSummary]:
    try:
        return [game.summary for game in load_games(data_dir)]
    except (GameParseError, NotADirectoryError) as e:
        raise typer.BadParameter(str(e), param_hint="DATA_DIR") from e


def render_table(
    titles: list[str],
    alignments: list[Alignment],
    rows: list[list[str]],
) -> list[str]:
    """Format rows as aligned text columns."""
    widths = [
        max([len(title)] + [len(row[i]) for row in rows]) for i, title in enumerate(titles)
    ]
    lines = ["    ".join(title.ljust(width) for title, width in zip(titles, widths))]
    for row in rows:
        cells = [
            cell.ljust(width) if alignment == "left" else cell.rjust(width)
            for cell, width, alignment in zip(row, widths, alignments)
        ]
        lines.append("    ".join(cells))
    return lines


def _win_rate(wins: int, total: int) -> str:
    if total == 0:
        return "n/a"
    return f"{wins * 100 / total:.2f}%"


def format_stats(stats: Stats) -> list[str]:
    """Render Stats as the user table, win rates and map table."""
    users = [
        (name, user)
        for name, user in stats.users.items()
        if user.kills.total > MIN_TABLE_KILLS and user.deaths.total > MIN_TABLE_DEATHS
    ]
    users.sort(key=lambda item: (-(item[1].kd or 0.0), item[0]))
    lines = render_table(
        ["NAME", "KILLS", "ASSISTS", "DEATHS", "KD", "KDA"],
        ["left", "right", "right", "right", "right", "right"],
        [
            [
                name,
                str(user.kills.total),
                str(user.assists.total),
                str(user.deaths.total),
                f"{user.kd or 0.0:.2f}",
                f"{user.kda or 0.0:.2f}",
            ]
            for name, user in users
        ],
    )

    lines += ["", "", f"MARINE WR: {_win_rate(stats.marine_wins, stats.total_games)}", ""]

    maps = sorted(
        stats.maps.items(),
        key=lambda item: (-item[1].marine_wins / max(item[1].total_games, 1), item[0]),
    )
    lines += render_table(
        ["MAP", "MARINE WR", "TOTAL ROUNDS"],
        ["left", "right", "right"],
        [
            [name, _win_rate(m.marine_wins, m.total_games), f"{m.total_games} rounds"]
            for name, m in maps
        ],
    )
    lines += ["", f"TOTAL GAMES: {stats.total_games}"]
    return lines


def _format_team(team: list[str], commander: str | None) -> str:
    return ", ".join(f"[{p}]" if p == commander else p for p in team)


def _format_past_team(team: TeamSummary) -> str:
    return _format_team(sorted(team.players), team.commander)


def _split_ids(values: list[str]) -> list[str]:
    return [part.strip() for value in values for part in value.split(",") if part.strip()]


@app.command()
def stats(
    data_dir: DataDir,
    json_output: Annotated[
        bool, typer.Option("--json", help="Output the statistics as JSON.")
    ] = False,
    output: Annotated[
        Path | None, typer.Option("--output", help="Write the output to this file.")
    ] = None,
    continuous: Annotated[
        Path | None,
        typer.Option(
            "--continuous",
            "-c",
            help="Write the continuous stats as JSON to a file. Excludes --json and --output.",
        ),
    ] = None,
) -> None:
    """Print statistics over the genuine games of DATA_DIR."""
    if continuous is not None and (json_output or output is not None):
        raise typer.BadParameter(
            "cannot be combined with --json or --output", param_hint="--continuous"
        )

    games = filter_genuine(_load_summaries(data_dir))

    if continuous is not None:
        entries = [
            ContinuousEntry(date=date, stats=snapshot)
            for date, snapshot in build_continuous(games)
        ]
        continuous.write_bytes(TypeAdapter(list[ContinuousEntry]).dump_json(entries, indent=2))
        typer.echo(f"wrote {len(entries)} entries to {continuous}")
        return

    result = aggregate(games)
    if json_output:
        text = result.model_dump_json(indent=2)
    else:
        text = "\n".join(format_stats(result))

    if output is not None:
        output.write_text(text + "\n", encoding="utf-8")
    else:
        typer.echo(text)


@app.command()
def teams(
    data_dir: DataDir,
    players: Annotated[
        list[str],
        typer.Option("--teams", help="Players to split (repeat or comma-separate)."),
    ],
    marine_com: Annotated[
        str | None, typer.Option("--marine-com", help="Pinned marine commander.")
    ] = None,
    alien_com: Annotated[
        str | None, typer.Option("--alien-com", help="Pinned alien commander.")
    ] = None,
) -> None:
    """Suggest balanced teams, using score per game as skill."""
    pool = _split_ids(players)
    games = _load_summaries(data_dir)
    history = aggregate(filter_genuine(games))

    try:
        suggestion = suggest_teams(pool, score_per_game(history), marine_com, alien_com)
    except BalanceError as e:
        raise typer.BadParameter(str(e), param_hint="--teams") from e

    typer.echo("Team suggestions")
    typer.echo("================")
    typer.echo()
    typer.echo(
        f"Marines: {_format_team(suggestion.marines, suggestion.marine_commander)}"
        f" (skill {suggestion.marine_skill:.2f})"
    )
    typer.echo(
        f"Aliens: {_format_team(suggestion.aliens, suggestion.alien_commander)}"
        f" (skill {suggestion.alien_skill:.2f})"
    )
    typer.echo(f"Imbalance: {suggestion.imbalance:.2f}")

    lineups = find_past_lineups(games, pool, marine_com, alien_com)
    if not lineups:
        return
    typer.echo()
    typer.echo("Past lineups")
    typer.echo("============")
    for game in lineups:
        typer.echo()
        typer.echo(f"Marines: {_format_past_team(game.marines)}")
        typer.echo(f"Aliens: {_format_past_team(game.aliens)}")
        typer.echo(f"({game.round_length / 60:.3f} min, winner: {game.winning_team})")


@app.command()
def ingest(
    data_dir: DataDir,
    db_path: Annotated[
        Path | None, typer.Option("--db", help="SQLite game store (default from settings).")
    ] = None,
) -> None:
    """Store new round files of DATA_DIR in the game store."""
    from ns2stat.db.session import init_db, session_scope
    from ns2stat.worker.ingest import ingest_directory

    db_path = db_path or Settings.from_env().db_path
    init_db(db_path)
    try:
        with session_scope(db_path) as session:
            report = ingest_directory(session, data_dir)
    except (GameParseError, NotADirectoryError) as e:
        raise typer.BadParameter(str(e), param_hint="DATA_DIR") from e
    typer.echo(f"loaded={report.loaded} skipped={report.skipped} db={db_path}")


@app.command()
def serve(
    data_dir: Annotated[
        Path | None, typer.Argument(help="Directory ingested before serving.")
    ] = None,
    db_path: Annotated[
        Path | None, typer.Option("--db", help="SQLite game store (default from settings).")
    ] = None,
    address: Annotated[str, typer.Option("--address", help="Bind address.")] = "127.0.0.1",
    port: Annotated[int, typer.Option("--port", "-p", help="Bind port.")] = 8080,
) -> None:
    """Serve the HTTP API."""
    import uvicorn

    from ns2stat.api.app import create_app

    uvicorn.run(create_app(db_path=db_path, data_dir=data_dir), host=address, port=port)


if __name__ == "__main__":
    app()
