"""Application entry point for the castgrid command line game."""

from __future__ import annotations

import argparse
import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Optional, Tuple

from art import tprint
from rich.console import Console
from rich.table import Table

from castgrid import settings
from castgrid.adapters.json_corpus import load_corpus
from castgrid.adapters.logging_observer import LoggingGenerationObserver
from castgrid.adapters.share_formatting import format_stats, share_text
from castgrid.adapters.sqlite_storage import SQLiteStorage
from castgrid.core.corpus_index import CorpusIndex, build_corpus_index
from castgrid.core.game import GameSession, GuessRejected
from castgrid.core.generator import DEGENERATE, GridGenerator
from castgrid.core.models import DailyGrid
from castgrid.core.numbering import resolve_date_key
from castgrid.core.stats import record_result

NAME = "CASTGRID"
FONT = "tarty-1"


def _print_banner() -> None:
    tprint(NAME, FONT, space=1)


def _configure_logging() -> None:
    config = settings.LOGGING or {}
    if not config.get("enabled", False):
        return

    level_name = str(config.get("level", "INFO")).upper()
    level = getattr(logging, level_name, logging.INFO)

    fmt = "%(asctime)s %(levelname)s %(name)s: %(message)s"
    datefmt = "%Y-%m-%d %H:%M:%S"
    formatter = logging.Formatter(fmt=fmt, datefmt=datefmt)

    handlers: list[logging.Handler] = []

    if config.get("console", True):
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        handlers.append(console_handler)

    file_cfg = config.get("file", {})
    if file_cfg.get("enabled", False):
        path = settings.resolve_path(file_cfg.get("path", "logs/castgrid.log"))
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        max_bytes = int(file_cfg.get("max_bytes", 5 * 1024 * 1024))
        backup_count = int(file_cfg.get("backup_count", 5))
        file_handler = RotatingFileHandler(
            path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    if not handlers:
        return

    logging.basicConfig(level=level, handlers=handlers)


def _open_storage() -> SQLiteStorage:
    storage = SQLiteStorage(settings.DB_PATH)
    storage.init_db()
    return storage


def _build_grid(date: Optional[str]) -> Tuple[CorpusIndex, DailyGrid]:
    # The index is built once per process and handed to every consumer.
    index = build_corpus_index(load_corpus(settings.DATA_PATH))
    generator = GridGenerator(index, config=settings.GENERATOR, observer=LoggingGenerationObserver())
    return index, generator.generate(date)


def _grid_table(
    grid: DailyGrid,
    session: Optional[GameSession] = None,
    reveal_index: Optional[CorpusIndex] = None,
) -> Table:
    table = Table(title=f"Puzzle #{grid.puzzle_number} ({grid.date})", show_lines=True)
    table.add_column("")
    for col_actor in grid.col_actors:
        table.add_column(col_actor.name, justify="center")

    board = session.board if session is not None else None
    for row, row_actor in enumerate(grid.row_actors):
        cells = []
        for col, col_actor in enumerate(grid.col_actors):
            movie = board[row][col] if board is not None else None
            if movie is not None:
                cells.append(f"[green]{movie.title}[/green]")
            elif reveal_index is not None:
                shared = [
                    reveal_index.get_movie(movie_id)
                    for movie_id in reveal_index.shared_movies(row_actor.id, col_actor.id)
                ]
                known = sorted((m for m in shared if m is not None), key=lambda m: -m.popularity)
                cells.append(f"[dim]{known[0].title} (+{len(known) - 1})[/dim]" if known else "-")
            else:
                cells.append(f"{row + 1},{col + 1}")
        table.add_row(f"[bold]{row_actor.name}[/bold]", *cells)
    return table


def _show_grid(date: Optional[str], reveal: bool) -> None:
    console = Console()
    index, grid = _build_grid(date)
    if grid.strategy == DEGENERATE:
        console.print("[red]No connected grid exists in this dataset; showing a placeholder.[/red]")
    console.print(_grid_table(grid, reveal_index=index if reveal else None))


def is_playable(grid: DailyGrid) -> bool:
    """A degenerate grid from a tiny corpus can be short on actors."""

    return len(grid.row_actors) == 3 and len(grid.col_actors) == 3


def _parse_cell(raw: str) -> Optional[Tuple[int, int]]:
    parts = raw.replace(",", " ").split()
    if len(parts) != 2 or not all(part.isdigit() for part in parts):
        return None
    row, col = (int(part) - 1 for part in parts)
    if not (0 <= row < 3 and 0 <= col < 3):
        return None
    return row, col


def _finish_game(console: Console, storage: SQLiteStorage, session: GameSession) -> None:
    score = session.score()
    if not session.stats_recorded:
        storage.set_stats(record_result(storage.get_stats(), score))
        session.stats_recorded = True
        storage.set_game(session.grid.date, session.to_saved())
    console.print()
    console.print(
        share_text(session.board, score, session.grid.date, title=settings.SHARE_TITLE, share_url=settings.SHARE_URL)
    )


def _play(date: Optional[str]) -> None:
    _print_banner()
    console = Console()
    index, grid = _build_grid(date)
    if not is_playable(grid):
        console.print("[red]This dataset cannot fill a 3x3 grid; nothing to play.[/red]")
        return
    storage = _open_storage()
    session = GameSession(grid, index, storage.get_game(grid.date))

    while not session.is_complete:
        console.print(_grid_table(grid, session))
        console.print(f"Guesses remaining: {session.guesses_remaining}")
        raw = console.input("Cell as 'row col' (1-3), or q to quit: ").strip().lower()
        if raw in {"q", "quit"}:
            return
        cell = _parse_cell(raw)
        if cell is None:
            console.print("[yellow]Enter a row and a column between 1 and 3.[/yellow]")
            continue
        row, col = cell
        row_actor, col_actor = grid.row_actors[row], grid.col_actors[col]

        query = console.input(f"Movie with {row_actor.name} and {col_actor.name}: ")
        results = index.search_movies(query)
        if not results:
            console.print("[yellow]No matching titles (type at least 2 characters).[/yellow]")
            continue
        for number, movie in enumerate(results, start=1):
            year = f" ({movie.release_year})" if movie.release_year else ""
            console.print(f"  {number}. {movie.title}{year}")
        choice = console.input("Pick a number: ").strip()
        if not choice.isdigit() or not 1 <= int(choice) <= len(results):
            console.print("[yellow]No movie picked.[/yellow]")
            continue

        try:
            result = session.guess(row, col, results[int(choice) - 1].id)
        except GuessRejected as exc:
            console.print(f"[yellow]{exc}[/yellow]")
            continue
        storage.set_game(grid.date, session.to_saved())
        console.print("[green]Correct![/green]" if result.correct else "[red]Not quite.[/red]")

    console.print(_grid_table(grid, session))
    _finish_game(console, storage, session)


def _share(date: Optional[str]) -> None:
    console = Console()
    date_key = resolve_date_key(date)
    storage = _open_storage()
    saved = storage.get_game(date_key)
    if saved is None:
        console.print(f"No game saved for {date_key}.")
        return
    index, grid = _build_grid(date_key)
    session = GameSession(grid, index, saved)
    console.print(
        share_text(session.board, session.score(), date_key, title=settings.SHARE_TITLE, share_url=settings.SHARE_URL)
    )


def _stats() -> None:
    console = Console()
    stats = _open_storage().get_stats()
    table = Table(title="Statistics")
    table.add_column("Metric")
    table.add_column("Value", justify="right")
    for line in format_stats(stats).splitlines():
        label, _, value = line.partition(": ")
        table.add_row(label, value)
    console.print(table)


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(prog="castgrid")
    subparsers = parser.add_subparsers(dest="command")

    grid_parser = subparsers.add_parser("grid", help="Show the grid for a date")
    grid_parser.add_argument("--date", help="YYYY-MM-DD, defaults to today")
    grid_parser.add_argument("--reveal", action="store_true", help="Show one answer per cell")

    play_parser = subparsers.add_parser("play", help="Play or resume the grid for a date")
    play_parser.add_argument("--date", help="YYYY-MM-DD, defaults to today")

    share_parser = subparsers.add_parser("share", help="Print the share text for a saved game")
    share_parser.add_argument("--date", help="YYYY-MM-DD, defaults to today")

    subparsers.add_parser("stats", help="Show running statistics")

    args = parser.parse_args(argv)
    _configure_logging()
    if args.command == "grid":
        _show_grid(args.date, args.reveal)
        return
    if args.command == "share":
        _share(args.date)
        return
    if args.command == "stats":
        _stats()
        return
    _play(getattr(args, "date", None))


if __name__ == "__main__":
    main()
