"""SQLite storage adapter.

Implements the core GameStateStore port using a simple SQLite database.
"""

from __future__ import annotations

import json
import sqlite3
from datetime import datetime, timezone
from typing import List, Optional

from castgrid.core.models import PlayerStats, SavedGame

_STATS_ROW_ID = 1


class SQLiteStorage:
    """Thin SQLite wrapper that satisfies the GameStateStore contract."""

    def __init__(self, db_path: str) -> None:
        self._db_path = db_path

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self._db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def init_db(self) -> None:
        """Create tables if they do not exist.

        Tables:
        - games: one saved board per date key
        - player_stats: a single row of running counters
        """

        with self._connect() as conn:
            # games holds the per-day state so a player can resume a puzzle.
            # Fields:
            # - date_key: YYYY-MM-DD puzzle date (PRIMARY KEY)
            # - grid: JSON 3x3 array of movie ids or nulls
            # - used_movies: JSON array of movie ids already placed
            # - guesses_remaining: guesses left for the day
            # - stats_recorded: 1 once the finished game was counted
            # - updated_at: last write, UTC
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS games (
                    date_key TEXT PRIMARY KEY,
                    grid TEXT NOT NULL,
                    used_movies TEXT NOT NULL,
                    guesses_remaining INTEGER NOT NULL,
                    stats_recorded INTEGER NOT NULL DEFAULT 0,
                    updated_at TIMESTAMP NOT NULL
                )
                """
            )
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS player_stats (
                    id INTEGER PRIMARY KEY CHECK (id = 1),
                    games_played INTEGER NOT NULL,
                    games_won INTEGER NOT NULL,
                    current_streak INTEGER NOT NULL,
                    max_streak INTEGER NOT NULL,
                    total_rarity INTEGER NOT NULL
                )
                """
            )

    def get_game(self, date_key: str) -> Optional[SavedGame]:
        """Return the saved board for a date, if any."""

        with self._connect() as conn:
            row = conn.execute(
                """
                SELECT grid, used_movies, guesses_remaining, stats_recorded
                FROM games WHERE date_key = ?
                """,
                (date_key,),
            ).fetchone()
        if row is None:
            return None
        return SavedGame(
            grid=tuple(tuple(cell for cell in cells) for cells in json.loads(row["grid"])),
            used_movies=tuple(json.loads(row["used_movies"])),
            guesses_remaining=int(row["guesses_remaining"]),
            stats_recorded=bool(row["stats_recorded"]),
        )

    def set_game(self, date_key: str, saved: SavedGame) -> None:
        """Upsert the saved board for a date."""

        now = datetime.now(timezone.utc)
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO games (
                    date_key, grid, used_movies, guesses_remaining, stats_recorded, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?)
                ON CONFLICT(date_key) DO UPDATE SET
                    grid = excluded.grid,
                    used_movies = excluded.used_movies,
                    guesses_remaining = excluded.guesses_remaining,
                    stats_recorded = excluded.stats_recorded,
                    updated_at = excluded.updated_at
                """,
                (
                    date_key,
                    json.dumps([list(cells) for cells in saved.grid]),
                    json.dumps(list(saved.used_movies)),
                    saved.guesses_remaining,
                    int(saved.stats_recorded),
                    now.isoformat(),
                ),
            )

    def get_stats(self) -> PlayerStats:
        """Return the running stats, zeroed before the first finished game."""

        with self._connect() as conn:
            row = conn.execute(
                "SELECT * FROM player_stats WHERE id = ?",
                (_STATS_ROW_ID,),
            ).fetchone()
        if row is None:
            return PlayerStats()
        return PlayerStats(
            games_played=int(row["games_played"]),
            games_won=int(row["games_won"]),
            current_streak=int(row["current_streak"]),
            max_streak=int(row["max_streak"]),
            total_rarity=int(row["total_rarity"]),
        )

    def set_stats(self, stats: PlayerStats) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO player_stats (
                    id, games_played, games_won, current_streak, max_streak, total_rarity
                ) VALUES (?, ?, ?, ?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET
                    games_played = excluded.games_played,
                    games_won = excluded.games_won,
                    current_streak = excluded.current_streak,
                    max_streak = excluded.max_streak,
                    total_rarity = excluded.total_rarity
                """,
                (
                    _STATS_ROW_ID,
                    stats.games_played,
                    stats.games_won,
                    stats.current_streak,
                    stats.max_streak,
                    stats.total_rarity,
                ),
            )

    def list_game_dates(self) -> List[str]:
        """Return every date key with a saved board, oldest first."""

        with self._connect() as conn:
            rows = conn.execute("SELECT date_key FROM games ORDER BY date_key").fetchall()
        return [row["date_key"] for row in rows]
