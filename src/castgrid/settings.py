"""Static configuration for castgrid.

All user-editable settings (dataset, database, generator tuning, sharing,
logging) live in a single JSON file for quick edits without touching Python.
"""

import json
import os

from dotenv import find_dotenv, load_dotenv

from castgrid.core.config import (
    DEFAULT_CURATED_COLS,
    DEFAULT_CURATED_ROWS,
    DEFAULT_POOL_SCHEDULE,
    MCU_MOVIE_IDS,
    FranchiseConfig,
    GeneratorConfig,
    PoolStep,
)

load_dotenv(find_dotenv(usecwd=True))

# CASTGRID_CONFIG points at an alternative config.json (e.g. from .env);
# otherwise config.json is read from the working directory.
CONFIG_PATH = os.path.abspath(os.getenv("CASTGRID_CONFIG", os.path.join(os.getcwd(), "config.json")))

# Relative paths in config.json are relative to the file itself.
CONFIG_DIR = os.path.dirname(CONFIG_PATH)


def _load_json_config() -> dict:
    """Load config.json with a flat, user-friendly schema."""

    if not os.path.exists(CONFIG_PATH):
        raise FileNotFoundError(f"Config file not found: {CONFIG_PATH}")

    with open(CONFIG_PATH, "r", encoding="utf-8") as handle:
        return json.load(handle)


def resolve_path(path: str) -> str:
    if os.path.isabs(path):
        return path
    return os.path.join(CONFIG_DIR, path)


def _build_generator_config(raw: dict) -> GeneratorConfig:
    """Translate the ``generator`` block, keeping defaults for omitted keys."""

    schedule = raw.get("pool_schedule")
    pool_schedule = (
        tuple(PoolStep(max_puzzle=int(step["max_puzzle"]), size=int(step["size"])) for step in schedule)
        if schedule is not None
        else DEFAULT_POOL_SCHEDULE
    )
    final_pool_size = raw.get("final_pool_size")

    franchise_raw = raw.get("franchise", {})
    movie_ids = franchise_raw.get("movie_ids")
    franchise = FranchiseConfig(
        movie_ids=frozenset(int(movie_id) for movie_id in movie_ids) if movie_ids is not None else MCU_MOVIE_IDS,
        heavy_threshold=int(franchise_raw.get("heavy_threshold", 3)),
        max_heavy_actors=int(franchise_raw.get("max_heavy_actors", 2)),
    )

    curated = raw.get("curated", {})
    return GeneratorConfig(
        max_attempts=int(raw.get("max_attempts", 500)),
        reshuffle_every=int(raw.get("reshuffle_every", 50)),
        pool_schedule=pool_schedule,
        final_pool_size=int(final_pool_size) if final_pool_size is not None else None,
        franchise=franchise,
        curated_rows=tuple(curated.get("rows", DEFAULT_CURATED_ROWS)),
        curated_cols=tuple(curated.get("cols", DEFAULT_CURATED_COLS)),
        exhaustive_top_n=int(raw.get("exhaustive_top_n", 30)),
    )


_CONFIG = _load_json_config()

# Expose the raw config for modules that need structured access.
CONFIG = _CONFIG

# The dataset built by the external fetch step; read once per process.
DATA_PATH = resolve_path(_CONFIG.get("data_path", "data/movie-data.json"))

# Per-day boards and running stats.
DB_PATH = resolve_path(_CONFIG.get("db_path", "castgrid.db"))

# Generator tuning. Changing any of it changes every past and future grid.
GENERATOR = _build_generator_config(_CONFIG.get("generator", {}))

# Share text settings.
_share = _CONFIG.get("share", {})
SHARE_TITLE = _share.get("title", "Cast Grid - Movies \U0001F3AC")
SHARE_URL = _share.get("url")

# Logging configuration (optional).
LOGGING = _CONFIG.get("logging", {})
