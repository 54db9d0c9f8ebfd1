"""Deterministic daily grid generator (core domain).

The search is an ordered chain of strategies. Each strategy receives the
per-call ``GridSearch`` state and returns ``(rows, cols)`` or None; the first
success wins:

1) guided: anchor on one actor, intersect connectivity sets
2) curated: two hand-picked actor triples looked up by name
3) exhaustive: nested-index enumeration over the best-connected actors
4) degenerate: first six actors in corpus order, reported as a failure

All randomness comes from one ``SeededRandom`` stream seeded with the date
key, so a date and a corpus always produce the same grid.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from itertools import combinations
from typing import Callable, List, Optional, Sequence, Tuple

from castgrid.core.config import GeneratorConfig
from castgrid.core.corpus_index import CorpusIndex
from castgrid.core.models import Actor, DailyGrid
from castgrid.core.numbering import DateLike, puzzle_number, resolve_date_key
from castgrid.core.ports import GenerationObserver
from castgrid.core.seeded_random import SeededRandom

LOGGER = logging.getLogger(__name__)

GRID_SIZE = 3

GridPick = Tuple[List[Actor], List[Actor]]


@dataclass
class GridSearch:
    """Mutable search state scoped to a single ``generate`` call."""

    index: CorpusIndex
    config: GeneratorConfig
    random: SeededRandom
    puzzle_number: int


GridStrategy = Callable[[GridSearch], Optional[GridPick]]


def pool_size(number: int, total_actors: int, config: GeneratorConfig) -> int:
    """Candidate pool size for a puzzle number; never shrinks as days pass."""

    for step in config.pool_schedule:
        if number <= step.max_puzzle:
            return min(step.size, total_actors)
    if config.final_pool_size is None:
        return total_actors
    return min(config.final_pool_size, total_actors)


def count_franchise_heavy(index: CorpusIndex, actors: Sequence[Actor], config: GeneratorConfig) -> int:
    franchise = config.franchise
    return sum(
        1
        for actor in actors
        if index.franchise_count(actor.id, franchise.movie_ids) >= franchise.heavy_threshold
    )


def guided_random_search(search: GridSearch) -> Optional[GridPick]:
    """Anchor a row actor, take columns from its neighbours, complete the rows.

    Per attempt: one row anchor drawn from the shuffled pool, three columns
    from the anchor's connected pool actors, two more rows from the pool
    actors connected to all three columns. The grid is re-validated and must
    respect the franchise saturation cap.
    """

    index, config, random = search.index, search.config, search.random
    size = pool_size(search.puzzle_number, len(index.actors), config)
    shuffled = random.shuffle(list(index.actors_by_connections[:size]))
    if not shuffled:
        return None

    for attempt in range(config.max_attempts):
        if attempt > 0 and attempt % config.reshuffle_every == 0:
            random.shuffle(shuffled)

        anchor = shuffled[random.next_index(len(shuffled))]
        neighbours = [
            actor
            for actor in shuffled
            if actor.id != anchor.id and index.are_connected(anchor.id, actor.id)
        ]
        if len(neighbours) < GRID_SIZE:
            continue
        col_actors = random.shuffle(neighbours)[:GRID_SIZE]

        row_candidates = [
            actor for actor in index.connected_to_all(col_actors, shuffled) if actor.id != anchor.id
        ]
        if len(row_candidates) < GRID_SIZE - 1:
            continue
        row_actors = [anchor, *random.shuffle(row_candidates)[: GRID_SIZE - 1]]

        if not index.is_valid_grid(row_actors, col_actors):
            continue
        heavy = count_franchise_heavy(index, row_actors + col_actors, config)
        if heavy > config.franchise.max_heavy_actors:
            LOGGER.debug("Attempt %s rejected: %s franchise-heavy actors", attempt, heavy)
            continue
        LOGGER.debug("Guided search succeeded on attempt %s", attempt)
        return row_actors, col_actors
    return None


def _lookup_names(index: CorpusIndex, names: Sequence[str]) -> List[Actor]:
    found = [index.find_actor_by_name(name) for name in names]
    return [actor for actor in found if actor is not None]


def curated_fallback(search: GridSearch) -> Optional[GridPick]:
    """Hand-picked triples, shuffled with the stream for some daily variety."""

    index, config = search.index, search.config
    row_actors = _lookup_names(index, config.curated_rows)
    col_actors = _lookup_names(index, config.curated_cols)
    if len(row_actors) != GRID_SIZE or len(col_actors) != GRID_SIZE:
        return None
    if not index.is_valid_grid(row_actors, col_actors):
        return None
    return search.random.shuffle(row_actors), search.random.shuffle(col_actors)


def exhaustive_search(search: GridSearch) -> Optional[GridPick]:
    """First fully connected block among the top-N actors, in index order.

    Rows are ``i < j < k`` and columns ``a < b < c`` over the indices the rows
    do not use. Column indices not connected to all three rows are skipped
    up front; that only drops combinations that would fail validation.
    """

    index = search.index
    top = index.actors_by_connections[: search.config.exhaustive_top_n]
    for row_indices in combinations(range(len(top)), GRID_SIZE):
        row_actors = [top[i] for i in row_indices]
        col_indices = [
            position
            for position in range(len(top))
            if position not in row_indices
            and all(index.are_connected(top[position].id, actor.id) for actor in row_actors)
        ]
        for chosen in combinations(col_indices, GRID_SIZE):
            col_actors = [top[i] for i in chosen]
            if index.is_valid_grid(row_actors, col_actors):
                return row_actors, col_actors
    return None


STRATEGIES: Tuple[Tuple[str, GridStrategy], ...] = (
    ("guided", guided_random_search),
    ("curated", curated_fallback),
    ("exhaustive", exhaustive_search),
)

DEGENERATE = "degenerate"


class GridGenerator:
    """Runs the strategy chain for a date key against one corpus index."""

    def __init__(
        self,
        index: CorpusIndex,
        config: Optional[GeneratorConfig] = None,
        observer: Optional[GenerationObserver] = None,
        strategies: Sequence[Tuple[str, GridStrategy]] = STRATEGIES,
    ) -> None:
        self._index = index
        self._config = config or GeneratorConfig()
        self._observer = observer
        self._strategies = tuple(strategies)

    def generate(self, date: DateLike = None) -> DailyGrid:
        """Return the grid for ``date`` (default today). Never raises for data reasons."""

        date_key = resolve_date_key(date)
        search = GridSearch(
            index=self._index,
            config=self._config,
            random=SeededRandom.from_text(date_key),
            puzzle_number=puzzle_number(date_key),
        )

        for name, strategy in self._strategies:
            picked = strategy(search)
            if picked is not None:
                rows, cols = picked
                return self._finish(date_key, search.puzzle_number, rows, cols, name)
            LOGGER.warning("Grid strategy %s exhausted for %s", name, date_key)
            if self._observer is not None:
                self._observer.tier_exhausted(date_key, name)

        # Unvalidated; only reachable for corpora without any connected 3x3 block.
        LOGGER.error("Could not generate a valid grid for %s, using corpus order", date_key)
        if self._observer is not None:
            self._observer.generation_failed(date_key)
        actors = self._index.actors
        return self._finish(
            date_key,
            search.puzzle_number,
            list(actors[:GRID_SIZE]),
            list(actors[GRID_SIZE : GRID_SIZE * 2]),
            DEGENERATE,
        )

    def _finish(
        self,
        date_key: str,
        number: int,
        rows: Sequence[Actor],
        cols: Sequence[Actor],
        strategy: str,
    ) -> DailyGrid:
        grid = DailyGrid(
            row_actors=tuple(rows),
            col_actors=tuple(cols),
            date=date_key,
            puzzle_number=number,
            strategy=strategy,
        )
        if strategy != DEGENERATE:
            LOGGER.info("Generated puzzle #%s for %s via %s", number, date_key, strategy)
            if self._observer is not None:
                self._observer.grid_generated(grid)
        return grid


def generate_daily_grid(
    index: CorpusIndex,
    date: DateLike = None,
    config: Optional[GeneratorConfig] = None,
    observer: Optional[GenerationObserver] = None,
) -> DailyGrid:
    """Functional entry point for callers that do not keep a generator around."""

    return GridGenerator(index, config=config, observer=observer).generate(date)
