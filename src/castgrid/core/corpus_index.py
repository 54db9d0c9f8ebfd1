"""Corpus index: per-actor movie sets and the actor connectivity graph.

Built once from an immutable ``Corpus`` and then only read, so a single index
can be shared by every consumer without locking.
"""

from __future__ import annotations

import logging
from typing import Dict, FrozenSet, Iterable, List, Optional, Sequence, Tuple

from castgrid.core.models import Actor, Corpus, Movie

LOGGER = logging.getLogger(__name__)

MIN_SEARCH_CHARS = 2


class CorpusIndex:
    """Read-only lookups over a corpus.

    Missing ids never raise: lookups return None and id-list helpers return an
    empty result, so callers can filter data-integrity gaps out.
    """

    def __init__(
        self,
        corpus: Corpus,
        movie_sets: Dict[int, FrozenSet[int]],
        connections: Dict[int, FrozenSet[int]],
    ) -> None:
        self._corpus = corpus
        self._movie_sets = movie_sets
        self._connections = connections
        self._actors_by_id = {actor.id: actor for actor in corpus.actors}
        self._movies_by_id = {movie.id: movie for movie in corpus.movies}
        # Stable sort keeps corpus order among actors with equal degree.
        self._actors_by_connections: Tuple[Actor, ...] = tuple(
            sorted(corpus.actors, key=lambda actor: -len(connections.get(actor.id, ())))
        )

    @property
    def corpus(self) -> Corpus:
        return self._corpus

    @property
    def actors(self) -> Tuple[Actor, ...]:
        """Actors in corpus order."""

        return self._corpus.actors

    @property
    def actors_by_connections(self) -> Tuple[Actor, ...]:
        """Actors ordered by descending connectivity degree."""

        return self._actors_by_connections

    def get_actor(self, actor_id: int) -> Optional[Actor]:
        return self._actors_by_id.get(actor_id)

    def get_movie(self, movie_id: int) -> Optional[Movie]:
        return self._movies_by_id.get(movie_id)

    def find_actor_by_name(self, name: str) -> Optional[Actor]:
        """Return the first actor in corpus order with exactly this name."""

        for actor in self._corpus.actors:
            if actor.name == name:
                return actor
        return None

    def movie_set(self, actor_id: int) -> FrozenSet[int]:
        return self._movie_sets.get(actor_id, frozenset())

    def connections(self, actor_id: int) -> FrozenSet[int]:
        """Ids of the other actors sharing at least one movie with ``actor_id``."""

        return self._connections.get(actor_id, frozenset())

    def degree(self, actor_id: int) -> int:
        return len(self.connections(actor_id))

    def are_connected(self, first_id: int, second_id: int) -> bool:
        return second_id in self._connections.get(first_id, ())

    def shared_movies(self, first_id: int, second_id: int) -> List[int]:
        """Movie ids in both filmographies.

        Order follows the second actor's filmography, filtered by membership in
        the first actor's set. Repeated ids are reported once.
        """

        first_movies = self.movie_set(first_id)
        shared: List[int] = []
        seen: set[int] = set()
        for movie_id in self._corpus.actor_movies.get(second_id, ()):
            if movie_id in first_movies and movie_id not in seen:
                seen.add(movie_id)
                shared.append(movie_id)
        return shared

    def is_valid_grid(self, row_actors: Sequence[Actor], col_actors: Sequence[Actor]) -> bool:
        """True when every row actor shares a movie with every column actor."""

        return all(
            self.are_connected(row_actor.id, col_actor.id)
            for row_actor in row_actors
            for col_actor in col_actors
        )

    def connected_to_all(self, anchors: Sequence[Actor], candidates: Iterable[Actor]) -> List[Actor]:
        """Candidates (other than the anchors) connected to every anchor."""

        anchor_ids = {anchor.id for anchor in anchors}
        return [
            candidate
            for candidate in candidates
            if candidate.id not in anchor_ids
            and all(self.are_connected(candidate.id, anchor_id) for anchor_id in anchor_ids)
        ]

    def franchise_count(self, actor_id: int, franchise_ids: FrozenSet[int]) -> int:
        """How many of the actor's movies belong to ``franchise_ids``."""

        return len(self.movie_set(actor_id) & franchise_ids)

    def search_movies(self, query: str, limit: int = 8) -> List[Movie]:
        """Case-insensitive title search, most popular first."""

        needle = query.strip().lower()
        if len(needle) < MIN_SEARCH_CHARS:
            return []
        hits = [movie for movie in self._corpus.movies if needle in movie.title.lower()]
        hits.sort(key=lambda movie: -movie.popularity)
        return hits[:limit]


def build_movie_sets(corpus: Corpus) -> Dict[int, FrozenSet[int]]:
    return {
        actor.id: frozenset(corpus.actor_movies.get(actor.id, ()))
        for actor in corpus.actors
    }


def build_connectivity(
    corpus: Corpus,
    movie_sets: Optional[Dict[int, FrozenSet[int]]] = None,
) -> Dict[int, FrozenSet[int]]:
    """Compute the symmetric "shares at least one movie" relation.

    Each unordered pair is tested once and recorded on both sides, so the
    result is symmetric regardless of how the source adjacency was built.
    """

    if movie_sets is None:
        movie_sets = build_movie_sets(corpus)

    actor_ids = [actor.id for actor in corpus.actors]
    neighbours: Dict[int, set[int]] = {actor_id: set() for actor_id in actor_ids}
    for position, first_id in enumerate(actor_ids):
        first_movies = movie_sets.get(first_id, frozenset())
        if not first_movies:
            continue
        for second_id in actor_ids[position + 1 :]:
            if second_id == first_id:
                continue
            # isdisjoint walks the smaller set.
            if not first_movies.isdisjoint(movie_sets.get(second_id, frozenset())):
                neighbours[first_id].add(second_id)
                neighbours[second_id].add(first_id)
    return {actor_id: frozenset(ids) for actor_id, ids in neighbours.items()}


def build_corpus_index(corpus: Corpus) -> CorpusIndex:
    """Build the index once at startup and pass it to every consumer."""

    movie_sets = build_movie_sets(corpus)
    connections = build_connectivity(corpus, movie_sets)
    connected_actors = sum(1 for ids in connections.values() if ids)
    LOGGER.info(
        "Corpus index built: actors=%s, movies=%s, connected_actors=%s",
        len(corpus.actors),
        len(corpus.movies),
        connected_actors,
    )
    return CorpusIndex(corpus, movie_sets, connections)
