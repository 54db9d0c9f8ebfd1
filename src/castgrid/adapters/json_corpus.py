"""Map the fetched JSON movie dataset into core models.

The dataset is produced by an external fetch step and uses camelCase keys with
string ids as mapping keys. Referential closure is enforced here so the core
can assume every id it sees resolves.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, Iterable, List, Mapping, Optional, Set, Tuple

from castgrid.core.models import Actor, Corpus, Movie

LOGGER = logging.getLogger(__name__)


def _optional_str(value: Any) -> Optional[str]:
    return str(value) if value else None


def _map_actor(raw: Mapping[str, Any]) -> Actor:
    return Actor(
        id=int(raw["id"]),
        name=str(raw["name"]),
        profile_path=_optional_str(raw.get("profilePath")),
    )


def _map_movie(raw: Mapping[str, Any]) -> Movie:
    return Movie(
        id=int(raw["id"]),
        title=str(raw["title"]),
        popularity=float(raw.get("popularity") or 0.0),
        poster_path=_optional_str(raw.get("posterPath")),
        release_year=int(raw.get("releaseYear") or 0),
    )


def _unique_by_id(items: Iterable[Any], kind: str) -> List[Any]:
    seen: Set[int] = set()
    unique = []
    for item in items:
        if item.id in seen:
            LOGGER.warning("Duplicate %s id %s dropped", kind, item.id)
            continue
        seen.add(item.id)
        unique.append(item)
    return unique


def _closed_adjacency(
    raw_mapping: Mapping[str, Iterable[Any]],
    owners: Iterable[int],
    targets: Set[int],
) -> Tuple[Dict[int, Tuple[int, ...]], int]:
    """Keep only known targets per owner, first occurrence wins.

    Returns the mapping and the number of dangling references dropped.
    """

    dropped = 0
    adjacency: Dict[int, Tuple[int, ...]] = {}
    for owner in owners:
        seen: Set[int] = set()
        kept: List[int] = []
        for raw_id in raw_mapping.get(str(owner), ()) or ():
            target = int(raw_id)
            if target not in targets:
                dropped += 1
                continue
            if target in seen:
                continue
            seen.add(target)
            kept.append(target)
        adjacency[owner] = tuple(kept)
    return adjacency, dropped


def build_corpus(payload: Mapping[str, Any]) -> Corpus:
    """Build a referentially closed ``Corpus`` from the decoded dataset."""

    actors = _unique_by_id((_map_actor(raw) for raw in payload.get("actors", [])), "actor")
    movies = _unique_by_id((_map_movie(raw) for raw in payload.get("movies", [])), "movie")
    actor_ids = {actor.id for actor in actors}
    movie_ids = {movie.id for movie in movies}

    actor_movies, dropped_movies = _closed_adjacency(
        payload.get("actorMovies", {}), (actor.id for actor in actors), movie_ids
    )
    movie_actors, dropped_actors = _closed_adjacency(
        payload.get("movieActors", {}), (movie.id for movie in movies), actor_ids
    )
    if dropped_movies or dropped_actors:
        LOGGER.warning(
            "Dropped dangling references: movie_ids=%s, actor_ids=%s",
            dropped_movies,
            dropped_actors,
        )

    return Corpus(
        actors=tuple(actors),
        movies=tuple(movies),
        actor_movies=actor_movies,
        movie_actors=movie_actors,
    )


def load_corpus(path: str) -> Corpus:
    """Load the dataset file, raising ``ValueError`` for malformed content."""

    if not os.path.exists(path):
        raise FileNotFoundError(f"Movie dataset not found: {path}")

    with open(path, "r", encoding="utf-8") as handle:
        try:
            payload = json.load(handle)
        except json.JSONDecodeError as exc:
            raise ValueError(f"Movie dataset is not valid JSON: {path}") from exc

    if not isinstance(payload, dict):
        raise ValueError(f"Movie dataset must be a JSON object: {path}")
    try:
        corpus = build_corpus(payload)
    except (KeyError, TypeError, ValueError) as exc:
        raise ValueError(f"Movie dataset has malformed entries: {path}") from exc

    LOGGER.info("Loaded %s actors and %s movies from %s", len(corpus.actors), len(corpus.movies), path)
    return corpus
