from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from castgrid.core.models import Actor, Corpus, Movie


def make_corpus(
    actor_movies: Dict[int, List[int]],
    names: Optional[Dict[int, str]] = None,
    popularity: Optional[Dict[int, float]] = None,
) -> Corpus:
    """Build a closed corpus from an actor -> movie ids mapping."""

    names = names or {}
    popularity = popularity or {}
    movie_ids: List[int] = []
    for ids in actor_movies.values():
        for movie_id in ids:
            if movie_id not in movie_ids:
                movie_ids.append(movie_id)

    movie_actors: Dict[int, tuple] = {
        movie_id: tuple(actor_id for actor_id, ids in actor_movies.items() if movie_id in ids)
        for movie_id in movie_ids
    }
    return Corpus(
        actors=tuple(Actor(id=actor_id, name=names.get(actor_id, f"Actor {actor_id}")) for actor_id in actor_movies),
        movies=tuple(
            Movie(id=movie_id, title=f"Movie {movie_id}", popularity=popularity.get(movie_id, 10.0))
            for movie_id in movie_ids
        ),
        actor_movies={actor_id: tuple(ids) for actor_id, ids in actor_movies.items()},
        movie_actors=movie_actors,
    )


def ids(actors: Iterable[Actor]) -> List[int]:
    return [actor.id for actor in actors]


# Actors 1-3 share movie 100; actor 4/5/6 each share one distinct movie with
# all of 1-3. The only connected 3x3 block is {1,2,3} x {4,5,6}.
MINIMAL_BLOCK = {
    1: [100, 201, 202, 203],
    2: [100, 201, 202, 203],
    3: [100, 201, 202, 203],
    4: [201],
    5: [202],
    6: [203],
}
