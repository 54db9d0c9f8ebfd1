from __future__ import annotations

from castgrid.core.corpus_index import build_connectivity, build_corpus_index
from castgrid.core.models import Actor, Corpus, Movie

from helpers import MINIMAL_BLOCK, ids, make_corpus


def test_connectivity_is_symmetric_and_excludes_self() -> None:
    corpus = make_corpus({1: [10, 11], 2: [11], 3: [12], 4: [10, 12]})
    graph = build_connectivity(corpus)

    assert graph[1] == frozenset({2, 4})
    assert graph[2] == frozenset({1})
    assert graph[3] == frozenset({4})
    assert graph[4] == frozenset({1, 3})
    for actor_id, neighbours in graph.items():
        assert actor_id not in neighbours
        for other in neighbours:
            assert actor_id in graph[other]


def test_shared_movies_follow_second_actor_order() -> None:
    corpus = make_corpus({1: [10, 11, 12, 13], 2: [13, 99, 11, 10]})
    index = build_corpus_index(corpus)

    assert index.shared_movies(1, 2) == [13, 11, 10]
    assert index.shared_movies(2, 1) == [10, 11, 13]
    assert set(index.shared_movies(1, 2)) == set(index.shared_movies(2, 1))


def test_shared_movies_ignore_duplicates() -> None:
    corpus = Corpus(
        actors=(Actor(id=1, name="A"), Actor(id=2, name="B")),
        movies=(Movie(id=10, title="Ten", popularity=1.0),),
        actor_movies={1: (10, 10), 2: (10, 10)},
        movie_actors={10: (1, 2)},
    )
    index = build_corpus_index(corpus)
    assert index.shared_movies(1, 2) == [10]


def test_missing_ids_are_not_found() -> None:
    index = build_corpus_index(make_corpus({1: [10], 2: [10]}))

    assert index.get_actor(404) is None
    assert index.get_movie(404) is None
    assert index.shared_movies(1, 404) == []
    assert index.shared_movies(404, 1) == []
    assert index.connections(404) == frozenset()
    assert not index.are_connected(1, 404)


def test_lookups_resolve_known_ids() -> None:
    index = build_corpus_index(make_corpus({1: [10], 2: [10]}, names={1: "Ada", 2: "Ben"}))

    assert index.get_actor(1).name == "Ada"
    assert index.get_movie(10).title == "Movie 10"
    assert index.find_actor_by_name("Ben").id == 2
    assert index.find_actor_by_name("Nobody") is None


def test_actors_by_connections_is_stable_descending() -> None:
    corpus = make_corpus({1: [10], 2: [11], 3: [10, 11], 4: [12]})
    index = build_corpus_index(corpus)

    assert ids(index.actors_by_connections) == [3, 1, 2, 4]


def test_is_valid_grid() -> None:
    index = build_corpus_index(make_corpus(MINIMAL_BLOCK))
    rows = [index.get_actor(actor_id) for actor_id in (1, 2, 3)]
    cols = [index.get_actor(actor_id) for actor_id in (4, 5, 6)]

    assert index.is_valid_grid(rows, cols)
    assert index.is_valid_grid(cols, rows)
    assert not index.is_valid_grid(cols, cols)


def test_franchise_count() -> None:
    index = build_corpus_index(make_corpus({1: [10, 11, 12, 13], 2: [13]}))
    assert index.franchise_count(1, frozenset({10, 11, 99})) == 2
    assert index.franchise_count(2, frozenset({10, 11, 99})) == 0


def test_search_movies_orders_by_popularity() -> None:
    corpus = make_corpus(
        {1: [10, 11, 12]},
        popularity={10: 5.0, 11: 50.0, 12: 20.0},
    )
    index = build_corpus_index(corpus)

    assert [movie.id for movie in index.search_movies("movie")] == [11, 12, 10]
    assert [movie.id for movie in index.search_movies("MOVIE 1", limit=2)] == [11, 12]
    assert index.search_movies("m") == []
