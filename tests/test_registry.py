import pytest

from algorithms import (
    REGISTRY,
    AlgorithmId,
    AlgorithmKind,
    UnsupportedAlgorithmError,
    algorithms_by_kind,
    get_algorithm,
    list_algorithms,
    parse_algorithm_id,
)


def test_every_identifier_is_registered():
    assert set(REGISTRY) == set(AlgorithmId)
    for algo_id, info in REGISTRY.items():
        assert info.id is algo_id
        assert callable(info.fn)
        assert info.pseudocode


def test_kinds():
    assert [a.key for a in algorithms_by_kind(AlgorithmKind.SORT)] == [
        "bubble", "selection", "insertion", "merge", "quick", "heap",
    ]
    assert [a.key for a in algorithms_by_kind(AlgorithmKind.SEARCH)] == ["bfs", "dfs", "dijkstra"]
    assert len(list_algorithms()) == 9


def test_search_algorithms_have_distinct_colours():
    colours = [a.color for a in algorithms_by_kind(AlgorithmKind.SEARCH)]
    assert all(colours)
    assert len(set(colours)) == 3


def test_parse_is_lenient_about_case_and_whitespace():
    assert parse_algorithm_id("  BFS ") is AlgorithmId.BFS
    assert parse_algorithm_id(AlgorithmId.HEAP) is AlgorithmId.HEAP
    assert get_algorithm("Dijkstra").label == "Dijkstra's Algorithm"


@pytest.mark.parametrize("key", ["", "shell", "astar", None, 3])
def test_unsupported_identifier_raises(key):
    with pytest.raises(UnsupportedAlgorithmError):
        get_algorithm(key)


def test_unsupported_error_is_a_value_error():
    assert issubclass(UnsupportedAlgorithmError, ValueError)


def test_only_merge_is_marked_stable():
    assert [a.key for a in list_algorithms() if a.stable] == ["merge"]
