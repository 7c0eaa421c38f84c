"""Tests for nearest-tag search and distance calculation."""

import pytest
from hypothesis import given, strategies as st

from revdescribe_core.errors import GraphIntegrityError
from revdescribe_core.memory import InMemoryGraph
from revdescribe_core.search import distance_between, find_tagged_ancestors


def _linear(length: int) -> dict:
    """c0 <- c1 <- ... <- c{length-1}"""
    return {f"c{i}": ([f"c{i-1}"] if i else []) for i in range(length)}


def test_start_commit_tagged_is_only_candidate():
    graph = InMemoryGraph(_linear(3))
    tag_map = {"c2": "v2", "c0": "v0"}

    assert find_tagged_ancestors(graph, "c2", tag_map) == [("c2", "v2")]
    assert distance_between(graph, "c2", "c2") == 0


def test_tag_prunes_history_behind_it():
    graph = InMemoryGraph(_linear(5))
    tag_map = {"c3": "v3", "c1": "v1"}

    assert find_tagged_ancestors(graph, "c4", tag_map) == [("c3", "v3")]


def test_no_tagged_ancestor_gives_empty_candidates():
    graph = InMemoryGraph({"a": [], "b": ["a"], "side": []})
    assert find_tagged_ancestors(graph, "b", {"side": "v1"}) == []


def test_merge_collects_one_candidate_per_branch():
    #      l1(vL) <- l2
    # root                \
    #      r1(vR)  <------ m
    graph = InMemoryGraph({
        "root": [],
        "l1": ["root"],
        "l2": ["l1"],
        "r1": ["root"],
        "m": ["l2", "r1"],
    })
    tag_map = {"l1": "vL", "r1": "vR", "root": "v0"}

    candidates = find_tagged_ancestors(graph, "m", tag_map)

    assert sorted(candidates) == [("l1", "vL"), ("r1", "vR")]
    assert distance_between(graph, "m", "l1") == 2
    assert distance_between(graph, "m", "r1") == 1


def test_distance_takes_shortest_path_through_merge():
    # long side: m -> a3 -> a2 -> a1 -> base ; short side: m -> b1 -> base
    graph = InMemoryGraph({
        "base": [],
        "a1": ["base"],
        "a2": ["a1"],
        "a3": ["a2"],
        "b1": ["base"],
        "m": ["a3", "b1"],
    })
    assert distance_between(graph, "m", "base") == 2


def test_distance_unreachable_target_is_none():
    graph = InMemoryGraph({"a": [], "b": ["a"], "x": []})
    assert distance_between(graph, "b", "x") is None


def test_reconverging_diamonds_terminate():
    # A ladder of diamonds: every level merges two commits sharing one parent.
    parents = {"d0": []}
    for i in range(1, 30):
        parents[f"l{i}"] = [f"d{i-1}"]
        parents[f"r{i}"] = [f"d{i-1}"]
        parents[f"d{i}"] = [f"l{i}", f"r{i}"]
    graph = InMemoryGraph(parents)

    assert distance_between(graph, "d29", "d0") == 58
    assert find_tagged_ancestors(graph, "d29", {"d0": "v0"}) == [("d0", "v0")]


def test_missing_parent_is_integrity_error():
    graph = InMemoryGraph({"b": ["ghost"]})

    with pytest.raises(GraphIntegrityError):
        find_tagged_ancestors(graph, "b", {"x": "v1"})
    with pytest.raises(GraphIntegrityError):
        distance_between(graph, "b", "x")


@given(length=st.integers(min_value=1, max_value=60), data=st.data())
def test_linear_history_distance_equals_depth(length, data):
    depth = data.draw(st.integers(min_value=0, max_value=length - 1))
    graph = InMemoryGraph(_linear(length))
    start = f"c{length - 1}"
    tagged = f"c{length - 1 - depth}"

    assert find_tagged_ancestors(graph, start, {tagged: "v"}) == [(tagged, "v")]
    assert distance_between(graph, start, tagged) == depth
