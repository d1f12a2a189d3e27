"""Unit tests for wayfinder.graph_search."""

from __future__ import annotations

import math
import random

import pytest

from wayfinder.geometry import distance, path_length
from wayfinder.graph_search import shortest_path
from wayfinder.models import Node


def _ids(path: list[Node]) -> list[str]:
    return [node.id for node in path]


def _brute_force_length(start: Node, goal: Node, nodes: list[Node]) -> float:
    """Shortest simple-path length by exhaustive DFS over listed connections."""
    by_id = {n.id: n for n in nodes}
    best = math.inf

    def walk(node: Node, seen: set[str], total: float) -> None:
        nonlocal best
        if total >= best:
            return
        if node.id == goal.id:
            best = total
            return
        for nid in node.connections:
            nxt = by_id.get(nid)
            if nxt is None or nid in seen:
                continue
            walk(nxt, seen | {nid}, total + distance(node.position, nxt.position))

    walk(start, {start.id}, 0.0)
    return best


def _random_graph(seed: int, size: int = 7, edge_prob: float = 0.35) -> list[Node]:
    rng = random.Random(seed)
    points = [(rng.uniform(0, 500), rng.uniform(0, 500)) for _ in range(size)]
    links: dict[int, list[str]] = {i: [] for i in range(size)}
    for i in range(size):
        for j in range(i + 1, size):
            if rng.random() < edge_prob:
                links[i].append(f"n{j}")
                links[j].append(f"n{i}")
    return [Node(id=f"n{i}", x=x, y=y, connections=links[i]) for i, (x, y) in enumerate(points)]


def test_two_node_graph_returns_direct_edge() -> None:
    """Two connected nodes route directly with Euclidean weight."""
    a = Node(id="a", x=0, y=0, connections=["b"])
    b = Node(id="b", x=100, y=0, connections=["a"])

    path = shortest_path(a, b, [a, b])

    assert _ids(path) == ["a", "b"]
    assert path_length(path) == pytest.approx(100.0)


def test_prefers_shorter_distance_over_fewer_hops() -> None:
    """Edge weights are distances, so a longer hop chain can win."""
    a = Node(id="a", x=0, y=0, connections=["x", "p"])
    x = Node(id="x", x=100, y=150, connections=["a", "g"])
    p = Node(id="p", x=50, y=0, connections=["a", "q"])
    q = Node(id="q", x=150, y=0, connections=["p", "g"])
    g = Node(id="g", x=200, y=0, connections=["x", "q"])

    path = shortest_path(a, g, [a, x, p, q, g])

    assert _ids(path) == ["a", "p", "q", "g"]
    assert path_length(path) == pytest.approx(200.0)


def test_unreachable_goal_returns_empty_list() -> None:
    """Disconnected components should report no path."""
    a = Node(id="a", x=0, y=0, connections=["b"])
    b = Node(id="b", x=10, y=0, connections=["a"])
    c = Node(id="c", x=50, y=0, connections=["d"])
    d = Node(id="d", x=60, y=0, connections=["c"])

    assert shortest_path(a, d, [a, b, c, d]) == []


def test_dangling_connection_ids_are_skipped() -> None:
    """Connections to unknown ids are ignored rather than raising."""
    a = Node(id="a", x=0, y=0, connections=["ghost", "b"])
    b = Node(id="b", x=100, y=0, connections=["a", "ghost"])

    assert _ids(shortest_path(a, b, [a, b])) == ["a", "b"]


def test_endpoints_missing_from_graph_are_added() -> None:
    """Start/goal outside the node list still take part in the search."""
    w = Node(id="w", x=50, y=0, connections=["a", "b"], kind="waypoint")
    a = Node(id="a", x=0, y=0, connections=["w"])
    b = Node(id="b", x=100, y=0, connections=["w"])

    assert _ids(shortest_path(a, b, [w])) == ["a", "w", "b"]


def test_start_equals_goal_returns_single_node() -> None:
    """Routing a node to itself yields a one-node path."""
    a = Node(id="a", x=0, y=0, connections=["b"])
    b = Node(id="b", x=100, y=0, connections=["a"])

    assert _ids(shortest_path(a, a, [a, b])) == ["a"]


def test_connections_are_followed_as_listed() -> None:
    """A one-sided connection is only traversable from the listing node."""
    a = Node(id="a", x=0, y=0, connections=["b"])
    b = Node(id="b", x=100, y=0, connections=["c"])
    c = Node(id="c", x=200, y=0, connections=["b"])

    assert _ids(shortest_path(a, c, [a, b, c])) == ["a", "b", "c"]
    assert shortest_path(c, a, [a, b, c]) == []


def test_input_nodes_are_not_modified() -> None:
    """Search must leave the caller's node list untouched."""
    a = Node(id="a", x=0, y=0, connections=["b"])
    b = Node(id="b", x=100, y=0, connections=["a"])
    nodes = [a, b]
    snapshot = list(nodes)

    shortest_path(a, b, nodes)

    assert nodes == snapshot


@pytest.mark.parametrize("seed", range(12))
def test_matches_brute_force_on_small_graphs(seed: int) -> None:
    """Dijkstra length should equal exhaustive search on random small graphs."""
    nodes = _random_graph(seed)
    start, goal = nodes[0], nodes[-1]

    expected = _brute_force_length(start, goal, nodes)
    path = shortest_path(start, goal, nodes)

    if math.isinf(expected):
        assert path == []
    else:
        assert path[0].id == start.id
        assert path[-1].id == goal.id
        assert path_length(path) == pytest.approx(expected)
