"""Weighted shortest-path search over the building connection graph.

Purpose:
- Run Dijkstra over explicit node connections, weighting every edge by the
  Euclidean distance between its endpoints.
- Keep all search state local to one call so concurrent callers never share it.

Usage example:
    >>> from wayfinder.models import Node
    >>> from wayfinder.graph_search import shortest_path
    >>> a = Node(id="a", x=0, y=0, connections=["b"])
    >>> b = Node(id="b", x=100, y=0, connections=["a"])
    >>> [n.id for n in shortest_path(a, b, [a, b])]
    ['a', 'b']
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from wayfinder.geometry import distance
from wayfinder.models import Node


def _working_set(start: Node, goal: Node, all_nodes: Sequence[Node]) -> tuple[list[Node], dict[str, int]]:
    """Index graph nodes by id, appending start/goal if the graph lacks them.

    The first node seen for a given id wins; later duplicates are ignored.
    """
    nodes: list[Node] = []
    index: dict[str, int] = {}
    for node in (*all_nodes, start, goal):
        if node.id in index:
            continue
        index[node.id] = len(nodes)
        nodes.append(node)
    return nodes, index


def shortest_path(start: Node, goal: Node, all_nodes: Sequence[Node]) -> list[Node]:
    """Compute the shortest connection path via Dijkstra.

    Node selection is a linear scan over unvisited tentative distances; among
    equal distances the earliest node in graph order is taken. Connection ids
    that resolve to no known node are skipped.

    Args:
        start: Route origin.
        goal: Route destination.
        all_nodes: Building graph. Never modified.

    Returns:
        Nodes from start to goal inclusive. Empty list if goal is unreachable.
    """
    nodes, index = _working_set(start, goal, all_nodes)
    start_idx = index[start.id]
    goal_idx = index[goal.id]

    dist = np.full(len(nodes), np.inf)
    prev = np.full(len(nodes), -1, dtype=np.int64)
    visited = np.zeros(len(nodes), dtype=bool)
    dist[start_idx] = 0.0

    while True:
        open_dist = np.where(visited, np.inf, dist)
        current = int(np.argmin(open_dist))
        if not np.isfinite(open_dist[current]) or current == goal_idx:
            break

        visited[current] = True
        current_node = nodes[current]

        for neighbor_id in current_node.connections:
            neighbor = index.get(neighbor_id)
            if neighbor is None or visited[neighbor]:
                continue

            tentative = dist[current] + distance(current_node.position, nodes[neighbor].position)
            if tentative < dist[neighbor]:
                dist[neighbor] = tentative
                prev[neighbor] = current

    path_idx = [goal_idx]
    while prev[path_idx[-1]] >= 0:
        path_idx.append(int(prev[path_idx[-1]]))
    path_idx.reverse()

    if path_idx[0] != start_idx:
        return []
    return [nodes[i] for i in path_idx]
