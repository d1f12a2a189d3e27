"""Route facade: graph search first, synthesized fallback second.

Purpose:
- Give callers one total operation that always yields a start-to-goal route.
- Audit returned routes for segments that pass through rooms.

Usage example:
    >>> from wayfinder.models import Node
    >>> from wayfinder.routing import route
    >>> a = Node(id="a", x=0, y=0)
    >>> b = Node(id="b", x=200, y=150)
    >>> [n.id for n in route(a, b, [a, b])]
    ['a', 'virtual-h-a-b', 'b']
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Literal, Sequence

from wayfinder.config import DEFAULT_CONFIG, RoutingConfig
from wayfinder.fallback import synthesize_path
from wayfinder.geometry import (
    DEFAULT_OBSTRUCTION_RADIUS,
    path_length,
    segment_distance,
    segment_passes_through_point,
)
from wayfinder.graph_search import shortest_path
from wayfinder.models import Node

logger = logging.getLogger(__name__)

Strategy = Literal["graph", "fallback", "direct"]


@dataclass(slots=True)
class RouteResult:
    """Computed route plus how it was obtained."""

    path: list[Node]
    strategy: Strategy
    length: float


def plan_route(
    start: Node,
    destination: Node,
    all_nodes: Iterable[Node],
    config: RoutingConfig | None = None,
) -> RouteResult:
    """Compute a route and report which strategy produced it.

    Graph search runs only when both endpoints have connections. When it is
    skipped or finds nothing, an axis-aligned route is synthesized. A bare
    two-point route is the last resort.
    """
    config = config or DEFAULT_CONFIG
    nodes = tuple(all_nodes)

    if start.connections and destination.connections:
        path = shortest_path(start, destination, nodes)
        if path:
            logger.debug("Graph route %s -> %s with %d nodes", start.id, destination.id, len(path))
            return RouteResult(path=path, strategy="graph", length=path_length(path))
        logger.debug("No graph route %s -> %s, synthesizing fallback", start.id, destination.id)
    else:
        logger.debug("Skipping graph search for %s -> %s: endpoint without connections", start.id, destination.id)

    path = synthesize_path(start, destination, nodes, config)
    if path:
        return RouteResult(path=path, strategy="fallback", length=path_length(path))

    logger.debug("Falling back to direct route %s -> %s", start.id, destination.id)
    path = [start, destination]
    return RouteResult(path=path, strategy="direct", length=path_length(path))


def route(
    start: Node,
    destination: Node,
    all_nodes: Iterable[Node],
    config: RoutingConfig | None = None,
) -> list[Node]:
    """Return the ordered route from `start` to `destination`. Never raises."""
    return plan_route(start, destination, all_nodes, config).path


def path_crosses_obstacle(
    path: Sequence[Node],
    all_nodes: Iterable[Node],
    radius: float = DEFAULT_OBSTRUCTION_RADIUS,
    clamped: bool = False,
) -> bool:
    """Check whether any path segment passes through a room not on the path.

    Args:
        path: Route to audit.
        all_nodes: Building graph.
        radius: Obstruction radius around each room.
        clamped: Measure distance to the drawn segment instead of its infinite line.

    Returns:
        True if at least one segment is obstructed.
    """
    on_path = {node.id for node in path}
    obstacles = [n for n in all_nodes if not n.is_waypoint and n.id not in on_path]

    for i in range(len(path) - 1):
        p1 = path[i].position
        p2 = path[i + 1].position
        for room in obstacles:
            if clamped:
                if segment_distance(p1, p2, room.position) < radius:
                    return True
            elif segment_passes_through_point(p1, p2, room.position, radius):
                return True
    return False
