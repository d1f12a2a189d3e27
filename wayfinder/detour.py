"""Waypoint detour selection for obstructed corridor legs."""

from __future__ import annotations

from typing import Sequence

from wayfinder.config import DEFAULT_CONFIG, RoutingConfig
from wayfinder.geometry import is_obstructed, manhattan_distance
from wayfinder.models import Node, unique_node_id, virtual_waypoint


def _two_leg_cost(origin: Node, waypoint: Node, target: Node) -> float:
    return manhattan_distance(origin.position, waypoint.position) + manhattan_distance(
        waypoint.position, target.position
    )


def detour_candidates(
    origin: Node,
    target: Node,
    waypoints: Sequence[Node],
    config: RoutingConfig = DEFAULT_CONFIG,
) -> list[Node]:
    """Return waypoints within the detour-inflation bound, cheapest first.

    The leg endpoints themselves are never candidates.
    """
    bound = config.detour_ratio * manhattan_distance(origin.position, target.position)
    scored = [
        (_two_leg_cost(origin, w, target), w)
        for w in waypoints
        if w.id != origin.id and w.id != target.id
    ]
    # sorted() is stable, so equal costs keep dataset order.
    return [w for cost, w in sorted(scored, key=lambda item: item[0]) if cost < bound]


def select_detour(
    origin: Node,
    target: Node,
    waypoints: Sequence[Node],
    all_nodes: Sequence[Node],
    config: RoutingConfig = DEFAULT_CONFIG,
) -> list[Node]:
    """Route `origin` -> `target` through one waypoint that clears both legs.

    Falls back to a synthesized right-angle corner at `(target.x, origin.y)`
    without checking it for obstruction, so a three-point route is always returned.
    """
    for waypoint in detour_candidates(origin, target, waypoints, config):
        if is_obstructed(origin, waypoint, all_nodes, config.obstruction_radius):
            continue
        if is_obstructed(waypoint, target, all_nodes, config.obstruction_radius):
            continue
        return [origin, waypoint, target]

    taken = {n.id for n in all_nodes} | {origin.id, target.id}
    corner_id = unique_node_id(f"corner-{origin.id}-{target.id}", taken)
    return [origin, virtual_waypoint(corner_id, (target.x, origin.y)), target]
