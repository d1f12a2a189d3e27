"""Axis-aligned fallback routes for nodes the connection graph cannot join.

The synthesized route always moves across first (horizontal leg), then
up/down (vertical leg). The opposite ordering is never tried.
"""

from __future__ import annotations

from typing import Literal, Sequence

from wayfinder.config import DEFAULT_CONFIG, RoutingConfig
from wayfinder.detour import select_detour
from wayfinder.models import Node, Point, unique_node_id, virtual_waypoint

Axis = Literal["h", "v"]


def _nearby_waypoint(target: Point, waypoints: Sequence[Node], tolerance: float) -> Node | None:
    """First waypoint within `tolerance` of `target` on both axes."""
    for waypoint in waypoints:
        if abs(waypoint.x - target[0]) < tolerance and abs(waypoint.y - target[1]) < tolerance:
            return waypoint
    return None


def _leg_blocked(
    origin: Node,
    target: Point,
    axis: Axis,
    skip_ids: set[str],
    all_nodes: Sequence[Node],
    clearance: float,
) -> bool:
    """True if a non-waypoint node sits inside the corridor band of one leg."""
    if axis == "h":
        lo, hi = sorted((origin.x, target[0]))
    else:
        lo, hi = sorted((origin.y, target[1]))

    for node in all_nodes:
        if node.is_waypoint or node.id in skip_ids:
            continue
        if axis == "h":
            if lo < node.x < hi and abs(node.y - origin.y) < clearance:
                return True
        elif lo < node.y < hi and abs(node.x - target[0]) < clearance:
            return True
    return False


def synthesize_path(
    start: Node,
    goal: Node,
    all_nodes: Sequence[Node],
    config: RoutingConfig = DEFAULT_CONFIG,
) -> list[Node]:
    """Build a Manhattan-style route from `start` to `goal` without graph edges.

    Each leg reuses a nearby dataset waypoint when one exists, otherwise adds a
    virtual waypoint at the leg's corner. A leg whose corridor is blocked by a
    room is replaced by a waypoint detour toward `goal`.

    Returns:
        Route starting at `start` and ending at `goal`.
    """
    waypoints = [n for n in all_nodes if n.is_waypoint]
    skip_ids = {start.id, goal.id}
    taken = {n.id for n in all_nodes} | skip_ids
    path: list[Node] = [start]

    def extend(axis: Axis, target: Point) -> None:
        origin = path[-1]
        existing = _nearby_waypoint(target, waypoints, config.waypoint_snap)
        if existing is not None:
            path.append(existing)
            return

        if _leg_blocked(origin, target, axis, skip_ids, all_nodes, config.axis_threshold):
            detour = select_detour(origin, goal, waypoints, all_nodes, config)
            path.extend(detour[1:])
            return

        # A corner on top of the goal adds nothing; the goal is appended below.
        if target == goal.position:
            return

        node_id = unique_node_id(f"virtual-{axis}-{start.id}-{goal.id}", taken)
        taken.add(node_id)
        path.append(virtual_waypoint(node_id, target))

    if abs(goal.x - start.x) > config.axis_threshold:
        extend("h", (goal.x, start.y))

    last = path[-1]
    if abs(goal.y - last.y) > config.axis_threshold:
        extend("v", (last.x, goal.y))

    if path[-1].id != goal.id:
        path.append(goal)
    return path
