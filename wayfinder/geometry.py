"""Planar geometry helpers for routing on a building plan.

Purpose:
- Euclidean and Manhattan distances between plan points.
- Line-vs-room obstruction tests used by fallback routing and path audits.

The obstruction test measures distance to the infinite line through two points,
not to the clamped segment. A room far beyond either endpoint but close to the
line's extension still counts as obstructing. `segment_distance` gives the
clamped measurement for callers that want to audit against drawn segments.
"""

from __future__ import annotations

import math
from typing import Iterable, Sequence

from shapely.geometry import LineString, Point as ShapelyPoint

from wayfinder.models import Node, Point

DEFAULT_OBSTRUCTION_RADIUS = 20.0


def distance(a: Point, b: Point) -> float:
    """Euclidean distance between two plan points."""
    return math.hypot(a[0] - b[0], a[1] - b[1])


def manhattan_distance(a: Point, b: Point) -> float:
    """Sum of absolute axis deltas between two plan points."""
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def line_distance(p1: Point, p2: Point, point: Point) -> float:
    """Perpendicular distance from `point` to the infinite line through `p1`, `p2`.

    Returns `inf` when `p1 == p2`, since no line is defined.
    """
    a = p1[0] - p2[0]
    b = p1[1] - p2[1]
    norm = math.hypot(a, b)
    if norm == 0:
        return math.inf
    c = p1[0] * p2[1] - p1[1] * p2[0]
    return abs(a * point[1] - b * point[0] - c) / norm


def segment_passes_through_point(
    p1: Point,
    p2: Point,
    point: Point,
    radius: float = DEFAULT_OBSTRUCTION_RADIUS,
) -> bool:
    """True when `point` lies strictly within `radius` of the line through `p1`, `p2`."""
    return line_distance(p1, p2, point) < radius


def segment_distance(p1: Point, p2: Point, point: Point) -> float:
    """Distance from `point` to the closed segment `p1`-`p2`."""
    if p1 == p2:
        return distance(p1, point)
    return float(LineString([p1, p2]).distance(ShapelyPoint(point)))


def is_obstructed(
    a: Node,
    b: Node,
    all_nodes: Iterable[Node],
    radius: float = DEFAULT_OBSTRUCTION_RADIUS,
) -> bool:
    """Check whether any non-waypoint node other than `a`/`b` sits on the line `a`-`b`."""
    for node in all_nodes:
        if node.id == a.id or node.id == b.id or node.is_waypoint:
            continue
        if segment_passes_through_point(a.position, b.position, node.position, radius):
            return True
    return False


def path_length(path: Sequence[Node]) -> float:
    """Total Euclidean length of consecutive path segments."""
    return float(sum(distance(path[i].position, path[i + 1].position) for i in range(len(path) - 1)))
