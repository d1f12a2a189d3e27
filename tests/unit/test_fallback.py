"""Unit tests for wayfinder.fallback."""

from __future__ import annotations

from wayfinder.fallback import synthesize_path
from wayfinder.models import Node


def _ids(path: list[Node]) -> list[str]:
    return [node.id for node in path]


def test_bend_goes_across_then_down() -> None:
    """Isolated endpoints get one corner at (goal.x, start.y)."""
    a = Node(id="a", x=0, y=0)
    b = Node(id="b", x=200, y=150)

    path = synthesize_path(a, b, [a, b])

    assert _ids(path) == ["a", "virtual-h-a-b", "b"]
    corner = path[1]
    assert corner.position == (200.0, 0.0)
    assert corner.virtual is True
    assert corner.is_waypoint
    assert corner.connections == ()


def test_vertical_only_leg_when_horizontal_delta_small() -> None:
    """A small x delta skips the horizontal leg and bends at start.x."""
    a = Node(id="a", x=0, y=0)
    b = Node(id="b", x=10, y=150)

    path = synthesize_path(a, b, [a, b])

    assert _ids(path) == ["a", "virtual-v-a-b", "b"]
    assert path[1].position == (0.0, 150.0)


def test_close_endpoints_connect_directly() -> None:
    """Deltas within the axis threshold need no legs."""
    a = Node(id="a", x=0, y=0)
    b = Node(id="b", x=20, y=15)

    assert _ids(synthesize_path(a, b, [a, b])) == ["a", "b"]


def test_same_node_returns_single_point() -> None:
    """Start equal to goal yields the degenerate one-node path."""
    a = Node(id="a", x=0, y=0)

    assert _ids(synthesize_path(a, a, [a])) == ["a"]


def test_existing_waypoint_near_corner_is_reused() -> None:
    """A dataset waypoint within snap tolerance replaces the virtual corner."""
    a = Node(id="a", x=0, y=0)
    b = Node(id="b", x=200, y=150)
    w = Node(id="w", x=195, y=8, kind="waypoint")

    path = synthesize_path(a, b, [a, b, w])

    assert _ids(path) == ["a", "w", "virtual-v-a-b", "b"]
    assert path[2].position == (195.0, 150.0)


def test_blocked_horizontal_leg_uses_waypoint_detour() -> None:
    """A room inside the horizontal corridor triggers a waypoint detour."""
    a = Node(id="a", x=0, y=0)
    b = Node(id="b", x=200, y=150)
    room = Node(id="r", x=100, y=5)
    w = Node(id="w", x=60, y=100, kind="waypoint")

    path = synthesize_path(a, b, [a, b, room, w])

    assert _ids(path) == ["a", "w", "b"]


def test_blocked_horizontal_leg_without_waypoints_uses_corner() -> None:
    """With no waypoints the detour falls back to a right-angle corner."""
    a = Node(id="a", x=0, y=0)
    b = Node(id="b", x=200, y=150)
    room = Node(id="r", x=100, y=5)

    path = synthesize_path(a, b, [a, b, room])

    assert _ids(path) == ["a", "corner-a-b", "b"]
    assert path[1].position == (200.0, 0.0)


def test_blocked_vertical_leg_uses_detour() -> None:
    """A room inside the vertical corridor triggers a detour from the last point."""
    a = Node(id="a", x=0, y=0)
    b = Node(id="b", x=10, y=300)
    room = Node(id="r", x=5, y=150)

    path = synthesize_path(a, b, [a, b, room])

    assert _ids(path) == ["a", "corner-a-b", "b"]
    assert path[1].position == (10.0, 0.0)


def test_waypoints_do_not_block_corridor() -> None:
    """Corridor waypoints inside the band are not obstacles."""
    a = Node(id="a", x=0, y=0)
    b = Node(id="b", x=200, y=150)
    w = Node(id="w", x=100, y=5, kind="waypoint")

    assert _ids(synthesize_path(a, b, [a, b, w])) == ["a", "virtual-h-a-b", "b"]


def test_virtual_ids_do_not_collide_with_dataset_ids() -> None:
    """A dataset node already using the virtual id forces a suffix."""
    a = Node(id="a", x=0, y=0)
    b = Node(id="b", x=200, y=150)
    clash = Node(id="virtual-h-a-b", x=900, y=900)

    path = synthesize_path(a, b, [a, b, clash])

    assert path[1].id == "virtual-h-a-b#2"


def test_input_nodes_are_not_modified() -> None:
    """Synthesis creates new nodes and never edits the graph."""
    a = Node(id="a", x=0, y=0)
    b = Node(id="b", x=200, y=150)
    nodes = [a, b]
    snapshot = list(nodes)

    synthesize_path(a, b, nodes)

    assert nodes == snapshot
    assert len(nodes) == 2
