"""Routing graph node model.

Purpose:
- Represent rooms, corridor waypoints, entrances and stairs as graph nodes.
- Keep nodes immutable so one building graph can be shared across routing calls.

Usage example:
    >>> from wayfinder.models import Node
    >>> lobby = Node(id="lobby", name="Lobby", x=120, y=80, connections=["w1"], kind="entrance")
    >>> lobby.position
    (120.0, 80.0)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Literal

NodeKind = Literal["room", "waypoint", "entrance", "stairs"]
Point = tuple[float, float]

NODE_KINDS: frozenset[str] = frozenset({"room", "waypoint", "entrance", "stairs"})


@dataclass(frozen=True, slots=True)
class Node:
    """One routable point in the building plan.

    Coordinates live in the pixel space of the building's reference image.
    `connections` lists neighbor ids; order is preserved for deterministic search.
    """

    id: str
    name: str = ""
    x: float = 0.0
    y: float = 0.0
    connections: tuple[str, ...] = field(default_factory=tuple)
    kind: NodeKind = "room"
    virtual: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.id, str) or not self.id:
            raise ValueError("Node id must be a non-empty string")
        if self.kind not in NODE_KINDS:
            raise ValueError(f"Unknown node kind '{self.kind}' for node '{self.id}'")

        # Frozen dataclass: normalize field types through object.__setattr__.
        object.__setattr__(self, "name", str(self.name or ""))
        object.__setattr__(self, "x", float(self.x))
        object.__setattr__(self, "y", float(self.y))
        object.__setattr__(self, "connections", tuple(str(c) for c in self.connections))

    @property
    def position(self) -> Point:
        return (self.x, self.y)

    @property
    def is_waypoint(self) -> bool:
        return self.kind == "waypoint"

    def with_connections(self, connections: Iterable[str]) -> "Node":
        """Return a copy of this node with a replaced connection list."""
        return Node(
            id=self.id,
            name=self.name,
            x=self.x,
            y=self.y,
            connections=tuple(connections),
            kind=self.kind,
            virtual=self.virtual,
        )


def virtual_waypoint(node_id: str, point: Point) -> Node:
    """Create a routing-time waypoint that is not part of the building dataset."""
    return Node(id=node_id, name="", x=point[0], y=point[1], connections=(), kind="waypoint", virtual=True)


def unique_node_id(base: str, taken: set[str]) -> str:
    """Return `base`, or `base#N` for the first N >= 2 not present in `taken`."""
    if base not in taken:
        return base
    suffix = 2
    while f"{base}#{suffix}" in taken:
        suffix += 1
    return f"{base}#{suffix}"
