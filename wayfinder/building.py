"""Static building dataset loading, validation and lookup.

Expected JSON schema:
  {
    "building_id": "main-campus",
    "nodes": [
      {"id": "r101", "name": "Room 101", "x": 120, "y": 80,
       "connections": ["w1"], "type": "room"|"waypoint"|"entrance"|"stairs"}
    ]
  }
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable

from wayfinder.models import Node

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class BuildingGraph:
    """Immutable node collection for one building.

    Replace the whole object to reload data; never edit nodes in place.
    """

    building_id: str
    nodes: tuple[Node, ...]
    _by_id: dict[str, Node] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "nodes", tuple(self.nodes))
        object.__setattr__(self, "_by_id", {node.id: node for node in self.nodes})

    def __len__(self) -> int:
        return len(self.nodes)

    def get(self, node_id: str) -> Node | None:
        return self._by_id.get(node_id)

    def waypoints(self) -> list[Node]:
        return [node for node in self.nodes if node.is_waypoint]

    def destinations(self) -> list[Node]:
        """Named non-waypoint nodes, sorted by name, as offered to selection UIs."""
        named = [node for node in self.nodes if not node.is_waypoint and node.name.strip()]
        return sorted(named, key=lambda node: (node.name.casefold(), node.id))

    def search(self, query: str) -> list[Node]:
        """Case-insensitive substring match on destination name or id."""
        needle = query.strip().casefold()
        if not needle:
            return self.destinations()
        return [
            node
            for node in self.destinations()
            if needle in node.name.casefold() or needle in node.id.casefold()
        ]


def _node_from_payload(item: dict[str, Any], idx: int) -> Node:
    if not isinstance(item, dict):
        raise ValueError(f"nodes[{idx}] must be an object")
    if "id" not in item or "x" not in item or "y" not in item:
        raise ValueError(f"nodes[{idx}] must include id, x, y")

    connections = item.get("connections") or []
    if not isinstance(connections, (list, tuple)):
        raise ValueError(f"nodes[{idx}].connections must be a list of ids")

    try:
        return Node(
            id=str(item["id"]),
            name=str(item.get("name") or ""),
            x=float(item["x"]),
            y=float(item["y"]),
            connections=[str(c) for c in connections],
            kind=item.get("type", item.get("kind", "room")),
        )
    except (TypeError, ValueError) as exc:
        raise ValueError(f"nodes[{idx}] is invalid: {exc}") from exc


def symmetrize_connections(nodes: Iterable[Node]) -> tuple[list[Node], int]:
    """Mirror one-sided connections so every edge is listed on both ends.

    Dangling ids are left untouched. Self-connections are dropped.

    Returns:
        New node list and the number of mirrored edges added.
    """
    ordered = list(nodes)
    known = {node.id for node in ordered}
    listed: dict[str, list[str]] = {
        node.id: [c for c in dict.fromkeys(node.connections) if c != node.id] for node in ordered
    }

    added = 0
    for node in ordered:
        for neighbor_id in listed[node.id]:
            if neighbor_id not in known:
                continue
            if node.id not in listed[neighbor_id]:
                listed[neighbor_id].append(node.id)
                added += 1

    repaired = [
        node if tuple(listed[node.id]) == node.connections else node.with_connections(listed[node.id])
        for node in ordered
    ]
    return repaired, added


def validate_building(nodes: Iterable[Node]) -> dict[str, Any]:
    """Report dataset quality issues without rejecting the data."""
    ordered = list(nodes)
    by_id = {node.id: node for node in ordered}
    issues: list[dict[str, Any]] = []

    for node in ordered:
        if not node.connections:
            issues.append(
                {
                    "kind": "isolated_node",
                    "severity": "info",
                    "node_id": node.id,
                    "message": "Node has no connections and will only be reachable by fallback routing",
                }
            )

        for neighbor_id in node.connections:
            if neighbor_id == node.id:
                issues.append(
                    {
                        "kind": "self_connection",
                        "severity": "warning",
                        "node_id": node.id,
                        "message": "Node lists itself as a connection",
                    }
                )
                continue

            neighbor = by_id.get(neighbor_id)
            if neighbor is None:
                issues.append(
                    {
                        "kind": "dangling_connection",
                        "severity": "warning",
                        "node_id": node.id,
                        "connection_id": neighbor_id,
                        "message": f"Connection '{neighbor_id}' does not match any node",
                    }
                )
            elif node.id not in neighbor.connections:
                issues.append(
                    {
                        "kind": "asymmetric_connection",
                        "severity": "warning",
                        "node_id": node.id,
                        "connection_id": neighbor_id,
                        "message": f"'{neighbor_id}' does not list '{node.id}' back",
                    }
                )

    error_count = sum(1 for issue in issues if issue.get("severity") == "error")
    warning_count = sum(1 for issue in issues if issue.get("severity") == "warning")

    return {
        "ok": error_count == 0,
        "summary": {
            "nodes": len(ordered),
            "waypoints": sum(1 for node in ordered if node.is_waypoint),
            "errors": error_count,
            "warnings": warning_count,
        },
        "issues": issues,
    }


def parse_building(payload: dict[str, Any], symmetrize: bool = True) -> BuildingGraph:
    """Build a BuildingGraph from a decoded JSON payload.

    Raises:
        ValueError: If the payload shape is invalid or node ids repeat.
    """
    if not isinstance(payload, dict):
        raise ValueError("Building payload must be a JSON object")

    raw_nodes = payload.get("nodes")
    if not isinstance(raw_nodes, list):
        raise ValueError("Building payload must include a 'nodes' list")

    nodes = [_node_from_payload(item, idx) for idx, item in enumerate(raw_nodes)]

    seen: set[str] = set()
    for node in nodes:
        if node.id in seen:
            raise ValueError(f"Duplicate node id '{node.id}'")
        seen.add(node.id)

    for node in nodes:
        for neighbor_id in node.connections:
            if neighbor_id not in seen:
                logger.warning("Node %s lists unknown connection %s", node.id, neighbor_id)

    if symmetrize:
        nodes, added = symmetrize_connections(nodes)
        if added:
            logger.info("Mirrored %d one-sided connections", added)

    return BuildingGraph(building_id=str(payload.get("building_id") or "building"), nodes=tuple(nodes))


def load_building(path: str | Path, symmetrize: bool = True) -> BuildingGraph:
    """Read and parse a building JSON file."""
    source = Path(path)
    try:
        payload = json.loads(source.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"{source} is not valid JSON") from exc
    return parse_building(payload, symmetrize=symmetrize)
