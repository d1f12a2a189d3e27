"""Serialization helpers shared by the API and CLI.

Purpose:
- Convert nodes and routes to JSON-friendly dictionaries.
"""

from __future__ import annotations

from typing import Any, Iterable

from wayfinder.models import Node


def node_to_dict(node: Node) -> dict[str, Any]:
    """Convert a Node to a JSON-friendly dictionary using dataset field names."""
    return {
        "id": node.id,
        "name": node.name,
        "x": float(node.x),
        "y": float(node.y),
        "connections": list(node.connections),
        "type": node.kind,
        "virtual": bool(node.virtual),
    }


def to_serializable_path(path: Iterable[Node]) -> list[dict[str, Any]]:
    """Convert a route to a list of node dictionaries."""
    return [node_to_dict(node) for node in path]


def path_points(path: Iterable[Node]) -> list[dict[str, float]]:
    """Convert a route to bare `{x, y}` points for renderers."""
    return [{"x": float(node.x), "y": float(node.y)} for node in path]
