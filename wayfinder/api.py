"""FastAPI routes for indoor route planning over a loaded building graph.

Endpoints:
- `/building` loads or replaces the building dataset.
- `/nodes` lists and searches selectable destinations.
- `/route` computes a route between two nodes.
- `/validate-path` audits a route for segments passing through rooms.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field, model_validator

from wayfinder.building import BuildingGraph, load_building, parse_building, validate_building
from wayfinder.config import RoutingConfig, get_settings
from wayfinder.models import Node
from wayfinder.routing import path_crosses_obstacle, plan_route
from wayfinder.utils import node_to_dict, path_points, to_serializable_path

logger = logging.getLogger(__name__)


@dataclass
class ServiceState:
    """In-memory reference to the active building graph.

    Handlers read `graph` once per request. Reloads assign a new BuildingGraph,
    so readers never observe a partially updated building.
    """

    graph: BuildingGraph | None = None
    routing: RoutingConfig | None = None


STATE = ServiceState()


class NodePayload(BaseModel):
    """Node object as it appears in building datasets."""

    id: str = Field(..., min_length=1)
    name: str = ""
    x: float
    y: float
    connections: list[str] = Field(default_factory=list)
    type: str = "room"

    def to_node(self) -> Node:
        return Node(
            id=self.id,
            name=self.name,
            x=self.x,
            y=self.y,
            connections=self.connections,
            kind=self.type,
        )


class BuildingPayload(BaseModel):
    """Request payload for replacing the active building."""

    building_id: str = "building"
    nodes: list[dict[str, Any]]
    symmetrize: bool = True


class RouteRequest(BaseModel):
    """Request payload for route computation.

    Provide either:
    - start_id + destination_id, or
    - start + destination node objects
    """

    start_id: str | None = None
    destination_id: str | None = None
    start: NodePayload | None = None
    destination: NodePayload | None = None

    @model_validator(mode="after")
    def validate_inputs(self) -> "RouteRequest":
        """Ensure caller provides each endpoint as an id or a node."""
        if self.start_id is None and self.start is None:
            raise ValueError("Provide start_id or start")
        if self.destination_id is None and self.destination is None:
            raise ValueError("Provide destination_id or destination")
        return self


class RouteResponse(BaseModel):
    """Response payload for route requests."""

    path: list[dict[str, Any]]
    points: list[dict[str, float]]
    strategy: str
    length: float
    crosses_obstacle: bool


class ValidatePathRequest(BaseModel):
    """Request payload for route audits."""

    node_ids: list[str] = Field(..., min_length=1)


def _latest_graph_or_400() -> BuildingGraph:
    """Get the active building graph or raise 400."""
    graph = STATE.graph
    if graph is None:
        raise HTTPException(status_code=400, detail="No building loaded yet")
    return graph


def _resolve_node(graph: BuildingGraph, node_id: str | None, payload: NodePayload | None, label: str) -> Node:
    """Resolve a route endpoint from an id or an inline node."""
    if payload is not None:
        try:
            return payload.to_node()
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=f"Invalid {label}: {exc}") from exc

    node = graph.get(str(node_id))
    if node is None:
        raise HTTPException(status_code=404, detail=f"Unknown {label} node '{node_id}'")
    return node


def install_building(graph: BuildingGraph) -> dict[str, Any]:
    """Swap in a new building graph and return its summary."""
    STATE.graph = graph
    logger.info("Loaded building %s with %d nodes", graph.building_id, len(graph))
    return {
        "building_id": graph.building_id,
        "node_count": len(graph),
        "waypoint_count": len(graph.waypoints()),
        "destination_count": len(graph.destinations()),
    }


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()
    if STATE.routing is None:
        STATE.routing = settings.routing

    app = FastAPI(title="Wayfinder API", version="1.0.0")

    cors_origins = settings.cors_origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=cors_origins != ["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if settings.building_path and STATE.graph is None:
        install_building(load_building(settings.building_path, symmetrize=settings.symmetrize))

    @app.get("/health")
    def health() -> dict[str, Any]:
        """Health endpoint with loaded-building metadata."""
        graph = STATE.graph
        return {
            "status": "ok",
            "version": app.version,
            "building_loaded": graph is not None,
            "building_id": graph.building_id if graph is not None else None,
            "node_count": len(graph) if graph is not None else 0,
        }

    @app.post("/building")
    def replace_building(payload: BuildingPayload) -> dict[str, Any]:
        """Load a building dataset and make it the active routing graph."""
        try:
            graph = parse_building(
                {"building_id": payload.building_id, "nodes": payload.nodes},
                symmetrize=payload.symmetrize,
            )
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=f"Invalid building data: {exc}") from exc

        summary = install_building(graph)
        summary["validation"] = validate_building(graph.nodes)
        return summary

    @app.get("/nodes")
    def list_nodes(
        q: str = Query(default="", description="Case-insensitive name or id filter"),
        include_waypoints: bool = Query(default=False),
    ) -> list[dict[str, Any]]:
        """List selectable destinations, optionally filtered."""
        graph = _latest_graph_or_400()
        if include_waypoints:
            needle = q.strip().casefold()
            nodes = [
                n for n in graph.nodes if not needle or needle in n.name.casefold() or needle in n.id.casefold()
            ]
        else:
            nodes = graph.search(q)
        return [node_to_dict(node) for node in nodes]

    @app.get("/nodes/{node_id}")
    def get_node(node_id: str) -> dict[str, Any]:
        """Return one node by id."""
        graph = _latest_graph_or_400()
        node = graph.get(node_id)
        if node is None:
            raise HTTPException(status_code=404, detail=f"Unknown node '{node_id}'")
        return node_to_dict(node)

    @app.post("/route", response_model=RouteResponse)
    def find_route(payload: RouteRequest) -> RouteResponse:
        """Compute a route on the active building graph."""
        graph = _latest_graph_or_400()
        routing = STATE.routing or settings.routing

        start = _resolve_node(graph, payload.start_id, payload.start, "start")
        destination = _resolve_node(graph, payload.destination_id, payload.destination, "destination")

        try:
            result = plan_route(start, destination, graph.nodes, routing)
        except Exception as exc:  # pragma: no cover - safety net
            raise HTTPException(status_code=500, detail=f"Unexpected routing error: {exc}") from exc

        return RouteResponse(
            path=to_serializable_path(result.path),
            points=path_points(result.path),
            strategy=result.strategy,
            length=result.length,
            crosses_obstacle=path_crosses_obstacle(result.path, graph.nodes, routing.obstruction_radius),
        )

    @app.post("/validate-path")
    def validate_path(payload: ValidatePathRequest) -> dict[str, Any]:
        """Audit a route given as dataset node ids."""
        graph = _latest_graph_or_400()
        routing = STATE.routing or settings.routing

        path: list[Node] = []
        for node_id in payload.node_ids:
            node = graph.get(node_id)
            if node is None:
                raise HTTPException(status_code=404, detail=f"Unknown node '{node_id}'")
            path.append(node)

        radius = routing.obstruction_radius
        return {
            "node_ids": payload.node_ids,
            "crosses_obstacle": path_crosses_obstacle(path, graph.nodes, radius),
            "crosses_obstacle_clamped": path_crosses_obstacle(path, graph.nodes, radius, clamped=True),
        }

    return app
