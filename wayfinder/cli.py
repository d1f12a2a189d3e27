"""Command line access to routing over a building JSON file.

Examples:
    python -m wayfinder.cli route assets/sample_building.json lobby lab-204
    python -m wayfinder.cli nodes assets/sample_building.json --query lab
    python -m wayfinder.cli validate assets/sample_building.json
"""

from __future__ import annotations

import argparse
import json
import logging
import sys

from wayfinder.building import load_building, validate_building
from wayfinder.config import get_settings
from wayfinder.routing import path_crosses_obstacle, plan_route
from wayfinder.utils import node_to_dict, to_serializable_path


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser("wayfinder", description="Indoor route planning")
    parser.add_argument("--no-symmetrize", action="store_true", help="Keep one-sided connections as listed")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    route_cmd = sub.add_parser("route", help="Compute a route between two node ids")
    route_cmd.add_argument("building")
    route_cmd.add_argument("start_id")
    route_cmd.add_argument("destination_id")

    nodes_cmd = sub.add_parser("nodes", help="List selectable destinations")
    nodes_cmd.add_argument("building")
    nodes_cmd.add_argument("--query", default="")

    validate_cmd = sub.add_parser("validate", help="Report dataset issues")
    validate_cmd.add_argument("building")
    validate_cmd.add_argument("--strict", action="store_true", help="Exit non-zero on warnings too")

    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    settings = get_settings()
    logging.basicConfig(level=logging.DEBUG if args.verbose else getattr(logging, settings.log_level, logging.INFO))

    try:
        graph = load_building(args.building, symmetrize=settings.symmetrize and not args.no_symmetrize)
    except (OSError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if args.command == "nodes":
        print(json.dumps([node_to_dict(n) for n in graph.search(args.query)], indent=2))
        return 0

    if args.command == "validate":
        report = validate_building(graph.nodes)
        print(json.dumps(report, indent=2))
        failed = not report["ok"] or (args.strict and report["summary"]["warnings"] > 0)
        return 1 if failed else 0

    missing = [node_id for node_id in (args.start_id, args.destination_id) if graph.get(node_id) is None]
    if missing:
        print(f"error: unknown node id(s): {', '.join(missing)}", file=sys.stderr)
        return 2

    start = graph.get(args.start_id)
    destination = graph.get(args.destination_id)
    result = plan_route(start, destination, graph.nodes, settings.routing)
    print(
        json.dumps(
            {
                "strategy": result.strategy,
                "length": result.length,
                "crosses_obstacle": path_crosses_obstacle(
                    result.path, graph.nodes, settings.routing.obstruction_radius
                ),
                "path": to_serializable_path(result.path),
            },
            indent=2,
        )
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
