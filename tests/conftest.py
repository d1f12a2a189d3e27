"""Pytest global fixtures and test isolation hooks."""

from __future__ import annotations

from pathlib import Path

import pytest

from wayfinder.api import STATE
from wayfinder.building import BuildingGraph, load_building
from wayfinder.config import get_settings

SAMPLE_BUILDING = Path(__file__).resolve().parents[1] / "assets" / "sample_building.json"


@pytest.fixture(autouse=True)
def reset_service_state(monkeypatch: pytest.MonkeyPatch) -> None:
    """Reset in-memory API state and cached settings before each test."""
    for name in (
        "WAYFINDER_BUILDING_PATH",
        "WAYFINDER_CORS_ORIGINS",
        "WAYFINDER_LOG_LEVEL",
        "WAYFINDER_SYMMETRIZE",
        "WAYFINDER_OBSTRUCTION_RADIUS",
        "WAYFINDER_AXIS_THRESHOLD",
        "WAYFINDER_WAYPOINT_SNAP",
        "WAYFINDER_DETOUR_RATIO",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    STATE.graph = None
    STATE.routing = None


@pytest.fixture()
def sample_building_path() -> Path:
    """Path to the bundled sample building dataset."""
    return SAMPLE_BUILDING


@pytest.fixture()
def sample_building() -> BuildingGraph:
    """Sample building parsed with connection symmetry repair."""
    return load_building(SAMPLE_BUILDING)
