"""Runtime configuration for the routing engine and HTTP service.

Env vars:
  WAYFINDER_BUILDING_PATH=/path/to/building.json
  WAYFINDER_CORS_ORIGINS=*|https://a.example,https://b.example
  WAYFINDER_LOG_LEVEL=INFO
  WAYFINDER_SYMMETRIZE=true|false
  WAYFINDER_OBSTRUCTION_RADIUS=20
  WAYFINDER_AXIS_THRESHOLD=20
  WAYFINDER_WAYPOINT_SNAP=15
  WAYFINDER_DETOUR_RATIO=1.5
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache


@dataclass(frozen=True, slots=True)
class RoutingConfig:
    """Distance constants used by obstruction tests and fallback synthesis.

    Attributes:
        obstruction_radius: Distance from a routed line under which a room blocks it.
        axis_threshold: Minimum axis delta before the fallback adds a corridor leg.
        waypoint_snap: Per-axis tolerance for reusing an existing waypoint.
        detour_ratio: Manhattan inflation bound for detour candidates.
    """

    obstruction_radius: float = 20.0
    axis_threshold: float = 20.0
    waypoint_snap: float = 15.0
    detour_ratio: float = 1.5

    def __post_init__(self) -> None:
        if self.obstruction_radius <= 0:
            raise ValueError("obstruction_radius must be > 0")
        if self.axis_threshold <= 0:
            raise ValueError("axis_threshold must be > 0")
        if self.waypoint_snap <= 0:
            raise ValueError("waypoint_snap must be > 0")
        if self.detour_ratio <= 1:
            raise ValueError("detour_ratio must be > 1")


DEFAULT_CONFIG = RoutingConfig()


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name, "").strip().lower()
    if raw in {"1", "true", "yes", "on"}:
        return True
    if raw in {"0", "false", "no", "off"}:
        return False
    return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got '{raw}'") from exc


@dataclass(frozen=True, slots=True)
class ServiceSettings:
    """Process-level settings for the HTTP service and CLI."""

    building_path: str = ""
    cors_origins: list[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"
    symmetrize: bool = True
    routing: RoutingConfig = DEFAULT_CONFIG


def routing_config_from_env() -> RoutingConfig:
    """Build a RoutingConfig, falling back to defaults for unset variables."""
    return RoutingConfig(
        obstruction_radius=_env_float("WAYFINDER_OBSTRUCTION_RADIUS", DEFAULT_CONFIG.obstruction_radius),
        axis_threshold=_env_float("WAYFINDER_AXIS_THRESHOLD", DEFAULT_CONFIG.axis_threshold),
        waypoint_snap=_env_float("WAYFINDER_WAYPOINT_SNAP", DEFAULT_CONFIG.waypoint_snap),
        detour_ratio=_env_float("WAYFINDER_DETOUR_RATIO", DEFAULT_CONFIG.detour_ratio),
    )


@lru_cache(maxsize=1)
def get_settings() -> ServiceSettings:
    """Load service settings from env vars once per process."""
    raw_origins = os.getenv("WAYFINDER_CORS_ORIGINS", "*").strip()
    if raw_origins == "*" or not raw_origins:
        origins = ["*"]
    else:
        origins = [origin.strip() for origin in raw_origins.split(",") if origin.strip()]

    return ServiceSettings(
        building_path=os.getenv("WAYFINDER_BUILDING_PATH", "").strip(),
        cors_origins=origins,
        log_level=os.getenv("WAYFINDER_LOG_LEVEL", "INFO").strip().upper() or "INFO",
        symmetrize=_env_bool("WAYFINDER_SYMMETRIZE", True),
        routing=routing_config_from_env(),
    )
