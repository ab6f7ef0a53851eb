"""Environment-driven application settings."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {raw!r}") from exc


def _env_optional_int(name: str) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    return _env_int(name, 0)


@dataclass(frozen=True)
class Settings:
    app_name: str
    app_version: str
    log_level: str

    inventory_total_floors: int
    inventory_rooms_per_floor: int
    inventory_top_floor_rooms: int

    booking_max_rooms_per_request: int
    booking_floor_travel_weight: int
    booking_seed_search_workers: int

    occupancy_random_probability: float
    occupancy_random_seed: Optional[int]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Build settings once per process; call ``cache_clear`` to re-read env."""
    return Settings(
        app_name=os.getenv("APP_NAME", "Hotel Room Block Allocator"),
        app_version=os.getenv("APP_VERSION", "1.0.0"),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        inventory_total_floors=_env_int("INVENTORY_TOTAL_FLOORS", 10),
        inventory_rooms_per_floor=_env_int("INVENTORY_ROOMS_PER_FLOOR", 10),
        inventory_top_floor_rooms=_env_int("INVENTORY_TOP_FLOOR_ROOMS", 7),
        booking_max_rooms_per_request=_env_int("BOOKING_MAX_ROOMS_PER_REQUEST", 5),
        booking_floor_travel_weight=_env_int("BOOKING_FLOOR_TRAVEL_WEIGHT", 2),
        booking_seed_search_workers=_env_int("BOOKING_SEED_SEARCH_WORKERS", 1),
        occupancy_random_probability=_env_float("OCCUPANCY_RANDOM_PROBABILITY", 0.3),
        occupancy_random_seed=_env_optional_int("OCCUPANCY_RANDOM_SEED"),
    )
