"""Domain-level validation rules for building layout and booking policy."""

from __future__ import annotations

from dataclasses import dataclass


# Room numbers are floor * 100 + index, so an index must stay below 100.
MAX_ROOMS_ON_FLOOR = 99


@dataclass(frozen=True)
class InventoryLayout:
    total_floors: int
    rooms_per_floor: int
    top_floor_rooms: int


@dataclass(frozen=True)
class BookingPolicy:
    max_rooms_per_request: int
    floor_travel_weight: int
    seed_search_workers: int


def validate_inventory_layout(layout: InventoryLayout) -> None:
    if layout.total_floors < 1:
        raise ValueError("total_floors must be >= 1")
    if layout.rooms_per_floor < 1:
        raise ValueError("rooms_per_floor must be >= 1")
    if layout.top_floor_rooms < 1:
        raise ValueError("top_floor_rooms must be >= 1")
    if layout.rooms_per_floor > MAX_ROOMS_ON_FLOOR or layout.top_floor_rooms > MAX_ROOMS_ON_FLOOR:
        raise ValueError(f"room counts must be <= {MAX_ROOMS_ON_FLOOR}")
    if layout.total_floors > 1 and layout.top_floor_rooms >= layout.rooms_per_floor:
        raise ValueError("top_floor_rooms must be smaller than rooms_per_floor")


def validate_booking_policy(policy: BookingPolicy) -> None:
    if policy.max_rooms_per_request < 1:
        raise ValueError("max_rooms_per_request must be >= 1")
    if policy.floor_travel_weight < 1:
        raise ValueError("floor_travel_weight must be >= 1")
    if policy.seed_search_workers < 1:
        raise ValueError("seed_search_workers must be >= 1")


def build_floor_plan(layout: InventoryLayout) -> dict[int, int]:
    """Map each floor to its room count; only the top floor differs."""
    validate_inventory_layout(layout)
    plan = {floor: layout.rooms_per_floor for floor in range(1, layout.total_floors + 1)}
    plan[layout.total_floors] = layout.top_floor_rooms
    return plan
