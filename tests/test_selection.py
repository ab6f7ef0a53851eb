"""Tests for same-floor window and cross-floor cluster selection."""

from __future__ import annotations

import random
from dataclasses import replace
from itertools import combinations

import pytest

from hotel_booking.domain.constraints import InventoryLayout, build_floor_plan
from hotel_booking.domain.models import RankedRoom, Room
from hotel_booking.repository.inventory_repository import generate_inventory
from hotel_booking.services.selection_service import (
    cluster_cost,
    find_best_across_floors,
    find_best_same_floor,
    room_distance,
    travel_cost,
)


REFERENCE_PLAN = build_floor_plan(InventoryLayout(total_floors=10, rooms_per_floor=10, top_floor_rooms=7))


def _rooms(plan: dict[int, int], booked_ids: set[str] = frozenset()) -> list[Room]:
    rooms = generate_inventory(len(plan), plan)
    return [replace(room, is_booked=room.room_id in booked_ids) for room in rooms]


def _ids(rooms: list[Room] | None) -> list[str] | None:
    if rooms is None:
        return None
    return [room.room_id for room in rooms]


# --- Same floor ---

@pytest.mark.parametrize("room_count", [1, 2, 3, 4, 5])
def test_same_floor_on_empty_building_takes_first_rooms_of_floor_one(room_count):
    selected = find_best_same_floor(_rooms(REFERENCE_PLAN), room_count)

    assert _ids(selected) == [f"1-{index}" for index in range(1, room_count + 1)]
    assert travel_cost(selected) == room_count - 1


def test_same_floor_prefers_tighter_window_on_later_floor():
    rooms = _rooms({1: 5, 2: 5, 3: 5}, booked_ids={"1-2", "1-4"})

    selected = find_best_same_floor(rooms, 2)

    assert _ids(selected) == ["2-1", "2-2"]


def test_same_floor_tie_keeps_lowest_floor_and_leftmost_window():
    rooms = _rooms({1: 5, 2: 5}, booked_ids={"1-2", "1-4", "2-2", "2-4", "2-5"})

    selected = find_best_same_floor(rooms, 2)

    assert _ids(selected) == ["1-1", "1-3"]


def test_same_floor_window_spans_booked_gaps():
    rooms = _rooms({1: 6}, booked_ids={"1-2", "1-3"})

    selected = find_best_same_floor(rooms, 3)

    assert _ids(selected) == ["1-4", "1-5", "1-6"]


def test_same_floor_skips_fully_booked_floor():
    rooms = _rooms(REFERENCE_PLAN, booked_ids={f"1-{index}" for index in range(1, 11)})

    selected = find_best_same_floor(rooms, 3)

    assert {room.floor for room in selected} == {2}


def test_same_floor_returns_none_when_no_floor_has_enough_rooms():
    rooms = _rooms({1: 3, 2: 3}, booked_ids={"1-1", "1-2", "2-3"})

    assert find_best_same_floor(rooms, 3) is None


def test_same_floor_rejects_non_positive_count():
    with pytest.raises(ValueError):
        find_best_same_floor(_rooms({1: 3}), 0)


# --- Costs ---

def test_room_distance_weights_floor_changes_twice():
    first = Room(room_id="1-1", floor=1, room_number=101, room_index=1)
    second = Room(room_id="3-4", floor=3, room_number=304, room_index=4)

    assert room_distance(first, second) == 7
    assert room_distance(second, first) == 7
    assert room_distance(first, first) == 0
    assert room_distance(first, second, floor_weight=5) == 13


def test_cluster_cost_is_bounding_box():
    rooms = _rooms({1: 4, 2: 4, 3: 4})
    group = [room for room in rooms if room.room_id in {"1-2", "3-1", "2-4"}]

    assert cluster_cost(group) == (3 - 1) * 2 + (4 - 1)


# --- Across floors ---

def test_across_floors_finds_cheapest_cluster():
    booked = {"1-3", "1-4", "2-1", "2-3", "2-4", "3-1", "3-2", "3-3"}
    rooms = _rooms({1: 4, 2: 4, 3: 4}, booked_ids=booked)
    available = [room for room in rooms if not room.is_booked]

    selected = find_best_across_floors(rooms, 3)

    assert _ids(selected) == ["1-1", "1-2", "2-2"]
    best_possible = min(cluster_cost(group) for group in combinations(available, 3))
    assert cluster_cost(selected) == best_possible


def test_across_floors_returns_canonical_rooms_in_inventory_order():
    rooms = _rooms({1: 1, 2: 1, 3: 1})

    selected = find_best_across_floors(rooms, 2)

    assert _ids(selected) == ["1-1", "2-1"]
    assert all(type(room) is Room for room in selected)
    assert not any(isinstance(room, RankedRoom) for room in selected)
    assert all(room in rooms for room in selected)


def test_across_floors_returns_none_when_not_enough_rooms():
    rooms = _rooms({1: 2, 2: 2}, booked_ids={"1-1", "2-2"})

    assert find_best_across_floors(rooms, 3) is None


def test_across_floors_always_returns_a_cluster_when_feasible():
    rooms = _rooms({1: 10, 2: 10, 3: 10}, booked_ids={f"2-{index}" for index in range(1, 11)} | {"1-5", "3-5"})

    selected = find_best_across_floors(rooms, 5)

    assert selected is not None
    assert len(selected) == 5
    assert all(not room.is_booked for room in selected)


@pytest.mark.parametrize("room_count", [1, 2, 3, 4, 5])
def test_parallel_seed_search_matches_sequential(room_count):
    rng = random.Random(7)
    rooms = [
        replace(room, is_booked=rng.random() < 0.7)
        for room in generate_inventory(len(REFERENCE_PLAN), REFERENCE_PLAN)
    ]

    sequential = find_best_across_floors(rooms, room_count, workers=1)
    parallel = find_best_across_floors(rooms, room_count, workers=4)

    assert sequential is not None
    assert _ids(parallel) == _ids(sequential)


def test_across_floors_rejects_bad_arguments():
    rooms = _rooms({1: 3})

    with pytest.raises(ValueError):
        find_best_across_floors(rooms, 0)
    with pytest.raises(ValueError):
        find_best_across_floors(rooms, 1, workers=0)
