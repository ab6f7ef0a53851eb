"""Repository layer owning the in-memory room inventory."""

from __future__ import annotations

import random
from dataclasses import replace
from typing import Iterable, Mapping, Optional

from hotel_booking.domain.constraints import MAX_ROOMS_ON_FLOOR, InventoryLayout, build_floor_plan
from hotel_booking.domain.models import FloorOccupancy, Room
from hotel_booking.utils.config import Settings, get_settings
from hotel_booking.utils.logger import get_logger


logger = get_logger(__name__)


class FloorNotFoundError(Exception):
    """Raised when a floor outside the building is requested."""


class RoomNotFoundError(Exception):
    """Raised when a room id does not belong to the current inventory."""


def generate_inventory(total_floors: int, rooms_per_floor: Mapping[int, int]) -> list[Room]:
    """Build every room for floors 1..total_floors, floor-major then index-ascending."""
    if total_floors < 1:
        raise ValueError("total_floors must be >= 1")
    expected_floors = set(range(1, total_floors + 1))
    if set(rooms_per_floor) != expected_floors:
        raise ValueError(f"rooms_per_floor must define exactly floors 1..{total_floors}")

    rooms: list[Room] = []
    for floor in range(1, total_floors + 1):
        room_count = rooms_per_floor[floor]
        if room_count < 1:
            raise ValueError(f"floor {floor} must have at least one room")
        if room_count > MAX_ROOMS_ON_FLOOR:
            raise ValueError(
                f"floor {floor} has {room_count} rooms; at most {MAX_ROOMS_ON_FLOOR} keep room numbers unique"
            )
        for index in range(1, room_count + 1):
            rooms.append(
                Room(
                    room_id=f"{floor}-{index}",
                    floor=floor,
                    room_number=floor * 100 + index,
                    room_index=index,
                    is_booked=False,
                )
            )
    return rooms


def layout_from_settings(settings: Settings) -> InventoryLayout:
    return InventoryLayout(
        total_floors=settings.inventory_total_floors,
        rooms_per_floor=settings.inventory_rooms_per_floor,
        top_floor_rooms=settings.inventory_top_floor_rooms,
    )


class RoomInventory:
    """Holds the room set for one building epoch.

    The inventory does no locking of its own; callers that share it between
    threads must serialize access (see ``BookingService``).
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        floor_plan: Optional[Mapping[int, int]] = None,
    ) -> None:
        self._settings = settings or get_settings()
        if floor_plan is None:
            floor_plan = build_floor_plan(layout_from_settings(self._settings))
        self._floor_plan = dict(sorted(floor_plan.items()))
        self._total_floors = len(self._floor_plan)
        self._rooms: list[Room] = []
        self._epoch = 0
        self.regenerate()

    @property
    def rooms(self) -> list[Room]:
        return list(self._rooms)

    @property
    def epoch(self) -> int:
        return self._epoch

    @property
    def total_floors(self) -> int:
        return self._total_floors

    @property
    def floors(self) -> list[int]:
        return list(self._floor_plan)

    def regenerate(self) -> None:
        """Replace the whole room set with a fresh, fully available one."""
        self._rooms = generate_inventory(self._total_floors, self._floor_plan)
        self._epoch += 1
        logger.info(
            "Inventory generated | epoch=%s | floors=%s | rooms=%s",
            self._epoch,
            self._total_floors,
            len(self._rooms),
        )

    def list_available(self) -> list[Room]:
        return [room for room in self._rooms if not room.is_booked]

    def count_available(self) -> int:
        return sum(1 for room in self._rooms if not room.is_booked)

    def list_by_floor(self, floor: int) -> list[Room]:
        if floor not in self._floor_plan:
            raise FloorNotFoundError(
                f"floor={floor} is outside the building (1..{self._total_floors})"
            )
        return [room for room in self._rooms if room.floor == floor]

    def occupancy_by_floor(self) -> list[FloorOccupancy]:
        totals = {floor: 0 for floor in self._floor_plan}
        available = {floor: 0 for floor in self._floor_plan}
        for room in self._rooms:
            totals[room.floor] += 1
            if not room.is_booked:
                available[room.floor] += 1
        return [
            FloorOccupancy(
                floor=floor,
                total_rooms=totals[floor],
                available_rooms=available[floor],
            )
            for floor in self._floor_plan
        ]

    def mark_booked(self, room_ids: Iterable[str]) -> list[Room]:
        """Flag the given rooms as booked and return their updated records."""
        requested = list(room_ids)
        known_ids = {room.room_id for room in self._rooms}
        unknown = [room_id for room_id in requested if room_id not in known_ids]
        if unknown:
            raise RoomNotFoundError(f"room_ids not found: {unknown}")

        targets = set(requested)
        booked: list[Room] = []
        for position, room in enumerate(self._rooms):
            if room.room_id not in targets:
                continue
            updated = replace(room, is_booked=True)
            self._rooms[position] = updated
            booked.append(updated)
        return booked

    def apply_random_occupancy(self, probability: float, rng: random.Random) -> int:
        """Re-draw occupancy for every room; returns the number of booked rooms."""
        self._rooms = [
            replace(room, is_booked=rng.random() < probability)
            for room in self._rooms
        ]
        booked_count = sum(1 for room in self._rooms if room.is_booked)
        logger.info(
            "Random occupancy applied | epoch=%s | probability=%.3f | booked=%s | available=%s",
            self._epoch,
            probability,
            booked_count,
            len(self._rooms) - booked_count,
        )
        return booked_count
