"""Booking coordinator: validates requests, runs selectors, applies results."""

from __future__ import annotations

import random
from threading import RLock
from typing import Any, Optional

from hotel_booking.domain.constraints import BookingPolicy, validate_booking_policy
from hotel_booking.domain.models import BookingResult, BookingStatus, FloorOccupancy, Room
from hotel_booking.repository.inventory_repository import RoomInventory
from hotel_booking.services.selection_service import (
    find_best_across_floors,
    find_best_same_floor,
)
from hotel_booking.utils.config import Settings, get_settings
from hotel_booking.utils.logger import get_logger


logger = get_logger(__name__)

WELCOME_MESSAGE = "Welcome! Enter number of rooms to book."
INFEASIBLE_MESSAGE = "Not enough rooms available to satisfy this request."
RANDOM_OCCUPANCY_MESSAGE = "Generated random occupancy."
RESET_MESSAGE = "System reset."


class BookingValidationError(Exception):
    """Raised when a requested room count is outside the allowed range."""


class OccupancyValidationError(Exception):
    """Raised when random occupancy parameters are invalid."""


class BookingService:
    """Single owner of the room inventory.

    Every operation that reads or mutates the inventory runs under one lock:
    a booking reads availability and then marks rooms, and that pair must not
    interleave with another booking, a random occupancy draw or a reset.
    """

    def __init__(
        self,
        inventory: Optional[RoomInventory] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._inventory = inventory or RoomInventory(settings=self._settings)
        self._policy = BookingPolicy(
            max_rooms_per_request=self._settings.booking_max_rooms_per_request,
            floor_travel_weight=self._settings.booking_floor_travel_weight,
            seed_search_workers=self._settings.booking_seed_search_workers,
        )
        validate_booking_policy(self._policy)
        self._lock = RLock()
        self._status_message = WELCOME_MESSAGE
        self._pending_room_count: Optional[int] = None

    @property
    def status_message(self) -> str:
        with self._lock:
            return self._status_message

    @property
    def pending_room_count(self) -> Optional[int]:
        with self._lock:
            return self._pending_room_count

    def _validate_room_count(self, room_count: Any) -> int:
        maximum = self._policy.max_rooms_per_request
        if (
            room_count is None
            or isinstance(room_count, bool)
            or not isinstance(room_count, int)
            or not 1 <= room_count <= maximum
        ):
            raise BookingValidationError(f"Please enter between 1 and {maximum} rooms.")
        return room_count

    def _select_rooms(self, room_count: int) -> Optional[list[Room]]:
        rooms = self._inventory.rooms
        selected = find_best_same_floor(rooms, room_count)
        if selected is not None:
            return selected
        logger.info(
            "No same-floor block available, searching across floors | room_count=%s",
            room_count,
        )
        return find_best_across_floors(
            rooms,
            room_count,
            floor_weight=self._policy.floor_travel_weight,
            workers=self._policy.seed_search_workers,
        )

    def book(self, room_count: Any) -> BookingResult:
        """Book ``room_count`` rooms as one block, or leave the inventory untouched."""
        with self._lock:
            self._pending_room_count = (
                room_count
                if isinstance(room_count, int) and not isinstance(room_count, bool)
                else None
            )
            try:
                validated_count = self._validate_room_count(room_count)
            except BookingValidationError as exc:
                logger.warning("Booking rejected | room_count=%r | reason=%s", room_count, exc)
                self._status_message = str(exc)
                return BookingResult(status=BookingStatus.INVALID_REQUEST, message=str(exc))

            selected = self._select_rooms(validated_count)
            if not selected:
                logger.info(
                    "Booking infeasible | room_count=%s | available=%s",
                    validated_count,
                    self._inventory.count_available(),
                )
                self._status_message = INFEASIBLE_MESSAGE
                return BookingResult(status=BookingStatus.INFEASIBLE, message=INFEASIBLE_MESSAGE)

            booked = self._inventory.mark_booked(room.room_id for room in selected)
            names = ", ".join(str(room.room_number) for room in booked)
            message = f"Booked: {names}"
            self._status_message = message
            self._pending_room_count = None
            logger.info(
                "Booking completed | room_count=%s | rooms=%s | floors=%s",
                validated_count,
                names,
                sorted({room.floor for room in booked}),
            )
            return BookingResult(
                status=BookingStatus.BOOKED,
                message=message,
                rooms=tuple(booked),
            )

    def list_rooms(self) -> list[Room]:
        with self._lock:
            return self._inventory.rooms

    def list_available(self) -> list[Room]:
        with self._lock:
            return self._inventory.list_available()

    def list_by_floor(self, floor: int) -> list[Room]:
        with self._lock:
            return self._inventory.list_by_floor(floor)

    def occupancy_summary(self) -> dict[str, Any]:
        with self._lock:
            floors: list[FloorOccupancy] = self._inventory.occupancy_by_floor()
            return {
                "message": self._status_message,
                "pending_room_count": self._pending_room_count,
                "epoch": self._inventory.epoch,
                "total_rooms": sum(item.total_rooms for item in floors),
                "available_rooms": sum(item.available_rooms for item in floors),
                "floors": [
                    {
                        "floor": item.floor,
                        "total_rooms": item.total_rooms,
                        "available_rooms": item.available_rooms,
                    }
                    for item in floors
                ],
            }

    def apply_random_occupancy(
        self,
        probability: Optional[float] = None,
        seed: Optional[int] = None,
    ) -> int:
        effective_probability = (
            probability
            if probability is not None
            else self._settings.occupancy_random_probability
        )
        if not 0.0 <= effective_probability <= 1.0:
            raise OccupancyValidationError("probability must be between 0 and 1")
        effective_seed = seed if seed is not None else self._settings.occupancy_random_seed
        rng = random.Random(effective_seed)

        with self._lock:
            booked_count = self._inventory.apply_random_occupancy(effective_probability, rng)
            self._status_message = RANDOM_OCCUPANCY_MESSAGE
            return booked_count

    def reset(self) -> None:
        with self._lock:
            self._inventory.regenerate()
            self._status_message = RESET_MESSAGE
            self._pending_room_count = None
            logger.info("Inventory reset | epoch=%s", self._inventory.epoch)
