"""Domain models for room inventory and block booking."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class Room:
    room_id: str
    floor: int
    room_number: int
    room_index: int
    is_booked: bool = False


@dataclass(frozen=True)
class RankedRoom:
    """A room scored against one seed during the cross-floor search."""

    room: Room
    distance: int

    @property
    def floor(self) -> int:
        return self.room.floor

    @property
    def room_index(self) -> int:
        return self.room.room_index


class BookingStatus(str, Enum):
    BOOKED = "BOOKED"
    INVALID_REQUEST = "INVALID_REQUEST"
    INFEASIBLE = "INFEASIBLE"


@dataclass(frozen=True)
class BookingResult:
    status: BookingStatus
    message: str
    rooms: tuple[Room, ...] = ()

    @property
    def succeeded(self) -> bool:
        return self.status is BookingStatus.BOOKED

    @property
    def room_numbers(self) -> list[int]:
        return [room.room_number for room in self.rooms]


@dataclass(frozen=True)
class FloorOccupancy:
    floor: int
    total_rooms: int
    available_rooms: int
