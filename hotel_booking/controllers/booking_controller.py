"""HTTP controller layer for room listing, block booking and maintenance."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from hotel_booking.controllers.dependencies import get_booking_service
from hotel_booking.domain.models import BookingStatus, Room
from hotel_booking.repository.inventory_repository import FloorNotFoundError
from hotel_booking.services.booking_service import BookingService, OccupancyValidationError
from hotel_booking.utils.logger import get_logger


logger = get_logger(__name__)

router = APIRouter(tags=["booking"])


class RoomResponse(BaseModel):
    room_id: str = Field(min_length=1)
    floor: int = Field(ge=1)
    room_number: int = Field(gt=0)
    room_index: int = Field(ge=1)
    is_booked: bool


class BookRoomsRequest(BaseModel):
    """Passed through untouched; the service owns type and range checks."""

    room_count: Any = None


class BookRoomsResponse(BaseModel):
    status: BookingStatus
    room_numbers: list[int]
    rooms: list[RoomResponse]
    message: str


class RandomOccupancyRequest(BaseModel):
    probability: float | None = Field(default=None, ge=0.0, le=1.0)
    seed: int | None = None


class FloorStatusResponse(BaseModel):
    floor: int = Field(ge=1)
    total_rooms: int = Field(ge=0)
    available_rooms: int = Field(ge=0)


class InventoryStatusResponse(BaseModel):
    message: str
    pending_room_count: int | None = None
    epoch: int = Field(ge=1)
    total_rooms: int = Field(ge=0)
    available_rooms: int = Field(ge=0)
    floors: list[FloorStatusResponse]


def _to_room_response(room: Room) -> RoomResponse:
    return RoomResponse(
        room_id=room.room_id,
        floor=room.floor,
        room_number=room.room_number,
        room_index=room.room_index,
        is_booked=room.is_booked,
    )


@router.get(
    "/rooms",
    response_model=list[RoomResponse],
    status_code=status.HTTP_200_OK,
)
async def list_rooms(
    available_only: bool = False,
    service: BookingService = Depends(get_booking_service),
) -> list[RoomResponse]:
    rooms = service.list_available() if available_only else service.list_rooms()
    return [_to_room_response(room) for room in rooms]


@router.get(
    "/floors/{floor}/rooms",
    response_model=list[RoomResponse],
    status_code=status.HTTP_200_OK,
)
async def list_floor_rooms(
    floor: int,
    service: BookingService = Depends(get_booking_service),
) -> list[RoomResponse]:
    try:
        rooms = service.list_by_floor(floor)
    except FloorNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        ) from exc
    return [_to_room_response(room) for room in rooms]


@router.post(
    "/bookings",
    response_model=BookRoomsResponse,
    status_code=status.HTTP_200_OK,
)
async def book_rooms(
    payload: BookRoomsRequest,
    service: BookingService = Depends(get_booking_service),
) -> BookRoomsResponse:
    """Book a block of rooms; same floor first, nearest cluster otherwise."""
    try:
        result = service.book(payload.room_count)
    except Exception as exc:  # pragma: no cover - defensive fallback
        logger.exception("Unexpected booking failure")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to book rooms",
        ) from exc

    if result.status is BookingStatus.INVALID_REQUEST:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=result.message,
        )
    if result.status is BookingStatus.INFEASIBLE:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=result.message,
        )
    return BookRoomsResponse(
        status=result.status,
        room_numbers=result.room_numbers,
        rooms=[_to_room_response(room) for room in result.rooms],
        message=result.message,
    )


@router.get(
    "/status",
    response_model=InventoryStatusResponse,
    status_code=status.HTTP_200_OK,
)
async def inventory_status(
    service: BookingService = Depends(get_booking_service),
) -> InventoryStatusResponse:
    return InventoryStatusResponse(**service.occupancy_summary())


@router.post(
    "/maintenance/random-occupancy",
    response_model=InventoryStatusResponse,
    status_code=status.HTTP_200_OK,
)
async def randomize_occupancy(
    payload: RandomOccupancyRequest,
    service: BookingService = Depends(get_booking_service),
) -> InventoryStatusResponse:
    """Re-draw which rooms are occupied, for demos."""
    try:
        service.apply_random_occupancy(
            probability=payload.probability,
            seed=payload.seed,
        )
    except OccupancyValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc
    return InventoryStatusResponse(**service.occupancy_summary())


@router.post(
    "/maintenance/reset",
    response_model=InventoryStatusResponse,
    status_code=status.HTTP_200_OK,
)
async def reset_inventory(
    service: BookingService = Depends(get_booking_service),
) -> InventoryStatusResponse:
    service.reset()
    return InventoryStatusResponse(**service.occupancy_summary())
