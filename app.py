"""
app.py: FastAPI application factory and startup lifecycle.

This is the ASGI application object imported by uvicorn.
It builds the room inventory, wires the booking service, and registers routers.

Usage (via launcher):
    python main.py

Usage (direct uvicorn):
    uvicorn app:app --reload
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from hotel_booking.controllers.booking_controller import router as booking_router
from hotel_booking.repository.inventory_repository import RoomInventory
from hotel_booking.services.booking_service import BookingService
from hotel_booking.utils.config import Settings, get_settings
from hotel_booking.utils.logger import configure_logging, get_logger


logger = get_logger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build and wire the FastAPI application.

    The inventory is owned by the booking service and reachable only through
    app.state, so every request goes through the same serialized coordinator.
    """
    settings = settings or get_settings()
    configure_logging(settings)

    # --- Inventory (one building epoch, in memory) ---
    inventory = RoomInventory(settings=settings)

    # --- Services ---
    booking_service = BookingService(inventory=inventory, settings=settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Log the starting inventory before accepting requests."""
        _startup(app)
        yield

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        lifespan=lifespan,
    )

    # --- Routers ---
    app.include_router(booking_router)

    # --- Inject services into app.state for dependency resolution ---
    app.state.inventory = inventory
    app.state.booking_service = booking_service

    return app


def _startup(app: FastAPI) -> None:
    booking_service: BookingService = app.state.booking_service
    summary = booking_service.occupancy_summary()
    logger.info(
        "Startup complete | epoch=%s | floors=%s | rooms=%s | available=%s",
        summary["epoch"],
        len(summary["floors"]),
        summary["total_rooms"],
        summary["available_rooms"],
    )


# Module-level app object for uvicorn
app = create_app()
