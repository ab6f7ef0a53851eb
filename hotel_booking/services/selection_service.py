"""Room-block selection: same-floor windows first, cross-floor clusters second.

Both searches keep the first strictly-better candidate they meet, so the
iteration order is part of the contract:

* same-floor: floors ascending, then windows left to right along the corridor;
* cross-floor: seeds in inventory order, neighbours ranked with a stable sort.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Optional, Protocol, Sequence

from hotel_booking.domain.models import RankedRoom, Room
from hotel_booking.utils.logger import get_logger


logger = get_logger(__name__)

DEFAULT_FLOOR_TRAVEL_WEIGHT = 2


class _Positioned(Protocol):
    @property
    def floor(self) -> int: ...

    @property
    def room_index(self) -> int: ...


@dataclass(frozen=True)
class _SeedOutcome:
    cost: int
    seed_position: int
    cluster: tuple[RankedRoom, ...]


def _ensure_room_count(room_count: int) -> None:
    if room_count < 1:
        raise ValueError("room_count must be >= 1")


def travel_cost(window: Sequence[Room]) -> int:
    """Horizontal spread of a same-floor window ordered by index."""
    return window[-1].room_index - window[0].room_index


def find_best_same_floor(rooms: Sequence[Room], room_count: int) -> Optional[list[Room]]:
    """Return the tightest run of ``room_count`` free rooms on a single floor."""
    _ensure_room_count(room_count)
    best_window: Optional[list[Room]] = None
    min_travel: Optional[int] = None

    for floor in sorted({room.floor for room in rooms}):
        floor_rooms = sorted(
            (room for room in rooms if room.floor == floor and not room.is_booked),
            key=lambda room: room.room_index,
        )
        if len(floor_rooms) < room_count:
            continue

        for start in range(len(floor_rooms) - room_count + 1):
            window = floor_rooms[start:start + room_count]
            cost = travel_cost(window)
            if min_travel is None or cost < min_travel:
                min_travel = cost
                best_window = window

    if best_window is not None:
        logger.debug(
            "Same-floor window selected | floor=%s | travel_cost=%s",
            best_window[0].floor,
            min_travel,
        )
    return best_window


def room_distance(
    first: Room,
    second: Room,
    floor_weight: int = DEFAULT_FLOOR_TRAVEL_WEIGHT,
) -> int:
    vertical = abs(first.floor - second.floor) * floor_weight
    horizontal = abs(first.room_index - second.room_index)
    return vertical + horizontal


def cluster_cost(
    group: Sequence[_Positioned],
    floor_weight: int = DEFAULT_FLOOR_TRAVEL_WEIGHT,
) -> int:
    """Bounding-box cost of a group of rooms."""
    floors = [item.floor for item in group]
    indexes = [item.room_index for item in group]
    floor_span = (max(floors) - min(floors)) * floor_weight
    room_span = max(indexes) - min(indexes)
    return floor_span + room_span


def _rank_from_seed(
    seed: Room,
    available: Sequence[Room],
    floor_weight: int,
) -> list[RankedRoom]:
    ranked = [
        RankedRoom(room=room, distance=room_distance(seed, room, floor_weight))
        for room in available
    ]
    # sorted() is stable: equal distances keep inventory order.
    return sorted(ranked, key=lambda item: item.distance)


def _evaluate_seeds(
    available: Sequence[Room],
    seed_positions: range,
    room_count: int,
    floor_weight: int,
) -> Optional[_SeedOutcome]:
    best: Optional[_SeedOutcome] = None
    for position in seed_positions:
        cluster = tuple(_rank_from_seed(available[position], available, floor_weight)[:room_count])
        cost = cluster_cost(cluster, floor_weight)
        if best is None or cost < best.cost:
            best = _SeedOutcome(cost=cost, seed_position=position, cluster=cluster)
    return best


def _chunk_positions(total: int, chunks: int) -> list[range]:
    size, remainder = divmod(total, chunks)
    ranges: list[range] = []
    start = 0
    for chunk in range(chunks):
        stop = start + size + (1 if chunk < remainder else 0)
        if stop > start:
            ranges.append(range(start, stop))
        start = stop
    return ranges


def find_best_across_floors(
    rooms: Sequence[Room],
    room_count: int,
    floor_weight: int = DEFAULT_FLOOR_TRAVEL_WEIGHT,
    workers: int = 1,
) -> Optional[list[Room]]:
    """Seeded nearest-cluster search over every free room in the building.

    Each free room seeds one hypothesis: its ``room_count`` nearest free
    neighbours. The hypothesis with the smallest bounding-box cost wins; ties
    go to the seed that comes first in inventory order. With ``workers > 1``
    seeds are scored concurrently over contiguous chunks and reduced by
    ``(cost, seed_position)``, which picks the same winner as the sequential
    scan.

    The returned rooms are the canonical inventory records in inventory order.
    """
    _ensure_room_count(room_count)
    if workers < 1:
        raise ValueError("workers must be >= 1")

    available = tuple(room for room in rooms if not room.is_booked)
    if len(available) < room_count:
        return None

    if workers == 1 or len(available) < 2:
        best = _evaluate_seeds(available, range(len(available)), room_count, floor_weight)
    else:
        position_chunks = _chunk_positions(len(available), min(workers, len(available)))
        with ThreadPoolExecutor(max_workers=len(position_chunks)) as executor:
            outcomes = list(
                executor.map(
                    lambda positions: _evaluate_seeds(
                        available, positions, room_count, floor_weight
                    ),
                    position_chunks,
                )
            )
        best = min(
            (outcome for outcome in outcomes if outcome is not None),
            key=lambda outcome: (outcome.cost, outcome.seed_position),
        )

    if best is None:
        return None

    chosen_ids = {item.room.room_id for item in best.cluster}
    logger.debug(
        "Cross-floor cluster selected | seed=%s | cluster_cost=%s",
        available[best.seed_position].room_id,
        best.cost,
    )
    return [room for room in rooms if room.room_id in chosen_ids]
