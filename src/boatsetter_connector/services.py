"""
Boat Service
============

Convenience operations over a logged-in ``BoatsetterConnector``.
"""

import logging
from typing import Iterable, List, Optional, Tuple

from .calendar import DateLike
from .connector import BoatsetterConnector
from .models import Boat, BoatAvailability, TimeRange

logger = logging.getLogger(__name__)


class BoatService:
    """Boat management shortcuts: status, blocking, price adjustments"""

    def __init__(self, connector: BoatsetterConnector):
        self.connector = connector

    async def get_boats(self) -> List[Boat]:
        logger.info("Fetching boat list...")
        return await self.connector.get_boats()

    async def get_boat_by_id(self, boat_id: str) -> Optional[Boat]:
        logger.info(f"Looking up boat: {boat_id}")
        boats = await self.connector.get_boats()

        for boat in boats:
            if boat.id == boat_id:
                return boat

        logger.warning(f"Boat {boat_id} not found")
        return None

    async def get_active_boats(self) -> List[Boat]:
        logger.info("Fetching active boats...")
        return [boat for boat in await self.connector.get_boats() if boat.is_active]

    async def get_inactive_boats(self) -> List[Boat]:
        logger.info("Fetching inactive boats...")
        return [boat for boat in await self.connector.get_boats() if not boat.is_active]

    async def activate_boat(self, boat_id: str) -> bool:
        logger.info(f"Activating boat {boat_id}...")
        return await self.connector.toggle_boat_status(boat_id, True)

    async def deactivate_boat(self, boat_id: str) -> bool:
        logger.info(f"Deactivating boat {boat_id}...")
        return await self.connector.toggle_boat_status(boat_id, False)

    async def set_day_availability(
        self, boat_id: str, day: DateLike, availability: BoatAvailability
    ) -> bool:
        logger.info(f"Setting availability of boat {boat_id} on {day}...")
        return await self.connector.set_date_availability(boat_id, day, availability)

    async def set_range_availability(
        self,
        boat_id: str,
        start_date: DateLike,
        end_date: DateLike,
        availability: BoatAvailability,
    ) -> bool:
        logger.info(f"Setting availability of boat {boat_id} from {start_date} to {end_date}...")
        return await self.connector.set_date_range_availability(
            boat_id, start_date, end_date, availability
        )

    async def block_day(self, boat_id: str, day: DateLike) -> bool:
        """Mark a whole day unavailable."""
        logger.info(f"Blocking {day} for boat {boat_id}...")
        return await self.connector.set_date_availability(
            boat_id, day, BoatAvailability(is_available=False)
        )

    async def adjust_day_price(self, boat_id: str, day: DateLike, percentage: int) -> bool:
        """Raise or lower the day's price by ``percentage`` (-100 to 100)."""
        if not -100 <= percentage <= 100:
            logger.error(f"Price adjustment must be between -100 and 100, got {percentage}")
            return False

        logger.info(f"Adjusting price on {day} by {percentage}%")
        return await self.connector.set_date_availability(
            boat_id, day, BoatAvailability(is_available=True, price_adjustment=percentage)
        )

    async def block_time_range(
        self, boat_id: str, day: DateLike, from_time: str, to_time: str
    ) -> bool:
        """Block the hours from ``from_time`` to ``to_time`` ('HH:MM') on one day."""
        logger.info(f"Blocking {from_time}-{to_time} on {day}...")
        return await self.connector.set_date_availability(
            boat_id,
            day,
            BoatAvailability(is_available=True, unavailable_time_ranges=[TimeRange(from_time, to_time)]),
        )

    async def block_multiple_time_ranges(
        self, boat_id: str, day: DateLike, time_ranges: Iterable[Tuple[str, str]]
    ) -> bool:
        ranges = [TimeRange(start, end) for start, end in time_ranges or []]
        if not ranges:
            logger.error("At least one time range is required")
            return False

        logger.info(f"Blocking {len(ranges)} time ranges on {day}...")
        return await self.connector.set_date_availability(
            boat_id, day, BoatAvailability(is_available=True, unavailable_time_ranges=ranges)
        )
