"""
Calendar Navigation
===================

Month arithmetic and navigation for the owner calendar editor.

The editor shows one month at a time with a "Month YYYY" header and
previous/next buttons. ``CalendarNavigator`` reads the header, works out how
many steps separate it from the target month and clicks through them.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from enum import IntEnum
from typing import Iterator, Optional, Union

from playwright.async_api import Page

from .exceptions import MonthLabelError

logger = logging.getLogger(__name__)

DateLike = Union[date, datetime, str]


class Month(IntEnum):
    """Calendar months, January=1"""
    JANUARY = 1
    FEBRUARY = 2
    MARCH = 3
    APRIL = 4
    MAY = 5
    JUNE = 6
    JULY = 7
    AUGUST = 8
    SEPTEMBER = 9
    OCTOBER = 10
    NOVEMBER = 11
    DECEMBER = 12

    @property
    def label(self) -> str:
        return self.name.capitalize()

    @classmethod
    def from_name(cls, name: str) -> "Month":
        try:
            return cls[name.strip().upper()]
        except (KeyError, AttributeError):
            raise MonthLabelError(name)


@dataclass(frozen=True)
class CalendarLabel:
    """Month and year shown in the calendar header"""
    month: Month
    year: int

    def __str__(self) -> str:
        return f"{self.month.label} {self.year}"

    @classmethod
    def parse(cls, text: Optional[str]) -> "CalendarLabel":
        """Parse header text such as 'March 2025'."""
        parts = (text or "").split()
        if len(parts) != 2 or not parts[1].isdigit():
            raise MonthLabelError(text)
        return cls(month=Month.from_name(parts[0]), year=int(parts[1]))

    @classmethod
    def for_date(cls, value: date) -> "CalendarLabel":
        return cls(month=Month(value.month), year=value.year)


def month_delta(current: CalendarLabel, target: CalendarLabel) -> int:
    """Signed number of month steps from ``current`` to ``target``."""
    return (target.year - current.year) * 12 + (target.month - current.month)


def to_date(value: DateLike) -> date:
    """Coerce a date, datetime or ISO 'YYYY-MM-DD' string to a date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return datetime.strptime(value.strip()[:10], "%Y-%m-%d").date()
    raise TypeError(f"Expected date or ISO date string, got {type(value).__name__}")


def iter_dates(start: DateLike, end: DateLike) -> Iterator[date]:
    """Yield every day from start to end, both inclusive."""
    day = to_date(start)
    last = to_date(end)
    while day <= last:
        yield day
        day += timedelta(days=1)


class CalendarNavigator:
    """
    Moves the calendar editor on ``page`` to a target month.

    Usage:
    ------
    ```python
    navigator = CalendarNavigator(page)
    if await navigator.navigate_to_month("2025-03-15"):
        ...
    ```
    """

    MONTH_LABEL_SELECTOR = ".Calendar-month-year"
    PREVIOUS_BUTTON_INDEX = 1
    NEXT_BUTTON_INDEX = 2
    SETTLE_DELAY_MS = 300

    def __init__(self, page: Page, settle_delay_ms: int = SETTLE_DELAY_MS):
        self.page = page
        self.settle_delay_ms = settle_delay_ms

    async def read_label(self) -> str:
        text = await self.page.locator(self.MONTH_LABEL_SELECTOR).text_content()
        return (text or "").strip()

    async def current_month(self) -> CalendarLabel:
        return CalendarLabel.parse(await self.read_label())

    async def next_month(self, steps: int = 1):
        await self._click_repeatedly(self.NEXT_BUTTON_INDEX, steps)

    async def previous_month(self, steps: int = 1):
        await self._click_repeatedly(self.PREVIOUS_BUTTON_INDEX, steps)

    async def _click_repeatedly(self, button_index: int, steps: int):
        button = self.page.get_by_role("button").nth(button_index)
        for _ in range(steps):
            await button.click()
            await self.page.wait_for_timeout(self.settle_delay_ms)

    async def navigate_to_month(self, target: DateLike) -> bool:
        """
        Navigate to the month containing ``target``.

        Returns True once the header shows the target month and year. Any
        failure (bad target, unreadable header, click timeout) is logged and
        reported as False.
        """
        try:
            target_label = CalendarLabel.for_date(to_date(target))
            logger.debug(f"Navigating calendar to: {target_label}")

            displayed = await self.read_label()
            if displayed == str(target_label):
                logger.debug(f"Already on the requested month: {target_label}")
                return True

            current = CalendarLabel.parse(displayed)
            delta = month_delta(current, target_label)
            logger.debug(f"Calendar shows {current}, {delta:+d} month(s) to go")

            if delta > 0:
                await self.next_month(delta)
            elif delta < 0:
                await self.previous_month(-delta)

            reached = await self.read_label()
            try:
                landed = CalendarLabel.parse(reached)
            except MonthLabelError:
                landed = None

            if landed == target_label:
                logger.debug(f"Calendar now on: {target_label}")
                return True

            logger.warning(f"Could not reach {target_label}, calendar shows: {reached!r}")
            return False

        except MonthLabelError as e:
            logger.error(f"Cannot navigate calendar: {e}")
            return False
        except Exception as e:
            logger.error(f"Error navigating calendar month: {e}")
            return False
