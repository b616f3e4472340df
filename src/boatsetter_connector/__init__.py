"""
Boatsetter Connector - Owner Area Automation
============================================

Drives the Boatsetter owner website (login, boat listings, calendar
availability) through a Playwright browser session.

Usage:
------
```python
from boatsetter_connector import BoatsetterConnector, BoatService, ConnectorConfig

config = ConnectorConfig.from_env()
async with BoatsetterConnector(config) as connector:
    await connector.login(config.credentials)
    service = BoatService(connector)
    await service.block_day("12345", "2025-02-28")
    await service.block_time_range("12345", "2025-02-27", "10:00", "14:00")
```
"""

__version__ = "1.0.0"

from .calendar import CalendarLabel, CalendarNavigator, Month, iter_dates, month_delta
from .config import ConnectorConfig, setup_logging
from .connector import BoatsetterConnector
from .exceptions import (
    BoatsetterError,
    InvalidInputError,
    MonthLabelError,
    NotInitializedError,
)
from .models import (
    Boat,
    BoatAvailability,
    Credentials,
    LoginResult,
    SessionState,
    TimeRange,
)
from .services import BoatService

__all__ = [
    "BoatsetterConnector",
    "BoatService",
    "ConnectorConfig",
    "setup_logging",
    "CalendarNavigator",
    "CalendarLabel",
    "Month",
    "iter_dates",
    "month_delta",
    "Boat",
    "BoatAvailability",
    "Credentials",
    "LoginResult",
    "SessionState",
    "TimeRange",
    "BoatsetterError",
    "InvalidInputError",
    "MonthLabelError",
    "NotInitializedError",
]
