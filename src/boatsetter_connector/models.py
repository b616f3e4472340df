"""
Data Models for Boatsetter Connector
=====================================
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from .exceptions import InvalidInputError

_TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


class SessionState(str, Enum):
    """Lifecycle of a connector's browser session"""
    UNINITIALIZED = "uninitialized"
    READY = "ready"
    CLOSED = "closed"


@dataclass
class Credentials:
    """Owner account credentials"""
    email: str
    password: str
    
    def __repr__(self) -> str:
        return f"Credentials(email={self.email!r}, password='***')"


@dataclass
class LoginResult:
    """Outcome of a login attempt"""
    success: bool
    message: str
    data: Dict[str, Any] = field(default_factory=dict)


@dataclass
class Boat:
    """Boat card from the owner dashboard"""
    id: str
    title: str
    url: str
    status: str = ""
    image_url: Optional[str] = None
    views: int = 0
    is_instant_book_enabled: bool = False
    is_managed: bool = False
    
    @property
    def is_active(self) -> bool:
        return self.status.strip().lower() == "active"
    
    @property
    def edit_url(self) -> str:
        return f"/boats/{self.id}/edit/overview"
    
    @property
    def calendar_url(self) -> str:
        return f"/boats/{self.id}/edit/calendar"


@dataclass
class TimeRange:
    """Unavailable hours within a day, as 'HH:MM' strings"""
    start: str
    end: str
    
    def __post_init__(self):
        for name, value in (("start", self.start), ("end", self.end)):
            if not isinstance(value, str) or not _TIME_PATTERN.match(value):
                raise InvalidInputError(name, f"expected HH:MM, got {value!r}")
        if self.start >= self.end:
            raise InvalidInputError("end", f"{self.end} is not after {self.start}")


@dataclass
class BoatAvailability:
    """Settings applied to a single calendar day"""
    is_available: bool
    unavailable_time_ranges: List[TimeRange] = field(default_factory=list)
    price_adjustment: Optional[int] = None
    
    def __post_init__(self):
        if self.price_adjustment is not None and not -100 <= self.price_adjustment <= 100:
            raise InvalidInputError(
                "price_adjustment", f"must be between -100 and 100, got {self.price_adjustment}"
            )
    
    @property
    def has_time_ranges(self) -> bool:
        return self.is_available and bool(self.unavailable_time_ranges)
    
    @property
    def has_price_adjustment(self) -> bool:
        return self.is_available and self.price_adjustment is not None
