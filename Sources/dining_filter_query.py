"""Dining reservation filter."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import IntEnum

MIN_DATE = datetime(1900, 1, 1)


class TimeOfDay(IntEnum):
    """Which part of the day to return bookings for."""

    ALL_DAY = 0
    MORNING = 1  # First booking until noon
    AFTERNOON = 2  # 11 AM until 5 PM
    EVENING = 3  # 4 PM until last booking


@dataclass
class DiningFilterQuery:
    room: int | None = None  # Facility id
    guests: int = 0
    time_of_day: TimeOfDay = TimeOfDay.ALL_DAY
    complete: bool = False
    _date: datetime | None = field(default=None, repr=False)

    @property
    def date(self) -> datetime:
        """Selected date; unset reads as 1900-01-01."""
        return self._date or MIN_DATE

    @date.setter
    def date(self, value: datetime) -> None:
        self._date = value
