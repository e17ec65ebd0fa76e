"""
Event filter.

Self-contained: source units cannot depend on each other, so the paging
base class is repeated here.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class Gender(Enum):
    ANY = "any"
    FEMALE = "female"
    MALE = "male"


@dataclass
class PagedQuery:
    max_rows: int = 0
    current_index: int = 0


@dataclass
class EventFilterQuery(PagedQuery):
    """Filtering for events."""

    company_id: int | None = None
    name: str | None = None  # Used in a contains search
    start_date: datetime | None = None
    end_date: datetime | None = None
    is_registerable: bool | None = None
    category_id: int | None = None
    member_id: int | None = None
    availability: bool | None = None
    show_in_calendar_at_glance: bool | None = None
    allow_guests: bool | None = None
    my_bookings: bool | None = None
    hidden_events: bool | None = None
    allow_underage: bool | None = None
    event_gender_restriction: list[Gender] = field(default_factory=list)
    event_is_full: bool | None = None
