"""Tee sheet filter."""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum


class TimeOfDay(Enum):
    ALL_DAY = 0
    MORNING = 1
    AFTERNOON = 2
    EVENING = 3


@dataclass
class TeeSheetFilterQuery:

    class QueryType(Enum):
        TEE_TIMES = 0
        AVAILABILITY = 1
        RESERVATIONS = 2

    play_date: date = field(default_factory=date.today)
    time_of_day: TimeOfDay = TimeOfDay.ALL_DAY
    courses: list[int] = field(default_factory=list)
    available: bool = True
    company_id: int = 0
    city_id: int = 0
    state_id: int = 0
    country_id: int = 0
    query_type: QueryType = QueryType.TEE_TIMES
    number_players: int = 1
