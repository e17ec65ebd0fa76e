"""Match play filter; status and period are exposed as text."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


@dataclass
class MatchPlayFilterQuery:

    class Status(Enum):
        ALL = "all"
        ACTIVE = "active"
        COMPLETED = "completed"
        CANCELLED = "cancelled"

    class Period(Enum):
        ALL = "all"
        CURRENT = "current"
        PAST = "past"
        FUTURE = "future"

    company_id: int = 0
    match_name: str | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    is_deleted: bool | None = None
    published_start_date: datetime | None = None
    published_end_date: datetime | None = None
    period: MatchPlayFilterQuery.Period = Period.ALL
    status: MatchPlayFilterQuery.Status = Status.ALL

    @property
    def period_text(self) -> str:
        return self.period.value

    @period_text.setter
    def period_text(self, value: str) -> None:
        self.period = MatchPlayFilterQuery.Period(value.lower())

    @property
    def status_text(self) -> str:
        return self.status.value

    @status_text.setter
    def status_text(self, value: str) -> None:
        self.status = MatchPlayFilterQuery.Status(value.lower())
