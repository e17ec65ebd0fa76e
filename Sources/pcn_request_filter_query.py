"""Reciprocal club (PCN) request filter."""

from datetime import date
from enum import Enum


class RequestStatus(Enum):
    UNKNOWN = "unknown"
    INITIAL_REQUEST = "initial"
    PENDING = "pending"
    REJECTED = "rejected"
    APPROVED = "approved"


class PCNRequestFilterQuery:
    """Search filter for PCN requests."""

    from_date: date | None = None
    to_date: date | None = None
    requested_pcn_club: int | None = None  # Club being requested
    member_pcn_club: int | None = None  # Club of the requesting member
    status: RequestStatus = RequestStatus.UNKNOWN
    member_number: str | None = None

    def __init__(self):
        self._identifier = "1F48F456-706B-44D5-8539-1BCD87DD4469"

    @property
    def id(self) -> str:
        return self._identifier

    def __str__(self):
        def _or_empty(value):
            return "-empty-" if value is None or value == "" else value

        return (
            f"PCNQuery with From Date:{_or_empty(self.from_date)}, ToDate:{_or_empty(self.to_date)}, "
            f"RequestedPCNClubId:{_or_empty(self.requested_pcn_club)}, "
            f"MemberPCNClubId:{_or_empty(self.member_pcn_club)}, Status:{self.status.name}, "
            f"MemberNumber: {_or_empty(self.member_number)}."
        )
