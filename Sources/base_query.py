"""Paging fields shared by query objects."""

from dataclasses import dataclass


@dataclass
class BaseQuery:
    """Base query with paging."""

    max_rows: int = 0  # Maximum rows to return
    current_index: int = 0  # Record to start from
