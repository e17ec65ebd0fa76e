"""Immutable coordinates (value type)."""

from dataclasses import dataclass


@dataclass(frozen=True)
class GeoPoint:
    latitude: float = 0.0
    longitude: float = 0.0
