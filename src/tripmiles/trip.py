#!/usr/bin/env python3
"""
Trip data model for travel distance totals.
"""

from typing import List, NamedTuple
import logging

from .geometry import GeodeticPosition, LatLonger, distance

logger = logging.getLogger(__name__)


class TripTotal(NamedTuple):
    """Total distance travelled by one traveler."""

    traveler_id: str
    distance: float  # statute miles

    def format(self, precision: int = 2) -> str:
        return f"Traveler {self.traveler_id} traveled {self.distance:.{precision}f} miles"

    def __str__(self) -> str:
        return self.format()


class Trip:
    """The ordered positions reported by one traveler."""

    def __init__(self, traveler_id: str, positions: List[LatLonger]):
        """Initializes a Trip object.

        Args:
            traveler_id: Identifier of the traveler as written in the trip file.
            positions: Positions in the order they were recorded. Any encoding
                exposing latitude and longitude may be mixed freely.
        """
        self.traveler_id = traveler_id
        self.positions = positions

    @property
    def distance(self) -> float:
        """
        Total great-circle distance along the trip in miles.

        A trip with fewer than two positions has travelled nowhere.
        """
        points = [GeodeticPosition.from_latlonger(p) for p in self.positions]
        return sum(distance(points[i - 1], points[i]) for i in range(1, len(points)))

    def total(self) -> TripTotal:
        return TripTotal(traveler_id=self.traveler_id, distance=self.distance)

    def __len__(self) -> int:
        """Return number of positions in trip."""
        return len(self.positions)

    def __getitem__(self, index):
        """Allow indexing into positions."""
        return self.positions[index]

    def __iter__(self):
        """Allow iteration over positions."""
        return iter(self.positions)

    def __repr__(self) -> str:
        return f"Trip(traveler_id={self.traveler_id!r}, positions={len(self.positions)})"
