"""
Geodetic positions and great-circle distance.

This module provides the latitude/longitude capability shared by every
position encoding, the canonical geodetic position type, and the haversine
distance between any two positions that expose that capability.
"""

from typing import NamedTuple, Protocol
import logging
import math

from .records import RawRecord, load_record, require_number

logger = logging.getLogger(__name__)

# Mean Earth radius in statute miles
EARTH_RADIUS_MILES = 3958.76

GEODETIC_FIELDS = ("Latitude", "Longitude")


class LatLonger(Protocol):
    """Anything that can report its position as latitude and longitude in degrees."""

    @property
    def latitude(self) -> float: ...

    @property
    def longitude(self) -> float: ...


class GeodeticPosition(NamedTuple):
    """Represents a geographic position with latitude and longitude."""

    latitude: float
    longitude: float

    @classmethod
    def from_latlonger(cls, position: LatLonger) -> "GeodeticPosition":
        """
        Copy the coordinates of any position into a plain geodetic value.

        Positions with a ``to_geodetic()`` method are converted with a single
        call to it rather than one conversion per coordinate property.
        """
        if isinstance(position, cls):
            return position
        to_geodetic = getattr(position, "to_geodetic", None)
        if callable(to_geodetic):
            return to_geodetic()
        return cls(latitude=position.latitude, longitude=position.longitude)

    @classmethod
    def decode(cls, raw: RawRecord) -> "GeodeticPosition":
        """
        Decode a ``{"Latitude": ..., "Longitude": ...}`` record.

        Ranges are not checked here; conversions that need them enforce them.

        Args:
            raw: JSON text or parsed mapping

        Returns:
            The decoded GeodeticPosition

        Raises:
            MalformedRecord: If the record does not have exactly two fields
            MissingField: If Latitude or Longitude is absent
            WrongFieldType: If either value is not numeric
        """
        record = load_record(raw, "geodetic position", GEODETIC_FIELDS)
        return cls(
            latitude=require_number(record, "Latitude", "geodetic position"),
            longitude=require_number(record, "Longitude", "geodetic position"),
        )


def hsin(theta: float) -> float:
    """Haversine of an angle in radians."""
    return math.sin(theta / 2) ** 2


def distance(a: LatLonger, b: LatLonger) -> float:
    """
    Calculate the great-circle distance between two positions.

    Uses the haversine formula on a spherical Earth.

    Args:
        a: First position
        b: Second position

    Returns:
        Distance in statute miles
    """
    a = GeodeticPosition.from_latlonger(a)
    b = GeodeticPosition.from_latlonger(b)
    lat_a, lon_a = math.radians(a.latitude), math.radians(a.longitude)
    lat_b, lon_b = math.radians(b.latitude), math.radians(b.longitude)

    h = hsin(lat_b - lat_a) + math.cos(lat_a) * math.cos(lat_b) * hsin(lon_b - lon_a)

    # Rounding can push h a hair past 1 for antipodal points
    return 2 * EARTH_RADIUS_MILES * math.asin(math.sqrt(min(1.0, h)))
