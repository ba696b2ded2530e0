#!/usr/bin/env python3
"""
N-vector horizontal position representation.

An n-vector is the unit normal to the Earth's surface at a position, given in
Earth-centred Cartesian components. It has no singularities at the poles or
the antimeridian, which makes it the most stable intermediate encoding.

Reference: https://en.wikipedia.org/wiki/N-vector
"""

from typing import NamedTuple
import logging
import math

from .geometry import GeodeticPosition, LatLonger
from .records import RawRecord, load_record, require_number

logger = logging.getLogger(__name__)

NVECTOR_FIELDS = ("X", "Y", "Z")


class NVectorPosition(NamedTuple):
    """A position on Earth as dimensionless n-vector components."""

    x: float
    y: float
    z: float

    @classmethod
    def from_geodetic(cls, position: LatLonger) -> "NVectorPosition":
        """Convert a latitude/longitude position to its n-vector."""
        lat_rad = math.radians(position.latitude)
        lon_rad = math.radians(position.longitude)
        cos_lat = math.cos(lat_rad)

        return cls(
            x=cos_lat * math.cos(lon_rad),
            y=cos_lat * math.sin(lon_rad),
            z=math.sin(lat_rad),
        )

    def to_geodetic(self) -> GeodeticPosition:
        """
        Convert to latitude and longitude in degrees.

        Only the direction of the vector matters, so components that are not
        normalized (or share a common scale factor) convert to the same position.
        """
        return GeodeticPosition(
            latitude=math.degrees(math.atan2(self.z, math.hypot(self.x, self.y))),
            longitude=math.degrees(math.atan2(self.y, self.x)),
        )

    @property
    def latitude(self) -> float:
        return self.to_geodetic().latitude

    @property
    def longitude(self) -> float:
        return self.to_geodetic().longitude

    @classmethod
    def decode(cls, raw: RawRecord) -> "NVectorPosition":
        """
        Decode an ``{"X": ..., "Y": ..., "Z": ...}`` record.

        Raises:
            MalformedRecord: If the record does not have exactly three fields
            MissingField: If X, Y or Z is absent
            WrongFieldType: If any value is not numeric
        """
        record = load_record(raw, "n-vector position", NVECTOR_FIELDS)
        x, y, z = (
            require_number(record, field, "n-vector position")
            for field in NVECTOR_FIELDS
        )
        return cls(x=x, y=y, z=z)
