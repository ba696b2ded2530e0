#!/usr/bin/env python3
"""
Universal Transverse Mercator (UTM) positions on the WGS84 ellipsoid.

Forward and inverse projections use the truncated Transverse Mercator power
series (Snyder, "Map Projections: A Working Manual", pp. 61-64), with the
Norway and Svalbard zone exceptions applied when picking the zone number.

Reference: https://en.wikipedia.org/wiki/Universal_Transverse_Mercator_coordinate_system
"""

from typing import List, NamedTuple, Tuple
import logging
import math

from .exceptions import MissingZoneLetter, OutOfRange, WrongFieldType
from .geometry import GeodeticPosition, LatLonger
from .records import (
    RawRecord,
    load_record,
    require_integral,
    require_number,
    require_string,
)

logger = logging.getLogger(__name__)

UTM_FIELDS = ("Easting", "Northing", "ZoneNumber", "ZoneLetter")

# Scale factor on the central meridian
K0 = 0.9996
# WGS84 first eccentricity squared
E = 0.00669438
# WGS84 equatorial radius in meters
R = 6378137

FALSE_EASTING = 500000
FALSE_NORTHING = 10000000

MIN_LATITUDE = -80.0
MAX_LATITUDE = 84.0

# Inverse longitudes this close past +/-180 are series rounding on the
# antimeridian, not positions across it (1e-6 degrees is about 0.1 m)
ANTIMERIDIAN_TOLERANCE = 1e-6

E2 = E * E
E3 = E2 * E
E_P2 = E / (1.0 - E)

SQRT_E = math.sqrt(1 - E)
_E = (1 - SQRT_E) / (1 + SQRT_E)
_E2 = _E * _E
_E3 = _E2 * _E
_E4 = _E3 * _E
_E5 = _E4 * _E

# Meridian arc series
M1 = 1 - E / 4 - 3 * E2 / 64 - 5 * E3 / 256
M2 = 3 * E / 8 + 3 * E2 / 32 + 45 * E3 / 1024
M3 = 15 * E2 / 256 + 45 * E3 / 1024
M4 = 35 * E3 / 3072

# Footpoint latitude series
P2 = 3.0 / 2 * _E - 27.0 / 32 * _E3 + 269.0 / 512 * _E5
P3 = 21.0 / 16 * _E2 - 55.0 / 32 * _E4
P4 = 151.0 / 96 * _E3 - 417.0 / 128 * _E5
P5 = 1097.0 / 512 * _E4

# Southern edge of each 8 degree latitude band, from north to south.
# Band X is stretched to 12 degrees so that it reaches 84N.
ZONE_LETTERS: List[Tuple[int, str]] = [
    (72, "X"),
    (64, "W"),
    (56, "V"),
    (48, "U"),
    (40, "T"),
    (32, "S"),
    (24, "R"),
    (16, "Q"),
    (8, "P"),
    (0, "N"),
    (-8, "M"),
    (-16, "L"),
    (-24, "K"),
    (-32, "J"),
    (-40, "H"),
    (-48, "G"),
    (-56, "F"),
    (-64, "E"),
    (-72, "D"),
    (-80, "C"),
]

VALID_ZONE_LETTERS = frozenset(letter for _, letter in ZONE_LETTERS)

# Letter used for latitudes outside the UTM bands
NO_ZONE_LETTER = " "


def latitude_to_zone_letter(latitude: float) -> str:
    """Return the latitude band letter, or a blank outside [-80, 84]."""
    if latitude > MAX_LATITUDE:
        return NO_ZONE_LETTER
    for band_south, letter in ZONE_LETTERS:
        if latitude >= band_south:
            return letter
    return NO_ZONE_LETTER


def latlon_to_zone_number(latitude: float, longitude: float) -> int:
    """
    Return the UTM zone number for a position.

    Norway's southwest coast is folded into zone 32, and around Svalbard only
    the odd zones 31-37 are used. Both exceptions are checked before the
    regular 6 degree zones, Norway first.
    """
    if 56 <= latitude <= 64 and 3 <= longitude <= 12:
        return 32

    if 72 <= latitude <= 84 and longitude >= 0:
        if longitude <= 9:
            return 31
        elif longitude <= 21:
            return 33
        elif longitude <= 33:
            return 35
        elif longitude <= 42:
            return 37

    # 180E is the eastern edge of zone 60, not a zone 61
    return min(int(math.floor((longitude + 180) / 6)) + 1, 60)


def zone_number_to_central_longitude(zone_number: int) -> int:
    """Return the central meridian of a zone in degrees."""
    return (zone_number - 1) * 6 - 180 + 3


class UTMPosition(NamedTuple):
    """A position in the Universal Transverse Mercator coordinate system.

    An empty ``zone_letter`` means the band is unknown; such a position cannot
    be converted back to latitude and longitude.
    """

    easting: float
    northing: float
    zone_number: int
    zone_letter: str

    @classmethod
    def from_geodetic(cls, position: LatLonger) -> "UTMPosition":
        """
        Project a latitude/longitude position into UTM.

        Args:
            position: Any position exposing latitude and longitude in degrees

        Returns:
            The projected UTMPosition

        Raises:
            OutOfRange: If latitude is outside [-80, 84] or longitude outside [-180, 180]
        """
        latitude = position.latitude
        longitude = position.longitude

        if not (MIN_LATITUDE <= latitude <= MAX_LATITUDE):
            raise OutOfRange(
                f"latitude {latitude} out of range (must be between 80 deg S and 84 deg N)"
            )
        if not (-180.0 <= longitude <= 180.0):
            raise OutOfRange(
                f"longitude {longitude} out of range (must be between 180 deg W and 180 deg E)"
            )

        lat_rad = math.radians(latitude)
        lat_sin = math.sin(lat_rad)
        lat_cos = math.cos(lat_rad)

        lat_tan = lat_sin / lat_cos
        lat_tan2 = lat_tan * lat_tan
        lat_tan4 = lat_tan2 * lat_tan2

        zone_number = latlon_to_zone_number(latitude, longitude)
        zone_letter = latitude_to_zone_letter(latitude)

        lon_rad = math.radians(longitude)
        central_lon_rad = math.radians(zone_number_to_central_longitude(zone_number))

        n = R / math.sqrt(1 - E * lat_sin * lat_sin)
        c = E_P2 * lat_cos * lat_cos

        a = lat_cos * (lon_rad - central_lon_rad)
        a2 = a * a
        a3 = a2 * a
        a4 = a3 * a
        a5 = a4 * a
        a6 = a5 * a

        m = R * (
            M1 * lat_rad
            - M2 * math.sin(2 * lat_rad)
            + M3 * math.sin(4 * lat_rad)
            - M4 * math.sin(6 * lat_rad)
        )

        easting = (
            K0
            * n
            * (
                a
                + a3 / 6 * (1 - lat_tan2 + c)
                + a5 / 120 * (5 - 18 * lat_tan2 + lat_tan4 + 72 * c - 58 * E_P2)
            )
            + FALSE_EASTING
        )
        northing = K0 * (
            m
            + n
            * lat_tan
            * (
                a2 / 2
                + a4 / 24 * (5 - lat_tan2 + 9 * c + 4 * c * c)
                + a6 / 720 * (61 - 58 * lat_tan2 + lat_tan4 + 600 * c - 330 * E_P2)
            )
        )

        if latitude < 0:
            northing += FALSE_NORTHING

        return cls(
            easting=easting,
            northing=northing,
            zone_number=zone_number,
            zone_letter=zone_letter,
        )

    def validate(self) -> None:
        """
        Check every field against its UTM bounds.

        Raises:
            MissingZoneLetter: If the zone letter is unset
            OutOfRange: If any field is outside its documented bounds
        """
        if not self.zone_letter:
            raise MissingZoneLetter("ZoneLetter field needs to be set")
        self._check_bounds()

    def _check_bounds(self) -> None:
        if not (100000 <= self.easting < 1000000):
            raise OutOfRange(
                f"easting {self.easting} out of range (must be between 100,000 m and 999,999 m)"
            )
        if not (0 <= self.northing <= 10000000):
            raise OutOfRange(
                f"northing {self.northing} out of range (must be between 0 m and 10,000,000 m)"
            )
        if not (1 <= self.zone_number <= 60):
            raise OutOfRange(
                f"zone number {self.zone_number} out of range (must be between 1 and 60)"
            )
        if self.zone_letter and self.zone_letter.upper() not in VALID_ZONE_LETTERS:
            raise OutOfRange(
                f"zone letter {self.zone_letter!r} out of range (must be between C and X, excluding I and O)"
            )

    @property
    def is_northern(self) -> bool:
        """True for bands N and above."""
        if not self.zone_letter:
            raise MissingZoneLetter("ZoneLetter field needs to be set")
        return self.zone_letter.upper() >= "N"

    @property
    def hemisphere(self) -> str:
        return "N" if self.is_northern else "S"

    @property
    def central_meridian(self) -> int:
        return zone_number_to_central_longitude(self.zone_number)

    @property
    def epsg_code(self) -> int:
        """EPSG code of the WGS84 / UTM zone this position is projected in."""
        return (32600 if self.is_northern else 32700) + self.zone_number

    def to_geodetic(self) -> GeodeticPosition:
        """
        Convert back to latitude and longitude.

        Returns:
            GeodeticPosition with latitude in [-90, 90] and longitude in [-180, 180]

        Raises:
            MissingZoneLetter: If the zone letter is unset
            OutOfRange: If any field is outside its documented bounds
        """
        self.validate()

        x = self.easting - FALSE_EASTING
        y = self.northing
        if not self.is_northern:
            y -= FALSE_NORTHING

        m = y / K0
        mu = m / (R * M1)

        p_rad = (
            mu
            + P2 * math.sin(2 * mu)
            + P3 * math.sin(4 * mu)
            + P4 * math.sin(6 * mu)
            + P5 * math.sin(8 * mu)
        )

        p_sin = math.sin(p_rad)
        p_sin2 = p_sin * p_sin

        p_cos = math.cos(p_rad)

        p_tan = p_sin / p_cos
        p_tan2 = p_tan * p_tan
        p_tan4 = p_tan2 * p_tan2

        ep_sin = 1 - E * p_sin2
        ep_sin_sqrt = math.sqrt(ep_sin)

        n = R / ep_sin_sqrt
        r = (1 - E) / ep_sin

        c = E_P2 * p_cos * p_cos
        c2 = c * c

        d = x / (n * K0)
        d2 = d * d
        d3 = d2 * d
        d4 = d3 * d
        d5 = d4 * d
        d6 = d5 * d

        latitude = p_rad - (p_tan / r) * (
            d2 / 2
            - d4 / 24 * (5 + 3 * p_tan2 + 10 * c - 4 * c2 - 9 * E_P2)
            + d6 / 720 * (61 + 90 * p_tan2 + 298 * c + 45 * p_tan4 - 252 * E_P2 - 3 * c2)
        )

        longitude = (
            d
            - d3 / 6 * (1 + 2 * p_tan2 + c)
            + d5 / 120 * (5 - 2 * c + 28 * p_tan2 - 3 * c2 + 8 * E_P2 + 24 * p_tan4)
        ) / p_cos

        lat_deg = max(-90.0, min(90.0, math.degrees(latitude)))
        lon_deg = math.degrees(longitude) + self.central_meridian
        if abs(lon_deg) > 180.0:
            if abs(lon_deg) - 180.0 <= ANTIMERIDIAN_TOLERANCE:
                lon_deg = math.copysign(180.0, lon_deg)
            else:
                lon_deg = (lon_deg + 180.0) % 360.0 - 180.0

        return GeodeticPosition(latitude=lat_deg, longitude=lon_deg)

    @property
    def latitude(self) -> float:
        return self.to_geodetic().latitude

    @property
    def longitude(self) -> float:
        return self.to_geodetic().longitude

    @classmethod
    def decode(cls, raw: RawRecord) -> "UTMPosition":
        """
        Decode an ``{"Easting", "Northing", "ZoneNumber", "ZoneLetter"}`` record.

        ZoneNumber may be an integer or a float with no fractional part.
        ZoneLetter must be a string of at most one character; an empty string
        decodes to a position with no zone letter.

        Raises:
            MalformedRecord: If the record does not have exactly four fields
            MissingField: If a required field is absent
            WrongFieldType: If a field has the wrong type
            OutOfRange: If a field is outside its UTM bounds
        """
        encoding = "UTM position"
        record = load_record(raw, encoding, UTM_FIELDS)

        easting = require_number(record, "Easting", encoding)
        northing = require_number(record, "Northing", encoding)
        zone_number = require_integral(record, "ZoneNumber", encoding)
        zone_letter = require_string(record, "ZoneLetter", encoding)
        if len(zone_letter) > 1:
            raise WrongFieldType("ZoneLetter", encoding, zone_letter)

        position = cls(
            easting=easting,
            northing=northing,
            zone_number=zone_number,
            zone_letter=zone_letter.upper(),
        )
        position._check_bounds()
        return position
