#!/usr/bin/env python3
"""
Tripmiles - Position encoding conversions and trip distance totals.

This package converts positions between latitude/longitude, n-vector and
UTM encodings, decodes serialized positions of any of those encodings, and
totals the great-circle distance travelled along trips.
"""
import importlib.metadata

__version__ = importlib.metadata.version("tripmiles")

# Import main classes for public API
from .exceptions import (
    DecodeError,
    MalformedRecord,
    MissingField,
    MissingZoneLetter,
    OutOfRange,
    PositionError,
    TripFileError,
    UnrecognizedEncoding,
    WrongFieldType,
)
from .geometry import GeodeticPosition, LatLonger, distance
from .nvector import NVectorPosition
from .utm import UTMPosition
from .decoder import decode_position
from .trip import Trip, TripTotal

__all__ = [
    "DecodeError",
    "MalformedRecord",
    "MissingField",
    "MissingZoneLetter",
    "OutOfRange",
    "PositionError",
    "TripFileError",
    "UnrecognizedEncoding",
    "WrongFieldType",
    "GeodeticPosition",
    "LatLonger",
    "distance",
    "NVectorPosition",
    "UTMPosition",
    "decode_position",
    "Trip",
    "TripTotal",
]
