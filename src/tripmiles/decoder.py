#!/usr/bin/env python3
"""
Decoding of serialized positions whose encoding is not annotated.

Each encoding is a flat JSON object with its own fixed field set (two fields
for geodetic, three for n-vector, four for UTM), so at most one decoder can
accept a given record. The decoders are still tried in a fixed order:
geodetic, then n-vector, then UTM.
"""

from typing import Callable, Dict, Tuple
import logging

from .exceptions import PositionError, UnrecognizedEncoding
from .geometry import GeodeticPosition, LatLonger
from .nvector import NVectorPosition
from .records import RawRecord, parse_record
from .utm import UTMPosition

logger = logging.getLogger(__name__)

Decoder = Callable[[RawRecord], LatLonger]

DECODERS: Tuple[Tuple[str, Decoder], ...] = (
    ("geodetic", GeodeticPosition.decode),
    ("nvector", NVectorPosition.decode),
    ("utm", UTMPosition.decode),
)


def encoding_name(position: LatLonger) -> str:
    """Return the name under which a decoded position's encoding is registered."""
    if isinstance(position, UTMPosition):
        return "utm"
    if isinstance(position, NVectorPosition):
        return "nvector"
    return "geodetic"


def decode_position(raw: RawRecord) -> LatLonger:
    """
    Decode a serialized position of any supported encoding.

    Args:
        raw: JSON text or parsed mapping

    Returns:
        The first successfully decoded GeodeticPosition, NVectorPosition or UTMPosition

    Raises:
        UnrecognizedEncoding: If no decoder accepts the record. Its ``errors``
            attribute holds the error each decoder raised.
    """
    errors: Dict[str, PositionError] = {}

    try:
        record = parse_record(raw)
    except PositionError as e:
        errors = {name: e for name, _ in DECODERS}
        raise UnrecognizedEncoding(raw, errors) from e

    for name, decode in DECODERS:
        try:
            position = decode(record)
        except PositionError as e:
            logger.debug(f"Record is not a {name} position: {e}")
            errors[name] = e
            continue
        return position

    raise UnrecognizedEncoding(raw, errors)
