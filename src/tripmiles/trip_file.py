#!/usr/bin/env python3
"""
Trip file reading and the distance totals pipeline.

A trip file holds one position per line as ``<travelerID><TAB><record>``.
Consecutive lines with the same traveler ID form one trip; a different ID
starts the next trip. Trips are produced lazily and their totals are
computed in the order the trips appear in the file.
"""

from concurrent.futures import ThreadPoolExecutor
from contextlib import nullcontext
from typing import Iterable, Iterator, List, Optional, Tuple, Union
import logging

from .decoder import decode_position
from .exceptions import PositionError, TripFileError
from .geometry import GeodeticPosition, LatLonger
from .trip import Trip, TripTotal

logger = logging.getLogger(__name__)


def parse_line(line: Union[str, bytes], line_number: int) -> Tuple[str, LatLonger]:
    """
    Parse one trip file line into a traveler ID and a decoded position.

    Args:
        line: The raw line, with or without its line ending. Bytes are
            decoded as UTF-8.
        line_number: 1-based line number, used in error messages

    Returns:
        Tuple of (traveler_id, position)

    Raises:
        TripFileError: If the line is not valid UTF-8, has no tab separator,
            no traveler ID, or a record that does not decode as any position
            encoding or cannot be converted to latitude and longitude
    """
    if isinstance(line, bytes):
        try:
            line = line.decode("utf-8")
        except UnicodeDecodeError as e:
            raise TripFileError(f"invalid UTF-8 text: {e}", line_number) from e

    traveler_id, sep, record = line.rstrip("\r\n").partition("\t")
    traveler_id = traveler_id.strip()

    if not sep:
        raise TripFileError("expected '<travelerID>\\t<position>'", line_number)
    if not traveler_id:
        raise TripFileError("missing traveler ID", line_number)

    try:
        position = decode_position(record.strip())
        # A UTM record without a zone letter decodes but has no latitude
        GeodeticPosition.from_latlonger(position)
    except PositionError as e:
        raise TripFileError(str(e), line_number) from e

    return traveler_id, position


def iter_trips(lines: Iterable[Union[str, bytes]]) -> Iterator[Trip]:
    """
    Group consecutive lines by traveler ID into trips.

    Blank lines are skipped. A trip is yielded only once every one of its
    positions has been decoded.

    Raises:
        TripFileError: On the first line that cannot be parsed
    """
    current_id: Optional[str] = None
    positions: List[LatLonger] = []

    for line_number, line in enumerate(lines, start=1):
        if not line.strip():
            continue

        traveler_id, position = parse_line(line, line_number)

        if traveler_id != current_id:
            if current_id is not None:
                yield Trip(current_id, positions)
            current_id = traveler_id
            positions = []

        positions.append(position)

    if current_id is not None:
        yield Trip(current_id, positions)


def load_trips(filename: str) -> Iterator[Trip]:
    """
    Read trips from a trip file.

    Raises:
        FileNotFoundError: If file doesn't exist.
        PermissionError: If file can't be read.
        TripFileError: If a line is not valid UTF-8 or cannot be parsed.
    """
    logger.debug(f"Reading trip file: {filename}")
    with open(filename, "rb") as f:
        count = 0
        for trip in iter_trips(f):
            count += 1
            logger.debug(f"Loaded trip for traveler {trip.traveler_id} with {len(trip)} positions")
            yield trip
    logger.debug(f"Parsed {count} trips from {filename}")


def compute_totals(trips: Iterable[Trip], workers: int = 1) -> Iterator[TripTotal]:
    """
    Compute the total distance of each trip.

    Args:
        trips: Trips in file order
        workers: Number of threads summing trip distances. With more than one
            worker all trips are read up front; totals still come out in
            input order.

    Returns:
        Iterator of TripTotal, one per trip, in input order
    """
    pool_context = ThreadPoolExecutor(max_workers=workers) if workers > 1 else nullcontext()
    with pool_context as pool:
        totals = pool.map(Trip.total, trips) if pool is not None else map(Trip.total, trips)
        for total in totals:
            logger.debug(f"Traveler {total.traveler_id}: {total.distance:.6f} miles")
            yield total
