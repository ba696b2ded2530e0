"""
Module for collecting and logging metrics about a trip file run.
"""

import collections
import logging
from typing import Dict, Iterable, NamedTuple

from .config import TripMilesConfig
from .decoder import encoding_name
from .trip import Trip, TripTotal

logger = logging.getLogger(__name__)


class TripMetrics(NamedTuple):
    """Container for trip metrics data."""

    trip_count: int
    position_count: int
    encoding_counts: Dict[str, int]
    total_distance: float


def collect_metrics(trips: Iterable[Trip], totals: Iterable[TripTotal]) -> TripMetrics:
    """
    Collect metrics from processed trips.

    Args:
        trips: The trips that were read
        totals: The totals computed for those trips

    Returns:
        TripMetrics containing all collected metrics
    """
    encoding_counts: Dict[str, int] = collections.defaultdict(int)
    trip_count = 0
    position_count = 0

    for trip in trips:
        trip_count += 1
        for position in trip:
            position_count += 1
            encoding_counts[encoding_name(position)] += 1

    return TripMetrics(
        trip_count=trip_count,
        position_count=position_count,
        encoding_counts=dict(encoding_counts),
        total_distance=sum(total.distance for total in totals),
    )


def log_metrics(metrics: TripMetrics, config: TripMilesConfig) -> None:
    """
    Log detailed metrics after all totals have been printed.

    Args:
        metrics: TripMetrics containing collected metrics
        config: Run configuration; nothing is logged unless metrics are enabled
    """
    if not config.metrics:
        return

    logger.info("=== TRIPMILES_METRICS ===")
    logger.info(f"total_trips={metrics.trip_count}")
    logger.info(f"total_positions={metrics.position_count}")
    for name in ("geodetic", "nvector", "utm"):
        logger.info(f"positions[{name}]={metrics.encoding_counts.get(name, 0)}")
    logger.info(f"total_miles={metrics.total_distance:.{config.precision}f}")
    logger.info("=== END_TRIPMILES_METRICS ===")
