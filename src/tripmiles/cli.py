#!/usr/bin/env python3
"""
Trip distance totals tool.
This script reads a trip file of positions encoded as latitude/longitude,
n-vector or UTM records, and prints the great-circle distance travelled by
each traveler.
"""

from typing import Iterable, List, Optional
import argparse
import logging
import sys

from . import __version__
from .config import TripMilesConfig
from .exceptions import PositionError, TripFileError
from .metrics import collect_metrics, log_metrics
from .trip import Trip, TripTotal
from .trip_file import compute_totals, load_trips

# Configure logging
logger = logging.getLogger("tripmiles")

HANDLER_NAME = "tripmiles-console"


def create_argument_parser() -> argparse.ArgumentParser:
    """
    Create and configure the command-line argument parser.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        description="Total the distance travelled by each traveler in a trip file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "filename",
        type=str,
        nargs="?",
        help="Trip file to process (one '<travelerID><TAB><position>' per line)",
    )
    parser.add_argument(
        "--precision",
        type=int,
        default=2,
        help="Fractional digits printed for each distance (default: 2)",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=1,
        help="Threads used to sum trip distances (default: 1)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set logging level (default: WARNING)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug output (same as --log-level DEBUG)",
    )
    parser.add_argument(
        "--metrics",
        action="store_true",
        help="Output structured metrics after processing",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"tripmiles {__version__}",
    )
    return parser


def setup_logging(config: TripMilesConfig) -> None:
    """Setup logging configuration."""
    level = getattr(logging, config.log_level)
    if config.metrics:
        level = min(level, logging.INFO)

    # Create formatter
    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%H:%M:%S"
    )

    # Create console handler
    console_handler = logging.StreamHandler()
    console_handler.set_name(HANDLER_NAME)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)

    # Configure the root logger so all modules inherit the configuration
    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        if handler.get_name() == HANDLER_NAME:
            root_logger.removeHandler(handler)
    root_logger.setLevel(level)
    root_logger.addHandler(console_handler)


def main(argv: Optional[List[str]] = None) -> None:
    """
    Parses command-line arguments, reads the trip file,
    and prints the distance travelled by each traveler.
    """
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if not args.filename:
        parser.print_help()
        sys.exit(1)

    try:
        config = TripMilesConfig.from_args(args)
    except ValueError as e:
        parser.error(str(e))

    # Setup logging
    setup_logging(config)
    logger.debug(f"Starting tripmiles {__version__} on {args.filename}")

    # Metrics need every trip after the totals are printed, so keep them
    read_trips: List[Trip] = []
    totals: List[TripTotal] = []
    try:
        trips: Iterable[Trip] = load_trips(args.filename)
        if config.metrics:
            read_trips = list(trips)
            trips = read_trips
        for total in compute_totals(trips, workers=config.workers):
            print(total.format(config.precision))
            totals.append(total)
    except FileNotFoundError:
        logger.error(f"Trip file not found: {args.filename}")
        sys.exit(1)
    except PermissionError:
        logger.error(f"Cannot read trip file (permission denied): {args.filename}")
        sys.exit(1)
    except TripFileError as e:
        logger.error(f"Invalid trip file {args.filename}: {e}")
        sys.exit(1)
    except PositionError as e:
        logger.error(f"Cannot compute distances for {args.filename}: {e}")
        sys.exit(1)

    log_metrics(collect_metrics(read_trips, totals), config)


if __name__ == "__main__":
    main()
