import argparse
from dataclasses import dataclass


@dataclass
class TripMilesConfig:
    """Configuration for the tripmiles CLI."""

    precision: int = 2
    workers: int = 1
    log_level: str = "WARNING"
    metrics: bool = False

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "TripMilesConfig":
        """Build a configuration from parsed command-line arguments."""
        if args.precision < 0:
            raise ValueError(f"Precision must be non-negative, got {args.precision}")
        if args.workers < 1:
            raise ValueError(f"Workers must be at least 1, got {args.workers}")
        return cls(
            precision=args.precision,
            workers=args.workers,
            log_level="DEBUG" if args.debug else args.log_level,
            metrics=args.metrics,
        )
