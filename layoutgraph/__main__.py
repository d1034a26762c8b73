import argparse
import logging
from typing import Optional, Sequence

from layoutgraph.demo import run

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(levelname)s:%(name)s:%(message)s",
    )


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Run the force-directed layout on a small demo graph")
    parser.add_argument(
        "--steps",
        type=int,
        default=200,
        help="Number of frames to simulate (default: 200)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=7,
        help="Seed for the initial scatter (default: 7)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (default: INFO)",
    )
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)
    if args.steps < 0:
        logger.warning("Negative step count %d treated as 0", args.steps)
    run(steps=max(0, args.steps), seed=args.seed)


if __name__ == "__main__":
    main()
