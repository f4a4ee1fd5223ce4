from __future__ import annotations

import argparse
import logging
from pathlib import Path

from .config import DEFAULT_HOTELS_PATH, DEFAULT_INPUT_PATH, DEFAULT_OUTPUT_PATH, DEFAULT_ROOMS_PATH, Settings
from .normalization import NormalizationError
from .pipeline import UnresolvedRecordsError, run_reconciliation

LOGGER = logging.getLogger("hotelrecon")


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Complete hotel bookings with hotel and room reference data")
    parser.add_argument(
        "-i",
        "--input",
        type=Path,
        default=DEFAULT_INPUT_PATH,
        help="Path to the input file containing incomplete bookings.",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=DEFAULT_OUTPUT_PATH,
        help="Path to the output file; created if it doesn't exist, overwritten otherwise.",
    )
    parser.add_argument(
        "-r",
        "--rooms",
        type=Path,
        default=DEFAULT_ROOMS_PATH,
        help="Path to the room names reference file.",
    )
    parser.add_argument(
        "-H",
        "--hotels",
        type=Path,
        default=DEFAULT_HOTELS_PATH,
        help="Path to the hotels reference file (one JSON object per line).",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = Settings.from_env().with_paths(
        hotels=args.hotels,
        input=args.input,
        output=args.output,
        rooms=args.rooms,
    )
    configure_logging(settings.log_level)

    try:
        summary = run_reconciliation(settings)
    except UnresolvedRecordsError as exc:
        LOGGER.error("%s; see %s", exc, settings.failures_path)
        return 2
    except (NormalizationError, OSError) as exc:
        LOGGER.error("Error occurred: %s", exc)
        return 1

    print(f"The data was successfully parsed and saved at {settings.output}")
    if summary.failures:
        print(f"{len(summary.failures)} booking(s) could not be resolved; see {settings.failures_path}")
    return 0


if __name__ == "__main__":  # pragma: no cover - exercised via CLI entry point
    raise SystemExit(main())
