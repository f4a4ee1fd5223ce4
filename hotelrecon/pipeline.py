"""High-level orchestration for a booking completion run."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List

from .catalog import load_hotel_catalog, load_room_catalog
from .config import Settings
from .matching import resolve_all
from .models import ResolutionFailure, ResolvedRecord
from .normalization import read_bookings
from .report import write_csv, write_failures

LOGGER = logging.getLogger(__name__)


class UnresolvedRecordsError(RuntimeError):
    """Raised in strict mode when at least one booking could not be completed."""

    def __init__(self, failures: List[ResolutionFailure]) -> None:
        super().__init__(f"{len(failures)} booking(s) could not be resolved")
        self.failures = failures


@dataclass(slots=True)
class RunSummary:
    total: int
    resolved: List[ResolvedRecord]
    failures: List[ResolutionFailure]


def run_reconciliation(settings: Settings) -> RunSummary:
    hotels = load_hotel_catalog(settings.hotels, policy=settings.policy)
    rooms = load_room_catalog(settings.rooms, policy=settings.policy)
    bookings = read_bookings(settings.input)

    resolved: List[ResolvedRecord] = []
    failures: List[ResolutionFailure] = []
    for outcome in resolve_all(bookings, hotels, rooms):
        if isinstance(outcome, ResolutionFailure):
            LOGGER.warning("Skipping booking at %s", outcome.describe())
            failures.append(outcome)
        else:
            resolved.append(outcome)

    write_csv(settings.output, resolved)
    write_failures(settings.failures_path, failures)
    LOGGER.info(
        "Completed %d of %d bookings into %s (%d unresolved)",
        len(resolved),
        len(bookings),
        settings.output,
        len(failures),
    )

    if failures and settings.strict:
        raise UnresolvedRecordsError(failures)
    return RunSummary(total=len(bookings), resolved=resolved, failures=failures)
