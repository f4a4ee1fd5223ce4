"""Writers for the completed bookings and the failure report."""
from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Iterable

from .models import ResolutionFailure, ResolvedRecord

OUTPUT_COLUMNS = [
    "room_type meal",
    "room_code",
    "source",
    "hotel_name",
    "city_name",
    "city_code",
    "hotel_category",
    "pax",
    "adults",
    "children",
    "room_name",
    "checkin",
    "checkout",
    "price",
]


def write_csv(path: Path, records: Iterable[ResolvedRecord]) -> int:
    path.parent.mkdir(parents=True, exist_ok=True)
    written = 0
    with path.open("w", newline="", encoding="utf-8") as handle:
        writer = csv.DictWriter(handle, fieldnames=OUTPUT_COLUMNS, delimiter=";", lineterminator="\n")
        writer.writeheader()
        for record in records:
            writer.writerow(record.as_dict())
            written += 1
    return written


def write_failures(path: Path, failures: Iterable[ResolutionFailure]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = [failure.as_json() for failure in failures]
    with path.open("w", encoding="utf-8") as handle:
        json.dump(payload, handle, indent=2)
