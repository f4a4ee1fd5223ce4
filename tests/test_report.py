import json
from pathlib import Path

from hotelrecon.models import EMPTY_REFERENCE, HOTEL_REFERENCE, NOT_FOUND, ROOM_REFERENCE, ResolutionFailure
from hotelrecon.report import OUTPUT_COLUMNS, write_csv, write_failures


def test_write_failures_describes_each_reason(tmp_path: Path):
    path = tmp_path / "output.failures.json"
    failures = [
        ResolutionFailure(2, HOTEL_REFERENCE, EMPTY_REFERENCE, " "),
        ResolutionFailure(5, ROOM_REFERENCE, NOT_FOUND, "Penthouse"),
    ]

    write_failures(path, failures)

    payload = json.loads(path.read_text(encoding="utf-8"))
    assert payload == [
        {
            "line": 2,
            "reference": "hotel",
            "reason": "empty_reference",
            "raw_value": " ",
            "message": "line 2: hotel reference is empty",
        },
        {
            "line": 5,
            "reference": "room",
            "reason": "not_found",
            "raw_value": "Penthouse",
            "message": "line 5: room reference 'Penthouse' not found in catalog",
        },
    ]


def test_write_csv_without_records_writes_header(tmp_path: Path):
    path = tmp_path / "nested" / "output.csv"

    assert write_csv(path, []) == 0
    assert path.read_text(encoding="utf-8") == ";".join(OUTPUT_COLUMNS) + "\n"
