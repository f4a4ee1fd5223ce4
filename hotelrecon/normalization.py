"""Utilities for reading and normalising source files."""
from __future__ import annotations

import csv
import json
import logging
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Iterable, Iterator, List, Tuple

from .models import BookingRecord, HotelRecord, RoomRecord

LOGGER = logging.getLogger(__name__)

DATE_FORMATS = ("%Y%m%d", "%Y-%m-%d")

HOTEL_FIELDS = ("id", "city_code", "name", "category", "country_code", "city")

ROOM_COLUMNS = ("hotel_code", "source", "room_name", "room_code")

INPUT_COLUMNS = (
    "city_code",
    "hotel_code",
    "room_type",
    "room_code",
    "meal",
    "checkin",
    "adults",
    "children",
    "price",
    "source",
)


class NormalizationError(RuntimeError):
    """Raised when a source file cannot be loaded."""


class DuplicateKeyError(NormalizationError):
    """Raised when a reference catalog defines the same key twice."""


def parse_date(raw: str) -> date:
    for pattern in DATE_FORMATS:
        try:
            return datetime.strptime(raw.strip(), pattern).date()
        except ValueError:
            continue
    raise NormalizationError(f"Unrecognised date format: {raw}")


def parse_amount(raw: str) -> Decimal:
    try:
        amount = Decimal(raw.strip())
    except InvalidOperation as exc:
        raise NormalizationError(f"Invalid amount: {raw}") from exc
    if not amount.is_finite():
        raise NormalizationError(f"Invalid amount: {raw}")
    try:
        amount.quantize(Decimal("0.01"))
    except InvalidOperation as exc:
        raise NormalizationError(f"Amount out of range: {raw}") from exc
    return amount


def parse_count(raw: str, *, field: str) -> int:
    try:
        value = int(raw.strip())
    except ValueError as exc:
        raise NormalizationError(f"Invalid {field}: {raw}") from exc
    if value < 0:
        raise NormalizationError(f"Negative {field}: {raw}")
    return value


def _read_text(path: Path) -> str:
    if not path.exists():
        raise NormalizationError(f"{path}: file not found")
    try:
        return path.read_text(encoding="utf-8-sig")
    except UnicodeDecodeError as exc:
        raise NormalizationError(f"{path}: not valid UTF-8 ({exc.reason})") from exc
    except OSError as exc:
        raise NormalizationError(f"{path}: {exc.strerror}") from exc


def _text_field(raw: dict, name: str, *, where: str) -> str:
    value = raw[name]
    if not isinstance(value, str):
        raise NormalizationError(f"{where}: hotel field {name!r} must be a string, got {value!r}")
    return value


def _hotel_from_mapping(raw: object, *, where: str) -> HotelRecord:
    if not isinstance(raw, dict):
        raise NormalizationError(f"{where}: expected a JSON object, got {type(raw).__name__}")
    missing = [name for name in HOTEL_FIELDS if name not in raw]
    if missing:
        raise NormalizationError(f"{where}: hotel is missing {', '.join(missing)}")
    category = raw["category"]
    if isinstance(category, bool) or not isinstance(category, (int, float)):
        raise NormalizationError(f"{where}: invalid category {category!r}")
    return HotelRecord(
        id=_text_field(raw, "id", where=where),
        city_code=_text_field(raw, "city_code", where=where),
        name=_text_field(raw, "name", where=where),
        category=float(category),
        country_code=_text_field(raw, "country_code", where=where),
        city=_text_field(raw, "city", where=where),
    )


def read_hotels(path: Path) -> List[Tuple[str, HotelRecord]]:
    """Read hotels stored one JSON object per line, or as a JSON array.

    Each hotel is paired with its position in the file: ``line N`` for JSON
    Lines, ``entry N`` for an array.
    """

    text = _read_text(path)
    if text.lstrip().startswith("["):
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as exc:
            raise NormalizationError(f"{path}:{exc.lineno}: unparsable hotels data ({exc.msg})") from exc
        return [
            (f"entry {index}", _hotel_from_mapping(item, where=f"{path} entry {index}"))
            for index, item in enumerate(payload, start=1)
        ]

    hotels: List[Tuple[str, HotelRecord]] = []
    for line_no, line in enumerate(text.splitlines(), start=1):
        if not line.strip():
            continue
        try:
            raw = json.loads(line)
        except json.JSONDecodeError as exc:
            raise NormalizationError(f"{path}:{line_no}: unparsable hotel entry ({exc.msg}): {line}") from exc
        hotels.append((f"line {line_no}", _hotel_from_mapping(raw, where=f"{path}:{line_no}")))
    return hotels


def _csv_rows(path: Path) -> Iterator[Tuple[int, List[str]]]:
    text = _read_text(path)
    reader = csv.reader(text.splitlines(), delimiter="|")
    try:
        for row in reader:
            yield reader.line_num, row
    except csv.Error as exc:
        raise NormalizationError(f"{path}:{reader.line_num}: {exc}") from exc


def read_rooms(path: Path) -> List[Tuple[str, RoomRecord]]:
    """Read room names; the header row is optional."""

    rooms: List[Tuple[str, RoomRecord]] = []
    for line_no, row in _csv_rows(path):
        if not row:
            continue
        cells = [cell.strip() for cell in row]
        if not rooms and tuple(cells) == ROOM_COLUMNS:
            continue
        if len(cells) != len(ROOM_COLUMNS):
            raise NormalizationError(
                f"{path}:{line_no}: expected {len(ROOM_COLUMNS)} columns "
                f"({'|'.join(ROOM_COLUMNS)}), got {len(cells)}"
            )
        rooms.append((f"line {line_no}", RoomRecord(*cells)))
    return rooms


def normalise_row(row: dict[str, str], *, line: int) -> BookingRecord:
    adults = parse_count(row["adults"], field="adults")
    children = parse_count(row["children"], field="children")
    if adults + children == 0:
        raise NormalizationError("Booking has no guests")
    return BookingRecord(
        line=line,
        city_code=row["city_code"],
        hotel_code=row["hotel_code"],
        room_type=row["room_type"],
        room_code=row["room_code"],
        meal=row["meal"],
        checkin=parse_date(row["checkin"]),
        adults=adults,
        children=children,
        price=parse_amount(row["price"]),
        source=row["source"],
    )


def read_bookings(path: Path) -> List[BookingRecord]:
    rows: Iterable[Tuple[int, List[str]]] = _csv_rows(path)
    header: List[str] | None = None
    bookings: List[BookingRecord] = []
    for line_no, row in rows:
        if not row:
            continue
        if header is None:
            header = [cell.strip() for cell in row]
            missing = [column for column in INPUT_COLUMNS if column not in header]
            if missing:
                raise NormalizationError(f"{path}: missing expected columns {', '.join(missing)}")
            continue
        if len(row) != len(header):
            raise NormalizationError(f"{path}:{line_no}: expected {len(header)} fields, got {len(row)}")
        try:
            bookings.append(normalise_row(dict(zip(header, row)), line=line_no))
        except NormalizationError as exc:
            raise NormalizationError(f"{path}:{line_no}: {exc}") from exc

    if header is None:
        raise NormalizationError(f"{path}: missing header row")
    LOGGER.info("Read %d bookings from %s", len(bookings), path)
    return bookings
