"""Data models used by the booking completion workflow."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import NamedTuple

HOTEL_REFERENCE = "hotel"
ROOM_REFERENCE = "room"

NOT_FOUND = "not_found"
EMPTY_REFERENCE = "empty_reference"

OUTPUT_DATE_FORMAT = "%Y-%m-%d"


class RoomKey(NamedTuple):
    hotel_code: str
    room_code: str
    source: str


@dataclass(frozen=True, slots=True)
class HotelRecord:
    id: str
    city_code: str
    name: str
    category: float
    country_code: str
    city: str


@dataclass(frozen=True, slots=True)
class RoomRecord:
    hotel_code: str
    source: str
    room_name: str
    room_code: str

    def key(self) -> RoomKey:
        return RoomKey(self.hotel_code, self.room_code, self.source)


@dataclass(frozen=True, slots=True)
class BookingRecord:
    """One incomplete row of the input file."""

    line: int
    city_code: str
    hotel_code: str
    room_type: str
    room_code: str
    meal: str
    checkin: date
    adults: int
    children: int
    price: Decimal
    source: str

    def room_key(self) -> RoomKey:
        return RoomKey(self.hotel_code, self.room_code, self.source)


@dataclass(frozen=True, slots=True)
class ResolvedRecord:
    booking: BookingRecord
    hotel: HotelRecord
    room: RoomRecord

    @property
    def pax(self) -> int:
        return self.booking.adults + self.booking.children

    @property
    def checkout(self) -> date:
        return self.booking.checkin + timedelta(days=1)

    @property
    def price_per_person(self) -> Decimal:
        return (self.booking.price / self.pax).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)

    def as_dict(self) -> dict[str, str]:
        booking = self.booking
        return {
            "room_type meal": f"{booking.room_type} {booking.meal}",
            "room_code": self.room.room_code,
            "source": booking.source,
            "hotel_name": self.hotel.name,
            "city_name": self.hotel.city,
            "city_code": booking.city_code,
            "hotel_category": str(self.hotel.category),
            "pax": str(self.pax),
            "adults": str(booking.adults),
            "children": str(booking.children),
            "room_name": self.room.room_name,
            "checkin": booking.checkin.strftime(OUTPUT_DATE_FORMAT),
            "checkout": self.checkout.strftime(OUTPUT_DATE_FORMAT),
            "price": f"{self.price_per_person:.2f}",
        }


@dataclass(frozen=True, slots=True)
class ResolutionFailure:
    """Diagnostic for a booking whose hotel or room reference did not resolve."""

    line: int
    reference: str
    reason: str
    raw_value: str

    def describe(self) -> str:
        if self.reason == EMPTY_REFERENCE:
            return f"line {self.line}: {self.reference} reference is empty"
        return f"line {self.line}: {self.reference} reference {self.raw_value!r} not found in catalog"

    def as_json(self) -> dict[str, object]:
        return {
            "line": self.line,
            "reference": self.reference,
            "reason": self.reason,
            "raw_value": self.raw_value,
            "message": self.describe(),
        }


Outcome = ResolvedRecord | ResolutionFailure
