"""Resolution of incomplete bookings against the hotel and room catalogs."""
from __future__ import annotations

from typing import Iterable, List

from .catalog import HotelCatalog, RoomCatalog
from .models import (
    EMPTY_REFERENCE,
    HOTEL_REFERENCE,
    NOT_FOUND,
    ROOM_REFERENCE,
    BookingRecord,
    Outcome,
    ResolutionFailure,
    ResolvedRecord,
)


def resolve(record: BookingRecord, hotels: HotelCatalog, rooms: RoomCatalog) -> Outcome:
    """Complete a single booking, or explain which reference did not match.

    The hotel reference is checked before the room reference and the first
    miss is reported. A booking is never partially resolved.
    """

    if not record.hotel_code.strip():
        return ResolutionFailure(record.line, HOTEL_REFERENCE, EMPTY_REFERENCE, record.hotel_code)
    hotel = hotels.find(record.hotel_code)
    if hotel is None:
        return ResolutionFailure(record.line, HOTEL_REFERENCE, NOT_FOUND, record.hotel_code)

    if not record.room_code.strip():
        return ResolutionFailure(record.line, ROOM_REFERENCE, EMPTY_REFERENCE, record.room_code)
    room = rooms.find(record.room_key())
    if room is None:
        return ResolutionFailure(record.line, ROOM_REFERENCE, NOT_FOUND, record.room_code)

    return ResolvedRecord(booking=record, hotel=hotel, room=room)


def resolve_all(records: Iterable[BookingRecord], hotels: HotelCatalog, rooms: RoomCatalog) -> List[Outcome]:
    return [resolve(record, hotels, rooms) for record in records]
