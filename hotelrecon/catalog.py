"""Uniquely keyed, read-only lookup tables built from reference data."""
from __future__ import annotations

import logging
from pathlib import Path
from types import MappingProxyType
from typing import Callable, Generic, Hashable, Iterable, Iterator, Mapping, Tuple, TypeVar

from .config import MatchPolicy
from .models import HotelRecord, RoomKey, RoomRecord
from .normalization import DuplicateKeyError, read_hotels, read_rooms

LOGGER = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class Catalog(Generic[K, V]):
    """Container for reference records keyed by their normalised identity."""

    def __init__(self, entries: Mapping[K, V], *, key_of: Callable[[K], K], name: str) -> None:
        self._entries: Mapping[K, V] = MappingProxyType(dict(entries))
        self._key_of = key_of
        self.name = name

    def find(self, reference: K) -> V | None:
        return self._entries.get(self._key_of(reference))

    def entries(self) -> Mapping[K, V]:
        return self._entries

    def __contains__(self, reference: object) -> bool:
        return self.find(reference) is not None  # type: ignore[arg-type]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[K]:
        return iter(self._entries)


HotelCatalog = Catalog[str, HotelRecord]
RoomCatalog = Catalog[RoomKey, RoomRecord]


def _index(
    records: Iterable[Tuple[str, V]],
    *,
    key_of: Callable[[V], K],
    name: str,
    origin: str,
) -> dict[K, V]:
    entries: dict[K, V] = {}
    first_seen: dict[K, str] = {}
    for where, record in records:
        key = key_of(record)
        if key in entries:
            raise DuplicateKeyError(
                f"Duplicate {name} key {key!r} in {origin} at {where} "
                f"(first defined at {first_seen[key]})"
            )
        entries[key] = record
        first_seen[key] = where
    return entries


def build_hotel_catalog(
    records: Iterable[Tuple[str, HotelRecord]],
    *,
    policy: MatchPolicy,
    origin: str = "<memory>",
) -> HotelCatalog:
    entries = _index(records, key_of=lambda hotel: policy.normalise(hotel.id), name="hotel", origin=origin)
    LOGGER.info("Loaded %d hotels from %s", len(entries), origin)
    return Catalog(entries, key_of=policy.normalise, name="hotels")


def build_room_catalog(
    records: Iterable[Tuple[str, RoomRecord]],
    *,
    policy: MatchPolicy,
    origin: str = "<memory>",
) -> RoomCatalog:
    def normalise_key(key: RoomKey) -> RoomKey:
        return RoomKey(*(policy.normalise(part) for part in key))

    entries = _index(records, key_of=lambda room: normalise_key(room.key()), name="room", origin=origin)
    LOGGER.info("Loaded %d rooms from %s", len(entries), origin)
    return Catalog(entries, key_of=normalise_key, name="rooms")


def load_hotel_catalog(path: Path, *, policy: MatchPolicy) -> HotelCatalog:
    return build_hotel_catalog(read_hotels(path), policy=policy, origin=str(path))


def load_room_catalog(path: Path, *, policy: MatchPolicy) -> RoomCatalog:
    return build_room_catalog(read_rooms(path), policy=policy, origin=str(path))
