"""Runtime configuration for a booking completion run."""
from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path

DEFAULT_HOTELS_PATH = Path("hotels.json")
DEFAULT_INPUT_PATH = Path("input.csv")
DEFAULT_OUTPUT_PATH = Path("output.csv")
DEFAULT_ROOMS_PATH = Path("room_names.csv")

_TRUTHY = {"1", "true", "yes", "on"}


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in _TRUTHY


@dataclass(frozen=True)
class MatchPolicy:
    """How catalog keys and references are compared.

    Surrounding whitespace is always trimmed. Case folding is opt-in because
    the reference data is case-sensitive as delivered.
    """

    case_insensitive: bool = False

    def normalise(self, value: str) -> str:
        value = value.strip()
        if self.case_insensitive:
            return value.casefold()
        return value


@dataclass(frozen=True)
class Settings:
    hotels: Path = DEFAULT_HOTELS_PATH
    input: Path = DEFAULT_INPUT_PATH
    output: Path = DEFAULT_OUTPUT_PATH
    rooms: Path = DEFAULT_ROOMS_PATH
    policy: MatchPolicy = MatchPolicy()
    strict: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            policy=MatchPolicy(case_insensitive=_env_flag("HOTELRECON_CASE_INSENSITIVE")),
            strict=_env_flag("HOTELRECON_STRICT"),
            log_level=os.getenv("HOTELRECON_LOG_LEVEL", "INFO"),
        )

    @property
    def failures_path(self) -> Path:
        return self.output.with_name(f"{self.output.stem}.failures.json")

    def with_paths(
        self,
        *,
        hotels: Path | None = None,
        input: Path | None = None,
        output: Path | None = None,
        rooms: Path | None = None,
    ) -> "Settings":
        return replace(
            self,
            hotels=hotels or self.hotels,
            input=input or self.input,
            output=output or self.output,
            rooms=rooms or self.rooms,
        )
