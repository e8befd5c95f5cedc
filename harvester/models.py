from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple


@dataclass(frozen=True)
class WeatherReading:
    area_name: str
    temperature: str

    def as_line(self) -> str:
        return f"{self.area_name} {self.temperature}"


@dataclass(frozen=True)
class TaskOutcome:
    """Terminal result of processing one detail page.

    Exactly one of reading or error_type is set: a success carries the
    WeatherReading, a failure carries the exception class name and message.
    """

    url: str
    reading: Optional[WeatherReading] = None
    error_type: Optional[str] = None
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.reading is not None

    @classmethod
    def ok(cls, url: str, reading: WeatherReading) -> "TaskOutcome":
        return cls(url=url, reading=reading)

    @classmethod
    def failed(cls, url: str, exc: BaseException) -> "TaskOutcome":
        return cls(url=url, error_type=type(exc).__name__, error=str(exc))


@dataclass(frozen=True)
class HarvestSummary:
    dispatched: int
    succeeded: int
    failed: int
    failed_provinces: Tuple[str, ...] = field(default_factory=tuple)
    peak_concurrency: int = 0

    @property
    def settled(self) -> int:
        return self.succeeded + self.failed
