"""Domain models for activity events and derived usage."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Event(BaseModel):
    """A single entry as stored in an ActivityWatch bucket."""

    id: Optional[int] = None
    timestamp: datetime
    duration: float = Field(default=0.0, ge=0.0)
    payload: dict[str, Any] = Field(default_factory=dict, alias="data")

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @field_validator("timestamp")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        # naive timestamps from the server are UTC
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @property
    def end(self) -> datetime:
        return self.timestamp + timedelta(seconds=self.duration)


@dataclass(frozen=True, slots=True)
class Interval:
    """A contiguous span during which the user was present."""

    start: datetime
    end: datetime


@dataclass(frozen=True, slots=True)
class AppPeriod:
    """Contiguous use of one normalized application identity."""

    title: str
    start: datetime
    end: datetime

    @property
    def duration_seconds(self) -> float:
        return (self.end - self.start).total_seconds()


@dataclass(slots=True)
class UsageBucket:
    """Accumulated seconds per title within one fixed-length window.

    ``usage`` keeps titles in order of first occurrence, which the ranking
    relies on for ties.
    """

    start: datetime
    end: datetime
    usage: dict[str, float] = field(default_factory=dict)

    @property
    def length_seconds(self) -> float:
        return (self.end - self.start).total_seconds()
