"""Domain models for body weight tracking."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class WeightEntry:
    """Body weight recorded for a date."""

    id: str
    date: str
    weight: float
    created_at: datetime
    time: str | None = None


@dataclass(frozen=True)
class WeightStats:
    """Summary of the weight history."""

    current: float
    total_change: float
    recent_change: float
    entries: int
    total_change_percent: float
