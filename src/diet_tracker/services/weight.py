"""Body weight tracking service."""

import math
from dataclasses import dataclass
from typing import Protocol

from diet_tracker.domain.errors import NotFoundError, ValidationError
from diet_tracker.domain.meals import parse_log_date
from diet_tracker.domain.nutrition import round_half_up
from diet_tracker.domain.weight import WeightEntry, WeightStats


class WeightRepository(Protocol):
    """Persistence interface for weight entries keyed by date."""

    def list_entries(self) -> list[WeightEntry]:
        """Return all weight entries."""

    def upsert_entry(
        self, entry_date: str, weight: float, time: str | None
    ) -> WeightEntry:
        """Store the weight for a date, replacing any previous entry."""

    def delete_entry(self, entry_date: str) -> bool:
        """Delete the entry for a date, returning False when absent."""


@dataclass
class WeightService:
    """Service for the weight history."""

    repository: WeightRepository

    def list_entries(self) -> list[WeightEntry]:
        """Return entries sorted by date, oldest first."""
        return sorted(self.repository.list_entries(), key=lambda entry: entry.date)

    def record_weight(
        self, entry_date: str, weight: float, time: str | None = None
    ) -> WeightEntry:
        """Upsert the weight for a date."""
        normalized_date = parse_log_date(entry_date)
        if weight is None or not 0 < float(weight) < math.inf:
            raise ValidationError("Date and weight are required")
        return self.repository.upsert_entry(normalized_date, float(weight), time)

    def delete_entry(self, entry_date: str) -> None:
        """Delete the entry for a date."""
        if not self.repository.delete_entry(parse_log_date(entry_date)):
            raise NotFoundError("Weight entry not found")

    def stats(self) -> WeightStats | None:
        """Summarize the history; None when nothing is recorded."""
        entries = self.list_entries()
        if not entries:
            return None
        first, last = entries[0], entries[-1]
        total_change = last.weight - first.weight
        recent_change = last.weight - entries[-2].weight if len(entries) > 1 else 0.0
        return WeightStats(
            current=last.weight,
            total_change=round_half_up(total_change, 1),
            recent_change=round_half_up(recent_change, 1),
            entries=len(entries),
            total_change_percent=round_half_up(total_change / first.weight * 100, 1),
        )
