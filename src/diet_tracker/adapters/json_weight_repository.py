"""JSON document implementation of the weight repository."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import uuid4

from diet_tracker.adapters.json_document_store import JsonDocumentStore
from diet_tracker.domain.weight import WeightEntry
from diet_tracker.services.weight import WeightRepository


@dataclass
class JsonWeightRepository(WeightRepository):
    """Stores weight entries under ``weightEntries`` keyed by date."""

    store: JsonDocumentStore

    def list_entries(self) -> list[WeightEntry]:
        """Return all weight entries."""
        with self.store.snapshot() as document:
            return [_parse_entry(row) for row in document["weightEntries"].values()]

    def upsert_entry(
        self, entry_date: str, weight: float, time: str | None
    ) -> WeightEntry:
        """Store the weight for a date, replacing any previous entry."""
        row = {
            "id": str(uuid4()),
            "date": entry_date,
            "weight": weight,
            "time": time,
            "createdAt": datetime.now(tz=UTC).isoformat(),
        }
        with self.store.transaction() as document:
            document["weightEntries"][entry_date] = row
        return _parse_entry(row)

    def delete_entry(self, entry_date: str) -> bool:
        """Delete the entry for a date, returning False when absent."""
        with self.store.snapshot() as document:
            if entry_date not in document["weightEntries"]:
                return False
        with self.store.transaction() as document:
            return document["weightEntries"].pop(entry_date, None) is not None


def _parse_entry(row: dict[str, object]) -> WeightEntry:
    """Parse a stored weight row."""
    created_raw = row.get("createdAt")
    created_at = (
        datetime.fromisoformat(created_raw.replace("Z", "+00:00"))
        if isinstance(created_raw, str) and created_raw
        else datetime.now(tz=UTC)
    )
    return WeightEntry(
        id=str(row.get("id", "")),
        date=str(row["date"]),
        weight=float(row.get("weight") or 0.0),
        time=row.get("time") or None,
        created_at=created_at,
    )
