"""JSON document implementation of the daily meal log repository."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import uuid4

from diet_tracker.adapters.json_document_store import JsonDocumentStore
from diet_tracker.domain.meals import MEAL_SLOTS, DailyMealLog, MealEntry
from diet_tracker.services.meals import MealLogRepository


@dataclass
class JsonMealLogRepository(MealLogRepository):
    """Stores logs under ``meals`` keyed by date, one list per slot."""

    store: JsonDocumentStore

    def get_or_create(self, log_date: str) -> DailyMealLog:
        """Return the log for a date, persisting empty slots on first access."""
        with self.store.snapshot() as document:
            day = document["meals"].get(log_date)
            if day is not None and _has_all_slots(day):
                return _parse_log(log_date, day)
        with self.store.transaction() as document:
            day = _ensure_day(document, log_date)
            return _parse_log(log_date, day)

    def find_log(self, log_date: str) -> DailyMealLog | None:
        """Return the stored log for a date, if the date was ever touched."""
        with self.store.snapshot() as document:
            day = document["meals"].get(log_date)
            return _parse_log(log_date, day) if day is not None else None

    def append_entry(
        self, log_date: str, slot: str, food_item_id: str, quantity: float
    ) -> MealEntry:
        """Append a new entry to the end of a slot and return it."""
        row = {
            "id": str(uuid4()),
            "foodItemId": food_item_id,
            "quantity": quantity,
            "addedAt": datetime.now(tz=UTC).isoformat(),
        }
        with self.store.transaction() as document:
            _ensure_day(document, log_date)[slot].append(row)
        return _parse_entry(row)

    def remove_entry(self, log_date: str, slot: str, entry_id: str) -> bool:
        """Remove an entry by id, returning False when it is absent."""
        with self.store.snapshot() as document:
            day = document["meals"].get(log_date) or {}
            if not any(row.get("id") == entry_id for row in day.get(slot, [])):
                return False
        with self.store.transaction() as document:
            entries = _ensure_day(document, log_date)[slot]
            for index, row in enumerate(entries):
                if row.get("id") == entry_id:
                    del entries[index]
                    return True
        return False

    def list_logs(self) -> list[DailyMealLog]:
        """Return every touched date, oldest first."""
        with self.store.snapshot() as document:
            meals = document["meals"]
            return [_parse_log(log_date, meals[log_date]) for log_date in sorted(meals)]


def _has_all_slots(day: dict[str, object]) -> bool:
    return all(isinstance(day.get(slot), list) for slot in MEAL_SLOTS)


def _ensure_day(document: dict[str, object], log_date: str) -> dict[str, list]:
    """Return the day's slots, creating any that are missing."""
    day = document["meals"].setdefault(log_date, {})
    for slot in MEAL_SLOTS:
        if not isinstance(day.get(slot), list):
            day[slot] = []
    return day


def _parse_entry(row: dict[str, object]) -> MealEntry:
    """Parse a stored meal entry row."""
    added_raw = row.get("addedAt")
    added_at = (
        datetime.fromisoformat(added_raw.replace("Z", "+00:00"))
        if isinstance(added_raw, str) and added_raw
        else datetime.now(tz=UTC)
    )
    return MealEntry(
        id=str(row["id"]),
        food_item_id=str(row.get("foodItemId", "")),
        quantity=float(row.get("quantity") or 1),
        added_at=added_at,
    )


def _parse_log(log_date: str, day: dict[str, object]) -> DailyMealLog:
    """Parse a stored day into a domain model."""
    slots = {
        slot: [_parse_entry(row) for row in day.get(slot) or []] for slot in MEAL_SLOTS
    }
    return DailyMealLog(date=log_date, **slots)
