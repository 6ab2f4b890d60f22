"""Domain models for daily meal logs."""

from dataclasses import dataclass, field
from datetime import date, datetime

from diet_tracker.domain.errors import ValidationError

MEAL_SLOTS = ("breakfast", "lunch", "dinner", "snacks")
DATE_FORMAT = "%Y-%m-%d"


@dataclass(frozen=True)
class MealEntry:
    """A logged quantity of a food item."""

    id: str
    food_item_id: str
    quantity: float
    added_at: datetime


@dataclass(frozen=True)
class DailyMealLog:
    """All meal entries logged on one calendar date."""

    date: str
    breakfast: list[MealEntry] = field(default_factory=list)
    lunch: list[MealEntry] = field(default_factory=list)
    dinner: list[MealEntry] = field(default_factory=list)
    snacks: list[MealEntry] = field(default_factory=list)

    def entries(self, slot: str) -> list[MealEntry]:
        """Return the entries of a slot in insertion order."""
        return getattr(self, require_slot(slot))

    def all_entries(self) -> list[tuple[str, MealEntry]]:
        """Return (slot, entry) pairs across the day in slot order."""
        return [(slot, entry) for slot in MEAL_SLOTS for entry in self.entries(slot)]


@dataclass(frozen=True)
class CopyResult:
    """Outcome of copying one meal slot into another."""

    copied: list[MealEntry]
    failed: list[str]


def require_slot(slot: str) -> str:
    """Return the slot name or raise when it is not a known meal."""
    if slot not in MEAL_SLOTS:
        raise ValidationError("Invalid meal type")
    return slot


def parse_log_date(raw: str) -> str:
    """Validate a ``yyyy-MM-dd`` date string and return it normalized."""
    try:
        parsed = datetime.strptime(raw, DATE_FORMAT).date()
    except (TypeError, ValueError) as exc:
        raise ValidationError("Date must use the yyyy-MM-dd format") from exc
    return format_log_date(parsed)


def format_log_date(value: date) -> str:
    """Format a date as a meal log key."""
    return value.strftime(DATE_FORMAT)
