"""Daily meal log service."""

import logging
from dataclasses import dataclass
from typing import Protocol

from diet_tracker.domain.errors import DietTrackerError, NotFoundError, ValidationError
from diet_tracker.domain.meals import (
    CopyResult,
    DailyMealLog,
    MealEntry,
    parse_log_date,
    require_slot,
)
from diet_tracker.services.foods import FoodService

_logger = logging.getLogger(__name__)


class MealLogRepository(Protocol):
    """Persistence interface for daily meal logs."""

    def get_or_create(self, log_date: str) -> DailyMealLog:
        """Return the log for a date, creating empty slots on first access."""

    def find_log(self, log_date: str) -> DailyMealLog | None:
        """Return the log for a date without creating it."""

    def append_entry(
        self, log_date: str, slot: str, food_item_id: str, quantity: float
    ) -> MealEntry:
        """Append a new entry to the end of a slot and return it."""

    def remove_entry(self, log_date: str, slot: str, entry_id: str) -> bool:
        """Remove an entry by id, returning False when it is absent."""

    def list_logs(self) -> list[DailyMealLog]:
        """Return every touched date, oldest first."""


@dataclass
class MealLogService:
    """Service for reading and editing daily meal logs."""

    repository: MealLogRepository
    food_service: FoodService

    def get_or_create(self, log_date: str) -> DailyMealLog:
        """Return the daily log; untouched dates get four empty slots."""
        return self.repository.get_or_create(parse_log_date(log_date))

    def add_entry(
        self,
        log_date: str,
        slot: str,
        food_item_id: str,
        quantity: float | None = None,
    ) -> MealEntry:
        """Log a quantity of a food item into a meal slot."""
        normalized_date = parse_log_date(log_date)
        require_slot(slot)
        if not food_item_id:
            raise ValidationError("foodItemId is required")
        resolved_quantity = 1.0 if quantity is None else float(quantity)
        if resolved_quantity <= 0:
            raise ValidationError("Quantity must be greater than zero")
        self.food_service.get_food(food_item_id)
        return self.repository.append_entry(
            normalized_date, slot, food_item_id, resolved_quantity
        )

    def remove_entry(self, log_date: str, slot: str, entry_id: str) -> None:
        """Remove one entry, keeping the order of the others."""
        normalized_date = parse_log_date(log_date)
        require_slot(slot)
        if not self.repository.remove_entry(normalized_date, slot, entry_id):
            raise NotFoundError("Meal entry not found")

    def copy_meal(
        self,
        source_date: str,
        source_slot: str,
        target_date: str,
        target_slot: str,
    ) -> CopyResult:
        """Re-create every entry of a source meal in the target meal.

        Each entry is copied on its own; a failure is reported and the
        entries copied before it are kept.
        """
        require_slot(source_slot)
        require_slot(target_slot)
        parse_log_date(target_date)
        source = self.repository.find_log(parse_log_date(source_date))
        entries = source.entries(source_slot) if source else []
        if not entries:
            raise ValidationError("No food items to copy")
        copied: list[MealEntry] = []
        failed: list[str] = []
        for entry in entries:
            try:
                copied.append(
                    self.add_entry(
                        target_date, target_slot, entry.food_item_id, entry.quantity
                    )
                )
            except DietTrackerError as exc:
                _logger.warning(
                    "Failed to copy meal entry %s: %s", entry.id, exc.message
                )
                failed.append(entry.id)
        return CopyResult(copied=copied, failed=failed)

    def list_logs(self) -> list[DailyMealLog]:
        """Return every logged date, oldest first."""
        return self.repository.list_logs()
