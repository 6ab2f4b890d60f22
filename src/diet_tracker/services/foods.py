"""Services for managing the food item database."""

import logging
import math
from dataclasses import dataclass
from typing import Protocol

from diet_tracker.domain.errors import NotFoundError, ValidationError
from diet_tracker.domain.foods import DEFAULT_UNIT, MACRO_FIELDS, FoodItem

_logger = logging.getLogger(__name__)


class FoodRepository(Protocol):
    """Persistence interface for food items.

    ``create_food`` and ``update_food`` raise ``ConflictError`` when the barcode
    already belongs to a different item.
    """

    def list_foods(self) -> list[FoodItem]:
        """Return all food items."""

    def get_food(self, food_id: str) -> FoodItem | None:
        """Return a food item by id, if present."""

    def get_foods(self, food_ids: set[str]) -> dict[str, FoodItem]:
        """Return the food items found for the given ids."""

    def find_by_barcode(self, barcode: str) -> FoodItem | None:
        """Return the food item with this exact barcode, if present."""

    def search_foods(self, query: str) -> list[FoodItem]:
        """Return items whose name contains the query, ignoring case."""

    def create_food(self, payload: dict[str, object]) -> FoodItem:
        """Create a food item and return it."""

    def update_food(self, food_id: str, payload: dict[str, object]) -> FoodItem | None:
        """Merge the payload into a food item and return it."""

    def delete_food(self, food_id: str) -> bool:
        """Delete a food item, returning False when it did not exist."""


@dataclass
class FoodService:
    """Application service for food item operations."""

    repository: FoodRepository

    def list_foods(self) -> list[FoodItem]:
        """Return every food item."""
        return self.repository.list_foods()

    def get_food(self, food_id: str) -> FoodItem:
        """Return a food item or raise when it is unknown."""
        food = self.repository.get_food(food_id)
        if food is None:
            raise NotFoundError("Food item not found")
        return food

    def get_foods(self, food_ids: set[str]) -> dict[str, FoodItem]:
        """Resolve many food ids at once; unknown ids are left out."""
        if not food_ids:
            return {}
        return self.repository.get_foods(food_ids)

    def find_by_barcode(self, barcode: str) -> FoodItem | None:
        """Return the item registered for a barcode, if any."""
        return self.repository.find_by_barcode(barcode)

    def get_by_barcode(self, barcode: str) -> FoodItem:
        """Return the item for a barcode or raise when none matches."""
        food = self.repository.find_by_barcode(barcode)
        if food is None:
            raise NotFoundError("Food item not found for this barcode")
        return food

    def search(self, query: str) -> list[FoodItem]:
        """Case-insensitive substring search on names."""
        return self.repository.search_foods(query)

    def create_food(self, payload: dict[str, object]) -> FoodItem:
        """Create a food item from validated fields."""
        name = str(payload.get("name") or "").strip()
        if not name:
            raise ValidationError("Name and calories are required")
        if payload.get("calories") is None:
            raise ValidationError("Name and calories are required")
        fields = {
            "name": name,
            "calories": float(payload["calories"]),
            "fat": float(payload.get("fat") or 0),
            "carbohydrates": float(payload.get("carbohydrates") or 0),
            "proteins": float(payload.get("proteins") or 0),
            "unit": payload.get("unit") or DEFAULT_UNIT,
            "barcode": _normalize_barcode(payload.get("barcode")),
        }
        _ensure_valid_macros(fields)
        food = self.repository.create_food(fields)
        _logger.info("Food item created: id=%s barcode=%s", food.id, food.barcode)
        return food

    def update_food(self, food_id: str, payload: dict[str, object]) -> FoodItem:
        """Apply a partial update; only supplied fields change."""
        fields = dict(payload)
        if "name" in fields:
            name = str(fields["name"] or "").strip()
            if not name:
                raise ValidationError("Name cannot be empty")
            fields["name"] = name
        if "barcode" in fields:
            fields["barcode"] = _normalize_barcode(fields["barcode"])
        for key in MACRO_FIELDS:
            if key in fields:
                if fields[key] is None:
                    raise ValidationError(f"{key} must be a number")
                fields[key] = float(fields[key])
        if "unit" in fields and not fields["unit"]:
            fields["unit"] = DEFAULT_UNIT
        _ensure_valid_macros(fields)
        food = self.repository.update_food(food_id, fields)
        if food is None:
            raise NotFoundError("Food item not found")
        return food

    def delete_food(self, food_id: str) -> None:
        """Delete a food item; meal entries referencing it are kept."""
        if not self.repository.delete_food(food_id):
            raise NotFoundError("Food item not found")
        _logger.info("Food item deleted: id=%s", food_id)


def _ensure_valid_macros(fields: dict[str, object]) -> None:
    for key in MACRO_FIELDS:
        if key not in fields:
            continue
        value = float(fields[key])
        if not math.isfinite(value):
            raise ValidationError(f"{key} must be a finite number")
        if value < 0:
            raise ValidationError(f"{key} cannot be negative")


def _normalize_barcode(raw: object) -> str | None:
    """Store blank barcodes as null."""
    if raw is None:
        return None
    value = str(raw).strip()
    return value or None
