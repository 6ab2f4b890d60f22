"""JSON document implementation of the food item repository."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import uuid4

from diet_tracker.adapters.json_document_store import JsonDocumentStore
from diet_tracker.domain.errors import ConflictError
from diet_tracker.domain.foods import DEFAULT_UNIT, FoodItem
from diet_tracker.services.foods import FoodRepository

_UPDATABLE_FIELDS = ("name", "calories", "fat", "carbohydrates", "proteins", "unit")


@dataclass
class JsonFoodRepository(FoodRepository):
    """Stores food items under the ``foodItems`` key, indexed by id."""

    store: JsonDocumentStore

    def list_foods(self) -> list[FoodItem]:
        """Return all food items in insertion order."""
        with self.store.snapshot() as document:
            return [_parse_food(row) for row in document["foodItems"].values()]

    def get_food(self, food_id: str) -> FoodItem | None:
        """Return a food item by id, if present."""
        with self.store.snapshot() as document:
            row = document["foodItems"].get(food_id)
        return _parse_food(row) if row else None

    def get_foods(self, food_ids: set[str]) -> dict[str, FoodItem]:
        """Return the food items found for the given ids."""
        with self.store.snapshot() as document:
            rows = document["foodItems"]
            return {
                food_id: _parse_food(rows[food_id])
                for food_id in food_ids
                if food_id in rows
            }

    def find_by_barcode(self, barcode: str) -> FoodItem | None:
        """Return the food item with this exact barcode, if present."""
        with self.store.snapshot() as document:
            row = _row_with_barcode(document["foodItems"], barcode)
        return _parse_food(row) if row else None

    def search_foods(self, query: str) -> list[FoodItem]:
        """Return items whose name contains the query, ignoring case."""
        needle = query.lower()
        with self.store.snapshot() as document:
            return [
                _parse_food(row)
                for row in document["foodItems"].values()
                if needle in str(row.get("name", "")).lower()
            ]

    def create_food(self, payload: dict[str, object]) -> FoodItem:
        """Create a food item and return it."""
        barcode = payload.get("barcode")
        with self.store.transaction() as document:
            rows = document["foodItems"]
            if barcode and _row_with_barcode(rows, barcode) is not None:
                raise ConflictError("Food item with this barcode already exists")
            row = {
                "id": str(uuid4()),
                "name": payload["name"],
                "calories": payload["calories"],
                "fat": payload.get("fat", 0.0),
                "carbohydrates": payload.get("carbohydrates", 0.0),
                "proteins": payload.get("proteins", 0.0),
                "unit": payload.get("unit") or DEFAULT_UNIT,
                "barcode": barcode or None,
                "createdAt": _now(),
            }
            rows[row["id"]] = row
        return _parse_food(row)

    def update_food(self, food_id: str, payload: dict[str, object]) -> FoodItem | None:
        """Merge supplied fields into a food item and return it."""
        with self.store.transaction() as document:
            rows = document["foodItems"]
            row = rows.get(food_id)
            if row is None:
                return None
            barcode = payload.get("barcode")
            if barcode and barcode != row.get("barcode"):
                existing = _row_with_barcode(rows, barcode)
                if existing is not None and existing["id"] != food_id:
                    raise ConflictError("Food item with this barcode already exists")
            for key in _UPDATABLE_FIELDS:
                if key in payload:
                    row[key] = payload[key]
            if "barcode" in payload:
                row["barcode"] = barcode or None
            row["updatedAt"] = _now()
        return _parse_food(row)

    def delete_food(self, food_id: str) -> bool:
        """Delete a food item, returning False when it did not exist."""
        with self.store.transaction() as document:
            return document["foodItems"].pop(food_id, None) is not None


def _row_with_barcode(
    rows: dict[str, dict[str, object]], barcode: str
) -> dict[str, object] | None:
    for row in rows.values():
        if row.get("barcode") == barcode:
            return row
    return None


def _now() -> str:
    return datetime.now(tz=UTC).isoformat()


def _parse_timestamp(raw: object) -> datetime | None:
    if isinstance(raw, str) and raw:
        return datetime.fromisoformat(raw.replace("Z", "+00:00"))
    return None


def _parse_food(row: dict[str, object]) -> FoodItem:
    """Parse a stored food row into a domain model."""
    return FoodItem(
        id=str(row["id"]),
        name=str(row.get("name", "")),
        calories=float(row.get("calories") or 0.0),
        fat=float(row.get("fat") or 0.0),
        carbohydrates=float(row.get("carbohydrates") or 0.0),
        proteins=float(row.get("proteins") or 0.0),
        unit=str(row.get("unit") or DEFAULT_UNIT),
        barcode=row.get("barcode") or None,
        created_at=_parse_timestamp(row.get("createdAt")) or datetime.now(tz=UTC),
        updated_at=_parse_timestamp(row.get("updatedAt")),
    )
