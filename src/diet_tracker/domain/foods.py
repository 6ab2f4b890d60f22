"""Domain models for the food item database."""

from dataclasses import dataclass
from datetime import datetime

NUTRITION_BASIS = 100
DEFAULT_UNIT = "grams"
MACRO_FIELDS = ("calories", "proteins", "carbohydrates", "fat")


@dataclass(frozen=True)
class FoodItem:
    """Food with nutrition values per 100 units of ``unit``."""

    id: str
    name: str
    calories: float
    fat: float
    carbohydrates: float
    proteins: float
    unit: str
    barcode: str | None
    created_at: datetime
    updated_at: datetime | None = None
