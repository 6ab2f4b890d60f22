"""CSV exports of the food diary and weight history."""

import csv
import io
from dataclasses import dataclass

from diet_tracker.domain.nutrition import MacroTotals
from diet_tracker.services.foods import FoodService
from diet_tracker.services.meals import MealLogService
from diet_tracker.services.weight import WeightService

DIARY_COLUMNS = (
    "date",
    "meal",
    "food",
    "quantity",
    "unit",
    "calories",
    "proteins",
    "carbohydrates",
    "fat",
)
WEIGHT_COLUMNS = ("date", "time", "weight")
DELETED_FOOD_LABEL = "(deleted)"


@dataclass
class ExportService:
    """Builds CSV documents from the stored data."""

    meal_log_service: MealLogService
    food_service: FoodService
    weight_service: WeightService

    def food_diary_csv(self) -> str:
        """One row per meal entry with scaled, display-rounded nutrition."""
        logs = self.meal_log_service.list_logs()
        foods = self.food_service.get_foods(
            {entry.food_item_id for log in logs for _, entry in log.all_entries()}
        )
        buf = io.StringIO()
        writer = csv.writer(buf)
        writer.writerow(DIARY_COLUMNS)
        for log in logs:
            for slot, entry in log.all_entries():
                food = foods.get(entry.food_item_id)
                if food is None:
                    totals = MacroTotals()
                    name, unit = DELETED_FOOD_LABEL, ""
                else:
                    totals = MacroTotals.for_portion(food, entry.quantity).rounded()
                    name, unit = food.name, food.unit
                writer.writerow(
                    [
                        log.date,
                        slot,
                        name,
                        _format_number(entry.quantity),
                        unit,
                        _format_number(totals.calories),
                        _format_number(totals.proteins),
                        _format_number(totals.carbohydrates),
                        _format_number(totals.fat),
                    ]
                )
        return buf.getvalue()

    def weight_csv(self) -> str:
        """One row per weight entry, oldest first."""
        buf = io.StringIO()
        writer = csv.writer(buf)
        writer.writerow(WEIGHT_COLUMNS)
        for entry in self.weight_service.list_entries():
            writer.writerow([entry.date, entry.time or "", _format_number(entry.weight)])
        return buf.getvalue()


def _format_number(value: float) -> str:
    """Drop a trailing ``.0`` so whole numbers read naturally."""
    return str(int(value)) if float(value).is_integer() else str(value)
