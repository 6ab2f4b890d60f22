"""Nutrition domain models."""

import math
from dataclasses import dataclass

from diet_tracker.domain.foods import NUTRITION_BASIS, FoodItem


@dataclass(frozen=True)
class MacroTotals:
    """Calories and macronutrient grams."""

    calories: float = 0.0
    proteins: float = 0.0
    carbohydrates: float = 0.0
    fat: float = 0.0

    def __add__(self, other: "MacroTotals") -> "MacroTotals":
        return MacroTotals(
            calories=self.calories + other.calories,
            proteins=self.proteins + other.proteins,
            carbohydrates=self.carbohydrates + other.carbohydrates,
            fat=self.fat + other.fat,
        )

    def rounded(self) -> "MacroTotals":
        """Return display values: whole calories, grams to one decimal."""
        return MacroTotals(
            calories=round_half_up(self.calories, 0),
            proteins=round_half_up(self.proteins, 1),
            carbohydrates=round_half_up(self.carbohydrates, 1),
            fat=round_half_up(self.fat, 1),
        )

    @classmethod
    def for_portion(cls, food: FoodItem, quantity: float) -> "MacroTotals":
        """Scale a food's per-basis values to the logged quantity."""
        return cls(
            calories=food.calories * quantity / NUTRITION_BASIS,
            proteins=food.proteins * quantity / NUTRITION_BASIS,
            carbohydrates=food.carbohydrates * quantity / NUTRITION_BASIS,
            fat=food.fat * quantity / NUTRITION_BASIS,
        )


@dataclass(frozen=True)
class MacroProgress:
    """Progress of one macro against its daily target."""

    current: float
    target: float
    percentage: float
    remaining: float
    over_target: bool


@dataclass(frozen=True)
class MealNutrition:
    """Totals for one meal slot."""

    slot: str
    totals: MacroTotals
    entry_count: int
    missing_food_item_ids: list[str]


@dataclass(frozen=True)
class DailyNutritionSummary:
    """Display totals for a date against the profile targets."""

    date: str
    meals: list[MealNutrition]
    totals: MacroTotals
    targets: MacroTotals
    progress: dict[str, MacroProgress]
    missing_food_item_ids: list[str]


def round_half_up(value: float, digits: int) -> float:
    """Round with halves going up, matching JavaScript's Math.round."""
    factor = 10**digits
    result = math.floor(value * factor + 0.5) / factor
    return float(int(result)) if digits == 0 else result
