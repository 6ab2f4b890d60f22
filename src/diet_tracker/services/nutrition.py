"""Nutrition aggregation over daily meal logs.

Totals are never stored. They are recomputed from the current food items and
entry quantities on every call, so editing a food item changes the totals of
every past meal that references it. Entries whose food item has been deleted
count as zero.
"""

import logging
from dataclasses import dataclass, fields

from diet_tracker.domain.foods import FoodItem
from diet_tracker.domain.meals import MEAL_SLOTS, DailyMealLog, MealEntry
from diet_tracker.domain.nutrition import (
    DailyNutritionSummary,
    MacroProgress,
    MacroTotals,
    MealNutrition,
    round_half_up,
)
from diet_tracker.domain.profile import DailyTargets
from diet_tracker.services.foods import FoodService
from diet_tracker.services.meals import MealLogService
from diet_tracker.services.profile import ProfileService

_logger = logging.getLogger(__name__)

_MACROS = tuple(item.name for item in fields(MacroTotals))


def meal_totals(
    entries: list[MealEntry], foods: dict[str, FoodItem]
) -> tuple[MacroTotals, list[str]]:
    """Sum raw totals for entries; return them with unresolved food ids."""
    total = MacroTotals()
    missing: list[str] = []
    for entry in entries:
        food = foods.get(entry.food_item_id)
        if food is None:
            missing.append(entry.food_item_id)
            continue
        total = total + MacroTotals.for_portion(food, entry.quantity)
    return total, missing


def day_totals(
    log: DailyMealLog, foods: dict[str, FoodItem]
) -> dict[str, tuple[MacroTotals, list[str]]]:
    """Return raw totals per slot for a daily log."""
    return {slot: meal_totals(log.entries(slot), foods) for slot in MEAL_SLOTS}


def macro_progress(current: float, target: float) -> MacroProgress:
    """Describe how far a displayed value is from its target."""
    percentage = min(current / target * 100, 100) if target > 0 else 0.0
    return MacroProgress(
        current=current,
        target=target,
        percentage=round_half_up(percentage, 0),
        remaining=round_half_up(max(target - current, 0), 0),
        over_target=current > target,
    )


@dataclass
class NutritionService:
    """Service producing nutrition summaries for dates."""

    meal_log_service: MealLogService
    food_service: FoodService
    profile_service: ProfileService

    def summarize_day(self, log_date: str) -> DailyNutritionSummary:
        """Compute per-meal and daily totals against the profile targets."""
        log = self.meal_log_service.get_or_create(log_date)
        foods = self.food_service.get_foods(
            {entry.food_item_id for _, entry in log.all_entries()}
        )
        per_slot = day_totals(log, foods)

        raw_total = MacroTotals()
        meals: list[MealNutrition] = []
        missing: list[str] = []
        for slot in MEAL_SLOTS:
            totals, slot_missing = per_slot[slot]
            raw_total = raw_total + totals
            missing.extend(slot_missing)
            meals.append(
                MealNutrition(
                    slot=slot,
                    totals=totals.rounded(),
                    entry_count=len(log.entries(slot)),
                    missing_food_item_ids=slot_missing,
                )
            )
        if missing:
            _logger.info(
                "Skipped %s entries with deleted food items on %s",
                len(missing),
                log.date,
            )

        displayed = raw_total.rounded()
        targets = _targets_as_totals(self.profile_service.get_profile().daily_targets)
        progress = {
            macro: macro_progress(getattr(displayed, macro), getattr(targets, macro))
            for macro in _MACROS
        }
        return DailyNutritionSummary(
            date=log.date,
            meals=meals,
            totals=displayed,
            targets=targets,
            progress=progress,
            missing_food_item_ids=missing,
        )


def _targets_as_totals(targets: DailyTargets) -> MacroTotals:
    return MacroTotals(
        calories=targets.calories,
        proteins=targets.proteins,
        carbohydrates=targets.carbohydrates,
        fat=targets.fat,
    )
