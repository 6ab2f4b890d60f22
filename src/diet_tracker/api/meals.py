"""Daily meal log endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Request, Response

from diet_tracker.api.schemas import (
    CopyMealRequest,
    CopyResultOut,
    DailyMealLogOut,
    DailyNutritionSummaryOut,
    MealEntryCreate,
    MealEntryOut,
    MessageOut,
)

if TYPE_CHECKING:
    from diet_tracker.containers import AppContainer

router = APIRouter(prefix="/api/meals", tags=["meals"])


def _container(request: Request) -> AppContainer:
    return request.app.state.container


@router.get("/export")
async def export_food_diary(request: Request) -> Response:
    """Download every logged entry as CSV."""
    content = _container(request).export_service.food_diary_csv()
    return Response(
        content=content,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": "attachment; filename=food_diary_export.csv"},
    )


@router.get("/{log_date}")
async def get_daily_log(log_date: str, request: Request) -> DailyMealLogOut:
    """Return the meals for a date, creating empty slots on first access."""
    log = _container(request).meal_log_service.get_or_create(log_date)
    return DailyMealLogOut.model_validate(log)


@router.get("/{log_date}/summary")
async def get_daily_summary(log_date: str, request: Request) -> DailyNutritionSummaryOut:
    """Return nutrition totals for a date against the profile targets."""
    summary = _container(request).nutrition_service.summarize_day(log_date)
    return DailyNutritionSummaryOut.model_validate(summary)


@router.post("/{log_date}/{meal_type}")
async def add_meal_entry(
    log_date: str, meal_type: str, body: MealEntryCreate, request: Request
) -> MealEntryOut:
    """Append a food item to a meal."""
    entry = _container(request).meal_log_service.add_entry(
        log_date, meal_type, body.food_item_id, body.quantity
    )
    return MealEntryOut.model_validate(entry)


@router.post("/{log_date}/{meal_type}/copy")
async def copy_meal(
    log_date: str, meal_type: str, body: CopyMealRequest, request: Request
) -> CopyResultOut:
    """Copy every entry of another meal into this one."""
    result = _container(request).meal_log_service.copy_meal(
        source_date=body.source_date,
        source_slot=body.source_meal_type,
        target_date=log_date,
        target_slot=meal_type,
    )
    return CopyResultOut.model_validate(result)


@router.delete("/{log_date}/{meal_type}/{entry_id}")
async def remove_meal_entry(
    log_date: str, meal_type: str, entry_id: str, request: Request
) -> MessageOut:
    """Remove an entry from a meal."""
    _container(request).meal_log_service.remove_entry(log_date, meal_type, entry_id)
    return MessageOut(message="Food item removed from meal")
