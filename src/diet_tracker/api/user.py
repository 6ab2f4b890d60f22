"""User profile and weight endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Request, Response, status

from diet_tracker.api.schemas import (
    MessageOut,
    ProfileUpdate,
    UserProfileOut,
    WeightEntryCreate,
    WeightEntryOut,
    WeightStatsOut,
)

if TYPE_CHECKING:
    from diet_tracker.containers import AppContainer

router = APIRouter(prefix="/api/user", tags=["user"])


def _container(request: Request) -> AppContainer:
    return request.app.state.container


@router.get("/profile")
async def get_profile(request: Request) -> UserProfileOut:
    """Return the saved profile or the defaults."""
    profile = _container(request).profile_service.get_profile()
    return UserProfileOut.model_validate(profile)


@router.put("/profile")
async def replace_profile(body: ProfileUpdate, request: Request) -> UserProfileOut:
    """Replace the profile."""
    profile = _container(request).profile_service.replace_profile(body.model_dump())
    return UserProfileOut.model_validate(profile)


@router.patch("/profile")
async def merge_profile(body: ProfileUpdate, request: Request) -> UserProfileOut:
    """Change only the supplied profile fields."""
    profile = _container(request).profile_service.merge_profile(
        body.model_dump(exclude_unset=True)
    )
    return UserProfileOut.model_validate(profile)


@router.get("/weight")
async def list_weight_entries(request: Request) -> list[WeightEntryOut]:
    """Return weight entries, oldest first."""
    entries = _container(request).weight_service.list_entries()
    return [WeightEntryOut.model_validate(entry) for entry in entries]


@router.post("/weight", status_code=status.HTTP_201_CREATED)
async def record_weight(body: WeightEntryCreate, request: Request) -> WeightEntryOut:
    """Record the weight for a date, replacing any earlier value."""
    entry = _container(request).weight_service.record_weight(
        body.date, body.weight, body.time
    )
    return WeightEntryOut.model_validate(entry)


@router.get("/weight/stats")
async def weight_stats(request: Request) -> WeightStatsOut | None:
    """Return current weight and changes; null without entries."""
    stats = _container(request).weight_service.stats()
    return WeightStatsOut.model_validate(stats) if stats else None


@router.get("/weight/export")
async def export_weight(request: Request) -> Response:
    """Download the weight history as CSV."""
    content = _container(request).export_service.weight_csv()
    return Response(
        content=content,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": "attachment; filename=weight_data.csv"},
    )


@router.delete("/weight/{entry_date}")
async def delete_weight_entry(entry_date: str, request: Request) -> MessageOut:
    """Delete the weight entry for a date."""
    _container(request).weight_service.delete_entry(entry_date)
    return MessageOut(message="Weight entry deleted successfully")
