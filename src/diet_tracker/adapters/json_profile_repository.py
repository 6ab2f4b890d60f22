"""JSON document implementation of the profile repository."""

from dataclasses import dataclass
from datetime import UTC, datetime

from diet_tracker.adapters.json_document_store import JsonDocumentStore
from diet_tracker.domain.profile import DailyTargets, UserProfile
from diet_tracker.services.profile import ProfileRepository


@dataclass
class JsonProfileRepository(ProfileRepository):
    """Stores the profile under ``userProfile``; null until first save."""

    store: JsonDocumentStore

    def get_profile(self) -> UserProfile | None:
        """Return the saved profile, if one was ever saved."""
        with self.store.snapshot() as document:
            row = document.get("userProfile")
        return _parse_profile(row) if isinstance(row, dict) else None

    def save_profile(self, profile: UserProfile) -> UserProfile:
        """Persist the profile and return it."""
        row = {
            "name": profile.name,
            "dailyTargets": {
                "calories": profile.daily_targets.calories,
                "proteins": profile.daily_targets.proteins,
                "carbohydrates": profile.daily_targets.carbohydrates,
                "fat": profile.daily_targets.fat,
            },
            "initialWeight": profile.initial_weight,
            "height": profile.height,
            "createdAt": profile.created_at.isoformat(),
            "updatedAt": profile.updated_at.isoformat(),
        }
        with self.store.transaction() as document:
            document["userProfile"] = row
        return _parse_profile(row)


def _parse_timestamp(raw: object) -> datetime:
    if isinstance(raw, str) and raw:
        return datetime.fromisoformat(raw.replace("Z", "+00:00"))
    return datetime.now(tz=UTC)


def _optional_float(raw: object) -> float | None:
    return float(raw) if raw is not None else None


def _parse_profile(row: dict[str, object]) -> UserProfile:
    """Parse the stored profile into a domain model."""
    defaults = DailyTargets()
    targets = row.get("dailyTargets") or {}
    return UserProfile(
        name=str(row.get("name") or ""),
        daily_targets=DailyTargets(
            calories=float(targets.get("calories") or defaults.calories),
            proteins=float(targets.get("proteins") or defaults.proteins),
            carbohydrates=float(targets.get("carbohydrates") or defaults.carbohydrates),
            fat=float(targets.get("fat") or defaults.fat),
        ),
        initial_weight=_optional_float(row.get("initialWeight")),
        height=_optional_float(row.get("height")),
        created_at=_parse_timestamp(row.get("createdAt")),
        updated_at=_parse_timestamp(row.get("updatedAt")),
    )
