"""User profile service."""

from dataclasses import dataclass, fields, replace
from datetime import UTC, datetime
from typing import Protocol

from diet_tracker.domain.errors import ValidationError
from diet_tracker.domain.profile import DailyTargets, UserProfile

_TARGET_KEYS = tuple(item.name for item in fields(DailyTargets))


class ProfileRepository(Protocol):
    """Persistence interface for the single user profile."""

    def get_profile(self) -> UserProfile | None:
        """Return the saved profile, if one was ever saved."""

    def save_profile(self, profile: UserProfile) -> UserProfile:
        """Persist the profile and return it."""


@dataclass
class ProfileService:
    """Service for reading and saving the user profile."""

    repository: ProfileRepository

    def get_profile(self) -> UserProfile:
        """Return the saved profile or an unsaved default."""
        return self.repository.get_profile() or default_profile()

    def replace_profile(self, payload: dict[str, object]) -> UserProfile:
        """Replace the profile; missing targets fall back to defaults."""
        now = datetime.now(tz=UTC)
        existing = self.repository.get_profile()
        profile = UserProfile(
            name=str(payload.get("name") or ""),
            daily_targets=_merge_targets(DailyTargets(), payload.get("daily_targets")),
            initial_weight=_optional_positive(payload, "initial_weight"),
            height=_optional_positive(payload, "height"),
            created_at=existing.created_at if existing else now,
            updated_at=now,
        )
        return self.repository.save_profile(profile)

    def merge_profile(self, payload: dict[str, object]) -> UserProfile:
        """Update only the supplied fields of the current profile."""
        now = datetime.now(tz=UTC)
        existing = self.repository.get_profile()
        current = existing or default_profile(now)
        changes: dict[str, object] = {"updated_at": now}
        if "name" in payload:
            changes["name"] = str(payload["name"] or "")
        if "daily_targets" in payload:
            changes["daily_targets"] = _merge_targets(
                current.daily_targets, payload["daily_targets"]
            )
        for key in ("initial_weight", "height"):
            if key in payload:
                changes[key] = _optional_positive(payload, key)
        return self.repository.save_profile(replace(current, **changes))


def default_profile(now: datetime | None = None) -> UserProfile:
    """Build the profile shown before anything is saved."""
    stamp = now or datetime.now(tz=UTC)
    return UserProfile(name="", created_at=stamp, updated_at=stamp)


def _merge_targets(base: DailyTargets, raw: object) -> DailyTargets:
    if raw is None:
        return base
    if not isinstance(raw, dict):
        raise ValidationError("dailyTargets must be an object")
    values = {key: raw[key] for key in _TARGET_KEYS if raw.get(key) is not None}
    for key, value in values.items():
        if float(value) <= 0:
            raise ValidationError(f"Target {key} must be positive")
    return replace(base, **{key: float(value) for key, value in values.items()})


def _optional_positive(payload: dict[str, object], key: str) -> float | None:
    value = payload.get(key)
    if value is None:
        return None
    number = float(value)
    if number <= 0:
        raise ValidationError(f"{key} must be positive")
    return number
