"""Domain models for the user profile."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class DailyTargets:
    """Daily nutrition targets."""

    calories: float = 2000
    proteins: float = 150
    carbohydrates: float = 250
    fat: float = 65


@dataclass(frozen=True)
class UserProfile:
    """The single user profile."""

    name: str
    created_at: datetime
    updated_at: datetime
    daily_targets: DailyTargets = field(default_factory=DailyTargets)
    initial_weight: float | None = None
    height: float | None = None
