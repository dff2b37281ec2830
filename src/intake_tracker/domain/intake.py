"""Domain models for recommended daily intake records."""

from dataclasses import dataclass, field
from datetime import date
from enum import StrEnum
from uuid import UUID


class IntakeScope(StrEnum):
    """Period covered by a cumulative intake view."""

    WEEK = "week"
    MONTH = "month"


@dataclass
class RecommendedDailyIntake:
    """Per-user, per-date nutrient targets, decremented as meals are consumed."""

    id: UUID
    user_id: UUID
    day: date
    targets: dict[str, float] = field(default_factory=dict)
    version: int = 0
