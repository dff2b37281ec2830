"""Biometric profile models."""

from dataclasses import dataclass
from enum import StrEnum
from uuid import UUID


class Gender(StrEnum):
    """Sex used to pick the BMR equation."""

    MALE = "MALE"
    FEMALE = "FEMALE"


class ActivityLevel(StrEnum):
    """Activity level; each maps to a TDEE multiplier."""

    SEDENTARY = "SEDENTARY"
    LIGHT = "LIGHT"
    MODERATE = "MODERATE"
    ACTIVE = "ACTIVE"
    VERY_ACTIVE = "VERY_ACTIVE"


class Goal(StrEnum):
    """Body composition goal driving the calorie adjustment and protein ratio."""

    WEIGHT_LOSS = "WEIGHT_LOSS"
    WEIGHT_LOSS_WITH_MUSCLE_MAINTENANCE = "WEIGHT_LOSS_WITH_MUSCLE_MAINTENANCE"
    MAINTENANCE = "MAINTENANCE"
    MAINTENANCE_WITH_MUSCLE_FOCUS = "MAINTENANCE_WITH_MUSCLE_FOCUS"
    WEIGHT_GAIN = "WEIGHT_GAIN"
    WEIGHT_GAIN_WITH_MUSCLE_FOCUS = "WEIGHT_GAIN_WITH_MUSCLE_FOCUS"


_REQUIRED_FIELDS = (
    "weight_kg",
    "height_cm",
    "age",
    "gender",
    "activity_level",
    "goal",
)


@dataclass(frozen=True)
class UserProfile:
    """Biometric data used to derive daily intake targets."""

    user_id: UUID
    weight_kg: float | None = None
    height_cm: float | None = None
    age: int | None = None
    gender: Gender | None = None
    activity_level: ActivityLevel | None = None
    goal: Goal | None = None

    def missing_fields(self) -> list[str]:
        """Return the names of required fields that are not set."""
        return [name for name in _REQUIRED_FIELDS if getattr(self, name) is None]
