"""Recommended daily intake derived from a biometric profile."""

from dataclasses import dataclass

from intake_tracker.domain.errors import MissingProfileDataError
from intake_tracker.domain.nutrients import (
    CARBOHYDRATES,
    ENERGY,
    FAT,
    PROTEIN,
    SATURATED_FAT,
    UNSATURATED_FAT,
)
from intake_tracker.domain.profiles import ActivityLevel, Gender, Goal, UserProfile

KCAL_PER_GRAM_PROTEIN = 4
KCAL_PER_GRAM_CARBS = 4
KCAL_PER_GRAM_FAT = 9
SATURATED_FAT_SHARE = 0.30

_ACTIVITY_FACTORS = {
    ActivityLevel.SEDENTARY: 1.2,
    ActivityLevel.LIGHT: 1.375,
    ActivityLevel.MODERATE: 1.55,
    ActivityLevel.ACTIVE: 1.725,
    ActivityLevel.VERY_ACTIVE: 1.9,
}

_GOAL_ENERGY_FACTORS = {
    Goal.WEIGHT_LOSS: 0.85,
    Goal.WEIGHT_LOSS_WITH_MUSCLE_MAINTENANCE: 0.90,
    Goal.MAINTENANCE: 1.0,
    Goal.MAINTENANCE_WITH_MUSCLE_FOCUS: 1.05,
    Goal.WEIGHT_GAIN: 1.15,
    Goal.WEIGHT_GAIN_WITH_MUSCLE_FOCUS: 1.20,
}

# Upper bound of each recommended g/kg range; the highest applicable bound wins.
_ACTIVITY_PROTEIN_PER_KG = {
    ActivityLevel.SEDENTARY: 1.0,
    ActivityLevel.LIGHT: 1.2,
    ActivityLevel.MODERATE: 1.6,
    ActivityLevel.ACTIVE: 2.0,
    ActivityLevel.VERY_ACTIVE: 2.2,
}

_GOAL_PROTEIN_PER_KG = {
    Goal.WEIGHT_LOSS: 1.2,
    Goal.WEIGHT_LOSS_WITH_MUSCLE_MAINTENANCE: 1.6,
    Goal.MAINTENANCE: 1.2,
    Goal.MAINTENANCE_WITH_MUSCLE_FOCUS: 1.5,
    Goal.WEIGHT_GAIN: 2.0,
    Goal.WEIGHT_GAIN_WITH_MUSCLE_FOCUS: 2.2,
}

_GOAL_FAT_SHARE = {
    Goal.WEIGHT_LOSS: 0.20,
    Goal.WEIGHT_LOSS_WITH_MUSCLE_MAINTENANCE: 0.25,
    Goal.MAINTENANCE: 0.25,
    Goal.MAINTENANCE_WITH_MUSCLE_FOCUS: 0.30,
    Goal.WEIGHT_GAIN: 0.30,
    Goal.WEIGHT_GAIN_WITH_MUSCLE_FOCUS: 0.35,
}


def bmr(weight_kg: float, height_cm: float, age: int, gender: Gender) -> float:
    """Basal metabolic rate (revised Harris-Benedict)."""
    if gender is Gender.MALE:
        return 88.362 + 13.397 * weight_kg + 4.799 * height_cm - 5.677 * age
    return 447.593 + 9.247 * weight_kg + 3.098 * height_cm - 4.330 * age


def tdee(basal_rate: float, activity_level: ActivityLevel) -> float:
    """Total daily energy expenditure for an activity level."""
    return basal_rate * _ACTIVITY_FACTORS[activity_level]


def adjust_for_goal(energy_kcal: float, goal: Goal) -> float:
    """Apply the goal's energy multiplier."""
    return energy_kcal * _GOAL_ENERGY_FACTORS[goal]


def _age_protein_per_kg(age: int) -> float:
    if age > 65:  # noqa: PLR2004
        return 1.6
    if age > 50:  # noqa: PLR2004
        return 1.5
    if age > 30:  # noqa: PLR2004
        return 1.2
    return 1.0


def protein_target(
    weight_kg: float, age: int, activity_level: ActivityLevel, goal: Goal
) -> float:
    """Daily protein in grams from the strictest applicable g/kg policy."""
    per_kg = max(
        _ACTIVITY_PROTEIN_PER_KG[activity_level],
        _age_protein_per_kg(age),
        _GOAL_PROTEIN_PER_KG[goal],
    )
    return per_kg * weight_kg


@dataclass(frozen=True)
class ProfileIntakeCalculator:
    """Derives daily nutrient targets from a user profile.

    The calculator holds no state; the same profile always yields the same
    targets.
    """

    def calculate(self, profile: UserProfile) -> dict[str, float]:
        """Return daily targets keyed by nutrient name.

        Raises:
            MissingProfileDataError: if any biometric field is absent.
        """
        missing = profile.missing_fields()
        if missing:
            raise MissingProfileDataError(profile.user_id, missing)
        # missing_fields() guarantees the values below are set
        weight = float(profile.weight_kg)  # type: ignore[arg-type]
        height = float(profile.height_cm)  # type: ignore[arg-type]
        age = int(profile.age)  # type: ignore[arg-type]
        gender = Gender(profile.gender)
        activity = ActivityLevel(profile.activity_level)
        goal = Goal(profile.goal)

        energy = adjust_for_goal(tdee(bmr(weight, height, age, gender), activity), goal)
        protein = protein_target(weight, age, activity, goal)
        fat = energy * _GOAL_FAT_SHARE[goal] / KCAL_PER_GRAM_FAT
        carbs = (
            energy - protein * KCAL_PER_GRAM_PROTEIN - fat * KCAL_PER_GRAM_FAT
        ) / KCAL_PER_GRAM_CARBS
        return {
            ENERGY: energy,
            PROTEIN: protein,
            FAT: fat,
            CARBOHYDRATES: carbs,
            SATURATED_FAT: fat * SATURATED_FAT_SHARE,
            UNSATURATED_FAT: fat * (1 - SATURATED_FAT_SHARE),
        }
