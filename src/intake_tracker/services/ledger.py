"""Consumption ledger over recommended daily intake records."""

import calendar
import logging
from collections import defaultdict
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, date, datetime, timedelta
from typing import Protocol
from uuid import UUID

from intake_tracker.aggregation import meal_nutrients, meal_totals
from intake_tracker.domain.errors import (
    IntakeNotFoundError,
    MealNotFoundError,
    UserNotFoundError,
)
from intake_tracker.domain.intake import IntakeScope, RecommendedDailyIntake
from intake_tracker.domain.meals import ConsumedMeal
from intake_tracker.domain.nutrients import (
    TARGET_PARENTS,
    TARGET_UNITS,
    NutrientAmount,
    normalize_nutrient_name,
)
from intake_tracker.domain.profiles import UserProfile
from intake_tracker.services.meals import MealRepository
from intake_tracker.services.profile_intake import ProfileIntakeCalculator
from intake_tracker.services.users import UserProfileRepository

_logger = logging.getLogger(__name__)


class IntakeRepository(Protocol):
    """Persistence interface for recommended daily intake records."""

    def get_intake(self, user_id: UUID, day: date) -> RecommendedDailyIntake | None:
        """Return the intake record for a user and date."""

    def list_intakes(
        self, user_id: UUID, start: date, end: date
    ) -> list[RecommendedDailyIntake]:
        """Return intake records with start <= day <= end."""

    def create_intake(
        self, user_id: UUID, day: date, targets: dict[str, float]
    ) -> RecommendedDailyIntake:
        """Create an intake record and return it."""

    def save_intake(self, intake: RecommendedDailyIntake) -> RecommendedDailyIntake:
        """Persist updated targets.

        Raises ConcurrentUpdateConflict when the stored version no longer
        matches ``intake.version``.
        """


class ConsumedMealRepository(Protocol):
    """Persistence interface for the append-only consumed meal log."""

    def add_consumed_meal(self, consumed: ConsumedMeal) -> ConsumedMeal:
        """Append a consumed meal snapshot and return it with its id."""

    def list_consumed_meals(self, intake_id: UUID) -> list[ConsumedMeal]:
        """Return consumed meals recorded against an intake."""


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


def scope_bounds(scope: IntakeScope, reference_day: date) -> tuple[date, date]:
    """Return the first and last date of the week or month around a date."""
    if scope is IntakeScope.WEEK:
        start = reference_day - timedelta(days=reference_day.weekday())
        return start, start + timedelta(days=6)
    last = calendar.monthrange(reference_day.year, reference_day.month)[1]
    return reference_day.replace(day=1), reference_day.replace(day=last)


@dataclass
class ConsumptionLedger:
    """Applies consumed meals against per-date intake targets.

    Read-modify-write of a record is not locked here. Callers serialise
    ``consume`` per (user, date), and the intake repository rejects stale
    writes with ConcurrentUpdateConflict.
    """

    profiles: UserProfileRepository
    meals: MealRepository
    intakes: IntakeRepository
    consumed_meals: ConsumedMealRepository
    calculator: ProfileIntakeCalculator = field(default_factory=ProfileIntakeCalculator)
    normalize: Callable[[str], str] = normalize_nutrient_name
    now: Callable[[], datetime] = _utc_now

    def get_or_create_intake(self, user_id: UUID, day: date) -> RecommendedDailyIntake:
        """Return the intake for a date, calculating it on first request."""
        profile = self._get_profile(user_id)
        existing = self.intakes.get_intake(user_id, day)
        if existing is not None:
            return existing
        targets = self.calculator.calculate(profile)
        intake = self.intakes.create_intake(user_id, day, targets)
        _logger.info(
            "Created daily intake %s for user %s on %s", intake.id, user_id, day
        )
        return intake

    def consume(self, user_id: UUID, meal_id: UUID, day: date) -> dict[str, float]:
        """Subtract a meal's nutrients from the intake of a date.

        Returns the full target map after the update. Remaining values may be
        negative once a target is exceeded.
        """
        self._get_profile(user_id)
        meal = self.meals.get_meal(meal_id)
        if meal is None:
            raise MealNotFoundError(meal_id)
        intake = self.intakes.get_intake(user_id, day)
        if intake is None:
            raise IntakeNotFoundError(user_id, day)

        target_keys = {self.normalize(name): name for name in intake.targets}
        for amount in meal_nutrients(meal.ingredients).values():
            target = self._target_for(amount, target_keys)
            if target is None:
                continue
            current = intake.targets[target]
            intake.targets[target] = current - amount.value
            _logger.debug(
                "Nutrient %s: initial=%s consumed=%s remaining=%s",
                target,
                current,
                amount.value,
                intake.targets[target],
            )

        saved = self.intakes.save_intake(intake)
        consumed_at = self.now()
        self.consumed_meals.add_consumed_meal(
            ConsumedMeal(
                id=None,
                intake_id=saved.id,
                meal_id=meal.id,
                meal_name=meal.name,
                totals=meal_totals(meal.ingredients),
                consumed_date=day,
                consumed_time=consumed_at.time(),
            )
        )
        _logger.info("User %s consumed meal %s on %s", user_id, meal_id, day)
        return dict(saved.targets)

    def cumulative(
        self, user_id: UUID, scope: IntakeScope, reference_day: date
    ) -> dict[str, float]:
        """Sum current targets of every recorded date in the week or month.

        Dates without an intake record are left out of the sum.
        """
        self._get_profile(user_id)
        start, end = scope_bounds(scope, reference_day)
        return _sum_targets(self.intakes.list_intakes(user_id, start, end))

    def projected_intake(
        self, user_id: UUID, scope: IntakeScope, reference_day: date
    ) -> dict[str, float]:
        """Recorded targets up to a date plus the baseline for remaining days."""
        profile = self._get_profile(user_id)
        start, end = scope_bounds(scope, reference_day)
        recorded = _sum_targets(
            self.intakes.list_intakes(user_id, start, reference_day)
        )
        baseline = self.calculator.calculate(profile)
        remaining_days = (end - reference_day).days
        return {
            name: recorded.get(name, 0.0) + value * remaining_days
            for name, value in baseline.items()
        }

    def consumed_meals_for(self, user_id: UUID, day: date) -> list[ConsumedMeal]:
        """Return the consumed meal log for a user's date."""
        self._get_profile(user_id)
        intake = self.intakes.get_intake(user_id, day)
        if intake is None:
            raise IntakeNotFoundError(user_id, day)
        return self.consumed_meals.list_consumed_meals(intake.id)

    def _target_for(
        self, amount: NutrientAmount, target_keys: dict[str, str]
    ) -> str | None:
        """Return the target a consumed amount counts against, if any.

        Amounts match on the bare nutrient name. A nutrient without a target of
        its own falls back to its parent target, and amounts in a unit other
        than the target's are left out.
        """
        key = self.normalize(amount.nutrient)
        if key not in target_keys:
            parents = {
                self.normalize(child): self.normalize(parent)
                for child, parent in TARGET_PARENTS.items()
            }
            key = parents.get(key, key)
        target = target_keys.get(key)
        if target is None:
            _logger.debug("Nutrient %s has no daily target, skipped", amount.name)
            return None
        units = {self.normalize(name): unit for name, unit in TARGET_UNITS.items()}
        expected = units.get(key)
        if expected is not None and amount.unit.lower() != expected:
            _logger.debug(
                "Nutrient %s in %s does not match target unit %s, skipped",
                amount.name,
                amount.unit,
                expected,
            )
            return None
        return target

    def _get_profile(self, user_id: UUID) -> UserProfile:
        profile = self.profiles.get_profile(user_id)
        if profile is None:
            raise UserNotFoundError(user_id)
        return profile


def _sum_targets(intakes: list[RecommendedDailyIntake]) -> dict[str, float]:
    totals: dict[str, float] = defaultdict(float)
    for intake in intakes:
        for name, value in intake.targets.items():
            totals[name] += value
    return dict(totals)
