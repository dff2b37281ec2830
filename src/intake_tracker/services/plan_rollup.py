"""Cached nutrient totals and averages for diet plans."""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Protocol
from uuid import UUID, uuid4

from intake_tracker.aggregation import (
    day_nutrients,
    plan_averages,
    plan_totals,
    shopping_list,
)
from intake_tracker.domain.diets import DietDay, DietPlan
from intake_tracker.domain.errors import (
    DietDayNotFoundError,
    DietPlanNotFoundError,
    MealNotFoundError,
)
from intake_tracker.domain.nutrients import MACRO_FIELDS, MacroTotals, NutrientAmount
from intake_tracker.services.meals import MealRepository

_logger = logging.getLogger(__name__)


class DietPlanRepository(Protocol):
    """Persistence interface for diet plans."""

    def get_diet_plan(self, plan_id: UUID) -> DietPlan | None:
        """Return a diet plan with its days, meals and ingredients."""

    def save_diet_plan(self, plan: DietPlan) -> None:
        """Persist a plan's days and cached totals."""


def recompute_totals(plan: DietPlan) -> None:
    """Refresh a plan's cached totals and per-day averages from its days.

    Averages are rounded to one decimal and left as None for a plan with no
    days.
    """
    plan.totals = plan_totals(plan.days)
    averages = plan_averages(plan.days)
    if averages is None:
        plan.averages = None
        return
    plan.averages = MacroTotals(
        **{name: round(getattr(averages, name), 1) for name in MACRO_FIELDS}
    )


@dataclass
class PlanRollupService:
    """Keeps cached plan figures in step with plan composition."""

    repository: DietPlanRepository
    meals: MealRepository

    def get_plan(self, plan_id: UUID) -> DietPlan:
        """Return a plan or raise DietPlanNotFoundError."""
        plan = self.repository.get_diet_plan(plan_id)
        if plan is None:
            raise DietPlanNotFoundError(plan_id)
        return plan

    def refresh(self, plan_id: UUID) -> DietPlan:
        """Recompute and persist a plan's cached figures."""
        plan = self.get_plan(plan_id)
        recompute_totals(plan)
        self.repository.save_diet_plan(plan)
        _logger.info("Recomputed totals for diet plan %s", plan_id)
        return plan

    def add_day(
        self,
        plan_id: UUID,
        label: str,
        meal_ids: list[UUID],
        day_date: date | None = None,
    ) -> DietPlan:
        """Append a day built from stored meals and refresh cached figures.

        A meal id may repeat; every occurrence counts towards the totals.
        """
        plan = self.get_plan(plan_id)
        meals = []
        for meal_id in meal_ids:
            meal = self.meals.get_meal(meal_id)
            if meal is None:
                raise MealNotFoundError(meal_id)
            meals.append(meal)
        plan.days.append(
            DietDay(id=uuid4(), label=label, meals=meals, day_date=day_date)
        )
        recompute_totals(plan)
        self.repository.save_diet_plan(plan)
        _logger.info(
            "Added day %r with %s meals to plan %s", label, len(meals), plan_id
        )
        return plan

    def remove_day(self, plan_id: UUID, day_id: UUID) -> DietPlan:
        """Remove a day from a plan and refresh its cached figures."""
        plan = self.get_plan(plan_id)
        remaining = [day for day in plan.days if day.id != day_id]
        if len(remaining) == len(plan.days):
            raise DietDayNotFoundError(day_id)
        plan.days = remaining
        recompute_totals(plan)
        self.repository.save_diet_plan(plan)
        _logger.info("Removed day %s from plan %s", day_id, plan_id)
        return plan

    def day_nutrients(self, plan_id: UUID, day_id: UUID) -> dict[str, NutrientAmount]:
        """Return the full nutrient breakdown of one day of a plan."""
        plan = self.get_plan(plan_id)
        for day in plan.days:
            if day.id == day_id:
                return day_nutrients(day.meals)
        raise DietDayNotFoundError(day_id)

    def shopping_list(self, plan_id: UUID) -> dict[UUID, float]:
        """Return grams per food item needed for the whole plan."""
        return shopping_list(self.get_plan(plan_id).days)
