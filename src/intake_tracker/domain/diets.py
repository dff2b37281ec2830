"""Domain models for diet plans."""

from dataclasses import dataclass, field
from datetime import date
from uuid import UUID

from intake_tracker.domain.meals import Meal
from intake_tracker.domain.nutrients import MacroTotals


@dataclass
class DietDay:
    """A day in a diet plan. Meals are shared and may repeat."""

    id: UUID
    label: str
    meals: list[Meal] = field(default_factory=list)
    day_date: date | None = None


@dataclass
class DietPlan:
    """Diet plan with cached nutrient totals and per-day averages."""

    id: UUID
    name: str
    days: list[DietDay] = field(default_factory=list)
    totals: MacroTotals = field(default_factory=MacroTotals)
    averages: MacroTotals | None = None
    save_count: int = 0
    weekly_save_count: int = 0
    monthly_save_count: int = 0
