"""Supabase repository for diet plans and their days."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import Client

from intake_tracker.adapters.supabase_meal_repository import (
    MEAL_COLUMNS,
    parse_meal,
    totals_from_row,
    totals_to_row,
)
from intake_tracker.domain.diets import DietDay, DietPlan
from intake_tracker.services.plan_rollup import DietPlanRepository

_PLAN_COLUMNS = (
    "*, diet_days(id, label, day_date, position, "
    f"diet_day_meals(position, meals({MEAL_COLUMNS})))"
)


@dataclass
class SupabaseDietPlanRepository(DietPlanRepository):
    """Supabase implementation for diet plans.

    Averages are stored as ``avg_*`` columns; a plan without days keeps them
    null.
    """

    client: Client

    def get_diet_plan(self, plan_id: UUID) -> DietPlan | None:
        """Return a plan with days, meals and ingredients, if present."""
        response = (
            self.client.table("diet_plans")
            .select(_PLAN_COLUMNS)
            .eq("id", str(plan_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_plan(response.data[0])

    def save_diet_plan(self, plan: DietPlan) -> None:
        """Persist cached figures and rewrite the plan's day rows."""
        averages = (
            totals_to_row("avg", plan.averages)
            if plan.averages is not None
            else {key: None for key in totals_to_row("avg", plan.totals)}
        )
        response = (
            self.client.table("diet_plans")
            .update(
                {
                    "name": plan.name,
                    **totals_to_row("total", plan.totals),
                    **averages,
                }
            )
            .eq("id", str(plan.id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update diet plan")

        self.client.table("diet_days").delete().eq("plan_id", str(plan.id)).execute()
        if not plan.days:
            return
        self.client.table("diet_days").insert(
            [
                {
                    "id": str(day.id),
                    "plan_id": str(plan.id),
                    "label": day.label,
                    "day_date": day.day_date.isoformat() if day.day_date else None,
                    "position": position,
                }
                for position, day in enumerate(plan.days)
            ]
        ).execute()
        day_meals = [
            {"day_id": str(day.id), "meal_id": str(meal.id), "position": position}
            for day in plan.days
            for position, meal in enumerate(day.meals)
        ]
        if day_meals:
            self.client.table("diet_day_meals").insert(day_meals).execute()


def _parse_plan(row: dict[str, object]) -> DietPlan:
    days = sorted(row.get("diet_days") or [], key=lambda day: day.get("position") or 0)
    return DietPlan(
        id=UUID(str(row["id"])),
        name=str(row["name"]),
        days=[_parse_day(day) for day in days],
        totals=totals_from_row("total", row),
        averages=totals_from_row("avg", row)
        if row.get("avg_calories") is not None
        else None,
        save_count=int(row.get("save_count") or 0),
        weekly_save_count=int(row.get("weekly_save_count") or 0),
        monthly_save_count=int(row.get("monthly_save_count") or 0),
    )


def _parse_day(row: dict[str, object]) -> DietDay:
    entries = sorted(
        row.get("diet_day_meals") or [], key=lambda entry: entry.get("position") or 0
    )
    return DietDay(
        id=UUID(str(row["id"])),
        label=str(row.get("label") or ""),
        meals=[parse_meal(entry["meals"]) for entry in entries],
        day_date=date.fromisoformat(str(row["day_date"]))
        if row.get("day_date")
        else None,
    )
