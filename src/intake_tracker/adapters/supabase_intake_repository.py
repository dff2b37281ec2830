"""Supabase repositories for daily intake records and consumed meals."""

from dataclasses import dataclass
from datetime import date, time
from uuid import UUID

from supabase import Client

from intake_tracker.adapters.supabase_meal_repository import (
    totals_from_row,
    totals_to_row,
)
from intake_tracker.domain.errors import ConcurrentUpdateConflict
from intake_tracker.domain.intake import RecommendedDailyIntake
from intake_tracker.domain.meals import ConsumedMeal
from intake_tracker.services.ledger import ConsumedMealRepository, IntakeRepository

_INTAKE_COLUMNS = "id, user_id, day, targets, version"


@dataclass
class SupabaseIntakeRepository(IntakeRepository):
    """Supabase implementation for recommended daily intakes.

    ``targets`` is a jsonb map of nutrient name to remaining value. Updates are
    guarded by the ``version`` column.
    """

    client: Client

    def get_intake(self, user_id: UUID, day: date) -> RecommendedDailyIntake | None:
        """Return the intake for a user and date, if present."""
        response = (
            self.client.table("recommended_daily_intakes")
            .select(_INTAKE_COLUMNS)
            .eq("user_id", str(user_id))
            .eq("day", day.isoformat())
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_intake(response.data[0])

    def list_intakes(
        self, user_id: UUID, start: date, end: date
    ) -> list[RecommendedDailyIntake]:
        """Return intakes for a user with start <= day <= end."""
        response = (
            self.client.table("recommended_daily_intakes")
            .select(_INTAKE_COLUMNS)
            .eq("user_id", str(user_id))
            .gte("day", start.isoformat())
            .lte("day", end.isoformat())
            .order("day")
            .execute()
        )
        return [_parse_intake(row) for row in response.data or []]

    def create_intake(
        self, user_id: UUID, day: date, targets: dict[str, float]
    ) -> RecommendedDailyIntake:
        """Insert an intake row unless one exists for the date; return the stored row.

        A concurrent create for the same (user, date) loses the upsert and
        reads back the row that won.
        """
        response = (
            self.client.table("recommended_daily_intakes")
            .upsert(
                {
                    "user_id": str(user_id),
                    "day": day.isoformat(),
                    "targets": targets,
                    "version": 0,
                },
                on_conflict="user_id,day",
                ignore_duplicates=True,
            )
            .execute()
        )
        if response.data:
            return _parse_intake(response.data[0])
        existing = self.get_intake(user_id, day)
        if existing is None:
            raise RuntimeError("Failed to create daily intake")
        return existing

    def save_intake(self, intake: RecommendedDailyIntake) -> RecommendedDailyIntake:
        """Write targets if the stored version still matches."""
        response = (
            self.client.table("recommended_daily_intakes")
            .update({"targets": intake.targets, "version": intake.version + 1})
            .eq("id", str(intake.id))
            .eq("version", intake.version)
            .execute()
        )
        if not response.data:
            raise ConcurrentUpdateConflict(intake.id)
        return _parse_intake(response.data[0])


@dataclass
class SupabaseConsumedMealRepository(ConsumedMealRepository):
    """Supabase implementation for the consumed meal log."""

    client: Client

    def add_consumed_meal(self, consumed: ConsumedMeal) -> ConsumedMeal:
        """Insert a consumed meal row and return it."""
        response = (
            self.client.table("consumed_meals")
            .insert(
                {
                    "intake_id": str(consumed.intake_id),
                    "meal_id": str(consumed.meal_id),
                    "meal_name": consumed.meal_name,
                    "consumed_date": consumed.consumed_date.isoformat(),
                    "consumed_time": consumed.consumed_time.isoformat(),
                    **totals_to_row("total", consumed.totals),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to record consumed meal")
        return _parse_consumed_meal(response.data[0])

    def list_consumed_meals(self, intake_id: UUID) -> list[ConsumedMeal]:
        """Return consumed meals for an intake in consumption order."""
        response = (
            self.client.table("consumed_meals")
            .select("*")
            .eq("intake_id", str(intake_id))
            .order("consumed_time")
            .execute()
        )
        return [_parse_consumed_meal(row) for row in response.data or []]


def _parse_intake(row: dict[str, object]) -> RecommendedDailyIntake:
    return RecommendedDailyIntake(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        day=date.fromisoformat(str(row["day"])),
        targets={
            name: float(value) for name, value in (row.get("targets") or {}).items()
        },
        version=int(row.get("version") or 0),
    )


def _parse_consumed_meal(row: dict[str, object]) -> ConsumedMeal:
    return ConsumedMeal(
        id=UUID(str(row["id"])),
        intake_id=UUID(str(row["intake_id"])),
        meal_id=UUID(str(row["meal_id"])),
        meal_name=str(row["meal_name"]),
        totals=totals_from_row("total", row),
        consumed_date=date.fromisoformat(str(row["consumed_date"])),
        consumed_time=time.fromisoformat(str(row["consumed_time"])),
    )
