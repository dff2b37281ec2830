"""Supabase repository for meals, their ingredients and cached totals."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from intake_tracker.adapters.supabase_food_repository import (
    FOOD_ITEM_COLUMNS,
    parse_food_item,
)
from intake_tracker.domain.foods import MealIngredient
from intake_tracker.domain.meals import Meal
from intake_tracker.domain.nutrients import MACRO_FIELDS, MacroTotals
from intake_tracker.services.meals import MealRepository

MEAL_COLUMNS = (
    "id, name, food_items_label, "
    + ", ".join(f"total_{name}" for name in MACRO_FIELDS)
    + ", meal_ingredients(food_item_id, quantity_grams, "
    + f"food_items({FOOD_ITEM_COLUMNS}))"
)


@dataclass
class SupabaseMealRepository(MealRepository):
    """Supabase implementation for meals."""

    client: Client

    def get_meal(self, meal_id: UUID) -> Meal | None:
        """Return a meal with its ingredients, if present."""
        response = (
            self.client.table("meals")
            .select(MEAL_COLUMNS)
            .eq("id", str(meal_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return parse_meal(response.data[0])

    def save_meal(self, meal: Meal) -> None:
        """Update cached totals and replace the ingredient rows."""
        response = (
            self.client.table("meals")
            .update(
                {
                    "name": meal.name,
                    "food_items_label": meal.food_items_label,
                    **totals_to_row("total", meal.totals),
                }
            )
            .eq("id", str(meal.id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update meal")
        self.client.table("meal_ingredients").delete().eq(
            "meal_id", str(meal.id)
        ).execute()
        payload = [
            {
                "meal_id": str(meal.id),
                "food_item_id": str(ingredient.food_item.id),
                "quantity_grams": ingredient.quantity_grams,
            }
            for ingredient in meal.ingredients
        ]
        if payload:
            self.client.table("meal_ingredients").insert(payload).execute()


def totals_to_row(prefix: str, totals: MacroTotals) -> dict[str, float]:
    """Flatten totals into ``<prefix>_<field>`` columns."""
    return {f"{prefix}_{name}": getattr(totals, name) for name in MACRO_FIELDS}


def totals_from_row(prefix: str, row: dict[str, object]) -> MacroTotals:
    """Read ``<prefix>_<field>`` columns into totals; missing columns read as 0."""
    return MacroTotals(
        **{name: float(row.get(f"{prefix}_{name}") or 0) for name in MACRO_FIELDS}
    )


def parse_meal(row: dict[str, object]) -> Meal:
    """Build a Meal from a ``meals`` row with embedded ingredients."""
    ingredients = [
        MealIngredient(
            food_item=parse_food_item(ingredient["food_items"]),
            quantity_grams=float(ingredient["quantity_grams"]),
        )
        for ingredient in row.get("meal_ingredients") or []
    ]
    return Meal(
        id=UUID(str(row["id"])),
        name=str(row["name"]),
        ingredients=ingredients,
        totals=totals_from_row("total", row),
        food_items_label=str(row.get("food_items_label") or ""),
    )
