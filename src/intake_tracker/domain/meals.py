"""Domain models for meals and consumption snapshots."""

from dataclasses import dataclass, field
from datetime import date, time
from uuid import UUID

from intake_tracker.aggregation import meal_totals
from intake_tracker.domain.foods import MealIngredient
from intake_tracker.domain.nutrients import MacroTotals


@dataclass
class Meal:
    """Meal aggregate owning its ingredients.

    ``totals`` is a cached view of the ingredient list. Every mutation method
    recomputes it, so code that edits ``ingredients`` directly must call
    ``recompute_totals`` afterwards.
    """

    id: UUID
    name: str
    ingredients: list[MealIngredient] = field(default_factory=list)
    totals: MacroTotals = field(default_factory=MacroTotals)
    food_items_label: str = ""

    def recompute_totals(self) -> MacroTotals:
        """Refresh the cached totals from the current ingredients."""
        self.totals = meal_totals(self.ingredients)
        self.food_items_label = ", ".join(
            sorted({ingredient.food_item.name for ingredient in self.ingredients})
        )
        return self.totals

    def add_ingredient(self, ingredient: MealIngredient) -> None:
        """Append an ingredient and refresh totals."""
        self.ingredients.append(ingredient)
        self.recompute_totals()

    def add_ingredients(self, ingredients: list[MealIngredient]) -> None:
        """Append several ingredients and refresh totals once."""
        self.ingredients.extend(ingredients)
        self.recompute_totals()

    def remove_ingredient(self, food_item_id: UUID) -> bool:
        """Remove every ingredient for a food item; return True if any matched."""
        remaining = [
            ingredient
            for ingredient in self.ingredients
            if ingredient.food_item.id != food_item_id
        ]
        removed = len(remaining) != len(self.ingredients)
        self.ingredients = remaining
        self.recompute_totals()
        return removed

    def replace_ingredients(self, ingredients: list[MealIngredient]) -> None:
        """Replace the ingredient list and refresh totals."""
        self.ingredients = list(ingredients)
        self.recompute_totals()

    def update_quantity(self, food_item_id: UUID, quantity_grams: float) -> bool:
        """Set the grams of a food item's ingredients; return True if any matched."""
        updated = False
        ingredients: list[MealIngredient] = []
        for ingredient in self.ingredients:
            if ingredient.food_item.id == food_item_id:
                ingredient = MealIngredient(ingredient.food_item, quantity_grams)
                updated = True
            ingredients.append(ingredient)
        self.ingredients = ingredients
        self.recompute_totals()
        return updated


@dataclass(frozen=True)
class ConsumedMeal:
    """Immutable snapshot of a meal applied against a daily intake."""

    id: UUID | None
    intake_id: UUID
    meal_id: UUID
    meal_name: str
    totals: MacroTotals
    consumed_date: date
    consumed_time: time
