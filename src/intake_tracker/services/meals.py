"""Meal nutrient lookups and ingredient edits."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from intake_tracker.aggregation import meal_nutrients, per_food_item_nutrients
from intake_tracker.domain.errors import FoodItemNotFoundError, MealNotFoundError
from intake_tracker.domain.foods import MealIngredient
from intake_tracker.domain.meals import Meal
from intake_tracker.domain.nutrients import MacroTotals, NutrientAmount
from intake_tracker.services.foods import FoodItemRepository

_logger = logging.getLogger(__name__)


class MealRepository(Protocol):
    """Persistence interface for meals."""

    def get_meal(self, meal_id: UUID) -> Meal | None:
        """Return a meal with its ingredients and food items."""

    def save_meal(self, meal: Meal) -> None:
        """Persist a meal's ingredients and cached totals."""


@dataclass
class MealService:
    """Service for meal nutrients and recompute-on-write ingredient edits."""

    repository: MealRepository
    food_repository: FoodItemRepository

    def get_meal(self, meal_id: UUID) -> Meal:
        """Return a meal or raise MealNotFoundError."""
        meal = self.repository.get_meal(meal_id)
        if meal is None:
            raise MealNotFoundError(meal_id)
        return meal

    def nutrients(self, meal_id: UUID) -> dict[str, NutrientAmount]:
        """Return the full nutrient breakdown of a meal."""
        return meal_nutrients(self.get_meal(meal_id).ingredients)

    def nutrients_per_food_item(
        self, meal_id: UUID
    ) -> dict[UUID, dict[str, NutrientAmount]]:
        """Return nutrient breakdowns per food item of a meal."""
        return per_food_item_nutrients(self.get_meal(meal_id).ingredients)

    def totals(self, meal_id: UUID) -> MacroTotals:
        """Return macro totals computed from the meal's ingredients."""
        meal = self.get_meal(meal_id)
        return meal.recompute_totals()

    def add_ingredient(
        self, meal_id: UUID, food_item_id: UUID, quantity_grams: float
    ) -> Meal:
        """Add a food item to a meal and persist refreshed totals."""
        meal = self.get_meal(meal_id)
        food_item = self.food_repository.get_food_item(food_item_id)
        if food_item is None:
            raise FoodItemNotFoundError(food_item_id)
        meal.add_ingredient(MealIngredient(food_item, quantity_grams))
        self.repository.save_meal(meal)
        _logger.info("Added food item %s to meal %s", food_item_id, meal_id)
        return meal

    def remove_ingredient(self, meal_id: UUID, food_item_id: UUID) -> Meal:
        """Remove a food item from a meal and persist refreshed totals."""
        meal = self.get_meal(meal_id)
        if not meal.remove_ingredient(food_item_id):
            raise FoodItemNotFoundError(food_item_id)
        self.repository.save_meal(meal)
        return meal

    def update_quantity(
        self, meal_id: UUID, food_item_id: UUID, quantity_grams: float
    ) -> Meal:
        """Change the grams of a food item in a meal and persist totals."""
        meal = self.get_meal(meal_id)
        if not meal.update_quantity(food_item_id, quantity_grams):
            raise FoodItemNotFoundError(food_item_id)
        self.repository.save_meal(meal)
        return meal

    def replace_ingredients(
        self, meal_id: UUID, quantities: list[tuple[UUID, float]]
    ) -> Meal:
        """Replace a meal's ingredients with (food item id, grams) pairs.

        Every food item is resolved before the meal changes, so an unknown id
        leaves the stored meal untouched.
        """
        meal = self.get_meal(meal_id)
        ingredients: list[MealIngredient] = []
        for food_item_id, quantity_grams in quantities:
            food_item = self.food_repository.get_food_item(food_item_id)
            if food_item is None:
                raise FoodItemNotFoundError(food_item_id)
            ingredients.append(MealIngredient(food_item, quantity_grams))
        meal.replace_ingredients(ingredients)
        self.repository.save_meal(meal)
        _logger.info("Replaced meal %s with %s ingredients", meal_id, len(ingredients))
        return meal
