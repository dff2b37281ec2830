"""Nutrient aggregation across ingredients, meals, days and plans.

Every function here is a pure read over in-memory entities. Nutrient facts are
stored per 100 g, so an ingredient contributes ``value * grams / 100`` for
each fact. Facts without a value contribute nothing.
"""

from collections import defaultdict
from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING
from uuid import UUID

from intake_tracker.domain.foods import MealIngredient
from intake_tracker.domain.nutrients import (
    CARBOHYDRATES,
    ENERGY,
    FAT,
    MONOUNSATURATED_FAT,
    POLYUNSATURATED_FAT,
    PROTEIN,
    SATURATED_FAT,
    UNSATURATED_FAT,
    MacroTotals,
    NutrientAmount,
)

if TYPE_CHECKING:
    from intake_tracker.domain.diets import DietDay
    from intake_tracker.domain.meals import Meal

_SUGAR_NAMES = ("Total Sugars", "Sugars, total")
_UNSATURATED_FAT_NAMES = (
    MONOUNSATURATED_FAT,
    POLYUNSATURATED_FAT,
    UNSATURATED_FAT,
)

_TOTAL_FIELDS: dict[str, str] = {
    ENERGY.lower(): "calories",
    PROTEIN.lower(): "protein",
    CARBOHYDRATES.lower(): "carbs",
    FAT.lower(): "fat",
    SATURATED_FAT.lower(): "saturated_fat",
    **{name.lower(): "sugars" for name in _SUGAR_NAMES},
    **{name.lower(): "unsaturated_fat" for name in _UNSATURATED_FAT_NAMES},
}


def scaled_value(value: float | None, quantity_grams: float) -> float:
    """Scale a per-100 g value to a quantity in grams."""
    if value is None:
        return 0.0
    return value * quantity_grams / 100


def meal_totals(ingredients: Iterable[MealIngredient]) -> MacroTotals:
    """Return macro totals for a list of ingredients."""
    sums: dict[str, float] = defaultdict(float)
    for ingredient in ingredients:
        for fact in ingredient.food_item.nutrients:
            field_name = _TOTAL_FIELDS.get(fact.name.lower())
            if field_name is None or fact.value is None:
                continue
            sums[field_name] += scaled_value(fact.value, ingredient.quantity_grams)
    return MacroTotals(**sums)


def meal_nutrients(
    ingredients: Sequence[MealIngredient],
) -> dict[str, NutrientAmount]:
    """Return the full nutrient breakdown for a list of ingredients."""
    units = _unit_spellings(ingredients)
    breakdown: dict[str, NutrientAmount] = {}
    for ingredient in ingredients:
        _merge_ingredient(breakdown, ingredient, units)
    return breakdown


def per_food_item_nutrients(
    ingredients: Sequence[MealIngredient],
) -> dict[UUID, dict[str, NutrientAmount]]:
    """Return nutrient breakdowns grouped by food item id."""
    units = _unit_spellings(ingredients)
    grouped: dict[UUID, dict[str, NutrientAmount]] = {}
    for ingredient in ingredients:
        breakdown = grouped.setdefault(ingredient.food_item.id, {})
        _merge_ingredient(breakdown, ingredient, units)
    return grouped


def day_totals(meals: Iterable["Meal"]) -> MacroTotals:
    """Sum meal totals for a day; repeated meals count every time."""
    total = MacroTotals()
    for meal in meals:
        total = total + meal_totals(meal.ingredients)
    return total


def day_nutrients(meals: Iterable["Meal"]) -> dict[str, NutrientAmount]:
    """Return the full nutrient breakdown for all meals of a day."""
    ingredients = [ingredient for meal in meals for ingredient in meal.ingredients]
    return meal_nutrients(ingredients)


def plan_totals(days: Iterable["DietDay"]) -> MacroTotals:
    """Sum day totals across a plan."""
    total = MacroTotals()
    for day in days:
        total = total + day_totals(day.meals)
    return total


def plan_averages(days: Sequence["DietDay"]) -> MacroTotals | None:
    """Return per-day averages, or None for a plan without days."""
    if not days:
        return None
    return plan_totals(days).scaled(1 / len(days))


def shopping_list(days: Iterable["DietDay"]) -> dict[UUID, float]:
    """Return total grams needed per food item across a plan."""
    grams: dict[UUID, float] = defaultdict(float)
    for day in days:
        for meal in day.meals:
            for ingredient in meal.ingredients:
                grams[ingredient.food_item.id] += ingredient.quantity_grams
    return dict(grams)


def _unit_spellings(
    ingredients: Iterable[MealIngredient],
) -> dict[str, dict[str, str]]:
    """Map each nutrient name to its units, keyed case-insensitively.

    The first spelling seen for a unit is the one reported.
    """
    units: dict[str, dict[str, str]] = defaultdict(dict)
    for ingredient in ingredients:
        for fact in ingredient.food_item.nutrients:
            if fact.value is not None:
                units[fact.name].setdefault(fact.unit.lower(), fact.unit)
    return dict(units)


def _merge_ingredient(
    breakdown: dict[str, NutrientAmount],
    ingredient: MealIngredient,
    units: dict[str, dict[str, str]],
) -> None:
    for fact in ingredient.food_item.nutrients:
        if fact.value is None:
            continue
        spellings = units[fact.name]
        unit = spellings[fact.unit.lower()]
        key = f"{fact.name} {unit}" if len(spellings) > 1 else fact.name
        value = scaled_value(fact.value, ingredient.quantity_grams)
        existing = breakdown.get(key)
        if existing is not None:
            value += existing.value
        breakdown[key] = NutrientAmount(
            name=key, value=value, unit=unit, nutrient=fact.name
        )
