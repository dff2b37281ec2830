"""Meal nutrient endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Request, status

from intake_tracker.api.models import (
    IngredientRequest,
    IngredientsRequest,
    QuantityRequest,
)

if TYPE_CHECKING:
    from intake_tracker.containers import AppContainer

router = APIRouter(prefix="/meals", tags=["meals"])


@router.get("/{meal_id}/nutrients")
async def meal_nutrients(meal_id: UUID, request: Request) -> dict[str, object]:
    """Return the nutrient breakdown of a meal."""
    container: AppContainer = request.app.state.container
    return {"nutrients": container.meal_service.nutrients(meal_id)}


@router.get("/{meal_id}/nutrients/per-food-item")
async def meal_nutrients_per_food_item(
    meal_id: UUID, request: Request
) -> dict[str, object]:
    """Return nutrient breakdowns keyed by food item id."""
    container: AppContainer = request.app.state.container
    return {"food_items": container.meal_service.nutrients_per_food_item(meal_id)}


@router.get("/{meal_id}/totals")
async def meal_totals(meal_id: UUID, request: Request) -> dict[str, object]:
    """Return macro totals of a meal."""
    container: AppContainer = request.app.state.container
    return {"totals": container.meal_service.totals(meal_id)}


@router.post("/{meal_id}/ingredients", status_code=status.HTTP_201_CREATED)
async def add_ingredient(
    meal_id: UUID, payload: IngredientRequest, request: Request
) -> dict[str, object]:
    """Add a food item to a meal."""
    container: AppContainer = request.app.state.container
    meal = container.meal_service.add_ingredient(
        meal_id, payload.food_item_id, payload.quantity_grams
    )
    return {"totals": meal.totals}


@router.patch("/{meal_id}/ingredients/{food_item_id}")
async def update_ingredient(
    meal_id: UUID, food_item_id: UUID, payload: QuantityRequest, request: Request
) -> dict[str, object]:
    """Change the grams of a food item in a meal."""
    container: AppContainer = request.app.state.container
    meal = container.meal_service.update_quantity(
        meal_id, food_item_id, payload.quantity_grams
    )
    return {"totals": meal.totals}


@router.delete("/{meal_id}/ingredients/{food_item_id}")
async def remove_ingredient(
    meal_id: UUID, food_item_id: UUID, request: Request
) -> dict[str, object]:
    """Remove a food item from a meal."""
    container: AppContainer = request.app.state.container
    meal = container.meal_service.remove_ingredient(meal_id, food_item_id)
    return {"totals": meal.totals}


@router.put("/{meal_id}/ingredients")
async def replace_ingredients(
    meal_id: UUID, payload: IngredientsRequest, request: Request
) -> dict[str, object]:
    """Replace every ingredient of a meal."""
    container: AppContainer = request.app.state.container
    meal = container.meal_service.replace_ingredients(
        meal_id,
        [(item.food_item_id, item.quantity_grams) for item in payload.ingredients],
    )
    return {"totals": meal.totals}
