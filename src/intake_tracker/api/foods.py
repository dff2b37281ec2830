"""FoodData Central search and import endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Request

from intake_tracker.api.models import FoodImportRequest

if TYPE_CHECKING:
    from intake_tracker.containers import AppContainer

router = APIRouter(prefix="/foods", tags=["foods"])


@router.get("/search")
async def search_foods(
    request: Request, query: str, limit: int = 5
) -> dict[str, object]:
    """Search FoodData Central."""
    container: AppContainer = request.app.state.container
    return {"foods": await container.food_import_service.search(query, limit)}


@router.post("/import")
async def import_foods(
    payload: FoodImportRequest, request: Request
) -> dict[str, object]:
    """Import FoodData Central foods as food items."""
    container: AppContainer = request.app.state.container
    foods = await container.food_import_service.import_foods(payload.fdc_ids)
    return {"food_items": foods}
