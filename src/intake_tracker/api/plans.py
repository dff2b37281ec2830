"""Diet plan rollup endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Request, status

from intake_tracker.api.models import DietDayRequest

if TYPE_CHECKING:
    from intake_tracker.containers import AppContainer
    from intake_tracker.domain.diets import DietPlan

router = APIRouter(prefix="/diet-plans", tags=["diet-plans"])


@router.get("/{plan_id}/totals")
async def plan_totals(plan_id: UUID, request: Request) -> dict[str, object]:
    """Return the cached totals and averages of a plan."""
    container: AppContainer = request.app.state.container
    return _plan_figures(container.plan_rollup_service.get_plan(plan_id))


@router.post("/{plan_id}/recompute")
async def recompute_plan(plan_id: UUID, request: Request) -> dict[str, object]:
    """Recompute and store a plan's totals and averages."""
    container: AppContainer = request.app.state.container
    return _plan_figures(container.plan_rollup_service.refresh(plan_id))


@router.get("/{plan_id}/shopping-list")
async def plan_shopping_list(plan_id: UUID, request: Request) -> dict[str, object]:
    """Return grams per food item for the whole plan."""
    container: AppContainer = request.app.state.container
    return {"items": container.plan_rollup_service.shopping_list(plan_id)}


@router.post("/{plan_id}/days", status_code=status.HTTP_201_CREATED)
async def add_plan_day(
    plan_id: UUID, payload: DietDayRequest, request: Request
) -> dict[str, object]:
    """Append a day of stored meals to a plan."""
    container: AppContainer = request.app.state.container
    plan = container.plan_rollup_service.add_day(
        plan_id, payload.label, payload.meal_ids, payload.day_date
    )
    return {**_plan_figures(plan), "day_id": plan.days[-1].id}


@router.delete("/{plan_id}/days/{day_id}")
async def remove_plan_day(
    plan_id: UUID, day_id: UUID, request: Request
) -> dict[str, object]:
    """Remove a day from a plan."""
    container: AppContainer = request.app.state.container
    return _plan_figures(container.plan_rollup_service.remove_day(plan_id, day_id))


@router.get("/{plan_id}/days/{day_id}/nutrients")
async def plan_day_nutrients(
    plan_id: UUID, day_id: UUID, request: Request
) -> dict[str, object]:
    """Return the nutrient breakdown of one plan day."""
    container: AppContainer = request.app.state.container
    return {
        "nutrients": container.plan_rollup_service.day_nutrients(plan_id, day_id)
    }


def _plan_figures(plan: DietPlan) -> dict[str, object]:
    return {
        "id": plan.id,
        "name": plan.name,
        "days": len(plan.days),
        "totals": plan.totals,
        "averages": plan.averages,
    }
