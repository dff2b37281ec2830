"""Profile, daily intake and consumption endpoints."""

from __future__ import annotations

from datetime import UTC, date, datetime
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Request

from intake_tracker.api.models import ConsumeMealRequest, ProfileRequest
from intake_tracker.domain.intake import IntakeScope
from intake_tracker.domain.profiles import UserProfile

if TYPE_CHECKING:
    from intake_tracker.containers import AppContainer

router = APIRouter(prefix="/users", tags=["intake"])


@router.put("/{user_id}/profile")
async def update_profile(
    user_id: UUID, payload: ProfileRequest, request: Request
) -> dict[str, object]:
    """Create or replace a user's biometric profile."""
    container: AppContainer = request.app.state.container
    profile = container.profile_service.update_profile(
        UserProfile(user_id=user_id, **payload.model_dump())
    )
    return {"profile": profile, "missing_fields": profile.missing_fields()}


@router.get("/{user_id}/targets")
async def preview_targets(user_id: UUID, request: Request) -> dict[str, object]:
    """Return the daily targets a new intake would start from."""
    container: AppContainer = request.app.state.container
    return {"targets": container.profile_service.preview_targets(user_id)}


@router.post("/{user_id}/intakes/{day}")
async def get_or_create_intake(
    user_id: UUID, day: date, request: Request
) -> dict[str, object]:
    """Return the intake for a date, creating it on first request."""
    container: AppContainer = request.app.state.container
    intake = container.ledger.get_or_create_intake(user_id, day)
    return {"id": intake.id, "day": intake.day, "targets": intake.targets}


@router.post("/{user_id}/intakes/{day}/consume")
async def consume_meal(
    user_id: UUID, day: date, payload: ConsumeMealRequest, request: Request
) -> dict[str, object]:
    """Subtract a meal from the intake of a date."""
    container: AppContainer = request.app.state.container
    remaining = container.ledger.consume(user_id, payload.meal_id, day)
    return {"day": day, "remaining": remaining}


@router.get("/{user_id}/intakes/{day}/consumed-meals")
async def consumed_meals(
    user_id: UUID, day: date, request: Request
) -> dict[str, object]:
    """Return meals consumed on a date."""
    container: AppContainer = request.app.state.container
    return {"consumed_meals": container.ledger.consumed_meals_for(user_id, day)}


@router.get("/{user_id}/intake/{scope}")
async def cumulative_intake(
    user_id: UUID,
    scope: IntakeScope,
    request: Request,
    reference_day: date | None = None,
    projected: bool = False,
) -> dict[str, object]:
    """Return remaining intake summed over the week or month of a date."""
    container: AppContainer = request.app.state.container
    resolved_day = reference_day or datetime.now(tz=UTC).date()
    if projected:
        totals = container.ledger.projected_intake(user_id, scope, resolved_day)
    else:
        totals = container.ledger.cumulative(user_id, scope, resolved_day)
    return {
        "scope": scope,
        "reference_day": resolved_day,
        "projected": projected,
        "totals": totals,
    }
