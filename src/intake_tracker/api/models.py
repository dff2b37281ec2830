"""Pydantic models for API request payloads."""

from datetime import date
from uuid import UUID

from pydantic import BaseModel, Field

from intake_tracker.domain.profiles import ActivityLevel, Gender, Goal


class ConsumeMealRequest(BaseModel):
    """Meal consumed against a daily intake."""

    meal_id: UUID


class IngredientRequest(BaseModel):
    """Food item quantity for a meal."""

    food_item_id: UUID
    quantity_grams: float = Field(ge=0)


class QuantityRequest(BaseModel):
    """New quantity for an ingredient already in a meal."""

    quantity_grams: float = Field(ge=0)


class ProfileRequest(BaseModel):
    """Biometric profile fields; omitted fields are stored as unknown."""

    weight_kg: float | None = Field(default=None, gt=0)
    height_cm: float | None = Field(default=None, gt=0)
    age: int | None = Field(default=None, ge=0)
    gender: Gender | None = None
    activity_level: ActivityLevel | None = None
    goal: Goal | None = None


class FoodImportRequest(BaseModel):
    """FoodData Central ids to import."""

    fdc_ids: list[int] = Field(min_length=1)


class IngredientsRequest(BaseModel):
    """Full ingredient list for a meal."""

    ingredients: list[IngredientRequest]


class DietDayRequest(BaseModel):
    """Day appended to a diet plan; meal ids may repeat."""

    label: str = Field(min_length=1)
    meal_ids: list[UUID]
    day_date: date | None = None
