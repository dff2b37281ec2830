"""Domain models for food items and meal ingredients."""

from dataclasses import dataclass, field
from uuid import UUID

from intake_tracker.domain.nutrients import NutrientFact


@dataclass(frozen=True)
class FoodItem:
    """Food item with nutrient facts per 100 g."""

    id: UUID
    name: str
    nutrients: list[NutrientFact] = field(default_factory=list)
    gram_weight: float | None = None
    portion_description: str | None = None
    fdc_id: int | None = None


@dataclass(frozen=True)
class FoodSummary:
    """Search result from FoodData Central."""

    fdc_id: int
    description: str
    brand_owner: str | None
    brand_name: str | None
    data_type: str | None


@dataclass(frozen=True)
class MealIngredient:
    """Quantity of a food item used in a meal."""

    food_item: FoodItem
    quantity_grams: float

    def __post_init__(self) -> None:
        if self.quantity_grams < 0:
            raise ValueError(
                f"Ingredient quantity must be >= 0, got {self.quantity_grams}"
            )
