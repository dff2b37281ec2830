"""Supabase repository for food items and their nutrient facts."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from intake_tracker.domain.foods import FoodItem
from intake_tracker.domain.nutrients import NutrientFact
from intake_tracker.services.foods import FoodItemRepository

FOOD_ITEM_COLUMNS = "id, name, fdc_id, gram_weight, portion_description, nutrients"


@dataclass
class SupabaseFoodItemRepository(FoodItemRepository):
    """Supabase implementation for food items.

    Nutrient facts live in the ``nutrients`` jsonb column as a list of
    ``{name, value, unit, nutrient_id}`` objects.
    """

    client: Client

    def get_food_item(self, food_item_id: UUID) -> FoodItem | None:
        """Return a food item by id, if present."""
        response = (
            self.client.table("food_items")
            .select(FOOD_ITEM_COLUMNS)
            .eq("id", str(food_item_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return parse_food_item(response.data[0])

    def find_by_fdc_id(self, fdc_id: int) -> FoodItem | None:
        """Return the food item imported from an FDC id, if present."""
        response = (
            self.client.table("food_items")
            .select(FOOD_ITEM_COLUMNS)
            .eq("fdc_id", fdc_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return parse_food_item(response.data[0])

    def create_food_item(self, food_item: FoodItem) -> FoodItem:
        """Insert a food item and return the stored row."""
        response = (
            self.client.table("food_items")
            .insert(
                {
                    "id": str(food_item.id),
                    "name": food_item.name,
                    "fdc_id": food_item.fdc_id,
                    "gram_weight": food_item.gram_weight,
                    "portion_description": food_item.portion_description,
                    "nutrients": [
                        {
                            "name": fact.name,
                            "value": fact.value,
                            "unit": fact.unit,
                            "nutrient_id": fact.nutrient_id,
                        }
                        for fact in food_item.nutrients
                    ],
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create food item")
        return parse_food_item(response.data[0])


def parse_food_item(row: dict[str, object]) -> FoodItem:
    """Build a FoodItem from a ``food_items`` row."""
    return FoodItem(
        id=UUID(str(row["id"])),
        name=str(row["name"]),
        nutrients=[
            NutrientFact(
                name=str(fact["name"]),
                value=float(fact["value"]) if fact.get("value") is not None else None,
                unit=str(fact.get("unit") or ""),
                nutrient_id=fact.get("nutrient_id"),
            )
            for fact in row.get("nutrients") or []
        ],
        gram_weight=float(row["gram_weight"])
        if row.get("gram_weight") is not None
        else None,
        portion_description=row.get("portion_description"),
        fdc_id=row.get("fdc_id"),
    )
