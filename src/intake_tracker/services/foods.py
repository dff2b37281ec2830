"""Food item import from USDA FoodData Central."""

import asyncio
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, TypeVar
from uuid import UUID, uuid4

from intake_tracker.adapters.fdc_client import FdcClient
from intake_tracker.domain.foods import FoodItem, FoodSummary
from intake_tracker.domain.nutrients import (
    CARBOHYDRATES,
    ENERGY,
    FAT,
    MONOUNSATURATED_FAT,
    POLYUNSATURATED_FAT,
    PROTEIN,
    SATURATED_FAT,
    NutrientFact,
)
from intake_tracker.services.cache import Cache

# FDC nutrient ids mapped to the names the aggregator matches on.
_CANONICAL_NAMES = {
    1008: ENERGY,
    1003: PROTEIN,
    1004: FAT,
    1005: CARBOHYDRATES,
    1258: SATURATED_FAT,
    2000: "Total Sugars",
    1292: MONOUNSATURATED_FAT,
    1293: POLYUNSATURATED_FAT,
}

_logger = logging.getLogger(__name__)
_T = TypeVar("_T")

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable


class FoodItemRepository(Protocol):
    """Persistence interface for food items and their nutrient facts."""

    def get_food_item(self, food_item_id: UUID) -> FoodItem | None:
        """Return a food item by id."""

    def find_by_fdc_id(self, fdc_id: int) -> FoodItem | None:
        """Return a food item imported from an FDC id."""

    def create_food_item(self, food_item: FoodItem) -> FoodItem:
        """Persist a food item with its nutrient facts."""


@dataclass
class FoodImportService:
    """Service that searches FDC and imports foods with nutrient facts."""

    fdc_client: FdcClient
    repository: FoodItemRepository
    cache: Cache
    search_ttl_seconds: int = 3600
    retry_attempts: int = 1
    retry_delay_seconds: float = 0.3

    async def search(self, query: str, limit: int = 5) -> list[FoodSummary]:
        """Search FDC foods with caching."""
        cache_key = f"fdc:search:{query.lower()}:{limit}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, list):
            return cached

        payload = await self._call_with_retry(
            lambda: self.fdc_client.search_foods(query, page_size=limit),
            action="search",
        )
        foods = [_parse_summary(food) for food in payload.get("foods", [])]
        self.cache.set(cache_key, foods, ttl_seconds=self.search_ttl_seconds)
        return foods

    async def import_food(self, fdc_id: int) -> FoodItem:
        """Return the stored food for an FDC id, importing it on first use."""
        existing = self.repository.find_by_fdc_id(fdc_id)
        if existing is not None:
            return existing

        payload = await self._call_with_retry(
            lambda: self.fdc_client.get_food(fdc_id),
            action=f"get_food:{fdc_id}",
        )
        return self._store(payload)

    async def import_foods(self, fdc_ids: list[int]) -> list[FoodItem]:
        """Import several FDC foods, fetching only ids not stored yet."""
        stored: dict[int, FoodItem] = {}
        missing: list[int] = []
        for fdc_id in dict.fromkeys(fdc_ids):
            existing = self.repository.find_by_fdc_id(fdc_id)
            if existing is None:
                missing.append(fdc_id)
            else:
                stored[fdc_id] = existing
        if missing:
            payloads = await self._call_with_retry(
                lambda: self.fdc_client.get_foods(missing),
                action=f"get_foods:{len(missing)}",
            )
            for payload in payloads:
                created = self._store(payload)
                if created.fdc_id is not None:
                    stored[created.fdc_id] = created
        return [stored[fdc_id] for fdc_id in fdc_ids if fdc_id in stored]

    def _store(self, payload: dict[str, object]) -> FoodItem:
        food_item = FoodItem(
            id=uuid4(),
            name=str(payload.get("description", "")),
            nutrients=parse_nutrient_facts(payload.get("foodNutrients", [])),
            gram_weight=_serving_grams(payload),
            portion_description=payload.get("householdServingFullText"),
            fdc_id=int(payload["fdcId"]),
        )
        created = self.repository.create_food_item(food_item)
        _logger.info(
            "Imported FDC food %s as %s with %s nutrients",
            food_item.fdc_id,
            created.id,
            len(created.nutrients),
        )
        return created

    async def _call_with_retry(
        self, func: "Callable[[], Awaitable[_T]]", *, action: str
    ) -> _T:
        """Call an async function with a short retry."""
        attempt = 0
        while True:
            try:
                return await func()
            except Exception as exc:
                attempt += 1
                _logger.warning(
                    "FDC %s failed (attempt %s/%s, status=%s): %s",
                    action,
                    attempt,
                    self.retry_attempts + 1,
                    _status_code_from_exception(exc),
                    exc,
                )
                if attempt > self.retry_attempts:
                    raise
                await asyncio.sleep(self.retry_delay_seconds)


def parse_nutrient_facts(food_nutrients: list[dict[str, object]]) -> list[NutrientFact]:
    """Convert FDC ``foodNutrients`` entries into nutrient facts.

    Both the search (flat) and the detail (nested ``nutrient``) payload shapes
    are accepted. Energy reported in kJ is dropped in favour of kcal.
    """
    facts: list[NutrientFact] = []
    for entry in food_nutrients:
        info = entry.get("nutrient") or {}
        nutrient_id = info.get("id") or entry.get("nutrientId")
        name = info.get("name") or entry.get("nutrientName")
        unit = str(info.get("unitName") or entry.get("unitName") or "")
        if nutrient_id is None and name is None:
            continue
        if unit.lower() == "kj":
            continue
        amount = entry.get("amount", entry.get("value"))
        facts.append(
            NutrientFact(
                name=_CANONICAL_NAMES.get(nutrient_id, str(name)),
                value=float(amount) if isinstance(amount, int | float) else None,
                unit=unit.lower() if unit in {"KCAL", "G", "MG", "UG"} else unit,
                nutrient_id=int(nutrient_id) if nutrient_id is not None else None,
            )
        )
    return facts


def _parse_summary(food: dict[str, object]) -> FoodSummary:
    return FoodSummary(
        fdc_id=int(food["fdcId"]),
        description=str(food.get("description", "")),
        brand_owner=food.get("brandOwner"),
        brand_name=food.get("brandName"),
        data_type=food.get("dataType"),
    )


def _serving_grams(payload: dict[str, object]) -> float | None:
    size = payload.get("servingSize")
    unit = str(payload.get("servingSizeUnit") or "g").lower()
    if isinstance(size, int | float) and unit in {"g", "grm"}:
        return float(size)
    return None


def _status_code_from_exception(exc: Exception) -> str:
    """Extract HTTP status code from an exception, if available."""
    response = getattr(exc, "response", None)
    status_code = getattr(response, "status_code", None)
    if isinstance(status_code, int):
        return str(status_code)
    return "n/a"
