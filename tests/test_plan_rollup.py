"""Tests for diet plan rollups."""

from uuid import uuid4

import pytest

from intake_tracker.domain.diets import DietDay, DietPlan
from intake_tracker.domain.errors import (
    DietDayNotFoundError,
    DietPlanNotFoundError,
    MealNotFoundError,
)
from intake_tracker.domain.nutrients import ENERGY, PROTEIN
from intake_tracker.services.plan_rollup import PlanRollupService, recompute_totals
from tests.conftest import energy_meal, make_food_item, make_meal


def _day(*kcal: float) -> DietDay:
    meals = [energy_meal(value) for value in kcal]
    return DietDay(id=uuid4(), label="day", meals=meals)


def test_recompute_without_days_clears_averages() -> None:
    plan = DietPlan(id=uuid4(), name="Empty")

    recompute_totals(plan)

    assert plan.totals.calories == 0
    assert plan.averages is None


def test_recompute_averages_days() -> None:
    plan = DietPlan(id=uuid4(), name="Two days", days=[_day(2000), _day(1200, 1000)])

    recompute_totals(plan)

    assert plan.totals.calories == pytest.approx(4200)
    assert plan.averages is not None
    assert plan.averages.calories == 2100


def test_averages_are_rounded_to_one_decimal() -> None:
    food = make_food_item("Lentils", energy=100, protein=10)
    plan = DietPlan(
        id=uuid4(),
        name="Odd",
        days=[
            DietDay(id=uuid4(), label="a", meals=[make_meal("a", (food, 100))]),
            DietDay(id=uuid4(), label="b", meals=[make_meal("b", (food, 100))]),
            DietDay(id=uuid4(), label="c", meals=[make_meal("c", (food, 101))]),
        ],
    )

    recompute_totals(plan)

    assert plan.averages.protein == 10.0
    assert plan.averages.calories == 100.3


def test_service_refresh_persists(plan_repository, meal_repository) -> None:
    plan = plan_repository.add(DietPlan(id=uuid4(), name="Week", days=[_day(1800)]))
    service = PlanRollupService(plan_repository, meal_repository)

    refreshed = service.refresh(plan.id)

    assert refreshed.totals.calories == pytest.approx(1800)
    assert plan_repository.saved == [plan.id]


def test_adding_and_removing_days_updates_cache(
    plan_repository, meal_repository
) -> None:
    plan = plan_repository.add(DietPlan(id=uuid4(), name="Week"))
    service = PlanRollupService(plan_repository, meal_repository)
    breakfast = meal_repository.add(energy_meal(600))
    dinner = meal_repository.add(energy_meal(1400))

    service.add_day(plan.id, "Mon", [breakfast.id, dinner.id])
    updated = service.add_day(plan.id, "Tue", [dinner.id, breakfast.id, breakfast.id])
    assert updated.averages.calories == 2300
    assert plan_repository.saved == [plan.id, plan.id]

    first = updated.days[0]
    trimmed = service.remove_day(plan.id, first.id)
    assert trimmed.averages.calories == 2600
    assert trimmed.totals.calories == pytest.approx(2600)

    emptied = service.remove_day(plan.id, trimmed.days[0].id)
    assert emptied.averages is None


def test_add_day_with_unknown_meal(plan_repository, meal_repository) -> None:
    plan = plan_repository.add(DietPlan(id=uuid4(), name="Week"))
    service = PlanRollupService(plan_repository, meal_repository)

    with pytest.raises(MealNotFoundError):
        service.add_day(plan.id, "Mon", [uuid4()])
    assert plan_repository.saved == []


def test_remove_unknown_day(plan_repository, meal_repository) -> None:
    plan = plan_repository.add(DietPlan(id=uuid4(), name="Week", days=[_day(1800)]))

    with pytest.raises(DietDayNotFoundError):
        PlanRollupService(plan_repository, meal_repository).remove_day(
            plan.id, uuid4()
        )


def test_day_nutrients_cover_every_meal_of_the_day(
    plan_repository, meal_repository
) -> None:
    eggs = make_food_item("Egg", energy=143, protein=12.6)
    breakfast = make_meal("Eggs", (eggs, 100))
    day = DietDay(id=uuid4(), label="Mon", meals=[breakfast, breakfast])
    plan = plan_repository.add(DietPlan(id=uuid4(), name="Eggs", days=[day]))
    service = PlanRollupService(plan_repository, meal_repository)

    breakdown = service.day_nutrients(plan.id, day.id)

    assert breakdown[ENERGY].value == pytest.approx(286)
    assert breakdown[PROTEIN].value == pytest.approx(25.2)
    with pytest.raises(DietDayNotFoundError):
        service.day_nutrients(plan.id, uuid4())


def test_unknown_plan(plan_repository, meal_repository) -> None:
    with pytest.raises(DietPlanNotFoundError):
        PlanRollupService(plan_repository, meal_repository).refresh(uuid4())


def test_shopping_list(plan_repository, meal_repository) -> None:
    oats = make_food_item("Oats", energy=389)
    breakfast = make_meal("Porridge", (oats, 60))
    plan = plan_repository.add(
        DietPlan(
            id=uuid4(),
            name="Oats",
            days=[
                DietDay(id=uuid4(), label="Mon", meals=[breakfast]),
                DietDay(id=uuid4(), label="Tue", meals=[breakfast, breakfast]),
            ],
        )
    )

    service = PlanRollupService(plan_repository, meal_repository)

    assert service.shopping_list(plan.id) == {oats.id: 180}
