"""Tests for the food log service."""

from datetime import UTC, date, datetime, timedelta

from nutrimom.domain.comparison import ReportStatus
from nutrimom.adapters.memory_food_log_repository import InMemoryFoodLogRepository
from nutrimom.services.food_log import FoodLogService
from tests.conftest import chicken_analysis

DAY = date(2026, 3, 14)
NOON = datetime(2026, 3, 14, 12, 0, tzinfo=UTC)


def test_add_meal_stores_under_day(
    food_log_service: FoodLogService,
    food_log_repository: InMemoryFoodLogRepository,
) -> None:
    entry = food_log_service.add_meal(chicken_analysis(), NOON)
    meals = food_log_repository.list_meals(DAY)

    assert entry.id == "chicken-1"
    assert [meal.id for meal in meals] == ["chicken-1"]


def test_add_meal_uses_analysis_timestamp_for_day(
    food_log_service: FoodLogService,
    food_log_repository: InMemoryFoodLogRepository,
) -> None:
    eaten = NOON - timedelta(days=1)

    food_log_service.add_meal(chicken_analysis(timestamp=eaten), NOON)

    assert len(food_log_repository.list_meals(DAY - timedelta(days=1))) == 1
    assert food_log_repository.list_meals(DAY) == []


def test_remove_meal(food_log_service: FoodLogService) -> None:
    food_log_service.add_meal(chicken_analysis("a"), NOON)
    food_log_service.add_meal(chicken_analysis("b"), NOON)

    assert food_log_service.remove_meal(DAY, "a") is True
    assert food_log_service.remove_meal(DAY, "missing") is False
    assert [meal.id for meal in food_log_service.get_daily_log(DAY).meals] == ["b"]


def test_get_log_range_includes_empty_days(food_log_service: FoodLogService) -> None:
    food_log_service.add_meal(chicken_analysis(), NOON)

    logs = food_log_service.get_log_range(DAY - timedelta(days=2), DAY)

    assert [log.day for log in logs] == [
        DAY - timedelta(days=2),
        DAY - timedelta(days=1),
        DAY,
    ]
    assert logs[0].totals["energy_kcal"] == 0
    assert logs[-1].totals["energy_kcal"] == 231


def test_get_log_range_with_reversed_dates_is_empty(
    food_log_service: FoodLogService,
) -> None:
    assert food_log_service.get_log_range(DAY, DAY - timedelta(days=1)) == []


def test_daily_summary(
    food_log_service: FoodLogService, plan_service, female_profile
) -> None:
    targets = plan_service.build_plan(female_profile).targets
    food_log_service.add_meal(chicken_analysis("a"), NOON)
    food_log_service.add_meal(chicken_analysis("b"), NOON)

    summary = food_log_service.daily_summary(targets, DAY)

    assert summary.day == DAY
    assert summary.meals_logged == 2
    assert summary.total_calories == 462
    assert summary.macro_breakdown["protein_g"] == 87
    assert "protein_g" in summary.nutrients_met
    assert "iron_mg" in summary.nutrients_deficit
    assert summary.status == ReportStatus.DEFICIT
    assert summary.pregnancy_notes == ["Excellent lean protein source"]
    assert any(item.nutrient == "iron_mg" for item in summary.recommendations)


def test_daily_summary_for_empty_day(
    food_log_service: FoodLogService, plan_service, female_profile
) -> None:
    targets = plan_service.build_plan(female_profile).targets

    summary = food_log_service.daily_summary(targets, DAY)

    assert summary.meals_logged == 0
    assert summary.total_calories == 0
    assert summary.pregnancy_notes == []
