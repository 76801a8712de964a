"""Tests for the in-memory food log repository."""

from datetime import UTC, date, datetime

from nutrimom.adapters.memory_food_log_repository import InMemoryFoodLogRepository
from nutrimom.domain.food_log import meal_entry
from tests.conftest import chicken_analysis

DAY = date(2026, 3, 14)
NOON = datetime(2026, 3, 14, 12, 0, tzinfo=UTC)


def test_meals_are_listed_in_logging_order() -> None:
    repository = InMemoryFoodLogRepository()
    repository.add_meal(DAY, meal_entry(chicken_analysis("a"), NOON))
    repository.add_meal(DAY, meal_entry(chicken_analysis("b"), NOON))

    assert [meal.id for meal in repository.list_meals(DAY)] == ["a", "b"]
    assert repository.list_meals(date(2026, 3, 15)) == []


def test_listed_meals_are_a_copy() -> None:
    repository = InMemoryFoodLogRepository()
    repository.add_meal(DAY, meal_entry(chicken_analysis(), NOON))

    repository.list_meals(DAY).clear()

    assert len(repository.list_meals(DAY)) == 1


def test_remove_meal_reports_whether_it_existed() -> None:
    repository = InMemoryFoodLogRepository()
    repository.add_meal(DAY, meal_entry(chicken_analysis("a"), NOON))

    assert repository.remove_meal(DAY, "missing") is False
    assert repository.remove_meal(DAY, "a") is True
    assert repository.list_meals(DAY) == []
    assert repository.remove_meal(date(2026, 1, 1), "a") is False
