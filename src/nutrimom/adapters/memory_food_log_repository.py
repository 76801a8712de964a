"""Process-local food log repository."""

from datetime import date

from nutrimom.domain.food_log import MealEntry
from nutrimom.services.food_log import FoodLogRepository


class InMemoryFoodLogRepository(FoodLogRepository):
    """Keeps meals per day in memory; contents are lost on restart."""

    _days: dict[date, list[MealEntry]]

    def __init__(self) -> None:
        self._days = {}

    def list_meals(self, day: date) -> list[MealEntry]:
        return list(self._days.get(day, []))

    def add_meal(self, day: date, meal: MealEntry) -> None:
        self._days.setdefault(day, []).append(meal)

    def remove_meal(self, day: date, meal_id: str) -> bool:
        meals = self._days.get(day, [])
        remaining = [meal for meal in meals if meal.id != meal_id]
        if remaining:
            self._days[day] = remaining
        else:
            self._days.pop(day, None)
        return len(remaining) != len(meals)
