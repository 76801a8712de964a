"""Food log service."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Protocol
from zoneinfo import ZoneInfo

from nutrimom.domain.comparison import ReportStatus
from nutrimom.domain.food_log import (
    DailyLog,
    MealAnalysis,
    MealEntry,
    build_daily_log,
    meal_entry,
)
from nutrimom.domain.recommendations import Recommendation
from nutrimom.domain.targets import EnrichedTarget
from nutrimom.services.comparison import ComparisonService

MACRO_CODES: tuple[str, ...] = ("protein_g", "carbs_g", "fat_g", "fiber_g")

_logger = logging.getLogger(__name__)


class FoodLogRepository(Protocol):
    """Persistence interface for logged meals."""

    def list_meals(self, day: date) -> list[MealEntry]:
        """Return meals logged on a day in logging order."""

    def add_meal(self, day: date, meal: MealEntry) -> None:
        """Store a meal under a day."""

    def remove_meal(self, day: date, meal_id: str) -> bool:
        """Remove a meal and return whether it existed."""


@dataclass
class DailySummary:
    """Digest of a day's log compared against plan targets."""

    day: date
    meals_logged: int
    total_calories: float
    macro_breakdown: dict[str, float]
    status: ReportStatus
    nutrients_met: list[str] = field(default_factory=list)
    nutrients_deficit: list[str] = field(default_factory=list)
    nutrients_exceeded: list[str] = field(default_factory=list)
    pregnancy_notes: list[str] = field(default_factory=list)
    recommendations: list[Recommendation] = field(default_factory=list)


@dataclass
class FoodLogService:
    """Service for logging meals per day in a user's timezone."""

    repository: FoodLogRepository
    comparison_service: ComparisonService
    timezone_name: str = "UTC"
    debug: bool = False

    def today(self) -> date:
        """Return the current date in the configured timezone."""
        return datetime.now(tz=ZoneInfo(self.timezone_name)).date()

    def add_meal(
        self, analysis: MealAnalysis, logged_at: datetime | None = None
    ) -> MealEntry:
        """Store a meal analysis under the day it was eaten."""
        tz = ZoneInfo(self.timezone_name)
        entry = meal_entry(analysis, logged_at or datetime.now(tz=tz))
        day = entry.logged_at.astimezone(tz).date()
        self.repository.add_meal(day, entry)
        if self.debug:
            _logger.info(
                "Meal logged: id=%s day=%s items=%s",
                entry.id,
                day,
                len(entry.food_items),
            )
        return entry

    def remove_meal(self, day: date, meal_id: str) -> bool:
        """Remove a meal from a day's log."""
        return self.repository.remove_meal(day, meal_id)

    def get_daily_log(self, day: date | None = None) -> DailyLog:
        """Return a day's log with summed intake."""
        resolved_day = day or self.today()
        return build_daily_log(resolved_day, self.repository.list_meals(resolved_day))

    def get_log_range(self, start: date, end: date) -> list[DailyLog]:
        """Return one log per day from start to end inclusive."""
        days = (end - start).days + 1
        return [
            self.get_daily_log(start + timedelta(days=offset))
            for offset in range(max(days, 0))
        ]

    def daily_summary(
        self, targets: Mapping[str, EnrichedTarget], day: date | None = None
    ) -> DailySummary:
        """Summarize a day's intake against targets."""
        log = self.get_daily_log(day)
        assessment = self.comparison_service.assess(targets, log.totals, log.day)
        report = assessment.report

        notes: list[str] = []
        for meal in log.meals:
            for note in meal.pregnancy_notes:
                if note not in notes:
                    notes.append(note)

        return DailySummary(
            day=log.day,
            meals_logged=len(log.meals),
            total_calories=log.totals.get("energy_kcal", 0.0),
            macro_breakdown={code: log.totals.get(code, 0.0) for code in MACRO_CODES},
            status=report.status,
            nutrients_met=list(report.summary.met),
            nutrients_deficit=list(report.summary.deficit),
            nutrients_exceeded=list(report.summary.exceeded),
            pregnancy_notes=notes,
            recommendations=assessment.recommendations,
        )
