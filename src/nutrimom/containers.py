"""Dependency container wiring for the application."""

from dataclasses import dataclass

from nutrimom.adapters.json_reference_data import load_reference_data
from nutrimom.adapters.memory_food_log_repository import InMemoryFoodLogRepository
from nutrimom.config import Settings, resolve_reference_data_dir
from nutrimom.domain.reference import ReferenceData
from nutrimom.services.comparison import ComparisonService
from nutrimom.services.food_log import FoodLogRepository, FoodLogService
from nutrimom.services.plans import NutritionPlanService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    reference: ReferenceData
    plan_service: NutritionPlanService
    comparison_service: ComparisonService
    food_log_service: FoodLogService


def build_container(
    settings: Settings | None = None,
    reference: ReferenceData | None = None,
    food_log_repository: FoodLogRepository | None = None,
) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    resolved_reference = reference or load_reference_data(
        resolve_reference_data_dir(resolved_settings)
    )
    comparison_service = ComparisonService(debug=resolved_settings.debug)
    food_log_service = FoodLogService(
        repository=food_log_repository or InMemoryFoodLogRepository(),
        comparison_service=comparison_service,
        timezone_name=resolved_settings.timezone,
        debug=resolved_settings.debug,
    )
    return AppContainer(
        settings=resolved_settings,
        reference=resolved_reference,
        plan_service=NutritionPlanService(
            resolved_reference, debug=resolved_settings.debug
        ),
        comparison_service=comparison_service,
        food_log_service=food_log_service,
    )
