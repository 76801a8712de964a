"""Shared test fixtures."""

import logging

import pytest

from nutrimom.adapters.json_reference_data import build_reference_data
from nutrimom.adapters.memory_food_log_repository import InMemoryFoodLogRepository
from nutrimom.config import Settings
from nutrimom.containers import AppContainer, build_container
from nutrimom.domain.food_log import MealAnalysis
from nutrimom.domain.models import Sex, UserProfile
from nutrimom.domain.reference import ReferenceData
from nutrimom.services.comparison import ComparisonService
from nutrimom.services.food_log import FoodLogService
from nutrimom.services.plans import NutritionPlanService


def _nutrient(code: str, name: str, category: str, unit: str, **extra) -> dict:
    return {"code": code, "name": name, "category": category, "unit": unit, **extra}


def reference_tables() -> dict[str, object]:
    """Return a small set of decoded reference tables."""
    nonpregnant = {
        "energy_kcal": {"AI": 2000, "unit": "kcal"},
        "protein_g": {"RDA": 46, "unit": "g"},
        "fat_g": {"AMDR_MIN": 44, "AMDR_MAX": 78, "unit": "g"},
        "iron_mg": {"RDA": 18, "UL": 45, "unit": "mg"},
        "calcium_mg": {"RDA": 1000, "UL": 2500, "unit": "mg"},
        "folate_dfe_ug": {"RDA": 400, "UL": 1000, "unit": "ug"},
        "vitamin_d_ug": {"RDA": 15, "UL": 100, "unit": "ug"},
        "dha_mg": {"MIN": 200, "unit": "mg"},
    }
    pregnant = {
        **nonpregnant,
        "protein_g": {"RDA": 71, "unit": "g"},
        "iron_mg": {"RDA": 27, "UL": 45, "unit": "mg"},
        "folate_dfe_ug": {"RDA": 600, "UL": 1000, "unit": "ug"},
        "choline_mg": {"AI": 450, "UL": 3500, "unit": "mg"},
    }
    return {
        "nutrients": [
            _nutrient("energy_kcal", "Energy", "macro", "kcal"),
            _nutrient("protein_g", "Protein", "macro", "g"),
            _nutrient("fat_g", "Fat", "macro", "g"),
            _nutrient(
                "iron_mg",
                "Iron",
                "mineral",
                "mg",
                importance_pregnancy="Supports increased blood volume.",
            ),
            _nutrient("calcium_mg", "Calcium", "mineral", "mg"),
            _nutrient(
                "folate_dfe_ug",
                "Folate",
                "vitamin",
                "ug",
                importance_pregnancy="Prevents neural tube defects.",
            ),
            _nutrient("vitamin_d_ug", "Vitamin D", "vitamin", "ug"),
            _nutrient("dha_mg", "DHA", "fatty_acid", "mg"),
            _nutrient("choline_mg", "Choline", "other", "mg"),
        ],
        "targets": {
            "_source": "test values",
            "female_nonpregnant": {"19_30": nonpregnant, "31_50": nonpregnant},
            "pregnant_t1": {"19_30": pregnant},
            "pregnant_t2": {"19_30": pregnant},
            "pregnant_t3": {"19_30": pregnant},
            "lactating_0_6": {"19_30": nonpregnant},
            "lactating_7_12": {"19_30": nonpregnant},
        },
        "age_bands": {
            "age_bands": [
                {"code": "14_18", "age_min": 14, "age_max": 18},
                {"code": "19_30", "age_min": 19, "age_max": 30},
                {"code": "31_50", "age_min": 31, "age_max": 50},
                {"code": "51_plus", "age_min": 51, "age_max": None},
            ]
        },
        "life_stages": [
            {"code": "female_nonpregnant", "label": "Non-Pregnant Female"},
            {"code": "pregnant_t2", "label": "Pregnant - Second Trimester"},
        ],
        "pregnancy_weeks": {
            "weeks": [
                {
                    "week": 24,
                    "trimester": 2,
                    "life_stage": "pregnant_t2",
                    "milestone": "Viability milestone",
                },
                {"week": 35, "trimester": 3, "life_stage": "pregnant_t3"},
            ]
        },
        "formulas": {
            "activity_factors": {
                "sedentary": {"factor": 1.2},
                "light": {"factor": 1.375},
                "moderate": 1.55,
                "active": 1.725,
                "very_active": 1.9,
            },
            "pregnancy_energy_increments": {
                "trimester_1": {"increment_kcal": 0},
                "trimester_2": {"increment_kcal": 340},
                "trimester_3": {"increment_kcal": 452},
            },
            "lactation_energy_increments": {
                "months_0_6": {"increment_kcal": 330},
                "months_7_12": {"increment_kcal": 400},
            },
            "pregnancy_weight_gain_recommendations": {
                "singleton": {
                    "underweight": {
                        "total_kg_min": 12.5,
                        "total_kg_max": 18,
                        "weekly_t2_t3_kg": 0.51,
                    },
                    "normal": {
                        "total_kg_min": 11.5,
                        "total_kg_max": 16,
                        "weekly_t2_t3_kg": 0.42,
                    },
                },
                "twins": {
                    "normal": {
                        "total_kg_min": 17,
                        "total_kg_max": 25,
                        "weekly_t2_t3_kg": None,
                    },
                },
            },
        },
    }


def chicken_analysis(analysis_id: str = "chicken-1", **overrides) -> MealAnalysis:
    payload = {
        "analysis_id": analysis_id,
        "confidence_overall": 0.9,
        "meal_type": "lunch",
        "food_items": [
            {
                "name": "Grilled Chicken Breast",
                "quantity": 1,
                "unit": "piece",
                "estimated_weight_g": 150,
                "confidence": 0.9,
                "nutrients": {"energy_kcal": 231, "protein_g": 43.5, "fat_g": 5},
                "micronutrients": {
                    "vitamin_d_ug": 0.1,
                    "folate_ug": 4,
                    "iron_mg": 0.9,
                    "calcium_mg": 15,
                    "omega3_mg": 62,
                },
            }
        ],
        "totals": {
            "energy_kcal": 231,
            "protein_g": 43.5,
            "carbs_g": 0,
            "fat_g": 5,
            "fiber_g": 0,
            "sodium_mg": 74,
        },
        "pregnancy_relevant_notes": ["Excellent lean protein source"],
    }
    payload.update(overrides)
    return MealAnalysis.model_validate(payload)


@pytest.fixture(autouse=True)
def reset_package_logger():
    yield
    logger = logging.getLogger("nutrimom")
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def reference() -> ReferenceData:
    return build_reference_data(reference_tables())


@pytest.fixture
def female_profile() -> UserProfile:
    return UserProfile(age_years=28, sex=Sex.FEMALE, weight_kg=65, height_cm=165)


@pytest.fixture
def settings() -> Settings:
    return Settings(debug=True)


@pytest.fixture
def plan_service(reference: ReferenceData) -> NutritionPlanService:
    return NutritionPlanService(reference, debug=True)


@pytest.fixture
def comparison_service() -> ComparisonService:
    return ComparisonService(debug=True)


@pytest.fixture
def food_log_repository() -> InMemoryFoodLogRepository:
    return InMemoryFoodLogRepository()


@pytest.fixture
def food_log_service(
    food_log_repository: InMemoryFoodLogRepository,
    comparison_service: ComparisonService,
) -> FoodLogService:
    return FoodLogService(
        repository=food_log_repository,
        comparison_service=comparison_service,
        timezone_name="UTC",
    )


@pytest.fixture
def container(settings: Settings, reference: ReferenceData) -> AppContainer:
    return build_container(settings, reference=reference)
