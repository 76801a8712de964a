"""Nutrition plan service over loaded reference data."""

import logging
from dataclasses import dataclass

from nutrimom.domain.classification import Classification, classify
from nutrimom.domain.energy import (
    EnergyBreakdown,
    WeightGainRecommendation,
    bmi,
    bmi_category,
    energy_needs,
    weight_gain_recommendation,
)
from nutrimom.domain.models import LifeStage, UserProfile
from nutrimom.domain.plan import NutritionPlan, build_plan
from nutrimom.domain.reference import ReferenceData
from nutrimom.domain.targets import (
    EnrichedTarget,
    LifeStageDelta,
    pregnancy_comparison,
    resolve_targets,
)

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BodyComposition:
    """BMI and, during pregnancy, weight gain guidance."""

    bmi: float
    bmi_category: str
    weight_gain: WeightGainRecommendation | None = None


@dataclass
class NutritionPlanService:
    """Service for building nutrition plans from reference data."""

    reference: ReferenceData
    debug: bool = False

    def classify(self, profile: UserProfile) -> Classification:
        """Return the age band and life stage for a profile."""
        return classify(self.reference, profile)

    def energy(self, profile: UserProfile) -> EnergyBreakdown:
        """Return the energy breakdown for a profile."""
        return energy_needs(self.reference, profile)

    def targets(self, stage: LifeStage, band: str) -> dict[str, EnrichedTarget]:
        """Return enriched targets for a life stage and age band."""
        targets = resolve_targets(self.reference, stage, band)
        if not targets:
            _logger.warning(
                "No nutrient targets for life_stage=%s age_band=%s",
                stage.value,
                band,
            )
        return targets

    def build_plan(self, profile: UserProfile) -> NutritionPlan:
        """Build a nutrition plan for a profile."""
        plan = build_plan(self.reference, profile)
        if not plan.targets:
            _logger.warning(
                "No nutrient targets for life_stage=%s age_band=%s",
                plan.classification.life_stage.value,
                plan.classification.age_band,
            )
        if self.debug:
            _logger.info(
                "Plan built: life_stage=%s age_band=%s total_energy=%s targets=%s",
                plan.classification.life_stage.value,
                plan.classification.age_band,
                plan.energy.total_energy,
                len(plan.targets),
            )
        return plan

    def pregnancy_comparison(
        self, age_years: float, pregnancy_week: int
    ) -> list[LifeStageDelta]:
        """Compare non-pregnant and pregnancy targets for an age and week."""
        return pregnancy_comparison(self.reference, age_years, pregnancy_week)

    def body_composition(self, profile: UserProfile) -> BodyComposition:
        """Return BMI and weight gain guidance for a profile.

        Weight gain guidance needs a pregnancy week and a pre-pregnancy weight.
        """
        current = bmi(profile.weight_kg, profile.height_cm)
        weight_gain = None
        if (
            profile.is_pregnant
            and profile.pregnancy_week
            and profile.pre_pregnancy_weight_kg
        ):
            pre_pregnancy_bmi = bmi(profile.pre_pregnancy_weight_kg, profile.height_cm)
            weight_gain = weight_gain_recommendation(
                self.reference, pre_pregnancy_bmi, profile.is_multiples
            )
        return BodyComposition(
            bmi=current,
            bmi_category=bmi_category(current),
            weight_gain=weight_gain,
        )
