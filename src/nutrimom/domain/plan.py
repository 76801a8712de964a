"""Nutrition plan assembly."""

from collections.abc import Mapping
from dataclasses import dataclass, replace
from types import MappingProxyType

from nutrimom.domain.classification import Classification, classify, trimester
from nutrimom.domain.energy import EnergyBreakdown, energy_needs
from nutrimom.domain.models import ActivityLevel, Sex, UserProfile
from nutrimom.domain.reference import ReferenceData
from nutrimom.domain.targets import ENERGY_CODE, EnrichedTarget, resolve_targets


@dataclass(frozen=True)
class ProfileSnapshot:
    """Profile values echoed back with a plan."""

    age_years: float
    sex: Sex
    weight_kg: float
    height_cm: float
    activity_level: ActivityLevel
    is_pregnant: bool
    pregnancy_week: int | None
    trimester: int | None


@dataclass(frozen=True)
class NutritionPlan:
    """Personalized classification, energy needs and nutrient targets."""

    profile: ProfileSnapshot
    classification: Classification
    energy: EnergyBreakdown
    targets: Mapping[str, EnrichedTarget]


def build_plan(reference: ReferenceData, profile: UserProfile) -> NutritionPlan:
    """Build the nutrition plan for a profile.

    The energy target from the table is replaced by the computed total energy.
    """
    classification = classify(reference, profile)
    energy = energy_needs(reference, profile)
    targets = resolve_targets(
        reference, classification.life_stage, classification.age_band
    )
    if ENERGY_CODE in targets:
        targets[ENERGY_CODE] = replace(
            targets[ENERGY_CODE], target=float(energy.total_energy)
        )

    return NutritionPlan(
        profile=_snapshot(profile),
        classification=classification,
        energy=energy,
        targets=MappingProxyType(targets),
    )


def _snapshot(profile: UserProfile) -> ProfileSnapshot:
    week = profile.pregnancy_week or None
    return ProfileSnapshot(
        age_years=profile.age_years,
        sex=Sex(profile.sex),
        weight_kg=profile.weight_kg,
        height_cm=profile.height_cm,
        activity_level=profile.activity_level,
        is_pregnant=bool(profile.is_pregnant),
        pregnancy_week=week,
        trimester=trimester(week) if week else None,
    )
