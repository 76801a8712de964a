"""Age band and life stage classification."""

import math
from dataclasses import dataclass

from nutrimom.domain.models import LifeStage, Sex, UserProfile
from nutrimom.domain.reference import PregnancyWeek, ReferenceData

FIRST_TRIMESTER_LAST_WEEK = 13
SECOND_TRIMESTER_LAST_WEEK = 27
LACTATION_EARLY_LAST_MONTH = 6
YOUNGEST_BAND_CUTOFF_YEARS = 14

LIFE_STAGE_LABELS: dict[LifeStage, str] = {
    LifeStage.FEMALE_NONPREGNANT: "Non-Pregnant Female",
    LifeStage.PREGNANT_T1: "Pregnant - First Trimester",
    LifeStage.PREGNANT_T2: "Pregnant - Second Trimester",
    LifeStage.PREGNANT_T3: "Pregnant - Third Trimester",
    LifeStage.LACTATING_0_6: "Lactating (0-6 months postpartum)",
    LifeStage.LACTATING_7_12: "Lactating (7-12 months postpartum)",
    LifeStage.MALE_ADULT: "Adult Male",
}


@dataclass(frozen=True)
class Classification:
    """Age band and life stage derived from a profile."""

    age_band: str
    life_stage: LifeStage
    life_stage_label: str


def age_band(reference: ReferenceData, age: float) -> str:
    """Return the age band code for an age in years.

    Ages count in completed years, so 30.5 belongs to the band ending at 30.
    Bands are scanned in table order and the first match wins. Ages that no
    band covers fall back to the youngest band below 14 years and to the
    oldest (unbounded) band otherwise.
    """
    bands = reference.age_bands
    years = math.floor(age)
    for band in bands:
        if band.contains(years):
            return band.code
    if years < YOUNGEST_BAND_CUTOFF_YEARS:
        return min(bands, key=lambda band: band.age_min).code
    unbounded = [band for band in bands if band.age_max is None]
    if unbounded:
        return unbounded[-1].code
    return max(bands, key=lambda band: band.age_max or 0).code


def trimester(week: int) -> int:
    """Return the trimester (1, 2 or 3) for a pregnancy week."""
    if week <= FIRST_TRIMESTER_LAST_WEEK:
        return 1
    if week <= SECOND_TRIMESTER_LAST_WEEK:
        return 2
    return 3


def life_stage(reference: ReferenceData, profile: UserProfile) -> LifeStage:
    """Return the life stage for a profile.

    Sex is checked first, then lactation, then pregnancy. A pregnant profile
    without a known week resolves to the non-pregnant stage.
    """
    if profile.sex == Sex.MALE:
        return LifeStage.MALE_ADULT

    if profile.is_lactating:
        if (profile.lactation_months or 0) <= LACTATION_EARLY_LAST_MONTH:
            return LifeStage.LACTATING_0_6
        return LifeStage.LACTATING_7_12

    if profile.is_pregnant and profile.pregnancy_week:
        return week_info(reference, profile.pregnancy_week).life_stage

    return LifeStage.FEMALE_NONPREGNANT


def week_info(reference: ReferenceData, week: int) -> PregnancyWeek:
    """Return the table entry for a week, or one derived from the trimester."""
    entry = reference.week(week)
    if entry is not None:
        return entry
    value = trimester(week)
    return PregnancyWeek(
        week=week, life_stage=_stage_for_trimester(value), trimester=value
    )


def life_stage_label(reference: ReferenceData, code: LifeStage) -> str:
    """Return a human readable label for a life stage."""
    info = reference.life_stage_info(code)
    if info is not None and info.label:
        return info.label
    return LIFE_STAGE_LABELS.get(code, str(code.value))


def classify(reference: ReferenceData, profile: UserProfile) -> Classification:
    """Classify a profile into an age band and life stage."""
    stage = life_stage(reference, profile)
    return Classification(
        age_band=age_band(reference, profile.age_years),
        life_stage=stage,
        life_stage_label=life_stage_label(reference, stage),
    )


def _stage_for_trimester(value: int) -> LifeStage:
    if value == 1:
        return LifeStage.PREGNANT_T1
    if value == 2:  # noqa: PLR2004
        return LifeStage.PREGNANT_T2
    return LifeStage.PREGNANT_T3
