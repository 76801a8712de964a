"""Energy expenditure and body composition formulas."""

from dataclasses import dataclass

from nutrimom.domain.classification import life_stage
from nutrimom.domain.models import ActivityLevel, LifeStage, Sex, UserProfile
from nutrimom.domain.reference import ReferenceData

BMI_UNDERWEIGHT_BELOW = 18.5
BMI_NORMAL_BELOW = 25.0
BMI_OVERWEIGHT_BELOW = 30.0


@dataclass(frozen=True)
class EnergyBreakdown:
    """Daily energy needs in kcal."""

    bmr: int
    tdee: int
    pregnancy_increment: float
    total_energy: int
    life_stage: LifeStage


@dataclass(frozen=True)
class WeightGainRecommendation:
    """Gestational weight gain guidance for a pre-pregnancy BMI."""

    bmi_category: str
    min_kg: float
    max_kg: float
    weekly_t2_t3_kg: float | None
    is_multiples: bool


def bmr(sex: Sex | str, weight_kg: float, height_cm: float, age_years: float) -> float:
    """Return basal metabolic rate (Mifflin-St Jeor) in kcal/day."""
    base = 10 * weight_kg + 6.25 * height_cm - 5 * age_years
    if sex == Sex.MALE:
        return base + 5
    return base - 161


def tdee(
    reference: ReferenceData,
    bmr_kcal: float,
    activity_level: ActivityLevel | str | None,
) -> float:
    """Return total daily energy expenditure for an activity level."""
    factors = reference.formulas.activity_factors
    level = ActivityLevel.parse(activity_level)
    factor = factors.get(level, factors[ActivityLevel.SEDENTARY])
    return bmr_kcal * factor


def pregnancy_energy_increment(reference: ReferenceData, stage: LifeStage) -> float:
    """Return the extra kcal/day for a pregnancy or lactation stage."""
    return reference.formulas.energy_increments.get(stage, 0)


def energy_needs(reference: ReferenceData, profile: UserProfile) -> EnergyBreakdown:
    """Compute BMR, TDEE and total energy target for a profile.

    Pregnant profiles use the pre-pregnancy weight for BMR when it is known,
    since gestational gain is covered by the trimester increment.
    """
    weight = profile.weight_kg
    if profile.is_pregnant and profile.pre_pregnancy_weight_kg:
        weight = profile.pre_pregnancy_weight_kg

    bmr_kcal = bmr(profile.sex, weight, profile.height_cm, profile.age_years)
    tdee_kcal = tdee(reference, bmr_kcal, profile.activity_level)
    stage = life_stage(reference, profile)
    increment = pregnancy_energy_increment(reference, stage)

    return EnergyBreakdown(
        bmr=round(bmr_kcal),
        tdee=round(tdee_kcal),
        pregnancy_increment=increment,
        total_energy=round(tdee_kcal + increment),
        life_stage=stage,
    )


def bmi(weight_kg: float, height_cm: float) -> float:
    """Return body mass index rounded to one decimal."""
    height_m = height_cm / 100
    return round(weight_kg / (height_m * height_m), 1)


def bmi_category(value: float) -> str:
    """Return the WHO BMI category name."""
    if value < BMI_UNDERWEIGHT_BELOW:
        return "underweight"
    if value < BMI_NORMAL_BELOW:
        return "normal"
    if value < BMI_OVERWEIGHT_BELOW:
        return "overweight"
    return "obese"


def weight_gain_recommendation(
    reference: ReferenceData, pre_pregnancy_bmi: float, is_multiples: bool = False
) -> WeightGainRecommendation | None:
    """Return recommended gestational weight gain for a pre-pregnancy BMI.

    Categories missing from the table (e.g. underweight twins) use the normal
    range. Returns None when the table has no entry for the gestation type.
    """
    category = bmi_category(pre_pregnancy_bmi)
    gestation = "twins" if is_multiples else "singleton"
    source = reference.formulas.weight_gain.get(gestation)
    if not source:
        return None
    entry = source.get(category) or source.get("normal")
    if entry is None:
        return None
    return WeightGainRecommendation(
        bmi_category=category,
        min_kg=entry.total_kg_min,
        max_kg=entry.total_kg_max,
        weekly_t2_t3_kg=entry.weekly_t2_t3_kg,
        is_multiples=is_multiples,
    )
