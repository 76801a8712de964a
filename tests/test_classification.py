"""Tests for age band and life stage classification."""

import pytest

from nutrimom.domain.classification import (
    age_band,
    classify,
    life_stage,
    life_stage_label,
    trimester,
    week_info,
)
from nutrimom.domain.models import LifeStage, Sex, UserProfile


def _female(**overrides) -> UserProfile:
    values = {"age_years": 28, "sex": Sex.FEMALE, "weight_kg": 65, "height_cm": 165}
    values.update(overrides)
    return UserProfile(**values)


@pytest.mark.parametrize(
    ("age", "expected"),
    [
        (0, "14_18"),
        (10, "14_18"),
        (14, "14_18"),
        (19, "19_30"),
        (28, "19_30"),
        (30, "19_30"),
        (45, "31_50"),
        (51, "51_plus"),
        (95, "51_plus"),
    ],
)
def test_age_band_matches_table(reference, age: float, expected: str) -> None:
    assert age_band(reference, age) == expected


@pytest.mark.parametrize(
    ("age", "expected"),
    [(18.5, "14_18"), (30.5, "19_30"), (50.9, "31_50"), (51.2, "51_plus")],
)
def test_age_band_counts_completed_years(
    reference, age: float, expected: str
) -> None:
    assert age_band(reference, age) == expected


def test_fractional_age_classifies_pregnancy_in_own_band(reference) -> None:
    profile = _female(age_years=30.5, is_pregnant=True, pregnancy_week=24)

    result = classify(reference, profile)

    assert result.age_band == "19_30"
    assert result.life_stage == LifeStage.PREGNANT_T2


@pytest.mark.parametrize(
    ("week", "expected"),
    [(1, 1), (13, 1), (14, 2), (27, 2), (28, 3), (42, 3)],
)
def test_trimester_thresholds(week: int, expected: int) -> None:
    assert trimester(week) == expected


def test_male_is_always_male_adult(reference) -> None:
    profile = _female(
        sex=Sex.MALE,
        is_pregnant=True,
        pregnancy_week=20,
        is_lactating=True,
        lactation_months=3,
    )

    assert life_stage(reference, profile) == LifeStage.MALE_ADULT


def test_lactation_is_checked_before_pregnancy(reference) -> None:
    profile = _female(is_pregnant=True, pregnancy_week=30, is_lactating=True)

    assert life_stage(reference, profile) == LifeStage.LACTATING_0_6


@pytest.mark.parametrize(
    ("months", "expected"),
    [
        (None, LifeStage.LACTATING_0_6),
        (6, LifeStage.LACTATING_0_6),
        (7, LifeStage.LACTATING_7_12),
        (12, LifeStage.LACTATING_7_12),
    ],
)
def test_lactation_windows(reference, months: int | None, expected) -> None:
    profile = _female(is_lactating=True, lactation_months=months)

    assert life_stage(reference, profile) == expected


@pytest.mark.parametrize(
    ("week", "expected"),
    [
        (8, LifeStage.PREGNANT_T1),
        (20, LifeStage.PREGNANT_T2),
        (24, LifeStage.PREGNANT_T2),
        (35, LifeStage.PREGNANT_T3),
    ],
)
def test_pregnancy_week_resolves_stage(reference, week: int, expected) -> None:
    profile = _female(is_pregnant=True, pregnancy_week=week)

    assert life_stage(reference, profile) == expected


@pytest.mark.parametrize("week", [None, 0])
def test_pregnant_without_week_uses_nonpregnant_targets(reference, week) -> None:
    profile = _female(is_pregnant=True, pregnancy_week=week)

    assert life_stage(reference, profile) == LifeStage.FEMALE_NONPREGNANT


def test_week_info_prefers_table_entry(reference) -> None:
    entry = week_info(reference, 24)

    assert entry.life_stage == LifeStage.PREGNANT_T2
    assert entry.milestone == "Viability milestone"


def test_week_info_derives_missing_weeks(reference) -> None:
    entry = week_info(reference, 30)

    assert entry.life_stage == LifeStage.PREGNANT_T3
    assert entry.trimester == 3
    assert entry.milestone == ""


def test_life_stage_label_falls_back_to_builtin(reference) -> None:
    assert life_stage_label(reference, LifeStage.PREGNANT_T2) == (
        "Pregnant - Second Trimester"
    )
    assert life_stage_label(reference, LifeStage.MALE_ADULT) == "Adult Male"


def test_classify_combines_band_and_stage(reference) -> None:
    result = classify(reference, _female(is_pregnant=True, pregnancy_week=24))

    assert result.age_band == "19_30"
    assert result.life_stage == LifeStage.PREGNANT_T2
    assert result.life_stage_label == "Pregnant - Second Trimester"
