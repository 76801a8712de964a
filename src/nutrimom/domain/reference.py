"""Reference data tables consumed by the nutrition engine."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum

from nutrimom.domain.models import ActivityLevel, LifeStage, NutrientCategory


class TargetKind(str, Enum):
    """Kind of dietary reference value backing a target."""

    RDA = "RDA"
    AI = "AI"
    MIN = "MIN"
    AMDR_MIN = "AMDR_MIN"


TARGET_PRIORITY: tuple[TargetKind, ...] = (
    TargetKind.RDA,
    TargetKind.AI,
    TargetKind.MIN,
    TargetKind.AMDR_MIN,
)


@dataclass(frozen=True)
class TargetValue:
    """A single reference value tagged with its kind."""

    kind: TargetKind
    value: float


@dataclass(frozen=True)
class NutrientTarget:
    """Raw target for one nutrient in one life stage and age band."""

    values: tuple[TargetValue, ...] = ()
    unit: str = ""
    upper_limit: float | None = None
    amdr_max: float | None = None

    def value_of(self, kind: TargetKind) -> float | None:
        """Return the value recorded for a kind, if any."""
        for entry in self.values:
            if entry.kind is kind:
                return entry.value
        return None

    def primary(self) -> TargetValue | None:
        """Return the highest priority value (RDA > AI > MIN > AMDR_MIN)."""
        for kind in TARGET_PRIORITY:
            value = self.value_of(kind)
            if value is not None:
                return TargetValue(kind=kind, value=value)
        return None

    @classmethod
    def from_mapping(cls, raw: Mapping[str, object]) -> "NutrientTarget":
        """Build a target from a table entry such as {"RDA": 27, "UL": 45}."""
        values = tuple(
            TargetValue(kind=kind, value=number)
            for kind in TARGET_PRIORITY
            if (number := _as_number(raw.get(kind.value))) is not None
        )
        return cls(
            values=values,
            unit=str(raw.get("unit") or ""),
            upper_limit=_as_number(raw.get("UL")),
            amdr_max=_as_number(raw.get("AMDR_MAX")),
        )


@dataclass(frozen=True)
class NutrientDefinition:
    """Static description of a nutrient."""

    code: str
    name: str
    category: NutrientCategory
    unit: str = ""
    description: str = ""
    importance_pregnancy: str = ""
    food_sources: tuple[str, ...] = ()


@dataclass(frozen=True)
class AgeBand:
    """Contiguous age range in years; age_max of None is unbounded."""

    code: str
    age_min: float
    age_max: float | None = None

    def contains(self, age: float) -> bool:
        """Return True when the age falls inside the band."""
        if age < self.age_min:
            return False
        return self.age_max is None or age <= self.age_max


@dataclass(frozen=True)
class LifeStageInfo:
    """Display metadata for a life stage."""

    code: LifeStage
    label: str
    description: str = ""


@dataclass(frozen=True)
class PregnancyWeek:
    """Pregnancy week to life stage mapping entry."""

    week: int
    life_stage: LifeStage
    trimester: int
    milestone: str = ""


@dataclass(frozen=True)
class WeightGainRange:
    """Recommended total and weekly gestational weight gain."""

    total_kg_min: float
    total_kg_max: float
    weekly_t2_t3_kg: float | None = None


@dataclass(frozen=True)
class Formulas:
    """Formula constants: activity factors, energy increments, weight gain."""

    activity_factors: Mapping[ActivityLevel, float]
    energy_increments: Mapping[LifeStage, float] = field(default_factory=dict)
    # gestation ("singleton" | "twins") -> BMI category -> range
    weight_gain: Mapping[str, Mapping[str, WeightGainRange]] = field(
        default_factory=dict
    )


@dataclass(frozen=True)
class ReferenceData:
    """Immutable bundle of the six reference tables."""

    nutrients: tuple[NutrientDefinition, ...]
    # life stage code -> age band code -> nutrient code -> target
    targets: Mapping[str, Mapping[str, Mapping[str, NutrientTarget]]]
    age_bands: tuple[AgeBand, ...]
    life_stages: tuple[LifeStageInfo, ...]
    pregnancy_weeks: tuple[PregnancyWeek, ...]
    formulas: Formulas

    def nutrient(self, code: str) -> NutrientDefinition | None:
        """Return the definition for a nutrient code."""
        for definition in self.nutrients:
            if definition.code == code:
                return definition
        return None

    def week(self, week: int) -> PregnancyWeek | None:
        """Return the mapping entry for a pregnancy week."""
        for entry in self.pregnancy_weeks:
            if entry.week == week:
                return entry
        return None

    def life_stage_info(self, code: LifeStage) -> LifeStageInfo | None:
        """Return display metadata for a life stage."""
        for entry in self.life_stages:
            if entry.code == code:
                return entry
        return None


def _as_number(value: object) -> float | None:
    if isinstance(value, bool) or not isinstance(value, int | float):
        return None
    return float(value)
