"""Nutrient target lookup and enrichment."""

from collections.abc import Mapping
from dataclasses import dataclass

from nutrimom.domain.classification import age_band, life_stage
from nutrimom.domain.models import LifeStage, NutrientCategory, Sex, UserProfile
from nutrimom.domain.reference import (
    NutrientDefinition,
    NutrientTarget,
    ReferenceData,
    TargetKind,
    TargetValue,
)

ENERGY_CODE = "energy_kcal"


@dataclass(frozen=True)
class EnrichedTarget:
    """Nutrient target merged with its definition and resolved value."""

    code: str
    name: str
    category: NutrientCategory
    unit: str
    target: float | None
    target_kind: TargetKind | None
    upper_limit: float | None = None
    amdr_max: float | None = None
    values: tuple[TargetValue, ...] = ()
    description: str = ""
    importance_pregnancy: str = ""
    food_sources: tuple[str, ...] = ()


@dataclass(frozen=True)
class LifeStageDelta:
    """Difference in one nutrient target between two life stages."""

    code: str
    name: str
    category: NutrientCategory
    unit: str
    base_value: float
    compare_value: float
    difference: float
    percent_change: float | None

    @property
    def increased(self) -> bool:
        return self.difference > 0

    @property
    def decreased(self) -> bool:
        return self.difference < 0


def nutrient_targets(
    reference: ReferenceData, stage: LifeStage, band: str
) -> Mapping[str, NutrientTarget]:
    """Return raw targets for a life stage and age band.

    Adult males share the non-pregnant female table. Unknown stages or bands
    yield an empty mapping.
    """
    key = stage
    if stage == LifeStage.MALE_ADULT:
        key = LifeStage.FEMALE_NONPREGNANT
    by_band = reference.targets.get(key.value)
    if not by_band:
        return {}
    return by_band.get(band) or {}


def enrich_targets(
    targets: Mapping[str, NutrientTarget],
    nutrients: tuple[NutrientDefinition, ...],
) -> dict[str, EnrichedTarget]:
    """Merge raw targets with nutrient metadata and resolve target values."""
    definitions = {definition.code: definition for definition in nutrients}
    enriched: dict[str, EnrichedTarget] = {}
    for code, raw in targets.items():
        enriched[code] = _enrich(code, raw, definitions.get(code))
    return enriched


def resolve_targets(
    reference: ReferenceData, stage: LifeStage, band: str
) -> dict[str, EnrichedTarget]:
    """Look up and enrich the targets for a life stage and age band."""
    return enrich_targets(nutrient_targets(reference, stage, band), reference.nutrients)


def compare_life_stages(
    reference: ReferenceData, band: str, base: LifeStage, other: LifeStage
) -> list[LifeStageDelta]:
    """Compare target values of every nutrient between two life stages."""
    base_targets = nutrient_targets(reference, base, band)
    other_targets = nutrient_targets(reference, other, band)
    deltas: list[LifeStageDelta] = []
    for definition in reference.nutrients:
        base_value = _primary_value(base_targets.get(definition.code))
        other_value = _primary_value(other_targets.get(definition.code))
        if base_value is None and other_value is None:
            continue
        base_value = base_value or 0.0
        other_value = other_value or 0.0
        difference = other_value - base_value
        percent_change = None
        if base_value:
            percent_change = round(difference / base_value * 100, 1)
        deltas.append(
            LifeStageDelta(
                code=definition.code,
                name=definition.name,
                category=definition.category,
                unit=definition.unit,
                base_value=base_value,
                compare_value=other_value,
                difference=difference,
                percent_change=percent_change,
            )
        )
    return deltas


def pregnancy_comparison(
    reference: ReferenceData, age_years: float, pregnancy_week: int
) -> list[LifeStageDelta]:
    """Compare non-pregnant targets with those for a pregnancy week."""
    band = age_band(reference, age_years)
    pregnant_profile = UserProfile(
        age_years=age_years,
        sex=Sex.FEMALE,
        weight_kg=0,
        height_cm=0,
        is_pregnant=True,
        pregnancy_week=pregnancy_week,
    )
    stage = life_stage(reference, pregnant_profile)
    return compare_life_stages(reference, band, LifeStage.FEMALE_NONPREGNANT, stage)


def nutrients_by_category(
    reference: ReferenceData,
) -> dict[NutrientCategory, list[NutrientDefinition]]:
    """Group nutrient definitions by category, keeping table order."""
    grouped: dict[NutrientCategory, list[NutrientDefinition]] = {}
    for definition in reference.nutrients:
        grouped.setdefault(definition.category, []).append(definition)
    return grouped


def critical_pregnancy_nutrients(reference: ReferenceData) -> list[NutrientDefinition]:
    """Return nutrients that carry a pregnancy importance note."""
    return [
        definition
        for definition in reference.nutrients
        if definition.importance_pregnancy
    ]


def _enrich(
    code: str, raw: NutrientTarget, definition: NutrientDefinition | None
) -> EnrichedTarget:
    primary = raw.primary()
    if definition is None:
        definition = NutrientDefinition(
            code=code, name=code, category=NutrientCategory.OTHER
        )
    return EnrichedTarget(
        code=code,
        name=definition.name or code,
        category=definition.category,
        unit=raw.unit or definition.unit,
        target=primary.value if primary else None,
        target_kind=primary.kind if primary else None,
        upper_limit=raw.upper_limit,
        amdr_max=raw.amdr_max,
        values=raw.values,
        description=definition.description,
        importance_pregnancy=definition.importance_pregnancy,
        food_sources=definition.food_sources,
    )


def _primary_value(target: NutrientTarget | None) -> float | None:
    if target is None:
        return None
    primary = target.primary()
    return primary.value if primary else None
