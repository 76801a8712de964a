"""Reference data loader for the JSON table files."""

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType

from nutrimom.domain.models import ActivityLevel, LifeStage, NutrientCategory
from nutrimom.domain.reference import (
    AgeBand,
    Formulas,
    LifeStageInfo,
    NutrientDefinition,
    NutrientTarget,
    PregnancyWeek,
    ReferenceData,
    WeightGainRange,
)

TABLE_FILES: dict[str, str] = {
    "nutrients": "nutrients.json",
    "targets": "nutrient-targets.json",
    "age_bands": "age-bands.json",
    "life_stages": "life-stages.json",
    "pregnancy_weeks": "pregnancy_weeks.json",
    "formulas": "formulas.json",
}

# Formula table keys for the energy increment of each stage.
_INCREMENT_KEYS: dict[LifeStage, tuple[str, str]] = {
    LifeStage.PREGNANT_T1: ("pregnancy_energy_increments", "trimester_1"),
    LifeStage.PREGNANT_T2: ("pregnancy_energy_increments", "trimester_2"),
    LifeStage.PREGNANT_T3: ("pregnancy_energy_increments", "trimester_3"),
    LifeStage.LACTATING_0_6: ("lactation_energy_increments", "months_0_6"),
    LifeStage.LACTATING_7_12: ("lactation_energy_increments", "months_7_12"),
}

_logger = logging.getLogger(__name__)


class ReferenceDataError(Exception):
    """Raised when reference tables are missing or malformed."""


def load_reference_data(directory: Path) -> ReferenceData:
    """Read the six JSON tables from a directory."""
    tables: dict[str, object] = {}
    for name, filename in TABLE_FILES.items():
        path = directory / filename
        try:
            tables[name] = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError as exc:
            raise ReferenceDataError(f"Missing reference table: {path}") from exc
        except json.JSONDecodeError as exc:
            raise ReferenceDataError(f"Invalid JSON in {path}: {exc}") from exc
    reference = build_reference_data(tables)
    _logger.info(
        "Loaded reference data from %s: nutrients=%s life_stages=%s",
        directory,
        len(reference.nutrients),
        len(reference.targets),
    )
    return reference


def build_reference_data(tables: Mapping[str, object]) -> ReferenceData:
    """Build reference data from already decoded tables."""
    try:
        return ReferenceData(
            nutrients=_parse_nutrients(tables["nutrients"]),
            targets=_parse_targets(tables["targets"]),
            age_bands=_parse_age_bands(tables["age_bands"]),
            life_stages=_parse_life_stages(tables.get("life_stages") or []),
            pregnancy_weeks=_parse_weeks(tables.get("pregnancy_weeks") or []),
            formulas=_parse_formulas(tables["formulas"]),
        )
    except KeyError as exc:
        raise ReferenceDataError(f"Missing reference field: {exc}") from exc
    except (TypeError, ValueError) as exc:
        raise ReferenceDataError(f"Malformed reference data: {exc}") from exc


def _rows(raw: object, wrapper: str) -> list[Mapping[str, object]]:
    """Accept a bare list or a list wrapped in an object key."""
    if isinstance(raw, Mapping):
        raw = raw.get(wrapper, [])
    if not isinstance(raw, list):
        raise ReferenceDataError(f"Expected a list for {wrapper}")
    return raw


def _parse_nutrients(raw: object) -> tuple[NutrientDefinition, ...]:
    nutrients = []
    for row in _rows(raw, "nutrients"):
        category = row.get("category") or NutrientCategory.OTHER.value
        try:
            parsed_category = NutrientCategory(category)
        except ValueError as exc:
            raise ReferenceDataError(
                f"Unknown category {category!r} for nutrient {row.get('code')!r}"
            ) from exc
        nutrients.append(
            NutrientDefinition(
                code=str(row["code"]),
                name=str(row.get("name") or row["code"]),
                category=parsed_category,
                unit=str(row.get("unit") or ""),
                description=str(row.get("description") or ""),
                importance_pregnancy=str(row.get("importance_pregnancy") or ""),
                food_sources=tuple(row.get("food_sources") or ()),
            )
        )
    return tuple(nutrients)


def _parse_targets(
    raw: object,
) -> Mapping[str, Mapping[str, Mapping[str, NutrientTarget]]]:
    if not isinstance(raw, Mapping):
        raise ReferenceDataError("Nutrient targets must be an object")
    stages: dict[str, Mapping[str, Mapping[str, NutrientTarget]]] = {}
    for stage_code, bands in raw.items():
        if stage_code.startswith("_") or not isinstance(bands, Mapping):
            continue
        stages[stage_code] = MappingProxyType(
            {
                band_code: MappingProxyType(
                    {
                        code: NutrientTarget.from_mapping(entry)
                        for code, entry in entries.items()
                        if isinstance(entry, Mapping)
                    }
                )
                for band_code, entries in bands.items()
                if isinstance(entries, Mapping)
            }
        )
    return MappingProxyType(stages)


def _parse_age_bands(raw: object) -> tuple[AgeBand, ...]:
    bands = tuple(
        AgeBand(
            code=str(row["code"]),
            age_min=float(row["age_min"]),
            age_max=None if row.get("age_max") is None else float(row["age_max"]),
        )
        for row in _rows(raw, "age_bands")
    )
    if not bands:
        raise ReferenceDataError("At least one age band is required")
    return bands


def _parse_life_stages(raw: object) -> tuple[LifeStageInfo, ...]:
    return tuple(
        LifeStageInfo(
            code=LifeStage(row["code"]),
            label=str(row.get("label") or row["code"]),
            description=str(row.get("description") or ""),
        )
        for row in _rows(raw, "life_stages")
    )


def _parse_weeks(raw: object) -> tuple[PregnancyWeek, ...]:
    return tuple(
        PregnancyWeek(
            week=int(row["week"]),
            life_stage=LifeStage(row["life_stage"]),
            trimester=int(row.get("trimester") or 0),
            milestone=str(row.get("milestone") or ""),
        )
        for row in _rows(raw, "weeks")
    )


def _parse_formulas(raw: object) -> Formulas:
    if not isinstance(raw, Mapping):
        raise ReferenceDataError("Formulas must be an object")

    factors: dict[ActivityLevel, float] = {}
    for key, value in (raw.get("activity_factors") or {}).items():
        factor = value.get("factor") if isinstance(value, Mapping) else value
        factors[ActivityLevel(key)] = float(factor)
    if ActivityLevel.SEDENTARY not in factors:
        raise ReferenceDataError("Activity factors must include sedentary")

    increments: dict[LifeStage, float] = {}
    for stage, (table, key) in _INCREMENT_KEYS.items():
        entry = (raw.get(table) or {}).get(key)
        if isinstance(entry, Mapping):
            increments[stage] = float(entry.get("increment_kcal") or 0)

    weight_gain: dict[str, Mapping[str, WeightGainRange]] = {}
    for gestation, categories in (
        raw.get("pregnancy_weight_gain_recommendations") or {}
    ).items():
        weight_gain[gestation] = MappingProxyType(
            {
                category: WeightGainRange(
                    total_kg_min=float(entry["total_kg_min"]),
                    total_kg_max=float(entry["total_kg_max"]),
                    weekly_t2_t3_kg=(
                        None
                        if entry.get("weekly_t2_t3_kg") is None
                        else float(entry["weekly_t2_t3_kg"])
                    ),
                )
                for category, entry in categories.items()
            }
        )

    return Formulas(
        activity_factors=MappingProxyType(factors),
        energy_increments=MappingProxyType(increments),
        weight_gain=MappingProxyType(weight_gain),
    )
