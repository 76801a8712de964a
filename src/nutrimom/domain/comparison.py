"""Intake versus target comparison and scoring."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import date
from enum import Enum, IntEnum
from types import MappingProxyType
from typing import Protocol

from nutrimom.domain.models import NutrientCategory
from nutrimom.domain.reference import TargetKind
from nutrimom.domain.targets import EnrichedTarget

MET_THRESHOLD_PERCENT = 80.0
SEVERE_DEFICIT_PERCENT = 50.0
OPTIMAL_PERCENT = 100.0


class IntakeCode(str, Enum):
    """Nutrient codes accumulated by the daily food log."""

    ENERGY_KCAL = "energy_kcal"
    PROTEIN_G = "protein_g"
    CARBS_G = "carbs_g"
    FAT_G = "fat_g"
    FIBER_G = "fiber_g"
    CALCIUM_MG = "calcium_mg"
    IRON_MG = "iron_mg"
    ZINC_MG = "zinc_mg"
    FOLATE_UG = "folate_ug"
    VITAMIN_A_UG = "vitamin_a_ug"
    VITAMIN_C_MG = "vitamin_c_mg"
    VITAMIN_D_UG = "vitamin_d_ug"
    OMEGA3_MG = "omega3_mg"


# Food log code -> target table code.
INTAKE_TARGET_CODES: dict[IntakeCode, str] = {
    IntakeCode.ENERGY_KCAL: "energy_kcal",
    IntakeCode.PROTEIN_G: "protein_g",
    IntakeCode.CARBS_G: "carbs_g",
    IntakeCode.FAT_G: "fat_g",
    IntakeCode.FIBER_G: "fiber_g",
    IntakeCode.CALCIUM_MG: "calcium_mg",
    IntakeCode.IRON_MG: "iron_mg",
    IntakeCode.ZINC_MG: "zinc_mg",
    IntakeCode.FOLATE_UG: "folate_dfe_ug",
    IntakeCode.VITAMIN_A_UG: "vitamin_a_rae_ug",
    IntakeCode.VITAMIN_C_MG: "vitamin_c_mg",
    IntakeCode.VITAMIN_D_UG: "vitamin_d_ug",
    IntakeCode.OMEGA3_MG: "dha_mg",
}

# Intake codes stored under a different target code.
_ALIASED_CODES: dict[str, str] = {
    code.value: target
    for code, target in INTAKE_TARGET_CODES.items()
    if code.value != target
}

CATEGORY_WEIGHTS: dict[NutrientCategory, float] = {
    NutrientCategory.MACRO: 2.0,
    NutrientCategory.MINERAL: 1.5,
    NutrientCategory.VITAMIN: 1.0,
    NutrientCategory.FATTY_ACID: 1.0,
    NutrientCategory.OTHER: 0.5,
}


class NutrientStatus(str, Enum):
    """Per-nutrient intake status."""

    EXCEEDED = "exceeded"
    OPTIMAL = "optimal"
    ADEQUATE = "adequate"
    LOW = "low"
    DEFICIENT = "deficient"
    UNKNOWN = "unknown"


class ReportStatus(str, Enum):
    """Overall status of a day's intake."""

    OK = "ok"
    WARNING = "warning"
    DEFICIT = "deficit"


class _Severity(IntEnum):
    OK = 0
    MODERATE_DEFICIT = 1
    EXCEEDED = 2
    SEVERE_DEFICIT = 3


_REPORT_STATUS: dict[_Severity, ReportStatus] = {
    _Severity.OK: ReportStatus.OK,
    _Severity.MODERATE_DEFICIT: ReportStatus.OK,
    _Severity.EXCEEDED: ReportStatus.WARNING,
    _Severity.SEVERE_DEFICIT: ReportStatus.DEFICIT,
}


class Scorable(Protocol):
    """Anything carrying a category and a percentage of target."""

    @property
    def category(self) -> NutrientCategory | str: ...

    @property
    def percentage(self) -> float | None: ...


@dataclass(frozen=True)
class NutrientComparison:
    """Intake of one nutrient measured against its target."""

    code: str
    target_code: str
    name: str
    category: NutrientCategory
    intake: float
    target: float | None
    upper_limit: float | None
    percentage: float | None
    unit: str
    status: NutrientStatus
    target_kind: TargetKind | None = None


@dataclass(frozen=True)
class ComparisonSummary:
    """Nutrient codes grouped by outcome."""

    met: tuple[str, ...] = ()
    exceeded: tuple[str, ...] = ()
    deficit: tuple[str, ...] = ()
    no_data: tuple[str, ...] = ()


@dataclass(frozen=True)
class ComparisonReport:
    """Result of comparing a day's intake with a plan's targets."""

    date: date | None
    status: ReportStatus
    nutrients: Mapping[str, NutrientComparison]
    summary: ComparisonSummary


@dataclass(frozen=True)
class RemainingNutrient:
    """Progress toward one target, keyed by target code."""

    code: str
    name: str
    category: NutrientCategory
    unit: str
    target: float
    consumed: float
    remaining: float
    percent_complete: int
    upper_limit: float | None
    exceeds: bool
    exceeds_ul: bool

    @property
    def percentage(self) -> float:
        return float(self.percent_complete)


@dataclass(frozen=True)
class IntakeAnalysis:
    """Remaining amounts grouped into deficiencies, excesses and on track."""

    by_nutrient: Mapping[str, RemainingNutrient]
    deficiencies: tuple[RemainingNutrient, ...]
    excesses: tuple[RemainingNutrient, ...]
    on_track: tuple[RemainingNutrient, ...]
    overall_score: int


def nutrient_status(
    intake: float, target: float | None, upper_limit: float | None
) -> NutrientStatus:
    """Classify intake against a target and optional upper limit."""
    if upper_limit and intake > upper_limit:
        return NutrientStatus.EXCEEDED
    if not target:
        return NutrientStatus.UNKNOWN
    percentage = intake / target * 100
    if percentage >= OPTIMAL_PERCENT:
        return NutrientStatus.OPTIMAL
    if percentage >= MET_THRESHOLD_PERCENT:
        return NutrientStatus.ADEQUATE
    if percentage >= SEVERE_DEFICIT_PERCENT:
        return NutrientStatus.LOW
    return NutrientStatus.DEFICIENT


def compare_intake(
    targets: Mapping[str, EnrichedTarget],
    intake: Mapping[str, float],
    day: date | None = None,
) -> ComparisonReport:
    """Compare daily intake totals with enriched targets.

    Every food log code is evaluated (missing intake counts as zero), plus any
    extra intake codes supplied under their target code. An amount given
    under the target code of an aliased food log code (folate_dfe_ug for
    folate_ug) counts for that food log code, and the food log code wins when
    both are present. The report status is
    the most severe outcome across all nutrients: any intake below 50% gives
    "deficit", otherwise any intake above its upper limit gives "warning".
    """
    nutrients: dict[str, NutrientComparison] = {}
    met: list[str] = []
    exceeded: list[str] = []
    deficit: list[str] = []
    no_data: list[str] = []
    severities: list[_Severity] = []

    for code, target_code in _tracked_codes(intake):
        amount = float(intake.get(code, intake.get(target_code)) or 0)
        target = targets.get(target_code)
        if target is None:
            no_data.append(code)
            continue

        over_limit = bool(target.upper_limit) and amount > target.upper_limit
        if not target.target and not over_limit:
            no_data.append(code)
            continue

        percentage = None
        if target.target:
            percentage = amount / target.target * 100

        nutrients[code] = NutrientComparison(
            code=code,
            target_code=target_code,
            name=target.name,
            category=target.category,
            intake=amount,
            target=target.target,
            upper_limit=target.upper_limit,
            percentage=round(percentage, 1) if percentage is not None else None,
            unit=target.unit,
            status=nutrient_status(amount, target.target, target.upper_limit),
            target_kind=target.target_kind,
        )

        if over_limit:
            exceeded.append(code)
            severities.append(_Severity.EXCEEDED)
        elif percentage >= MET_THRESHOLD_PERCENT:
            met.append(code)
        else:
            deficit.append(code)
            if percentage < SEVERE_DEFICIT_PERCENT:
                severities.append(_Severity.SEVERE_DEFICIT)
            else:
                severities.append(_Severity.MODERATE_DEFICIT)

    return ComparisonReport(
        date=day,
        status=_REPORT_STATUS[max(severities, default=_Severity.OK)],
        nutrients=MappingProxyType(nutrients),
        summary=ComparisonSummary(
            met=tuple(met),
            exceeded=tuple(exceeded),
            deficit=tuple(deficit),
            no_data=tuple(no_data),
        ),
    )


def overall_score(nutrients: Mapping[str, Scorable] | Iterable[Scorable]) -> int:
    """Return a 0-100 score weighted by nutrient category.

    Each nutrient contributes min(100, percentage); macros weigh 2, minerals
    1.5, vitamins and fatty acids 1, other 0.5, unrecognized categories 1.
    Nutrients without a percentage are skipped and an empty input scores 0.
    """
    items = nutrients.values() if isinstance(nutrients, Mapping) else nutrients
    total_weight = 0.0
    weighted_sum = 0.0
    for item in items:
        if item.percentage is None:
            continue
        weight = _category_weight(item.category)
        weighted_sum += min(100.0, item.percentage) * weight
        total_weight += weight
    if total_weight <= 0:
        return 0
    return round(weighted_sum / total_weight)


def intake_by_target_code(intake: Mapping[str, float]) -> dict[str, float]:
    """Re-key intake totals from food log codes to target codes.

    Aliased codes replace any amount given directly under their target code.
    """
    keyed = {
        code: float(amount or 0)
        for code, amount in intake.items()
        if code not in _ALIASED_CODES
    }
    for code, target_code in _ALIASED_CODES.items():
        if code in intake:
            keyed[target_code] = float(intake[code] or 0)
    return keyed


def remaining_intake(
    targets: Mapping[str, EnrichedTarget], consumed: Mapping[str, float]
) -> dict[str, RemainingNutrient]:
    """Return what is left to reach each target, keyed by target code.

    Consumed totals may use food log codes or target codes.
    """
    by_target = intake_by_target_code(consumed)
    remaining: dict[str, RemainingNutrient] = {}
    for code, target in targets.items():
        target_value = target.target or 0.0
        amount = by_target.get(code, 0.0)
        percent_complete = 0
        if target_value > 0:
            percent_complete = round(amount / target_value * 100)
        remaining[code] = RemainingNutrient(
            code=code,
            name=target.name,
            category=target.category,
            unit=target.unit,
            target=target_value,
            consumed=amount,
            remaining=max(0.0, target_value - amount),
            percent_complete=percent_complete,
            upper_limit=target.upper_limit,
            exceeds=amount > target_value,
            exceeds_ul=bool(target.upper_limit) and amount > target.upper_limit,
        )
    return remaining


def analyze_intake(
    targets: Mapping[str, EnrichedTarget], consumed: Mapping[str, float]
) -> IntakeAnalysis:
    """Group remaining amounts and score the day.

    Upper-limit excesses are reported before deficiencies, matching
    compare_intake.
    """
    by_nutrient = remaining_intake(targets, consumed)
    deficiencies: list[RemainingNutrient] = []
    excesses: list[RemainingNutrient] = []
    on_track: list[RemainingNutrient] = []
    for entry in by_nutrient.values():
        if entry.exceeds_ul:
            excesses.append(entry)
        elif entry.percent_complete < MET_THRESHOLD_PERCENT:
            deficiencies.append(entry)
        else:
            on_track.append(entry)
    deficiencies.sort(key=lambda entry: entry.percent_complete)

    return IntakeAnalysis(
        by_nutrient=MappingProxyType(by_nutrient),
        deficiencies=tuple(deficiencies),
        excesses=tuple(excesses),
        on_track=tuple(on_track),
        overall_score=overall_score(by_nutrient),
    )


def _tracked_codes(intake: Mapping[str, float]) -> list[tuple[str, str]]:
    codes = [(code.value, target) for code, target in INTAKE_TARGET_CODES.items()]
    known = {code for code, _ in codes}
    aliased_targets = set(_ALIASED_CODES.values())
    for code in intake:
        if code not in known and code not in aliased_targets:
            codes.append((code, code))
    return codes


def _category_weight(category: NutrientCategory | str) -> float:
    try:
        return CATEGORY_WEIGHTS[NutrientCategory(category)]
    except ValueError:
        return 1.0
