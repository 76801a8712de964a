"""Advisory text derived from a comparison report."""

from dataclasses import dataclass
from enum import Enum

from nutrimom.domain.comparison import (
    MET_THRESHOLD_PERCENT,
    SEVERE_DEFICIT_PERCENT,
    ComparisonReport,
)

DEFAULT_SUGGESTION = "nutrient-rich foods"

FOOD_SUGGESTIONS: dict[str, str] = {
    "iron_mg": "iron-rich foods like spinach, legumes, or lean red meat",
    "calcium_mg": (
        "calcium-rich foods like dairy, fortified plant milk, or leafy greens"
    ),
    "folate_ug": "folate-rich foods like leafy greens, legumes, or fortified cereals",
    "vitamin_c_mg": "vitamin C sources like citrus fruits, bell peppers, or berries",
    "vitamin_d_ug": "vitamin D sources like fatty fish, fortified foods, or egg yolks",
    "vitamin_a_ug": "vitamin A sources like sweet potato, carrots, or leafy greens",
    "zinc_mg": "zinc-rich foods like meat, legumes, or seeds",
    "protein_g": "protein sources like lean meat, fish, eggs, legumes, or tofu",
    "fiber_g": "fiber-rich foods like whole grains, vegetables, fruits, or legumes",
    "omega3_mg": "omega-3 sources like fatty fish, walnuts, or flaxseed",
}

# Target-table codes of nutrients that matter most during pregnancy.
CRITICAL_PREGNANCY_CODES: tuple[str, ...] = (
    "folate_dfe_ug",
    "iron_mg",
    "calcium_mg",
    "vitamin_d_ug",
    "dha_mg",
    "iodine_ug",
)


class RecommendationType(str, Enum):
    """Direction of a recommendation."""

    INCREASE = "increase"
    REDUCE = "reduce"


class InsightType(str, Enum):
    """Severity of an insight."""

    CRITICAL = "critical"
    WARNING = "warning"
    SUCCESS = "success"
    CAUTION = "caution"


@dataclass(frozen=True)
class Recommendation:
    """Suggested change for one nutrient."""

    nutrient: str
    type: RecommendationType
    message: str
    amount: float
    unit: str


@dataclass(frozen=True)
class Insight:
    """Short observation about a day's intake."""

    type: InsightType
    message: str
    nutrient: str | None = None
    suggestion: str | None = None


def food_suggestion(code: str) -> str:
    """Return food sources to suggest for a nutrient code."""
    return FOOD_SUGGESTIONS.get(code, DEFAULT_SUGGESTION)


def recommendations(report: ComparisonReport) -> list[Recommendation]:
    """Suggest increases for deficits and reductions for excesses."""
    results: list[Recommendation] = []
    for code in report.summary.deficit:
        entry = report.nutrients.get(code)
        if entry is None or entry.target is None:
            continue
        results.append(
            Recommendation(
                nutrient=code,
                type=RecommendationType.INCREASE,
                message=(
                    f"Consider adding more {food_suggestion(code)} "
                    f"to reach your {entry.name} target."
                ),
                amount=round(entry.target - entry.intake, 1),
                unit=entry.unit,
            )
        )

    for code in report.summary.exceeded:
        entry = report.nutrients.get(code)
        if entry is None or entry.upper_limit is None:
            continue
        results.append(
            Recommendation(
                nutrient=code,
                type=RecommendationType.REDUCE,
                message=(
                    f"You've exceeded the upper limit for {entry.name}. "
                    "Consider reducing intake."
                ),
                amount=round(entry.intake - entry.upper_limit, 1),
                unit=entry.unit,
            )
        )
    return results


def nutrient_insights(report: ComparisonReport) -> list[Insight]:
    """Return insights on critical pregnancy nutrients and overall balance."""
    insights: list[Insight] = []
    for entry in report.nutrients.values():
        if entry.target_code not in CRITICAL_PREGNANCY_CODES:
            continue
        if entry.percentage is None:
            continue
        if entry.percentage < SEVERE_DEFICIT_PERCENT:
            insights.append(
                Insight(
                    type=InsightType.CRITICAL,
                    nutrient=entry.name,
                    message=(
                        f"{entry.name} is critically low ({round(entry.percentage)}%). "
                        "This is essential during pregnancy."
                    ),
                    suggestion=food_suggestion(entry.code),
                )
            )
        elif entry.percentage < MET_THRESHOLD_PERCENT:
            insights.append(
                Insight(
                    type=InsightType.WARNING,
                    nutrient=entry.name,
                    message=(
                        f"{entry.name} is below target ({round(entry.percentage)}%)."
                    ),
                    suggestion=food_suggestion(entry.code),
                )
            )

    if not report.summary.deficit and not report.summary.exceeded:
        insights.append(
            Insight(
                type=InsightType.SUCCESS,
                message="Great job! Your nutrient intake looks balanced today.",
            )
        )

    if report.summary.exceeded:
        names = ", ".join(report.summary.exceeded)
        insights.append(
            Insight(
                type=InsightType.CAUTION,
                message=(
                    f"Some nutrients exceed upper limits: {names}. "
                    "Consider moderating intake."
                ),
            )
        )
    return insights
