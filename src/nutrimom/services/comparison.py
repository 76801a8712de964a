"""Intake comparison service."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date

from nutrimom.domain.comparison import (
    ComparisonReport,
    IntakeAnalysis,
    analyze_intake,
    compare_intake,
    overall_score,
)
from nutrimom.domain.recommendations import (
    Insight,
    Recommendation,
    nutrient_insights,
    recommendations,
)
from nutrimom.domain.targets import EnrichedTarget

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IntakeAssessment:
    """Comparison report with its score and advice."""

    report: ComparisonReport
    score: int
    recommendations: list[Recommendation]
    insights: list[Insight]


@dataclass
class ComparisonService:
    """Service comparing daily intake against plan targets."""

    debug: bool = False

    def assess(
        self,
        targets: Mapping[str, EnrichedTarget],
        intake: Mapping[str, float],
        day: date | None = None,
    ) -> IntakeAssessment:
        """Compare intake with targets and derive score and advice."""
        report = compare_intake(targets, intake, day)
        assessment = IntakeAssessment(
            report=report,
            score=overall_score(report.nutrients),
            recommendations=recommendations(report),
            insights=nutrient_insights(report),
        )
        if self.debug:
            _logger.info(
                "Intake compared: day=%s status=%s score=%s deficit=%s exceeded=%s",
                day,
                report.status.value,
                assessment.score,
                len(report.summary.deficit),
                len(report.summary.exceeded),
            )
        return assessment

    def analyze(
        self,
        targets: Mapping[str, EnrichedTarget],
        consumed: Mapping[str, float],
    ) -> IntakeAnalysis:
        """Return remaining amounts per target code.

        Consumed totals may be keyed by food log code, as in a day's log.
        """
        return analyze_intake(targets, consumed)
