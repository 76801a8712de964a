"""FastAPI application factory."""

import logging
from dataclasses import asdict
from datetime import date

from fastapi import FastAPI, HTTPException, Path, Query, Request, status

from nutrimom.api.models import ComparisonRequest, ProfileRequest
from nutrimom.app_logging import configure_logging
from nutrimom.containers import AppContainer
from nutrimom.domain.classification import age_band, life_stage_label, week_info
from nutrimom.domain.comparison import ComparisonReport
from nutrimom.domain.food_log import DailyLog, MealAnalysis, MealEntry
from nutrimom.domain.plan import NutritionPlan
from nutrimom.domain.targets import critical_pregnancy_nutrients, nutrients_by_category
from nutrimom.services.comparison import IntakeAssessment
from nutrimom.services.food_log import DailySummary


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(logging.DEBUG if container.settings.debug else logging.INFO)

    app = FastAPI(title="NutriMom")
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/plans")
    async def create_plan(
        payload: ProfileRequest, request: Request
    ) -> dict[str, object]:
        """Build a nutrition plan with body composition for a profile."""
        state_container: AppContainer = request.app.state.container
        profile = payload.to_profile()
        plan = state_container.plan_service.build_plan(profile)
        body = state_container.plan_service.body_composition(profile)
        return {
            "plan": _plan_payload(plan),
            "body_composition": asdict(body),
        }

    @app.post("/comparisons")
    async def create_comparison(
        payload: ComparisonRequest, request: Request
    ) -> dict[str, object]:
        """Compare daily intake against a profile plan or a life stage."""
        state_container: AppContainer = request.app.state.container
        plan_service = state_container.plan_service
        if payload.profile is not None:
            plan = plan_service.build_plan(payload.profile.to_profile())
            stage = plan.classification.life_stage
            band = plan.classification.age_band
            targets = plan.targets
        else:
            stage = payload.life_stage
            band = age_band(state_container.reference, payload.age_years)
            targets = plan_service.targets(stage, band)
        assessment = state_container.comparison_service.assess(
            targets, payload.intake, payload.day
        )
        return {
            "life_stage": stage.value,
            "age_band": band,
            **_assessment_payload(assessment),
        }

    @app.get("/reference/nutrients")
    async def list_nutrients(request: Request) -> dict[str, object]:
        """Return nutrient definitions grouped by category."""
        reference = request.app.state.container.reference
        return {
            "categories": {
                category.value: [asdict(nutrient) for nutrient in nutrients]
                for category, nutrients in nutrients_by_category(reference).items()
            },
            "critical_pregnancy": [
                nutrient.code for nutrient in critical_pregnancy_nutrients(reference)
            ],
        }

    @app.get("/reference/weeks/{week}")
    async def pregnancy_week(
        request: Request, week: int = Path(ge=1, le=42)
    ) -> dict[str, object]:
        """Return life stage and milestone details for a pregnancy week."""
        reference = request.app.state.container.reference
        entry = week_info(reference, week)
        return {
            **asdict(entry),
            "life_stage_label": life_stage_label(reference, entry.life_stage),
        }

    @app.get("/reference/pregnancy-comparison")
    async def pregnancy_comparison(
        request: Request,
        age_years: float = Query(ge=14, le=60),
        week: int = Query(ge=1, le=42),
    ) -> dict[str, object]:
        """Return how targets change from non-pregnant to a pregnancy week."""
        state_container: AppContainer = request.app.state.container
        deltas = state_container.plan_service.pregnancy_comparison(age_years, week)
        return {"nutrients": [asdict(delta) for delta in deltas]}

    @app.post("/meals")
    async def log_meal(payload: MealAnalysis, request: Request) -> dict[str, object]:
        """Store a meal analysis in the food log."""
        food_log = request.app.state.container.food_log_service
        entry = food_log.add_meal(payload)
        return _meal_payload(entry)

    @app.get("/days/{day}")
    async def daily_log(day: date, request: Request) -> dict[str, object]:
        """Return the meals and summed intake logged on a day."""
        food_log = request.app.state.container.food_log_service
        return _daily_log_payload(food_log.get_daily_log(day))

    @app.delete("/days/{day}/meals/{meal_id}")
    async def remove_meal(
        day: date, meal_id: str, request: Request
    ) -> dict[str, object]:
        """Remove a meal from a day's log."""
        food_log = request.app.state.container.food_log_service
        if not food_log.remove_meal(day, meal_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return {"removed": meal_id, "day": day}

    @app.post("/days/{day}/summary")
    async def daily_summary(
        day: date, payload: ProfileRequest, request: Request
    ) -> dict[str, object]:
        """Summarize a day's log against the plan for a profile."""
        state_container: AppContainer = request.app.state.container
        plan = state_container.plan_service.build_plan(payload.to_profile())
        summary = state_container.food_log_service.daily_summary(plan.targets, day)
        return _summary_payload(summary)

    return app


def _plan_payload(plan: NutritionPlan) -> dict[str, object]:
    return {
        "profile": asdict(plan.profile),
        "classification": asdict(plan.classification),
        "energy": asdict(plan.energy),
        "targets": {code: asdict(target) for code, target in plan.targets.items()},
    }


def _report_payload(report: ComparisonReport) -> dict[str, object]:
    return {
        "date": report.date,
        "status": report.status.value,
        "nutrients": {
            code: asdict(entry) for code, entry in report.nutrients.items()
        },
        "summary": asdict(report.summary),
    }


def _assessment_payload(assessment: IntakeAssessment) -> dict[str, object]:
    return {
        "report": _report_payload(assessment.report),
        "score": assessment.score,
        "recommendations": [asdict(item) for item in assessment.recommendations],
        "insights": [asdict(item) for item in assessment.insights],
    }


def _meal_payload(entry: MealEntry) -> dict[str, object]:
    return {
        "id": entry.id,
        "logged_at": entry.logged_at,
        "meal_type": entry.meal_type,
        "food_items": [item.model_dump() for item in entry.food_items],
        "totals": entry.totals,
        "warnings": list(entry.warnings),
        "pregnancy_notes": list(entry.pregnancy_notes),
    }


def _daily_log_payload(log: DailyLog) -> dict[str, object]:
    return {
        "day": log.day,
        "meals": [_meal_payload(meal) for meal in log.meals],
        "totals": log.totals,
    }


def _summary_payload(summary: DailySummary) -> dict[str, object]:
    payload = asdict(summary)
    payload["status"] = summary.status.value
    return payload
