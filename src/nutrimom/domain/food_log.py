"""Food log models and daily intake aggregation."""

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date, datetime

from pydantic import BaseModel, Field

# Codes summed from each meal's totals.
MEAL_TOTAL_CODES: tuple[str, ...] = (
    "energy_kcal",
    "protein_g",
    "carbs_g",
    "fat_g",
    "fiber_g",
    "sodium_mg",
)

# Codes summed from each food item's micronutrients.
MICRONUTRIENT_CODES: tuple[str, ...] = (
    "vitamin_a_ug",
    "vitamin_c_mg",
    "vitamin_d_ug",
    "folate_ug",
    "iron_mg",
    "calcium_mg",
    "zinc_mg",
    "omega3_mg",
)


class FoodItem(BaseModel):
    """Single food item from a meal analysis."""

    name: str
    quantity: float | None = None
    unit: str | None = None
    estimated_weight_g: float | None = Field(default=None, ge=0)
    confidence: float | None = Field(default=None, ge=0.0, le=1.0)
    preparation_method: str | None = None
    nutrients: dict[str, float] = Field(default_factory=dict)
    micronutrients: dict[str, float] = Field(default_factory=dict)


class MealAnalysis(BaseModel):
    """Structured meal analysis as produced by a human or an LLM."""

    analysis_id: str
    timestamp: datetime | None = None
    confidence_overall: float | None = Field(default=None, ge=0.0, le=1.0)
    meal_type: str | None = None
    food_items: list[FoodItem]
    totals: dict[str, float] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    pregnancy_relevant_notes: list[str] = Field(default_factory=list)


@dataclass(frozen=True)
class MealEntry:
    """Meal stored in a day's log."""

    id: str
    logged_at: datetime
    meal_type: str
    food_items: tuple[FoodItem, ...]
    totals: dict[str, float]
    warnings: tuple[str, ...] = ()
    pregnancy_notes: tuple[str, ...] = ()


@dataclass(frozen=True)
class DailyLog:
    """Meals logged on one day with their summed intake."""

    day: date
    meals: tuple[MealEntry, ...] = ()
    totals: dict[str, float] = field(default_factory=lambda: empty_totals())


def empty_totals() -> dict[str, float]:
    """Return a zeroed intake mapping for every tracked code."""
    return {code: 0.0 for code in (*MEAL_TOTAL_CODES, *MICRONUTRIENT_CODES)}


def meal_entry(analysis: MealAnalysis, logged_at: datetime) -> MealEntry:
    """Convert a meal analysis into a log entry."""
    return MealEntry(
        id=analysis.analysis_id,
        logged_at=analysis.timestamp or logged_at,
        meal_type=analysis.meal_type or "snack",
        food_items=tuple(analysis.food_items),
        totals=dict(analysis.totals),
        warnings=tuple(analysis.warnings),
        pregnancy_notes=tuple(analysis.pregnancy_relevant_notes),
    )


def daily_totals(meals: Iterable[MealEntry]) -> dict[str, float]:
    """Sum macros from meal totals and micronutrients from food items."""
    totals = empty_totals()
    for meal in meals:
        for code in MEAL_TOTAL_CODES:
            totals[code] += meal.totals.get(code) or 0.0
        for item in meal.food_items:
            for code in MICRONUTRIENT_CODES:
                totals[code] += item.micronutrients.get(code) or 0.0
    return totals


def build_daily_log(day: date, meals: Iterable[MealEntry]) -> DailyLog:
    """Return a day's log with totals recomputed from its meals."""
    entries = tuple(meals)
    return DailyLog(day=day, meals=entries, totals=daily_totals(entries))
