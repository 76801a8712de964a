"""Core domain models for the nutrition engine."""

from dataclasses import dataclass
from enum import Enum


class Sex(str, Enum):
    """Biological sex used by the energy formulas."""

    FEMALE = "female"
    MALE = "male"


class LifeStage(str, Enum):
    """Nutritional life stage driving which target table applies."""

    MALE_ADULT = "male_adult"
    FEMALE_NONPREGNANT = "female_nonpregnant"
    PREGNANT_T1 = "pregnant_t1"
    PREGNANT_T2 = "pregnant_t2"
    PREGNANT_T3 = "pregnant_t3"
    LACTATING_0_6 = "lactating_0_6"
    LACTATING_7_12 = "lactating_7_12"


class ActivityLevel(str, Enum):
    """Activity levels in increasing order of energy expenditure."""

    SEDENTARY = "sedentary"
    LIGHT = "light"
    MODERATE = "moderate"
    ACTIVE = "active"
    VERY_ACTIVE = "very_active"

    @classmethod
    def parse(cls, value: "ActivityLevel | str | None") -> "ActivityLevel":
        """Return the matching level, sedentary for missing or unknown values."""
        if isinstance(value, ActivityLevel):
            return value
        if not value:
            return cls.SEDENTARY
        key = ACTIVITY_ALIASES.get(value, value)
        try:
            return cls(key)
        except ValueError:
            return cls.SEDENTARY


# Form labels used by older clients.
ACTIVITY_ALIASES = {
    "lightly_active": "light",
    "moderately_active": "moderate",
    "extra_active": "very_active",
}


class NutrientCategory(str, Enum):
    """Nutrient grouping used for display and score weighting."""

    MACRO = "macro"
    VITAMIN = "vitamin"
    MINERAL = "mineral"
    FATTY_ACID = "fatty_acid"
    OTHER = "other"


@dataclass(frozen=True)
class UserProfile:
    """Profile values for a single calculation."""

    age_years: float
    sex: Sex
    weight_kg: float
    height_cm: float
    activity_level: ActivityLevel = ActivityLevel.SEDENTARY
    is_pregnant: bool = False
    pregnancy_week: int | None = None
    pre_pregnancy_weight_kg: float | None = None
    is_lactating: bool = False
    lactation_months: int | None = None
    is_multiples: bool = False

    def __post_init__(self) -> None:
        # Older labels and missing values resolve to a concrete level.
        level = ActivityLevel.parse(self.activity_level)
        object.__setattr__(self, "activity_level", level)
