"""Pydantic models for API request payloads."""

from datetime import date

from pydantic import (
    BaseModel,
    Field,
    NonNegativeFloat,
    field_validator,
    model_validator,
)

from nutrimom.domain.models import (
    ACTIVITY_ALIASES,
    ActivityLevel,
    LifeStage,
    Sex,
    UserProfile,
)


class ProfileRequest(BaseModel):
    """User profile payload."""

    age_years: float = Field(ge=14, le=60)
    sex: Sex
    weight_kg: float = Field(ge=30, le=250)
    height_cm: float = Field(ge=100, le=250)
    activity_level: ActivityLevel = ActivityLevel.SEDENTARY
    is_pregnant: bool = False
    pregnancy_week: int | None = Field(default=None, ge=1, le=42)
    pre_pregnancy_weight_kg: float | None = Field(default=None, ge=30, le=250)
    is_lactating: bool = False
    lactation_months: int | None = Field(default=None, ge=0, le=24)
    is_multiples: bool = False

    @field_validator("activity_level", mode="before")
    @classmethod
    def resolve_activity_alias(cls, value: object) -> object:
        if isinstance(value, str):
            return ACTIVITY_ALIASES.get(value, value)
        return value

    def to_profile(self) -> UserProfile:
        """Convert the payload into a domain profile."""
        return UserProfile(
            age_years=self.age_years,
            sex=self.sex,
            weight_kg=self.weight_kg,
            height_cm=self.height_cm,
            activity_level=self.activity_level,
            is_pregnant=self.is_pregnant,
            pregnancy_week=self.pregnancy_week,
            pre_pregnancy_weight_kg=self.pre_pregnancy_weight_kg,
            is_lactating=self.is_lactating,
            lactation_months=self.lactation_months,
            is_multiples=self.is_multiples,
        )


class ComparisonRequest(BaseModel):
    """Daily intake compared against a profile plan or a life stage."""

    profile: ProfileRequest | None = None
    life_stage: LifeStage | None = None
    age_years: float | None = Field(default=None, ge=0)
    intake: dict[str, NonNegativeFloat] = Field(default_factory=dict)
    day: date | None = None

    @model_validator(mode="after")
    def require_target_source(self) -> "ComparisonRequest":
        missing_stage = self.life_stage is None or self.age_years is None
        if self.profile is None and missing_stage:
            raise ValueError("Provide a profile or both life_stage and age_years")
        return self
