"""Pydantic request models for the HTTP surface."""

from uuid import UUID

from pydantic import BaseModel, Field

from nutrition_engine.domain.targets import Goal


class FoodQueryIn(BaseModel):
    """A single food as entered by the user."""

    name: str = Field(min_length=1)
    quantity: float = Field(gt=0)
    unit: str = "g"


class AnalyzeRequest(BaseModel):
    """Meal analysis request."""

    items: list[FoodQueryIn] = Field(min_length=1)
    owner_id: UUID | None = None


class TargetsRequest(BaseModel):
    """Daily targets request; body metrics are validated by the calculator."""

    weight_kg: float | None = None
    height_cm: float | None = None
    age_years: float | None = None
    gender: str | None = None
    activity_level: str | None = None
    goal: Goal = Goal.MAINTENANCE
    owner_id: UUID | None = None
