"""Domain models for personalized daily targets."""

from dataclasses import dataclass
from enum import Enum


class Goal(str, Enum):
    """Body composition goal."""

    WEIGHT_LOSS = "weight_loss"
    WEIGHT_GAIN = "weight_gain"
    MAINTENANCE = "maintenance"
    MUSCLE_GAIN = "muscle_gain"


@dataclass(frozen=True)
class PersonalProfile:
    """Body metrics; every field must be present to calculate targets."""

    weight_kg: float | None
    height_cm: float | None
    age_years: float | None
    gender: str | None
    activity_level: str | None


@dataclass(frozen=True)
class CalculatedTargets:
    """Daily calorie and macro targets."""

    calories: int
    protein: int
    carbs: int
    fat: int
    fiber: int
    bmr: int
    tdee: int
    explanation: str
