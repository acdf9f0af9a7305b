"""Domain models for meal quality scoring and diet fit."""

from dataclasses import dataclass
from enum import Enum


class Grade(str, Enum):
    """Letter grade derived from the numeric score."""

    A = "A"
    B = "B"
    C = "C"
    D = "D"
    F = "F"


@dataclass(frozen=True)
class ScoreBreakdown:
    """Signed point contributions; bonuses are >= 0, penalties <= 0."""

    macro_balance: float
    micronutrients: float
    fiber: float
    processing_level: float
    sodium_penalty: float

    def total(self) -> float:
        """Return the unclamped sum of all components."""
        return (
            self.macro_balance
            + self.micronutrients
            + self.fiber
            + self.processing_level
            + self.sodium_penalty
        )


@dataclass(frozen=True)
class ScoreResult:
    """Quality score for a meal."""

    score: int
    grade: Grade
    breakdown: ScoreBreakdown
    explanation: str


@dataclass(frozen=True)
class DietVerdict:
    """Result of a single diet check."""

    compatible: bool
    reason: str
    confidence: float


@dataclass(frozen=True)
class DietCompatibility:
    """Verdicts for every supported diet."""

    keto: DietVerdict
    vegan: DietVerdict
    vegetarian: DietVerdict
    gluten_free: DietVerdict
    dairy_free: DietVerdict
    low_sodium: DietVerdict

    def as_dict(self) -> dict[str, DietVerdict]:
        """Return verdicts keyed by their public diet key."""
        return {
            "keto": self.keto,
            "vegan": self.vegan,
            "vegetarian": self.vegetarian,
            "glutenFree": self.gluten_free,
            "dairyFree": self.dairy_free,
            "lowSodium": self.low_sodium,
        }
