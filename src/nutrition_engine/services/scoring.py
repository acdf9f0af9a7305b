"""Deterministic 0-100 meal quality score."""

from collections.abc import Sequence
from dataclasses import dataclass, field

from nutrition_engine.domain.nutrition import NutritionFacts
from nutrition_engine.domain.scoring import Grade, ScoreBreakdown, ScoreResult
from nutrition_engine.rounding import round_int

MACRO_BALANCE_MAX = 30
MACRO_BAND_PENALTY = 10
MICRONUTRIENT_MAX = 25
FIBER_MAX = 20
PROCESSING_PENALTY_MAX = 15
PROCESSING_PENALTY_PER_HIT = 3
SODIUM_PENALTY_MAX = 10
SODIUM_PENALTY_THRESHOLD_MG = 400

# share of protein + carbs + fat grams, inclusive bounds
MACRO_BANDS: dict[str, tuple[float, float]] = {
    "protein": (0.15, 0.30),
    "carbs": (0.45, 0.65),
    "fat": (0.20, 0.35),
}

PROCESSING_INDICATORS = ("processed", "refined", "artificial", "preservative", "additive")

GRADE_BANDS: tuple[tuple[int, Grade], ...] = (
    (90, Grade.A),
    (80, Grade.B),
    (70, Grade.C),
    (60, Grade.D),
)


@dataclass
class NutritionScorer:
    """Scores aggregated meal nutrition; pure and side-effect free."""

    macro_bands: dict[str, tuple[float, float]] = field(
        default_factory=lambda: dict(MACRO_BANDS)
    )
    processing_indicators: Sequence[str] = PROCESSING_INDICATORS

    def score(
        self, aggregate: NutritionFacts, food_names: Sequence[str]
    ) -> ScoreResult:
        """Return the score, grade and per-component breakdown."""
        breakdown = ScoreBreakdown(
            macro_balance=self._macro_balance(aggregate),
            micronutrients=_micronutrients(aggregate),
            fiber=float(min(FIBER_MAX, aggregate.fiber * 2)),
            processing_level=self._processing_penalty(food_names),
            sodium_penalty=0.0 - sodium_penalty(aggregate.sodium),
        )
        final = round_int(max(0.0, min(100.0, breakdown.total())))
        return ScoreResult(
            score=final,
            grade=grade_for(final),
            breakdown=breakdown,
            explanation=_explain(breakdown),
        )

    def _macro_balance(self, aggregate: NutritionFacts) -> float:
        total = aggregate.protein + aggregate.carbs + aggregate.fat
        if total <= 0:
            return 0.0
        points = MACRO_BALANCE_MAX
        for name, (low, high) in self.macro_bands.items():
            share = getattr(aggregate, name) / total
            if share < low or share > high:
                points -= MACRO_BAND_PENALTY
        return float(max(0, points))

    def _processing_penalty(self, food_names: Sequence[str]) -> float:
        hits = 0
        for food in food_names:
            lowered = food.lower()
            hits += sum(1 for word in self.processing_indicators if word in lowered)
        return 0.0 - min(PROCESSING_PENALTY_MAX, hits * PROCESSING_PENALTY_PER_HIT)


def sodium_penalty(sodium_mg: float) -> float:
    """Points lost for sodium above 400mg, one per 100mg, at most 10."""
    return min(
        SODIUM_PENALTY_MAX,
        max(0.0, (sodium_mg - SODIUM_PENALTY_THRESHOLD_MG) / 100),
    )


def grade_for(score: int) -> Grade:
    """Map a 0-100 score to its letter grade."""
    for floor, grade in GRADE_BANDS:
        if score >= floor:
            return grade
    return Grade.F


def _micronutrients(aggregate: NutritionFacts) -> float:
    points = 0.0
    if aggregate.iron > 2:
        points += 5
    if aggregate.vitamin_c > 10:
        points += 5
    if aggregate.magnesium > 50:
        points += 5
    if aggregate.vitamin_b12 > 0.5:
        points += 5
    points += min(5.0, (aggregate.iron + aggregate.vitamin_c + aggregate.magnesium) / 20)
    return min(float(MICRONUTRIENT_MAX), points)


def _explain(breakdown: ScoreBreakdown) -> str:
    notes = []
    if breakdown.macro_balance > 20:
        notes.append("Well-balanced macronutrients")
    elif breakdown.macro_balance < 10:
        notes.append("Poor macronutrient balance")

    if breakdown.micronutrients > 15:
        notes.append("Rich in essential vitamins and minerals")
    elif breakdown.micronutrients < 5:
        notes.append("Low in essential micronutrients")

    if breakdown.fiber > 15:
        notes.append("High fiber content supports digestive health")
    elif breakdown.fiber < 5:
        notes.append("Low fiber content")

    if breakdown.processing_level < -10:
        notes.append("Highly processed foods detected")
    if breakdown.sodium_penalty < -5:
        notes.append("High sodium content")

    if not notes:
        return "Moderate nutritional quality."
    return ". ".join(notes) + "."
