"""Personalized daily calorie and macro targets."""

from dataclasses import dataclass, field

from nutrition_engine.domain.errors import ValidationError
from nutrition_engine.domain.targets import CalculatedTargets, Goal, PersonalProfile
from nutrition_engine.rounding import round_int

ACTIVITY_MULTIPLIERS: dict[str, float] = {
    "sedentary": 1.2,
    "light": 1.375,
    "moderate": 1.55,
    "active": 1.725,
    "very_active": 1.9,
}
DEFAULT_ACTIVITY_LEVEL = "moderate"

GOAL_CALORIE_DELTAS: dict[Goal, float] = {
    Goal.WEIGHT_LOSS: -500,
    Goal.WEIGHT_GAIN: 300,
    Goal.MUSCLE_GAIN: 200,
    Goal.MAINTENANCE: 0,
}

# grams of protein per kg of body weight
PROTEIN_PER_KG: dict[Goal, float] = {
    Goal.WEIGHT_LOSS: 1.8,
    Goal.MUSCLE_GAIN: 2.2,
}
STANDARD_PROTEIN_PER_KG = 1.2
HIGH_PROTEIN_FAT_SHARE = 0.25
STANDARD_CARB_SHARE = 0.45
STANDARD_FAT_SHARE = 0.30
FIBER_PER_1000_KCAL = 14

KCAL_PER_G_PROTEIN = 4
KCAL_PER_G_CARBS = 4
KCAL_PER_G_FAT = 9

_GOAL_EXPLANATIONS = {
    Goal.WEIGHT_LOSS: "500-calorie deficit for 1lb/week weight loss.",
    Goal.WEIGHT_GAIN: "300-calorie surplus for healthy weight gain.",
    Goal.MAINTENANCE: "Maintenance calories to maintain current weight.",
    Goal.MUSCLE_GAIN: "Lean muscle gain calories with high protein.",
}

_REQUIRED_FIELDS = ("weight_kg", "height_cm", "age_years", "gender", "activity_level")


@dataclass
class TargetCalculator:
    """Derives daily targets from body metrics with Mifflin-St Jeor."""

    activity_multipliers: dict[str, float] = field(
        default_factory=lambda: dict(ACTIVITY_MULTIPLIERS)
    )
    goal_calorie_deltas: dict[Goal, float] = field(
        default_factory=lambda: dict(GOAL_CALORIE_DELTAS)
    )

    def calculate_targets(
        self, profile: PersonalProfile, goal: Goal | str
    ) -> CalculatedTargets:
        """Return integer targets for ``goal``; never defaults body metrics."""
        _validate(profile)
        goal = Goal(goal)
        weight = float(profile.weight_kg)  # type: ignore[arg-type]
        activity_level = str(profile.activity_level).strip().lower()

        bmr = basal_metabolic_rate(
            weight,
            float(profile.height_cm),  # type: ignore[arg-type]
            float(profile.age_years),  # type: ignore[arg-type]
            str(profile.gender),
        )
        multiplier = self.activity_multipliers.get(
            activity_level, self.activity_multipliers[DEFAULT_ACTIVITY_LEVEL]
        )
        tdee = bmr * multiplier
        calories = tdee + self.goal_calorie_deltas[goal]

        if goal in PROTEIN_PER_KG:
            protein = round_int(weight * PROTEIN_PER_KG[goal])
            fat = round_int(calories * HIGH_PROTEIN_FAT_SHARE / KCAL_PER_G_FAT)
            remaining = calories - protein * KCAL_PER_G_PROTEIN - fat * KCAL_PER_G_FAT
            carbs = round_int(remaining / KCAL_PER_G_CARBS)
        else:
            protein = round_int(weight * STANDARD_PROTEIN_PER_KG)
            carbs = round_int(calories * STANDARD_CARB_SHARE / KCAL_PER_G_CARBS)
            fat = round_int(calories * STANDARD_FAT_SHARE / KCAL_PER_G_FAT)

        return CalculatedTargets(
            calories=round_int(calories),
            protein=protein,
            carbs=carbs,
            fat=fat,
            fiber=round_int(calories / 1000 * FIBER_PER_1000_KCAL),
            bmr=round_int(bmr),
            tdee=round_int(tdee),
            explanation=(
                f"{_GOAL_EXPLANATIONS[goal]} Based on your BMR ({round_int(bmr)}) "
                f"and {activity_level} activity level."
            ),
        )


def basal_metabolic_rate(
    weight_kg: float, height_cm: float, age_years: float, gender: str
) -> float:
    """Mifflin-St Jeor BMR; any gender other than male uses the -161 offset."""
    base = 10 * weight_kg + 6.25 * height_cm - 5 * age_years
    if gender.strip().lower() == "male":
        return base + 5
    return base - 161


def _validate(profile: PersonalProfile) -> None:
    missing = []
    for name in _REQUIRED_FIELDS:
        value = getattr(profile, name)
        if value is None or (isinstance(value, str) and not value.strip()):
            missing.append(name)
        elif isinstance(value, int | float) and value <= 0:
            missing.append(name)
    if missing:
        raise ValidationError(missing)
