"""Keyword and threshold based diet compatibility checks."""

from collections.abc import Sequence
from dataclasses import dataclass

from nutrition_engine.domain.nutrition import NutritionFacts
from nutrition_engine.domain.scoring import DietCompatibility, DietVerdict
from nutrition_engine.rounding import round_int

KETO_MAX_CARB_SHARE = 0.10
LOW_SODIUM_MAX_MG = 140

VEGAN_EXCLUDED = (
    "meat",
    "chicken",
    "beef",
    "pork",
    "fish",
    "egg",
    "dairy",
    "milk",
    "cheese",
    "butter",
    "yogurt",
    "honey",
)
VEGETARIAN_EXCLUDED = ("meat", "chicken", "beef", "pork", "fish", "seafood")
GLUTEN_SOURCES = ("wheat", "barley", "rye", "bread", "pasta", "cereal")
DAIRY_PRODUCTS = ("milk", "cheese", "butter", "yogurt", "cream", "dairy")

# how far keyword matching is trusted per diet, not computed from data
CONFIDENCE = {
    "keto": 0.95,
    "vegan": 0.9,
    "vegetarian": 0.9,
    "gluten_free": 0.85,
    "dairy_free": 0.9,
    "low_sodium": 0.99,
}


@dataclass
class DietCompatibilityChecker:
    """Evaluates six independent diet verdicts for a meal."""

    vegan_excluded: Sequence[str] = VEGAN_EXCLUDED
    vegetarian_excluded: Sequence[str] = VEGETARIAN_EXCLUDED
    gluten_sources: Sequence[str] = GLUTEN_SOURCES
    dairy_products: Sequence[str] = DAIRY_PRODUCTS

    def check_all(
        self, food_names: Sequence[str], aggregate: NutritionFacts
    ) -> DietCompatibility:
        """Run every diet check against the same foods and totals."""
        foods = [name.lower() for name in food_names]
        return DietCompatibility(
            keto=check_keto(aggregate),
            vegan=_keyword_verdict(
                foods,
                self.vegan_excluded,
                flagged="Contains animal products",
                clean="Contains only plant-based ingredients",
                confidence=CONFIDENCE["vegan"],
            ),
            vegetarian=_keyword_verdict(
                foods,
                self.vegetarian_excluded,
                flagged="Contains meat/fish",
                clean="Contains no meat or fish products",
                confidence=CONFIDENCE["vegetarian"],
            ),
            gluten_free=_keyword_verdict(
                foods,
                self.gluten_sources,
                flagged="Contains gluten",
                clean="No gluten-containing ingredients detected",
                confidence=CONFIDENCE["gluten_free"],
            ),
            dairy_free=_keyword_verdict(
                foods,
                self.dairy_products,
                flagged="Contains dairy",
                clean="No dairy products detected",
                confidence=CONFIDENCE["dairy_free"],
            ),
            low_sodium=check_low_sodium(aggregate),
        )


def check_keto(aggregate: NutritionFacts) -> DietVerdict:
    """Keto fits when carbs supply under 10% of calories."""
    if aggregate.calories <= 0:
        return DietVerdict(
            compatible=False,
            reason="No calorie data to evaluate carb share",
            confidence=CONFIDENCE["keto"],
        )
    carb_share = aggregate.carbs * 4 / aggregate.calories
    percent = round_int(carb_share * 100)
    if carb_share < KETO_MAX_CARB_SHARE:
        reason = f"Low carb content ({percent}% of calories)"
    else:
        reason = (
            f"Too high in carbs ({percent}% of calories, keto requires <10%)"
        )
    return DietVerdict(
        compatible=carb_share < KETO_MAX_CARB_SHARE,
        reason=reason,
        confidence=CONFIDENCE["keto"],
    )


def check_low_sodium(aggregate: NutritionFacts) -> DietVerdict:
    """Low sodium fits when the meal total is under 140mg.

    The threshold is absolute and applies to the as-logged total.
    """
    sodium = aggregate.sodium
    if sodium < LOW_SODIUM_MAX_MG:
        reason = f"Low sodium content ({sodium:g}mg)"
    else:
        reason = f"High sodium content ({sodium:g}mg, recommended <140mg per serving)"
    return DietVerdict(
        compatible=sodium < LOW_SODIUM_MAX_MG,
        reason=reason,
        confidence=CONFIDENCE["low_sodium"],
    )


def _keyword_verdict(
    foods: Sequence[str],
    keywords: Sequence[str],
    *,
    flagged: str,
    clean: str,
    confidence: float,
) -> DietVerdict:
    for food in foods:
        for keyword in keywords:
            if keyword in food:
                return DietVerdict(
                    compatible=False,
                    reason=f"{flagged}: {food} ({keyword})",
                    confidence=confidence,
                )
    return DietVerdict(compatible=True, reason=clean, confidence=confidence)
