"""Scaling per-100g nutrition and summing meals."""

import math
from collections.abc import Iterable

from nutrition_engine.domain.nutrition import (
    AggregateNutrition,
    NutritionFacts,
    ResolvedFoodItem,
    field_names,
)
from nutrition_engine.rounding import round_half_up

FIELD_PRECISION: dict[str, int] = {
    "calories": 0,
    "protein": 1,
    "carbs": 1,
    "fat": 1,
    "fiber": 1,
    "sugar": 1,
    "saturated_fat": 1,
    "iron": 2,
    "vitamin_c": 2,
    "magnesium": 2,
    "vitamin_b12": 2,
    "sodium": 2,
}


def scale(facts: NutritionFacts, grams: float) -> NutritionFacts:
    """Scale per-100g facts to ``grams``, rounding each field afterwards."""
    factor = grams / 100
    values = {
        name: round_half_up(value * factor, FIELD_PRECISION[name])
        for name, value in facts.as_dict().items()
    }
    return NutritionFacts(**values)


def aggregate(items: Iterable[ResolvedFoodItem]) -> AggregateNutrition:
    """Sum scaled nutrition across items; the order of items is irrelevant."""
    columns: dict[str, list[float]] = {name: [] for name in field_names()}
    for item in items:
        for name, value in item.scaled_nutrition.as_dict().items():
            columns[name].append(value or 0.0)
    totals = {
        name: round_half_up(math.fsum(values), FIELD_PRECISION[name])
        for name, values in columns.items()
    }
    return AggregateNutrition(**totals)
