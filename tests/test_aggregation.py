"""Tests for nutrition scaling and aggregation."""

from itertools import permutations

import pytest

from nutrition_engine.domain.nutrition import (
    FoodQuery,
    NutritionFacts,
    ResolvedFoodItem,
)
from nutrition_engine.rounding import round_int
from nutrition_engine.services.aggregation import aggregate, scale
from tests.conftest import make_record


def _item(name: str, grams: float, **facts: float) -> ResolvedFoodItem:
    record = make_record(name, **facts)
    return ResolvedFoodItem(
        query=FoodQuery(name=name, quantity=grams, unit="g"),
        record=record,
        grams_equivalent=grams,
        scaled_nutrition=scale(record.facts, grams),
    )


def test_scale_rounds_each_field_to_its_precision() -> None:
    facts = NutritionFacts(calories=165, protein=31, fat=3.6, iron=0.7, vitamin_b12=0.3)

    scaled = scale(facts, 150)

    assert scaled.calories == 248
    assert scaled.protein == 46.5
    assert scaled.fat == 5.4
    assert scaled.iron == 1.05
    assert scaled.vitamin_b12 == 0.45
    assert scaled.carbs == 0


@pytest.mark.parametrize("grams", [0, 1, 33, 100, 137.5, 240, 1000])
def test_scaled_calories_match_rounded_product(grams: float) -> None:
    facts = NutritionFacts(calories=89)

    assert scale(facts, grams).calories == round_int(89 * grams / 100)


def test_aggregate_sums_fields() -> None:
    items = [
        _item("rice", 200, calories=130, protein=2.7, carbs=28, fat=0.3),
        _item("broccoli", 100, calories=34, protein=2.8, carbs=7, vitamin_c=89.2),
    ]

    total = aggregate(items)

    assert total.calories == 294
    assert total.protein == 8.2
    assert total.carbs == 63
    assert total.fat == 0.6
    assert total.vitamin_c == 89.2


def test_aggregate_is_order_independent() -> None:
    items = [
        _item("a", 37, calories=52, protein=0.3, carbs=14, iron=0.13, sodium=1),
        _item("b", 118, calories=89, protein=1.1, carbs=23, magnesium=27),
        _item("c", 91, calories=47, fat=0.1, vitamin_c=53.2, vitamin_b12=0.07),
        _item("d", 250, calories=265, protein=9, fiber=2.7, sodium=491),
    ]
    expected = aggregate(items)

    for ordering in permutations(items):
        assert aggregate(list(ordering)) == expected


def test_aggregate_of_nothing_is_zero() -> None:
    assert aggregate([]).as_dict() == NutritionFacts().as_dict()


def test_missing_and_invalid_values_default_to_zero() -> None:
    facts = NutritionFacts.from_mapping(
        {"calories": None, "protein": "3", "fat": -2, "sugar": "n/a"}
    )

    assert facts.calories == 0
    assert facts.protein == 3
    assert facts.fat == 0
    assert facts.sugar == 0
    assert facts.sodium == 0


def test_scale_handles_very_large_quantities() -> None:
    facts = NutritionFacts(calories=165, protein=31, iron=0.7)

    scaled = scale(facts, 1e30)

    assert scaled.calories == pytest.approx(1.65e30)
    assert scaled.protein == pytest.approx(3.1e29)
    assert scaled.iron == pytest.approx(7e27)
