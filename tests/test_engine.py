"""Tests for the meal-level pipeline."""

import asyncio

import pytest

from nutrition_engine.domain.nutrition import FoodQuery, NotFound, SourceKind
from nutrition_engine.domain.scoring import Grade
from nutrition_engine.services.engine import NutritionEngine

_MEAL = [
    FoodQuery(name="grilled chicken breast", quantity=150, unit="g"),
    FoodQuery(name="brown rice", quantity=1, unit="cup"),
    FoodQuery(name="xyzzynotfood", quantity=1, unit="piece"),
]


def test_resolve_and_score_meal(engine: NutritionEngine) -> None:
    analysis = asyncio.run(engine.resolve_and_score(_MEAL))

    assert [item.query.name for item in analysis.items] == [
        "grilled chicken breast",
        "brown rice",
    ]
    assert analysis.items[1].grams_equivalent == 240
    assert analysis.items[1].scaled_nutrition.calories == 295
    assert analysis.unresolved == [_MEAL[2]]

    total = analysis.aggregate
    assert total.calories == 543
    assert total.protein == 53.0
    assert total.carbs == 61.4
    assert total.fat == 7.8
    assert total.fiber == 3.8
    assert total.magnesium == 137.1
    assert total.sodium == 120.6

    assert analysis.score.breakdown.macro_balance == 10
    assert analysis.score.breakdown.micronutrients == 10
    assert analysis.score.score == 28
    assert analysis.score.grade is Grade.F

    assert analysis.compatibility.vegan.compatible is False
    assert analysis.compatibility.low_sodium.compatible is True
    assert analysis.confidence_score == 0.9
    assert analysis.data_sources == [SourceKind.AUTHORITATIVE]


def test_meal_order_does_not_change_totals(engine: NutritionEngine) -> None:
    forward = asyncio.run(engine.resolve_and_score(_MEAL))
    backward = asyncio.run(engine.resolve_and_score(list(reversed(_MEAL))))

    assert forward.aggregate == backward.aggregate
    assert forward.score == backward.score


def test_curated_fallback_mixes_sources(engine: NutritionEngine) -> None:
    analysis = asyncio.run(
        engine.resolve_and_score(
            [
                FoodQuery(name="grilled chicken breast", quantity=100, unit="g"),
                FoodQuery(name="banana", quantity=1, unit="medium"),
            ]
        )
    )

    assert analysis.data_sources == [SourceKind.AUTHORITATIVE, SourceKind.CURATED]
    assert analysis.confidence_score == pytest.approx(0.8)
    assert analysis.items[1].scaled_nutrition.calories == 134


def test_nothing_resolved(engine: NutritionEngine) -> None:
    analysis = asyncio.run(
        engine.resolve_and_score([FoodQuery(name="xyzzynotfood", quantity=1, unit="g")])
    )

    assert analysis.items == []
    assert analysis.aggregate.calories == 0
    assert analysis.score.score == 0
    assert analysis.confidence_score == 0.0
    assert analysis.data_sources == []


def test_resolve_barcode_item(engine: NutritionEngine) -> None:
    item = asyncio.run(engine.resolve_barcode_item("3017620422003", 15, "g"))
    missing = asyncio.run(engine.resolve_barcode_item("000"))

    assert not isinstance(item, NotFound)
    assert item.query.name == "Nutella"
    assert item.grams_equivalent == 15
    assert item.scaled_nutrition.calories == 81
    assert missing == NotFound(query="000")
