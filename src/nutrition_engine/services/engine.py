"""Meal-level pipeline: resolve, scale, aggregate, score and check diets."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from nutrition_engine.domain.nutrition import (
    AggregateNutrition,
    FoodQuery,
    Found,
    NotFound,
    ResolvedFoodItem,
    SourceKind,
    SourceRecord,
)
from nutrition_engine.domain.scoring import DietCompatibility, ScoreResult
from nutrition_engine.services.aggregation import aggregate, scale
from nutrition_engine.services.diets import DietCompatibilityChecker
from nutrition_engine.services.resolver import SourceResolver
from nutrition_engine.services.scoring import NutritionScorer
from nutrition_engine.services.units import QuantityNormalizer

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MealAnalysis:
    """Everything computed for one meal."""

    items: list[ResolvedFoodItem]
    aggregate: AggregateNutrition
    score: ScoreResult
    compatibility: DietCompatibility
    unresolved: list[FoodQuery]
    confidence_score: float
    data_sources: list[SourceKind]


@dataclass
class NutritionEngine:
    """Entry point used by meal logging and dashboard callers."""

    resolver: SourceResolver
    normalizer: QuantityNormalizer
    scorer: NutritionScorer
    diet_checker: DietCompatibilityChecker

    async def resolve_and_score(self, queries: Sequence[FoodQuery]) -> MealAnalysis:
        """Resolve every query concurrently and score the resulting meal.

        Unmatched queries are reported in ``unresolved``; their names still
        count for processing and diet keyword checks.
        """
        resolutions = await self.resolver.resolve_many([q.name for q in queries])
        items: list[ResolvedFoodItem] = []
        unresolved: list[FoodQuery] = []
        for query, resolution in zip(queries, resolutions, strict=True):
            if isinstance(resolution, Found):
                items.append(self.build_item(query, resolution.record))
            else:
                unresolved.append(query)
        if unresolved:
            _logger.info(
                "Unresolved foods: %s", ", ".join(q.name for q in unresolved)
            )

        totals = aggregate(items)
        food_names = [query.name for query in queries]
        return MealAnalysis(
            items=items,
            aggregate=totals,
            score=self.scorer.score(totals, food_names),
            compatibility=self.diet_checker.check_all(food_names, totals),
            unresolved=unresolved,
            confidence_score=_mean_confidence(items),
            data_sources=_distinct_sources(items),
        )

    async def resolve_barcode_item(
        self, code: str, quantity: float = 100, unit: str = "g"
    ) -> ResolvedFoodItem | NotFound:
        """Resolve a scanned barcode into a scaled item."""
        resolution = await self.resolver.resolve_by_barcode(code)
        if isinstance(resolution, NotFound):
            return resolution
        query = FoodQuery(name=resolution.record.name, quantity=quantity, unit=unit)
        return self.build_item(query, resolution.record)

    def build_item(self, query: FoodQuery, record: SourceRecord) -> ResolvedFoodItem:
        """Scale a matched record to the quantity asked for."""
        grams = self.normalizer.normalize(query.quantity, query.unit)
        return ResolvedFoodItem(
            query=query,
            record=record,
            grams_equivalent=grams,
            scaled_nutrition=scale(record.facts, grams),
        )


def _mean_confidence(items: Sequence[ResolvedFoodItem]) -> float:
    if not items:
        return 0.0
    return sum(item.record.confidence for item in items) / len(items)


def _distinct_sources(items: Sequence[ResolvedFoodItem]) -> list[SourceKind]:
    seen: list[SourceKind] = []
    for item in items:
        if item.record.source not in seen:
            seen.append(item.record.source)
    return seen
