"""Nutrition domain models."""

from dataclasses import dataclass, fields
from enum import Enum


class SourceKind(str, Enum):
    """Origin of a nutrition record, in lookup priority order."""

    AUTHORITATIVE = "authoritative"
    COMMUNITY = "community"
    CURATED = "curated"


@dataclass(frozen=True)
class FoodQuery:
    """A food as described by the caller."""

    name: str
    quantity: float
    unit: str


@dataclass(frozen=True)
class NutritionFacts:
    """Nutrient amounts; per 100g on source records, as-logged once scaled.

    Grams for macros, fiber, sugar and saturated fat; mg for iron,
    vitamin C, magnesium and sodium; mcg for vitamin B12.
    """

    calories: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0
    fiber: float = 0.0
    iron: float = 0.0
    vitamin_c: float = 0.0
    magnesium: float = 0.0
    vitamin_b12: float = 0.0
    sodium: float = 0.0
    sugar: float = 0.0
    saturated_fat: float = 0.0

    @classmethod
    def from_mapping(cls, values: dict[str, object]) -> "NutritionFacts":
        """Build facts from a partial mapping, defaulting absent values to 0."""
        kwargs: dict[str, float] = {}
        for name in field_names():
            kwargs[name] = amount_or_zero(values.get(name))
        return cls(**kwargs)

    def as_dict(self) -> dict[str, float]:
        """Return nutrient values keyed by field name."""
        return {name: getattr(self, name) for name in field_names()}


@dataclass(frozen=True)
class AggregateNutrition(NutritionFacts):
    """Summed as-logged nutrition of a meal."""


@dataclass(frozen=True)
class SourceRecord:
    """A candidate food returned by a nutrition source."""

    name: str
    facts: NutritionFacts
    confidence: float
    source: SourceKind
    barcode: str | None = None
    brand: str | None = None


@dataclass(frozen=True)
class ResolvedFoodItem:
    """A query matched to a record and scaled to the requested amount."""

    query: FoodQuery
    record: SourceRecord
    grams_equivalent: float
    scaled_nutrition: NutritionFacts


@dataclass(frozen=True)
class Found:
    """Successful resolution."""

    record: SourceRecord


@dataclass(frozen=True)
class NotFound:
    """No source produced a candidate for the query."""

    query: str


Resolution = Found | NotFound


def field_names() -> list[str]:
    """Return nutrient field names in declaration order."""
    return [item.name for item in fields(NutritionFacts)]


def amount_or_zero(value: object) -> float:
    """Parse a nutrient amount; missing, unparseable or negative values are 0."""
    if value is None:
        return 0.0
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return 0.0
    return number if number > 0 else 0.0
