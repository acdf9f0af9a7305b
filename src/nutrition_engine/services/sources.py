"""Nutrition sources queried by the resolver, in priority order."""

from dataclasses import dataclass, field
from typing import Protocol

from nutrition_engine.adapters.fdc_client import FdcClient
from nutrition_engine.adapters.off_client import OpenFoodFactsClient
from nutrition_engine.domain.nutrition import (
    NutritionFacts,
    SourceKind,
    SourceRecord,
    amount_or_zero,
)

FDC_CONFIDENCE = 0.9
OFF_SEARCH_CONFIDENCE = 0.7
OFF_BARCODE_CONFIDENCE = 0.8
CURATED_CONFIDENCE = 0.7

_FDC_NUTRIENT_IDS = {
    1008: "calories",
    1003: "protein",
    1005: "carbs",
    1004: "fat",
    1079: "fiber",
    1089: "iron",
    1162: "vitamin_c",
    1090: "magnesium",
    1178: "vitamin_b12",
    1093: "sodium",
    2000: "sugar",
    1258: "saturated_fat",
}

# Atwater energy, reported by Foundation foods instead of 1008
_FDC_ENERGY_FALLBACK_IDS = (2047, 2048)

_OFF_NUTRIMENTS = {
    "proteins_100g": "protein",
    "carbohydrates_100g": "carbs",
    "fat_100g": "fat",
    "fiber_100g": "fiber",
    "sugars_100g": "sugar",
    "saturated-fat_100g": "saturated_fat",
}

_OFF_ENERGY_KEYS = ("energy-kcal_100g", "energy_kcal_100g")

CURATED_FOODS: dict[str, NutritionFacts] = {
    "apple": NutritionFacts(
        calories=52, protein=0.3, carbs=14, fat=0.2, fiber=2.4, vitamin_c=4.6
    ),
    "banana": NutritionFacts(
        calories=89, protein=1.1, carbs=23, fat=0.3, fiber=2.6, vitamin_c=8.7
    ),
    "orange": NutritionFacts(
        calories=47, protein=0.9, carbs=12, fat=0.1, fiber=2.4, vitamin_c=53.2
    ),
    "rice": NutritionFacts(
        calories=130, protein=2.7, carbs=28, fat=0.3, fiber=0.4, iron=0.8
    ),
    "chicken breast": NutritionFacts(
        calories=165, protein=31, carbs=0, fat=3.6, fiber=0, iron=0.7
    ),
    "broccoli": NutritionFacts(
        calories=34, protein=2.8, carbs=7, fat=0.4, fiber=2.6, vitamin_c=89.2
    ),
    "bread": NutritionFacts(
        calories=265, protein=9, carbs=49, fat=3.2, fiber=2.7, iron=3.6
    ),
}


class NutritionSource(Protocol):
    """A searchable nutrition database."""

    kind: SourceKind

    async def search(self, text: str) -> list[SourceRecord]:
        """Return candidate records for free text, possibly empty."""


class BarcodeSource(Protocol):
    """A nutrition database that can look up packaged products."""

    async def by_barcode(self, code: str) -> SourceRecord | None:
        """Return the product for a barcode, or None."""


@dataclass
class FdcSource(NutritionSource):
    """USDA FoodData Central as the authoritative source."""

    client: FdcClient
    page_size: int = 5
    kind: SourceKind = SourceKind.AUTHORITATIVE

    async def search(self, text: str) -> list[SourceRecord]:
        """Search FDC and map every food to a record."""
        payload = await self.client.search_foods(text, page_size=self.page_size)
        foods = payload.get("foods") or []
        return [
            SourceRecord(
                name=str(food.get("description") or "Unknown Food"),
                facts=_fdc_facts(food.get("foodNutrients") or []),
                confidence=FDC_CONFIDENCE,
                source=self.kind,
                brand=food.get("brandOwner") or food.get("brandName"),
            )
            for food in foods
        ]


@dataclass
class OpenFoodFactsSource(NutritionSource, BarcodeSource):
    """Open Food Facts as the community source."""

    client: OpenFoodFactsClient
    page_size: int = 5
    kind: SourceKind = SourceKind.COMMUNITY

    async def search(self, text: str) -> list[SourceRecord]:
        """Search products, dropping those without an energy value."""
        payload = await self.client.search_products(text, page_size=self.page_size)
        records = []
        for product in payload.get("products") or []:
            record = _off_record(product, OFF_SEARCH_CONFIDENCE, self.kind)
            if record is not None:
                records.append(record)
        return records

    async def by_barcode(self, code: str) -> SourceRecord | None:
        """Look up a single product by barcode."""
        payload = await self.client.get_product(code)
        product = payload.get("product")
        if payload.get("status") != 1 or not isinstance(product, dict):
            return None
        product.setdefault("code", code)
        return _off_record(product, OFF_BARCODE_CONFIDENCE, self.kind)


@dataclass
class CuratedSource(NutritionSource):
    """Small built-in dictionary of common whole foods."""

    foods: dict[str, NutritionFacts] = field(
        default_factory=lambda: dict(CURATED_FOODS)
    )
    confidence: float = CURATED_CONFIDENCE
    kind: SourceKind = SourceKind.CURATED

    async def search(self, text: str) -> list[SourceRecord]:
        """Return the first entry whose key overlaps the query text."""
        normalized = text.strip().lower()
        if not normalized:
            return []
        for key, facts in self.foods.items():
            if key in normalized or normalized in key:
                return [
                    SourceRecord(
                        name=key,
                        facts=facts,
                        confidence=self.confidence,
                        source=self.kind,
                    )
                ]
        return []


def _fdc_facts(food_nutrients: list[dict[str, object]]) -> NutritionFacts:
    """Extract known nutrients from FDC search results."""
    values: dict[str, object] = {}
    fallback_energy: dict[int, object] = {}
    for nutrient in food_nutrients:
        nutrient_info = nutrient.get("nutrient") or {}
        nutrient_id = nutrient.get("nutrientId") or nutrient_info.get("id")
        amount = nutrient.get("value", nutrient.get("amount"))
        if amount is None:
            continue
        if nutrient_id in _FDC_ENERGY_FALLBACK_IDS:
            fallback_energy[nutrient_id] = amount
            continue
        name = _FDC_NUTRIENT_IDS.get(nutrient_id)
        if name is not None:
            values[name] = amount
    if "calories" not in values:
        for nutrient_id in _FDC_ENERGY_FALLBACK_IDS:
            if nutrient_id in fallback_energy:
                values["calories"] = fallback_energy[nutrient_id]
                break
    return NutritionFacts.from_mapping(values)


def _off_record(
    product: dict[str, object], confidence: float, kind: SourceKind
) -> SourceRecord | None:
    nutriments = product.get("nutriments") or {}
    calories = next(
        (nutriments[key] for key in _OFF_ENERGY_KEYS if nutriments.get(key) is not None),
        None,
    )
    if calories is None:
        return None
    values: dict[str, object] = {"calories": calories}
    for key, name in _OFF_NUTRIMENTS.items():
        values[name] = nutriments.get(key)
    # sodium is reported in grams
    values["sodium"] = amount_or_zero(nutriments.get("sodium_100g")) * 1000
    return SourceRecord(
        name=str(product.get("product_name") or "Unknown Product"),
        facts=NutritionFacts.from_mapping(values),
        confidence=confidence,
        source=kind,
        barcode=product.get("code"),
        brand=product.get("brands"),
    )
