"""Shared test fixtures."""

import asyncio
from dataclasses import dataclass, field
from uuid import UUID, uuid4

import httpx
import pytest

from nutrition_engine.config import Settings
from nutrition_engine.containers import AppContainer
from nutrition_engine.domain.nutrition import NutritionFacts, SourceKind, SourceRecord
from nutrition_engine.domain.scoring import ScoreResult
from nutrition_engine.domain.targets import CalculatedTargets
from nutrition_engine.services.cache import InMemoryCache
from nutrition_engine.services.diets import DietCompatibilityChecker
from nutrition_engine.services.engine import NutritionEngine
from nutrition_engine.services.resolver import SourceResolver
from nutrition_engine.services.results import ResultRepository
from nutrition_engine.services.scoring import NutritionScorer
from nutrition_engine.services.sources import (
    BarcodeSource,
    CuratedSource,
    NutritionSource,
)
from nutrition_engine.services.targets import TargetCalculator
from nutrition_engine.services.units import QuantityNormalizer


def make_record(
    name: str,
    kind: SourceKind = SourceKind.AUTHORITATIVE,
    confidence: float = 0.9,
    **facts: float,
) -> SourceRecord:
    return SourceRecord(
        name=name,
        facts=NutritionFacts(**facts),
        confidence=confidence,
        source=kind,
    )


@dataclass
class FakeSource(NutritionSource):
    """Source returning canned candidates keyed by lowercased query."""

    kind: SourceKind
    records: dict[str, list[SourceRecord]] = field(default_factory=dict)
    calls: list[str] = field(default_factory=list)

    async def search(self, text: str) -> list[SourceRecord]:
        self.calls.append(text)
        return list(self.records.get(text.lower(), []))


@dataclass
class FailingSource(NutritionSource):
    """Source that always raises."""

    kind: SourceKind = SourceKind.AUTHORITATIVE
    calls: int = 0

    async def search(self, text: str) -> list[SourceRecord]:
        self.calls += 1
        raise ConnectionError("source down")


@dataclass
class SlowSource(NutritionSource):
    """Source that never answers within the resolver timeout."""

    kind: SourceKind = SourceKind.AUTHORITATIVE
    delay_seconds: float = 1.0
    calls: int = 0

    async def search(self, text: str) -> list[SourceRecord]:
        self.calls += 1
        await asyncio.sleep(self.delay_seconds)
        return [make_record(text)]


@dataclass
class HttpTimeoutSource(NutritionSource):
    """Source whose HTTP client times out."""

    kind: SourceKind = SourceKind.AUTHORITATIVE
    calls: int = 0

    async def search(self, text: str) -> list[SourceRecord]:
        self.calls += 1
        raise httpx.ReadTimeout("read timed out")


@dataclass
class FakeBarcodeSource(BarcodeSource):
    """Barcode source backed by a dict."""

    products: dict[str, SourceRecord] = field(default_factory=dict)
    calls: int = 0

    async def by_barcode(self, code: str) -> SourceRecord | None:
        self.calls += 1
        return self.products.get(code)


@dataclass
class InMemoryResultRepository(ResultRepository):
    """In-memory result storage for tests."""

    saved: list[tuple[UUID, ScoreResult | CalculatedTargets]] = field(
        default_factory=list
    )

    def save(self, result: ScoreResult | CalculatedTargets, owner_id: UUID) -> UUID:
        self.saved.append((owner_id, result))
        return uuid4()


def build_resolver(
    sources: list[NutritionSource],
    barcode_source: BarcodeSource | None = None,
) -> SourceResolver:
    return SourceResolver(
        sources=sources,
        cache=InMemoryCache(),
        barcode_source=barcode_source,
        timeout_seconds=0.05,
        retry_attempts=1,
        retry_delay_seconds=0,
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        fdc_api_key="fdc-key",
        supabase_url=None,
        supabase_service_key=None,
    )


@pytest.fixture
def authoritative() -> FakeSource:
    return FakeSource(
        kind=SourceKind.AUTHORITATIVE,
        records={
            "grilled chicken breast": [
                make_record(
                    "Chicken, broilers or fryers, breast, grilled",
                    calories=165,
                    protein=31,
                    fat=3.6,
                    iron=1.0,
                    magnesium=29,
                    vitamin_b12=0.3,
                    sodium=74,
                ),
            ],
            "brown rice": [
                make_record(
                    "Rice, brown, long-grain, cooked",
                    calories=123,
                    protein=2.7,
                    carbs=25.6,
                    fat=1.0,
                    fiber=1.6,
                    magnesium=39,
                    sodium=4,
                ),
            ],
        },
    )


@pytest.fixture
def barcode_source() -> FakeBarcodeSource:
    return FakeBarcodeSource(
        products={
            "3017620422003": make_record(
                "Nutella",
                kind=SourceKind.COMMUNITY,
                confidence=0.8,
                calories=539,
                protein=6.3,
                carbs=57.5,
                fat=30.9,
                sugar=56.3,
                sodium=43,
            )
        }
    )


@pytest.fixture
def engine(
    authoritative: FakeSource, barcode_source: FakeBarcodeSource
) -> NutritionEngine:
    community = FakeSource(kind=SourceKind.COMMUNITY)
    return NutritionEngine(
        resolver=build_resolver(
            [authoritative, community, CuratedSource()],
            barcode_source=barcode_source,
        ),
        normalizer=QuantityNormalizer(),
        scorer=NutritionScorer(),
        diet_checker=DietCompatibilityChecker(),
    )


@pytest.fixture
def result_repository() -> InMemoryResultRepository:
    return InMemoryResultRepository()


@pytest.fixture
def container(
    settings: Settings,
    engine: NutritionEngine,
    result_repository: InMemoryResultRepository,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        engine=engine,
        target_calculator=TargetCalculator(),
        result_repository=result_repository,
        close_resources=close_resources,
    )
