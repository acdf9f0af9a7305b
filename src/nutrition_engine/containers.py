"""Dependency container wiring for the engine."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from nutrition_engine.adapters.fdc_client import HttpxFdcClient
from nutrition_engine.adapters.off_client import HttpxOpenFoodFactsClient
from nutrition_engine.adapters.supabase_result_repository import (
    SupabaseResultRepository,
)
from nutrition_engine.config import Settings
from nutrition_engine.services.cache import InMemoryCache
from nutrition_engine.services.diets import DietCompatibilityChecker
from nutrition_engine.services.engine import NutritionEngine
from nutrition_engine.services.resolver import SourceResolver
from nutrition_engine.services.results import ResultRepository
from nutrition_engine.services.scoring import NutritionScorer
from nutrition_engine.services.sources import (
    CuratedSource,
    FdcSource,
    OpenFoodFactsSource,
)
from nutrition_engine.services.targets import TargetCalculator
from nutrition_engine.services.units import QuantityNormalizer


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    engine: NutritionEngine
    target_calculator: TargetCalculator
    result_repository: ResultRepository | None
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    fdc_client = HttpxFdcClient.create(
        api_key=resolved_settings.fdc_api_key,
        base_url=resolved_settings.fdc_base_url,
        timeout_seconds=resolved_settings.source_timeout_seconds,
    )
    off_client = HttpxOpenFoodFactsClient.create(
        base_url=resolved_settings.off_base_url,
        timeout_seconds=resolved_settings.source_timeout_seconds,
    )
    off_source = OpenFoodFactsSource(
        off_client, page_size=resolved_settings.source_page_size
    )
    resolver = SourceResolver(
        sources=[
            FdcSource(fdc_client, page_size=resolved_settings.source_page_size),
            off_source,
            CuratedSource(),
        ],
        cache=InMemoryCache(
            max_entries=resolved_settings.resolution_cache_max_entries
        ),
        barcode_source=off_source,
        timeout_seconds=resolved_settings.source_timeout_seconds,
        retry_attempts=resolved_settings.source_retry_attempts,
        retry_delay_seconds=resolved_settings.source_retry_delay_seconds,
        cache_ttl_seconds=resolved_settings.resolution_cache_ttl_seconds,
        debug=resolved_settings.debug,
    )
    engine = NutritionEngine(
        resolver=resolver,
        normalizer=QuantityNormalizer(),
        scorer=NutritionScorer(),
        diet_checker=DietCompatibilityChecker(),
    )
    result_repository: ResultRepository | None = None
    if resolved_settings.storage_enabled():
        result_repository = SupabaseResultRepository(
            create_client(
                resolved_settings.supabase_url,
                resolved_settings.supabase_service_key,
            )
        )

    async def close_resources() -> None:
        await fdc_client.close()
        await off_client.close()

    return AppContainer(
        settings=resolved_settings,
        engine=engine,
        target_calculator=TargetCalculator(),
        result_repository=result_repository,
        close_resources=close_resources,
    )
