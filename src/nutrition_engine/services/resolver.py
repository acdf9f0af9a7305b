"""Source resolution with priority fallback."""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from typing import TypeVar

import httpx

from nutrition_engine.domain.nutrition import Found, NotFound, Resolution, SourceRecord
from nutrition_engine.services.cache import Cache, input_key
from nutrition_engine.services.matching import best_match
from nutrition_engine.services.sources import BarcodeSource, NutritionSource

_logger = logging.getLogger(__name__)

_T = TypeVar("_T")


@dataclass
class SourceResolver:
    """Resolves food names against an ordered list of sources.

    The first source returning any candidate wins; results are never merged
    across sources. A failing or slow source counts as returning nothing.
    """

    sources: Sequence[NutritionSource]
    cache: Cache
    barcode_source: BarcodeSource | None = None
    matcher: Callable[[str, Sequence[SourceRecord]], SourceRecord] = best_match
    timeout_seconds: float = 10.0
    retry_attempts: int = 1
    retry_delay_seconds: float = 0.3
    cache_ttl_seconds: int = 86400
    debug: bool = False

    async def resolve(self, name: str) -> Resolution:
        """Resolve a food name to the best record of the first useful source."""
        cache_key = input_key("resolve", name)
        cached = self.cache.get(cache_key)
        if isinstance(cached, Found):
            return cached

        for source in self.sources:
            candidates = await self._guarded(
                lambda source=source: source.search(name),
                action=f"{source.kind.value}:search",
                empty=[],
            )
            if not candidates:
                continue
            record = (
                candidates[0]
                if len(candidates) == 1
                else self.matcher(name, candidates)
            )
            result = Found(record=record)
            self.cache.set(cache_key, result, ttl_seconds=self.cache_ttl_seconds)
            if self.debug:
                _logger.info(
                    "Resolved %r via %s as %r (%s candidates)",
                    name,
                    source.kind.value,
                    record.name,
                    len(candidates),
                )
            return result

        _logger.info("No source matched %r", name)
        return NotFound(query=name)

    async def resolve_many(self, names: Sequence[str]) -> list[Resolution]:
        """Resolve names concurrently, preserving input order."""
        return list(await asyncio.gather(*(self.resolve(name) for name in names)))

    async def resolve_by_barcode(self, code: str) -> Resolution:
        """Look a barcode up directly, without name matching."""
        cleaned = code.strip()
        if self.barcode_source is None or not cleaned:
            return NotFound(query=cleaned)
        cache_key = f"barcode:{cleaned}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, Found):
            return cached

        barcode_source = self.barcode_source
        record = await self._guarded(
            lambda: barcode_source.by_barcode(cleaned),
            action="barcode",
            empty=None,
        )
        if record is None:
            _logger.info("No product for barcode %s", cleaned)
            return NotFound(query=cleaned)
        result = Found(record=record)
        self.cache.set(cache_key, result, ttl_seconds=self.cache_ttl_seconds)
        return result

    async def _guarded(
        self, func: Callable[[], Awaitable[_T]], *, action: str, empty: _T
    ) -> _T:
        """Call a source with a timeout and short retry; failures yield ``empty``.

        A timeout is not retried: the source counts as empty straight away.
        """
        attempt = 0
        while True:
            try:
                return await asyncio.wait_for(func(), timeout=self.timeout_seconds)
            except (TimeoutError, httpx.TimeoutException):
                _logger.warning(
                    "Source %s timed out after %ss, falling back",
                    action,
                    self.timeout_seconds,
                )
                return empty
            except Exception as exc:
                attempt += 1
                _logger.warning(
                    "Source %s failed (attempt %s/%s, status=%s): %r",
                    action,
                    attempt,
                    self.retry_attempts + 1,
                    _status_code_from_exception(exc),
                    exc,
                )
                if attempt > self.retry_attempts:
                    _logger.warning("Source %s unavailable, falling back", action)
                    return empty
                await asyncio.sleep(self.retry_delay_seconds)


def _status_code_from_exception(exc: Exception) -> str:
    """Extract HTTP status code from an exception, if available."""
    response = getattr(exc, "response", None)
    status_code = getattr(response, "status_code", None)
    if isinstance(status_code, int):
        return str(status_code)
    return "n/a"
