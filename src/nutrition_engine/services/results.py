"""Persistence interface for computed results."""

from typing import Protocol
from uuid import UUID

from nutrition_engine.domain.scoring import ScoreResult
from nutrition_engine.domain.targets import CalculatedTargets


class ResultRepository(Protocol):
    """Stores results on behalf of callers; the engine never calls it."""

    def save(self, result: ScoreResult | CalculatedTargets, owner_id: UUID) -> UUID:
        """Persist a result for an owner and return the row id."""
