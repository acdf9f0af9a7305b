"""Supabase repository for scores and targets."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from nutrition_engine.domain.scoring import ScoreResult
from nutrition_engine.domain.targets import CalculatedTargets
from nutrition_engine.services.results import ResultRepository


@dataclass
class SupabaseResultRepository(ResultRepository):
    """Supabase implementation writing meal scores and nutrition targets."""

    client: Client

    def save(self, result: ScoreResult | CalculatedTargets, owner_id: UUID) -> UUID:
        """Insert the result into its table and return the new row id."""
        if isinstance(result, ScoreResult):
            table = "meal_scores"
            payload = _score_row(result)
        else:
            table = "nutrition_targets"
            payload = _targets_row(result)
        payload["owner_id"] = str(owner_id)
        payload["created_at"] = datetime.now(tz=UTC).isoformat()
        response = self.client.table(table).insert(payload).execute()
        if not response.data:
            raise RuntimeError(f"Failed to save {table} row")
        return UUID(response.data[0]["id"])


def _score_row(result: ScoreResult) -> dict[str, object]:
    breakdown = result.breakdown
    return {
        "score": result.score,
        "grade": result.grade.value,
        "macro_balance": breakdown.macro_balance,
        "micronutrients": breakdown.micronutrients,
        "fiber": breakdown.fiber,
        "processing_level": breakdown.processing_level,
        "sodium_penalty": breakdown.sodium_penalty,
        "explanation": result.explanation,
    }


def _targets_row(targets: CalculatedTargets) -> dict[str, object]:
    return {
        "calories": targets.calories,
        "protein_g": targets.protein,
        "carbs_g": targets.carbs,
        "fat_g": targets.fat,
        "fiber_g": targets.fiber,
        "bmr": targets.bmr,
        "tdee": targets.tdee,
        "explanation": targets.explanation,
    }
