"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import asdict
from uuid import UUID

from fastapi import FastAPI, HTTPException, Request, status

from nutrition_engine.api.models import AnalyzeRequest, TargetsRequest
from nutrition_engine.app_logging import configure_logging
from nutrition_engine.containers import AppContainer
from nutrition_engine.domain.errors import ValidationError
from nutrition_engine.domain.nutrition import FoodQuery, NotFound
from nutrition_engine.domain.scoring import ScoreResult
from nutrition_engine.domain.targets import CalculatedTargets, PersonalProfile
from nutrition_engine.services.engine import MealAnalysis


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    def persist(
        state_container: AppContainer,
        result: ScoreResult | CalculatedTargets,
        owner_id: UUID | None,
    ) -> str | None:
        if owner_id is None:
            return None
        if state_container.result_repository is None:
            logger.warning("Storage not configured, result for %s not saved", owner_id)
            return None
        return str(state_container.result_repository.save(result, owner_id))

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/nutrition/analyze")
    async def analyze(payload: AnalyzeRequest, request: Request) -> dict[str, object]:
        """Resolve, score and diet-check a meal."""
        state_container: AppContainer = request.app.state.container
        queries = [
            FoodQuery(name=item.name, quantity=item.quantity, unit=item.unit)
            for item in payload.items
        ]
        analysis = await state_container.engine.resolve_and_score(queries)
        body = _analysis_payload(analysis)
        body["saved_id"] = persist(state_container, analysis.score, payload.owner_id)
        return body

    @app.get("/nutrition/barcode/{code}")
    async def barcode(
        code: str, request: Request, quantity: float = 100, unit: str = "g"
    ) -> dict[str, object]:
        """Look up a packaged product and scale it to the given quantity."""
        if quantity <= 0:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail="quantity must be positive",
            )
        state_container: AppContainer = request.app.state.container
        item = await state_container.engine.resolve_barcode_item(code, quantity, unit)
        if isinstance(item, NotFound):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"No product for barcode {item.query}",
            )
        return {"item": asdict(item)}

    @app.post("/targets")
    async def targets(payload: TargetsRequest, request: Request) -> dict[str, object]:
        """Calculate personalized daily targets."""
        state_container: AppContainer = request.app.state.container
        profile = PersonalProfile(
            weight_kg=payload.weight_kg,
            height_cm=payload.height_cm,
            age_years=payload.age_years,
            gender=payload.gender,
            activity_level=payload.activity_level,
        )
        try:
            result = state_container.target_calculator.calculate_targets(
                profile, payload.goal
            )
        except ValidationError as exc:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail={"message": str(exc), "missing_fields": exc.missing_fields},
            ) from exc
        body: dict[str, object] = {"targets": asdict(result)}
        body["saved_id"] = persist(state_container, result, payload.owner_id)
        return body

    return app


def _analysis_payload(analysis: MealAnalysis) -> dict[str, object]:
    return {
        "items": [asdict(item) for item in analysis.items],
        "aggregate": asdict(analysis.aggregate),
        "score": asdict(analysis.score),
        "compatibility": {
            key: asdict(verdict)
            for key, verdict in analysis.compatibility.as_dict().items()
        },
        "unresolved": [asdict(query) for query in analysis.unresolved],
        "confidence_score": analysis.confidence_score,
        "data_sources": [kind.value for kind in analysis.data_sources],
    }
