"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request

from nutriguard.api.models import (
    AnalyzeItemRequest,
    AnalyzeItemResponse,
    MenuItemPayload,
    ParseMenuRequest,
    ParseMenuResponse,
    SafetyLinePayload,
    SafetyRequest,
    SafetyResponse,
    SafetySummaryPayload,
)
from nutriguard.app_logging import configure_logging
from nutriguard.containers import AppContainer
from nutriguard.services.menu import filter_menu_items
from nutriguard.services.safety import FoodSafetyChecker, summarize_safety


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/menu/items")
    async def parse_menu(
        payload: ParseMenuRequest,
        request: Request,
        cuisine: str | None = None,
        condition: str | None = None,
        search: str | None = None,
    ) -> ParseMenuResponse:
        """Segment OCR observations and annotate each menu item."""
        state_container: AppContainer = request.app.state.container
        observations = [observation.to_domain() for observation in payload.observations]
        items = state_container.menu_service.parse_menu(observations, payload.profile)
        items = filter_menu_items(
            items, cuisine=cuisine, condition=condition, search=search
        )
        return ParseMenuResponse(
            items=[MenuItemPayload.from_domain(item) for item in items]
        )

    @app.post("/menu/items/analyze")
    async def analyze_item(
        payload: AnalyzeItemRequest, request: Request
    ) -> AnalyzeItemResponse:
        """Return the model analysis for one item, or the fallback."""
        state_container: AppContainer = request.app.state.container
        item = payload.item.to_domain()
        analysis, nutritional_info = (
            await state_container.analysis_service.analyze_menu_item(
                item, payload.profile
            )
        )
        logger.info("Analyzed menu item: name=%s", item.name)
        return AnalyzeItemResponse(analysis=analysis, nutritional_info=nutritional_info)

    @app.post("/menu/safety")
    async def check_safety(payload: SafetyRequest) -> SafetyResponse:
        """Classify menu lines against the profile's dietary restrictions."""
        checker = FoodSafetyChecker.from_profile(payload.profile)
        lines = [line for line in payload.lines if line.strip()]
        levels = [checker.check_line(line) for line in lines]
        summary = summarize_safety(levels)
        return SafetyResponse(
            items=[
                SafetyLinePayload(line=line, level=level, advice=level.advice)
                for line, level in zip(lines, levels, strict=True)
            ],
            summary=SafetySummaryPayload(
                safe=summary.safe, caution=summary.caution, unsafe=summary.unsafe
            ),
        )

    return app
