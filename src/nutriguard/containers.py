"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from nutriguard.adapters.gemini_client import GeminiClient, HttpxGeminiClient
from nutriguard.config import Settings
from nutriguard.services.analysis import MenuAnalysisService
from nutriguard.services.menu import MenuItemBuilder, MenuService
from nutriguard.services.rate_limit import RateLimiter
from nutriguard.services.scoring import HealthScorer


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    gemini_client: GeminiClient
    rate_limiter: RateLimiter
    menu_service: MenuService
    analysis_service: MenuAnalysisService
    close_resources: Callable[[], Awaitable[None]]


def build_menu_service(settings: Settings) -> MenuService:
    """Create the menu parsing service from settings."""
    builder = MenuItemBuilder(
        scorer=HealthScorer(allergen_penalty=settings.allergen_penalty)
    )
    return MenuService(
        builder=builder,
        vertical_threshold=settings.vertical_threshold,
        horizontal_threshold=settings.horizontal_threshold,
        y_axis_up=settings.ocr_y_axis_up,
    )


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    gemini_client = HttpxGeminiClient.create(
        api_key=resolved_settings.gemini_api_key,
        base_url=resolved_settings.gemini_base_url,
        model=resolved_settings.gemini_model,
        timeout_seconds=resolved_settings.gemini_timeout_seconds,
    )
    rate_limiter = RateLimiter(
        min_interval_seconds=resolved_settings.min_request_interval_seconds
    )
    analysis_service = MenuAnalysisService(
        client=gemini_client,
        rate_limiter=rate_limiter,
        max_retries=resolved_settings.max_retries,
        initial_retry_delay_seconds=resolved_settings.initial_retry_delay_seconds,
    )

    async def close_resources() -> None:
        await gemini_client.close()

    return AppContainer(
        settings=resolved_settings,
        gemini_client=gemini_client,
        rate_limiter=rate_limiter,
        menu_service=build_menu_service(resolved_settings),
        analysis_service=analysis_service,
        close_resources=close_resources,
    )
