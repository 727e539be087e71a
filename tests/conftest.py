"""Shared test fixtures."""

import json
from collections import deque
from dataclasses import dataclass, field

import pytest

from nutriguard.adapters.gemini_client import GeminiClient, GenerationResponse
from nutriguard.config import Settings
from nutriguard.containers import AppContainer, build_menu_service
from nutriguard.domain.ocr import BoundingBox, OCRObservation
from nutriguard.domain.profile import UserHealthProfile
from nutriguard.services.analysis import MenuAnalysisService
from nutriguard.services.rate_limit import Clock, RateLimiter


@dataclass
class FakeClock(Clock):
    """Manually advanced clock; sleeping moves time forward instantly."""

    current: float = 0.0
    sleeps: list[float] = field(default_factory=list)

    def now(self) -> float:
        return self.current

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.current += seconds


@dataclass
class FakeGeminiClient(GeminiClient):
    """Fake model client replaying queued responses or exceptions."""

    outcomes: deque[GenerationResponse | Exception] = field(default_factory=deque)
    prompts: list[str] = field(default_factory=list)
    clock: Clock | None = None
    dispatched_at: list[float] = field(default_factory=list)

    async def generate_content(self, prompt: str) -> GenerationResponse:
        self.prompts.append(prompt)
        if self.clock is not None:
            self.dispatched_at.append(self.clock.now())
        outcome = self.outcomes.popleft() if self.outcomes else success_response()
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


@dataclass
class RecordingSleep:
    """Stand-in for ``asyncio.sleep`` that records requested delays."""

    delays: list[float] = field(default_factory=list)

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


ANALYSIS_JSON = {
    "isHealthy": True,
    "reason": "Lean protein with vegetables suits this profile.",
    "healthImpacts": ["Low glycemic load"],
    "recommendations": ["Ask for dressing on the side"],
    "nutritionalInfo": {
        "Calories": "420 kcal",
        "Protein": "35 g",
        "Carbs": "18 g",
        "Fat": "22 g",
        "Fiber": "6 g",
        "Sugar": "5 g",
        "Sodium": "610 mg",
    },
}


def envelope(text: str) -> str:
    """Wrap generated text in a generateContent response body."""
    return json.dumps({"candidates": [{"content": {"parts": [{"text": text}]}}]})


def success_response(fenced: bool = False) -> GenerationResponse:
    text = json.dumps(ANALYSIS_JSON)
    if fenced:
        text = f"```json\n{text}\n```"
    return GenerationResponse(status_code=200, body=envelope(text))


def observation(text: str, x: float, y: float) -> OCRObservation:
    return OCRObservation(text=text, box=BoundingBox(x=x, y=y, width=0.3, height=0.02))


@pytest.fixture
def settings() -> Settings:
    return Settings(gemini_api_key="test-key")


@pytest.fixture
def diabetic_profile() -> UserHealthProfile:
    return UserHealthProfile(
        chronic_conditions=("Diabetes",),
        food_allergies=(),
        diet_type="Regular",
    )


@pytest.fixture
def empty_profile() -> UserHealthProfile:
    return UserHealthProfile.default()


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock(current=100.0)


@pytest.fixture
def gemini_client(fake_clock: FakeClock) -> FakeGeminiClient:
    return FakeGeminiClient(clock=fake_clock)


@pytest.fixture
def retry_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def analysis_service(
    gemini_client: FakeGeminiClient,
    fake_clock: FakeClock,
    retry_sleep: RecordingSleep,
) -> MenuAnalysisService:
    return MenuAnalysisService(
        client=gemini_client,
        rate_limiter=RateLimiter(min_interval_seconds=1.0, clock=fake_clock),
        max_retries=3,
        initial_retry_delay_seconds=2.0,
        sleep=retry_sleep,
    )


@pytest.fixture
def container(
    settings: Settings,
    gemini_client: FakeGeminiClient,
    analysis_service: MenuAnalysisService,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        gemini_client=gemini_client,
        rate_limiter=analysis_service.rate_limiter,
        menu_service=build_menu_service(settings),
        analysis_service=analysis_service,
        close_resources=close_resources,
    )
