"""Google Gemini generateContent REST client."""

from dataclasses import dataclass
from typing import Protocol

import httpx

from nutriguard.domain.errors import TransportError


@dataclass(frozen=True)
class GenerationResponse:
    """Raw HTTP result of a text-generation call."""

    status_code: int
    body: str


class GeminiClient(Protocol):
    """Interface for text-generation calls."""

    async def generate_content(self, prompt: str) -> GenerationResponse:
        """Send a prompt and return the raw response."""


@dataclass
class HttpxGeminiClient(GeminiClient):
    """HTTPX-backed Gemini client."""

    api_key: str
    base_url: str
    model: str
    http_client: httpx.AsyncClient
    timeout_seconds: float = 30.0

    @classmethod
    def create(
        cls, api_key: str, base_url: str, model: str, timeout_seconds: float = 30.0
    ) -> "HttpxGeminiClient":
        """Create a Gemini client with a managed httpx session."""
        return cls(
            api_key=api_key,
            base_url=base_url,
            model=model,
            http_client=httpx.AsyncClient(),
            timeout_seconds=timeout_seconds,
        )

    async def generate_content(self, prompt: str) -> GenerationResponse:
        """POST the prompt to the generateContent endpoint."""
        url = f"{self.base_url.rstrip('/')}/models/{self.model}:generateContent"
        try:
            response = await self.http_client.post(
                url,
                params={"key": self.api_key},
                json={"contents": [{"parts": [{"text": prompt}]}]},
                timeout=self.timeout_seconds,
            )
        except httpx.TransportError as exc:
            raise TransportError(str(exc) or type(exc).__name__) from exc
        return GenerationResponse(status_code=response.status_code, body=response.text)

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
