"""Menu item model produced by the item builder."""

from dataclasses import dataclass, field
from uuid import UUID, uuid4

from nutriguard.domain.health import HealthImpact

HEALTHY_SCORE = 80
MODERATE_SCORE = 60


@dataclass
class MenuItem:
    """Menu entry annotated for a specific user profile.

    ``nutritional_info`` is replaced in place once a model analysis
    completes; every other field is fixed at build time.
    """

    name: str
    cuisine: str
    price: str
    description: str
    health_score: int
    rating: float = 0.0
    allergens: list[str] = field(default_factory=list)
    nutritional_info: dict[str, str] = field(default_factory=dict)
    recommendation: str = ""
    health_impacts: list[HealthImpact] = field(default_factory=list)
    dietary_benefits: list[str] = field(default_factory=list)
    dietary_concerns: list[str] = field(default_factory=list)
    alternative_options: list[str] = field(default_factory=list)
    id: UUID = field(default_factory=uuid4, compare=False)

    @property
    def health_status(self) -> str:
        """Coarse label for the health score."""
        if self.health_score >= HEALTHY_SCORE:
            return "Healthy"
        if self.health_score >= MODERATE_SCORE:
            return "Moderate"
        return "Unhealthy"
