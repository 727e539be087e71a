"""Health condition identifiers and impact records."""

from dataclasses import dataclass
from enum import StrEnum


class ChronicCondition(StrEnum):
    """Chronic conditions the scoring engine knows rules for."""

    DIABETES = "diabetes"
    HYPERTENSION = "hypertension"
    HEART_DISEASE = "heart disease"

    @classmethod
    def parse(cls, text: str) -> "ChronicCondition | None":
        """Return the matching condition, or None when it is not recognized."""
        try:
            return cls(text.strip().lower())
        except ValueError:
            return None


class ImpactSeverity(StrEnum):
    """Direction of a dish's effect on a condition."""

    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"


@dataclass(frozen=True)
class HealthImpact:
    """Effect of a dish on one of the user's chronic conditions."""

    condition: str
    impact: str
    recommendation: str
    severity: ImpactSeverity
