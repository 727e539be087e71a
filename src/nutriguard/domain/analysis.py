"""Models for model-generated dish analysis."""

from pydantic import BaseModel, ConfigDict, Field

NUTRITION_KEYS = ("Calories", "Protein", "Carbs", "Fat", "Fiber", "Sugar", "Sodium")


class HealthAnalysis(BaseModel):
    """Narrative health analysis of one dish for one user."""

    model_config = ConfigDict(populate_by_name=True)

    is_healthy: bool = Field(alias="isHealthy")
    reason: str
    health_impacts: list[str] = Field(alias="healthImpacts")
    recommendations: list[str]


class AnalysisPayload(HealthAnalysis):
    """Full JSON object the model is asked to return."""

    nutritional_info: dict[str, str] = Field(alias="nutritionalInfo")

    def to_analysis(self) -> HealthAnalysis:
        """Drop the nutrition map and keep the narrative part."""
        return HealthAnalysis(
            is_healthy=self.is_healthy,
            reason=self.reason,
            health_impacts=list(self.health_impacts),
            recommendations=list(self.recommendations),
        )


class GenerateContentPart(BaseModel):
    text: str


class GenerateContentBody(BaseModel):
    parts: list[GenerateContentPart] = Field(min_length=1)


class GenerateContentCandidate(BaseModel):
    content: GenerateContentBody


class GenerateContentEnvelope(BaseModel):
    """Outer response shape of the text-generation endpoint."""

    candidates: list[GenerateContentCandidate] = Field(min_length=1)

    def first_text(self) -> str:
        """Return the text of the first part of the first candidate."""
        return self.candidates[0].content.parts[0].text
