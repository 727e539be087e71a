"""Pydantic models for the menu API payloads."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from nutriguard.domain.analysis import HealthAnalysis
from nutriguard.domain.health import HealthImpact, ImpactSeverity
from nutriguard.domain.menu import MenuItem
from nutriguard.domain.ocr import BoundingBox, OCRObservation
from nutriguard.domain.profile import UserHealthProfile
from nutriguard.services.safety import FoodSafetyLevel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class BoundingBoxPayload(_CamelModel):
    """Normalized bounding box payload."""

    x: float
    y: float
    width: float
    height: float


class ObservationPayload(_CamelModel):
    """Recognized text fragment payload."""

    text: str
    bounding_box: BoundingBoxPayload

    def to_domain(self) -> OCRObservation:
        box = self.bounding_box
        return OCRObservation(
            text=self.text,
            box=BoundingBox(x=box.x, y=box.y, width=box.width, height=box.height),
        )


class HealthImpactPayload(_CamelModel):
    """Health impact payload."""

    condition: str
    impact: str
    recommendation: str
    severity: ImpactSeverity


class MenuItemPayload(_CamelModel):
    """Menu item payload."""

    id: UUID | None = None
    name: str
    cuisine: str = "American"
    price: str = ""
    description: str = ""
    rating: float = 0.0
    health_score: int = Field(default=0, ge=0, le=100)
    health_status: str | None = None
    allergens: list[str] = Field(default_factory=list)
    nutritional_info: dict[str, str] = Field(default_factory=dict)
    recommendation: str = ""
    health_impacts: list[HealthImpactPayload] = Field(default_factory=list)
    dietary_benefits: list[str] = Field(default_factory=list)
    dietary_concerns: list[str] = Field(default_factory=list)
    alternative_options: list[str] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, item: MenuItem) -> "MenuItemPayload":
        return cls(
            id=item.id,
            name=item.name,
            cuisine=item.cuisine,
            price=item.price,
            description=item.description,
            rating=item.rating,
            health_score=item.health_score,
            health_status=item.health_status,
            allergens=list(item.allergens),
            nutritional_info=dict(item.nutritional_info),
            recommendation=item.recommendation,
            health_impacts=[
                HealthImpactPayload(
                    condition=impact.condition,
                    impact=impact.impact,
                    recommendation=impact.recommendation,
                    severity=impact.severity,
                )
                for impact in item.health_impacts
            ],
            dietary_benefits=list(item.dietary_benefits),
            dietary_concerns=list(item.dietary_concerns),
            alternative_options=list(item.alternative_options),
        )

    def to_domain(self) -> MenuItem:
        item = MenuItem(
            name=self.name,
            cuisine=self.cuisine,
            price=self.price,
            description=self.description,
            health_score=self.health_score,
            rating=self.rating,
            allergens=list(self.allergens),
            nutritional_info=dict(self.nutritional_info),
            recommendation=self.recommendation,
            health_impacts=[
                HealthImpact(
                    condition=impact.condition,
                    impact=impact.impact,
                    recommendation=impact.recommendation,
                    severity=impact.severity,
                )
                for impact in self.health_impacts
            ],
            dietary_benefits=list(self.dietary_benefits),
            dietary_concerns=list(self.dietary_concerns),
            alternative_options=list(self.alternative_options),
        )
        if self.id is not None:
            item.id = self.id
        return item


class ParseMenuRequest(_CamelModel):
    """OCR observations of one menu photo plus the active profile."""

    observations: list[ObservationPayload]
    profile: UserHealthProfile | None = None


class ParseMenuResponse(_CamelModel):
    items: list[MenuItemPayload]


class AnalyzeItemRequest(_CamelModel):
    item: MenuItemPayload
    profile: UserHealthProfile


class AnalyzeItemResponse(_CamelModel):
    analysis: HealthAnalysis
    nutritional_info: dict[str, str]


class SafetyRequest(_CamelModel):
    lines: list[str]
    profile: UserHealthProfile


class SafetyLinePayload(_CamelModel):
    line: str
    level: FoodSafetyLevel
    advice: str


class SafetySummaryPayload(_CamelModel):
    safe: int
    caution: int
    unsafe: int


class SafetyResponse(_CamelModel):
    items: list[SafetyLinePayload]
    summary: SafetySummaryPayload
