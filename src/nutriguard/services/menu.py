"""Menu parsing service: segmentation plus per-item health annotation."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from nutriguard.domain.menu import MenuItem
from nutriguard.domain.ocr import OCRObservation, RawLineItem
from nutriguard.domain.profile import UserHealthProfile
from nutriguard.services.scoring import HealthScorer, dish_text
from nutriguard.services.segmentation import (
    DEFAULT_HORIZONTAL_THRESHOLD,
    DEFAULT_VERTICAL_THRESHOLD,
    order_observations,
    segment_observations,
)

CUISINES = ("Italian", "Mexican", "Indian", "Chinese", "Japanese", "American")
DEFAULT_CUISINE = "American"

ALLERGENS = (
    "gluten",
    "dairy",
    "nuts",
    "peanuts",
    "shellfish",
    "fish",
    "eggs",
    "soy",
    "wheat",
    "sesame",
)

PLACEHOLDER_NUTRITION_KEYS = ("Calories", "Protein", "Carbs", "Fat")
PENDING_VALUE = "Analyzing..."
MISSING_PROFILE_VALUE = "N/A"

_logger = logging.getLogger(__name__)


def detect_cuisine(text: str) -> str:
    """Return the first cuisine label mentioned in the text."""
    lowered = text.lower()
    for cuisine in CUISINES:
        if cuisine.lower() in lowered:
            return cuisine
    return DEFAULT_CUISINE


def detect_allergens(text: str) -> list[str]:
    """Return every known allergen mentioned in the text, in vocabulary order."""
    lowered = text.lower()
    return [allergen for allergen in ALLERGENS if allergen in lowered]


def placeholder_nutrition(profile: UserHealthProfile | None) -> dict[str, str]:
    value = PENDING_VALUE if profile is not None else MISSING_PROFILE_VALUE
    return dict.fromkeys(PLACEHOLDER_NUTRITION_KEYS, value)


@dataclass(frozen=True)
class MenuItemBuilder:
    """Turns a raw menu line into an annotated MenuItem."""

    scorer: HealthScorer = field(default_factory=HealthScorer)

    def build(self, raw: RawLineItem, profile: UserHealthProfile | None) -> MenuItem:
        name, description = raw.name, raw.description
        text = dish_text(name, description)
        cuisine = detect_cuisine(text)
        return MenuItem(
            name=name,
            cuisine=cuisine,
            price=raw.price,
            description=description,
            health_score=self.scorer.score(name, description, profile),
            allergens=detect_allergens(text),
            nutritional_info=placeholder_nutrition(profile),
            recommendation=self.scorer.recommendation(name, description, profile),
            health_impacts=self.scorer.health_impacts(name, description, profile),
            dietary_benefits=self.scorer.benefits(name, description, profile),
            dietary_concerns=self.scorer.concerns(name, description, profile),
            alternative_options=self.scorer.alternatives(name, cuisine, profile),
        )


@dataclass
class MenuService:
    """Parse OCR observations of a menu photo into annotated items."""

    builder: MenuItemBuilder = field(default_factory=MenuItemBuilder)
    vertical_threshold: float = DEFAULT_VERTICAL_THRESHOLD
    horizontal_threshold: float = DEFAULT_HORIZONTAL_THRESHOLD
    y_axis_up: bool = False

    def segment(self, observations: Iterable[OCRObservation]) -> list[RawLineItem]:
        """Order observations top to bottom and group them into raw items."""
        ordered = order_observations(observations, y_axis_up=self.y_axis_up)
        return segment_observations(
            ordered,
            vertical_threshold=self.vertical_threshold,
            horizontal_threshold=self.horizontal_threshold,
        )

    def parse_menu(
        self,
        observations: Iterable[OCRObservation],
        profile: UserHealthProfile | None,
    ) -> list[MenuItem]:
        """Return one annotated item per segmented menu entry."""
        raw_items = self.segment(observations)
        items = [self.builder.build(raw, profile) for raw in raw_items]
        _logger.info(
            "Parsed menu: items=%s profile=%s", len(items), profile is not None
        )
        return items


def filter_menu_items(
    items: Iterable[MenuItem],
    *,
    cuisine: str | None = None,
    condition: str | None = None,
    search: str | None = None,
) -> list[MenuItem]:
    """Keep items matching every filter that is set."""
    results: list[MenuItem] = []
    for item in items:
        if cuisine and item.cuisine != cuisine:
            continue
        if condition and not any(
            impact.condition.lower() == condition.lower()
            for impact in item.health_impacts
        ):
            continue
        if search and search.lower() not in item.name.lower():
            continue
        results.append(item)
    return results
