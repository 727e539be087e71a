"""Group raw OCR fragments into menu entries."""

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass

from nutriguard.domain.ocr import BoundingBox, OCRObservation, RawLineItem

DEFAULT_VERTICAL_THRESHOLD = 0.05
DEFAULT_HORIZONTAL_THRESHOLD = 0.1

_MIN_LINE_LENGTH = 2
_MIN_NAME_LENGTH = 3

_NOISE_PATTERNS = [
    re.compile(pattern)
    for pattern in (
        r"\.{2,}",
        r"^[•\-\*]+$",
        r"^[0-9]+$",
        r"^[A-Za-z]\.$",
        r"^\s*[•\-\*]\s*$",
        r"^[0-9]+\s*[A-Za-z]$",
        r"^[A-Za-z]\s*[0-9]+$",
        r"^[0-9]+\s*[•\-\*]$",
        r"^[•\-\*]\s*[0-9]+$",
    )
]
_STRAY_CHARACTERS = ("•", "·", "…")

_PRICE_PATTERNS = [
    re.compile(pattern)
    for pattern in (
        r"\$\d+(?:\.\d{2})?",
        r"€\d+(?:\.\d{2})?",
        r"£\d+(?:\.\d{2})?",
        r"\d+(?:\.\d{2})?\s*(?:USD|EUR|GBP)",
        r"\d+(?:\.\d{2})?\s*(?:dollars|euros|pounds)",
        r"\d+(?:\.\d{2})?\s*(?:Rs|INR)",
        r"\d+(?:\.\d{2})?",
    )
]

_NON_FOOD_PATTERNS = [
    re.compile(pattern)
    for pattern in (
        r"^[0-9]+$",
        r"^[A-Za-z]\.$",
        r"^[•\-\*]+$",
        r"^[A-Za-z]$",
        r"^[0-9]+\s*[A-Za-z]$",
        r"^[A-Za-z]\s*[0-9]+$",
        r"^[•\-\*]\s*[A-Za-z0-9]$",
        r"^[A-Za-z0-9]\s*[•\-\*]$",
        r"^[0-9]+\s*[•\-\*]$",
        r"^[•\-\*]\s*[0-9]+$",
    )
]

_LEADING_DIGITS = re.compile(r"^[0-9]+")
_EDGE_DOTS = re.compile(r"^\.+|\.+$")

_logger = logging.getLogger(__name__)


@dataclass
class _OpenItem:
    name: str
    price: str
    anchor_box: BoundingBox
    description: str = ""

    def close(self) -> RawLineItem:
        return RawLineItem(
            name=self.name,
            price=self.price,
            description=self.description.strip(),
            anchor_box=self.anchor_box,
        )


def order_observations(
    observations: Iterable[OCRObservation], *, y_axis_up: bool = False
) -> list[OCRObservation]:
    """Sort observations top to bottom.

    With ``y_axis_up`` false the origin is the top-left corner, so smaller
    ``y`` is higher on the page. Vision frameworks that put the origin at
    the bottom-left need ``y_axis_up=True``.
    """
    return sorted(observations, key=lambda obs: obs.box.y, reverse=y_axis_up)


def clean_line(text: str) -> str | None:
    """Strip menu noise from a line; return None when nothing usable is left."""
    cleaned = text.strip()
    if len(cleaned) < _MIN_LINE_LENGTH:
        return None
    for pattern in _NOISE_PATTERNS:
        cleaned = pattern.sub("", cleaned)
    for character in _STRAY_CHARACTERS:
        cleaned = cleaned.replace(character, "")
    cleaned = cleaned.strip()
    if not cleaned or _LEADING_DIGITS.match(cleaned):
        return None
    return cleaned


def extract_price(text: str) -> str | None:
    """Return the first price found in the text, if any."""
    for pattern in _PRICE_PATTERNS:
        match = pattern.search(text)
        if match:
            return match.group(0)
    return None


def is_likely_not_food(name: str) -> bool:
    """Return true for names that look like numbering or layout debris."""
    if any(pattern.search(name) for pattern in _NON_FOOD_PATTERNS):
        return True
    if len(name) < _MIN_NAME_LENGTH:
        return True
    return _LEADING_DIGITS.match(name) is not None


def is_continuation(
    box: BoundingBox,
    anchor: BoundingBox,
    *,
    vertical_threshold: float = DEFAULT_VERTICAL_THRESHOLD,
    horizontal_threshold: float = DEFAULT_HORIZONTAL_THRESHOLD,
) -> bool:
    """Return true when a line sits close enough to the anchor to extend it."""
    vertical_distance = abs(box.y - anchor.y)
    horizontal_distance = abs(box.x - anchor.x)
    return (
        vertical_distance < vertical_threshold
        and horizontal_distance < horizontal_threshold
    )


def segment_observations(
    observations: Iterable[OCRObservation],
    *,
    vertical_threshold: float = DEFAULT_VERTICAL_THRESHOLD,
    horizontal_threshold: float = DEFAULT_HORIZONTAL_THRESHOLD,
) -> list[RawLineItem]:
    """Cluster ordered OCR observations into raw menu entries.

    Lines carrying a price always start a new entry. Lines without a price
    extend the open entry when they sit near its anchor box and start a
    new entry otherwise. Unusable lines are dropped.
    """
    closed: list[RawLineItem] = []
    current: _OpenItem | None = None
    total = 0

    for observation in observations:
        total += 1
        line = clean_line(observation.text)
        if line is None:
            continue

        price = extract_price(line)
        if price is not None:
            if current is not None:
                closed.append(current.close())
                current = None
            name = _strip_edge_dots(line.replace(price, ""))
            if _LEADING_DIGITS.match(name):
                continue
            current = _OpenItem(name=name, price=price, anchor_box=observation.box)
        elif current is not None:
            if is_continuation(
                observation.box,
                current.anchor_box,
                vertical_threshold=vertical_threshold,
                horizontal_threshold=horizontal_threshold,
            ):
                fragment = _strip_edge_dots(line)
                if fragment:
                    current.description = f"{current.description} {fragment}"
            else:
                closed.append(current.close())
                current = _OpenItem(name=line, price="", anchor_box=observation.box)
        else:
            current = _OpenItem(name=line, price="", anchor_box=observation.box)

    if current is not None:
        closed.append(current.close())

    items = [item for item in closed if not is_likely_not_food(item.name)]
    _logger.debug(
        "Segmented %s observations into %s items (%s filtered)",
        total,
        len(items),
        len(closed) - len(items),
    )
    return items


def _strip_edge_dots(text: str) -> str:
    return _EDGE_DOTS.sub("", text.strip()).strip()
