"""Domain models for OCR input and segmented menu lines."""

from dataclasses import dataclass


@dataclass(frozen=True)
class BoundingBox:
    """Normalized (0..1) rectangle of a recognized text fragment."""

    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class OCRObservation:
    """Single recognized text fragment with its position."""

    text: str
    box: BoundingBox


@dataclass(frozen=True)
class RawLineItem:
    """Grouped menu entry before health annotation."""

    name: str
    price: str
    description: str
    anchor_box: BoundingBox
