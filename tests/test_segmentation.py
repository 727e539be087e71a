"""Tests for OCR line segmentation."""

import pytest

from nutriguard.domain.ocr import BoundingBox
from nutriguard.services.menu import MenuService
from nutriguard.services.segmentation import (
    clean_line,
    extract_price,
    is_continuation,
    is_likely_not_food,
    order_observations,
    segment_observations,
)
from tests.conftest import observation


def test_price_lines_start_items_and_nearby_lines_extend_them() -> None:
    observations = [
        observation("Chocolate Cake $5.99", 0.1, 0.10),
        observation("rich dark chocolate", 0.1, 0.13),
        observation("Grilled Chicken Salad $12.50", 0.1, 0.30),
        observation("with fresh vegetables", 0.12, 0.33),
    ]

    items = segment_observations(observations)

    assert [(item.name, item.price, item.description) for item in items] == [
        ("Chocolate Cake", "$5.99", "rich dark chocolate"),
        ("Grilled Chicken Salad", "$12.50", "with fresh vegetables"),
    ]
    assert items[0].anchor_box == observations[0].box


def test_distant_line_without_price_starts_unpriced_item() -> None:
    observations = [
        observation("Tomato Soup $4.00", 0.1, 0.10),
        observation("Chef Specials", 0.5, 0.60),
    ]

    items = segment_observations(observations)

    assert [(item.name, item.price) for item in items] == [
        ("Tomato Soup", "$4.00"),
        ("Chef Specials", ""),
    ]


def test_line_before_any_price_starts_item() -> None:
    items = segment_observations([observation("House Bread", 0.1, 0.05)])

    assert [(item.name, item.price, item.description) for item in items] == [
        ("House Bread", "", "")
    ]


def test_noise_lines_are_dropped() -> None:
    observations = [
        observation("1", 0.1, 0.01),
        observation("12", 0.1, 0.02),
        observation("........", 0.1, 0.03),
        observation("A.", 0.1, 0.04),
        observation("Margherita Pizza ........ $9.00", 0.1, 0.10),
    ]

    items = segment_observations(observations)

    assert [(item.name, item.price) for item in items] == [
        ("Margherita Pizza", "$9.00")
    ]


def test_price_line_with_numbered_name_closes_item_without_opening_one() -> None:
    observations = [
        observation("Nachos $7.00", 0.1, 0.10),
        observation("$5 12 Wings", 0.1, 0.20),
        observation("extra hot", 0.1, 0.22),
    ]

    items = segment_observations(observations)

    assert [(item.name, item.price, item.description) for item in items] == [
        ("Nachos", "$7.00", ""),
        ("extra hot", "", ""),
    ]


def test_short_names_are_filtered() -> None:
    items = segment_observations([observation("Ab $3.00", 0.1, 0.1)])

    assert items == []


def test_menu_service_orders_observations_before_segmenting() -> None:
    observations = [
        observation("sesame glaze", 0.1, 0.53),
        observation("Teriyaki Salmon $18.00", 0.1, 0.50),
        observation("Miso Soup $3.50", 0.1, 0.20),
    ]

    items = MenuService().segment(observations)

    assert [(item.name, item.description) for item in items] == [
        ("Miso Soup", ""),
        ("Teriyaki Salmon", "sesame glaze"),
    ]


def test_order_observations_with_bottom_left_origin() -> None:
    lower = observation("Lower", 0.1, 0.2)
    upper = observation("Upper", 0.1, 0.9)

    assert order_observations([lower, upper], y_axis_up=True) == [upper, lower]
    assert order_observations([upper, lower]) == [lower, upper]


def test_clean_line() -> None:
    assert clean_line("  • Soup of the Day… ") == "Soup of the Day"
    assert clean_line("x") is None
    assert clean_line("42") is None
    assert clean_line("3 Cheese Pizza") is None


def test_extract_price_formats() -> None:
    assert extract_price("Burger $10") == "$10"
    assert extract_price("Croissant €3.50") == "€3.50"
    assert extract_price("Fish and Chips £8.95") == "£8.95"
    assert extract_price("Steak 25 USD") == "25 USD"
    assert extract_price("Paneer Tikka 250 Rs") == "250 Rs"
    assert extract_price("Pad Thai 11.50") == "11.50"
    assert extract_price("Garden Salad") is None


def test_is_likely_not_food() -> None:
    assert is_likely_not_food("B")
    assert is_likely_not_food("7 a")
    assert is_likely_not_food("Ok")
    assert not is_likely_not_food("Caesar Salad")


def test_is_continuation_uses_absolute_distances() -> None:
    anchor = BoundingBox(x=0.2, y=0.5, width=0.3, height=0.02)

    assert is_continuation(BoundingBox(0.25, 0.53, 0.3, 0.02), anchor)
    assert is_continuation(BoundingBox(0.15, 0.47, 0.3, 0.02), anchor)
    assert not is_continuation(BoundingBox(0.2, 0.6, 0.3, 0.02), anchor)
    assert not is_continuation(BoundingBox(0.4, 0.5, 0.3, 0.02), anchor)
    assert is_continuation(
        BoundingBox(0.2, 0.6, 0.3, 0.02), anchor, vertical_threshold=0.2
    )


def test_caesar_salad_description_is_merged() -> None:
    observations = [
        observation("Caesar Salad $9.50", 0.10, 0.40),
        observation("with parmesan and croutons", 0.11, 0.43),
    ]

    items = segment_observations(observations)

    assert len(items) == 1
    assert items[0].name == "Caesar Salad"
    assert items[0].description == "with parmesan and croutons"


@pytest.mark.parametrize(
    "texts",
    [
        [],
        ["1", "2", "3"],
        ["Ab $1.00", "Cd $2.00", "•", "…"],
        ["Burger $9.00", "x", "Fries", "Shake 4.50", "...", "A. Soup $3.00"],
        ["Pho 12.00", "Rice Noodle Soup", "10 Wings $8.00", "Tea"],
    ],
)
def test_output_never_exceeds_input_and_names_are_long_enough(
    texts: list[str],
) -> None:
    observations = [
        observation(text, 0.1 + 0.03 * index, 0.1 + 0.04 * index)
        for index, text in enumerate(texts)
    ]

    items = segment_observations(observations)

    assert len(items) <= len(observations)
    assert all(len(item.name) >= 3 for item in items)
