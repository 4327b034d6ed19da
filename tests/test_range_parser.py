"""Tests for bracket header parsing and the sheet predicates built on it."""
import pytest

from print_pricing.sheets.predicates import (
    category_from_header,
    is_bracket_header,
    is_header_anchor,
    is_name_column_header,
    is_repeated_section_header,
    is_section_anchor,
    is_size_anchor,
    is_size_block_boundary,
    parse_price,
)
from print_pricing.sheets.ranges import parse_range


@pytest.mark.parametrize("header, expected", [
    ("1-50", (1, 50)),
    ("51 - 100", (51, 100)),
    ("26to50", (26, 50)),
    ("26 TO 50", (26, 50)),
    ("1 to 10", (1, 10)),
    ("10000+", (10000, None)),
    (" 500 + ", (500, None)),
    ("1,001-5,000", (1001, 5000)),
    ("7-7", (7, 7)),
])
def test_valid_headers(header, expected):
    assert parse_range(header) == expected


@pytest.mark.parametrize("header", [
    "",
    "   ",
    None,
    "Paper name",
    "a-b",
    "1-2-3",
    "50",
    "+",
    "abc+",
    "total",
    "100-1",
    "1.5-3",
    "1-²",
    "²+",
    "³-³",
])
def test_malformed_headers_are_not_brackets(header):
    assert parse_range(header) is None
    assert not is_bracket_header(header)


@pytest.mark.parametrize("header", ["1-50", "26to50", "10000+", "101 - 1000"])
def test_parsing_is_idempotent(header):
    first = parse_range(header)
    assert parse_range(header) == first
    minimum, maximum = first
    assert maximum is None or minimum <= maximum


def test_size_and_header_anchors():
    assert is_size_anchor("A4 size")
    assert is_size_anchor("  a4 SIZE (210x297)")
    assert not is_size_anchor("A3 size")
    assert is_header_anchor("PAPER NAME")
    assert not is_header_anchor(None)


def test_section_anchor_ignores_case_and_spaces():
    assert is_section_anchor("1-10")
    assert is_section_anchor("1 - 10")
    assert is_section_anchor("1 TO 10")
    assert not is_section_anchor("2-10")
    assert not is_section_anchor("")


def test_size_block_boundary():
    assert is_size_block_boundary("A3 Size")
    assert is_size_block_boundary("a5 size")
    assert not is_size_block_boundary("Size")
    assert not is_size_block_boundary("A4")


def test_name_column_and_category():
    assert is_name_column_header("Lamination Costing")
    assert is_name_column_header("ITEM")
    assert is_name_column_header("Section Sewing")
    assert not is_name_column_header("1-10")

    assert category_from_header("Lamination Costing") == "Lamination"
    assert category_from_header("binding COSTING") == "Binding"
    assert category_from_header("section sewing costing") == "Section sewing"
    assert category_from_header("Item") == "Item"


def test_repeated_section_header():
    assert is_repeated_section_header("Lamination Costing (cont.)")
    assert not is_repeated_section_header("A4 Gloss Lamination")


@pytest.mark.parametrize("cell, expected", [
    ("2.50", 2.5),
    ("AED 5.00", 5.0),
    ("1,200.50", 1200.5),
    (" 3 ", 3.0),
    (".75", 0.75),
])
def test_parse_price(cell, expected):
    assert parse_price(cell) == expected


@pytest.mark.parametrize("cell", ["", None, "-", "n/a", "0", "0.00", "AED"])
def test_parse_price_rejects_invalid_and_non_positive(cell):
    assert parse_price(cell) is None
