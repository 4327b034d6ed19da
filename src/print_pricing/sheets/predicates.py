"""
Named predicates used to discover the layout of the costing sheets.

Each heuristic the resolvers rely on lives here so it can be tested on
its own. Cell values are normalised the same way everywhere: None is
treated as empty text and matching is case-insensitive.
"""
import math
import re
from typing import Optional

from .ranges import parse_range

SIZE_TOKENS = ("a3", "a4", "a5")
NAME_COLUMN_KEYWORDS = ("lamination", "binding", "sewing", "item")

# Structural anchor of the materials sheet. Always the A4 marker, whatever
# size is being resolved: the size-definition row is found by this text.
SIZE_ANCHOR = "a4 size"
HEADER_ANCHOR = "paper name"
SECTION_ANCHORS = ("1-10", "1to10")

_NON_PRICE = re.compile(r"[^0-9.]")
_WHITESPACE = re.compile(r"\s+")


def cell_text(cell) -> str:
    return "" if cell is None else str(cell)


def _lower(cell) -> str:
    return cell_text(cell).lower()


def is_size_anchor(cell) -> bool:
    """Cell marks the size-definition row of the materials sheet."""
    return SIZE_ANCHOR in _lower(cell)


def is_header_anchor(cell) -> bool:
    """Cell marks the bracket header row of the materials sheet."""
    return HEADER_ANCHOR in _lower(cell)


def is_section_anchor(cell) -> bool:
    """Cell marks the header row of a new finishing section."""
    compact = _WHITESPACE.sub("", _lower(cell))
    return any(anchor in compact for anchor in SECTION_ANCHORS)


def is_bracket_header(cell) -> bool:
    return parse_range(cell) is not None


def is_size_cell(cell, size_token: str) -> bool:
    """Cell starts the column block of the given size ("a3 size")."""
    return f"{size_token} size" in _lower(cell)


def is_size_block_boundary(cell) -> bool:
    """Cell starts any size block; ends the block scanned before it."""
    text = _lower(cell)
    return "size" in text and any(token in text for token in SIZE_TOKENS)


def is_name_column_header(cell) -> bool:
    text = _lower(cell)
    return any(keyword in text for keyword in NAME_COLUMN_KEYWORDS)


def is_repeated_section_header(name: str) -> bool:
    """A data-row name that is really a stray copy of a section header."""
    text = _lower(name)
    return "lamination" in text and "costing" in text


def row_has(row, predicate) -> bool:
    return any(predicate(cell) for cell in row)


def find_row(rows, predicate) -> int:
    """Index of the first row with a cell matching predicate, or -1."""
    for index, row in enumerate(rows):
        if row_has(row, predicate):
            return index
    return -1


def category_from_header(text: str) -> str:
    """Category label from a header: "Lamination Costing" -> "Lamination"."""
    category = re.sub("costing", "", cell_text(text), flags=re.IGNORECASE).strip()
    return category[:1].upper() + category[1:]


def parse_price(cell) -> Optional[float]:
    """
    Read a price cell, tolerating currency text such as "AED 5.00".

    Returns None for blank, non-numeric and non-positive values.
    """
    raw = _NON_PRICE.sub("", cell_text(cell))
    match = re.match(r"\d*\.?\d+|\d+\.", raw)
    if not match:
        return None
    price = float(match.group(0))
    if not math.isfinite(price) or price <= 0:
        return None
    return price
