"""
Materials sheet - schema resolution and table building.

The paper costing sheet has no fixed layout. Two anchor rows are found by
their text:
- the size-definition row (the one carrying "A4 size"), which splits the
  columns into one block per print size
- the header row (the one carrying "Paper name"), whose cells inside the
  selected size block are bracket headers such as "1-50"

Data rows follow the header row; the paper name sits in a fixed column
described by MaterialsLayout.
"""
import logging
from dataclasses import dataclass, field
from typing import Optional

from .layout import MaterialsLayout
from .models import Bracket, MaterialEntry, PriceTable, PrintSize
from .predicates import (
    find_row,
    is_header_anchor,
    is_size_anchor,
    is_size_block_boundary,
    is_size_cell,
    parse_price,
)
from .ranges import parse_range
from .reader import cell_at, read_rows

logger = logging.getLogger(__name__)


@dataclass
class MaterialsSchema:
    """Where the selected size's data lives inside the materials sheet."""
    size: PrintSize
    size_row: int
    header_row: int
    start: int
    end: int
    brackets: list[Bracket]
    used_fallback: bool = False
    warnings: list[str] = field(default_factory=list)

    @property
    def data_start_row(self) -> int:
        return self.header_row + 1


def find_size_span(size_row: list[str], size: PrintSize) -> Optional[tuple[int, int]]:
    """
    Column span [start, end) of the size block in the size-definition row.

    The block ends at the next cell naming any size, or at the row end.
    """
    for start, cell in enumerate(size_row):
        if not is_size_cell(cell, size.token):
            continue
        for end in range(start + 1, len(size_row)):
            if is_size_block_boundary(size_row[end]):
                return start, end
        return start, len(size_row)
    return None


def brackets_in_span(header_row: list[str], start: int, end: int) -> list[Bracket]:
    """Parse header cells in [start, end) into brackets, in column order."""
    brackets = []
    for column in range(start, end):
        header = cell_at(header_row, column)
        parsed = parse_range(header)
        if parsed is None:
            continue
        minimum, maximum = parsed
        brackets.append(Bracket(min=minimum, max=maximum, column=column, label=header.strip()))
    return brackets


def resolve_materials_schema(
    rows: list[list[str]],
    size,
    layout: Optional[MaterialsLayout] = None,
) -> Optional[MaterialsSchema]:
    """
    Locate the anchor rows and the bracket columns for a print size.

    Returns None when either anchor row is missing.
    """
    size = PrintSize.parse(size)
    layout = layout or MaterialsLayout()

    size_row = find_row(rows, is_size_anchor)
    header_row = find_row(rows, is_header_anchor)

    if size_row == -1 or header_row == -1:
        logger.error("Could not find 'A4 size' or 'Paper name' rows in materials sheet")
        return None

    logger.debug("Size definition at row %d, headers at row %d", size_row, header_row)

    warnings = []
    used_fallback = False
    span = find_size_span(rows[size_row], size)
    if span is None:
        span = layout.fallback_span(size.value)
        used_fallback = True
        msg = f"Could not find '{size.value} size' block; using default columns {span[0]}-{span[1]}"
        logger.warning(msg)
        warnings.append(msg)

    start, end = span
    brackets = brackets_in_span(rows[header_row], start, end)
    logger.info("Found %d price ranges for %s in columns %d-%d", len(brackets), size.value, start, end)

    return MaterialsSchema(
        size=size,
        size_row=size_row,
        header_row=header_row,
        start=start,
        end=end,
        brackets=brackets,
        used_fallback=used_fallback,
        warnings=warnings,
    )


def read_prices(row: list[str], brackets) -> dict[str, float]:
    """Valid, strictly positive prices of a row keyed by bracket label."""
    prices = {}
    for bracket in brackets:
        price = parse_price(cell_at(row, bracket.column))
        if price is not None:
            prices[bracket.label] = price
    return prices


def build_material_entries(
    rows: list[list[str]],
    header_row: int,
    brackets: list[Bracket],
    layout: Optional[MaterialsLayout] = None,
) -> list[MaterialEntry]:
    """
    Read papers from every row after the header row.

    Rows with a blank name, and papers without a single valid price, are
    skipped.
    """
    layout = layout or MaterialsLayout()
    name_column = layout.name_column.locate()

    entries = []
    for row in rows[header_row + 1:]:
        name = cell_at(row, name_column).strip()
        if not name:
            continue

        prices = read_prices(row, brackets)
        if prices:
            entries.append(MaterialEntry(name=name, prices=prices))

    return entries


def parse_materials_sheet(
    csv_text: str,
    size,
    layout: Optional[MaterialsLayout] = None,
) -> PriceTable:
    """
    Build the materials price table for a print size.

    Never raises on layout problems: a sheet without its anchor rows
    gives an empty table carrying a warning.
    """
    size = PrintSize.parse(size)
    rows = read_rows(csv_text)
    logger.debug("Materials sheet: %d raw rows", len(rows))

    schema = resolve_materials_schema(rows, size, layout)
    if schema is None:
        table = PriceTable(size=size)
        table.add_warning("Materials sheet layout not recognised: 'A4 size' or 'Paper name' row missing")
        return table

    entries = build_material_entries(rows, schema.header_row, schema.brackets, layout)
    logger.info("Parsed %d papers for %s", len(entries), size.value)

    return PriceTable(
        size=size,
        brackets=schema.brackets,
        entries=entries,
        warnings=list(schema.warnings),
    )
