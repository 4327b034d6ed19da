"""
Finishing sheet - section discovery and table building in one pass.

The lamination / binding sheet is a stack of self-contained sections
(Lamination, Binding, Section Sewing, ...). Each section starts with a
header row carrying its own bracket headers and a name column whose
position and category label differ per section. Every section header
contains the "1-10" (or "1to10") bracket, which is how it is recognised.
"""
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from .layout import FinishingLayout
from .materials import read_prices
from .models import Bracket, FinishingEntry, FinishingTable
from .predicates import (
    category_from_header,
    is_repeated_section_header,
    is_section_anchor,
    row_has,
)
from .ranges import parse_range
from .reader import cell_at, read_rows

logger = logging.getLogger(__name__)


class ScanState(Enum):
    SCANNING_FOR_HEADER = "scanning_for_header"
    IN_SECTION = "in_section"


@dataclass
class Section:
    """State of the section currently being read."""
    header_row: int
    name_column: int
    category: str
    brackets: list[Bracket] = field(default_factory=list)


def open_section(row: list[str], row_index: int, layout: FinishingLayout) -> tuple[Section, Optional[str]]:
    """
    Read a section header row.

    Returns the new section and a warning when the name column had to
    fall back to its default position.
    """
    brackets = []
    for column, raw in enumerate(row):
        cell = (raw or "").strip()
        parsed = parse_range(cell)
        if parsed is not None:
            minimum, maximum = parsed
            brackets.append(Bracket(min=minimum, max=maximum, column=column, label=cell))

    name_column, used_fallback = layout.name_column.resolve(row)
    if used_fallback:
        category = layout.default_category
        warning = f"Row {row_index}: no item name column in section header; using column {name_column}"
        logger.warning(warning)
    else:
        category = category_from_header(cell_at(row, name_column))
        warning = None

    return Section(header_row=row_index, name_column=name_column, category=category, brackets=brackets), warning


class FinishingSheetScanner:
    """
    Two-state scanner over the finishing sheet rows.

    SCANNING_FOR_HEADER until the first section anchor; IN_SECTION after
    it. Every anchor row opens a fresh section; nothing carries over from
    the previous one.
    """

    def __init__(self, layout: Optional[FinishingLayout] = None):
        self.layout = layout or FinishingLayout()
        self.state = ScanState.SCANNING_FOR_HEADER
        self.section: Optional[Section] = None
        self.table = FinishingTable()

    def scan(self, rows: list[list[str]]) -> FinishingTable:
        for row_index, row in enumerate(rows):
            if row_has(row, is_section_anchor):
                self._enter_section(row, row_index)
            elif self.state is ScanState.IN_SECTION:
                self._read_item(row)
        return self.table

    def _enter_section(self, row: list[str], row_index: int):
        logger.debug("Found section header at row %d", row_index)
        self.section, warning = open_section(row, row_index, self.layout)
        self.state = ScanState.IN_SECTION
        self.table.sections += 1
        if warning:
            self.table.add_warning(warning)

    def _read_item(self, row: list[str]):
        section = self.section
        if not section.brackets:
            return

        name = cell_at(row, section.name_column).strip()
        if not name or is_repeated_section_header(name):
            return

        prices = read_prices(row, section.brackets)
        if not prices:
            return

        self.table.entries.append(FinishingEntry(
            name=name,
            category=section.category,
            prices=prices,
            brackets=tuple(section.brackets),
        ))


def parse_finishing_sheet(csv_text: str, layout: Optional[FinishingLayout] = None) -> FinishingTable:
    """Build the finishing table from the raw sheet export."""
    rows = read_rows(csv_text)
    table = FinishingSheetScanner(layout).scan(rows)

    if table.sections == 0:
        msg = "Finishing sheet layout not recognised: no section header with a '1-10' bracket"
        logger.error(msg)
        table.add_warning(msg)
    else:
        logger.info("Parsed %d finishing items from %d sections", len(table.entries), table.sections)

    return table
