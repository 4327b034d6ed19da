"""
Pricing Engine - bracket matching and category-specific line totals.

Resolution for one line:
1. Find the entry by name (materials table for paper, finishing table
   for finishing)
2. Work out the lookup volume (total sheets or job quantity)
3. Pick the first bracket in column order containing the volume; above
   the last bracket, fall back to it and show its max with a "+"
4. Apply the formula for the item: per-sheet, per-set or flat fee
5. Round the total to cents
"""
import logging
from dataclasses import dataclass, replace
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import Optional

from ..config.settings import get_settings, Settings
from ..sheets.finishing import parse_finishing_sheet
from ..sheets.materials import parse_materials_sheet
from ..sheets.models import (
    Bracket,
    FinishingEntry,
    FinishingTable,
    MaterialEntry,
    PriceTable,
    PrintSize,
)
from ..sheets.reader import load_sheet_text
from .models import (
    OUT_OF_RANGE,
    ComputedLine,
    ItemKind,
    LineItem,
    Quote,
    QuoteLine,
    QuoteRequest,
)

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")


class PricingFormula(Enum):
    """How a finishing sheet value becomes a line total."""
    FLAT_FEE = "flat_fee"      # sheet value is the line total
    PER_SHEET = "per_sheet"    # value × qty per unit × job qty, looked up by sheets
    PER_SET = "per_set"        # value × qty per unit × job qty, looked up by job qty


@dataclass
class PriceTables:
    """Both parsed sheets for one print size."""
    materials: PriceTable
    finishing: FinishingTable


def round_money(value) -> float:
    """
    Round to cents, half up.

    Rounds the shortest decimal form of the float, so 10.005 (stored as
    10.00499999...) still rounds to 10.01.
    """
    amount = Decimal(repr(float(value)))
    return float(amount.quantize(CENT, rounding=ROUND_HALF_UP))


def is_fixed_quantity(category: Optional[str]) -> bool:
    """Binding and sewing lines are priced per job; their quantity stays at 1."""
    if not category:
        return False
    category = category.lower()
    return "binding" in category or "sewing" in category


def formula_for(category: Optional[str]) -> PricingFormula:
    category = (category or "").lower()
    if "sewing" in category:
        return PricingFormula.FLAT_FEE
    if "lamination" in category:
        return PricingFormula.PER_SHEET
    return PricingFormula.PER_SET


def resolve_bracket(brackets, volume: int) -> Optional[tuple[Bracket, str]]:
    """
    Find the bracket for a lookup volume.

    Returns (bracket, display label) or None when the volume is out of
    range. Brackets are tried in column order; the first one containing
    the volume wins even when ranges overlap.
    """
    for bracket in brackets:
        if bracket.contains(volume):
            return bracket, bracket.label

    if brackets:
        last = brackets[-1]
        if last.max is not None and volume > last.max:
            label = last.label if "+" in last.label else f"{last.max}+"
            return last, label

    return None


def _check_quantities(line: LineItem, job_quantity: int):
    if job_quantity < 0:
        raise ValueError(f"Job quantity must be non-negative, got {job_quantity}")
    if line.quantity_per_unit < 0:
        raise ValueError(f"Line quantity must be non-negative, got {line.quantity_per_unit}")


def price_paper(entry: MaterialEntry, brackets, quantity_per_unit: int, job_quantity: int) -> ComputedLine:
    """Paper is looked up and charged by total sheet volume."""
    computed = ComputedLine()
    volume = quantity_per_unit * job_quantity
    computed.add_trace("Volume", f"{quantity_per_unit} per unit × {job_quantity} jobs", str(volume))

    match = resolve_bracket(brackets, volume)
    if match is None:
        computed.add_trace("Range", "No bracket covers this volume", OUT_OF_RANGE)
        return computed

    bracket, label = match
    computed.bracket_label = label
    computed.unit_price = entry.prices.get(bracket.label, 0.0)
    computed.add_trace("Range", f"Matched column {bracket.column}", label)
    if bracket.label not in entry.prices:
        computed.add_warning(f"No price for '{entry.name}' in range {bracket.label}")

    computed.total = round_money(volume * computed.unit_price)
    computed.add_trace("Extension", f"{volume} sheets × ${computed.unit_price:.2f}", f"${computed.total:.2f}")
    return computed


def price_finishing(entry: FinishingEntry, size: PrintSize, quantity_per_unit: int, job_quantity: int) -> ComputedLine:
    """Finishing uses the bracket set of its own section and a category formula."""
    computed = ComputedLine()

    if not entry.matches_size(size):
        computed.add_trace("Size", f"'{entry.name}' is not a {size.value} item", OUT_OF_RANGE)
        return computed
    if not entry.brackets:
        return computed

    formula = formula_for(entry.category)
    if formula is PricingFormula.PER_SHEET:
        volume = quantity_per_unit * job_quantity
    else:
        volume = job_quantity
    computed.add_trace("Formula", f"{entry.category or 'Uncategorised'} priced {formula.value}", str(volume))

    match = resolve_bracket(entry.brackets, volume)
    if match is None:
        computed.add_trace("Range", "No bracket covers this volume", OUT_OF_RANGE)
        return computed

    bracket, label = match
    computed.bracket_label = label
    computed.unit_price = entry.prices.get(bracket.label, 0.0)
    computed.add_trace("Range", f"Matched column {bracket.column}", label)

    if formula is PricingFormula.FLAT_FEE:
        total = computed.unit_price
    else:
        total = computed.unit_price * quantity_per_unit * job_quantity

    computed.total = round_money(total)
    computed.add_trace("Total", formula.value, f"${computed.total:.2f}")
    return computed


def compute_line(line: LineItem, tables: PriceTables, job_quantity: int, size) -> ComputedLine:
    """
    Price a single line.

    Unknown items and volumes outside every bracket come back as
    "Out of Range" with zero price rather than raising.
    """
    size = PrintSize.parse(size)
    _check_quantities(line, job_quantity)

    if line.kind == ItemKind.PAPER:
        entry = tables.materials.find(line.name)
        if entry is None:
            computed = ComputedLine()
            computed.add_trace("Lookup", f"Paper '{line.name}' not in {size.value} table", OUT_OF_RANGE)
            return computed
        return price_paper(entry, tables.materials.brackets, line.quantity_per_unit, job_quantity)

    entry = tables.finishing.find(line.name)
    if entry is None:
        computed = ComputedLine()
        computed.add_trace("Lookup", f"Finishing item '{line.name}' not found", OUT_OF_RANGE)
        return computed
    return price_finishing(entry, size, line.quantity_per_unit, job_quantity)


def select_finishing_item(line: LineItem, name: str, finishing: FinishingTable) -> LineItem:
    """
    Point a finishing line at a new item.

    The label takes the item's category, and binding / sewing lines are
    pinned to a quantity of 1.
    """
    updated = replace(line, name=name)
    entry = finishing.find(name)
    if entry is None or not entry.category:
        return updated
    updated.label = entry.category
    if is_fixed_quantity(entry.category):
        updated.quantity_per_unit = 1
    return updated


class PricingEngine:
    """
    Holds the two sheet feeds and prices quotes against them.

    Tables are parsed fresh for every call; the engine keeps only the raw
    CSV text.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        materials_csv: Optional[str] = None,
        finishing_csv: Optional[str] = None,
    ):
        """Initialize engine with sheet text, read from disk when not given."""
        self.settings = settings or get_settings()
        self._given = (materials_csv, finishing_csv)
        self.materials_csv = materials_csv
        self.finishing_csv = finishing_csv

        if self.materials_csv is None:
            self.materials_csv = self._load_sheet(self.settings.materials_csv, "Materials")
        if self.finishing_csv is None:
            self.finishing_csv = self._load_sheet(self.settings.finishing_csv, "Finishing")

    @staticmethod
    def _load_sheet(path, title: str) -> str:
        if not path.exists():
            raise FileNotFoundError(
                f"{title} sheet export not found at {path}. "
                "Save the published CSV there or set the path in the environment."
            )
        return load_sheet_text(path)

    def reload_data(self):
        """Re-read sheet exports from disk."""
        self.__init__(self.settings, *self._given)

    def materials_table(self, size) -> PriceTable:
        return parse_materials_sheet(self.materials_csv, size, self.settings.materials_layout)

    def finishing_table(self) -> FinishingTable:
        return parse_finishing_sheet(self.finishing_csv, self.settings.finishing_layout)

    def price_tables(self, size) -> PriceTables:
        return PriceTables(materials=self.materials_table(size), finishing=self.finishing_table())

    def paper_options(self, size) -> list[MaterialEntry]:
        return self.materials_table(size).entries

    def finishing_options(self, size) -> list[FinishingEntry]:
        """Finishing items offered for a size (name carries the size token)."""
        return self.finishing_table().for_size(size)

    def is_fixed_quantity(self, line: LineItem, finishing: Optional[FinishingTable] = None) -> bool:
        """Binding and sewing lines always carry one unit per job."""
        if line.kind != ItemKind.FINISHING:
            return False
        entry = (finishing or self.finishing_table()).find(line.name)
        return entry is not None and is_fixed_quantity(entry.category)

    def calculate(self, request: QuoteRequest) -> Quote:
        """
        Price every line of a request and sum the grand total.

        Args:
            request: QuoteRequest with size, job quantity and lines

        Returns:
            Quote with one QuoteLine per request line, in order
        """
        size = PrintSize.parse(request.size)
        tables = self.price_tables(size)
        quote = Quote(size=size, job_quantity=request.job_quantity)

        for warning in tables.materials.warnings + tables.finishing.warnings:
            quote.add_warning(warning)

        running = 0.0
        for item in request.lines:
            computed = compute_line(item, tables, request.job_quantity, size)
            fixed = self.is_fixed_quantity(item, tables.finishing)
            quote.lines.append(QuoteLine(item=item, computed=computed, fixed_quantity=fixed))
            running += computed.total

            # Bubble up line warnings
            for warning in computed.warnings:
                quote.add_warning(warning)

        quote.total = round_money(running)
        logger.debug("Priced %d lines for %s x%d: %.2f", len(quote.lines), size.value, request.job_quantity, quote.total)
        return quote
