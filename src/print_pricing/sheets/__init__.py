"""Sheets subpackage - layout discovery and table building for costing sheets."""
from .models import PrintSize, Bracket, MaterialEntry, FinishingEntry, PriceTable, FinishingTable
from .materials import parse_materials_sheet, resolve_materials_schema
from .finishing import parse_finishing_sheet
from .ranges import parse_range

__all__ = [
    'PrintSize', 'Bracket', 'MaterialEntry', 'FinishingEntry', 'PriceTable', 'FinishingTable',
    'parse_materials_sheet', 'resolve_materials_schema', 'parse_finishing_sheet', 'parse_range',
]
