"""Engine subpackage - bracket resolution and quote pricing."""
from .pricing_engine import PricingEngine, PriceTables, compute_line, round_money, is_fixed_quantity
from .models import ItemKind, LineItem, ComputedLine, QuoteRequest, Quote

__all__ = [
    'PricingEngine', 'PriceTables', 'compute_line', 'round_money', 'is_fixed_quantity',
    'ItemKind', 'LineItem', 'ComputedLine', 'QuoteRequest', 'Quote',
]
