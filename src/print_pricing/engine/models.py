"""
Data models for the pricing engine.

Uses dataclasses for structured, type-safe data representation.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from ..sheets.models import PrintSize

OUT_OF_RANGE = "Out of Range"


class ItemKind(str, Enum):
    PAPER = "PAPER"
    FINISHING = "FINISHING"


@dataclass
class TraceStep:
    """A single step in the pricing resolution trace."""
    step: str
    description: str
    value: Optional[str] = None


@dataclass
class LineItem:
    """A quote line as entered by the caller; the engine only reads it."""
    kind: ItemKind
    name: str
    quantity_per_unit: int = 1
    label: str = ""


@dataclass
class ComputedLine:
    """Price of one line for the current job quantity and size."""
    unit_price: float = 0.0
    bracket_label: str = OUT_OF_RANGE
    total: float = 0.0
    warnings: list[str] = field(default_factory=list)
    trace: list[TraceStep] = field(default_factory=list)

    @property
    def out_of_range(self) -> bool:
        return self.bracket_label == OUT_OF_RANGE

    def add_trace(self, step: str, description: str, value: str = None):
        """Add a step to the trace for this line."""
        self.trace.append(TraceStep(step=step, description=description, value=value))

    def add_warning(self, warning: str):
        """Add a warning for this line."""
        self.warnings.append(warning)

    def get_trace_text(self) -> str:
        """Get human-readable trace as formatted text."""
        lines = []
        for t in self.trace:
            if t.value:
                lines.append(f"→ {t.step}: {t.description} = {t.value}")
            else:
                lines.append(f"→ {t.step}: {t.description}")
        return "\n".join(lines)


@dataclass
class QuoteRequest:
    """A quote request: print size, job quantity and the lines to price."""
    size: PrintSize
    job_quantity: int
    lines: list[LineItem] = field(default_factory=list)


@dataclass
class QuoteLine:
    """A caller line paired with its computed price."""
    item: LineItem
    computed: ComputedLine
    fixed_quantity: bool = False


@dataclass
class Quote:
    """Complete result of pricing a request."""
    size: PrintSize
    job_quantity: int
    lines: list[QuoteLine] = field(default_factory=list)
    total: float = 0.0
    warnings: list[str] = field(default_factory=list)

    def add_warning(self, warning: str):
        """Add a quote-level warning."""
        if warning not in self.warnings:
            self.warnings.append(warning)

    def to_dict(self) -> dict:
        """Plain dict form for JSON responses and exports."""
        return {
            "Size": self.size.value,
            "Job Quantity": self.job_quantity,
            "Total": self.total,
            "Lines": [
                {
                    "Type": line.item.kind.value,
                    "Label": line.item.label,
                    "Name": line.item.name,
                    "Quantity": line.item.quantity_per_unit,
                    "Unit Price": line.computed.unit_price,
                    "Range": line.computed.bracket_label,
                    "Total": line.computed.total,
                    "Fixed Quantity": line.fixed_quantity,
                }
                for line in self.lines
            ],
            "Warnings": list(self.warnings),
        }
