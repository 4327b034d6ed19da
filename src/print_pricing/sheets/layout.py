"""
Declarative layout descriptors for the costing sheets.

Anything about the sheets that is assumed rather than discovered (the
paper name column, degraded-mode column spans) is described here, so
layout drift in the source spreadsheet is a settings change.
"""
from dataclasses import dataclass, field
from typing import Callable, Optional

from .predicates import is_name_column_header


@dataclass(frozen=True)
class ColumnRole:
    """
    Where a column with a given role lives.

    A role is either pinned to ``position`` or discovered by running
    ``header_predicate`` over a header row; ``fallback`` is used when
    discovery finds nothing.
    """
    role: str
    position: Optional[int] = None
    header_predicate: Optional[Callable[[str], bool]] = None
    fallback: Optional[int] = None

    def locate(self, header_row=()) -> Optional[int]:
        """Resolve the column against a header row (last match wins)."""
        if self.position is not None:
            return self.position
        found = None
        if self.header_predicate is not None:
            for index, cell in enumerate(header_row):
                if self.header_predicate(cell):
                    found = index
        return found

    def resolve(self, header_row=()) -> tuple[int, bool]:
        """Return (column, used_fallback)."""
        found = self.locate(header_row)
        if found is not None:
            return found, False
        return self.fallback, True


def _default_spans() -> dict[str, tuple[int, int]]:
    return {
        "A4": (19, 36),
        "A3": (37, 53),
        "A5": (55, 71),
    }


@dataclass(frozen=True)
class MaterialsLayout:
    """Layout of the paper materials sheet."""
    name_column: ColumnRole = ColumnRole(role="paper_name", position=2)
    # Column spans [start, end) used when a size block cannot be found.
    fallback_spans: dict[str, tuple[int, int]] = field(default_factory=_default_spans)

    def fallback_span(self, size_value: str) -> tuple[int, int]:
        return self.fallback_spans.get(size_value, (0, 0))


@dataclass(frozen=True)
class FinishingLayout:
    """Layout of the lamination / binding finishing sheet."""
    name_column: ColumnRole = ColumnRole(
        role="item_name",
        header_predicate=is_name_column_header,
        fallback=5,
    )
    default_category: str = "Other"
