"""
Data models for parsed costing sheets.

Uses dataclasses for structured, type-safe data representation.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class PrintSize(str, Enum):
    """Print sizes that have their own column block in the materials sheet."""
    A3 = "A3"
    A4 = "A4"
    A5 = "A5"

    @classmethod
    def parse(cls, value) -> 'PrintSize':
        """Accept a PrintSize or any-case string ("a4", " A4 ")."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            raise ValueError(f"Unknown print size '{value}' (expected A3, A4 or A5)") from None

    @property
    def token(self) -> str:
        """Lowercase token matched against sheet text and item names."""
        return self.value.lower()


@dataclass(frozen=True)
class Bracket:
    """A quantity interval keyed by its sheet header text.

    ``max`` is None for open-ended headers such as "10000+".
    """
    min: int
    max: Optional[int]
    column: int
    label: str

    @property
    def is_open_ended(self) -> bool:
        return self.max is None

    def contains(self, volume: int) -> bool:
        if volume < self.min:
            return False
        return self.max is None or volume <= self.max


@dataclass(frozen=True)
class MaterialEntry:
    """A paper with its price per bracket label."""
    name: str
    prices: dict[str, float]


@dataclass(frozen=True)
class FinishingEntry:
    """A finishing item; carries the bracket set of the section it came from."""
    name: str
    category: str
    prices: dict[str, float]
    brackets: tuple[Bracket, ...]

    def matches_size(self, size: PrintSize) -> bool:
        return size.token in self.name.lower()


@dataclass
class PriceTable:
    """Materials for one print size, sharing a single bracket set."""
    size: PrintSize
    brackets: list[Bracket] = field(default_factory=list)
    entries: list[MaterialEntry] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.entries

    def find(self, name: str) -> Optional[MaterialEntry]:
        for entry in self.entries:
            if entry.name == name:
                return entry
        return None

    def add_warning(self, warning: str):
        self.warnings.append(warning)


@dataclass
class FinishingTable:
    """All finishing items across every section of the finishing sheet."""
    entries: list[FinishingEntry] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    sections: int = 0

    @property
    def is_empty(self) -> bool:
        return not self.entries

    def find(self, name: str) -> Optional[FinishingEntry]:
        for entry in self.entries:
            if entry.name == name:
                return entry
        return None

    def for_size(self, size) -> list[FinishingEntry]:
        """Entries whose name carries the size token (e.g. "A4")."""
        size = PrintSize.parse(size)
        return [entry for entry in self.entries if entry.matches_size(size)]

    def categories(self) -> list[str]:
        return list(dict.fromkeys(entry.category for entry in self.entries))

    def add_warning(self, warning: str):
        self.warnings.append(warning)
