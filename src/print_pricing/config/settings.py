"""
Centralized settings and path configuration for the print pricing tool.
"""
import os
from pathlib import Path
from dataclasses import dataclass, field
from typing import Optional

from ..sheets.layout import MaterialsLayout, FinishingLayout


def get_project_root() -> Path:
    """Get the project root directory (where pyproject.toml lives)."""
    current = Path(__file__).resolve()
    for parent in current.parents:
        if (parent / 'pyproject.toml').exists():
            return parent
    # Fallback to 4 levels up from this file
    return Path(__file__).resolve().parent.parent.parent.parent


def _env_path(name: str, default: Path) -> Path:
    value = os.environ.get(name, '').strip()
    return Path(value) if value else default


@dataclass
class Settings:
    """Application settings with sensible defaults."""

    # Project paths
    project_root: Path

    # Local copies of the published sheets
    materials_csv: Path
    finishing_csv: Path

    # Output files
    sheet_report: Path
    export_dir: Path

    default_size: str = 'A4'

    # Sheet layout descriptors
    materials_layout: MaterialsLayout = field(default_factory=MaterialsLayout)
    finishing_layout: FinishingLayout = field(default_factory=FinishingLayout)

    @classmethod
    def load(cls, project_root: Optional[Path] = None) -> 'Settings':
        """Load settings from the project structure and environment."""
        root = project_root or get_project_root()
        sheets_dir = root / 'sheets'

        return cls(
            project_root=root,
            materials_csv=_env_path('PRINT_PRICING_MATERIALS_CSV', sheets_dir / 'materials.csv'),
            finishing_csv=_env_path('PRINT_PRICING_FINISHING_CSV', sheets_dir / 'finishing.csv'),
            sheet_report=root / 'outputs' / 'sheet_report.json',
            export_dir=root / 'outputs',
            default_size=os.environ.get('PRINT_PRICING_DEFAULT_SIZE', 'A4').strip().upper() or 'A4',
        )


# Default settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings.load()
    return _settings
