"""
Shared fixtures - sample sheet exports and an engine built from them.
"""
import os
import sys
from pathlib import Path

import pytest

# Add src to path for internal imports
src_path = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'src')
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from print_pricing.config.settings import Settings
from print_pricing.engine import PricingEngine

FIXTURES = Path(__file__).parent / 'fixtures'


@pytest.fixture(scope="session")
def materials_csv():
    return (FIXTURES / 'materials.csv').read_text(encoding='utf-8')


@pytest.fixture(scope="session")
def finishing_csv():
    return (FIXTURES / 'finishing.csv').read_text(encoding='utf-8')


@pytest.fixture
def settings(tmp_path, monkeypatch):
    """Settings pointing at copies of the fixture sheets in a temp project."""
    monkeypatch.delenv("PRINT_PRICING_MATERIALS_CSV", raising=False)
    monkeypatch.delenv("PRINT_PRICING_FINISHING_CSV", raising=False)
    sheets = tmp_path / 'sheets'
    sheets.mkdir()
    for name in ('materials.csv', 'finishing.csv'):
        (sheets / name).write_text((FIXTURES / name).read_text(encoding='utf-8'), encoding='utf-8')
    return Settings.load(project_root=tmp_path)


@pytest.fixture(scope="module")
def engine():
    """Engine over the fixture sheets, passed in as text."""
    return PricingEngine(
        Settings.load(project_root=FIXTURES.parent),
        materials_csv=(FIXTURES / 'materials.csv').read_text(encoding='utf-8'),
        finishing_csv=(FIXTURES / 'finishing.csv').read_text(encoding='utf-8'),
    )
