"""
Shared engine instance for the API.

Built on first use so the app can start before the sheet exports are in
place; routes report 503 until they are.
"""
from typing import Optional

from fastapi import HTTPException

from ..config.settings import get_settings
from ..engine import PricingEngine

_engine: Optional[PricingEngine] = None


def get_engine() -> PricingEngine:
    """FastAPI dependency returning the configured engine."""
    global _engine
    if _engine is None:
        try:
            _engine = PricingEngine(get_settings())
        except FileNotFoundError as e:
            raise HTTPException(status_code=503, detail=str(e))
    return _engine


def reset_engine():
    """Drop the cached engine so the next request re-reads the sheets."""
    global _engine
    _engine = None
