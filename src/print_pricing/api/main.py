from fastapi import Depends, FastAPI, HTTPException
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field
from typing import List, Optional

from ..config.settings import get_settings
from ..engine import ItemKind, LineItem, PricingEngine, QuoteRequest
from ..sheets.models import PrintSize
from .state import get_engine, reset_engine

app = FastAPI(
    title="Print Pricing API",
    description="Price tables and quote calculation from the published costing sheets",
    version="1.0.0"
)

# Enable CORS for frontend development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


class LinePayload(BaseModel):
    kind: ItemKind
    name: str
    quantity_per_unit: int = Field(1, ge=0)
    label: str = ""


class QuotePayload(BaseModel):
    size: str = "A4"
    job_quantity: int = Field(..., ge=0)
    lines: List[LinePayload] = []
    # Inline sheet exports; the configured files are used for any left out
    materials_csv: Optional[str] = None
    finishing_csv: Optional[str] = None


def _parse_size(size: str) -> PrintSize:
    try:
        return PrintSize.parse(size)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


def _engine_for(payload: QuotePayload) -> PricingEngine:
    if payload.materials_csv is not None and payload.finishing_csv is not None:
        return PricingEngine(get_settings(), payload.materials_csv, payload.finishing_csv)
    base = get_engine()
    if payload.materials_csv is None and payload.finishing_csv is None:
        return base
    return PricingEngine(
        base.settings,
        payload.materials_csv if payload.materials_csv is not None else base.materials_csv,
        payload.finishing_csv if payload.finishing_csv is not None else base.finishing_csv,
    )


@app.get("/")
async def root():
    return {"status": "online", "message": "Print Pricing API Active"}


@app.get("/materials")
async def get_materials(size: str = "A4", engine: PricingEngine = Depends(get_engine)):
    table = engine.materials_table(_parse_size(size))
    return jsonable_encoder({
        "size": table.size.value,
        "brackets": table.brackets,
        "papers": table.entries,
        "warnings": table.warnings,
    })


@app.get("/finishing")
async def get_finishing(size: Optional[str] = None, engine: PricingEngine = Depends(get_engine)):
    """Finishing items; with a size, only the items offered for it."""
    table = engine.finishing_table()
    items = table.for_size(_parse_size(size)) if size else table.entries
    return jsonable_encoder({
        "sections": table.sections,
        "categories": table.categories(),
        "items": items,
        "warnings": table.warnings,
    })


@app.post("/quote")
async def calculate_quote(payload: QuotePayload):
    size = _parse_size(payload.size)
    engine = _engine_for(payload)
    request = QuoteRequest(
        size=size,
        job_quantity=payload.job_quantity,
        lines=[
            LineItem(kind=line.kind, name=line.name, quantity_per_unit=line.quantity_per_unit, label=line.label)
            for line in payload.lines
        ],
    )
    try:
        quote = engine.calculate(request)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return quote.to_dict()


@app.post("/system/reload")
async def reload_sheets():
    reset_engine()
    get_engine()
    return {"reloaded": True}


@app.get("/system/status")
async def get_status():
    settings = get_settings()
    return {
        "materials_csv": str(settings.materials_csv),
        "materials_found": settings.materials_csv.exists(),
        "finishing_csv": str(settings.finishing_csv),
        "finishing_found": settings.finishing_csv.exists(),
        "default_size": settings.default_size,
    }
