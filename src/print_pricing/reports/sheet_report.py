"""
Sheet Report - health check and flat exports of the parsed costing sheets.

The published sheets are maintained by hand, so their layout drifts.
The report records what the resolvers found for every print size, which
makes a moved anchor row or a vanished size block easy to spot.
"""
import hashlib
import json
from datetime import datetime
from pathlib import Path
from typing import Optional

import pandas as pd

from ..config.settings import get_settings, Settings
from ..engine.pricing_engine import PricingEngine
from ..sheets.models import FinishingTable, PriceTable, PrintSize


def get_text_hash(text: str) -> str:
    """Get a short SHA256 hash of sheet text."""
    return hashlib.sha256(text.encode('utf-8')).hexdigest()[:12]


def materials_frame(table: PriceTable) -> pd.DataFrame:
    """One row per paper, one price column per bracket label."""
    labels = [bracket.label for bracket in table.brackets]
    records = []
    for entry in table.entries:
        record = {'Paper Name': entry.name}
        for label in labels:
            record[label] = entry.prices.get(label)
        records.append(record)
    return pd.DataFrame(records, columns=['Paper Name'] + labels)


def finishing_frame(table: FinishingTable, size=None) -> pd.DataFrame:
    """One row per finishing item; bracket columns are the union over sections."""
    entries = table.for_size(size) if size is not None else table.entries
    records = []
    for entry in entries:
        record = {'Category': entry.category, 'Item': entry.name}
        for bracket in entry.brackets:
            record[bracket.label] = entry.prices.get(bracket.label)
        records.append(record)
    return pd.DataFrame(records)


def build_sheet_report(engine: Optional[PricingEngine] = None, settings: Optional[Settings] = None, verbose: bool = True) -> dict:
    """
    Parse both sheets for every print size and summarise the result.

    Args:
        engine: Optional engine override (defaults to one built from settings)
        settings: Optional settings override
        verbose: Print progress messages

    Returns:
        Report dictionary
    """
    settings = settings or get_settings()

    report = {
        "timestamp": datetime.now().isoformat(),
        "status": "pending",
        "input_files": {},
        "metrics": {},
        "warnings": [],
        "errors": []
    }

    if engine is None:
        try:
            engine = PricingEngine(settings)
        except FileNotFoundError as e:
            report["errors"].append(str(e))
            report["status"] = "failed"
            if verbose:
                print(f"CRITICAL ERROR: {e}")
            return report

    report["input_files"]["materials"] = {
        "path": str(settings.materials_csv),
        "hash": get_text_hash(engine.materials_csv)
    }
    report["input_files"]["finishing"] = {
        "path": str(settings.finishing_csv),
        "hash": get_text_hash(engine.finishing_csv)
    }

    sizes = {}
    for size in PrintSize:
        table = engine.materials_table(size)
        sizes[size.value] = {
            "brackets": [bracket.label for bracket in table.brackets],
            "papers": len(table.entries),
        }
        for warning in table.warnings:
            report["warnings"].append(f"{size.value}: {warning}")
        if verbose:
            print(f"{size.value}: {len(table.brackets)} ranges, {len(table.entries)} papers")

    finishing = engine.finishing_table()
    by_category = {}
    for entry in finishing.entries:
        by_category[entry.category] = by_category.get(entry.category, 0) + 1
    report["warnings"].extend(finishing.warnings)

    report["metrics"]["materials"] = sizes
    report["metrics"]["finishing"] = {
        "sections": finishing.sections,
        "items": len(finishing.entries),
        "by_category": by_category,
        "by_size": {size.value: len(finishing.for_size(size)) for size in PrintSize},
    }
    if verbose:
        print(f"Finishing: {finishing.sections} sections, {len(finishing.entries)} items")

    if not any(stats["papers"] for stats in sizes.values()):
        report["errors"].append("No papers could be read for any print size")
        report["status"] = "failed"
    else:
        report["status"] = "success"

    return report


def export_tables(engine: PricingEngine, export_dir: Path) -> list[Path]:
    """Write flat CSV copies of every parsed table."""
    export_dir.mkdir(parents=True, exist_ok=True)
    written = []
    for size in PrintSize:
        tables = engine.price_tables(size)
        path = export_dir / f"materials_{size.value}.csv"
        materials_frame(tables.materials).to_csv(path, index=False)
        written.append(path)

        path = export_dir / f"finishing_{size.value}.csv"
        finishing_frame(tables.finishing, size).to_csv(path, index=False)
        written.append(path)
    return written


def save_report(report: dict, path: Path):
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w') as f:
        json.dump(report, f, indent=2)
