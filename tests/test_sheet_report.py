"""Tests for the sheet health report and flat exports."""
import json

from print_pricing.config.settings import Settings
from print_pricing.engine import PricingEngine
from print_pricing.reports.sheet_report import (
    build_sheet_report,
    export_tables,
    finishing_frame,
    materials_frame,
    save_report,
)


def test_report_metrics(engine):
    report = build_sheet_report(engine=engine, settings=engine.settings, verbose=False)

    assert report["status"] == "success"
    assert report["metrics"]["materials"]["A4"] == {"brackets": ["1-100", "101-500", "501+"], "papers": 3}
    finishing = report["metrics"]["finishing"]
    assert finishing["sections"] == 4
    assert finishing["by_category"] == {"Lamination": 3, "Binding": 3, "Section Sewing": 2, "Other": 1}
    assert finishing["by_size"] == {"A3": 2, "A4": 6, "A5": 1}
    assert report["input_files"]["materials"]["hash"]


def test_report_fails_without_papers(engine):
    broken = PricingEngine(engine.settings, "nothing,here\n", engine.finishing_csv)
    report = build_sheet_report(engine=broken, settings=engine.settings, verbose=False)

    assert report["status"] == "failed"
    assert report["errors"]
    assert any(w.startswith("A4:") for w in report["warnings"])


def test_report_without_sheet_files(tmp_path):
    report = build_sheet_report(settings=Settings.load(project_root=tmp_path), verbose=False)
    assert report["status"] == "failed"
    assert "not found" in report["errors"][0]


def test_frames(engine):
    tables = engine.price_tables("A4")

    papers = materials_frame(tables.materials)
    assert list(papers.columns) == ["Paper Name", "1-100", "101-500", "501+"]
    assert papers.set_index("Paper Name").loc["Matte 150gsm", "501+"] == 1.5

    items = finishing_frame(tables.finishing, "A4")
    assert list(items["Item"]) == [
        "A4 Gloss Lamination", "A4 Matte Lamination", "A4 Wiro Binding",
        "A4 Spiral Binding", "A4 Section Sewing 16pp", "A4 Corner Rounding",
    ]


def test_export_and_save(engine, tmp_path):
    written = export_tables(engine, tmp_path / "out")
    assert sorted(p.name for p in written) == sorted(
        f"{kind}_{size}.csv" for kind in ("materials", "finishing") for size in ("A3", "A4", "A5")
    )
    assert all(p.exists() for p in written)

    path = tmp_path / "out" / "report.json"
    save_report({"status": "success"}, path)
    assert json.loads(path.read_text()) == {"status": "success"}
