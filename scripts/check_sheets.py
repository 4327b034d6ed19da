#!/usr/bin/env python
"""
Sheet check pipeline - parses the saved sheet exports, writes the health
report and flat table exports, then runs the golden tests.

Usage:
    python scripts/check_sheets.py
"""
import sys
from pathlib import Path

# Add src to path
src_path = Path(__file__).parent.parent / 'src'
sys.path.insert(0, str(src_path))

from print_pricing.config.settings import get_settings
from print_pricing.engine import PricingEngine
from print_pricing.reports.sheet_report import build_sheet_report, export_tables, save_report


def main():
    print("=" * 60)
    print("PRINT PRICING SHEET CHECK")
    print("=" * 60)
    print()

    settings = get_settings()

    print("[1/3] Parsing sheet exports...")
    report = build_sheet_report(settings=settings, verbose=True)
    save_report(report, settings.sheet_report)
    print(f"Report saved to: {settings.sheet_report}")

    if report["status"] != "success":
        print("\n❌ SHEET CHECK FAILED")
        for error in report["errors"]:
            print(f"  ERROR: {error}")
        sys.exit(1)

    print()
    print("[2/3] Exporting flat tables...")
    for path in export_tables(PricingEngine(settings), settings.export_dir):
        print(f"  {path}")

    print()
    print("[3/3] Running golden tests...")

    # Run tests
    import subprocess
    test_result = subprocess.run(
        [sys.executable, '-m', 'pytest', 'tests/test_golden_cases.py', '-v', '--tb=short'],
        cwd=Path(__file__).parent.parent
    )

    if test_result.returncode != 0:
        print("\n❌ TESTS FAILED")
        sys.exit(1)

    print()
    print("=" * 60)
    print("✅ SHEET CHECK COMPLETE")
    print("=" * 60)
    print()
    print("Summary:")
    for size, stats in report['metrics']['materials'].items():
        print(f"  {size}: {stats['papers']} papers across {len(stats['brackets'])} ranges")
    finishing = report['metrics']['finishing']
    print(f"  Finishing: {finishing['items']} items in {finishing['sections']} sections")

    if report["warnings"]:
        print()
        print("Warnings:")
        for warning in report["warnings"]:
            print(f"  {warning}")


if __name__ == "__main__":
    main()
