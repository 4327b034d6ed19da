"""
CSV row reader for published sheet exports.

Rows are kept exactly as the sheet has them: ragged lengths allowed and
blank lines preserved, so row indices line up with the spreadsheet.
"""
import csv
import io
from pathlib import Path


def read_rows(csv_text: str) -> list[list[str]]:
    """Split CSV text into a list of string rows."""
    if not csv_text:
        return []
    reader = csv.reader(io.StringIO(csv_text.lstrip("\ufeff")))
    return [list(row) for row in reader]


def cell_at(row: list[str], column) -> str:
    """Cell text at column, empty when the row is shorter."""
    if column is None or column < 0 or column >= len(row):
        return ""
    return row[column] or ""


def load_sheet_text(path: Path) -> str:
    """Read a locally saved sheet export."""
    with open(path, 'r', encoding='utf-8-sig', newline='') as f:
        return f.read()
