"""Tests for finishing sheet section discovery."""
import pytest

from print_pricing.sheets.finishing import FinishingSheetScanner, ScanState, parse_finishing_sheet
from print_pricing.sheets.layout import ColumnRole, FinishingLayout
from print_pricing.sheets.models import PrintSize
from print_pricing.sheets.reader import read_rows


@pytest.fixture(scope="module")
def table(finishing_csv):
    return parse_finishing_sheet(finishing_csv)


def test_every_section_is_found(table):
    assert table.sections == 4
    assert table.categories() == ["Lamination", "Binding", "Section Sewing", "Other"]


def test_entries_and_categories(table):
    assert [(e.name, e.category) for e in table.entries] == [
        ("A4 Gloss Lamination", "Lamination"),
        ("A3 Gloss Lamination", "Lamination"),
        ("A4 Matte Lamination", "Lamination"),
        ("A4 Wiro Binding", "Binding"),
        ("A5 Perfect Binding", "Binding"),
        ("A4 Spiral Binding", "Binding"),
        ("A4 Section Sewing 16pp", "Section Sewing"),
        ("A3 Section Sewing 16pp", "Section Sewing"),
        ("A4 Corner Rounding", "Other"),
    ]


def test_each_section_keeps_its_own_brackets(table):
    lamination = table.find("A4 Gloss Lamination")
    binding = table.find("A4 Wiro Binding")
    sewing = table.find("A4 Section Sewing 16pp")

    assert [b.label for b in lamination.brackets] == ["1-10", "11-100", "101+"]
    assert [b.column for b in lamination.brackets] == [6, 7, 8]
    assert [b.label for b in binding.brackets] == ["1-10", "11-50", "51-200"]
    assert [b.column for b in binding.brackets] == [2, 3, 4]
    assert [(b.min, b.max) for b in sewing.brackets] == [(1, 10), (11, 50), (51, None)]


def test_prices_are_read_against_section_brackets(table):
    assert table.find("A4 Gloss Lamination").prices == {"1-10": 1.2, "11-100": 0.9, "101+": 0.6}
    assert table.find("A4 Matte Lamination").prices == {"1-10": 1.0}
    assert table.find("A4 Spiral Binding").prices == {"1-10": 5.0}
    assert table.find("A4 Section Sewing 16pp").prices == {"1 to 10": 20.0, "11 to 50": 45.0, "51+": 40.0}


def test_stray_header_and_blank_names_are_skipped(table):
    names = [e.name for e in table.entries]
    assert "Lamination Costing (cont.)" not in names
    assert "" not in names


def test_missing_name_column_falls_back(table):
    entry = table.find("A4 Corner Rounding")
    assert entry.category == "Other"
    assert entry.prices == {"1-10": 0.5, "11-20": 0.4}
    assert any("no item name column" in w for w in table.warnings)


def test_for_size_filters_by_name_token(table):
    assert [e.name for e in table.for_size("a3")] == ["A3 Gloss Lamination", "A3 Section Sewing 16pp"]
    assert [e.name for e in table.for_size(PrintSize.A5)] == ["A5 Perfect Binding"]
    assert len(table.for_size("A4")) == 6


def test_rows_before_first_section_are_ignored():
    text = (
        ",,,,,A4 Gloss Lamination,1.00,1.00\n"
        ",,,,,Lamination Costing,1-10,11+\n"
        ",,,,,A4 Gloss Lamination,2.00,1.50\n"
    )
    table = parse_finishing_sheet(text)
    assert len(table.entries) == 1
    assert table.entries[0].prices == {"1-10": 2.0, "11+": 1.5}


def test_new_section_does_not_inherit_brackets():
    text = (
        "Item,1-10,11-20,21-30\n"
        "A4 Trim,1.00,2.00,3.00\n"
        "Binding,1 to 10\n"
        "A4 Tape Binding,4.00,5.00,6.00\n"
    )
    table = parse_finishing_sheet(text)
    trim, tape = table.entries
    assert trim.category == "Item"
    assert len(trim.brackets) == 3
    assert tape.category == "Binding"
    assert [b.label for b in tape.brackets] == ["1 to 10"]
    assert tape.prices == {"1 to 10": 4.0}


def test_section_without_brackets_reads_no_items():
    # "1-10" inside a longer, unparseable header still opens a section
    text = (
        "Lamination Costing,1-10 sheets\n"
        "A4 Gloss Lamination,1.00\n"
    )
    table = parse_finishing_sheet(text)
    assert table.sections == 1
    assert table.entries == []


def test_sheet_without_sections_gives_empty_table():
    table = parse_finishing_sheet("Nothing,to,see\nA4 Gloss,1,2\n")
    assert table.is_empty
    assert table.sections == 0
    assert table.warnings


def test_scanner_states(finishing_csv):
    scanner = FinishingSheetScanner()
    assert scanner.state is ScanState.SCANNING_FOR_HEADER
    scanner.scan(read_rows(finishing_csv)[:2])
    assert scanner.state is ScanState.SCANNING_FOR_HEADER
    scanner.scan(read_rows(finishing_csv)[2:4])
    assert scanner.state is ScanState.IN_SECTION
    assert scanner.section.category == "Lamination"


def test_fallback_name_column_from_layout():
    text = ",,1-10,11+\nA4 Foil,,3.00,2.00\n"
    layout = FinishingLayout(name_column=ColumnRole(role="item_name", fallback=0), default_category="Misc")
    table = parse_finishing_sheet(text, layout)
    assert [(e.name, e.category) for e in table.entries] == [("A4 Foil", "Misc")]


def test_superscript_digit_header_is_not_a_bracket():
    table = parse_finishing_sheet("Lamination Costing,1-10,²+\nA4 Gloss,1.00,2.00\n")
    assert table.sections == 1
    [entry] = table.entries
    assert [b.label for b in entry.brackets] == ["1-10"]
    assert entry.prices == {"1-10": 1.0}
