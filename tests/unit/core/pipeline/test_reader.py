from __future__ import annotations

"""
Unit tests for the Size Report Reader.

Verifies:
1. Parsing of quoted, multi-column bloaty CSV.
2. Tolerance of leading blank lines and extra columns.
3. InputMalformedError on missing columns, short rows and bad sizes.
"""

import pytest

from bloaty_metafile.core.pipeline.reader import parse_records
from bloaty_metafile.domain.errors import InputMalformedError
from bloaty_metafile.domain.records import SectionRecord


def test_parse_records_with_quoted_sections():
    """Verify quoted section names containing commas are kept intact."""
    csv_text = (
        "\n"
        "sections,symbols,vmsize,filesize\n"
        "\"__TEXT,__text\",[1848 Others],918108,918108\n"
    )
    records = parse_records(csv_text)

    assert records == [SectionRecord("__TEXT,__text", "[1848 Others]", 918108, 918108)]


def test_parse_records_keeps_order_and_empty_symbols(sample_csv):
    """Verify rows are returned in input order and empty symbols survive."""
    records = parse_records(sample_csv)

    assert len(records) == 7
    assert records[0].symbols == "llrt_utils::clone::structured_clone"
    assert records[-1] == SectionRecord(".data", "", 4, 0)


def test_parse_records_tolerates_extra_columns_and_header_case():
    """Verify unknown columns are ignored and header names are normalized."""
    csv_text = "Sections,Symbols,VMSize,FileSize,extra\n.text,a::b,1,2,x\n"
    assert parse_records(csv_text) == [SectionRecord(".text", "a::b", 1, 2)]


def test_parse_records_empty_input_is_malformed():
    """Verify a report without header is rejected."""
    with pytest.raises(InputMalformedError) as exc:
        parse_records("", source="report.csv")
    assert exc.value.source == "report.csv"


def test_parse_records_missing_column():
    """Verify a missing required column names the column."""
    with pytest.raises(InputMalformedError) as exc:
        parse_records("sections,symbols,vmsize\n.text,a::b,1\n")
    assert "filesize" in str(exc.value)
    assert "<stdin>" in str(exc.value)


def test_parse_records_short_row():
    """Verify rows with missing cells are rejected with their line number."""
    with pytest.raises(InputMalformedError) as exc:
        parse_records("sections,symbols,vmsize,filesize\n.text,a::b,1\n")
    assert "line 2" in exc.value.detail


@pytest.mark.parametrize("value", ["abc", "1.5", "-3"])
def test_parse_records_invalid_sizes(value):
    """Verify non-integer and negative sizes are rejected."""
    with pytest.raises(InputMalformedError):
        parse_records(f"sections,symbols,vmsize,filesize\n.text,a::b,{value},1\n")
