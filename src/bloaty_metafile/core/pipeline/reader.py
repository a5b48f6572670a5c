from __future__ import annotations

"""
Size Report Reader.

Parses the CSV emitted by 'bloaty -d sections,symbols --csv' into
SectionRecord objects. Any structural problem aborts the run with an
InputMalformedError naming the source.
"""

import csv
import io
import logging
from typing import Dict, List, Optional

from bloaty_metafile.domain.constants import STDIN_SOURCE
from bloaty_metafile.domain.errors import InputMalformedError
from bloaty_metafile.domain.records import SectionRecord

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("sections", "symbols", "vmsize", "filesize")

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def parse_records(csv_text: str, source: str = STDIN_SOURCE) -> List[SectionRecord]:
    """
    Parse the full CSV text of a size report.

    Leading blank lines are ignored; the first non-blank line must be the
    header. Extra columns are tolerated.

    Args:
        csv_text: Complete report text.
        source: File path or '<stdin>', used in error messages.

    Returns:
        List[SectionRecord]: Records in input order.

    Raises:
        InputMalformedError: On missing columns, short rows or invalid sizes.
    """
    reader = csv.DictReader(io.StringIO(csv_text.lstrip("\r\n")))

    try:
        fieldnames = reader.fieldnames
    except csv.Error as e:
        raise InputMalformedError(source, str(e)) from e

    if not fieldnames:
        raise InputMalformedError(source, "empty input, expected a CSV header")

    header = [f.strip().lower() for f in fieldnames]
    missing = [c for c in REQUIRED_COLUMNS if c not in header]
    if missing:
        raise InputMalformedError(source, f"missing column(s): {', '.join(missing)}")
    reader.fieldnames = header

    records: List[SectionRecord] = []
    try:
        for row in reader:
            records.append(_to_record(row, source, reader.line_num))
    except csv.Error as e:
        raise InputMalformedError(source, f"line {reader.line_num}: {e}") from e

    logger.debug(f"Parsed {len(records)} record(s) from {source}.")
    return records

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _to_record(row: Dict[str, Optional[str]], source: str, line: int) -> SectionRecord:
    values = {c: row.get(c) for c in REQUIRED_COLUMNS}
    for column, value in values.items():
        if value is None:
            raise InputMalformedError(source, f"line {line}: missing value for '{column}'")

    return SectionRecord(
        sections=str(values["sections"]),
        symbols=str(values["symbols"]),
        vmsize=_to_size(values["vmsize"], "vmsize", source, line),
        filesize=_to_size(values["filesize"], "filesize", source, line),
    )


def _to_size(value: Optional[str], column: str, source: str, line: int) -> int:
    try:
        size = int(str(value).strip())
    except ValueError:
        raise InputMalformedError(
            source, f"line {line}: '{column}' is not an integer ({value!r})"
        ) from None
    if size < 0:
        raise InputMalformedError(source, f"line {line}: '{column}' is negative ({size})")
    return size
