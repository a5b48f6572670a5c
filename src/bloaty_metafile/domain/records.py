from __future__ import annotations

"""
Size Report Data Models.

Defines the immutable record produced for every row of a bloaty
'sections,symbols' CSV report.
"""

from dataclasses import dataclass

# -----------------------------------------------------------------------------
# CORE DATA MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class SectionRecord:
    """
    One row of the bloaty size report.

    Attributes:
        sections: Section the symbol lives in (e.g. '.text').
        symbols: Demangled symbol name, possibly empty.
        vmsize: Bytes occupied in virtual memory.
        filesize: Bytes occupied on disk.
    """
    sections: str
    symbols: str
    vmsize: int
    filesize: int
