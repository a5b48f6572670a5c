from __future__ import annotations

"""
Pipeline Domain Data Models.

Defines the structures used to hand results from the pipeline engine to
the interface layer.
"""

from dataclasses import dataclass, field
from typing import Any, Dict

from bloaty_metafile.domain.metafile_models import Metafile

# -----------------------------------------------------------------------------
# CORE DATA MODELS
# -----------------------------------------------------------------------------

@dataclass
class BuildStats:
    """
    Counters collected while populating the attribution tree.

    Attributes:
        records: Rows read from the report.
        classified: Rows attributed to an owning crate.
        unclassified: Rows routed to the SECTIONS branch.
        skipped: Unclassified rows dropped by 'no_sections'.
        owners: Distinct owning crates observed.
        dependency_graph: Whether a Cargo.lock graph was available.
    """
    records: int = 0
    classified: int = 0
    unclassified: int = 0
    skipped: int = 0
    owners: int = 0
    dependency_graph: bool = False

    def as_dict(self) -> Dict[str, Any]:
        return {
            "records": self.records,
            "classified": self.classified,
            "unclassified": self.unclassified,
            "skipped": self.skipped,
            "owners": self.owners,
            "dependency_graph": self.dependency_graph,
        }


@dataclass(frozen=True)
class PipelineResult:
    """
    Result of a complete report conversion.

    Attributes:
        metafile: The generated metafile model.
        json_text: Serialized metafile.
        summary: Execution counters and configuration echo.
    """
    metafile: Metafile
    json_text: str
    summary: Dict[str, Any] = field(default_factory=dict)
