from __future__ import annotations

"""
Core orchestration pipeline.

Coordinates the conversion of a bloaty size report into a metafile:
1. Validates configuration.
2. Parses the CSV records.
3. Classifies every symbol and collects the owning crates.
4. Loads Cargo.lock (optional) and resolves dependency chains.
5. Populates the attribution tree.
6. Emits and serializes the metafile.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from bloaty_metafile.core.analysis.packages import DependencyGraph, PackageResolver
from bloaty_metafile.core.analysis.symbols import Classification, classify, split_raw_symbol
from bloaty_metafile.core.analysis.tree import AttributionTree
from bloaty_metafile.core.pipeline.emitter import serialize_metafile, tree_to_metafile
from bloaty_metafile.core.pipeline.reader import parse_records
from bloaty_metafile.core.pipeline.validator import validate_config
from bloaty_metafile.domain.constants import SECTIONS_NAME, STDIN_SOURCE, UNKNOWN_NAME
from bloaty_metafile.domain.pipeline_models import BuildStats, PipelineResult
from bloaty_metafile.domain.records import SectionRecord
from bloaty_metafile.infra.lockfile import try_load_dependency_graph

logger = logging.getLogger(__name__)


@dataclass
class BuildResult:
    """Populated tree plus the statistics gathered while building it."""
    tree: AttributionTree
    stats: BuildStats = field(default_factory=BuildStats)

# -----------------------------------------------------------------------------
# PATH CONSTRUCTION
# -----------------------------------------------------------------------------

def record_symbol(record: SectionRecord) -> str:
    """Symbol name of a record, with a placeholder for empty cells."""
    return record.symbols or UNKNOWN_NAME


def build_record_path(
        record: SectionRecord,
        classification: Optional[Classification],
        resolver: PackageResolver,
) -> List[str]:
    """
    Compute the attribution path of a record.

    Classified:   [root, ..., owner, section, *sub-segments]
    Unclassified: [SECTIONS, section, *raw-segments]

    Example:
        '.text', 'llrt_utils::clone::structured_clone'
            -> ['llrt', 'llrt_utils', '.text', 'clone', 'structured_clone']
    """
    if classification is None:
        return [SECTIONS_NAME, record.sections] + split_raw_symbol(record_symbol(record))

    owner, segments = classification
    return resolver.get_path(owner) + [record.sections] + segments[1:]

# -----------------------------------------------------------------------------
# TREE CONSTRUCTION
# -----------------------------------------------------------------------------

def build_tree_from_records(
        records: Iterable[SectionRecord],
        graph: Optional[DependencyGraph],
        *,
        no_sections: bool = False,
) -> BuildResult:
    """
    Classify, resolve and insert every record.

    Args:
        records: Parsed size records.
        graph: Dependency graph, or None to attribute crates without chains.
        no_sections: Drop records that end up in the SECTIONS branch.

    Returns:
        BuildResult: The populated tree and build counters.
    """
    rows = list(records)
    stats = BuildStats(records=len(rows), dependency_graph=graph is not None)

    # Classification is pure, so it runs once up front to collect targets
    classified = [classify(record_symbol(r)) for r in rows]
    targets = {c[0] for c in classified if c is not None}
    stats.owners = len(targets)

    resolver = PackageResolver(graph, targets)
    tree = AttributionTree()

    for record, classification in zip(rows, classified):
        if classification is None:
            stats.unclassified += 1
            if no_sections:
                stats.skipped += 1
                continue
        else:
            stats.classified += 1

        path = build_record_path(record, classification, resolver)
        tree.insert(path, record.vmsize, record.filesize)

    logger.info(
        f"Attributed {stats.classified} of {stats.records} record(s) to "
        f"{stats.owners} crate(s); {stats.unclassified} unclassified."
    )
    return BuildResult(tree=tree, stats=stats)


def build_tree(
        csv_text: str,
        config: Dict[str, Any],
        source: str = STDIN_SOURCE,
) -> BuildResult:
    """
    Build the attribution tree for a report using a validated configuration.

    A missing or broken Cargo.lock only disables dependency chains.

    Raises:
        InputMalformedError: If the CSV cannot be parsed.
    """
    records = parse_records(csv_text, source)
    graph = try_load_dependency_graph(config.get("lock_path"))
    return build_tree_from_records(records, graph, no_sections=bool(config.get("no_sections")))

# -----------------------------------------------------------------------------
# ENTRY POINT
# -----------------------------------------------------------------------------

def run_pipeline(
        csv_text: str,
        config: Optional[Dict[str, Any]] = None,
        *,
        source: str = STDIN_SOURCE,
        indent: Optional[int] = None,
) -> PipelineResult:
    """
    Execute the full report conversion.

    Args:
        csv_text: Complete bloaty CSV report.
        config: Raw or partial configuration dictionary.
        source: Identity of the input, used in error messages.
        indent: JSON indentation, None for compact output.

    Returns:
        PipelineResult: Metafile model, JSON text and summary.

    Raises:
        InputMalformedError: If the CSV cannot be parsed.
        SerializationError: If the metafile cannot be encoded.
    """
    logger.info("Pipeline execution started.")

    cfg, warnings = validate_config(config if config is not None else {}, strict=False)
    for warning in warnings:
        logger.warning(f"Configuration Warning: {warning}")

    built = build_tree(csv_text, cfg, source)
    metafile = tree_to_metafile(built.tree, cfg["output_name"], cfg["max_depth"])
    json_text = serialize_metafile(metafile, indent=indent)

    summary: Dict[str, Any] = built.stats.as_dict()
    summary.update({
        "source": source,
        "output_name": cfg["output_name"],
        "max_depth": cfg["max_depth"],
        "inputs": len(metafile.inputs),
        "total_filesize": built.tree.root.total_filesize,
        "total_vmsize": built.tree.root.total_vmsize,
    })

    logger.info("Pipeline completed successfully.")
    return PipelineResult(metafile=metafile, json_text=json_text, summary=summary)
