from __future__ import annotations

"""
esbuild Metafile Data Models.

Mirrors the subset of the esbuild metafile schema consumed by bundle
analyzers. Every model serializes itself to the camelCase JSON keys of the
format, omitting optional fields that are unset.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

# -----------------------------------------------------------------------------
# INPUT SIDE
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class Import:
    """
    Edge from an input to another input.

    Attributes:
        path: Full path of the imported input.
        kind: Optional esbuild import kind.
        external: Whether the import leaves the bundle.
        original: Optional unresolved import specifier.
    """
    path: str
    kind: Optional[str] = None
    external: bool = False
    original: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"path": self.path}
        if self.kind is not None:
            out["kind"] = self.kind
        if self.external:
            out["external"] = True
        if self.original is not None:
            out["original"] = self.original
        return out


@dataclass
class Input:
    """
    One flattened tree node.

    Attributes:
        bytes: Bytes reported for this path.
        imports: Edges to the direct children of the node.
        format: Optional module format tag.
        with_: Optional import attributes ('with' in JSON).
    """
    bytes: int
    imports: List[Import] = field(default_factory=list)
    format: Optional[str] = None
    with_: Optional[Dict[str, str]] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "bytes": self.bytes,
            "imports": [i.to_dict() for i in self.imports],
        }
        if self.format is not None:
            out["format"] = self.format
        if self.with_ is not None:
            out["with"] = dict(self.with_)
        return out

# -----------------------------------------------------------------------------
# OUTPUT SIDE
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class InputDetail:
    """Contribution of one input to an output."""
    bytes_in_output: int

    def to_dict(self) -> Dict[str, Any]:
        return {"bytesInOutput": self.bytes_in_output}


@dataclass
class Output:
    """
    Synthetic bundle output aggregating every input.

    Attributes:
        bytes: Total size of the output.
        inputs: Per-path contribution table.
        imports: Always empty for size reports.
        exports: Always empty for size reports.
        entry_point: Path declared as entry of the output.
        css_bundle: Unused, kept for schema completeness.
    """
    bytes: int
    inputs: Dict[str, InputDetail] = field(default_factory=dict)
    imports: List[Import] = field(default_factory=list)
    exports: List[str] = field(default_factory=list)
    entry_point: Optional[str] = None
    css_bundle: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "bytes": self.bytes,
            "inputs": {k: v.to_dict() for k, v in self.inputs.items()},
            "imports": [i.to_dict() for i in self.imports],
            "exports": list(self.exports),
        }
        if self.entry_point is not None:
            out["entryPoint"] = self.entry_point
        if self.css_bundle is not None:
            out["cssBundle"] = self.css_bundle
        return out


@dataclass
class Metafile:
    """Top-level metafile document."""
    inputs: Dict[str, Input] = field(default_factory=dict)
    outputs: Dict[str, Output] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "inputs": {k: v.to_dict() for k, v in self.inputs.items()},
            "outputs": {k: v.to_dict() for k, v in self.outputs.items()},
        }
