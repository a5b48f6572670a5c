from __future__ import annotations

"""
Metafile Report Emitter.

Converts a populated attribution tree into the esbuild metafile model and
serializes it to JSON.
"""

import json
import logging
from typing import Optional

from bloaty_metafile.core.analysis.tree import AttributionTree
from bloaty_metafile.domain.constants import MAX_JS_STRING_LENGTH
from bloaty_metafile.domain.errors import SerializationError
from bloaty_metafile.domain.metafile_models import InputDetail, Metafile, Output

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def tree_to_metafile(tree: AttributionTree, name: str, max_depth: int = 0) -> Metafile:
    """
    Build a metafile with a single synthetic output.

    Args:
        tree: Populated attribution tree.
        name: Key of the output entry.
        max_depth: Emission depth limit, 0 for unbounded.

    Returns:
        Metafile: inputs from the flattened tree and one output whose size
        is the tree's total filesize.
    """
    inputs = tree.emit(max_depth)
    root = tree.root

    output = Output(
        bytes=root.total_filesize,
        inputs={path: InputDetail(bytes_in_output=inp.bytes) for path, inp in inputs.items()},
        entry_point=root.name,
    )
    return Metafile(inputs=inputs, outputs={name: output})


def serialize_metafile(metafile: Metafile, indent: Optional[int] = None) -> str:
    """
    Render the metafile as JSON text.

    Logs a warning when the text is too long to be loaded as a single
    JavaScript string; the text is returned regardless.

    Raises:
        SerializationError: If the model cannot be encoded.
    """
    try:
        text = json.dumps(
            metafile.to_dict(),
            ensure_ascii=False,
            indent=indent,
            separators=None if indent else (",", ":"),
        )
    except (TypeError, ValueError) as e:
        raise SerializationError(str(e)) from e

    if len(text) > MAX_JS_STRING_LENGTH:
        logger.warning(
            f"Metafile is {len(text)} characters, above the JavaScript string limit "
            f"({MAX_JS_STRING_LENGTH}). Analyzers may fail to load it; consider --deep."
        )
    return text
