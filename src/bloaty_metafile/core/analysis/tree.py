from __future__ import annotations

"""
Attribution Tree.

Accumulates (path, vmsize, filesize) observations into a cumulative
hierarchy and flattens it into metafile inputs, optionally collapsing
everything below a maximum depth into its ancestor's totals.
"""

import logging
from typing import Dict, List, Optional, Sequence

from bloaty_metafile.domain.constants import PATH_SEPARATOR, ROOT_NAME, SEGMENT_SEPARATOR_ESCAPE
from bloaty_metafile.domain.metafile_models import Import, Input
from bloaty_metafile.domain.tree_models import Node

logger = logging.getLogger(__name__)


class AttributionTree:
    """
    Mutable size accumulator keyed by attribution paths.

    Every insert adds its sizes to the totals of each node along the path
    (root included) and to the own sizes of the terminal node only, so
    total = own + sum(child totals) holds for every node.

    Separators inside a segment are escaped on insert, so no two nodes
    share an emitted path.
    """

    def __init__(self, root_name: str = ROOT_NAME) -> None:
        self.root = Node(name=root_name)

    # -------------------------------------------------------------------------
    # POPULATION
    # -------------------------------------------------------------------------

    def insert(self, path: Sequence[str], vmsize: int, filesize: int) -> None:
        """
        Absorb one observation.

        Args:
            path: Non-empty sequence of segment names from the root.
            vmsize: Virtual-memory bytes.
            filesize: On-disk bytes.

        Raises:
            ValueError: If `path` is empty.
        """
        if not path:
            raise ValueError("Attribution path must contain at least one segment.")

        current = self.root
        current.total_vmsize += vmsize
        current.total_filesize += filesize

        for part in path:
            current = current.child(_segment(part))
            current.total_vmsize += vmsize
            current.total_filesize += filesize

        current.vmsize += vmsize
        current.filesize += filesize

    def find(self, path: Sequence[str]) -> Optional[Node]:
        """Return the node at `path`, or None."""
        current = self.root
        for part in path:
            nxt = current.nodes.get(_segment(part))
            if nxt is None:
                return None
            current = nxt
        return current

    # -------------------------------------------------------------------------
    # EMISSION
    # -------------------------------------------------------------------------

    def emit(self, max_depth: int = 0) -> Dict[str, Input]:
        """
        Flatten the tree into '/'-joined paths.

        The root itself is never emitted. A node at depth `max_depth`
        (separators in its path) is emitted with its total size and no
        imports, and nothing below it is visited; 0 disables the limit.
        Emitted bytes always sum to the root's total filesize.

        Args:
            max_depth: Maximum path depth, 0 for unbounded.

        Returns:
            Dict[str, Input]: Inputs keyed by full path.
        """
        inputs: Dict[str, Input] = {}
        for name in sorted(self.root.nodes):
            _traverse(self.root.nodes[name], inputs, None, 0, max_depth)

        logger.debug(f"Emitted {len(inputs)} inputs (max_depth={max_depth}).")
        return inputs


def _segment(name: str) -> str:
    return name.replace(PATH_SEPARATOR, SEGMENT_SEPARATOR_ESCAPE)


def _traverse(
        node: Node,
        inputs: Dict[str, Input],
        parent: Optional[str],
        depth: int,
        max_depth: int,
) -> None:
    path = node.name if parent is None else parent + PATH_SEPARATOR + node.name

    if max_depth != 0 and depth >= max_depth:
        inputs[path] = Input(bytes=node.total_filesize)
        return

    children = sorted(node.nodes)
    imports: List[Import] = [Import(path=path + PATH_SEPARATOR + c) for c in children]
    inputs[path] = Input(bytes=node.filesize, imports=imports)

    for c in children:
        _traverse(node.nodes[c], inputs, path, depth + 1, max_depth)
