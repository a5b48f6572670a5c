from __future__ import annotations

"""
Attribution Tree Data Models.

Provides the recursive node used by the attribution tree. Each node owns
its children exclusively; traversal is always top-down.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator

# -----------------------------------------------------------------------------
# STRUCTURAL COMPONENTS
# -----------------------------------------------------------------------------

@dataclass
class Node:
    """
    A named location in the attribution tree.

    Attributes:
        name: Path segment this node represents.
        vmsize: Virtual-memory bytes attributed exactly to this node.
        filesize: On-disk bytes attributed exactly to this node.
        total_vmsize: vmsize of this node plus all descendants.
        total_filesize: filesize of this node plus all descendants.
        nodes: Children keyed by their name.
    """
    name: str
    vmsize: int = 0
    filesize: int = 0
    total_vmsize: int = 0
    total_filesize: int = 0
    nodes: Dict[str, "Node"] = field(default_factory=dict)

    def child(self, name: str) -> "Node":
        """Return the child called `name`, creating it when absent."""
        node = self.nodes.get(name)
        if node is None:
            node = Node(name=name)
            self.nodes[name] = node
        return node

    def iter_nodes(self) -> Iterator["Node"]:
        """Yield this node and every descendant, depth-first."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(node.nodes.values())
