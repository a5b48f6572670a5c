from __future__ import annotations

"""
Dependency Graph and Attribution Chain Resolver.

The graph is an arena: package names are interned to integer ids and
edges are stored per id, so cycles and self-dependencies are handled by
id-based visited checks.

The resolver collapses the graph's candidate roots onto a canonical root
that actually owns code in the binary and then runs a level-synchronous
breadth-first search to find, for every owning crate, the shortest
root-to-crate chain.
"""

import logging
from typing import Dict, FrozenSet, Iterable, List, Optional, Set, Tuple

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# DEPENDENCY GRAPH
# -----------------------------------------------------------------------------

class DependencyGraph:
    """
    Directed 'depends on' graph of crate names.

    Names are normalized the way rustc mangles crate names ('-' becomes
    '_'). Adding the same package twice merges its dependency lists, which
    is what several locked versions of one crate collapse to.
    """

    def __init__(self) -> None:
        self._names: List[str] = []
        self._index: Dict[str, int] = {}
        self._edges: List[Set[int]] = []

    @classmethod
    def from_packages(cls, packages: Iterable[Tuple[str, Iterable[str]]]) -> "DependencyGraph":
        """Build a graph from (name, dependency names) pairs."""
        graph = cls()
        for name, deps in packages:
            graph.add_package(name, deps)
        return graph

    @staticmethod
    def normalize_name(name: str) -> str:
        return name.strip().replace("-", "_")

    def add_package(self, name: str, dependencies: Iterable[str] = ()) -> None:
        idx = self._intern(name)
        for dep in dependencies:
            self._edges[idx].add(self._intern(dep))

    def index_of(self, name: str) -> Optional[int]:
        return self._index.get(self.normalize_name(name))

    def name_of(self, idx: int) -> str:
        return self._names[idx]

    def edges_of(self, idx: int) -> FrozenSet[int]:
        return frozenset(self._edges[idx])

    def dependencies(self, name: str) -> List[str]:
        """Sorted dependency names of `name` (empty when unknown)."""
        idx = self.index_of(name)
        if idx is None:
            return []
        return sorted(self._names[i] for i in self._edges[idx])

    @property
    def names(self) -> List[str]:
        return list(self._names)

    def __len__(self) -> int:
        return len(self._names)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.index_of(name) is not None

    def _intern(self, name: str) -> int:
        key = self.normalize_name(name)
        idx = self._index.get(key)
        if idx is None:
            idx = len(self._names)
            self._names.append(key)
            self._index[key] = idx
            self._edges.append(set())
        return idx

# -----------------------------------------------------------------------------
# RESOLVER
# -----------------------------------------------------------------------------

class PackageResolver:
    """
    Root-to-crate attribution chains for a set of observed crates.

    Built once, then read-only. A missing graph, an unknown crate or an
    unreachable crate all resolve to the single-element chain [crate].

    Args:
        graph: Parsed dependency graph, or None when unavailable.
        targets: Owner names observed by the classifier.
    """

    def __init__(self, graph: Optional[DependencyGraph], targets: Iterable[str]) -> None:
        self._targets: FrozenSet[str] = frozenset(targets)
        self._chains: Dict[str, List[str]] = {}
        self._roots: List[str] = []

        if graph is not None and len(graph):
            self._resolve(graph)

    # -------------------------------------------------------------------------
    # PUBLIC API
    # -------------------------------------------------------------------------

    @property
    def roots(self) -> List[str]:
        """Canonical roots selected for the graph."""
        return list(self._roots)

    def is_root(self, name: str) -> bool:
        return name in self._roots

    def get_path(self, owner: str) -> List[str]:
        """
        Return the chain from a canonical root down to `owner`.

        The root comes first and `owner` last; unresolved owners give
        [owner].
        """
        chain = self._chains.get(owner)
        if not chain:
            return [owner]
        return list(chain)

    # -------------------------------------------------------------------------
    # RESOLUTION
    # -------------------------------------------------------------------------

    def _resolve(self, graph: DependencyGraph) -> None:
        edges = [set(graph.edges_of(i)) for i in range(len(graph))]
        alive = set(range(len(graph)))

        target_ids: Set[int] = set()
        for name in self._targets:
            idx = graph.index_of(name)
            if idx is not None:
                target_ids.add(idx)

        root_ids = _canonical_roots(graph, edges, alive, target_ids)
        self._roots = [graph.name_of(r) for r in root_ids]
        if not root_ids:
            logger.debug("No canonical root owns code; dependency chains are trivial.")
            return

        logger.debug(f"Canonical dependency roots: {', '.join(self._roots)}")
        chains = _shortest_chains(graph, edges, alive, root_ids)

        for name in self._targets:
            idx = graph.index_of(name)
            if idx is not None and idx in chains:
                self._chains[name] = [graph.name_of(i) for i in chains[idx]]

        unresolved = len(self._targets) - len(self._chains)
        if unresolved:
            logger.debug(f"{unresolved} crate(s) are not reachable from a canonical root.")


def _canonical_roots(
        graph: DependencyGraph,
        edges: List[Set[int]],
        alive: Set[int],
        target_ids: Set[int],
) -> List[int]:
    """
    Select the roots the chains start from, mutating `edges` and `alive`.

    Candidate roots are live nodes nothing else depends on. When some of
    them own code, they become the canonical roots and every other
    candidate is merged into the first one. Otherwise all candidates are
    treated as workspace scaffolding, dropped, and detection repeats.
    """
    while alive:
        indegree = {i: 0 for i in alive}
        for i in alive:
            for j in edges[i]:
                if j != i and j in alive:
                    indegree[j] += 1

        candidates = sorted((i for i in alive if indegree[i] == 0), key=graph.name_of)
        if not candidates:
            # Only cycles left
            return []

        chosen = [c for c in candidates if c in target_ids]
        if chosen:
            canonical = chosen[0]
            for c in candidates:
                if c in target_ids:
                    continue
                edges[canonical].update(j for j in edges[c] if j != c)
                alive.discard(c)
            return chosen

        alive.difference_update(candidates)
    return []


def _shortest_chains(
        graph: DependencyGraph,
        edges: List[Set[int]],
        alive: Set[int],
        root_ids: List[int],
) -> Dict[int, List[int]]:
    """
    Level-synchronous multi-source BFS over 'depends on' edges.

    A node keeps the chain of the first level that reaches it. Ties on a
    level go to the smaller cumulative name length, then to the
    lexicographically smaller chain.
    """
    chains: Dict[int, List[int]] = {r: [r] for r in root_ids}
    cost: Dict[int, int] = {r: len(graph.name_of(r)) for r in root_ids}
    frontier = list(root_ids)

    while frontier:
        level: Dict[int, List[int]] = {}
        level_cost: Dict[int, int] = {}

        for node in frontier:
            for dep in edges[node]:
                if dep in chains or dep not in alive:
                    continue
                candidate = chains[node] + [dep]
                candidate_cost = cost[node] + len(graph.name_of(dep))
                current = level.get(dep)
                if current is None or _better(graph, candidate, candidate_cost, current, level_cost[dep]):
                    level[dep] = candidate
                    level_cost[dep] = candidate_cost

        chains.update(level)
        cost.update(level_cost)
        frontier = sorted(level, key=graph.name_of)

    return chains


def _better(
        graph: DependencyGraph,
        candidate: List[int],
        candidate_cost: int,
        current: List[int],
        current_cost: int,
) -> bool:
    if candidate_cost != current_cost:
        return candidate_cost < current_cost
    return [graph.name_of(i) for i in candidate] < [graph.name_of(i) for i in current]
