from __future__ import annotations

"""
Cargo.lock Loader.

Reads a Cargo lock document (TOML) and turns its [[package]] tables into a
DependencyGraph. Failures are reported as LockfileLoadError; callers that
treat dependency attribution as optional use try_load_dependency_graph.
"""

import logging
import os
import tomllib
from typing import Any, Iterator, List, Optional, Tuple

from bloaty_metafile.core.analysis.packages import DependencyGraph
from bloaty_metafile.domain.errors import LockfileLoadError

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def load_dependency_graph(path: str) -> DependencyGraph:
    """
    Parse a Cargo.lock file into a dependency graph.

    Args:
        path: Location of the lock document.

    Returns:
        DependencyGraph: One node per locked package.

    Raises:
        LockfileLoadError: If the file is missing, unreadable or malformed.
    """
    if not os.path.isfile(path):
        raise LockfileLoadError(path, "file not found")

    try:
        with open(path, "rb") as f:
            document = tomllib.load(f)
    except OSError as e:
        raise LockfileLoadError(path, str(e)) from e
    except tomllib.TOMLDecodeError as e:
        raise LockfileLoadError(path, f"invalid TOML: {e}") from e

    packages = list(_iter_packages(document, path))
    graph = DependencyGraph.from_packages(packages)
    logger.debug(f"Loaded {len(packages)} package(s) from {path}.")
    return graph


def try_load_dependency_graph(path: Optional[str]) -> Optional[DependencyGraph]:
    """
    Load the dependency graph, degrading to None on any lockfile failure.

    An absent lock file is the normal case outside a cargo workspace and
    is only logged at DEBUG; an unreadable or malformed one is a WARNING.
    """
    if not path:
        return None
    if not os.path.isfile(path):
        logger.debug(f"No Cargo.lock at {path}. Dependency attribution disabled.")
        return None
    try:
        return load_dependency_graph(path)
    except LockfileLoadError as e:
        logger.warning(f"{e}. Dependency attribution disabled.")
        return None

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _iter_packages(document: Any, path: str) -> Iterator[Tuple[str, List[str]]]:
    packages = document.get("package", []) if isinstance(document, dict) else None
    if not isinstance(packages, list):
        raise LockfileLoadError(path, "'package' must be an array of tables")

    for i, pkg in enumerate(packages):
        if not isinstance(pkg, dict) or not isinstance(pkg.get("name"), str):
            raise LockfileLoadError(path, f"package #{i} has no name")

        deps = pkg.get("dependencies", [])
        if not isinstance(deps, list):
            raise LockfileLoadError(path, f"package '{pkg['name']}' has invalid dependencies")

        yield pkg["name"], [_dependency_name(d) for d in deps if isinstance(d, str) and d.strip()]


def _dependency_name(entry: str) -> str:
    """Cargo writes 'name', 'name version' or 'name version (source)'."""
    return entry.split()[0]
