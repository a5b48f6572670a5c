from __future__ import annotations

"""
Unit tests for the Dependency Graph and Resolver.

Verifies:
1. Graph interning, name normalization and duplicate merging.
2. Canonical root selection, merging and scaffolding removal.
3. Shortest-chain BFS with tie-breaking.
4. Tolerance of cycles and self-dependencies.
5. Graceful degradation without a graph.
"""

from bloaty_metafile.core.analysis.packages import DependencyGraph, PackageResolver


def make_graph(*packages):
    return DependencyGraph.from_packages(packages)


# -----------------------------------------------------------------------------
# Graph
# -----------------------------------------------------------------------------

def test_graph_normalizes_names_and_merges_duplicates():
    """Verify '-' becomes '_' and repeated packages merge their deps."""
    graph = make_graph(
        ("form-urlencoded", ["percent-encoding"]),
        ("form_urlencoded", ["idna"]),
    )

    assert len(graph) == 3
    assert "form_urlencoded" in graph
    assert "form-urlencoded" in graph
    assert graph.dependencies("form_urlencoded") == ["idna", "percent_encoding"]
    assert graph.dependencies("missing") == []


# -----------------------------------------------------------------------------
# Chains
# -----------------------------------------------------------------------------

def test_get_path_returns_root_first_owner_last():
    """Verify a simple chain through an intermediate crate."""
    graph = make_graph(
        ("llrt", ["llrt_modules"]),
        ("llrt_modules", ["url"]),
        ("url", []),
    )
    resolver = PackageResolver(graph, {"llrt", "url"})

    assert resolver.roots == ["llrt"]
    assert resolver.get_path("url") == ["llrt", "llrt_modules", "url"]
    assert resolver.get_path("llrt") == ["llrt"]


def test_shortest_chain_wins_over_longer_one():
    """Verify a direct dependency beats a deeper route."""
    graph = make_graph(
        ("app", ["a", "shared"]),
        ("a", ["b"]),
        ("b", ["shared"]),
        ("shared", []),
    )
    resolver = PackageResolver(graph, {"app", "shared"})

    assert resolver.get_path("shared") == ["app", "shared"]


def test_equal_length_chains_break_ties_by_name_length():
    """Verify the chain with the shorter cumulative name length wins."""
    graph = make_graph(
        ("app", ["very_long_parent", "p"]),
        ("very_long_parent", ["leaf"]),
        ("p", ["leaf"]),
        ("leaf", []),
    )
    resolver = PackageResolver(graph, {"app", "leaf"})

    assert resolver.get_path("leaf") == ["app", "p", "leaf"]


def test_equal_cost_chains_break_ties_lexicographically():
    """Verify identical costs resolve deterministically."""
    graph = make_graph(
        ("app", ["bb", "aa"]),
        ("bb", ["leaf"]),
        ("aa", ["leaf"]),
        ("leaf", []),
    )
    resolver = PackageResolver(graph, {"app", "leaf"})

    assert resolver.get_path("leaf") == ["app", "aa", "leaf"]


# -----------------------------------------------------------------------------
# Root canonicalization
# -----------------------------------------------------------------------------

def test_non_target_root_merges_into_target_root():
    """Verify crates reachable only via a non-target root attach to the target root."""
    graph = make_graph(
        ("bin", ["core_dep"]),
        ("core_dep", []),
        ("build_tool", ["only_here"]),
        ("only_here", ["deeper"]),
        ("deeper", []),
    )
    resolver = PackageResolver(graph, {"bin", "core_dep", "only_here", "deeper"})

    assert resolver.roots == ["bin"]
    assert resolver.get_path("core_dep") == ["bin", "core_dep"]
    assert resolver.get_path("only_here") == ["bin", "only_here"]
    assert resolver.get_path("deeper") == ["bin", "only_here", "deeper"]


def test_scaffolding_roots_are_dropped_until_a_target_root_appears():
    """Verify a workspace root that owns no code is peeled off."""
    graph = make_graph(
        ("workspace", ["app"]),
        ("app", ["dep"]),
        ("dep", []),
    )
    resolver = PackageResolver(graph, {"app", "dep"})

    assert resolver.roots == ["app"]
    assert resolver.get_path("dep") == ["app", "dep"]
    assert resolver.get_path("workspace") == ["workspace"]


def test_multiple_target_roots_stay_canonical():
    """Verify several code-owning roots each anchor their own chains."""
    graph = make_graph(
        ("bin_a", ["dep_a"]),
        ("bin_b", ["dep_b"]),
        ("dep_a", []),
        ("dep_b", []),
        ("tool", ["dep_t"]),
        ("dep_t", []),
    )
    resolver = PackageResolver(graph, {"bin_a", "bin_b", "dep_a", "dep_b", "dep_t"})

    assert resolver.roots == ["bin_a", "bin_b"]
    assert resolver.get_path("dep_a") == ["bin_a", "dep_a"]
    assert resolver.get_path("dep_b") == ["bin_b", "dep_b"]
    assert resolver.get_path("dep_t") == ["bin_a", "dep_t"]


# -----------------------------------------------------------------------------
# Robustness
# -----------------------------------------------------------------------------

def test_self_dependency_does_not_loop():
    """Verify a crate listing itself as dependency is tolerated."""
    graph = make_graph(
        ("app", ["app", "lib"]),
        ("lib", ["lib"]),
    )
    resolver = PackageResolver(graph, {"app", "lib"})

    assert resolver.roots == ["app"]
    assert resolver.get_path("lib") == ["app", "lib"]


def test_cycle_between_dependencies_terminates():
    """Verify a dependency cycle below the root is traversed once."""
    graph = make_graph(
        ("app", ["a"]),
        ("a", ["b"]),
        ("b", ["a"]),
    )
    resolver = PackageResolver(graph, {"app", "b"})

    assert resolver.get_path("b") == ["app", "a", "b"]


def test_graph_made_only_of_cycles_has_no_roots():
    """Verify a rootless graph degrades to trivial chains."""
    graph = make_graph(("a", ["b"]), ("b", ["a"]))
    resolver = PackageResolver(graph, {"a", "b"})

    assert resolver.roots == []
    assert resolver.get_path("a") == ["a"]


def test_std_pseudo_crate_resolves_trivially():
    """Verify crates absent from the graph resolve to themselves."""
    graph = make_graph(("app", []))
    resolver = PackageResolver(graph, {"app", "std", "core"})

    assert resolver.get_path("std") == ["std"]
    assert resolver.get_path("never_seen") == ["never_seen"]


def test_missing_graph_degrades_to_trivial_chains():
    """Verify the resolver works without dependency information."""
    resolver = PackageResolver(None, {"app"})

    assert resolver.roots == []
    assert resolver.get_path("app") == ["app"]
    assert resolver.is_root("app") is False


def test_get_path_returns_a_copy():
    """Verify callers cannot mutate the stored chains."""
    graph = make_graph(("app", ["lib"]), ("lib", []))
    resolver = PackageResolver(graph, {"app", "lib"})

    path = resolver.get_path("lib")
    path.append(".text")
    assert resolver.get_path("lib") == ["app", "lib"]
