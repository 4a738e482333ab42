#!/usr/bin/env python3
"""
link_graph.py

Builds the character link graph from Unihan-style variant relations and
partitions it into clusters (connected components).

Unihan links characters that only share a historical or academic relation
(奶 and 你 derive from the same character but are unrelated in modern use),
so an edge is only admitted when both ends read the same in Mandarin.

Cluster ids start at 1. Characters without any admitted edge are in the
null cluster, id 0, which has no members.
"""

from typing import Callable, Iterable, Optional, Protocol

NULL_CLUSTER_ID = 0


class VariantSource(Protocol):
    """The part of the attribute store the link graph is built from."""

    def glyphs(self) -> list[str]: ...

    def get_all_variants(self, glyph: Optional[str]) -> list[str]: ...

    def get_mandarin_pinyin(self, glyph: Optional[str]) -> list[str]: ...


# ---------------------------------------------------------------------------
# Link Graph
# ---------------------------------------------------------------------------

def extra_link_condition(pinyin_of: Callable[[str], list[str]], lhs: str, rhs: str) -> bool:
    """Both glyphs have Mandarin readings and the readings are the same set."""
    l_pinyin = pinyin_of(lhs)
    r_pinyin = pinyin_of(rhs)
    if not l_pinyin or not r_pinyin:
        return False
    return set(l_pinyin) == set(r_pinyin)


class LinkGraph:
    """Undirected adjacency lists over glyphs, in insertion order."""

    def __init__(self):
        self._links: dict[str, list[str]] = {}

    def _emplace(self, lhs: str, rhs: str) -> None:
        neighbors = self._links.setdefault(lhs, [])
        if rhs not in neighbors:
            neighbors.append(rhs)

    def add_link(self, lhs: str, rhs: str) -> None:
        if lhs == rhs:
            return
        self._emplace(lhs, rhs)
        self._emplace(rhs, lhs)

    def has_link(self, lhs: str, rhs: str) -> bool:
        return rhs in self._links.get(lhs, [])

    def neighbors(self, glyph: str) -> list[str]:
        return list(self._links.get(glyph, []))

    def glyphs(self) -> list[str]:
        return list(self._links)

    def edge_count(self) -> int:
        return sum(len(n) for n in self._links.values()) // 2

    def __contains__(self, glyph: str) -> bool:
        return glyph in self._links

    def __len__(self) -> int:
        return len(self._links)


def build_link_graph(
    store: VariantSource,
    known_links: Iterable[tuple[str, str]] = (),
    glyphs: Optional[Iterable[str]] = None,
) -> LinkGraph:
    """
    Build the filtered, symmetrized link graph.

    Args:
        store: Attribute store providing get_all_variants() and
            get_mandarin_pinyin()
        known_links: Curated (glyph, glyph) pairs added to the candidates
        glyphs: Glyphs whose variant relations are gathered. Defaults to
            every glyph in the store.

    Returns:
        LinkGraph holding only the edges that pass extra_link_condition
    """
    if glyphs is None:
        glyphs = store.glyphs()

    # Buffer candidates in both directions before filtering
    candidates: list[tuple[str, str]] = []
    for glyph in glyphs:
        for variant in store.get_all_variants(glyph):
            candidates.append((glyph, variant))
            candidates.append((variant, glyph))

    for lhs, rhs in known_links:
        candidates.append((lhs, rhs))
        candidates.append((rhs, lhs))

    graph = LinkGraph()
    for lhs, rhs in candidates:
        if extra_link_condition(store.get_mandarin_pinyin, lhs, rhs):
            graph.add_link(lhs, rhs)

    return graph


# ---------------------------------------------------------------------------
# Cluster Index
# ---------------------------------------------------------------------------

def find_connected_components(graph: LinkGraph) -> list[list[str]]:
    """Find all connected components, in discovery order."""
    visited: set[str] = set()
    components = []

    for start in graph.glyphs():
        if start in visited:
            continue

        component = []
        stack = [start]
        visited.add(start)
        while stack:
            node = stack.pop()
            component.append(node)
            for neighbor in graph.neighbors(node):
                if neighbor not in visited:
                    visited.add(neighbor)
                    stack.append(neighbor)

        components.append(component)

    return components


class ClusterIndex:
    """Glyph -> cluster id and cluster id -> members maps."""

    def __init__(self, components: Iterable[list[str]] = ()):
        self._char_to_cluster: dict[str, int] = {}
        self._clusters: dict[int, list[str]] = {}

        cluster_id = NULL_CLUSTER_ID + 1
        for members in components:
            if not members:
                continue
            self._clusters[cluster_id] = list(members)
            for glyph in members:
                self._char_to_cluster[glyph] = cluster_id
            cluster_id += 1

    @classmethod
    def from_graph(cls, graph: LinkGraph) -> "ClusterIndex":
        return cls(find_connected_components(graph))

    def cluster_id_of(self, glyph: str) -> int:
        return self._char_to_cluster.get(glyph, NULL_CLUSTER_ID)

    def members_of(self, cluster_id: int) -> list[str]:
        if cluster_id == NULL_CLUSTER_ID:
            return []
        return list(self._clusters.get(cluster_id, []))

    def cluster_ids(self) -> list[int]:
        return list(self._clusters)

    def __len__(self) -> int:
        return len(self._clusters)
