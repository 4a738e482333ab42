#!/usr/bin/env python3
"""
unihan.py

In-memory character attribute store in the shape of the Unihan database:
IRG source flags, stroke data, Mandarin/Japanese readings, English
definitions and the four variant relations.

The store also owns the character link graph and its cluster index, built
lazily from the variant relations and the curated known links.
"""

import sys
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Iterable, Optional

# Add parent directory to path for lib imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from variants.link_graph import ClusterIndex, LinkGraph, build_link_graph
from variants.similarity import are_meanings_similar

NUM_KANGXI_RADICALS = 214


class VariantRelation(Enum):
    SEMANTIC = "kSemanticVariant"
    SPECIALIZED_SEMANTIC = "kSpecializedSemanticVariant"
    SIMPLIFIED = "kSimplifiedVariant"
    TRADITIONAL = "kTraditionalVariant"


@dataclass
class CharacterFact:
    """Everything the store knows about one glyph."""
    glyph: str
    is_japanese: bool = False
    is_simplified: bool = False
    is_traditional: bool = False
    total_strokes: int = 0
    radical_stroke: list[str] = field(default_factory=list)

    mandarin_pinyin: list[str] = field(default_factory=list)
    japanese_on: list[str] = field(default_factory=list)
    japanese_kun: list[str] = field(default_factory=list)
    english_definitions: list[str] = field(default_factory=list)

    semantic_variants: list[str] = field(default_factory=list)
    specialized_semantic_variants: list[str] = field(default_factory=list)
    simplified_variants: list[str] = field(default_factory=list)
    traditional_variants: list[str] = field(default_factory=list)

    def variants(self, relation: VariantRelation) -> list[str]:
        if relation == VariantRelation.SEMANTIC:
            return self.semantic_variants
        if relation == VariantRelation.SPECIALIZED_SEMANTIC:
            return self.specialized_semantic_variants
        if relation == VariantRelation.SIMPLIFIED:
            return self.simplified_variants
        return self.traditional_variants


def are_radical_strokes_close(rsa1: list[str], rsa2: list[str], margin: int = 1) -> bool:
    """
    True if any radical-stroke index pair shares the radical and differs by at
    most `margin` residual strokes. Indices look like "85.5" or "85'.5".
    """
    def parse(rs: str) -> Optional[tuple[str, int]]:
        radical, _, strokes = rs.partition(".")
        try:
            return radical, int(strokes)
        except ValueError:
            return None

    for rs1 in rsa1:
        p1 = parse(rs1)
        if p1 is None:
            continue
        for rs2 in rsa2:
            p2 = parse(rs2)
            if p2 is None:
                continue
            if p1[0] == p2[0] and abs(p1[1] - p2[1]) <= margin:
                return True
    return False


class CharacterStore:
    """
    Attribute store keyed by glyph.

    Lookups for glyphs the store does not know return empty results; they
    never raise.
    """

    def __init__(
        self,
        facts: Iterable[CharacterFact] = (),
        known_links: Iterable[tuple[str, str]] = (),
    ):
        self._facts: dict[str, CharacterFact] = {}
        self._rs_to_chars: dict[str, list[str]] = {}
        # radical-stroke values each glyph was indexed under
        self._indexed_rs: dict[str, list[str]] = {}
        self._known_links: list[tuple[str, str]] = list(known_links)
        self._link_graph: Optional[LinkGraph] = None
        self._clusters: Optional[ClusterIndex] = None

        for fact in facts:
            self.add_fact(fact)

    def add_fact(self, fact: CharacterFact) -> None:
        """Add or replace a glyph's facts. Invalidates the cluster index."""
        for rs in self._indexed_rs.pop(fact.glyph, []):
            chars = self._rs_to_chars.get(rs, [])
            if fact.glyph in chars:
                chars.remove(fact.glyph)

        self._facts[fact.glyph] = fact
        self._indexed_rs[fact.glyph] = list(fact.radical_stroke)
        for rs in fact.radical_stroke:
            chars = self._rs_to_chars.setdefault(rs, [])
            if fact.glyph not in chars:
                chars.append(fact.glyph)

        self._link_graph = None
        self._clusters = None

    def get_fact(self, glyph: Optional[str]) -> Optional[CharacterFact]:
        if glyph is None:
            return None
        return self._facts.get(glyph)

    def glyphs(self) -> list[str]:
        return list(self._facts)

    def __contains__(self, glyph: str) -> bool:
        return glyph in self._facts

    def __len__(self) -> int:
        return len(self._facts)

    # IRG getters

    def is_japanese(self, glyph: Optional[str]) -> bool:
        fact = self.get_fact(glyph)
        return bool(fact and fact.is_japanese)

    def is_simplified(self, glyph: Optional[str]) -> bool:
        fact = self.get_fact(glyph)
        return bool(fact and fact.is_simplified)

    def is_traditional(self, glyph: Optional[str]) -> bool:
        fact = self.get_fact(glyph)
        return bool(fact and fact.is_traditional)

    def get_total_strokes(self, glyph: Optional[str]) -> int:
        fact = self.get_fact(glyph)
        return fact.total_strokes if fact else 0

    def get_radical_stroke_index(self, glyph: Optional[str]) -> list[str]:
        fact = self.get_fact(glyph)
        return list(fact.radical_stroke) if fact else []

    def get_by_radical_stroke(self, rs: str) -> list[str]:
        return list(self._rs_to_chars.get(rs, []))

    def get_kangxi_radicals(self, radical_num: int) -> list[str]:
        """Glyphs indexed as radical `radical_num` with no residual strokes."""
        if radical_num < 1 or radical_num > NUM_KANGXI_RADICALS:
            print(f"  ERROR: invalid radical number {radical_num}")
            return []

        radical_forms = [f"{radical_num}{primes}.0" for primes in ("", "'", "''", "'''")]
        chars = []
        for rs in radical_forms:
            for glyph in self.get_by_radical_stroke(rs):
                if glyph not in chars:
                    chars.append(glyph)
        return chars

    def get_all_kangxi_radicals(self) -> list[list[str]]:
        """
        Radicals in use by any of the three scripts, as a list where entry i
        holds radical i and its variants (entry 0 is empty).
        """
        radicals: list[list[str]] = [[]]
        for num in range(1, NUM_KANGXI_RADICALS + 1):
            radicals.append([
                glyph for glyph in self.get_kangxi_radicals(num)
                if self.is_japanese(glyph) or self.is_simplified(glyph) or self.is_traditional(glyph)
            ])
        return radicals

    # Reading getters

    def get_mandarin_pinyin(self, glyph: Optional[str]) -> list[str]:
        fact = self.get_fact(glyph)
        return list(fact.mandarin_pinyin) if fact else []

    def get_japanese_on(self, glyph: Optional[str]) -> list[str]:
        fact = self.get_fact(glyph)
        return list(fact.japanese_on) if fact else []

    def get_japanese_kun(self, glyph: Optional[str]) -> list[str]:
        fact = self.get_fact(glyph)
        return list(fact.japanese_kun) if fact else []

    def get_english_definition(self, glyph: Optional[str]) -> list[str]:
        fact = self.get_fact(glyph)
        return list(fact.english_definitions) if fact else []

    # Variant getters

    def get_variants(self, glyph: Optional[str], relation: VariantRelation) -> list[str]:
        fact = self.get_fact(glyph)
        return list(fact.variants(relation)) if fact else []

    def get_all_variants(self, glyph: Optional[str]) -> list[str]:
        """Neighbors across all four variant relations, without repeats."""
        variants = []
        for relation in VariantRelation:
            for variant in self.get_variants(glyph, relation):
                if variant not in variants:
                    variants.append(variant)
        return variants

    def get_semantic_or_specialized_variants(self, glyph: Optional[str]) -> list[str]:
        semantic = self.get_variants(glyph, VariantRelation.SEMANTIC)
        specialized = self.get_variants(glyph, VariantRelation.SPECIALIZED_SEMANTIC)
        return semantic + [v for v in specialized if v not in semantic]

    def is_simplified_variant(self, lhs: str, rhs: str) -> bool:
        return rhs in self.get_variants(lhs, VariantRelation.SIMPLIFIED)

    def is_traditional_variant(self, lhs: str, rhs: str) -> bool:
        return rhs in self.get_variants(lhs, VariantRelation.TRADITIONAL)

    def is_semantic_or_specialized_variant(self, lhs: str, rhs: str) -> bool:
        return rhs in self.get_semantic_or_specialized_variants(lhs)

    def simplified_to_traditional(self, glyph: str) -> str:
        """First traditional variant of a glyph, or the glyph itself."""
        traditional = self.get_variants(glyph, VariantRelation.TRADITIONAL)
        return traditional[0] if traditional else glyph

    # Link graph and clusters

    @property
    def known_links(self) -> list[tuple[str, str]]:
        return list(self._known_links)

    def _ensure_clusters(self) -> ClusterIndex:
        if self._clusters is None:
            self._link_graph = build_link_graph(self, self._known_links)
            self._clusters = ClusterIndex.from_graph(self._link_graph)
        return self._clusters

    @property
    def link_graph(self) -> LinkGraph:
        self._ensure_clusters()
        return self._link_graph

    def has_link(self, lhs: str, rhs: str) -> bool:
        return self.link_graph.has_link(lhs, rhs)

    def get_cluster_id(self, glyph: str) -> int:
        """Cluster of a glyph; 0 means it has no cluster."""
        return self._ensure_clusters().cluster_id_of(glyph)

    def get_cluster_members(self, cluster_id: int) -> list[str]:
        return self._ensure_clusters().members_of(cluster_id)

    def verify_known_links(self) -> list[tuple[str, str]]:
        """
        Check the curated links against the store's own data.

        A link is suspicious when either glyph is unknown, the pinyin
        differ, or the first English definitions are not similar.

        Returns:
            List of suspicious (glyph, glyph) pairs
        """
        mismatched = []
        for c1, c2 in self._known_links:
            if c1 not in self or c2 not in self:
                ok = False
            elif set(self.get_mandarin_pinyin(c1)) != set(self.get_mandarin_pinyin(c2)):
                ok = False
            else:
                eng1 = self.get_english_definition(c1)
                eng2 = self.get_english_definition(c2)
                ok = bool(eng1 and eng2) and are_meanings_similar(eng1[0], eng2[0], log_fails=True)

            if not ok:
                print(f"  WARNING: known link ({c1}, {c2}) does not match")
                mismatched.append((c1, c2))

        return mismatched
