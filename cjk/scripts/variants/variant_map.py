#!/usr/bin/env python3
"""
variant_map.py

Resolves Japanese and Simplified Chinese seed characters into semantic
units: groups of Japanese / Simplified / Traditional glyphs that represent
the same underlying character, with unified readings and meanings.

The map should be thought of as "the minimal amount of maximum information"
for the given characters: it only ever holds the seed glyphs plus the
traditional forms derived from the simplified ones, and merges them in
three ordered passes:

1. Cluster pass   - every glyph pair of the two entries is in the same
                    non-null link-graph cluster.
2. Identity pass  - a Japanese glyph of one entry is literally a Chinese
                    glyph of the other.
3. Reading pass   - same pinyin set and similar English meaning.

Every pass only merges a Japanese-only entry with a Chinese-only entry.

Creating a cluster-per-card directly from the link graph does not work in
practice: many primarily-Japanese characters are registered in Chinese
databases as low-frequency characters and vice versa, which splits 楽 and
樂/乐 into separate units.
"""

import sys
from functools import lru_cache
from pathlib import Path
from typing import Callable, Iterable, Iterator, Optional

import opencc

# Add parent directory to path for adapter imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from adapters.unihan import CharacterStore

from .entries import (
    CharacterType,
    EntryStore,
    MergeRecord,
    VariantMapEntry,
    combine_without_duplicates,
    get_all_chars,
)
from .similarity import (
    BinaryPred,
    and_disjoint,
    are_readings_similar,
    is_identical_char,
    make_same_cluster_pred,
)

MeaningLookup = Callable[[str], list[str]]

CLUSTER_PASS = "cluster"
IDENTITY_PASS = "identity"
READING_PASS = "reading"

# Mainland simplified -> Hong Kong traditional
S2T_CONFIG = "s2hk.json"


def _no_meanings(_glyph: str) -> list[str]:
    return []


@lru_cache(maxsize=None)
def opencc_s2t(config: str = S2T_CONFIG) -> Callable[[str], str]:
    """OpenCC simplified -> traditional converter, built once per config."""
    return opencc.OpenCC(config).convert


def apply_multi_getter(getter: Callable[[str], list[str]], sources: list[list[str]]) -> list[str]:
    """Apply a per-glyph getter over several glyph lists, without repeats."""
    results = []
    for chars in sources:
        for char in chars:
            results.append(getter(char))
    return combine_without_duplicates(*results)


def char_lists(entry: VariantMapEntry) -> tuple[str, str, str]:
    """Comma-joined glyphs of each script, for reports."""
    return (
        ",".join(entry.japanese_char),
        ",".join(entry.simp_chinese_char),
        ",".join(entry.trad_chinese_char),
    )


class VariantMap:
    """
    Merge driver over an EntryStore.

    The whole resolution runs in the constructor; afterwards the map is only
    read through for_each_entry() / entries() / get_entry_by_char().
    """

    def __init__(
        self,
        jp_chars: Iterable[str],
        simp_chars: Iterable[str],
        store: CharacterStore,
        s2t: Optional[Callable[[str], str]] = None,
        kanjidic_meaning: Optional[MeaningLookup] = None,
        cedict_meaning: Optional[MeaningLookup] = None,
        verbose: bool = False,
    ):
        """
        Args:
            jp_chars: Japanese-context seed glyphs
            simp_chars: Simplified-Chinese-context seed glyphs
            store: Attribute store (see adapters.unihan.CharacterStore)
            s2t: Simplified -> traditional converter. Defaults to
                OpenCC (S2T_CONFIG).
            kanjidic_meaning: Fallback meaning lookup for Japanese glyphs
            cedict_meaning: Fallback meaning lookup for simplified glyphs
            verbose: Print progress for each pass
        """
        self._store = store
        self._s2t = s2t or opencc_s2t()
        self._kanjidic_meaning = kanjidic_meaning or _no_meanings
        self._cedict_meaning = cedict_meaning or _no_meanings
        self._verbose = verbose

        self._entries = EntryStore()
        self.merge_history: dict[str, list[MergeRecord]] = {}

        self._populate_clusters(list(jp_chars), list(simp_chars))
        self._entries.rebuild_char_index()

    def _log(self, message: str) -> None:
        if self._verbose:
            print(message)

    # ---------------------------------------------------------------------
    # Resolution
    # ---------------------------------------------------------------------

    def _populate_clusters(self, jp_chars: list[str], simp_chars: list[str]) -> None:
        for c in jp_chars:
            self._entries.emplace_new_character(c, CharacterType.JAPANESE)
        for c in simp_chars:
            self._entries.emplace_new_character(c, CharacterType.SIMPLIFIED_CHINESE)
        self._log(f"Initialized VariantMap with {len(self._entries)} entries")

        # Traditional glyphs take part in the cluster comparison
        self.for_each_entry(self._map_simp_to_trad)

        self._run_pass(CLUSTER_PASS, and_disjoint(make_same_cluster_pred(self._store.get_cluster_id)))
        self.for_each_entry(self._map_simp_to_trad)

        self._run_pass(IDENTITY_PASS, and_disjoint(is_identical_char))
        self._log("Populating readings")
        self.for_each_entry(self.populate_readings)

        read_merged = self._run_pass(
            READING_PASS,
            and_disjoint(lambda e1, e2: are_readings_similar(e1, e2, verbose=self._verbose)),
        )
        for old1, old2, new in read_merged:
            self._log(f"  {char_lists(old1)} + {char_lists(old2)} -> {char_lists(new)}")

        self._log("Repopulating readings")
        self.for_each_entry(self.populate_readings)

        if self._verbose:
            jp_only, cn_only = self.unmatched_entries()
            print(f"Entries left with only Japanese characters: {len(jp_only)}")
            print(f"Entries left with only Chinese characters: {len(cn_only)}")

    def _run_pass(self, name: str, pred: BinaryPred) -> list[MergeRecord]:
        self._log(f"Merging ({name} pass)")
        merged = self.merge_duplicates_for_pred(pred)
        self.merge_history[name] = merged
        self._log(f"Merged {len(merged)} entries. Down to {len(self._entries)}")
        return merged

    def _map_simp_to_trad(self, entry: VariantMapEntry) -> None:
        entry.trad_chinese_char = combine_without_duplicates(
            [self._s2t(c) for c in entry.simp_chinese_char]
        )

    def populate_readings(self, entry: VariantMapEntry) -> None:
        """
        Fill an entry's readings and English meaning from its glyphs.

        Readings are the union over the simplified, traditional and Japanese
        glyphs. The meaning comes from the first non-empty source among the
        store definition of the first Japanese glyph, the store definition of
        the first simplified glyph, Kanjidic and Cedict.
        """
        sources = [entry.simp_chinese_char, entry.trad_chinese_char, entry.japanese_char]

        entry.pinyin = apply_multi_getter(self._store.get_mandarin_pinyin, sources)
        entry.onyomi = apply_multi_getter(self._store.get_japanese_on, sources)
        entry.kunyomi = apply_multi_getter(self._store.get_japanese_kun, sources)

        first_jp = entry.japanese_char[0] if entry.japanese_char else None
        first_cn = entry.simp_chinese_char[0] if entry.simp_chinese_char else None

        # prefer unihan => kanjidic => cedict in this order
        english_meaning = self._store.get_english_definition(first_jp)
        if not english_meaning:
            english_meaning = self._store.get_english_definition(first_cn)
        if not english_meaning and first_jp:
            english_meaning = self._kanjidic_meaning(first_jp)
        if not english_meaning and first_cn:
            english_meaning = self._cedict_meaning(first_cn)

        entry.english_meaning = list(english_meaning or [])

    # ---------------------------------------------------------------------
    # Merge Utilities
    # ---------------------------------------------------------------------

    def get_duplicates_for_pred(self, pred: BinaryPred) -> list[tuple[int, int]]:
        """All id pairs of live entries satisfying pred, in entry order."""
        entries = list(self._entries)
        duplicates = []
        for i in range(len(entries)):
            for j in range(i + 1, len(entries)):
                if pred(entries[i], entries[j]):
                    duplicates.append((entries[i].id, entries[j].id))
        return duplicates

    def merge_duplicates_for_pred(self, pred: BinaryPred) -> list[MergeRecord]:
        """
        Merge every pair satisfying pred at the start of the pass. Pairs
        whose entries were already consumed earlier in the pass are skipped.
        """
        merged = []
        for id1, id2 in self.get_duplicates_for_pred(pred):
            record = self._entries.merge(id1, id2)
            if record:
                merged.append(record)
        return merged

    # ---------------------------------------------------------------------
    # Getters and Iterators
    # ---------------------------------------------------------------------

    def for_each_entry(self, handler: Callable[[VariantMapEntry], None]) -> None:
        for entry in self._entries:
            handler(entry)

    def entries(self) -> Iterator[VariantMapEntry]:
        return iter(self._entries)

    def get_entry_by_char(self, char: str) -> Optional[VariantMapEntry]:
        return self._entries.get_by_char(char)

    def get_entry(self, entry_id: int) -> Optional[VariantMapEntry]:
        return self._entries.get(entry_id)

    def is_retired(self, entry_id: int) -> bool:
        return self._entries.is_retired(entry_id)

    def unmatched_entries(self) -> tuple[list[VariantMapEntry], list[VariantMapEntry]]:
        """Entries that only hold Japanese glyphs, and those only holding Chinese ones."""
        jp_only = [e for e in self._entries if not e.simp_chinese_char]
        cn_only = [e for e in self._entries if not e.japanese_char]
        return jp_only, cn_only

    def all_chars(self) -> list[str]:
        chars = [get_all_chars(e) for e in self._entries]
        return combine_without_duplicates(*chars)

    def __len__(self) -> int:
        return len(self._entries)
