#!/usr/bin/env python3
"""
similarity.py

Predicates deciding whether two semantic-unit entries describe the same
character. Each merge pass of the VariantMap is driven by one of these,
wrapped in the disjoint guard.

The meaning comparison is a loose, recall-oriented heuristic: it is a merge
trigger for entries that already share their pinyin, not a precision oracle.
"""

import sys
from pathlib import Path
from typing import Callable, Optional

# Add parent directory to path for lib imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from lib.normalizers import meaning_words

from .entries import VariantMapEntry, common_elements, get_all_chars, is_same_set
from .link_graph import NULL_CLUSTER_ID

BinaryPred = Callable[[VariantMapEntry, VariantMapEntry], bool]

# Thresholds for are_meanings_similar
MANY_COMMON_WORDS = 4
MOSTLY_COMMON_WORDS = 3
MOSTLY_COMMON_SLACK = 1


# ---------------------------------------------------------------------------
# Meaning Similarity
# ---------------------------------------------------------------------------

def are_meanings_similar(
    m1: Optional[str],
    m2: Optional[str],
    *,
    log_fails: bool = False,
    log_success: bool = False,
    log_all: bool = False,
) -> bool:
    """
    Decide whether two free-text meanings describe the same thing.

    Similar when the word lists share at least 4 words, or the smaller list
    is entirely contained in the larger one, or they share at least 3 words
    and the smaller list has at most one word left over.
    """
    words1 = meaning_words(m1)
    words2 = meaning_words(m2)

    common = sorted(set(words1) & set(words2))
    shortest = min(len(words1), len(words2))

    if len(common) >= MANY_COMMON_WORDS:
        res = True
    elif len(common) >= 1 and shortest == len(common):
        res = True
    elif len(common) >= MOSTLY_COMMON_WORDS and shortest - len(common) <= MOSTLY_COMMON_SLACK:
        res = True
    else:
        res = False

    if log_all or (log_fails and not res) or (log_success and res):
        print("Comparing meanings:")
        print(f"  {m1}")
        print(f"  {m2}")
        print(f"  {words1}")
        print(f"  {words2}")
        print(f"  common: {common}")

    return res


# ---------------------------------------------------------------------------
# Entry Predicates
# ---------------------------------------------------------------------------

def is_disjoint(entry1: VariantMapEntry, entry2: VariantMapEntry) -> bool:
    """
    True only across a Japanese-only and a Chinese-only entry.

    Exactly one of the two must have Japanese glyphs and exactly one must
    have simplified glyphs, so an entry that already holds both scripts
    never matches anything.
    """
    with_jp = [e for e in (entry1, entry2) if e.japanese_char]
    with_cn = [e for e in (entry1, entry2) if e.simp_chinese_char]
    return len(with_jp) == 1 and len(with_cn) == 1


def and_disjoint(pred: BinaryPred) -> BinaryPred:
    """Wrap a predicate so it only fires for disjoint entries."""
    def guarded(entry1: VariantMapEntry, entry2: VariantMapEntry) -> bool:
        return is_disjoint(entry1, entry2) and pred(entry1, entry2)

    return guarded


def is_identical_char(entry1: VariantMapEntry, entry2: VariantMapEntry) -> bool:
    """True if a Japanese glyph of one entry is a Chinese glyph of the other."""
    def shares(jp: VariantMapEntry, cn: VariantMapEntry) -> bool:
        return bool(
            common_elements(jp.japanese_char, cn.simp_chinese_char)
            or common_elements(jp.japanese_char, cn.trad_chinese_char)
        )

    return shares(entry1, entry2) or shares(entry2, entry1)


def make_same_cluster_pred(cluster_id_of: Callable[[str], int]) -> BinaryPred:
    """
    Build a predicate that holds when every cross pair of glyphs of the two
    entries sits in the same, non-null cluster.
    """
    def is_same_cluster(entry1: VariantMapEntry, entry2: VariantMapEntry) -> bool:
        chars1 = get_all_chars(entry1)
        chars2 = get_all_chars(entry2)
        if not chars1 or not chars2:
            return False

        for c1 in chars1:
            cid1 = cluster_id_of(c1)
            if cid1 == NULL_CLUSTER_ID:
                return False
            for c2 in chars2:
                if cluster_id_of(c2) != cid1:
                    return False
        return True

    return is_same_cluster


def are_readings_similar(
    entry1: VariantMapEntry,
    entry2: VariantMapEntry,
    verbose: bool = False,
) -> bool:
    """Same pinyin set and similar preferred English meaning."""
    if not is_same_set(entry1.pinyin, entry2.pinyin):
        return False

    m1 = entry1.english_meaning[0] if entry1.english_meaning else None
    m2 = entry2.english_meaning[0] if entry2.english_meaning else None
    return are_meanings_similar(m1, m2, log_success=verbose)
