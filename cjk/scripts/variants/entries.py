#!/usr/bin/env python3
"""
entries.py

Semantic-unit entries and the store that owns them.

A VariantMapEntry groups the Japanese, Simplified Chinese and Traditional
Chinese forms of one underlying character, together with unified readings.
Entries start as single-glyph seeds and are only ever replaced by merge
products; the EntryStore is the one place that creates, merges and retires
them.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, NamedTuple, Optional


class CharacterType(Enum):
    TRADITIONAL_CHINESE = "TraditionalChinese"
    SIMPLIFIED_CHINESE = "SimplifiedChinese"
    JAPANESE = "Japanese"


@dataclass
class VariantMapEntry:
    """One semantic unit across Japanese / Simplified / Traditional scripts."""
    id: int
    japanese_char: list[str] = field(default_factory=list)
    simp_chinese_char: list[str] = field(default_factory=list)
    trad_chinese_char: list[str] = field(default_factory=list)

    pinyin: list[str] = field(default_factory=list)
    onyomi: list[str] = field(default_factory=list)
    kunyomi: list[str] = field(default_factory=list)

    # First element is the preferred gloss
    english_meaning: list[str] = field(default_factory=list)


class MergeRecord(NamedTuple):
    """The two retired entries and the entry that replaced them."""
    old1: VariantMapEntry
    old2: VariantMapEntry
    new: VariantMapEntry


# ---------------------------------------------------------------------------
# List Helpers
# ---------------------------------------------------------------------------

def combine_without_duplicates(*lists: list[str]) -> list[str]:
    """Concatenate lists, keeping the first occurrence of each item."""
    combined = []
    seen = set()
    for items in lists:
        for item in items:
            if item not in seen:
                seen.add(item)
                combined.append(item)
    return combined


def common_elements(a1: list[str], a2: list[str]) -> list[str]:
    """Items of a1 that also appear in a2, in a1's order."""
    other = set(a2)
    return [item for item in a1 if item in other]


def is_same_set(a1: list[str], a2: list[str]) -> bool:
    """True if both lists hold the same items, ignoring order and repeats."""
    return set(a1) == set(a2)


def get_all_chars(entry: VariantMapEntry) -> list[str]:
    """Every glyph of an entry: Japanese, then simplified, then traditional."""
    return combine_without_duplicates(
        entry.japanese_char, entry.simp_chinese_char, entry.trad_chinese_char
    )


def missing_char(entry: VariantMapEntry) -> bool:
    """True if any of the three scripts has no glyph in this entry."""
    return (
        not entry.japanese_char
        or not entry.simp_chinese_char
        or not entry.trad_chinese_char
    )


# ---------------------------------------------------------------------------
# Entry Store
# ---------------------------------------------------------------------------

class EntryStore:
    """
    Live semantic-unit entries keyed by id, plus a glyph -> id index.

    Ids are minted from a counter starting at 1 and never reused. Merging two
    live entries retires both ids and inserts the merged entry under a fresh
    id in the same step.
    """

    def __init__(self):
        self._next_id = 1
        self._entries: dict[int, VariantMapEntry] = {}
        self._retired: set[int] = set()
        self._char_to_id: dict[str, int] = {}

    def _mint_id(self) -> int:
        new_id = self._next_id
        self._next_id += 1
        return new_id

    def emplace_new_character(self, char: str, char_type: CharacterType) -> VariantMapEntry:
        """Create a seed entry holding a single glyph of the given script."""
        entry = VariantMapEntry(id=self._mint_id())

        if char_type == CharacterType.JAPANESE:
            entry.japanese_char.append(char)
        elif char_type == CharacterType.SIMPLIFIED_CHINESE:
            entry.simp_chinese_char.append(char)
        else:
            entry.trad_chinese_char.append(char)

        self._entries[entry.id] = entry
        return entry

    def merge(self, id1: int, id2: int) -> Optional[MergeRecord]:
        """
        Replace two live entries with their field-wise union.

        Args:
            id1: Id of the first entry (its values come first)
            id2: Id of the second entry

        Returns:
            MergeRecord of (old1, old2, new), or None if either id is no
            longer live or the merge had to be aborted
        """
        old1 = self._entries.get(id1)
        old2 = self._entries.get(id2)
        if old1 is None or old2 is None or id1 == id2:
            return None

        new_id = self._mint_id()
        if new_id in self._entries:
            print(f"  ERROR: entry {new_id} is already defined; "
                  f"skipping merge of {id1} and {id2}")
            return None

        new_entry = VariantMapEntry(
            id=new_id,
            japanese_char=combine_without_duplicates(old1.japanese_char, old2.japanese_char),
            simp_chinese_char=combine_without_duplicates(old1.simp_chinese_char, old2.simp_chinese_char),
            trad_chinese_char=combine_without_duplicates(old1.trad_chinese_char, old2.trad_chinese_char),
            pinyin=combine_without_duplicates(old1.pinyin, old2.pinyin),
            onyomi=combine_without_duplicates(old1.onyomi, old2.onyomi),
            kunyomi=combine_without_duplicates(old1.kunyomi, old2.kunyomi),
            english_meaning=combine_without_duplicates(old1.english_meaning, old2.english_meaning),
        )

        del self._entries[id1]
        del self._entries[id2]
        self._retired.update((id1, id2))
        self._entries[new_id] = new_entry

        return MergeRecord(old1, old2, new_entry)

    # Getters and iterators

    def ids(self) -> list[int]:
        return list(self._entries)

    def get(self, entry_id: int) -> Optional[VariantMapEntry]:
        return self._entries.get(entry_id)

    def is_retired(self, entry_id: int) -> bool:
        return entry_id in self._retired

    def __iter__(self) -> Iterator[VariantMapEntry]:
        return iter(list(self._entries.values()))

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, entry_id: int) -> bool:
        return entry_id in self._entries

    # Glyph index

    def rebuild_char_index(self) -> None:
        """Map every glyph of every live entry to that entry's id."""
        self._char_to_id.clear()
        for entry_id, entry in self._entries.items():
            for char in get_all_chars(entry):
                self._char_to_id[char] = entry_id

    def get_by_char(self, char: str) -> Optional[VariantMapEntry]:
        entry_id = self._char_to_id.get(char)
        if entry_id is None:
            return None
        return self._entries.get(entry_id)
