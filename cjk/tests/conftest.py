#!/usr/bin/env python3
"""
conftest.py

Shared fixtures for the variant tests: a helper for building CharacterFacts
and stores over small hand-made character sets.
"""

import sys
from pathlib import Path

import pytest

# Add scripts directory to path for lib / adapters / variants imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "scripts"))

from adapters.unihan import CharacterFact, CharacterStore


def make_fact(glyph: str, pinyin=(), *, jp=False, simp=False, trad=False, **kwargs) -> CharacterFact:
    """Build a CharacterFact with the common fields as short keywords."""
    return CharacterFact(
        glyph=glyph,
        is_japanese=jp,
        is_simplified=simp,
        is_traditional=trad,
        mandarin_pinyin=list(pinyin),
        **kwargs,
    )


@pytest.fixture
def fact():
    return make_fact


@pytest.fixture
def le_store() -> CharacterStore:
    """楽 (Japanese), 樂 (traditional) and 乐 (simplified), all read lè."""
    return CharacterStore([
        make_fact("楽", ["lè"], jp=True,
                  japanese_on=["ガク", "ラク"], japanese_kun=["たのしい"],
                  english_definitions=["music; comfort, ease, pleasure"],
                  semantic_variants=["樂"]),
        make_fact("樂", ["lè"], jp=True, trad=True,
                  japanese_on=["ガク", "ラク"],
                  english_definitions=["happy, glad; enjoyable; music"],
                  simplified_variants=["乐"], semantic_variants=["楽"]),
        make_fact("乐", ["lè"], simp=True,
                  english_definitions=["happy, glad; enjoyable; music"],
                  traditional_variants=["樂"]),
    ])
