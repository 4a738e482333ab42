#!/usr/bin/env python3
"""
fact_io.py

Load character-fact and known-link OSMF documents into a CharacterStore.
Consolidates the document loading used by the variant scripts and tests.
"""

import json
import sys
from pathlib import Path

# Add parent directory to path for adapter imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from adapters.unihan import CharacterFact, CharacterStore
from lib.paths import CHARACTER_FACT_DOCS, KNOWN_LINKS_PATH

# IRG source letters -> CharacterFact flag
IRG_SOURCE_FLAGS = {
    "J": "is_japanese",
    "G": "is_simplified",
    "H": "is_traditional",
}

# Document "variants" keys -> CharacterFact field
VARIANT_KEYS = {
    "semantic": "semantic_variants",
    "specializedSemantic": "specialized_semantic_variants",
    "simplified": "simplified_variants",
    "traditional": "traditional_variants",
}


# ---------------------------------------------------------------------------
# Character Fact Loading
# ---------------------------------------------------------------------------

def character_fact_from_document(doc: dict) -> CharacterFact:
    """
    Convert a character-fact document into a CharacterFact.

    Raises:
        ValueError: if the document has no single-character symbol
    """
    symbol = doc.get("symbol")
    if not isinstance(symbol, str) or len(symbol) != 1:
        raise ValueError(f"{doc.get('$id', '?')}: symbol must be a single character, got {symbol!r}")

    fact = CharacterFact(glyph=symbol)

    for source in doc.get("irgSources", []):
        flag = IRG_SOURCE_FLAGS.get(source)
        if flag:
            setattr(fact, flag, True)

    fact.total_strokes = doc.get("strokeCount") or 0
    fact.radical_stroke = list(doc.get("radicalStroke", []))
    fact.mandarin_pinyin = list(doc.get("pinyin", []))
    fact.japanese_on = list(doc.get("onyomi", []))
    fact.japanese_kun = list(doc.get("kunyomi", []))
    fact.english_definitions = list(doc.get("definitions", []))

    variants = doc.get("variants", {})
    for key, attr in VARIANT_KEYS.items():
        setattr(fact, attr, list(variants.get(key, [])))

    return fact


def load_character_facts(docs_dir: Path = CHARACTER_FACT_DOCS) -> list[CharacterFact]:
    """
    Load all character-fact documents.

    Args:
        docs_dir: Directory containing character-fact JSON files

    Returns:
        List of CharacterFact, sorted by glyph
    """
    facts = []

    for json_file in sorted(docs_dir.glob("*.json")):
        with open(json_file, "r", encoding="utf-8") as f:
            doc = json.load(f)
            facts.append(character_fact_from_document(doc))

    facts.sort(key=lambda fact: fact.glyph)
    return facts


# ---------------------------------------------------------------------------
# Known Link Loading
# ---------------------------------------------------------------------------

def load_known_links(path: Path = KNOWN_LINKS_PATH) -> list[tuple[str, str]]:
    """
    Load the curated known-links document.

    Args:
        path: Path to the known-links JSON document

    Returns:
        List of (glyph, glyph) pairs; empty if the file does not exist

    Raises:
        ValueError: if a link is not a pair of single characters
    """
    if not path.exists():
        return []

    with open(path, "r", encoding="utf-8") as f:
        doc = json.load(f)

    links = []
    for index, link in enumerate(doc.get("links", [])):
        if (
            not isinstance(link, list)
            or len(link) != 2
            or not all(isinstance(c, str) and len(c) == 1 for c in link)
        ):
            raise ValueError(f"links[{index}] must be a pair of single characters, got {link!r}")
        links.append((link[0], link[1]))

    return links


def load_character_store(
    docs_dir: Path = CHARACTER_FACT_DOCS,
    known_links_path: Path = KNOWN_LINKS_PATH,
) -> CharacterStore:
    """Load character facts and known links into a CharacterStore."""
    return CharacterStore(
        load_character_facts(docs_dir),
        known_links=load_known_links(known_links_path),
    )

