#!/usr/bin/env python3
"""
documents.py

Build OSMF semantic-unit documents from resolved VariantMap entries.
Documents match data/semantic-unit/semantic-unit.schema.json.
"""

from .entries import VariantMapEntry, get_all_chars


def codepoint_str(char: str) -> str:
    """Convert a character to 'U+XXXX' format."""
    cp = ord(char)
    if cp > 0xFFFF:
        return f"U+{cp:05X}"
    return f"U+{cp:04X}"


def symbol_list(chars: list[str]) -> list[dict]:
    return [{"symbol": c, "unicode": codepoint_str(c)} for c in chars]


def build_semantic_unit_document(entry: VariantMapEntry, suffix: int = 1) -> dict:
    """
    Build an OSMF semantic-unit document from an entry.

    The document id is keyed by the entry's first glyph (Japanese, then
    simplified, then traditional), so it does not depend on entry ids.

    Args:
        entry: Resolved VariantMap entry
        suffix: Occurrence number of the key glyph; appended as "-N" from 2

    Returns:
        Document dict matching semantic-unit.schema.json
    """
    key = get_all_chars(entry)[0]
    doc_id = f"semantic-unit:{codepoint_str(key)}"
    if suffix > 1:
        doc_id = f"{doc_id}-{suffix}"

    doc = {
        "$id": doc_id,
        "japanese": symbol_list(entry.japanese_char),
        "simplifiedChinese": symbol_list(entry.simp_chinese_char),
        "traditionalChinese": symbol_list(entry.trad_chinese_char),
        "meanings": list(entry.english_meaning),
    }

    if entry.pinyin:
        doc["pinyin"] = list(entry.pinyin)

    if entry.onyomi:
        doc["onyomi"] = list(entry.onyomi)

    if entry.kunyomi:
        doc["kunyomi"] = list(entry.kunyomi)

    return doc


def doc_filename(doc: dict) -> str:
    """Get the filename for a semantic-unit document."""
    return f"{doc['$id']}.json"


def build_semantic_unit_documents(variant_map) -> dict[str, dict]:
    """
    Build documents for every live entry of a VariantMap.

    A glyph can be the key of two units (e.g. a Chinese-only entry left over
    after its Japanese twin was merged elsewhere). The first unit keeps the
    plain id; later ones get "-2", "-3", ... in entry order.

    Returns:
        Dict mapping filename -> document, one per live entry
    """
    documents: dict[str, dict] = {}
    key_counts: dict[str, int] = {}

    for entry in variant_map.entries():
        chars = get_all_chars(entry)
        if not chars:
            continue

        key_counts[chars[0]] = key_counts.get(chars[0], 0) + 1
        doc = build_semantic_unit_document(entry, key_counts[chars[0]])
        documents[doc_filename(doc)] = doc

    return documents
