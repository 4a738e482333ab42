#!/usr/bin/env python3
"""
test_fact_io.py

Loading character-fact and known-link documents, and a full VariantMap run
over the sample data set.
"""

import json

import pytest

from lib.fact_io import (
    character_fact_from_document,
    load_character_facts,
    load_character_store,
    load_known_links,
)
from lib.paths import CHARACTER_FACT_DOCS, KNOWN_LINKS_PATH
from variants.documents import build_semantic_unit_documents
from variants.variant_map import CLUSTER_PASS, IDENTITY_PASS, VariantMap


SAMPLE_JAPANESE = ["日", "楽", "気", "歩"]
SAMPLE_SIMPLIFIED = ["日", "乐", "气", "步"]


def canonical(variant_map: VariantMap) -> set:
    return {
        (frozenset(e.japanese_char), frozenset(e.simp_chinese_char), frozenset(e.trad_chinese_char))
        for e in variant_map.entries()
    }


# ---------------------------------------------------------------------------
# Document Conversion
# ---------------------------------------------------------------------------

def test_character_fact_from_document_maps_all_fields() -> None:
    fact = character_fact_from_document({
        "$id": "character:U+6A02",
        "unicode": "U+6A02",
        "symbol": "樂",
        "irgSources": ["H", "J"],
        "strokeCount": 15,
        "radicalStroke": ["75.11"],
        "pinyin": ["lè"],
        "onyomi": ["ガク", "ラク"],
        "kunyomi": ["たのしい"],
        "definitions": ["happy, glad; enjoyable; music"],
        "variants": {"semantic": ["楽"], "simplified": ["乐"]},
    })

    assert fact.glyph == "樂"
    assert fact.is_japanese and fact.is_traditional and not fact.is_simplified
    assert fact.total_strokes == 15
    assert fact.radical_stroke == ["75.11"]
    assert fact.mandarin_pinyin == ["lè"]
    assert fact.japanese_on == ["ガク", "ラク"]
    assert fact.japanese_kun == ["たのしい"]
    assert fact.semantic_variants == ["楽"]
    assert fact.simplified_variants == ["乐"]
    assert fact.traditional_variants == []
    assert fact.specialized_semantic_variants == []


def test_minimal_document_gets_empty_defaults() -> None:
    fact = character_fact_from_document({"$id": "character:U+65E5", "unicode": "U+65E5", "symbol": "日"})

    assert fact.total_strokes == 0
    assert fact.mandarin_pinyin == []
    assert not (fact.is_japanese or fact.is_simplified or fact.is_traditional)


@pytest.mark.parametrize("symbol", [None, "", "日本"])
def test_bad_symbol_is_rejected(symbol) -> None:
    with pytest.raises(ValueError, match="single character"):
        character_fact_from_document({"$id": "character:bad", "symbol": symbol})


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------

def test_load_character_facts_from_data_dir() -> None:
    facts = load_character_facts(CHARACTER_FACT_DOCS)

    glyphs = [f.glyph for f in facts]
    assert len(facts) == 11
    assert glyphs == sorted(glyphs)
    assert {"日", "楽", "樂", "乐", "歩", "步"} <= set(glyphs)


def test_load_known_links_from_data_dir() -> None:
    links = load_known_links(KNOWN_LINKS_PATH)
    assert ("歩", "步") in links
    assert all(len(a) == len(b) == 1 for a, b in links)


def test_missing_known_links_file_is_empty(tmp_path) -> None:
    assert load_known_links(tmp_path / "missing.json") == []


@pytest.mark.parametrize("link", [["歩"], ["歩", "步", "x"], ["歩", "ab"], "歩步"])
def test_malformed_known_link_is_rejected(tmp_path, link) -> None:
    path = tmp_path / "known-links.json"
    path.write_text(
        json.dumps({"$id": "known-links:test", "links": [["日", "日"], link]}, ensure_ascii=False),
        encoding="utf-8",
    )

    with pytest.raises(ValueError, match=r"links\[1\]"):
        load_known_links(path)


def test_load_character_store_from_tmp_dir(tmp_path) -> None:
    docs = tmp_path / "documents"
    docs.mkdir()
    for symbol, unicode in (("歩", "U+6B69"), ("步", "U+6B65")):
        (docs / f"character:{unicode}.json").write_text(
            json.dumps({"$id": f"character:{unicode}", "unicode": unicode, "symbol": symbol, "pinyin": ["bù"]}),
            encoding="utf-8",
        )
    links = tmp_path / "known-links.json"
    links.write_text(json.dumps({"$id": "known-links:test", "links": [["歩", "步"]]}), encoding="utf-8")

    store = load_character_store(docs, links)

    assert len(store) == 2
    assert store.known_links == [("歩", "步")]
    assert store.has_link("步", "歩")


# ---------------------------------------------------------------------------
# Sample Data Set
# ---------------------------------------------------------------------------

@pytest.fixture
def sample_store():
    return load_character_store()


def test_sample_clusters(sample_store) -> None:
    assert sample_store.get_cluster_id("楽") == sample_store.get_cluster_id("乐") != 0
    assert sample_store.get_cluster_id("気") == sample_store.get_cluster_id("气") != 0
    # joined only through the curated link
    assert sample_store.get_cluster_id("歩") == sample_store.get_cluster_id("步") != 0
    # historical semantic link with different readings
    assert sample_store.get_cluster_id("奶") == 0
    assert sample_store.get_cluster_id("日") == 0


def test_sample_known_links_without_data_are_reported(sample_store, capsys) -> None:
    mismatched = sample_store.verify_known_links()

    assert ("歩", "步") not in mismatched
    assert len(mismatched) == len(sample_store.known_links) - 1
    assert "WARNING" in capsys.readouterr().out


def test_sample_variant_map(sample_store) -> None:
    variant_map = VariantMap(SAMPLE_JAPANESE, SAMPLE_SIMPLIFIED, sample_store)

    assert canonical(variant_map) == {
        (frozenset("日"), frozenset("日"), frozenset("日")),
        (frozenset("楽"), frozenset("乐"), frozenset("樂")),
        (frozenset("気"), frozenset("气"), frozenset("氣")),
        (frozenset("歩"), frozenset("步"), frozenset("步")),
    }
    assert len(variant_map.merge_history[CLUSTER_PASS]) == 3
    assert len(variant_map.merge_history[IDENTITY_PASS]) == 1

    le = variant_map.get_entry_by_char("乐")
    assert le.pinyin == ["lè"]
    assert le.kunyomi == ["たのしい", "たのしむ"]
    assert le.english_meaning == ["music; comfort, ease, pleasure"]

    jp_only, cn_only = variant_map.unmatched_entries()
    assert jp_only == [] and cn_only == []


def test_sample_semantic_unit_documents(sample_store) -> None:
    variant_map = VariantMap(SAMPLE_JAPANESE, SAMPLE_SIMPLIFIED, sample_store)
    documents = build_semantic_unit_documents(variant_map)

    assert sorted(documents) == [
        "semantic-unit:U+65E5.json",
        "semantic-unit:U+697D.json",
        "semantic-unit:U+6B69.json",
        "semantic-unit:U+6C17.json",
    ]

    ki = documents["semantic-unit:U+6C17.json"]
    assert ki["japanese"] == [{"symbol": "気", "unicode": "U+6C17"}]
    assert ki["simplifiedChinese"] == [{"symbol": "气", "unicode": "U+6C14"}]
    assert ki["traditionalChinese"] == [{"symbol": "氣", "unicode": "U+6C23"}]
    assert ki["pinyin"] == ["qì"]
    assert ki["meanings"] == ["spirit, air, atmosphere, mood"]

    # 步 has no onyomi/kunyomi of its own; the unit carries 歩's
    ho = documents["semantic-unit:U+6B69.json"]
    assert ho["onyomi"] == ["ホ", "ブ", "フ"]


def test_every_live_entry_gets_a_document(le_store) -> None:
    # the Chinese 楽 seed is left over after the Japanese 楽 joins 乐
    variant_map = VariantMap(["楽"], ["乐", "楽"], le_store, s2t=le_store.simplified_to_traditional)
    assert len(variant_map) == 2

    documents = build_semantic_unit_documents(variant_map)

    assert len(documents) == len(variant_map)
    assert sorted(doc["$id"] for doc in documents.values()) == [
        "semantic-unit:U+697D",
        "semantic-unit:U+697D-2",
    ]
    assert documents["semantic-unit:U+697D.json"]["japanese"] == []
    assert documents["semantic-unit:U+697D-2.json"]["simplifiedChinese"] == [
        {"symbol": "乐", "unicode": "U+4E50"},
    ]
