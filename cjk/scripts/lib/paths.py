#!/usr/bin/env python3
"""
paths.py

Centralized path configuration for the CJK variant scripts.
All scripts should import paths from this module rather than defining them locally.
"""

from pathlib import Path

# ---------------------------------------------------------------------------
# Base Directories
# ---------------------------------------------------------------------------

LIB_DIR = Path(__file__).resolve().parent
SCRIPT_DIR = LIB_DIR.parent
CJK_ROOT = SCRIPT_DIR.parent

# ---------------------------------------------------------------------------
# Data Directories (OSMF Documents)
# ---------------------------------------------------------------------------

DATA_DIR = CJK_ROOT / "data"

# Per-character attribute data (IRG flags, readings, variant relations)
CHARACTER_FACT_DIR = DATA_DIR / "character-fact"
CHARACTER_FACT_DOCS = CHARACTER_FACT_DIR / "documents"

# Merged semantic units (Japanese / Simplified / Traditional)
SEMANTIC_UNIT_DIR = DATA_DIR / "semantic-unit"
SEMANTIC_UNIT_SCHEMA = SEMANTIC_UNIT_DIR / "semantic-unit.schema.json"

# Curated variant links that Unihan is missing
KNOWN_LINKS_DIR = DATA_DIR / "known-links"
KNOWN_LINKS_DOCS = KNOWN_LINKS_DIR / "documents"
KNOWN_LINKS_PATH = KNOWN_LINKS_DOCS / "known-links.json"
