#!/usr/bin/env python3
"""
Normalization of free-text English meanings for comparison.

Unihan kDefinition, Kanjidic and Cedict glosses are written in different
house styles ("happy; glad", "happy, glad (variant form)", "radical 85").
These helpers reduce a gloss to a sorted list of content words so two
glosses can be compared word by word.
"""

import re

# Annotation words that say what a character is rather than what it means
MEANING_STOPWORDS = frozenset({"rad.", "radical", "Kangxi"})

_PARENTHESIZED = re.compile(r"\([^)]*\)")
_BRACKETED = re.compile(r"\[[^\]]*\]")
_SEPARATORS = re.compile(r"[,;]")


def strip_annotations(meaning: str) -> str:
    """Remove every (...) and [...] span from a meaning string."""
    return _BRACKETED.sub("", _PARENTHESIZED.sub("", meaning))


def meaning_words(meaning: str | None) -> list[str]:
    """
    Split a meaning string into its sorted list of content words.

    Drops parenthesized and bracketed spans, treats commas and semicolons
    as whitespace, and removes empty tokens, stopwords and pure numbers.

    Args:
        meaning: Free-text English meaning, or None

    Returns:
        Sorted list of words (duplicates kept)
    """
    if not meaning:
        return []

    text = _SEPARATORS.sub(" ", strip_annotations(meaning))
    words = [
        w for w in text.split()
        if w and w not in MEANING_STOPWORDS and not w.isdigit()
    ]
    words.sort()
    return words


if __name__ == "__main__":
    samples = [
        "happy; glad",
        "happy, glad (variant form)",
        "water; KangXi radical 85",
        "sun; day; daytime [used in names]",
    ]

    print("Meaning Normalization")
    print("=" * 60)
    for sample in samples:
        print(f"{sample:<40}{meaning_words(sample)}")
