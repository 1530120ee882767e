"""Text helpers shared by the index and the scoring engine.

This module provides:
- clean_text: deterministic lowercase/trim with optional special-character stripping
- tokenize: whitespace tokenization with empty tokens discarded
- jaro_winkler_distance: typo distance used by fuzzy word matching
"""

import re
from typing import List, Optional

import jellyfish

# Anything that is not a letter, digit or whitespace. ``\w`` also admits the
# underscore, so it is listed separately.
SPECIAL_CHARACTERS_PATTERN = re.compile(r"[^\w\s]|_")


def clean_text(text: Optional[str], strip_special_characters: bool = False) -> str:
    """Clean text for indexing and lookup.

    The same function is applied to synonyms and title words at index time
    and to user input at query time, so it must stay pure.

    Args:
        text: Text to clean (None is treated as empty)
        strip_special_characters: Remove every character that is not a
            letter, digit or whitespace

    Returns:
        Lowercased, trimmed text

    Example:
        >>> clean_text("  Java, C# @!  ", strip_special_characters=True)
        'java c'
    """
    if not text:
        return ""

    cleaned = text.lower()

    if strip_special_characters:
        cleaned = SPECIAL_CHARACTERS_PATTERN.sub("", cleaned)

    return cleaned.strip()


def tokenize(text: Optional[str]) -> List[str]:
    """Split text on runs of whitespace, dropping empty tokens."""
    if not text:
        return []
    return text.split()


def jaro_winkler_distance(left: str, right: str) -> float:
    """Return ``1 - similarity`` using the Jaro-Winkler metric.

    0.0 means identical strings, 1.0 means nothing in common.
    """
    if not left or not right:
        return 1.0
    return 1.0 - jellyfish.jaro_winkler_similarity(left, right)
