"""Utility functions for text cleaning, tokenization and similarity."""

from .text import SPECIAL_CHARACTERS_PATTERN, clean_text, jaro_winkler_distance, tokenize

__all__ = [
    "SPECIAL_CHARACTERS_PATTERN",
    "clean_text",
    "tokenize",
    "jaro_winkler_distance",
]
