"""Canonical-title vocabulary and the token indexes built over it.

This module provides:
- SynonymIndex: synonym-token and title-word lookups over the vocabulary
- merge_mappings: per-title union of caller mappings and defaults
- DEFAULT_MAPPINGS: the built-in vocabulary
"""

from .defaults import DEFAULT_MAPPINGS, DEFAULT_VOCABULARY_VERSION
from .mapper import SynonymIndex, TitleMapping, merge_mappings

__all__ = [
    "SynonymIndex",
    "TitleMapping",
    "merge_mappings",
    "DEFAULT_MAPPINGS",
    "DEFAULT_VOCABULARY_VERSION",
]
