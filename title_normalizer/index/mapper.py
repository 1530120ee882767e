"""Synonym and token index over the canonical-title vocabulary.

The index owns two lookup tables, both keyed by cleaned token:
- synonym index: cleaned synonym -> titles listing it as a synonym
- word index: cleaned word of a title's own text -> titles containing it

Concurrency: single writer, many readers. ``add_mapping`` calls are
serialized by an internal lock, but readers take no lock, so callers must not
query the index while an ``add_mapping`` is in flight.
"""

import logging
import threading
from typing import Dict, FrozenSet, Iterable, Iterator, List, Mapping, Optional, Set, Tuple

from title_normalizer.logging import get_logger
from title_normalizer.utils.text import clean_text, tokenize

from .defaults import DEFAULT_MAPPINGS

logger = get_logger(__name__, component="index")

TitleMapping = Mapping[str, Iterable[str]]


def as_synonym_list(synonyms: Optional[Iterable[str]]) -> List[str]:
    """Return synonyms as a list; a bare string is one synonym, not its characters."""
    if synonyms is None:
        return []
    if isinstance(synonyms, str):
        return [synonyms]
    return list(synonyms)


def merge_mappings(initial_mapping: Optional[TitleMapping], defaults: TitleMapping) -> Dict[str, Set[str]]:
    """Deep-merge a caller mapping with the defaults by per-title set union.

    Caller-supplied titles and synonyms are kept verbatim; defaults only add
    synonyms to existing titles or add titles the caller did not supply.

    Example:
        >>> merged = merge_mappings({"Architect": ["planner"]}, {"Architect": {"designer"}})
        >>> sorted(merged["Architect"])
        ['designer', 'planner']
    """
    merged: Dict[str, Set[str]] = {
        title: set(as_synonym_list(synonyms)) for title, synonyms in (initial_mapping or {}).items()
    }
    for title, synonyms in defaults.items():
        merged.setdefault(title, set()).update(synonyms)
    return merged


class SynonymIndex:
    """Vocabulary of canonical titles with O(1) token lookups.

    Responsibilities:
    - Merge caller mappings with the built-in defaults
    - Index every cleaned synonym and every cleaned title word
    - Answer synonym, word and exact-title lookups (never None)
    - Extend the vocabulary through add_mapping (union only)
    """

    def __init__(
        self,
        initial_mapping: Optional[TitleMapping] = None,
        defaults: TitleMapping = DEFAULT_MAPPINGS,
        clean_special_characters: bool = False,
        logger_instance: Optional[logging.Logger] = None,
    ):
        """Build the index.

        Args:
            initial_mapping: Canonical title -> synonyms supplied by the caller
            defaults: Baseline vocabulary merged into initial_mapping
            clean_special_characters: Strip punctuation when cleaning. Entries
                are cleaned with the value in effect when they are indexed.
            logger_instance: Optional logger (defaults to module logger)
        """
        self.logger = logger_instance or logger
        self._clean_special_characters = clean_special_characters
        self._write_lock = threading.Lock()

        self._titles: Dict[str, Set[str]] = {}
        self._synonym_index: Dict[str, Set[str]] = {}
        self._word_index: Dict[str, Set[str]] = {}
        self._exact_titles: Dict[str, str] = {}

        self.build(merge_mappings(initial_mapping, defaults))

    @property
    def clean_special_characters(self) -> bool:
        return self._clean_special_characters

    @clean_special_characters.setter
    def clean_special_characters(self, value: bool) -> None:
        # Already indexed entries keep the cleaning they were built with
        self._clean_special_characters = bool(value)

    def build(self, mapping: Mapping[str, Iterable[str]]) -> None:
        """Replace the vocabulary with ``mapping`` and rebuild both indexes."""
        with self._write_lock:
            self._titles = {}
            self._synonym_index = {}
            self._word_index = {}
            self._exact_titles = {}

            # Sorted so that case-colliding titles resolve the same way every run
            for title in sorted(mapping):
                self._register(title, mapping[title])

        self.logger.info(
            "Synonym index built",
            extra={
                "event": "index.built",
                "title_count": len(self._titles),
                "synonym_key_count": len(self._synonym_index),
                "word_key_count": len(self._word_index),
                "clean_special_characters": self._clean_special_characters,
            },
        )

    def add_mapping(self, title: str, synonyms: Iterable[str]) -> None:
        """Union ``synonyms`` into ``title``, creating the title if needed.

        Never removes or overwrites entries of other titles.
        """
        synonyms = as_synonym_list(synonyms)
        with self._write_lock:
            is_new = title not in self._titles
            self._register(title, synonyms)

        self.logger.info(
            f"Mapping added for {title}",
            extra={
                "event": "index.mapping.added",
                "title": title,
                "is_new_title": is_new,
                "synonym_count": len(synonyms),
            },
        )

    def clean(self, text: Optional[str]) -> str:
        """Clean text with the current special-character setting."""
        return clean_text(text, self._clean_special_characters)

    def titles_for_token(self, token: Optional[str]) -> FrozenSet[str]:
        """Titles listing ``token`` (after cleaning) as a synonym."""
        return self._lookup(self._synonym_index, token)

    def titles_containing_word(self, word: Optional[str]) -> FrozenSet[str]:
        """Titles whose own text contains ``word`` as a whole, cleaned word."""
        return self._lookup(self._word_index, word)

    def all_titles(self) -> FrozenSet[str]:
        return frozenset(self._titles)

    def synonyms_for(self, title: str) -> FrozenSet[str]:
        return frozenset(self._titles.get(title, ()))

    def word_keys(self) -> FrozenSet[str]:
        """Distinct indexed title words, the candidate set for typo matching."""
        return frozenset(self._word_index)

    def word_entries(self) -> Iterator[Tuple[str, FrozenSet[str]]]:
        """Yield (indexed title word, titles containing it) pairs."""
        for word, titles in list(self._word_index.items()):
            yield word, frozenset(titles)

    def find_exact(self, text: Optional[str]) -> Optional[str]:
        """Return the title whose full text equals ``text`` ignoring case."""
        if not text:
            return None
        return self._exact_titles.get(text.lower().strip())

    def __contains__(self, title: object) -> bool:
        return title in self._titles

    def __len__(self) -> int:
        return len(self._titles)

    def _register(self, title: str, synonyms: Iterable[str]) -> None:
        """Add a title and its synonyms to every table. Caller holds the lock."""
        if title not in self._titles:
            self._titles[title] = set()
            self._exact_titles.setdefault(title.lower().strip(), title)
            for word in tokenize(title):
                self._add_entry(self._word_index, self.clean(word), title)

        for synonym in synonyms:
            if synonym is None:
                continue
            self._titles[title].add(synonym)
            self._add_entry(self._synonym_index, self.clean(synonym), title)

    @staticmethod
    def _add_entry(table: Dict[str, Set[str]], key: str, title: str) -> None:
        if not key:
            return
        table.setdefault(key, set()).add(title)

    def _lookup(self, table: Dict[str, Set[str]], token: Optional[str]) -> FrozenSet[str]:
        key = self.clean(token) if isinstance(token, str) else ""
        if not key:
            return frozenset()
        return frozenset(table.get(key, ()))
