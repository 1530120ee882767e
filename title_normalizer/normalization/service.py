"""Title normalization service: the public entry point of the library.

This module implements the orchestration that:
1. Cleans the raw input with the index's cleaning rules
2. Returns a canonical title straight away on an exact (case-insensitive) match
3. Tokenizes and scores the input otherwise
4. Picks the best positive score, breaking ties by title
"""

import logging
from typing import Iterable, List, Optional, Tuple

from title_normalizer.index.defaults import DEFAULT_MAPPINGS
from title_normalizer.index.mapper import SynonymIndex, TitleMapping
from title_normalizer.logging import get_logger
from title_normalizer.scoring.engine import ScoringEngine
from title_normalizer.utils.text import tokenize

from .models import NormalizationResult

logger = get_logger(__name__, component="normalizer")


class Normalizer:
    """Maps free-text job titles to canonical titles.

    Responsibilities:
    - Own the SynonymIndex and the ScoringEngine reading it
    - Hold the allow-typos and clean-special-characters settings
    - Resolve exact matches before scoring
    - Select a deterministic best match

    Bad input (None, non-strings, blank or unmatched text) never raises; it
    yields no match. ``normalize`` only reads shared state. ``add_mapping``
    writes it and must not overlap with ``normalize`` calls on other threads.
    """

    def __init__(
        self,
        mapping: Optional[TitleMapping] = None,
        *,
        allow_typos: bool = False,
        clean_special_characters: bool = False,
        defaults: TitleMapping = DEFAULT_MAPPINGS,
        logger_instance: Optional[logging.Logger] = None,
    ):
        """Initialize Normalizer.

        Args:
            mapping: Canonical title -> synonyms, merged with ``defaults``
            allow_typos: Enable typo-tolerant word matching
            clean_special_characters: Strip punctuation from synonyms and input.
                Synonyms are cleaned once, when indexed; changing the setting
                later does not re-clean them.
            defaults: Built-in vocabulary to merge in (pass {} for none)
            logger_instance: Optional logger instance (defaults to module logger)
        """
        self.logger = logger_instance or logger
        self.allow_typos = bool(allow_typos)
        self.index = SynonymIndex(
            mapping,
            defaults=defaults,
            clean_special_characters=clean_special_characters,
            logger_instance=logger_instance,
        )
        self.engine = ScoringEngine(self.index, logger_instance=logger_instance)

    @classmethod
    def from_config(cls, app_config, logger_instance: Optional[logging.Logger] = None) -> "Normalizer":
        """Build a Normalizer from a validated AppConfig."""
        matching = app_config.matching
        return cls(
            app_config.titles,
            allow_typos=matching.allow_typos,
            clean_special_characters=matching.clean_special_characters,
            defaults=DEFAULT_MAPPINGS if matching.include_defaults else {},
            logger_instance=logger_instance,
        )

    @property
    def clean_special_characters(self) -> bool:
        return self.index.clean_special_characters

    def set_allow_typos(self, allow_typos: bool) -> None:
        self.allow_typos = bool(allow_typos)

    def set_clean_special_characters(self, clean_special_characters: bool) -> None:
        """Change input cleaning for later calls.

        Entries already in the index keep the cleaning they were indexed with;
        only synonyms added afterwards use the new setting.
        """
        self.index.clean_special_characters = clean_special_characters

    def add_mapping(self, title: str, synonyms: Iterable[str]) -> None:
        """Union ``synonyms`` into ``title`` (creating it if new)."""
        self.index.add_mapping(title, synonyms)

    def titles(self) -> frozenset:
        return self.index.all_titles()

    def normalize(self, input_text: Optional[str]) -> Optional[str]:
        """Return the canonical title for ``input_text``, or None if nothing matches.

        Example:
            >>> Normalizer().normalize("Java engineer")
            'Software Engineer'
        """
        return self.explain(input_text).title

    def rank(self, input_text: Optional[str], limit: Optional[int] = None) -> List[Tuple[str, int]]:
        """Return (title, score) candidates with a positive score, best first.

        An exact match skips scoring and comes back alone with a score of 0.
        """
        result = self.explain(input_text)
        if result.is_exact:
            return [(result.title, 0)]

        candidates = result.candidates
        if limit is not None:
            return candidates[:limit]
        return candidates

    def explain(self, input_text: Optional[str]) -> NormalizationResult:
        """Normalize ``input_text`` and keep the full reasoning.

        Steps:
        1. Reject None, non-string and blank input
        2. Look for an exact title match, on the raw then the cleaned text
        3. Tokenize and score
        4. Select the best positive score (ties go to the lexicographically
           smallest title)
        """
        result = NormalizationResult(input_text=input_text)

        # Step 1: Unusable input is simply no match
        if not isinstance(input_text, str) or not input_text.strip():
            return result

        # Step 2: Exact match short-circuits scoring. The raw text is tried
        # first since titles are keyed before punctuation stripping.
        result.cleaned_input = self.index.clean(input_text)
        exact_match = self.index.find_exact(input_text) or self.index.find_exact(result.cleaned_input)
        if exact_match is not None:
            result.title = exact_match
            result.is_exact = True
            self.logger.debug(
                f"Exact match: {exact_match}",
                extra={"event": "normalizer.match.exact", "title": exact_match},
            )
            return result

        # Step 3: Score tokens
        result.tokens = tokenize(result.cleaned_input)
        if not result.tokens:
            self._log_no_match(result)
            return result

        result.scoring = self.engine.evaluate(result.tokens, self.allow_typos)
        result.candidates = result.scoring.ranked()

        # Step 4: Best match
        if not result.candidates:
            self._log_no_match(result)
            return result

        result.title, result.score = result.candidates[0]
        self.logger.debug(
            f"Scored match: {result.title}",
            extra={
                "event": "normalizer.match.scored",
                "title": result.title,
                "score": result.score,
                "candidate_count": len(result.candidates),
            },
        )
        return result

    def _log_no_match(self, result: NormalizationResult) -> None:
        self.logger.debug(
            "No match",
            extra={"event": "normalizer.match.none", "token_count": len(result.tokens)},
        )
