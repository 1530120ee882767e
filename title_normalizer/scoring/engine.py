"""Scoring engine that turns cleaned input tokens into per-title scores.

For every token, independently:
1. Synonym lookup: +SYNONYM_MATCH_SCORE to every title listing the token
2. Word lookup, one strategy per token:
   - partial: the token is a whole word of some titles, +TITLE_MATCH_SCORE each
   - fuzzy: no partial hit and typos allowed, +TYPO_MATCH_SCORE to the titles
     of every title word within SIMILARITY_THRESHOLD Jaro-Winkler distance
   - none: otherwise
Then the consecutive-run bonus is applied once over the accumulated scores.
"""

import logging
from typing import Dict, FrozenSet, Optional, Sequence, Tuple

from title_normalizer.index.mapper import SynonymIndex
from title_normalizer.logging import get_logger
from title_normalizer.utils.text import jaro_winkler_distance

from .consecutive import calculate_consecutive_match_bonus
from .constants import SIMILARITY_THRESHOLD, SYNONYM_MATCH_SCORE, TITLE_MATCH_SCORE, TYPO_MATCH_SCORE
from .models import MatchStrategy, ScoringResult, TokenMatch

logger = get_logger(__name__, component="scoring")

STRATEGY_SCORES = {
    MatchStrategy.PARTIAL: TITLE_MATCH_SCORE,
    MatchStrategy.FUZZY: TYPO_MATCH_SCORE,
    MatchStrategy.NONE: 0,
}


class ScoringEngine:
    """Scores canonical titles against a tokenized input.

    The engine only reads the index; every call builds a fresh score map.
    """

    def __init__(self, index: SynonymIndex, logger_instance: Optional[logging.Logger] = None):
        """Initialize ScoringEngine.

        Args:
            index: SynonymIndex to score against
            logger_instance: Optional logger instance (defaults to module logger)
        """
        self.index = index
        self.logger = logger_instance or logger

    def evaluate(self, tokens: Sequence[str], allow_typos: bool = False) -> ScoringResult:
        """Score every title touched by ``tokens``.

        Args:
            tokens: Cleaned input tokens, in input order
            allow_typos: Enable the fuzzy fallback for tokens with no word hit

        Returns:
            ScoringResult with scores, per-token matches and applied bonuses
        """
        result = ScoringResult()

        for token in tokens:
            token_match = self.match_token(token, allow_typos)
            self._apply(result.scores, token_match.synonym_titles, SYNONYM_MATCH_SCORE)
            self._apply(result.scores, token_match.word_titles, STRATEGY_SCORES[token_match.strategy])
            result.token_matches.append(token_match)

        result.bonuses = calculate_consecutive_match_bonus(result.scores, tokens)

        self.logger.debug(
            "Scored input tokens",
            extra={
                "event": "scoring.completed",
                "token_count": len(tokens),
                "candidate_count": len(result.scores),
                "bonus_titles": len(result.bonuses),
                "allow_typos": allow_typos,
            },
        )

        return result

    def calculate_scores(self, tokens: Sequence[str], allow_typos: bool = False) -> Dict[str, int]:
        """Return only the title -> score map for ``tokens``."""
        return self.evaluate(tokens, allow_typos).scores

    def match_token(self, token: str, allow_typos: bool = False) -> TokenMatch:
        """Work out what a single token contributes, without scoring it."""
        strategy, word_titles = self.select_word_strategy(token, allow_typos)
        return TokenMatch(
            token=token,
            synonym_titles=self.index.titles_for_token(token),
            strategy=strategy,
            word_titles=word_titles,
        )

    def select_word_strategy(self, token: str, allow_typos: bool = False) -> Tuple[MatchStrategy, FrozenSet[str]]:
        """Pick the word-matching strategy for ``token`` and the titles it credits.

        Exact partial matches always win; typo matching is only a fallback.
        """
        partial_matches = self.index.titles_containing_word(token)
        if partial_matches:
            return MatchStrategy.PARTIAL, partial_matches

        if allow_typos:
            fuzzy_matches = self.fuzzy_partial_matches(token)
            if fuzzy_matches:
                return MatchStrategy.FUZZY, fuzzy_matches

        return MatchStrategy.NONE, frozenset()

    def fuzzy_partial_matches(self, token: str) -> FrozenSet[str]:
        """Titles owning a word within the typo threshold of ``token``.

        Compares against every indexed title word; synonyms are not
        candidates. Cost grows with the number of distinct title words.
        """
        if not token:
            return frozenset()

        matched = set()
        for word, titles in self.index.word_entries():
            if jaro_winkler_distance(token, word) <= SIMILARITY_THRESHOLD:
                matched.update(titles)
        return frozenset(matched)

    @staticmethod
    def _apply(scores: Dict[str, int], titles: FrozenSet[str], points: int) -> None:
        if not points:
            return
        for title in titles:
            scores[title] = scores.get(title, 0) + points
