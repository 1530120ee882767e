"""Data models for the scoring engine."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, List


class MatchStrategy(str, Enum):
    """Word-matching strategy chosen for a single token.

    Exactly one applies per token, so partial and typo points are never
    summed for the same token.
    """

    PARTIAL = "partial"
    FUZZY = "fuzzy"
    NONE = "none"


@dataclass(frozen=True)
class TokenMatch:
    """How one input token contributed to the scores.

    Attributes:
        token: Cleaned input token
        synonym_titles: Titles that list the token as a synonym
        strategy: Word-matching strategy applied to the token
        word_titles: Titles credited by that strategy
    """

    token: str
    synonym_titles: FrozenSet[str] = frozenset()
    strategy: MatchStrategy = MatchStrategy.NONE
    word_titles: FrozenSet[str] = frozenset()

    @property
    def matched(self) -> bool:
        return bool(self.synonym_titles or self.word_titles)


@dataclass
class ScoringResult:
    """Output of scoring one tokenized input.

    Attributes:
        scores: Title -> total score (token points plus consecutive bonus)
        token_matches: Per-token contributions, in input order
        bonuses: Title -> consecutive-run bonus included in scores
    """

    scores: Dict[str, int] = field(default_factory=dict)
    token_matches: List[TokenMatch] = field(default_factory=list)
    bonuses: Dict[str, int] = field(default_factory=dict)

    def ranked(self) -> List[tuple]:
        """Titles with a positive score, best first.

        Equal scores are ordered by title so that the ranking is deterministic.
        """
        eligible = [(title, score) for title, score in self.scores.items() if score > 0]
        return sorted(eligible, key=lambda item: (-item[1], item[0]))
