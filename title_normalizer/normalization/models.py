"""Data models for the normalization layer."""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from title_normalizer.scoring.models import ScoringResult


@dataclass
class NormalizationResult:
    """Outcome of normalizing one input title, with the reasoning behind it.

    Attributes:
        input_text: Raw input as given by the caller
        cleaned_input: Input after cleaning (empty if the input was unusable)
        tokens: Cleaned input tokens (empty for exact matches)
        title: Matched canonical title, or None for no match
        score: Score of the matched title (0 for exact matches and no match)
        is_exact: True if the whole input equalled a canonical title
        candidates: Scored (title, score) pairs above zero, best first (empty
            when scoring was skipped)
        scoring: Full scoring breakdown (None when scoring was skipped)
    """

    input_text: Optional[str]
    cleaned_input: str = ""
    tokens: List[str] = field(default_factory=list)
    title: Optional[str] = None
    score: int = 0
    is_exact: bool = False
    candidates: List[Tuple[str, int]] = field(default_factory=list)
    scoring: Optional[ScoringResult] = None

    @property
    def is_match(self) -> bool:
        return self.title is not None

    @property
    def match_type(self) -> str:
        """'exact', 'scored' or 'no-match'."""
        if self.is_exact:
            return "exact"
        if self.title is not None:
            return "scored"
        return "no-match"
