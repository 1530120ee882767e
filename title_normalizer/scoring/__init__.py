"""Scoring engine for ranking canonical titles against input tokens.

This module provides:
- ScoringEngine: synonym, partial-word and typo scoring per token
- calculate_consecutive_match_bonus: exponential bonus for in-order word runs
- MatchStrategy, TokenMatch, ScoringResult: scoring data models
- Scoring constants
"""

from .consecutive import calculate_consecutive_match_bonus, consecutive_bonus, run_bonus
from .constants import (
    CONSECUTIVE_BONUS_MIN_SCORE,
    SIMILARITY_THRESHOLD,
    SYNONYM_MATCH_SCORE,
    TITLE_MATCH_SCORE,
    TYPO_MATCH_SCORE,
)
from .engine import ScoringEngine
from .models import MatchStrategy, ScoringResult, TokenMatch

__all__ = [
    "ScoringEngine",
    "ScoringResult",
    "TokenMatch",
    "MatchStrategy",
    "calculate_consecutive_match_bonus",
    "consecutive_bonus",
    "run_bonus",
    "TITLE_MATCH_SCORE",
    "SYNONYM_MATCH_SCORE",
    "TYPO_MATCH_SCORE",
    "CONSECUTIVE_BONUS_MIN_SCORE",
    "SIMILARITY_THRESHOLD",
]
