"""Map free-text job titles to canonical titles.

Exact, synonym, partial-word and typo-tolerant matching are combined into a
single ranked score.

Example:
    >>> from title_normalizer import Normalizer
    >>> normalizer = Normalizer({"Data Scientist": ["data analyst", "ml"]})
    >>> normalizer.normalize("Senior ML person")
    'Data Scientist'
"""

from title_normalizer.index import DEFAULT_MAPPINGS, DEFAULT_VOCABULARY_VERSION, SynonymIndex
from title_normalizer.normalization import NormalizationResult, Normalizer
from title_normalizer.scoring import MatchStrategy, ScoringEngine, ScoringResult, TokenMatch

__version__ = "0.1.0"

__all__ = [
    "Normalizer",
    "NormalizationResult",
    "SynonymIndex",
    "ScoringEngine",
    "ScoringResult",
    "TokenMatch",
    "MatchStrategy",
    "DEFAULT_MAPPINGS",
    "DEFAULT_VOCABULARY_VERSION",
]
