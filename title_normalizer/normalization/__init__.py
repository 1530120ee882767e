"""Job-title normalization entry point.

This module provides:
- Normalizer: cleans, matches and scores input against canonical titles
- NormalizationResult: outcome of one normalization with its breakdown
"""

from .models import NormalizationResult
from .service import Normalizer

__all__ = ["Normalizer", "NormalizationResult"]
