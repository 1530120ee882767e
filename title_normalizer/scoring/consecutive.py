"""Bonus for input tokens that reproduce runs of a title's own words.

A title's words are walked left to right. For each word, the first input
token equal to it (case-insensitive, never fuzzy) starts a run that extends
while both sequences keep agreeing. A run of n words earns 2^n when n > 1.
Disjoint runs in the same title add up.
"""

from typing import Dict, List, Sequence

from .constants import CONSECUTIVE_BONUS_MIN_SCORE


def calculate_consecutive_match_bonus(scores: Dict[str, int], input_tokens: Sequence[str]) -> Dict[str, int]:
    """Add the consecutive-run bonus to every eligible title in ``scores``.

    Only titles whose score is already at least two whole-word matches are
    considered. ``scores`` is updated in place.

    Args:
        scores: Title -> accumulated score
        input_tokens: Input tokens in their original order

    Returns:
        Title -> bonus added, for titles that received a non-zero bonus
    """
    lowered_tokens = [token.lower() for token in input_tokens]
    applied: Dict[str, int] = {}

    for title, score in list(scores.items()):
        if score < CONSECUTIVE_BONUS_MIN_SCORE:
            continue

        bonus = _title_bonus(title.lower().split(), lowered_tokens)
        if bonus:
            scores[title] = score + bonus
            applied[title] = bonus

    return applied


def consecutive_bonus(title: str, input_tokens: Sequence[str]) -> int:
    """Bonus ``title`` would earn from ``input_tokens``, ignoring the score gate."""
    return _title_bonus(title.lower().split(), [token.lower() for token in input_tokens])


def run_bonus(run_length: int) -> int:
    """2^n for a run of n > 1 words, nothing for a single word."""
    if run_length > 1:
        return 2 ** run_length
    return 0


def _title_bonus(title_words: List[str], input_tokens: List[str]) -> int:
    bonus = 0
    title_index = 0

    while title_index < len(title_words):
        token_index = _find_token(input_tokens, title_words[title_index])

        if token_index == -1:
            title_index += 1
            continue

        run_length = _run_length(title_words, title_index, input_tokens, token_index)
        bonus += run_bonus(run_length)
        title_index += run_length

    return bonus


def _find_token(input_tokens: List[str], word: str) -> int:
    for index, token in enumerate(input_tokens):
        if token == word:
            return index
    return -1


def _run_length(title_words: List[str], title_index: int, input_tokens: List[str], token_index: int) -> int:
    run_length = 0
    while (
        title_index < len(title_words)
        and token_index < len(input_tokens)
        and title_words[title_index] == input_tokens[token_index]
    ):
        run_length += 1
        title_index += 1
        token_index += 1
    return run_length
