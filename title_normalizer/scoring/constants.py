"""Fixed scoring policy."""

# Points per input token
TITLE_MATCH_SCORE = 4
SYNONYM_MATCH_SCORE = 2
TYPO_MATCH_SCORE = 1

# Titles below this score are not considered for the consecutive-run bonus
# (fewer than two whole-word matches)
CONSECUTIVE_BONUS_MIN_SCORE = TITLE_MATCH_SCORE * 2

# Maximum Jaro-Winkler distance accepted as a typo (15% dissimilarity)
SIMILARITY_THRESHOLD = 0.15
