"""Fuzzy search over vault paths."""

from .fuzzy import MATCH_THRESHOLD, MAX_RESULTS, fuzzy_score, rank_candidates

__all__ = [
    "MATCH_THRESHOLD",
    "MAX_RESULTS",
    "fuzzy_score",
    "rank_candidates",
]
