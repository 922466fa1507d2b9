"""Fuzzy subsequence scoring for file path lookup.

Hidden design decisions:
- Case-insensitive, left-to-right subsequence matching
- Adjacent matches score higher than scattered ones
- Ranking threshold and result limit
"""

from collections.abc import Callable, Iterable
from typing import TypeVar

T = TypeVar("T")

MATCH_THRESHOLD = 0.3
MAX_RESULTS = 5


def fuzzy_score(pattern: str, candidate: str) -> float:
    """Score how well ``pattern`` matches ``candidate`` as a subsequence.

    Each pattern character is searched for in order. A match directly after
    the previous match (or the very first match) earns 1.0, any other match
    earns 0.5. Characters that are never found earn nothing.

    Args:
        pattern: Query text, must not be empty
        candidate: Text to match against (typically a file path)

    Returns:
        Accumulated points divided by pattern length, in [0, 1]

    Raises:
        ValueError: If pattern is empty
    """
    if not pattern:
        raise ValueError("Pattern must not be empty")

    pattern = pattern.lower()
    candidate = candidate.lower()

    score = 0.0
    pattern_idx = 0
    prev_match = -1

    for idx, char in enumerate(candidate):
        if pattern_idx == len(pattern):
            break
        if char == pattern[pattern_idx]:
            score += 1.0 if prev_match == -1 or idx == prev_match + 1 else 0.5
            prev_match = idx
            pattern_idx += 1

    return score / len(pattern)


def rank_candidates(
    query: str,
    candidates: Iterable[T],
    key: Callable[[T], str] = str,
    exclude: Iterable[str] = (),
    threshold: float = MATCH_THRESHOLD,
    limit: int = MAX_RESULTS,
) -> list[T]:
    """Return the best matching candidates for a query.

    Args:
        query: Search text; blank means no search is active
        candidates: Items to rank, in enumeration order
        key: Extracts the text to match from each candidate
        exclude: Keys to leave out (e.g. already selected paths)
        threshold: Minimum score, exclusive
        limit: Maximum number of results

    Returns:
        Up to ``limit`` candidates by descending score; ties keep enumeration order
    """
    if not query.strip():
        return []

    excluded = set(exclude)
    scored = []
    for candidate in candidates:
        text = key(candidate)
        if text in excluded:
            continue
        score = fuzzy_score(query, text)
        if score > threshold:
            scored.append((score, candidate))

    scored.sort(key=lambda item: item[0], reverse=True)
    return [candidate for _, candidate in scored[:limit]]
