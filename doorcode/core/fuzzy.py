"""Fuzzy matching utilities using RapidFuzz."""
from typing import List, Tuple, Optional
from rapidfuzz import fuzz, process
from doorcode.core.normalization import normalize_text


def fuzzy_match(
    query: str,
    choices: List[str],
    threshold: float = 0.8,
    limit: int = 5
) -> List[Tuple[str, float, int]]:
    """
    Perform fuzzy matching between query and choices.

    Both sides are normalized first; the score is the better of token sort
    ratio and WRatio.

    Args:
        query: Query string to match
        choices: List of candidate strings
        threshold: Minimum similarity score (0-1)
        limit: Maximum number of results to return

    Returns:
        List of tuples (matched_string, score, index) sorted by score descending
    """
    if not query or not choices:
        return []

    normalized_query = normalize_text(query)
    if not normalized_query:
        return []
    normalized_choices = [normalize_text(c) for c in choices]

    combined = {}
    for scorer in (fuzz.token_sort_ratio, fuzz.WRatio):
        results = process.extract(
            normalized_query,
            normalized_choices,
            scorer=scorer,
            limit=limit,
            score_cutoff=threshold * 100
        )
        for _, score, idx in results:
            score_normalized = score / 100.0
            if idx not in combined or score_normalized > combined[idx]:
                combined[idx] = score_normalized

    matches = [(choices[idx], score, idx) for idx, score in combined.items()]
    matches.sort(key=lambda m: (-m[1], m[2]))
    return matches[:limit]


def best_match(
    query: str,
    choices: List[str],
    threshold: float = 0.8
) -> Optional[Tuple[str, float, int]]:
    """
    Get the best fuzzy match for a query.

    Returns:
        Tuple (matched_string, score, index) or None
    """
    matches = fuzzy_match(query, choices, threshold, limit=1)
    return matches[0] if matches else None
