"""Lexical name matching between a query and source candidates."""

from collections.abc import Sequence

from nutrition_engine.domain.nutrition import SourceRecord


def name_similarity(query: str, candidate: str) -> float:
    """Share of query words that overlap some candidate word.

    A query word matches when it is a substring of a candidate word or the
    other way round, so "rice" matches "riceratops". Words are split on single
    spaces; the empty words left by repeated spaces match anything.
    """
    query_words = query.lower().split(" ")
    candidate_words = candidate.lower().split(" ")
    matches = 0
    for query_word in query_words:
        for candidate_word in candidate_words:
            if query_word in candidate_word or candidate_word in query_word:
                matches += 1
                break
    return matches / len(query_words)


def best_match(query: str, candidates: Sequence[SourceRecord]) -> SourceRecord:
    """Return the most similar candidate; ties keep the earliest one."""
    if not candidates:
        raise ValueError("best_match requires at least one candidate")
    best = candidates[0]
    best_score = name_similarity(query, best.name)
    for candidate in candidates[1:]:
        score = name_similarity(query, candidate.name)
        if score > best_score:
            best = candidate
            best_score = score
    return best
