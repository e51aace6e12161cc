"""
similarity.py

"More like this" scoring between two normalized recipes. Purely attribute
based (no text), additive:

    0.3  same cuisine
    0.2  same difficulty
    0.2  total time within 15 minutes
    0.1  per shared dietary tag
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

from src.recipe_ranker.enrichment.schema import NormalizedRecipe

TIME_WINDOW_MINUTES = 15


@dataclass(frozen=True)
class SimilarRecipe:
    recipe: NormalizedRecipe
    similarity_score: float


def similarity(candidate: NormalizedRecipe, target: NormalizedRecipe) -> float:
    score = 0.0
    if candidate.cuisine == target.cuisine:
        score += 0.3
    if candidate.difficulty == target.difficulty:
        score += 0.2
    if abs(candidate.total_time - target.total_time) <= TIME_WINDOW_MINUTES:
        score += 0.2
    shared = set(candidate.dietary_tags) & set(target.dietary_tags)
    score += 0.1 * len(shared)
    return score


def rank_similar(target: NormalizedRecipe, corpus: Sequence[NormalizedRecipe], limit: int = 5) -> List[SimilarRecipe]:
    scored = [
        SimilarRecipe(recipe=r, similarity_score=similarity(r, target))
        for r in corpus
        if r.id != target.id
    ]
    scored.sort(key=lambda s: s.similarity_score, reverse=True)
    return scored[: max(0, limit)]
