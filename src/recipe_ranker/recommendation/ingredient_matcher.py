"""
ingredient_matcher.py

Token-overlap relevance between the user's pantry and a recipe's ingredients.

For each pantry item we take its best overlap against any recipe ingredient:

    overlap = shared tokens / max(len(pantry tokens), len(recipe tokens))

coverage      = matched pantry items / all pantry items
match_quality = mean best overlap over matched items (0 if none)
score         = 0.7 * coverage + 0.3 * match_quality

Empty pantry -> neutral 0.5. Recipe without ingredients -> 0.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple

from src.recipe_ranker.enrichment.schema import NormalizedRecipe
from src.recipe_ranker.search.tokenizer import tokenize

EMPTY_PANTRY_SCORE = 0.5
COVERAGE_WEIGHT = 0.7
QUALITY_WEIGHT = 0.3


@dataclass(frozen=True)
class IngredientMatch:
    best_matches: Tuple[float, ...]     # one per pantry item, in pantry order
    matched_count: int
    coverage: float
    match_quality: float
    score: float


def token_overlap(pantry_tokens: Sequence[str], recipe_tokens: Sequence[str]) -> float:
    denom = max(len(pantry_tokens), len(recipe_tokens))
    if denom == 0:
        return 0.0
    recipe_set = set(recipe_tokens)
    shared = sum(1 for t in pantry_tokens if t in recipe_set)
    return shared / denom


def match_ingredients(recipe: NormalizedRecipe, pantry: Sequence[str]) -> IngredientMatch:
    if not pantry:
        return IngredientMatch((), 0, 0.0, 0.0, EMPTY_PANTRY_SCORE)
    if not recipe.ingredients:
        return IngredientMatch(tuple(0.0 for _ in pantry), 0, 0.0, 0.0, 0.0)

    recipe_tokens: List[List[str]] = [tokenize(ing) for ing in recipe.ingredients]

    best: List[float] = []
    for item in pantry:
        item_tokens = tokenize(item)
        best.append(max(token_overlap(item_tokens, rt) for rt in recipe_tokens))

    matched = [b for b in best if b > 0]
    matched_count = len(matched)
    match_quality = sum(matched) / matched_count if matched_count else 0.0
    coverage = matched_count / len(pantry)
    score = COVERAGE_WEIGHT * coverage + QUALITY_WEIGHT * match_quality

    return IngredientMatch(
        best_matches=tuple(best),
        matched_count=matched_count,
        coverage=coverage,
        match_quality=match_quality,
        score=min(1.0, max(0.0, score)),
    )


def score_ingredient_match(recipe: NormalizedRecipe, pantry: Sequence[str]) -> float:
    return match_ingredients(recipe, pantry).score
