# src/recipe_ranker/search/tokenizer.py
from __future__ import annotations

"""
tokenizer.py

Purpose:
    Turn recipe text into index tokens.

    - lowercase, keep only [a-z0-9] and whitespace, split on whitespace
    - drop tokens of length <= 2 and stopwords
    - field weighting is applied by repeating each token ceil(weight) times,
      so a name token (weight 2.0) counts twice in the term frequency
"""

import math
import re
from typing import List

from src.recipe_ranker.enrichment.schema import NormalizedRecipe

_NON_ALNUM = re.compile(r"[^a-z0-9\s]")

STOPWORDS = frozenset(
    {
        "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for",
        "of", "with", "by", "from", "as", "is", "was", "are", "be", "been",
        "have", "has", "had", "do", "does", "did", "will", "would", "could",
        "should", "may", "might", "can", "this", "that", "these", "those",
        "i", "you", "he", "she", "it", "we", "they", "what", "which", "who",
        "when", "where", "why", "how", "per", "add", "mix", "combine", "use",
    }
)

# Field -> weight. Order here is the order tokens are emitted.
NAME_WEIGHT = 2.0
INGREDIENT_WEIGHT = 1.5
TAG_WEIGHT = 1.2
CUISINE_WEIGHT = 1.3
DIFFICULTY_WEIGHT = 1.1
DIETARY_WEIGHT = 1.2
DESCRIPTION_WEIGHT = 0.8


def tokenize(text: str, weight: float = 1.0) -> List[str]:
    if not text:
        return []
    cleaned = _NON_ALNUM.sub("", str(text).lower())
    tokens = [t for t in cleaned.split() if len(t) > 2 and t not in STOPWORDS]

    repeat = math.ceil(weight)
    if repeat == 1:
        return tokens
    weighted: List[str] = []
    for token in tokens:
        weighted.extend([token] * repeat)
    return weighted


def extract_tokens(recipe: NormalizedRecipe) -> List[str]:
    """Weighted token stream for one recipe document."""
    tokens: List[str] = []
    tokens.extend(tokenize(recipe.name, NAME_WEIGHT))
    for ingredient in recipe.ingredients:
        tokens.extend(tokenize(ingredient, INGREDIENT_WEIGHT))
    for tag in recipe.tags:
        tokens.extend(tokenize(tag, TAG_WEIGHT))
    tokens.extend(tokenize(recipe.cuisine, CUISINE_WEIGHT))
    tokens.extend(tokenize(recipe.difficulty, DIFFICULTY_WEIGHT))
    for tag in recipe.dietary_tags:
        tokens.extend(tokenize(tag, DIETARY_WEIGHT))
    tokens.extend(tokenize(recipe.description, DESCRIPTION_WEIGHT))
    return tokens
