# src/recipe_ranker/enrichment/schema.py
from __future__ import annotations

"""
schema.py

Purpose:
    Shared dataclasses produced by the enrichment layer.

    These are the "internal contracts" between:
      - the normalizer (RawRecipeRecord -> NormalizedRecipe),
      - the TF-IDF index (tokenizes NormalizedRecipe fields),
      - the recommendation layer (filters, scorers, explanations).

    Objects are frozen: a NormalizedRecipe is built once from its raw record
    and shared read-only by every index document and scored result.
"""

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class Nutrition:
    """Food.com nutrition tuple. *_pdv values are percent daily value."""

    calories: float
    total_fat_pdv: float
    sugar_pdv: float
    sodium_pdv: float
    protein_pdv: float
    saturated_fat_pdv: float
    carbohydrates_pdv: float

    # Absolute amounts derived from the daily-value reference constants
    protein_g: float
    carbs_g: float
    sodium_mg: float


@dataclass(frozen=True)
class NormalizedRecipe:
    id: str
    name: str
    total_time: int                      # minutes, >= 0
    tags: Tuple[str, ...]
    ingredients: Tuple[str, ...]
    steps: Tuple[str, ...]
    nutrition: Optional[Nutrition]
    difficulty: str                      # easy | medium | hard
    cuisine: str                         # lexicon cuisine or "other"
    dietary_tags: Tuple[str, ...]        # unique, in DIETARY_TAG_VOCABULARY order
    description: str = ""
    num_ingredients: int = 0
