# src/recipe_ranker/enrichment/normalizer.py
from __future__ import annotations

"""
normalizer.py

Purpose:
    Take a RawRecipeRecord and produce a NormalizedRecipe that is ready for:
      - the TF-IDF index (name / ingredients / tags / cuisine / difficulty / diet)
      - hard filters and personalization scorers (time, nutrition, diet tags)

Steps:
  1. Fail-soft parsing of list fields + nutrition (cleaning.py)
  2. Numeric coercion of minutes / n_steps / n_ingredients
  3. Layer-0 signals: difficulty, cuisine, dietary tags (signals.py)

It never raises on malformed fields; a broken field simply becomes empty.
"""

from typing import Dict, Iterable, List, Optional

from src.recipe_ranker.datasets.base import RawRecipeRecord
from src.recipe_ranker.enrichment.cleaning import coerce_int, parse_list_field, parse_nutrition
from src.recipe_ranker.enrichment.schema import NormalizedRecipe
from src.recipe_ranker.enrichment.signals import (
    calculate_difficulty,
    determine_cuisine,
    infer_dietary_tags,
)
from src.recipe_ranker.logging_utils import get_logger

logger = get_logger("normalizer")

MODULE_PURPOSE = "Normalize raw recipe rows into scorable NormalizedRecipe objects"


def normalize_recipe(raw: RawRecipeRecord, fallback_id: Optional[str] = None) -> NormalizedRecipe:
    """Main entry: RawRecipeRecord -> NormalizedRecipe."""
    tags = parse_list_field(raw.tags)
    ingredients = parse_list_field(raw.ingredients)
    steps = parse_list_field(raw.steps)
    nutrition = parse_nutrition(raw.nutrition)

    name = str(raw.name or "")
    minutes = max(0, coerce_int(raw.minutes))
    n_steps = max(0, coerce_int(raw.n_steps))

    recipe_id = str(raw.id or "").strip() or (fallback_id or "")

    return NormalizedRecipe(
        id=recipe_id,
        name=name,
        total_time=minutes,
        tags=tuple(tags),
        ingredients=tuple(ingredients),
        steps=tuple(steps),
        nutrition=nutrition,
        difficulty=calculate_difficulty(n_steps, minutes),
        cuisine=determine_cuisine(tags, name),
        dietary_tags=tuple(infer_dietary_tags(tags, ingredients, name)),
        description=str(raw.description or ""),
        num_ingredients=len(ingredients) or coerce_int(raw.n_ingredients),
    )


def normalize_corpus(records: Iterable[RawRecipeRecord]) -> List[NormalizedRecipe]:
    """
    Normalize a batch of raw records, preserving input order.

    Records without an id get "recipe_<idx>". If two records share an id the
    later one replaces the earlier one in place (same as a keyed store).
    """
    by_id: Dict[str, NormalizedRecipe] = {}
    for idx, raw in enumerate(records):
        recipe = normalize_recipe(raw, fallback_id=f"recipe_{idx}")
        if recipe.id in by_id:
            logger.warning(
                "Duplicate recipe id %s; keeping the later record",
                recipe.id,
                extra={
                    "invoking_func": "normalize_corpus",
                    "invoking_purpose": MODULE_PURPOSE,
                    "next_step": "Replace earlier record",
                    "resolution": "De-duplicate ids in the source export",
                },
            )
        by_id[recipe.id] = recipe

    logger.info(
        "Normalized %d recipes",
        len(by_id),
        extra={
            "invoking_func": "normalize_corpus",
            "invoking_purpose": MODULE_PURPOSE,
            "next_step": "Build TF-IDF index",
            "resolution": "",
        },
    )
    return list(by_id.values())
