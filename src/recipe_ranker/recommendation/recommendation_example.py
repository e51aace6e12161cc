"""
recommendation_example.py

Example usage of the RecipeRecommender against a Food.com style CSV.

Run:
  python -m src.recipe_ranker.recommendation.recommendation_example \
      --csv data/RAW_recipes.csv --pantry chicken rice garlic \
      --time-of-day dinner --weather cold --cuisine italian

User data lives in an in-memory store seeded with defaults, so nothing is
persisted between runs.
"""
from __future__ import annotations

import argparse

from src.recipe_ranker.config import SKILL_LEVELS, RankerConfig
from src.recipe_ranker.datasets.food_com import load_food_com_csv
from src.recipe_ranker.enrichment.normalizer import normalize_corpus
from src.recipe_ranker.logging_utils import LOG_RUN_ID, log_error, log_info
from src.recipe_ranker.profile import preferences
from src.recipe_ranker.profile.store import InMemoryUserStore
from src.recipe_ranker.recommendation.recommender import RecipeRecommender, RecommendationOptions

MODULE_PURPOSE = "Command line demo of the recipe recommender"


def main() -> None:
    ap = argparse.ArgumentParser()
    ap.add_argument("--csv", required=True, help="Path to RAW_recipes.csv style file")
    ap.add_argument("--max-recipes", type=int, default=RankerConfig().max_recipes)
    ap.add_argument("--limit", type=int, default=10)
    ap.add_argument("--sort-by", choices=["score", "time", "match"], default="score")
    ap.add_argument("--query", default=None, help="Explicit search text")
    ap.add_argument("--pantry", nargs="*", default=[])
    ap.add_argument("--require-match", action="store_true")
    ap.add_argument("--skill", choices=SKILL_LEVELS, default=None)
    ap.add_argument("--cuisine", default=None)
    ap.add_argument("--diet", nargs="*", default=None)
    ap.add_argument("--max-time", type=int, default=None)
    ap.add_argument("--time-of-day", default=None)
    ap.add_argument("--weather", default=None)
    ap.add_argument("--meal-type", default=None)
    ap.add_argument("--similar-to", default=None, help="Print recipes similar to this id instead")
    args = ap.parse_args()

    log_info(
        f"Run {LOG_RUN_ID}: loading {args.csv}",
        invoking_function="main",
        invoking_purpose=MODULE_PURPOSE,
        next_step="Normalize corpus",
    )
    try:
        raw = load_food_com_csv(args.csv, max_recipes=args.max_recipes)
    except (OSError, ValueError) as exc:
        log_error(
            f"Could not read {args.csv}",
            invoking_function="main",
            invoking_purpose=MODULE_PURPOSE,
            resolution="Check the CSV path and format",
            exc=exc,
        )
        raise SystemExit(1) from exc

    store = InMemoryUserStore()
    if args.pantry:
        preferences.add_pantry_items(store, args.pantry)
    if args.skill:
        preferences.set_skill_level(store, args.skill)
    if args.cuisine:
        preferences.set_preferred_cuisine(store, args.cuisine)
    if args.diet is not None:
        preferences.set_dietary_restrictions(store, args.diet)
    if args.max_time is not None:
        preferences.set_max_cooking_time(store, args.max_time)
    if args.time_of_day:
        preferences.set_context_value(store, "time_of_day", args.time_of_day)
    if args.weather:
        preferences.set_context_value(store, "weather", args.weather)
    if args.meal_type:
        preferences.set_context_value(store, "meal_type", args.meal_type)

    rec = RecipeRecommender(normalize_corpus(raw), store=store)

    if args.similar_to:
        for i, s in enumerate(rec.get_similar_recipes(args.similar_to, limit=args.limit), start=1):
            print(f"{i:02d}. {s.recipe.name}  similarity={s.similarity_score:.2f}")
        return

    out = rec.get_recommendations(
        RecommendationOptions(
            limit=args.limit,
            require_ingredient_match=args.require_match,
            sort_by=args.sort_by,
            user_query=args.query,
        )
    )
    for i, r in enumerate(out, start=1):
        print(f"{i:02d}. {r.name}  score={r.total_score:.3f}  ({r.recipe.total_time} min, {r.recipe.cuisine})")
        for reason in r.explanation:
            print("    -", reason)


if __name__ == "__main__":
    main()
