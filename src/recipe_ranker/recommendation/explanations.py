"""
explanations.py

Rule-based "why was this recommended" strings. Rules are checked in a fixed
order and each adds at most one reason, except nutrition which can add two.
The first pair (IR relevance / context match) is either-or.
"""
from __future__ import annotations

from typing import List

from src.recipe_ranker.enrichment.schema import NormalizedRecipe
from src.recipe_ranker.profile.schema import Context, UserSettings
from src.recipe_ranker.recommendation.personalization import PersonalizationScores

DEFAULT_REASON = "Recommended for you"


def generate_explanation(
    recipe: NormalizedRecipe,
    scores: PersonalizationScores,
    context: Context,
    settings: UserSettings,
    tfidf_score: float = 0.0,
) -> List[str]:
    reasons: List[str] = []

    if tfidf_score > 0.6:
        reasons.append("Highly relevant to your context")
    elif scores.context_score > 0.7:
        situation = context.meal_type or context.time_of_day or "your situation"
        reasons.append(f"Perfect match for {situation}")

    if scores.ingredient_score > 0.7:
        reasons.append(f"Great ingredient match ({scores.ingredient_match_percentage:.0f}%)")
    elif scores.ingredient_score > 0.4:
        reasons.append("Good use of your pantry items")

    if scores.preference_score > 0.7:
        if settings.preferred_cuisine and recipe.cuisine == settings.preferred_cuisine.lower():
            reasons.append(f"Matches your {recipe.cuisine} cuisine preference")
        else:
            reasons.append("Matches your preferences")

    nutrition = recipe.nutrition
    if scores.nutrition_score > 0.7 and nutrition is not None:
        if nutrition.calories < 400:
            reasons.append(f"Low calorie ({nutrition.calories:.0f} cal)")
        if nutrition.protein_g > 25:
            reasons.append(f"High protein ({nutrition.protein_g:.0f}g)")

    if recipe.difficulty == "easy":
        reasons.append("Easy to make")

    if recipe.total_time <= 20:
        reasons.append(f"Ready in {recipe.total_time} minutes")

    return reasons or [DEFAULT_REASON]
