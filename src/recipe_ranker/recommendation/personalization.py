"""
personalization.py

Personalization signals layered on top of the IR baseline. Every scorer
starts from a neutral 0.5 and adds / subtracts fixed bonuses:

  preference_score:
    +0.3 recipe cuisine == preferred cuisine (case-insensitive)
    +0.2 recipe already liked
    +0.1 difficulty matches skill (beginner->easy, intermediate->medium,
         advanced->hard, anything else->medium)

  context_score:
    +0.2  time-of-day keyword in name or tags
    +0.15 weather keyword in name or tags
    +0.15 meal-type predicate holds (quick / comfort / healthy / special)

  nutrition_score (0.5 flat when the recipe has no nutrition):
    +0.3 * max(0, 1 - |calories - goal/3| / (goal/3))   when calorie_goal > 0
    +0.1 protein_g > 20
    -0.1 sodium_mg > 0.8 * max_sodium                   when max_sodium > 0

Bonuses are summed first and clamped to [0, 1] once at the end.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import AbstractSet, Callable, Dict, List, Optional, Sequence, Tuple

from src.recipe_ranker.enrichment.schema import NormalizedRecipe
from src.recipe_ranker.profile.schema import Context, UserSettings
from src.recipe_ranker.recommendation.ingredient_matcher import match_ingredients

NEUTRAL = 0.5

# ---------------------------------------------------------------------
# Keyword tables (ordered)
# ---------------------------------------------------------------------
TIME_OF_DAY_KEYWORDS: List[Tuple[str, List[str]]] = [
    ("breakfast", ["breakfast", "pancake", "waffle", "omelette", "cereal", "toast"]),
    ("lunch", ["sandwich", "salad", "soup", "wrap"]),
    ("dinner", ["dinner", "main", "entree"]),
    ("snack", ["snack", "appetizer", "bite"]),
]

WEATHER_KEYWORDS: List[Tuple[str, List[str]]] = [
    ("hot", ["cold", "salad", "chilled", "iced", "frozen"]),
    ("cold", ["warm", "hot", "soup", "stew", "baked", "roasted"]),
    ("rainy", ["comfort", "soup", "stew", "warm"]),
]

SKILL_TO_DIFFICULTY: List[Tuple[str, str]] = [
    ("beginner", "easy"),
    ("intermediate", "medium"),
    ("advanced", "hard"),
]
DEFAULT_PREFERRED_DIFFICULTY = "medium"


def _is_quick(recipe: NormalizedRecipe) -> bool:
    return recipe.total_time <= 30


def _is_comfort(recipe: NormalizedRecipe) -> bool:
    name = recipe.name.lower()
    return any(kw in name for kw in ("comfort", "classic", "traditional"))


def _is_healthy(recipe: NormalizedRecipe) -> bool:
    return "low-calorie" in recipe.dietary_tags or "vegetarian" in recipe.dietary_tags


def _is_special(recipe: NormalizedRecipe) -> bool:
    return recipe.difficulty == "hard" or recipe.total_time > 60


MEAL_TYPE_PREDICATES: List[Tuple[str, Callable[[NormalizedRecipe], bool]]] = [
    ("quick", _is_quick),
    ("comfort", _is_comfort),
    ("healthy", _is_healthy),
    ("special", _is_special),
]


def lookup(table: Sequence[Tuple[str, object]], key: Optional[str], default=None):
    """First entry of an ordered (key, value) table matching key case-insensitively."""
    if not key:
        return default
    key_l = key.lower()
    for k, v in table:
        if k == key_l:
            return v
    return default


def _clamp(score: float) -> float:
    return max(0.0, min(score, 1.0))


def _mentions_any(recipe: NormalizedRecipe, keywords: Sequence[str]) -> bool:
    name = recipe.name.lower()
    tags = " ".join(recipe.tags).lower()
    return any(kw in name or kw in tags for kw in keywords)


# ---------------------------------------------------------------------
# Scorers
# ---------------------------------------------------------------------
def preference_score(
    recipe: NormalizedRecipe,
    settings: UserSettings,
    liked_ids: AbstractSet[str],
) -> float:
    score = NEUTRAL

    if settings.preferred_cuisine and recipe.cuisine == settings.preferred_cuisine.lower():
        score += 0.3

    if recipe.id in liked_ids:
        score += 0.2

    preferred = lookup(SKILL_TO_DIFFICULTY, settings.skill_level, DEFAULT_PREFERRED_DIFFICULTY)
    if recipe.difficulty == preferred:
        score += 0.1

    return min(score, 1.0)


def context_score(recipe: NormalizedRecipe, context: Context) -> float:
    score = NEUTRAL

    if _mentions_any(recipe, lookup(TIME_OF_DAY_KEYWORDS, context.time_of_day, [])):
        score += 0.2

    if _mentions_any(recipe, lookup(WEATHER_KEYWORDS, context.weather, [])):
        score += 0.15

    predicate = lookup(MEAL_TYPE_PREDICATES, context.meal_type)
    if predicate is not None and predicate(recipe):
        score += 0.15

    return min(score, 1.0)


def calorie_fit(calories: float, calorie_goal: float) -> float:
    """1.0 when a meal hits exactly a third of the daily goal, falling to 0."""
    per_meal = calorie_goal / 3
    return max(0.0, 1 - abs(calories - per_meal) / per_meal)


def nutrition_score(recipe: NormalizedRecipe, settings: UserSettings) -> float:
    nutrition = recipe.nutrition
    if nutrition is None:
        return NEUTRAL

    score = NEUTRAL
    if settings.calorie_goal and settings.calorie_goal > 0:
        score += calorie_fit(nutrition.calories, settings.calorie_goal) * 0.3

    if nutrition.protein_g > 20:
        score += 0.1

    if settings.max_sodium and settings.max_sodium > 0 and nutrition.sodium_mg > settings.max_sodium * 0.8:
        score -= 0.1

    return _clamp(score)


@dataclass(frozen=True)
class PersonalizationScores:
    ingredient_score: float
    preference_score: float
    context_score: float
    nutrition_score: float
    ingredient_match_percentage: float

    def as_dict(self) -> Dict[str, float]:
        return {
            "ingredient": self.ingredient_score,
            "preference": self.preference_score,
            "context": self.context_score,
            "nutrition": self.nutrition_score,
        }


def personalization_scores(
    recipe: NormalizedRecipe,
    settings: UserSettings,
    context: Context,
    pantry: Sequence[str],
    liked_ids: AbstractSet[str],
) -> PersonalizationScores:
    ingredient = match_ingredients(recipe, pantry).score
    return PersonalizationScores(
        ingredient_score=ingredient,
        preference_score=preference_score(recipe, settings, liked_ids),
        context_score=context_score(recipe, context),
        nutrition_score=nutrition_score(recipe, settings),
        ingredient_match_percentage=ingredient * 100 if pantry else 0.0,
    )
