"""
filters.py

Hard (must-pass) filters applied before scoring. Each filter is a no-op when
its governing setting is absent, zero or outside its valid range, so the
filters are independent and their order does not matter.

  max_cooking_time   0 < v < 1000     keep total_time <= v
  dietary            non-empty        keep recipes carrying ALL restrictions
  skill_level        "beginner"       keep easy / medium
  calorie_goal       0 < v < 10000    keep calories <= v/3 + 300 (or no nutrition)
  max_sodium         0 < v < 100000   keep sodium_mg <= v        (or no nutrition)
"""
from __future__ import annotations

from typing import Callable, List, Sequence, Tuple

from src.recipe_ranker.config import FilterBounds
from src.recipe_ranker.enrichment.schema import NormalizedRecipe
from src.recipe_ranker.profile.schema import UserSettings

RecipePredicate = Callable[[NormalizedRecipe], bool]

BEGINNER_DIFFICULTIES = ("easy", "medium")


def _in_range(value, upper: float) -> bool:
    return bool(value) and 0 < value < upper


def max_time_filter(settings: UserSettings, bounds: FilterBounds) -> RecipePredicate | None:
    limit = settings.max_cooking_time
    if not _in_range(limit, bounds.max_cooking_time_limit):
        return None
    return lambda r: r.total_time <= limit


def dietary_filter(settings: UserSettings, bounds: FilterBounds) -> RecipePredicate | None:
    restrictions = tuple(settings.dietary_restrictions or ())
    if not restrictions:
        return None
    return lambda r: all(tag in r.dietary_tags for tag in restrictions)


def skill_filter(settings: UserSettings, bounds: FilterBounds) -> RecipePredicate | None:
    # Only beginners are restricted; intermediate / advanced see everything
    if settings.skill_level != "beginner":
        return None
    return lambda r: r.difficulty in BEGINNER_DIFFICULTIES


def calorie_filter(settings: UserSettings, bounds: FilterBounds) -> RecipePredicate | None:
    goal = settings.calorie_goal
    if not _in_range(goal, bounds.calorie_goal_limit):
        return None
    ceiling = goal / 3 + bounds.calorie_slack
    return lambda r: r.nutrition is None or r.nutrition.calories <= ceiling


def sodium_filter(settings: UserSettings, bounds: FilterBounds) -> RecipePredicate | None:
    limit = settings.max_sodium
    if not _in_range(limit, bounds.max_sodium_limit):
        return None
    return lambda r: r.nutrition is None or r.nutrition.sodium_mg <= limit


HARD_FILTERS: List[Tuple[str, Callable[[UserSettings, FilterBounds], RecipePredicate | None]]] = [
    ("max_cooking_time", max_time_filter),
    ("dietary_restrictions", dietary_filter),
    ("skill_level", skill_filter),
    ("calorie_goal", calorie_filter),
    ("max_sodium", sodium_filter),
]


def active_filters(settings: UserSettings, bounds: FilterBounds | None = None) -> List[Tuple[str, RecipePredicate]]:
    bounds = bounds or FilterBounds()
    out: List[Tuple[str, RecipePredicate]] = []
    for name, factory in HARD_FILTERS:
        predicate = factory(settings, bounds)
        if predicate is not None:
            out.append((name, predicate))
    return out


def apply_hard_filters(
    recipes: Sequence[NormalizedRecipe],
    settings: UserSettings,
    bounds: FilterBounds | None = None,
) -> List[NormalizedRecipe]:
    """Return a new list with the recipes that pass every active filter."""
    predicates = [p for _, p in active_filters(settings, bounds)]
    return [r for r in recipes if all(p(r) for p in predicates)]
