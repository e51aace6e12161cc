import pytest

from src.recipe_ranker.profile.schema import Context, UserSettings
from src.recipe_ranker.recommendation.personalization import (
    calorie_fit,
    context_score,
    lookup,
    nutrition_score,
    personalization_scores,
    preference_score,
    TIME_OF_DAY_KEYWORDS,
)
from tests.conftest import make_recipe


# ---------------------------------------------------------------------
# preference
# ---------------------------------------------------------------------
def test_preference_bonuses_clamp_at_one(by_id):
    settings = UserSettings(skill_level="intermediate", preferred_cuisine="Italian")
    assert preference_score(by_id["r1"], settings, {"r1"}) == 1.0


def test_preference_skill_match(by_id):
    assert preference_score(by_id["r2"], UserSettings(skill_level="beginner"), set()) == pytest.approx(0.6)
    assert preference_score(by_id["r4"], UserSettings(skill_level="advanced"), set()) == pytest.approx(0.6)


def test_preference_unknown_skill_prefers_medium(by_id):
    assert preference_score(by_id["r1"], UserSettings(), set()) == pytest.approx(0.6)
    assert preference_score(by_id["r4"], UserSettings(skill_level="expert"), set()) == pytest.approx(0.5)


# ---------------------------------------------------------------------
# context
# ---------------------------------------------------------------------
def test_context_weather_and_time_of_day(by_id):
    assert context_score(by_id["r3"], Context(weather="cold")) == pytest.approx(0.65)
    assert context_score(by_id["r3"], Context(weather="Cold", time_of_day="lunch")) == pytest.approx(0.85)
    assert context_score(by_id["r5"], Context(weather="hot")) == pytest.approx(0.65)


@pytest.mark.parametrize(
    "recipe_id, meal_type",
    [("r1", "comfort"), ("r1", "quick"), ("r4", "special"), ("r5", "healthy")],
)
def test_context_meal_type_predicates(by_id, recipe_id, meal_type):
    assert context_score(by_id[recipe_id], Context(meal_type=meal_type)) == pytest.approx(0.65)


def test_context_unknown_values_are_neutral(by_id):
    ctx = Context(time_of_day="midnight", weather="foggy", meal_type="fancy")
    assert context_score(by_id["r1"], ctx) == 0.5


def test_context_all_bonuses_clamp():
    recipe = make_recipe("c1", "Classic Dinner Stew", minutes=20, tags=["main"])
    ctx = Context(time_of_day="dinner", weather="rainy", meal_type="comfort")
    assert context_score(recipe, ctx) == pytest.approx(1.0)


# ---------------------------------------------------------------------
# nutrition
# ---------------------------------------------------------------------
def test_calorie_fit_peaks_at_a_third_of_goal():
    assert calorie_fit(600, 1800) == pytest.approx(1.0)
    assert calorie_fit(600, 2000) == pytest.approx(0.9)
    assert calorie_fit(5000, 2000) == 0.0


def test_nutrition_calorie_term():
    recipe = make_recipe("n1", "Bowl", nutrition=[600, 0, 0, 0, 0, 0, 0])
    assert nutrition_score(recipe, UserSettings(calorie_goal=2000)) == pytest.approx(0.77)


def test_nutrition_protein_and_sodium(by_id):
    # 35 g protein (+0.1), 920 mg sodium > 800 (-0.1)
    assert nutrition_score(by_id["r2"], UserSettings(max_sodium=1000)) == pytest.approx(0.5)
    assert nutrition_score(by_id["r2"], UserSettings()) == pytest.approx(0.6)


def test_nutrition_missing_is_neutral(by_id):
    assert nutrition_score(by_id["r5"], UserSettings(calorie_goal=2000, max_sodium=100)) == 0.5


# ---------------------------------------------------------------------
# bundle
# ---------------------------------------------------------------------
def test_personalization_scores_without_pantry(by_id):
    scores = personalization_scores(by_id["r2"], UserSettings(), Context(), [], frozenset())
    assert scores.ingredient_score == 0.5
    assert scores.ingredient_match_percentage == 0.0
    assert set(scores.as_dict()) == {"ingredient", "preference", "context", "nutrition"}


def test_personalization_scores_match_percentage(by_id):
    scores = personalization_scores(by_id["r2"], UserSettings(), Context(), ["chicken"], frozenset())
    assert scores.ingredient_score == pytest.approx(1.0)
    assert scores.ingredient_match_percentage == pytest.approx(100.0)


def test_lookup_is_case_insensitive():
    assert lookup(TIME_OF_DAY_KEYWORDS, "BREAKFAST")[0] == "breakfast"
    assert lookup(TIME_OF_DAY_KEYWORDS, "", "fallback") == "fallback"
