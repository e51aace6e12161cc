from src.recipe_ranker.profile.schema import Context, UserSettings
from src.recipe_ranker.recommendation.explanations import generate_explanation
from src.recipe_ranker.recommendation.personalization import PersonalizationScores


def _scores(ingredient=0.0, preference=0.5, context=0.5, nutrition=0.5, pct=0.0):
    return PersonalizationScores(ingredient, preference, context, nutrition, pct)


def test_default_reason(by_id):
    assert generate_explanation(by_id["r4"], _scores(), Context(), UserSettings()) == ["Recommended for you"]


def test_quick_easy_recipe_with_pantry_match(by_id):
    reasons = generate_explanation(by_id["r2"], _scores(ingredient=0.8, pct=80.0), Context(), UserSettings())
    assert reasons == ["Great ingredient match (80%)", "Easy to make", "Ready in 20 minutes"]


def test_good_pantry_use(by_id):
    reasons = generate_explanation(by_id["r4"], _scores(ingredient=0.5), Context(), UserSettings())
    # 0.5 is above the 0.4 threshold
    assert reasons == ["Good use of your pantry items"]


def test_relevance_beats_context_match(by_id):
    reasons = generate_explanation(by_id["r4"], _scores(context=0.9), Context(meal_type="special"), UserSettings(), 0.7)
    assert reasons == ["Highly relevant to your context"]


def test_context_match_names_situation(by_id):
    assert generate_explanation(
        by_id["r4"], _scores(context=0.8), Context(time_of_day="dinner"), UserSettings()
    ) == ["Perfect match for dinner"]
    assert generate_explanation(by_id["r4"], _scores(context=0.8), Context(), UserSettings()) == [
        "Perfect match for your situation"
    ]


def test_cuisine_preference(by_id):
    settings = UserSettings(preferred_cuisine="Italian")
    assert generate_explanation(by_id["r1"], _scores(preference=0.9), Context(), settings) == [
        "Matches your italian cuisine preference"
    ]
    assert generate_explanation(by_id["r1"], _scores(preference=0.9), Context(), UserSettings()) == [
        "Matches your preferences"
    ]


def test_nutrition_reasons(by_id):
    assert generate_explanation(by_id["r3"], _scores(nutrition=0.8), Context(), UserSettings()) == [
        "Low calorie (200 cal)"
    ]
    assert generate_explanation(by_id["r4"], _scores(nutrition=0.8), Context(), UserSettings()) == [
        "High protein (45g)"
    ]
