from src.recipe_ranker.search.catalog import RecipeCatalog


def _ids(recipes):
    return [r.id for r in recipes]


def test_basic_access(corpus):
    catalog = RecipeCatalog(corpus)
    assert catalog.count() == 5
    assert "r1" in catalog
    assert "nope" not in catalog
    assert catalog.get("r3").name == "Hearty Vegetable Soup"
    assert catalog.get("nope") is None


def test_attribute_filters(corpus):
    catalog = RecipeCatalog(corpus)
    assert _ids(catalog.by_cuisine("Italian")) == ["r1"]
    assert _ids(catalog.by_difficulty("easy")) == ["r2", "r5"]
    assert _ids(catalog.by_max_time(25)) == ["r1", "r2", "r5"]
    assert _ids(catalog.by_dietary_tag("Vegan")) == ["r3"]
    assert _ids(catalog.by_filters(cuisine="other", difficulty="medium")) == ["r3"]
    assert _ids(catalog.by_filters()) == ["r1", "r2", "r3", "r4", "r5"]


def test_by_nutrition_excludes_unknown(corpus):
    catalog = RecipeCatalog(corpus)
    assert _ids(catalog.by_nutrition(max_calories=500)) == ["r2", "r3"]
    assert _ids(catalog.by_nutrition(min_protein=30)) == ["r1", "r2", "r4"]
    assert _ids(catalog.by_nutrition(max_sodium=700)) == ["r1", "r3"]
    assert _ids(catalog.by_nutrition(max_carbs=50)) == ["r3", "r4"]
    assert "r5" not in _ids(catalog.by_nutrition())


def test_search_text(corpus):
    catalog = RecipeCatalog(corpus)
    assert _ids(catalog.search_text("salad")) == ["r5"]
    assert _ids(catalog.search_text("DINNER")) == ["r1", "r4"]
    assert catalog.search_text("  ") == []


def test_search_by_ingredients(corpus):
    catalog = RecipeCatalog(corpus)
    hits = catalog.search_by_ingredients(["cheese"])
    assert [h.recipe.id for h in hits] == ["r1", "r5"]
    assert hits[0].match_percentage == 100.0
    assert hits[0].coverage_percentage == 25.0
    assert hits[0].missing_ingredients == 3

    partial = catalog.search_by_ingredients(["cheese", "bacon"])
    assert [(h.recipe.id, h.match_percentage) for h in partial] == [("r1", 100.0), ("r5", 50.0)]

    exact = catalog.search_by_ingredients(["cheese", "bacon"], exact_match=True)
    assert [h.recipe.id for h in exact] == ["r1"]
    assert exact[0].matched_ingredients == ("cheese", "bacon")

    assert catalog.search_by_ingredients([]) == []


def test_facets(corpus):
    catalog = RecipeCatalog(corpus)
    assert catalog.available_cuisines() == ["asian", "italian", "mediterranean"]
    assert "vegan" in RecipeCatalog.available_dietary_tags()
