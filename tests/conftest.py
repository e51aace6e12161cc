from __future__ import annotations

from typing import List, Optional, Sequence

import pytest

from src.recipe_ranker.datasets.base import RawRecipeRecord
from src.recipe_ranker.enrichment.normalizer import normalize_recipe
from src.recipe_ranker.enrichment.schema import NormalizedRecipe
from src.recipe_ranker.profile.schema import Context, HistoryEvent, UserSettings, UserSnapshot


def make_recipe(
    recipe_id: str,
    name: str,
    minutes: int = 30,
    tags: Sequence[str] = (),
    ingredients: Sequence[str] = (),
    n_steps: int = 5,
    nutrition: Optional[Sequence[float]] = None,
    description: str = "",
) -> NormalizedRecipe:
    raw = RawRecipeRecord(
        id=recipe_id,
        name=name,
        minutes=minutes,
        tags=str(list(tags)),
        ingredients=str(list(ingredients)),
        steps="[]",
        nutrition=str(list(nutrition)) if nutrition is not None else "not a list",
        n_steps=n_steps,
        description=description,
    )
    return normalize_recipe(raw)


@pytest.fixture
def corpus() -> List[NormalizedRecipe]:
    return [
        # medium, italian, gluten-free
        make_recipe(
            "r1",
            "Classic Spaghetti Carbonara",
            minutes=25,
            tags=["italian", "dinner", "main-dish"],
            ingredients=["spaghetti", "bacon", "parmesan cheese", "eggs"],
            n_steps=6,
            nutrition=[650, 40, 5, 30, 60, 50, 20],
        ),
        # easy, asian, gluten-free + dairy-free, 35 g protein, 920 mg sodium
        make_recipe(
            "r2",
            "Chicken Fried Rice",
            minutes=20,
            tags=["asian", "quick", "lunch"],
            ingredients=["chicken", "rice", "soy sauce", "garlic"],
            n_steps=4,
            nutrition=[450, 20, 10, 40, 70, 15, 20],
        ),
        # medium, other, vegetarian + vegan + gluten-free + dairy-free + low-sodium
        make_recipe(
            "r3",
            "Hearty Vegetable Soup",
            minutes=60,
            tags=["soup", "winter", "low-sodium"],
            ingredients=["carrot", "celery", "potato", "vegetable broth"],
            n_steps=8,
            nutrition=[200, 5, 10, 10, 10, 2, 10],
        ),
        # hard, other, gluten-free, 1380 mg sodium
        make_recipe(
            "r4",
            "Beef Wellington",
            minutes=150,
            tags=["british", "dinner", "holiday"],
            ingredients=["beef tenderloin", "puff pastry", "mushrooms", "butter"],
            n_steps=20,
            nutrition=[900, 80, 5, 60, 90, 100, 15],
        ),
        # easy, mediterranean, vegetarian + gluten-free, no nutrition
        make_recipe(
            "r5",
            "Greek Salad",
            minutes=10,
            tags=["mediterranean", "salad", "lunch", "vegetarian"],
            ingredients=["cucumber", "tomato", "feta cheese", "olive oil"],
            n_steps=3,
        ),
    ]


@pytest.fixture
def by_id(corpus):
    return {r.id: r for r in corpus}


def snapshot(
    settings: Optional[UserSettings] = None,
    context: Optional[Context] = None,
    pantry: Sequence[str] = (),
    liked: Sequence[str] = (),
    disliked: Sequence[str] = (),
) -> UserSnapshot:
    history = [HistoryEvent(rid, "liked", 1000 + i) for i, rid in enumerate(liked)]
    history += [HistoryEvent(rid, "disliked", 2000 + i) for i, rid in enumerate(disliked)]
    return UserSnapshot(
        settings=settings or UserSettings(),
        context=context or Context(),
        pantry=tuple(pantry),
        history=tuple(history),
    )
