# src/recipe_ranker/enrichment/signals.py
from __future__ import annotations

"""
signals.py

Purpose:
    Layer-0 (deterministic) enrichment for recipes.

This module does NOT require any ML assets. It provides keyword based
inference for:
  * difficulty (easy / medium / hard) from step count + total minutes
  * cuisine (first match in an ordered lexicon, default "other")
  * dietary tags (vegetarian, vegan, gluten-free, dairy-free, keto, paleo, low-sodium)

Design rules:
  - Lexicons are ordered lists of (label, keywords); order is priority.
  - Matching is plain lowercase substring search, so "pasta" also hits
    "pastas" and "antipasta".
"""

from typing import List, Sequence, Tuple


def _contains_any(text_l: str, keywords: Sequence[str]) -> bool:
    return any(k in text_l for k in keywords)


# ---------------------------------------------------------------------
# Difficulty
# ---------------------------------------------------------------------
STEP_BUCKETS: Tuple[int, ...] = (5, 10, 15)
TIME_BUCKETS: Tuple[int, ...] = (20, 45, 90)


def _bucket(value: int, upper_bounds: Sequence[int]) -> int:
    for i, bound in enumerate(upper_bounds):
        if value <= bound:
            return i
    return len(upper_bounds)


def calculate_difficulty(n_steps: int, minutes: int) -> str:
    """
    Step bucket 0..3 (<=5, <=10, <=15, >15) plus time bucket 0..3
    (<=20, <=45, <=90, >90). A total of <=1 is easy, <=3 medium, else hard.
    """
    score = _bucket(n_steps, STEP_BUCKETS) + _bucket(minutes, TIME_BUCKETS)
    if score <= 1:
        return "easy"
    if score <= 3:
        return "medium"
    return "hard"


# ---------------------------------------------------------------------
# Cuisine
# ---------------------------------------------------------------------
CUISINE_LEXICON: List[Tuple[str, List[str]]] = [
    ("italian", ["italian", "pasta", "pizza", "lasagna", "risotto", "parmesan"]),
    ("asian", ["asian", "chinese", "japanese", "thai", "korean", "stir-fry", "soy-sauce"]),
    ("mexican", ["mexican", "taco", "burrito", "enchilada", "salsa", "chipotle"]),
    ("american", ["american", "burger", "bbq", "southern"]),
    ("mediterranean", ["mediterranean", "greek", "hummus", "falafel"]),
    ("indian", ["indian", "curry", "masala", "tikka", "biryani"]),
    ("french", ["french", "croissant", "baguette", "ratatouille"]),
]
DEFAULT_CUISINE = "other"


def determine_cuisine(tags: Sequence[str], name: str) -> str:
    text_l = f"{(name or '').lower()} {' '.join(t.lower() for t in tags or [])}"
    for cuisine, kws in CUISINE_LEXICON:
        if _contains_any(text_l, kws):
            return cuisine
    return DEFAULT_CUISINE


# ---------------------------------------------------------------------
# Dietary tags
# ---------------------------------------------------------------------
MEAT_KEYWORDS = [
    "chicken",
    "beef",
    "pork",
    "fish",
    "turkey",
    "lamb",
    "bacon",
    "sausage",
    "meat",
    "ham",
]
DAIRY_KEYWORDS = ["milk", "cheese", "butter", "cream", "yogurt", "dairy"]
GLUTEN_KEYWORDS = ["flour", "bread", "pasta", "wheat", "gluten"]

# Only the explicit tag text is searched for these
TAG_DIET_LEXICON: List[Tuple[str, List[str]]] = [
    ("keto", ["keto", "low-carb"]),
    ("paleo", ["paleo"]),
    ("low-sodium", ["low-sodium"]),
]

DIETARY_TAG_VOCABULARY: Tuple[str, ...] = (
    "vegetarian",
    "vegan",
    "gluten-free",
    "dairy-free",
    "keto",
    "paleo",
    "low-sodium",
)


def infer_dietary_tags(tags: Sequence[str], ingredients: Sequence[str], name: str) -> List[str]:
    tags_l = " ".join(t.lower() for t in tags or [])
    ingredients_l = " ".join(i.lower() for i in ingredients or [])
    text_l = f"{tags_l} {ingredients_l} {(name or '').lower()}"

    has_meat = _contains_any(text_l, MEAT_KEYWORDS)
    has_dairy = _contains_any(text_l, DAIRY_KEYWORDS)
    has_gluten = _contains_any(text_l, GLUTEN_KEYWORDS)

    dietary: List[str] = []
    if not has_meat:
        dietary.append("vegetarian")
        if not has_dairy:
            dietary.append("vegan")
    if not has_gluten:
        dietary.append("gluten-free")
    if not has_dairy:
        dietary.append("dairy-free")

    for value, kws in TAG_DIET_LEXICON:
        if _contains_any(tags_l, kws):
            dietary.append(value)

    return dietary
