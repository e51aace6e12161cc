# src/recipe_ranker/search/catalog.py
from __future__ import annotations

"""
catalog.py

Purpose:
    Plain lookups over the normalized corpus that do not need the TF-IDF
    index: get by id, attribute filters, nutrition ranges, substring text
    search and pantry-style ingredient search.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from src.recipe_ranker.enrichment.schema import NormalizedRecipe
from src.recipe_ranker.enrichment.signals import DEFAULT_CUISINE, DIETARY_TAG_VOCABULARY


@dataclass(frozen=True)
class IngredientSearchHit:
    recipe: NormalizedRecipe
    match_count: int
    match_percentage: float          # share of the user's ingredients found
    coverage_percentage: float       # share of the recipe's ingredients covered
    matched_ingredients: Tuple[str, ...]
    missing_ingredients: int


class RecipeCatalog:
    def __init__(self, corpus: Iterable[NormalizedRecipe]) -> None:
        self._recipes: Dict[str, NormalizedRecipe] = {r.id: r for r in corpus}

    # ------------------------------------------------------------------
    # Basic access
    # ------------------------------------------------------------------
    def get(self, recipe_id: str) -> Optional[NormalizedRecipe]:
        return self._recipes.get(recipe_id)

    def all(self) -> List[NormalizedRecipe]:
        return list(self._recipes.values())

    def count(self) -> int:
        return len(self._recipes)

    def __contains__(self, recipe_id: object) -> bool:
        return recipe_id in self._recipes

    # ------------------------------------------------------------------
    # Attribute filters
    # ------------------------------------------------------------------
    def by_cuisine(self, cuisine: str) -> List[NormalizedRecipe]:
        wanted = cuisine.lower()
        return [r for r in self._recipes.values() if r.cuisine.lower() == wanted]

    def by_difficulty(self, difficulty: str) -> List[NormalizedRecipe]:
        wanted = difficulty.lower()
        return [r for r in self._recipes.values() if r.difficulty == wanted]

    def by_max_time(self, max_minutes: int) -> List[NormalizedRecipe]:
        return [r for r in self._recipes.values() if r.total_time <= max_minutes]

    def by_dietary_tag(self, dietary_tag: str) -> List[NormalizedRecipe]:
        wanted = dietary_tag.lower()
        return [r for r in self._recipes.values() if wanted in r.dietary_tags]

    def by_nutrition(
        self,
        *,
        max_calories: Optional[float] = None,
        min_protein: Optional[float] = None,
        max_sodium: Optional[float] = None,
        max_carbs: Optional[float] = None,
    ) -> List[NormalizedRecipe]:
        """Recipes inside every given bound. Recipes without nutrition never match."""
        out: List[NormalizedRecipe] = []
        for recipe in self._recipes.values():
            n = recipe.nutrition
            if n is None:
                continue
            if max_calories and n.calories > max_calories:
                continue
            if min_protein and n.protein_g < min_protein:
                continue
            if max_sodium and n.sodium_mg > max_sodium:
                continue
            if max_carbs and n.carbs_g > max_carbs:
                continue
            out.append(recipe)
        return out

    def by_filters(
        self,
        *,
        cuisine: Optional[str] = None,
        difficulty: Optional[str] = None,
        max_time: Optional[int] = None,
        dietary: Optional[str] = None,
    ) -> List[NormalizedRecipe]:
        results = self.all()
        if cuisine:
            results = [r for r in results if r.cuisine == cuisine]
        if difficulty:
            results = [r for r in results if r.difficulty == difficulty]
        if max_time:
            results = [r for r in results if r.total_time <= max_time]
        if dietary:
            results = [r for r in results if dietary in r.dietary_tags]
        return results

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------
    def search_text(self, query: str) -> List[NormalizedRecipe]:
        """Case-insensitive substring search over name, description and tags."""
        if not query or not query.strip():
            return []
        q = query.lower()
        out: List[NormalizedRecipe] = []
        for recipe in self._recipes.values():
            haystacks = (recipe.name.lower(), recipe.description.lower(), " ".join(recipe.tags).lower())
            if any(q in h for h in haystacks):
                out.append(recipe)
        return out

    def search_by_ingredients(self, ingredients: List[str], exact_match: bool = False) -> List[IngredientSearchHit]:
        """
        Partial substring match of user ingredients against recipe ingredients.

        exact_match=True keeps recipes containing every user ingredient;
        otherwise at least one must match. Sorted by match percentage desc,
        then by fewer missing ingredients.
        """
        if not ingredients:
            return []
        wanted = [i.lower().strip() for i in ingredients]

        hits: List[IngredientSearchHit] = []
        for recipe in self._recipes.values():
            recipe_ings = [i.lower() for i in recipe.ingredients]
            matched = [
                w for w in wanted
                if any(w in ri or ri in w for ri in recipe_ings)
            ]
            match_count = len(matched)
            hits.append(
                IngredientSearchHit(
                    recipe=recipe,
                    match_count=match_count,
                    match_percentage=match_count / len(wanted) * 100,
                    coverage_percentage=(match_count / len(recipe_ings) * 100) if recipe_ings else 0.0,
                    matched_ingredients=tuple(matched),
                    missing_ingredients=len(recipe_ings) - match_count,
                )
            )

        if exact_match:
            hits = [h for h in hits if h.match_count == len(wanted)]
        else:
            hits = [h for h in hits if h.match_count > 0]

        hits.sort(key=lambda h: (-h.match_percentage, h.missing_ingredients))
        return hits

    # ------------------------------------------------------------------
    # Facets
    # ------------------------------------------------------------------
    def available_cuisines(self) -> List[str]:
        return sorted({r.cuisine for r in self._recipes.values() if r.cuisine and r.cuisine != DEFAULT_CUISINE})

    @staticmethod
    def available_dietary_tags() -> List[str]:
        return list(DIETARY_TAG_VOCABULARY)
