"""
recommender.py

Ranks recipes for one user by blending a TF-IDF relevance baseline with
personalization signals, and explains every result.

Pipeline per request (each stage returns new values, nothing is mutated):
  1. Snapshot   : read settings / context / pantry / history once
  2. IR baseline: tfidf_score per recipe from an explicit query, or from a
                  context query built out of the user's situation
  3. Hard filter: drop recipes that fail time / diet / skill / nutrition limits
  4. Personalize: ingredient, preference, context, nutrition scores
  5. Combine    : weighted sum clamped to [0, 1] + explanation
  6. Post filter: drop disliked recipes (always) and, when asked, recipes
                  that use nothing from a non-empty pantry
  7. Sort + truncate

The TF-IDF index is held by the recommender. It is built lazily on first use
and rebuild_index() swaps in a brand new index; there is no incremental
update, so callers must rebuild after changing the corpus.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence

from src.recipe_ranker.config import SORT_OPTIONS, RankerConfig, RankingWeights
from src.recipe_ranker.enrichment.schema import NormalizedRecipe
from src.recipe_ranker.logging_utils import get_logger
from src.recipe_ranker.profile import preferences
from src.recipe_ranker.profile.schema import Context, UserSettings, UserSnapshot
from src.recipe_ranker.profile.store import InMemoryUserStore, UserStore
from src.recipe_ranker.recommendation.explanations import generate_explanation
from src.recipe_ranker.recommendation.filters import apply_hard_filters
from src.recipe_ranker.recommendation.personalization import (
    WEATHER_KEYWORDS,
    PersonalizationScores,
    lookup,
    personalization_scores,
)
from src.recipe_ranker.recommendation.similarity import SimilarRecipe, rank_similar
from src.recipe_ranker.search.catalog import RecipeCatalog
from src.recipe_ranker.search.tfidf_index import TFIDFIndex, build_index

logger = get_logger("recommender")

MODULE_PURPOSE = "Blend IR baseline + personalization into ranked recipes"


@dataclass(frozen=True)
class RecommendationOptions:
    limit: int = 10
    require_ingredient_match: bool = False
    sort_by: str = "score"          # score | time | match
    user_query: Optional[str] = None

    def __post_init__(self) -> None:
        if self.sort_by not in SORT_OPTIONS:
            raise ValueError(f"sort_by must be one of {SORT_OPTIONS}, got {self.sort_by!r}")
        if self.limit < 0:
            raise ValueError(f"limit must be >= 0, got {self.limit}")


@dataclass(frozen=True)
class ScoredRecipe:
    recipe: NormalizedRecipe
    tfidf_score: float
    ingredient_score: float
    preference_score: float
    context_score: float
    nutrition_score: float
    total_score: float
    ingredient_match_percentage: float
    explanation: tuple

    @property
    def id(self) -> str:
        return self.recipe.id

    @property
    def name(self) -> str:
        return self.recipe.name


def _clamp(score: float) -> float:
    return max(0.0, min(score, 1.0))


# ----------------------------------------------------------------------
# IR baseline
# ----------------------------------------------------------------------
def build_context_query(context: Context, settings: UserSettings) -> str:
    """Synthetic query from the user's situation when no search text is given."""
    parts: List[str] = []
    if context.time_of_day:
        parts.append(context.time_of_day)
    if context.meal_type:
        parts.append(context.meal_type)
    parts.extend(lookup(WEATHER_KEYWORDS, context.weather, []))
    if settings.preferred_cuisine:
        parts.append(settings.preferred_cuisine)
    if settings.skill_level:
        parts.append(settings.skill_level)
    parts.extend(settings.dietary_restrictions or ())
    return " ".join(parts)


def ir_baseline(
    index: TFIDFIndex,
    snapshot: UserSnapshot,
    user_query: Optional[str] = None,
    config: Optional[RankerConfig] = None,
) -> Dict[str, float]:
    """tfidf_score per recipe id."""
    config = config or RankerConfig()
    neutral = config.neutral_score
    ids = [doc.id for doc in index.documents]

    if user_query:
        relevance = index.relevance_map(user_query)
        # ids missing from the map (query had no usable tokens) stay neutral
        return {rid: relevance.get(rid, neutral) for rid in ids}

    query = build_context_query(snapshot.context, snapshot.settings)
    if not query.strip():
        return {rid: neutral for rid in ids}

    relevance = index.relevance_map(query)
    blend = config.context_relevance_blend
    out: Dict[str, float] = {}
    for rid in ids:
        rel = relevance.get(rid, 0.0)
        out[rid] = rel * blend + neutral * (1 - blend) if rel > 0 else neutral
    return out


# ----------------------------------------------------------------------
# Combine / sort
# ----------------------------------------------------------------------
def combine_scores(tfidf_score: float, scores: PersonalizationScores, weights: Optional[RankingWeights] = None) -> float:
    w = weights or RankingWeights()
    total = (
        w.tfidf * tfidf_score
        + w.ingredient * scores.ingredient_score
        + w.preference * scores.preference_score
        + w.context * scores.context_score
        + w.nutrition * scores.nutrition_score
    )
    return _clamp(total)


def sort_scored(scored: Iterable[ScoredRecipe], sort_by: str = "score") -> List[ScoredRecipe]:
    if sort_by == "time":
        return sorted(scored, key=lambda s: s.recipe.total_time)
    if sort_by == "match":
        return sorted(scored, key=lambda s: s.ingredient_score, reverse=True)
    return sorted(scored, key=lambda s: s.total_score, reverse=True)


class RecipeRecommender:
    def __init__(
        self,
        corpus: Sequence[NormalizedRecipe],
        store: Optional[UserStore] = None,
        config: Optional[RankerConfig] = None,
        index: Optional[TFIDFIndex] = None,
    ) -> None:
        self.catalog = RecipeCatalog(corpus)
        self.store = store if store is not None else InMemoryUserStore()
        self.config = config or RankerConfig()
        self._index = index

    # ------------------------------------------------------------------
    # Index lifecycle
    # ------------------------------------------------------------------
    @property
    def index(self) -> TFIDFIndex:
        if self._index is None:
            self._index = build_index(self.catalog.all())
        return self._index

    def rebuild_index(self, corpus: Optional[Sequence[NormalizedRecipe]] = None) -> TFIDFIndex:
        """Replace the catalog (optionally) and the whole index."""
        if corpus is not None:
            self.catalog = RecipeCatalog(corpus)
        self._index = build_index(self.catalog.all())
        return self._index

    # ------------------------------------------------------------------
    # Public APIs
    # ------------------------------------------------------------------
    def get_recommendations(
        self,
        options: Optional[RecommendationOptions] = None,
        snapshot: Optional[UserSnapshot] = None,
    ) -> List[ScoredRecipe]:
        """
        Rank recipes for the current user.

        Returns:
            List[ScoredRecipe] ordered per options.sort_by, at most options.limit long
        """
        options = options or RecommendationOptions(limit=self.config.default_limit)
        snap = snapshot if snapshot is not None else preferences.snapshot(self.store)
        index = self.index

        baseline = ir_baseline(index, snap, options.user_query, self.config)

        candidates = apply_hard_filters(index.recipes, snap.settings, self.config.bounds)

        logger.info(
            "Scoring %d of %d recipes (query=%r, pantry=%d, liked=%d, disliked=%d)",
            len(candidates),
            len(index),
            options.user_query,
            *preferences.snapshot_summary(snap),
            extra={
                "invoking_func": "RecipeRecommender.get_recommendations",
                "invoking_purpose": MODULE_PURPOSE,
                "next_step": "Personalize + combine scores",
                "resolution": "",
            },
        )

        liked = snap.liked_ids
        disliked = snap.disliked_ids
        scored: List[ScoredRecipe] = []
        for recipe in candidates:
            if recipe.id in disliked:
                continue
            result = self._score(recipe, baseline.get(recipe.id, self.config.neutral_score), snap, liked)
            if options.require_ingredient_match and snap.pantry and result.ingredient_score <= 0:
                continue
            scored.append(result)

        ranked = sort_scored(scored, options.sort_by)[: options.limit]

        logger.info(
            "Returning %d recommendations",
            len(ranked),
            extra={
                "invoking_func": "RecipeRecommender.get_recommendations",
                "invoking_purpose": MODULE_PURPOSE,
                "next_step": "Return to caller",
                "resolution": "" if ranked else "Relax hard filters or clear disliked history",
            },
        )
        return ranked

    def get_similar_recipes(self, recipe_id: str, limit: int = 5) -> List[SimilarRecipe]:
        """Recipes most like recipe_id (never including it). Unknown id -> []."""
        target = self.catalog.get(recipe_id)
        if target is None:
            logger.debug(
                "Similar recipes requested for unknown id %s",
                recipe_id,
                extra={
                    "invoking_func": "RecipeRecommender.get_similar_recipes",
                    "invoking_purpose": "Find recipes similar to a given one",
                    "next_step": "Return empty list",
                    "resolution": "",
                },
            )
            return []
        return rank_similar(target, self.catalog.all(), limit)

    # ------------------------------------------------------------------
    # Scoring
    # ------------------------------------------------------------------
    def _score(
        self,
        recipe: NormalizedRecipe,
        tfidf_score: float,
        snap: UserSnapshot,
        liked_ids,
    ) -> ScoredRecipe:
        scores = personalization_scores(recipe, snap.settings, snap.context, snap.pantry, liked_ids)
        tfidf_score = _clamp(tfidf_score)
        return ScoredRecipe(
            recipe=recipe,
            tfidf_score=tfidf_score,
            ingredient_score=scores.ingredient_score,
            preference_score=scores.preference_score,
            context_score=scores.context_score,
            nutrition_score=scores.nutrition_score,
            total_score=combine_scores(tfidf_score, scores, self.config.weights),
            ingredient_match_percentage=scores.ingredient_match_percentage,
            explanation=tuple(generate_explanation(recipe, scores, snap.context, snap.settings, tfidf_score)),
        )
