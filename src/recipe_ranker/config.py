"""
config.py

Purpose:
    1. Provide get_supabase_client() that creates a Supabase Python client
       from environment variables (used by SupabaseUserStore).
    2. Hold the ranking knobs (blend weights, hard-filter bounds, neutral
       scores) as dataclasses so every scorer reads the same numbers.

Usage:
    from src.recipe_ranker.config import RankerConfig, get_supabase_client
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Dict, Tuple

from dotenv import load_dotenv
from supabase import Client, create_client

load_dotenv()  # loads .env


def get_supabase_client() -> Client:
    """Create a Supabase client using env vars."""
    url = os.environ["SUPABASE_URL"]
    # service role for backfills / scripts, anon key for app-side reads with RLS
    key = os.environ.get("SUPABASE_SERVICE_ROLE_KEY") or os.environ["SUPABASE_ANON_KEY"]
    return create_client(url, key)


@dataclass(frozen=True)
class RankingWeights:
    """Linear blend of the IR baseline and the personalization signals."""

    tfidf: float = 0.30
    ingredient: float = 0.25
    preference: float = 0.20
    context: float = 0.15
    nutrition: float = 0.10


@dataclass(frozen=True)
class FilterBounds:
    """Valid ranges for the hard filters. Outside the range a filter is a no-op."""

    max_cooking_time_limit: float = 1000
    calorie_goal_limit: float = 10000
    max_sodium_limit: float = 100000
    # A meal may exceed calorie_goal / 3 by this many calories
    calorie_slack: float = 300


@dataclass(frozen=True)
class RankerConfig:
    weights: RankingWeights = field(default_factory=RankingWeights)
    bounds: FilterBounds = field(default_factory=FilterBounds)
    neutral_score: float = 0.5
    # tfidf = relevance * blend + neutral * (1 - blend) for context queries
    context_relevance_blend: float = 0.6
    default_limit: int = 10
    max_recipes: int = int(os.environ.get("RECIPE_RANKER_MAX_RECIPES", "1000"))


# Seed values for a fresh user store
DEFAULT_SETTINGS: Dict[str, str] = {
    "skill_level": "intermediate",
    "max_cooking_time": "60",
    "preferred_cuisine": "",
    "dietary_restrictions": "[]",
    "calorie_goal": "2000",
    "max_sodium": "2300",
}

DEFAULT_CONTEXT: Dict[str, str] = {
    "time_of_day": "",
    "weather": "",
    "servings": "4",
    "meal_type": "",
}

SKILL_LEVELS: Tuple[str, ...] = ("beginner", "intermediate", "advanced")
HISTORY_ACTIONS: Tuple[str, ...] = ("liked", "disliked", "cooked", "viewed")
SORT_OPTIONS: Tuple[str, ...] = ("score", "time", "match")
