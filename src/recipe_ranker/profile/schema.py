# src/recipe_ranker/profile/schema.py
from __future__ import annotations

"""
schema.py

Purpose:
    Typed views of the user data the recommender reads: settings, situational
    context, pantry and interaction history. The recommender never writes
    these; preferences.py converts store rows into them at request start.
"""

from dataclasses import dataclass, field
from typing import FrozenSet, Tuple


@dataclass(frozen=True)
class UserSettings:
    skill_level: str = ""
    max_cooking_time: int = 0
    preferred_cuisine: str = ""
    dietary_restrictions: Tuple[str, ...] = ()
    calorie_goal: int = 0
    max_sodium: int = 0


@dataclass(frozen=True)
class Context:
    time_of_day: str = ""
    weather: str = ""
    meal_type: str = ""
    servings: int = 4


@dataclass(frozen=True)
class PantryItem:
    id: str
    name: str
    quantity: float = 1.0
    unit: str = ""


@dataclass(frozen=True)
class HistoryEvent:
    recipe_id: str
    action: str          # liked | disliked | cooked | viewed
    timestamp: int       # epoch milliseconds


@dataclass(frozen=True)
class UserSnapshot:
    """Everything one recommendation request reads, captured once."""

    settings: UserSettings = field(default_factory=UserSettings)
    context: Context = field(default_factory=Context)
    pantry: Tuple[str, ...] = ()
    history: Tuple[HistoryEvent, ...] = ()

    @property
    def liked_ids(self) -> FrozenSet[str]:
        return frozenset(h.recipe_id for h in self.history if h.action == "liked")

    @property
    def disliked_ids(self) -> FrozenSet[str]:
        return frozenset(h.recipe_id for h in self.history if h.action == "disliked")
