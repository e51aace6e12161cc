"""
preferences.py

Typed reads and writes of user data over a UserStore.

Reads convert string rows into UserSettings / Context / HistoryEvent:
  - max_cooking_time, calorie_goal, max_sodium: int, 0 when missing or bad
  - dietary_restrictions: JSON list string, () when missing or bad
  - servings: int, 4 when missing or bad

snapshot(store) is what the recommender calls once per request.
"""
from __future__ import annotations

import json
import re
import time
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from src.recipe_ranker.config import HISTORY_ACTIONS, SKILL_LEVELS
from src.recipe_ranker.enrichment.cleaning import coerce_float, coerce_int, parse_list_field
from src.recipe_ranker.logging_utils import get_logger
from src.recipe_ranker.profile.schema import (
    Context,
    HistoryEvent,
    PantryItem,
    UserSettings,
    UserSnapshot,
)
from src.recipe_ranker.profile.store import UserStore

logger = get_logger("preferences")

DEFAULT_SERVINGS = 4
_INT_SETTINGS = ("max_cooking_time", "calorie_goal", "max_sodium")


# ----------------------------------------------------------------------
# Settings
# ----------------------------------------------------------------------
def _value(table: dict, key: str) -> str:
    row = table.get(key) or {}
    value = row.get("value")
    return "" if value is None else str(value)


def get_user_settings(store: UserStore) -> UserSettings:
    table = store.get_table("settings")
    return UserSettings(
        skill_level=_value(table, "skill_level"),
        max_cooking_time=coerce_int(_value(table, "max_cooking_time")),
        preferred_cuisine=_value(table, "preferred_cuisine"),
        dietary_restrictions=tuple(parse_list_field(_value(table, "dietary_restrictions"))),
        calorie_goal=coerce_int(_value(table, "calorie_goal")),
        max_sodium=coerce_int(_value(table, "max_sodium")),
    )


def _set_setting(store: UserStore, key: str, value: str) -> None:
    store.set_row("settings", key, {"key": key, "value": value})


def set_skill_level(store: UserStore, level: str) -> None:
    if level not in SKILL_LEVELS:
        raise ValueError(f"Unknown skill level {level!r}; expected one of {SKILL_LEVELS}")
    _set_setting(store, "skill_level", level)


def set_max_cooking_time(store: UserStore, minutes: int) -> None:
    _set_setting(store, "max_cooking_time", str(minutes))


def set_preferred_cuisine(store: UserStore, cuisine: str) -> None:
    _set_setting(store, "preferred_cuisine", cuisine)


def set_dietary_restrictions(store: UserStore, restrictions: Sequence[str]) -> None:
    _set_setting(store, "dietary_restrictions", json.dumps(list(restrictions)))


def add_dietary_restriction(store: UserStore, restriction: str) -> None:
    current = list(get_user_settings(store).dietary_restrictions)
    if restriction not in current:
        set_dietary_restrictions(store, current + [restriction])


def remove_dietary_restriction(store: UserStore, restriction: str) -> None:
    current = get_user_settings(store).dietary_restrictions
    set_dietary_restrictions(store, [r for r in current if r != restriction])


def set_calorie_goal(store: UserStore, calories: int) -> None:
    _set_setting(store, "calorie_goal", str(calories))


def set_max_sodium(store: UserStore, mg: int) -> None:
    _set_setting(store, "max_sodium", str(mg))


# ----------------------------------------------------------------------
# Context
# ----------------------------------------------------------------------
def get_context(store: UserStore) -> Context:
    table = store.get_table("context")
    return Context(
        time_of_day=_value(table, "time_of_day"),
        weather=_value(table, "weather"),
        meal_type=_value(table, "meal_type"),
        servings=coerce_int(_value(table, "servings"), default=DEFAULT_SERVINGS) or DEFAULT_SERVINGS,
    )


def set_context_value(store: UserStore, key: str, value: Union[str, int]) -> None:
    # time_of_day: breakfast/lunch/dinner/snack, weather: hot/cold/rainy,
    # meal_type: quick/comfort/healthy/special, servings: int
    store.set_row("context", key, {"key": key, "value": str(value)})


# ----------------------------------------------------------------------
# Pantry
# ----------------------------------------------------------------------
def _pantry_id(name: str) -> str:
    return re.sub(r"\s+", "_", name.strip().lower())


def get_pantry(store: UserStore) -> List[PantryItem]:
    items: List[PantryItem] = []
    for row_id, row in store.get_table("pantry").items():
        items.append(
            PantryItem(
                id=row_id,
                name=str(row.get("name") or ""),
                quantity=coerce_float(row.get("quantity"), default=1.0) or 1.0,
                unit=str(row.get("unit") or ""),
            )
        )
    return items


def get_pantry_names(store: UserStore) -> List[str]:
    return [item.name for item in get_pantry(store) if item.name]


def add_pantry_item(store: UserStore, name: str, quantity: float = 1, unit: str = "") -> str:
    item_id = _pantry_id(name)
    store.set_row(
        "pantry",
        item_id,
        {"name": name, "quantity": coerce_float(quantity, default=1.0) or 1.0, "unit": unit or ""},
    )
    return item_id


def add_pantry_items(store: UserStore, items: Iterable[Union[str, dict]]) -> List[str]:
    ids: List[str] = []
    for item in items:
        if isinstance(item, str):
            ids.append(add_pantry_item(store, item))
        elif isinstance(item, dict) and item.get("name"):
            ids.append(add_pantry_item(store, item["name"], item.get("quantity") or 1, item.get("unit") or ""))
    return ids


def update_pantry_item(store: UserStore, item_id: str, quantity: float) -> None:
    row = store.get_row("pantry", item_id)
    if row is not None:
        store.set_row("pantry", item_id, {**row, "quantity": coerce_float(quantity, default=1.0) or 1.0})


def remove_pantry_item(store: UserStore, item_id: str) -> None:
    store.del_row("pantry", item_id)


def clear_pantry(store: UserStore) -> None:
    for item_id in list(store.get_table("pantry")):
        store.del_row("pantry", item_id)


def has_ingredient(store: UserStore, ingredient: str) -> bool:
    wanted = ingredient.lower()
    return any(wanted in name.lower() for name in get_pantry_names(store))


# ----------------------------------------------------------------------
# History
# ----------------------------------------------------------------------
def get_history(store: UserStore) -> List[HistoryEvent]:
    """All history events, newest first."""
    events: List[HistoryEvent] = []
    for row in store.get_table("history").values():
        recipe_id = row.get("recipe_id")
        if recipe_id is None:
            continue
        events.append(
            HistoryEvent(
                recipe_id=str(recipe_id),
                action=str(row.get("action") or ""),
                timestamp=coerce_int(row.get("timestamp")),
            )
        )
    events.sort(key=lambda e: e.timestamp, reverse=True)
    return events


def record_action(store: UserStore, recipe_id: str, action: str, timestamp: Optional[int] = None) -> str:
    if action not in HISTORY_ACTIONS:
        raise ValueError(f"Unknown history action {action!r}; expected one of {HISTORY_ACTIONS}")
    ts = int(time.time() * 1000) if timestamp is None else int(timestamp)
    row_id = f"{recipe_id}_{action}_{ts}"
    store.set_row("history", row_id, {"recipe_id": recipe_id, "action": action, "timestamp": ts})
    logger.debug(
        "Recorded %s for recipe %s",
        action,
        recipe_id,
        extra={
            "invoking_func": "record_action",
            "invoking_purpose": "Append implicit feedback to history",
            "next_step": "",
            "resolution": "",
        },
    )
    return row_id


def get_liked_ids(store: UserStore) -> List[str]:
    return [h.recipe_id for h in get_history(store) if h.action == "liked"]


def get_disliked_ids(store: UserStore) -> List[str]:
    return [h.recipe_id for h in get_history(store) if h.action == "disliked"]


# ----------------------------------------------------------------------
# Snapshot
# ----------------------------------------------------------------------
def snapshot(store: UserStore) -> UserSnapshot:
    """Read settings, context, pantry and history once for a request."""
    return UserSnapshot(
        settings=get_user_settings(store),
        context=get_context(store),
        pantry=tuple(get_pantry_names(store)),
        history=tuple(get_history(store)),
    )


def snapshot_summary(snap: UserSnapshot) -> Tuple[int, int, int]:
    """(pantry size, liked count, disliked count) for log lines."""
    return len(snap.pantry), len(snap.liked_ids), len(snap.disliked_ids)
