# src/recipe_ranker/enrichment/cleaning.py
from __future__ import annotations

"""
cleaning.py

Purpose:
    Deterministic, fail-soft parsing of the stringified fields found in raw
    recipe exports:
      - list fields such as "['30-minutes-or-less', 'easy']" or '["a", "b"]'
      - the 7 element nutrition list
      - numeric columns that sometimes hold text ("15 mins", "", NaN)

    Nothing here raises on bad input: lists become [], nutrition becomes
    None and numbers fall back to a default.
"""

import ast
import json
import math
from typing import Any, List, Optional

from src.recipe_ranker.enrichment.schema import Nutrition
from src.recipe_ranker.logging_utils import get_logger

logger = get_logger("cleaning")

# Reference daily values used to turn %DV into absolute amounts
PROTEIN_DAILY_G = 50.0
CARBS_DAILY_G = 300.0
SODIUM_DAILY_MG = 2300.0

NUTRITION_FIELDS = 7


def _literal_list(value: Any) -> Optional[list]:
    """Best-effort conversion of a bracketed list string (JSON or Python literal) to a list."""
    if isinstance(value, (list, tuple)):
        return list(value)
    if not isinstance(value, str):
        return None
    text = value.strip()
    if not text:
        return None

    try:
        parsed = json.loads(text)
    except (ValueError, RecursionError):
        # Single-quoted lists are Python literals, not JSON
        try:
            parsed = ast.literal_eval(text)
        except (ValueError, TypeError, SyntaxError, MemoryError, RecursionError):
            logger.debug(
                "Could not parse list field %.60r",
                text,
                extra={
                    "invoking_func": "_literal_list",
                    "invoking_purpose": "Parse stringified list field",
                    "next_step": "Treat field as empty",
                    "resolution": "",
                },
            )
            return None

    if isinstance(parsed, (list, tuple)):
        return list(parsed)
    return None


def parse_list_field(value: Any) -> List[str]:
    """Parse tags / ingredients / steps. Returns [] on any failure."""
    items = _literal_list(value)
    if items is None:
        return []
    return [str(item) for item in items if item is not None]


def coerce_float(value: Any, default: float = 0.0) -> float:
    if value is None or isinstance(value, bool):
        return default
    try:
        out = float(value)
    except (TypeError, ValueError, OverflowError):
        return default
    if math.isnan(out) or math.isinf(out):
        return default
    return out


def coerce_int(value: Any, default: int = 0) -> int:
    """
    Integer coercion for columns like minutes / n_steps / settings values.

    Accepts ints, floats (truncated), numeric strings and strings like
    "15 mins". Anything else returns the default.
    """
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        number = coerce_float(value, default=float("nan"))
        return default if math.isnan(number) else int(number)

    s = str(value).strip().lower()
    for token in ["minutes", "minute", "mins", "min"]:
        s = s.replace(token, "")
    s = s.strip()
    if not s:
        return default
    number = coerce_float(s, default=float("nan"))
    if math.isnan(number):
        return default
    return int(number)


def parse_nutrition(value: Any) -> Optional[Nutrition]:
    """
    Parse "[calories, fat%DV, sugar%DV, sodium%DV, protein%DV, sat_fat%DV, carbs%DV]".

    Returns None when the value is missing, malformed or has fewer than 7
    elements. Non-numeric elements count as 0.
    """
    items = _literal_list(value)
    if items is None or len(items) < NUTRITION_FIELDS:
        return None

    calories, fat, sugar, sodium, protein, sat_fat, carbs = (
        coerce_float(v) for v in items[:NUTRITION_FIELDS]
    )
    return Nutrition(
        calories=calories,
        total_fat_pdv=fat,
        sugar_pdv=sugar,
        sodium_pdv=sodium,
        protein_pdv=protein,
        saturated_fat_pdv=sat_fat,
        carbohydrates_pdv=carbs,
        protein_g=protein * PROTEIN_DAILY_G / 100,
        carbs_g=carbs * CARBS_DAILY_G / 100,
        sodium_mg=sodium * SODIUM_DAILY_MG / 100,
    )
