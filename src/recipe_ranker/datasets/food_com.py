# datasets/food_com.py

"""
What this does:
1. Reads a Food.com style export (RAW_recipes.csv) with pandas.
2. Produces RawRecipeRecord objects that enrichment/normalizer.py knows how to handle.
3. Keeps list-like columns (tags, ingredients, steps, nutrition) as the raw strings;
   parsing them is the normalizer's job so that it can fail soft per field.
4. Any column it does not know about is carried in meta.

Expected columns (missing ones fall back to defaults):
    name, id, minutes, tags, nutrition, n_steps, steps, description,
    ingredients, n_ingredients
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional
import os

import pandas as pd

from src.recipe_ranker.datasets.base import RawRecipeRecord
from src.recipe_ranker.logging_utils import get_logger

logger = get_logger("food_com")

KNOWN_COLUMNS = {
    "id",
    "name",
    "minutes",
    "tags",
    "nutrition",
    "n_steps",
    "steps",
    "description",
    "ingredients",
    "n_ingredients",
}

_DEFAULTS: Dict[str, Any] = {
    "name": "",
    "minutes": 0,
    "tags": "[]",
    "nutrition": "[]",
    "n_steps": 0,
    "steps": "[]",
    "description": "",
    "ingredients": "[]",
    "n_ingredients": 0,
}


def _cell(row: pd.Series, col: str) -> Any:
    """Return the cell value, or the column default for missing / NaN cells."""
    if col not in row.index:
        return _DEFAULTS.get(col)
    value = row[col]
    if isinstance(value, float) and pd.isna(value):
        return _DEFAULTS.get(col)
    return value


def load_food_com_csv(path: str, max_recipes: Optional[int] = 1000) -> List[RawRecipeRecord]:
    """
    Load a Food.com-like CSV and turn it into RawRecipeRecord objects.

    - Column names are matched case-insensitively after stripping spaces
    - Rows without an id get a positional id "recipe_<idx>"
    - max_recipes=None loads the whole file
    """
    dataset_name = os.path.splitext(os.path.basename(path))[0]

    df = pd.read_csv(path, nrows=max_recipes)
    df.columns = [str(c).strip().lower() for c in df.columns]

    logger.info(
        "Read %d rows from %s",
        len(df),
        path,
        extra={
            "invoking_func": "load_food_com_csv",
            "invoking_purpose": "Load raw recipe rows for normalization",
            "next_step": "Convert rows into RawRecipeRecord objects",
            "resolution": "",
        },
    )

    records: List[RawRecipeRecord] = []
    for idx, row in df.iterrows():
        try:
            raw_id = _cell(row, "id")
            recipe_id = str(raw_id).strip() if raw_id is not None else ""
            if recipe_id.endswith(".0"):
                # pandas reads integer ids with gaps as floats
                recipe_id = recipe_id[:-2]
            if not recipe_id:
                recipe_id = f"recipe_{idx}"

            meta = {
                col: row[col]
                for col in row.index
                if col not in KNOWN_COLUMNS and not pd.isna(row[col])
            }
            meta["dataset_name"] = dataset_name

            records.append(
                RawRecipeRecord(
                    id=recipe_id,
                    name=str(_cell(row, "name") or ""),
                    minutes=_cell(row, "minutes"),
                    tags=_cell(row, "tags"),
                    ingredients=_cell(row, "ingredients"),
                    steps=_cell(row, "steps"),
                    nutrition=_cell(row, "nutrition"),
                    n_steps=_cell(row, "n_steps"),
                    description=str(_cell(row, "description") or ""),
                    n_ingredients=_cell(row, "n_ingredients"),
                    meta=meta,
                )
            )
        except Exception as exc:  # noqa: BLE001
            logger.warning(
                "Skipping row %s of %s: %s",
                idx,
                path,
                exc,
                extra={
                    "invoking_func": "load_food_com_csv",
                    "invoking_purpose": "Load raw recipe rows for normalization",
                    "next_step": "Continue with next row",
                    "resolution": "Inspect the CSV row for malformed values",
                },
            )

    return records
