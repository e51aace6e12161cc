# datasets/base.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass
# One row of the source dataset, exactly as ingestion hands it over.
# List-like fields are still strings such as "['easy', 'dinner']".
class RawRecipeRecord:
    id: str
    name: Any
    minutes: Any = 0
    tags: Any = "[]"
    ingredients: Any = "[]"
    steps: Any = "[]"
    nutrition: Any = "[]"            # "[calories, fat, sugar, sodium, protein, sat_fat, carbs]"
    n_steps: Any = 0
    description: Any = ""
    n_ingredients: Any = 0
    meta: Dict[str, Any] = field(default_factory=dict)   # arbitrary extra columns
