"""
store.py

Row-level key-value storage for user data. The recommender only needs four
operations per table, mirroring a keyed table store:

    get_table(table)                 -> {row_id: row_dict}
    get_row(table, row_id)           -> row_dict | None
    set_row(table, row_id, row_dict) -> None   (insert or replace)
    del_row(table, row_id)           -> None

Tables:
    settings  rows {key, value}          (values are strings)
    context   rows {key, value}
    pantry    rows {name, quantity, unit}
    history   rows {recipe_id, action, timestamp}

Two implementations:
  - InMemoryUserStore: dict backed, seeded with default settings/context.
  - SupabaseUserStore: one Supabase table per logical table, scoped by user_id.

Durability and concurrency control belong to the backing store; each
set_row / del_row is a single atomic row operation.
"""
from __future__ import annotations

import copy
from typing import Any, Dict, Optional

from supabase import Client

from src.recipe_ranker.config import DEFAULT_CONTEXT, DEFAULT_SETTINGS
from src.recipe_ranker.logging_utils import get_logger

logger = get_logger("store")

Row = Dict[str, Any]

TABLES = ("settings", "context", "pantry", "history")


class UserStore:
    """Interface for row-level user data storage."""

    def get_table(self, table: str) -> Dict[str, Row]:
        raise NotImplementedError

    def get_row(self, table: str, row_id: str) -> Optional[Row]:
        return self.get_table(table).get(row_id)

    def set_row(self, table: str, row_id: str, row: Row) -> None:
        raise NotImplementedError

    def del_row(self, table: str, row_id: str) -> None:
        raise NotImplementedError


def _check_table(table: str) -> None:
    if table not in TABLES:
        raise KeyError(f"Unknown table {table!r}; expected one of {TABLES}")


class InMemoryUserStore(UserStore):
    def __init__(self, seed_defaults: bool = True) -> None:
        self._tables: Dict[str, Dict[str, Row]] = {t: {} for t in TABLES}
        if seed_defaults:
            for key, value in DEFAULT_SETTINGS.items():
                self._tables["settings"][key] = {"key": key, "value": value}
            for key, value in DEFAULT_CONTEXT.items():
                self._tables["context"][key] = {"key": key, "value": value}

    def get_table(self, table: str) -> Dict[str, Row]:
        _check_table(table)
        # Callers get copies so a snapshot can't be changed behind the store's back
        return copy.deepcopy(self._tables[table])

    def set_row(self, table: str, row_id: str, row: Row) -> None:
        _check_table(table)
        self._tables[table][row_id] = dict(row)

    def del_row(self, table: str, row_id: str) -> None:
        _check_table(table)
        self._tables[table].pop(row_id, None)


class SupabaseUserStore(UserStore):
    """
    Supabase backed store. Expected schema (all scoped by user_id):

        user_settings(user_id, key, value)                       pk (user_id, key)
        user_context(user_id, key, value)                        pk (user_id, key)
        pantry_items(user_id, id, name, quantity, unit)          pk (user_id, id)
        user_recipe_history(user_id, id, recipe_id, action, timestamp)  pk (user_id, id)
    """

    TABLE_NAMES: Dict[str, str] = {
        "settings": "user_settings",
        "context": "user_context",
        "pantry": "pantry_items",
        "history": "user_recipe_history",
    }
    ID_COLUMNS: Dict[str, str] = {
        "settings": "key",
        "context": "key",
        "pantry": "id",
        "history": "id",
    }

    def __init__(self, client: Client, user_id: str) -> None:
        self.client = client
        self.user_id = user_id

    def get_table(self, table: str) -> Dict[str, Row]:
        _check_table(table)
        id_col = self.ID_COLUMNS[table]
        try:
            res = (
                self.client.table(self.TABLE_NAMES[table])
                .select("*")
                .eq("user_id", self.user_id)
                .execute()
            )
        except Exception as exc:  # noqa: BLE001
            logger.error(
                "Failed to read %s for user %s: %s",
                table,
                self.user_id,
                exc,
                extra={
                    "invoking_func": "SupabaseUserStore.get_table",
                    "invoking_purpose": "Read user rows for a recommendation snapshot",
                    "next_step": "Propagate error to caller",
                    "resolution": "Check SUPABASE_URL / key and table names",
                },
            )
            raise

        out: Dict[str, Row] = {}
        for row in res.data or []:
            row = {k: v for k, v in row.items() if k != "user_id"}
            out[str(row.get(id_col))] = row
        return out

    def set_row(self, table: str, row_id: str, row: Row) -> None:
        _check_table(table)
        payload = dict(row)
        payload[self.ID_COLUMNS[table]] = row_id
        payload["user_id"] = self.user_id
        self.client.table(self.TABLE_NAMES[table]).upsert(payload).execute()

    def del_row(self, table: str, row_id: str) -> None:
        _check_table(table)
        (
            self.client.table(self.TABLE_NAMES[table])
            .delete()
            .eq("user_id", self.user_id)
            .eq(self.ID_COLUMNS[table], row_id)
            .execute()
        )
