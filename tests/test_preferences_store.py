from types import SimpleNamespace

import pytest

from src.recipe_ranker.profile import preferences
from src.recipe_ranker.profile.store import InMemoryUserStore, SupabaseUserStore


# ---------------------------------------------------------------------
# Fake Supabase client (table().select/upsert/delete().eq().execute())
# ---------------------------------------------------------------------
class FakeTable:
    def __init__(self, client, name):
        self.client = client
        self.name = name
        self.op = None
        self.payload = None
        self.filters = []

    def select(self, _columns):
        self.op = "select"
        return self

    def upsert(self, payload):
        self.op = "upsert"
        self.payload = payload
        return self

    def delete(self):
        self.op = "delete"
        return self

    def eq(self, column, value):
        self.filters.append((column, value))
        return self

    def _matches(self, row):
        return all(row.get(c) == v for c, v in self.filters)

    def execute(self):
        if self.client.fail:
            raise RuntimeError("connection refused")
        rows = self.client.rows.setdefault(self.name, [])
        if self.op == "select":
            return SimpleNamespace(data=[dict(r) for r in rows if self._matches(r)])
        if self.op == "upsert":
            pk = "key" if "key" in self.payload else "id"
            rows[:] = [
                r for r in rows
                if not (r["user_id"] == self.payload["user_id"] and r.get(pk) == self.payload[pk])
            ]
            rows.append(dict(self.payload))
            return SimpleNamespace(data=[self.payload])
        if self.op == "delete":
            rows[:] = [r for r in rows if not self._matches(r)]
            return SimpleNamespace(data=[])
        raise AssertionError(f"unexpected op {self.op}")


class FakeSupabase:
    def __init__(self, fail=False):
        self.rows = {}
        self.fail = fail

    def table(self, name):
        return FakeTable(self, name)


# ---------------------------------------------------------------------
# In-memory store + preference helpers
# ---------------------------------------------------------------------
def test_defaults():
    store = InMemoryUserStore()
    settings = preferences.get_user_settings(store)
    assert settings.skill_level == "intermediate"
    assert settings.max_cooking_time == 60
    assert settings.calorie_goal == 2000
    assert settings.max_sodium == 2300
    assert settings.dietary_restrictions == ()
    assert preferences.get_context(store).servings == 4


def test_empty_store_reads_zero_values():
    store = InMemoryUserStore(seed_defaults=False)
    settings = preferences.get_user_settings(store)
    assert settings.skill_level == ""
    assert settings.max_cooking_time == 0
    assert preferences.get_context(store).servings == 4


def test_get_table_returns_copies():
    store = InMemoryUserStore()
    table = store.get_table("settings")
    table["skill_level"]["value"] = "advanced"
    assert store.get_row("settings", "skill_level")["value"] == "intermediate"


def test_unknown_table():
    with pytest.raises(KeyError):
        InMemoryUserStore().get_table("recipes")


def test_settings_setters():
    store = InMemoryUserStore()
    preferences.set_skill_level(store, "beginner")
    preferences.set_max_cooking_time(store, 30)
    preferences.set_preferred_cuisine(store, "italian")
    preferences.set_calorie_goal(store, 1800)
    preferences.set_max_sodium(store, 1500)
    preferences.add_dietary_restriction(store, "vegan")
    preferences.add_dietary_restriction(store, "vegan")
    preferences.add_dietary_restriction(store, "gluten-free")
    preferences.remove_dietary_restriction(store, "vegan")

    settings = preferences.get_user_settings(store)
    assert settings.skill_level == "beginner"
    assert settings.max_cooking_time == 30
    assert settings.preferred_cuisine == "italian"
    assert settings.calorie_goal == 1800
    assert settings.max_sodium == 1500
    assert settings.dietary_restrictions == ("gluten-free",)


def test_context_values():
    store = InMemoryUserStore()
    preferences.set_context_value(store, "weather", "rainy")
    preferences.set_context_value(store, "servings", 2)
    ctx = preferences.get_context(store)
    assert ctx.weather == "rainy"
    assert ctx.servings == 2
    preferences.set_context_value(store, "servings", "lots")
    assert preferences.get_context(store).servings == 4


def test_pantry_lifecycle():
    store = InMemoryUserStore()
    item_id = preferences.add_pantry_item(store, "Olive  Oil", 2, "tbsp")
    assert item_id == "olive_oil"
    ids = preferences.add_pantry_items(store, ["eggs", {"name": "Milk", "quantity": 2, "unit": "cups"}, {"unit": "g"}])
    assert ids == ["eggs", "milk"]
    assert sorted(preferences.get_pantry_names(store)) == ["Milk", "Olive  Oil", "eggs"]
    assert preferences.has_ingredient(store, "oil")
    assert not preferences.has_ingredient(store, "flour")

    preferences.update_pantry_item(store, "milk", 3)
    milk = [p for p in preferences.get_pantry(store) if p.id == "milk"][0]
    assert milk.quantity == 3.0
    assert milk.unit == "cups"

    preferences.remove_pantry_item(store, "eggs")
    assert "eggs" not in preferences.get_pantry_names(store)
    preferences.clear_pantry(store)
    assert preferences.get_pantry(store) == []


def test_history_newest_first():
    store = InMemoryUserStore()
    assert preferences.record_action(store, "r1", "liked", timestamp=1) == "r1_liked_1"
    preferences.record_action(store, "r2", "disliked", timestamp=3)
    preferences.record_action(store, "r3", "liked", timestamp=2)
    preferences.record_action(store, "r4", "cooked", timestamp=4)

    assert [h.recipe_id for h in preferences.get_history(store)] == ["r4", "r2", "r3", "r1"]
    assert preferences.get_liked_ids(store) == ["r3", "r1"]
    assert preferences.get_disliked_ids(store) == ["r2"]


def test_record_action_rejects_unknown_action():
    with pytest.raises(ValueError):
        preferences.record_action(InMemoryUserStore(), "r1", "shared")


def test_snapshot():
    store = InMemoryUserStore()
    preferences.add_pantry_item(store, "rice")
    preferences.record_action(store, "r1", "liked", timestamp=1)
    preferences.record_action(store, "r2", "disliked", timestamp=2)
    snap = preferences.snapshot(store)
    assert snap.pantry == ("rice",)
    assert snap.liked_ids == frozenset({"r1"})
    assert snap.disliked_ids == frozenset({"r2"})
    assert preferences.snapshot_summary(snap) == (1, 1, 1)


# ---------------------------------------------------------------------
# Supabase store
# ---------------------------------------------------------------------
def test_supabase_store_scopes_rows_by_user():
    client = FakeSupabase()
    alice = SupabaseUserStore(client, "alice")
    bob = SupabaseUserStore(client, "bob")

    preferences.set_skill_level(alice, "advanced")
    preferences.set_skill_level(alice, "beginner")
    preferences.set_skill_level(bob, "intermediate")

    assert client.rows["user_settings"] == [
        {"key": "skill_level", "value": "beginner", "user_id": "alice"},
        {"key": "skill_level", "value": "intermediate", "user_id": "bob"},
    ]
    assert preferences.get_user_settings(alice).skill_level == "beginner"
    assert preferences.get_user_settings(bob).skill_level == "intermediate"
    assert alice.get_table("settings") == {"skill_level": {"key": "skill_level", "value": "beginner"}}


def test_supabase_store_pantry_and_history():
    client = FakeSupabase()
    store = SupabaseUserStore(client, "u1")
    preferences.add_pantry_item(store, "Soy Sauce")
    preferences.record_action(store, "r9", "liked", timestamp=5)

    assert preferences.get_pantry_names(store) == ["Soy Sauce"]
    assert preferences.get_liked_ids(store) == ["r9"]
    assert client.rows["pantry_items"][0]["id"] == "soy_sauce"

    preferences.remove_pantry_item(store, "soy_sauce")
    assert preferences.get_pantry(store) == []


def test_supabase_store_read_errors_propagate():
    store = SupabaseUserStore(FakeSupabase(fail=True), "u1")
    with pytest.raises(RuntimeError):
        preferences.snapshot(store)


def test_set_skill_level_rejects_unknown_level():
    store = InMemoryUserStore()
    with pytest.raises(ValueError):
        preferences.set_skill_level(store, "expert")
    assert preferences.get_user_settings(store).skill_level == "intermediate"
