from __future__ import annotations

import httpx
import pytest
from postgrest.exceptions import APIError

from src.app.infra.db.supabase_recipes_repo import SupabaseRecipeRepository
from src.services.errors import RecipeNotFoundError, StoreError, StoreUnavailableError
from src.services.persist_models import RECIPE_FIELDS, filter_recipe_fields


class TickingClock:
    def __init__(self) -> None:
        self.ticks = 0

    def __call__(self) -> str:
        self.ticks += 1
        return f"2024-01-15T12:00:{self.ticks:02d}+00:00"


@pytest.fixture
def clock() -> TickingClock:
    return TickingClock()


@pytest.fixture
def repo(fake_supabase, clock) -> SupabaseRecipeRepository:
    return SupabaseRecipeRepository(fake_supabase, clock=clock)


class TestAllowList:
    def test_drops_unknown_fields(self) -> None:
        payload = {"name": "Tea", "id": "99", "created_at": "x", "owner": "me", "method": ["boil"]}
        assert filter_recipe_fields(payload) == {"name": "Tea", "method": ["boil"]}

    def test_keeps_every_known_field(self) -> None:
        payload = {field: f"v-{field}" for field in RECIPE_FIELDS}
        assert filter_recipe_fields(payload) == payload

    def test_yield_column_keeps_its_name(self) -> None:
        assert "yield" in RECIPE_FIELDS
        assert filter_recipe_fields({"yield": "12 scones", "yield_": "x"}) == {"yield": "12 scones"}

    def test_unsent_fields_are_not_nulled(self) -> None:
        assert filter_recipe_fields({"servings": None}) == {"servings": None}
        assert filter_recipe_fields({}) == {}


class TestCreate:
    def test_filters_and_stamps(self, repo, fake_supabase) -> None:
        recipe = repo.create({"name": "Tea", "servings": 2, "colour": "brown"})

        assert recipe["name"] == "Tea"
        assert recipe["servings"] == 2
        assert "colour" not in recipe
        assert recipe["created_at"] == recipe["updated_at"] == "2024-01-15T12:00:01+00:00"
        assert fake_supabase.executed[0][:2] == ("recipes", "insert")

    def test_caller_cannot_set_timestamps(self, repo) -> None:
        recipe = repo.create({"name": "Tea", "created_at": "1999-01-01", "updated_at": "1999-01-01"})
        assert recipe["created_at"] == "2024-01-15T12:00:01+00:00"


class TestRead:
    def test_list_newest_first(self, repo, fake_supabase) -> None:
        fake_supabase.tables["recipes"] = [
            {"id": "1", "name": "Old", "created_at": "2024-01-01T00:00:00+00:00"},
            {"id": "2", "name": "New", "created_at": "2024-03-01T00:00:00+00:00"},
            {"id": "3", "name": "Mid", "created_at": "2024-02-01T00:00:00+00:00"},
        ]
        assert [row["name"] for row in repo.list()] == ["New", "Mid", "Old"]

    def test_list_empty(self, repo) -> None:
        assert repo.list() == []

    def test_get(self, repo) -> None:
        created = repo.create({"name": "Tea"})
        assert repo.get(created["id"])["name"] == "Tea"

    def test_get_missing(self, repo) -> None:
        with pytest.raises(RecipeNotFoundError) as excinfo:
            repo.get("404")
        assert excinfo.value.recipe_id == "404"


class TestUpdate:
    def test_restamps_only_updated_at(self, repo) -> None:
        created = repo.create({"name": "Tea"})
        updated = repo.update(created["id"], {"name": "Green tea", "secret": True})

        assert updated["name"] == "Green tea"
        assert "secret" not in updated
        assert updated["created_at"] == "2024-01-15T12:00:01+00:00"
        assert updated["updated_at"] == "2024-01-15T12:00:02+00:00"

    def test_missing(self, repo) -> None:
        with pytest.raises(RecipeNotFoundError):
            repo.update("404", {"name": "x"})


class TestDelete:
    def test_delete(self, repo, fake_supabase) -> None:
        created = repo.create({"name": "Tea"})
        repo.delete(created["id"])
        assert fake_supabase.tables["recipes"] == []

    def test_missing(self, repo) -> None:
        with pytest.raises(RecipeNotFoundError):
            repo.delete("404")


class TestFailures:
    def test_unconfigured_fails_fast(self) -> None:
        repo = SupabaseRecipeRepository(None)
        for call in (
            lambda: repo.create({"name": "Tea"}),
            repo.list,
            lambda: repo.get("1"),
            lambda: repo.update("1", {}),
            lambda: repo.delete("1"),
        ):
            with pytest.raises(StoreUnavailableError):
                call()

    def test_api_error_carries_store_message(self, repo, fake_supabase) -> None:
        fake_supabase.fail_with = APIError(
            {"message": "duplicate key value violates unique constraint", "code": "23505",
             "hint": None, "details": None}
        )
        with pytest.raises(StoreError, match="duplicate key value"):
            repo.create({"name": "Tea"})

    def test_network_error(self, repo, fake_supabase) -> None:
        fake_supabase.fail_with = httpx.ConnectError("connection refused")
        with pytest.raises(StoreError, match="connection refused"):
            repo.list()
