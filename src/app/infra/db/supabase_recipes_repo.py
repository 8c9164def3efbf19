from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Mapping

import httpx
from postgrest.exceptions import APIError
from supabase import Client

from src.app.infra.db.base import RecipeRepository
from src.services.errors import RecipeNotFoundError, StoreError, StoreUnavailableError
from src.services.persist_models import filter_recipe_fields

logger = logging.getLogger(__name__)


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _store_message(error: Exception) -> str:
    message = getattr(error, "message", None)
    return str(message or error or type(error).__name__)


class SupabaseRecipeRepository(RecipeRepository):
    TABLE_NAME = "recipes"

    def __init__(self, client: Client | None, clock: Callable[[], str] = _now_iso):
        self._client = client
        self._clock = clock

    def _table(self):
        if self._client is None:
            raise StoreUnavailableError()
        return self._client.table(self.TABLE_NAME)

    def _execute(self, operation: str, query) -> list[dict[str, Any]]:
        try:
            result = query.execute()
        except APIError as error:
            logger.error("store.%s_fail error=%s", operation, _store_message(error))
            raise StoreError(_store_message(error)) from error
        except httpx.HTTPError as error:
            logger.error("store.%s_network_fail error=%s", operation, error)
            raise StoreError(_store_message(error)) from error
        return result.data or []

    def create(self, fields: Mapping[str, Any]) -> dict[str, Any]:
        now = self._clock()
        row = filter_recipe_fields(fields)
        row["created_at"] = now
        row["updated_at"] = now

        rows = self._execute("create", self._table().insert(row))
        if not rows:
            raise StoreError("Insert returned no rows")
        logger.info("store.create id=%s", rows[0].get("id"))
        return rows[0]

    def list(self) -> list[dict[str, Any]]:
        query = self._table().select("*").order("created_at", desc=True)
        return self._execute("list", query)

    def get(self, recipe_id: str) -> dict[str, Any]:
        query = self._table().select("*").eq("id", recipe_id).limit(1)
        rows = self._execute("get", query)
        if not rows:
            raise RecipeNotFoundError(recipe_id)
        return rows[0]

    def update(self, recipe_id: str, fields: Mapping[str, Any]) -> dict[str, Any]:
        row = filter_recipe_fields(fields)
        row["updated_at"] = self._clock()

        rows = self._execute("update", self._table().update(row).eq("id", recipe_id))
        if not rows:
            raise RecipeNotFoundError(recipe_id)
        logger.info("store.update id=%s fields=%s", recipe_id, sorted(row))
        return rows[0]

    def delete(self, recipe_id: str) -> None:
        rows = self._execute("delete", self._table().delete().eq("id", recipe_id))
        if not rows:
            raise RecipeNotFoundError(recipe_id)
        logger.info("store.delete id=%s", recipe_id)
