# src/app/infra/db/base.py
"""
Abstract base class for the recipe repository.
Routes depend on this interface so the backing store can be swapped.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Mapping


class RecipeRepository(ABC):
    """
    Abstract interface for recipe persistence.

    Implementations:
    - SupabaseRecipeRepository: hosted Postgres through Supabase
    """

    @abstractmethod
    def create(self, fields: Mapping[str, Any]) -> dict[str, Any]:
        """
        Insert a recipe.

        Args:
            fields: Caller input; unknown keys are dropped

        Returns:
            The stored row, with both timestamps set to now
        """
        pass

    @abstractmethod
    def list(self) -> list[dict[str, Any]]:
        """Return every recipe, newest first."""
        pass

    @abstractmethod
    def get(self, recipe_id: str) -> dict[str, Any]:
        """
        Fetch one recipe.

        Raises:
            RecipeNotFoundError: No row has this id
        """
        pass

    @abstractmethod
    def update(self, recipe_id: str, fields: Mapping[str, Any]) -> dict[str, Any]:
        """
        Overwrite the given fields and restamp ``updated_at``.

        Raises:
            RecipeNotFoundError: No row has this id
        """
        pass

    @abstractmethod
    def delete(self, recipe_id: str) -> None:
        """
        Remove a recipe.

        Raises:
            RecipeNotFoundError: No row has this id
        """
        pass
