from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class RecipeMutationResponse(BaseModel):
    success: bool = True
    recipe: dict[str, Any]


class RecipeListResponse(BaseModel):
    recipes: list[dict[str, Any]] = Field(default_factory=list)


class RecipeDetailResponse(BaseModel):
    recipe: dict[str, Any]


class RecipeDeleteResponse(BaseModel):
    success: bool = True
    message: str
