from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from starlette.concurrency import run_in_threadpool

from src.app.deps import get_recipe_repository, require_auth
from src.app.infra.db.base import RecipeRepository
from src.app.schemas.recipes import (
    RecipeDeleteResponse,
    RecipeDetailResponse,
    RecipeListResponse,
    RecipeMutationResponse,
)
from src.services.persist_models import RecipeFields

log = logging.getLogger("recipes")
router = APIRouter(prefix="/api/recipes", tags=["recipes"])


@router.post("", response_model=RecipeMutationResponse, dependencies=[Depends(require_auth)])
async def create_recipe(
    payload: RecipeFields,
    repo: RecipeRepository = Depends(get_recipe_repository),
) -> RecipeMutationResponse:
    recipe = await run_in_threadpool(repo.create, payload.to_row())
    log.info("recipes.create id=%s", recipe.get("id"))
    return RecipeMutationResponse(recipe=recipe)


@router.get("", response_model=RecipeListResponse)
async def list_recipes(
    repo: RecipeRepository = Depends(get_recipe_repository),
) -> RecipeListResponse:
    recipes = await run_in_threadpool(repo.list)
    return RecipeListResponse(recipes=recipes)


@router.get("/{recipe_id}", response_model=RecipeDetailResponse)
async def get_recipe(
    recipe_id: str,
    repo: RecipeRepository = Depends(get_recipe_repository),
) -> RecipeDetailResponse:
    recipe = await run_in_threadpool(repo.get, recipe_id)
    return RecipeDetailResponse(recipe=recipe)


@router.put("/{recipe_id}", response_model=RecipeMutationResponse, dependencies=[Depends(require_auth)])
async def update_recipe(
    recipe_id: str,
    payload: RecipeFields,
    repo: RecipeRepository = Depends(get_recipe_repository),
) -> RecipeMutationResponse:
    recipe = await run_in_threadpool(repo.update, recipe_id, payload.to_row())
    log.info("recipes.update id=%s", recipe_id)
    return RecipeMutationResponse(recipe=recipe)


@router.delete("/{recipe_id}", response_model=RecipeDeleteResponse, dependencies=[Depends(require_auth)])
async def delete_recipe(
    recipe_id: str,
    repo: RecipeRepository = Depends(get_recipe_repository),
) -> RecipeDeleteResponse:
    await run_in_threadpool(repo.delete, recipe_id)
    log.info("recipes.delete id=%s", recipe_id)
    return RecipeDeleteResponse(message="Recipe deleted successfully")
