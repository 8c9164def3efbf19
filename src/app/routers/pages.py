from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import FileResponse

from src.app.config import settings

router = APIRouter(tags=["pages"], include_in_schema=False)


def _page(name: str) -> FileResponse:
    return FileResponse(settings.resolve_path(settings.PUBLIC_DIR) / name, media_type="text/html")


@router.get("/")
async def index() -> FileResponse:
    return _page("index.html")


@router.get("/recipes/{recipe_id}")
async def recipe_detail(recipe_id: str) -> FileResponse:
    # The page loads /api/recipes/{id} itself.
    return _page("recipe.html")


@router.get("/import")
async def import_tool() -> FileResponse:
    return _page("import.html")
