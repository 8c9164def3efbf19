# src/app/main.py
from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from src.app.config import settings
from src.app.routers.auth import router as auth_router
from src.app.routers.extract import router as extract_router
from src.app.routers.pages import router as pages_router
from src.app.routers.recipes import router as recipes_router
from src.app.schemas.errors import ErrorResponse
from src.services.errors import (
    ExtractionError,
    InvalidInputError,
    RecipeNotFoundError,
    ServiceError,
    StoreError,
    StoreUnavailableError,
    UnauthorizedError,
    UpstreamFetchError,
)
from src.services.prompt import get_instructions

# Plain stdout logging (fine for dev and containers)
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)

# Most specific first; the first isinstance match wins.
_ERROR_MAP: list[tuple[type[ServiceError], int, str | None]] = [
    (InvalidInputError, 400, None),
    (UnauthorizedError, 401, None),
    (RecipeNotFoundError, 404, "Recipe not found"),
    (StoreUnavailableError, 503, None),
    (UpstreamFetchError, 500, "Failed to retrieve content from the provided URL. "
                              "Please ensure it is a valid and accessible URL."),
    (ExtractionError, 500, "Error processing your query with Gemini"),
    (StoreError, 500, "Database operation failed"),
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    get_instructions()
    logger.info("Recipe extraction service starting (env=%s, store=%s)",
                settings.APP_ENV, "on" if settings.store_configured else "off")
    yield
    logger.info("Recipe extraction service shutting down")


app = FastAPI(title="Recipe Extraction API", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.FRONTEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def error_response(exc: ServiceError) -> JSONResponse:
    for error_type, status_code, summary in _ERROR_MAP:
        if isinstance(exc, error_type):
            break
    else:
        status_code, summary = 500, "Internal server error"

    if summary is None:
        body = ErrorResponse(error=str(exc))
    else:
        body = ErrorResponse(error=summary, details=str(exc))
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    return error_response(exc)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    body = ErrorResponse(error="Invalid request body", details=str(exc.errors()))
    return JSONResponse(status_code=400, content=body.model_dump(exclude_none=True))


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


app.include_router(pages_router)
app.include_router(auth_router)
app.include_router(extract_router)
app.include_router(recipes_router)


@app.get("/health")
def health():
    return {"ok": True}


# Remaining public assets (css, js, images) after every API route.
app.mount("/", StaticFiles(directory=settings.resolve_path(settings.PUBLIC_DIR)), name="public")
