from __future__ import annotations

import logging
import time

from fastapi import APIRouter, Depends

from src.app.config import settings
from src.app.deps import get_extractor, require_auth
from src.app.schemas.extract import QueryRequest, QueryResponse
from src.services.errors import ServiceError
from src.services.ingest import Extractor, run_query

log = logging.getLogger("extract")
router = APIRouter(tags=["extract"], dependencies=[Depends(require_auth)])


@router.post("/query-ai", response_model=QueryResponse)
async def query_ai(
    body: QueryRequest,
    extractor: Extractor = Depends(get_extractor),
) -> QueryResponse:
    t0 = time.time()
    log.info("query.start chars=%d", len(body.query or ""))
    try:
        result = await run_query(
            body.query,
            extractor,
            timeout=settings.FETCH_TIMEOUT_SECONDS,
        )
    except ServiceError as exc:
        dt = time.time() - t0
        log.warning("query.fail kind=%s dt=%.2fs error=%s", type(exc).__name__, dt, exc)
        raise

    dt = time.time() - t0
    log.info("query.ok structured=%s dt=%.2fs", result.recipe_json is not None, dt)
    return QueryResponse(response=result.response_text, recipeJson=result.recipe_json)
