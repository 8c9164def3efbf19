from __future__ import annotations

import logging
from typing import Protocol

import httpx

from src.services.fetcher import DEFAULT_TIMEOUT_SECONDS
from src.services.resolver import resolve
from src.services.response_parser import parse_reply
from src.services.types import ExtractionResult

logger = logging.getLogger(__name__)

BYPASS_NOTICE = "Input is already structured JSON; returned without AI processing."


class Extractor(Protocol):
    async def extract(self, content: str) -> str: ...


async def run_query(
    query: str | None,
    extractor: Extractor,
    *,
    client: httpx.AsyncClient | None = None,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> ExtractionResult:
    resolved = await resolve(query, client=client, timeout=timeout)
    if resolved.bypass_ai:
        return ExtractionResult(response_text=BYPASS_NOTICE, recipe_json=resolved.parsed_json)

    raw_reply = await extractor.extract(resolved.content)
    parsed = parse_reply(raw_reply)
    if parsed.json is None:
        logger.info("query.unstructured_reply chars=%d", len(raw_reply))
    return ExtractionResult(response_text=parsed.text, recipe_json=parsed.json)
