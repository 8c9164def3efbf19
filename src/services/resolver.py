from __future__ import annotations

import json
import logging
import re
from typing import Any

import httpx

from .errors import InvalidInputError
from .fetcher import DEFAULT_TIMEOUT_SECONDS, fetch_page
from .types import ResolvedContent

logger = logging.getLogger(__name__)

URL_PATTERN = re.compile(r"^(https?://[^\s$.?#].[^\s]*)$", re.IGNORECASE)
JSON_OPENERS = ("{", "[")


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Invalid JSON constant: {name}")


def loads_strict(text: str) -> Any:
    """``json.loads`` without the NaN/Infinity extensions.

    Nesting too deep for the decoder is reported as ``ValueError`` like any
    other malformed input.
    """
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except RecursionError as error:
        raise ValueError("JSON nesting too deep") from error


def is_url(text: str) -> bool:
    return URL_PATTERN.match(text) is not None


def _try_parse_json(text: str) -> tuple[bool, Any]:
    if not text.startswith(JSON_OPENERS):
        return False, None
    try:
        return True, loads_strict(text)
    except ValueError:
        return False, None


async def resolve(
    query: str | None,
    *,
    client: httpx.AsyncClient | None = None,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> ResolvedContent:
    """Turn a user query into the text the model should read.

    Valid JSON input is returned decoded with ``bypass_ai`` set and no
    network call. A bare http(s) URL is downloaded. Anything else is
    analysed as given.
    """
    if not query:
        raise InvalidInputError("Query is required")

    trimmed = query.strip()

    parsed, value = _try_parse_json(trimmed)
    if parsed:
        logger.info("resolve.json_bypass chars=%d", len(trimmed))
        return ResolvedContent(content=trimmed, bypass_ai=True, parsed_json=value)

    if is_url(trimmed):
        logger.info("resolve.fetch url=%s", trimmed)
        body = await fetch_page(trimmed, client=client, timeout=timeout)
        return ResolvedContent(content=body)

    return ResolvedContent(content=query)
