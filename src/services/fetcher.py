from __future__ import annotations

import logging
from urllib.parse import urlsplit

import httpx

from .errors import NetworkTimeoutError, UpstreamFetchError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 15.0
BROWSER_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/124.0.0.0 Safari/537.36"
)


def _origin_of(url: str) -> str | None:
    parts = urlsplit(url)
    if not parts.scheme or not parts.netloc:
        return None
    return f"{parts.scheme}://{parts.netloc}/"


def build_browser_headers(url: str) -> dict[str, str]:
    headers = {
        "User-Agent": BROWSER_USER_AGENT,
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        "Accept-Language": "en-GB,en;q=0.9",
        "Cache-Control": "no-cache",
    }
    origin = _origin_of(url)
    if origin:
        headers["Referer"] = origin
    return headers


async def _get(client: httpx.AsyncClient, url: str) -> httpx.Response:
    response = await client.get(url, headers=build_browser_headers(url))
    response.raise_for_status()
    return response


async def fetch_page(
    url: str,
    *,
    client: httpx.AsyncClient | None = None,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> str:
    """Download ``url`` and return the raw body as text.

    The body is not interpreted; markup is handed on as-is. Failures are not
    retried.
    """
    try:
        if client is not None:
            response = await _get(client, url)
        else:
            async with httpx.AsyncClient(timeout=timeout, follow_redirects=True) as own_client:
                response = await _get(own_client, url)
    except httpx.TimeoutException as error:
        raise NetworkTimeoutError(url, timeout) from error
    except httpx.HTTPStatusError as error:
        status = error.response.status_code
        reason = error.response.reason_phrase or "HTTP error"
        raise UpstreamFetchError(url, status_code=status, reason=reason) from error
    except (httpx.HTTPError, httpx.InvalidURL) as error:
        raise UpstreamFetchError(url, reason=str(error) or type(error).__name__) from error

    logger.info("fetch.ok url=%s status=%s bytes=%d", url, response.status_code, len(response.content))
    return response.text
