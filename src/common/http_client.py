"""Shared HTTP helpers used by the repository metadata client.

Encapsulates request/timeout/retry handling so callers only deal with a
``(status_code, headers, text)`` triple. A status code of 0 means the request
never produced a response.
"""
from __future__ import annotations

import logging
import time
from typing import Any, Optional, Dict, Tuple

import requests

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled, safe_url, Timer

logger = logging.getLogger(__name__)


# Simple in-memory cache for HTTP responses
_http_cache: Dict[str, Tuple[Any, float]] = {}


def _get_cache_key(method: str, url: str, headers: Optional[Dict[str, str]] = None) -> str:
    """Generate cache key from request parameters."""
    headers_str = str(sorted(headers.items())) if headers else ""
    return f"{method}:{url}:{headers_str}"


def _is_cache_valid(cache_entry: Tuple[Any, float]) -> bool:
    """Check if cache entry is still valid."""
    _, cached_time = cache_entry
    return time.time() - cached_time < Constants.HTTP_CACHE_TTL_SEC


def clear_cache() -> None:
    """Drop every cached response."""
    _http_cache.clear()


def _trace(message: str, target: str, **fields: Any) -> None:
    if is_debug_enabled(logger):
        logger.debug(message, extra=extra_context(component="http_client", action="GET", target=target, **fields))


def robust_get(
    url: str,
    *,
    headers: Optional[Dict[str, str]] = None,
    **kwargs: Any
) -> Tuple[int, Dict[str, str], str]:
    """GET ``url`` with retries and a short-lived response cache.

    Connection errors, timeouts and 5xx responses are retried with
    exponential backoff. Responses below 500 are cached. After the last
    attempt a 5xx response is returned as is; when no response was ever
    received the status is 0 and the text describes the last failure.
    """
    cache_key = _get_cache_key('GET', url, headers)
    target = safe_url(url)

    cached = _http_cache.get(cache_key)
    if cached is not None and _is_cache_valid(cached):
        _trace("HTTP cache hit", target, event="cache_hit")
        return cached[0]

    failure = None
    for attempt in range(1, Constants.HTTP_RETRY_MAX + 1):
        if attempt > 1:
            time.sleep(Constants.HTTP_RETRY_BASE_DELAY_SEC * (2 ** (attempt - 2)))
        _trace("HTTP request", target, event="http_request", attempt=attempt)
        with Timer() as t:
            try:
                response = requests.get(url, timeout=Constants.REQUEST_TIMEOUT, headers=headers, **kwargs)
            except requests.RequestException as exc:  # includes Timeout
                failure = "timeout" if isinstance(exc, requests.Timeout) else str(exc)
                _trace("HTTP request failed", target, event="http_exception", outcome=failure, attempt=attempt)
                continue

        result = (response.status_code, dict(response.headers), response.text)
        _trace(
            "HTTP response", target,
            event="http_response", status_code=response.status_code, duration_ms=t.duration_ms(),
        )
        if response.status_code < 500:
            _http_cache[cache_key] = (result, time.time())
            return result
        failure = f"HTTP {response.status_code}"
        if attempt == Constants.HTTP_RETRY_MAX:
            return result

    return 0, {}, f"Request failed after {Constants.HTTP_RETRY_MAX} attempts: {failure}"
