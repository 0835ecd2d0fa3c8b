"""HTTP fetching for channel definitions published at http(s) URLs.

A channel URL is usually requested once per run, but several module
templates may name the same channel list, so successful responses are kept
for ``Constants.HTTP_CACHE_TTL_SEC`` seconds. Failures never exit the
process: callers receive ``(status_code, headers, text)`` and a status code of
0 means no response was received after ``Constants.HTTP_RETRY_MAX`` attempts.
"""
from __future__ import annotations

import logging
import time
from typing import Any, Dict, Optional, Tuple

import requests

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled, safe_url, Timer

logger = logging.getLogger(__name__)

CHANNEL_ACCEPT = "application/yaml, application/x-yaml, text/yaml, text/plain;q=0.9, */*;q=0.1"

Response = Tuple[int, Dict[str, str], str]

# Channel responses keyed by URL and request headers
_http_cache: Dict[str, Tuple[Response, float]] = {}


def _get_cache_key(url: str, headers: Optional[Dict[str, str]] = None) -> str:
    headers_str = str(sorted(headers.items())) if headers else ""
    return f"GET:{url}:{headers_str}"


def _cached(cache_key: str) -> Optional[Response]:
    entry = _http_cache.get(cache_key)
    if entry is None:
        return None
    data, cached_time = entry
    if time.time() - cached_time >= Constants.HTTP_CACHE_TTL_SEC:
        del _http_cache[cache_key]
        return None
    return data


def clear_cache() -> None:
    """Drop every cached channel response."""
    _http_cache.clear()


def _trace(message: str, target: str, **fields: Any) -> None:
    if is_debug_enabled(logger):
        logger.debug(
            message,
            extra=extra_context(
                component="channel_fetch",
                action="GET",
                target=target,
                **fields
            )
        )


def robust_get(
    url: str,
    *,
    headers: Optional[Dict[str, str]] = None,
    **kwargs: Any
) -> Response:
    """Fetch a channel document with timeout, retries and caching.

    Responses below 500 are cached, so a 404 for a mistyped channel URL is
    not requested again within the TTL. Server errors and network failures are
    retried up to ``Constants.HTTP_RETRY_MAX`` times.

    Args:
        url: Channel URL; credentials and query strings are masked in logs.
        headers: Extra request headers. ``Accept`` defaults to YAML types.

    Returns:
        ``(status_code, headers, text)``; status 0 when every attempt failed.
    """
    cache_key = _get_cache_key(url, headers)
    safe_target = safe_url(url)

    cached = _cached(cache_key)
    if cached is not None:
        _trace("Channel cache hit", safe_target, event="cache_hit")
        return cached

    request_headers = {"Accept": CHANNEL_ACCEPT}
    request_headers.update(headers or {})

    last_exception = None
    for attempt in range(Constants.HTTP_RETRY_MAX):
        _trace("Channel request", safe_target, event="http_request", attempt=attempt + 1)
        with Timer() as t:
            try:
                response = requests.get(
                    url,
                    timeout=Constants.REQUEST_TIMEOUT,
                    headers=request_headers,
                    **kwargs
                )
            except requests.Timeout:
                last_exception = "timeout"
                _trace("Channel request timed out", safe_target,
                       event="http_exception", outcome="timeout", attempt=attempt + 1)
                continue
            except requests.RequestException as exc:
                last_exception = str(exc)
                _trace("Channel request failed", safe_target,
                       event="http_exception", outcome="request_exception", attempt=attempt + 1)
                continue

        result = (response.status_code, dict(response.headers), response.text)
        _trace("Channel response", safe_target, event="http_response",
               outcome="success" if response.status_code < 400 else "http_error",
               status_code=response.status_code, duration_ms=t.duration_ms())
        if response.status_code < 500:
            _http_cache[cache_key] = (result, time.time())
            return result
        last_exception = f"HTTP {response.status_code}"
        if attempt + 1 == Constants.HTTP_RETRY_MAX:
            return result

    return 0, {}, f"Request failed after {Constants.HTTP_RETRY_MAX} attempts: {last_exception}"
